import base64
import logging
import time
from pathlib import Path
from typing import Optional, Union

from google import genai
from google.genai import types

from generation.generator_base import GeneratedImage, GenerationError, ImageGenerator

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "imagen-4.0-generate-001"

COLORING_PAGE_TEMPLATE = """A black and white kids coloring page.
<image-description>
{description}
</image-description>
{description}"""


def build_prompt(description: str) -> str:
    return COLORING_PAGE_TEMPLATE.format(description=description.strip())


def _decode_image_bytes(payload: Union[bytes, str, None]) -> bytes:
    if not payload:
        raise GenerationError("No image bytes returned")
    if isinstance(payload, str):
        return base64.b64decode(payload)
    return payload


class ImagenGenerator(ImageGenerator):
    """Coloring-page generator backed by Google's Imagen models."""

    def __init__(
            self,
            api_key: Optional[str] = None,
            model: str = DEFAULT_MODEL,
            output_dir: Union[str, Path] = "output",
            client: Optional[genai.Client] = None,
    ):
        self.model = model
        self.output_dir = Path(output_dir)
        self._client = client or genai.Client(api_key=api_key)

    def generate(self, prompt: str, save: bool = True) -> GeneratedImage:
        logger.info("Generating image: %r", prompt)
        started = time.monotonic()

        try:
            response = self._client.models.generate_images(
                model=self.model,
                prompt=build_prompt(prompt),
                config=types.GenerateImagesConfig(number_of_images=1),
            )
        except Exception as e:
            raise GenerationError(f"Failed to generate image: {e}") from e

        logger.info("Generation took %.1fs", time.monotonic() - started)

        if not response.generated_images:
            raise GenerationError("Failed to generate image: No images generated")

        image = response.generated_images[0].image
        try:
            data = _decode_image_bytes(image.image_bytes if image else None)
        except (GenerationError, ValueError) as e:
            raise GenerationError(f"Failed to generate image: {e}") from e

        path = self._save(data) if save else None
        return GeneratedImage(data=data, path=path)

    def _save(self, data: bytes) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"imagen-{int(time.time() * 1000)}.png"
        path.write_bytes(data)
        logger.info("Image saved: %s", path)
        return path

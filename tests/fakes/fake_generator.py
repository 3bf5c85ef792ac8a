from generation.generator_base import GeneratedImage, GenerationError, ImageGenerator

FAKE_PNG = b"\x89PNG\r\n\x1a\n" + b"fake png data"


class FakeGenerator(ImageGenerator):
    def __init__(self, output_dir=None):
        self.output_dir = output_dir
        self.prompts = []
        self.fail_with = None

    def generate(self, prompt: str, save: bool = True) -> GeneratedImage:
        if self.fail_with:
            raise GenerationError(self.fail_with)

        self.prompts.append(prompt)
        path = None
        if save and self.output_dir is not None:
            path = self.output_dir / f"fake-{len(self.prompts)}.png"
            path.write_bytes(FAKE_PNG)
        return GeneratedImage(data=FAKE_PNG, path=path)

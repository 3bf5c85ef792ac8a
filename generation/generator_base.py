from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class GenerationError(RuntimeError):
    pass


@dataclass(frozen=True)
class GeneratedImage:
    data: bytes
    path: Optional[Path] = None


class ImageGenerator(ABC):
    """
    Abstract image generator.

    All generator implementations (remote API or fake) must implement this contract.
    """

    @abstractmethod
    def generate(self, prompt: str, save: bool = True) -> GeneratedImage:
        """Generate one image for `prompt`, writing it to disk when `save` is set."""
        pass

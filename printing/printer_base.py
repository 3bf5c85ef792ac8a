# printing/printer_base.py

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Union

ImageSource = Union[str, Path, bytes]


class PrinterError(RuntimeError):
    """Raised when the print subsystem cannot accept or process a request."""


class CommandError(PrinterError):
    """A CUPS command could not be run or exited non-zero."""


class ImageFileNotFoundError(PrinterError):
    pass


class UnsupportedFormatError(PrinterError):
    pass


class PrinterNotFoundError(PrinterError):
    pass


class NoPrintersFoundError(PrinterError):
    pass


def wrap_error(action: str, exc: Exception) -> PrinterError:
    """
    Build "Failed to <action>: <cause>" keeping the PrinterError subclass of `exc`.

    Anything that is not a PrinterError becomes a plain PrinterError.
    """
    cls = type(exc) if isinstance(exc, PrinterError) else PrinterError
    return cls(f"Failed to {action}: {exc}")


@dataclass(frozen=True)
class PrintOptions:
    copies: int = 1
    media: str | None = None
    grayscale: bool = False
    fit_to_page: bool = False
    # Passed through verbatim as `-o key=value`.
    cups_options: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.copies < 1:
            raise ValueError(f"copies must be >= 1 (got {self.copies})")


@dataclass(frozen=True)
class PrintSubmission:
    printer_name: str
    job_id: str


class Printer(ABC):
    """
    Abstract printer interface.

    The web app and scripts only talk to this. Concrete implementations
    talk to real spoolers (CUPS) or are fakes in tests.
    """

    @abstractmethod
    def print_image(self, image: ImageSource, options: PrintOptions | None = None) -> PrintSubmission:
        """
        Submit `image` (a file path or in-memory bytes) and return where it went.

        Implementations should raise PrinterError on failure.
        """
        raise NotImplementedError

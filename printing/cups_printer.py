# printing/cups_printer.py

from __future__ import annotations

import io
import logging
import os
import re
import secrets
import shutil
import tempfile
import time
from pathlib import Path
from typing import Optional

from PIL import Image

from printing import directory
from printing.commands import run_command
from printing.printer_base import (
    ImageFileNotFoundError,
    ImageSource,
    NoPrintersFoundError,
    Printer,
    PrinterError,
    PrinterNotFoundError,
    PrintOptions,
    PrintSubmission,
    UnsupportedFormatError,
    wrap_error,
)

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = (".png", ".jpg", ".jpeg", ".gif", ".pdf", ".tiff", ".tif")

# lp answers "request id is <printer>-<job> (1 file(s))"
_REQUEST_ID = re.compile(r"request id is .+-(\d+)")


def validate_image_file(file_path: Path) -> None:
    ext = file_path.suffix.lower()
    if ext not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(
            f"Unsupported file format: {ext or '(none)'}. "
            f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        )
    if not file_path.exists():
        raise ImageFileNotFoundError(f"File not found: {file_path}")
    if not file_path.is_file() or not os.access(file_path, os.R_OK):
        raise PrinterError(f"File is not readable: {file_path}")


def build_print_command(
        printer_name: str,
        image_path: Path,
        options: Optional[PrintOptions] = None,
) -> list[str]:
    options = options or PrintOptions()

    cmd = ["lp", "-d", printer_name]
    if options.copies > 1:
        cmd.extend(["-n", str(options.copies)])
    if options.media:
        cmd.extend(["-o", f"media={options.media}"])
    if options.grayscale:
        cmd.extend(["-o", "ColorModel=Gray"])
    if options.fit_to_page:
        cmd.extend(["-o", "fit-to-page"])
    for key, value in options.cups_options.items():
        cmd.extend(["-o", f"{key}={value}"])
    cmd.append(str(image_path))
    return cmd


def parse_job_id(output: str) -> str:
    m = _REQUEST_ID.search(output)
    return m.group(1) if m else output.strip()


def _sniff_format(data: bytes) -> Optional[str]:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.format
    except Exception:
        # Identification only feeds a warning; it must never block a print.
        return None


def _stage_buffer(data: bytes) -> Path:
    # Always .png, whatever the bytes really are; lp sniffs the content itself.
    fmt = _sniff_format(data)
    if fmt != "PNG":
        logger.warning("Staging %s image data under a .png name", fmt or "unrecognised")

    name = f"print-temp-{int(time.time() * 1000)}-{secrets.token_hex(4)}.png"
    temp_path = Path(tempfile.gettempdir()) / name
    try:
        temp_path.write_bytes(data)
    except OSError:
        _remove_temp_file(temp_path)
        raise
    return temp_path


def _remove_temp_file(temp_path: Path) -> None:
    try:
        temp_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not delete temporary file %s: %s", temp_path, e)


def print_image(
        printer_name: str,
        image: ImageSource,
        options: Optional[PrintOptions] = None,
) -> str:
    """
    Print a file path or in-memory image on `printer_name` and return the job id.

    Byte buffers are staged to a temp file that is removed afterwards, whether
    or not the print went through. The printer lookup and the `lp` call are
    not atomic: a queue removed in between gives the raw lp error.
    """
    temp_path: Optional[Path] = None

    try:
        if isinstance(image, (bytes, bytearray)):
            temp_path = _stage_buffer(bytes(image))
            image_path = temp_path
        else:
            image_path = Path(image)
            validate_image_file(image_path)

        if not any(p.name == printer_name for p in directory.get_all_printers()):
            raise PrinterNotFoundError(f"Printer not found: {printer_name}")

        out = run_command(build_print_command(printer_name, image_path, options))
        job_id = parse_job_id(out)
        logger.info("Submitted %s to %s as job %s", image_path.name, printer_name, job_id)
        return job_id

    except (PrinterError, OSError) as e:
        raise wrap_error("print", e) from e

    finally:
        if temp_path is not None:
            _remove_temp_file(temp_path)


def print_to_first_available(
        image: ImageSource,
        options: Optional[PrintOptions] = None,
) -> PrintSubmission:
    """Print on the default printer, or the first one CUPS lists if there is no default."""
    printers = directory.get_all_printers()
    if not printers:
        raise NoPrintersFoundError("No printers found")

    printer = next((p for p in printers if p.is_default), printers[0])
    job_id = print_image(printer.name, image, options)
    return PrintSubmission(printer_name=printer.name, job_id=job_id)


class CupsPrinter(Printer):
    """
    CUPS-backed printer using the `lp` command.

    With no printer name, every job goes to the default (or first) queue
    as resolved at submission time.
    """

    def __init__(self, printer_name: Optional[str] = None, lp_path: str = "lp") -> None:
        self._printer_name = printer_name
        self._lp_path = lp_path

    @property
    def printer_name(self) -> Optional[str]:
        return self._printer_name

    def preflight(self) -> None:
        if shutil.which(self._lp_path) is None:
            raise PrinterError(f"CUPS not available: '{self._lp_path}' not found in PATH")

    def print_image(self, image: ImageSource, options: Optional[PrintOptions] = None) -> PrintSubmission:
        self.preflight()

        if self._printer_name is None:
            return print_to_first_available(image, options)

        job_id = print_image(self._printer_name, image, options)
        return PrintSubmission(printer_name=self._printer_name, job_id=job_id)

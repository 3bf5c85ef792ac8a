# printing/printer_state.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from printing.commands import run_command
from printing.printer_base import PrinterError, wrap_error

logger = logging.getLogger(__name__)

# lpstat has no stable state vocabulary across drivers, so "enabled" is
# decided by substring. Keep the heuristic here only.
_NOT_ACCEPTING_MARKERS = ("disabled", "paused")


@dataclass(frozen=True)
class ResumeResult:
    was_enabled: bool
    message: str


def is_status_enabled(status_text: str) -> bool:
    text = status_text.lower()
    return not any(marker in text for marker in _NOT_ACCEPTING_MARKERS)


def is_printer_enabled(printer_name: str) -> bool:
    try:
        out = run_command(["lpstat", "-p", printer_name])
    except PrinterError as e:
        raise wrap_error("check printer status", e) from e
    return is_status_enabled(out)


def enable_printer(printer_name: str) -> str:
    """Resume a paused queue and make it accept jobs again."""
    try:
        run_command(["cupsenable", printer_name])
        run_command(["cupsaccept", printer_name])
    except PrinterError as e:
        raise wrap_error("enable printer", e) from e

    logger.info("Enabled printer %s", printer_name)
    return f'Printer "{printer_name}" has been enabled and is now accepting jobs'


def check_and_resume_printer(printer_name: str, auto_enable: bool = True) -> ResumeResult:
    if is_printer_enabled(printer_name):
        return ResumeResult(was_enabled=True, message=f'Printer "{printer_name}" is ready')

    if auto_enable:
        message = enable_printer(printer_name)
        return ResumeResult(was_enabled=False, message=f"{message} (was paused/disabled)")

    return ResumeResult(was_enabled=False, message=f'Printer "{printer_name}" is paused/disabled')

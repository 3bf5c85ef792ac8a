# printing/directory.py

"""
Printer discovery by scraping `lpstat`.

`lpstat -p -d` gives one "printer <name> <status>" line per queue plus the
"system default destination: <name>" line; `lpstat -v` gives
"device for <name>: <uri>". Records are rebuilt on every call.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from printing.commands import run_command
from printing.printer_base import PrinterError, wrap_error

_PRINTER_LINE = re.compile(r"^printer (\S+) ?(.*)$")
_DEFAULT_LINE = re.compile(r"system default destination: (\S+)")
_DEVICE_LINE = re.compile(r"^device for (.+?): (.+)$")
_MEDIA_LINE = re.compile(r"PageSize/Media Size: (.+)")


@dataclass(frozen=True)
class PrinterRecord:
    name: str
    uri: str
    status: str
    is_default: bool
    is_usb: bool
    description: Optional[str] = None


def is_usb_uri(uri: str) -> bool:
    return "usb" in uri.lower()


def parse_printers(status_report: str, device_report: str) -> list[PrinterRecord]:
    default_match = _DEFAULT_LINE.search(status_report)
    default_name = default_match.group(1) if default_match else None

    devices: dict[str, str] = {}
    for line in device_report.splitlines():
        m = _DEVICE_LINE.match(line.strip())
        if m:
            devices.setdefault(m.group(1), m.group(2).strip())

    printers: list[PrinterRecord] = []
    for line in status_report.splitlines():
        m = _PRINTER_LINE.match(line)
        if not m:
            continue

        name = m.group(1)
        status = m.group(2).strip() or "unknown"
        uri = devices.get(name, "")

        printers.append(
            PrinterRecord(
                name=name,
                uri=uri,
                status=status,
                is_default=name == default_name,
                is_usb=is_usb_uri(uri),
                description=status,
            )
        )

    return printers


def get_all_printers() -> list[PrinterRecord]:
    try:
        status_report = run_command(["lpstat", "-p", "-d"])
        device_report = run_command(["lpstat", "-v"])
    except PrinterError as e:
        raise wrap_error("get printers", e) from e

    return parse_printers(status_report, device_report)


def get_usb_printers() -> list[PrinterRecord]:
    return [p for p in get_all_printers() if p.is_usb]


def get_printer_info(printer_name: str) -> str:
    """Raw `lpoptions -l` listing of the printer's PPD options."""
    try:
        return run_command(["lpoptions", "-p", printer_name, "-l"])
    except PrinterError as e:
        raise wrap_error("get printer info", e) from e


def parse_media_sizes(info: str) -> list[str]:
    m = _MEDIA_LINE.search(info)
    if not m:
        return []

    sizes = []
    for token in m.group(1).split():
        # CUPS marks the current default with a leading '*'.
        token = token.lstrip("*")
        if token:
            sizes.append(token)
    return sizes


def get_available_media_sizes(printer_name: str) -> list[str]:
    try:
        info = get_printer_info(printer_name)
    except PrinterError as e:
        raise wrap_error("get media sizes", e) from e
    return parse_media_sizes(info)

#!/usr/bin/env python
"""
Walk through the printer helpers: discovery, capabilities, printing, job status.

    python print_example.py path/to/logo.png
"""
import argparse
import sys

from printing.cups_printer import print_image, print_to_first_available
from printing.directory import get_all_printers, get_available_media_sizes, get_printer_info, get_usb_printers
from printing.jobs import get_print_job_status
from printing.printer_base import PrinterError, PrintOptions
from settings import Settings, configure_logging


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print an image on the first USB printer.")
    parser.add_argument("image", nargs="?", default="logo.png")
    args = parser.parse_args(argv)

    try:
        print("Searching for printers...\n")

        print("All available printers:")
        for printer in get_all_printers():
            print(f"  - {printer.name}")
            print(f"    URI: {printer.uri}")
            print(f"    Status: {printer.status}")
            print(f"    Default: {_yes_no(printer.is_default)}")
            print(f"    USB: {_yes_no(printer.is_usb)}")
            print("")

        usb_printers = get_usb_printers()
        print(f"\nFound {len(usb_printers)} USB printer(s):")
        for printer in usb_printers:
            print(f"  - {printer.name} ({printer.status})")

        if not usb_printers:
            print("\nNo USB printers found. Make sure your printer is connected.")
            return 0

        first = usb_printers[0]
        print(f"\nGetting info for {first.name}...")
        try:
            media_sizes = get_available_media_sizes(first.name)
            if media_sizes:
                print("Available media sizes:", ", ".join(media_sizes))
            print("\nDetailed printer options:")
            print(get_printer_info(first.name))
        except PrinterError as e:
            print(f"Could not get detailed printer info: {e}")

        options = PrintOptions(copies=1, fit_to_page=True, grayscale=True)

        print(f"\nPrinting {args.image}...")
        job_id = print_image(first.name, args.image, options)
        print(f"Print job submitted. Job ID: {job_id}")
        print(f"\nJob status:\n{get_print_job_status(job_id)}")

        result = print_to_first_available(args.image, options)
        print(f"Printed to {result.printer_name}, Job ID: {result.job_id}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    configure_logging(Settings.from_env().log_level)
    sys.exit(main())

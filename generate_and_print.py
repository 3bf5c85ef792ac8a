#!/usr/bin/env python
"""
Generate a coloring page with Imagen and send it straight to a USB printer.

    python generate_and_print.py "a dragon reading a book" [--no-save] [--no-print]
"""
import argparse
import sys

from generation.imagen_generator import ImagenGenerator
from printing.cups_printer import print_to_first_available
from printing.directory import get_usb_printers
from printing.printer_base import PrintOptions
from settings import Settings, configure_logging

DEFAULT_PROMPT = "A friendly robot teaching kids to code"


def main(argv=None, generator=None) -> int:
    parser = argparse.ArgumentParser(description="Generate an image and print it.")
    parser.add_argument("prompt", nargs="?", default=DEFAULT_PROMPT)
    parser.add_argument("--no-save", dest="save", action="store_false", help="keep the image in memory only")
    parser.add_argument("--no-print", dest="print", action="store_false", help="skip printing")
    args = parser.parse_args(argv)

    try:
        if generator is None:
            settings = Settings.from_env()
            generator = ImagenGenerator(
                api_key=settings.gemini_api_key,
                model=settings.imagen_model,
                output_dir=settings.output_dir,
            )

        usb_printers = []
        if args.print:
            print("Checking for USB printers...")
            usb_printers = get_usb_printers()
            if not usb_printers:
                print("No USB printers found. Image will be generated but not printed.")
                print("   Connect a USB printer or use --no-print.\n")
            else:
                print(f"Found {len(usb_printers)} USB printer(s):")
                for p in usb_printers:
                    print(f"   - {p.name}")
                print("")

        image = generator.generate(args.prompt, save=args.save)
        if image.path:
            print(f"Image saved: {image.path}")

        if not args.print:
            where = "saved" if image.path else "in memory"
            print(f"\nImage generated {where} (printing skipped)")
            return 0

        if usb_printers:
            print("\nPrinting image...")
            result = print_to_first_available(image.data, PrintOptions(fit_to_page=True, copies=1))
            print(f"Print job submitted to {result.printer_name}")
            print(f"   Job ID: {result.job_id}")
            if not image.path:
                print("   (Image printed directly from memory - not saved to disk)")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    configure_logging(Settings.from_env().log_level)
    sys.exit(main())

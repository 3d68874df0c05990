#!/usr/bin/env python3
"""
lasm — assembler CLI for the two-register teaching microcontroller

Usage:
    python lasmtool.py [input.asm] [-o output.hex] [--config config.json]
                       [--rows 64] [--strict] [--listing] [--verbose]

With an input file the hex image is written next to it (prog.asm -> prog.hex).
Without one the source is read from stdin and the image printed to stdout.
Nothing is written if any line fails to assemble.

Examples:
    python lasmtool.py blink.asm
    python lasmtool.py blink.asm -o build/blink.hex --strict
    cat blink.asm | python lasmtool.py
"""

import argparse
import logging
import os
import sys

from lasm import __version__
from lasm.assembler import Assembler
from lasm.config import ConfigError, DEFAULT_CONFIG, load_opcodes
from lasm.hexfile import CapacityError, HexImageError, IMAGE_ROWS, to_hex_image

logger = logging.getLogger("lasm")

SOURCE_EXT = ".asm"
IMAGE_EXT = ".hex"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lasm",
        description="Assembler for the two-register teaching microcontroller",
    )
    parser.add_argument("input", nargs="?",
                        help="Input .asm source file (default: read stdin)")
    parser.add_argument("-o", "--output",
                        help="Output hex file (default: input name with .hex, or stdout)")
    parser.add_argument("--config", default=DEFAULT_CONFIG,
                        help=f"Opcode table JSON file (default: {DEFAULT_CONFIG})")
    parser.add_argument("--rows", type=int, default=IMAGE_ROWS,
                        help=f"Rows in the hex image (default: {IMAGE_ROWS})")
    parser.add_argument("--strict", action="store_true",
                        help="Reject data values above 255 and programs longer than the image")
    parser.add_argument("--listing", action="store_true",
                        help="Print an address/bits/source listing to stdout")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--version", action="version",
                        version=f"lasm {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    # Read input
    if args.input:
        if not args.input.endswith(SOURCE_EXT):
            logger.error(f"File must have {SOURCE_EXT} extension: {args.input}")
            return 1
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                source = f.read()
        except FileNotFoundError:
            logger.error(f"File not found: {args.input}")
            return 1
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {args.input}: {e}")
            return 1
    else:
        try:
            source = sys.stdin.read()
        except UnicodeDecodeError as e:
            logger.error(f"Error reading stdin: {e}")
            return 1

    output = args.output
    if output is None and args.input:
        output = os.path.splitext(args.input)[0] + IMAGE_EXT

    try:
        opcodes = load_opcodes(args.config)
    except ConfigError as e:
        logger.error(f"Config error: {e}")
        return 1

    asm = Assembler(opcodes, strict_data=args.strict)
    program = asm.assemble(source)

    if args.listing:
        print(asm.get_listing())

    if asm.failed:
        return 1

    try:
        image = to_hex_image(program, rows=args.rows, strict=args.strict)
    except CapacityError as e:
        logger.error(f"Program too large: {e}")
        return 1
    except HexImageError as e:
        logger.error(f"Internal assembler error: {e}")
        return 2

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(image)
        except OSError as e:
            logger.error(f"Error writing to {output}: {e}")
            return 1
        print(f"{len(program)} instructions assembled and written to {output}.")
    else:
        print(f"{len(program)} instructions assembled:\n")
        print("-----")
        print(image)
        print("-----")

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
edgeascii - turn an 8-bit grey image into edge-detected ASCII art.

Usage:
    edgeascii image.pgm [width [filter [asciiPattern]]]

Examples:
    # 80 columns, Prewitt X
    edgeascii teapot512.pgm

    # Keep the original width, Sobel X
    edgeascii teapot512.pgm 0 0

    # 120 columns, Scharr Y, custom ramp
    edgeascii teapot512.pgm 120 3 " .:-=+*#%@"
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .backend import DEFAULT_BACKEND, available_backends
from .config import DEFAULT_COLUMNS, RenderConfig
from .errors import EdgeAsciiError
from .glyphs import DEFAULT_RAMP
from .kernels import describe_kernels
from .pipeline import render_file, write_output


def filter_help() -> str:
    lines = ["filters:"]
    lines += [f"  {line}" for line in describe_kernels()]
    lines.append("  any other value: Prewitt X")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edgeascii",
        description="ASCII Art - apply an edge detection filter to an 8-bit grey image "
                    "and print it as ASCII art.",
        epilog=filter_help(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image_path", nargs="?", help="Path to the source image (PGM or any format Pillow reads)")
    parser.add_argument("width", nargs="?", type=int,
                        help=f"Width of the ASCII art; 0 = original size, <0 = abs(width) (default: {DEFAULT_COLUMNS})")
    parser.add_argument("filter", nargs="?", type=int,
                        help="Edge detection filter id, see below (default: Prewitt X)")
    parser.add_argument("ascii_pattern", nargs="?",
                        help=f"Glyphs from black to white (default: {DEFAULT_RAMP!r})")
    parser.add_argument("--backend", choices=available_backends(), default=DEFAULT_BACKEND,
                        help="Compute backend (default: %(default)s)")
    parser.add_argument("-o", "--output", type=Path,
                        help="Write the ASCII art to this file instead of stdout")
    parser.add_argument("--list-filters", action="store_true",
                        help="List the available filters and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log pipeline stages to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.list_filters:
        print(filter_help())
        return 0

    if args.image_path is None:
        parser.print_help()
        return 0

    try:
        config = RenderConfig.from_args(args)
        text = render_file(args.image_path, config)
    except EdgeAsciiError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                write_output(text, f)
        except OSError as exc:
            print(f"Error: could not write {args.output}: {exc}", file=sys.stderr)
            return 1
        print(f"Saved to {args.output}", file=sys.stderr)
    else:
        write_output(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())

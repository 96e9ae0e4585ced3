"""Command-line entry point.

Usage: svgsketch input.svg [-o out.json] [--scale S] [--format F]
       [--no-text] [--no-patterns] [--reflect-smooth]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from svgsketch.config import Settings
from svgsketch.encoders import ENCODERS
from svgsketch.engine.pipeline import convert_document
from svgsketch.models.requests import ConvertOptions

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svgsketch",
        description="Convert SVG markup into CAD sketch entities (BTM JSON).",
    )
    parser.add_argument("input", help="SVG file to convert ('-' for stdin)")
    parser.add_argument("-o", "--output", help="Write the JSON response here instead of stdout")
    parser.add_argument(
        "--scale",
        type=float,
        default=settings.default_scale,
        help=f"User units → sketch units (default: {settings.default_scale})",
    )
    parser.add_argument(
        "--format",
        choices=sorted(ENCODERS),
        default=settings.default_output_format,
        help="Output format (default: %(default)s)",
    )
    parser.add_argument("--no-text", action="store_true", help="Skip <text> elements")
    parser.add_argument("--no-patterns", action="store_true", help="Skip pattern detection")
    parser.add_argument(
        "--reflect-smooth",
        action="store_true",
        help="Reflect the previous control point for S/T commands",
    )
    return parser


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    try:
        settings = Settings()
    except ValidationError as e:
        logger.error("Invalid settings: %s", e)
        return 2
    configure_logging(settings.svgsketch_log_level)

    args = build_parser(settings).parse_args(argv)

    try:
        markup = _read_input(args.input)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return 1

    if args.scale <= 0:
        logger.error("--scale must be positive, got %s", args.scale)
        return 2

    options = ConvertOptions(
        scale=args.scale,
        text_as_sketch_text=not args.no_text,
        detect_patterns=not args.no_patterns,
        output_format=args.format,
        reflect_smooth_controls=args.reflect_smooth,
    )
    response = convert_document(markup, options)
    payload = response.model_dump_json(indent=2)

    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        logger.info("Wrote %d entities to %s", response.count, args.output)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())

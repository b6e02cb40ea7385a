"""Command-line entry point: convert an HTML file for a phone, or inspect its tables.

    responsive-tables convert page.html -o page.mobile.html --width 375
    responsive-tables inspect page.html
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from responsive_tables.config import HTML_PARSER, MOBILE_BREAKPOINT
from responsive_tables.conversion.classifiers import classify
from responsive_tables.conversion.extractors import extract, table_heading
from responsive_tables.conversion.layouts import harvest_clean_list, harvest_slides
from responsive_tables.conversion.markers import find_governing_marker, marker_kind, marker_token
from responsive_tables.conversion.pipeline import TableConverter
from responsive_tables.conversion.raw import read_table
from responsive_tables.conversion.schema import OutputKind

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 375


def convert_file(source: Path, width: int = DEFAULT_WIDTH) -> str:
    """Return the markup of *source* as a viewport of *width* pixels would show it."""
    soup = BeautifulSoup(source.read_text(encoding="utf-8"), HTML_PARSER)
    converter = TableConverter()
    results = converter.initialize(soup, width)
    logger.info("Converted %d tables in %s", len(results), source)
    return str(soup)


def _describe_table(index: int, table: Tag, soup: BeautifulSoup) -> dict:
    raw = read_table(table)
    shape = classify(raw)
    marker = find_governing_marker(table, soup)
    kind = marker_kind(marker) if marker is not None else None

    if kind == OutputKind.LIST:
        items = harvest_clean_list(raw)
    elif kind == OutputKind.CAROUSEL:
        items = harvest_slides(raw)
    else:
        items = extract(raw, shape) or []

    return {
        "index": index,
        "rows": len(raw),
        "shape": shape.value,
        "marker": marker_token(marker) if marker is not None else None,
        "kind": kind.value if kind is not None else None,
        "heading": table_heading(raw, shape),
        "items": [item.model_dump(mode="json") for item in items],
    }


def inspect_file(source: Path) -> list[dict]:
    """Describe every table in *source*: its shape, governing marker, and extracted items.

    A table that fails to read is reported with an ``error`` entry; the others are unaffected.
    """
    soup = BeautifulSoup(source.read_text(encoding="utf-8"), HTML_PARSER)
    report = []
    for index, table in enumerate(soup.find_all("table")):
        try:
            report.append(_describe_table(index, table, soup))
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.exception("Failed to inspect table %d in %s", index, source)
            report.append({"index": index, "error": str(exc)})
    return report


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the requested subcommand."""
    parser = argparse.ArgumentParser(description="Convert marked HTML tables into mobile-friendly markup")
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert an HTML file as a phone would see it")
    convert_parser.add_argument("input", type=Path, help="HTML file to convert")
    convert_parser.add_argument("-o", "--output", type=Path, help="Where to write the result (default: stdout)")
    convert_parser.add_argument(
        "--width", type=int, default=DEFAULT_WIDTH, help=f"Viewport width in px (default: {DEFAULT_WIDTH})"
    )

    inspect_parser = subparsers.add_parser("inspect", help="Print shape, marker and items of every table as JSON")
    inspect_parser.add_argument("input", type=Path, help="HTML file to inspect")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    if not args.input.is_file():
        logger.error("Input file not found: %s", args.input)
        return 1

    if args.command == "convert":
        if args.width >= MOBILE_BREAKPOINT:
            logger.info("Width %d is at or above the %dpx breakpoint; output equals input", args.width, MOBILE_BREAKPOINT)
        html = convert_file(args.input, args.width)
        if args.output is not None:
            args.output.write_text(html, encoding="utf-8")
            logger.info("Wrote %s", args.output)
        else:
            sys.stdout.write(html)
        return 0

    print(json.dumps(inspect_file(args.input), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())

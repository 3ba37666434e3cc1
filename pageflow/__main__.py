"""Pageflow CLI entry point.

Flows a plain text file onto pages and writes a PDF. Allows running via
`python -m pageflow` and provides the console script defined in
`pyproject.toml`.
"""

from __future__ import annotations

import argparse
import asyncio
import importlib.metadata
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

from .builder import PdfBuilder
from .document import PageSizes, ReportLabDocument
from .errors import PageflowError
from .fonts import StandardFont
from .layout_config import LayoutConfig
from .settings_persistence import SettingsPersistence

logger = logging.getLogger(__name__)

_PAGE_SIZES = {
    "a3": PageSizes.A3,
    "a4": PageSizes.A4,
    "a5": PageSizes.A5,
    "letter": PageSizes.LETTER,
    "legal": PageSizes.LEGAL,
}

_PARAGRAPH_BREAK_RE = re.compile(r"\n(?:[ \t]*\n)+")
_BLANK_EDGES_RE = re.compile(r"^(?:[ \t]*\n)+|(?:\n[ \t]*)+$")


def get_version_string() -> str:
    try:
        return importlib.metadata.version("pageflow")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def split_paragraphs(text: str, keep_line_breaks: bool = False) -> List[str]:
    """Split text into paragraphs at blank lines.

    Single newlines inside a paragraph are joined with spaces unless
    keep_line_breaks is set.
    """
    text = _BLANK_EDGES_RE.sub("", text.replace("\r\n", "\n"))
    if not text.strip():
        return []
    paragraphs = []
    for paragraph in _PARAGRAPH_BREAK_RE.split(text):
        paragraph = _BLANK_EDGES_RE.sub("", paragraph)
        if not keep_line_breaks:
            paragraph = " ".join(line.strip() for line in paragraph.split("\n"))
        paragraphs.append(paragraph)
    return paragraphs


def draw_page_number(builder: PdfBuilder, page_number: int) -> None:
    """Draw a centered "Page N" label in the top margin.

    The cursor is left where it was.
    """
    page = builder.page
    size = builder.config.default_size
    label = f"Page {page_number}"
    width = builder.get_font().width_of_text_at_size(label, size)
    x, y = page.get_x(), page.get_y()
    page.move_to((page.get_width() - width) / 2, page.get_height() - builder.config.top_margin / 2)
    page.draw_text(label, size=size)
    page.move_to(x, y)


async def render_paragraphs(paragraphs: List[str], config: LayoutConfig,
                            title: Optional[str] = None) -> ReportLabDocument:
    """Lay out paragraphs separated by blank lines in a new document."""
    doc = ReportLabDocument(title=title)
    builder = await PdfBuilder.create(doc, config)
    for i, paragraph in enumerate(paragraphs):
        if i > 0:
            await builder.add_blank_line()
        await builder.add_paragraph(paragraph)
    logger.info("Laid out %d paragraph(s) on %d page(s)", len(paragraphs), builder.page_number)
    return doc


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pageflow",
        description="Flow a plain text file onto pages and save it as PDF.",
    )
    parser.add_argument("input", type=Path, nargs="?", help="Text file to lay out.")
    parser.add_argument(
        "--output-file", "-o",
        type=Path,
        help="PDF file to write (default: input with a .pdf suffix).",
    )
    parser.add_argument("--size", type=float, dest="default_size", help="Text size in points.")
    parser.add_argument("--top", type=float, dest="top_margin", help="Top margin in points.")
    parser.add_argument("--left", type=float, dest="left_margin", help="Left margin in points.")
    parser.add_argument("--right", type=float, dest="right_margin", help="Right margin in points.")
    parser.add_argument("--bottom", type=float, dest="bottom_margin",
                        help="Bottom margin in points.")
    parser.add_argument("--inter-line", type=float, dest="inter_line",
                        help="Extra space between lines in points.")
    parser.add_argument("--font", help="Standard PDF font name (default: Times-Roman).")
    parser.add_argument("--page-size", choices=sorted(_PAGE_SIZES), default="a4")
    parser.add_argument("--page-numbers", action="store_true",
                        help="Print the page number in the top margin.")
    parser.add_argument("--keep-line-breaks", action="store_true",
                        help="Keep single newlines instead of joining lines.")
    parser.add_argument("--save-defaults", action="store_true",
                        help="Store the given layout options as defaults for later runs.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output.")
    parser.add_argument("--version", "-V", action="store_true", help="Print version and exit.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.version:
        print(get_version_string())
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = {
        name: getattr(args, name)
        for name in ("default_size", "top_margin", "left_margin", "right_margin",
                     "bottom_margin", "inter_line")
        if getattr(args, name) is not None
    }
    persistence = SettingsPersistence()

    try:
        if args.save_defaults:
            stored = persistence.load_settings()
            stored.update(overrides)
            # Validate before writing
            LayoutConfig.from_dict(stored)
            if persistence.save_settings(stored):
                logger.info("Saved layout defaults to %s", persistence.settings_file)
            if args.input is None:
                return 0

        if args.input is None:
            print("pageflow: an input file is required", file=sys.stderr)
            return 2

        doc_overrides = dict(overrides, page_size=_PAGE_SIZES[args.page_size])
        if args.font:
            doc_overrides["font"] = StandardFont.load(args.font)
        if args.page_numbers:
            doc_overrides["on_add_page"] = draw_page_number
        config = persistence.load_config(**doc_overrides)

        text = args.input.read_text(encoding="utf-8")
        paragraphs = split_paragraphs(text, keep_line_breaks=args.keep_line_breaks)
        doc = asyncio.run(render_paragraphs(paragraphs, config, title=args.input.stem))

        output = args.output_file or args.input.with_suffix(".pdf")
        doc.save_to_file(str(output))
        logger.info("Wrote %s", output)
    except (OSError, PageflowError, ValueError) as e:
        print(f"pageflow: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

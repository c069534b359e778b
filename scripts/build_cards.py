"""
Render a markdown file into a PDF of fixed-size cards.
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mdcards.builder import PageSettings, build_cards


def _parse_args() -> argparse.Namespace:
    """Return CLI arguments for the card script."""

    parser = argparse.ArgumentParser(
        description="Paginate a markdown file into cards and save them as a PDF."
    )
    parser.add_argument("markdown", type=Path, help="Markdown file to render.")
    parser.add_argument(
        "--output-file",
        "-o",
        type=Path,
        default=Path("output/cards.pdf"),
        help="File path into which the resulting pdf will be saved.",
    )
    parser.add_argument("--width", type=float, default=400.0, help="Card width in points.")
    parser.add_argument(
        "--aspect-ratio", type=float, default=1.5, help="Card height divided by width."
    )
    parser.add_argument("--font-size", type=float, default=16.0, help="Body font size.")
    parser.add_argument(
        "--font-family",
        default="Helvetica",
        help="Standard or registered font name (used as the name for --font-path).",
    )
    parser.add_argument(
        "--font-path", type=Path, default=None, help="Optional TrueType font file."
    )
    parser.add_argument(
        "--line-height", type=float, default=1.5, help="Line height multiplier."
    )
    parser.add_argument("--header", default="", help="Header text drawn on every card.")
    parser.add_argument("--footer", default="", help="Footer text drawn on every card.")
    parser.add_argument(
        "--hyphenate",
        metavar="LANG",
        default=None,
        help="Insert soft hyphens using the Pyphen dictionary for LANG (e.g., en_US).",
    )
    parser.add_argument(
        "--no-section-split",
        action="store_true",
        help="Do not start a new card at horizontal rules.",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Hide the pagination progress bar."
    )
    return parser.parse_args()


def main() -> None:
    """Render the markdown file given on the command line.

    Example:
        >>> main()  # doctest: +SKIP
    """

    args = _parse_args()
    settings = PageSettings(
        card_width=args.width,
        aspect_ratio=args.aspect_ratio,
        font_size=args.font_size,
        font_family=args.font_family,
        font_path=str(args.font_path) if args.font_path else None,
        line_height=args.line_height,
        header_text=args.header,
        footer_text=args.footer,
        hyphenation_lang=args.hyphenate,
        use_section_split=not args.no_section_split,
    )
    markdown = args.markdown.read_text(encoding="utf-8")
    pages = build_cards(
        markdown,
        settings=settings,
        base_dir=args.markdown.resolve().parent,
        output_path=args.output_file,
        show_progress=not args.quiet,
    )
    if pages:
        print(f"Wrote PDF to {args.output_file} ({len(pages)} cards)")


if __name__ == "__main__":
    main()

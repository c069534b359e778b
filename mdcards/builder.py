"""Card generation for markdown documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from tqdm import tqdm

from .images import load_images
from .models import Page
from .pagination import (
    LayoutConfig,
    MeasurementOracle,
    PageSettings,
    ReportLabOracle,
    paginate_blocks,
    section_count,
)
from .paging.page_story import build_pdf
from .parser import parse_markdown

__all__ = [
    "CardRun",
    "PageSettings",
    "build_cards",
    "render_cards",
]


@dataclass(slots=True)
class CardRun:
    """Pages of one pagination run and the layout they were computed for.

    Args:
        pages: Paginated cards.
        config: Layout configuration of the run.
    """

    pages: List[Page]
    config: LayoutConfig


def render_cards(
    markdown: str,
    *,
    settings: PageSettings,
    base_dir: Path,
    oracle: MeasurementOracle | None = None,
    show_progress: bool = False,
) -> CardRun:
    """Parse, resolve images and paginate ``markdown``.

    Images are fully resolved before the first measurement.

    Args:
        markdown: Markdown source text.
        settings: Card geometry and typography.
        base_dir: Directory relative image links resolve against.
        oracle: Measurement oracle; ReportLab-backed when omitted.
        show_progress: Whether to show a tqdm bar over sections.
    Returns:
        CardRun with the pages and the layout configuration.
    Raises:
        MeasurementError: When the oracle fails.
    """

    blocks = load_images(parse_markdown(markdown), base_dir=base_dir)
    config = settings.layout_config()
    total = section_count(blocks, use_section_split=settings.use_section_split)
    progress = (
        tqdm(total=total, desc="Paginating sections", unit="section")
        if show_progress and total
        else None
    )
    try:
        pages = paginate_blocks(
            blocks=blocks,
            config=config,
            oracle=oracle or ReportLabOracle(),
            use_section_split=settings.use_section_split,
            progress=progress,
        )
    finally:
        if progress is not None:
            progress.close()
    return CardRun(pages=pages, config=config)


def build_cards(
    markdown: str,
    *,
    settings: PageSettings,
    base_dir: Path,
    output_path: Path,
    show_progress: bool = True,
) -> List[Page]:
    """Paginate ``markdown`` and write the cards to ``output_path``.

    Example:
        >>> build_cards("# Hi", settings=PageSettings(), base_dir=Path("."),
        ...             output_path=Path("output/cards.pdf"))  # doctest: +SKIP
    """

    run = render_cards(
        markdown, settings=settings, base_dir=base_dir, show_progress=show_progress
    )
    if not run.pages:
        print("No content to render; no PDF written.")
        return run.pages
    build_pdf(
        pages=run.pages, settings=settings, output_path=output_path, config=run.config
    )
    return run.pages

"""Canvas drawing of paginated cards into a PDF."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from reportlab.lib import colors
from reportlab.pdfgen import canvas

from ..layout_utils import draw_stack
from ..models import Page
from ..text import hyphenator
from .page_flowables import page_flowables
from .page_settings import (
    LayoutConfig,
    PageSettings,
    build_styles,
    chrome_paragraph,
    chrome_style,
)


def page_indicator(*, index: int, total: int) -> str:
    """Return the "N/total" label of a card.

    Example:
        >>> page_indicator(index=0, total=3)
        '1/3'
    """

    return f"{index + 1}/{total}"


def _draw_chrome(
    *, canv: canvas.Canvas, settings: PageSettings, index: int, total: int
) -> None:
    """Draw header text, footer text and the page indicator for one card."""

    style = chrome_style(font_name=settings.resolved_font(), font_size=settings.font_size)
    x = settings.padding_x + settings.section_margin
    width = settings.content_width
    header_height, footer_height = settings.chrome_heights()
    if settings.header_text.strip():
        header = chrome_paragraph(text=settings.header_text, style=style)
        _, height = header.wrap(width, header_height)
        header.drawOn(canv, x, settings.card_height - settings.padding_top - height)
    if settings.footer_text.strip():
        footer = chrome_paragraph(text=settings.footer_text, style=style)
        footer.wrap(width, footer_height)
        footer.drawOn(canv, x, settings.padding_bottom)

    canv.saveState()
    canv.setFont(style.fontName, style.fontSize)
    canv.setFillColor(colors.HexColor("#999999"))
    canv.drawRightString(
        settings.card_width - x,
        settings.padding_bottom / 2,
        page_indicator(index=index, total=total),
    )
    canv.restoreState()


def _draw_page(
    *,
    canv: canvas.Canvas,
    page: Page,
    settings: PageSettings,
    config: LayoutConfig,
) -> None:
    """Draw the blocks of one card inside its content box."""

    dic = hyphenator(config.hyphenation_lang) if config.hyphenation_lang else None
    flowables = page_flowables(
        blocks=page.blocks, config=config, styles=build_styles(config), dic=dic
    )
    header_height, _ = settings.chrome_heights()
    top = settings.card_height - settings.padding_top - header_height
    draw_stack(
        canv,
        flowables,
        x=settings.padding_x + settings.section_margin,
        top=top,
        width=config.content_width,
    )


def build_pdf(
    *,
    pages: Sequence[Page],
    settings: PageSettings,
    output_path: Path,
    config: LayoutConfig | None = None,
) -> Path:
    """Render each card on its own PDF page.

    Args:
        pages: Paginated cards.
        settings: Card geometry and chrome.
        output_path: Destination PDF path.
        config: Layout configuration used for pagination; derived from
            ``settings`` when omitted.
    Returns:
        The written path.
    Raises:
        ValueError: When there are no pages to render.
    """

    if not pages:
        raise ValueError("No pages to render")
    config = config or settings.layout_config()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    canv = canvas.Canvas(
        str(output_path), pagesize=(settings.card_width, settings.card_height)
    )
    total = len(pages)
    for index, page in enumerate(pages):
        _draw_page(canv=canv, page=page, settings=settings, config=config)
        _draw_chrome(canv=canv, settings=settings, index=index, total=total)
        canv.showPage()
    canv.save()
    return output_path

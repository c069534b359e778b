"""ReportLab flowables for card blocks; shared by measurement and export."""

from __future__ import annotations

from typing import Dict, List, Sequence
from xml.sax.saxutils import escape

from pyphen import Pyphen
from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import Flowable, Paragraph, Preformatted, Table, TableStyle

from ..cleaning import text_markup
from ..models import Block, CodeBlock, Generic, Heading, ImageRef, ListBlock, Rule
from ..text import hyphenate_markup
from .page_constants import IMAGE_MARGIN, PLACEHOLDER_HEIGHT
from .page_settings import LayoutConfig

BULLET = "\u2022"


class ImageBox(Flowable):
    """Draw a loaded image scaled down to the available width."""

    def __init__(self, *, path: str, width: float, height: float) -> None:
        super().__init__()
        self.path = path
        self.image_width = width
        self.image_height = height
        self.draw_width = 0.0
        self.width = 0.0
        self.height = 0.0
        self.spaceBefore = IMAGE_MARGIN
        self.spaceAfter = IMAGE_MARGIN

    def wrap(self, aW: float, aH: float) -> tuple[float, float]:
        """Scale to ``aW`` when the image is wider, keeping its aspect ratio.

        Args:
            aW: Available width for wrapping.
            aH: Available height for wrapping.
        Returns:
            Tuple of (width, height).
        """

        scale = min(1.0, aW / self.image_width) if self.image_width > 0 else 1.0
        self.width = aW
        self.draw_width = self.image_width * scale
        self.height = self.image_height * scale
        return aW, self.height

    def draw(self) -> None:
        """Draw the image centered in the content column."""

        x = max(0.0, (self.width - self.draw_width) / 2)
        self.canv.drawImage(
            self.path, x, 0, self.draw_width, self.height, mask="auto"
        )


class MissingImageBox(Flowable):
    """Fixed-height dashed box standing in for an image that failed to load."""

    def __init__(self, *, message: str, style: ParagraphStyle) -> None:
        super().__init__()
        self.paragraph = Paragraph(escape(message), style)
        self.width = 0.0
        self.height = PLACEHOLDER_HEIGHT
        self.spaceBefore = IMAGE_MARGIN
        self.spaceAfter = IMAGE_MARGIN

    def wrap(self, aW: float, aH: float) -> tuple[float, float]:
        """Return the full width and the fixed placeholder height."""

        self.width = aW
        return aW, self.height

    def draw(self) -> None:
        """Draw the dashed border and the centered message."""

        self.canv.saveState()
        self.canv.setStrokeColor(colors.HexColor("#ff4d4f"))
        self.canv.setFillColor(colors.HexColor("#fff1f0"))
        self.canv.setDash(3, 2)
        self.canv.roundRect(0, 0, self.width, self.height, 4, stroke=1, fill=1)
        self.canv.restoreState()
        _, para_height = self.paragraph.wrap(self.width - 20, self.height)
        self.paragraph.drawOn(self.canv, 10, (self.height - para_height) / 2)


def _markup(*, text: str, markup: str, dic: Pyphen | None) -> str:
    """Return paragraph markup for a block, hyphenated when requested."""

    value = markup or text_markup(text)
    if dic is not None:
        value = hyphenate_markup(value, dic)
    return value


def image_flowables(
    *, images: Sequence[ImageRef], styles: Dict[str, ParagraphStyle]
) -> List[Flowable]:
    """Return flowables for embedded images, substituting placeholders.

    Args:
        images: Image references in reading order.
        styles: Paragraph styles.
    Returns:
        List of ImageBox or MissingImageBox flowables.
    """

    flowables: List[Flowable] = []
    for image in images:
        if image.path and image.width and image.height and not image.is_placeholder:
            flowables.append(
                ImageBox(path=image.path, width=image.width, height=image.height)
            )
            continue
        message = image.error or f"Image not found: {image.src}"
        flowables.append(MissingImageBox(message=message, style=styles["placeholder"]))
    return flowables


def _code_flowables(
    *, block: CodeBlock, config: LayoutConfig, styles: Dict[str, ParagraphStyle]
) -> List[Flowable]:
    """Return a wrapped Preformatted flowable for a code block."""

    style = styles["code"]
    glyph = stringWidth("M", style.fontName, style.fontSize) or style.fontSize
    max_chars = max(1, int(config.content_width / glyph))
    return [Preformatted(block.code, style, maxLineLength=max_chars, newLineChars="")]


def _list_flowables(
    *,
    block: ListBlock,
    styles: Dict[str, ParagraphStyle],
    dic: Pyphen | None,
) -> List[Flowable]:
    """Return one bulleted paragraph per item, numbered from ``block.start``."""

    flowables: List[Flowable] = []
    last = len(block.items) - 1
    for idx, (item, number) in enumerate(zip(block.items, block.numbers())):
        style = styles["list_last"] if idx == last else styles["list"]
        bullet = f"{number}." if block.ordered else BULLET
        flowables.append(
            Paragraph(
                _markup(text=item.text, markup=item.markup, dic=dic),
                style,
                bulletText=bullet,
            )
        )
        flowables.extend(image_flowables(images=item.images, styles=styles))
    return flowables


def _table_flowables(
    *, block: Generic, config: LayoutConfig, styles: Dict[str, ParagraphStyle]
) -> List[Flowable]:
    """Return a gridded table with equal column widths."""

    columns = max(len(row) for row in block.rows)
    cells = [
        [Paragraph(escape(cell), styles["table"]) for cell in row]
        + [""] * (columns - len(row))
        for row in block.rows
    ]
    table = Table(cells, colWidths=[config.content_width / columns] * columns)
    table.setStyle(
        TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#dddddd")),
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f6f8fa")),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    table.spaceAfter = styles["body"].spaceAfter
    return [table]


def block_flowables(
    *,
    block: Block,
    config: LayoutConfig,
    styles: Dict[str, ParagraphStyle],
    dic: Pyphen | None = None,
) -> List[Flowable]:
    """Return the flowables that render ``block`` in a card.

    Args:
        block: Block to render.
        config: Layout configuration.
        styles: Paragraph styles built for ``config``.
        dic: Optional hyphenation dictionary.
    Returns:
        Flowables in drawing order; empty for section markers.
    """

    if isinstance(block, Rule):
        return []
    if isinstance(block, Heading):
        level = min(max(block.level, 1), 6)
        return [
            Paragraph(
                _markup(text=block.text, markup=block.markup, dic=dic),
                styles[f"h{level}"],
            )
        ]
    if isinstance(block, CodeBlock):
        return _code_flowables(block=block, config=config, styles=styles)
    if isinstance(block, ListBlock):
        return _list_flowables(block=block, styles=styles, dic=dic)
    if block.tag == "table" and block.rows:
        return _table_flowables(block=block, config=config, styles=styles)
    flowables: List[Flowable] = []
    if block.text.strip():
        style = styles["quote"] if block.tag == "blockquote" else styles["body"]
        flowables.append(
            Paragraph(_markup(text=block.text, markup=block.markup, dic=dic), style)
        )
    flowables.extend(image_flowables(images=block.images, styles=styles))
    return flowables


def page_flowables(
    *,
    blocks: Sequence[Block],
    config: LayoutConfig,
    styles: Dict[str, ParagraphStyle],
    dic: Pyphen | None = None,
) -> List[Flowable]:
    """Return flowables for a run of blocks in order."""

    flowables: List[Flowable] = []
    for block in blocks:
        flowables.extend(
            block_flowables(block=block, config=config, styles=styles, dic=dic)
        )
    return flowables

"""Fonts, styles, and layout settings for card generation."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.fonts import tt2ps
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph

from ..layout_utils import measure_height

HEADING_SCALE = {1: 1.6, 2: 1.4, 3: 1.25, 4: 1.1, 5: 1.0, 6: 0.9}


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Immutable layout inputs shared by the paginator and the oracle.

    Example:
        >>> LayoutConfig(content_width=354, max_content_height=490).leading
        24.0
    """

    content_width: float
    max_content_height: float
    font_size: float = 16.0
    font_family: str = "Helvetica"
    line_height: float = 1.5
    code_font: str = "Courier"
    hyphenation_lang: str | None = None

    @property
    def leading(self) -> float:
        """Return the body line height in points."""
        return self.font_size * self.line_height


@dataclass(slots=True)
class PageSettings:
    """Card geometry and typography used to derive a LayoutConfig.

    Example:
        >>> settings = PageSettings()
        >>> settings.card_height
        600.0
        >>> settings.content_width
        354.0
    """

    card_width: float = 400.0
    aspect_ratio: float = 1.5
    padding_top: float = 10.0
    padding_bottom: float = 60.0
    padding_x: float = 10.0
    section_margin: float = 13.0
    header_allowance: float = 20.0
    footer_allowance: float = 20.0
    font_size: float = 16.0
    font_family: str = "Helvetica"
    line_height: float = 1.5
    code_font: str = "Courier"
    font_path: str | None = None
    hyphenation_lang: str | None = None
    use_section_split: bool = True
    header_text: str = ""
    footer_text: str = ""

    @property
    def card_height(self) -> float:
        """Return the card height for the configured aspect ratio."""

        return self.card_width * self.aspect_ratio

    @property
    def content_width(self) -> float:
        """Return the width available to content inside padding and margins."""

        return self.card_width - 2 * self.padding_x - 2 * self.section_margin

    def chrome_heights(self) -> tuple[float, float]:
        """Return (header, footer) heights.

        Chrome text is measured with the same ReportLab styles used to draw it;
        the fixed allowance applies only when no text is configured.

        Returns:
            Tuple of (header_height, footer_height).
        """

        style = chrome_style(font_name=self.resolved_font(), font_size=self.font_size)
        header = self.header_allowance
        footer = self.footer_allowance
        if self.header_text.strip():
            header = measure_height(
                chrome_paragraph(text=self.header_text, style=style),
                self.content_width,
            )
        if self.footer_text.strip():
            footer = measure_height(
                chrome_paragraph(text=self.footer_text, style=style),
                self.content_width,
            )
        return header, footer

    def content_budget(self) -> float:
        """Return the maximum content height of one card."""

        header, footer = self.chrome_heights()
        return max(
            0.0,
            self.card_height - self.padding_top - self.padding_bottom - header - footer,
        )

    def resolved_font(self) -> str:
        """Register ``font_path`` when given and return the body font name."""

        if self.font_path:
            return register_font(path=Path(self.font_path), name=self.font_family)
        return ensure_font(self.font_family)

    def layout_config(self) -> LayoutConfig:
        """Return the frozen LayoutConfig for one pagination run."""

        return LayoutConfig(
            content_width=self.content_width,
            max_content_height=self.content_budget(),
            font_size=self.font_size,
            font_family=self.resolved_font(),
            line_height=self.line_height,
            code_font=ensure_font(self.code_font),
            hyphenation_lang=self.hyphenation_lang,
        )


def ensure_font(name: str) -> str:
    """Return ``name`` when ReportLab knows the font.

    Raises:
        ValueError: When the font is neither standard nor registered.
    """

    try:
        pdfmetrics.getFont(name)
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown font: {name}") from exc
    return name


def register_font(*, path: Path, name: str) -> str:
    """Register a TrueType font under ``name`` and return the name.

    Raises:
        ValueError: When the file does not exist.
    """

    if name in pdfmetrics.getRegisteredFontNames():
        return name
    if not path.exists():
        raise ValueError(f"Font file not found: {path}")
    pdfmetrics.registerFont(TTFont(name, str(path)))
    return name


def _bold_font(font_name: str) -> str:
    """Return the bold face of a font family, or the font itself."""

    try:
        return tt2ps(font_name, 1, 0)
    except ValueError:
        return font_name


def chrome_style(*, font_name: str, font_size: float) -> ParagraphStyle:
    """Return the style used for header/footer chrome text."""

    return ParagraphStyle(
        "chrome",
        fontName=font_name,
        fontSize=font_size * 0.75,
        leading=font_size * 0.75 * 1.3,
        textColor=colors.HexColor("#666666"),
        alignment=TA_LEFT,
    )


def chrome_paragraph(*, text: str, style: ParagraphStyle) -> Paragraph:
    """Return header/footer text as a paragraph, escaped as plain text."""

    return Paragraph(escape(text), style)


@lru_cache(maxsize=None)
def build_styles(config: LayoutConfig) -> Dict[str, ParagraphStyle]:
    """Create paragraph styles for one layout configuration.

    Args:
        config: Layout configuration.
    Returns:
        Mapping of style keys to ParagraphStyle objects.
    """

    size = config.font_size
    spacing = size * 0.5
    body = ParagraphStyle(
        "body",
        fontName=config.font_family,
        fontSize=size,
        leading=config.leading,
        alignment=TA_LEFT,
        spaceAfter=spacing,
        textColor=colors.HexColor("#333333"),
        embeddedHyphenation=1 if config.hyphenation_lang else 0,
    )
    styles = {"body": body}
    bold = _bold_font(config.font_family)
    for level, scale in HEADING_SCALE.items():
        styles[f"h{level}"] = ParagraphStyle(
            f"h{level}",
            parent=body,
            fontName=bold,
            fontSize=size * scale,
            leading=size * scale * 1.3,
            spaceBefore=spacing,
            spaceAfter=spacing,
        )
    styles["quote"] = ParagraphStyle(
        "quote",
        parent=body,
        leftIndent=size,
        textColor=colors.HexColor("#666666"),
        borderPadding=(0, 0, 0, size * 0.5),
    )
    styles["list"] = ParagraphStyle(
        "list",
        parent=body,
        leftIndent=size * 1.5,
        bulletIndent=size * 0.3,
        bulletFontName=config.font_family,
        spaceAfter=0,
    )
    styles["list_last"] = ParagraphStyle(
        "list_last", parent=styles["list"], spaceAfter=spacing
    )
    code_size = size * 0.85
    styles["code"] = ParagraphStyle(
        "code",
        parent=body,
        fontName=config.code_font,
        fontSize=code_size,
        leading=code_size * 1.4,
        backColor=colors.HexColor("#f6f8fa"),
        borderPadding=6,
        spaceBefore=spacing,
        spaceAfter=spacing + 6,
        embeddedHyphenation=0,
    )
    styles["table"] = ParagraphStyle(
        "table",
        parent=body,
        fontSize=size * 0.85,
        leading=size * 0.85 * 1.3,
        spaceAfter=0,
    )
    styles["placeholder"] = ParagraphStyle(
        "placeholder",
        parent=body,
        alignment=TA_CENTER,
        textColor=colors.HexColor("#ff4d4f"),
        spaceAfter=0,
    )
    return styles

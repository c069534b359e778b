"""Measurement oracles that report the rendered height of candidate pages."""

from __future__ import annotations

from typing import Protocol, Sequence

from ..layout_utils import measure_stack
from ..models import Block
from ..text import hyphenator
from .page_flowables import page_flowables
from .page_settings import LayoutConfig, build_styles


class MeasurementError(RuntimeError):
    """Raised when a candidate page cannot be laid out."""


class MeasurementOracle(Protocol):
    """Anything that can report the height of a run of blocks."""

    def measure(self, blocks: Sequence[Block], config: LayoutConfig) -> float:
        """Return the rendered height of ``blocks`` under ``config``."""


class ReportLabOracle:
    """Measure candidate pages by wrapping their ReportLab flowables.

    The same flowable builder feeds the PDF export, so breaks computed here
    match the drawn cards.

    Example:
        >>> oracle = ReportLabOracle()
        >>> oracle.measure([], LayoutConfig(content_width=300, max_content_height=400))
        0.0
    """

    def measure(self, blocks: Sequence[Block], config: LayoutConfig) -> float:
        """Return the stacked height of ``blocks`` at ``config.content_width``.

        Args:
            blocks: Candidate page content.
            config: Layout configuration.
        Returns:
            Height in points.
        Raises:
            MeasurementError: When a flowable cannot be built or wrapped.
        """

        dic = hyphenator(config.hyphenation_lang) if config.hyphenation_lang else None
        try:
            flowables = page_flowables(
                blocks=blocks, config=config, styles=build_styles(config), dic=dic
            )
            return measure_stack(flowables, config.content_width)
        except Exception as exc:
            raise MeasurementError(
                f"Could not measure {len(blocks)} block(s): {exc}"
            ) from exc

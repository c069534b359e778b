"""
Layout math helpers for measuring and drawing stacked flowables.
"""

from __future__ import annotations

from typing import Sequence

from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Flowable

WRAP_LIMIT = 100_000


def measure_height(flowable: Flowable, width: float) -> float:
    """Return the wrapped height for a flowable at the given width."""

    _, height = flowable.wrap(width, WRAP_LIMIT)
    return height


def measure_stack(flowables: Sequence[Flowable], width: float) -> float:
    """Return the height of flowables stacked top to bottom.

    Space before the first flowable and after the last one is dropped, the
    way a frame discards it at its edges.

    Returns:
        Total height in points.
    """

    total = 0.0
    last = len(flowables) - 1
    for idx, flowable in enumerate(flowables):
        total += measure_height(flowable, width)
        if idx > 0:
            total += flowable.getSpaceBefore()
        if idx < last:
            total += flowable.getSpaceAfter()
    return total


def draw_stack(
    canv: Canvas, flowables: Sequence[Flowable], *, x: float, top: float, width: float
) -> float:
    """Draw flowables top to bottom starting at ``top``.

    Spacing matches ``measure_stack`` so drawn content never exceeds the
    measured height.

    Returns:
        The y coordinate below the last flowable.
    """

    y = top
    last = len(flowables) - 1
    for idx, flowable in enumerate(flowables):
        if idx > 0:
            y -= flowable.getSpaceBefore()
        _, height = flowable.wrap(width, WRAP_LIMIT)
        y -= height
        flowable.drawOn(canv, x, y)
        if idx < last:
            y -= flowable.getSpaceAfter()
    return y

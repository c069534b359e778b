"""Support helpers shared by the card splitters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from ..models import Block, Page
from .page_constants import DEBUG_PAGINATION, EPSILON
from .page_filter import any_content
from .page_oracle import MeasurementOracle
from .page_settings import LayoutConfig


def _debug(*, msg: str) -> None:
    """Log pagination debug output when enabled.

    Args:
        msg: Message to print.
    Returns:
        None.
    """

    if DEBUG_PAGINATION:
        print(msg)


@dataclass(slots=True)
class PageBuffer:
    """Scratch page plus finished pages for one pagination run.

    Args:
        oracle: Measurement oracle consulted for every fit decision.
        config: Layout configuration for the run.
    """

    oracle: MeasurementOracle
    config: LayoutConfig
    current: List[Block] = field(default_factory=list)
    pages: List[Page] = field(default_factory=list)

    @property
    def budget(self) -> float:
        """Return the maximum content height of a page."""

        return self.config.max_content_height

    def is_empty(self) -> bool:
        """Return True when nothing has been placed on the current page."""

        return not self.current

    def height_of(self, blocks: Sequence[Block]) -> float:
        """Return the oracle height of ``blocks`` as a standalone page."""

        return self.oracle.measure(list(blocks), self.config)

    def fits_alone(self, blocks: Sequence[Block]) -> bool:
        """Return True when ``blocks`` fit on an otherwise empty page."""

        height = self.height_of(blocks)
        _debug(
            msg="[fit] alone blocks=%d height=%.2f budget=%.2f"
            % (len(blocks), height, self.budget)
        )
        return height <= self.budget + EPSILON

    def fits_with(self, blocks: Sequence[Block]) -> bool:
        """Return True when ``blocks`` fit after the current page content."""

        height = self.height_of([*self.current, *blocks])
        _debug(
            msg="[fit] current=%d extra=%d height=%.2f budget=%.2f"
            % (len(self.current), len(blocks), height, self.budget)
        )
        return height <= self.budget + EPSILON

    def append(self, block: Block) -> None:
        """Place ``block`` on the current page without measuring."""

        self.current.append(block)

    def flush(self) -> None:
        """Close the current page; content-free pages are discarded."""

        if any_content(self.current):
            self.pages.append(Page(blocks=tuple(self.current)))
            _debug(msg="[flush] page=%d blocks=%d" % (len(self.pages), len(self.current)))
        self.current = []

    def place(self, block: Block) -> None:
        """Append ``block`` when it fits, otherwise start a new page with it."""

        if self.is_empty() or self.fits_with([block]):
            self.append(block)
            return
        self.flush()
        self.append(block)

    def finish(self) -> List[Page]:
        """Flush the last page and return every finished page."""

        self.flush()
        return self.pages

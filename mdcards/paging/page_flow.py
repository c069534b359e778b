"""Pagination flow orchestration for sections and documents."""

from __future__ import annotations

from typing import Callable, Dict, List, Protocol, Sequence

from ..models import Block, Page
from .page_filter import drop_empty_pages
from .page_grouping import group_blocks
from .page_oracle import MeasurementOracle
from .page_sections import split_sections
from .page_settings import LayoutConfig
from .page_split_code import split_code
from .page_split_generic import split_generic
from .page_split_list import split_list
from .page_support import PageBuffer, _debug
from .page_types import GROUP_CODE, GROUP_LIST, GROUP_SINGLE, Group


class _ProgressTracker(Protocol):
    """Protocol for section pagination progress updates."""

    def update(self, n: int | float = 1) -> object:
        """Advance the progress tracker by ``n``."""


_SPLITTERS: Dict[str, Callable[..., None]] = {
    GROUP_SINGLE: split_generic,
    GROUP_CODE: split_code,
    GROUP_LIST: split_list,
}


def _dispatch(*, group: Group, buffer: PageBuffer) -> None:
    """Hand ``group`` to the splitter registered for its kind."""

    splitter = _SPLITTERS.get(group.kind, split_generic)
    splitter(group=group, buffer=buffer)


def paginate_section(
    *,
    blocks: Sequence[Block],
    config: LayoutConfig,
    oracle: MeasurementOracle,
) -> List[Page]:
    """Paginate one section greedily.

    Args:
        blocks: Blocks of the section in reading order.
        config: Layout configuration for the run.
        oracle: Measurement oracle.
    Returns:
        Pages for the section; none of them empty.
    Raises:
        MeasurementError: When the oracle fails.
    """

    buffer = PageBuffer(oracle=oracle, config=config)
    groups = group_blocks(blocks)
    _debug(
        msg="[section] groups=%d budget=%.2f"
        % (len(groups), config.max_content_height)
    )
    for group in groups:
        _dispatch(group=group, buffer=buffer)
    return buffer.finish()


def paginate_blocks(
    *,
    blocks: Sequence[Block],
    config: LayoutConfig,
    oracle: MeasurementOracle,
    use_section_split: bool = False,
    progress: _ProgressTracker | None = None,
) -> List[Page]:
    """Paginate a whole document.

    Sections never share a page. The result is identical for identical
    inputs and oracle answers.

    Args:
        blocks: Document blocks in reading order.
        config: Layout configuration for the run.
        oracle: Measurement oracle.
        use_section_split: Whether horizontal rules start new sections.
        progress: Optional progress tracker, advanced once per section.
    Returns:
        Ordered list of pages.
    Raises:
        MeasurementError: When the oracle fails; no partial result is returned.
    """

    pages: List[Page] = []
    for section in split_sections(blocks, use_section_split=use_section_split):
        pages.extend(paginate_section(blocks=section, config=config, oracle=oracle))
        if progress is not None:
            progress.update(1)
    return drop_empty_pages(pages)


def section_count(blocks: Sequence[Block], *, use_section_split: bool) -> int:
    """Return how many sections ``paginate_blocks`` will process."""

    return len(split_sections(blocks, use_section_split=use_section_split))

"""Item-granular splitting for ordered and unordered lists."""

from __future__ import annotations

from dataclasses import replace
from typing import List

from ..models import ListBlock, ListItem
from .page_filter import item_has_content
from .page_split_long_item import split_long_item
from .page_support import PageBuffer, _debug
from .page_types import Group


def _place_list(*, block: ListBlock, start: int, buffer: PageBuffer) -> None:
    """Place a list, sealing sub-lists whenever the page fills up.

    Every sealed sub-list starts at the ordinal following the previous one,
    so numbering reads continuously across cards.

    Args:
        block: List to place.
        start: Ordinal of the first item.
        buffer: Page buffer of the running pagination.
    Returns:
        None.
    """

    items = [item for item in block.items if item_has_content(item)]
    if not items:
        return

    running: List[ListItem] = []
    idx = 0
    while idx < len(items):
        candidate = replace(block, items=(*running, items[idx]), start=start)
        if buffer.fits_with([candidate]):
            running.append(items[idx])
            idx += 1
            continue
        if running:
            _debug(msg="[list] sealed items %d-%d" % (start, start + len(running) - 1))
            buffer.append(replace(block, items=tuple(running), start=start))
            buffer.flush()
            start += len(running)
            running = []
            continue
        split_long_item(item=items[idx], block=block, ordinal=start, buffer=buffer)
        start += 1
        idx += 1
    if running:
        buffer.place(replace(block, items=tuple(running), start=start))


def split_list(*, group: Group, buffer: PageBuffer) -> None:
    """Place the lists of a list group, numbering from ``group.start``."""

    for block in group.blocks:
        if isinstance(block, ListBlock):
            _place_list(block=block, start=group.start, buffer=buffer)
        else:
            buffer.place(block)

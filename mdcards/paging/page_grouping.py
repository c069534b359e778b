"""Group blocks into the units each splitter handles."""

from __future__ import annotations

from typing import List, Sequence

from ..models import Block, CodeBlock, ListBlock
from .page_filter import has_content
from .page_types import GROUP_CODE, GROUP_LIST, GROUP_SINGLE, Group


def group_blocks(blocks: Sequence[Block]) -> List[Group]:
    """Return one group per block that carries content.

    Code blocks and lists get their own group kinds so that the paginator can
    split them; every other block is a single atomic group.

    Args:
        blocks: Blocks in reading order.
    Returns:
        Groups in reading order.
    Example:
        >>> from mdcards.models import Generic, Rule
        >>> [g.kind for g in group_blocks([Generic("p", "a"), Rule()])]
        ['single']
    """

    groups: List[Group] = []
    for block in blocks:
        if not has_content(block):
            continue
        if isinstance(block, CodeBlock):
            groups.append(Group(kind=GROUP_CODE, blocks=(block,)))
        elif isinstance(block, ListBlock):
            groups.append(
                Group(
                    kind=GROUP_LIST,
                    blocks=(block,),
                    ordered=block.ordered,
                    start=block.start,
                )
            )
        else:
            groups.append(Group(kind=GROUP_SINGLE, blocks=(block,)))
    return groups

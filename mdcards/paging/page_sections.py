"""Split a block sequence into sections on horizontal rules."""

from __future__ import annotations

from typing import List, Sequence

from ..models import Block, Rule
from .page_filter import any_content


def split_sections(
    blocks: Sequence[Block], *, use_section_split: bool
) -> List[List[Block]]:
    """Return the sections paginated independently of each other.

    A rule closes the open section. Sections without content are dropped and
    the halves around a rule are never merged. When nothing survives the
    input comes back unchanged as the only section.

    Args:
        blocks: Blocks in reading order.
        use_section_split: Whether rules start a new section.
    Returns:
        List of sections, each a list of blocks.
    """

    if not use_section_split:
        return [list(blocks)]
    sections: List[List[Block]] = []
    current: List[Block] = []
    for block in blocks:
        if isinstance(block, Rule):
            if any_content(current):
                sections.append(current)
            current = []
            continue
        current.append(block)
    if any_content(current):
        sections.append(current)
    if not sections:
        return [list(blocks)]
    return sections

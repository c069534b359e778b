"""Data structures for card pagination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..models import Block, ImageRef

GROUP_SINGLE = "single"
GROUP_CODE = "code"
GROUP_LIST = "list"


@dataclass(frozen=True, slots=True)
class Group:
    """Atomic dispatch unit handed to one splitter.

    Args:
        kind: One of GROUP_SINGLE, GROUP_CODE, GROUP_LIST.
        blocks: Blocks owned by the group.
        ordered: Whether a list group is numbered.
        start: First ordinal of a list group.
    """

    kind: str
    blocks: Tuple[Block, ...]
    ordered: bool = False
    start: int = 1


@dataclass(frozen=True, slots=True)
class TextPiece:
    """Pending part of an oversized text block waiting for placement.

    Args:
        text: Remaining text; paragraphs separated by blank lines.
        ordinal: List ordinal the piece is rendered with.
        images: Images that travel with this piece.
        offset: Index of the first word of ``text`` in the source text.
    """

    text: str
    ordinal: int
    images: Tuple[ImageRef, ...] = ()
    offset: int = 0

"""
Typed containers for rendered markdown content and paginated cards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union


@dataclass(frozen=True, slots=True)
class ImageRef:
    """An embedded image reference.

    Attributes:
        src: Link text as written in the markdown source.
        alt: Alternate text.
        path: Resolved local path or URL once the image has been loaded.
        width: Intrinsic width in points (None until resolved).
        height: Intrinsic height in points (None until resolved).
        error: Placeholder message when the image could not be loaded.
    """

    src: str
    alt: str = ""
    path: str | None = None
    width: float | None = None
    height: float | None = None
    error: str | None = None

    @property
    def is_placeholder(self) -> bool:
        """Return True when the image failed to resolve."""
        return self.error is not None


@dataclass(frozen=True, slots=True)
class Heading:
    """Section heading (h1-h6)."""

    level: int
    text: str
    markup: str = ""


@dataclass(frozen=True, slots=True)
class Generic:
    """Paragraph, blockquote, table, image or any other plain block.

    Args:
        tag: Source element name, e.g. "p", "blockquote", "table".
        text: Plain text content.
        markup: ReportLab paragraph markup; derived from ``text`` when empty.
        images: Embedded images in reading order.
        rows: Table cells when ``tag`` is "table".
    """

    tag: str
    text: str
    markup: str = ""
    images: Tuple[ImageRef, ...] = ()
    rows: Tuple[Tuple[str, ...], ...] = ()


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced or indented code with its language tag."""

    language: str
    code: str


@dataclass(frozen=True, slots=True)
class ListItem:
    """A single list entry; paragraphs inside it are separated by blank lines."""

    text: str
    markup: str = ""
    images: Tuple[ImageRef, ...] = ()


@dataclass(frozen=True, slots=True)
class ListBlock:
    """Ordered or unordered list.

    Example:
        >>> block = ListBlock(ordered=True, items=(ListItem('a'), ListItem('b')), start=3)
        >>> block.numbers()
        [3, 4]
    """

    ordered: bool
    items: Tuple[ListItem, ...]
    start: int = 1

    def numbers(self) -> list[int]:
        """Return the displayed ordinal of each item."""
        return [self.start + offset for offset in range(len(self.items))]


@dataclass(frozen=True, slots=True)
class Rule:
    """Horizontal rule; acts as the section marker."""


Block = Union[Heading, Generic, CodeBlock, ListBlock, Rule]


def block_text(block: Block) -> str:
    """Return the plain text carried by a block.

    Example:
        >>> block_text(ListBlock(ordered=False, items=(ListItem('a'), ListItem('b'))))
        'a\\nb'
    """

    if isinstance(block, CodeBlock):
        return block.code
    if isinstance(block, ListBlock):
        return "\n".join(item.text for item in block.items)
    if isinstance(block, Rule):
        return ""
    return block.text


def block_images(block: Block) -> Tuple[ImageRef, ...]:
    """Return every image embedded in a block."""

    if isinstance(block, Generic):
        return block.images
    if isinstance(block, ListBlock):
        return tuple(image for item in block.items for image in item.images)
    return ()


@dataclass(frozen=True, slots=True)
class Page:
    """One card: an ordered run of independently renderable blocks."""

    blocks: Tuple[Block, ...] = field(default_factory=tuple)

    def text(self) -> str:
        """Return the plain text of the page, one block per line."""
        return "\n".join(block_text(block) for block in self.blocks)

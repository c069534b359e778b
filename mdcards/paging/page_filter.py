"""Visible-content checks and the empty page filter."""

from __future__ import annotations

from typing import Iterable, List

from ..models import (
    Block,
    CodeBlock,
    ListBlock,
    ListItem,
    Page,
    Rule,
    block_images,
    block_text,
)


def item_has_content(item: ListItem) -> bool:
    """Return True when a list item has text or an image.

    Example:
        >>> item_has_content(ListItem("  "))
        False
    """

    return bool(item.text.strip()) or bool(item.images)


def has_content(block: Block) -> bool:
    """Return True when a block would render visible text or an image.

    Example:
        >>> has_content(Rule())
        False
        >>> has_content(CodeBlock(language="py", code="\\n  \\n"))
        False
    """

    if isinstance(block, Rule):
        return False
    if isinstance(block, ListBlock):
        return any(item_has_content(item) for item in block.items)
    if isinstance(block, CodeBlock):
        return bool(block.code.strip())
    return bool(block_text(block).strip()) or bool(block_images(block))


def any_content(blocks: Iterable[Block]) -> bool:
    """Return True when at least one block has content."""

    return any(has_content(block) for block in blocks)


def drop_empty_pages(pages: Iterable[Page]) -> List[Page]:
    """Return pages that carry at least one block with content."""

    return [page for page in pages if any_content(page.blocks)]

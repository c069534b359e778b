"""
Shared fixtures for mdcards tests.
"""

import math
from typing import List, Sequence

import pytest

from mdcards.cleaning import split_paragraphs
from mdcards.models import Block, CodeBlock, Generic, Heading, ListBlock, ListItem, Rule
from mdcards.paging.page_oracle import MeasurementError
from mdcards.paging.page_settings import LayoutConfig


IMAGE_LINES = 2


class LineOracle:
    """Deterministic oracle: height is a line count times the leading.

    Text wraps at ``content_width / (font_size * 0.5)`` characters; each code
    line is one line; each image takes ``IMAGE_LINES`` lines.
    """

    def __init__(self) -> None:
        self.calls = 0

    @staticmethod
    def _text_lines(text: str, per_line: int) -> int:
        if not text.strip():
            return 0
        return sum(
            max(1, math.ceil(len(part) / per_line))
            for part in split_paragraphs(text)
            if part.strip()
        )

    def _lines(self, block: Block, per_line: int) -> int:
        if isinstance(block, Rule):
            return 0
        if isinstance(block, Heading):
            return max(1, self._text_lines(block.text, per_line))
        if isinstance(block, CodeBlock):
            return len(block.code.split("\n"))
        if isinstance(block, ListBlock):
            return sum(self._item_lines(item, per_line) for item in block.items)
        if block.rows:
            return len(block.rows)
        return self._text_lines(block.text, per_line) + IMAGE_LINES * len(block.images)

    def _item_lines(self, item: ListItem, per_line: int) -> int:
        return max(1, self._text_lines(item.text, per_line)) + IMAGE_LINES * len(item.images)

    def measure(self, blocks: Sequence[Block], config: LayoutConfig) -> float:
        self.calls += 1
        per_line = max(1, int(config.content_width / (config.font_size * 0.5)))
        lines = sum(self._lines(block, per_line) for block in blocks)
        return lines * config.leading


class FailingOracle:
    """Oracle that fails on every call."""

    def measure(self, blocks: Sequence[Block], config: LayoutConfig) -> float:
        raise MeasurementError("layout engine unavailable")


def lines_config(lines: int, *, chars_per_line: int = 20) -> LayoutConfig:
    """Return a config whose budget is ``lines`` lines of LineOracle text."""

    return LayoutConfig(
        content_width=chars_per_line * 5.0,
        max_content_height=lines * 10.0,
        font_size=10.0,
        line_height=1.0,
    )


def paragraph(text: str) -> Generic:
    return Generic(tag="p", text=text)


def items(*texts: str) -> tuple:
    return tuple(ListItem(text=text) for text in texts)


@pytest.fixture
def oracle() -> LineOracle:
    """Fresh line-counting oracle."""
    return LineOracle()


@pytest.fixture
def failing_oracle() -> FailingOracle:
    return FailingOracle()


@pytest.fixture
def sample_blocks() -> List[Block]:
    """Mixed document used by the property tests."""
    return [
        Heading(level=1, text="Title"),
        paragraph("Opening paragraph with a few words in it."),
        ListBlock(ordered=True, items=items(*[f"step {n}" for n in range(1, 8)]), start=1),
        Rule(),
        CodeBlock(language="python", code="\n".join(f"x = {n}" for n in range(12))),
        paragraph(""),
        ListBlock(ordered=False, items=items("alpha", "", "beta")),
        paragraph(" ".join(["word"] * 60)),
    ]

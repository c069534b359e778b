"""
Small, focused text cleaning utilities.
"""

import re
from typing import List
from xml.sax.saxutils import escape


_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_NON_BREAKING_SPACES = re.compile("[\u00a0\u202f]")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_LINE_SEPARATORS = re.compile("[\u2028\u2029]")


def normalize_whitespace(value: str) -> str:
    """Collapse unusual whitespace into single ASCII spaces.

    Example:
        >>> normalize_whitespace("a\\u00a0b\\u200bb")
        'a bb'
    """

    clean = _NON_BREAKING_SPACES.sub(" ", value)
    clean = _ZERO_WIDTH.sub("", clean)
    clean = _LINE_SEPARATORS.sub(" ", clean)
    clean = re.sub(r"\s+", " ", clean)
    return clean.strip()


def split_paragraphs(value: str) -> List[str]:
    """Split text on blank lines.

    Example:
        >>> split_paragraphs("a\\n\\nb")
        ['a', 'b']
    """

    return _PARAGRAPH_BREAK.split(value)


def split_words(value: str) -> List[str]:
    """Split text on any whitespace run."""

    return value.split()


def text_markup(value: str) -> str:
    """Escape plain text for a ReportLab paragraph, keeping paragraph breaks.

    Example:
        >>> text_markup("a < b\\n\\nc")
        'a &lt; b<br/><br/>c'
    """

    return "<br/><br/>".join(escape(part) for part in split_paragraphs(value))


def strip_link_suffix(value: str) -> str:
    """Drop an Obsidian-style ``|size`` or ``#anchor`` suffix from a link.

    Example:
        >>> strip_link_suffix("cat.png|300")
        'cat.png'
    """

    return value.split("|", 1)[0].split("#", 1)[0].strip()

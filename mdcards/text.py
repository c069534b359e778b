"""
Text helpers for hyphenation and fragment splitting.
"""

from __future__ import annotations

import re
from functools import lru_cache
from xml.sax.saxutils import escape

from bs4 import BeautifulSoup, NavigableString, Tag
from pyphen import Pyphen


WORD_RE = re.compile(r"[A-Za-z]{7,}")
SOFT_HYPHEN = "\u00ad"


@lru_cache(maxsize=None)
def hyphenator(lang: str) -> Pyphen:
    """Return a shared Pyphen dictionary for ``lang``."""

    return Pyphen(lang=lang)


def hyphenate_markup(markup: str, dic: Pyphen) -> str:
    """Insert soft hyphens into long words inside a paragraph markup fragment.

    Tags and attributes are left untouched; only text nodes change.

    Example:
        >>> dic = Pyphen(lang='en_US')
        >>> hyphenate_markup('<b>everlasting</b>', dic)
        '<b>ev\\xader\\xadlast\\xading</b>'
    """

    soup = BeautifulSoup(markup, "html.parser")
    for text_node in list(soup.strings):
        source = str(text_node)

        def repl(match: re.Match[str]) -> str:
            return dic.inserted(match.group(0), hyphen=SOFT_HYPHEN)

        text_node.replace_with(WORD_RE.sub(repl, source))
    return soup.decode_contents(formatter="minimal")


def _plain(node: Tag | NavigableString) -> str:
    """Return the text of a markup node with ``<br/>`` read as a newline."""

    if isinstance(node, NavigableString):
        return str(node)
    if node.name == "br":
        return "\n"
    return "".join(_plain(child) for child in node.children)


def _attrs(tag: Tag) -> str:
    parts = []
    for key, value in tag.attrs.items():
        if not isinstance(value, str):
            value = " ".join(value)
        parts.append(' %s="%s"' % (key, escape(value, {'"': "&quot;"})))
    return "".join(parts)


def slice_markup(markup: str, *, start: int, stop: int, total: int) -> str:
    """Return the part of paragraph markup holding words ``start`` to ``stop``.

    Words are whitespace-separated runs over all text nodes, so a word may
    span several tags. Tags enclosing kept text are preserved; line breaks
    are kept only between kept words.

    Args:
        markup: ReportLab paragraph markup.
        start: Index of the first word to keep.
        stop: Index one past the last word to keep.
        total: Word count the markup is expected to hold.
    Returns:
        The sliced markup, or an empty string when the markup does not hold
        exactly ``total`` words or the range is empty.
    Example:
        >>> slice_markup('<b>one two</b> three', start=1, stop=3, total=3)
        '<b>two</b> three'
    """

    soup = BeautifulSoup(markup, "html.parser")
    spans = [match.span() for match in re.finditer(r"\S+", _plain(soup))]
    if len(spans) != total or not 0 <= start < stop <= total:
        return ""
    low, high = spans[start][0], spans[stop - 1][1]
    pos = 0

    def render(node: Tag | NavigableString) -> str:
        nonlocal pos
        if isinstance(node, NavigableString):
            value = str(node)
            begin = pos
            pos += len(value)
            return escape(value[max(low - begin, 0):max(high - begin, 0)])
        if node.name == "br":
            at = pos
            pos += 1
            return "<br/>" if low < at < high else ""
        inner = "".join(render(child) for child in node.children)
        if not inner:
            return ""
        return f"<{node.name}{_attrs(node)}>{inner}</{node.name}>"

    return "".join(render(child) for child in soup.children)

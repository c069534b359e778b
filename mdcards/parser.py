"""
Parsing helpers that convert markdown text into typed card blocks.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Tuple
from xml.sax.saxutils import escape

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from markdown_it import MarkdownIt

from .cleaning import normalize_whitespace, strip_link_suffix
from .models import (
    Block,
    CodeBlock,
    Generic,
    Heading,
    ImageRef,
    ListBlock,
    ListItem,
    Rule,
)


_EMBED_RE = re.compile(r"!\[\[([^\]\n]+)\]\]")
_HEADINGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_PARAGRAPH_TAGS = {"p", "div", "pre", "blockquote", "ul", "ol", "table", "hr"} | _HEADINGS
_INLINE_CODE_FONT = "Courier"
_SIMPLE_INLINE = {
    "em": "i",
    "i": "i",
    "strong": "b",
    "b": "b",
    "del": "strike",
    "s": "strike",
    "u": "u",
    "sup": "super",
    "sub": "sub",
}


@lru_cache(maxsize=1)
def _markdown_parser() -> MarkdownIt:
    """Return the shared CommonMark parser with tables and strikethrough."""

    md = MarkdownIt("commonmark", {"html": True})
    md.enable(["table", "strikethrough"])
    return md


def rewrite_embeds(markdown: str) -> str:
    """Rewrite ``![[name|size]]`` embeds into standard image syntax.

    Example:
        >>> rewrite_embeds("see ![[cat.png|300]]")
        'see ![cat.png](<cat.png>)'
    """

    def repl(match: re.Match[str]) -> str:
        link = strip_link_suffix(match.group(1))
        return f"![{link}](<{link}>)"

    return _EMBED_RE.sub(repl, markdown)


def _inline_markup(fragment: Tag | NavigableString) -> str:
    """Convert a BeautifulSoup fragment into ReportLab-friendly markup."""

    if isinstance(fragment, NavigableString):
        return escape(re.sub(r"\s+", " ", str(fragment)))

    if fragment.name in _SIMPLE_INLINE:
        tag = _SIMPLE_INLINE[fragment.name]
        inner = "".join(_inline_markup(child) for child in fragment.children)
        return f"<{tag}>{inner}</{tag}>"

    if fragment.name == "code":
        inner = escape(fragment.get_text())
        return f'<font face="{_INLINE_CODE_FONT}">{inner}</font>'

    if fragment.name == "a":
        href = escape(fragment.get("href", ""), {'"': "&quot;"})
        inner = "".join(_inline_markup(child) for child in fragment.children)
        if not href:
            return inner
        return f'<a href="{href}" color="#1a73e8">{inner}</a>'

    if fragment.name == "br":
        return "<br/>"

    if fragment.name == "img":
        return ""

    return "".join(_inline_markup(child) for child in fragment.children)


def _inline_pair(nodes: List[Tag | NavigableString]) -> Tuple[str, str]:
    """Return (text, markup) for a run of inline nodes."""

    raw = "".join(
        node.get_text() if isinstance(node, Tag) else str(node) for node in nodes
    )
    text = normalize_whitespace(raw)
    markup = "".join(_inline_markup(node) for node in nodes).strip()
    markup = re.sub(r"^(<br/>)+|(<br/>)+$", "", markup)
    return text, markup


def _images(tag: Tag) -> Tuple[ImageRef, ...]:
    """Return every image below ``tag`` in reading order."""

    found = [tag] if tag.name == "img" else tag.find_all("img")
    return tuple(
        ImageRef(src=str(img.get("src", "")).strip(), alt=str(img.get("alt", "")))
        for img in found
    )


def _paragraphs(tag: Tag) -> List[Tuple[str, str]]:
    """Split the content of a container element into (text, markup) paragraphs.

    Consecutive inline nodes form one paragraph; block children each give
    their own, nested lists one per item.
    """

    parts: List[Tuple[str, str]] = []
    inline: List[Tag | NavigableString] = []

    def flush_inline() -> None:
        if inline:
            parts.append(_inline_pair(inline))
            inline.clear()

    for child in tag.children:
        if isinstance(child, Tag) and child.name in _PARAGRAPH_TAGS:
            flush_inline()
            if child.name in {"ul", "ol"}:
                for li in child.find_all("li", recursive=False):
                    parts.extend(_paragraphs(li))
            elif child.name == "pre":
                code = child.get_text().rstrip("\n")
                markup = f'<font face="{_INLINE_CODE_FONT}">{escape(code)}</font>'
                parts.append((code, markup))
            elif child.name in {"div", "blockquote"}:
                parts.extend(_paragraphs(child))
            elif child.name != "hr":
                parts.append(_inline_pair([child]))
            continue
        inline.append(child)
    flush_inline()
    return [(text, markup) for text, markup in parts if text]


def _joined(parts: List[Tuple[str, str]]) -> Tuple[str, str]:
    """Join paragraphs with blank lines and ReportLab breaks."""

    text = "\n\n".join(text for text, _ in parts)
    markup = "<br/><br/>".join(markup for _, markup in parts)
    return text, markup


def _list_start(tag: Tag) -> int:
    """Return the ``start`` attribute of an ordered list, 1 when missing or bad."""

    try:
        return int(tag.get("start", 1))
    except (TypeError, ValueError):
        return 1


def _code_block(tag: Tag) -> CodeBlock:
    """Build a CodeBlock from a ``pre`` element."""

    code = tag.find("code") or tag
    language = ""
    for cls in code.get("class", []) or []:
        if cls.startswith("language-"):
            language = cls[len("language-"):]
            break
    return CodeBlock(language=language, code=code.get_text().rstrip("\n"))


def _list_block(tag: Tag) -> ListBlock | None:
    """Build a ListBlock from ``ul``/``ol``; None for lists without items."""

    items: List[ListItem] = []
    for li in tag.find_all("li", recursive=False):
        text, markup = _joined(_paragraphs(li))
        items.append(ListItem(text=text, markup=markup, images=_images(li)))
    if not items:
        return None
    ordered = tag.name == "ol"
    start = _list_start(tag) if ordered else 1
    return ListBlock(ordered=ordered, items=tuple(items), start=start)


def _table_block(tag: Tag) -> Generic:
    """Build a table Generic with its cell text."""

    rows = tuple(
        tuple(normalize_whitespace(cell.get_text()) for cell in tr.find_all(["th", "td"]))
        for tr in tag.find_all("tr")
    )
    rows = tuple(row for row in rows if row)
    text = "\n".join(" | ".join(row) for row in rows)
    return Generic(tag="table", text=text, rows=rows)


def _element_blocks(node: Tag | NavigableString) -> List[Block]:
    """Convert one top-level element into blocks."""

    if isinstance(node, Comment):
        return []
    if isinstance(node, NavigableString):
        text = normalize_whitespace(str(node))
        return [Generic(tag="p", text=text, markup=escape(text))] if text else []

    name = node.name
    if name in _HEADINGS:
        text, markup = _inline_pair([node])
        return [Heading(level=int(name[1]), text=text, markup=markup)]
    if name == "hr":
        return [Rule()]
    if name == "pre":
        return [_code_block(node)]
    if name in {"ul", "ol"}:
        block = _list_block(node)
        return [block] if block is not None else []
    if name == "table":
        return [_table_block(node)]
    if name == "div" and not node.find("img"):
        blocks: List[Block] = []
        for child in node.children:
            blocks.extend(_element_blocks(child))
        return blocks
    if name in {"blockquote", "div"}:
        text, markup = _joined(_paragraphs(node))
        return [Generic(tag=name, text=text, markup=markup, images=_images(node))]
    text, markup = _inline_pair([node])
    tag = "p" if name in {"p", "img"} else name
    return [Generic(tag=tag, text=text, markup=markup, images=_images(node))]


def parse_markdown(markdown: str) -> List[Block]:
    """Parse markdown into card blocks in reading order.

    Images come back unresolved; see ``mdcards.images.resolve_images``.

    Args:
        markdown: Markdown source text.
    Returns:
        List of blocks, possibly empty.
    Raises:
        TypeError: When ``markdown`` is not a string.
    Example:
        >>> [type(b).__name__ for b in parse_markdown("# T\\n\\nbody\\n\\n---")]
        ['Heading', 'Generic', 'Rule']
    """

    if not isinstance(markdown, str):
        raise TypeError(f"markdown must be str, not {type(markdown).__name__}")
    html = _markdown_parser().render(rewrite_embeds(markdown))
    soup = BeautifulSoup(html, "html.parser")
    blocks: List[Block] = []
    for node in soup.children:
        blocks.extend(_element_blocks(node))
    return blocks

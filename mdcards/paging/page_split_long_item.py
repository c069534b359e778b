"""Split oversized text at paragraph, then word, granularity."""

from __future__ import annotations

from collections import deque
from dataclasses import replace
from typing import Callable, Deque, List, Tuple

from ..cleaning import split_paragraphs, split_words
from ..models import Block, ListBlock, ListItem
from ..text import slice_markup
from .page_support import PageBuffer, _debug
from .page_types import TextPiece

MakeBlock = Callable[[TextPiece], Block]


def fragment_markup(*, text: str, markup: str, piece: TextPiece) -> str:
    """Return the part of ``markup`` covering the words of ``piece``.

    Empty when the block has no markup of its own or the markup words do not
    line up with ``text``; the fragment is then drawn from its plain text.
    """

    if piece.text == text or not markup:
        return markup
    count = len(split_words(piece.text))
    return slice_markup(
        markup,
        start=piece.offset,
        stop=piece.offset + count,
        total=len(split_words(text)),
    )


def _longest_prefix(*, count: int, fits: Callable[[int], bool]) -> int:
    """Return the largest ``n <= count`` with ``fits(n)``, or 0.

    Assumes that a prefix which fits implies every shorter prefix fits.
    """

    low, high = 0, count
    while low < high:
        mid = (low + high + 1) // 2
        if fits(mid):
            low = mid
        else:
            high = mid - 1
    return low


def _fit_prefix(
    *, piece: TextPiece, make_block: MakeBlock, buffer: PageBuffer
) -> Tuple[TextPiece, TextPiece | None]:
    """Cut ``piece`` into the longest head that fits a fresh page and a tail.

    Paragraphs are tried first; when not even the first paragraph fits, its
    words are used instead. At least one word always goes into the head.

    Returns:
        Tuple of (head, tail); tail is None when nothing is left.
    """

    paragraphs = [part for part in split_paragraphs(piece.text) if part.strip()]

    def head_piece(text: str) -> TextPiece:
        return TextPiece(
            text=text, ordinal=piece.ordinal, images=piece.images, offset=piece.offset
        )

    def tail_piece(parts: List[str], head: TextPiece) -> TextPiece:
        return TextPiece(
            text="\n\n".join(parts),
            ordinal=piece.ordinal + 1,
            offset=piece.offset + len(split_words(head.text)),
        )

    def paragraphs_fit(count: int) -> bool:
        text = "\n\n".join(paragraphs[:count])
        return buffer.fits_alone([make_block(head_piece(text))])

    count = _longest_prefix(count=len(paragraphs), fits=paragraphs_fit)
    if count > 0:
        rest = paragraphs[count:]
        _debug(
            msg="[long] ordinal=%d paragraphs=%d/%d"
            % (piece.ordinal, count, len(paragraphs))
        )
        head = head_piece("\n\n".join(paragraphs[:count]))
        if not rest:
            return head, None
        return head, tail_piece(rest, head)

    words = split_words(paragraphs[0]) if paragraphs else []

    def words_fit(count: int) -> bool:
        return buffer.fits_alone([make_block(head_piece(" ".join(words[:count])))])

    count = max(1, _longest_prefix(count=len(words), fits=words_fit))
    _debug(msg="[long] ordinal=%d words=%d/%d" % (piece.ordinal, count, len(words)))
    remainder: List[str] = []
    if words[count:]:
        remainder.append(" ".join(words[count:]))
    remainder.extend(paragraphs[1:])
    head = head_piece(" ".join(words[:count]))
    if not remainder:
        return head, None
    return head, tail_piece(remainder, head)


def split_long_text(
    *, piece: TextPiece, make_block: MakeBlock, buffer: PageBuffer
) -> None:
    """Place a text piece that does not fit after the current page content.

    The current page is flushed first. Each fragment that fills a page is
    sealed and flushed; the remainder continues on a fresh page with the next
    ordinal and without the images, which ride with the first fragment. The
    last fragment stays on the open page so later content can share it.

    Args:
        piece: Text to place.
        make_block: Builds the block rendered for a fragment.
        buffer: Page buffer of the running pagination.
    Returns:
        None.
    """

    buffer.flush()
    pending: Deque[TextPiece] = deque([piece])
    while pending:
        current = pending.popleft()
        block = make_block(current)
        if buffer.fits_alone([block]):
            buffer.append(block)
            continue
        head, tail = _fit_prefix(piece=current, make_block=make_block, buffer=buffer)
        buffer.append(make_block(head))
        buffer.flush()
        if tail is not None:
            pending.append(tail)


def split_long_item(
    *, item: ListItem, block: ListBlock, ordinal: int, buffer: PageBuffer
) -> None:
    """Place one list item too tall for a page as numbered fragments.

    Each fragment is a one-item list starting at its own ordinal.

    Args:
        item: Oversized list item.
        block: List the item belongs to.
        ordinal: Displayed number of the item.
        buffer: Page buffer of the running pagination.
    Returns:
        None.
    """

    def make_block(piece: TextPiece) -> Block:
        markup = fragment_markup(text=item.text, markup=item.markup, piece=piece)
        fragment = ListItem(text=piece.text, markup=markup, images=piece.images)
        return replace(block, items=(fragment,), start=piece.ordinal)

    _debug(msg="[list] long item ordinal=%d" % ordinal)
    split_long_text(
        piece=TextPiece(text=item.text, ordinal=ordinal, images=item.images),
        make_block=make_block,
        buffer=buffer,
    )

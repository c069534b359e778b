"""Fit-or-flush placement for headings, paragraphs and other atoms."""

from __future__ import annotations

from dataclasses import replace

from ..cleaning import split_words
from ..models import Block, Generic
from .page_split_long_item import fragment_markup, split_long_text
from .page_support import PageBuffer, _debug
from .page_types import Group, TextPiece


def _is_splittable(block: Block) -> bool:
    """Return True for plain multi-word paragraphs without images."""

    return (
        isinstance(block, Generic)
        and block.tag == "p"
        and not block.images
        and len(split_words(block.text)) > 1
    )


def _split_paragraph(*, block: Generic, buffer: PageBuffer) -> None:
    """Spread a paragraph taller than a page over several pages."""

    def make_block(piece: TextPiece) -> Block:
        markup = fragment_markup(text=block.text, markup=block.markup, piece=piece)
        return replace(block, text=piece.text, markup=markup)

    _debug(msg="[generic] splitting paragraph words=%d" % len(split_words(block.text)))
    split_long_text(
        piece=TextPiece(text=block.text, ordinal=1),
        make_block=make_block,
        buffer=buffer,
    )


def _place_block(*, block: Block, buffer: PageBuffer) -> None:
    """Place one block, giving it a page of its own when it is oversized."""

    if not buffer.fits_alone([block]):
        if _is_splittable(block):
            _split_paragraph(block=block, buffer=buffer)
            return
        _debug(msg="[generic] oversized %s placed alone" % type(block).__name__)
        buffer.flush()
        buffer.append(block)
        return
    buffer.place(block)


def split_generic(*, group: Group, buffer: PageBuffer) -> None:
    """Place every block of a single group by fit-or-flush.

    Args:
        group: Group of kind single.
        buffer: Page buffer of the running pagination.
    Returns:
        None.
    """

    for block in group.blocks:
        _place_block(block=block, buffer=buffer)

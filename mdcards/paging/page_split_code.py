"""Line-granular splitting for code blocks."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from ..models import CodeBlock
from .page_support import PageBuffer, _debug
from .page_types import Group


def _fragment(*, block: CodeBlock, lines: Sequence[str]) -> CodeBlock:
    """Return a code block holding ``lines`` with the original language."""

    return replace(block, code="\n".join(lines))


def _place_code(*, block: CodeBlock, buffer: PageBuffer) -> None:
    """Place a code block whole when possible, else line by line.

    Args:
        block: Code block to place.
        buffer: Page buffer of the running pagination.
    Returns:
        None.
    """

    if buffer.fits_with([block]):
        buffer.append(block)
        return
    if buffer.fits_alone([block]):
        buffer.flush()
        buffer.append(block)
        return

    lines = [line for line in block.code.splitlines() if line.strip()]
    pending: List[str] = []
    idx = 0
    while idx < len(lines):
        candidate = _fragment(block=block, lines=[*pending, lines[idx]])
        if buffer.fits_with([candidate]):
            pending.append(lines[idx])
            idx += 1
            continue
        if pending:
            _debug(msg="[code] sealed %d line(s) at line %d" % (len(pending), idx))
            buffer.append(_fragment(block=block, lines=pending))
            buffer.flush()
            pending = []
            continue
        if not buffer.is_empty():
            buffer.flush()
            continue
        _debug(msg="[code] oversized line %d placed alone" % idx)
        buffer.append(_fragment(block=block, lines=[lines[idx]]))
        buffer.flush()
        idx += 1
    if pending:
        buffer.place(_fragment(block=block, lines=pending))


def split_code(*, group: Group, buffer: PageBuffer) -> None:
    """Place the code blocks of a code group."""

    for block in group.blocks:
        if isinstance(block, CodeBlock):
            _place_code(block=block, buffer=buffer)
        else:
            buffer.place(block)

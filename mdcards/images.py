"""
Resolve embedded image references before pagination.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Sequence

from reportlab.lib.utils import ImageReader

from .cleaning import strip_link_suffix
from .models import Block, Generic, ImageRef, ListBlock, block_images
from .paging.page_constants import IMAGE_EXTENSIONS


@dataclass(frozen=True, slots=True)
class _Loaded:
    """Outcome of loading one image source."""

    path: str | None = None
    width: float | None = None
    height: float | None = None
    error: str | None = None


def normalize_link(link: str) -> str:
    """Drop ``.`` segments and fold ``..`` into the preceding segment.

    Example:
        >>> normalize_link("./assets/../img/cat.png")
        'img/cat.png'
        >>> normalize_link("../cat.png")
        '../cat.png'
    """

    cleaned: List[str] = []
    for part in link.split("/"):
        if not part or part == ".":
            continue
        if part == ".." and cleaned and cleaned[-1] != "..":
            cleaned.pop()
        else:
            cleaned.append(part)
    return "/".join(cleaned) or link


def _is_remote(link: str) -> bool:
    return link.startswith(("http://", "https://"))


def candidate_paths(link: str, *, base_dir: Path) -> List[str]:
    """Return the local paths or URL worth trying for ``link``.

    Names without an extension are tried with the common image extensions.
    """

    link = strip_link_suffix(link)
    if not link:
        return []
    if _is_remote(link):
        return [link]
    raw = Path(link)
    path = raw if raw.is_absolute() else base_dir / normalize_link(link)
    if path.suffix:
        return [str(path)]
    return [str(path.with_name(path.name + ext)) for ext in IMAGE_EXTENSIONS]


def _image_size(path: str) -> tuple[float, float]:
    """Read intrinsic image size with ReportLab (blocking)."""

    width, height = ImageReader(path).getSize()
    return float(width), float(height)


async def _load(link: str, *, base_dir: Path) -> _Loaded:
    """Load one image source, falling back to a placeholder outcome."""

    for candidate in candidate_paths(link, base_dir=base_dir):
        if not _is_remote(candidate) and not Path(candidate).is_file():
            continue
        try:
            width, height = await asyncio.to_thread(_image_size, candidate)
        except (OSError, ValueError):
            continue
        return _Loaded(path=candidate, width=width, height=height)
    return _Loaded(error=f"Image not found: {strip_link_suffix(link) or link}")


def _apply(image: ImageRef, loaded: Dict[str, _Loaded]) -> ImageRef:
    outcome = loaded[image.src]
    return replace(
        image,
        path=outcome.path,
        width=outcome.width,
        height=outcome.height,
        error=outcome.error,
    )


def _with_images(block: Block, loaded: Dict[str, _Loaded]) -> Block:
    """Return ``block`` with every image replaced by its resolved value."""

    if isinstance(block, Generic) and block.images:
        return replace(block, images=tuple(_apply(img, loaded) for img in block.images))
    if isinstance(block, ListBlock) and block_images(block):
        items = tuple(
            replace(item, images=tuple(_apply(img, loaded) for img in item.images))
            for item in block.items
        )
        return replace(block, items=items)
    return block


async def resolve_images(blocks: Sequence[Block], *, base_dir: Path) -> List[Block]:
    """Load every embedded image concurrently and return updated blocks.

    Each distinct source is loaded once in a worker thread. Sources that
    cannot be loaded become placeholders reading "Image not found: <link>".

    Args:
        blocks: Parsed blocks.
        base_dir: Directory relative links are resolved against.
    Returns:
        New list of blocks; the input is left untouched.
    """

    sources = list(
        dict.fromkeys(img.src for block in blocks for img in block_images(block))
    )
    if not sources:
        return list(blocks)
    outcomes = await asyncio.gather(*(_load(src, base_dir=base_dir) for src in sources))
    loaded = dict(zip(sources, outcomes))
    return [_with_images(block, loaded) for block in blocks]


def load_images(blocks: Sequence[Block], *, base_dir: Path) -> List[Block]:
    """Synchronous wrapper around ``resolve_images``."""

    return asyncio.run(resolve_images(blocks, base_dir=base_dir))

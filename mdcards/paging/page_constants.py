"""Shared constants for card layout and pagination."""

from __future__ import annotations

import os

EPSILON = 1e-4
PLACEHOLDER_HEIGHT = 100.0
IMAGE_MARGIN = 10.0
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp")
DEBUG_PAGINATION = os.getenv("DEBUG_PAGINATION", "0") not in {
    "",
    "0",
    "false",
    "False",
}

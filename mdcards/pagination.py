"""Public pagination helpers for card output."""

from __future__ import annotations

from .paging.page_flow import paginate_blocks, paginate_section, section_count
from .paging.page_grouping import group_blocks
from .paging.page_oracle import MeasurementError, MeasurementOracle, ReportLabOracle
from .paging.page_sections import split_sections
from .paging.page_settings import LayoutConfig, PageSettings

__all__ = [
    "LayoutConfig",
    "MeasurementError",
    "MeasurementOracle",
    "PageSettings",
    "ReportLabOracle",
    "group_blocks",
    "paginate_blocks",
    "paginate_section",
    "section_count",
    "split_sections",
]

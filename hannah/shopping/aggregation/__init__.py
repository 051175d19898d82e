"""Scanning, aggregation, categorization and grouping of board ingredients."""

from .aggregator import AggregatedItem, aggregate, item_key
from .categories import (
    CATEGORY_ORDER,
    DEFAULT_CATEGORY_KEYWORDS,
    DEFAULT_TAG_CATEGORIES,
    detect_category,
    canonical_category,
    merge_keywords,
    merge_tags,
)
from .grouping import GroupedList, format_count, format_quantity, group_by_category
from .scanner import scan_board

__all__ = [
    "AggregatedItem",
    "aggregate",
    "item_key",
    "CATEGORY_ORDER",
    "DEFAULT_CATEGORY_KEYWORDS",
    "DEFAULT_TAG_CATEGORIES",
    "detect_category",
    "canonical_category",
    "merge_keywords",
    "merge_tags",
    "GroupedList",
    "format_count",
    "format_quantity",
    "group_by_category",
    "scan_board",
]

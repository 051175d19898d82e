"""Merge food records into shopping list items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from ..board.models import FoodRecord
from .categories import detect_category

Categorizer = Callable[[str, "str | None"], str]


@dataclass
class AggregatedItem:
    key: str
    name: str  # display name of the first record seen
    quantity: float
    unit: str
    category: str


def item_key(name: str, unit: str) -> str:
    """Identity used for merging: case-insensitive name plus exact unit."""
    return f"{name.lower()}_{unit}"


def aggregate(
    records: Iterable[FoodRecord],
    *,
    categorizer: Categorizer = detect_category,
) -> dict[str, AggregatedItem]:
    """Sum quantities of records sharing a name and unit.

    Units are never converted: "200 g chicken" and "1 serving chicken"
    stay separate. The result is keyed by :func:`item_key` in first-seen
    order and is rebuilt from scratch on every call.
    """
    items: dict[str, AggregatedItem] = {}
    for record in records:
        key = item_key(record.name, record.unit)
        existing = items.get(key)
        if existing is not None:
            existing.quantity += record.quantity
            continue
        items[key] = AggregatedItem(
            key=key,
            name=record.name,
            quantity=record.quantity,
            unit=record.unit,
            category=categorizer(record.name, record.source_category),
        )
    return items

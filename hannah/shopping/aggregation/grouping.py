"""Group aggregated items by category for display."""

from __future__ import annotations

import locale
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .aggregator import AggregatedItem
from .categories import CATEGORY_ORDER, OTHER


def format_quantity(quantity: float, unit: str) -> str:
    """Format a summed quantity with a naively pluralized unit.

    Whole numbers print without decimals, anything else with one
    decimal. The unit gets a trailing ``s`` when the quantity is above
    one: ``"1 cup"``, ``"2 cups"``, ``"1.5 cups"``.
    """
    suffix = "s" if quantity > 1 else ""
    if quantity % 1 == 0:
        return f"{int(quantity)} {unit}{suffix}"
    return f"{quantity:.1f} {unit}{suffix}"


def format_count(count: int) -> str:
    return f"{count} item{'' if count == 1 else 's'}"


def _sort_key(item: AggregatedItem) -> tuple[str, str]:
    # Collation follows LC_COLLATE; the CLI sets it from the environment.
    # Under the default "C" locale this is code-point order of the casefolded name.
    return (locale.strxfrm(item.name.casefold()), item.name)


@dataclass
class GroupedList:
    """Category → sorted items, iterated in aisle order.

    Only non-empty categories are present.
    """

    groups: dict[str, list[AggregatedItem]] = field(default_factory=dict)

    def __iter__(self) -> Iterator[tuple[str, list[AggregatedItem]]]:
        return iter(self.groups.items())

    def __len__(self) -> int:
        return len(self.groups)

    def __getitem__(self, category: str) -> list[AggregatedItem]:
        return self.groups[category]

    def categories(self) -> list[str]:
        return list(self.groups)

    @property
    def item_count(self) -> int:
        return sum(len(items) for items in self.groups.values())

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def to_dict(self) -> dict[str, list[dict]]:
        return {
            category: [
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "unit": item.unit,
                    "display": format_quantity(item.quantity, item.unit),
                }
                for item in items
            ]
            for category, items in self.groups.items()
        }


def group_by_category(items: Iterable[AggregatedItem]) -> GroupedList:
    """Partition items by category in :data:`CATEGORY_ORDER`, names sorted.

    Items carrying a category outside the closed set are listed under
    ``Other``.
    """
    buckets: dict[str, list[AggregatedItem]] = {}
    for item in items:
        category = item.category if item.category in CATEGORY_ORDER else OTHER
        buckets.setdefault(category, []).append(item)

    groups: dict[str, list[AggregatedItem]] = {}
    for category in CATEGORY_ORDER:
        if category in buckets:
            groups[category] = sorted(buckets[category], key=_sort_key)
    return GroupedList(groups)

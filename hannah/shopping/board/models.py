"""Weekly meal board: days, meal slots, food modules and recipe containers."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from typing import Iterator, Union

from ..errors import BoardLookupError
from .signals import ChangeSignal

DEFAULT_DAYS: list[str] = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

# (name, time) of the slots every new day column starts with
DEFAULT_MEALS: list[tuple[str, str]] = [
    ("Breakfast", "8:00 AM"),
    ("Morning Snack", "10:00 AM"),
    ("Lunch", "12:30 PM"),
    ("Afternoon Snack", "3:00 PM"),
    ("Dinner", "6:30 PM"),
    ("Evening Snack", "8:00 PM"),
]

# Alternative words a meal slot may be labelled with
_MEAL_ALIASES: dict[str, str] = {
    "breakfast": "morning",
    "lunch": "noon",
    "dinner": "evening",
}

_ids = itertools.count(1)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{next(_ids)}"


@dataclass(frozen=True)
class FoodRecord:
    """One placed ingredient as read by the shopping list."""

    name: str
    quantity: float
    unit: str
    source_category: str | None = None  # "protein", "dairy", "veg", ...


@dataclass
class FoodModule:
    record: FoodRecord
    module_id: str = field(default_factory=lambda: _new_id("module"))


@dataclass
class RecipeContainer:
    name: str
    modules: list[FoodModule] = field(default_factory=list)
    recipe_id: str = field(default_factory=lambda: _new_id("recipe"))


MealItem = Union[FoodModule, RecipeContainer]


@dataclass
class Meal:
    name: str
    time: str = ""
    items: list[MealItem] = field(default_factory=list)

    def modules(self) -> Iterator[FoodModule]:
        """Yield every food module in this meal, recipe contents included."""
        for item in self.items:
            if isinstance(item, RecipeContainer):
                yield from item.modules
            else:
                yield item

    def matches(self, name: str) -> bool:
        wanted = _normalize_meal_name(name)
        current = _normalize_meal_name(self.name)
        if wanted in current:
            return True
        alias = _MEAL_ALIASES.get(wanted)
        return alias is not None and alias in current


@dataclass
class DayColumn:
    day: str
    meals: list[Meal] = field(default_factory=list)

    @classmethod
    def with_default_meals(cls, day: str) -> DayColumn:
        return cls(day=day, meals=[Meal(name=n, time=t) for n, t in DEFAULT_MEALS])


def _normalize_meal_name(name: str) -> str:
    return name.lower().replace("-", " ").replace("_", " ").strip()


class Board:
    """The planner board and the only place its contents are mutated.

    Every public mutation emits :attr:`changed` exactly once, after the
    change has been applied.
    """

    def __init__(self, days: list[DayColumn] | None = None) -> None:
        if days is None:
            days = [DayColumn.with_default_meals(d) for d in DEFAULT_DAYS]
        self.days: list[DayColumn] = days
        self.changed = ChangeSignal()

    # -- lookup -------------------------------------------------------

    def day(self, day: str) -> DayColumn:
        for column in self.days:
            if column.day.lower() == day.lower():
                return column
        raise BoardLookupError(f"Day column not found: {day}")

    def meal(self, day: str, meal: str) -> Meal:
        column = self.day(day)
        for slot in column.meals:
            if slot.matches(meal):
                return slot
        raise BoardLookupError(f"Meal not found: {day} / {meal}")

    def modules(self) -> Iterator[FoodModule]:
        for column in self.days:
            for meal in column.meals:
                yield from meal.modules()

    def find_module(self, module_id: str) -> FoodModule:
        for module in self.modules():
            if module.module_id == module_id:
                return module
        raise BoardLookupError(f"Food module not found: {module_id}")

    # -- mutation -----------------------------------------------------

    def add_food(self, day: str, meal: str, record: FoodRecord) -> str:
        """Place a food record into a meal slot and return its module id."""
        module = FoodModule(record=record)
        self.meal(day, meal).items.append(module)
        self.changed.emit()
        return module.module_id

    def add_recipe(
        self, day: str, meal: str, name: str, records: list[FoodRecord]
    ) -> str:
        """Place a named recipe with its ingredients and return its id."""
        recipe = RecipeContainer(
            name=name, modules=[FoodModule(record=r) for r in records]
        )
        self.meal(day, meal).items.append(recipe)
        self.changed.emit()
        return recipe.recipe_id

    def remove_module(self, module_id: str) -> None:
        for column in self.days:
            for meal in column.meals:
                for item in meal.items:
                    if isinstance(item, FoodModule) and item.module_id == module_id:
                        meal.items.remove(item)
                        self.changed.emit()
                        return
                    if isinstance(item, RecipeContainer):
                        for module in item.modules:
                            if module.module_id == module_id:
                                item.modules.remove(module)
                                self.changed.emit()
                                return
        raise BoardLookupError(f"Food module not found: {module_id}")

    def remove_recipe(self, recipe_id: str) -> None:
        for column in self.days:
            for meal in column.meals:
                for item in meal.items:
                    if isinstance(item, RecipeContainer) and item.recipe_id == recipe_id:
                        meal.items.remove(item)
                        self.changed.emit()
                        return
        raise BoardLookupError(f"Recipe not found: {recipe_id}")

    def update_quantity(self, module_id: str, quantity: float) -> None:
        module = self.find_module(module_id)
        module.record = replace(module.record, quantity=quantity)
        self.changed.emit()

    def update_unit(self, module_id: str, unit: str) -> None:
        module = self.find_module(module_id)
        module.record = replace(module.record, unit=unit)
        self.changed.emit()

    def clear_meal(self, day: str, meal: str) -> int:
        """Remove everything from a meal slot. Returns the number of items removed."""
        slot = self.meal(day, meal)
        removed = len(slot.items)
        slot.items.clear()
        self.changed.emit()
        return removed

    def clear_day(self, day: str) -> int:
        """Empty every meal slot of a day. Returns the number of items removed."""
        column = self.day(day)
        removed = 0
        for slot in column.meals:
            removed += len(slot.items)
            slot.items.clear()
        self.changed.emit()
        return removed

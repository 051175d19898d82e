"""JSON (de)serialization of the meal board."""

from __future__ import annotations

import json
from pathlib import Path

from .models import Board, DayColumn, FoodModule, FoodRecord, Meal, RecipeContainer


def _parse_quantity(value) -> float:
    """Read a quantity the lenient way the planner UI does.

    Missing or empty values count as 1. Anything that is not a number
    becomes NaN so the scanner can skip the record.
    """
    if value is None or value == "":
        return 1.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def record_from_dict(data: dict) -> FoodRecord:
    name = data.get("name") or data.get("food") or ""
    category = data.get("category")
    if not isinstance(category, str) or not category.strip():
        category = None
    return FoodRecord(
        name=str(name),
        quantity=_parse_quantity(data.get("quantity")),
        unit=str(data.get("unit") or "unit"),
        source_category=category,
    )


def record_to_dict(record: FoodRecord) -> dict:
    data = {
        "type": "food",
        "name": record.name,
        "quantity": record.quantity,
        "unit": record.unit,
    }
    if record.source_category:
        data["category"] = record.source_category
    return data


def board_from_dict(data: dict) -> Board:
    """Build a :class:`Board` from its JSON representation."""
    days: list[DayColumn] = []
    for day_data in data.get("days", []):
        meals: list[Meal] = []
        for meal_data in day_data.get("meals", []):
            items = []
            for item in meal_data.get("items", []):
                if item.get("type") == "recipe":
                    items.append(
                        RecipeContainer(
                            name=item.get("name", ""),
                            modules=[
                                FoodModule(record=record_from_dict(i))
                                for i in item.get("items", [])
                            ],
                        )
                    )
                else:
                    items.append(FoodModule(record=record_from_dict(item)))
            meals.append(
                Meal(
                    name=meal_data.get("name", ""),
                    time=meal_data.get("time", ""),
                    items=items,
                )
            )
        days.append(DayColumn(day=day_data.get("day", ""), meals=meals))
    return Board(days)


def board_to_dict(board: Board) -> dict:
    days = []
    for column in board.days:
        meals = []
        for meal in column.meals:
            items = []
            for item in meal.items:
                if isinstance(item, RecipeContainer):
                    items.append({
                        "type": "recipe",
                        "name": item.name,
                        "items": [record_to_dict(m.record) for m in item.modules],
                    })
                else:
                    items.append(record_to_dict(item.record))
            meals.append({"name": meal.name, "time": meal.time, "items": items})
        days.append({"day": column.day, "meals": meals})
    return {"days": days}


def load_board(path: str | Path) -> Board:
    """Load a board from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    with open(Path(path), encoding="utf-8") as f:
        return board_from_dict(json.load(f))


def save_board(board: Board, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(board_to_dict(board), f, ensure_ascii=False, indent=2)
    return path

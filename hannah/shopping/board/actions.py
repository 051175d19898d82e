"""Execution of assistant action blocks against the meal board."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from ..errors import UnknownActionError
from .io import record_from_dict
from .models import Board

logger = logging.getLogger(__name__)

_ACTION_BLOCK = re.compile(r"\*\*ACTION_START\*\*(.*?)\*\*ACTION_END\*\*", re.DOTALL)

_DEFAULT_DAY = "Monday"
_DEFAULT_MEAL = "lunch"


def parse_action_blocks(message: str) -> list[dict]:
    """Extract the JSON action blocks from an assistant message.

    Blocks are delimited by ``**ACTION_START**`` / ``**ACTION_END**``.
    Blocks that are not a JSON object are logged and skipped.
    """
    actions: list[dict] = []
    for match in _ACTION_BLOCK.finditer(message):
        raw = match.group(1).strip()
        try:
            action = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Failed to parse action block: %.80s", raw)
            continue
        if not isinstance(action, dict):
            logger.warning("Ignoring non-object action block: %.80s", raw)
            continue
        actions.append(action)
    return actions


@dataclass
class ActionResult:
    action: dict
    success: bool
    result: Any = None
    error: Exception | None = None


class ActionExecutor:
    """Apply ``add_meal`` / ``add_recipe`` / ``clear_meal`` / ``clear_day`` actions."""

    def __init__(self, board: Board) -> None:
        self._board = board

    def execute_actions(self, actions: list[dict]) -> list[ActionResult]:
        """Run each action independently; one failure does not stop the rest."""
        results: list[ActionResult] = []
        for action in actions:
            try:
                result = self.execute_action(action)
                results.append(ActionResult(action=action, success=True, result=result))
            except Exception as e:
                logger.exception("Failed to execute action %s", action.get("action"))
                results.append(ActionResult(action=action, success=False, error=e))
        return results

    def execute_action(self, action: dict) -> Any:
        name = action.get("action")
        match name:
            case "add_meal":
                return self._add_meal(action)
            case "add_recipe":
                return self._add_recipe(action)
            case "clear_meal":
                return self._board.clear_meal(action["day"], action["meal"])
            case "clear_day":
                return self._board.clear_day(action["day"])
            case _:
                raise UnknownActionError(f"Unknown action: {name}")

    def _add_meal(self, action: dict) -> dict:
        added = 0
        for item in action.get("items") or []:
            day = item.get("day") or action.get("day") or _DEFAULT_DAY
            meal = item.get("meal") or action.get("meal") or _DEFAULT_MEAL
            self._board.add_food(day, meal, record_from_dict(item))
            added += 1
        return {"added": added}

    def _add_recipe(self, action: dict) -> dict:
        if action.get("recipe_url") and not action.get("ingredients"):
            raise ValueError(
                f"Recipe has no inline ingredients: {action['recipe_url']}"
            )
        records = [record_from_dict(i) for i in action.get("ingredients") or []]
        recipe_id = self._board.add_recipe(
            action.get("day") or _DEFAULT_DAY,
            action.get("meal") or _DEFAULT_MEAL,
            action.get("name") or "Recipe",
            records,
        )
        return {"recipe_id": recipe_id, "added": len(records)}

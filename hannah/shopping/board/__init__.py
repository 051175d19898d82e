"""Meal board model, change signal and assistant actions."""

from .actions import ActionExecutor, ActionResult, parse_action_blocks
from .io import board_from_dict, board_to_dict, load_board, save_board
from .models import (
    Board,
    DayColumn,
    FoodModule,
    FoodRecord,
    Meal,
    RecipeContainer,
)
from .signals import ChangeSignal

__all__ = [
    "Board",
    "DayColumn",
    "Meal",
    "FoodModule",
    "FoodRecord",
    "RecipeContainer",
    "ChangeSignal",
    "ActionExecutor",
    "ActionResult",
    "parse_action_blocks",
    "board_from_dict",
    "board_to_dict",
    "load_board",
    "save_board",
]

"""Real-time shopping list built from the Hannah.health meal board."""

from .aggregation import (
    CATEGORY_ORDER,
    AggregatedItem,
    GroupedList,
    aggregate,
    detect_category,
    format_quantity,
    group_by_category,
    scan_board,
)
from .board import Board, ChangeSignal, FoodRecord
from .config import ShoppingConfig, load_config
from .errors import (
    BoardLookupError,
    ClipboardUnavailable,
    MailClientUnavailable,
    ShoppingListError,
    UnknownActionError,
)
from .scheduler import APSchedulerTaskScheduler, Debouncer, TaskScheduler
from .shopping_list import EngineState, ShoppingList

__all__ = [
    "ShoppingList",
    "EngineState",
    "Board",
    "ChangeSignal",
    "FoodRecord",
    "AggregatedItem",
    "GroupedList",
    "CATEGORY_ORDER",
    "aggregate",
    "detect_category",
    "format_quantity",
    "group_by_category",
    "scan_board",
    "APSchedulerTaskScheduler",
    "Debouncer",
    "TaskScheduler",
    "ShoppingConfig",
    "load_config",
    "ShoppingListError",
    "ClipboardUnavailable",
    "MailClientUnavailable",
    "BoardLookupError",
    "UnknownActionError",
]

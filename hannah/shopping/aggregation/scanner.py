"""Flatten the meal board into the records the shopping list aggregates."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import TYPE_CHECKING

from ..board.models import FoodRecord

if TYPE_CHECKING:
    from ..board.models import Board

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "unit"


def scan_board(board: Board | None) -> list[FoodRecord]:
    """Collect every food record on the board in day → meal → item order.

    Modules inside recipe containers are included and each module is
    read exactly once. Records without a name or with a quantity that is
    not a finite positive number are skipped; a blank unit becomes
    ``"unit"``. An absent board is an empty board.
    """
    if board is None:
        return []

    records: list[FoodRecord] = []
    for module in board.modules():
        record = _clean(module.record)
        if record is None:
            logger.debug("Skipping unreadable food module %s", module.module_id)
            continue
        records.append(record)
    return records


def _clean(record: FoodRecord) -> FoodRecord | None:
    name = (record.name or "").strip()
    if not name:
        return None
    try:
        quantity = float(record.quantity)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(quantity) or quantity <= 0:
        return None
    unit = (record.unit or "").strip() or DEFAULT_UNIT
    return replace(record, name=name, quantity=quantity, unit=unit)

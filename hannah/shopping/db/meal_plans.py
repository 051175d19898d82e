"""Saved meal plans, stored as board JSON."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

from ..board.io import board_from_dict, board_to_dict
from ..board.models import Board
from ..config import DEFAULT_DB_PATH
from .schema import ensure_schema


class MealPlanDB:
    """Manages the meal_plans table."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def save_plan(self, name: str, board: Board) -> int:
        """Save a board under ``name``, replacing any plan with that name.

        Returns:
            The row ID of the saved plan.
        """
        conn = self._get_conn()
        board_json = json.dumps(board_to_dict(board), ensure_ascii=False)
        item_count = sum(1 for _ in board.modules())
        conn.execute(
            """INSERT INTO meal_plans (name, board_json, item_count)
               VALUES (?, ?, ?)
               ON CONFLICT(name) DO UPDATE SET
                   board_json = excluded.board_json,
                   item_count = excluded.item_count,
                   updated_at = datetime('now', 'localtime')""",
            (name, board_json, item_count),
        )
        conn.commit()
        row = conn.execute(
            "SELECT id FROM meal_plans WHERE name = ?", (name,)
        ).fetchone()
        return row["id"]

    def get_plan(self, name: str) -> Board | None:
        """Return the saved board, or None if no plan has that name."""
        conn = self._get_conn()
        row = conn.execute(
            "SELECT board_json FROM meal_plans WHERE name = ?", (name,)
        ).fetchone()
        if row is None:
            return None
        return board_from_dict(json.loads(row["board_json"]))

    def list_plans(self) -> list[dict]:
        """Return name, item count and timestamps of every plan, newest first."""
        conn = self._get_conn()
        rows = conn.execute(
            """SELECT id, name, item_count, created_at, updated_at
               FROM meal_plans ORDER BY updated_at DESC, id DESC"""
        ).fetchall()
        return [dict(r) for r in rows]

    def delete_plan(self, name: str) -> bool:
        conn = self._get_conn()
        cur = conn.execute("DELETE FROM meal_plans WHERE name = ?", (name,))
        conn.commit()
        return cur.rowcount > 0

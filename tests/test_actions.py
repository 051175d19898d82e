"""Tests for assistant action blocks."""

import pytest

from hannah.shopping.board.actions import ActionExecutor, parse_action_blocks
from hannah.shopping.board.models import Board, FoodRecord, RecipeContainer
from hannah.shopping.errors import BoardLookupError, UnknownActionError


class TestParseActionBlocks:
    def test_extracts_blocks(self):
        message = (
            "Here is your plan!\n"
            '**ACTION_START**{"action": "clear_day", "day": "Monday"}**ACTION_END**\n'
            "and\n"
            "**ACTION_START**\n"
            '{"action": "add_meal", "items": [{"name": "Oats", "day": "Monday", '
            '"meal": "breakfast", "quantity": 40, "unit": "g"}]}\n'
            "**ACTION_END**"
        )
        actions = parse_action_blocks(message)
        assert [a["action"] for a in actions] == ["clear_day", "add_meal"]

    def test_skips_invalid_json(self):
        message = (
            "**ACTION_START**{not json}**ACTION_END**"
            '**ACTION_START**{"action": "clear_day", "day": "Friday"}**ACTION_END**'
        )
        assert parse_action_blocks(message) == [{"action": "clear_day", "day": "Friday"}]

    def test_skips_non_object(self):
        assert parse_action_blocks("**ACTION_START**[1, 2]**ACTION_END**") == []

    def test_no_blocks(self):
        assert parse_action_blocks("Just chatting.") == []


class TestActionExecutor:
    def test_add_meal(self):
        board = Board()
        results = ActionExecutor(board).execute_actions([
            {
                "action": "add_meal",
                "items": [
                    {"name": "Oats", "day": "Monday", "meal": "breakfast",
                     "quantity": 40, "unit": "g", "category": "grains"},
                    {"food": "Banana", "day": "Monday", "meal": "breakfast"},
                ],
            }
        ])
        assert results[0].success
        assert results[0].result == {"added": 2}
        records = [m.record for m in board.modules()]
        assert records[0] == FoodRecord("Oats", 40.0, "g", "grains")
        assert records[1] == FoodRecord("Banana", 1.0, "unit", None)

    def test_add_meal_defaults_to_monday_lunch(self):
        board = Board()
        ActionExecutor(board).execute_action(
            {"action": "add_meal", "items": [{"name": "Soup"}]}
        )
        assert board.meal("Monday", "Lunch").items[0].record.name == "Soup"

    def test_add_recipe(self):
        board = Board()
        result = ActionExecutor(board).execute_action({
            "action": "add_recipe",
            "name": "Chili",
            "day": "Wednesday",
            "meal": "dinner",
            "ingredients": [
                {"name": "Beef", "quantity": 500, "unit": "g"},
                {"name": "Tomatoes", "quantity": 2, "unit": "cup"},
            ],
        })
        assert result["added"] == 2
        (recipe,) = board.meal("Wednesday", "Dinner").items
        assert isinstance(recipe, RecipeContainer)
        assert recipe.name == "Chili"

    def test_add_recipe_url_without_ingredients_fails(self):
        results = ActionExecutor(Board()).execute_actions([
            {"action": "add_recipe", "recipe_url": "https://example.com/chili"}
        ])
        assert not results[0].success
        assert isinstance(results[0].error, ValueError)

    def test_clear_meal_and_day(self):
        board = Board()
        board.add_food("Monday", "Lunch", FoodRecord("Rice", 1, "cup"))
        board.add_food("Monday", "Dinner", FoodRecord("Tofu", 1, "block"))
        board.add_food("Friday", "Dinner", FoodRecord("Fish", 1, "fillet"))
        executor = ActionExecutor(board)
        assert executor.execute_action({"action": "clear_meal", "day": "Monday", "meal": "lunch"}) == 1
        assert executor.execute_action({"action": "clear_day", "day": "Friday"}) == 1
        assert [m.record.name for m in board.modules()] == ["Tofu"]

    def test_unknown_action(self):
        with pytest.raises(UnknownActionError, match="Unknown action: dance"):
            ActionExecutor(Board()).execute_action({"action": "dance"})

    def test_failures_are_isolated(self):
        board = Board()
        results = ActionExecutor(board).execute_actions([
            {"action": "dance"},
            {"action": "clear_day", "day": "Funday"},
            {"action": "add_meal", "items": [{"name": "Oats", "day": "Monday", "meal": "breakfast"}]},
        ])
        assert [r.success for r in results] == [False, False, True]
        assert isinstance(results[0].error, UnknownActionError)
        assert isinstance(results[1].error, BoardLookupError)
        assert len(list(board.modules())) == 1

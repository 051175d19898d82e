"""Tests for the hannah-shopping command line."""

import json
import locale
from unittest.mock import patch

import pytest

from hannah.shopping.board.io import load_board, save_board
from hannah.shopping.board.models import Board, FoodRecord
from hannah.shopping.cli import main
from hannah.shopping.errors import ClipboardUnavailable


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.setenv("HANNAH_DB_PATH", str(tmp_path / "plans.db"))
    monkeypatch.delenv("HANNAH_DEBOUNCE_SECONDS", raising=False)
    # Keep the process collation unchanged for other test modules
    monkeypatch.setattr("locale.setlocale", lambda *args: "C")


@pytest.fixture
def board_file(tmp_path):
    board = Board()
    board.add_food("Monday", "Lunch", FoodRecord("Chicken Breast", 150, "g", "protein"))
    board.add_food("Tuesday", "Lunch", FoodRecord("Chicken Breast", 100, "g", "protein"))
    board.add_food("Monday", "Breakfast", FoodRecord("Rice", 2, "cup"))
    return save_board(board, tmp_path / "board.json")


class TestList:
    def test_list(self, board_file, capsys):
        main(["list", str(board_file)])
        out = capsys.readouterr().out
        assert "Shopping List (2 items)" in out
        assert out.index("Proteins") < out.index("Pantry")
        assert "250 gs" in out
        assert "2 cups" in out

    def test_list_json(self, board_file, capsys):
        main(["list", str(board_file), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert list(data) == ["Proteins", "Pantry"]
        assert data["Proteins"][0]["quantity"] == 250
        assert data["Pantry"][0]["display"] == "2 cups"

    def test_list_empty_board(self, tmp_path, capsys):
        path = save_board(Board(), tmp_path / "empty.json")
        main(["list", str(path)])
        assert "Add meals to see your shopping list" in capsys.readouterr().out

    def test_missing_board(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["list", str(tmp_path / "nope.json")])
        assert exc.value.code == 1
        assert "Board file not found" in capsys.readouterr().err

    def test_invalid_board(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SystemExit):
            main(["list", str(path)])
        assert "Invalid board file" in capsys.readouterr().err

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit):
            main([])


class TestCopyAndEmail:
    def test_copy(self, board_file, capsys):
        with patch("hannah.shopping.clipboard.Clipboard.copy") as mock_copy:
            main(["copy", str(board_file)])
        text = mock_copy.call_args[0][0]
        assert text.startswith("Shopping List\n\nProteins:\n• Chicken Breast - 250 gs\n")
        assert "Copied!" in capsys.readouterr().out

    def test_copy_unavailable(self, board_file, capsys):
        with patch(
            "hannah.shopping.clipboard.Clipboard.copy",
            side_effect=ClipboardUnavailable("No clipboard command found."),
        ):
            with pytest.raises(SystemExit) as exc:
                main(["copy", str(board_file)])
        assert exc.value.code == 1
        assert "No clipboard command found." in capsys.readouterr().err

    def test_email(self, board_file):
        with patch("hannah.shopping.shopping_list.open_mail_client") as mock_open:
            main(["email", str(board_file)])
        url = mock_open.call_args[0][0]
        assert url.startswith("mailto:?subject=")

    def test_email_subject_from_config(self, board_file, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('[email]\nsubject = "Groceries"\n', encoding="utf-8")
        with patch("hannah.shopping.shopping_list.open_mail_client") as mock_open:
            main(["-c", str(config), "email", str(board_file)])
        assert mock_open.call_args[0][0].startswith("mailto:?subject=Groceries&body=")


class TestPdf:
    def test_pdf(self, board_file, tmp_path, capsys):
        pytest.importorskip("reportlab")
        output = tmp_path / "out" / "list.pdf"
        main(["pdf", str(board_file), str(output)])
        assert output.exists()
        assert "PDF saved" in capsys.readouterr().out


class TestApply:
    def test_apply_actions(self, board_file, tmp_path, capsys):
        message = tmp_path / "message.txt"
        message.write_text(
            "Sure!\n"
            '**ACTION_START**{"action": "clear_day", "day": "Tuesday"}**ACTION_END**\n'
            '**ACTION_START**{"action": "add_meal", "items": [{"name": "Salmon", '
            '"day": "Friday", "meal": "dinner", "quantity": 1, "unit": "fillet"}]}'
            "**ACTION_END**\n"
            '**ACTION_START**{"action": "make_coffee"}**ACTION_END**',
            encoding="utf-8",
        )
        output = tmp_path / "updated.json"
        main(["apply", str(board_file), str(message), "-o", str(output)])

        captured = capsys.readouterr()
        assert "Applied 2/3 actions" in captured.out
        assert "Unknown action: make_coffee" in captured.err

        names = [m.record.name for m in load_board(output).modules()]
        assert names == ["Rice", "Chicken Breast", "Salmon"]

    def test_apply_no_actions(self, board_file, tmp_path, capsys):
        message = tmp_path / "message.txt"
        message.write_text("Nothing to do here.", encoding="utf-8")
        main(["apply", str(board_file), str(message)])
        assert "No actions found in message." in capsys.readouterr().out


class TestPlans:
    def test_save_list_show_delete(self, board_file, capsys):
        main(["plans", "save", "week 1", str(board_file)])
        assert "Saved plan 'week 1'" in capsys.readouterr().out

        main(["plans", "list"])
        out = capsys.readouterr().out
        assert "week 1" in out
        assert "3 items" in out

        main(["plans", "show", "week 1"])
        assert "Shopping List (2 items)" in capsys.readouterr().out

        main(["plans", "delete", "week 1"])
        assert "Deleted plan 'week 1'" in capsys.readouterr().out

        main(["plans", "list"])
        assert "No saved plans." in capsys.readouterr().out

    def test_show_missing(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["plans", "show", "nope"])
        assert exc.value.code == 1
        assert "Plan not found: nope" in capsys.readouterr().err


class TestCollation:
    def test_uses_environment_locale(self, board_file):
        with patch("locale.setlocale") as mock_setlocale:
            main(["list", str(board_file)])
        mock_setlocale.assert_called_once_with(locale.LC_COLLATE, "")

    def test_unsupported_locale_is_logged(self, board_file, capsys, caplog):
        with patch("locale.setlocale", side_effect=locale.Error("unsupported locale setting")):
            main(["list", str(board_file)])
        assert "Shopping List (2 items)" in capsys.readouterr().out
        assert "unsupported locale setting" in caplog.text

"""CLI entry point for the shopping list."""

from __future__ import annotations

import argparse
import json
import locale
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .aggregation.grouping import format_count, format_quantity
from .board.actions import ActionExecutor, parse_action_blocks
from .board.io import load_board, save_board
from .config import load_config
from .errors import ShoppingListError
from .scheduler import APSchedulerTaskScheduler
from .shopping_list import ShoppingList

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    _set_collation()

    parser = argparse.ArgumentParser(
        prog="hannah-shopping",
        description="Hannah.health shopping list: aggregate the ingredients of a weekly meal board",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to a TOML config file",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    list_parser = sub.add_parser("list", help="Print the shopping list for a board")
    list_parser.add_argument("board", type=str, help="Board JSON file")
    list_parser.add_argument("--json", action="store_true", help="Output JSON")

    copy_parser = sub.add_parser("copy", help="Copy the shopping list to the clipboard")
    copy_parser.add_argument("board", type=str, help="Board JSON file")

    email_parser = sub.add_parser("email", help="Open the shopping list in a new email")
    email_parser.add_argument("board", type=str, help="Board JSON file")

    pdf_parser = sub.add_parser("pdf", help="Write the shopping list to a PDF")
    pdf_parser.add_argument("board", type=str, help="Board JSON file")
    pdf_parser.add_argument("output", type=str, help="PDF file to write")

    apply_parser = sub.add_parser(
        "apply", help="Apply assistant action blocks to a board"
    )
    apply_parser.add_argument("board", type=str, help="Board JSON file")
    apply_parser.add_argument("message", type=str, help="File with the assistant message")
    apply_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Where to save the updated board (defaults to BOARD)",
    )

    plans_parser = sub.add_parser("plans", help="Manage saved meal plans")
    plans_sub = plans_parser.add_subparsers(dest="plans_command")
    save_parser = plans_sub.add_parser("save", help="Save a board as a named plan")
    save_parser.add_argument("name", type=str)
    save_parser.add_argument("board", type=str, help="Board JSON file")
    plans_sub.add_parser("list", help="List saved plans")
    show_parser = plans_sub.add_parser("show", help="Print a saved plan's shopping list")
    show_parser.add_argument("name", type=str)
    show_parser.add_argument("--json", action="store_true", help="Output JSON")
    delete_parser = plans_sub.add_parser("delete", help="Delete a saved plan")
    delete_parser.add_argument("name", type=str)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    config = load_config(args.config)

    try:
        match args.command:
            case "list":
                _cmd_list(config, _load_board(args.board), args.json)
            case "copy":
                _cmd_copy(config, args)
            case "email":
                _cmd_email(config, args)
            case "pdf":
                _cmd_pdf(config, args)
            case "apply":
                _cmd_apply(args)
            case "plans":
                _cmd_plans(config, args, plans_parser)
    except ShoppingListError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


def _set_collation() -> None:
    """Sort item names with the user's locale rules."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning("Could not set collation locale, using code-point order: %s", e)


def _load_board(path: str):
    try:
        return load_board(path)
    except FileNotFoundError:
        print(f"Board file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Invalid board file {path}: {e}", file=sys.stderr)
        sys.exit(1)


def _build_list(config, board) -> ShoppingList:
    # One-shot commands never start the scheduler; nothing is debounced
    shopping = ShoppingList.for_board(
        board, scheduler=APSchedulerTaskScheduler(), config=config
    )
    shopping.attach()
    return shopping


def _cmd_list(config, board, as_json: bool) -> None:
    grouped = _build_list(config, board).get_grouped_list()

    if as_json:
        print(json.dumps(grouped.to_dict(), ensure_ascii=False, indent=2))
        return

    if grouped.is_empty:
        print("Add meals to see your shopping list")
        return

    print(f"🛒 Shopping List ({format_count(grouped.item_count)})")
    for category, items in grouped:
        print(f"\n{category}")
        for item in items:
            qty = format_quantity(item.quantity, item.unit)
            print(f"  ☐ {item.name:<28} {qty}")


def _cmd_copy(config, args) -> None:
    shopping = _build_list(config, _load_board(args.board))
    shopping.copy_to_clipboard()
    print("✅ Copied!")


def _cmd_email(config, args) -> None:
    shopping = _build_list(config, _load_board(args.board))
    shopping.email_list()
    print("✉️  Opened your mail client")


def _cmd_pdf(config, args) -> None:
    from .pdf import generate_pdf

    shopping = _build_list(config, _load_board(args.board))
    try:
        path = generate_pdf(shopping.get_grouped_list(), args.output)
    except ImportError as e:
        print(f"PDF error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"📄 PDF saved: {path}")


def _cmd_apply(args) -> None:
    board = _load_board(args.board)
    message = Path(args.message).read_text(encoding="utf-8")

    actions = parse_action_blocks(message)
    if not actions:
        print("No actions found in message.")
        return

    results = ActionExecutor(board).execute_actions(actions)
    for r in results:
        name = r.action.get("action", "?")
        if r.success:
            print(f"  ✓ {name}: {r.result}")
        else:
            print(f"  ✗ {name}: {r.error}", file=sys.stderr)

    output = save_board(board, args.output or args.board)
    ok = sum(1 for r in results if r.success)
    print(f"Applied {ok}/{len(results)} actions → {output}")


def _cmd_plans(config, args, plans_parser) -> None:
    from .db import MealPlanDB

    if args.plans_command is None:
        plans_parser.print_help()
        sys.exit(1)

    db = MealPlanDB(config.database.path)
    try:
        match args.plans_command:
            case "save":
                board = _load_board(args.board)
                plan_id = db.save_plan(args.name, board)
                print(f"Saved plan '{args.name}' (id {plan_id})")
            case "list":
                plans = db.list_plans()
                if not plans:
                    print("No saved plans.")
                    return
                for p in plans:
                    print(f"  {p['name']:<24} {format_count(p['item_count']):>10}  {p['updated_at']}")
            case "show":
                board = db.get_plan(args.name)
                if board is None:
                    print(f"Plan not found: {args.name}", file=sys.stderr)
                    sys.exit(1)
                _cmd_list(config, board, args.json)
            case "delete":
                if not db.delete_plan(args.name):
                    print(f"Plan not found: {args.name}", file=sys.stderr)
                    sys.exit(1)
                print(f"Deleted plan '{args.name}'")
    finally:
        db.close()

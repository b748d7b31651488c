"""CLI: command-line interface for memmaster."""

import argparse
import pathlib
import sys

from memmaster.app import App
from memmaster.config import SOURCE_MODES
from memmaster.finder import is_card_due
from memmaster.models import DIFFICULTIES
from memmaster.review_list import (
    OLDEST_FIRST, SORT_ORDERS, describe, filter_cards, sort_by_overdue,
)


def _doc_path(app: App, path: str) -> str:
    p = pathlib.Path(path)
    if not p.is_absolute() and (app.vault_dir / p).is_file():
        return p.as_posix()
    try:
        return app.vault.relative(p)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_due(args, app: App):
    show_preview = args.reveal or not app.settings.blur_card_text
    cards = app.due_cards()
    if args.search:
        cards = filter_cards(cards, args.search)
    if args.sort:
        cards = sort_by_overdue(cards, args.sort)

    if not cards:
        print("No flashcards to review.")
        return

    print(f"{len(cards)} card(s) due")
    for card in cards:
        row = describe(card)
        tags = " ".join(row["tags"])
        print(f"  {row['path']}  [{row['info']}, stage {row['stage']}]  {tags}")
        if show_preview and row["preview"]:
            print(f"      {row['preview']}")


def cmd_grade(args, app: App):
    path = _doc_path(app, args.path)
    try:
        outcome = app.grade(path, args.difficulty)
    except OSError as e:
        print(f"Error: cannot grade {path}: {e}", file=sys.stderr)
        sys.exit(1)
    print(outcome.message)
    if not outcome.ok:
        sys.exit(1)


def cmd_make(args, app: App):
    path = _doc_path(app, args.path)
    try:
        outcome = app.make_card(path)
    except OSError as e:
        print(f"Error: cannot make {path} a flashcard: {e}", file=sys.stderr)
        sys.exit(1)
    print(outcome.message)


def cmd_status(args, app: App):
    cards = app.all_cards()
    due = sum(1 for c in cards if is_card_due(c))
    new = sum(1 for c in cards if not c.next_review)

    if app.settings.source_mode == "folder":
        source = f"folder '{app.settings.folder_name}'"
    else:
        source = f"tag '#{app.settings.tag_name}'"
    print(f"Vault:       {app.vault_dir}")
    print(f"Source:      {source}")
    print(f"Cards:       {len(cards)}")
    print(f"Due now:     {due}")
    print(f"Unscheduled: {new}")


def cmd_config(args, app: App):
    changes = {}
    if args.mode:
        changes["source_mode"] = args.mode
    if args.tag is not None:
        changes["tag_name"] = args.tag
    if args.folder is not None:
        changes["folder_name"] = args.folder
    if args.blur:
        changes["blur_card_text"] = args.blur == "on"
    if changes:
        app.update_settings(**changes)
    for k, v in app.settings.to_dict().items():
        print(f"{k} = {v}")


def main():
    parser = argparse.ArgumentParser(prog="memmaster", description="Spaced repetition for markdown notes")
    parser.add_argument("--vault", help="Vault directory (default: MEMMASTER_DIR, config or cwd)")
    subparsers = parser.add_subparsers(dest="command")

    p_due = subparsers.add_parser("due", help="List flashcards due for review")
    p_due.add_argument("--search", help="Filter by file name, content or tag")
    p_due.add_argument("--sort", choices=SORT_ORDERS, help=f"Order by days overdue (e.g. {OLDEST_FIRST})")
    p_due.add_argument("--reveal", action="store_true", help="Show card text even when blur_card_text is on")

    p_grade = subparsers.add_parser("grade", help="Grade a flashcard")
    p_grade.add_argument("path", help="Note path (vault-relative or filesystem)")
    p_grade.add_argument("difficulty", choices=DIFFICULTIES)

    p_make = subparsers.add_parser("make", help="Turn a note into a flashcard")
    p_make.add_argument("path", help="Note path (vault-relative or filesystem)")

    subparsers.add_parser("status", help="Show card counts")

    p_config = subparsers.add_parser("config", help="Show or change settings")
    p_config.add_argument("--mode", choices=SOURCE_MODES, help="Card source mode")
    p_config.add_argument("--tag", help="Tag name used in tag mode")
    p_config.add_argument("--folder", help="Folder used in folder mode")
    p_config.add_argument("--blur", choices=("on", "off"), help="Hide card text in the due list")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    app = App(vault_dir=args.vault)
    if not app.vault_dir.is_dir():
        print(f"Vault directory not found: {app.vault_dir}", file=sys.stderr)
        sys.exit(1)

    if args.command == "due":
        cmd_due(args, app)
    elif args.command == "grade":
        cmd_grade(args, app)
    elif args.command == "make":
        cmd_make(args, app)
    elif args.command == "status":
        cmd_status(args, app)
    elif args.command == "config":
        cmd_config(args, app)

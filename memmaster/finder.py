"""Card discovery: find flashcards in the vault and build the due list."""

import sys
from datetime import date, datetime, timezone
from typing import Iterator

from memmaster.classifier import has_tag_in_content, matches_path
from memmaster.config import Settings
from memmaster.metadata import extract_schedule, unscheduled
from memmaster.models import CardMetadata


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def parse_review_date(value: str) -> date | None:
    """Calendar date of a stored review value, time of day dropped."""
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        return None


def is_card_due(card: CardMetadata, today: date | None = None) -> bool:
    if not card.next_review:
        return True
    review = parse_review_date(card.next_review)
    if review is None:
        return False
    return review <= (today or utc_today())


def sort_cards(cards: list[CardMetadata]) -> list[CardMetadata]:
    """Ascending by review date; unscheduled cards first; stable on ties."""
    def key(card):
        if not card.next_review:
            return (0, date.min)
        return (1, parse_review_date(card.next_review) or date.max)
    return sorted(cards, key=key)


def iter_cards(vault, settings: Settings) -> Iterator[CardMetadata]:
    """Yield every flashcard in the vault with its schedule or the default.

    A note that cannot be read is reported and skipped.
    """
    for path in vault.list_documents():
        decided = matches_path(settings, path)
        if decided is False:
            continue
        try:
            content = vault.read(path)
        except (OSError, ValueError) as e:
            print(f"Warning: cannot read {path}: {e}", file=sys.stderr)
            continue
        if decided is None and not has_tag_in_content(content, settings.tag_name):
            continue
        yield extract_schedule(content, path) or unscheduled(content, path)


def get_due_cards(vault, settings: Settings, today: date | None = None) -> list[CardMetadata]:
    today = today or utc_today()
    due = [card for card in iter_cards(vault, settings) if is_card_due(card, today)]
    return sort_cards(due)

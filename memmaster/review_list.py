"""Review list projection: what a front end shows for each due card."""

import re
from datetime import date

from memmaster.finder import parse_review_date, utc_today
from memmaster.models import CardMetadata

OLDEST_FIRST = "oldest-first"
NEWEST_FIRST = "newest-first"
SORT_ORDERS = (OLDEST_FIRST, NEWEST_FIRST)

PREVIEW_LENGTH = 128

_HEADING_RE = re.compile(r"^#+\s")
_LEADING_BLOCK_RE = re.compile(r"\A---.*?---", re.DOTALL)
_TAG_RE = re.compile(r"#[^\s#]+")


def extract_tags(content: str) -> list[str]:
    tags = []
    for line in content.split("\n"):
        if _HEADING_RE.match(line.strip()) or "#" not in line:
            continue
        for word in line.split():
            if word.startswith("#") and len(word) > 1 and word[1] != "#":
                tags.append(word)
    return tags


def preview_text(content: str, limit: int = PREVIEW_LENGTH) -> str:
    text = _LEADING_BLOCK_RE.sub("", content, count=1)
    text = _TAG_RE.sub("", text)
    text = re.sub(r"\n+", " ", text).strip()
    return text[:limit]


def days_overdue(card: CardMetadata, today: date | None = None) -> int:
    if not card.next_review:
        return 0
    review = parse_review_date(card.next_review)
    if review is None:
        return 0
    return ((today or utc_today()) - review).days


def filter_cards(cards: list[CardMetadata], query: str) -> list[CardMetadata]:
    """Case-insensitive substring search over file name, content and tags."""
    query = (query or "").lower()
    if not query:
        return list(cards)
    result = []
    for card in cards:
        tags = " ".join(extract_tags(card.content)).lower()
        if query in card.stem.lower() or query in card.content.lower() or query in tags:
            result.append(card)
    return result


def sort_by_overdue(cards: list[CardMetadata], order: str = OLDEST_FIRST,
                    today: date | None = None) -> list[CardMetadata]:
    if order not in SORT_ORDERS:
        raise ValueError(f"Unknown sort order: {order}")
    today = today or utc_today()
    sign = -1 if order == OLDEST_FIRST else 1
    return sorted(cards, key=lambda c: sign * days_overdue(c, today))


def describe(card: CardMetadata, today: date | None = None) -> dict:
    """Row for one card: name, review info, tags and a short preview."""
    overdue = days_overdue(card, today)
    if not card.next_review:
        info = "new"
    elif overdue > 0:
        info = f"overdue by {overdue} day(s)"
    else:
        info = "due today"
    return {
        "path": card.path,
        "name": card.stem,
        "stage": card.stage,
        "next_review": card.next_review,
        "overdue_days": overdue,
        "info": info,
        "tags": extract_tags(card.content),
        "preview": preview_text(card.content),
    }

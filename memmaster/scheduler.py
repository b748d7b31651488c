"""Grading and enrollment: how a card's schedule changes.

Three buckets, each with a geometric interval in days for stage S:

    easy    2 ** S
    medium  1.5 ** S        (fractional days are kept)
    hard    max(1, floor(1.2 ** S))

Any other label gets a one day interval. Every grade advances the stage by
one; once it passes MAX_STAGE the card is mastered and its metadata block is
removed from the note.
"""

import math
import re
from datetime import datetime, timedelta, timezone

from memmaster import events as ev
from memmaster.classifier import inline_tag_re, is_file_in_folder
from memmaster.config import DEFAULT_FOLDER, DEFAULT_TAG, Settings
from memmaster.metadata import NEXT_REVIEW_KEY, STAGE_KEY, parse_metadata, serialize_block
from memmaster.models import (
    ALREADY_CARD, CREATED, EASY, HARD, MASTERED, MEDIUM, UPDATED, Outcome,
)

MAX_STAGE = 10


def compute_interval(difficulty: str, stage: int) -> float:
    if difficulty == EASY:
        return math.pow(2, stage)
    if difficulty == MEDIUM:
        return math.pow(1.5, stage)
    if difficulty == HARD:
        return max(1, math.floor(math.pow(1.2, stage)))
    return 1


def parse_stage(value: str | None) -> int:
    """Leading integer of the stored stage; 0 when missing or garbage."""
    m = re.match(r"\s*(\d+)", value or "")
    return int(m.group(1)) if m else 0


def _utc(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def review_date(now: datetime, interval_days: float) -> str:
    return (now + timedelta(days=interval_days)).date().isoformat()


def grade(vault, bus, path: str, difficulty: str, now: datetime | None = None) -> Outcome:
    """Apply a grade to the note at path and write the result back."""
    now = _utc(now)
    content = vault.read(path)
    metadata, body = parse_metadata(content)

    stage = parse_stage(metadata.get(STAGE_KEY))
    interval = compute_interval(difficulty, stage)
    stage += 1

    if stage > MAX_STAGE:
        vault.write(path, body)
        bus.trigger(ev.CARD_UPDATED, path)
        return Outcome(kind=MASTERED, message="Card mastered! Review data removed.",
                       path=path, metadata=None, stage=stage)

    metadata[NEXT_REVIEW_KEY] = review_date(now, interval)
    metadata[STAGE_KEY] = str(stage)
    vault.write(path, serialize_block(metadata) + "\n\n" + body)
    bus.trigger(ev.CARD_UPDATED, path)
    return Outcome(kind=UPDATED,
                   message=f"Card updated. Next review: {metadata[NEXT_REVIEW_KEY]}",
                   path=path, metadata=dict(metadata),
                   next_review=metadata[NEXT_REVIEW_KEY], stage=stage)


def make_card(vault, bus, settings: Settings, path: str,
              now: datetime | None = None) -> Outcome:
    """Enroll a note as a flashcard under the active membership mode."""
    now = _utc(now)
    content = vault.read(path)
    metadata, body = parse_metadata(content)
    metadata[NEXT_REVIEW_KEY] = now.date().isoformat()
    metadata[STAGE_KEY] = "0"

    if settings.source_mode == "folder":
        return _make_folder_card(vault, bus, settings, path, content, metadata, body)
    return _make_tag_card(vault, bus, settings, path, content, metadata, body)


def _already(path: str) -> Outcome:
    return Outcome(kind=ALREADY_CARD, message="This note is already a flashcard", path=path)


def _make_tag_card(vault, bus, settings, path, content, metadata, body) -> Outcome:
    tag_name = settings.tag_name or DEFAULT_TAG
    tag = f"#{tag_name}"

    if inline_tag_re(tag_name).search(content):
        return _already(path)
    if tag_name in metadata.get("tags", ""):
        return _already(path)

    body = body.strip("\n")
    body = f"{tag}\n\n{body}" if body else f"{tag}\n"
    vault.write(path, serialize_block(metadata) + "\n" + body)
    bus.trigger(ev.CARD_UPDATED, path)
    return Outcome(kind=CREATED, message=f"Flashcard created - tag {tag} added",
                   path=path, metadata=metadata,
                   next_review=metadata[NEXT_REVIEW_KEY], stage=0)


def _make_folder_card(vault, bus, settings, path, content, metadata, body) -> Outcome:
    folder = settings.folder_name or DEFAULT_FOLDER
    if is_file_in_folder(path, folder):
        return _already(path)

    if not vault.folder_exists(folder):
        vault.create_folder(folder)

    new_path = f"{folder}/{path.rsplit('/', 1)[-1]}"
    vault.write(path, serialize_block(metadata) + "\n\n" + body)
    try:
        vault.move(path, new_path)
    except OSError:
        vault.write(path, content)
        raise
    bus.trigger(ev.CARD_UPDATED, new_path)
    return Outcome(kind=CREATED, message=f"Flashcard created - moved to {folder}",
                   path=new_path, metadata=dict(metadata),
                   next_review=metadata[NEXT_REVIEW_KEY], stage=0)

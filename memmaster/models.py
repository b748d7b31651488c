"""Shared data classes used across the finder, scheduler and CLI."""

from dataclasses import dataclass

EASY = "easy"
MEDIUM = "medium"
HARD = "hard"
DIFFICULTIES = (EASY, MEDIUM, HARD)

# Outcome kinds
UPDATED = "updated"
MASTERED = "mastered"
CREATED = "created"
ALREADY_CARD = "already_card"
NOT_A_CARD = "not_a_card"


@dataclass
class CardMetadata:
    path: str
    content: str
    stage: str = "0"
    next_review: str = ""

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def stem(self) -> str:
        name = self.name
        return name[:-3] if name.endswith(".md") else name


@dataclass
class Outcome:
    kind: str
    message: str
    path: str | None = None
    metadata: dict | None = None
    next_review: str | None = None
    stage: int | None = None

    @property
    def ok(self) -> bool:
        return self.kind in (UPDATED, MASTERED, CREATED)

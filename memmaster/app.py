"""App: central object that wires together the vault, settings and events."""

import dataclasses
import pathlib
from datetime import date, datetime

from memmaster import events as ev
from memmaster.classifier import is_flashcard
from memmaster.config import Settings, get_vault_dir, load_settings, save_settings
from memmaster.events import EventBus
from memmaster.finder import get_due_cards, iter_cards
from memmaster.models import NOT_A_CARD, CardMetadata, Outcome
from memmaster.scheduler import grade, make_card
from memmaster.vault import Vault


class App:
    """Holds all shared state for a memmaster session.

    Usage:
        app = App(vault_dir="/path/to/notes")
        app.events.on(events.CARD_UPDATED, refresh)
        for card in app.due_cards():
            ...
        app.grade("Notes/cell.md", "easy")

    For testing:
        app = App(vault_dir=tmp_path, settings=Settings(source_mode="folder"))
    """

    def __init__(self, vault_dir: pathlib.Path | str | None = None,
                 settings: Settings | None = None):
        if vault_dir is None:
            vault_dir = get_vault_dir()
        self.vault_dir = pathlib.Path(vault_dir)
        self.settings = settings if settings is not None else load_settings(self.vault_dir)
        self.vault = Vault(self.vault_dir)
        self.events = EventBus()

    def is_flashcard(self, path: str) -> bool:
        return is_flashcard(self.settings, self.vault, path)

    def due_cards(self, today: date | None = None) -> list[CardMetadata]:
        return get_due_cards(self.vault, self.settings, today)

    def all_cards(self) -> list[CardMetadata]:
        return list(iter_cards(self.vault, self.settings))

    def grade(self, path: str, difficulty: str, now: datetime | None = None) -> Outcome:
        """Grade a note, refusing notes the active mode does not treat as cards."""
        if not self.is_flashcard(path):
            return Outcome(kind=NOT_A_CARD, message="This note is not a flashcard", path=path)
        return grade(self.vault, self.events, path, difficulty, now)

    def make_card(self, path: str, now: datetime | None = None) -> Outcome:
        return make_card(self.vault, self.events, self.settings, path, now)

    def update_settings(self, **changes) -> Settings:
        """Replace settings, persist them and publish the change."""
        self.settings = dataclasses.replace(self.settings, **changes)
        save_settings(self.vault_dir, self.settings)
        self.events.trigger(ev.SETTINGS_UPDATED, self.settings)
        return self.settings

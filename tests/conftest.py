"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from memmaster.app import App
from memmaster.config import Settings
from memmaster.events import EventBus
from memmaster.vault import Vault

NOW = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)


def write_note(root, rel_path, text):
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def vault_dir(tmp_path):
    """Empty vault directory."""
    d = tmp_path / "vault"
    d.mkdir()
    return d


@pytest.fixture
def vault(vault_dir):
    return Vault(vault_dir)


@pytest.fixture
def bus():
    """Event bus recording every card-updated path in bus.updated."""
    b = EventBus()
    b.updated = []
    b.on("memmaster:card-updated", b.updated.append)
    return b


@pytest.fixture
def tag_settings():
    return Settings(source_mode="tag", tag_name="flashcard")


@pytest.fixture
def folder_settings():
    return Settings(source_mode="folder", folder_name="Flashcards")


@pytest.fixture
def app(vault_dir):
    """App on the tmp vault with default settings (tag mode, #flashcard)."""
    return App(vault_dir=vault_dir)

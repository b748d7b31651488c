"""Tests for memmaster.classifier."""

import pytest

from memmaster.classifier import has_tag_in_content, is_file_in_folder, is_flashcard
from memmaster.config import Settings

from conftest import write_note


@pytest.mark.parametrize("content", [
    "#flashcard\nHello",
    "Hello #Flashcard",
    "Question?\n\t#FLASHCARD",
    "#flashcard.",
    "---\ntags: [bio, flashcard]\n---\nbody",
    "---\ntitle: x\nTags: Flashcard, bio\n---\nbody",
])
def test_tag_matches(content):
    assert has_tag_in_content(content, "flashcard")


@pytest.mark.parametrize("content", [
    "#flashcardx",
    "foo#flashcard",
    "flashcard without hash",
    "---\ntags: [flashcards]\n---\nbody",
    "---\ntitle: flashcard\n---\nbody",
    "intro\n---\ntags: flashcard\n---\n",
])
def test_tag_does_not_match(content):
    assert not has_tag_in_content(content, "flashcard")


def test_tag_name_with_hash_is_normalized():
    assert has_tag_in_content("#flashcard here", "#flashcard")


def test_empty_tag_matches_nothing():
    assert not has_tag_in_content("# heading\n#flashcard", "")
    assert not has_tag_in_content("#", "  ")


def test_tag_is_matched_literally():
    assert not has_tag_in_content("#cxx", "c.x")
    assert has_tag_in_content("#c.x notes", "c.x")


def test_only_first_tags_line_counts():
    content = "---\ntags: bio\ntags: flashcard\n---\nbody"
    assert not has_tag_in_content(content, "flashcard")


@pytest.mark.parametrize("folder", ["Flashcards", "Flashcards/Biology", "/Flashcards/", "Notes"])
def test_folder_matches_segment_run(folder):
    assert is_file_in_folder("Notes/Flashcards/Biology/cell.md", folder)


@pytest.mark.parametrize("folder", ["Flashcards/Chemistry", "Flash", "Biology/Flashcards", "", "  "])
def test_folder_does_not_match(folder):
    assert not is_file_in_folder("Notes/Flashcards/Biology/cell.md", folder)


def test_folder_longer_than_path():
    assert not is_file_in_folder("a.md", "Flashcards/Deep")


def test_is_flashcard_tag_mode(vault_dir, vault, tag_settings):
    write_note(vault_dir, "Notes/a.md", "#flashcard\nHello")
    write_note(vault_dir, "Notes/b.md", "Plain note")
    assert is_flashcard(tag_settings, vault, "Notes/a.md")
    assert not is_flashcard(tag_settings, vault, "Notes/b.md")


def test_is_flashcard_missing_file(vault, tag_settings):
    assert not is_flashcard(tag_settings, vault, "Notes/missing.md")


def test_is_flashcard_folder_mode_ignores_content(vault_dir, vault, folder_settings):
    write_note(vault_dir, "Flashcards/a.md", "no tag")
    write_note(vault_dir, "Notes/b.md", "#flashcard")
    assert is_flashcard(folder_settings, vault, "Flashcards/a.md")
    assert not is_flashcard(folder_settings, vault, "Notes/b.md")


def test_is_flashcard_empty_config(vault_dir, vault):
    write_note(vault_dir, "Flashcards/a.md", "#flashcard")
    assert not is_flashcard(Settings(source_mode="tag", tag_name=""), vault, "Flashcards/a.md")
    assert not is_flashcard(Settings(source_mode="folder", folder_name="/"), vault, "Flashcards/a.md")

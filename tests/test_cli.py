"""Tests for CLI argument parsing and command dispatch."""

from unittest.mock import patch

import pytest

from memmaster.cli import main

from conftest import write_note


def _run(*argv):
    with patch("sys.argv", ["memmaster", *argv]):
        main()


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit):
        _run()
    captured = capsys.readouterr()
    assert "usage:" in captured.out.lower()


def test_missing_vault(tmp_path, capsys):
    with pytest.raises(SystemExit):
        _run("--vault", str(tmp_path / "nope"), "status")
    assert "not found" in capsys.readouterr().err


def test_due_empty(vault_dir, capsys):
    _run("--vault", str(vault_dir), "due")
    assert "No flashcards to review." in capsys.readouterr().out


def test_due_lists_cards(vault_dir, capsys):
    write_note(vault_dir, "Notes/cell.md", "#flashcard #bio\nWhat is a cell?")
    write_note(vault_dir, "Notes/verb.md", "#flashcard\nser")
    _run("--vault", str(vault_dir), "due", "--search", "bio", "--sort", "newest-first", "--reveal")
    out = capsys.readouterr().out
    assert "1 card(s) due" in out
    assert "Notes/cell.md" in out
    assert "Notes/verb.md" not in out
    assert "What is a cell?" in out


def test_due_hides_card_text_by_default(vault_dir, capsys):
    write_note(vault_dir, "Notes/cell.md", "#flashcard\nWhat is a cell?")
    _run("--vault", str(vault_dir), "due")
    out = capsys.readouterr().out
    assert "Notes/cell.md" in out
    assert "What is a cell?" not in out


def test_due_shows_card_text_when_blur_is_off(vault_dir, capsys):
    write_note(vault_dir, "Notes/cell.md", "#flashcard\nWhat is a cell?")
    _run("--vault", str(vault_dir), "config", "--blur", "off")
    assert "blur_card_text = False" in capsys.readouterr().out
    _run("--vault", str(vault_dir), "due")
    assert "What is a cell?" in capsys.readouterr().out


def test_make_and_grade(vault_dir, capsys):
    write_note(vault_dir, "a.md", "Question")
    _run("--vault", str(vault_dir), "make", "a.md")
    assert "Flashcard created" in capsys.readouterr().out

    _run("--vault", str(vault_dir), "grade", str(vault_dir / "a.md"), "easy")
    assert "Next review" in capsys.readouterr().out
    assert "memmaster-stage: 1" in (vault_dir / "a.md").read_text()


def test_grade_not_a_card(vault_dir, capsys):
    write_note(vault_dir, "a.md", "Question")
    with pytest.raises(SystemExit) as exc:
        _run("--vault", str(vault_dir), "grade", "a.md", "hard")
    assert exc.value.code == 1
    assert "not a flashcard" in capsys.readouterr().out


def test_grade_rejects_unknown_difficulty(vault_dir):
    with pytest.raises(SystemExit):
        _run("--vault", str(vault_dir), "grade", "a.md", "trivial")


def test_path_outside_vault(vault_dir, tmp_path, capsys):
    outside = tmp_path / "x.md"
    outside.write_text("#flashcard")
    with pytest.raises(SystemExit):
        _run("--vault", str(vault_dir), "make", str(outside))
    assert "not inside vault" in capsys.readouterr().err


def test_status(vault_dir, capsys):
    write_note(vault_dir, "a.md", "#flashcard")
    write_note(vault_dir, "b.md",
               "---\nmemmaster-next-review: 2099-01-01\nmemmaster-stage: 3\n---\n#flashcard")
    _run("--vault", str(vault_dir), "status")
    out = capsys.readouterr().out
    assert "Cards:       2" in out
    assert "Due now:     1" in out
    assert "Unscheduled: 1" in out
    assert "tag '#flashcard'" in out


def test_config_updates_settings(vault_dir, capsys):
    _run("--vault", str(vault_dir), "config", "--mode", "folder", "--folder", "Decks/")
    out = capsys.readouterr().out
    assert "source_mode = folder" in out
    assert "folder_name = Decks" in out
    assert 'folder_name = "Decks"' in (vault_dir / ".memmaster" / "settings.toml").read_text()

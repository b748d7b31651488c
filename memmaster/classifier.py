"""Flashcard membership: which notes count as cards under the active mode."""

import re

from memmaster.config import Settings, normalize_folder, normalize_tag
from memmaster.metadata import find_block


def inline_tag_re(tag_name: str) -> re.Pattern:
    return re.compile(rf"(^|\s)#{re.escape(tag_name)}(\b|$)", re.IGNORECASE)


def has_tag_in_content(content: str, tag_name: str) -> bool:
    """True if the note carries #tag inline or lists tag in a `tags:` line."""
    tag_name = normalize_tag(tag_name)
    if not tag_name:
        return False
    if inline_tag_re(tag_name).search(content):
        return True

    block = find_block(content)
    if block is None:
        return False
    for line in block.split("\n"):
        if line.strip().lower().startswith("tags:"):
            tags_part = line.split(":", 1)[1].strip()
            return re.search(rf"\b{re.escape(tag_name)}\b", tags_part, re.IGNORECASE) is not None
    return False


def is_file_in_folder(file_path: str, folder_path: str) -> bool:
    """True if folder_path's segments appear as a contiguous run in file_path."""
    folder_path = normalize_folder(folder_path)
    if not folder_path:
        return False
    folder_segments = folder_path.split("/")
    path_segments = file_path.split("/")
    n = len(folder_segments)
    for i in range(len(path_segments) - n + 1):
        if path_segments[i:i + n] == folder_segments:
            return True
    return False


def matches_path(settings: Settings, path: str) -> bool | None:
    """Decide membership from the path alone; None when content is needed."""
    if settings.source_mode == "folder":
        return is_file_in_folder(path, settings.folder_name)
    if not settings.tag_name:
        return False
    return None


def is_flashcard(settings: Settings, vault, path: str) -> bool:
    decided = matches_path(settings, path)
    if decided is not None:
        return decided
    try:
        content = vault.read(path)
    except (OSError, ValueError):
        return False
    return has_tag_in_content(content, settings.tag_name)

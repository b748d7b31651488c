"""Metadata block codec: the leading `---` key/value block of a note.

The block is a flat, ordered list of `key: value` lines split on the first
colon. It is not YAML: there are no lists, no nesting and no quoting.
"""

import re

from memmaster.models import CardMetadata

NEXT_REVIEW_KEY = "memmaster-next-review"
STAGE_KEY = "memmaster-stage"

BLOCK_RE = re.compile(r"\A---\n(.*?)\n---", re.DOTALL)


def _split_line(line: str) -> tuple[str, str] | None:
    if ":" not in line:
        return None
    k, v = line.split(":", 1)
    return k.strip(), v.strip()


def find_block(content: str) -> str | None:
    """Return the raw text between the delimiters, or None without a block."""
    m = BLOCK_RE.match(content)
    return m.group(1) if m else None


def parse_metadata(content: str) -> tuple[dict, str]:
    """Parse the block into an ordered overlay. Returns (metadata, body).

    Entries with an empty key or value are dropped. The body has the block
    removed and is trimmed; without a block it is the content untouched.
    """
    m = BLOCK_RE.match(content)
    if not m:
        return {}, content
    body = content[m.end():].strip()
    meta = {}
    for line in m.group(1).split("\n"):
        pair = _split_line(line)
        if pair is None:
            continue
        k, v = pair
        if k and v:
            meta[k] = v
    return meta, body


def serialize_block(metadata: dict) -> str:
    lines = "\n".join(f"{k}: {v}" for k, v in metadata.items())
    return f"---\n{lines}\n---"


def strip_block(content: str) -> str:
    """Drop the whole block, keeping only the trimmed body."""
    _, body = parse_metadata(content)
    return body


def extract_schedule(content: str, path: str) -> CardMetadata | None:
    """Read the card schedule. None unless both reserved keys are present."""
    block = find_block(content)
    if block is None:
        return None
    card = CardMetadata(path=path, content=content)
    has_next_review = False
    has_stage = False
    for line in block.split("\n"):
        pair = _split_line(line)
        if pair is None:
            continue
        k, v = pair
        if k == NEXT_REVIEW_KEY:
            card.next_review = v
            has_next_review = True
        elif k == STAGE_KEY:
            card.stage = v
            has_stage = True
    if not (has_next_review and has_stage):
        return None
    return card


def unscheduled(content: str, path: str) -> CardMetadata:
    return CardMetadata(path=path, content=content, stage="0", next_review="")

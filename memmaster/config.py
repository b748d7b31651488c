"""Configuration helpers: vault discovery, settings file load/save."""

import dataclasses
import os
import pathlib
import sys
from dataclasses import dataclass

SOURCE_MODES = ("tag", "folder")
DEFAULT_TAG = "flashcard"
DEFAULT_FOLDER = "Flashcards"
SETTINGS_DIR = ".memmaster"


def normalize_tag(tag: str) -> str:
    tag = str(tag or "").strip()
    return tag[1:] if tag.startswith("#") else tag


def normalize_folder(folder: str) -> str:
    return str(folder or "").strip().strip("/")


@dataclass
class Settings:
    source_mode: str = "tag"
    tag_name: str = DEFAULT_TAG
    folder_name: str = DEFAULT_FOLDER
    blur_card_text: bool = True

    def __post_init__(self):
        if self.source_mode not in SOURCE_MODES:
            raise ValueError(f"Unknown source mode: {self.source_mode!r}")
        self.tag_name = normalize_tag(self.tag_name)
        self.folder_name = normalize_folder(self.folder_name)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


def get_vault_dir() -> pathlib.Path:
    env = os.environ.get("MEMMASTER_DIR")
    if env:
        print(f"Using vault from MEMMASTER_DIR: {env}", file=sys.stderr)
        return pathlib.Path(env)
    config_path = pathlib.Path.home() / ".config" / "memmaster" / "config"
    if config_path.exists():
        for line in config_path.read_text().splitlines():
            line = line.strip()
            if line.startswith("DIR="):
                return pathlib.Path(line[4:].strip())
    return pathlib.Path.cwd()


def settings_path(vault_dir: pathlib.Path) -> pathlib.Path:
    return pathlib.Path(vault_dir) / SETTINGS_DIR / "settings.toml"


def load_settings(vault_dir: pathlib.Path) -> Settings:
    path = settings_path(vault_dir)
    values = {}
    if path.exists():
        known = {f.name for f in dataclasses.fields(Settings)}
        for k, v in _parse_toml_simple(path.read_text()).items():
            if k in known:
                values[k] = v
            else:
                print(f"Warning: unknown setting '{k}' in {path}", file=sys.stderr)
    return Settings(**values)


def save_settings(vault_dir: pathlib.Path, settings: Settings):
    path = settings_path(vault_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = []
    for k, v in settings.to_dict().items():
        if isinstance(v, bool):
            v = "true" if v else "false"
        elif isinstance(v, str):
            v = f'"{v}"'
        lines.append(f"{k} = {v}")
    path.write_text("\n".join(lines) + "\n")


def _parse_toml_simple(text: str) -> dict:
    """Minimal TOML parser for flat key=value files."""
    result = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip()
            if v.startswith('"') and v.endswith('"'):
                v = v[1:-1]
            elif v.isdigit():
                v = int(v)
            elif v == "true":
                v = True
            elif v == "false":
                v = False
            result[k] = v
    return result

"""Vault: a directory of markdown notes used as the document store.

Documents are addressed by vault-relative POSIX paths such as
"Notes/Biology/cell.md". Reads see LF line endings; a write keeps the
note's CRLF endings and its permission bits.
"""

import os
import pathlib
import shutil
import tempfile


class Vault:
    def __init__(self, root: pathlib.Path | str):
        self.root = pathlib.Path(root).resolve()

    def _resolve(self, path: str) -> pathlib.Path:
        full = (self.root / path).resolve()
        if full != self.root and self.root not in full.parents:
            raise ValueError(f"Path escapes vault: {path}")
        return full

    def relative(self, path: pathlib.Path | str) -> str:
        """Turn a filesystem path (absolute or cwd-relative) into a vault path."""
        full = pathlib.Path(path).resolve()
        try:
            return full.relative_to(self.root).as_posix()
        except ValueError:
            raise ValueError(f"{path} is not inside vault {self.root}") from None

    def list_documents(self) -> list[str]:
        results = []
        self._walk(self.root, results)
        return results

    def _walk(self, dirpath: pathlib.Path, results: list):
        try:
            entries = sorted(dirpath.iterdir())
        except PermissionError:
            return
        for item in entries:
            if item.is_dir() and not item.name.startswith("."):
                self._walk(item, results)
            elif item.is_file() and item.suffix == ".md":
                results.append(item.relative_to(self.root).as_posix())

    def read(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def write(self, path: str, text: str):
        """Replace the document's content; readers never see a partial file."""
        full = self._resolve(path)
        if not full.is_file():
            raise FileNotFoundError(f"No such document: {path}")
        if b"\r\n" in full.read_bytes():
            text = text.replace("\r\n", "\n").replace("\n", "\r\n")
        fd, tmp = tempfile.mkstemp(dir=full.parent, prefix=f".{full.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            shutil.copymode(full, tmp)
            os.replace(tmp, full)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def folder_exists(self, path: str) -> bool:
        return self._resolve(path).is_dir()

    def create_folder(self, path: str):
        self._resolve(path).mkdir(parents=True)

    def move(self, path: str, new_path: str):
        src = self._resolve(path)
        dst = self._resolve(new_path)
        if dst.exists():
            raise FileExistsError(f"Destination already exists: {new_path}")
        src.rename(dst)

"""Filesystem item source: lists markdown files and creates daily notes."""

from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Iterator

from timewalk.index import Item
from timewalk.paths import daily_note_path

log = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


class VaultSource:
    """Markdown files under a vault directory.

    Parameters
    ----------
    root:
        Vault directory. Identifiers are POSIX paths relative to it.
    folder:
        Vault-relative folder that new daily notes are created in.
    """

    def __init__(self, root: Path, folder: str = "") -> None:
        self._root = Path(root)
        self._folder = folder

    @property
    def root(self) -> Path:
        return self._root

    def list_items(self) -> Iterator[Item]:
        """Yield every markdown file, skipping hidden directories.

        Raises OSError if the vault directory cannot be read.
        """
        if not self._root.is_dir():
            raise FileNotFoundError(f"Vault not found: {self._root}")

        def _raise(err: OSError) -> None:
            raise err

        for dirpath, dirnames, filenames in os.walk(self._root, onerror=_raise):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
            for name in sorted(filenames):
                if name.startswith(".") or not name.lower().endswith(MARKDOWN_SUFFIX):
                    continue
                rel = (Path(dirpath) / name).relative_to(self._root).as_posix()
                yield Item(rel, rel)

    def create_item(self, day: date) -> str:
        """Create the daily note for ``day`` and return its identifier.

        An existing note is left untouched.
        """
        rel = daily_note_path(day, self._folder)
        path = self._root / rel
        if path.exists():
            log.debug("Daily note already exists: %s", rel)
            return rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"# {day.isoformat()}\n", encoding="utf-8")
        log.info("Created daily note %s", rel)
        return rel

    def resolve(self, identifier: str) -> Path:
        return self._root / identifier

"""Filesystem watcher that keeps the daily note index current.

A ``watchdog`` observer on the vault directory rebuilds the index on
every structural change: file or directory creation, deletion and
moves. Content edits do not change the index and are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from timewalk.index import DailyNoteIndex, IndexSnapshot, RebuildError

log = logging.getLogger(__name__)


# Callback signature: (vault-relative path of the changed entry)
ChangeCallback = Callable[[str], None]


class _VaultEventHandler(FileSystemEventHandler):
    """Watchdog handler that calls back on structural vault changes."""

    def __init__(
        self,
        callback: ChangeCallback,
        vault_root: Path,
        extensions: tuple[str, ...] = (".md",),
    ) -> None:
        super().__init__()
        self._callback = callback
        self._vault_root = vault_root
        self._extensions = extensions

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event.src_path, event.is_directory)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._handle(event.src_path, event.is_directory)

    def on_moved(self, event: FileSystemEvent) -> None:
        # A move touches two paths; either side may be a daily note
        if self._relevant(event.src_path, event.is_directory) or self._relevant(
            event.dest_path, event.is_directory
        ):
            self._callback(self._relative(event.dest_path) or self._relative(event.src_path))

    def _handle(self, abs_path: str | bytes, is_directory: bool) -> None:
        if self._relevant(abs_path, is_directory):
            self._callback(self._relative(abs_path))

    def _relative(self, abs_path: str | bytes) -> str:
        path = Path(abs_path if isinstance(abs_path, str) else abs_path.decode())
        try:
            return path.relative_to(self._vault_root).as_posix()
        except ValueError:
            return ""

    def _relevant(self, abs_path: str | bytes, is_directory: bool) -> bool:
        rel = self._relative(abs_path)
        if not rel:
            return False
        # Skip hidden files and dot-directories (.obsidian, .timewalk, .git)
        if any(p.startswith(".") for p in Path(rel).parts):
            return False
        if is_directory:
            return True
        return Path(rel).suffix.lower() in self._extensions


class VaultWatcher:
    """Watchdog-based watcher that rebuilds ``index`` on vault changes.

    Parameters
    ----------
    index:
        Index to rebuild.
    vault_root:
        Vault directory to observe recursively.
    on_rebuild:
        Optional hook called with (changed path, new snapshot) after each
        successful rebuild.
    """

    def __init__(
        self,
        index: DailyNoteIndex,
        vault_root: Path,
        on_rebuild: Callable[[str, IndexSnapshot], None] | None = None,
    ) -> None:
        self._index = index
        self._vault_root = Path(vault_root)
        self._on_rebuild = on_rebuild
        self._observer: Observer | None = None

    def on_change(self, rel_path: str) -> None:
        """Rebuild after a change; failures are logged, not raised."""
        log.debug("Vault change: %s", rel_path)
        try:
            snapshot = self._index.rebuild()
        except RebuildError as exc:
            log.error("Index rebuild failed: %s", exc)
            return
        if self._on_rebuild is not None:
            self._on_rebuild(rel_path, snapshot)

    def start(self) -> None:
        """Start the filesystem observer."""
        if not self._vault_root.is_dir():
            log.warning("Vault directory not found: %s", self._vault_root)
            return

        handler = _VaultEventHandler(self.on_change, self._vault_root)
        self._observer = Observer()
        self._observer.schedule(handler, str(self._vault_root), recursive=True)
        log.info("Watching: %s", self._vault_root)

        self._observer.daemon = True
        self._observer.start()

    def stop(self) -> None:
        """Stop the filesystem observer."""
        if self._observer:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    @property
    def running(self) -> bool:
        return self._observer is not None

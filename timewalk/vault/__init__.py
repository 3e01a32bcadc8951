"""Vault adapters: filesystem listing, note creation and change watching.

:class:`VaultSource` feeds the index; :class:`VaultWatcher` rebuilds it
whenever the vault's structure changes.
"""

from timewalk.vault.source import VaultSource
from timewalk.vault.watcher import VaultWatcher

__all__ = [
    "VaultSource",
    "VaultWatcher",
]

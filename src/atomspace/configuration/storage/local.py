# src/atomspace/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from atomspace.settings import Settings
    from atomspace.stores import AtomStore, QueryStore, ShareRegistry

DB_FILENAME = "atomspace.db"


@dataclass(frozen=True)
class LocalStorage:
    """Local SQLite storage.

    All owners share one database file so that shares and copies can
    reference atoms across owners:
    - atomspace.db: atoms, edges, shares and saved queries

    Args:
        data_dir: Base directory for the database file.
                  Created if it doesn't exist.

    Example:
        space = AtomSpace("alice", storage=LocalStorage("./kb_data"))
    """

    data_dir: str

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_dir, DB_FILENAME)

    def build_stores(
        self, owner_id: str, settings: Settings
    ) -> tuple[AtomStore, ShareRegistry, QueryStore]:
        """Build the stores for one owner.

        Creates the data directory if it doesn't exist.

        Returns:
            Tuple of (atom_store, share_registry, query_store)
        """
        from atomspace.stores import SQLiteAtomStore, SQLiteQueryStore, SQLiteShareRegistry

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        atom_store = SQLiteAtomStore(
            self.db_path,
            owner_id,
            busy_timeout=settings.busy_timeout,
            max_page_size=settings.max_page_size,
        )
        share_registry = SQLiteShareRegistry(
            self.db_path,
            owner_id,
            busy_timeout=settings.busy_timeout,
            max_public_limit=settings.max_public_limit,
        )
        query_store = SQLiteQueryStore(self.db_path, owner_id, busy_timeout=settings.busy_timeout)
        return atom_store, share_registry, query_store

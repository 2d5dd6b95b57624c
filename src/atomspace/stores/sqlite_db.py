# src/atomspace/stores/sqlite_db.py
"""SQLite connection handling and schema shared by all AtomSpace stores.

Every store opens connections through :func:`transaction`. A call made while
another transaction on the same database file is open in the same thread
joins that transaction instead of opening a new connection, so a batch such
as an import commits or rolls back as a single unit.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_BUSY_TIMEOUT = 5.0

_local = threading.local()

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS atoms (
        id TEXT PRIMARY KEY,
        owner_id TEXT NOT NULL,
        kind TEXT NOT NULL CHECK (kind IN ('node', 'link')),
        type_name TEXT NOT NULL,
        name TEXT,
        value TEXT,
        outgoing_key TEXT,
        tv_strength REAL NOT NULL DEFAULT 1.0,
        tv_confidence REAL NOT NULL DEFAULT 1.0,
        av_sti REAL NOT NULL DEFAULT 0.0,
        av_lti REAL NOT NULL DEFAULT 0.0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    # Find-or-create keys. Partial unique indexes make INSERT OR IGNORE race-safe.
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_atoms_node_key "
    "ON atoms(owner_id, type_name, name) WHERE kind = 'node'",
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_atoms_link_key "
    "ON atoms(owner_id, type_name, outgoing_key) WHERE kind = 'link'",
    "CREATE INDEX IF NOT EXISTS idx_atoms_owner_kind ON atoms(owner_id, kind)",
    "CREATE INDEX IF NOT EXISTS idx_atoms_owner_type ON atoms(owner_id, type_name)",
    "CREATE INDEX IF NOT EXISTS idx_atoms_owner_name ON atoms(owner_id, name)",
    """
    CREATE TABLE IF NOT EXISTS atom_edges (
        link_id TEXT NOT NULL REFERENCES atoms(id) ON DELETE CASCADE,
        target_id TEXT NOT NULL REFERENCES atoms(id) ON DELETE CASCADE,
        position INTEGER NOT NULL,
        created_at TEXT NOT NULL,
        PRIMARY KEY (link_id, position)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_edges_target ON atom_edges(target_id)",
    """
    CREATE TABLE IF NOT EXISTS atom_shares (
        id TEXT PRIMARY KEY,
        source_owner TEXT NOT NULL,
        target_owner TEXT NOT NULL,
        atom_id TEXT NOT NULL REFERENCES atoms(id) ON DELETE CASCADE,
        is_public INTEGER NOT NULL DEFAULT 0,
        share_type TEXT NOT NULL DEFAULT 'read'
            CHECK (share_type IN ('read', 'write', 'copy')),
        created_at TEXT NOT NULL,
        CHECK (source_owner <> target_owner)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_shares_owners ON atom_shares(source_owner, target_owner)",
    "CREATE INDEX IF NOT EXISTS idx_shares_target ON atom_shares(target_owner)",
    "CREATE INDEX IF NOT EXISTS idx_shares_atom ON atom_shares(atom_id)",
    "CREATE INDEX IF NOT EXISTS idx_shares_public ON atom_shares(is_public)",
    """
    CREATE TABLE IF NOT EXISTS saved_queries (
        id TEXT PRIMARY KEY,
        owner_id TEXT NOT NULL,
        pattern TEXT,
        result TEXT,
        created_at TEXT NOT NULL,
        executed_at TEXT
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_queries_owner ON saved_queries(owner_id)",
]


def _open_connections() -> dict[str, sqlite3.Connection]:
    conns: dict[str, sqlite3.Connection] | None = getattr(_local, "conns", None)
    if conns is None:
        conns = {}
        _local.conns = conns
    return conns


@contextmanager
def transaction(
    db_path: str, busy_timeout: float = DEFAULT_BUSY_TIMEOUT
) -> Iterator[sqlite3.Connection]:
    """Yield a connection inside BEGIN IMMEDIATE; commit on success, roll back on error.

    Args:
        db_path: Path to the SQLite database file
        busy_timeout: Seconds to wait for a competing writer's lock

    Yields:
        A connection with foreign keys enabled and ``sqlite3.Row`` rows
    """
    conns = _open_connections()
    active = conns.get(db_path)
    if active is not None:
        yield active
        return

    conn = sqlite3.connect(db_path, timeout=busy_timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    conns[db_path] = conn
    try:
        with conn:
            # Write lock held from the first read until commit
            conn.execute("BEGIN IMMEDIATE")
            yield conn
    finally:
        del conns[db_path]
        conn.close()


def init_db(db_path: str, busy_timeout: float = DEFAULT_BUSY_TIMEOUT) -> None:
    """Create the database file and all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    with transaction(db_path, busy_timeout) as conn:
        for statement in SCHEMA:
            conn.execute(statement)
    logger.debug("Initialized AtomSpace schema at %s", db_path)

# src/atomspace/stores/sqlite_query.py
"""SQLite saved-query store implementation."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Mapping
from typing import Any

from atomspace.models import SavedQuery
from atomspace.models.atom import utcnow
from atomspace.stores.base import QueryStore
from atomspace.stores.sqlite_db import DEFAULT_BUSY_TIMEOUT, init_db, transaction

QUERY_COLUMNS = "id, owner_id, pattern, result, created_at, executed_at"


def row_to_query(row: sqlite3.Row) -> SavedQuery:
    return SavedQuery(
        id=row["id"],
        owner_id=row["owner_id"],
        pattern_json=row["pattern"],
        result_json=row["result"],
        created_at=row["created_at"],
        executed_at=row["executed_at"],
    )


class SQLiteQueryStore(QueryStore):
    """Saved match patterns with their last cached result, per owner."""

    def __init__(
        self, db_path: str, owner_id: str, busy_timeout: float = DEFAULT_BUSY_TIMEOUT
    ) -> None:
        self.db_path = db_path
        self.owner_id = owner_id
        self.busy_timeout = busy_timeout
        init_db(db_path, busy_timeout)

    def save(self, pattern: Mapping[str, Any]) -> SavedQuery:
        """Store a pattern."""
        query = SavedQuery(owner_id=self.owner_id, pattern_json=json.dumps(dict(pattern)))
        with transaction(self.db_path, self.busy_timeout) as conn:
            conn.execute(
                f"INSERT INTO saved_queries ({QUERY_COLUMNS}) VALUES (?, ?, ?, NULL, ?, NULL)",
                (query.id, query.owner_id, query.pattern_json, query.created_at.isoformat()),
            )
        return query

    def get(self, query_id: str) -> SavedQuery | None:
        """Retrieve a saved query by ID."""
        with transaction(self.db_path, self.busy_timeout) as conn:
            row = conn.execute(
                f"SELECT {QUERY_COLUMNS} FROM saved_queries WHERE id = ? AND owner_id = ?",
                (query_id, self.owner_id),
            ).fetchone()
        return row_to_query(row) if row is not None else None

    def list_queries(self) -> list[SavedQuery]:
        """List saved queries, newest first."""
        with transaction(self.db_path, self.busy_timeout) as conn:
            rows = conn.execute(
                f"SELECT {QUERY_COLUMNS} FROM saved_queries WHERE owner_id = ? "
                "ORDER BY created_at DESC, rowid DESC",
                (self.owner_id,),
            ).fetchall()
        return [row_to_query(row) for row in rows]

    def record_result(self, query_id: str, result: list[dict[str, Any]]) -> SavedQuery | None:
        """Cache the latest result of a saved query and stamp the execution time."""
        with transaction(self.db_path, self.busy_timeout) as conn:
            cursor = conn.execute(
                "UPDATE saved_queries SET result = ?, executed_at = ? "
                "WHERE id = ? AND owner_id = ?",
                (json.dumps(result, default=str), utcnow().isoformat(), query_id, self.owner_id),
            )
            if not cursor.rowcount:
                return None
        return self.get(query_id)

    def delete(self, query_id: str) -> bool:
        """Delete a saved query."""
        with transaction(self.db_path, self.busy_timeout) as conn:
            cursor = conn.execute(
                "DELETE FROM saved_queries WHERE id = ? AND owner_id = ?",
                (query_id, self.owner_id),
            )
            return cursor.rowcount > 0

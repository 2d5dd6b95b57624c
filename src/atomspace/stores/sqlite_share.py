# src/atomspace/stores/sqlite_share.py
"""SQLite share registry implementation."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import AbstractContextManager
from uuid import uuid4

from atomspace.exceptions import NotFoundError, ValidationError
from atomspace.models import SHARE_TYPES, Atom, Permission, Share
from atomspace.models.atom import utcnow
from atomspace.stores.base import ShareRegistry
from atomspace.stores.sqlite_atom import SQLiteAtomStore, atom_columns, row_to_atom
from atomspace.stores.sqlite_db import DEFAULT_BUSY_TIMEOUT, init_db, transaction

logger = logging.getLogger(__name__)

SHARE_COLUMNS = "id, source_owner, target_owner, atom_id, is_public, share_type, created_at"

DEFAULT_MAX_PUBLIC_LIMIT = 100


def row_to_share(row: sqlite3.Row) -> Share:
    return Share(
        id=row["id"],
        source_owner=row["source_owner"],
        target_owner=row["target_owner"],
        atom_id=row["atom_id"],
        is_public=bool(row["is_public"]),
        share_type=row["share_type"],
        created_at=row["created_at"],
    )


def _unique(atoms: list[Atom]) -> list[Atom]:
    seen: set[str] = set()
    result = []
    for atom in atoms:
        if atom.id not in seen:
            seen.add(atom.id)
            result.append(atom)
    return result


class SQLiteShareRegistry(ShareRegistry):
    """SQLite-backed share registry acting on behalf of one owner.

    Shares never change ownership. The registry only reads atoms by id,
    except for copy shares, which write a duplicate into the target's store.
    """

    def __init__(
        self,
        db_path: str,
        owner_id: str,
        busy_timeout: float = DEFAULT_BUSY_TIMEOUT,
        max_public_limit: int = DEFAULT_MAX_PUBLIC_LIMIT,
    ) -> None:
        """Initialize the registry.

        Args:
            db_path: Path to SQLite database file
            owner_id: The acting owner
            busy_timeout: Seconds to wait for a competing writer's lock
            max_public_limit: Upper bound for get_public_atoms
        """
        self.db_path = db_path
        self.owner_id = owner_id
        self.busy_timeout = busy_timeout
        self.max_public_limit = max_public_limit
        init_db(db_path, busy_timeout)

    def _transaction(self) -> AbstractContextManager[sqlite3.Connection]:
        return transaction(self.db_path, self.busy_timeout)

    def share_atom(
        self,
        atom_id: str,
        target_owner: str,
        share_type: str = "read",
        is_public: bool = False,
    ) -> Share:
        """Grant an owned atom to another owner.

        Raises:
            ValidationError: If target_owner is the acting owner or share_type is unknown
            NotFoundError: If the atom is not owned by the acting owner
        """
        if share_type not in SHARE_TYPES:
            raise ValidationError(
                f"Invalid share type '{share_type}'. Must be one of: {', '.join(SHARE_TYPES)}"
            )
        if str(target_owner) == self.owner_id:
            raise ValidationError("Cannot share an atom with its own owner")

        share = Share(
            source_owner=self.owner_id,
            target_owner=str(target_owner),
            atom_id=str(atom_id),
            share_type=share_type,  # type: ignore[arg-type]
            is_public=bool(is_public),
        )
        with self._transaction() as conn:
            owned = conn.execute(
                "SELECT 1 FROM atoms WHERE id = ? AND owner_id = ?",
                (share.atom_id, self.owner_id),
            ).fetchone()
            if owned is None:
                raise NotFoundError(share.atom_id)
            conn.execute(
                f"INSERT INTO atom_shares ({SHARE_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    share.id,
                    share.source_owner,
                    share.target_owner,
                    share.atom_id,
                    int(share.is_public),
                    share.share_type,
                    share.created_at.isoformat(),
                ),
            )
        logger.debug(
            "Shared atom %s from %s to %s (%s, public=%s)",
            share.atom_id,
            share.source_owner,
            share.target_owner,
            share.share_type,
            share.is_public,
        )
        return share

    def get_share(self, share_id: str) -> Share | None:
        """Retrieve a share the acting owner gave or received."""
        with self._transaction() as conn:
            row = conn.execute(
                f"SELECT {SHARE_COLUMNS} FROM atom_shares "
                "WHERE id = ? AND (source_owner = ? OR target_owner = ?)",
                (share_id, self.owner_id, self.owner_id),
            ).fetchone()
        return row_to_share(row) if row is not None else None

    def list_shares(self, atom_id: str | None = None) -> list[Share]:
        """List shares given by the acting owner."""
        query = f"SELECT {SHARE_COLUMNS} FROM atom_shares WHERE source_owner = ?"
        params = [self.owner_id]
        if atom_id is not None:
            query += " AND atom_id = ?"
            params.append(str(atom_id))
        query += " ORDER BY created_at, rowid"
        with self._transaction() as conn:
            rows = conn.execute(query, params).fetchall()
        return [row_to_share(row) for row in rows]

    def get_shared_atoms(self, source_owner: str | None = None) -> list[Atom]:
        """All atoms shared to the acting owner, optionally only from one sharer."""
        query = (
            f"SELECT {atom_columns('a')} FROM atom_shares s "
            "JOIN atoms a ON a.id = s.atom_id "
            "WHERE s.target_owner = ?"
        )
        params = [self.owner_id]
        if source_owner is not None:
            query += " AND s.source_owner = ?"
            params.append(str(source_owner))
        query += " ORDER BY s.created_at, s.rowid"
        with self._transaction() as conn:
            rows = conn.execute(query, params).fetchall()
        return _unique([row_to_atom(row) for row in rows])

    def get_public_atoms(self, limit: int = 100) -> list[Atom]:
        """Atoms with at least one public share, across all owners.

        ``limit`` is clamped into [1, max_public_limit].
        """
        limit = max(1, min(int(limit), self.max_public_limit))
        with self._transaction() as conn:
            rows = conn.execute(
                f"""
                SELECT {atom_columns()} FROM atoms
                WHERE id IN (SELECT atom_id FROM atom_shares WHERE is_public = 1)
                ORDER BY created_at, rowid
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [row_to_atom(row) for row in rows]

    def copy_to_target(self, share: Share) -> Atom:
        """Duplicate a copy-shared atom into the target owner's store.

        The copy gets a new id and keeps type, name, value and truth value.
        A link copy points at the original targets, not at copies of them.

        Raises:
            ValidationError: If the share is not a copy share
            NotFoundError: If the share or its atom no longer exists
        """
        with self._transaction() as conn:
            stored = self.get_share(share.id)
            if stored is None:
                raise NotFoundError(share.atom_id, f"Share not found: {share.id}")
            # Only the stored share type counts
            if stored.share_type != "copy":
                raise ValidationError(
                    f"Share {stored.id} is a {stored.share_type} share, not copy"
                )
            row = conn.execute(
                f"SELECT {atom_columns()} FROM atoms WHERE id = ?", (stored.atom_id,)
            ).fetchone()
            if row is None:
                raise NotFoundError(stored.atom_id)
            source = row_to_atom(row)

            target_store = SQLiteAtomStore(
                self.db_path, stored.target_owner, busy_timeout=self.busy_timeout
            )
            outgoing_ids = target_store.outgoing_ids(source) if source.is_link else None
            copy = target_store.add_copy(source, outgoing_ids)

        logger.info(
            "Copied atom %s from %s to %s as %s",
            source.id,
            stored.source_owner,
            stored.target_owner,
            copy.id,
        )
        return copy

    def permission(self, atom: Atom) -> Permission:
        """Effective permission of the acting owner on an atom.

        Owners can write their own atoms; a write share grants write; any other
        share to the acting owner, or any public share, grants read.
        """
        if atom.owner_id == self.owner_id:
            return Permission.WRITE
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT target_owner, share_type FROM atom_shares "
                "WHERE atom_id = ? AND (target_owner = ? OR is_public = 1)",
                (atom.id, self.owner_id),
            ).fetchall()
        if any(
            row["target_owner"] == self.owner_id and row["share_type"] == "write" for row in rows
        ):
            return Permission.WRITE
        return Permission.READ if rows else Permission.NONE

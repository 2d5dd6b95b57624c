# src/atomspace/stores/sqlite_atom.py
"""SQLite atom store implementation."""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from atomspace.exceptions import NotFoundError, ValidationError
from atomspace.models import (
    LINK_TYPES,
    NODE_TYPES,
    Atom,
    AtomSpaceStats,
    AttentionValue,
    TruthValue,
)
from atomspace.models.atom import encode_value, utcnow
from atomspace.stores.base import AtomStore, AttentionValueLike, TruthValueLike
from atomspace.stores.sqlite_db import DEFAULT_BUSY_TIMEOUT, init_db, transaction

logger = logging.getLogger(__name__)

ATOM_COLUMNS = (
    "id",
    "owner_id",
    "kind",
    "type_name",
    "name",
    "value",
    "tv_strength",
    "tv_confidence",
    "av_sti",
    "av_lti",
    "created_at",
    "updated_at",
)

DEFAULT_MAX_PAGE_SIZE = 1000


def atom_columns(alias: str = "") -> str:
    """Column list for SELECTs, optionally qualified with a table alias."""
    prefix = f"{alias}." if alias else ""
    return ", ".join(prefix + col for col in ATOM_COLUMNS)


def row_to_atom(row: sqlite3.Row) -> Atom:
    """Build an Atom from a row selected with :func:`atom_columns`."""
    return Atom(
        id=row["id"],
        owner_id=row["owner_id"],
        kind=row["kind"],
        type_name=row["type_name"],
        name=row["name"],
        raw_value=row["value"],
        truth_value=TruthValue(strength=row["tv_strength"], confidence=row["tv_confidence"]),
        attention_value=AttentionValue(sti=row["av_sti"], lti=row["av_lti"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _truth(tv: TruthValueLike | None) -> TruthValue:
    if tv is None:
        return TruthValue()
    if isinstance(tv, TruthValue):
        return tv
    try:
        return TruthValue.model_validate(dict(tv))
    except (PydanticValidationError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid truth value: {tv!r}") from e


def _attention(av: AttentionValueLike | None) -> AttentionValue:
    if av is None:
        return AttentionValue()
    if isinstance(av, AttentionValue):
        return av
    try:
        return AttentionValue.model_validate(dict(av))
    except (PydanticValidationError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid attention value: {av!r}") from e


def _outgoing_key(ids: list[str]) -> str:
    return json.dumps(ids)


class SQLiteAtomStore(AtomStore):
    """SQLite-based atom store for a single owner.

    Atoms and their ordered outgoing edges live in the ``atoms`` and
    ``atom_edges`` tables. Deletes cascade through foreign keys.
    """

    def __init__(
        self,
        db_path: str,
        owner_id: str,
        busy_timeout: float = DEFAULT_BUSY_TIMEOUT,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ) -> None:
        """Initialize the SQLite atom store."""
        self.db_path = db_path
        self.owner_id = owner_id
        self.busy_timeout = busy_timeout
        self.max_page_size = max_page_size
        init_db(db_path, busy_timeout)

    def _transaction(self) -> AbstractContextManager[sqlite3.Connection]:
        return transaction(self.db_path, self.busy_timeout)

    def batch(self) -> AbstractContextManager[sqlite3.Connection]:
        """Open a transaction that nested store calls in this thread join."""
        return self._transaction()

    def add_node(
        self,
        type_name: str,
        name: str,
        value: Any = None,
        tv: TruthValueLike | None = None,
        av: AttentionValueLike | None = None,
    ) -> Atom:
        """Find or create a node.

        If a node with the same (owner, type_name, name) exists it is returned
        unchanged; ``value``, ``tv`` and ``av`` only apply on creation.

        Raises:
            ValidationError: If type_name is not a node type or name is empty
        """
        if type_name not in NODE_TYPES:
            raise ValidationError(f"Invalid node type: {type_name}")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Name is required for nodes")
        return self._find_or_create_node(
            type_name, name, encode_value(value), _truth(tv), _attention(av)
        )

    def add_link(
        self,
        type_name: str,
        outgoing_ids: list[str],
        tv: TruthValueLike | None = None,
        av: AttentionValueLike | None = None,
    ) -> Atom:
        """Find or create a link over an ordered list of owned atoms.

        The link row and all of its edges are written in one transaction.

        Raises:
            ValidationError: If type_name is not a link type or outgoing_ids is empty
            NotFoundError: If an outgoing id is not an atom owned by this owner
        """
        if type_name not in LINK_TYPES:
            raise ValidationError(f"Invalid link type: {type_name}")
        if not outgoing_ids:
            raise ValidationError("Outgoing set cannot be empty")
        ids = [target.id if isinstance(target, Atom) else str(target) for target in outgoing_ids]

        with self._transaction() as conn:
            self._require_owned(conn, ids)
            return self._find_or_create_link(type_name, ids, _truth(tv), _attention(av))

    def add_copy(self, source: Atom, outgoing_ids: list[str] | None = None) -> Atom:
        """Duplicate an atom into this store.

        The copy keeps type, name, value and truth value. A link copy points at
        the same targets as the source (``outgoing_ids``), which may belong to
        another owner. An equivalent atom already owned here is reused.
        """
        if source.is_node:
            assert source.name is not None
            return self._find_or_create_node(
                source.type_name,
                source.name,
                source.raw_value,
                source.truth_value,
                AttentionValue(),
            )
        if not outgoing_ids:
            raise ValidationError(f"Link {source.id} has no outgoing set to copy")
        return self._find_or_create_link(
            source.type_name, list(outgoing_ids), source.truth_value, AttentionValue()
        )

    def _find_or_create_node(
        self,
        type_name: str,
        name: str,
        raw_value: str | None,
        truth: TruthValue,
        attention: AttentionValue,
    ) -> Atom:
        now = utcnow().isoformat()
        with self._transaction() as conn:
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO atoms (
                    id, owner_id, kind, type_name, name, value,
                    tv_strength, tv_confidence, av_sti, av_lti, created_at, updated_at
                )
                VALUES (?, ?, 'node', ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(uuid4()),
                    self.owner_id,
                    type_name,
                    name,
                    raw_value,
                    truth.strength,
                    truth.confidence,
                    attention.sti,
                    attention.lti,
                    now,
                    now,
                ),
            )
            if cursor.rowcount:
                logger.debug("Created %s %r for owner %s", type_name, name, self.owner_id)
            row = conn.execute(
                f"SELECT {atom_columns()} FROM atoms "
                "WHERE owner_id = ? AND kind = 'node' AND type_name = ? AND name = ?",
                (self.owner_id, type_name, name),
            ).fetchone()
        return row_to_atom(row)

    def _find_or_create_link(
        self,
        type_name: str,
        ids: list[str],
        truth: TruthValue,
        attention: AttentionValue,
    ) -> Atom:
        now = utcnow().isoformat()
        key = _outgoing_key(ids)
        link_id = str(uuid4())
        with self._transaction() as conn:
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO atoms (
                    id, owner_id, kind, type_name, name, value, outgoing_key,
                    tv_strength, tv_confidence, av_sti, av_lti, created_at, updated_at
                )
                VALUES (?, ?, 'link', ?, NULL, NULL, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    link_id,
                    self.owner_id,
                    type_name,
                    key,
                    truth.strength,
                    truth.confidence,
                    attention.sti,
                    attention.lti,
                    now,
                    now,
                ),
            )
            if cursor.rowcount:
                conn.executemany(
                    "INSERT INTO atom_edges (link_id, target_id, position, created_at) "
                    "VALUES (?, ?, ?, ?)",
                    [(link_id, target_id, position, now) for position, target_id in enumerate(ids)],
                )
                logger.debug(
                    "Created %s over %d atoms for owner %s", type_name, len(ids), self.owner_id
                )
            row = conn.execute(
                f"SELECT {atom_columns()} FROM atoms "
                "WHERE owner_id = ? AND kind = 'link' AND type_name = ? AND outgoing_key = ?",
                (self.owner_id, type_name, key),
            ).fetchone()
        return row_to_atom(row)

    def _require_owned(self, conn: sqlite3.Connection, ids: list[str]) -> None:
        unique_ids = list(dict.fromkeys(ids))
        placeholders = ",".join("?" * len(unique_ids))
        cursor = conn.execute(
            f"SELECT id FROM atoms WHERE owner_id = ? AND id IN ({placeholders})",
            [self.owner_id, *unique_ids],
        )
        found = {row["id"] for row in cursor.fetchall()}
        for atom_id in unique_ids:
            if atom_id not in found:
                raise NotFoundError(atom_id, f"Outgoing atom not found: {atom_id}")

    def get_atom(self, atom_id: str) -> Atom | None:
        """Retrieve an owned atom by ID."""
        with self._transaction() as conn:
            row = conn.execute(
                f"SELECT {atom_columns()} FROM atoms WHERE id = ? AND owner_id = ?",
                (str(atom_id), self.owner_id),
            ).fetchone()
        return row_to_atom(row) if row is not None else None

    def find_node(self, type_name: str, name: str) -> Atom | None:
        """Look up a node by (type_name, name)."""
        with self._transaction() as conn:
            row = conn.execute(
                f"SELECT {atom_columns()} FROM atoms "
                "WHERE owner_id = ? AND kind = 'node' AND type_name = ? AND name = ?",
                (self.owner_id, type_name, name),
            ).fetchone()
        return row_to_atom(row) if row is not None else None

    def delete_atom(self, atom_id: str) -> bool:
        """Delete an owned atom.

        Foreign keys cascade the delete to the atom's outgoing edges, edges
        that target it, and shares that reference it. Links that pointed at
        the atom are then rekeyed on their remaining targets, see
        :meth:`_reconcile_links`.
        """
        with self._transaction() as conn:
            affected = self._links_targeting(conn, str(atom_id))
            cursor = conn.execute(
                "DELETE FROM atoms WHERE id = ? AND owner_id = ?",
                (str(atom_id), self.owner_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                self._reconcile_links(conn, affected)
        if deleted:
            logger.debug("Deleted atom %s for owner %s", atom_id, self.owner_id)
        return deleted

    @staticmethod
    def _links_targeting(conn: sqlite3.Connection, atom_id: str) -> list[str]:
        rows = conn.execute(
            "SELECT DISTINCT link_id FROM atom_edges WHERE target_id = ?", (atom_id,)
        ).fetchall()
        return [row["link_id"] for row in rows]

    def _reconcile_links(self, conn: sqlite3.Connection, link_ids: list[str]) -> None:
        """Restore link identity after targets were removed from outgoing sets.

        Each link's ``outgoing_key`` is recomputed from its live edges:

        - a link left with no targets is deleted, and links pointing at it are
          reconciled in turn;
        - a link whose remaining sequence equals that of an existing link of
          the same owner and type is merged into it: edges and shares that
          referenced it move to the existing link, which keeps its id and
          values;
        - otherwise the link is rekeyed in place.

        Links of every owner are reconciled, since copies may point across owners.
        """
        pending = list(dict.fromkeys(link_ids))
        now = utcnow().isoformat()
        while pending:
            link_id = pending.pop(0)
            link = conn.execute(
                "SELECT owner_id, type_name FROM atoms WHERE id = ? AND kind = 'link'",
                (link_id,),
            ).fetchone()
            if link is None:
                continue

            ids = [
                row["target_id"]
                for row in conn.execute(
                    "SELECT target_id FROM atom_edges WHERE link_id = ? ORDER BY position",
                    (link_id,),
                )
            ]
            dependents = self._links_targeting(conn, link_id)

            if not ids:
                conn.execute("DELETE FROM atoms WHERE id = ?", (link_id,))
                logger.debug("Deleted link %s: no targets left", link_id)
                pending.extend(dependents)
                continue

            key = _outgoing_key(ids)
            survivor = conn.execute(
                "SELECT id FROM atoms WHERE owner_id = ? AND kind = 'link' "
                "AND type_name = ? AND outgoing_key = ? AND id <> ?",
                (link["owner_id"], link["type_name"], key, link_id),
            ).fetchone()
            if survivor is None:
                conn.execute(
                    "UPDATE atoms SET outgoing_key = ?, updated_at = ? WHERE id = ?",
                    (key, now, link_id),
                )
                continue

            conn.execute(
                "UPDATE atom_edges SET target_id = ? WHERE target_id = ?",
                (survivor["id"], link_id),
            )
            conn.execute(
                "UPDATE atom_shares SET atom_id = ? WHERE atom_id = ?",
                (survivor["id"], link_id),
            )
            conn.execute("DELETE FROM atoms WHERE id = ?", (link_id,))
            logger.debug("Merged link %s into %s", link_id, survivor["id"])
            pending.extend(dependents)

    def get_atoms(
        self, type_name: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Atom]:
        """List owned atoms. ``limit`` is clamped into [1, max_page_size]."""
        limit = max(1, min(int(limit), self.max_page_size))
        offset = max(0, int(offset))
        query = f"SELECT {atom_columns()} FROM atoms WHERE owner_id = ?"
        params: list[Any] = [self.owner_id]
        if type_name:
            query += " AND type_name = ?"
            params.append(type_name)
        query += " ORDER BY created_at, rowid LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        with self._transaction() as conn:
            rows = conn.execute(query, params).fetchall()
        return [row_to_atom(row) for row in rows]

    def iter_atoms(self, cap: int | None = None) -> Iterator[Atom]:
        """Iterate over every owned atom in creation order."""
        query = f"SELECT {atom_columns()} FROM atoms WHERE owner_id = ? ORDER BY created_at, rowid"
        params: list[Any] = [self.owner_id]
        if cap is not None:
            query += " LIMIT ?"
            params.append(cap)
        with self._transaction() as conn:
            rows = conn.execute(query, params).fetchall()
        for row in rows:
            yield row_to_atom(row)

    def count_atoms(self) -> int:
        """Count the atoms owned by this owner."""
        with self._transaction() as conn:
            count = conn.execute(
                "SELECT COUNT(id) FROM atoms WHERE owner_id = ?", (self.owner_id,)
            ).fetchone()
        return count[0] if count else 0

    def stats(self) -> AtomSpaceStats:
        """Aggregate counts for this owner, including shares given and received."""
        with self._transaction() as conn:
            rows = conn.execute(
                """
                SELECT kind, type_name, COUNT(id) AS n FROM atoms
                WHERE owner_id = ?
                GROUP BY kind, type_name
                ORDER BY n DESC, type_name
                """,
                (self.owner_id,),
            ).fetchall()
            shared_out = conn.execute(
                "SELECT COUNT(id) FROM atom_shares WHERE source_owner = ?", (self.owner_id,)
            ).fetchone()[0]
            shared_in = conn.execute(
                "SELECT COUNT(id) FROM atom_shares WHERE target_owner = ?", (self.owner_id,)
            ).fetchone()[0]

        result = AtomSpaceStats(shared_out=shared_out, shared_in=shared_in)
        for row in rows:
            result.type_distribution[row["type_name"]] = row["n"]
            result.total += row["n"]
            if row["kind"] == "node":
                result.node_count += row["n"]
            else:
                result.link_count += row["n"]
        return result

    def outgoing(self, atom: Atom) -> list[Atom]:
        """Resolve a link's targets in position order, skipping missing ones."""
        if not atom.is_link:
            return []
        with self._transaction() as conn:
            rows = conn.execute(
                f"""
                SELECT {atom_columns("a")} FROM atom_edges e
                JOIN atoms a ON a.id = e.target_id
                WHERE e.link_id = ?
                ORDER BY e.position
                """,
                (atom.id,),
            ).fetchall()
        return [row_to_atom(row) for row in rows]

    def outgoing_ids(self, atom: Atom) -> list[str]:
        """A link's target ids in position order."""
        if not atom.is_link:
            return []
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT target_id FROM atom_edges WHERE link_id = ? ORDER BY position",
                (atom.id,),
            ).fetchall()
        return [row["target_id"] for row in rows]

    def incoming(self, atom: Atom) -> list[Atom]:
        """Owned links that reference the atom, each listed once."""
        with self._transaction() as conn:
            rows = conn.execute(
                f"""
                SELECT {atom_columns()} FROM atoms
                WHERE owner_id = ?
                  AND id IN (SELECT link_id FROM atom_edges WHERE target_id = ?)
                ORDER BY created_at, rowid
                """,
                (self.owner_id, atom.id),
            ).fetchall()
        return [row_to_atom(row) for row in rows]

    def set_tv(self, atom_id: str, strength: float, confidence: float) -> bool:
        """Update an owned atom's truth value, clamping both components."""
        truth = _truth({"strength": strength, "confidence": confidence})
        return self._update(
            atom_id,
            "tv_strength = ?, tv_confidence = ?",
            (truth.strength, truth.confidence),
        )

    def set_av(self, atom_id: str, sti: float, lti: float) -> bool:
        """Update an owned atom's attention value."""
        attention = _attention({"sti": sti, "lti": lti})
        return self._update(atom_id, "av_sti = ?, av_lti = ?", (attention.sti, attention.lti))

    def _update(self, atom_id: str, assignments: str, values: tuple[float, float]) -> bool:
        with self._transaction() as conn:
            cursor = conn.execute(
                f"UPDATE atoms SET {assignments}, updated_at = ? WHERE id = ? AND owner_id = ?",
                (*values, utcnow().isoformat(), str(atom_id), self.owner_id),
            )
            return cursor.rowcount > 0

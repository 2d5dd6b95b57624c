# src/atomspace/stores/base.py
"""Abstract base classes for storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager
from typing import Any

from atomspace.models import (
    Atom,
    AtomSpaceStats,
    AttentionValue,
    Permission,
    SavedQuery,
    Share,
    TruthValue,
)

TruthValueLike = TruthValue | Mapping[str, float]
AttentionValueLike = AttentionValue | Mapping[str, float]


class AtomStore(ABC):
    """Abstract base class for one owner's atom storage.

    All reads are scoped to ``owner_id``: an atom belonging to another owner
    is reported as missing, never as forbidden.
    """

    owner_id: str

    @abstractmethod
    def batch(self) -> AbstractContextManager[Any]:
        """Group several mutating calls into one all-or-nothing transaction."""
        ...

    @abstractmethod
    def add_node(
        self,
        type_name: str,
        name: str,
        value: Any = None,
        tv: TruthValueLike | None = None,
        av: AttentionValueLike | None = None,
    ) -> Atom:
        """Find or create a node keyed on (owner, type_name, name)."""
        ...

    @abstractmethod
    def add_link(
        self,
        type_name: str,
        outgoing_ids: list[str],
        tv: TruthValueLike | None = None,
        av: AttentionValueLike | None = None,
    ) -> Atom:
        """Find or create a link keyed on (owner, type_name, ordered outgoing ids)."""
        ...

    @abstractmethod
    def add_copy(self, source: Atom, outgoing_ids: list[str] | None = None) -> Atom:
        """Duplicate an atom from another owner into this store."""
        ...

    @abstractmethod
    def get_atom(self, atom_id: str) -> Atom | None:
        """Retrieve an owned atom by ID. Returns None if missing or not owned."""
        ...

    @abstractmethod
    def find_node(self, type_name: str, name: str) -> Atom | None:
        """Look up a node by its identity key."""
        ...

    @abstractmethod
    def delete_atom(self, atom_id: str) -> bool:
        """Delete an owned atom with its edges and shares. False if not found."""
        ...

    @abstractmethod
    def get_atoms(
        self, type_name: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[Atom]:
        """Paginated listing, ordered by creation."""
        ...

    @abstractmethod
    def iter_atoms(self, cap: int | None = None) -> Iterator[Atom]:
        """Iterate over every owned atom, up to an optional safety cap."""
        ...

    @abstractmethod
    def count_atoms(self) -> int:
        """Count the atoms owned by this owner."""
        ...

    @abstractmethod
    def stats(self) -> AtomSpaceStats:
        """Aggregate counts for this owner."""
        ...

    @abstractmethod
    def outgoing(self, atom: Atom) -> list[Atom]:
        """Targets of a link in position order. Empty for nodes."""
        ...

    @abstractmethod
    def outgoing_ids(self, atom: Atom) -> list[str]:
        """Target ids of a link in position order."""
        ...

    @abstractmethod
    def incoming(self, atom: Atom) -> list[Atom]:
        """Links that reference the atom anywhere in their outgoing set."""
        ...

    @abstractmethod
    def set_tv(self, atom_id: str, strength: float, confidence: float) -> bool:
        """Update an atom's truth value. False if not found."""
        ...

    @abstractmethod
    def set_av(self, atom_id: str, sti: float, lti: float) -> bool:
        """Update an atom's attention value. False if not found."""
        ...


class ShareRegistry(ABC):
    """Abstract base class for cross-owner share grants."""

    owner_id: str

    @abstractmethod
    def share_atom(
        self,
        atom_id: str,
        target_owner: str,
        share_type: str = "read",
        is_public: bool = False,
    ) -> Share:
        """Grant an owned atom to another owner."""
        ...

    @abstractmethod
    def get_share(self, share_id: str) -> Share | None:
        """Retrieve a share this owner gave or received."""
        ...

    @abstractmethod
    def list_shares(self, atom_id: str | None = None) -> list[Share]:
        """List shares given by this owner, optionally for one atom."""
        ...

    @abstractmethod
    def get_shared_atoms(self, source_owner: str | None = None) -> list[Atom]:
        """Atoms shared to this owner, optionally filtered by the sharer."""
        ...

    @abstractmethod
    def get_public_atoms(self, limit: int = 100) -> list[Atom]:
        """Atoms with a public share, across all owners."""
        ...

    @abstractmethod
    def copy_to_target(self, share: Share) -> Atom:
        """Duplicate the shared atom into the target owner's store."""
        ...

    @abstractmethod
    def permission(self, atom: Atom) -> Permission:
        """Effective permission this owner has on an atom."""
        ...


class QueryStore(ABC):
    """Abstract base class for saved match patterns."""

    @abstractmethod
    def save(self, pattern: Mapping[str, Any]) -> SavedQuery:
        """Store a pattern."""
        ...

    @abstractmethod
    def get(self, query_id: str) -> SavedQuery | None:
        """Retrieve a saved query by ID."""
        ...

    @abstractmethod
    def list_queries(self) -> list[SavedQuery]:
        """List saved queries, newest first."""
        ...

    @abstractmethod
    def record_result(self, query_id: str, result: list[dict[str, Any]]) -> SavedQuery | None:
        """Cache the latest result of a saved query."""
        ...

    @abstractmethod
    def delete(self, query_id: str) -> bool:
        """Delete a saved query."""
        ...

# src/atomspace/atomspace.py
"""Per-owner knowledge base facade."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

from atomspace.exceptions import NotFoundError
from atomspace.matcher import PatternLike, coerce_pattern, pattern_match
from atomspace.serializer import Serializer
from atomspace.settings import Settings
from atomspace.triples import TripleCodec

if TYPE_CHECKING:
    from atomspace.configuration import StorageConfig
    from atomspace.models import (
        Atom,
        AtomSpaceStats,
        AtomView,
        ExportPayload,
        Permission,
        SavedQuery,
        Share,
        Triple,
    )
    from atomspace.stores import AtomStore, QueryStore, ShareRegistry
    from atomspace.stores.base import TruthValueLike


class AtomSpace:
    """One owner's hypergraph knowledge base.

    Bundles the owner's atom store, share registry and saved queries with the
    pattern matcher, triple codec and serializer built on top of them.

    There are two ways to create an AtomSpace:

    1. With a storage bundle:

        from atomspace import AtomSpace, LocalStorage

        space = AtomSpace("alice", storage=LocalStorage("./kb_data"))
        space.add_triple("Alice", "knows", "Bob")

    2. With explicit stores:

        from atomspace.stores import SQLiteAtomStore, SQLiteQueryStore, SQLiteShareRegistry

        space = AtomSpace(
            "alice",
            atom_store=SQLiteAtomStore("./kb.db", "alice"),
            share_registry=SQLiteShareRegistry("./kb.db", "alice"),
            query_store=SQLiteQueryStore("./kb.db", "alice"),
        )
    """

    def __init__(
        self,
        owner_id: str,
        *,
        storage: StorageConfig | None = None,
        atom_store: AtomStore | None = None,
        share_registry: ShareRegistry | None = None,
        query_store: QueryStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Create an AtomSpace for ``owner_id``.

        Raises:
            ValueError: If neither a storage bundle nor all explicit stores are
                provided, or if both are provided.
        """
        self.owner_id = str(owner_id)
        self._settings = settings if settings is not None else Settings()

        if storage is not None:
            if any([atom_store, share_registry, query_store]):
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            self.atom_store, self.share_registry, self.query_store = storage.build_stores(
                self.owner_id, self._settings
            )
        elif all([atom_store, share_registry, query_store]):
            self.atom_store = cast("AtomStore", atom_store)
            self.share_registry = cast("ShareRegistry", share_registry)
            self.query_store = cast("QueryStore", query_store)
        else:
            raise ValueError(
                "Must provide either 'storage' or all of "
                "'atom_store', 'share_registry' and 'query_store'"
            )

        self.triples = TripleCodec(self.atom_store)
        self.serializer = Serializer(self.atom_store, export_cap=self._settings.export_cap)

    @property
    def settings(self) -> Settings:
        return self._settings

    # Atoms

    def add_node(
        self,
        type_name: str,
        name: str,
        value: Any = None,
        tv: TruthValueLike | None = None,
    ) -> Atom:
        return self.atom_store.add_node(type_name, name, value=value, tv=tv)

    def add_link(
        self,
        type_name: str,
        outgoing: list[Atom | str],
        tv: TruthValueLike | None = None,
    ) -> Atom:
        ids = [item if isinstance(item, str) else item.id for item in outgoing]
        return self.atom_store.add_link(type_name, ids, tv=tv)

    def get_atom(self, atom_id: str) -> Atom | None:
        return self.atom_store.get_atom(atom_id)

    def require_atom(self, atom_id: str) -> Atom:
        """Like get_atom, but raises NotFoundError instead of returning None."""
        atom = self.atom_store.get_atom(atom_id)
        if atom is None:
            raise NotFoundError(atom_id)
        return atom

    def delete_atom(self, atom_id: str) -> bool:
        return self.atom_store.delete_atom(atom_id)

    def get_atoms(
        self, type_name: str | None = None, limit: int | None = None, offset: int = 0
    ) -> list[Atom]:
        if limit is None:
            limit = self._settings.default_page_size
        return self.atom_store.get_atoms(type_name=type_name, limit=limit, offset=offset)

    def stats(self) -> AtomSpaceStats:
        return self.atom_store.stats()

    def outgoing(self, atom: Atom | str) -> list[Atom]:
        resolved = self._resolve(atom)
        return self.atom_store.outgoing(resolved) if resolved is not None else []

    def incoming(self, atom: Atom | str) -> list[Atom]:
        resolved = self._resolve(atom)
        return self.atom_store.incoming(resolved) if resolved is not None else []

    def set_tv(self, atom_id: str, strength: float, confidence: float) -> bool:
        return self.atom_store.set_tv(atom_id, strength, confidence)

    def set_av(self, atom_id: str, sti: float, lti: float) -> bool:
        return self.atom_store.set_av(atom_id, sti, lti)

    def _resolve(self, atom: Atom | str) -> Atom | None:
        if isinstance(atom, str):
            return self.atom_store.get_atom(atom)
        return atom

    # Pattern matching

    def query(self, pattern: PatternLike | None = None) -> list[Atom]:
        """Atoms matching every predicate in ``pattern`` (linear scan)."""
        return pattern_match(self.atom_store, pattern, cap=self._settings.export_cap)

    def save_query(self, pattern: PatternLike) -> SavedQuery:
        """Validate and store a pattern for later execution."""
        compiled = coerce_pattern(pattern)
        return self.query_store.save(compiled.model_dump(exclude_defaults=True))

    def execute_query(self, query_id: str) -> list[AtomView]:
        """Run a saved query and cache its result views.

        Raises:
            NotFoundError: If the saved query does not exist
        """
        saved = self.query_store.get(query_id)
        if saved is None:
            raise NotFoundError(query_id, f"Saved query not found: {query_id}")
        views = [self.view(atom) for atom in self.query(saved.pattern or {})]
        self.query_store.record_result(query_id, [view.model_dump(mode="json") for view in views])
        return views

    def list_queries(self) -> list[SavedQuery]:
        return self.query_store.list_queries()

    # Triples

    def add_triple(self, subject: str, predicate: str, obj: str) -> Atom:
        return self.triples.add_triple(subject, predicate, obj)

    def query_subject(self, subject: str) -> list[Triple]:
        return self.triples.query_subject(subject)

    # Sharing

    def share_atom(
        self,
        atom_id: str,
        target_owner: str,
        share_type: str = "read",
        is_public: bool = False,
    ) -> Share:
        return self.share_registry.share_atom(
            atom_id, target_owner, share_type=share_type, is_public=is_public
        )

    def get_share(self, share_id: str) -> Share | None:
        return self.share_registry.get_share(share_id)

    def list_shares(self, atom_id: str | None = None) -> list[Share]:
        return self.share_registry.list_shares(atom_id=atom_id)

    def get_shared_atoms(self, source_owner: str | None = None) -> list[Atom]:
        return self.share_registry.get_shared_atoms(source_owner=source_owner)

    def get_public_atoms(self, limit: int = 100) -> list[Atom]:
        return self.share_registry.get_public_atoms(limit=limit)

    def copy_to_target(self, share: Share) -> Atom:
        return self.share_registry.copy_to_target(share)

    def permission(self, atom: Atom) -> Permission:
        return self.share_registry.permission(atom)

    # Serialization

    def view(self, atom: Atom) -> AtomView:
        return self.serializer.view(atom)

    def export(self) -> ExportPayload:
        return self.serializer.export()

    def export_json(self, indent: int | None = None) -> str:
        return self.serializer.export_json(indent=indent)

    def import_payload(self, payload: ExportPayload | Mapping[str, Any]) -> int:
        return self.serializer.import_payload(payload)

    def import_json(self, data: str | bytes) -> int:
        return self.serializer.import_json(data)

    # Rendering

    def to_string(self, atom: Atom) -> str:
        """Render an atom in OpenCog's s-expression style.

        Example: ``(SimilarityLink (ConceptNode "Alice") (ConceptNode "Bob"))``.
        A link that reappears inside its own structure, or nesting deeper than
        ``max_render_depth``, renders as ``(TypeName ...)``.
        """
        return self._render(atom, frozenset(), 0)

    def _render(self, atom: Atom, ancestors: frozenset[str], depth: int) -> str:
        if atom.is_node:
            return f'({atom.type_name} "{atom.name}")'
        if atom.id in ancestors or depth >= self._settings.max_render_depth:
            return f"({atom.type_name} ...)"
        inner = ancestors | {atom.id}
        parts = [
            self._render(target, inner, depth + 1) for target in self.atom_store.outgoing(atom)
        ]
        return "(" + " ".join([atom.type_name, *parts]) + ")"

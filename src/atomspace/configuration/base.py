# src/atomspace/configuration/base.py
"""Protocol definitions for configuration objects.

Storage configurations are structural: any frozen dataclass with a matching
``build_stores`` method can back an AtomSpace. Store implementations
themselves use ABCs (see ``atomspace.stores.base``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from atomspace.settings import Settings
    from atomspace.stores import AtomStore, QueryStore, ShareRegistry


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_stores(
                self, owner_id: str, settings: Settings
            ) -> tuple[AtomStore, ShareRegistry, QueryStore]: ...
    """

    def build_stores(
        self, owner_id: str, settings: Settings
    ) -> tuple[AtomStore, ShareRegistry, QueryStore]:
        """Build the atom store, share registry and query store for one owner."""
        ...

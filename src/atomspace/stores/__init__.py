"""Storage abstractions for AtomSpace."""

from atomspace.stores.base import AtomStore, QueryStore, ShareRegistry
from atomspace.stores.sqlite_atom import SQLiteAtomStore
from atomspace.stores.sqlite_query import SQLiteQueryStore
from atomspace.stores.sqlite_share import SQLiteShareRegistry

__all__ = [
    "AtomStore",
    "QueryStore",
    "ShareRegistry",
    "SQLiteAtomStore",
    "SQLiteQueryStore",
    "SQLiteShareRegistry",
]

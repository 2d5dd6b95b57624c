"""Storage configurations."""

from atomspace.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]

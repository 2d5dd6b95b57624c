"""Configuration objects for AtomSpace storage."""

from atomspace.configuration.base import StorageConfig
from atomspace.configuration.storage.local import LocalStorage

__all__ = ["StorageConfig", "LocalStorage"]

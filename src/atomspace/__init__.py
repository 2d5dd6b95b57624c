"""AtomSpace - per-owner hypergraph knowledge bases.

Typed nodes and ordered links with truth and attention values, structural
pattern matching, triple encoding, sharing between owners and JSON
export/import with id remapping.

Quick Start (Local Storage):
    from atomspace import AtomSpace, LocalStorage

    space = AtomSpace("alice", storage=LocalStorage("./kb_data"))

    # Record and decode facts
    space.add_triple("Alice", "knows", "Bob")
    space.query_subject("Alice")

    # Build structure directly
    cat = space.add_node("ConceptNode", "cat")
    animal = space.add_node("ConceptNode", "animal")
    space.add_link("InheritanceLink", [cat, animal])

    # Share with another owner
    space.share_atom(cat.id, "bob", share_type="copy")

From configuration (atomspace.yaml, ATOMSPACE_* env vars):
    from atomspace.config import get_atomspace

    space = get_atomspace(owner="alice")
"""

from importlib.metadata import PackageNotFoundError, version


def _source_tree_version() -> str:
    """Version from the nearest pyproject.toml, for uninstalled checkouts."""
    import tomllib
    from pathlib import Path

    for directory in Path(__file__).resolve().parents:
        pyproject = directory / "pyproject.toml"
        if not pyproject.is_file():
            continue
        try:
            project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
        except (OSError, ValueError):
            return "unknown"
        return str(project.get("version", "unknown"))
    return "unknown"


try:
    __version__ = version("atomspace-kb")
except PackageNotFoundError:
    __version__ = _source_tree_version()

# Central facade
from atomspace.atomspace import AtomSpace

# Configuration objects
from atomspace.configuration import LocalStorage, StorageConfig

# Errors
from atomspace.exceptions import (
    AtomImportError,
    AtomSpaceError,
    NotFoundError,
    ValidationError,
)

# Pattern matching
from atomspace.matcher import Pattern, pattern_match

# Models
from atomspace.models import (
    Atom,
    AtomSpaceStats,
    AtomView,
    AttentionValue,
    ExportPayload,
    Permission,
    SavedQuery,
    Share,
    Triple,
    TruthValue,
)

# Serialization
from atomspace.serializer import Serializer
from atomspace.settings import Settings

# Triples
from atomspace.triples import TripleCodec

__all__ = [
    "__version__",
    # Facade
    "AtomSpace",
    "Settings",
    # Configuration
    "LocalStorage",
    "StorageConfig",
    # Errors
    "AtomSpaceError",
    "ValidationError",
    "NotFoundError",
    "AtomImportError",
    # Models
    "Atom",
    "TruthValue",
    "AttentionValue",
    "Share",
    "Permission",
    "Triple",
    "AtomSpaceStats",
    "SavedQuery",
    "AtomView",
    "ExportPayload",
    # Components
    "Pattern",
    "pattern_match",
    "TripleCodec",
    "Serializer",
]

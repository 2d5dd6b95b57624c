"""Data models for AtomSpace."""

from atomspace.models.atom import (
    ATOM_TYPES,
    LINK_TYPES,
    NODE_TYPES,
    Atom,
    AtomKind,
    AttentionValue,
    TruthValue,
)
from atomspace.models.results import AtomSpaceStats, SavedQuery, Triple
from atomspace.models.share import SHARE_TYPES, Permission, Share, ShareType
from atomspace.models.wire import AtomView, ExportPayload

__all__ = [
    "ATOM_TYPES",
    "NODE_TYPES",
    "LINK_TYPES",
    "SHARE_TYPES",
    "Atom",
    "AtomKind",
    "AtomSpaceStats",
    "AtomView",
    "AttentionValue",
    "ExportPayload",
    "Permission",
    "SavedQuery",
    "Share",
    "ShareType",
    "Triple",
    "TruthValue",
]

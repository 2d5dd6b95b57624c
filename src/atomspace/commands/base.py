# src/atomspace/commands/base.py
"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Confirmation callbacks for destructive commands (like delete)
- Result types for each command
- open_atomspace, which every command uses to reach the knowledge base
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from atomspace.exceptions import AtomSpaceError

if TYPE_CHECKING:
    from atomspace.atomspace import AtomSpace
    from atomspace.models import Atom, Share


@dataclass
class ConfirmRequest:
    """Request for confirmation before a destructive action.

    Attributes:
        message: Main confirmation message
        details: Additional details about what will happen
    """

    message: str
    details: str | None = None


# Callback type for confirmations - returns True to proceed
ConfirmCallback = Callable[[ConfirmRequest], bool]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class AtomInfo:
    """Display-ready information about one atom."""

    id: str
    owner_id: str
    atom_type: str
    type_name: str
    name: str | None = None
    value: Any = None
    strength: float = 1.0
    confidence: float = 1.0
    sti: float = 0.0
    lti: float = 0.0
    outgoing: list[str] = field(default_factory=list)
    rendered: str = ""

    @classmethod
    def from_atom(cls, space: AtomSpace, atom: Atom) -> AtomInfo:
        return cls(
            id=atom.id,
            owner_id=atom.owner_id,
            atom_type=atom.kind,
            type_name=atom.type_name,
            name=atom.name,
            value=atom.value,
            strength=atom.truth_value.strength,
            confidence=atom.truth_value.confidence,
            sti=atom.attention_value.sti,
            lti=atom.attention_value.lti,
            outgoing=[target.id for target in space.outgoing(atom)],
            rendered=space.to_string(atom),
        )


@dataclass
class AtomResult(CommandResult):
    """Result of a command that produces or inspects one atom.

    Attributes:
        atom: The atom (None on failure)
        incoming: Links pointing at the atom (only filled by get)
    """

    atom: AtomInfo | None = None
    incoming: list[AtomInfo] = field(default_factory=list)


@dataclass
class AtomListResult(CommandResult):
    """Result of the list, query, shared and public commands.

    Attributes:
        atoms: Matching atoms
        saved_query_id: Id of the saved query (query --save / --run)
    """

    atoms: list[AtomInfo] = field(default_factory=list)
    saved_query_id: str | None = None


@dataclass
class TripleInfo:
    """A decoded subject-predicate-object fact."""

    subject: str
    predicate: str
    object: str


@dataclass
class TripleResult(CommandResult):
    """Result of the triple commands.

    Attributes:
        subject: The subject that was added or queried
        link_id: Id of the EvaluationLink (triple add only)
        triples: Decoded triples (triple query only)
    """

    subject: str = ""
    link_id: str | None = None
    triples: list[TripleInfo] = field(default_factory=list)


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        owner: Owner whose knowledge base was inspected
        db_path: Path to the database file
        total_atoms: Total atoms owned
        node_count: Number of nodes
        link_count: Number of links
        type_distribution: (type name, count) pairs, most frequent first
        shared_out: Shares given by the owner
        shared_in: Shares received by the owner
    """

    owner: str = ""
    db_path: str = ""
    total_atoms: int = 0
    node_count: int = 0
    link_count: int = 0
    type_distribution: list[tuple[str, int]] = field(default_factory=list)
    shared_out: int = 0
    shared_in: int = 0


@dataclass
class DeleteResult(CommandResult):
    """Result of the delete command.

    Attributes:
        atom_id: The atom that was deleted
        links_affected: Links that pointed at the atom and lost it from their outgoing set
    """

    atom_id: str = ""
    links_affected: int = 0


@dataclass
class ShareInfo:
    """Information about a share."""

    id: str
    atom_id: str
    source_owner: str
    target_owner: str
    share_type: str
    is_public: bool

    @classmethod
    def from_share(cls, share: Share) -> ShareInfo:
        return cls(
            id=share.id,
            atom_id=share.atom_id,
            source_owner=share.source_owner,
            target_owner=share.target_owner,
            share_type=share.share_type,
            is_public=share.is_public,
        )


@dataclass
class ShareResult(CommandResult):
    """Result of the share and copy commands.

    Attributes:
        share: The share that was created or used
        copy: The duplicated atom (copy only)
    """

    share: ShareInfo | None = None
    copy: AtomInfo | None = None


@dataclass
class ExportResult(CommandResult):
    """Result of the export command.

    Attributes:
        owner: Owner whose atoms were exported
        atom_count: Number of atoms exported
        output: File written, or None if the payload is returned in ``data``
        data: JSON payload when no output file was given
    """

    owner: str = ""
    atom_count: int = 0
    output: str | None = None
    data: str | None = None


@dataclass
class ImportResult(CommandResult):
    """Result of the import command.

    Attributes:
        owner: Owner the atoms were imported into
        source: File the payload was read from
        imported: Number of payload entries applied
    """

    owner: str = ""
    source: str = ""
    imported: int = 0


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        owner: Effective owner id
        data_dir: Data directory path
        settings: List of behavioral settings with sources
        config_path: Path to config file (if found)
    """

    owner: str = ""
    data_dir: str = ""
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None


def open_atomspace(
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomSpace:
    """Build the AtomSpace a command acts on.

    Raises:
        AtomSpaceError: If the configuration is invalid or the database
            cannot be opened
    """
    from atomspace.config import ConfigError, get_atomspace

    try:
        space = get_atomspace(owner, data_dir, config_path)
    except (OSError, sqlite3.Error) as e:
        raise AtomSpaceError(f"Failed to access database: {e}") from e
    if isinstance(space, ConfigError):
        raise AtomSpaceError(space.message)
    return space

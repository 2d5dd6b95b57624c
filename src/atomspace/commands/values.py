# src/atomspace/commands/values.py
"""Value commands - update an atom's truth and attention values."""

from __future__ import annotations

from pathlib import Path

from atomspace.commands.base import AtomInfo, AtomResult, open_atomspace
from atomspace.exceptions import AtomSpaceError, NotFoundError


def set_tv(
    atom_id: str,
    strength: float,
    confidence: float,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomResult:
    """Set an atom's truth value. Both components are clamped into [0, 1]."""
    try:
        space = open_atomspace(owner, data_dir, config_path)
        if not space.set_tv(atom_id, strength, confidence):
            raise NotFoundError(atom_id)
        return AtomResult(success=True, atom=AtomInfo.from_atom(space, space.require_atom(atom_id)))
    except AtomSpaceError as e:
        return AtomResult(success=False, error=str(e))


def set_av(
    atom_id: str,
    sti: float,
    lti: float,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomResult:
    """Set an atom's short- and long-term importance."""
    try:
        space = open_atomspace(owner, data_dir, config_path)
        if not space.set_av(atom_id, sti, lti):
            raise NotFoundError(atom_id)
        return AtomResult(success=True, atom=AtomInfo.from_atom(space, space.require_atom(atom_id)))
    except AtomSpaceError as e:
        return AtomResult(success=False, error=str(e))

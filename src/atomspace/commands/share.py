# src/atomspace/commands/share.py
"""Share commands - grant atoms to other owners and read what was granted.

Shares never move an atom. Only a copy share lets the target owner take an
independent duplicate into their own knowledge base.
"""

from __future__ import annotations

from pathlib import Path

from atomspace.commands.base import (
    AtomInfo,
    AtomListResult,
    ShareInfo,
    ShareResult,
    open_atomspace,
)
from atomspace.exceptions import AtomSpaceError, NotFoundError


def share(
    atom_id: str,
    target_owner: str,
    share_type: str = "read",
    public: bool = False,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ShareResult:
    """Share an owned atom with another owner.

    Args:
        atom_id: Id of the atom to share
        target_owner: Owner receiving the share
        share_type: "read", "write" or "copy"
        public: Also make the atom visible in the public listing
        owner: Override owner id (the sharer)
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ShareResult with the new share
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        created = space.share_atom(atom_id, target_owner, share_type=share_type, is_public=public)
    except AtomSpaceError as e:
        return ShareResult(success=False, error=str(e))
    return ShareResult(success=True, share=ShareInfo.from_share(created))


def shared(
    source_owner: str | None = None,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomListResult:
    """Atoms other owners shared with the acting owner."""
    try:
        space = open_atomspace(owner, data_dir, config_path)
        atoms = space.get_shared_atoms(source_owner=source_owner)
        return AtomListResult(
            success=True, atoms=[AtomInfo.from_atom(space, atom) for atom in atoms]
        )
    except AtomSpaceError as e:
        return AtomListResult(success=False, error=str(e))


def public(
    limit: int = 100,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomListResult:
    """Publicly shared atoms across all owners."""
    try:
        space = open_atomspace(owner, data_dir, config_path)
        atoms = space.get_public_atoms(limit=limit)
        return AtomListResult(
            success=True, atoms=[AtomInfo.from_atom(space, atom) for atom in atoms]
        )
    except AtomSpaceError as e:
        return AtomListResult(success=False, error=str(e))


def copy(
    share_id: str,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ShareResult:
    """Duplicate a copy-shared atom into the target owner's knowledge base.

    Args:
        share_id: Id of a copy share received or given by the acting owner
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ShareResult with the share and the duplicate
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        found = space.get_share(share_id)
        if found is None:
            raise NotFoundError(share_id, f"Share not found: {share_id}")
        duplicate = space.copy_to_target(found)
        return ShareResult(
            success=True,
            share=ShareInfo.from_share(found),
            copy=AtomInfo.from_atom(space, duplicate),
        )
    except AtomSpaceError as e:
        return ShareResult(success=False, error=str(e))

# src/atomspace/commands/list.py
"""List command - page through an owner's atoms.

This module provides the list logic that the CLI uses.
"""

from __future__ import annotations

from pathlib import Path

from atomspace.commands.base import AtomInfo, AtomListResult, open_atomspace
from atomspace.exceptions import AtomSpaceError


def list_atoms(
    type_name: str | None = None,
    limit: int | None = None,
    offset: int = 0,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomListResult:
    """List owned atoms in creation order.

    Args:
        type_name: Only list atoms of this type
        limit: Page size (default from settings, clamped to max_page_size)
        offset: Number of atoms to skip
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        AtomListResult with one page of atoms
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        atoms = space.get_atoms(type_name=type_name, limit=limit, offset=offset)
        return AtomListResult(
            success=True, atoms=[AtomInfo.from_atom(space, atom) for atom in atoms]
        )
    except AtomSpaceError as e:
        return AtomListResult(success=False, error=str(e))

# src/atomspace/commands/query.py
"""Query commands - inspect atoms, match patterns and decode triples.

This module provides the read logic that the CLI uses.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from atomspace.commands.base import (
    AtomInfo,
    AtomListResult,
    AtomResult,
    TripleInfo,
    TripleResult,
    open_atomspace,
)
from atomspace.exceptions import AtomSpaceError


def get(
    atom_id: str,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomResult:
    """Look up one atom with the links pointing at it.

    Returns:
        AtomResult with the atom and its incoming links
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        atom = space.require_atom(atom_id)
        return AtomResult(
            success=True,
            atom=AtomInfo.from_atom(space, atom),
            incoming=[AtomInfo.from_atom(space, link) for link in space.incoming(atom)],
        )
    except AtomSpaceError as e:
        return AtomResult(success=False, error=str(e))


def query(
    atom_type: str | None = None,
    type_name: str | None = None,
    name: str | None = None,
    regex: bool = False,
    save: bool = False,
    run: str | None = None,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomListResult:
    """Match atoms against a pattern.

    Omitted predicates match anything, so an empty pattern lists every
    owned atom.

    Args:
        atom_type: "node" or "link"
        type_name: Exact type name
        name: Exact name, or a regular expression if ``regex`` is set
        regex: Treat ``name`` as a regular expression searched within names
        save: Store the pattern as a saved query and report its id
        run: Execute a previously saved query instead of building a pattern
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        AtomListResult with the matching atoms
    """
    pattern: dict[str, Any] = {
        "atom_type": atom_type,
        "type_name": type_name,
        "name": name,
        "name_mode": "pattern" if regex else "exact",
    }
    try:
        space = open_atomspace(owner, data_dir, config_path)
        if run is not None:
            views = space.execute_query(run)
            atoms = [space.require_atom(view.id) for view in views]
            saved_query_id = run
        else:
            atoms = space.query(pattern)
            saved_query_id = space.save_query(pattern).id if save else None
        return AtomListResult(
            success=True,
            atoms=[AtomInfo.from_atom(space, atom) for atom in atoms],
            saved_query_id=saved_query_id,
        )
    except AtomSpaceError as e:
        return AtomListResult(success=False, error=str(e))


def query_subject(
    subject: str,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> TripleResult:
    """Decode every triple whose subject is ``subject``."""
    try:
        space = open_atomspace(owner, data_dir, config_path)
        triples = space.query_subject(subject)
    except AtomSpaceError as e:
        return TripleResult(success=False, subject=subject, error=str(e))
    return TripleResult(
        success=True,
        subject=subject,
        triples=[TripleInfo(t.subject, t.predicate, t.object) for t in triples],
    )

# src/atomspace/commands/add.py
"""Add commands - create nodes, links and triples.

All three are find-or-create: adding an atom that already exists returns
the existing one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from atomspace.commands.base import AtomInfo, AtomResult, TripleResult, open_atomspace
from atomspace.exceptions import AtomSpaceError
from atomspace.models import TruthValue


def _truth_value(strength: float | None, confidence: float | None) -> TruthValue | None:
    if strength is None and confidence is None:
        return None
    return TruthValue(
        strength=1.0 if strength is None else strength,
        confidence=1.0 if confidence is None else confidence,
    )


def add_node(
    type_name: str,
    name: str,
    value: Any = None,
    strength: float | None = None,
    confidence: float | None = None,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomResult:
    """Find or create a node.

    Args:
        type_name: Node type, e.g. ConceptNode
        name: Node name
        value: Optional payload (any JSON-serializable value)
        strength: Truth value strength (default 1.0)
        confidence: Truth value confidence (default 1.0)
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        AtomResult with the node
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        atom = space.add_node(type_name, name, value=value, tv=_truth_value(strength, confidence))
        return AtomResult(success=True, atom=AtomInfo.from_atom(space, atom))
    except AtomSpaceError as e:
        return AtomResult(success=False, error=str(e))


def add_link(
    type_name: str,
    outgoing: list[str],
    strength: float | None = None,
    confidence: float | None = None,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AtomResult:
    """Find or create a link over existing atoms.

    Args:
        type_name: Link type, e.g. InheritanceLink
        outgoing: Ordered ids of the atoms the link points at
        strength: Truth value strength (default 1.0)
        confidence: Truth value confidence (default 1.0)
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        AtomResult with the link
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        atom = space.add_link(type_name, list(outgoing), tv=_truth_value(strength, confidence))
        return AtomResult(success=True, atom=AtomInfo.from_atom(space, atom))
    except AtomSpaceError as e:
        return AtomResult(success=False, error=str(e))


def add_triple(
    subject: str,
    predicate: str,
    obj: str,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> TripleResult:
    """Record a subject-predicate-object fact.

    Returns:
        TripleResult with the id of the EvaluationLink encoding the fact
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        link = space.add_triple(subject, predicate, obj)
    except AtomSpaceError as e:
        return TripleResult(success=False, subject=subject, error=str(e))
    return TripleResult(success=True, subject=subject, link_id=link.id)

# src/atomspace/matcher.py
"""Structural pattern matching over an owner's atoms.

A pattern is a closed conjunction of optional predicates on ``atom_type``,
``type_name`` and ``name``. Matching is a linear scan of the owner's atoms:
every call costs O(atoms owned) and no index is consulted.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from atomspace.exceptions import ValidationError
from atomspace.models import Atom, AtomKind
from atomspace.stores.base import AtomStore

NameMode = Literal["exact", "pattern"]


class Pattern(BaseModel):
    """Predicates that must all hold for an atom to match.

    With ``name_mode="pattern"`` the ``name`` predicate is a regular
    expression searched anywhere in the atom's name.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    atom_type: AtomKind | None = None
    type_name: str | None = None
    name: str | None = None
    name_mode: NameMode = "exact"

    @property
    def is_empty(self) -> bool:
        return self.atom_type is None and self.type_name is None and self.name is None

    def compiled_name(self) -> re.Pattern[str] | None:
        if self.name is None or self.name_mode != "pattern":
            return None
        try:
            return re.compile(self.name)
        except re.error as e:
            raise ValidationError(f"Invalid name pattern {self.name!r}: {e}") from e


PatternLike = Pattern | Mapping[str, Any]


def coerce_pattern(pattern: PatternLike | None) -> Pattern:
    """Build a Pattern from a mapping, treating empty strings as absent."""
    if pattern is None:
        return Pattern()
    if isinstance(pattern, Pattern):
        return pattern
    data = {key: value for key, value in pattern.items() if value not in (None, "")}
    try:
        return Pattern.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(f"Invalid pattern field '{field}': {error['msg']}") from e


def matches(atom: Atom, pattern: Pattern, name_regex: re.Pattern[str] | None = None) -> bool:
    """True if every predicate present in the pattern holds for the atom."""
    if pattern.atom_type is not None and atom.kind != pattern.atom_type:
        return False
    if pattern.type_name is not None and atom.type_name != pattern.type_name:
        return False
    if pattern.name is not None:
        if atom.name is None:
            return False
        if name_regex is not None:
            return name_regex.search(atom.name) is not None
        return atom.name == pattern.name
    return True


def filter_atoms(atoms: Iterable[Atom], pattern: PatternLike | None) -> list[Atom]:
    """Filter any iterable of atoms by a pattern."""
    compiled = coerce_pattern(pattern)
    name_regex = compiled.compiled_name()
    return [atom for atom in atoms if matches(atom, compiled, name_regex)]


def pattern_match(
    store: AtomStore, pattern: PatternLike | None, cap: int | None = None
) -> list[Atom]:
    """Return every atom owned by the store's owner that satisfies the pattern.

    An empty pattern returns all of the owner's atoms.
    """
    return filter_atoms(store.iter_atoms(cap), pattern)

# src/atomspace/models/wire.py
"""Export/import wire format."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from atomspace.models.atom import AtomKind, AttentionValue, TruthValue


def _as_id(value: Any) -> Any:
    # Ids from other stores may be integers; identifiers are opaque strings here.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class AtomView(BaseModel):
    """Externally visible projection of an atom."""

    id: str
    atom_type: AtomKind
    type_name: str
    name: str | None = None
    value: Any = None
    tv: TruthValue = Field(default_factory=TruthValue)
    av: AttentionValue = Field(default_factory=AttentionValue)
    outgoing: list[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return _as_id(v)

    @field_validator("outgoing", mode="before")
    @classmethod
    def _coerce_outgoing(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [_as_id(item) for item in v]
        return v


class ExportPayload(BaseModel):
    """A full dump of one owner's atoms."""

    owner_id: str
    atom_count: int
    atoms: list[AtomView]

    @field_validator("owner_id", mode="before")
    @classmethod
    def _coerce_owner(cls, v: Any) -> Any:
        return _as_id(v)

# src/atomspace/models/atom.py
"""Atom data model."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

AtomKind = Literal["node", "link"]

NODE_TYPES: tuple[str, ...] = (
    "ConceptNode",
    "PredicateNode",
    "VariableNode",
    "NumberNode",
    "TypeNode",
    "GroundedSchemaNode",
    "ContextNode",
    "AgentNode",
)

LINK_TYPES: tuple[str, ...] = (
    "InheritanceLink",
    "SimilarityLink",
    "MemberLink",
    "EvaluationLink",
    "ImplicationLink",
    "ListLink",
    "AndLink",
    "OrLink",
    "NotLink",
    "ExecutionLink",
    "AtTimeLink",
)

ATOM_TYPES: dict[str, tuple[str, ...]] = {"node": NODE_TYPES, "link": LINK_TYPES}


def utcnow() -> datetime:
    return datetime.now(UTC)


def is_valid_type(kind: str, type_name: str) -> bool:
    """True if type_name belongs to the closed set for kind."""
    return type_name in ATOM_TYPES.get(kind, ())


def encode_value(value: Any) -> str | None:
    """Serialize an opaque payload for storage."""
    if value is None:
        return None
    return json.dumps(value, default=str)


def decode_value(raw: str | None) -> Any:
    """Decode a stored payload, falling back to the raw text if it is not JSON."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return raw


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


class TruthValue(BaseModel):
    """Probabilistic truth value. Both components are clamped into [0, 1]."""

    strength: float = 1.0
    confidence: float = 1.0

    @field_validator("strength", "confidence")
    @classmethod
    def _clamp_unit(cls, v: float) -> float:
        return _clamp(v)


class AttentionValue(BaseModel):
    """Short- and long-term importance. Unclamped."""

    sti: float = 0.0
    lti: float = 0.0


class Atom(BaseModel):
    """A node or link in an owner's hypergraph.

    Only the truth and attention values change after creation. ``raw_value``
    holds the payload exactly as stored; ``value`` decodes it on access.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    owner_id: str
    kind: AtomKind
    type_name: str
    name: str | None = None
    raw_value: str | None = None
    truth_value: TruthValue = Field(default_factory=TruthValue)
    attention_value: AttentionValue = Field(default_factory=AttentionValue)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def _check_type(self) -> Atom:
        if not is_valid_type(self.kind, self.type_name):
            raise ValueError(f"{self.type_name!r} is not a valid {self.kind} type")
        if self.kind == "node" and (self.name is None or not self.name.strip()):
            raise ValueError("name is required for nodes")
        return self

    @property
    def is_node(self) -> bool:
        return self.kind == "node"

    @property
    def is_link(self) -> bool:
        return self.kind == "link"

    @property
    def value(self) -> Any:
        return decode_value(self.raw_value)

    @property
    def tv(self) -> dict[str, float]:
        return self.truth_value.model_dump()

    @property
    def av(self) -> dict[str, float]:
        return self.attention_value.model_dump()

# src/atomspace/models/results.py
"""Result data models for AtomSpace queries."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field

from atomspace.models.atom import utcnow


class Triple(BaseModel):
    """A decoded subject-predicate-object fact."""

    subject: str
    predicate: str
    object: str


class AtomSpaceStats(BaseModel):
    """Aggregate counts for one owner."""

    total: int = 0
    node_count: int = 0
    link_count: int = 0
    type_distribution: dict[str, int] = Field(default_factory=dict)
    shared_out: int = 0
    shared_in: int = 0


class SavedQuery(BaseModel):
    """A stored match pattern and the views it produced when last executed."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    owner_id: str
    pattern_json: str | None = None
    result_json: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    executed_at: datetime | None = None

    @property
    def pattern(self) -> dict[str, Any] | None:
        return _parse_or_none(self.pattern_json)

    @property
    def result(self) -> list[dict[str, Any]] | None:
        return _parse_or_none(self.result_json)


def _parse_or_none(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None

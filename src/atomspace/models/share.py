# src/atomspace/models/share.py
"""Share data model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

from atomspace.models.atom import utcnow

ShareType = Literal["read", "write", "copy"]

SHARE_TYPES: tuple[str, ...] = ("read", "write", "copy")


class Permission(Enum):
    """Effective access an owner has to an atom."""

    NONE = "none"
    READ = "read"
    WRITE = "write"


class Share(BaseModel):
    """A grant of one atom from its owner to another owner."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    source_owner: str
    target_owner: str
    atom_id: str
    is_public: bool = False
    share_type: ShareType = "read"
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def can_read(self) -> bool:
        return self.share_type in SHARE_TYPES

    @property
    def can_write(self) -> bool:
        return self.share_type == "write"

# src/atomspace/settings.py
"""Behavioral settings for AtomSpace.

Settings are passed programmatically. The library itself does not read
environment variables; ``atomspace.config`` does that for the CLI and for
applications that want env/YAML based configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    """Limits and tuning knobs for an AtomSpace.

    Example:
        settings = Settings(max_page_size=500, busy_timeout=10.0)
    """

    # Listing
    default_page_size: int = Field(default=100, ge=1)
    max_page_size: int = Field(default=1000, ge=1)

    # Sharing
    max_public_limit: int = Field(default=100, ge=1)

    # Export safety cap (not a page size)
    export_cap: int = Field(default=100_000, ge=1)

    # Depth bound for rendering link structures as text
    max_render_depth: int = Field(default=32, ge=1)

    # Seconds SQLite waits on a competing writer before failing
    busy_timeout: float = Field(default=5.0, ge=0.0)

    log_level: LogLevel = "WARNING"

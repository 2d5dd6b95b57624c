# src/atomspace/commands/status.py
"""Status command - show knowledge base statistics.

This module provides the status logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path

from atomspace.commands.base import StatusResult, open_atomspace
from atomspace.config import ConfigError, get_atomspace_config
from atomspace.configuration import LocalStorage
from atomspace.exceptions import AtomSpaceError


def status(
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> StatusResult:
    """Get statistics for one owner's knowledge base.

    A missing database reports zero counts instead of creating one.

    Args:
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        StatusResult with counts
    """
    config = get_atomspace_config(owner, data_dir, config_path)
    if isinstance(config, ConfigError):
        return StatusResult(success=False, error=config.message)

    db_path = LocalStorage(config.data_dir).db_path
    if not os.path.exists(db_path):
        return StatusResult(success=True, owner=config.owner, db_path=db_path)

    try:
        space = open_atomspace(owner, data_dir, config_path)
        stats = space.stats()
    except AtomSpaceError as e:
        return StatusResult(success=False, owner=config.owner, db_path=db_path, error=str(e))

    return StatusResult(
        success=True,
        owner=config.owner,
        db_path=db_path,
        total_atoms=stats.total,
        node_count=stats.node_count,
        link_count=stats.link_count,
        type_distribution=list(stats.type_distribution.items()),
        shared_out=stats.shared_out,
        shared_in=stats.shared_in,
    )

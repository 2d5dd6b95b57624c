# src/atomspace/commands/__init__.py
"""UI-agnostic command layer for AtomSpace.

This module provides command functions that the CLI (or any other UI) can
call. Commands return data structures, allowing UIs to render results
appropriately. Every command takes optional ``owner``, ``data_dir`` and
``config_path`` overrides and never raises AtomSpaceError: failures come back
as ``success=False`` with an ``error`` message.

Usage:
    from atomspace.commands import add, query, status

    # Record a fact
    result = add.add_triple("Alice", "knows", "Bob", owner="alice")

    # Decode it again
    result = query.query_subject("Alice", owner="alice")

    # Get knowledge base status
    result = status.status(owner="alice")
"""

# Import command modules for easy access
from atomspace.commands import add, config_cmd, delete, query, share, status, transfer, values
from atomspace.commands import list as list_cmd
from atomspace.commands.base import (
    AtomInfo,
    AtomListResult,
    AtomResult,
    CommandResult,
    ConfigResult,
    ConfirmCallback,
    ConfirmRequest,
    DeleteResult,
    ExportResult,
    ImportResult,
    SettingInfo,
    ShareInfo,
    ShareResult,
    StatusResult,
    TripleInfo,
    TripleResult,
    open_atomspace,
)

__all__ = [
    # Base types
    "ConfirmRequest",
    "ConfirmCallback",
    "CommandResult",
    "open_atomspace",
    # Result types
    "AtomInfo",
    "AtomResult",
    "AtomListResult",
    "TripleInfo",
    "TripleResult",
    "StatusResult",
    "DeleteResult",
    "ShareInfo",
    "ShareResult",
    "ExportResult",
    "ImportResult",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "add",
    "query",
    "list_cmd",
    "status",
    "delete",
    "values",
    "share",
    "transfer",
    "config_cmd",
]

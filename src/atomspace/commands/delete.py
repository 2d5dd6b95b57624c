# src/atomspace/commands/delete.py
"""Delete command - remove an atom from the knowledge base.

This module provides the delete logic that the CLI uses.
It uses callbacks for interactive confirmation, allowing each UI to
implement its own confirmation method.
"""

from __future__ import annotations

from pathlib import Path

from atomspace.commands.base import ConfirmCallback, ConfirmRequest, DeleteResult, open_atomspace
from atomspace.exceptions import AtomSpaceError


def delete(
    atom_id: str,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_confirm: ConfirmCallback | None = None,
) -> DeleteResult:
    """Delete an atom, its edges and its shares.

    Args:
        atom_id: Id of the atom to delete
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path
        on_confirm: Optional callback for confirmation. If provided, it will be
            called with details about what will be deleted. Return True to
            proceed, False to cancel. If None, deletion proceeds without
            confirmation (equivalent to --force).

    Returns:
        DeleteResult, or cancelled result
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        atom = space.require_atom(atom_id)
        incoming = space.incoming(atom)

        if on_confirm is not None:
            confirm_request = ConfirmRequest(
                message=f"Delete {space.to_string(atom)}?",
                details=f"{len(incoming)} links point at this atom and lose it from their "
                "outgoing set; links left empty are deleted. Its shares are removed.",
            )
            if not on_confirm(confirm_request):
                return DeleteResult(success=False, atom_id=atom_id, error="Cancelled.")

        if not space.delete_atom(atom_id):
            return DeleteResult(success=False, atom_id=atom_id, error=f"Atom not found: {atom_id}")
    except AtomSpaceError as e:
        return DeleteResult(success=False, atom_id=atom_id, error=str(e))

    return DeleteResult(success=True, atom_id=atom_id, links_affected=len(incoming))

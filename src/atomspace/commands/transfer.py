# src/atomspace/commands/transfer.py
"""Export and import commands - move a knowledge base between stores.

Exports are JSON payloads of atom views. Imports always assign new ids and
remap outgoing references, so a payload can be loaded into any owner.
"""

from __future__ import annotations

from pathlib import Path

from atomspace.commands.base import ExportResult, ImportResult, open_atomspace
from atomspace.exceptions import AtomImportError, AtomSpaceError


def export(
    output: str | Path | None = None,
    indent: int | None = 2,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ExportResult:
    """Export every atom the owner has.

    Args:
        output: File to write the payload to. If None, the payload is
            returned in ``ExportResult.data``.
        indent: JSON indentation (None for compact output)
        owner: Override owner id
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ExportResult with the atom count
    """
    try:
        space = open_atomspace(owner, data_dir, config_path)
        payload = space.export()
    except AtomSpaceError as e:
        return ExportResult(success=False, error=str(e))

    data = payload.model_dump_json(indent=indent)
    if output is None:
        return ExportResult(
            success=True, owner=payload.owner_id, atom_count=payload.atom_count, data=data
        )

    try:
        Path(output).write_text(data, encoding="utf-8")
    except OSError as e:
        return ExportResult(
            success=False, owner=payload.owner_id, error=f"Cannot write {output}: {e}"
        )
    return ExportResult(
        success=True, owner=payload.owner_id, atom_count=payload.atom_count, output=str(output)
    )


def import_(
    source: str | Path,
    owner: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ImportResult:
    """Import an exported payload into the owner's knowledge base.

    The import is all-or-nothing: any unresolvable reference or malformed
    entry leaves the knowledge base unchanged.

    Args:
        source: Path to a JSON export
        owner: Override owner id (the importing owner)
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ImportResult with the number of entries applied
    """
    path = Path(source)
    if not path.exists():
        return ImportResult(success=False, source=str(source), error=f"File not found: {source}")

    try:
        space = open_atomspace(owner, data_dir, config_path)
        imported = space.import_json(path.read_bytes())
    except AtomImportError as e:
        return ImportResult(success=False, source=str(source), error=f"Import failed: {e}")
    except AtomSpaceError as e:
        return ImportResult(success=False, source=str(source), error=str(e))

    return ImportResult(success=True, owner=space.owner_id, source=str(source), imported=imported)

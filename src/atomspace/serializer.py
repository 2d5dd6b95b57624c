# src/atomspace/serializer.py
"""Export and import of a whole knowledge base.

Atom ids are local to a store. Import never reuses the ids found in a
payload: nodes are created (or found) first and their new ids recorded, then
each link's outgoing ids are rewritten through that map before the link is
created. Links may reference other links, so link entries are resolved in
rounds until every entry is placed or no further progress is possible.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from atomspace.exceptions import AtomImportError, AtomSpaceError
from atomspace.models import Atom, AtomView, ExportPayload
from atomspace.stores.base import AtomStore

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_CAP = 100_000


class Serializer:
    """Converts an owner's atoms to and from the export wire format."""

    def __init__(self, store: AtomStore, export_cap: int = DEFAULT_EXPORT_CAP) -> None:
        self.store = store
        self.export_cap = export_cap

    def view(self, atom: Atom) -> AtomView:
        """Full externally visible projection of an atom."""
        return AtomView(
            id=atom.id,
            atom_type=atom.kind,
            type_name=atom.type_name,
            name=atom.name,
            value=atom.value,
            tv=atom.truth_value,
            av=atom.attention_value,
            outgoing=self.store.outgoing_ids(atom) if atom.is_link else None,
            created_at=atom.created_at,
            updated_at=atom.updated_at,
        )

    def export(self) -> ExportPayload:
        """Dump every atom of the owner, bounded only by the export cap."""
        atoms = [self.view(atom) for atom in self.store.iter_atoms(self.export_cap)]
        return ExportPayload(owner_id=self.store.owner_id, atom_count=len(atoms), atoms=atoms)

    def export_json(self, indent: int | None = None) -> str:
        return self.export().model_dump_json(indent=indent)

    def import_json(self, data: str | bytes) -> int:
        """Import a JSON export payload.

        Raises:
            AtomImportError: On invalid JSON or any failure while importing
        """
        try:
            payload = json.loads(data)
        except ValueError as e:
            raise AtomImportError(f"Invalid JSON: {e}") from e
        return self.import_payload(payload)

    def import_payload(self, payload: ExportPayload | Mapping[str, Any]) -> int:
        """Import an export payload into this store in a single transaction.

        Returns:
            Number of payload entries imported (reused atoms included)

        Raises:
            AtomImportError: If the payload is malformed, an outgoing id cannot
                be resolved, or an entry is rejected. Nothing is kept on failure.
        """
        parsed = _parse_payload(payload)
        if parsed.atom_count != len(parsed.atoms):
            logger.warning(
                "Payload declares %d atoms but contains %d", parsed.atom_count, len(parsed.atoms)
            )

        try:
            with self.store.batch():
                imported = self._import(parsed)
        except AtomImportError:
            raise
        except AtomSpaceError as e:
            raise AtomImportError(f"Import rejected: {e}") from e

        logger.info(
            "Imported %d atoms from owner %s into owner %s",
            imported,
            parsed.owner_id,
            self.store.owner_id,
        )
        return imported

    def _import(self, payload: ExportPayload) -> int:
        id_map: dict[str, str] = {}
        imported = 0

        for entry in payload.atoms:
            if entry.atom_type != "node":
                continue
            if entry.name is None:
                raise AtomImportError(f"Node {entry.id} has no name")
            atom = self.store.add_node(
                entry.type_name, entry.name, value=entry.value, tv=entry.tv, av=entry.av
            )
            id_map[entry.id] = atom.id
            imported += 1

        pending = [entry for entry in payload.atoms if entry.atom_type == "link"]
        for entry in pending:
            if not entry.outgoing:
                raise AtomImportError(f"Link {entry.id} has no outgoing set")

        while pending:
            remaining = []
            for entry in pending:
                assert entry.outgoing is not None
                if not all(target in id_map for target in entry.outgoing):
                    remaining.append(entry)
                    continue
                atom = self.store.add_link(
                    entry.type_name,
                    [id_map[target] for target in entry.outgoing],
                    tv=entry.tv,
                    av=entry.av,
                )
                id_map[entry.id] = atom.id
                imported += 1

            if len(remaining) == len(pending):
                entry = remaining[0]
                assert entry.outgoing is not None
                missing = next(target for target in entry.outgoing if target not in id_map)
                raise AtomImportError(
                    f"Link {entry.id} references {missing}, which is not in the payload"
                )
            pending = remaining

        return imported


def _parse_payload(payload: ExportPayload | Mapping[str, Any]) -> ExportPayload:
    if isinstance(payload, ExportPayload):
        return payload
    if not isinstance(payload, Mapping):
        raise AtomImportError("Import payload must be a JSON object")
    try:
        return ExportPayload.model_validate(payload)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise AtomImportError(f"Malformed payload at '{field}': {error['msg']}") from e

# tests/commands/test_transfer.py
"""Tests for the export and import commands."""

import json
import os

from atomspace.commands import add, query, transfer


class TestExport:
    def test_export_to_data(self, data_dir) -> None:
        add.add_triple("Alice", "knows", "Bob", owner="alice", data_dir=data_dir)

        result = transfer.export(owner="alice", data_dir=data_dir)
        assert result.success is True
        assert result.atom_count == 5
        assert result.output is None

        payload = json.loads(result.data)
        assert payload["owner_id"] == "alice"
        assert payload["atom_count"] == 5
        assert len(payload["atoms"]) == 5

    def test_export_to_file(self, data_dir, clean_env) -> None:
        add.add_node("ConceptNode", "cat", owner="alice", data_dir=data_dir)
        output = os.path.join(clean_env, "export.json")

        result = transfer.export(output=output, owner="alice", data_dir=data_dir)
        assert result.success is True
        assert result.output == output
        assert result.data is None
        with open(output, encoding="utf-8") as f:
            assert json.load(f)["atom_count"] == 1

    def test_export_unwritable_path(self, data_dir, clean_env) -> None:
        output = os.path.join(clean_env, "no", "such", "dir", "export.json")
        result = transfer.export(output=output, data_dir=data_dir)
        assert result.success is False
        assert "Cannot write" in result.error


class TestImport:
    def test_round_trip_into_other_owner(self, data_dir, clean_env) -> None:
        add.add_triple("Alice", "knows", "Bob", owner="alice", data_dir=data_dir)
        output = os.path.join(clean_env, "export.json")
        transfer.export(output=output, owner="alice", data_dir=data_dir)

        result = transfer.import_(output, owner="bob", data_dir=data_dir)
        assert result.success is True
        assert result.owner == "bob"
        assert result.imported == 5

        triples = query.query_subject("Alice", owner="bob", data_dir=data_dir).triples
        assert [(t.subject, t.predicate, t.object) for t in triples] == [("Alice", "knows", "Bob")]

    def test_missing_file(self, data_dir) -> None:
        result = transfer.import_("nope.json", data_dir=data_dir)
        assert result.success is False
        assert "File not found" in result.error

    def test_invalid_json(self, data_dir, clean_env) -> None:
        path = os.path.join(clean_env, "bad.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("{not json")

        result = transfer.import_(path, data_dir=data_dir)
        assert result.success is False
        assert result.error.startswith("Import failed")

    def test_unresolvable_reference_imports_nothing(self, data_dir, clean_env) -> None:
        path = os.path.join(clean_env, "dangling.json")
        payload = {
            "owner_id": "alice",
            "atom_count": 2,
            "atoms": [
                {"id": "n1", "atom_type": "node", "type_name": "ConceptNode", "name": "a"},
                {"id": "l1", "atom_type": "link", "type_name": "ListLink", "outgoing": ["x"]},
            ],
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f)

        result = transfer.import_(path, owner="bob", data_dir=data_dir)
        assert result.success is False
        assert query.query(owner="bob", data_dir=data_dir).atoms == []

# tests/commands/test_add.py
"""Tests for the add commands."""

from atomspace.commands import add, query


class TestAddNode:
    """Tests for add.add_node()."""

    def test_add_node(self, data_dir) -> None:
        result = add.add_node(
            "ConceptNode", "cat", value={"legs": 4}, owner="alice", data_dir=data_dir
        )

        assert result.success is True
        assert result.atom is not None
        assert result.atom.type_name == "ConceptNode"
        assert result.atom.name == "cat"
        assert result.atom.owner_id == "alice"
        assert result.atom.value == {"legs": 4}
        assert result.atom.rendered == '(ConceptNode "cat")'

    def test_add_node_twice_returns_same_id(self, data_dir) -> None:
        first = add.add_node("ConceptNode", "cat", data_dir=data_dir)
        second = add.add_node("ConceptNode", "cat", data_dir=data_dir)
        assert first.atom.id == second.atom.id

    def test_partial_truth_value(self, data_dir) -> None:
        result = add.add_node("ConceptNode", "cat", strength=0.4, data_dir=data_dir)
        assert result.atom.strength == 0.4
        assert result.atom.confidence == 1.0

    def test_invalid_type_fails(self, data_dir) -> None:
        result = add.add_node("ListLink", "cat", data_dir=data_dir)
        assert result.success is False
        assert "Invalid node type" in result.error
        assert result.atom is None


class TestAddLink:
    """Tests for add.add_link()."""

    def test_add_link(self, data_dir) -> None:
        cat = add.add_node("ConceptNode", "cat", data_dir=data_dir).atom
        animal = add.add_node("ConceptNode", "animal", data_dir=data_dir).atom

        result = add.add_link("InheritanceLink", [cat.id, animal.id], data_dir=data_dir)
        assert result.success is True
        assert result.atom.outgoing == [cat.id, animal.id]
        assert result.atom.rendered == (
            '(InheritanceLink (ConceptNode "cat") (ConceptNode "animal"))'
        )

    def test_missing_target_fails(self, data_dir) -> None:
        result = add.add_link("ListLink", ["missing"], data_dir=data_dir)
        assert result.success is False
        assert "missing" in result.error

    def test_other_owners_target_fails(self, data_dir) -> None:
        cat = add.add_node("ConceptNode", "cat", owner="alice", data_dir=data_dir).atom
        result = add.add_link("ListLink", [cat.id], owner="bob", data_dir=data_dir)
        assert result.success is False


class TestAddTriple:
    """Tests for add.add_triple()."""

    def test_add_triple(self, data_dir) -> None:
        result = add.add_triple("Alice", "knows", "Bob", data_dir=data_dir)
        assert result.success is True
        assert result.link_id

        decoded = query.query_subject("Alice", data_dir=data_dir)
        assert [(t.subject, t.predicate, t.object) for t in decoded.triples] == [
            ("Alice", "knows", "Bob")
        ]

    def test_blank_subject_fails(self, data_dir) -> None:
        result = add.add_triple(" ", "knows", "Bob", data_dir=data_dir)
        assert result.success is False

# tests/test_atomspace.py
"""Tests for the AtomSpace facade."""

import pytest

from atomspace import AtomSpace, LocalStorage, Settings
from atomspace.exceptions import AtomImportError, NotFoundError, ValidationError
from atomspace.models import Permission, Triple
from atomspace.stores import SQLiteAtomStore, SQLiteQueryStore, SQLiteShareRegistry


class TestConstruction:
    def test_with_storage(self, temp_dir):
        space = AtomSpace("alice", storage=LocalStorage(temp_dir))
        assert space.owner_id == "alice"
        assert isinstance(space.atom_store, SQLiteAtomStore)

    def test_with_explicit_stores(self, db_path):
        space = AtomSpace(
            "alice",
            atom_store=SQLiteAtomStore(db_path, "alice"),
            share_registry=SQLiteShareRegistry(db_path, "alice"),
            query_store=SQLiteQueryStore(db_path, "alice"),
        )
        assert space.add_node("ConceptNode", "cat").owner_id == "alice"

    def test_mixing_storage_and_stores_rejected(self, temp_dir, db_path):
        with pytest.raises(ValueError, match="Cannot mix"):
            AtomSpace(
                "alice",
                storage=LocalStorage(temp_dir),
                atom_store=SQLiteAtomStore(db_path, "alice"),
            )

    def test_partial_stores_rejected(self, db_path):
        with pytest.raises(ValueError, match="Must provide"):
            AtomSpace("alice", atom_store=SQLiteAtomStore(db_path, "alice"))

    def test_settings_applied(self, temp_dir):
        space = AtomSpace(
            "alice", storage=LocalStorage(temp_dir), settings=Settings(default_page_size=2)
        )
        for name in "abc":
            space.add_node("ConceptNode", name)
        assert len(space.get_atoms()) == 2
        assert space.settings.default_page_size == 2


class TestAtoms:
    def test_add_link_accepts_atoms_and_ids(self, alice):
        cat = alice.add_node("ConceptNode", "cat")
        animal = alice.add_node("ConceptNode", "animal")
        first = alice.add_link("InheritanceLink", [cat, animal.id])
        second = alice.add_link("InheritanceLink", [cat.id, animal])
        assert first.id == second.id

    def test_require_atom(self, alice):
        with pytest.raises(NotFoundError):
            alice.require_atom("missing")

    def test_outgoing_and_incoming_by_id(self, alice):
        cat = alice.add_node("ConceptNode", "cat")
        link = alice.add_link("ListLink", [cat])
        assert [a.id for a in alice.outgoing(link.id)] == [cat.id]
        assert [a.id for a in alice.incoming(cat.id)] == [link.id]
        assert alice.outgoing("missing") == []
        assert alice.incoming("missing") == []

    def test_delete_link_removes_incoming_and_shares(self, alice, bob):
        cat = alice.add_node("ConceptNode", "cat")
        animal = alice.add_node("ConceptNode", "animal")
        link = alice.add_link("InheritanceLink", [cat, animal])
        alice.share_atom(link.id, "bob")

        assert alice.delete_atom(link.id) is True
        assert alice.incoming(cat) == []
        assert alice.incoming(animal) == []
        assert bob.get_shared_atoms() == []
        assert alice.stats().shared_out == 0

    def test_set_values(self, alice):
        cat = alice.add_node("ConceptNode", "cat")
        assert alice.set_tv(cat.id, 0.3, 0.9)
        assert alice.set_av(cat.id, 2.0, 1.0)
        updated = alice.get_atom(cat.id)
        assert updated.tv == {"strength": 0.3, "confidence": 0.9}
        assert updated.av == {"sti": 2.0, "lti": 1.0}

    def test_owners_are_isolated(self, alice, bob):
        cat = alice.add_node("ConceptNode", "cat")
        assert bob.get_atom(cat.id) is None
        assert bob.query() == []
        assert bob.delete_atom(cat.id) is False


class TestQuery:
    def test_empty_pattern_matches_everything(self, alice):
        alice.add_triple("Alice", "knows", "Bob")
        assert len(alice.query()) == 5
        assert len(alice.query({})) == 5

    def test_type_name_pattern(self, alice):
        alice.add_triple("Alice", "knows", "Bob")
        concepts = alice.query({"type_name": "ConceptNode"})
        assert {a.name for a in concepts} == {"Alice", "Bob"}

    def test_unknown_key_rejected(self, alice):
        with pytest.raises(ValidationError):
            alice.query({"colour": "red"})

    def test_saved_query(self, alice):
        alice.add_node("ConceptNode", "cat")
        saved = alice.save_query({"type_name": "ConceptNode"})
        alice.add_node("ConceptNode", "dog")

        views = alice.execute_query(saved.id)
        assert {v.name for v in views} == {"cat", "dog"}

        [listed] = alice.list_queries()
        assert listed.id == saved.id
        assert listed.executed_at is not None
        assert {item["name"] for item in listed.result} == {"cat", "dog"}

    def test_save_query_validates(self, alice):
        with pytest.raises(ValidationError):
            alice.save_query({"bogus": 1})

    def test_execute_missing_query(self, alice):
        with pytest.raises(NotFoundError):
            alice.execute_query("missing")

    def test_saved_queries_are_owner_scoped(self, alice, bob):
        saved = alice.save_query({})
        with pytest.raises(NotFoundError):
            bob.execute_query(saved.id)


class TestTriples:
    def test_add_and_query(self, alice):
        alice.add_triple("Alice", "knows", "Bob")
        alice.add_triple("Alice", "knows", "Bob")
        assert alice.query_subject("Alice") == [
            Triple(subject="Alice", predicate="knows", object="Bob")
        ]


class TestSharing:
    def test_private_share(self, alice, bob, carol):
        cat = alice.add_node("ConceptNode", "cat")
        alice.share_atom(cat.id, "bob")

        assert [a.id for a in bob.get_shared_atoms()] == [cat.id]
        assert carol.get_shared_atoms() == []
        assert carol.get_public_atoms() == []

    def test_public_share(self, alice, carol):
        cat = alice.add_node("ConceptNode", "cat")
        alice.share_atom(cat.id, "bob", is_public=True)
        assert [a.id for a in carol.get_public_atoms()] == [cat.id]

    def test_get_and_list_shares(self, alice, bob):
        cat = alice.add_node("ConceptNode", "cat")
        share = alice.share_atom(cat.id, "bob", share_type="copy")
        assert bob.get_share(share.id).id == share.id
        assert [s.id for s in alice.list_shares()] == [share.id]

    def test_copy_to_target(self, alice, bob):
        cat = alice.add_node("ConceptNode", "cat")
        share = alice.share_atom(cat.id, "bob", share_type="copy")

        copy = bob.copy_to_target(share)
        assert bob.get_atom(copy.id) is not None
        assert alice.get_atom(copy.id) is None

    def test_permission(self, alice, bob, carol):
        cat = alice.add_node("ConceptNode", "cat")
        alice.share_atom(cat.id, "bob", share_type="write")
        assert alice.permission(cat) is Permission.WRITE
        assert bob.permission(cat) is Permission.WRITE
        assert carol.permission(cat) is Permission.NONE

    def test_stats_count_shares(self, alice, bob):
        cat = alice.add_node("ConceptNode", "cat")
        alice.share_atom(cat.id, "bob")
        assert alice.stats().shared_out == 1
        assert bob.stats().shared_in == 1


class TestSerialization:
    def test_export_import_preserves_count_and_triples(self, alice, bob):
        alice.add_triple("Alice", "knows", "Bob")
        alice.add_triple("Bob", "knows", "Carol")
        payload = alice.export()

        assert bob.import_payload(payload) == payload.atom_count
        assert bob.stats().total == payload.atom_count
        assert bob.query_subject("Alice") == alice.query_subject("Alice")
        assert bob.query_subject("Bob") == alice.query_subject("Bob")

    def test_import_json(self, alice, bob):
        alice.add_node("ConceptNode", "cat")
        assert bob.import_json(alice.export_json(indent=2)) == 1

    def test_failed_import_leaves_store_unchanged(self, bob):
        bob.add_node("ConceptNode", "existing")
        payload = {
            "owner_id": "alice",
            "atom_count": 2,
            "atoms": [
                {"id": "n", "atom_type": "node", "type_name": "ConceptNode", "name": "new"},
                {"id": "l", "atom_type": "link", "type_name": "ListLink", "outgoing": ["zz"]},
            ],
        }
        with pytest.raises(AtomImportError):
            bob.import_payload(payload)
        assert [a.name for a in bob.query()] == ["existing"]

    def test_view(self, alice):
        cat = alice.add_node("ConceptNode", "cat", value="meow")
        view = alice.view(cat)
        assert view.id == cat.id
        assert view.value == "meow"
        assert view.atom_type == "node"


class TestToString:
    def test_node(self, alice):
        cat = alice.add_node("ConceptNode", "cat")
        assert alice.to_string(cat) == '(ConceptNode "cat")'

    def test_nested_links(self, alice):
        evaluation = alice.add_triple("Alice", "knows", "Bob")
        assert alice.to_string(evaluation) == (
            '(EvaluationLink (PredicateNode "knows") '
            '(ListLink (ConceptNode "Alice") (ConceptNode "Bob")))'
        )

    def test_shared_subtree_rendered_twice(self, alice):
        cat = alice.add_node("ConceptNode", "cat")
        inner = alice.add_link("ListLink", [cat])
        outer = alice.add_link("AndLink", [inner, inner])
        assert alice.to_string(outer) == (
            '(AndLink (ListLink (ConceptNode "cat")) (ListLink (ConceptNode "cat")))'
        )

    def test_depth_bound(self, temp_dir):
        space = AtomSpace(
            "alice", storage=LocalStorage(temp_dir), settings=Settings(max_render_depth=1)
        )
        cat = space.add_node("ConceptNode", "cat")
        inner = space.add_link("ListLink", [cat])
        outer = space.add_link("NotLink", [inner])
        assert space.to_string(outer) == "(NotLink (ListLink ...))"

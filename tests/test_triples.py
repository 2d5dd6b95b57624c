# tests/test_triples.py
"""Tests for triple encoding and decoding."""

import pytest

from atomspace.models import Triple
from atomspace.stores.sqlite_atom import SQLiteAtomStore
from atomspace.triples import TripleCodec


@pytest.fixture
def store(db_path):
    return SQLiteAtomStore(db_path, "alice")


@pytest.fixture
def codec(store):
    return TripleCodec(store)


class TestAddTriple:
    def test_encoding_shape(self, store, codec):
        evaluation = codec.add_triple("Alice", "knows", "Bob")
        assert evaluation.type_name == "EvaluationLink"

        predicate, arguments = store.outgoing(evaluation)
        assert (predicate.type_name, predicate.name) == ("PredicateNode", "knows")
        assert arguments.type_name == "ListLink"

        subject, obj = store.outgoing(arguments)
        assert (subject.type_name, subject.name) == ("ConceptNode", "Alice")
        assert (obj.type_name, obj.name) == ("ConceptNode", "Bob")

    def test_repeated_triple_returns_same_link(self, store, codec):
        first = codec.add_triple("Alice", "knows", "Bob")
        second = codec.add_triple("Alice", "knows", "Bob")
        assert first.id == second.id
        assert store.count_atoms() == 5


class TestQuerySubject:
    def test_round_trip(self, codec):
        codec.add_triple("Alice", "knows", "Bob")
        assert codec.query_subject("Alice") == [
            Triple(subject="Alice", predicate="knows", object="Bob")
        ]

    def test_no_duplicates_after_repeating(self, codec):
        codec.add_triple("Alice", "knows", "Bob")
        codec.add_triple("Alice", "knows", "Bob")
        assert len(codec.query_subject("Alice")) == 1

    def test_multiple_facts(self, codec):
        codec.add_triple("Alice", "knows", "Bob")
        codec.add_triple("Alice", "likes", "Bob")
        codec.add_triple("Alice", "knows", "Carol")
        facts = {(t.predicate, t.object) for t in codec.query_subject("Alice")}
        assert facts == {("knows", "Bob"), ("likes", "Bob"), ("knows", "Carol")}

    def test_object_position_not_reported_as_subject(self, codec):
        codec.add_triple("Alice", "knows", "Bob")
        assert codec.query_subject("Bob") == []

    def test_unknown_subject(self, codec):
        assert codec.query_subject("Nobody") == []

    def test_malformed_structures_skipped(self, store, codec):
        alice = store.add_node("ConceptNode", "Alice")
        bob = store.add_node("ConceptNode", "Bob")
        knows = store.add_node("PredicateNode", "knows")

        # ListLink with three members
        triple_list = store.add_link("ListLink", [alice.id, bob.id, bob.id])
        store.add_link("EvaluationLink", [knows.id, triple_list.id])

        # EvaluationLink with the ListLink in the wrong position
        pair = store.add_link("ListLink", [alice.id, bob.id])
        store.add_link("EvaluationLink", [pair.id, knows.id])

        # EvaluationLink with an extra member
        store.add_link("EvaluationLink", [knows.id, pair.id, bob.id])

        # Pair not wrapped in an EvaluationLink of another type
        store.add_link("ImplicationLink", [knows.id, pair.id])

        assert codec.query_subject("Alice") == []

    def test_subject_must_be_concept_node(self, store, codec):
        alice = store.add_node("AgentNode", "Alice")
        bob = store.add_node("ConceptNode", "Bob")
        knows = store.add_node("PredicateNode", "knows")
        pair = store.add_link("ListLink", [alice.id, bob.id])
        store.add_link("EvaluationLink", [knows.id, pair.id])

        assert codec.query_subject("Alice") == []

    def test_owner_scoped(self, db_path, codec):
        codec.add_triple("Alice", "knows", "Bob")
        other = TripleCodec(SQLiteAtomStore(db_path, "bob"))
        assert other.query_subject("Alice") == []

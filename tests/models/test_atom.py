# tests/models/test_atom.py
"""Tests for the Atom model."""

import pytest
from pydantic import ValidationError

from atomspace.models import Atom, AttentionValue, TruthValue
from atomspace.models.atom import decode_value, encode_value, is_valid_type


class TestTruthValue:
    def test_defaults(self):
        tv = TruthValue()
        assert tv.strength == 1.0
        assert tv.confidence == 1.0

    def test_clamps_into_unit_interval(self):
        tv = TruthValue(strength=1.7, confidence=-0.3)
        assert tv.strength == 1.0
        assert tv.confidence == 0.0

    def test_keeps_values_in_range(self):
        tv = TruthValue(strength=0.25, confidence=0.75)
        assert tv.strength == 0.25
        assert tv.confidence == 0.75


class TestAttentionValue:
    def test_defaults(self):
        av = AttentionValue()
        assert av.sti == 0.0
        assert av.lti == 0.0

    def test_not_clamped(self):
        av = AttentionValue(sti=-12.5, lti=400.0)
        assert av.sti == -12.5
        assert av.lti == 400.0


class TestAtom:
    def test_create_node(self):
        atom = Atom(owner_id="alice", kind="node", type_name="ConceptNode", name="cat")
        assert atom.is_node
        assert not atom.is_link
        assert atom.id
        assert atom.truth_value == TruthValue()
        assert atom.created_at is not None

    def test_create_link_without_name(self):
        atom = Atom(owner_id="alice", kind="link", type_name="ListLink")
        assert atom.is_link
        assert atom.name is None

    def test_unique_ids(self):
        a = Atom(owner_id="alice", kind="node", type_name="ConceptNode", name="a")
        b = Atom(owner_id="alice", kind="node", type_name="ConceptNode", name="a")
        assert a.id != b.id

    def test_node_type_on_link_rejected(self):
        with pytest.raises(ValidationError):
            Atom(owner_id="alice", kind="link", type_name="ConceptNode")

    def test_link_type_on_node_rejected(self):
        with pytest.raises(ValidationError):
            Atom(owner_id="alice", kind="node", type_name="ListLink", name="x")

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Atom(owner_id="alice", kind="node", type_name="BananaNode", name="x")

    def test_node_requires_name(self):
        with pytest.raises(ValidationError):
            Atom(owner_id="alice", kind="node", type_name="ConceptNode", name="   ")

    def test_value_decoded_from_raw(self):
        atom = Atom(
            owner_id="alice",
            kind="node",
            type_name="NumberNode",
            name="42",
            raw_value='{"unit": "kg"}',
        )
        assert atom.value == {"unit": "kg"}

    def test_value_falls_back_to_raw_text(self):
        atom = Atom(
            owner_id="alice",
            kind="node",
            type_name="ConceptNode",
            name="x",
            raw_value="not json {",
        )
        assert atom.value == "not json {"

    def test_tv_and_av_dicts(self):
        atom = Atom(
            owner_id="alice",
            kind="node",
            type_name="ConceptNode",
            name="x",
            truth_value=TruthValue(strength=0.5, confidence=0.4),
        )
        assert atom.tv == {"strength": 0.5, "confidence": 0.4}
        assert atom.av == {"sti": 0.0, "lti": 0.0}


class TestValueCodec:
    def test_none_round_trips_as_none(self):
        assert encode_value(None) is None
        assert decode_value(None) is None

    def test_encode_is_json(self):
        assert encode_value({"a": [1, 2]}) == '{"a": [1, 2]}'

    def test_encode_falls_back_to_str(self):
        class Opaque:
            def __str__(self):
                return "opaque"

        assert decode_value(encode_value(Opaque())) == "opaque"


class TestTypeSets:
    def test_valid_types(self):
        assert is_valid_type("node", "PredicateNode")
        assert is_valid_type("link", "EvaluationLink")

    def test_invalid_types(self):
        assert not is_valid_type("node", "EvaluationLink")
        assert not is_valid_type("link", "PredicateNode")
        assert not is_valid_type("edge", "ListLink")

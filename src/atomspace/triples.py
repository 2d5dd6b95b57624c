# src/atomspace/triples.py
"""Subject-predicate-object facts encoded on top of the hypergraph.

A triple is stored with a fixed shape:

    EvaluationLink
        PredicateNode(predicate)
        ListLink
            ConceptNode(subject)
            ConceptNode(object)

Every piece goes through find-or-create, so storing the same fact twice
returns the same EvaluationLink.
"""

from __future__ import annotations

from atomspace.models import Atom, Triple
from atomspace.stores.base import AtomStore

SUBJECT_TYPE = "ConceptNode"
OBJECT_TYPE = "ConceptNode"
PREDICATE_TYPE = "PredicateNode"
ARGUMENTS_TYPE = "ListLink"
EVALUATION_TYPE = "EvaluationLink"


class TripleCodec:
    """Encode and decode triples in one owner's store."""

    def __init__(self, store: AtomStore) -> None:
        self.store = store

    def add_triple(self, subject: str, predicate: str, obj: str) -> Atom:
        """Store a fact and return its EvaluationLink."""
        subject_node = self.store.add_node(SUBJECT_TYPE, subject)
        predicate_node = self.store.add_node(PREDICATE_TYPE, predicate)
        object_node = self.store.add_node(OBJECT_TYPE, obj)

        arguments = self.store.add_link(ARGUMENTS_TYPE, [subject_node.id, object_node.id])
        return self.store.add_link(EVALUATION_TYPE, [predicate_node.id, arguments.id])

    def query_subject(self, subject: str) -> list[Triple]:
        """All facts whose subject is the ConceptNode named ``subject``.

        Links that do not follow the triple shape (wrong arity, wrong position,
        unnamed members) are skipped.
        """
        subject_node = self.store.find_node(SUBJECT_TYPE, subject)
        if subject_node is None:
            return []

        results: list[Triple] = []
        for arguments in self.store.incoming(subject_node):
            if arguments.type_name != ARGUMENTS_TYPE:
                continue
            members = self.store.outgoing(arguments)
            if len(members) != 2 or members[0].id != subject_node.id:
                continue
            obj = members[1]

            for evaluation in self.store.incoming(arguments):
                if evaluation.type_name != EVALUATION_TYPE:
                    continue
                parts = self.store.outgoing(evaluation)
                if len(parts) != 2 or parts[1].id != arguments.id:
                    continue
                predicate = parts[0]
                if predicate.name is None or obj.name is None:
                    continue
                results.append(Triple(subject=subject, predicate=predicate.name, object=obj.name))
        return results

"""
Conceptual Knowledge Base
=========================

Long-lived ontological relations (is-a, part-of, causes, located-in,
has-property) that survive across passages.

When a network is built the knowledge base attaches every relation whose
source or target concept occurs in the passage to the matching node(s).
The activator later spreads activation along attached relations in
either direction, scaled by relation strength and the concept boost.
"""

import logging
import warnings
from enum import Enum
from typing import Iterable, List, Optional, Tuple, TYPE_CHECKING

from ..constants import DEFAULT_RELATIONS
from ..validation import clamp_unit, validate_non_empty_string, validate_unit_interval

if TYPE_CHECKING:
    from ..lexical import LexicalToolkit
    from ..network import SemanticNetwork
    from ..observability import ReasoningTrace

logger = logging.getLogger(__name__)


class RelationType(Enum):
    """Kinds of ontological relation."""
    IS_A = 'is_a'
    PART_OF = 'part_of'
    CAUSES = 'causes'
    LOCATED_IN = 'located_in'
    HAS_PROPERTY = 'has_property'

    @classmethod
    def parse(cls, value) -> 'RelationType':
        """Accept a RelationType, its name ("IS_A") or its value ("is_a")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace('-', '_').replace(' ', '_')
            if key in cls.__members__:
                return cls[key]
        raise ValueError(f"Unknown relation type: {value!r}")


class ConceptRelation:
    """
    A typed, weighted link between two concepts.

    Raises:
        ValueError: On an empty concept, an unknown type or strength
            outside [0, 1]
    """

    __slots__ = ('source', 'target', 'relation_type', '_strength')

    def __init__(self, source: str, target: str, relation_type, strength: float):
        validate_non_empty_string(source, 'relation source')
        validate_non_empty_string(target, 'relation target')
        validate_unit_interval(strength, 'relation strength')
        self.source = source.strip().lower()
        self.target = target.strip().lower()
        self.relation_type = RelationType.parse(relation_type)
        self._strength = float(strength)

    @property
    def strength(self) -> float:
        return self._strength

    @strength.setter
    def strength(self, value: float) -> None:
        clamped = clamp_unit(value)
        if clamped != value:
            warnings.warn(
                f"Relation strength {value} is outside [0, 1]; clamped to {clamped}",
                RuntimeWarning,
                stacklevel=2,
            )
            logger.warning(f"Clamped strength of {self!r} to {clamped}")
        self._strength = clamped

    @property
    def key(self) -> Tuple[str, str, RelationType]:
        return (self.source, self.target, self.relation_type)

    def other_end(self, concept: str) -> Optional[str]:
        """The opposite endpoint, or None if concept is on neither end."""
        if concept == self.source:
            return self.target
        if concept == self.target:
            return self.source
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConceptRelation):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return (f"ConceptRelation({self.source} -{self.relation_type.name}-> "
                f"{self.target}, strength={self._strength:.2f})")

    def to_dict(self) -> dict:
        return {
            'source': self.source,
            'target': self.target,
            'relation_type': self.relation_type.name,
            'strength': self._strength,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ConceptRelation':
        return cls(data['source'], data['target'], data['relation_type'], data['strength'])


class ConceptualKnowledgeBase:
    """
    Ordered, duplicate-free store of concept relations.

    Duplicates are judged by (source, target, type); strength does not
    make a relation distinct.
    """

    def __init__(self, lexicon: 'LexicalToolkit'):
        self.lexicon = lexicon
        self._relations: List[ConceptRelation] = []
        self.reset_to_defaults()

    def make_relation(self, source: str, target: str, relation_type,
                      strength: float) -> ConceptRelation:
        """Build a relation from surface words, stemming both concepts."""
        if isinstance(source, str) and source.strip():
            source = self.lexicon.stem(source.strip())
        if isinstance(target, str) and target.strip():
            target = self.lexicon.stem(target.strip())
        return ConceptRelation(source, target, relation_type, strength)

    def reset_to_defaults(self) -> None:
        self._relations = []
        for source, target, type_name, strength in DEFAULT_RELATIONS:
            self.add_relation(self.make_relation(source, target, type_name, strength))

    def add_relation(self, relation: ConceptRelation) -> bool:
        """Append a relation; False when one with the same key exists."""
        if any(r.key == relation.key for r in self._relations):
            return False
        self._relations.append(relation)
        logger.debug(f"Added {relation!r}")
        return True

    def remove_relation(self, source: str, target: str, relation_type) -> bool:
        """
        Remove the relation between two words.

        Both words are stemmed before matching, so "cats" removes the
        relation stored for "cat".
        """
        if not source or not source.strip() or not target or not target.strip():
            return False
        key = (self.lexicon.stem(source.strip()), self.lexicon.stem(target.strip()),
               RelationType.parse(relation_type))
        before = len(self._relations)
        self._relations = [r for r in self._relations if r.key != key]
        return len(self._relations) < before

    @property
    def relations(self) -> List[ConceptRelation]:
        return list(self._relations)

    def relations_for(self, concept: str) -> List[ConceptRelation]:
        return [r for r in self._relations if concept in (r.source, r.target)]

    def __len__(self) -> int:
        return len(self._relations)

    def integrate_into(self, network: 'SemanticNetwork',
                       trace: Optional['ReasoningTrace'] = None) -> int:
        """
        Attach relations to the nodes of a freshly built network.

        A relation is attached to each endpoint present in the network.
        When both endpoints are present they are also joined by a
        non-negated co-occurrence edge in both directions.

        Returns:
            Number of relations attached
        """
        attached = 0
        for relation in self._relations:
            source_id = network.node_id(relation.source)
            target_id = network.node_id(relation.target)
            if source_id is None and target_id is None:
                continue
            for node_id in (source_id, target_id):
                if node_id is not None:
                    network.attach_relation(node_id, relation)
            attached += 1
            if source_id is not None and target_id is not None:
                network.add_cooccurrence(source_id, target_id, negated=False)
                network.add_cooccurrence(target_id, source_id, negated=False)
                if trace is not None:
                    trace.log(f"Ontology linked '{relation.source}' and "
                              f"'{relation.target}' ({relation.relation_type.name})")
            elif trace is not None:
                present = relation.source if source_id is not None else relation.target
                trace.log(f"Ontology attached {relation.relation_type.name} "
                          f"({relation.source} -> {relation.target}) to '{present}'")
        return attached

"""
Knowledge API: rule and ontology management.

Relation changes mark the cached network stale so the next query rebuilds
it and re-integrates the ontology. Rules are evaluated against the network
on every query and leave it untouched.
"""

import logging
from typing import Iterable, List

from ..knowledge.ontology import ConceptRelation
from ..knowledge.rules import Rule

logger = logging.getLogger(__name__)


class KnowledgeMixin:
    """
    Mixin providing rule and conceptual relation management.

    Requires CoreMixin to be present (provides rule_engine, knowledge_base,
    network, lexicon, _lock).
    """

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def add_rule(self, rule: Rule) -> bool:
        """
        Add a forward-chaining rule.

        Conditions and consequence are matched against network stems, so
        build rules with ``rule_engine.make_rule`` when starting from
        surface words.

        Returns:
            True if added, False if an identical rule already exists
        """
        with self._lock:
            return self.rule_engine.add_rule(rule)

    def remove_rule(self, conditions: Iterable[str], consequence: str) -> bool:
        """
        Remove a rule by its conditions and consequence.

        Tries the given concepts as-is first, then their stems.
        """
        if isinstance(conditions, str):
            conditions = [conditions]
        conditions = list(conditions)
        with self._lock:
            removed = self.rule_engine.remove_rule(conditions, consequence)
            if not removed:
                stemmed = [self.lexicon.stem(c.strip()) for c in conditions]
                removed = self.rule_engine.remove_rule(
                    stemmed, self.lexicon.stem(consequence.strip()))
        return removed

    @property
    def rules(self) -> List[Rule]:
        """Rules in evaluation order (a copy)."""
        return self.rule_engine.rules

    def reset_rules(self) -> None:
        """Discard learned and user rules and restore the defaults."""
        with self._lock:
            self.rule_engine.reset_to_defaults()

    # -------------------------------------------------------------------------
    # Conceptual relations
    # -------------------------------------------------------------------------

    def add_conceptual_relation(self, relation: ConceptRelation) -> bool:
        """
        Add an ontology relation.

        Returns:
            True if added, False if the same (source, target, type) exists
        """
        with self._lock:
            added = self.knowledge_base.add_relation(relation)
            if added:
                self.network.invalidate()
        return added

    def remove_conceptual_relation(self, source: str, target: str, relation_type) -> bool:
        """Remove a relation; source and target are stemmed before matching."""
        with self._lock:
            removed = self.knowledge_base.remove_relation(source, target, relation_type)
            if removed:
                self.network.invalidate()
        return removed

    @property
    def conceptual_relations(self) -> List[ConceptRelation]:
        return self.knowledge_base.relations

    def reset_conceptual_relations(self) -> None:
        with self._lock:
            self.knowledge_base.reset_to_defaults()
            self.network.invalidate()

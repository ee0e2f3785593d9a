"""
Knowledge stores shared across passages: forward-chaining rules and
ontological concept relations.
"""

from .rules import Rule, RuleEngine, RuleFiring
from .ontology import ConceptRelation, ConceptualKnowledgeBase, RelationType

__all__ = [
    'Rule',
    'RuleEngine',
    'RuleFiring',
    'ConceptRelation',
    'ConceptualKnowledgeBase',
    'RelationType',
]

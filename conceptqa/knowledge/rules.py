"""
Rule Engine
===========

Forward-chaining rules evaluated once per query over the activated
semantic network.

A rule ``{fast, vehicle} -> speed (0.8)`` fires when every condition
concept is present with activation at or above the activation threshold.
Firing raises the consequence concept by the weakest condition's
activation times the rule confidence. Rules are never consumed: a rule
fires on every query whose network satisfies it.
"""

import logging
import warnings
from typing import FrozenSet, Iterable, List, NamedTuple, Optional, Tuple, TYPE_CHECKING

from ..constants import DEFAULT_RULES
from ..validation import (
    clamp_unit,
    validate_non_empty_string,
    validate_params,
    validate_unit_interval,
)

if TYPE_CHECKING:
    from ..lexical import LexicalToolkit
    from ..network import SemanticNetwork
    from ..observability import ReasoningTrace

logger = logging.getLogger(__name__)

RuleKey = Tuple[FrozenSet[str], str]


class Rule:
    """
    A condition set implying a consequence concept.

    Conditions and consequence are concept names (stems). They are trimmed
    and lowercased here; stemming is the caller's job (see
    ``RuleEngine.make_rule``).

    Args:
        conditions: Non-empty collection of concept names
        consequence: Concept boosted when the rule fires
        confidence: Strength of the implication, in [0, 1]
        description: Free text shown in the reasoning trace

    Raises:
        ValueError: On empty conditions or consequence, or confidence
            outside [0, 1]
    """

    __slots__ = ('conditions', 'consequence', '_confidence', 'description')

    def __init__(self, conditions: Iterable[str], consequence: str,
                 confidence: float, description: Optional[str] = None):
        if isinstance(conditions, str):
            conditions = [conditions]
        normalized = []
        for condition in conditions or ():
            validate_non_empty_string(condition, 'rule condition')
            normalized.append(condition.strip().lower())
        if not normalized:
            raise ValueError("rule conditions must not be empty")
        validate_non_empty_string(consequence, 'rule consequence')
        validate_unit_interval(confidence, 'rule confidence')

        self.conditions: FrozenSet[str] = frozenset(normalized)
        self.consequence: str = consequence.strip().lower()
        self._confidence = float(confidence)
        self.description = description.strip() if description and description.strip() else 'Unnamed Rule'

    @property
    def confidence(self) -> float:
        return self._confidence

    @confidence.setter
    def confidence(self, value: float) -> None:
        clamped = clamp_unit(value)
        if clamped != value:
            warnings.warn(
                f"Rule confidence {value} is outside [0, 1]; clamped to {clamped}",
                RuntimeWarning,
                stacklevel=2,
            )
            logger.warning(f"Clamped confidence of rule '{self.description}' to {clamped}")
        self._confidence = clamped

    @property
    def key(self) -> RuleKey:
        """Identity used for duplicate detection."""
        return (self.conditions, self.consequence)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        conditions = ', '.join(sorted(self.conditions))
        return (f"Rule({{{conditions}}} -> {self.consequence}, "
                f"confidence={self._confidence:.2f}, '{self.description}')")

    def to_dict(self) -> dict:
        return {
            'conditions': sorted(self.conditions),
            'consequence': self.consequence,
            'confidence': self._confidence,
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Rule':
        return cls(data['conditions'], data['consequence'],
                   data['confidence'], data.get('description'))


class RuleFiring(NamedTuple):
    """One rule application during evaluation."""
    rule: Rule
    amount: float
    consequence_activation: float


class RuleEngine:
    """
    Ordered, duplicate-free rule store with forward evaluation.

    Args:
        lexicon: Used to stem the default rules and ``make_rule`` input
        activation_threshold: Minimum activation for a condition to hold
    """

    @validate_params(activation_threshold=lambda t: validate_unit_interval(t, 'activation_threshold'))
    def __init__(self, lexicon: 'LexicalToolkit', activation_threshold: float = 0.05):
        self.lexicon = lexicon
        self.activation_threshold = activation_threshold
        self._rules: List[Rule] = []
        self._keys = set()
        self.reset_to_defaults()

    def make_rule(self, conditions: Iterable[str], consequence: str,
                  confidence: float, description: Optional[str] = None) -> Rule:
        """Build a rule from surface words, stemming every concept."""
        if isinstance(conditions, str):
            conditions = [conditions]
        stemmed = [self.lexicon.stem(c.strip()) if isinstance(c, str) and c.strip() else c
                   for c in conditions]
        if isinstance(consequence, str) and consequence.strip():
            consequence = self.lexicon.stem(consequence.strip())
        return Rule(stemmed, consequence, confidence, description)

    def reset_to_defaults(self) -> None:
        """Drop all rules and reinstall the built-in ones."""
        self._rules = []
        self._keys = set()
        for conditions, consequence, confidence, description in DEFAULT_RULES:
            self.add_rule(self.make_rule(conditions, consequence, confidence, description))

    def add_rule(self, rule: Rule) -> bool:
        """
        Append a rule unless an identical one exists.

        Returns:
            True if added, False for a duplicate (same conditions and
            consequence)
        """
        if rule.key in self._keys:
            logger.debug(f"Rejected duplicate rule {rule!r}")
            return False
        self._rules.append(rule)
        self._keys.add(rule.key)
        logger.debug(f"Added rule {rule!r}")
        return True

    def remove_rule(self, conditions: Iterable[str], consequence: str) -> bool:
        """Remove the rule with these (already stemmed) conditions and consequence."""
        if isinstance(conditions, str):
            conditions = [conditions]
        key = (frozenset(c.strip().lower() for c in conditions), consequence.strip().lower())
        if key not in self._keys:
            return False
        self._rules = [r for r in self._rules if r.key != key]
        self._keys.discard(key)
        return True

    def has_rule(self, conditions: Iterable[str], consequence: str) -> bool:
        return (frozenset(conditions), consequence) in self._keys

    @property
    def rules(self) -> List[Rule]:
        """Rules in insertion order (a copy)."""
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def evaluate(self, network: 'SemanticNetwork',
                 trace: Optional['ReasoningTrace'] = None) -> List[RuleFiring]:
        """
        Fire every satisfied rule once, in insertion order.

        Later rules see activation added by earlier ones.

        Returns:
            The firings that changed the network
        """
        firings: List[RuleFiring] = []
        for rule in self._rules:
            condition_ids = [network.node_id(c) for c in sorted(rule.conditions)]
            if any(node_id is None for node_id in condition_ids):
                continue
            weakest = min(network.activation[node_id] for node_id in condition_ids)
            if weakest < self.activation_threshold:
                continue
            target = network.node_id(rule.consequence)
            if target is None:
                if trace is not None:
                    trace.log(f"Rule '{rule.description}' satisfied but "
                              f"'{rule.consequence}' is not in the passage")
                continue
            amount = weakest * rule.confidence
            new_activation = network.increase_activation(target, amount)
            firings.append(RuleFiring(rule, amount, new_activation))
            if trace is not None:
                trace.log(f"Rule fired: '{rule.description}' boosted "
                          f"'{rule.consequence}' by {amount:.3f} to {new_activation:.3f}")
        return firings

"""
Configuration Module
====================

Centralized configuration for the concept QA engine.

Every tunable constant of graph construction, spreading activation,
candidate scoring and the meta-cognitive loop lives on one dataclass so
that an engine can be constructed with custom behaviour without touching
the algorithms.

Example:
    from conceptqa import QAEngine, ReasonerConfig

    config = ReasonerConfig(max_iterations=5, decay_rate=0.15)
    engine = QAEngine(config=config)

    # Syntactic role edges are off by default
    config = ReasonerConfig(use_syntactic_edges=True)
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict

from .constants import SCORE_WEIGHTS, MIN_ANSWER_CONFIDENCE


@dataclass
class ReasonerConfig:
    """
    Configuration settings for the reasoning engine.

    Attributes:
        initial_activation: Activation given to a non-negated seed concept.
        activation_threshold: Minimum activation for a node to spread, for a
            propagated amount to count, and for a rule condition to hold.
        decay_rate: Activation subtracted from a node after it spreads.
        max_iterations: Upper bound on propagation rounds.
        negation_effect: Fraction removed from activation reaching (or
            seeding) a negated node, and from negated edge weights.
        concept_boost: Multiplier for activation carried by ontology
            relations; half of it is the temporal overlap bonus.
        sentiment_boost: Relative boost (or damping) when question and
            target sentiment agree (or disagree).

        negation_scope: Tokens following a negation word that are negated.
        cooccurrence_window: Forward window size for co-occurrence edges.
        initial_edge_weight: Weight of a freshly created edge.
        edge_reinforcement: Weight added when a co-occurrence repeats.
        use_syntactic_edges: Add SUBJECT/OBJECT/ACTION edges from SVO
            triplets in addition to co-occurrence edges.

        score_weights: Weights of the six candidate scoring factors.
        min_answer_confidence: Confidence below which a result is invalid.
        max_chunk_words: Longest noun-phrase candidate, in words.

        confidence_window: Size of the rolling confidence history.
        low_confidence_mean / high_confidence_mean: Adaptation triggers.
        threshold_step_up / threshold_step_down / decay_step: Adaptation
            step sizes.
        min_threshold / max_threshold / min_decay / max_decay: Bounds the
            adaptation loop never crosses.
        rule_induction_confidence: Answer confidence required to learn a
            rule.
        induced_rule_factor: Learned rule confidence as a fraction of the
            answer confidence.

        memory_capacity: Number of recent valid answers retained.
    """

    # Activation settings
    initial_activation: float = 0.8
    activation_threshold: float = 0.05
    decay_rate: float = 0.1
    max_iterations: int = 15
    negation_effect: float = 0.7
    concept_boost: float = 0.2
    sentiment_boost: float = 0.1

    # Network construction settings
    negation_scope: int = 3
    cooccurrence_window: int = 5
    initial_edge_weight: float = 0.5
    edge_reinforcement: float = 0.1
    use_syntactic_edges: bool = False

    # Scoring settings
    score_weights: Dict[str, float] = field(default_factory=lambda: dict(SCORE_WEIGHTS))
    min_answer_confidence: float = MIN_ANSWER_CONFIDENCE
    max_chunk_words: int = 4

    # Meta-cognition settings
    confidence_window: int = 5
    low_confidence_mean: float = 0.3
    high_confidence_mean: float = 0.8
    threshold_step_up: float = 0.01
    threshold_step_down: float = 0.005
    decay_step: float = 0.005
    min_threshold: float = 0.05
    max_threshold: float = 0.2
    min_decay: float = 0.05
    max_decay: float = 0.2
    rule_induction_confidence: float = 0.8
    induced_rule_factor: float = 0.9

    # Memory settings
    memory_capacity: int = 3

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate all configuration values."""
        for name in ('initial_activation', 'activation_threshold', 'decay_rate',
                     'negation_effect', 'concept_boost', 'sentiment_boost',
                     'initial_edge_weight', 'edge_reinforcement',
                     'min_answer_confidence', 'low_confidence_mean',
                     'high_confidence_mean', 'rule_induction_confidence',
                     'induced_rule_factor'):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")

        if self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )
        if self.negation_scope < 0:
            raise ValueError(
                f"negation_scope must be non-negative, got {self.negation_scope}"
            )
        if self.cooccurrence_window < 2:
            raise ValueError(
                f"cooccurrence_window must be at least 2, got {self.cooccurrence_window}"
            )
        if self.max_chunk_words < 1:
            raise ValueError(
                f"max_chunk_words must be at least 1, got {self.max_chunk_words}"
            )
        if self.confidence_window < 1:
            raise ValueError(
                f"confidence_window must be at least 1, got {self.confidence_window}"
            )
        if self.memory_capacity < 1:
            raise ValueError(
                f"memory_capacity must be at least 1, got {self.memory_capacity}"
            )

        if self.low_confidence_mean > self.high_confidence_mean:
            raise ValueError(
                f"low_confidence_mean ({self.low_confidence_mean}) must be <= "
                f"high_confidence_mean ({self.high_confidence_mean})"
            )
        if self.min_threshold > self.max_threshold:
            raise ValueError(
                f"min_threshold ({self.min_threshold}) must be <= "
                f"max_threshold ({self.max_threshold})"
            )
        if self.min_decay > self.max_decay:
            raise ValueError(
                f"min_decay ({self.min_decay}) must be <= max_decay ({self.max_decay})"
            )

        missing = set(SCORE_WEIGHTS) - set(self.score_weights)
        if missing:
            raise ValueError(f"score_weights is missing factors: {sorted(missing)}")
        for factor, weight in self.score_weights.items():
            if weight < 0:
                raise ValueError(f"score weight '{factor}' must be non-negative, got {weight}")
        total = sum(self.score_weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"score_weights must sum to 1.0, got {total}")

    def copy(self) -> 'ReasonerConfig':
        """Create a copy of this configuration."""
        return ReasonerConfig.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            'initial_activation': self.initial_activation,
            'activation_threshold': self.activation_threshold,
            'decay_rate': self.decay_rate,
            'max_iterations': self.max_iterations,
            'negation_effect': self.negation_effect,
            'concept_boost': self.concept_boost,
            'sentiment_boost': self.sentiment_boost,
            'negation_scope': self.negation_scope,
            'cooccurrence_window': self.cooccurrence_window,
            'initial_edge_weight': self.initial_edge_weight,
            'edge_reinforcement': self.edge_reinforcement,
            'use_syntactic_edges': self.use_syntactic_edges,
            'score_weights': dict(self.score_weights),
            'min_answer_confidence': self.min_answer_confidence,
            'max_chunk_words': self.max_chunk_words,
            'confidence_window': self.confidence_window,
            'low_confidence_mean': self.low_confidence_mean,
            'high_confidence_mean': self.high_confidence_mean,
            'threshold_step_up': self.threshold_step_up,
            'threshold_step_down': self.threshold_step_down,
            'decay_step': self.decay_step,
            'min_threshold': self.min_threshold,
            'max_threshold': self.max_threshold,
            'min_decay': self.min_decay,
            'max_decay': self.max_decay,
            'rule_induction_confidence': self.rule_induction_confidence,
            'induced_rule_factor': self.induced_rule_factor,
            'memory_capacity': self.memory_capacity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReasonerConfig':
        """Create configuration from a dictionary."""
        data = dict(data)
        if 'score_weights' in data:
            data['score_weights'] = dict(data['score_weights'])
        return cls(**data)


def get_default_config() -> ReasonerConfig:
    """Get a new default configuration instance."""
    return ReasonerConfig()

"""
Spreading Activation
====================

Level-synchronous propagation of activation from seed concepts.

Seeds start at the initial activation (reduced when negated). Each round
processes every node queued in the previous round: a node above the
activation threshold pushes ``activation * edge weight`` to each neighbour
and ``activation * relation strength * concept boost`` across each attached
ontology relation, then decays. Propagated amounts are modulated by target
negation, sentiment agreement with the question and temporal overlap with
the seeds; amounts below the threshold are dropped. Targets that gain
activation are queued once for the next round.

Propagation stops when the queue empties or after ``max_iterations``
rounds, so it always terminates.
"""

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, TYPE_CHECKING

from .config import ReasonerConfig
from .constants import ROLE_EDGE_WEIGHTS
from .network import EdgeKind, SemanticNetwork
from .validation import validate_non_negative_int, validate_unit_interval

if TYPE_CHECKING:
    from .lexical import LexicalToolkit
    from .observability import ReasoningTrace

logger = logging.getLogger(__name__)


def role_edge_weights() -> Dict[EdgeKind, float]:
    """Spreading multiplier per edge kind; every kind must have one."""
    return {kind: ROLE_EDGE_WEIGHTS[kind.name] for kind in EdgeKind}


class ActivationReport(NamedTuple):
    """Summary of one activation run."""
    seeds: List[str]            # seeds found in the network, in order
    rounds: int                 # propagation rounds executed
    reached: int                # nodes with non-zero activation at the end


class SpreadingActivator:
    """
    Runs spreading activation over a semantic network.

    The activator mutates node activation and cycle flags in place but
    never changes graph structure.

    Args:
        network: Network to activate
        lexicon: Source of word sentiment polarity
        config: Activation parameters; ``activation_threshold`` is copied
            and may be changed later through the property
    """

    def __init__(self, network: SemanticNetwork, lexicon: 'LexicalToolkit',
                 config: Optional[ReasonerConfig] = None):
        self.network = network
        self.lexicon = lexicon
        self.config = config or ReasonerConfig()
        self._activation_threshold = self.config.activation_threshold
        self._max_iterations = self.config.max_iterations
        self._edge_factors = role_edge_weights()

    @property
    def activation_threshold(self) -> float:
        return self._activation_threshold

    @activation_threshold.setter
    def activation_threshold(self, value: float) -> None:
        validate_unit_interval(value, 'activation_threshold')
        self._activation_threshold = value

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, value: int) -> None:
        validate_non_negative_int(value, 'max_iterations')
        self._max_iterations = value

    def activate(self, seeds: Iterable[str], question_sentiment: int = 0,
                 trace: Optional['ReasoningTrace'] = None) -> ActivationReport:
        """
        Reset the network and propagate from the given seed stems.

        Args:
            seeds: Seed concept names; names absent from the network are
                ignored
            question_sentiment: Signed sentiment score of the question
            trace: Optional reasoning trace

        Returns:
            ActivationReport for the run
        """
        net = self.network
        cfg = self.config
        threshold = self._activation_threshold
        net.reset_activations()

        queue: List[int] = []
        seed_names: List[str] = []
        for seed in seeds:
            node_id = net.node_id(seed)
            if node_id is None or node_id in queue:
                continue
            factor = (1.0 - cfg.negation_effect) if net.negated[node_id] else 1.0
            net.set_activation(node_id, cfg.initial_activation * factor)
            net.activated_this_cycle[node_id] = True
            queue.append(node_id)
            seed_names.append(seed)
            if trace is not None:
                negation = ' (negated)' if net.negated[node_id] else ''
                trace.log(f"Seed '{seed}' activated to {net.activation[node_id]:.3f}{negation}")

        modifiers = self._target_modifiers(queue, question_sentiment)

        rounds = 0
        while queue and rounds < self._max_iterations:
            next_level: List[int] = []
            for node_id in queue:
                source_activation = net.activation[node_id]
                if source_activation < threshold:
                    continue
                self._spread_edges(node_id, source_activation, modifiers, next_level, trace)
                self._spread_relations(node_id, source_activation, modifiers, next_level, trace)
                net.apply_decay(node_id)

            # Flags only guard against double-queueing within one round
            net.clear_cycle_flags()
            queue = next_level
            rounds += 1
            if trace is not None and next_level:
                trace.log(f"Round {rounds}: {len(next_level)} concepts queued")

        net.clear_cycle_flags()
        reached = sum(1 for a in net.activation if a > 0)
        logger.debug(f"Activation finished after {rounds} rounds; {reached} concepts reached")
        return ActivationReport(seed_names, rounds, reached)

    def _target_modifiers(self, seed_ids: List[int], question_sentiment: int) -> List[float]:
        """
        Per-node multiplier for sentiment agreement and temporal overlap.

        Computed once per run since neither depends on activation.
        """
        net = self.network
        cfg = self.config
        seed_tags = [tag for node_id in seed_ids for tag in net.temporal_tags[node_id]]
        modifiers = []
        for node_id, name in enumerate(net.names):
            factor = 1.0
            polarity = self.lexicon.word_polarity(name)
            if question_sentiment and polarity:
                if (question_sentiment > 0) == (polarity > 0):
                    factor *= 1.0 + cfg.sentiment_boost
                else:
                    factor *= 1.0 - cfg.sentiment_boost
            if seed_tags and any(tag.overlaps(seed_tag)
                                 for tag in net.temporal_tags[node_id]
                                 for seed_tag in seed_tags):
                factor *= 1.0 + cfg.concept_boost / 2.0
            modifiers.append(factor)
        return modifiers

    def _deliver(self, source: int, target: int, amount: float,
                 next_level: List[int], trace: Optional['ReasoningTrace'], via: str) -> None:
        net = self.network
        if amount < self._activation_threshold:
            return
        new_activation = net.increase_activation(target, amount)
        if not net.activated_this_cycle[target]:
            net.activated_this_cycle[target] = True
            next_level.append(target)
        if trace is not None:
            trace.log(f"'{net.names[source]}' -> '{net.names[target]}' via {via}: "
                      f"+{amount:.3f} = {new_activation:.3f}")

    def _spread_edges(self, node_id: int, source_activation: float, modifiers: List[float],
                      next_level: List[int], trace: Optional['ReasoningTrace']) -> None:
        net = self.network
        negation_factor = 1.0 - self.config.negation_effect
        for edge in net.edges_from(node_id):
            amount = source_activation * edge.weight * self._edge_factors[edge.kind]
            if net.negated[edge.target]:
                amount *= negation_factor
            amount *= modifiers[edge.target]
            self._deliver(node_id, edge.target, amount, next_level, trace,
                          edge.kind.name.lower())

    def _spread_relations(self, node_id: int, source_activation: float, modifiers: List[float],
                          next_level: List[int], trace: Optional['ReasoningTrace']) -> None:
        net = self.network
        name = net.names[node_id]
        for relation in net.relations[node_id]:
            other = relation.other_end(name)
            target = net.node_id(other) if other is not None else None
            if target is None or target == node_id:
                continue
            amount = source_activation * relation.strength * self.config.concept_boost
            amount *= modifiers[target]
            self._deliver(node_id, target, amount, next_level, trace,
                          relation.relation_type.name)

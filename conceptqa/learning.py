"""
Meta-Cognition
==============

Self-monitoring loop run after every query.

Two behaviours:
    * parameter adaptation: once the rolling window of answer confidences
      is full, a low mean makes spreading more selective (higher
      threshold, slower decay) and a high mean relaxes it (lower
      threshold, faster decay), always within fixed bounds
    * rule induction: a high-confidence answer teaches one
      single-condition rule linking an active question concept to an
      active answer concept
"""

import logging
from collections import deque
from typing import Deque, List, NamedTuple, Optional, Sequence, TYPE_CHECKING

from .config import ReasonerConfig
from .knowledge.rules import Rule, RuleEngine
from .results import AnswerResult

if TYPE_CHECKING:
    from .lexical import LexicalToolkit
    from .network import SemanticNetwork
    from .observability import ReasoningTrace

logger = logging.getLogger(__name__)


class ParameterUpdate(NamedTuple):
    """Outcome of one adaptation step."""
    activation_threshold: float
    decay_rate: float
    changed: bool


class MetaCognition:
    """
    Confidence history, parameter adaptation and rule induction.

    Args:
        config: Window size, triggers, step sizes and bounds
        lexicon: Tokenizer, stemmer and stop-word list for rule induction
    """

    def __init__(self, config: Optional[ReasonerConfig] = None,
                 lexicon: Optional['LexicalToolkit'] = None):
        self.config = config or ReasonerConfig()
        self.lexicon = lexicon
        self.history: Deque[float] = deque(maxlen=self.config.confidence_window)

    def record(self, confidence: float, activation_threshold: float,
               decay_rate: float) -> ParameterUpdate:
        """Append a confidence to the window and adapt the parameters."""
        self.history.append(confidence)
        return self.adjust_parameters(list(self.history), activation_threshold, decay_rate)

    def adjust_parameters(self, history: Sequence[float], activation_threshold: float,
                          decay_rate: float) -> ParameterUpdate:
        """
        Compute new (threshold, decay) from a confidence history.

        Nothing changes until the history holds ``confidence_window``
        values.
        """
        cfg = self.config
        if len(history) < cfg.confidence_window:
            return ParameterUpdate(activation_threshold, decay_rate, False)

        mean = sum(history) / len(history)
        threshold, decay = activation_threshold, decay_rate
        if mean < cfg.low_confidence_mean:
            threshold = min(cfg.max_threshold, activation_threshold + cfg.threshold_step_up)
            decay = max(cfg.min_decay, decay_rate - cfg.decay_step)
        elif mean > cfg.high_confidence_mean:
            threshold = max(cfg.min_threshold, activation_threshold - cfg.threshold_step_down)
            decay = min(cfg.max_decay, decay_rate + cfg.decay_step)

        changed = threshold != activation_threshold or decay != decay_rate
        if changed:
            logger.info(f"Adapted parameters (mean confidence {mean:.3f}): "
                        f"threshold {activation_threshold:.3f} -> {threshold:.3f}, "
                        f"decay {decay_rate:.3f} -> {decay:.3f}")
        return ParameterUpdate(threshold, decay, changed)

    def _active_stems(self, text: str, network: 'SemanticNetwork',
                      threshold: float) -> List[str]:
        stems = self.lexicon.stems(text)
        return [s for s in dict.fromkeys(stems)
                if s in network and network.activation_of(s) >= threshold
                and not self.lexicon.is_stop_word(s)]

    def induce_rule(self, question: str, result: AnswerResult, network: 'SemanticNetwork',
                    rule_engine: RuleEngine, activation_threshold: float,
                    trace: Optional['ReasoningTrace'] = None) -> Optional[Rule]:
        """
        Learn at most one rule from a high-confidence answer.

        Pairs are tried in question order, then answer order; the first
        pair that is not a self pair and not already a rule is added.

        Returns:
            The learned rule, or None
        """
        cfg = self.config
        if result.confidence < cfg.rule_induction_confidence or self.lexicon is None:
            return None

        question_stems = self._active_stems(question, network, activation_threshold)
        answer_stems = self._active_stems(result.answer, network, activation_threshold)
        if not question_stems or not answer_stems:
            return None

        confidence = min(1.0, result.confidence * cfg.induced_rule_factor)
        for q in question_stems:
            for a in answer_stems:
                if q == a or rule_engine.has_rule([q], a):
                    continue
                rule = Rule([q], a, confidence, f"Learned: '{q}' correlates with '{a}'")
                rule_engine.add_rule(rule)
                logger.info(f"Learned rule {rule!r}")
                if trace is not None:
                    trace.log(f"Learned rule: '{q}' -> '{a}' ({confidence:.3f})")
                return rule
        return None

    def reset(self) -> None:
        self.history.clear()

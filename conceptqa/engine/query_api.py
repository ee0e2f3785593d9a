"""
Query API: answering questions and inspecting candidates.

One query runs: network ready (built or reused) -> seeded -> activated ->
rules evaluated -> candidates scored -> result emitted -> parameters adapted.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from ..activation import ActivationReport
from ..observability import timed
from ..results import AnswerCandidate, AnswerResult

logger = logging.getLogger(__name__)


class QueryMixin:
    """
    Mixin providing question answering.

    Requires CoreMixin to be present (provides network, activator,
    rule_engine, knowledge_base, extractor, meta, memory, quality, trace,
    _lock).
    """

    def _prepare_network(self, context: str) -> None:
        if self.network.rebuild_if_changed(context, self.trace):
            self.record_metric("network_rebuilds")
            attached = self.knowledge_base.integrate_into(self.network, self.trace)
            logger.info(f"Integrated {attached} ontology relations")

    def _seeds(self, question: str) -> List[str]:
        """Question stems present in the network, stop words removed, in order."""
        seeds = []
        for token in self.lexicon.tokenize(question):
            stem = self.lexicon.stem(token)
            if stem in seeds or stem not in self.network:
                continue
            # "was" stems to "wa", so the surface form is checked as well
            if self.lexicon.is_stop_word(token) or self.lexicon.is_stop_word(stem):
                continue
            seeds.append(stem)
        return seeds

    def _activate(self, context: str, question: str) -> Optional[ActivationReport]:
        """
        Run everything up to rule evaluation.

        Returns:
            The activation report, or None when no answer is possible
        """
        if not context or not context.strip() or not question or not question.strip():
            self.trace.log("Empty passage or question")
            return None

        self.trace.section("Network")
        self._prepare_network(context)

        seeds = self._seeds(question)
        if not seeds:
            self.trace.log("No question keyword appears in the passage")
            return None

        sentiment = self.lexicon.sentiment_score(question)
        self.trace.section("Activation")
        self.trace.log(f"Seeds: {', '.join(seeds)} (question sentiment {sentiment:+d})")
        report = self.activator.activate(seeds, sentiment, self.trace)

        self.trace.section("Rules")
        firings = self.rule_engine.evaluate(self.network, self.trace)
        if not firings:
            self.trace.log("No rules fired")
        return report

    def _adapt(self, question: str, result: AnswerResult) -> None:
        self.trace.section("Meta-cognition")
        update = self.meta.record(result.confidence, self.activation_threshold, self.decay_rate)
        if update.changed:
            self.trace.log(f"Threshold {self.activation_threshold:.3f} -> "
                           f"{update.activation_threshold:.3f}, decay {self.decay_rate:.3f} -> "
                           f"{update.decay_rate:.3f}")
            self.activation_threshold = update.activation_threshold
            self.decay_rate = update.decay_rate

        learned = self.meta.induce_rule(question, result, self.network, self.rule_engine,
                                        self.activation_threshold, self.trace)
        if learned is not None:
            self.record_metric("rules_learned")
        if self.is_valid_answer(result):
            self.memory.add(result)

    def is_valid_answer(self, result: AnswerResult) -> bool:
        """Whether result clears the configured ``min_answer_confidence``."""
        return result.is_valid_at(self.config.min_answer_confidence)

    @timed("find_answer")
    def find_answer(self, context: str, question: str) -> AnswerResult:
        """
        Answer a question from a passage.

        Never raises for content reasons: an empty passage or question, or a
        question sharing no keyword with the passage, gives
        ``AnswerResult.no_answer``.

        Args:
            context: Passage to answer from
            question: Natural-language question

        Returns:
            The best-scoring candidate as an AnswerResult

        Example:
            >>> engine = QAEngine()
            >>> result = engine.find_answer("The cat sat on the mat.", "What did the cat do?")
            >>> result.is_valid
            True
        """
        with self._lock:
            self.trace.clear()
            self.trace.log(f"Question: {question}")
            if self._activate(context, question) is None:
                result = AnswerResult.no_answer(context)
                self.trace.log("No answer")
                return result

            self.trace.section("Candidates")
            result = self.extractor.extract(context, question, self.network, self.trace)
            self.trace.log(f"Answer: '{result.answer}' (confidence {result.confidence:.3f})")
            self._adapt(question, result)
            return result

    @timed("rank_candidates")
    def rank_candidates(self, context: str, question: str) -> List[AnswerCandidate]:
        """
        Every scored candidate, best first, without running meta-cognition.

        Returns:
            An empty list when no answer is possible
        """
        with self._lock:
            self.trace.clear()
            if self._activate(context, question) is None:
                return []
            return self.extractor.rank(context, question, self.network, self.trace)

    def check_answer_quality(self, result: AnswerResult, question: str,
                             context: str) -> Dict[str, Union[bool, str]]:
        """
        Post-hoc quality verdict for an answer.

        Returns:
            Dict with ``good`` (all checks passed) and ``suggestion``
        """
        return {
            'good': self.quality.is_answer_good(result, question, context),
            'suggestion': self.quality.improvement_suggestion(result, question, context),
        }

    def activated_concepts(self, minimum: float = 0.0) -> List[Tuple[str, float]]:
        """(concept, activation) pairs from the last query, strongest first."""
        return self.network.activated_nodes(minimum)

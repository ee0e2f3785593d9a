"""
Core engine functionality: component wiring, adaptive parameters,
trace and metrics access.

This module contains the base mixin that the knowledge and query mixins
depend on.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from ..activation import SpreadingActivator
from ..answering.extraction import AnswerExtractor
from ..answering.quality import QualityAssurance
from ..answering.scoring import AnswerScorer
from ..config import ReasonerConfig
from ..knowledge.ontology import ConceptualKnowledgeBase
from ..knowledge.rules import RuleEngine
from ..learning import MetaCognition
from ..lexical import LexicalToolkit
from ..memory import DynamicMemoryBuffer
from ..network import SemanticNetwork
from ..nlp.enrichment import EnrichmentProvider, resolve_enrichment_provider
from ..observability import MetricsCollector, ReasoningTrace
from ..results import AnswerResult
from ..validation import validate_unit_interval

logger = logging.getLogger(__name__)


class CoreMixin:
    """
    Core mixin owning every component and the adaptive parameters.

    Activation threshold and decay rate live here; setting either one
    pushes the new value into every component that uses it.
    """

    def __init__(
        self,
        config: Optional[ReasonerConfig] = None,
        lexicon: Optional[LexicalToolkit] = None,
        enrichment: Optional[EnrichmentProvider] = None,
        enable_metrics: bool = False
    ):
        """
        Initialize the question-answering engine.

        Args:
            config: Optional configuration. Defaults to ReasonerConfig with defaults.
            lexicon: Optional lexical toolkit (tokenizer, sentiment, temporal parser).
            enrichment: Optional noun-phrase provider. Defaults to the heuristic one.
            enable_metrics: Enable timing and metrics collection for observability.
        """
        self.config = config or ReasonerConfig()
        self.lexicon = lexicon or LexicalToolkit()
        self.enrichment = enrichment or resolve_enrichment_provider(
            self.lexicon.tokenizer, max_words=self.config.max_chunk_words)

        self._activation_threshold = self.config.activation_threshold
        self._decay_rate = self.config.decay_rate

        self.network = SemanticNetwork(self.lexicon, self.config)
        self.activator = SpreadingActivator(self.network, self.lexicon, self.config)
        self.rule_engine = RuleEngine(self.lexicon, self._activation_threshold)
        self.knowledge_base = ConceptualKnowledgeBase(self.lexicon)
        self.scorer = AnswerScorer(self.lexicon, self.config)
        self.extractor = AnswerExtractor(self.lexicon, self.enrichment, self.scorer)
        self.meta = MetaCognition(self.config, self.lexicon)
        self.memory = DynamicMemoryBuffer(self.config.memory_capacity)
        self.quality = QualityAssurance(self.lexicon)

        self.trace = ReasoningTrace()
        self._lock = threading.Lock()
        # Observability: metrics collection
        self._metrics = MetricsCollector(enabled=enable_metrics)
        logger.debug(f"Engine ready with {getattr(self.enrichment, 'name', 'custom')} enrichment")

    # -------------------------------------------------------------------------
    # Adaptive parameters
    # -------------------------------------------------------------------------

    @property
    def activation_threshold(self) -> float:
        return self._activation_threshold

    @activation_threshold.setter
    def activation_threshold(self, value: float) -> None:
        validate_unit_interval(value, 'activation_threshold')
        self._activation_threshold = value
        self.activator.activation_threshold = value
        self.rule_engine.activation_threshold = value
        self.scorer.activation_threshold = value

    @property
    def decay_rate(self) -> float:
        return self._decay_rate

    @decay_rate.setter
    def decay_rate(self, value: float) -> None:
        validate_unit_interval(value, 'decay_rate')
        self._decay_rate = value
        self.network.set_decay_rate(value)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def reasoning_trace(self) -> str:
        """Human-readable reasoning of the last query."""
        return self.trace.render()

    @property
    def trace_entries(self) -> List[str]:
        return self.trace.lines()

    @property
    def recent_answers(self) -> List[AnswerResult]:
        """Recent valid answers, oldest first."""
        return self.memory.results

    @property
    def confidence_history(self) -> List[float]:
        return list(self.meta.history)

    def reset(self) -> None:
        """
        Return to the freshly constructed state.

        Restores default rules and relations, the configured threshold and
        decay rate, and clears history, memory, trace and the cached network.
        """
        with self._lock:
            self.rule_engine.reset_to_defaults()
            self.knowledge_base.reset_to_defaults()
            self.meta.reset()
            self.memory.clear()
            self.trace.clear()
            self.activation_threshold = self.config.activation_threshold
            self.decay_rate = self.config.decay_rate
            self.network.invalidate()
        logger.info("Engine state reset")

    # -------------------------------------------------------------------------
    # Metrics
    # -------------------------------------------------------------------------

    def get_metrics(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all collected metrics.

        Returns:
            Dict mapping operation names to their statistics
            (count, total_ms, avg_ms, min_ms, max_ms)
        """
        return self._metrics.get_all_stats()

    def get_metrics_summary(self) -> str:
        """Get a human-readable summary of all metrics."""
        return self._metrics.get_summary()

    def reset_metrics(self) -> None:
        """Clear all collected metrics."""
        self._metrics.reset()

    def enable_metrics(self) -> None:
        self._metrics.enable()

    def disable_metrics(self) -> None:
        self._metrics.disable()

    def record_metric(self, metric_name: str, count: int = 1) -> None:
        """Record a custom count metric."""
        self._metrics.record_count(metric_name, count)

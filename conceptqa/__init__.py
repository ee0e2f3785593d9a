"""
ConceptQA
=========

Explainable question answering over a short passage, using a weighted
concept graph, spreading activation and forward-chaining rules.

Example:
    from conceptqa import QAEngine

    engine = QAEngine()
    result = engine.find_answer("The cat sat on the mat. The dog ran fast.",
                                "What did the cat do?")
    print(result.answer, result.confidence)
    print(engine.reasoning_trace)
"""

from .tokenizer import Token, Tokenizer
from .lexical import LexicalToolkit
from .config import ReasonerConfig, get_default_config
from .network import ConceptEdge, ConceptNode, EdgeKind, SemanticNetwork
from .activation import ActivationReport, SpreadingActivator
from .knowledge import (
    ConceptRelation,
    ConceptualKnowledgeBase,
    RelationType,
    Rule,
    RuleEngine,
    RuleFiring,
)
from .results import AnswerCandidate, AnswerResult, ScoreBreakdown
from .answering import (
    AnswerExtractor,
    AnswerScorer,
    AnswerValidator,
    Evidence,
    InferenceEngine,
    QualityAssurance,
)
from .learning import MetaCognition, ParameterUpdate
from .memory import DynamicMemoryBuffer
from .observability import MetricsCollector, ReasoningTrace
from .engine import QAEngine
from .async_api import AsyncQAEngine

__version__ = "1.0.0"
__all__ = [
    "QAEngine",
    "AsyncQAEngine",
    "ReasonerConfig",
    "get_default_config",
    "LexicalToolkit",
    "Tokenizer",
    "Token",
    "SemanticNetwork",
    "ConceptNode",
    "ConceptEdge",
    "EdgeKind",
    "SpreadingActivator",
    "ActivationReport",
    "Rule",
    "RuleEngine",
    "RuleFiring",
    "ConceptRelation",
    "ConceptualKnowledgeBase",
    "RelationType",
    "AnswerCandidate",
    "AnswerResult",
    "ScoreBreakdown",
    "AnswerExtractor",
    "AnswerScorer",
    "AnswerValidator",
    "QualityAssurance",
    "InferenceEngine",
    "Evidence",
    "MetaCognition",
    "ParameterUpdate",
    "DynamicMemoryBuffer",
    "MetricsCollector",
    "ReasoningTrace",
]

"""
Question-answering engine package.

The engine is split into focused mixins:
- core.py: Component wiring, adaptive parameters, trace and metrics
- knowledge_api.py: Rule and ontology management
- query_api.py: Answering and candidate inspection

QAEngine is composed from the mixins. Each instance is an independent
context: separate engines share no state.
"""

from .core import CoreMixin
from .knowledge_api import KnowledgeMixin
from .query_api import QueryMixin


class QAEngine(
    CoreMixin,
    KnowledgeMixin,
    QueryMixin
):
    """
    Symbolic question answering over a short passage.

    This class provides a complete API for:
    - Answering questions with spreading activation and rule inference
    - Ranking and inspecting candidate answers
    - Managing rules and ontology relations
    - Inspecting the reasoning trace and adaptive parameters
    - Timing metrics (optional)

    Example:
        >>> from conceptqa import QAEngine
        >>> engine = QAEngine()
        >>> passage = "The cat sat on the mat. The dog ran fast."
        >>> result = engine.find_answer(passage, "What did the cat do?")
        >>> print(result.answer)
        >>> print(engine.reasoning_trace)
    """
    pass


__all__ = ['QAEngine']

"""
Answer Quality Checks
=====================

Lexical heuristics that judge an answer after it has been chosen, plus a
small Bayesian update for combining evidence into a probability.

These checks never change ranking; they back ``QAEngine.check_answer_quality``.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from ..results import AnswerResult

if TYPE_CHECKING:
    from ..lexical import LexicalToolkit

logger = logging.getLogger(__name__)

# Words shorter than this are ignored as uninformative
MIN_SIGNIFICANT_LENGTH = 4
# Factual consistency only considers longer words
MIN_FACT_TERM_LENGTH = 5

COMPLETE_MATCH_RATIO = 0.3
CONSISTENT_MATCH_RATIO = 0.7
RELEVANT_MATCH_RATIO = 0.2

GOOD_ANSWER = "The answer seems good!"
SUGGEST_COMPLETE = ("The answer may be incomplete. It seems to be missing "
                    "some parts of the question.")
SUGGEST_COHERENT = ("The answer may not be coherent. It seems to be missing "
                    "a clear subject or action.")
SUGGEST_CONSISTENT = ("The answer may not be factually consistent with the context. "
                      "Some of the information seems to be new.")
SUGGEST_RELEVANT = ("The answer may not be relevant to the question. It does not "
                    "seem to contain any of the keywords from the question.")


class AnswerValidator:
    """
    Heuristic checks of completeness, coherence, consistency and relevance.

    Args:
        lexicon: Tokenizer, stemmer and stop-word list
    """

    def __init__(self, lexicon: 'LexicalToolkit'):
        self.lexicon = lexicon

    def _significant(self, tokens: List[str], min_length: int = MIN_SIGNIFICANT_LENGTH) -> List[str]:
        return [t for t in tokens if len(t) >= min_length and not self.lexicon.is_stop_word(t)]

    def _match_ratio(self, question: str, answer: str) -> Optional[float]:
        """Share of significant question words whose stem appears in answer."""
        significant = self._significant(self.lexicon.tokenize(question))
        if not significant:
            return None
        answer_stems = set(self.lexicon.stems(answer))
        matched = sum(1 for word in significant if self.lexicon.stem(word) in answer_stems)
        return matched / len(significant)

    def is_complete(self, result: AnswerResult, question: str) -> bool:
        """
        Does the answer address the question?

        Compound questions ("... and ...") need at least half of their parts
        to share a significant word with the answer; otherwise 30% of the
        significant question words must match.
        """
        answer = result.answer.lower()
        lowered = question.lower()
        if ' and ' in lowered:
            parts = lowered.split(' and ')
            addressed = 0
            for part in parts:
                if any(word in answer for word in self._significant(part.split())):
                    addressed += 1
            return addressed >= max(1, len(parts) // 2)

        ratio = self._match_ratio(question, result.answer)
        return ratio is None or ratio >= COMPLETE_MATCH_RATIO

    def is_coherent(self, result: AnswerResult) -> bool:
        """At least two tokens, one of them a content word."""
        if not result.answer or not result.answer.strip():
            return False
        tokens = self.lexicon.tokenize(result.answer)
        if len(tokens) < 2:
            return False
        return bool(self._significant(tokens))

    def is_factually_consistent(self, result: AnswerResult, context: str) -> bool:
        """Most long answer words must also appear (stemmed) in the context."""
        if context is None:
            return False
        context_stems = set(self.lexicon.stems(context))
        terms = self._significant(self.lexicon.tokenize(result.answer), MIN_FACT_TERM_LENGTH)
        if not terms:
            return True
        found = sum(1 for t in terms if self.lexicon.stem(t) in context_stems)
        return found / len(terms) >= CONSISTENT_MATCH_RATIO

    def is_relevant(self, result: AnswerResult, question: str) -> bool:
        """At least 20% of the significant question words appear in the answer."""
        if question is None:
            return False
        ratio = self._match_ratio(question, result.answer)
        return ratio is not None and ratio >= RELEVANT_MATCH_RATIO


class QualityAssurance:
    """Combines the validator checks into a verdict and a suggestion."""

    def __init__(self, lexicon: 'LexicalToolkit', validator: Optional[AnswerValidator] = None):
        self.validator = validator or AnswerValidator(lexicon)

    def is_answer_good(self, result: AnswerResult, question: str, context: str) -> bool:
        v = self.validator
        return (v.is_complete(result, question)
                and v.is_coherent(result)
                and v.is_factually_consistent(result, context)
                and v.is_relevant(result, question))

    def improvement_suggestion(self, result: AnswerResult, question: str, context: str) -> str:
        """First failing check as a human-readable hint."""
        v = self.validator
        if not v.is_complete(result, question):
            return SUGGEST_COMPLETE
        if not v.is_coherent(result):
            return SUGGEST_COHERENT
        if not v.is_factually_consistent(result, context):
            return SUGGEST_CONSISTENT
        if not v.is_relevant(result, question):
            return SUGGEST_RELEVANT
        return GOOD_ANSWER


@dataclass(frozen=True)
class Evidence:
    """Observations about a candidate answer."""
    keyword_match: bool
    role_match: bool = False
    temporal_match: bool = False
    sentiment_match: bool = False


class InferenceEngine:
    """
    Simplified Bayesian update of an answer's probability.

    The likelihood is a product of per-observation factors; the posterior
    is ``p * L / (p * L + (1 - p) * (1 - L))``.

    Example:
        >>> engine = InferenceEngine()
        >>> round(engine.posterior(0.5, Evidence(keyword_match=True)), 2)
        0.8
    """

    KEYWORD_HIT = 0.8
    KEYWORD_MISS = 0.2
    ROLE = 0.9
    TEMPORAL = 0.85
    SENTIMENT = 0.7

    def likelihood(self, evidence: Evidence) -> float:
        value = self.KEYWORD_HIT if evidence.keyword_match else self.KEYWORD_MISS
        if evidence.role_match:
            value *= self.ROLE
        if evidence.temporal_match:
            value *= self.TEMPORAL
        if evidence.sentiment_match:
            value *= self.SENTIMENT
        return value

    def posterior(self, prior: float, evidence: Evidence) -> float:
        if not 0.0 <= prior <= 1.0:
            raise ValueError(f"prior must be in [0, 1], got {prior}")
        likelihood = self.likelihood(evidence)
        numerator = prior * likelihood
        denominator = numerator + (1.0 - prior) * (1.0 - likelihood)
        if denominator == 0:
            return 0.0
        return min(1.0, numerator / denominator)

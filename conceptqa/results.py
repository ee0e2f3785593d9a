"""
Result Dataclasses
==================

Immutable containers for scored candidates and final answers.

Example:
    result = engine.find_answer(passage, "What did the cat do?")
    if result.is_valid:
        print(f"{result.answer} ({result.confidence:.2f}) "
              f"at [{result.start}:{result.end}]")
    else:
        print("No answer")
"""

import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

from .constants import MIN_ANSWER_CONFIDENCE, SCORE_WEIGHTS
from .nlp.questions import is_list_question


_LIST_SPLIT_RE = re.compile(r',| and ')


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    The six factor scores of one candidate, each in [0, 1].

    Example:
        >>> scores = ScoreBreakdown(1.0, 1.0, 0.5, 0.4, 1.0, 1.0)
        >>> round(scores.final(), 3)
        0.895
    """
    semantic: float
    completeness: float
    relevance: float
    length: float
    negation: float
    temporal: float

    def final(self, weights: Mapping[str, float] = SCORE_WEIGHTS) -> float:
        """Weighted sum of the factors."""
        return sum(getattr(self, factor) * weight for factor, weight in weights.items())

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class AnswerCandidate:
    """
    A span of the passage considered as an answer.

    Attributes:
        text: Candidate text, equal to passage[start:end]
        sentence: The sentence the candidate was taken from
        start: Start offset in the passage
        end: End offset in the passage
        scores: Factor scores
        final_score: Weighted score used for ranking
    """
    text: str
    sentence: str
    start: int
    end: int
    scores: ScoreBreakdown
    final_score: float

    def __repr__(self) -> str:
        return (f"AnswerCandidate(text='{self.text}', span=({self.start}, {self.end}), "
                f"final_score={self.final_score:.4f})")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AnswerResult:
    """
    The engine's answer to one question.

    Attributes:
        answer: Answer text ("" when there is none)
        context: The sentence or passage the answer came from
        start: Start offset of the answer in the passage, -1 for none
        end: End offset of the answer in the passage, -1 for none
        confidence: Final score of the chosen candidate, 0.0 for none

    Example:
        >>> AnswerResult.no_answer("Some passage").is_valid
        False
    """
    answer: str
    context: str
    start: int
    end: int
    confidence: float

    @classmethod
    def no_answer(cls, context: str = '') -> 'AnswerResult':
        """The explicit "no answer" result."""
        return cls(answer='', context=context or '', start=-1, end=-1, confidence=0.0)

    @classmethod
    def from_candidate(cls, candidate: AnswerCandidate) -> 'AnswerResult':
        return cls(answer=candidate.text, context=candidate.sentence,
                   start=candidate.start, end=candidate.end,
                   confidence=candidate.final_score)

    @property
    def is_valid(self) -> bool:
        """Non-empty answer with confidence of at least 0.15."""
        return self.is_valid_at(MIN_ANSWER_CONFIDENCE)

    def is_valid_at(self, min_confidence: float) -> bool:
        """Non-empty answer with confidence of at least ``min_confidence``."""
        return bool(self.answer) and self.confidence >= min_confidence

    def format_answer(self, question: str) -> str:
        """
        Render the answer for display.

        List questions ("what are ...", "list ...") become one bullet per
        comma- or "and"-separated item.
        """
        if not is_list_question(question):
            return self.answer
        items = [item.strip() for item in _LIST_SPLIT_RE.split(self.answer)]
        return ''.join(f"- {item}\n" for item in items if item)

    def __repr__(self) -> str:
        return (f"AnswerResult(answer='{self.answer}', span=({self.start}, {self.end}), "
                f"confidence={self.confidence:.4f})")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnswerResult':
        return cls(
            answer=data['answer'],
            context=data.get('context', ''),
            start=data.get('start', -1),
            end=data.get('end', -1),
            confidence=data.get('confidence', 0.0),
        )

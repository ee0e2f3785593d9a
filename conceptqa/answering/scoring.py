"""
Candidate Scoring
=================

Six-factor scoring of answer candidates against an activated network.

Factors (each in [0, 1]):
    semantic      share of question-keyword activation found in the candidate
    completeness  share of strongly activated question keywords covered
    relevance     mean activation of the candidate's activated tokens
    length        Gaussian fit to an ideal length for the question form
    negation      agreement on the presence of negation
    temporal      agreement of the first temporal expressions

The weighted sum (see ``SCORE_WEIGHTS``) is the candidate's final score.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, TYPE_CHECKING

from ..config import ReasonerConfig
from ..constants import (
    IDEAL_LENGTH_DEFAULT,
    IDEAL_LENGTH_DEFINITION,
    IDEAL_LENGTH_LIST,
    IDEAL_LENGTH_NAME,
)
from ..nlp.temporal import TemporalInfo
from ..results import ScoreBreakdown
from ..validation import validate_unit_interval

if TYPE_CHECKING:
    from ..lexical import LexicalToolkit
    from ..network import SemanticNetwork

logger = logging.getLogger(__name__)

# Floor for the activation a question keyword needs to count toward completeness
COMPLETENESS_ACTIVATION = 0.1
LIST_COMPLETENESS_BONUS = 1.2
NEGATION_MISMATCH_SCORE = 0.1


def ideal_answer_length(question: str) -> int:
    """Ideal answer length in characters for the form of the question."""
    q = question.strip().lower()
    if q.startswith('who is') or q.startswith('what is the name'):
        return IDEAL_LENGTH_NAME
    if 'definition' in q:
        return IDEAL_LENGTH_DEFINITION
    if q.startswith('what are'):
        return IDEAL_LENGTH_LIST
    return IDEAL_LENGTH_DEFAULT


def length_score(length: int, ideal: int) -> float:
    """Gaussian centred on ideal with width ideal / 2."""
    width = ideal * 0.5
    return math.exp(-((length - ideal) ** 2) / (2 * width ** 2))


def temporal_score(question_info: Optional[TemporalInfo],
                   candidate_info: Optional[TemporalInfo]) -> float:
    """
    Temporal agreement of a candidate with the question.

    Returns:
        1.0 when the question is not temporal, 0.4 when only the question
        is; for two points 1.0 on equal start else 0.1; for two durations
        their overlap as a share of their union (0.1 when disjoint); for a
        point and a duration 0.9 if the point lies inside else 0.1; 0.3 for
        any other pairing (open intervals)
    """
    if question_info is None:
        return 1.0
    if candidate_info is None:
        return 0.4

    q, c = question_info, candidate_info
    if q.is_point_in_time and c.is_point_in_time:
        return 1.0 if q.start == c.start else 0.1
    if q.is_duration and c.is_duration:
        if q.start < c.end and c.start < q.end:
            overlap = (min(q.end, c.end) - max(q.start, c.start)).total_seconds()
            union = (max(q.end, c.end) - min(q.start, c.start)).total_seconds()
            return max(0.0, overlap) / union if union > 0 else 0.0
        return 0.1
    if q.is_point_in_time and c.is_duration:
        return 0.9 if c.start <= q.start <= c.end else 0.1
    if q.is_duration and c.is_point_in_time:
        return 0.9 if q.start <= c.start <= q.end else 0.1
    return 0.3


@dataclass
class QuestionProfile:
    """
    Question features shared by every candidate of one query.

    Attributes:
        question: Raw question text
        keywords: Question stems active in the network (with repeats)
        key_concepts: Distinct stems above the completeness cutoff
        ideal_length: Ideal answer length for the question form
        has_negation: Whether the question contains a negation word
        temporal: First temporal expression in the question
        wants_list: Question starts with "what are"
    """
    question: str
    keywords: List[str]
    key_concepts: List[str]
    ideal_length: int
    has_negation: bool
    temporal: Optional[TemporalInfo]
    wants_list: bool


class AnswerScorer:
    """
    Scores candidate texts against the activated network.

    Args:
        lexicon: Lexical toolkit shared with the engine
        config: Supplies ``score_weights`` and the activation threshold
    """

    def __init__(self, lexicon: 'LexicalToolkit', config: Optional[ReasonerConfig] = None):
        self.lexicon = lexicon
        self.config = config or ReasonerConfig()
        self.weights: Dict[str, float] = dict(self.config.score_weights)
        self._activation_threshold = self.config.activation_threshold

    @property
    def activation_threshold(self) -> float:
        return self._activation_threshold

    @activation_threshold.setter
    def activation_threshold(self, value: float) -> None:
        validate_unit_interval(value, 'activation_threshold')
        self._activation_threshold = value

    @property
    def completeness_cutoff(self) -> float:
        """Keywords must exceed this activation to count toward completeness."""
        return max(COMPLETENESS_ACTIVATION, self._activation_threshold)

    def profile(self, question: str, network: 'SemanticNetwork') -> QuestionProfile:
        stems = self.lexicon.stems(question)
        keywords = [s for s in stems if network.activation_of(s) > 0]
        cutoff = self.completeness_cutoff
        key_concepts = list(dict.fromkeys(s for s in stems if network.activation_of(s) > cutoff))
        return QuestionProfile(
            question=question,
            keywords=keywords,
            key_concepts=key_concepts,
            ideal_length=ideal_answer_length(question),
            has_negation=self.lexicon.contains_negation(question),
            temporal=self.lexicon.extract_temporal_info(question),
            wants_list=question.strip().lower().startswith('what are'),
        )

    def score(self, text: str, profile: QuestionProfile,
              network: 'SemanticNetwork') -> ScoreBreakdown:
        """Score one candidate text."""
        stems = self.lexicon.stems(text)
        stem_set = set(stems)
        return ScoreBreakdown(
            semantic=self._semantic(stem_set, profile, network),
            completeness=self._completeness(text, stem_set, profile),
            relevance=self._relevance(stems, network),
            length=length_score(len(text), profile.ideal_length),
            negation=self._negation(text, profile),
            temporal=temporal_score(profile.temporal, self.lexicon.extract_temporal_info(text)),
        )

    def final_score(self, scores: ScoreBreakdown) -> float:
        return scores.final(self.weights)

    def _semantic(self, stem_set, profile: QuestionProfile, network: 'SemanticNetwork') -> float:
        if not profile.keywords:
            return 0.0
        total = 0.0
        matched = 0.0
        for keyword in profile.keywords:
            activation = network.activation_of(keyword)
            total += activation
            if keyword in stem_set:
                matched += activation
        return matched / total if total > 0 else 0.0

    def _completeness(self, text: str, stem_set, profile: QuestionProfile) -> float:
        if len(profile.key_concepts) <= 1:
            return 1.0
        covered = sum(1 for concept in profile.key_concepts if concept in stem_set)
        completeness = covered / len(profile.key_concepts)
        if profile.wants_list and (',' in text or ' and ' in text):
            completeness = min(1.0, completeness * LIST_COMPLETENESS_BONUS)
        return completeness

    def _relevance(self, stems: List[str], network: 'SemanticNetwork') -> float:
        activations = [a for a in (network.activation_of(s) for s in stems) if a > 0]
        return sum(activations) / len(activations) if activations else 0.0

    def _negation(self, text: str, profile: QuestionProfile) -> float:
        if self.lexicon.contains_negation(text) == profile.has_negation:
            return 1.0
        return NEGATION_MISMATCH_SCORE

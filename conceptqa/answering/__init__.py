"""
Answer candidates, their scoring, and post-hoc quality checks.
"""

from .scoring import AnswerScorer, QuestionProfile, ideal_answer_length, length_score, temporal_score
from .extraction import AnswerExtractor
from .quality import AnswerValidator, Evidence, InferenceEngine, QualityAssurance

__all__ = [
    'AnswerScorer',
    'QuestionProfile',
    'ideal_answer_length',
    'length_score',
    'temporal_score',
    'AnswerExtractor',
    'AnswerValidator',
    'Evidence',
    'InferenceEngine',
    'QualityAssurance',
]

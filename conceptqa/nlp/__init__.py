"""
Supporting linguistic utilities: temporal expressions, sentiment,
SVO extraction, noun-phrase enrichment and question analysis.
"""

from .temporal import (
    ExpressionType,
    TemporalInfo,
    TemporalParser,
    TemporalRelation,
    TemporalValidation,
    get_temporal_relation,
    validate_temporal_answer,
)
from .sentiment import SentimentAnalyzer
from .syntax import SVOTriplet, SyntacticParser
from .enrichment import (
    EnrichmentProvider,
    EnrichmentUnavailableError,
    HeuristicEnrichmentProvider,
    NltkEnrichmentProvider,
    resolve_enrichment_provider,
)
from .questions import (
    QuestionAnalysis,
    QuestionType,
    analyze_question,
    classify_question,
    detect_assumptions,
    extract_focus,
    is_ambiguous,
    is_list_question,
    split_compound_question,
)

__all__ = [
    'ExpressionType',
    'TemporalInfo',
    'TemporalParser',
    'TemporalRelation',
    'TemporalValidation',
    'get_temporal_relation',
    'validate_temporal_answer',
    'SentimentAnalyzer',
    'SVOTriplet',
    'SyntacticParser',
    'EnrichmentProvider',
    'EnrichmentUnavailableError',
    'HeuristicEnrichmentProvider',
    'NltkEnrichmentProvider',
    'resolve_enrichment_provider',
    'QuestionAnalysis',
    'QuestionType',
    'analyze_question',
    'classify_question',
    'detect_assumptions',
    'extract_focus',
    'is_ambiguous',
    'is_list_question',
    'split_compound_question',
]

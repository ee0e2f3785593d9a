"""
Centralized constants for the concept QA engine.

This module provides a single source of truth for the lexicons and default
knowledge shared by the tokenizer, the knowledge stores and the scorer.
"""

from typing import Dict, FrozenSet, List, Tuple

# =============================================================================
# LEXICONS
# =============================================================================

STOP_WORDS: FrozenSet[str] = frozenset({
    # Articles and conjunctions
    'a', 'an', 'the', 'and', 'or', 'but', 'nor', 'so', 'than',
    # Auxiliaries
    'is', 'are', 'was', 'were', 'be', 'been', 'being',
    'have', 'has', 'had', 'do', 'does', 'did', 'can', 'will', 'should',
    # Prepositions
    'of', 'in', 'on', 'at', 'by', 'for', 'with', 'from', 'about', 'as',
    'into', 'through', 'during', 'before', 'after', 'above', 'below',
    'to', 'up', 'down', 'out', 'off', 'over', 'under',
    # Adverbs and wh-words
    'again', 'further', 'then', 'once', 'here', 'there', 'when', 'where',
    'why', 'how', 'just', 'now', 'too', 'very', 'only',
    # Quantifiers and determiners
    'all', 'any', 'both', 'each', 'few', 'more', 'most', 'other', 'some',
    'such', 'no', 'not', 'own', 'same',
    # Contraction fragments
    's', 't', 'don',
})

NEGATION_WORDS: FrozenSet[str] = frozenset({
    'not', 'no', 'never', "n't", 'none', 'neither', 'nor', 'without',
    'hardly', 'barely', 'scarcely', 'cannot',
})

TEMPORAL_KEYWORDS: FrozenSet[str] = frozenset({
    'today', 'yesterday', 'tomorrow', 'now', 'then', 'ago', 'later',
    'before', 'after',
    'morning', 'afternoon', 'evening', 'night',
    'day', 'week', 'month', 'year', 'decade', 'century',
    'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday',
    'sunday',
    'january', 'february', 'march', 'april', 'may', 'june', 'july',
    'august', 'september', 'october', 'november', 'december',
    'current', 'past', 'future', 'present', 'recent', 'old', 'new',
    'long', 'short', 'early', 'late', 'since', 'until', 'during', 'when',
    'while', 'annual', 'daily', 'hourly',
})

POSITIVE_WORDS: FrozenSet[str] = frozenset({
    'good', 'great', 'excellent', 'wonderful', 'amazing', 'happy', 'joy',
    'positive', 'beautiful', 'love', 'best', 'fantastic', 'awesome',
    'perfect', 'strong', 'success', 'benefit', 'advantage', 'clear',
    'bright', 'brilliant', 'outstanding', 'superb', 'terrific', 'valuable',
    'worthy', 'winner', 'satisfied', 'pleased', 'grateful', 'inspired',
    'delighted', 'cheerful', 'optimistic', 'efficient', 'reliable',
    'secure', 'safe',
})

NEGATIVE_WORDS: FrozenSet[str] = frozenset({
    'bad', 'terrible', 'horrible', 'awful', 'sad', 'unhappy', 'negative',
    'ugly', 'hate', 'worst', 'disaster', 'poor', 'weak', 'failure',
    'problem', 'issue', 'difficult', 'dark', 'trouble', 'nasty', 'dreadful',
    'miserable', 'annoying', 'disgusting', 'useless', 'broken', 'angry',
    'fear', 'scary', 'dangerous', 'harmful', 'toxic', 'vulnerable', 'risky',
    'unstable', 'shame', 'guilt', 'pain', 'hurt',
})

# Verbs recognized by the SVO extractor and the noun-phrase chunker.
# Tokens ending in -ed or -ing are treated as verbs as well.
COMMON_VERBS: FrozenSet[str] = frozenset({
    'is', 'are', 'was', 'were', 'has', 'have', 'had', 'do', 'does', 'did',
    'built', 'created', 'discovered', 'invented', 'wrote', 'painted',
    'defeated', 'won', 'lost', 'born', 'died', 'lives', 'works', 'located',
    'found',
})

MONTHS: Tuple[str, ...] = (
    'january', 'february', 'march', 'april', 'may', 'june', 'july',
    'august', 'september', 'october', 'november', 'december',
)

# Punctuation that closes a negation scope between two tokens
SCOPE_BREAK_PUNCTUATION: FrozenSet[str] = frozenset('.,;!?')


# =============================================================================
# ANSWER SCORING
# =============================================================================

# Weights of the six candidate scoring factors. Must sum to 1.0.
SCORE_WEIGHTS: Dict[str, float] = {
    'semantic': 0.35,
    'completeness': 0.25,
    'relevance': 0.15,
    'length': 0.05,
    'negation': 0.10,
    'temporal': 0.10,
}

# Ideal answer lengths (characters) keyed by question form
IDEAL_LENGTH_NAME = 25
IDEAL_LENGTH_DEFINITION = 150
IDEAL_LENGTH_LIST = 120
IDEAL_LENGTH_DEFAULT = 80

# Results under this confidence are reported as invalid
MIN_ANSWER_CONFIDENCE = 0.15


# =============================================================================
# EDGE KIND WEIGHTS
# =============================================================================

# Multiplier applied to an edge's weight when activation spreads along it.
# Keyed by EdgeKind name; co-occurrence is the neutral baseline.
ROLE_EDGE_WEIGHTS: Dict[str, float] = {
    'CO_OCCURRENCE': 1.0,
    'SUBJECT': 0.9,         # subject <-> verb
    'OBJECT': 0.9,          # verb <-> object
    'ACTION': 0.8,          # subject <-> object through the verb
}


# =============================================================================
# DEFAULT KNOWLEDGE
# =============================================================================

# (conditions, consequence, confidence, description), unstemmed
DEFAULT_RULES: List[Tuple[Tuple[str, ...], str, float, str]] = [
    (('fast', 'vehicle'), 'speed', 0.8, 'Fast vehicle implies speed'),
    (('built', 'year'), 'create', 0.75, 'Built in year implies creation'),
    (('water', 'cold'), 'ice', 0.6, 'Cold water implies ice'),
]

# (source, target, relation type name, strength), unstemmed
DEFAULT_RELATIONS: List[Tuple[str, str, str, float]] = [
    # Taxonomy
    ('cat', 'animal', 'IS_A', 0.95),
    ('dog', 'animal', 'IS_A', 0.95),
    ('apple', 'fruit', 'IS_A', 0.9),
    ('car', 'vehicle', 'IS_A', 0.9),
    ('bird', 'animal', 'IS_A', 0.92),
    ('plane', 'vehicle', 'IS_A', 0.85),
    # Meronymy
    ('wheel', 'car', 'PART_OF', 0.8),
    ('engine', 'car', 'PART_OF', 0.85),
    ('branch', 'tree', 'PART_OF', 0.7),
    # Causality
    ('rain', 'wet', 'CAUSES', 0.7),
    ('fire', 'heat', 'CAUSES', 0.8),
    # Location
    ('eiffel', 'paris', 'LOCATED_IN', 0.9),
    ('paris', 'france', 'LOCATED_IN', 0.95),
    # Properties
    ('sun', 'hot', 'HAS_PROPERTY', 0.85),
    ('ice', 'cold', 'HAS_PROPERTY', 0.9),
]

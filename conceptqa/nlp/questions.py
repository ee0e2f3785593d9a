"""
Question Analysis Module
========================

Rule-based question understanding.

This module handles:
- Classifying a question into a coarse type (factual, causal, list, ...)
- Extracting what the question focuses on (subject, time, location, reason)
- Detecting presuppositions ("why did X fail" assumes X failed)
- Detecting ambiguity and splitting compound questions
"""

import re
from enum import Enum
from typing import Dict, List, TypedDict


class QuestionType(Enum):
    """Coarse question category."""
    FACTUAL = 'factual'
    ANALYTICAL = 'analytical'
    COMPARATIVE = 'comparative'
    CAUSAL = 'causal'
    LIST = 'list'
    YESNO = 'yesno'
    NUMERICAL = 'numerical'
    DEFINITION = 'definition'
    CONDITIONAL = 'conditional'
    AMBIGUOUS = 'ambiguous'
    UNKNOWN = 'unknown'


class QuestionAnalysis(TypedDict):
    """Structured view of a question."""
    question_type: QuestionType
    focus: Dict[str, str]       # slot -> value, '?' when the slot is asked for
    assumptions: List[str]      # presuppositions in plain words
    ambiguous: bool
    sub_questions: List[str]    # compound questions split into parts


QUESTION_WORDS = ('who', 'what', 'when', 'where', 'why', 'how')

YESNO_OPENERS = ('is ', 'are ', 'was ', 'were ', 'do ', 'does ', 'did ')

# Focus slot -> cue words that ask for it
FOCUS_CUES = {
    'time': ('when', 'date', 'year'),
    'location': ('where', 'place', 'location'),
    'reason': ('why', 'because', 'due to'),
}

_VAGUE_WORDS = ('thing', 'stuff', 'something')
_WHY_DID_RE = re.compile(r"why did ([a-z ]+)")


def _has_word(text: str, word: str) -> bool:
    return re.search(r'\b' + re.escape(word) + r'\b', text) is not None


def is_ambiguous(question: str) -> bool:
    """True for several question words, an "or" choice, or vague nouns."""
    q = question.lower()
    if sum(1 for w in QUESTION_WORDS if _has_word(q, w)) > 1:
        return True
    if ' or ' in q:
        return True
    return any(w in q for w in _VAGUE_WORDS)


def classify_question(question: str) -> QuestionType:
    """
    Classify a question by its opening words and cue phrases.

    Example:
        >>> classify_question("Why did the bridge collapse?")
        <QuestionType.CAUSAL: 'causal'>
    """
    q = question.strip().lower()
    if not q:
        return QuestionType.UNKNOWN
    if q.startswith(('who', 'what', 'where', 'when')):
        return QuestionType.FACTUAL
    if q.startswith('why'):
        return QuestionType.CAUSAL
    if (q.startswith(('how many', 'how much'))
            or any(cue in q for cue in ('number', 'amount', 'percent'))):
        return QuestionType.NUMERICAL
    if q.startswith('how'):
        return QuestionType.ANALYTICAL
    if q.startswith(YESNO_OPENERS):
        return QuestionType.YESNO
    if q.startswith('list') or 'which of the following' in q:
        return QuestionType.LIST
    if 'compare' in q or 'difference between' in q or 'vs.' in q:
        return QuestionType.COMPARATIVE
    if 'define' in q or 'definition of' in q:
        return QuestionType.DEFINITION
    if 'if ' in q and ' then ' in q:
        return QuestionType.CONDITIONAL
    if is_ambiguous(question):
        return QuestionType.AMBIGUOUS
    return QuestionType.UNKNOWN


def extract_focus(question: str) -> Dict[str, str]:
    """Map focus slots (subject, object, time, location, reason) to values."""
    q = question.lower()
    focus: Dict[str, str] = {}
    if q.startswith(('who', 'what')):
        focus['subject'] = '?'
    if 'about ' in q:
        rest = q[q.index('about ') + len('about '):].split()
        if rest:
            focus['object'] = rest[0].strip('?.!,')
    for slot, cues in FOCUS_CUES.items():
        if any(cue in q for cue in cues):
            focus[slot] = '?'
    return focus


def detect_assumptions(question: str) -> List[str]:
    """List the presuppositions a question makes."""
    q = question.lower()
    assumptions = []
    if 'why did' in q and 'if' not in q:
        match = _WHY_DID_RE.search(q)
        if match and match.group(1).strip():
            assumptions.append(f"Assumes that '{match.group(1).strip()}' happened.")
    if 'how come' in q:
        assumptions.append('Assumes something unexpected occurred.')
    if 'since when' in q:
        assumptions.append('Assumes the event is ongoing.')
    return assumptions


def split_compound_question(question: str) -> List[str]:
    """Split "A? B?" or "A and B" into separate questions."""
    if '? ' in question:
        parts = [p.strip() for p in question.split('? ') if p.strip()]
        return [p if p.endswith('?') else p + '?' for p in parts]
    if ' and ' in question:
        parts = [p.strip() for p in question.split(' and ') if p.strip()]
        return [p if p.endswith('?') else p + '?' for p in parts]
    return [question.strip()]


def is_list_question(question: str) -> bool:
    q = question.strip().lower()
    return q.startswith('what are') or q.startswith('list')


def analyze_question(question: str) -> QuestionAnalysis:
    """Run every analysis on one question."""
    return QuestionAnalysis(
        question_type=classify_question(question),
        focus=extract_focus(question),
        assumptions=detect_assumptions(question),
        ambiguous=is_ambiguous(question),
        sub_questions=split_compound_question(question),
    )

"""
Temporal Expressions
====================

Recognition of simple temporal expressions and interval reasoning.

An expression resolves to a ``TemporalInfo`` interval relative to a
reference "now". The reference is injectable so that relative expressions
("yesterday", "last year") resolve deterministically in tests.

Interval model:
    - point in time: start and end present and equal ("now")
    - duration: start and end present and different ("1990", "today")
    - open interval: exactly one bound present; the missing bound is
      unbounded ("in the past", "soon")

Overlap policy:
    Two intervals overlap when ``a.start <= b.end and b.start <= a.end``
    (closed bounds), with a missing bound treated as unbounded. The
    activator's temporal bonus and ``TemporalInfo.overlaps`` both use it.
"""

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from ..constants import MONTHS

logger = logging.getLogger(__name__)


_YEAR_RE = re.compile(r'^\d{4}$')
_YEAR_IN_TEXT_RE = re.compile(r'\b\d{4}\b')
_DATE_RE = re.compile(r'\b([A-Za-z]+)\s+(\d{1,2}),\s*(\d{4})\b')
_WORD_RE = re.compile(r"\b[^\W_]+\b")

# Multi-word expressions, longest first so "two years ago" wins over "year"
_PHRASES: Tuple[str, ...] = (
    'two years ago', 'in the future', 'in the past',
    'last week', 'next week', 'last month', 'next month',
    'last year', 'next year',
)
_PHRASE_RE = re.compile(
    r'\b(' + '|'.join(re.escape(p).replace(r'\ ', r'\s+') for p in _PHRASES) + r')\b',
    re.IGNORECASE,
)

_WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday',
             'saturday', 'sunday')

_RELATIVE_MARKERS = ('ago', 'last', 'next', 'yesterday', 'tomorrow', 'now',
                     'recent', 'current', 'future', 'today', 'soon', 'past',
                     'historically')


class ExpressionType(Enum):
    """Kind of temporal expression."""
    DATE = 'date'
    DURATION = 'duration'


class TemporalRelation(Enum):
    """Allen-style relation of one interval to another."""
    BEFORE = 'before'
    AFTER = 'after'
    EQUAL = 'equal'
    DURING = 'during'
    CONTAINS = 'contains'
    OVERLAPS = 'overlaps'
    MEETS = 'meets'
    STARTS = 'starts'
    FINISHES = 'finishes'
    NONE = 'none'


def _le(a: Optional[datetime], b: Optional[datetime]) -> bool:
    """a <= b where a missing bound is unbounded."""
    if a is None or b is None:
        return True
    return a <= b


@dataclass(frozen=True)
class TemporalInfo:
    """
    A temporal expression resolved to an interval.

    Attributes:
        raw_expression: The surface text ("last year", "1990")
        start: Interval start, or None when unbounded in the past
        end: Interval end, or None when unbounded in the future
        expression_type: DATE for calendar days and instants, DURATION
            for longer spans
    """
    raw_expression: str
    start: Optional[datetime]
    end: Optional[datetime]
    expression_type: ExpressionType = ExpressionType.DURATION

    @property
    def is_valid(self) -> bool:
        return self.start is not None or self.end is not None

    @property
    def is_point_in_time(self) -> bool:
        return self.start is not None and self.start == self.end

    @property
    def is_duration(self) -> bool:
        return (self.start is not None and self.end is not None
                and self.start != self.end)

    @property
    def is_open(self) -> bool:
        return (self.start is None) != (self.end is None)

    @property
    def is_relative(self) -> bool:
        lower = self.raw_expression.lower()
        return any(marker in lower for marker in _RELATIVE_MARKERS)

    @property
    def is_absolute(self) -> bool:
        return not self.is_relative and self.is_valid

    @property
    def duration(self) -> Optional[timedelta]:
        if not self.is_duration:
            return None
        return abs(self.end - self.start)

    @property
    def granularity(self) -> str:
        """Coarsest calendar unit named by the expression."""
        lower = self.raw_expression.lower()
        if 'century' in lower or 'decade' in lower:
            return 'decade'
        if 'year' in lower or _YEAR_IN_TEXT_RE.search(lower):
            return 'year'
        if 'month' in lower or any(m in lower for m in MONTHS):
            return 'month'
        if 'week' in lower or any(d in lower for d in _WEEKDAYS):
            return 'week'
        if 'day' in lower or 'yesterday' in lower or 'tomorrow' in lower:
            return 'day'
        if any(w in lower for w in ('hour', 'morning', 'afternoon', 'evening', 'night')):
            return 'hour'
        if 'minute' in lower or 'second' in lower:
            return 'minute'
        return 'day'

    def overlaps(self, other: Optional['TemporalInfo']) -> bool:
        """True if the two intervals share at least one instant."""
        if other is None or not self.is_valid or not other.is_valid:
            return False
        return _le(self.start, other.end) and _le(other.start, self.end)

    def is_before(self, other: Optional['TemporalInfo']) -> bool:
        if other is None or not self.is_valid or not other.is_valid:
            return False
        mine = self.end if self.end is not None else self.start
        theirs = other.start if other.start is not None else other.end
        return mine < theirs

    def is_after(self, other: Optional['TemporalInfo']) -> bool:
        if other is None or not self.is_valid or not other.is_valid:
            return False
        mine = self.start if self.start is not None else self.end
        theirs = other.end if other.end is not None else other.start
        return mine > theirs

    def is_during(self, other: Optional['TemporalInfo']) -> bool:
        """True if this interval lies within the other, which must be a duration."""
        if other is None or not self.is_valid or not other.is_duration:
            return False
        start = self.start if self.start is not None else self.end
        end = self.end if self.end is not None else self.start
        return other.start <= start and end <= other.end

    def contains_point(self, point: datetime) -> bool:
        return _le(self.start, point) and _le(point, self.end)

    def to_iso8601(self) -> Optional[str]:
        if self.start is None:
            return None
        return self.start.strftime('%Y-%m-%dT%H:%M:%S')

    def to_dict(self) -> dict:
        return {
            'raw_expression': self.raw_expression,
            'start': self.start.isoformat() if self.start else None,
            'end': self.end.isoformat() if self.end else None,
            'expression_type': self.expression_type.value,
        }

    def __str__(self) -> str:
        start = self.start.isoformat() if self.start else 'N/A'
        end = self.end.isoformat() if self.end else 'N/A'
        return f"TemporalInfo('{self.raw_expression}', {start} .. {end}, {self.granularity})"


def _day_span(day: datetime) -> Tuple[datetime, datetime]:
    start = day.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start.replace(hour=23, minute=59, second=59)


def _month_span(year: int, month: int) -> Tuple[datetime, datetime]:
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime(year, month, last_day, 23, 59, 59)


def _year_span(year: int) -> Tuple[datetime, datetime]:
    return datetime(year, 1, 1), datetime(year, 12, 31, 23, 59, 59)


class TemporalParser:
    """
    Resolves temporal expressions against a reference time.

    Args:
        reference: The "now" used for relative expressions. When None the
            wall clock is read at each call.

    Example:
        parser = TemporalParser(reference=datetime(2024, 6, 15, 12, 0))
        parser.parse_expression('last year').start
        # datetime(2023, 1, 1, 0, 0)
    """

    def __init__(self, reference: Optional[datetime] = None):
        self.reference = reference

    @property
    def now(self) -> datetime:
        return self.reference if self.reference is not None else datetime.now()

    def parse_expression(self, expression: str) -> Optional[TemporalInfo]:
        """
        Resolve one expression (a token or a known phrase).

        Returns:
            The resolved interval, or None when the expression is unknown
        """
        if not expression:
            return None
        raw = ' '.join(expression.split())
        word = raw.lower()
        now = self.now
        today_start, today_end = _day_span(now)
        one_day = timedelta(days=1)
        one_week = timedelta(days=7)

        if word == 'today':
            return TemporalInfo(word, today_start, today_end, ExpressionType.DATE)
        if word == 'yesterday':
            return TemporalInfo(word, today_start - one_day, today_end - one_day,
                                ExpressionType.DATE)
        if word == 'tomorrow':
            return TemporalInfo(word, today_start + one_day, today_end + one_day,
                                ExpressionType.DATE)
        if word == 'now':
            return TemporalInfo(word, now, now, ExpressionType.DATE)
        if word == 'last week':
            return TemporalInfo(word, today_start - one_week, today_end - one_week)
        if word == 'next week':
            return TemporalInfo(word, today_start + one_week, today_end + one_week)
        if word in ('last month', 'next month'):
            shift = -1 if word.startswith('last') else 1
            index = now.year * 12 + (now.month - 1) + shift
            start, end = _month_span(index // 12, index % 12 + 1)
            return TemporalInfo(word, start, end)
        if word == 'last year':
            return TemporalInfo(word, *_year_span(now.year - 1))
        if word == 'next year':
            return TemporalInfo(word, *_year_span(now.year + 1))
        if word == 'two years ago':
            return TemporalInfo(word, *_year_span(now.year - 2))
        if word in ('in the past', 'historically'):
            return TemporalInfo(word, None, now)
        if word in ('in the future', 'soon'):
            return TemporalInfo(word, now, None)
        if word in MONTHS:
            start, end = _month_span(now.year, MONTHS.index(word) + 1)
            return TemporalInfo(word, start, end)
        if _YEAR_RE.match(word):
            year = int(word)
            if 1 <= year <= 9999:
                return TemporalInfo(word, *_year_span(year))
            return None

        match = _DATE_RE.search(raw)
        if match:
            return self._resolve_date(match)
        return None

    def _resolve_date(self, match: 're.Match') -> Optional[TemporalInfo]:
        """Resolve a "Month D, YYYY" match to that whole day."""
        month_name, day, year = match.group(1).lower(), int(match.group(2)), int(match.group(3))
        if month_name not in MONTHS or year < 1:
            return None
        month = MONTHS.index(month_name) + 1
        if not 1 <= day <= calendar.monthrange(year, month)[1]:
            return None
        start, end = _day_span(datetime(year, month, day))
        return TemporalInfo(match.group(0), start, end, ExpressionType.DATE)

    def extract_all(self, text: str) -> List[TemporalInfo]:
        """
        Find every temporal expression in text, in reading order.

        Full dates take precedence over the phrases and tokens inside them,
        and phrases over single tokens. The month "may" is only read as a
        month when capitalized, so the modal verb is ignored.
        """
        if not text:
            return []
        found: List[Tuple[int, TemporalInfo]] = []
        taken: List[Tuple[int, int]] = []

        def free(start: int, end: int) -> bool:
            return all(end <= s or start >= e for s, e in taken)

        for match in _DATE_RE.finditer(text):
            info = self._resolve_date(match)
            if info is not None:
                found.append((match.start(), info))
                taken.append(match.span())

        for match in _PHRASE_RE.finditer(text):
            if free(*match.span()):
                info = self.parse_expression(match.group(0))
                if info is not None:
                    found.append((match.start(), info))
                    taken.append(match.span())

        for match in _WORD_RE.finditer(text):
            if not free(*match.span()):
                continue
            surface = match.group(0)
            if surface == 'may':
                continue
            info = self.parse_expression(surface)
            if info is not None:
                found.append((match.start(), info))

        found.sort(key=lambda item: item[0])
        return [info for _, info in found]

    def extract(self, text: str) -> Optional[TemporalInfo]:
        """Return the first temporal expression in text, if any."""
        results = self.extract_all(text)
        return results[0] if results else None


def _bounds(info: TemporalInfo) -> Tuple[datetime, datetime]:
    start = info.start if info.start is not None else datetime.min
    end = info.end if info.end is not None else datetime.max
    return start, end


def get_temporal_relation(a: Optional[TemporalInfo],
                          b: Optional[TemporalInfo]) -> TemporalRelation:
    """
    Relation of interval ``a`` to interval ``b``.

    Missing bounds are unbounded, matching the overlap policy.
    """
    if a is None or b is None or not a.is_valid or not b.is_valid:
        return TemporalRelation.NONE
    a_start, a_end = _bounds(a)
    b_start, b_end = _bounds(b)
    if a_end < b_start:
        return TemporalRelation.BEFORE
    if a_start > b_end:
        return TemporalRelation.AFTER
    if a_start == b_start and a_end == b_end:
        return TemporalRelation.EQUAL
    if a_start == b_start and a_end < b_end:
        return TemporalRelation.STARTS
    if a_end == b_end and a_start > b_start:
        return TemporalRelation.FINISHES
    if a_start >= b_start and a_end <= b_end:
        return TemporalRelation.DURING
    if a_start <= b_start and a_end >= b_end:
        return TemporalRelation.CONTAINS
    if a_end == b_start or a_start == b_end:
        return TemporalRelation.MEETS
    # Remaining cases share part of an interval
    return TemporalRelation.OVERLAPS


class TemporalValidation(NamedTuple):
    """Outcome of checking an answer's time scope against a question's."""
    valid: bool
    confidence: float
    explanation: str


_COMPATIBLE = (TemporalRelation.DURING, TemporalRelation.EQUAL, TemporalRelation.CONTAINS,
               TemporalRelation.STARTS, TemporalRelation.FINISHES)
_CONFLICTING = (TemporalRelation.BEFORE, TemporalRelation.AFTER, TemporalRelation.OVERLAPS)


def validate_temporal_answer(question: str, answer: str,
                             parser: Optional[TemporalParser] = None) -> TemporalValidation:
    """
    Check whether an answer is temporally plausible for a question.

    Every (question, answer) expression pair is compared in order; the
    first compatible or conflicting pair decides.
    """
    parser = parser or TemporalParser()
    question_times = parser.extract_all(question)
    answer_times = parser.extract_all(answer)
    if not question_times or not answer_times:
        return TemporalValidation(True, 0.5, "No clear temporal info in question or answer.")

    for q_info in question_times:
        for a_info in answer_times:
            relation = get_temporal_relation(a_info, q_info)
            if relation in _COMPATIBLE:
                return TemporalValidation(
                    True, 0.9, f"Answer is temporally valid ({relation.value})."
                )
            if relation in _CONFLICTING:
                return TemporalValidation(
                    False, 0.3, f"Answer is temporally mismatched ({relation.value})."
                )
    return TemporalValidation(False, 0.2, "No matching temporal scope found.")

"""
Unit Tests for Temporal Expressions
===================================

Tests TemporalInfo interval semantics, expression parsing against a
fixed reference time, relation classification and answer validation.
"""

from datetime import datetime

import pytest

from conceptqa.nlp.temporal import (
    ExpressionType,
    TemporalInfo,
    TemporalParser,
    TemporalRelation,
    get_temporal_relation,
    validate_temporal_answer,
)

REFERENCE = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def parser():
    return TemporalParser(reference=REFERENCE)


def year(parser, value):
    return parser.parse_expression(str(value))


# =============================================================================
# TEMPORAL INFO
# =============================================================================


class TestTemporalInfo:
    """Tests for interval properties."""

    def test_point_in_time(self):
        info = TemporalInfo('now', REFERENCE, REFERENCE, ExpressionType.DATE)
        assert info.is_point_in_time
        assert not info.is_duration
        assert info.duration is None

    def test_open_interval(self):
        info = TemporalInfo('in the future', REFERENCE, None)
        assert info.is_open
        assert info.is_valid
        assert not info.is_duration

    def test_invalid_without_bounds(self):
        info = TemporalInfo('whenever', None, None)
        assert not info.is_valid
        assert not info.overlaps(info)

    def test_overlap_is_closed_interval(self, parser):
        assert year(parser, 1990).overlaps(year(parser, 1990))
        assert not year(parser, 1990).overlaps(year(parser, 1991))

    def test_missing_bound_is_unbounded(self, parser):
        past = TemporalInfo('in the past', None, REFERENCE)
        assert past.overlaps(year(parser, 1066))

    def test_before_after_during(self, parser):
        assert year(parser, 1989).is_before(year(parser, 1990))
        assert year(parser, 1991).is_after(year(parser, 1990))
        may = parser.parse_expression('may')
        assert may.is_during(year(parser, 2024))

    def test_relative_and_absolute(self, parser):
        assert parser.parse_expression('last year').is_relative
        assert year(parser, 1990).is_absolute

    @pytest.mark.parametrize("expression,expected", [
        ('1990', 'year'),
        ('last month', 'month'),
        ('next week', 'week'),
        ('yesterday', 'day'),
        ('saturday', 'week'),
    ])
    def test_granularity(self, expression, expected):
        assert TemporalInfo(expression, REFERENCE, REFERENCE).granularity == expected

    def test_to_dict(self, parser):
        data = year(parser, 1990).to_dict()
        assert data['start'] == '1990-01-01T00:00:00'
        assert data['expression_type'] == 'duration'


# =============================================================================
# PARSING
# =============================================================================


class TestParseExpression:
    """Tests for single expression resolution."""

    def test_year_is_whole_year(self, parser):
        info = year(parser, 1990)
        assert info.start == datetime(1990, 1, 1)
        assert info.end == datetime(1990, 12, 31, 23, 59, 59)
        assert info.is_duration

    def test_day_words_are_calendar_days(self, parser):
        today = parser.parse_expression('today')
        yesterday = parser.parse_expression('Yesterday')
        assert today.expression_type is ExpressionType.DATE
        assert today.start == datetime(2024, 6, 15)
        assert yesterday.start == datetime(2024, 6, 14)

    def test_now_is_a_point(self, parser):
        assert parser.parse_expression('now').is_point_in_time

    def test_relative_years(self, parser):
        assert parser.parse_expression('last year').start == datetime(2023, 1, 1)
        assert parser.parse_expression('next year').start == datetime(2025, 1, 1)
        assert parser.parse_expression('two years ago').start == datetime(2022, 1, 1)

    def test_last_month_crosses_year_boundary(self):
        parser = TemporalParser(reference=datetime(2024, 1, 10))
        info = parser.parse_expression('last month')
        assert info.start == datetime(2023, 12, 1)

    def test_future_is_open_ended(self, parser):
        info = parser.parse_expression('in the future')
        assert info.start == REFERENCE and info.end is None

    def test_unknown_expression(self, parser):
        assert parser.parse_expression('banana') is None
        assert parser.parse_expression('') is None


class TestExtract:
    """Tests for finding expressions in running text."""

    def test_full_date_wins_over_parts(self, parser):
        found = parser.extract_all("Signed on July 4, 1776 in Philadelphia.")
        assert len(found) == 1
        assert found[0].start == datetime(1776, 7, 4)

    def test_phrase_wins_over_words(self, parser):
        found = parser.extract_all("It rained last year.")
        assert [f.raw_expression for f in found] == ['last year']

    def test_reading_order(self, parser):
        found = parser.extract_all("Between 1990 and yesterday")
        assert [f.raw_expression for f in found] == ['1990', 'yesterday']

    def test_modal_may_is_not_a_month(self, parser):
        assert parser.extract_all("You may go.") == []
        assert parser.extract("Born in May.").start == datetime(2024, 5, 1)

    def test_extract_returns_first(self, parser):
        assert parser.extract("In 1990, then 1991").raw_expression == '1990'
        assert parser.extract("nothing temporal") is None


# =============================================================================
# RELATIONS AND VALIDATION
# =============================================================================


class TestTemporalRelation:
    """Tests for Allen-style relation classification."""

    def test_basic_relations(self, parser):
        assert get_temporal_relation(year(parser, 1990), year(parser, 1990)) is TemporalRelation.EQUAL
        assert get_temporal_relation(year(parser, 1989), year(parser, 1990)) is TemporalRelation.BEFORE
        assert get_temporal_relation(year(parser, 1991), year(parser, 1990)) is TemporalRelation.AFTER

    def test_starts_finishes_during_contains(self, parser):
        y2024 = year(parser, 2024)
        assert get_temporal_relation(parser.parse_expression('january'), y2024) is TemporalRelation.STARTS
        assert get_temporal_relation(parser.parse_expression('december'), y2024) is TemporalRelation.FINISHES
        assert get_temporal_relation(parser.parse_expression('june'), y2024) is TemporalRelation.DURING
        assert get_temporal_relation(y2024, parser.parse_expression('june')) is TemporalRelation.CONTAINS

    def test_meets(self):
        a = TemporalInfo('a', datetime(2020, 1, 1), datetime(2020, 6, 1))
        b = TemporalInfo('b', datetime(2020, 6, 1), datetime(2020, 12, 1))
        assert get_temporal_relation(a, b) is TemporalRelation.MEETS
        assert get_temporal_relation(b, a) is TemporalRelation.MEETS

    def test_partial_overlap(self):
        a = TemporalInfo('a', datetime(2020, 1, 1), datetime(2020, 8, 1))
        b = TemporalInfo('b', datetime(2020, 6, 1), datetime(2020, 12, 1))
        assert get_temporal_relation(a, b) is TemporalRelation.OVERLAPS

    def test_missing_operand(self, parser):
        assert get_temporal_relation(None, year(parser, 1990)) is TemporalRelation.NONE


class TestValidateTemporalAnswer:
    """Tests for answer time-scope validation."""

    def test_matching_year(self, parser):
        result = validate_temporal_answer("What happened in 1990?", "The wall fell in 1990.", parser)
        assert result.valid
        assert result.confidence == 0.9

    def test_conflicting_year(self, parser):
        result = validate_temporal_answer("What happened in 1990?", "It was 1991.", parser)
        assert not result.valid
        assert result.confidence == 0.3

    def test_no_temporal_information(self, parser):
        result = validate_temporal_answer("Who built it?", "Eiffel built it.", parser)
        assert result.valid
        assert result.confidence == 0.5

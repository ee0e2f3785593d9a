"""
Unit Tests for Candidate Scoring
================================
"""

import math
from datetime import datetime

import pytest

from conceptqa import ReasonerConfig
from conceptqa.answering.scoring import (
    AnswerScorer,
    ideal_answer_length,
    length_score,
    temporal_score,
)
from conceptqa.nlp.temporal import TemporalInfo, TemporalParser
from conceptqa.results import ScoreBreakdown

REFERENCE_TIME = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def parser():
    return TemporalParser(reference=REFERENCE_TIME)


@pytest.fixture
def scorer(lexicon, config):
    return AnswerScorer(lexicon, config)


@pytest.fixture
def activated(cat_network):
    cat_network.set_activation(cat_network.node_id('cat'), 0.8)
    cat_network.set_activation(cat_network.node_id('the'), 0.3)
    return cat_network


class TestHelpers:

    @pytest.mark.parametrize("question,expected", [
        ("Who is Gustave Eiffel?", 25),
        ("What is the name of the tower?", 25),
        ("Give the definition of entropy", 150),
        ("What are the primary colors?", 120),
        ("Where did the cat sit?", 80),
    ])
    def test_ideal_length(self, question, expected):
        assert ideal_answer_length(question) == expected

    def test_length_score(self):
        assert length_score(80, 80) == 1.0
        assert length_score(120, 80) == pytest.approx(math.exp(-0.5))
        assert length_score(40, 80) == length_score(120, 80)

    def test_temporal_score_without_question_time(self, parser):
        assert temporal_score(None, parser.parse_expression('1990')) == 1.0
        assert temporal_score(parser.parse_expression('1990'), None) == 0.4

    def test_temporal_score_durations(self, parser):
        y1990 = parser.parse_expression('1990')
        assert temporal_score(y1990, y1990) == pytest.approx(1.0)
        assert temporal_score(y1990, parser.parse_expression('1991')) == 0.1
        june = parser.parse_expression('june')
        share = temporal_score(parser.parse_expression('2024'), june)
        assert 0.0 < share < 0.2

    def test_temporal_score_points(self, parser):
        now = parser.parse_expression('now')
        assert temporal_score(now, now) == 1.0
        assert temporal_score(now, parser.parse_expression('2024')) == 0.9
        assert temporal_score(parser.parse_expression('1990'), now) == 0.1

    def test_temporal_score_open_interval(self, parser):
        future = TemporalInfo('in the future', REFERENCE_TIME, None)
        assert temporal_score(future, parser.parse_expression('2024')) == 0.3


class TestAnswerScorer:

    def test_profile(self, scorer, activated):
        profile = scorer.profile("Where did the cat sit?", activated)
        assert profile.keywords == ['the', 'cat']
        assert profile.key_concepts == ['the', 'cat']
        assert profile.ideal_length == 80
        assert not profile.has_negation
        assert profile.temporal is None
        assert not profile.wants_list

    def test_completeness_cutoff_follows_threshold(self, scorer, activated):
        scorer.activation_threshold = 0.5
        assert scorer.completeness_cutoff == 0.5
        profile = scorer.profile("Where did the cat sit?", activated)
        assert profile.key_concepts == ['cat']

    def test_full_sentence_scores(self, scorer, activated):
        profile = scorer.profile("Where did the cat sit?", activated)
        text = "The cat sat on the mat."
        scores = scorer.score(text, profile, activated)
        assert scores.semantic == pytest.approx(1.0)
        assert scores.completeness == 1.0
        assert scores.relevance == pytest.approx((0.3 + 0.8 + 0.3) / 3)
        assert scores.length == pytest.approx(length_score(len(text), 80))
        assert scores.negation == 1.0
        assert scores.temporal == 1.0

    def test_unrelated_candidate(self, scorer, activated):
        profile = scorer.profile("Where did the cat sit?", activated)
        scores = scorer.score("mat", profile, activated)
        assert scores.semantic == 0.0
        assert scores.completeness == 0.0
        assert scores.relevance == 0.0

    def test_partial_semantic_match(self, scorer, activated):
        profile = scorer.profile("Where did the cat sit?", activated)
        scores = scorer.score("cat sat", profile, activated)
        assert scores.semantic == pytest.approx(0.8 / 1.1)
        assert scores.completeness == 0.5

    def test_single_key_concept_is_complete(self, scorer, activated):
        profile = scorer.profile("What about cats?", activated)
        assert scorer.score("mat", profile, activated).completeness == 1.0

    def test_negation_mismatch(self, scorer, activated):
        profile = scorer.profile("Did the cat not sit?", activated)
        assert scorer.score("The cat sat.", profile, activated).negation == 0.1
        assert scorer.score("The cat did not sit.", profile, activated).negation == 1.0

    def test_list_bonus(self, scorer, activated):
        profile = scorer.profile("What are the cat and mat?", activated)
        assert profile.wants_list
        plain = scorer.score("the dog", profile, activated).completeness
        listed = scorer.score("the dog, and more", profile, activated).completeness
        assert listed == pytest.approx(min(1.0, plain * 1.2))

    def test_no_activation_means_zero_semantic(self, scorer, cat_network):
        profile = scorer.profile("Where did the cat sit?", cat_network)
        assert profile.keywords == []
        assert scorer.score("The cat sat.", profile, cat_network).semantic == 0.0

    def test_final_score_uses_config_weights(self, lexicon):
        weights = {'semantic': 1.0, 'completeness': 0.0, 'relevance': 0.0,
                   'length': 0.0, 'negation': 0.0, 'temporal': 0.0}
        scorer = AnswerScorer(lexicon, ReasonerConfig(score_weights=weights))
        scores = ScoreBreakdown(0.4, 1.0, 1.0, 1.0, 1.0, 1.0)
        assert scorer.final_score(scores) == pytest.approx(0.4)

    def test_threshold_validation(self, scorer):
        with pytest.raises(ValueError):
            scorer.activation_threshold = -0.1

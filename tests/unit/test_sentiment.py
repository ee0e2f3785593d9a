"""
Unit Tests for Sentiment Analysis
=================================
"""

import pytest

from conceptqa.nlp.sentiment import SentimentAnalyzer
from conceptqa.tokenizer import Tokenizer


@pytest.fixture
def analyzer():
    return SentimentAnalyzer(Tokenizer())


class TestSentimentScore:
    """Tests for lexicon sentiment scoring with negation scope."""

    def test_positive_and_negative_counts(self, analyzer):
        assert analyzer.score("A good and wonderful day") == 2
        assert analyzer.score("A bad and terrible day") == -2

    def test_neutral_text(self, analyzer):
        assert analyzer.score("The cat sat on the mat") == 0
        assert analyzer.score("") == 0

    def test_negation_inverts_following_words(self, analyzer):
        assert analyzer.score("This is not good") == -1
        assert analyzer.score("Never a bad day") == 1

    def test_negation_scope_is_three_tokens(self, analyzer):
        # "good" is the fourth token after "not"
        assert analyzer.score("not one two three good") == 1
        assert analyzer.score("not one two good") == -1

    def test_mixed(self, analyzer):
        assert analyzer.score("good food but bad service") == 0


class TestWordPolarity:
    """Tests for single word and stem polarity."""

    def test_word_polarity(self, analyzer):
        assert analyzer.word_polarity('Great') == 1
        assert analyzer.word_polarity('awful') == -1
        assert analyzer.word_polarity('table') == 0

    def test_stem_polarity(self, analyzer):
        tokenizer = Tokenizer()
        assert analyzer.word_polarity(tokenizer.stem('happy')) == 1
        assert analyzer.word_polarity(tokenizer.stem('dangerous')) == -1

    def test_custom_words(self, analyzer):
        analyzer.add_positive_word('Stellar')
        analyzer.add_negative_word('meh')
        assert analyzer.score("stellar work") == 1
        assert analyzer.word_polarity('meh') == -1

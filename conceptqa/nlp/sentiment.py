"""
Lexicon-based sentiment scoring with negation awareness.
"""

import logging
from typing import Iterable, Optional, Set

from ..constants import NEGATIVE_WORDS, POSITIVE_WORDS
from ..tokenizer import Tokenizer

logger = logging.getLogger(__name__)

# Tokens after a negation word whose polarity is inverted
NEGATION_SCOPE = 3


class SentimentAnalyzer:
    """
    Counts positive and negative words in text.

    A negation word is not scored itself; it inverts the polarity of
    sentiment words among the next three tokens ("not good" scores -1).

    Polarity lookups accept surface words and their stems, so concept
    names taken from the semantic network score the same as the words
    they came from.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        positive_words: Optional[Iterable[str]] = None,
        negative_words: Optional[Iterable[str]] = None,
    ):
        self.tokenizer = tokenizer
        self.positive_words: Set[str] = set(
            positive_words if positive_words is not None else POSITIVE_WORDS
        )
        self.negative_words: Set[str] = set(
            negative_words if negative_words is not None else NEGATIVE_WORDS
        )
        self._positive_stems: Set[str] = set()
        self._negative_stems: Set[str] = set()
        self._refresh_stems()

    def _refresh_stems(self) -> None:
        self._positive_stems = {self.tokenizer.stem(w) for w in self.positive_words}
        self._negative_stems = {self.tokenizer.stem(w) for w in self.negative_words}

    def add_positive_word(self, word: str) -> None:
        self.positive_words.add(word.lower())
        self._refresh_stems()

    def add_negative_word(self, word: str) -> None:
        self.negative_words.add(word.lower())
        self._refresh_stems()

    def word_polarity(self, word: str) -> int:
        """Return +1, -1 or 0 for a single word or stem."""
        word = word.lower()
        if word in self.positive_words or word in self._positive_stems:
            return 1
        if word in self.negative_words or word in self._negative_stems:
            return -1
        return 0

    def score(self, text: str) -> int:
        """
        Signed sentiment score of text.

        Returns:
            > 0 for positive text, < 0 for negative, 0 for neutral
        """
        if not text:
            return 0
        total = 0
        scope = 0
        for token in self.tokenizer.tokenize(text):
            if self.tokenizer.is_negation_word(token):
                scope = NEGATION_SCOPE
                continue
            polarity = 0
            if token in self.positive_words:
                polarity = 1
            elif token in self.negative_words:
                polarity = -1
            if polarity:
                total += -polarity if scope > 0 else polarity
            if scope > 0:
                scope -= 1
        return total

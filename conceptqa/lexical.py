"""
Lexical Toolkit
===============

The fixed lexical contract consumed by the reasoning core.

The network builder, activator, rule engine, scorer and learning loop
reach tokenization, stemming, lexicon tests, sentiment, temporal parsing
and sentence splitting only through a ``LexicalToolkit``. Swapping the
toolkit (for example to pin the temporal reference time in tests) changes
every component consistently.

Example:
    from datetime import datetime
    lexicon = LexicalToolkit(reference_time=datetime(2024, 1, 1))
    lexicon.stem('vehicles')              # 'vehicl'
    lexicon.sentiment_score('not good')   # -1
    lexicon.extract_temporal_info('in 1990').start.year  # 1990
"""

from datetime import datetime
from typing import List, Optional, Tuple

from .nlp.sentiment import SentimentAnalyzer
from .nlp.temporal import TemporalInfo, TemporalParser
from .tokenizer import Token, Tokenizer


class LexicalToolkit:
    """
    Facade over tokenizer, sentiment analyzer and temporal parser.

    Attributes:
        tokenizer: Tokenization, stemming and word lists
        sentiment: Lexicon sentiment scoring
        temporal: Temporal expression resolution
    """

    def __init__(
        self,
        tokenizer: Optional[Tokenizer] = None,
        sentiment: Optional[SentimentAnalyzer] = None,
        temporal: Optional[TemporalParser] = None,
        reference_time: Optional[datetime] = None,
    ):
        self.tokenizer = tokenizer or Tokenizer()
        self.sentiment = sentiment or SentimentAnalyzer(self.tokenizer)
        self.temporal = temporal or TemporalParser(reference=reference_time)

    def tokenize(self, text: str) -> List[str]:
        return self.tokenizer.tokenize(text)

    def tokenize_with_spans(self, text: str) -> List[Token]:
        return self.tokenizer.tokenize_with_spans(text)

    def stem(self, word: str) -> str:
        return self.tokenizer.stem(word)

    def stems(self, text: str) -> List[str]:
        return self.tokenizer.stems(text)

    def is_stop_word(self, word: str) -> bool:
        return self.tokenizer.is_stop_word(word)

    def is_negation_word(self, word: str) -> bool:
        return self.tokenizer.is_negation_word(word)

    def is_temporal_keyword(self, word: str) -> bool:
        return self.tokenizer.is_temporal_keyword(word)

    def contains_negation(self, text: str) -> bool:
        return self.tokenizer.contains_negation(text)

    def sentiment_score(self, text: str) -> int:
        return self.sentiment.score(text)

    def word_polarity(self, word: str) -> int:
        return self.sentiment.word_polarity(word)

    def extract_temporal_info(self, text: str) -> Optional[TemporalInfo]:
        """First temporal expression in text (a single token works too)."""
        return self.temporal.extract(text)

    def extract_all_temporal_info(self, text: str) -> List[TemporalInfo]:
        return self.temporal.extract_all(text)

    def split_sentences(self, text: str) -> List[str]:
        return self.tokenizer.split_sentences(text)

    def sentence_spans(self, text: str) -> List[Tuple[str, int, int]]:
        return self.tokenizer.sentence_spans(text)

"""
Tokenizer Module
================

Word tokenization, suffix-stripping stemming, lexicon lookups and
sentence splitting.

Every concept in the semantic network is identified by the stem this
module produces, so the stemmer must be deterministic: the same surface
word always maps to the same node regardless of where it appears.
"""

import re
from typing import Iterable, List, NamedTuple, Optional, Set, Tuple

from .constants import NEGATION_WORDS, STOP_WORDS, TEMPORAL_KEYWORDS


# Letters and digits, with inner apostrophes and hyphens ("don't", "x-ray")
_TOKEN_RE = re.compile(r"\b(?:[^\W_]|['-])+\b")

# Break after . ? or ! followed by whitespace, except after "Mr." style
# abbreviations (capital, lowercase, period)
_SENTENCE_BREAK_RE = re.compile(r"(?<![A-Z][a-z]\.)(?<=[.?!])\s+")

_VOWELS = 'aeiou'


class Token(NamedTuple):
    """A lowercase token with its character span in the source text."""
    text: str
    start: int
    end: int


def _has_vowel(s: str) -> bool:
    return any(c in _VOWELS for c in s)


def _measure(s: str) -> int:
    """Count vowel groups, the Porter 'measure' approximation."""
    m = 0
    in_vowels = False
    for c in s:
        if c in _VOWELS:
            in_vowels = True
        elif in_vowels:
            m += 1
            in_vowels = False
    if in_vowels:
        m += 1
    return m


def _ends_cvc(s: str) -> bool:
    """True if s ends consonant-vowel-consonant and the last is not w, x or y."""
    if len(s) < 3:
        return False
    c1, v, c2 = s[-3], s[-2], s[-1]
    return (c1 not in _VOWELS and v in _VOWELS and c2 not in _VOWELS
            and c2 not in 'wxy')


def _undouble(s: str) -> str:
    """Drop a doubled final consonant ("hopp" -> "hop") unless it is l, s or z."""
    if len(s) >= 2 and s[-1] == s[-2] and s[-1] not in 'lsz':
        return s[:-1]
    return s


class Tokenizer:
    """
    Text tokenizer with stemming and lexicon lookups.

    Word lists are per instance and may be edited at runtime; the
    defaults come from ``conceptqa.constants``.

    Attributes:
        stop_words: Words ignored when choosing question keywords
        negation_words: Words that open a negation scope
        temporal_keywords: Words with a temporal reading

    Example:
        tokenizer = Tokenizer()
        tokenizer.tokenize("The cats are running")
        # ['the', 'cats', 'are', 'running']
        tokenizer.stems("The cats are running")
        # ['the', 'cat', 'are', 'run']
    """

    DEFAULT_STOP_WORDS = STOP_WORDS
    DEFAULT_NEGATION_WORDS = NEGATION_WORDS
    DEFAULT_TEMPORAL_KEYWORDS = TEMPORAL_KEYWORDS

    def __init__(
        self,
        stop_words: Optional[Iterable[str]] = None,
        negation_words: Optional[Iterable[str]] = None,
        temporal_keywords: Optional[Iterable[str]] = None,
    ):
        """
        Initialize tokenizer.

        Args:
            stop_words: Replacement stop word list (defaults to STOP_WORDS)
            negation_words: Replacement negation word list
            temporal_keywords: Replacement temporal keyword list
        """
        self.stop_words: Set[str] = set(
            stop_words if stop_words is not None else self.DEFAULT_STOP_WORDS
        )
        self.negation_words: Set[str] = set(
            negation_words if negation_words is not None else self.DEFAULT_NEGATION_WORDS
        )
        self.temporal_keywords: Set[str] = set(
            temporal_keywords if temporal_keywords is not None
            else self.DEFAULT_TEMPORAL_KEYWORDS
        )

        # Derivational suffixes: the first matching suffix is replaced
        self._suffix_rules: List[Tuple[str, str]] = [
            ('tional', 'tion'),
            ('enci', 'ence'),
            ('anci', 'ance'),
            ('izer', 'ize'),
            ('bli', 'ble'),
            ('alli', 'al'),
            ('entli', 'ent'),
            ('eli', 'e'),
            ('ousli', 'ous'),
            ('ization', 'ize'),
            ('ation', 'ate'),
            ('ator', 'ate'),
            ('alism', 'al'),
            ('iviti', 'ive'),
            ('aliti', 'al'),
            ('biliti', 'ble'),
            ('logi', 'log'),
        ]

    # -------------------------------------------------------------------------
    # Tokenization
    # -------------------------------------------------------------------------

    def tokenize_with_spans(self, text: str) -> List[Token]:
        """
        Extract lowercase tokens with their character offsets.

        Args:
            text: Input text

        Returns:
            Tokens in reading order; lone hyphens and apostrophes are dropped
        """
        if not text:
            return []
        tokens = []
        for match in _TOKEN_RE.finditer(text):
            word = match.group().lower()
            if word in ('-', "'"):
                continue
            tokens.append(Token(word, match.start(), match.end()))
        return tokens

    def tokenize(self, text: str) -> List[str]:
        """Extract lowercase word tokens from text."""
        return [token.text for token in self.tokenize_with_spans(text)]

    def stem(self, word: str) -> str:
        """
        Reduce a word to its stem with Porter-like suffix stripping.

        A plural ending is removed first and the result goes through the
        remaining rules, so ``stem(w + 's') == stem(w)`` for ordinary nouns.
        After that the first matching rule wins: -eed/-ed/-ing, terminal y
        after a consonant, the derivational suffix table, then a trailing
        silent e.

        Args:
            word: Word to stem

        Returns:
            Lowercase stem
        """
        word = word.lower()

        if word.endswith('sses'):
            word = word[:-2]
        elif word.endswith('ies'):
            word = word[:-3] + 'y'
        elif word.endswith('s') and len(word) > 2 and not word.endswith('ss'):
            word = word[:-1]

        if word.endswith('eed') and len(word) > 4 and _has_vowel(word[:-3]):
            return word[:-1]
        if word.endswith('ed'):
            base = word[:-2]
            if base.endswith(('at', 'bl', 'iz')):
                return base + 'e'
            if _has_vowel(base):
                return _undouble(base)
        if word.endswith('ing'):
            base = word[:-3]
            if base.endswith('e') and not _has_vowel(base[:-1]):
                return base
            if _has_vowel(base):
                return _undouble(base)

        if word.endswith('y') and len(word) > 2 and word[-2] not in _VOWELS:
            return word[:-1] + 'i'

        for suffix, replacement in self._suffix_rules:
            if word.endswith(suffix):
                return word[:-len(suffix)] + replacement

        if word.endswith('e') and len(word) > 3:
            base = word[:-1]
            m = _measure(base)
            if m > 1 or (m == 1 and _ends_cvc(base) and base[-1] not in 'lsz'):
                return base

        return word

    def stems(self, text: str) -> List[str]:
        """Tokenize and stem text, preserving order and duplicates."""
        return [self.stem(token) for token in self.tokenize(text)]

    # -------------------------------------------------------------------------
    # Lexicon lookups
    # -------------------------------------------------------------------------

    def is_stop_word(self, word: str) -> bool:
        return word.lower() in self.stop_words

    def is_negation_word(self, word: str) -> bool:
        return word.lower() in self.negation_words

    def is_temporal_keyword(self, word: str) -> bool:
        return word.lower() in self.temporal_keywords

    def contains_negation(self, text: str) -> bool:
        """True if any token of text is a negation word."""
        return any(self.is_negation_word(t) for t in self.tokenize(text))

    def add_stop_word(self, word: str) -> None:
        self.stop_words.add(word.lower())

    def remove_stop_word(self, word: str) -> None:
        self.stop_words.discard(word.lower())

    def add_negation_word(self, word: str) -> None:
        self.negation_words.add(word.lower())

    def remove_negation_word(self, word: str) -> None:
        self.negation_words.discard(word.lower())

    def add_temporal_keyword(self, word: str) -> None:
        self.temporal_keywords.add(word.lower())

    def remove_temporal_keyword(self, word: str) -> None:
        self.temporal_keywords.discard(word.lower())

    # -------------------------------------------------------------------------
    # Sentences
    # -------------------------------------------------------------------------

    def sentence_spans(self, text: str) -> List[Tuple[str, int, int]]:
        """
        Split text into trimmed sentences with their offsets.

        Returns:
            List of (sentence, start, end) where text[start:end] == sentence
        """
        spans: List[Tuple[str, int, int]] = []
        if not text:
            return spans
        position = 0
        for match in _SENTENCE_BREAK_RE.finditer(text):
            self._append_trimmed(spans, text, position, match.start())
            position = match.end()
        self._append_trimmed(spans, text, position, len(text))
        return spans

    def split_sentences(self, text: str) -> List[str]:
        """Split text after sentence-final punctuation."""
        return [sentence for sentence, _, _ in self.sentence_spans(text)]

    @staticmethod
    def _append_trimmed(spans: List[Tuple[str, int, int]], text: str,
                        start: int, end: int) -> None:
        while start < end and text[start].isspace():
            start += 1
        while end > start and text[end - 1].isspace():
            end -= 1
        if end > start:
            spans.append((text[start:end], start, end))

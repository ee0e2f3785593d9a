"""
Linguistic Enrichment Providers
===============================

Noun-phrase extraction and part-of-speech tests used to generate
fine-grained answer candidates.

Two providers share one interface:

- ``HeuristicEnrichmentProvider`` (always available): chunks maximal runs
  of content words and classifies words by suffix and capitalization.
- ``NltkEnrichmentProvider`` (optional): chunks by NLTK part-of-speech
  tags. Requires the ``nlp`` extra and the averaged perceptron tagger
  data.

Which provider runs is decided when the engine is constructed, never by
catching failures at query time.

Installing NLTK support:
    pip install conceptqa[nlp]
    python -c "import nltk; nltk.download('averaged_perceptron_tagger_eng')"
"""

import logging
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

from ..tokenizer import Token, Tokenizer
from .syntax import SyntacticParser

logger = logging.getLogger(__name__)


_NOUN_SUFFIXES = ('tion', 'sion', 'ment', 'ness', 'ity', 'ism', 'ist', 'ship',
                  'hood', 'ance', 'ence', 'er', 'or', 'age', 'ery')
_ADJECTIVE_SUFFIXES = ('ous', 'ful', 'ive', 'able', 'ible', 'less', 'ish',
                       'ic', 'al', 'ant', 'ent', 'ary')


class EnrichmentUnavailableError(Exception):
    """Raised when an optional enrichment backend cannot be constructed.

    To fix this error, install NLTK and its tagger data:

        pip install conceptqa[nlp]
        python -c "import nltk; nltk.download('averaged_perceptron_tagger_eng')"
    """

    def __init__(self, original_error: Optional[Exception] = None):
        message = (
            "NLTK part-of-speech tagging is required but not available.\n\n"
            "To install it:\n"
            "  pip install conceptqa[nlp]\n"
            "  python -c \"import nltk; nltk.download('averaged_perceptron_tagger_eng')\""
        )
        if original_error:
            message += f"\n\nOriginal error: {original_error}"
        super().__init__(message)
        self.original_error = original_error


class EnrichmentProvider(Protocol):
    """Interface shared by all enrichment providers."""

    name: str

    def extract_noun_phrases(self, text: str) -> List[str]:
        """Noun-phrase chunks of text, each an exact substring of it."""
        ...

    def is_noun(self, word: str) -> bool:
        ...

    def is_adjective(self, word: str) -> bool:
        ...


def _runs_to_phrases(text: str, runs: Iterable[List[Token]], max_words: int) -> List[str]:
    """Cut token runs into chunks of at most max_words and slice them from text."""
    phrases = []
    for run in runs:
        for i in range(0, len(run), max_words):
            piece = run[i:i + max_words]
            phrase = text[piece[0].start:piece[-1].end]
            if len(phrase) > 2:
                phrases.append(phrase)
    return phrases


def _group_runs(text: str, tokens: Sequence[Token], keep: Sequence[bool]) -> List[List[Token]]:
    """Group consecutive kept tokens; punctuation between tokens ends a run."""
    runs: List[List[Token]] = []
    current: List[Token] = []
    previous: Optional[Token] = None
    for token, kept in zip(tokens, keep):
        adjacent = previous is not None and not text[previous.end:token.start].strip()
        if kept and current and adjacent:
            current.append(token)
        else:
            if current:
                runs.append(current)
            current = [token] if kept else []
        previous = token
    if current:
        runs.append(current)
    return runs


class HeuristicEnrichmentProvider:
    """
    Suffix and stop-word based enrichment.

    A noun phrase is a maximal run of adjacent tokens that are neither
    stop words, negation words nor verbs, cut to ``max_words`` words.
    """

    name = 'heuristic'

    def __init__(self, tokenizer: Tokenizer, parser: Optional[SyntacticParser] = None,
                 max_words: int = 4):
        self.tokenizer = tokenizer
        self.parser = parser or SyntacticParser(tokenizer)
        self.max_words = max_words

    def _is_content(self, token: str) -> bool:
        return not (self.tokenizer.is_stop_word(token)
                    or self.tokenizer.is_negation_word(token)
                    or self.parser.is_verb(token))

    def extract_noun_phrases(self, text: str) -> List[str]:
        tokens = self.tokenizer.tokenize_with_spans(text)
        keep = [self._is_content(t.text) for t in tokens]
        return _runs_to_phrases(text, _group_runs(text, tokens, keep), self.max_words)

    def is_noun(self, word: str) -> bool:
        if not word or not word.strip():
            return False
        if word[0].isupper():
            return True
        lower = word.lower()
        if self.tokenizer.is_stop_word(lower) or self.parser.is_verb(lower):
            return False
        return lower.endswith(_NOUN_SUFFIXES) or not self.is_adjective(lower)

    def is_adjective(self, word: str) -> bool:
        if not word:
            return False
        lower = word.lower()
        return len(lower) > 4 and lower.endswith(_ADJECTIVE_SUFFIXES)


class NltkEnrichmentProvider:
    """
    NLTK part-of-speech based enrichment.

    Noun phrases are maximal runs of adjective, noun and cardinal tags.

    Raises:
        EnrichmentUnavailableError: If nltk or its tagger data is missing
    """

    name = 'nltk'

    _PHRASE_TAGS = ('JJ', 'NN', 'CD')

    def __init__(self, tokenizer: Tokenizer, max_words: int = 4):
        self.tokenizer = tokenizer
        self.max_words = max_words
        try:
            import nltk
            # Probe the tagger so missing data fails here, not mid-query
            nltk.pos_tag(['probe'])
        except ImportError as e:
            raise EnrichmentUnavailableError(e) from e
        except LookupError as e:
            raise EnrichmentUnavailableError(e) from e
        self._nltk = nltk

    def _tags(self, words: List[str]) -> List[Tuple[str, str]]:
        return self._nltk.pos_tag(words)

    def extract_noun_phrases(self, text: str) -> List[str]:
        tokens = self.tokenizer.tokenize_with_spans(text)
        if not tokens:
            return []
        tagged = self._tags([t.text for t in tokens])
        keep = [tag.startswith(self._PHRASE_TAGS)
                and not self.tokenizer.is_stop_word(word)
                for word, tag in tagged]
        return _runs_to_phrases(text, _group_runs(text, tokens, keep), self.max_words)

    def is_noun(self, word: str) -> bool:
        if not word or not word.strip():
            return False
        return self._tags([word])[0][1].startswith('NN')

    def is_adjective(self, word: str) -> bool:
        if not word or not word.strip():
            return False
        return self._tags([word])[0][1].startswith('JJ')


def resolve_enrichment_provider(tokenizer: Tokenizer, prefer_nltk: bool = False,
                                max_words: int = 4) -> EnrichmentProvider:
    """
    Choose the enrichment provider once, at engine construction.

    Args:
        tokenizer: Tokenizer shared with the engine
        prefer_nltk: Try the NLTK provider first
        max_words: Longest noun phrase in words

    Returns:
        The NLTK provider when requested and available, else the heuristic one
    """
    if prefer_nltk:
        try:
            return NltkEnrichmentProvider(tokenizer, max_words=max_words)
        except EnrichmentUnavailableError as e:
            logger.warning(f"NLTK enrichment unavailable, using heuristics: {e.original_error}")
    return HeuristicEnrichmentProvider(tokenizer, max_words=max_words)

"""
Lightweight subject-verb-object extraction.

No grammar is involved: a verb is a token from a fixed list or any token
ending in -ed or -ing, and its subject and object are the nearest content
words on either side.
"""

from typing import FrozenSet, Iterable, List, NamedTuple, Optional

from ..constants import COMMON_VERBS
from ..tokenizer import Tokenizer


class SVOTriplet(NamedTuple):
    """Subject and object stems joined by the verb token between them."""
    subject: str
    verb: str
    object: str

    def __str__(self) -> str:
        return f"[{self.subject}] --({self.verb})--> [{self.object}]"


class SyntacticParser:
    """
    Extracts SVO triplets from a sentence.

    Example:
        parser = SyntacticParser(Tokenizer())
        parser.parse("Gustave Eiffel built the tower")
        # [SVOTriplet(subject='eiffel', verb='built', object='tower')]
    """

    def __init__(self, tokenizer: Tokenizer, verbs: Optional[Iterable[str]] = None):
        self.tokenizer = tokenizer
        self.verbs: FrozenSet[str] = frozenset(verbs if verbs is not None else COMMON_VERBS)

    def is_verb(self, token: str) -> bool:
        token = token.lower()
        return token in self.verbs or token.endswith(('ed', 'ing'))

    def parse(self, sentence: str) -> List[SVOTriplet]:
        tokens = self.tokenizer.tokenize(sentence)
        if len(tokens) < 3:
            return []

        triplets = []
        for i, token in enumerate(tokens):
            if not self.is_verb(token):
                continue
            subject = self._nearest_content_word(tokens, range(i - 1, -1, -1))
            obj = self._nearest_content_word(tokens, range(i + 1, len(tokens)))
            if subject and obj:
                triplets.append(SVOTriplet(subject, token, obj))
        return triplets

    def _nearest_content_word(self, tokens: List[str], positions: Iterable[int]) -> str:
        for j in positions:
            if not self.tokenizer.is_stop_word(tokens[j]):
                return self.tokenizer.stem(tokens[j])
        return ''

"""
Candidate Extraction
====================

Enumerates answer candidates from a passage and ranks them.

Candidates are every trimmed sentence plus every noun-phrase chunk found
inside a sentence by the enrichment provider. All candidates carry
offsets into the passage; spans seen twice are kept once.
"""

import logging
from typing import List, Optional, Set, Tuple, TYPE_CHECKING

from ..nlp.enrichment import EnrichmentProvider
from ..results import AnswerCandidate, AnswerResult
from .scoring import AnswerScorer

if TYPE_CHECKING:
    from ..lexical import LexicalToolkit
    from ..network import SemanticNetwork
    from ..observability import ReasoningTrace

logger = logging.getLogger(__name__)

Span = Tuple[str, str, int, int]   # (text, sentence, start, end)


class AnswerExtractor:
    """
    Builds, scores and ranks candidate answers.

    Args:
        lexicon: Lexical toolkit for sentence splitting
        enrichment: Noun-phrase chunker
        scorer: Six-factor candidate scorer
    """

    def __init__(self, lexicon: 'LexicalToolkit', enrichment: EnrichmentProvider,
                 scorer: AnswerScorer):
        self.lexicon = lexicon
        self.enrichment = enrichment
        self.scorer = scorer

    def candidate_spans(self, passage: str) -> List[Span]:
        """Sentence and chunk spans in generation order, duplicates removed."""
        spans: List[Span] = []
        seen: Set[Tuple[int, int]] = set()

        def add(text: str, sentence: str, start: int, end: int) -> None:
            if (start, end) in seen or not text.strip():
                return
            seen.add((start, end))
            spans.append((text, sentence, start, end))

        for sentence, s_start, s_end in self.lexicon.sentence_spans(passage):
            add(sentence, sentence, s_start, s_end)
            cursor = 0
            for phrase in self.enrichment.extract_noun_phrases(sentence):
                offset = sentence.find(phrase, cursor)
                if offset < 0:
                    offset = sentence.find(phrase)
                    if offset < 0:
                        continue
                else:
                    cursor = offset + len(phrase)
                start = s_start + offset
                add(phrase, sentence, start, start + len(phrase))
        return spans

    def rank(self, passage: str, question: str, network: 'SemanticNetwork',
             trace: Optional['ReasoningTrace'] = None) -> List[AnswerCandidate]:
        """
        Score every candidate and sort by final score, best first.

        The sort is stable so ties keep generation order.
        """
        profile = self.scorer.profile(question, network)
        candidates = []
        for text, sentence, start, end in self.candidate_spans(passage):
            scores = self.scorer.score(text, profile, network)
            candidates.append(AnswerCandidate(
                text=text,
                sentence=sentence,
                start=start,
                end=end,
                scores=scores,
                final_score=self.scorer.final_score(scores),
            ))
        candidates.sort(key=lambda c: c.final_score, reverse=True)

        logger.debug(f"Scored {len(candidates)} candidates")
        if trace is not None:
            trace.log(f"Scored {len(candidates)} candidates")
            for candidate in candidates[:3]:
                trace.log(f"  {candidate.final_score:.3f} '{candidate.text}'")
        return candidates

    def extract(self, passage: str, question: str, network: 'SemanticNetwork',
                trace: Optional['ReasoningTrace'] = None) -> AnswerResult:
        """Best candidate as an AnswerResult, or no_answer when there is none."""
        candidates = self.rank(passage, question, network, trace)
        if not candidates:
            return AnswerResult.no_answer(passage)
        return AnswerResult.from_candidate(candidates[0])

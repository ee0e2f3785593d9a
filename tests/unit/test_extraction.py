"""
Unit Tests for Candidate Extraction and Results
===============================================
"""

import pytest

from conceptqa.answering import AnswerExtractor, AnswerScorer
from conceptqa.nlp.enrichment import HeuristicEnrichmentProvider
from conceptqa.observability import ReasoningTrace
from conceptqa.results import AnswerCandidate, AnswerResult, ScoreBreakdown


@pytest.fixture
def extractor(lexicon, config):
    enrichment = HeuristicEnrichmentProvider(lexicon.tokenizer)
    return AnswerExtractor(lexicon, enrichment, AnswerScorer(lexicon, config))


@pytest.fixture
def activated(cat_network):
    cat_network.set_activation(cat_network.node_id('cat'), 0.8)
    cat_network.set_activation(cat_network.node_id('sat'), 0.4)
    return cat_network


class TestCandidateSpans:

    def test_sentences_then_chunks(self, extractor, cat_passage):
        spans = extractor.candidate_spans(cat_passage)
        assert [text for text, _, _, _ in spans] == [
            'The cat sat on the mat.', 'cat sat', 'mat',
            'The dog ran fast.', 'dog ran fast',
        ]

    def test_offsets_index_the_passage(self, extractor, cat_passage):
        for text, sentence, start, end in extractor.candidate_spans(cat_passage):
            assert cat_passage[start:end] == text
            assert text in sentence

    def test_repeated_phrase_gets_its_own_offset(self, extractor):
        passage = "big cats, big cats."
        spans = extractor.candidate_spans(passage)
        chunk_starts = [start for text, _, start, _ in spans if text == 'big cats']
        assert chunk_starts == [0, 10]

    def test_empty_passage(self, extractor):
        assert extractor.candidate_spans('') == []


class TestRanking:

    def test_best_candidate_is_the_cat_sentence(self, extractor, activated, cat_passage):
        ranked = extractor.rank(cat_passage, "What did the cat do?", activated)
        assert ranked[0].text == 'The cat sat on the mat.'
        assert ranked[0].start == 0 and ranked[0].end == 23
        scores = [c.final_score for c in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_extract_returns_result(self, extractor, activated, cat_passage):
        trace = ReasoningTrace()
        result = extractor.extract(cat_passage, "What did the cat do?", activated, trace)
        assert result.answer == 'The cat sat on the mat.'
        assert result.context == 'The cat sat on the mat.'
        assert result.is_valid
        assert result.confidence > 0.85
        assert 'Scored 5 candidates' in trace.entries

    def test_no_candidates(self, extractor, network):
        network.build('')
        result = extractor.extract('', "Anything?", network)
        assert result == AnswerResult.no_answer('')


class TestResults:

    def test_score_breakdown_final(self):
        scores = ScoreBreakdown(1.0, 1.0, 0.5, 0.4, 1.0, 1.0)
        assert scores.final() == pytest.approx(0.895)
        assert scores.to_dict()['relevance'] == 0.5

    def test_no_answer(self):
        result = AnswerResult.no_answer("Some passage")
        assert not result.is_valid
        assert (result.start, result.end, result.confidence) == (-1, -1, 0.0)
        assert result.context == "Some passage"

    @pytest.mark.parametrize("confidence,valid", [(0.15, True), (0.149, False), (0.9, True)])
    def test_validity_threshold(self, confidence, valid):
        assert AnswerResult('x', 'x', 0, 1, confidence).is_valid is valid

    def test_empty_answer_is_invalid(self):
        assert not AnswerResult('', 'ctx', 0, 0, 0.9).is_valid

    def test_validity_at_custom_threshold(self):
        result = AnswerResult('x', 'x', 0, 1, 0.25)
        assert result.is_valid_at(0.2)
        assert not result.is_valid_at(0.3)
        assert not AnswerResult('', 'ctx', 0, 0, 0.9).is_valid_at(0.0)

    def test_from_candidate(self):
        scores = ScoreBreakdown(1.0, 1.0, 1.0, 1.0, 1.0, 1.0)
        candidate = AnswerCandidate('cat', 'The cat.', 4, 7, scores, 1.0)
        result = AnswerResult.from_candidate(candidate)
        assert (result.answer, result.context, result.start, result.end) == ('cat', 'The cat.', 4, 7)

    def test_format_list_answer(self):
        result = AnswerResult('red, green and blue', '', 0, 19, 0.5)
        assert result.format_answer("What are the primary colors?") == "- red\n- green\n- blue\n"
        assert result.format_answer("Which color?") == 'red, green and blue'

    def test_dict_round_trip(self):
        result = AnswerResult('cat', 'The cat.', 4, 7, 0.5)
        assert AnswerResult.from_dict(result.to_dict()) == result

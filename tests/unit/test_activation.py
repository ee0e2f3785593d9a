"""
Unit Tests for Spreading Activation
===================================
"""

import pytest

from conceptqa import ConceptualKnowledgeBase, ReasonerConfig, SemanticNetwork
from conceptqa.activation import SpreadingActivator, role_edge_weights
from conceptqa.network import EdgeKind
from conceptqa.observability import ReasoningTrace


def make(lexicon, passage, **overrides):
    config = ReasonerConfig(**overrides)
    network = SemanticNetwork(lexicon, config)
    network.build(passage)
    return network, SpreadingActivator(network, lexicon, config)


class TestSeeding:

    def test_seed_gets_initial_activation(self, lexicon):
        network, activator = make(lexicon, "cat sat", max_iterations=0)
        report = activator.activate(['cat'])
        assert network.activation_of('cat') == pytest.approx(0.8)
        assert report.seeds == ['cat']
        assert report.rounds == 0

    def test_negated_seed_is_dampened(self, lexicon):
        network, activator = make(lexicon, "not cat", max_iterations=0)
        activator.activate(['cat'])
        assert network.activation_of('cat') == pytest.approx(0.8 * 0.3)

    def test_unknown_and_duplicate_seeds_ignored(self, lexicon):
        network, activator = make(lexicon, "cat sat")
        report = activator.activate(['zebra', 'cat', 'cat'])
        assert report.seeds == ['cat']

    def test_no_seeds(self, lexicon):
        network, activator = make(lexicon, "cat sat")
        report = activator.activate(['zebra'])
        assert report.rounds == 0
        assert report.reached == 0

    def test_activate_resets_previous_run(self, lexicon):
        network, activator = make(lexicon, "cat sat", max_iterations=0)
        activator.activate(['cat'])
        activator.activate(['sat'])
        assert network.activation_of('cat') == 0.0


class TestSpreading:

    def test_one_round(self, lexicon):
        network, activator = make(lexicon, "cat sat", max_iterations=1)
        report = activator.activate(['cat'])
        assert network.activation_of('sat') == pytest.approx(0.8 * 0.5)
        # Source decays after spreading
        assert network.activation_of('cat') == pytest.approx(0.8 - 0.1)
        assert report.rounds == 1
        assert report.reached == 2

    def test_negated_target_is_dampened(self, lexicon):
        network, activator = make(lexicon, "dog will bark", max_iterations=1)
        activator.activate(['dog'])
        assert network.activation_of('bark') == pytest.approx(0.4)

        network, activator = make(lexicon, "dog not bark", max_iterations=1)
        activator.activate(['dog'])
        # 0.8 * 0.15 * 0.3 falls under the threshold
        assert network.activation_of('bark') == 0.0

    def test_sentiment_agreement(self, lexicon):
        network, activator = make(lexicon, "cat good", max_iterations=1)
        activator.activate(['cat'], question_sentiment=1)
        assert network.activation_of('good') == pytest.approx(0.4 * 1.1)
        activator.activate(['cat'], question_sentiment=-1)
        assert network.activation_of('good') == pytest.approx(0.4 * 0.9)
        activator.activate(['cat'])
        assert network.activation_of('good') == pytest.approx(0.4)

    def test_temporal_overlap_boost(self, lexicon):
        network, activator = make(lexicon, "2024 june", max_iterations=1)
        activator.activate(['2024'])
        assert network.activation_of(lexicon.stem('june')) == pytest.approx(0.4 * 1.1)

    def test_relations_carry_activation(self, lexicon, config):
        network = SemanticNetwork(lexicon, config)
        network.build("The cat is an animal")
        ConceptualKnowledgeBase(lexicon).integrate_into(network)
        activator = SpreadingActivator(network, lexicon, ReasonerConfig(max_iterations=1))
        activator.activate(['cat'])
        # Reinforced co-occurrence edge plus the IS_A relation
        expected = 0.8 * 0.6 + 0.8 * 0.95 * 0.2
        assert network.activation_of(lexicon.stem('animal')) == pytest.approx(expected)

    def test_terminates_on_cycles(self, lexicon):
        network, activator = make(lexicon, "cat sat cat sat")
        report = activator.activate(['cat'])
        assert report.rounds <= 15
        assert all(0.0 <= a <= 1.0 for a in network.activation)

    def test_cycle_flags_cleared(self, lexicon):
        network, activator = make(lexicon, "The cat sat on the mat")
        activator.activate(['cat'])
        assert not any(network.activated_this_cycle)

    def test_trace_records_seeds(self, lexicon):
        network, activator = make(lexicon, "cat sat", max_iterations=1)
        trace = ReasoningTrace()
        activator.activate(['cat'], trace=trace)
        assert any("Seed 'cat'" in entry for entry in trace.entries)


class TestParameters:

    def test_threshold_validation(self, lexicon):
        _, activator = make(lexicon, "cat")
        activator.activation_threshold = 0.2
        assert activator.activation_threshold == 0.2
        with pytest.raises(ValueError):
            activator.activation_threshold = 1.5

    def test_max_iterations_validation(self, lexicon):
        _, activator = make(lexicon, "cat")
        with pytest.raises(ValueError):
            activator.max_iterations = -1

    def test_role_weights_cover_every_kind(self):
        weights = role_edge_weights()
        assert set(weights) == set(EdgeKind)
        assert weights[EdgeKind.CO_OCCURRENCE] == 1.0

"""
Unit Tests for Rules and the Conceptual Knowledge Base
======================================================
"""

import pytest

from conceptqa import ReasonerConfig, SemanticNetwork
from conceptqa.knowledge import (
    ConceptRelation,
    ConceptualKnowledgeBase,
    RelationType,
    Rule,
    RuleEngine,
)
from conceptqa.observability import ReasoningTrace


# =============================================================================
# RULES
# =============================================================================


class TestRule:

    def test_normalizes_concepts(self):
        rule = Rule([' Fast ', 'vehicl'], ' SPE ', 0.8)
        assert rule.conditions == frozenset({'fast', 'vehicl'})
        assert rule.consequence == 'spe'
        assert rule.description == 'Unnamed Rule'

    @pytest.mark.parametrize("conditions,consequence,confidence", [
        ([], 'x', 0.5),
        (['a', ' '], 'x', 0.5),
        (['a'], '', 0.5),
        (['a'], 'x', 1.5),
    ])
    def test_rejects_malformed(self, conditions, consequence, confidence):
        with pytest.raises(ValueError):
            Rule(conditions, consequence, confidence)

    def test_confidence_setter_clamps_with_warning(self):
        rule = Rule(['a'], 'b', 0.5, 'test')
        with pytest.warns(RuntimeWarning):
            rule.confidence = 1.4
        assert rule.confidence == 1.0

    def test_identity_ignores_confidence_and_order(self):
        assert Rule(['a', 'b'], 'c', 0.2) == Rule(['b', 'a'], 'c', 0.9)
        assert Rule(['a'], 'c', 0.2) != Rule(['a'], 'd', 0.2)

    def test_dict_round_trip(self):
        rule = Rule(['a', 'b'], 'c', 0.5, 'Test rule')
        assert Rule.from_dict(rule.to_dict()).to_dict() == rule.to_dict()


class TestRuleEngine:

    def test_defaults_are_stemmed(self, lexicon):
        engine = RuleEngine(lexicon)
        assert len(engine) == 3
        first = engine.rules[0]
        assert first.conditions == frozenset({lexicon.stem('fast'), lexicon.stem('vehicle')})
        assert first.consequence == lexicon.stem('speed')

    def test_duplicates_rejected(self, lexicon):
        engine = RuleEngine(lexicon)
        assert engine.add_rule(Rule(['x'], 'y', 0.5))
        assert not engine.add_rule(Rule(['x'], 'y', 0.9))
        assert len(engine) == 4

    def test_remove_and_reset(self, lexicon):
        engine = RuleEngine(lexicon)
        assert engine.remove_rule(['fast', lexicon.stem('vehicle')], lexicon.stem('speed'))
        assert not engine.remove_rule(['fast'], 'nothing')
        assert len(engine) == 2
        engine.reset_to_defaults()
        assert len(engine) == 3

    def test_rules_property_is_a_copy(self, lexicon):
        engine = RuleEngine(lexicon)
        engine.rules.clear()
        assert len(engine) == 3

    @pytest.mark.parametrize("threshold", [-0.1, 1.5, 'high'])
    def test_rejects_bad_threshold(self, lexicon, threshold):
        with pytest.raises(ValueError, match='activation_threshold'):
            RuleEngine(lexicon, activation_threshold=threshold)

    def test_rule_fires_on_active_conditions(self, lexicon, network):
        network.build("The fast red vehicle showed speed.")
        engine = RuleEngine(lexicon)
        network.set_activation(network.node_id('fast'), 0.6)
        network.set_activation(network.node_id(lexicon.stem('vehicle')), 0.4)
        trace = ReasoningTrace()
        firings = engine.evaluate(network, trace)
        assert len(firings) == 1
        assert firings[0].amount == pytest.approx(0.4 * 0.8)
        assert network.activation_of(lexicon.stem('speed')) == pytest.approx(0.32)
        assert any('Rule fired' in entry for entry in trace.entries)

    def test_rule_needs_every_condition(self, lexicon, network):
        network.build("The fast vehicle showed speed.")
        engine = RuleEngine(lexicon)
        network.set_activation(network.node_id('fast'), 0.6)
        assert engine.evaluate(network) == []

    def test_rule_respects_threshold(self, lexicon, network):
        network.build("The fast vehicle showed speed.")
        engine = RuleEngine(lexicon, activation_threshold=0.5)
        network.set_activation(network.node_id('fast'), 0.6)
        network.set_activation(network.node_id(lexicon.stem('vehicle')), 0.4)
        assert engine.evaluate(network) == []

    def test_missing_consequence_is_traced(self, lexicon, network):
        network.build("The fast vehicle.")
        engine = RuleEngine(lexicon)
        network.set_activation(network.node_id('fast'), 0.6)
        network.set_activation(network.node_id(lexicon.stem('vehicle')), 0.6)
        trace = ReasoningTrace()
        assert engine.evaluate(network, trace) == []
        assert any('not in the passage' in entry for entry in trace.entries)

    def test_rules_are_not_consumed(self, lexicon, network):
        network.build("The fast vehicle showed speed.")
        engine = RuleEngine(lexicon)
        for _ in range(2):
            network.reset_activations()
            network.set_activation(network.node_id('fast'), 0.5)
            network.set_activation(network.node_id(lexicon.stem('vehicle')), 0.5)
            assert len(engine.evaluate(network)) == 1


# =============================================================================
# ONTOLOGY
# =============================================================================


class TestConceptRelation:

    @pytest.mark.parametrize("value", [RelationType.IS_A, 'IS_A', 'is_a', 'is-a'])
    def test_relation_type_parsing(self, value):
        assert RelationType.parse(value) is RelationType.IS_A

    def test_unknown_type(self):
        with pytest.raises(ValueError, match='Unknown relation type'):
            ConceptRelation('a', 'b', 'friend_of', 0.5)

    def test_rejects_bad_strength(self):
        with pytest.raises(ValueError):
            ConceptRelation('a', 'b', 'IS_A', 1.2)

    def test_other_end(self):
        relation = ConceptRelation('cat', 'anim', 'IS_A', 0.9)
        assert relation.other_end('cat') == 'anim'
        assert relation.other_end('anim') == 'cat'
        assert relation.other_end('dog') is None

    def test_identity_ignores_strength(self):
        assert ConceptRelation('a', 'b', 'IS_A', 0.1) == ConceptRelation('a', 'b', 'is_a', 0.9)


class TestConceptualKnowledgeBase:

    def test_defaults(self, lexicon):
        kb = ConceptualKnowledgeBase(lexicon)
        assert len(kb) == 15
        assert kb.relations_for('cat')[0].target == lexicon.stem('animal')

    def test_duplicate_relation_rejected(self, lexicon):
        kb = ConceptualKnowledgeBase(lexicon)
        assert not kb.add_relation(kb.make_relation('cat', 'animal', 'IS_A', 0.5))
        assert kb.add_relation(kb.make_relation('cat', 'pet', 'IS_A', 0.5))

    def test_remove_stems_inputs(self, lexicon):
        kb = ConceptualKnowledgeBase(lexicon)
        assert kb.remove_relation('cats', 'animals', 'IS_A')
        assert not kb.remove_relation('cats', 'animals', 'IS_A')
        assert not kb.remove_relation('', 'animals', 'IS_A')
        assert len(kb) == 14

    def test_integrate_links_both_endpoints(self, lexicon, network):
        network.build("The cat is an animal")
        kb = ConceptualKnowledgeBase(lexicon)
        animal = lexicon.stem('animal')
        before = network.edge_weight('cat', animal)
        attached = kb.integrate_into(network)
        assert attached >= 1
        assert network.edge_weight('cat', animal) == pytest.approx(before + 0.1)
        assert any(r.target == animal for r in network.node('cat').relations)

    def test_integrate_single_endpoint(self, lexicon, network):
        network.build("A cat.")
        kb = ConceptualKnowledgeBase(lexicon)
        assert kb.integrate_into(network) == 1
        assert len(network.node('cat').relations) == 1
        assert network.edge_count == 2

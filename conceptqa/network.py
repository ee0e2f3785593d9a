"""
Semantic Network
================

Weighted concept graph built from one passage.

Nodes live in an arena: each distinct stem gets an integer id, and node
state is held in parallel lists indexed by that id (activation, cycle
flag, negation, decay, temporal tags, attached relations). Edges are
stored per source id and keyed by (target id, kind), so an edge between
the same pair of concepts is strengthened rather than duplicated.

Construction steps:
    1. one node per first-seen stem, in reading order
    2. negation scopes: a negation word negates the next few tokens, up
       to sentence punctuation
    3. co-occurrence edges within a forward window, in both directions
    4. temporal tags per token
    5. optional typed edges from subject-verb-object triplets
Ontology relations are attached afterwards by the knowledge base.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union, TYPE_CHECKING

from .config import ReasonerConfig
from .constants import SCOPE_BREAK_PUNCTUATION
from .nlp.syntax import SyntacticParser
from .nlp.temporal import TemporalInfo
from .validation import validate_params, validate_unit_interval

if TYPE_CHECKING:
    from .knowledge.ontology import ConceptRelation
    from .lexical import LexicalToolkit
    from .observability import ReasoningTrace

logger = logging.getLogger(__name__)

NodeRef = Union[int, str]


class EdgeKind(Enum):
    """How two concepts came to be linked."""
    CO_OCCURRENCE = 'co_occurrence'
    SUBJECT = 'subject'
    ACTION = 'action'
    OBJECT = 'object'


@dataclass
class ConceptEdge:
    """
    Directed weighted edge between two node ids.

    Attributes:
        source: Source node id
        target: Target node id
        weight: Accumulated strength, unbounded above
        kind: Edge kind
        negated: True if either endpoint was negated when last reinforced
    """
    source: int
    target: int
    weight: float
    kind: EdgeKind = EdgeKind.CO_OCCURRENCE
    negated: bool = False


@dataclass(frozen=True)
class ConceptNode:
    """Read-only snapshot of one node's state."""
    node_id: int
    name: str
    activation: float
    negated: bool
    decay_rate: float
    activated_this_cycle: bool = False
    temporal_tags: Tuple[TemporalInfo, ...] = field(default_factory=tuple)
    relations: Tuple['ConceptRelation', ...] = field(default_factory=tuple)


class SemanticNetwork:
    """
    Arena-backed concept graph for a single passage.

    Attributes:
        names: Concept name (stem) per node id
        activation: Activation per node id, always within [0, 1]
        activated_this_cycle: Queue flag per node id used by the activator
        negated: Negation flag per node id
        decay: Decay rate per node id
        temporal_tags: Ordered temporal tags per node id
        relations: Attached ontology relations per node id
        passage: Text the network was last built from

    Example:
        network = SemanticNetwork(LexicalToolkit(), ReasonerConfig())
        network.build("The dog did not bark.")
        network.node('bark').negated   # True
    """

    def __init__(self, lexicon: 'LexicalToolkit', config: Optional[ReasonerConfig] = None):
        self.lexicon = lexicon
        self.config = config or ReasonerConfig()
        self.decay_rate = self.config.decay_rate
        self.passage: Optional[str] = None
        self._clear()

    def _clear(self) -> None:
        self.names: List[str] = []
        self._ids: Dict[str, int] = {}
        self.activation: List[float] = []
        self.activated_this_cycle: List[bool] = []
        self.negated: List[bool] = []
        self.decay: List[float] = []
        self.temporal_tags: List[List[TemporalInfo]] = []
        self.relations: List[List['ConceptRelation']] = []
        self._edges: List[Dict[Tuple[int, EdgeKind], ConceptEdge]] = []

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def build(self, passage: str, trace: Optional['ReasoningTrace'] = None) -> None:
        """
        Discard the current graph and build a new one from passage.

        Args:
            passage: Source text
            trace: Optional reasoning trace for build events
        """
        self._clear()
        self.passage = passage
        tokens = self.lexicon.tokenize_with_spans(passage or '')
        token_ids = [self._get_or_create(self.lexicon.stem(t.text)) for t in tokens]

        # Negation scopes
        scope = self.config.negation_scope
        for i, token in enumerate(tokens):
            if not self.lexicon.is_negation_word(token.text):
                continue
            self.negated[token_ids[i]] = True
            for j in range(i + 1, min(i + 1 + scope, len(tokens))):
                between = passage[tokens[j - 1].end:tokens[j].start]
                if any(ch in SCOPE_BREAK_PUNCTUATION for ch in between):
                    break
                self.negated[token_ids[j]] = True

        # Co-occurrence edges
        window = self.config.cooccurrence_window
        for i in range(len(tokens)):
            for j in range(i + 1, min(i + window, len(tokens))):
                a, b = token_ids[i], token_ids[j]
                if a == b:
                    continue
                is_negated = self.negated[a] or self.negated[b]
                self.add_cooccurrence(a, b, negated=is_negated)
                self.add_cooccurrence(b, a, negated=is_negated)

        # Temporal tags
        for token, node_id in zip(tokens, token_ids):
            info = self.lexicon.extract_temporal_info(passage[token.start:token.end])
            if info is not None and info not in self.temporal_tags[node_id]:
                self.temporal_tags[node_id].append(info)

        if self.config.use_syntactic_edges:
            self._add_syntactic_edges(passage)

        logger.info(f"Built semantic network: {self.node_count} nodes, {self.edge_count} edges")
        if trace is not None:
            trace.log(f"Built network with {self.node_count} concepts and "
                      f"{self.edge_count} edges")

    def rebuild_if_changed(self, passage: str, trace: Optional['ReasoningTrace'] = None) -> bool:
        """
        Rebuild only when passage differs from the last one built.

        Returns:
            True if the graph was rebuilt, False if it was reused (in which
            case activations and cycle flags are reset)
        """
        if self.passage is not None and passage == self.passage:
            self.reset_activations()
            if trace is not None:
                trace.log("Reusing network for unchanged passage")
            return False
        self.build(passage, trace)
        return True

    def invalidate(self) -> None:
        """Force the next ``rebuild_if_changed`` to rebuild."""
        self.passage = None

    def _get_or_create(self, name: str) -> int:
        node_id = self._ids.get(name)
        if node_id is not None:
            return node_id
        node_id = len(self.names)
        self._ids[name] = node_id
        self.names.append(name)
        self.activation.append(0.0)
        self.activated_this_cycle.append(False)
        self.negated.append(False)
        self.decay.append(self.decay_rate)
        self.temporal_tags.append([])
        self.relations.append([])
        self._edges.append({})
        return node_id

    def _add_syntactic_edges(self, passage: str) -> None:
        parser = SyntacticParser(self.lexicon.tokenizer)
        for sentence in self.lexicon.split_sentences(passage):
            for triplet in parser.parse(sentence):
                subject = self._ids.get(triplet.subject)
                verb = self._ids.get(self.lexicon.stem(triplet.verb))
                obj = self._ids.get(triplet.object)
                for a, b, kind in ((subject, verb, EdgeKind.SUBJECT),
                                   (verb, obj, EdgeKind.OBJECT),
                                   (subject, obj, EdgeKind.ACTION)):
                    if a is None or b is None or a == b:
                        continue
                    is_negated = self.negated[a] or self.negated[b]
                    self.add_edge(a, b, kind, negated=is_negated)
                    self.add_edge(b, a, kind, negated=is_negated)

    def add_edge(self, source: int, target: int, kind: EdgeKind = EdgeKind.CO_OCCURRENCE,
                 negated: bool = False) -> ConceptEdge:
        """
        Create an edge or strengthen the existing one.

        New edges start at ``initial_edge_weight``; repeats add
        ``edge_reinforcement``. For negated edges the base weight and each
        increment are scaled by ``1 - negation_effect``. Weights accumulate
        without an upper bound.
        """
        factor = (1.0 - self.config.negation_effect) if negated else 1.0
        key = (target, kind)
        edge = self._edges[source].get(key)
        if edge is None:
            edge = ConceptEdge(source, target, self.config.initial_edge_weight * factor,
                               kind, negated)
            self._edges[source][key] = edge
        else:
            edge.weight += self.config.edge_reinforcement * factor
            edge.negated = edge.negated or negated
        return edge

    def add_cooccurrence(self, source: int, target: int, negated: bool = False) -> ConceptEdge:
        return self.add_edge(source, target, EdgeKind.CO_OCCURRENCE, negated)

    def attach_relation(self, node_id: int, relation: 'ConceptRelation') -> None:
        if relation not in self.relations[node_id]:
            self.relations[node_id].append(relation)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def node_id(self, name: str) -> Optional[int]:
        return self._ids.get(name)

    def _resolve(self, ref: NodeRef) -> Optional[int]:
        if isinstance(ref, int):
            return ref if 0 <= ref < len(self.names) else None
        return self._ids.get(ref)

    def __contains__(self, name: str) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return len(self.names)

    @property
    def node_count(self) -> int:
        return len(self.names)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._edges)

    def node(self, ref: NodeRef) -> Optional[ConceptNode]:
        """Snapshot of a node by id or name, or None if absent."""
        node_id = self._resolve(ref)
        if node_id is None:
            return None
        return ConceptNode(
            node_id=node_id,
            name=self.names[node_id],
            activation=self.activation[node_id],
            negated=self.negated[node_id],
            decay_rate=self.decay[node_id],
            activated_this_cycle=self.activated_this_cycle[node_id],
            temporal_tags=tuple(self.temporal_tags[node_id]),
            relations=tuple(self.relations[node_id]),
        )

    def nodes(self) -> List[ConceptNode]:
        return [self.node(i) for i in range(len(self.names))]

    def edges_from(self, ref: NodeRef) -> List[ConceptEdge]:
        """Outgoing edges in creation order."""
        node_id = self._resolve(ref)
        if node_id is None:
            return []
        return list(self._edges[node_id].values())

    def edges(self) -> List[ConceptEdge]:
        return [edge for edges in self._edges for edge in edges.values()]

    def edge_weight(self, source: str, target: str,
                    kind: EdgeKind = EdgeKind.CO_OCCURRENCE) -> float:
        """Weight of the edge source -> target, or 0.0 when there is none."""
        a, b = self._ids.get(source), self._ids.get(target)
        if a is None or b is None:
            return 0.0
        edge = self._edges[a].get((b, kind))
        return edge.weight if edge is not None else 0.0

    def activation_of(self, name: str) -> float:
        node_id = self._ids.get(name)
        return self.activation[node_id] if node_id is not None else 0.0

    def signature(self) -> Tuple[tuple, tuple]:
        """Deterministic (nodes, edges) snapshot used for equality checks."""
        nodes = tuple((name, self.negated[i], tuple(t.raw_expression for t in self.temporal_tags[i]))
                      for i, name in enumerate(self.names))
        edges = tuple((self.names[e.source], self.names[e.target], e.kind.name, e.weight)
                      for e in self.edges())
        return nodes, edges

    # -------------------------------------------------------------------------
    # Activation state
    # -------------------------------------------------------------------------

    def set_activation(self, node_id: int, value: float) -> None:
        self.activation[node_id] = max(0.0, min(1.0, value))

    def increase_activation(self, node_id: int, amount: float) -> float:
        """Add amount, clamped to [0, 1]. Returns the new activation."""
        self.set_activation(node_id, self.activation[node_id] + amount)
        return self.activation[node_id]

    def apply_decay(self, node_id: int) -> float:
        """Subtract the node's decay rate, floored at 0. Returns the new activation."""
        self.activation[node_id] = max(0.0, self.activation[node_id] - self.decay[node_id])
        return self.activation[node_id]

    def clear_cycle_flags(self) -> None:
        self.activated_this_cycle = [False] * len(self.names)

    def reset_activations(self) -> None:
        self.activation = [0.0] * len(self.names)
        self.clear_cycle_flags()

    @validate_params(rate=lambda r: validate_unit_interval(r, 'decay_rate'))
    def set_decay_rate(self, rate: float) -> None:
        """Set the decay rate for the network and every node."""
        self.decay_rate = rate
        self.decay = [rate] * len(self.names)

    def activated_nodes(self, minimum: float = 0.0) -> List[Tuple[str, float]]:
        """(name, activation) pairs above minimum, strongest first."""
        pairs = [(name, self.activation[i]) for i, name in enumerate(self.names)
                 if self.activation[i] > minimum]
        return sorted(pairs, key=lambda p: (-p[1], p[0]))

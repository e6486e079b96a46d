"""
LFR Benchmark Generator
=======================

This module implements the Lancichinetti-Fortunato-Radicchi (LFR)
benchmark generator. It produces networks with power-law degree and
community-size distributions and a mixing parameter ``mu`` that sets
the fraction of each node's edges leaving its community.

Pipeline (single-threaded, deterministic for a given seed):

1. Degree sequence: power-law draws (tau1), gently rescaled toward
   the requested average degree
2. Community sizes: power-law draws (tau2) until all nodes are covered
3. Assignment: shuffled node ids split into communities
4. Edges: greedy max-deficit-first wiring honouring ``mu``

References
----------
.. [1] A. Lancichinetti, S. Fortunato, F. Radicchi, "Benchmark graphs for
   testing community detection algorithms", Phys. Rev. E 78, 046110 (2008)
"""

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Set, Tuple

import networkx as nx
import numpy as np
from numpy.typing import NDArray

from ..config import (
    DEFAULT_MAX_COMMUNITY,
    DEFAULT_MIN_COMMUNITY,
    DEFAULT_MU,
    DEFAULT_TAU1,
    DEFAULT_TAU2,
    DEGREE_CORRECTION_BOUNDS,
    DEGREE_CORRECTION_THRESHOLD,
    ITERATION_FACTOR,
    MIN_NODES,
)
from ..metrics.quality import compute_modularity
from .assignment import assign_nodes_to_communities
from .community_sizes import build_community_sizes
from .degree_sequence import build_degree_sequence
from .edges import EdgeConstructionStats, EdgeConstructor
from .host import HostGraph
from .parameters import GenerationError, GeneratorStateError, LFRParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _GenerationState:
    """Everything one ``create_network`` call produced. Never mutated."""

    nodes: Tuple[Hashable, ...]
    node_index: Dict[Hashable, int]
    degree_sequence: NDArray[np.int64]
    community_sizes: Tuple[int, ...]
    communities: Tuple[Tuple[int, ...], ...]
    membership: NDArray[np.int64]
    directed: bool
    stats: EdgeConstructionStats


class LFRNetworkGenerator:
    """
    Generate LFR benchmark networks on a caller-supplied graph.

    Parameters
    ----------
    tau1 : float
        Power-law exponent for the degree distribution (> 1)
    tau2 : float
        Power-law exponent for the community size distribution (> 1)
    mu : float
        Mixing parameter in [0, 1]
    min_degree, max_degree : int
        Degree bounds (1 <= min_degree <= max_degree)
    average_degree : float, optional
        Target average degree in [min_degree, max_degree]
        (default: midpoint of the degree range)
    min_community, max_community : int, optional
        Community size bounds (default: 10, 50)
    symmetrical : bool, optional
        For directed graphs, mirror every edge (default: False)
    seed : int, optional
        Random seed. When given, every ``create_network`` call restarts
        from it and reproduces the same network.
    correction_threshold : float, optional
        Relative mean-degree deviation that triggers rescaling (default: 0.15)
    correction_bounds : tuple of float, optional
        Clamp for the rescale factor (default: (0.8, 1.3))
    iteration_factor : int, optional
        Edge construction runs at most ``iteration_factor * target_edges``
        rounds (default: 3)

    Raises
    ------
    LFRParameterError
        If any parameter violates its constraint

    Examples
    --------
    >>> G = nx.empty_graph(200)
    >>> gen = LFRNetworkGenerator(2.5, 1.5, 0.2, 5, 20, 10.0, seed=42)
    >>> G = gen.create_network(G)
    >>> sum(len(c) for c in gen.communities)
    200
    """

    def __init__(
        self,
        tau1: float,
        tau2: float,
        mu: float,
        min_degree: int,
        max_degree: int,
        average_degree: Optional[float] = None,
        min_community: int = DEFAULT_MIN_COMMUNITY,
        max_community: int = DEFAULT_MAX_COMMUNITY,
        symmetrical: bool = False,
        seed: Optional[int] = None,
        correction_threshold: float = DEGREE_CORRECTION_THRESHOLD,
        correction_bounds: Tuple[float, float] = DEGREE_CORRECTION_BOUNDS,
        iteration_factor: int = ITERATION_FACTOR,
    ):
        self.params = LFRParameters(
            tau1=tau1,
            tau2=tau2,
            mu=mu,
            min_degree=min_degree,
            max_degree=max_degree,
            average_degree=average_degree,
            min_community=min_community,
            max_community=max_community,
            symmetrical=symmetrical,
            correction_threshold=correction_threshold,
            correction_bounds=correction_bounds,
            iteration_factor=iteration_factor,
        )
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self._state: Optional[_GenerationState] = None

    @classmethod
    def from_params(
        cls,
        params: LFRParameters,
        seed: Optional[int] = None,
    ) -> "LFRNetworkGenerator":
        """Build a generator from an existing parameter set."""
        return cls(seed=seed, **params.to_dict())

    def create_network(self, graph: HostGraph) -> HostGraph:
        """
        Wire ``graph`` into an LFR network.

        Parameters
        ----------
        graph : HostGraph
            Graph holding the nodes to connect (e.g. ``nx.Graph`` or
            ``nx.DiGraph``). Edges are added in place.

        Returns
        -------
        HostGraph
            The same graph object

        Raises
        ------
        GenerationError
            If the graph has fewer than 10 nodes or the average degree is
            not below the node count. Raised before any sampling.
        """
        params = self.params
        num_nodes = graph.number_of_nodes()

        if num_nodes < MIN_NODES:
            raise GenerationError(
                f"Number of nodes must be at least {MIN_NODES}, got {num_nodes}"
            )
        if params.average_degree >= num_nodes:
            raise GenerationError(
                f"Average degree ({params.average_degree}) must be less than "
                f"number of nodes ({num_nodes})"
            )

        if self.seed is not None:
            self._rng = np.random.default_rng(self.seed)
        rng = self._rng

        directed = graph.is_directed()
        nodes = tuple(graph.nodes())

        logger.info(
            f"Generating LFR: n={num_nodes}, tau1={params.tau1}, tau2={params.tau2}, "
            f"mu={params.mu}, avg_deg={params.average_degree}, "
            f"deg=[{params.min_degree}, {params.max_degree}], "
            f"comm=[{params.min_community}, {params.max_community}], directed={directed}"
        )

        degrees = build_degree_sequence(
            num_nodes,
            directed,
            params.tau1,
            params.min_degree,
            params.max_degree,
            params.average_degree,
            rng,
            correction_threshold=params.correction_threshold,
            correction_bounds=params.correction_bounds,
        )
        degrees.setflags(write=False)

        sizes = build_community_sizes(
            num_nodes, params.tau2, params.min_community, params.max_community, rng
        )
        communities, membership = assign_nodes_to_communities(num_nodes, sizes, rng)
        membership.setflags(write=False)

        stats = EdgeConstructor(
            graph,
            nodes,
            degrees,
            communities,
            membership,
            params.mu,
            rng,
            symmetrical=params.symmetrical,
            iteration_factor=params.iteration_factor,
        ).run()

        self._state = _GenerationState(
            nodes=nodes,
            node_index={node: i for i, node in enumerate(nodes)},
            degree_sequence=degrees,
            community_sizes=tuple(sizes),
            communities=tuple(tuple(c) for c in communities),
            membership=membership,
            directed=directed,
            stats=stats,
        )

        logger.info(
            f"Generated LFR with {num_nodes} nodes, {stats.edges_created} edges, "
            f"{len(communities)} communities"
        )
        return graph

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------

    def _require_state(self) -> _GenerationState:
        if self._state is None:
            raise GeneratorStateError("No network generated yet; call create_network() first")
        return self._state

    @property
    def is_generated(self) -> bool:
        return self._state is not None

    @property
    def degree_sequence(self) -> NDArray[np.int64]:
        """Target degree per node id (a copy)."""
        return self._require_state().degree_sequence.copy()

    @property
    def community_sizes(self) -> List[int]:
        """Community sizes as generated, before assignment."""
        return list(self._require_state().community_sizes)

    @property
    def communities(self) -> List[List[int]]:
        """Node ids per community, indexed by community id."""
        return [list(c) for c in self._require_state().communities]

    @property
    def node_community_map(self) -> Dict[int, int]:
        """Mapping node id -> community id."""
        return {i: int(c) for i, c in enumerate(self._require_state().membership)}

    @property
    def node_index(self) -> Dict[Hashable, int]:
        """Mapping host node -> node id."""
        return dict(self._require_state().node_index)

    @property
    def nodes(self) -> List[Hashable]:
        """Host nodes in id order."""
        return list(self._require_state().nodes)

    @property
    def construction_stats(self) -> EdgeConstructionStats:
        return self._require_state().stats

    @property
    def directed(self) -> bool:
        return self._require_state().directed

    @property
    def average_degree(self) -> float:
        """Requested average degree."""
        return self.params.average_degree

    @property
    def mu(self) -> float:
        return self.params.mu

    def community_of(self, node: Hashable) -> int:
        """Community id of a host node."""
        state = self._require_state()
        return int(state.membership[state.node_index[node]])

    def node_communities(self) -> Dict[Hashable, int]:
        """Mapping host node -> community id."""
        state = self._require_state()
        return {node: int(state.membership[i]) for i, node in enumerate(state.nodes)}

    def community_node_sets(self) -> List[Set[Hashable]]:
        """Communities as sets of host nodes."""
        state = self._require_state()
        return [{state.nodes[i] for i in comm} for comm in state.communities]

    def actual_average_degree(self, graph: HostGraph) -> float:
        """Mean realized degree of ``graph``."""
        n = graph.number_of_nodes()
        if n == 0:
            return 0.0
        return sum(graph.degree(node) for node in graph.nodes()) / n

    def modularity(self, graph: HostGraph) -> float:
        """Modularity of the planted partition on ``graph``."""
        state = self._require_state()
        return compute_modularity(graph, self.node_communities(), nodelist=list(state.nodes))


def generate_lfr_network(
    n: int = 1000,
    tau1: float = DEFAULT_TAU1,
    tau2: float = DEFAULT_TAU2,
    mu: float = DEFAULT_MU,
    min_degree: int = 5,
    max_degree: Optional[int] = None,
    average_degree: Optional[float] = None,
    min_community: int = DEFAULT_MIN_COMMUNITY,
    max_community: int = DEFAULT_MAX_COMMUNITY,
    directed: bool = False,
    symmetrical: bool = False,
    seed: Optional[int] = None,
) -> Tuple[nx.Graph, List[Set[int]]]:
    """
    Generate an LFR benchmark graph on nodes ``0..n-1``.

    Parameters
    ----------
    n : int, optional
        Number of nodes (default: 1000)
    tau1 : float, optional
        Power-law exponent for degree distribution (default: 2.5)
    tau2 : float, optional
        Power-law exponent for community size distribution (default: 1.5)
    mu : float, optional
        Mixing parameter (default: 0.3)
    min_degree : int, optional
        Minimum node degree (default: 5)
    max_degree : int, optional
        Maximum node degree (default: max(n // 10, 4 * min_degree))
    average_degree : float, optional
        Target average degree (default: midpoint of the degree range)
    min_community, max_community : int, optional
        Community size bounds (default: 10, 50)
    directed : bool, optional
        Build an ``nx.DiGraph`` instead of an ``nx.Graph`` (default: False)
    symmetrical : bool, optional
        Mirror directed edges (default: False)
    seed : int, optional
        Random seed for reproducibility

    Returns
    -------
    Tuple[nx.Graph, List[Set[int]]]
        (graph, communities) where communities is a list of node sets.
        The graph also carries ``G.graph['communities']``,
        ``G.graph['n_communities']``, ``G.graph['params']``,
        ``G.graph['construction']`` and a ``community`` node attribute.

    Examples
    --------
    >>> G, communities = generate_lfr_network(n=100, mu=0.2, min_degree=5,
    ...                                       max_degree=20, average_degree=10,
    ...                                       seed=42)
    >>> G.number_of_nodes()
    100
    """
    if max_degree is None:
        max_degree = max(n // 10, 4 * min_degree)

    generator = LFRNetworkGenerator(
        tau1=tau1,
        tau2=tau2,
        mu=mu,
        min_degree=min_degree,
        max_degree=max_degree,
        average_degree=average_degree,
        min_community=min_community,
        max_community=max_community,
        symmetrical=symmetrical,
        seed=seed,
    )

    G = nx.empty_graph(n, create_using=nx.DiGraph if directed else nx.Graph)
    generator.create_network(G)

    communities = generator.community_node_sets()
    nx.set_node_attributes(G, generator.node_communities(), "community")

    G.graph['communities'] = communities
    G.graph['n_communities'] = len(communities)
    G.graph['params'] = {'n': n, 'seed': seed, 'directed': directed, **generator.params.to_dict()}
    G.graph['construction'] = generator.construction_stats.to_dict()

    return G, communities

"""
Edge Construction
=================

Greedy, configuration-model-style wiring of an LFR network.

Nodes are served highest remaining degree ("deficit") first. Each
served node splits its deficit into ``round((1 - mu) * deficit)``
intra-community stubs and the rest inter-community stubs, and tries
to place them on randomly ordered, unsaturated partners.

Hard guarantees (always hold):
- no self-loops
- no duplicate edges (unordered pair if undirected, ordered if directed)
- no node's tracked degree exceeds its target

Soft targets (approximated, never exceeded):
- total edge count
- per-node degree and intra/inter split

A served node that places no edge at all is retired from the queue,
since its candidate pools can only shrink. Shortfall is normal near the
tail of the process and is reported in :class:`EdgeConstructionStats`,
not raised.
"""

import heapq
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Hashable, List, Sequence, Set, Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import ITERATION_FACTOR
from .host import HostGraph
from .sampling import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeConstructionStats:
    """Outcome of one edge construction run."""

    target_edges: int
    edges_created: int
    mirrored_edges: int
    intra_edges: int
    inter_edges: int
    iterations: int
    max_iterations: int
    hit_iteration_cap: bool
    starved_nodes: int
    requested_mu: float
    expected_average_degree: float
    realized_average_degree: float

    @property
    def edge_shortfall(self) -> int:
        return max(self.target_edges - self.edges_created, 0)

    @property
    def completion(self) -> float:
        """Fraction of the target edge count that was realized."""
        if self.target_edges == 0:
            return 1.0
        return self.edges_created / self.target_edges

    @property
    def realized_mu(self) -> float:
        total = self.intra_edges + self.inter_edges
        return self.inter_edges / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result.update(
            edge_shortfall=self.edge_shortfall,
            completion=self.completion,
            realized_mu=self.realized_mu,
        )
        return result


class EdgeConstructor:
    """
    Wire a host graph to approximate a degree sequence and mixing ratio.

    Parameters
    ----------
    graph : HostGraph
        Graph to add edges to; its directedness decides the edge model
    nodes : sequence
        ``nodes[i]`` is the host node with id ``i``
    degree_sequence : NDArray[np.int64]
        Target degree per node id
    communities : list of lists
        Node ids per community
    membership : NDArray[np.int64]
        Community id per node id
    mu : float
        Requested fraction of inter-community edges per node
    rng : np.random.Generator
        Random number generator
    symmetrical : bool, optional
        Directed graphs only: mirror every edge u->v with v->u when
        absent (default: False)
    iteration_factor : int, optional
        Run at most ``iteration_factor * target_edges`` rounds
        (default: 3)
    """

    def __init__(
        self,
        graph: HostGraph,
        nodes: Sequence[Hashable],
        degree_sequence: NDArray[np.int64],
        communities: List[List[int]],
        membership: NDArray[np.int64],
        mu: float,
        rng: np.random.Generator,
        symmetrical: bool = False,
        iteration_factor: int = ITERATION_FACTOR,
    ):
        self.graph = graph
        self.nodes = list(nodes)
        self.degree_sequence = np.asarray(degree_sequence, dtype=np.int64)
        self.membership = np.asarray(membership, dtype=np.int64)
        self.community_arrays = [np.asarray(c, dtype=np.int64) for c in communities]
        self.mu = mu
        self.rng = rng
        self.directed = graph.is_directed()
        self.symmetrical = symmetrical and self.directed
        self.iteration_factor = iteration_factor

        n = len(self.nodes)
        self.current_degree = np.zeros(n, dtype=np.int64)
        self.edge_keys: Set[Tuple[int, int]] = set()
        self.mirrored_edges = 0

    def deficit(self, node_id: int) -> int:
        return int(self.degree_sequence[node_id] - self.current_degree[node_id])

    def run(self) -> EdgeConstructionStats:
        """Build the edges and return construction statistics."""
        total_degree = int(self.degree_sequence.sum())
        target_edges = total_degree if self.directed else total_degree // 2
        max_iterations = self.iteration_factor * target_edges

        # Max-heap on deficit, lowest id first among equals.
        heap = [(-self.deficit(i), i) for i in range(len(self.nodes))]
        heapq.heapify(heap)

        edges_created = 0
        intra_created = 0
        inter_created = 0
        iterations = 0
        starved = 0

        while edges_created < target_edges and heap and iterations < max_iterations:
            neg_key, u = heapq.heappop(heap)
            deficit = self.deficit(u)

            if deficit <= 0:
                iterations += 1
                continue

            # Partners may have connected to u since it was queued.
            if deficit != -neg_key:
                heapq.heappush(heap, (-deficit, u))
                continue

            intra_target = round_half_up(deficit * (1.0 - self.mu))
            inter_target = deficit - intra_target

            comm = self.membership[u]
            intra_added = self._connect(u, self._intra_candidates(u, comm), intra_target)
            inter_added = self._connect(u, self._inter_candidates(comm), inter_target)

            intra_created += intra_added
            inter_created += inter_added
            edges_created += intra_added + inter_added

            # A node that placed nothing never will: its candidate pools only shrink.
            if intra_added + inter_added == 0:
                starved += 1
                logger.debug(f"Node {u} retired with unmet deficit {deficit}")
            elif self.deficit(u) > 0:
                heapq.heappush(heap, (-self.deficit(u), u))

            iterations += 1

        hit_cap = iterations >= max_iterations and edges_created < target_edges and bool(heap)
        n = len(self.nodes)
        stats = EdgeConstructionStats(
            target_edges=target_edges,
            edges_created=edges_created,
            mirrored_edges=self.mirrored_edges,
            intra_edges=intra_created,
            inter_edges=inter_created,
            iterations=iterations,
            max_iterations=max_iterations,
            hit_iteration_cap=hit_cap,
            starved_nodes=starved,
            requested_mu=self.mu,
            expected_average_degree=total_degree / n if n else 0.0,
            realized_average_degree=float(self.current_degree.mean()) if n else 0.0,
        )

        logger.info(
            f"Created {edges_created} edges out of {target_edges} target "
            f"({100.0 * stats.completion:.1f}%), realized mu={stats.realized_mu:.3f} "
            f"(requested {self.mu:.3f}), {starved} nodes retired unsatisfied"
        )
        if stats.hit_iteration_cap:
            logger.warning(
                f"Edge construction stopped at the iteration cap ({max_iterations}); "
                f"shortfall of {stats.edge_shortfall} edges"
            )

        return stats

    def _unsaturated(self, candidates: NDArray[np.int64]) -> NDArray[np.int64]:
        mask = self.current_degree[candidates] < self.degree_sequence[candidates]
        return candidates[mask]

    def _intra_candidates(self, u: int, comm: int) -> NDArray[np.int64]:
        members = self.community_arrays[comm]
        return self._unsaturated(members[members != u])

    def _inter_candidates(self, comm: int) -> NDArray[np.int64]:
        return self._unsaturated(np.flatnonzero(self.membership != comm))

    def _edge_key(self, u: int, v: int) -> Tuple[int, int]:
        if self.directed:
            return (u, v)
        return (u, v) if u < v else (v, u)

    def _connect(self, u: int, candidates: NDArray[np.int64], count: int) -> int:
        """Add up to ``count`` edges from ``u`` to shuffled ``candidates``."""
        if count <= 0 or len(candidates) == 0:
            return 0

        candidates = self.rng.permutation(candidates)
        source = self.nodes[u]
        added = 0

        for v in candidates:
            if added >= count or self.current_degree[u] >= self.degree_sequence[u]:
                break

            v = int(v)
            if self.current_degree[v] >= self.degree_sequence[v]:
                continue

            key = self._edge_key(u, v)
            target = self.nodes[v]
            if key in self.edge_keys or self.graph.has_edge(source, target):
                continue

            self.graph.add_edge(source, target)
            self.edge_keys.add(key)
            self.current_degree[u] += 1

            if not self.directed:
                self.current_degree[v] += 1
            elif self.symmetrical and not self.graph.has_edge(target, source):
                self.graph.add_edge(target, source)
                self.edge_keys.add((v, u))
                self.current_degree[v] += 1
                self.mirrored_edges += 1

            added += 1

        return added

"""
Quality Metrics
===============

Read-only measurements of a generated LFR network: modularity of the
planted partition, degree statistics, community statistics, the
realized mixing fraction and a validation report.

All functions accept communities either as a ``{node: community_id}``
dict, a list of sets or a list of lists.
"""

import logging
from collections import Counter
from typing import Any, Dict, Hashable, List, Optional, Sequence, Set, Tuple, Union

import networkx as nx
import numpy as np
import pandas as pd
from numpy.typing import NDArray
from scipy import stats

logger = logging.getLogger(__name__)


# Type alias for communities
Communities = Union[List[Set[int]], List[List[int]], Dict[Hashable, int]]


def parse_communities(communities: Communities) -> Dict[Hashable, Any]:
    """
    Parse communities into ``{node: community_id}`` format.

    Examples
    --------
    >>> parse_communities([{0, 1}, {2, 3}])
    {0: 0, 1: 0, 2: 1, 3: 1}

    >>> parse_communities({0: 'A', 1: 'A', 2: 'B'})
    {0: 'A', 1: 'A', 2: 'B'}
    """
    if isinstance(communities, dict):
        return communities

    node_to_community: Dict[Hashable, int] = {}
    for comm_id, members in enumerate(communities):
        for node in members:
            node_to_community[node] = comm_id

    logger.debug(
        f"Parsed {len(communities)} communities with {len(node_to_community)} total nodes"
    )
    return node_to_community


def partition_edges(
    G: nx.Graph,
    communities: Communities,
) -> Tuple[List[Tuple[Hashable, Hashable]], List[Tuple[Hashable, Hashable]]]:
    """
    Partition edges into intra-community and inter-community.

    Returns
    -------
    E_intra, E_inter : list of tuples
        Edges whose endpoints share / do not share a community

    Examples
    --------
    >>> G = nx.Graph([(0, 1), (1, 2), (2, 3)])
    >>> intra, inter = partition_edges(G, {0: 0, 1: 0, 2: 1, 3: 1})
    >>> len(intra), len(inter)
    (2, 1)
    """
    node_to_community = parse_communities(communities)
    E_intra: List[Tuple[Hashable, Hashable]] = []
    E_inter: List[Tuple[Hashable, Hashable]] = []

    for u, v in G.edges():
        comm_u = node_to_community.get(u)
        comm_v = node_to_community.get(v)

        if comm_u is None or comm_v is None:
            logger.warning(f"Node {u} or {v} not in communities, skipping edge")
            continue

        if comm_u == comm_v:
            E_intra.append((u, v))
        else:
            E_inter.append((u, v))

    logger.debug(f"Partitioned edges: {len(E_intra)} intra, {len(E_inter)} inter")
    return E_intra, E_inter


def edge_type(u: Hashable, v: Hashable, node_to_community: Dict[Hashable, Any]) -> str:
    """Return ``"intra"`` if u and v share a community, else ``"inter"``."""
    return "intra" if node_to_community[u] == node_to_community[v] else "inter"


def _adjacency_matrix(G: Any, nodelist: Sequence[Hashable]) -> NDArray[np.float64]:
    """Dense 0/1 adjacency; row i -> column j iff edge i->j (or i-j)."""
    if isinstance(G, nx.Graph):
        A = nx.to_numpy_array(G, nodelist=list(nodelist), weight=None)
        return (A > 0).astype(float)

    n = len(nodelist)
    A = np.zeros((n, n))
    for i, u in enumerate(nodelist):
        for j, v in enumerate(nodelist):
            if i != j and G.has_edge(u, v):
                A[i, j] = 1.0
    return A


def compute_modularity(
    G: Any,
    communities: Communities,
    nodelist: Optional[Sequence[Hashable]] = None,
) -> float:
    """
    Compute Newman modularity of a partition.

    Q = (1 / 2E) * sum_ij [A_ij - k_i * k_j / 2E] * delta(c_i, c_j)

    The sum runs over every ordered node pair, so the cost is O(N^2)
    in time and memory.

    Parameters
    ----------
    G : nx.Graph or HostGraph
        Graph to score. ``k_i`` is the graph's degree of node i (in + out
        for directed graphs) and ``A_ij`` is 1 iff the edge i->j exists.
    communities : dict, list of sets or list of lists
        Partition to score
    nodelist : sequence, optional
        Node order (default: ``G.nodes()`` order)

    Returns
    -------
    float
        Modularity, 0.0 for a graph without edges

    Examples
    --------
    >>> G = nx.Graph([(0, 1), (2, 3)])
    >>> round(compute_modularity(G, [{0, 1}, {2, 3}]), 3)
    0.5
    """
    node_to_community = parse_communities(communities)
    if nodelist is None:
        nodelist = list(G.nodes())

    A = _adjacency_matrix(G, nodelist)
    n_edges = A.sum() if G.is_directed() else A.sum() / 2.0
    if n_edges == 0:
        return 0.0

    degrees = np.array([G.degree(node) for node in nodelist], dtype=float)
    labels = np.array([node_to_community[node] for node in nodelist], dtype=object)
    same_community = (labels[:, None] == labels[None, :]).astype(bool)

    two_m = 2.0 * n_edges
    expected = np.outer(degrees, degrees) / two_m

    return float(np.sum((A - expected) * same_community) / two_m)


def compute_degree_statistics(
    G: Any,
    expected_degrees: Optional[Sequence[int]] = None,
    fit_powerlaw: bool = False,
) -> Dict[str, Any]:
    """
    Compute realized (and optionally expected) degree statistics.

    Parameters
    ----------
    G : nx.Graph or HostGraph
        Input graph
    expected_degrees : sequence of int, optional
        Target degree sequence to compare against
    fit_powerlaw : bool, optional
        If True, fit a power-law exponent to the realized degrees
        (default: False)

    Returns
    -------
    Dict[str, Any]
        Dictionary containing:
        - 'degrees': array of realized degrees
        - 'mean', 'std', 'min', 'median', 'max'
        - 'skewness': skewness of the distribution
        - 'n_isolated': number of zero-degree nodes
        - 'expected_mean', 'expected_min', 'expected_max' (if expected
          degrees were given)
        - 'powerlaw_alpha', 'powerlaw_xmin' (if fit_powerlaw=True)
    """
    degrees = np.array([G.degree(node) for node in G.nodes()], dtype=np.int64)

    if len(degrees) == 0:
        result = {
            "degrees": degrees,
            "mean": 0.0,
            "std": 0.0,
            "min": 0,
            "median": 0.0,
            "max": 0,
            "skewness": np.nan,
            "n_isolated": 0,
        }
    else:
        result = {
            "degrees": degrees,
            "mean": float(np.mean(degrees)),
            "std": float(np.std(degrees)),
            "min": int(np.min(degrees)),
            "median": float(np.median(degrees)),
            "max": int(np.max(degrees)),
            "skewness": float(stats.skew(degrees)) if np.ptp(degrees) > 0 else 0.0,
            "n_isolated": int(np.sum(degrees == 0)),
        }

    expected = None if expected_degrees is None else np.asarray(expected_degrees)
    if expected is not None and len(expected) > 0:
        result["expected_mean"] = float(np.mean(expected))
        result["expected_min"] = int(np.min(expected))
        result["expected_max"] = int(np.max(expected))
        result["mean_deviation"] = result["mean"] - result["expected_mean"]

    if fit_powerlaw:
        result.update(_fit_powerlaw(degrees[degrees > 0]))

    return result


def compute_community_statistics(
    communities: Communities,
    fit_powerlaw: bool = False,
) -> Dict[str, Any]:
    """
    Compute community size statistics.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing:
        - 'n_communities'
        - 'sizes': list of community sizes, by community id
        - 'min', 'max', 'mean': size summary
        - 'size_counts': {size: number of communities with that size}
        - 'powerlaw_alpha', 'powerlaw_xmin' (if fit_powerlaw=True)
    """
    if isinstance(communities, dict):
        counts = Counter(communities.values())
        sizes = [counts[c] for c in sorted(counts)]
    else:
        sizes = [len(c) for c in communities]

    if not sizes:
        return {"n_communities": 0, "sizes": [], "size_counts": {}}

    result = {
        "n_communities": len(sizes),
        "sizes": sizes,
        "min": int(min(sizes)),
        "max": int(max(sizes)),
        "mean": float(np.mean(sizes)),
        "size_counts": dict(sorted(Counter(sizes).items())),
    }

    if fit_powerlaw:
        result.update(_fit_powerlaw(np.array([s for s in sizes if s > 0])))

    return result


def _fit_powerlaw(values: NDArray) -> Dict[str, float]:
    """Fit a discrete power law; NaN fields if the fit fails."""
    try:
        import powerlaw
        fit = powerlaw.Fit(values, discrete=True, verbose=False)
        return {
            "powerlaw_alpha": float(fit.power_law.alpha),
            "powerlaw_xmin": float(fit.power_law.xmin),
        }
    except Exception as e:
        logger.warning(f"Power-law fitting failed: {e}")
        return {"powerlaw_alpha": np.nan, "powerlaw_xmin": np.nan}


def compute_mixing_statistics(
    G: nx.Graph,
    communities: Communities,
) -> Dict[str, Any]:
    """
    Count intra/inter-community edges and the realized mixing fraction.

    Returns
    -------
    Dict[str, Any]
        'n_intra', 'n_inter', 'realized_mu' (inter / total, 0.0 if no edges)
    """
    E_intra, E_inter = partition_edges(G, communities)
    total = len(E_intra) + len(E_inter)
    return {
        "n_intra": len(E_intra),
        "n_inter": len(E_inter),
        "realized_mu": len(E_inter) / total if total > 0 else 0.0,
    }


def summarize_community_attribute(
    G: nx.Graph,
    communities: Communities,
    attribute: str,
) -> pd.DataFrame:
    """
    Summarize an externally attached numeric node attribute per community.

    Purely observational: the generator never sets or reads such
    attributes. Nodes lacking the attribute count towards ``size`` but
    not towards the statistics.

    Returns
    -------
    pd.DataFrame
        One row per community with columns
        ``community, size, count, mean, min, max``
    """
    node_to_community = parse_communities(communities)
    values: Dict[Any, List[float]] = {}
    sizes: Counter = Counter()

    for node, comm in node_to_community.items():
        sizes[comm] += 1
        value = G.nodes[node].get(attribute) if node in G else None
        if value is not None:
            values.setdefault(comm, []).append(float(value))

    rows = []
    for comm in sorted(sizes, key=str):
        comm_values = values.get(comm, [])
        rows.append({
            "community": comm,
            "size": sizes[comm],
            "count": len(comm_values),
            "mean": float(np.mean(comm_values)) if comm_values else np.nan,
            "min": float(np.min(comm_values)) if comm_values else np.nan,
            "max": float(np.max(comm_values)) if comm_values else np.nan,
        })

    return pd.DataFrame(rows, columns=["community", "size", "count", "mean", "min", "max"])


def validate_network(
    G: nx.Graph,
    communities: Communities,
) -> Dict[str, Any]:
    """
    Check a generated network for degenerate structure.

    Never raises; problems are logged as warnings and listed under
    ``'warnings'``.

    Returns
    -------
    Dict[str, Any]
        'n_nodes', 'n_edges', 'n_isolated', 'density',
        'n_with_community', 'n_communities', 'warnings'
    """
    node_to_community = parse_communities(communities)
    n = G.number_of_nodes()
    m = G.number_of_edges()
    warnings: List[str] = []

    isolated = [node for node in G.nodes() if G.degree(node) == 0]
    covered = [node for node in G.nodes() if node in node_to_community]

    if m == 0:
        warnings.append("Network has no edges")
    if isolated:
        warnings.append(f"{len(isolated)} isolated nodes found")
    if len(covered) < n:
        warnings.append(f"{n - len(covered)} nodes have no community assignment")

    for message in warnings:
        logger.warning(message)

    return {
        "n_nodes": n,
        "n_edges": m,
        "n_isolated": len(isolated),
        "density": nx.density(G) if n > 1 else 0.0,
        "n_with_community": len(covered),
        "n_communities": len({node_to_community[node] for node in covered}),
        "warnings": warnings,
    }


def summarize_network(G: nx.Graph, generator: Any) -> Dict[str, Any]:
    """
    Collect the standard statistics of a generated LFR network.

    Parameters
    ----------
    G : nx.Graph
        Generated graph
    generator : LFRNetworkGenerator
        The generator that wired ``G``

    Returns
    -------
    Dict[str, Any]
        Flat summary suitable for logging or JSON export
    """
    node_communities = generator.node_communities()
    degree_stats = compute_degree_statistics(G, expected_degrees=generator.degree_sequence)
    community_stats = compute_community_statistics(generator.communities)
    mixing = compute_mixing_statistics(G, node_communities)
    validation = validate_network(G, node_communities)

    return {
        "n_nodes": G.number_of_nodes(),
        "n_edges": G.number_of_edges(),
        "directed": G.is_directed(),
        "target_average_degree": float(generator.average_degree),
        "expected_average_degree": degree_stats.get("expected_mean", 0.0),
        "actual_average_degree": float(generator.actual_average_degree(G)),
        "mu": float(generator.mu),
        "realized_mu": mixing["realized_mu"],
        "n_communities": community_stats["n_communities"],
        "community_sizes": community_stats["sizes"],
        "average_community_size": community_stats.get("mean", 0.0),
        "modularity": generator.modularity(G),
        "min_degree": degree_stats["min"],
        "median_degree": degree_stats["median"],
        "max_degree": degree_stats["max"],
        "n_isolated": validation["n_isolated"],
        "density": validation["density"],
        "construction": generator.construction_stats.to_dict(),
    }


def log_network_summary(summary: Dict[str, Any], level: int = logging.INFO) -> None:
    """Emit a network summary through the module logger."""
    logger.log(level, "=== LFR Network Statistics ===")
    logger.log(level, f"Nodes: {summary['n_nodes']}")
    logger.log(level, f"Edges: {summary['n_edges']}")
    logger.log(level, f"Directed: {summary['directed']}")
    logger.log(level, f"Target Average Degree: {summary['target_average_degree']:.2f}")
    logger.log(level, f"Actual Average Degree: {summary['actual_average_degree']:.2f}")
    logger.log(level, f"Mixing Parameter (mu): {summary['mu']} (realized {summary['realized_mu']:.3f})")
    logger.log(level, f"Number of Communities: {summary['n_communities']}")
    logger.log(level, f"Community Sizes: {summary['community_sizes']}")
    logger.log(level, f"Average Community Size: {summary['average_community_size']:.2f}")
    logger.log(level, f"Modularity: {summary['modularity']:.4f}")
    logger.log(
        level,
        f"Degree min/median/max: {summary['min_degree']}/"
        f"{summary['median_degree']:.1f}/{summary['max_degree']}",
    )
    logger.log(level, f"Isolated nodes: {summary['n_isolated']}, density: {summary['density']:.4f}")

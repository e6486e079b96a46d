"""
Network Export Module
=====================

Writes a generated LFR network to GML and CSV. The schemas are fixed
so downstream tools can rely on them:

GML
    graph header with ``directed``, ``comment``, ``avgDegree``, ``mu``;
    ``node [id label community degree]``;
    ``edge [source target type]`` with type "intra" or "inter".
CSV nodes
    ``id,label,community,degree,expected_degree``
CSV edges
    ``source,target,type,source_community,target_community``

Node ids are the generator's integer ids, not the host node objects;
the host node appears as ``label``.
"""

import csv
import html
import logging
from pathlib import Path
from typing import Any, Iterator, Tuple, Union

import networkx as nx
import numpy as np

from ..config import GML_COMMENT

logger = logging.getLogger(__name__)

NODE_COLUMNS = ["id", "label", "community", "degree", "expected_degree"]
EDGE_COLUMNS = ["source", "target", "type", "source_community", "target_community"]

PathLike = Union[str, Path]


def _gml_string(value: Any) -> str:
    return '"' + html.escape(str(value), quote=True) + '"'


def _gml_real(value: float) -> str:
    # GML reals need a decimal point and no exponent.
    return np.format_float_positional(float(value), trim="0")


def _unique_edges(G: nx.Graph, generator: Any) -> Iterator[Tuple[int, int, str, int, int]]:
    """Yield (source_id, target_id, type, source_comm, target_comm) once per edge."""
    node_index = generator.node_index
    membership = generator.node_community_map

    for u, v in G.edges():
        source, target = node_index[u], node_index[v]
        source_comm, target_comm = membership[source], membership[target]
        kind = "intra" if source_comm == target_comm else "inter"
        yield source, target, kind, source_comm, target_comm


def generate_gml_lines(G: nx.Graph, generator: Any) -> Iterator[str]:
    """Yield the GML document for ``G`` line by line."""
    membership = generator.node_community_map

    yield "graph ["
    yield f"  directed {1 if G.is_directed() else 0}"
    yield f"  comment {_gml_string(GML_COMMENT)}"
    yield f"  avgDegree {_gml_real(generator.average_degree)}"
    yield f"  mu {_gml_real(generator.mu)}"

    for node_id, node in enumerate(generator.nodes):
        yield "  node ["
        yield f"    id {node_id}"
        yield f"    label {_gml_string(node)}"
        yield f"    community {membership[node_id]}"
        yield f"    degree {G.degree(node)}"
        yield "  ]"

    for source, target, kind, _, _ in _unique_edges(G, generator):
        yield "  edge ["
        yield f"    source {source}"
        yield f"    target {target}"
        yield f"    type {_gml_string(kind)}"
        yield "  ]"

    yield "]"


def export_gml(G: nx.Graph, generator: Any, filepath: PathLike) -> Path:
    """
    Write ``G`` as GML with community and edge-type annotations.

    Parameters
    ----------
    G : nx.Graph
        Graph wired by ``generator``
    generator : LFRNetworkGenerator
        Generator holding the community assignment
    filepath : str or Path
        Output file

    Returns
    -------
    Path
        The written file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        for line in generate_gml_lines(G, generator):
            f.write(line + "\n")

    logger.info(f"Network exported to: {path}")
    return path


def export_csv(
    G: nx.Graph,
    generator: Any,
    nodes_filepath: PathLike,
    edges_filepath: PathLike,
) -> Tuple[Path, Path]:
    """
    Write ``G`` as a node table and an edge table.

    Parameters
    ----------
    G : nx.Graph
        Graph wired by ``generator``
    generator : LFRNetworkGenerator
        Generator holding the community assignment and degree targets
    nodes_filepath, edges_filepath : str or Path
        Output files

    Returns
    -------
    Tuple[Path, Path]
        The written node and edge files
    """
    nodes_path = Path(nodes_filepath)
    edges_path = Path(edges_filepath)
    for path in (nodes_path, edges_path):
        path.parent.mkdir(parents=True, exist_ok=True)

    membership = generator.node_community_map
    expected = generator.degree_sequence

    with open(nodes_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(NODE_COLUMNS)
        for node_id, node in enumerate(generator.nodes):
            writer.writerow([
                node_id,
                str(node),
                membership[node_id],
                G.degree(node),
                int(expected[node_id]),
            ])

    with open(edges_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(EDGE_COLUMNS)
        for row in _unique_edges(G, generator):
            writer.writerow(row)

    logger.info(f"Network exported to: {nodes_path} and {edges_path}")
    return nodes_path, edges_path

"""
Network Loader Module
=====================

Loads LFR networks written by :mod:`export` back into NetworkX graphs
together with their community assignment.

Supported formats:
- GML files (.gml)
- Node/edge CSV table pairs (.csv)
"""

import csv
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import networkx as nx

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_lfr_gml(filepath: PathLike) -> Tuple[nx.Graph, Dict[int, int]]:
    """
    Load an exported LFR network from GML.

    Parameters
    ----------
    filepath : str or Path
        GML file written by ``export_gml``

    Returns
    -------
    Tuple[nx.Graph, Dict[int, int]]
        (graph, node_to_community). Nodes are the integer ids; the
        host node label, community and degree are node attributes,
        edges carry ``type``.
    """
    G = nx.read_gml(str(filepath), label="id")
    communities = {node: int(data["community"]) for node, data in G.nodes(data=True)}

    logger.info(
        f"Loaded {filepath}: {G.number_of_nodes()} nodes, {G.number_of_edges()} edges, "
        f"{len(set(communities.values()))} communities"
    )
    return G, communities


def load_lfr_csv(
    nodes_filepath: PathLike,
    edges_filepath: PathLike,
    directed: bool = False,
) -> Tuple[nx.Graph, Dict[int, int]]:
    """
    Load an exported LFR network from its node and edge tables.

    Parameters
    ----------
    nodes_filepath : str or Path
        Node table (``id,label,community,degree,expected_degree``)
    edges_filepath : str or Path
        Edge table (``source,target,type,source_community,target_community``)
    directed : bool, optional
        Build an ``nx.DiGraph`` (default: False)

    Returns
    -------
    Tuple[nx.Graph, Dict[int, int]]
        (graph, node_to_community)
    """
    G = nx.DiGraph() if directed else nx.Graph()
    communities: Dict[int, int] = {}

    with open(nodes_filepath, "r", newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            node = int(row["id"])
            communities[node] = int(row["community"])
            G.add_node(
                node,
                label=row["label"],
                community=communities[node],
                degree=int(row["degree"]),
                expected_degree=int(row["expected_degree"]),
            )

    with open(edges_filepath, "r", newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            G.add_edge(int(row["source"]), int(row["target"]), type=row["type"])

    logger.info(
        f"Loaded {nodes_filepath} / {edges_filepath}: {G.number_of_nodes()} nodes, "
        f"{G.number_of_edges()} edges"
    )
    return G, communities


def load_lfr_network(
    filepath: PathLike,
    edges_filepath: Optional[PathLike] = None,
    directed: bool = False,
) -> Tuple[nx.Graph, Dict[int, int]]:
    """
    Load an exported LFR network, dispatching on the file suffix.

    ``.gml`` files are read directly; ``.csv`` files are read as the
    node table and require ``edges_filepath``.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()

    if suffix == ".gml":
        return load_lfr_gml(path)
    if suffix == ".csv":
        if edges_filepath is None:
            raise ValueError("edges_filepath is required when loading CSV tables")
        return load_lfr_csv(path, edges_filepath, directed=directed)

    raise ValueError(f"Unknown file format: {suffix}")

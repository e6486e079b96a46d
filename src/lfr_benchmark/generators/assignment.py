"""
Community Assignment
====================

Partitions shuffled node ids into communities following the sizes
produced by :mod:`community_sizes`.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


def assign_nodes_to_communities(
    num_nodes: int,
    community_sizes: Sequence[int],
    rng: np.random.Generator,
) -> Tuple[List[List[int]], NDArray[np.int64]]:
    """
    Assign node ids ``0..num_nodes-1`` to communities.

    Node ids are shuffled once, then handed out in consecutive blocks in
    the order the communities were generated (not sorted by size).

    Parameters
    ----------
    num_nodes : int
        Number of nodes
    community_sizes : sequence of int
        Nominal community sizes, in generation order
    rng : np.random.Generator
        Random number generator

    Returns
    -------
    communities : list of lists
        ``communities[c]`` holds the node ids of community ``c``
    membership : NDArray[np.int64]
        ``membership[i]`` is the community id of node ``i``

    Notes
    -----
    If the ids run out early the last communities are clipped (possibly
    to empty). Ids left over after every nominal size is served go, one
    at a time, to the currently smallest community, lowest id first.
    """
    if not community_sizes:
        raise ValueError("community_sizes must not be empty")

    order = rng.permutation(num_nodes)
    membership = np.full(num_nodes, -1, dtype=np.int64)
    communities: List[List[int]] = []

    cursor = 0
    for comm_id, size in enumerate(community_sizes):
        take = min(int(size), num_nodes - cursor)
        block = order[cursor:cursor + take]
        membership[block] = comm_id
        communities.append([int(node) for node in block])
        cursor += take

    while cursor < num_nodes:
        node = int(order[cursor])
        smallest = min(range(len(communities)), key=lambda c: (len(communities[c]), c))
        communities[smallest].append(node)
        membership[node] = smallest
        cursor += 1

    logger.debug(f"Final community sizes: {[len(c) for c in communities]}")
    return communities, membership

"""
Community Size Builder
======================

Draws power-law distributed community sizes until the node budget is
used up. The number of communities is not a parameter; it falls out of
the draws.
"""

import logging
from typing import List

import numpy as np

from .sampling import sample_power_law

logger = logging.getLogger(__name__)


def build_community_sizes(
    num_nodes: int,
    tau2: float,
    min_community: int,
    max_community: int,
    rng: np.random.Generator,
) -> List[int]:
    """
    Generate community sizes summing exactly to ``num_nodes``.

    Parameters
    ----------
    num_nodes : int
        Total number of nodes
    tau2 : float
        Power-law exponent for community sizes
    min_community, max_community : int
        Inclusive bounds for sampled sizes
    rng : np.random.Generator
        Random number generator

    Returns
    -------
    List[int]
        Community sizes in generation order

    Examples
    --------
    >>> rng = np.random.default_rng(42)
    >>> sizes = build_community_sizes(100, 1.5, 10, 50, rng)
    >>> sum(sizes)
    100

    Notes
    -----
    When a draw would overshoot, the leftover ``r`` becomes its own
    community if ``r >= min_community``; otherwise it is merged into the
    previous community. If there is no previous community (the whole
    network is smaller than ``min_community``) it is emitted as the only
    community, below the floor.
    """
    sizes: List[int] = []
    total = 0

    while total < num_nodes:
        size = sample_power_law(min_community, max_community, tau2, rng)

        if total + size <= num_nodes:
            sizes.append(size)
            total += size
            continue

        remaining = num_nodes - total
        if remaining >= min_community:
            sizes.append(remaining)
        elif sizes:
            sizes[-1] += remaining
        else:
            sizes.append(remaining)
        total = num_nodes

    logger.debug(
        f"Generated {len(sizes)} communities with sizes {sizes} "
        f"(min={min(sizes)}, max={max(sizes)}, mean={np.mean(sizes):.1f})"
    )
    return sizes

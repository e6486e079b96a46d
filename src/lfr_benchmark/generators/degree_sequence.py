"""
Degree Sequence Builder
=======================

Samples one target degree per node from a bounded power law and
nudges the sequence toward the requested average degree without
flattening the distribution.
"""

import logging
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import DEGREE_CORRECTION_BOUNDS, DEGREE_CORRECTION_THRESHOLD
from .sampling import sample_power_law_sequence

logger = logging.getLogger(__name__)


def build_degree_sequence(
    num_nodes: int,
    is_directed: bool,
    tau1: float,
    min_degree: int,
    max_degree: int,
    average_degree: float,
    rng: np.random.Generator,
    correction_threshold: float = DEGREE_CORRECTION_THRESHOLD,
    correction_bounds: Tuple[float, float] = DEGREE_CORRECTION_BOUNDS,
) -> NDArray[np.int64]:
    """
    Generate the target degree sequence.

    Parameters
    ----------
    num_nodes : int
        Number of nodes
    is_directed : bool
        If False, the total degree is made even
    tau1 : float
        Power-law exponent for the degree distribution
    min_degree, max_degree : int
        Inclusive degree bounds
    average_degree : float
        Requested mean degree
    rng : np.random.Generator
        Random number generator
    correction_threshold : float, optional
        Relative deviation of the sampled mean that triggers rescaling
        (default: 0.15)
    correction_bounds : tuple of float, optional
        Clamp applied to the rescale factor (default: (0.8, 1.3))

    Returns
    -------
    NDArray[np.int64]
        ``degrees[i]`` is the target degree of node ``i``

    Notes
    -----
    The correction is a single multiplicative factor, clamped so that the
    power-law shape survives. The resulting mean therefore only
    approaches ``average_degree``; it is not forced onto it.
    """
    degrees = sample_power_law_sequence(num_nodes, min_degree, max_degree, tau1, rng)

    current_avg = float(degrees.mean())
    logger.debug(
        f"Initial degree average: {current_avg:.2f}, target: {average_degree:.2f}"
    )

    if abs(current_avg - average_degree) / average_degree >= correction_threshold:
        low, high = correction_bounds
        factor = min(high, max(low, average_degree / current_avg))
        degrees = np.floor(degrees * factor + 0.5).astype(np.int64)
        degrees = np.clip(degrees, min_degree, max_degree)
        logger.debug(
            f"Rescaled degrees by {factor:.3f}, adjusted average: {degrees.mean():.2f}"
        )

    if not is_directed and int(degrees.sum()) % 2 != 0:
        _fix_parity(degrees, min_degree, max_degree, rng)

    logger.debug(f"Final degree average: {degrees.mean():.2f}")
    return degrees


def _fix_parity(
    degrees: NDArray[np.int64],
    min_degree: int,
    max_degree: int,
    rng: np.random.Generator,
) -> None:
    """Make ``degrees.sum()`` even in place by moving one entry by 1."""
    start = int(rng.integers(len(degrees)))
    if degrees[start] < max_degree:
        degrees[start] += 1
        return

    below_max = np.flatnonzero(degrees < max_degree)
    if len(below_max) > 0:
        degrees[below_max[0]] += 1
        return

    # Every node sits at max_degree: step one down instead.
    above_min = np.flatnonzero(degrees > min_degree)
    if len(above_min) > 0:
        degrees[above_min[0]] -= 1
        return

    logger.warning(
        f"Cannot make total degree even: all {len(degrees)} nodes fixed at degree {max_degree}"
    )

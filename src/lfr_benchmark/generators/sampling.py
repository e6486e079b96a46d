"""
Power-Law Sampling
==================

Inverse-transform sampling from a bounded, continuous power law
``p(x) ~ x^(-tau)`` on ``[lo, hi]``, rounded to integers. Used for
both node degrees (exponent tau1) and community sizes (exponent tau2).
"""

import math

import numpy as np
from numpy.typing import NDArray

from ..config import DEGENERATE_EXPONENT_EPS


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from -inf (2.5 -> 3)."""
    return int(math.floor(x + 0.5))


def power_law_inverse(u: float, lo: int, hi: int, tau: float) -> int:
    """
    Map a uniform draw to a bounded power-law variate.

    Parameters
    ----------
    u : float
        Uniform draw in [0, 1)
    lo, hi : int
        Inclusive bounds of the support
    tau : float
        Power-law exponent; must satisfy ``|1 - tau| >= 1e-10``

    Returns
    -------
    int
        Value in [lo, hi]

    Examples
    --------
    >>> power_law_inverse(0.0, 5, 20, 2.5)
    5
    >>> power_law_inverse(0.999999, 5, 20, 2.5)
    20
    """
    exponent = 1.0 - tau
    if abs(exponent) < DEGENERATE_EXPONENT_EPS:
        raise ValueError(f"tau={tau} is degenerate (|1 - tau| < {DEGENERATE_EXPONENT_EPS})")

    lo_pow = lo ** exponent
    hi_pow = hi ** exponent
    x = lo_pow + u * (hi_pow - lo_pow)
    value = round_half_up(x ** (1.0 / exponent))

    return max(lo, min(hi, value))


def sample_power_law(
    lo: int,
    hi: int,
    tau: float,
    rng: np.random.Generator,
) -> int:
    """
    Draw one integer from a bounded power law.

    Falls back to a discrete uniform draw over [lo, hi] when
    ``tau`` is within 1e-10 of 1, where the closed-form inverse
    divides by zero.

    Parameters
    ----------
    lo, hi : int
        Inclusive bounds
    tau : float
        Power-law exponent
    rng : np.random.Generator
        Random number generator

    Returns
    -------
    int
        Sampled value in [lo, hi]
    """
    if abs(1.0 - tau) < DEGENERATE_EXPONENT_EPS:
        return int(rng.integers(lo, hi + 1))

    return power_law_inverse(float(rng.random()), lo, hi, tau)


def sample_power_law_sequence(
    n: int,
    lo: int,
    hi: int,
    tau: float,
    rng: np.random.Generator,
) -> NDArray[np.int64]:
    """Draw ``n`` independent values with :func:`sample_power_law`, in order."""
    return np.array(
        [sample_power_law(lo, hi, tau, rng) for _ in range(n)],
        dtype=np.int64,
    )

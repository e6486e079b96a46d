"""
LFR Parameters
==============

Validated parameter set for the LFR generator and the exceptions
raised when parameters or generation inputs are invalid.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from ..config import (
    DEFAULT_MAX_COMMUNITY,
    DEFAULT_MIN_COMMUNITY,
    DEGREE_CORRECTION_BOUNDS,
    DEGREE_CORRECTION_THRESHOLD,
    ITERATION_FACTOR,
)


class LFRParameterError(ValueError):
    """A constructor parameter violates its constraint.

    The offending parameter name is available as ``parameter``.
    """

    def __init__(self, parameter: str, message: str):
        super().__init__(f"{parameter}: {message}")
        self.parameter = parameter


class GenerationError(ValueError):
    """The host graph cannot support an LFR network with these parameters."""


class GeneratorStateError(RuntimeError):
    """A query was made before the generator produced a network."""


@dataclass(frozen=True)
class LFRParameters:
    """Immutable, validated LFR parameter set.

    ``average_degree`` defaults to the midpoint of the degree range.
    Validation runs in ``__post_init__``, so an instance that exists
    is always valid.
    """

    tau1: float
    tau2: float
    mu: float
    min_degree: int
    max_degree: int
    average_degree: Optional[float] = None
    min_community: int = DEFAULT_MIN_COMMUNITY
    max_community: int = DEFAULT_MAX_COMMUNITY
    symmetrical: bool = False
    correction_threshold: float = DEGREE_CORRECTION_THRESHOLD
    correction_bounds: Tuple[float, float] = DEGREE_CORRECTION_BOUNDS
    iteration_factor: int = ITERATION_FACTOR

    def __post_init__(self):
        if self.average_degree is None:
            object.__setattr__(
                self, "average_degree", (self.min_degree + self.max_degree) / 2.0
            )
        object.__setattr__(self, "correction_bounds", tuple(self.correction_bounds))
        self._validate()

    def _validate(self) -> None:
        if not self.tau1 > 1.0:
            raise LFRParameterError("tau1", f"must be greater than 1, got {self.tau1}")
        if not self.tau2 > 1.0:
            raise LFRParameterError("tau2", f"must be greater than 1, got {self.tau2}")
        if not 0.0 <= self.mu <= 1.0:
            raise LFRParameterError("mu", f"must be between 0 and 1, got {self.mu}")
        if self.min_degree < 1:
            raise LFRParameterError("min_degree", f"must be at least 1, got {self.min_degree}")
        if self.max_degree < self.min_degree:
            raise LFRParameterError(
                "max_degree",
                f"must be >= min_degree ({self.min_degree}), got {self.max_degree}",
            )
        if not self.min_degree <= self.average_degree <= self.max_degree:
            raise LFRParameterError(
                "average_degree",
                f"must be between min_degree ({self.min_degree}) and "
                f"max_degree ({self.max_degree}), got {self.average_degree}",
            )
        if self.min_community < 1:
            raise LFRParameterError(
                "min_community", f"must be at least 1, got {self.min_community}"
            )
        if self.max_community < self.min_community:
            raise LFRParameterError(
                "max_community",
                f"must be >= min_community ({self.min_community}), got {self.max_community}",
            )
        if not self.correction_threshold > 0:
            raise LFRParameterError(
                "correction_threshold", f"must be positive, got {self.correction_threshold}"
            )
        if len(self.correction_bounds) != 2:
            raise LFRParameterError(
                "correction_bounds", f"must be a (low, high) pair, got {self.correction_bounds}"
            )
        low, high = self.correction_bounds
        if not 0 < low <= 1.0 <= high:
            raise LFRParameterError(
                "correction_bounds", f"must satisfy 0 < low <= 1 <= high, got {self.correction_bounds}"
            )
        if self.iteration_factor < 1:
            raise LFRParameterError(
                "iteration_factor", f"must be at least 1, got {self.iteration_factor}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

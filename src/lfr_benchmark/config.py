"""
Configuration constants for the LFR Benchmark Generator.
========================================================

This module contains the configuration constants used throughout
the package, plus helpers for loading YAML parameter files.
Centralizing these ensures consistency and reproducibility.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

CONFIG_DIR = Path(__file__).parent / "configs"

# LFR generator defaults
DEFAULT_TAU1 = 2.5
DEFAULT_TAU2 = 1.5
DEFAULT_MU = 0.3
DEFAULT_MIN_COMMUNITY = 10
DEFAULT_MAX_COMMUNITY = 50

# Smallest network the generator accepts
MIN_NODES = 10

# Degree sequence correction: relative deviation of the sampled mean from
# the requested average that triggers a rescale, and the clamp applied to
# the rescale factor.
DEGREE_CORRECTION_THRESHOLD = 0.15
DEGREE_CORRECTION_BOUNDS = (0.8, 1.3)

# Edge construction stops after ITERATION_FACTOR * target_edges rounds
ITERATION_FACTOR = 3

# |1 - tau| below this falls back to uniform sampling
DEGENERATE_EXPONENT_EPS = 1e-10

# Export defaults
DEFAULT_OUTPUT_DIR = "data/networks"
GML_COMMENT = "LFR Benchmark Network"


def load_config(config_name: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file shipped with the package.

    Parameters
    ----------
    config_name : str
        Name of the configuration file (without .yaml extension)

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary
    """
    config_path = CONFIG_DIR / f"{config_name}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_generator_params(
    path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Load LFR generator parameters.

    Parameters
    ----------
    path : str or Path, optional
        User YAML file. If None, the packaged ``lfr_params.yaml`` is used.

    Returns
    -------
    Dict[str, Any]
        The ``lfr`` section of the file (the whole mapping if the file
        has no such section).
    """
    if path is None:
        data = load_config("lfr_params")
    else:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in configuration file, got {type(data).__name__}")

    return dict(data.get("lfr", data))

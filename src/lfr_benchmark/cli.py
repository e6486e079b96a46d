#!/usr/bin/env python3
"""
LFR Network Generation Runner
=============================

Generates one LFR benchmark network, logs its statistics and exports
it to GML and/or CSV.

Usage:
    python -m lfr_benchmark.cli [--config CONFIG] [--output OUTPUT]
    lfr-generate  # If installed via setup.py
"""

import argparse
import json
import logging
from dataclasses import MISSING, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import networkx as nx
import numpy as np

from .config import DEFAULT_OUTPUT_DIR, load_generator_params
from .data.export import export_csv, export_gml
from .generators.lfr import LFRNetworkGenerator
from .generators.parameters import LFRParameterError, LFRParameters
from .metrics.quality import log_network_summary, summarize_network

logger = logging.getLogger(__name__)

# argparse dest -> generator parameter name
_PARAM_FLAGS = {
    "nodes": "n",
    "tau1": "tau1",
    "tau2": "tau2",
    "mu": "mu",
    "min_degree": "min_degree",
    "max_degree": "max_degree",
    "avg_degree": "average_degree",
    "min_community": "min_community",
    "max_community": "max_community",
    "seed": "seed",
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate an LFR benchmark network with planted communities"
    )
    parser.add_argument("--config", type=str, default=None,
                        help="YAML parameter file (default: packaged lfr_params.yaml)")
    parser.add_argument("--nodes", type=int, default=None, help="Number of nodes")
    parser.add_argument("--tau1", type=float, default=None,
                        help="Power-law exponent of the degree distribution")
    parser.add_argument("--tau2", type=float, default=None,
                        help="Power-law exponent of the community size distribution")
    parser.add_argument("--mu", type=float, default=None, help="Mixing parameter")
    parser.add_argument("--min-degree", type=int, default=None, help="Minimum degree")
    parser.add_argument("--max-degree", type=int, default=None, help="Maximum degree")
    parser.add_argument("--avg-degree", type=float, default=None, help="Target average degree")
    parser.add_argument("--min-community", type=int, default=None, help="Minimum community size")
    parser.add_argument("--max-community", type=int, default=None, help="Maximum community size")
    parser.add_argument("--directed", action="store_true", default=None,
                        help="Generate a directed network")
    parser.add_argument("--symmetrical", action="store_true", default=None,
                        help="Mirror every directed edge")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=str, default=DEFAULT_OUTPUT_DIR,
                        help="Output directory for exported files")
    parser.add_argument("--format", choices=["gml", "csv", "both", "none"], default="both",
                        help="Export format")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def resolve_params(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Merge the YAML parameters with command-line overrides.

    Raises
    ------
    LFRParameterError
        If the merged set names an unknown parameter or lacks a
        required one
    """
    params = load_generator_params(args.config)

    for dest, name in _PARAM_FLAGS.items():
        value = getattr(args, dest)
        if value is not None:
            params[name] = value

    for flag in ("directed", "symmetrical"):
        if getattr(args, flag):
            params[flag] = True

    for key in sorted(set(params) - _known_params()):
        logger.error(f"Unknown parameter in configuration: {key}")
        raise LFRParameterError(key, "unknown parameter")

    for key in _required_params():
        if key not in params:
            raise LFRParameterError(key, "missing required parameter")

    return params


def _known_params() -> Set[str]:
    return {"n", "directed", "seed"} | {f.name for f in fields(LFRParameters)}


def _required_params() -> List[str]:
    return ["n"] + [f.name for f in fields(LFRParameters) if f.default is MISSING]


def run(params: Dict[str, Any], output: Optional[str], fmt: str = "both") -> Dict[str, Any]:
    """
    Generate, summarize and export one network.

    Parameters
    ----------
    params : dict
        Generator parameters plus ``n``, ``directed`` and ``seed``
    output : str, optional
        Output directory; nothing is exported if None
    fmt : str, optional
        'gml', 'csv', 'both' or 'none' (default: 'both')

    Returns
    -------
    dict
        Network summary, with the exported paths under ``'files'``
    """
    params = dict(params)
    n = int(params.pop("n"))
    directed = bool(params.pop("directed", False))
    seed = params.pop("seed", None)

    generator = LFRNetworkGenerator(seed=seed, **params)
    G = nx.empty_graph(n, create_using=nx.DiGraph if directed else nx.Graph)
    generator.create_network(G)

    summary = summarize_network(G, generator)
    log_network_summary(summary)

    files: Dict[str, str] = {}
    if output is not None and fmt != "none":
        output_dir = Path(output)
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if fmt in ("gml", "both"):
            files["gml"] = str(export_gml(G, generator, output_dir / f"lfr_network_{timestamp}.gml"))
        if fmt in ("csv", "both"):
            nodes_path, edges_path = export_csv(
                G,
                generator,
                output_dir / f"lfr_nodes_{timestamp}.csv",
                output_dir / f"lfr_edges_{timestamp}.csv",
            )
            files["nodes_csv"] = str(nodes_path)
            files["edges_csv"] = str(edges_path)

        summary_path = output_dir / f"lfr_summary_{timestamp}.json"
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(_make_serializable({**summary, "params": params, "seed": seed}), f, indent=2)
        files["summary"] = str(summary_path)

    summary["files"] = files
    return summary


def _make_serializable(obj):
    """Convert numpy values to plain Python for JSON serialization."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: _make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_make_serializable(v) for v in obj]
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    else:
        return obj


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        params = resolve_params(args)
        logger.info(f"Parameters: {params}")
        run(params, args.output, args.format)
    except FileNotFoundError as e:
        logger.error(f"Error loading configuration: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Error creating LFR network: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

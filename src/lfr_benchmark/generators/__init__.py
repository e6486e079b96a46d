"""
Generators Module
=================

This module provides the LFR benchmark generator and its pipeline
stages.

Submodules
----------
lfr
    LFRNetworkGenerator orchestrator and generate_lfr_network wrapper
sampling
    Bounded power-law sampling
degree_sequence
    Target degree sequence construction
community_sizes
    Power-law community sizes
assignment
    Node-to-community assignment
edges
    Greedy edge construction
parameters
    Validated parameter set and error types
host
    Graph capability protocol
"""

from .lfr import LFRNetworkGenerator, generate_lfr_network
from .parameters import (
    LFRParameters,
    LFRParameterError,
    GenerationError,
    GeneratorStateError,
)
from .edges import EdgeConstructor, EdgeConstructionStats
from .host import HostGraph
from .sampling import sample_power_law, power_law_inverse
from .degree_sequence import build_degree_sequence
from .community_sizes import build_community_sizes
from .assignment import assign_nodes_to_communities

__all__ = [
    # LFR
    "LFRNetworkGenerator",
    "generate_lfr_network",
    # Parameters and errors
    "LFRParameters",
    "LFRParameterError",
    "GenerationError",
    "GeneratorStateError",
    # Pipeline stages
    "sample_power_law",
    "power_law_inverse",
    "build_degree_sequence",
    "build_community_sizes",
    "assign_nodes_to_communities",
    "EdgeConstructor",
    "EdgeConstructionStats",
    "HostGraph",
]

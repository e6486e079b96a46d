"""
Metrics Module
==============

This module provides read-only quality metrics for generated
LFR networks.

Submodules
----------
quality
    Modularity, degree/community/mixing statistics and validation
"""

from .quality import (
    compute_modularity,
    compute_degree_statistics,
    compute_community_statistics,
    compute_mixing_statistics,
    summarize_community_attribute,
    summarize_network,
    log_network_summary,
    validate_network,
    parse_communities,
    partition_edges,
    edge_type,
)

__all__ = [
    # Partition quality
    "compute_modularity",
    "compute_mixing_statistics",
    # Distributions
    "compute_degree_statistics",
    "compute_community_statistics",
    "summarize_community_attribute",
    # Reports
    "summarize_network",
    "log_network_summary",
    "validate_network",
    # Helpers
    "parse_communities",
    "partition_edges",
    "edge_type",
]

"""
Data Module
===========

This module provides export and loading of generated LFR networks.

Submodules
----------
export
    GML and CSV writers
network_loader
    GML and CSV readers returning (graph, communities)
"""

from .export import export_gml, export_csv, generate_gml_lines
from .network_loader import load_lfr_gml, load_lfr_csv, load_lfr_network

__all__ = [
    "export_gml",
    "export_csv",
    "generate_gml_lines",
    "load_lfr_gml",
    "load_lfr_csv",
    "load_lfr_network",
]

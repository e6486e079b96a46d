"""
LFR Benchmark Generator
=======================

Synthetic benchmark graphs with planted, power-law distributed
community structure and a tunable mixing parameter (the
Lancichinetti-Fortunato-Radicchi model), for evaluating algorithms
that depend on community topology such as propagation models and
community detection.

Modules
-------
generators
    LFR generator and its pipeline stages
metrics
    Modularity, degree and community statistics, validation report
data
    GML/CSV export and loading
config
    Constants and YAML parameter loading
"""

__version__ = "0.1.0"

from . import metrics
from . import generators
from . import data

from .generators import LFRNetworkGenerator, generate_lfr_network

__all__ = [
    "metrics",
    "generators",
    "data",
    "LFRNetworkGenerator",
    "generate_lfr_network",
    "__version__",
]

"""
WEAVER++/ARC lesion sweep package.

Modules
-------
config        : Shared constants and the run configuration.
errors        : Exception hierarchy.
topology      : Layer inventories and binary adjacency of the small and large networks.
network       : Projection table and one-time rate scaling.
lesion        : Severity grids, lesion profiles and per-cell lesion factors.
simulation    : Discrete-time spreading-activation engine for one cell.
sweep         : Study sweep orchestration.
metrics       : Time means, normalized scores, MAE and best-fit search.
studies       : Study definitions and reference datasets.
report        : Plain-text result report.
visualization : Score and MAE plotting functions.
utils         : Shared helpers.
"""

from .config import *
from .errors import WeaverError, ConfigurationError
from .studies import STUDIES, get_study
from .sweep import run_study

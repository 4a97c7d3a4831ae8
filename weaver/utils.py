"""
WEAVER++/ARC Lesion Sweep — Shared Utilities
=============================================
Small helpers used by the report and visualization modules.
"""

import numpy as np

from .errors import ConfigurationError


def severity_index(grid, value):
    """Robustly find the grid position of *value* when it may be float-ish."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"severity must be a number, got {value!r}") from None
    hits = np.flatnonzero(np.isclose(np.asarray(grid, dtype=float), v, atol=1e-9, rtol=0))
    if len(hits) == 0:
        raise ConfigurationError(f"severity {v:.2f} is not on the grid")
    return int(hits[0])

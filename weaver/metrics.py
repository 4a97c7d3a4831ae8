"""
WEAVER++/ARC Lesion Sweep — Aggregation & Fit Search
=====================================================
Time-averaged activations, normalized percentage scores, mean absolute
errors against reference data, and the best-fit severity scan.

Array conventions (``S`` severities, ``G`` groups, ``K`` = 3 tasks,
``C`` = 6 critical nodes):

* series : ``(S, n_steps, G, K, C)``
* means  : ``(S, G, K, C)``
* scores : ``(S, G, K)``
* errors : ``(S, G)``
"""

import logging
from collections import namedtuple

import numpy as np

from .config import CONTROL, NO_DAMAGE, TASKS, TASK_READOUT

logger = logging.getLogger(__name__)

# control contrasts below this magnitude leave a score undefined
MIN_CONTRAST = 1e-12

GroupFit = namedtuple("GroupFit", [
    "group",          # group index
    "name",           # display name
    "reference",      # (3,) reference scores
    "best_index",     # severity index of the best fit, or None
    "severity",       # severity value at best fit (1.0 for the control)
    "mae",            # MAE at best fit (nan without a fit)
    "scores",         # (3,) simulated scores at best fit
    "table_scores",   # (S, 3) simulated scores at every severity
    "table_errors",   # (S,) MAE at every severity
])


# ─────────────────────────────────────────────────────────────────────
# Scores
# ─────────────────────────────────────────────────────────────────────

def mean_activations(series):
    """Arithmetic mean over the step axis (axis 1)."""
    return np.asarray(series, dtype=float).mean(axis=1)


def contrasts(means):
    """Target minus foil activation of each task's readout pair, ``(S, G, K)``."""
    means = np.asarray(means, dtype=float)
    out = np.empty(means.shape[:3])
    for task in TASKS:
        target, foil = TASK_READOUT[task]
        out[:, :, task] = means[:, :, task, target] - means[:, :, task, foil]
    return out


def simulated_scores(means):
    """
    Percentage scores relative to the control group.

    ``score[s, g, k] = contrast[s, g, k] / contrast[s, CONTROL, k] * 100``,
    i.e. the control at the same severity index is the 100 % reference.

    Returns
    -------
    np.ndarray, shape (S, G, K)
        ``nan`` where the control contrast is (near) zero or the ratio is
        not finite.
    """
    c = contrasts(means)
    denom = c[:, CONTROL:CONTROL + 1, :]
    defined = np.abs(denom) >= MIN_CONTRAST
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(defined, c / np.where(defined, denom, 1.0) * 100.0, np.nan)
    scores[~np.isfinite(scores)] = np.nan
    return scores


def mean_absolute_errors(scores, reference):
    """MAE over the three tasks, ``(S, G)``; ``nan`` if any task is undefined."""
    scores = np.asarray(scores, dtype=float)
    reference = np.asarray(reference, dtype=float)
    return np.abs(scores - reference[np.newaxis, :, :]).mean(axis=2)


# ─────────────────────────────────────────────────────────────────────
# Fit search
# ─────────────────────────────────────────────────────────────────────

def best_fit_index(errors):
    """
    Index of the smallest defined error.

    Running-minimum scan from index 0; a later entry replaces the current
    best only when strictly smaller, so ties keep the first occurrence.
    Undefined (``nan``) entries are skipped.

    Returns
    -------
    int or None
        ``None`` when no entry is defined.
    """
    errors = np.asarray(errors, dtype=float)
    best = None
    for i, e in enumerate(errors):
        if not np.isfinite(e):
            continue
        if best is None or e < errors[best]:
            best = i
    return best


def fit_group(scores, errors, reference, grid, group, name=None):
    """
    Best fit of one group.

    Parameters
    ----------
    scores : np.ndarray, shape (S, G, K)
    errors : np.ndarray, shape (S, G)
    reference : np.ndarray, shape (G, K)
    grid : array_like, length S
    group : int
    name : str, optional

    Returns
    -------
    GroupFit
        The control group is reported at severity 1.0 with the values of
        index 0 (every index carries the same intact control).
    """
    table_scores = np.asarray(scores[:, group, :], dtype=float)
    table_errors = np.asarray(errors[:, group], dtype=float)

    if group == CONTROL:
        best = 0 if np.isfinite(table_errors[0]) else None
        severity = NO_DAMAGE
    else:
        best = best_fit_index(table_errors)
        severity = None if best is None else float(grid[best])

    if best is None:
        logger.warning("no defined fit for group %s: control contrast vanishes "
                       "at every severity", name or group)
        return GroupFit(group, name, np.asarray(reference[group]), None, None, np.nan,
                        np.full(len(TASKS), np.nan), table_scores, table_errors)

    return GroupFit(
        group=group,
        name=name,
        reference=np.asarray(reference[group]),
        best_index=best,
        severity=severity,
        mae=float(table_errors[best]),
        scores=table_scores[best],
        table_scores=table_scores,
        table_errors=table_errors,
    )


def fit_groups(means, reference, grid, group_names=None):
    """
    Scores, errors and best fits of every group against one assessment.

    Parameters
    ----------
    means : np.ndarray, shape (S, G, K, C)
    reference : np.ndarray, shape (G, K)
    grid : array_like, length S
    group_names : sequence of str, optional

    Returns
    -------
    list of GroupFit
    """
    scores = simulated_scores(means)
    errors = mean_absolute_errors(scores, reference)
    n_groups = scores.shape[1]
    if group_names is None:
        group_names = [str(g) for g in range(n_groups)]
    return [fit_group(scores, errors, reference, grid, g, group_names[g])
            for g in range(n_groups)]

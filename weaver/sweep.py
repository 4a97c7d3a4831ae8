"""
WEAVER++/ARC Lesion Sweep — Sweep Engine
=========================================
``sweep_assessment`` runs every (severity, group, task) cell of a study and
stacks the critical-node activations into one series array; ``run_study``
fits that series against each assessment of the study.

The assessment only selects reference data, so the series is simulated once
per study and reused for every assessment.
"""

import concurrent.futures
import logging
from itertools import product

import numpy as np

from .config import TASKS, CRITICAL_NODES, make_run_config
from .lesion import derive_factors, severity_grid
from .metrics import mean_activations, fit_groups
from .network import scale, spreading_rates
from .simulation import simulate_cell
from .studies import get_assessment, validate_study

logger = logging.getLogger(__name__)


def build_network(study, run_config):
    """Rate-scale the study's topology once for a run."""
    rates = spreading_rates(run_config, sem_multiplier=study.sem_multiplier)
    return scale(study.topology, rates)


def sweep_assessment(study, network, run_config, grid, max_workers=1):
    """
    Simulate every cell of a study.

    Parameters
    ----------
    study : Study
    network : ScaledNetwork
        Shared, read-only; built by ``build_network``.
    run_config : RunConfig
    grid : np.ndarray
        Severity grid for ``run_config.lesion_mode``.
    max_workers : int
        Cells are dispatched to a thread pool when greater than 1.

    Returns
    -------
    series : np.ndarray, shape (S, n_steps, G, K, C)
        Cell results land in preallocated slots, so the array does not
        depend on completion order.
    """
    n_groups = len(study.profile.group_names)
    series = np.zeros((len(grid), run_config.n_steps, n_groups, len(TASKS),
                       len(CRITICAL_NODES)))

    def run_cell(cell):
        s, g, k = cell
        factors = derive_factors(study.profile, g, s, run_config.lesion_mode, grid)
        series[s, :, g, k, :] = simulate_cell(network, factors, k, run_config)

    cells = list(product(range(len(grid)), range(n_groups), TASKS))
    logger.info("%s: %d cells (%d severities x %d groups x %d tasks), %s lesion",
                study.key, len(cells), len(grid), n_groups, len(TASKS),
                run_config.lesion_mode)

    if max_workers is None or max_workers <= 1:
        for cell in cells:
            run_cell(cell)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(run_cell, cell) for cell in cells]
            for future in concurrent.futures.as_completed(futures):
                future.result()

    return series


def run_study(study, run_config=None, assessment=None, max_workers=1):
    """
    Sweep a study and fit every (or one) assessment.

    Parameters
    ----------
    study : Study
    run_config : RunConfig, optional
        Defaults to ``make_run_config()``.
    assessment : str, optional
        Key of a single assessment; all assessments when None.
    max_workers : int
        Passed to ``sweep_assessment``.

    Returns
    -------
    study_results : dict
        Keyed by assessment key, in declaration order.  Each entry contains
        ``assessment``, ``grid``, ``lesion_mode``, ``means`` and ``fits``
        (a list of ``GroupFit``).
    """
    if run_config is None:
        run_config = make_run_config()
    validate_study(study)
    assessments = (study.assessments if assessment is None
                   else (get_assessment(study, assessment),))

    grid = severity_grid(run_config.lesion_mode, run_config.grid_size)
    network = build_network(study, run_config)
    series = sweep_assessment(study, network, run_config, grid, max_workers=max_workers)
    means = mean_activations(series)

    study_results = {}
    for a in assessments:
        fits = fit_groups(means, a.scores, grid, study.profile.group_names)
        study_results[a.key] = {
            "assessment": a,
            "grid": grid,
            "lesion_mode": run_config.lesion_mode,
            "means": means,
            "fits": fits,
        }
        logger.info("  %s fitted", a.title)

    return study_results

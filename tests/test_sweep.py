"""
Integration tests for the sweep driver and fit search.
"""

import numpy as np
import pytest

from weaver.config import CONTROL, NAMING, DECAY_LESION, make_run_config
from weaver.lesion import severity_grid
from weaver.metrics import mean_activations, simulated_scores, fit_groups
from weaver.studies import STUDIES
from weaver.sweep import build_network, sweep_assessment, run_study


@pytest.fixture(scope="module")
def cluster_results():
    study = STUDIES["logopenic_clusters"]
    return run_study(study, make_run_config(grid_size=50))


def test_series_shape(clusters, small_network, run_config, coarse_grid):
    series = sweep_assessment(clusters, small_network, run_config, coarse_grid)
    assert series.shape == (3, 80, 4, 3, 6)


def test_thread_pool_matches_serial(clusters, small_network, run_config, coarse_grid):
    serial = sweep_assessment(clusters, small_network, run_config, coarse_grid)
    pooled = sweep_assessment(clusters, small_network, run_config, coarse_grid,
                              max_workers=4)
    np.testing.assert_array_equal(serial, pooled)


def test_control_identical_across_severities(clusters, small_network, run_config,
                                              coarse_grid):
    series = sweep_assessment(clusters, small_network, run_config, coarse_grid)
    for s in range(1, len(coarse_grid)):
        np.testing.assert_array_equal(series[s, :, CONTROL], series[0, :, CONTROL])


def test_control_scores_exactly_100(cluster_results):
    fits = cluster_results["leyton"]["fits"]
    np.testing.assert_array_equal(fits[CONTROL].table_scores, 100.0)
    assert fits[CONTROL].severity == 1.0


@pytest.mark.parametrize("study_key", ["group_studies", "logopenic_clusters"])
def test_naming_damage_trend(study_key, run_config):
    study = STUDIES[study_key]
    network = build_network(study, run_config)
    grid = np.array([0.0, 0.99])
    scores = simulated_scores(mean_activations(
        sweep_assessment(study, network, run_config, grid)))
    for g in range(1, scores.shape[1]):
        assert scores[0, g, NAMING] <= scores[1, g, NAMING]


@pytest.mark.parametrize("mode", ["weight", "decay"])
def test_scores_bounded(mode):
    study = STUDIES["logopenic_clusters"]
    rc = make_run_config(lesion_mode=mode)
    grid = severity_grid(mode)[::11]
    scores = simulated_scores(mean_activations(
        sweep_assessment(study, build_network(study, rc), rc, grid)))
    finite = scores[np.isfinite(scores)]
    assert finite.size > 0
    assert np.all(finite >= -10.0)
    assert np.all(finite <= 110.0)


def test_best_fit_recovers_known_severity(cluster_results):
    result = cluster_results["leyton"]
    grid = result["grid"]
    reference = simulated_scores(result["means"])[42]
    fits = fit_groups(result["means"], reference, grid)
    for fit in fits[1:]:
        assert fit.best_index is not None
        assert fit.best_index <= 42
        assert fit.mae == 0.0
        np.testing.assert_array_equal(fit.scores, reference[fit.group])


def test_leyton_cluster_fits_on_full_weight_grid():
    result = run_study(STUDIES["logopenic_clusters"])["leyton"]
    fits = result["fits"][1:]
    assert [f.severity for f in fits] == pytest.approx([0.86, 0.76, 0.64])
    assert [f.mae for f in fits] == pytest.approx([6.01, 3.66, 2.27], abs=0.005)


def test_group_study_reuses_series_for_every_assessment():
    study = STUDIES["group_studies"]
    results = run_study(study, make_run_config(grid_size=2))
    assert list(results) == [a.key for a in study.assessments]
    means = [r["means"] for r in results.values()]
    assert all(m is means[0] for m in means)


def test_single_assessment():
    study = STUDIES["group_studies"]
    results = run_study(study, make_run_config(grid_size=2), assessment="dutch")
    assert list(results) == ["dutch"]
    assert len(results["dutch"]["fits"]) == 4


def test_decay_sweep_uses_decay_grid():
    study = STUDIES["logopenic_cases"]
    results = run_study(study, make_run_config(lesion_mode=DECAY_LESION, grid_size=3))
    result = results["janssen"]
    np.testing.assert_array_equal(result["grid"], [1.01, 1.02, 1.03])
    assert len(result["fits"]) == 21
    for fit in result["fits"][1:]:
        assert fit.severity in (1.01, 1.02, 1.03)

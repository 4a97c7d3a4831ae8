"""
Unit tests for the activation engine.
"""

import numpy as np
import pytest

from weaver.config import (
    NAMING, COMPREHENSION, REPETITION, TASKS, CONCEPT_TARGET, CONCEPT_FOIL,
    SYLLABLE_TARGET, SYLLABLE_FOIL, WEIGHT_LESION,
)
from weaver.errors import ConfigurationError
from weaver.lesion import CLUSTER_PROFILE, INTACT, derive_factors, weight_grid
from weaver.simulation import (
    CellContext, reset_activations, external_input, simulate_cell,
)
from weaver.topology import CONCEPT, INPUT_PHONEME, LAYERS


@pytest.mark.parametrize("task", TASKS)
def test_deterministic(small_network, run_config, task):
    a = simulate_cell(small_network, INTACT, task, run_config)
    b = simulate_cell(small_network, INTACT, task, run_config)
    np.testing.assert_array_equal(a, b)


def test_output_shape(small_network, run_config):
    critical = simulate_cell(small_network, INTACT, NAMING, run_config)
    assert critical.shape == (80, 6)


def test_trace(small_network, run_config):
    critical, trace = simulate_cell(small_network, INTACT, NAMING, run_config,
                                    record_trace=True)
    assert set(trace) == set(LAYERS)
    assert trace[CONCEPT].shape == (80, 5)
    np.testing.assert_array_equal(trace[CONCEPT][:, 0], critical[:, CONCEPT_TARGET])


def test_reset_isolation(small_network, run_config):
    fresh = simulate_cell(small_network, INTACT, REPETITION, run_config)
    lesioned = derive_factors(CLUSTER_PROFILE, 1, 3, WEIGHT_LESION, weight_grid())
    simulate_cell(small_network, lesioned, NAMING, run_config)
    again = simulate_cell(small_network, INTACT, REPETITION, run_config)
    np.testing.assert_array_equal(fresh, again)


def test_naming_target_rises_while_picture_shown(small_network, run_config):
    critical = simulate_cell(small_network, INTACT, NAMING, run_config)
    target = critical[:, CONCEPT_TARGET]
    # picture on for T < 125 ms, i.e. steps 0..4
    assert target[0] > 0
    assert np.all(np.diff(target[:5]) > 0)


def test_naming_activation_settles(small_network, run_config):
    critical = simulate_cell(small_network, INTACT, NAMING, run_config)
    target = critical[:, CONCEPT_TARGET]
    early = np.max(np.abs(np.diff(target[6:13])))
    late = np.max(np.abs(np.diff(target[40:])))
    assert late < early
    assert np.all(np.isfinite(critical))


def test_naming_favours_target(small_network, run_config):
    critical = simulate_cell(small_network, INTACT, NAMING, run_config)
    assert critical[:, SYLLABLE_TARGET].mean() > critical[:, SYLLABLE_FOIL].mean()


def test_comprehension_favours_target(small_network, run_config):
    critical = simulate_cell(small_network, INTACT, COMPREHENSION, run_config)
    assert critical[:, CONCEPT_TARGET].mean() > critical[:, CONCEPT_FOIL].mean()


def test_spoken_input_schedule(small_network, run_config):
    ctx = CellContext(small_network, INTACT, REPETITION, run_config)
    for t, phoneme in ((0, 0), (100, 0), (125, 1), (250, 2), (350, 2)):
        inputs = reset_activations(small_network)
        external_input(ctx, t, inputs)
        assert inputs[INPUT_PHONEME][phoneme] == pytest.approx(4.9125)
        assert inputs[INPUT_PHONEME].sum() == pytest.approx(4.9125)
    inputs = reset_activations(small_network)
    external_input(ctx, 375, inputs)
    assert inputs[INPUT_PHONEME].sum() == 0.0


def test_picture_schedule(small_network, run_config):
    ctx = CellContext(small_network, INTACT, NAMING, run_config)
    expected = {0: 4.9125, 25: 9.825, 100: 9.825, 125: 4.9125, 150: 0.0}
    for t, drive in expected.items():
        inputs = reset_activations(small_network)
        external_input(ctx, t, inputs)
        assert inputs[CONCEPT][0] == pytest.approx(drive)


def test_network_not_modified(small_network, run_config):
    before = {k: w.copy() for k, w in small_network.weights.items()}
    simulate_cell(small_network, INTACT, COMPREHENSION, run_config)
    for k, w in small_network.weights.items():
        np.testing.assert_array_equal(w, before[k])


def test_unknown_task_raises(small_network, run_config):
    with pytest.raises(ConfigurationError):
        simulate_cell(small_network, INTACT, 3, run_config)

"""
Unit tests for run configuration.
"""

import pytest

from weaver.config import (
    BASE_RUN, RunConfig, make_run_config, per_step, DECAY_LESION,
)
from weaver.errors import ConfigurationError, WeaverError


def test_defaults_match_base_run():
    rc = make_run_config()
    assert isinstance(rc, RunConfig)
    assert rc._asdict() == BASE_RUN


def test_per_step_rates():
    rc = make_run_config()
    assert per_step(rc.decay_rate, rc) == pytest.approx(0.6)
    assert per_step(rc.external_input, rc) == pytest.approx(4.9125)
    assert per_step(rc.lex_rate, rc) == pytest.approx(0.3)


def test_overrides():
    rc = make_run_config(lesion_mode=DECAY_LESION, grid_size=10)
    assert rc.lesion_mode == "decay"
    assert rc.grid_size == 10


@pytest.mark.parametrize("overrides", [
    {"bogus": 1},
    {"n_steps": 0},
    {"step_size": 2.5},
    {"decay_rate": -0.1},
    {"lesion_mode": "both"},
    {"grid_size": 0},
])
def test_invalid_overrides_raise(overrides):
    with pytest.raises(ConfigurationError):
        make_run_config(**overrides)


def test_configuration_error_is_weaver_error():
    assert issubclass(ConfigurationError, WeaverError)

"""
Unit tests for severity grids and lesion factors.
"""

import numpy as np
import pytest

from weaver.config import CONTROL, WEIGHT_LESION, DECAY_LESION
from weaver.errors import ConfigurationError
from weaver.lesion import (
    GROUP_PROFILE, CLUSTER_PROFILE, CASE_PROFILE, INTACT, PICTURE,
    NONFLUENT_AGRAMMATIC, SEMANTIC_DEMENTIA, LOGOPENIC,
    weight_grid, decay_grid, severity_grid, derive_factors, validate_profile,
)
from weaver.topology import (
    CONCEPT, LEMMA, OUTPUT_MORPHEME, OUTPUT_PHONEME, SYLLABLE,
)


def test_weight_grid():
    grid = weight_grid()
    assert len(grid) == 100
    assert grid[0] == 0.0
    assert grid[42] == 0.42
    assert grid[-1] == 0.99


def test_decay_grid():
    grid = decay_grid()
    assert len(grid) == 66
    assert grid[0] == 1.01
    assert grid[-1] == 1.66


def test_weight_grid_capped():
    with pytest.raises(ConfigurationError, match="at most 100"):
        weight_grid(101)


def test_decay_grid_capped():
    with pytest.raises(ConfigurationError):
        decay_grid(67)


def test_severity_grid_dispatch():
    np.testing.assert_array_equal(severity_grid(WEIGHT_LESION, 5),
                                  [0.0, 0.01, 0.02, 0.03, 0.04])
    assert len(severity_grid(DECAY_LESION)) == 66
    with pytest.raises(ConfigurationError):
        severity_grid("both")


@pytest.mark.parametrize("profile", [GROUP_PROFILE, CLUSTER_PROFILE, CASE_PROFILE])
@pytest.mark.parametrize("mode", [WEIGHT_LESION, DECAY_LESION])
def test_control_is_never_lesioned(profile, mode):
    grid = severity_grid(mode)
    for s in (0, 10, len(grid) - 1):
        assert derive_factors(profile, CONTROL, s, mode, grid) == INTACT


def test_weight_lesion_sets_connections_only():
    grid = weight_grid()
    factors = derive_factors(GROUP_PROFILE, SEMANTIC_DEMENTIA, 30, WEIGHT_LESION, grid)
    assert factors.decay == {}
    assert factors.connection[(CONCEPT, CONCEPT)] == 0.30
    assert factors.connection[(CONCEPT, LEMMA)] == 0.30
    assert factors.connection[(LEMMA, CONCEPT)] == 0.30
    assert factors.connection[PICTURE] == 0.30
    assert (OUTPUT_PHONEME, SYLLABLE) not in factors.connection


def test_decay_lesion_sets_layers_only():
    grid = decay_grid()
    factors = derive_factors(GROUP_PROFILE, NONFLUENT_AGRAMMATIC, 9, DECAY_LESION, grid)
    assert factors.connection == {}
    assert factors.decay == {OUTPUT_PHONEME: 1.10}


def test_logopenic_pathways():
    factors = derive_factors(GROUP_PROFILE, LOGOPENIC, 0, WEIGHT_LESION, weight_grid())
    assert set(factors.connection) == {
        (LEMMA, OUTPUT_MORPHEME), ("input_morpheme", OUTPUT_MORPHEME),
        (OUTPUT_MORPHEME, OUTPUT_PHONEME),
        ("input_phoneme", OUTPUT_PHONEME), (OUTPUT_PHONEME, "input_phoneme"),
    }


def test_cluster_two_decay_layers():
    factors = derive_factors(CLUSTER_PROFILE, 2, 0, DECAY_LESION, decay_grid())
    assert factors.decay == {OUTPUT_MORPHEME: 1.01, LEMMA: 1.01}


def test_case_profile_has_twenty_cases():
    assert len(CASE_PROFILE.group_names) == 21
    assert CASE_PROFILE.group_names[20] == "Case 20"


@pytest.mark.parametrize("profile", [GROUP_PROFILE, CLUSTER_PROFILE, CASE_PROFILE])
def test_profiles_validate(profile):
    assert validate_profile(profile) is profile


def test_unknown_pathway_raises():
    bad = CLUSTER_PROFILE._replace(connections={1: ((SYLLABLE, CONCEPT),)})
    with pytest.raises(ConfigurationError, match="pathway"):
        validate_profile(bad)


def test_control_entry_raises():
    bad = CLUSTER_PROFILE._replace(decay={CONTROL: (CONCEPT,)})
    with pytest.raises(ConfigurationError):
        validate_profile(bad)


def test_unknown_group_raises():
    with pytest.raises(ConfigurationError):
        derive_factors(CLUSTER_PROFILE, 4, 0, WEIGHT_LESION, weight_grid())

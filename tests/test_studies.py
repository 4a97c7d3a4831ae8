"""
Unit tests for study definitions and reference data.
"""

import numpy as np
import pytest

from weaver.errors import ConfigurationError
from weaver.studies import STUDIES, get_study, get_assessment, validate_study
from weaver.topology import SMALL, LARGE


@pytest.mark.parametrize("key", sorted(STUDIES))
def test_studies_validate(key):
    assert validate_study(STUDIES[key]) is STUDIES[key]


def test_study_networks():
    assert get_study("group_studies").topology is LARGE
    assert get_study("group_studies").sem_multiplier == 0.2
    assert get_study("logopenic_clusters").topology is SMALL
    assert get_study("logopenic_cases").topology is SMALL


def test_group_study_assessments():
    keys = [a.key for a in get_study("group_studies").assessments]
    assert keys == ["english", "dutch", "brambati_t1", "brambati_t2",
                    "rohrer_mandelli_t1", "rohrer_mandelli_t2"]


def test_reference_values():
    english = get_assessment(get_study("group_studies"), "english")
    np.testing.assert_array_equal(english.scores[2], [22.7, 63.3, 95.3])
    leyton = get_assessment(get_study("logopenic_clusters"), "leyton")
    np.testing.assert_array_equal(leyton.scores[3], [32.0, 85.3, 52.7])
    janssen = get_assessment(get_study("logopenic_cases"), "janssen")
    assert janssen.scores.shape == (21, 3)
    np.testing.assert_array_equal(janssen.scores[0], [90.0, 96.0, 97.0])


def test_reference_is_read_only():
    english = get_assessment(get_study("group_studies"), "english")
    with pytest.raises(ValueError):
        english.scores[0, 0] = 0.0


def test_unknown_keys_raise():
    with pytest.raises(ConfigurationError, match="unknown study"):
        get_study("aphasia")
    with pytest.raises(ConfigurationError, match="unknown assessment"):
        get_assessment(get_study("group_studies"), "leyton")


def test_mismatched_reference_raises():
    study = get_study("logopenic_clusters")
    bad = study.assessments[0]._replace(scores=np.zeros((3, 3)))
    with pytest.raises(ConfigurationError, match="shape"):
        validate_study(study._replace(assessments=(bad,)))

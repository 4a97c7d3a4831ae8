"""
WEAVER++/ARC Lesion Sweep — Studies & Reference Data
=====================================================
The three simulated studies and the percentage-correct data they are fitted
to.  Score rows are ``(naming, comprehension, repetition)``; row 0 is always
the control group.

* ``group_studies`` — large network; normal, nonfluent/agrammatic,
  semantic-dementia and logopenic groups from six assessments.
* ``logopenic_clusters`` — small network; three logopenic clusters.
* ``logopenic_cases`` — small network; twenty individual logopenic cases.
"""

from collections import namedtuple

import numpy as np

from .config import TASKS
from .errors import ConfigurationError
from .lesion import GROUP_PROFILE, CLUSTER_PROFILE, CASE_PROFILE, validate_profile
from .topology import SMALL, LARGE, validate_topology

Assessment = namedtuple("Assessment", [
    "key",      # str
    "title",    # citation printed above the fits
    "scores",   # read-only (n_groups, 3) array of percentage correct
])

Study = namedtuple("Study", [
    "key",             # str
    "title",           # one-line description
    "topology",        # binary Topology
    "sem_multiplier",  # scale on the conceptual spreading rate
    "profile",         # LesionProfile
    "assessments",     # tuple of Assessment, in reporting order
])


def _scores(*rows):
    a = np.array(rows, dtype=float)
    a.setflags(write=False)
    return a


# ── Group studies ────────────────────────────────────────────────────
_GROUP_ASSESSMENTS = (
    Assessment("english", "Savage et al. (2013), English", _scores(
        [88.7, 97.0, 99.7],
        [78.3, 94.3, 79.7],
        [22.7, 63.3, 95.3],
        [41.3, 84.7, 84.7],
    )),
    Assessment("dutch", "Janssen et al. (2022), Dutch", _scores(
        [90.3, 96.3, 96.7],
        [77.3, 97.7, 89.3],
        [29.0, 78.0, 96.3],
        [66.3, 93.7, 91.3],
    )),
    Assessment("brambati_t1", "Brambati et al. (2015), baseline T1", _scores(
        [90.3, 96.3, 96.7],
        [85.3, 99.7, 83.7],
        [26.7, 88.0, 90.6],
        [69.3, 95.0, 69.0],
    )),
    Assessment("brambati_t2", "Brambati et al. (2015), follow up T2", _scores(
        [90.3, 96.3, 96.7],
        [83.3, 94.8, 68.0],
        [19.3, 66.7, 82.3],
        [52.7, 95.0, 58.8],
    )),
    Assessment("rohrer_mandelli_t1",
               "Rohrer et al. (2013) and Mandelli et al. (2016), baseline T1", _scores(
        [90.3, 96.3, 96.7],
        [76.7, 99.0, 81.5],
        [26.7, 88.0, 90.6],
        [61.0, 94.0, 94.0],
    )),
    Assessment("rohrer_mandelli_t2",
               "Rohrer et al. (2013) and Mandelli et al. (2016), follow up T2", _scores(
        [90.3, 96.3, 96.7],
        [66.0, 90.0, 65.5],
        [26.7, 88.0, 90.6],
        [43.0, 85.0, 77.0],
    )),
)

# ── Logopenic clusters ───────────────────────────────────────────────
_CLUSTER_ASSESSMENTS = (
    Assessment("leyton", "Leyton et al. (2015)", _scores(
        [92.7, 97.3, 94.0],
        [67.3, 93.0, 93.3],
        [29.0, 77.7, 93.3],
        [32.0, 85.3, 52.7],
    )),
)

# ── Logopenic cases ──────────────────────────────────────────────────
_CASE_ASSESSMENTS = (
    Assessment("janssen", "Janssen et al. (2022)", _scores(
        [90.0, 96.0, 97.0],
        [80.0, 97.7, 100.0],
        [53.3, 100.0, 50.0],
        [80.0, 90.0, 100.0],
        [66.7, 93.3, 90.0],
        [70.0, 86.7, 96.7],
        [76.7, 100.0, 90.0],
        [66.7, 100.0, 93.3],
        [60.0, 86.7, 96.7],
        [83.3, 93.3, 86.7],
        [53.3, 90.0, 100.0],
        [40.0, 100.0, 93.3],
        [66.7, 93.3, 86.7],
        [63.3, 90.0, 83.3],
        [76.7, 93.3, 80.0],
        [70.0, 90.0, 96.7],
        [70.0, 86.7, 96.7],
        [63.3, 96.7, 96.7],
        [60.0, 90.0, 96.7],
        [73.3, 100.0, 100.0],
        [53.3, 93.3, 93.3],
    )),
)

STUDIES = {
    "group_studies": Study(
        key="group_studies",
        title="Group studies of the PPA variants (large network)",
        topology=LARGE,
        sem_multiplier=0.2,
        profile=GROUP_PROFILE,
        assessments=_GROUP_ASSESSMENTS,
    ),
    "logopenic_clusters": Study(
        key="logopenic_clusters",
        title="Clusters of the logopenic variant",
        topology=SMALL,
        sem_multiplier=1.0,
        profile=CLUSTER_PROFILE,
        assessments=_CLUSTER_ASSESSMENTS,
    ),
    "logopenic_cases": Study(
        key="logopenic_cases",
        title="Single cases of the logopenic variant",
        topology=SMALL,
        sem_multiplier=1.0,
        profile=CASE_PROFILE,
        assessments=_CASE_ASSESSMENTS,
    ),
}


def get_study(key):
    """Look up a study by key; raises ``ConfigurationError`` if unknown."""
    try:
        return STUDIES[key]
    except KeyError:
        raise ConfigurationError(
            f"unknown study {key!r}; choose from {', '.join(STUDIES)}") from None


def get_assessment(study, key):
    for assessment in study.assessments:
        if assessment.key == key:
            return assessment
    raise ConfigurationError(
        f"{study.key}: unknown assessment {key!r}; choose from "
        f"{', '.join(a.key for a in study.assessments)}")


def validate_study(study):
    """Check that topology, lesion profile and reference data agree."""
    validate_topology(study.topology)
    validate_profile(study.profile)
    n_groups = len(study.profile.group_names)
    if not study.assessments:
        raise ConfigurationError(f"{study.key}: no assessments")
    for assessment in study.assessments:
        if assessment.scores.shape != (n_groups, len(TASKS)):
            raise ConfigurationError(
                f"{study.key}/{assessment.key}: reference scores have shape "
                f"{assessment.scores.shape}, expected {(n_groups, len(TASKS))}")
    return study

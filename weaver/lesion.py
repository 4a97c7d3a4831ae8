"""
WEAVER++/ARC Lesion Sweep — Lesion Model
=========================================
Severity grids and the per-group lesion profiles.

A lesion is one scalar per simulation cell.  Under a weight lesion it
multiplies the connection weights of the group's pathways (0.0 = no
transmission, 0.99 = nearly intact); under a decay lesion it multiplies the
decay rate of the group's layers (1.01 = nearly intact, 1.66 = activation
fully cleared each step).  The control group is never lesioned.
"""

from collections import namedtuple

import numpy as np

from .config import (
    CONTROL, WEIGHT_LESION, DECAY_LESION, LESION_MODES,
    N_WEIGHT_VALUES, N_DECAY_VALUES, WEIGHT_START, DECAY_START, GRID_STEP,
)
from .errors import ConfigurationError
from .network import PROJECTIONS, projection_key
from .topology import (
    CONCEPT, LEMMA, OUTPUT_MORPHEME, OUTPUT_PHONEME, SYLLABLE,
    INPUT_PHONEME, INPUT_MORPHEME, LAYERS,
)

# base picture drive into the target concept during naming
PICTURE = "picture"

LesionProfile = namedtuple("LesionProfile", [
    "name",          # str
    "group_names",   # tuple of display names, index 0 = control
    "connections",   # dict group index -> tuple of pathways
    "decay",         # dict group index -> tuple of layers
])

LesionFactors = namedtuple("LesionFactors", [
    "connection",    # dict pathway -> weight factor (absent = 1.0)
    "decay",         # dict layer -> decay factor (absent = 1.0)
])

INTACT = LesionFactors(connection={}, decay={})


# ─────────────────────────────────────────────────────────────────────
# Severity grids
# ─────────────────────────────────────────────────────────────────────

def weight_grid(n=N_WEIGHT_VALUES):
    """``n`` weight factors 0.00, 0.01, ... (maximal to minimal damage).

    Capped at 100 values so every factor stays below 1.0.
    """
    if int(n) != n or n <= 0:
        raise ConfigurationError(f"weight grid needs a positive length, got {n!r}")
    if n > N_WEIGHT_VALUES:
        raise ConfigurationError(
            f"weight grid holds at most {N_WEIGHT_VALUES} values, got {n}")
    return np.round(WEIGHT_START + GRID_STEP * np.arange(int(n)), 2)


def decay_grid(n=N_DECAY_VALUES):
    """``n`` decay factors 1.01, 1.02, ... (minimal to maximal damage).

    Capped at 66 values: beyond 1.66 the per-step decay would exceed the
    activation it acts on.
    """
    if int(n) != n or n <= 0:
        raise ConfigurationError(f"decay grid needs a positive length, got {n!r}")
    if n > N_DECAY_VALUES:
        raise ConfigurationError(
            f"decay grid holds at most {N_DECAY_VALUES} values, got {n}")
    return np.round(DECAY_START + GRID_STEP * np.arange(int(n)), 2)


def severity_grid(mode, n=None):
    """Grid for *mode* with its default length unless *n* is given."""
    if mode == WEIGHT_LESION:
        return weight_grid(N_WEIGHT_VALUES if n is None else n)
    if mode == DECAY_LESION:
        return decay_grid(N_DECAY_VALUES if n is None else n)
    raise ConfigurationError(f"lesion mode must be one of {LESION_MODES}, got {mode!r}")


# ─────────────────────────────────────────────────────────────────────
# Factor derivation
# ─────────────────────────────────────────────────────────────────────

def derive_factors(profile, group, severity_index, mode, grid):
    """
    Lesion factors for one simulation cell.

    Parameters
    ----------
    profile : LesionProfile
    group : int
        Group index; ``CONTROL`` yields intact factors.
    severity_index : int
        Position in *grid*.
    mode : str
        ``WEIGHT_LESION`` or ``DECAY_LESION``; only the matching family of
        factors is set, the other stays at 1.0.
    grid : array_like
        Severity grid built by ``severity_grid``.

    Returns
    -------
    LesionFactors
    """
    if mode not in LESION_MODES:
        raise ConfigurationError(f"lesion mode must be one of {LESION_MODES}, got {mode!r}")
    if not 0 <= group < len(profile.group_names):
        raise ConfigurationError(f"{profile.name}: no group {group}")
    if group == CONTROL:
        return INTACT

    value = float(grid[severity_index])
    if mode == WEIGHT_LESION:
        return LesionFactors(
            connection={p: value for p in profile.connections.get(group, ())},
            decay={},
        )
    return LesionFactors(
        connection={},
        decay={layer: value for layer in profile.decay.get(group, ())},
    )


def validate_profile(profile):
    """Check group indices, pathways and layers of a lesion profile."""
    known = {projection_key(p) for p in PROJECTIONS} | {PICTURE}
    n_groups = len(profile.group_names)
    for table in (profile.connections, profile.decay):
        for group in table:
            if group == CONTROL or not 0 < group < n_groups:
                raise ConfigurationError(
                    f"{profile.name}: lesion entry for invalid group {group}")
    for group, pathways in profile.connections.items():
        unknown = [p for p in pathways if p not in known]
        if unknown:
            raise ConfigurationError(f"{profile.name}: unknown pathway(s) {unknown}")
    for group, layers in profile.decay.items():
        unknown = [layer for layer in layers if layer not in LAYERS]
        if unknown:
            raise ConfigurationError(f"{profile.name}: unknown layer(s) {unknown}")
    return profile


# ─────────────────────────────────────────────────────────────────────
# Profiles
# ─────────────────────────────────────────────────────────────────────

_MP = (OUTPUT_MORPHEME, OUTPUT_PHONEME)
_PP = ((INPUT_PHONEME, OUTPUT_PHONEME), (OUTPUT_PHONEME, INPUT_PHONEME))
_CL = ((CONCEPT, LEMMA), (LEMMA, CONCEPT))
_LEXICAL = (
    (LEMMA, OUTPUT_MORPHEME),
    (INPUT_MORPHEME, OUTPUT_MORPHEME),
    _MP,
)

NONFLUENT_AGRAMMATIC = 1
SEMANTIC_DEMENTIA = 2
LOGOPENIC = 3

GROUP_PROFILE = LesionProfile(
    name="group studies",
    group_names=("Normal", "Nonfluent/agrammatic", "Semantic dementia", "Logopenic"),
    connections={
        NONFLUENT_AGRAMMATIC: (_MP,) + _PP + ((OUTPUT_PHONEME, SYLLABLE),),
        SEMANTIC_DEMENTIA: ((CONCEPT, CONCEPT),) + _CL + (PICTURE,),
        LOGOPENIC: _LEXICAL + _PP,
    },
    decay={
        NONFLUENT_AGRAMMATIC: (OUTPUT_PHONEME,),
        SEMANTIC_DEMENTIA: (CONCEPT,),
        LOGOPENIC: (OUTPUT_MORPHEME,),
    },
)

CLUSTER_PROFILE = LesionProfile(
    name="logopenic clusters",
    group_names=("Normal", "Cluster 1", "Cluster 2", "Cluster 3"),
    connections={
        1: _LEXICAL + _PP,
        2: _LEXICAL + _CL,
        3: _LEXICAL + _PP,
    },
    decay={
        1: (OUTPUT_MORPHEME, OUTPUT_PHONEME),
        2: (OUTPUT_MORPHEME, LEMMA),
        3: (OUTPUT_MORPHEME, OUTPUT_PHONEME),
    },
)

N_CASES = 20

CASE_PROFILE = LesionProfile(
    name="logopenic cases",
    group_names=("Normal",) + tuple(f"Case {i}" for i in range(1, N_CASES + 1)),
    connections={i: _LEXICAL + _PP for i in range(1, N_CASES + 1)},
    decay={i: (OUTPUT_MORPHEME,) for i in range(1, N_CASES + 1)},
)

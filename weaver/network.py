"""
WEAVER++/ARC Lesion Sweep — Rate Scaling
=========================================
The projection table (which layer feeds which, through which binary
matrix, at which spreading rate) and ``scale``, which turns a binary
topology into an immutable ``ScaledNetwork`` exactly once per run.

Weights in a ``ScaledNetwork`` are read-only numpy arrays; every simulation
cell receives the same instance by reference.
"""

import logging
from collections import namedtuple
from types import MappingProxyType

import numpy as np

from .config import per_step
from .errors import ConfigurationError
from .topology import (
    CONCEPT, LEMMA, OUTPUT_MORPHEME, OUTPUT_PHONEME, SYLLABLE,
    INPUT_PHONEME, INPUT_MORPHEME, validate_topology,
)

logger = logging.getLogger(__name__)

Projection = namedtuple("Projection", [
    "source",     # sending layer
    "dest",       # receiving layer
    "matrix",     # key into Topology.adjacency
    "transpose",  # True when the matrix is stored dest-major
    "rate",       # key into the rate dict
    "fraction",   # rate key of a fraction applied at propagation time, or None
])

# Fixed order of internal-input accumulation.
PROJECTIONS = (
    Projection(CONCEPT, CONCEPT, (CONCEPT, CONCEPT), False, "sem", None),
    Projection(LEMMA, CONCEPT, (CONCEPT, LEMMA), True, "lem", None),
    Projection(CONCEPT, LEMMA, (CONCEPT, LEMMA), False, "lem", None),
    Projection(INPUT_MORPHEME, LEMMA, (INPUT_MORPHEME, LEMMA), False, "lex", None),
    Projection(LEMMA, OUTPUT_MORPHEME, (LEMMA, OUTPUT_MORPHEME), False, "lex",
               "lemlex"),
    Projection(INPUT_MORPHEME, OUTPUT_MORPHEME, (INPUT_MORPHEME, OUTPUT_MORPHEME), False,
               "lex", None),
    Projection(OUTPUT_MORPHEME, OUTPUT_PHONEME, (OUTPUT_MORPHEME, OUTPUT_PHONEME), False,
               "lex", None),
    Projection(INPUT_PHONEME, OUTPUT_PHONEME, (INPUT_PHONEME, OUTPUT_PHONEME), False,
               "lex", None),
    Projection(OUTPUT_PHONEME, SYLLABLE, (OUTPUT_PHONEME, SYLLABLE), False, "lex", None),
    Projection(OUTPUT_PHONEME, INPUT_PHONEME, (INPUT_PHONEME, OUTPUT_PHONEME), True,
               "lex", None),
    Projection(INPUT_PHONEME, INPUT_MORPHEME, (INPUT_PHONEME, INPUT_MORPHEME), False,
               "input", None),
)

ScaledNetwork = namedtuple("ScaledNetwork", [
    "topology",     # the binary Topology it was built from
    "weights",      # read-only mapping (source, dest) -> scaled array
    "fractions",    # read-only mapping (source, dest) -> propagation fraction
    "rates",        # read-only mapping rate name -> per-step proportion
])


def projection_key(projection):
    """``(source, dest)`` pair identifying a projection and its lesion pathway."""
    return (projection.source, projection.dest)


def spreading_rates(run_config, sem_multiplier=1.0):
    """
    Per-step spreading rates for ``scale``.

    Parameters
    ----------
    run_config : RunConfig
    sem_multiplier : float
        Study-specific adjustment of the conceptual rate (the large network
        spreads 0.2 of the standard rate between concepts).

    Returns
    -------
    dict
        ``"sem"``, ``"lem"``, ``"lex"``, ``"input"`` (the lexical rate
        times ``run_config.input_fraction``) and ``"lemlex"`` (the share of
        the lexical rate spread from lemmas to output morphemes).
    """
    lex = per_step(run_config.lex_rate, run_config)
    return {
        "sem": sem_multiplier * per_step(run_config.sem_rate, run_config),
        "lem": per_step(run_config.lem_rate, run_config),
        "lex": lex,
        "input": run_config.input_fraction * lex,
        "lemlex": run_config.lemma_lexeme_fraction,
    }


def _read_only(a):
    a = np.array(a, dtype=float)
    a.setflags(write=False)
    return a


def scale(topology, rates):
    """
    Multiply every projection's binary matrix by its rate, once.

    Parameters
    ----------
    topology : Topology
        Binary topology; validated before scaling.
    rates : dict
        Per-step rates and propagation fractions keyed as in
        ``spreading_rates``.

    Returns
    -------
    ScaledNetwork

    Raises
    ------
    ConfigurationError
        When *topology* is already a ``ScaledNetwork``, fails validation, or
        a rate or fraction is missing.
    """
    if isinstance(topology, ScaledNetwork):
        raise ConfigurationError("network is already rate-scaled; scale the binary topology once")
    validate_topology(topology)

    weights = {}
    fractions = {}
    for proj in PROJECTIONS:
        for name in (proj.rate, proj.fraction):
            if name is not None and name not in rates:
                raise ConfigurationError(f"missing spreading rate {name!r}")
        W = np.asarray(topology.adjacency[proj.matrix], dtype=float)
        if proj.transpose:
            W = W.T
        key = projection_key(proj)
        weights[key] = _read_only(W * rates[proj.rate])
        fractions[key] = 1.0 if proj.fraction is None else float(rates[proj.fraction])

    logger.debug("scaled %s network: %s", topology.name,
                 ", ".join(f"{k}={v:.4f}" for k, v in sorted(rates.items())))

    return ScaledNetwork(
        topology=topology,
        weights=MappingProxyType(weights),
        fractions=MappingProxyType(fractions),
        rates=MappingProxyType(dict(rates)),
    )

"""
WEAVER++/ARC Lesion Sweep — Configuration & Constants
======================================================
Shared timing, spreading-rate, input and lesion-grid constants, the task and
critical-node indices, and the immutable ``RunConfig`` handed to every
simulation cell.
"""

from collections import namedtuple

from .errors import ConfigurationError

# ── Timing ───────────────────────────────────────────────────────────
STEP_SIZE = 25      # ms per time step
N_STEPS = 80        # 2000 ms in total
CYCLE_TIME = 25     # ms per link

# ── Tasks ────────────────────────────────────────────────────────────
NAMING = 0
COMPREHENSION = 1
REPETITION = 2
TASKS = (NAMING, COMPREHENSION, REPETITION)
TASK_NAMES = ("Naming", "Comprehension", "Repetition")

# ── Critical nodes (order of the last axis of recorded series) ───────
CONCEPT_TARGET = 0
CONCEPT_FOIL = 1
LEMMA_TARGET = 2
LEMMA_FOIL = 3
SYLLABLE_TARGET = 4
SYLLABLE_FOIL = 5
CRITICAL_NODES = (
    "concept_target", "concept_foil",
    "lemma_target", "lemma_foil",
    "syllable_target", "syllable_foil",
)

# target/foil pair read out as the behavioural score of each task
TASK_READOUT = {
    NAMING: (SYLLABLE_TARGET, SYLLABLE_FOIL),
    COMPREHENSION: (CONCEPT_TARGET, CONCEPT_FOIL),
    REPETITION: (SYLLABLE_TARGET, SYLLABLE_FOIL),
}

# ── Spreading rates (proportion per ms) ──────────────────────────────
SEM_RATE = 0.0101
LEM_RATE = 0.0074
LEX_RATE = 0.0120
DECAY_RATE = 0.0240
EXTERNAL_INPUT = 0.1965    # activation units per ms

# fraction of the lexical rate spread from lemmas to output morphemes
LEMMA_LEXEME_FRACTION = 0.3
# fraction of the lexical rate from input phonemes to input morphemes
INPUT_FRACTION = 0.10

SEGMENT_DURATION = 125     # ms
PICTURE_DURATION = 125     # ms

# ── Lesions ──────────────────────────────────────────────────────────
WEIGHT_LESION = "weight"
DECAY_LESION = "decay"
LESION_MODES = (WEIGHT_LESION, DECAY_LESION)

CONTROL = 0          # group index of the healthy control group
NO_DAMAGE = 1.0      # factor reported for the control group

N_WEIGHT_VALUES = 100
N_DECAY_VALUES = 66  # 1.66 * DECAY_RATE * STEP_SIZE < 1
WEIGHT_START = 0.0
DECAY_START = 1.01
GRID_STEP = 0.01

# ── Base run parameters ──────────────────────────────────────────────
BASE_RUN = {
    "step_size": STEP_SIZE,
    "n_steps": N_STEPS,
    "cycle_time": CYCLE_TIME,
    "sem_rate": SEM_RATE,
    "lem_rate": LEM_RATE,
    "lex_rate": LEX_RATE,
    "decay_rate": DECAY_RATE,
    "external_input": EXTERNAL_INPUT,
    "lemma_lexeme_fraction": LEMMA_LEXEME_FRACTION,
    "input_fraction": INPUT_FRACTION,
    "segment_duration": SEGMENT_DURATION,
    "picture_duration": PICTURE_DURATION,
    "lesion_mode": WEIGHT_LESION,
    "grid_size": None,
    "show_all_values": False,
}

RunConfig = namedtuple("RunConfig", list(BASE_RUN))


def make_run_config(base=None, **overrides):
    """
    Build a validated ``RunConfig``.

    Parameters
    ----------
    base : dict, optional
        Starting values; defaults to ``BASE_RUN``.
    **overrides
        Individual fields to replace.

    Returns
    -------
    RunConfig

    Raises
    ------
    ConfigurationError
        On unknown fields, non-positive timing values, negative rates or an
        unknown lesion mode.
    """
    params = dict(BASE_RUN if base is None else base)
    unknown = sorted(set(overrides) - set(BASE_RUN))
    if unknown:
        raise ConfigurationError(f"Unknown run parameter(s): {', '.join(unknown)}")
    params.update(overrides)

    for key in ("step_size", "n_steps", "cycle_time",
                "segment_duration", "picture_duration"):
        if int(params[key]) != params[key] or params[key] <= 0:
            raise ConfigurationError(f"{key} must be a positive integer, got {params[key]!r}")

    for key in ("sem_rate", "lem_rate", "lex_rate", "decay_rate", "external_input",
                "lemma_lexeme_fraction", "input_fraction"):
        if not params[key] >= 0:
            raise ConfigurationError(f"{key} must be non-negative, got {params[key]!r}")

    if params["lesion_mode"] not in LESION_MODES:
        raise ConfigurationError(
            f"lesion_mode must be one of {LESION_MODES}, got {params['lesion_mode']!r}")

    if params["grid_size"] is not None and int(params["grid_size"]) <= 0:
        raise ConfigurationError(f"grid_size must be positive, got {params['grid_size']!r}")

    return RunConfig(**params)


def per_step(rate_per_ms, run_config):
    """Convert a per-ms proportion into a proportion per time step."""
    return rate_per_ms * run_config.step_size

"""
WEAVER++/ARC Lesion Sweep — Activation Engine
==============================================
Discrete-time spreading activation for one simulation cell (one group, one
task, one lesion severity).

Each step:

1. zero the per-layer input buffers;
2. add external input (picture or spoken word);
3. add internal input from every projection, in ``PROJECTIONS`` order,
   using the activations of the previous step;
4. ``new = old * (1 - decay * decay_factor) + input``.

The engine is kept "dumb": it returns the raw per-step activations of the
critical nodes.  Time means, scores and fits live in metrics.py.
"""

import logging
from collections import namedtuple

import numpy as np

from .config import (
    NAMING, TASKS, TASK_NAMES, CRITICAL_NODES, per_step,
)
from .errors import ConfigurationError
from .lesion import INTACT, PICTURE
from .network import PROJECTIONS, projection_key
from .topology import CONCEPT, INPUT_PHONEME, LAYERS

logger = logging.getLogger(__name__)

CellContext = namedtuple("CellContext", [
    "network",      # ScaledNetwork, shared read-only
    "factors",      # LesionFactors of this cell
    "task",         # NAMING, COMPREHENSION or REPETITION
    "run_config",   # RunConfig
])


# ─────────────────────────────────────────────────────────────────────
# Step phases
# ─────────────────────────────────────────────────────────────────────

def reset_activations(network):
    """Fresh all-zero activation state, one vector per layer."""
    sizes = network.topology.layer_sizes
    return {layer: np.zeros(sizes[layer]) for layer in LAYERS}


def external_input(ctx, t, inputs):
    """Add the stimulus drive at time *t* (ms) to *inputs* in place."""
    rc = ctx.run_config
    drive = per_step(rc.external_input, rc)
    topology = ctx.network.topology

    if ctx.task == NAMING:
        target = topology.critical["concept_target"][1]
        if 0 <= t < rc.picture_duration:
            inputs[CONCEPT][target] += ctx.factors.connection.get(PICTURE, 1.0) * drive
        # enhancement one cycle later
        if rc.cycle_time <= t < rc.cycle_time + rc.picture_duration:
            inputs[CONCEPT][target] += drive
    else:
        seg = rc.segment_duration
        for k, phoneme in enumerate(topology.spoken_input):
            if k * seg <= t < (k + 1) * seg:
                inputs[INPUT_PHONEME][phoneme] += drive


def internal_input(ctx, activations, inputs):
    """Add spreading input from every projection to *inputs* in place."""
    weights = ctx.network.weights
    fractions = ctx.network.fractions
    lesion = ctx.factors.connection
    for proj in PROJECTIONS:
        key = projection_key(proj)
        factor = fractions[key] * lesion.get(key, 1.0)
        inputs[proj.dest] += factor * (activations[proj.source] @ weights[key])


def update_activations(ctx, activations, inputs):
    """Apply decay and input; returns the new state."""
    decay = per_step(ctx.run_config.decay_rate, ctx.run_config)
    return {
        layer: activations[layer] * (1.0 - decay * ctx.factors.decay.get(layer, 1.0))
        + inputs[layer]
        for layer in LAYERS
    }


def record_critical(topology, activations):
    """Activations of the critical nodes in ``CRITICAL_NODES`` order."""
    return np.array([
        activations[layer][idx]
        for layer, idx in (topology.critical[name] for name in CRITICAL_NODES)
    ])


# ─────────────────────────────────────────────────────────────────────
# Cell runner
# ─────────────────────────────────────────────────────────────────────

def simulate_cell(network, factors, task, run_config, record_trace=False):
    """
    Run one cell from a zeroed network for ``run_config.n_steps`` steps.

    Parameters
    ----------
    network : ScaledNetwork
        Rate-scaled network; never modified.
    factors : LesionFactors
        Lesion factors of this cell (``lesion.INTACT`` for no damage).
    task : int
        ``NAMING``, ``COMPREHENSION`` or ``REPETITION``.
    run_config : RunConfig
    record_trace : bool
        If True, also return the full per-layer activation history.

    Returns
    -------
    critical : np.ndarray, shape (n_steps, 6)
        Activation of each critical node after every step.
    trace : dict, only when *record_trace*
        Layer -> array of shape ``(n_steps, n_nodes)``.
    """
    if task not in TASKS:
        raise ConfigurationError(f"unknown task {task!r}")
    if factors is None:
        factors = INTACT

    ctx = CellContext(network, factors, task, run_config)
    topology = network.topology
    n_steps = run_config.n_steps

    activations = reset_activations(network)
    critical = np.zeros((n_steps, len(CRITICAL_NODES)))
    trace = None
    if record_trace:
        trace = {layer: np.zeros((n_steps, topology.layer_sizes[layer])) for layer in LAYERS}

    for step in range(n_steps):
        t = step * run_config.step_size
        inputs = reset_activations(network)
        external_input(ctx, t, inputs)
        internal_input(ctx, activations, inputs)
        activations = update_activations(ctx, activations, inputs)

        critical[step] = record_critical(topology, activations)
        if trace is not None:
            for layer in LAYERS:
                trace[layer][step] = activations[layer]

    logger.debug("%s cell done (%s, connection=%s, decay=%s)",
                 TASK_NAMES[task], topology.name, factors.connection, factors.decay)

    if record_trace:
        return critical, trace
    return critical


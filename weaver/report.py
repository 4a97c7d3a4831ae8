"""
WEAVER++/ARC Lesion Sweep — Text Report
========================================
Plain-text rendering of study results: per group the reference scores, the
best-fit severity with its MAE and the simulated scores, optionally preceded
by the full per-severity table.
"""

from .config import CONTROL, NO_DAMAGE, TASK_NAMES
from .utils import severity_index

HEADER = "        " + "   ".join(TASK_NAMES)


def format_parameters(run_config, sem_multiplier=1.0):
    """Run constants in per-ms units, logged once at the start of a run."""
    return "\n".join([
        "Parameter values:",
        f"cycle time : {int(run_config.cycle_time):6d} [ms]",
        f"sem_rate   : {sem_multiplier * run_config.sem_rate:.4f} [prop/ms]",
        f"lem_rate   : {run_config.lem_rate:.4f} [prop/ms]",
        f"exin       : {run_config.external_input:.4f} [act_units/ms]",
        f"d          : {run_config.decay_rate:.4f} [prop/ms]",
    ])


def _row(label, values):
    return f"{label:<7} " + "        ".join(f"{v:6.2f}" for v in values)


def format_group(fit, grid, lesion_mode, show_all_values=False):
    """Report block of one ``GroupFit``."""
    lines = ["", fit.name.upper(), HEADER, _row("Real:", fit.reference)]

    if show_all_values:
        lines.append("Lesion:" + " " * 44 + "MAE")
        for i, scores in enumerate(fit.table_scores):
            lv = NO_DAMAGE if fit.group == CONTROL else grid[i]
            lines.append(f"{lv:5.2f}   " + "        ".join(f"{v:6.2f}" for v in scores)
                         + f"     {fit.table_errors[i]:6.2f}")

    if fit.best_index is None:
        lines.append("No fit: the control contrast vanishes at every severity")
        return "\n".join(lines)

    lines.append(f"Best fit {lesion_mode} value = {fit.severity:.2f}   MAE = {fit.mae:.2f}")
    lines.append(_row("Sim:", fit.scores))
    return "\n".join(lines)


def format_assessment(result, show_all_values=False):
    """Report of one assessment entry from ``run_study``."""
    blocks = [f"Assessment is {result['assessment'].title}"]
    for fit in result["fits"]:
        blocks.append(format_group(fit, result["grid"], result["lesion_mode"],
                                   show_all_values=show_all_values))
    return "\n".join(blocks)


def format_study(study_results, show_all_values=False):
    return "\n\n".join(format_assessment(r, show_all_values=show_all_values)
                       for r in study_results.values())


def format_at_severity(result, value):
    """Simulated scores and MAE of every group at one grid severity."""
    i = severity_index(result["grid"], value)
    lines = [f"Assessment is {result['assessment'].title}",
             f"Scores at {result['lesion_mode']} value {result['grid'][i]:.2f}",
             HEADER + "        MAE"]
    for fit in result["fits"]:
        lines.append(f"{fit.name:<22}"
                     + "".join(f"{v:10.2f}" for v in fit.table_scores[i])
                     + f"{fit.table_errors[i]:10.2f}")
    return "\n".join(lines)

"""
WEAVER++/ARC Lesion Sweep — Visualization Functions
====================================================
Score curves across the severity grid, MAE curves with the best fit marked,
and a real-versus-simulated bar chart per assessment.

Every function draws into a new figure and either saves it to *save_path*
(closing the figure) or calls ``plt.show()``.
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib as mpl

from .config import CONTROL, TASK_NAMES, WEIGHT_LESION


# ─────────────────────────────────────────────────────────────────────
# Color palette helpers
# ─────────────────────────────────────────────────────────────────────

def make_group_colors(n_groups, cmap_name="viridis"):
    """
    Returns:
      colors: list of RGBA colors, one per group
      norm: Normalize object (for colorbar)
      cmap: Colormap object
    """
    cmap = plt.get_cmap(cmap_name)
    norm = mpl.colors.Normalize(vmin=0, vmax=max(n_groups - 1, 1))
    colors = [cmap(norm(g)) for g in range(n_groups)]
    return colors, norm, cmap


def _finish(fig, save_path):
    fig.tight_layout()
    if save_path is not None:
        fig.savefig(save_path, dpi=120)
        plt.close(fig)
    else:
        plt.show()


def _severity_label(lesion_mode):
    return "Weight factor" if lesion_mode == WEIGHT_LESION else "Decay factor"


# ─────────────────────────────────────────────────────────────────────
# Score curves of one group
# ─────────────────────────────────────────────────────────────────────

def plot_score_curves(result, group, save_path=None):
    """Simulated score of each task across the grid, reference as dashed line."""
    fit = result["fits"][group]
    grid = np.asarray(result["grid"], dtype=float)

    fig, axes = plt.subplots(1, len(TASK_NAMES), figsize=(12, 4), sharey=True)
    for k, (ax, task) in enumerate(zip(axes, TASK_NAMES)):
        ax.plot(grid, fit.table_scores[:, k], marker="o", markersize=3, linewidth=1.0)
        ax.axhline(fit.reference[k], color="gray", linestyle="--", alpha=0.7)
        if fit.best_index is not None and group != CONTROL:
            ax.axvline(grid[fit.best_index], color="red", linestyle=":", alpha=0.7)
        ax.set_title(task)
        ax.set_xlabel(_severity_label(result["lesion_mode"]))
        ax.grid(alpha=0.3)
    axes[0].set_ylabel("Score (% of control)")
    fig.suptitle(f"{fit.name}: {result['assessment'].title}")

    _finish(fig, save_path)


# ─────────────────────────────────────────────────────────────────────
# MAE curves
# ─────────────────────────────────────────────────────────────────────

def plot_mae_curves(result, cmap_name="viridis", show_colorbar=False, save_path=None):
    """MAE across the grid for every lesioned group, best fits marked."""
    grid = np.asarray(result["grid"], dtype=float)
    fits = [f for f in result["fits"] if f.group != CONTROL]
    colors, norm, cmap = make_group_colors(len(fits), cmap_name=cmap_name)

    fig, ax = plt.subplots(figsize=(8, 5))
    for fit, color in zip(fits, colors):
        ax.plot(grid, fit.table_errors, color=color, linewidth=1.2, label=fit.name)
        if fit.best_index is not None:
            ax.scatter([grid[fit.best_index]], [fit.mae], color=color, s=50,
                       edgecolor="black", zorder=3)

    ax.set_title(f"MAE across severities: {result['assessment'].title}")
    ax.set_xlabel(_severity_label(result["lesion_mode"]))
    ax.set_ylabel("MAE (percentage points)")
    ax.grid(alpha=0.3)
    if len(fits) <= 10:
        ax.legend(fontsize=8)

    if show_colorbar:
        sm = mpl.cm.ScalarMappable(norm=norm, cmap=cmap)
        sm.set_array([])
        cbar = fig.colorbar(sm, ax=ax)
        cbar.set_label("Group")

    _finish(fig, save_path)


# ─────────────────────────────────────────────────────────────────────
# Real vs simulated at best fit
# ─────────────────────────────────────────────────────────────────────

def plot_best_fit_bars(result, save_path=None):
    fits = result["fits"]
    n_tasks = len(TASK_NAMES)
    x = np.arange(len(fits))
    width = 0.8 / (2 * n_tasks)

    fig, ax = plt.subplots(figsize=(max(8, 0.6 * len(fits) * n_tasks), 5))
    colors, _, _ = make_group_colors(n_tasks, cmap_name="tab10")
    for k, task in enumerate(TASK_NAMES):
        real = [f.reference[k] for f in fits]
        sim = [f.scores[k] for f in fits]
        offset = (2 * k - n_tasks + 0.5) * width
        ax.bar(x + offset, real, width, color=colors[k], alpha=0.45, label=f"{task} real")
        ax.bar(x + offset + width, sim, width, color=colors[k], label=f"{task} sim")

    ax.set_xticks(x)
    ax.set_xticklabels([f.name for f in fits], rotation=45, ha="right")
    ax.set_ylabel("Percentage correct")
    ax.set_title(f"Best fits: {result['assessment'].title}")
    ax.legend(fontsize=8, ncol=n_tasks)
    ax.grid(axis="y", alpha=0.3)

    _finish(fig, save_path)

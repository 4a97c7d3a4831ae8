"""
WEAVER++/ARC Lesion Sweep — Command Line
=========================================
    python -m weaver [study] [--assessment KEY] [--lesion weight|decay]
                     [--grid-size N] [--all-values] [--at VALUE]
                     [--workers N] [--plot DIR] [-v]
"""

import argparse
import logging
import os
import sys

from .config import LESION_MODES, WEIGHT_LESION, CONTROL, make_run_config
from .errors import WeaverError
from .report import format_parameters, format_study, format_at_severity
from .studies import STUDIES, get_study
from .sweep import run_study
from .visualization import plot_score_curves, plot_mae_curves, plot_best_fit_bars

logger = logging.getLogger("weaver")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="python -m weaver",
        description="Fit WEAVER++/ARC lesion severities to PPA naming, "
                    "comprehension and repetition scores",
    )
    parser.add_argument(
        "study", nargs="?", default="group_studies", choices=sorted(STUDIES),
        help="Study to simulate (default: group_studies)",
    )
    parser.add_argument(
        "--assessment", default=None,
        help="Fit a single assessment of the study (default: all)",
    )
    parser.add_argument(
        "--lesion", choices=LESION_MODES, default=WEIGHT_LESION,
        help="Lesion weights or decay (default: weight)",
    )
    parser.add_argument(
        "--grid-size", type=int, default=None,
        help="Number of severity values (default: 100 weight, 66 decay)",
    )
    parser.add_argument(
        "--all-values", action="store_true",
        help="Print simulated scores and MAE for every severity value",
    )
    parser.add_argument(
        "--at", type=float, default=None, metavar="VALUE",
        help="Also print every group's scores at this severity value",
    )
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Threads used to run simulation cells (default: 1)",
    )
    parser.add_argument(
        "--plot", default=None, metavar="DIR",
        help="Write score and MAE figures to DIR",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="-v for progress, -vv for per-cell detail",
    )
    return parser


def save_plots(study_key, study_results, out_dir):
    os.makedirs(out_dir, exist_ok=True)
    for key, result in study_results.items():
        prefix = os.path.join(out_dir, f"{study_key}_{key}")
        plot_mae_curves(result, save_path=f"{prefix}_mae.png")
        plot_best_fit_bars(result, save_path=f"{prefix}_best_fit.png")
        for fit in result["fits"]:
            if fit.group == CONTROL:
                continue
            name = fit.name.lower().replace("/", "_").replace(" ", "_")
            plot_score_curves(result, fit.group, save_path=f"{prefix}_scores_{name}.png")
        logger.info("figures for %s written to %s", key, out_dir)


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        run_config = make_run_config(
            lesion_mode=args.lesion,
            grid_size=args.grid_size,
            show_all_values=args.all_values,
        )
        study = get_study(args.study)
        logger.info("%s", format_parameters(run_config, study.sem_multiplier))
        study_results = run_study(study, run_config, assessment=args.assessment,
                                  max_workers=args.workers)

        print(study.title)
        print(format_study(study_results, show_all_values=run_config.show_all_values))
        if args.at is not None:
            for result in study_results.values():
                print()
                print(format_at_severity(result, args.at))

        if args.plot:
            save_plots(study.key, study_results, args.plot)
    except WeaverError as e:
        logger.error("%s", e)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())

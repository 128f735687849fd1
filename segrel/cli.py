"""Command line entry point: run the solver benchmarks and print the report.

    segrel-bench --mode accuracy --cases 20000 --seed 7
    python -m segrel --mode speed --iterations 50000 --category monte_carlo
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .core.benchmark import Benchmarker
from .core.config import METRICS, MODES, BenchmarkConfig
from .core.corpus import TestCategory
from .core.logging_utils import configure_logging, get_logger
from .core.report import print_report
from .core.solvers import SolverKind

logger = get_logger('segrel.cli')


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog='segrel-bench',
                                 description='Benchmark and cross-check 2D segment intersection solvers.')
    ap.add_argument('--mode', choices=MODES, default='all',
                    help='speed, accuracy or both (default: all)')
    ap.add_argument('--iterations', type=int, default=None,
                    help='calls timed per solver and category in speed mode')
    ap.add_argument('--cases', type=int, default=None, help='number of Monte Carlo segment pairs')
    ap.add_argument('--seed', type=int, default=None, help='Monte Carlo random seed')
    ap.add_argument('--metric', choices=METRICS, default=None, help='point deviation metric')
    ap.add_argument('--category', action='append', choices=[c.value for c in TestCategory], default=None,
                    help='restrict to a category (repeatable)')
    ap.add_argument('--reference', choices=[k.value for k in SolverKind], default=None,
                    help='reference solver for accuracy mode (default: gauss_elim)')
    ap.add_argument('--plot-dir', type=str, default=None,
                    help='write a PNG of each worst offending pair to this directory')
    ap.add_argument('--log-level', default='WARNING', help='segrel logger level (default: WARNING)')
    return ap


def config_from_args(args: argparse.Namespace) -> BenchmarkConfig:
    categories = tuple(TestCategory(c) for c in args.category) if args.category else None
    reference = SolverKind(args.reference) if args.reference else None
    return BenchmarkConfig().with_overrides(
        iterations_per_solver=args.iterations,
        monte_carlo_cases=args.cases,
        random_seed=args.seed,
        metric=args.metric,
        categories=categories,
        reference_solver=reference,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        benchmarker = Benchmarker(config_from_args(args))
    except ValueError as exc:
        logger.error("invalid configuration: %s", exc)
        return 2

    report = benchmarker.run(args.mode)
    print_report(report, file=sys.stdout)

    if args.plot_dir and report.accuracy:
        from .core.visualization import plot_worst_cases
        plot_worst_cases(report.accuracy, args.plot_dir)
    elif args.plot_dir:
        logger.warning("--plot-dir needs accuracy results; run with --mode accuracy or all")
    return 0


if __name__ == '__main__':
    sys.exit(main())

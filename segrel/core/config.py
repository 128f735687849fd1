"""Configuration for benchmark and accuracy runs."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Tuple

from .corpus import TestCategory
from .solvers import REFERENCE_SOLVER, SolverKind

METRICS = ('euclidean', 'manhattan')
MODES = ('speed', 'accuracy', 'all')


@dataclass(frozen=True)
class BenchmarkConfig:
    """Caller supplied settings for one harness run.

    Attributes
    ----------
    iterations_per_solver : int
        Calls timed per solver and category in speed mode; the corpus is
        cycled when it is shorter.
    monte_carlo_cases : int
        Size of the random corpus.
    random_seed : int
        Seed of the random corpus; same seed, same corpus.
    categories : tuple of TestCategory
        Categories to run, in order.
    solvers : tuple of SolverKind
        Solvers to run, in order.
    reference_solver : SolverKind
        Ground truth for accuracy mode.
    metric : str
        'euclidean' or 'manhattan' distance for point deviations.
    """
    iterations_per_solver: int = 100_000
    monte_carlo_cases: int = 100_000
    random_seed: int = 1
    categories: Tuple[TestCategory, ...] = field(default_factory=lambda: tuple(TestCategory))
    solvers: Tuple[SolverKind, ...] = field(default_factory=lambda: tuple(SolverKind))
    reference_solver: SolverKind = REFERENCE_SOLVER
    metric: str = 'euclidean'

    def with_overrides(self, **overrides: Any) -> 'BenchmarkConfig':
        """Copy with the given fields replaced; ``None`` values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> 'BenchmarkConfig':
        if self.iterations_per_solver <= 0:
            raise ValueError(f"iterations_per_solver must be positive, got {self.iterations_per_solver}")
        if self.monte_carlo_cases <= 0:
            raise ValueError(f"monte_carlo_cases must be positive, got {self.monte_carlo_cases}")
        if self.random_seed < 0:
            raise ValueError(f"random_seed must be non-negative, got {self.random_seed}")
        if self.metric not in METRICS:
            raise ValueError(f"metric must be one of {METRICS}, got {self.metric!r}")
        if not self.categories:
            raise ValueError("at least one category is required")
        if self.reference_solver not in self.solvers:
            raise ValueError(f"reference solver {self.reference_solver.value!r} is not among the configured solvers")
        return self


__all__ = ['BenchmarkConfig', 'METRICS', 'MODES']

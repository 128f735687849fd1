"""Speed and accuracy harness comparing the solvers.

Speed mode times ``iterations_per_solver`` calls of each solver, cycling
through the category's corpus, and folds every result into a checksum so
no call's result goes unused.

Accuracy mode runs every solver over every corpus entry and compares it to
the reference solver (Gaussian elimination unless configured otherwise).
When the three-state reductions of both classifications agree, the
deviation is the distance between their points; a disagreement counts as
an infinite deviation. Only the worst case per solver and category is
retained, together with the segment pair that produced it.
"""
from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import BenchmarkConfig
from .corpus import DEFAULT_PRESETS, PresetCase, TestCategory, build_category
from .logging_utils import get_logger
from .primitives import Point, SegmentPair
from .relations import IntersectionType, to_intersection_type
from .solvers import SolverInfo, SolverKind, SolverResult, get_solver

logger = get_logger('segrel.benchmark')

__all__ = [
    'AccuracyRecord', 'CategoryAccuracy', 'SpeedResult', 'CategorySpeed',
    'BenchmarkReport', 'Benchmarker', 'point_deviation',
]


def point_deviation(p: Optional[Point], q: Optional[Point], metric: str = 'euclidean') -> float:
    """Distance between two optional points.

    Two missing points agree (0.0); a single missing point, or a NaN
    distance, is infinitely far.
    """
    if p is None and q is None:
        return 0.0
    if p is None or q is None:
        return math.inf
    diff = p - q
    dist = diff.manhattan_length() if metric == 'manhattan' else diff.length()
    return math.inf if math.isnan(dist) else dist


@dataclass
class AccuracyRecord:
    """Worst deviation of one solver against the reference in one category."""
    solver: SolverKind
    deviation: float = 0.0
    pair: Optional[SegmentPair] = None
    candidate: Optional[IntersectionType] = None
    reference: Optional[IntersectionType] = None
    mismatches: int = 0
    cases: int = 0

    def observe(self, deviation: float, pair: SegmentPair,
                candidate: Optional[IntersectionType], reference: Optional[IntersectionType]) -> bool:
        """Account for one case; returns True when it became the new worst case."""
        self.cases += 1
        if candidate is None or candidate != reference:
            self.mismatches += 1
        if deviation > self.deviation:
            self.deviation = deviation
            self.pair = pair
            self.candidate = candidate
            self.reference = reference
            return True
        return False

    @property
    def classification_agrees(self) -> bool:
        return self.mismatches == 0


@dataclass
class CategoryAccuracy:
    category: TestCategory
    n_cases: int
    reference: SolverKind
    records: Dict[SolverKind, AccuracyRecord] = field(default_factory=dict)
    elapsed_s: float = 0.0


@dataclass
class SpeedResult:
    solver: SolverKind
    iterations: int
    elapsed_ns: int
    checksum: float

    @property
    def ns_per_call(self) -> float:
        return self.elapsed_ns / self.iterations if self.iterations else 0.0


@dataclass
class CategorySpeed:
    category: TestCategory
    n_cases: int
    results: List[SpeedResult] = field(default_factory=list)


@dataclass
class BenchmarkReport:
    config: BenchmarkConfig
    speed: List[CategorySpeed] = field(default_factory=list)
    accuracy: List[CategoryAccuracy] = field(default_factory=list)


class Benchmarker:
    """Runs the solver registry over the configured corpora.

    The preset table is passed in explicitly; ``DEFAULT_PRESETS`` is used
    when none is given.
    """

    def __init__(self, config: Optional[BenchmarkConfig] = None,
                 presets: Iterable[PresetCase] = DEFAULT_PRESETS):
        self.config = (config or BenchmarkConfig()).validate()
        self.presets: Tuple[PresetCase, ...] = tuple(presets)
        self._solvers: List[SolverInfo] = [get_solver(kind) for kind in self.config.solvers]

    def test_set(self, category: TestCategory) -> List[SegmentPair]:
        return build_category(category, self.presets,
                              n_cases=self.config.monte_carlo_cases,
                              seed=self.config.random_seed)

    def _categories(self, categories: Optional[Sequence[TestCategory]]) -> Sequence[TestCategory]:
        return self.config.categories if categories is None else categories

    # -- speed -------------------------------------------------------------

    def _time_solver(self, info: SolverInfo, pairs: Sequence[SegmentPair]) -> SpeedResult:
        func = info.func
        n_pairs = len(pairs)
        iterations = self.config.iterations_per_solver
        checksum = 0.0
        t0 = time.perf_counter_ns()
        for j in range(iterations):
            pair = pairs[j % n_pairs]
            relation, point = func(pair.first, pair.second, True)
            checksum += relation
            if point is not None:
                checksum += point.x + point.y
        elapsed = time.perf_counter_ns() - t0
        return SpeedResult(info.kind, iterations, elapsed, checksum)

    def run_speed(self, categories: Optional[Sequence[TestCategory]] = None) -> List[CategorySpeed]:
        results = []
        for category in self._categories(categories):
            pairs = self.test_set(category)
            block = CategorySpeed(category, len(pairs))
            results.append(block)
            if not pairs:
                logger.warning("speed: category %s has no test cases, skipped", category.title)
                continue
            logger.info("speed: %s (%d cases, %d iterations per solver)",
                        category.title, len(pairs), self.config.iterations_per_solver)
            for info in self._solvers:
                res = self._time_solver(info, pairs)
                logger.debug("speed: %s %s %.1f ns/call", category.title, info.name, res.ns_per_call)
                block.results.append(res)
        return results

    # -- accuracy ----------------------------------------------------------

    def _safe_call(self, info: SolverInfo, pair: SegmentPair) -> Optional[SolverResult]:
        try:
            return info.func(pair.first, pair.second, True)
        except Exception as exc:  # a failing solver must not abort the run
            logger.warning("solver %s raised on %s: %s", info.name, pair.coords(), exc)
            return None

    @staticmethod
    def _reduce(result: Optional[SolverResult]) -> Tuple[Optional[IntersectionType], Optional[Point]]:
        if result is None:
            return None, None
        relation, point = result
        return to_intersection_type(relation), point

    def run_accuracy(self, categories: Optional[Sequence[TestCategory]] = None) -> List[CategoryAccuracy]:
        ref_kind = self.config.reference_solver
        ref_info = get_solver(ref_kind)
        candidates = [info for info in self._solvers if info.kind is not ref_kind]
        metric = self.config.metric

        results = []
        for category in self._categories(categories):
            pairs = self.test_set(category)
            block = CategoryAccuracy(category, len(pairs), ref_kind,
                                     {info.kind: AccuracyRecord(info.kind) for info in candidates})
            results.append(block)
            logger.info("accuracy: %s (%d cases)", category.title, len(pairs))
            t0 = time.perf_counter()
            for pair in pairs:
                ref_type, ref_point = self._reduce(self._safe_call(ref_info, pair))
                for info in candidates:
                    cand_type, cand_point = self._reduce(self._safe_call(info, pair))
                    if ref_type is None or cand_type != ref_type:
                        deviation = math.inf
                    elif ref_type is IntersectionType.NO_INTERSECTION:
                        # no intersection point to compare
                        deviation = 0.0
                    else:
                        deviation = point_deviation(cand_point, ref_point, metric)
                    record = block.records[info.kind]
                    if record.observe(deviation, pair, cand_type, ref_type):
                        logger.debug("accuracy: %s %s new worst %g", category.title, info.name, deviation)
            block.elapsed_s = time.perf_counter() - t0
        return results

    def run(self, mode: str = 'all') -> BenchmarkReport:
        if mode not in ('speed', 'accuracy', 'all'):
            raise ValueError(f"mode must be 'speed', 'accuracy' or 'all', got {mode!r}")
        report = BenchmarkReport(self.config)
        if mode in ('speed', 'all'):
            report.speed = self.run_speed()
        if mode in ('accuracy', 'all'):
            report.accuracy = self.run_accuracy()
        return report

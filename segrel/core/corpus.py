"""Test corpora for the benchmark harness.

Two sources feed the harness:

- curated presets, each hand-picked to exercise a numerical corner
  (parallel, collinear, near-vertical, large magnitude, sub-epsilon ...),
- a seeded Monte Carlo corpus of random segment pairs.

Either source can be replayed with the operands swapped to expose solvers
whose answer depends on argument order.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .primitives import SegmentPair

__all__ = [
    'PresetCase', 'DEFAULT_PRESETS', 'TestCategory',
    'preset_pairs', 'monte_carlo_pairs', 'build_category',
]

_LEGACY_PARALLEL_MARKERS = ('Parallel', 'Trigger')


@dataclass(frozen=True)
class PresetCase:
    """A named segment pair: ``(x1, y1, x2, y2)`` of A then of B."""
    label: str
    coords: Tuple[float, ...]
    parallel: bool = False

    def __post_init__(self):
        if len(self.coords) != 8:
            raise ValueError(f"preset {self.label!r}: expected 8 coordinates, got {len(self.coords)}")
        object.__setattr__(self, 'coords', tuple(float(v) for v in self.coords))

    @classmethod
    def from_legacy_label(cls, label: str, coords: Sequence[float]) -> 'PresetCase':
        """Build a case tagged by the old naming rule ("Parallel"/"Trigger" in the label)."""
        parallel = any(marker in label for marker in _LEGACY_PARALLEL_MARKERS)
        return cls(label, tuple(coords), parallel)

    def pair(self) -> SegmentPair:
        return SegmentPair.from_coords(self.coords)


DEFAULT_PRESETS: Tuple[PresetCase, ...] = (
    PresetCase("01. QTest: Parallel", (1.0, 1.0, 3.0, 4.0, 5.0, 6.0, 7.0, 9.0), parallel=True),
    PresetCase("02. QTest: Unbounded", (1.0, 1.0, 5.0, 5.0, 0.0, 4.0, 3.0, 4.0)),
    PresetCase("03. QTest: Bounded", (1.0, 1.0, 5.0, 5.0, 0.0, 4.0, 5.0, 4.0)),
    PresetCase("04. QTest: Almost vertical", (0.0, 10.0, 20.0000000000001, 10.0, 10.0, 0.0, 10.0, 20.0)),
    PresetCase("05. QTest: Almost horizontal", (0.0, 10.0, 20.0, 10.0, 10.0000000000001, 0.0, 10.0, 20.0)),
    PresetCase("06. QTest: Long vertical",
               (100.1599256468623, 100.7861905065196, 100.1599256468604, -9999.78619050651,
                10.0, 50.0, 190.0, 50.0)),
    # nearly parallel pair that broke the exact-zero determinant test
    PresetCase("07. QTBUG-75146 Trigger",
               (494.70272621399579, -3419.3150119034844,
                484.87413636440681, -3439.7415553154151,
                1553.8915715961471, -1218.0259905149323,
                589.08872351030004, -3223.1546571877006), parallel=True),
    PresetCase("08. QTBUG-75146 Parallel unbounded", (0.0, 0.0, 4.0, 3.0, 8.0, 6.0, 10.0, 7.5), parallel=True),
    PresetCase("09. QTBUG-75146 Parallel bounded", (0.0, 0.0, 4.0, 3.0, 4.0, 3.0, 10.0, 7.5), parallel=True),
    PresetCase("10. QTBUG-75146 Parallel nested", (2.0, 1.0, 1.0, 1.0, -1.0, 1.0, 4.0, 1.0), parallel=True),
    PresetCase("11. Unit Vectors", (0, 0, 0, 1, 0, 0, 1, 0)),
    PresetCase("12. Tiny vectors near origin", (1E-10, 1E-10, 0, 1E-10, 1E-10, 1E-10, 1E-10, 0)),
    PresetCase("13. Sub-epsilon vectors near origin", (1E-18, 1E-18, 0, 1E-18, 1E-18, 1E-18, 1E-18, 0)),
)


class TestCategory(enum.Enum):
    PRESET_PARALLEL = 'preset_parallel'
    PRESET_PARALLEL_SWAPPED = 'preset_parallel_swapped'
    PRESET_NON_PARALLEL = 'preset_non_parallel'
    PRESET_NON_PARALLEL_SWAPPED = 'preset_non_parallel_swapped'
    MONTE_CARLO = 'monte_carlo'
    MONTE_CARLO_SWAPPED = 'monte_carlo_swapped'

    # keep pytest from collecting this enum as a test class
    __test__ = False

    @property
    def is_preset(self) -> bool:
        return self.value.startswith('preset')

    @property
    def parallel(self) -> bool:
        return self in (TestCategory.PRESET_PARALLEL, TestCategory.PRESET_PARALLEL_SWAPPED)

    @property
    def swapped(self) -> bool:
        return self.value.endswith('_swapped')

    @property
    def title(self) -> str:
        return ''.join(part.capitalize() for part in self.value.split('_'))


def preset_pairs(presets: Iterable[PresetCase], parallel: bool, swap: bool = False) -> List[SegmentPair]:
    """Pairs of the presets whose ``parallel`` tag matches, in label order."""
    pairs = []
    for case in sorted(presets, key=lambda c: c.label):
        if case.parallel != parallel:
            continue
        pair = case.pair()
        pairs.append(pair.swapped() if swap else pair)
    return pairs


def monte_carlo_pairs(n_cases: int, seed: int, swap: bool = False) -> List[SegmentPair]:
    """``n_cases`` random pairs, identical for identical ``seed``.

    Each coordinate is the ratio of two uniforms, giving positive values
    with a heavy tail (mostly near 1, occasionally huge). The denominator is
    drawn from (0, 1] so no coordinate is infinite.
    """
    if n_cases < 0:
        raise ValueError(f"n_cases must be non-negative, got {n_cases}")
    rng = np.random.default_rng(seed)
    numerators = rng.random((n_cases, 8))
    denominators = 1.0 - rng.random((n_cases, 8))
    coords = numerators / denominators
    pairs = []
    for row in coords.tolist():
        pair = SegmentPair.from_coords(row)
        pairs.append(pair.swapped() if swap else pair)
    return pairs


def build_category(
    category: TestCategory,
    presets: Optional[Iterable[PresetCase]] = None,
    n_cases: int = 0,
    seed: int = 1,
) -> List[SegmentPair]:
    if category.is_preset:
        return preset_pairs(DEFAULT_PRESETS if presets is None else presets,
                            parallel=category.parallel, swap=category.swapped)
    return monte_carlo_pairs(n_cases, seed, swap=category.swapped)

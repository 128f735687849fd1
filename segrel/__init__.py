"""Public package API for segrel.

Robust intersection of two 2D segments by several competing solvers, plus a
harness that benchmarks them and measures their deviation from a reference.
This facade gives a flat import surface over ``segrel.core`` and defers the
matplotlib-backed plotting module until first use.

Example
-------
    from segrel import Segment, classify

    a = Segment.from_coords(1, 1, 5, 5)
    b = Segment.from_coords(0, 4, 5, 4)
    relation, point = classify(a, b, want_point=True)
"""
from importlib import import_module as _imp
import logging as _logging

from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound

try:
    __version__ = _pkg_version("segrel")
except _NotFound:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from .core.constants import EPS_MACHINE
from .core.primitives import Point, Segment, SegmentPair
from .core.tolerance import find_tolerance, segment_tolerance, robust_fuzzy_compare
from .core.relations import IntersectionType, SegmentRelation, to_intersection_type
from .core.collinear import analyze_collinear_segments
from .core.solvers import (SolverKind, SOLVERS, REFERENCE_SOLVER, get_solver, classify,
                           intersects_flsi_orig, intersects_flsi_tweaked, intersects_flsi_v2,
                           intersects_gauss_elim, intersects_cross_hypot, intersects_flsi_stabilized)
from .core.corpus import PresetCase, DEFAULT_PRESETS, TestCategory
from .core.config import BenchmarkConfig
from .core.benchmark import Benchmarker, BenchmarkReport, AccuracyRecord
from .core.report import format_report, print_report
from .core.logging_utils import configure_logging, get_logger


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)

        def _load(self):
            try:
                return self._m
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m

        def __getattr__(self, item):
            if item == '_m':  # unset slot; avoid recursing through _load
                raise AttributeError(item)
            return getattr(self._load(), item)

        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


# matplotlib import is slow; load on first use
visualization = _lazy_module('segrel.core.visualization')

__all__ = [
    '__version__', 'EPS_MACHINE',
    # primitives
    'Point', 'Segment', 'SegmentPair',
    # tolerance
    'find_tolerance', 'segment_tolerance', 'robust_fuzzy_compare',
    # relations
    'IntersectionType', 'SegmentRelation', 'to_intersection_type',
    # engine
    'analyze_collinear_segments', 'SolverKind', 'SOLVERS', 'REFERENCE_SOLVER',
    'get_solver', 'classify',
    'intersects_flsi_orig', 'intersects_flsi_tweaked', 'intersects_flsi_v2',
    'intersects_gauss_elim', 'intersects_cross_hypot', 'intersects_flsi_stabilized',
    # harness
    'PresetCase', 'DEFAULT_PRESETS', 'TestCategory', 'BenchmarkConfig',
    'Benchmarker', 'BenchmarkReport', 'AccuracyRecord', 'format_report', 'print_report',
    # logging / namespaces
    'configure_logging', 'get_logger', 'visualization',
]

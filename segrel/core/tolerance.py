"""Scale-aware tolerances and robust approximate equality.

A fixed absolute epsilon fails both for huge coordinates (too strict) and for
tiny ones (everything looks equal). ``find_tolerance`` scales machine epsilon
by the smaller squared magnitude of the two direction vectors, capped at 1,
so the slack follows the precision actually available at that magnitude.
"""
from __future__ import annotations

import math

from .constants import EPS_MACHINE, FUZZY_RELATIVE_SCALE
from .primitives import Point, Segment

__all__ = [
    'find_tolerance', 'segment_tolerance', 'fuzzy_compare',
    'robust_fuzzy_compare', 'fma',
]

_math_fma = getattr(math, 'fma', None)  # Python 3.13+


def find_tolerance(u: Point, v: Point) -> float:
    """Return ``eps * min(1, |u|^2, |v|^2)``."""
    return EPS_MACHINE * min(1.0, u.squared_length(), v.squared_length())


def segment_tolerance(s1: Segment, s2: Segment) -> float:
    return find_tolerance(s1.direction(), s2.direction())


def fuzzy_compare(p1: float, p2: float) -> bool:
    """Relative comparison; only meaningful when neither value is zero."""
    return abs(p1 - p2) * FUZZY_RELATIVE_SCALE <= min(abs(p1), abs(p2))


def robust_fuzzy_compare(p1: float, p2: float, tolerance: float = EPS_MACHINE) -> bool:
    """Approximate equality that copes with values at or near zero.

    The plain relative test never accepts an exact 0 against a tiny residual,
    so when either value is zero both are treated as zero iff their
    magnitudes are below ``tolerance``. Identical values always compare
    equal (this keeps ``0 == 0`` equal under a zero tolerance). NaN never
    compares equal.
    """
    if p1 == p2:
        return True
    if math.isnan(p1) or math.isnan(p2):
        return False
    if min(abs(p1), abs(p2)) > 0:
        return fuzzy_compare(p1, p2)
    return max(abs(p1), abs(p2)) < tolerance


def fma(a: float, b: float, c: float) -> float:
    """``a * b + c``, rounded once when the interpreter supports it."""
    if _math_fma is not None:
        try:
            return _math_fma(a, b, c)
        except (ValueError, OverflowError):
            # math.fma raises on inf*0 and on overflow where IEEE returns nan/inf
            pass
    return a * b + c

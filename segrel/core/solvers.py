"""Interchangeable segment-intersection solvers.

Every solver takes two segments and returns ``(relation, point)``::

    relation, point = intersects_gauss_elim(a, b, want_point=True)

``point`` is only computed when ``want_point`` is true and is ``None``
otherwise, or whenever the solver has no finite point to offer. Solvers never
raise: non-finite input maps to ``IntersectionType.NO_INTERSECTION`` (three
state family) or the empty ``SegmentRelation`` (flag family).

Zero-length segments are valid, degenerate input. Every solver routes them
through its parallel / collinear branch; a point-like segment lying on the
other segment's line is treated as collinear with it.

Most variants follow Franklin Antonio's "Faster Line Segment Intersection"
(Graphics Gems III) and use the same vectors::

    a = A.p2 - A.p1      b = B.p1 - B.p2      c = A.p1 - B.p1
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Union

from .collinear import analyze_collinear_segments, inner_midpoint
from .constants import EPS_MACHINE, FLSI_STABILIZED_TOLERANCE, GAUSS_COLLINEAR_FACTOR
from .primitives import Point, Segment
from .relations import IntersectionType, Relation, SegmentRelation
from .tolerance import fma, robust_fuzzy_compare, segment_tolerance

__all__ = [
    'SolverKind', 'SolverFamily', 'SolverInfo', 'SolverResult', 'SOLVERS',
    'REFERENCE_SOLVER', 'get_solver', 'classify',
    'intersects_flsi_orig', 'intersects_flsi_tweaked', 'intersects_flsi_v2',
    'intersects_gauss_elim', 'intersects_cross_hypot', 'intersects_flsi_stabilized',
]

SolverResult = Tuple[Relation, Optional[Point]]

_NONE = IntersectionType.NO_INTERSECTION
_BOUNDED = IntersectionType.BOUNDED
_UNBOUNDED = IntersectionType.UNBOUNDED
_LINES = SegmentRelation.LINES_INTERSECT
_SEGMENTS = SegmentRelation.SEGMENTS_INTERSECT
_PARALLEL = SegmentRelation.PARALLEL


def _finite_or_none(point: Optional[Point]) -> Optional[Point]:
    if point is None or not point.is_finite():
        return None
    return point


def _cross(u: Point, v: Point) -> float:
    return u.x * v.y - u.y * v.x


def _outside(num: float, den: float) -> bool:
    """``num / den`` lies outside [0, 1], decided without dividing."""
    if den > 0:
        return num < 0 or num > den
    return num > 0 or num < den


def _collinear_as_type(s1: Segment, s2: Segment, want_point: bool) -> SolverResult:
    relation, point = analyze_collinear_segments(s1, s2, want_point)
    kind = _BOUNDED if relation & _SEGMENTS else _UNBOUNDED
    return kind, _finite_or_none(point)


# ---------------------------------------------------------------------------
# Three-state solvers
# ---------------------------------------------------------------------------

def intersects_flsi_orig(A: Segment, B: Segment, want_point: bool = False) -> SolverResult:
    """Baseline: Cramer's rule with an exact zero determinant test.

    Near-parallel segments slip past the exact test and get a wildly
    inaccurate point; collinear segments are reported as no intersection.
    """
    a = A.p2 - A.p1
    b = B.p1 - B.p2
    c = A.p1 - B.p1

    denominator = a.y * b.x - a.x * b.y
    if denominator == 0 or not math.isfinite(denominator):
        return _NONE, None

    reciprocal = 1 / denominator
    na = (b.y * c.x - b.x * c.y) * reciprocal
    point = _finite_or_none(A.point_at(na)) if want_point else None

    if na < 0 or na > 1:
        return _UNBOUNDED, point

    nb = (a.x * c.y - a.y * c.x) * reciprocal
    if nb < 0 or nb > 1:
        return _UNBOUNDED, point

    return _BOUNDED, point


def intersects_flsi_tweaked(A: Segment, B: Segment, want_point: bool = False) -> SolverResult:
    """Baseline algebra with a scale-aware parallel test.

    Parallelism is decided by fuzzy-comparing the two determinant terms
    instead of testing their difference against zero, and the bounds tests
    avoid dividing by the determinant.
    """
    a = A.p2 - A.p1
    b = B.p1 - B.p2
    c = A.p1 - B.p1

    d1 = a.y * b.x
    d2 = a.x * b.y
    if robust_fuzzy_compare(d1, d2, segment_tolerance(A, B)):
        return _NONE, None

    denominator = d1 - d2
    if not math.isfinite(denominator):
        return _NONE, None

    nna = b.y * c.x - b.x * c.y
    point = _finite_or_none(A.point_at(nna / denominator)) if want_point else None

    if _outside(nna, denominator):
        return _UNBOUNDED, point

    nnb = a.x * c.y - a.y * c.x
    if _outside(nnb, denominator):
        return _UNBOUNDED, point

    return _BOUNDED, point


def intersects_cross_hypot(A: Segment, B: Segment, want_point: bool = False) -> SolverResult:
    """Cross products judged relative to the segments' own lengths.

    The determinant is compared against ``eps * |a| * |b|`` (lengths via
    ``math.hypot``), so near-parallel detection is independent of scale.
    Collinear input is resolved by the collinear analyzer: a shared point is
    reported as bounded, a gap as unbounded.
    """
    if not (A.is_finite() and B.is_finite()):
        return _NONE, None

    a = A.p2 - A.p1
    b = B.p1 - B.p2
    c = A.p1 - B.p1

    denominator = _cross(a, b)
    lena = a.length()
    lenb = b.length()
    ca = _cross(c, a)
    bc = _cross(b, c)

    if abs(denominator) <= EPS_MACHINE * lena * lenb:
        # parallel, or at least one segment has zero length
        lenc = c.length()
        if abs(ca) > EPS_MACHINE * lenc * lena or abs(bc) > EPS_MACHINE * lenc * lenb:
            return _NONE, None
        return _collinear_as_type(A, B, want_point)

    na = bc / denominator
    nb = ca / denominator   # parameter along B.p1 -> B.p2
    point = None
    if want_point:
        # evaluate from the segment whose parameter is smaller in magnitude
        if abs(na) > abs(nb):
            point = _finite_or_none(B.p1 - b * nb)
        else:
            point = _finite_or_none(A.point_at(na))

    if na < 0 or na > 1 or nb < 0 or nb > 1:
        return _UNBOUNDED, point
    return _BOUNDED, point


def intersects_flsi_stabilized(A: Segment, B: Segment, want_point: bool = False) -> SolverResult:
    """Antonio's algorithm with a parallel threshold scaled by ``|a|^2``.

    The collinear branch projects B's endpoints onto ``a`` with dot products
    and returns the overlap (or gap) midpoint along A.
    """
    a = A.p2 - A.p1
    b = B.p1 - B.p2
    c = A.p1 - B.p1

    denominator = a.y * b.x - a.x * b.y
    if not math.isfinite(denominator):
        return _NONE, None

    length = a.x * a.x + a.y * a.y
    if length == 0:
        # A is a single point; measure along B instead
        if B.is_zero_length():
            return _collinear_as_type(A, B, want_point)
        return intersects_flsi_stabilized(B, A, want_point)

    def along_a(t: float) -> Optional[Point]:
        return _finite_or_none(A.point_at(t)) if want_point else None

    epsilon = FLSI_STABILIZED_TOLERANCE * length * EPS_MACHINE

    if abs(denominator) <= epsilon:
        r = a.y * c.x - a.x * c.y
        if abs(r) > epsilon:
            return _NONE, None

        # collinear: positions of B's endpoints along a, scaled by |a|^2
        d = B.p2 - A.p1
        n1 = -a.y * c.y - a.x * c.x
        n2 = a.x * d.x + a.y * d.y
        lo, hi = min(n1, n2), max(n1, n2)

        if lo < 0:
            if hi < 0:
                return _UNBOUNDED, along_a(0.5 * hi / length)
            return _BOUNDED, along_a(0.5 * min(hi, length) / length)
        if lo > length:
            return _UNBOUNDED, along_a(0.5 * (1 + lo / length))
        return _BOUNDED, along_a(0.5 * (lo + min(hi, length)) / length)

    na = b.y * c.x - b.x * c.y
    point = along_a(na / denominator)

    if _outside(na, denominator):
        return _UNBOUNDED, point

    nb = a.x * c.y - a.y * c.x
    if _outside(nb, denominator):
        return _UNBOUNDED, point

    return _BOUNDED, point


# ---------------------------------------------------------------------------
# Flag solvers
# ---------------------------------------------------------------------------

def intersects_flsi_v2(A: Segment, B: Segment, want_point: bool = False) -> SolverResult:
    """Tolerance-aware Antonio variant returning relation flags.

    Differentiates parallel from collinear segments and reports a point for
    collinear input: the midpoint of the overlap, or of the gap. Parallel,
    non-collinear input gets the gap midpoint between the inner endpoints.
    """
    a = A.p2 - A.p1
    b = B.p1 - B.p2
    c = A.p1 - B.p1

    tolerance = segment_tolerance(A, B)

    d1 = a.y * b.x
    d2 = a.x * b.y
    denominator = d1 - d2
    if not math.isfinite(denominator):
        return SegmentRelation.NO_RELATION, None

    na1 = b.y * c.x
    na2 = b.x * c.y

    if robust_fuzzy_compare(d1, d2, tolerance):
        if robust_fuzzy_compare(na1, na2, tolerance):
            relation, point = analyze_collinear_segments(A, B, want_point)
            return relation, _finite_or_none(point)
        return _PARALLEL, _finite_or_none(inner_midpoint(A, B)) if want_point else None

    nna = na1 - na2

    # unstable when the determinant is small, i.e. as the angle between the
    # segments approaches 0
    point = _finite_or_none(A.point_at(nna / denominator)) if want_point else None

    if _outside(nna, denominator):
        return _LINES, point

    nnb = a.x * c.y - a.y * c.x
    if _outside(nnb, denominator):
        return _LINES, point

    return _LINES | _SEGMENTS, point


def intersects_gauss_elim(A: Segment, B: Segment, want_point: bool = False) -> SolverResult:
    """Gaussian elimination with pivoting on the 2x3 augmented system.

    Solves ``origin + t*dir == lorigin + s*ldir``. Columns (and with them
    the roles of the two segments) and rows are swapped so the heaviest
    coefficient sits at (0, 0) before eliminating. A reduced second pivot
    below ``eps * |m00|`` marks the system rank deficient; the lines are
    then parallel, and collinear when the other segment's origin lies on
    this line. Used as the reference solver by the accuracy harness.
    """
    if not (A.is_finite() and B.is_finite()):
        return SegmentRelation.NO_RELATION, None

    origin, lorigin = A.p1, B.p1
    direction, ldirection = A.p2 - origin, B.p2 - lorigin
    v = lorigin - origin
    m00, m01, m02 = direction.x, -ldirection.x, v.x
    m10, m11, m12 = direction.y, -ldirection.y, v.y

    # bring the heaviest element by abs value to (0, 0)
    if abs(m01) > abs(m00) or abs(m11) > abs(m00):
        m00, m01 = m01, m00
        m10, m11 = m11, m10
        origin, lorigin = lorigin, origin
        direction, ldirection = ldirection, direction
    if abs(m10) > abs(m00):
        m00, m01, m02, m10, m11, m12 = m10, m11, m12, m00, m01, m02

    if m00 == 0:
        # both segments are single points
        relation, point = analyze_collinear_segments(A, B, want_point)
        return relation, _finite_or_none(point)

    pivot = 1 / m00
    m10 *= -pivot
    m12 = fma(m10, m02, m12)
    m11 = fma(m10, m01, m11)

    if abs(m11) < abs(m00) * EPS_MACHINE:
        # rank deficient: parameter of lorigin along (origin, direction)
        n = pivot * m02
        r = Point(fma(n, direction.x, origin.x), fma(n, direction.y, origin.y))
        offset = lorigin - r
        residual = abs(_cross(direction, offset))
        magnitude = max(abs(r.x), abs(r.y), abs(lorigin.x), abs(lorigin.y),
                        abs(origin.x), abs(origin.y))
        slack = GAUSS_COLLINEAR_FACTOR * EPS_MACHINE * direction.manhattan_length() * magnitude
        if residual > slack:
            return _PARALLEL, _finite_or_none(inner_midpoint(A, B)) if want_point else None

        # parameter of the other segment's end point, normal ordered
        n2 = pivot * (m02 - m01)
        if n > n2:
            n, n2 = n2, n

        relation = _PARALLEL | _LINES
        if n < 0:
            if n2 > 1:
                mid = 0.5
                relation |= _SEGMENTS
            else:
                if n2 >= 0:
                    relation |= _SEGMENTS
                mid = 0.5 * n2
        elif n <= 1:
            relation |= _SEGMENTS
            mid = 0.5 * (n + min(n2, 1.0))
        else:
            mid = 0.5 * (1 + n)

        point = None
        if want_point:
            point = _finite_or_none(Point(fma(mid, direction.x, origin.x),
                                          fma(mid, direction.y, origin.y)))
        return relation, point

    # not near-singular: back-substitute
    nb = m12 / m11
    point = None
    if want_point:
        point = _finite_or_none(Point(fma(nb, ldirection.x, lorigin.x),
                                      fma(nb, ldirection.y, lorigin.y)))

    if nb < 0 or nb > 1:
        return _LINES, point

    na = pivot * fma(-nb, m01, m02)
    if 0 <= na <= 1:
        return _LINES | _SEGMENTS, point
    return _LINES, point


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class SolverKind(enum.Enum):
    CROSS_HYPOT = 'cross_hypot'
    FLSI_ORIG = 'flsi_orig'
    FLSI_TWEAKED = 'flsi_tweaked'
    FLSI_V2 = 'flsi_v2'
    GAUSS_ELIM = 'gauss_elim'
    FLSI_STABILIZED = 'flsi_stabilized'


class SolverFamily(enum.Enum):
    INTERSECTION_TYPE = 'intersection_type'
    FLAGS = 'flags'


@dataclass(frozen=True)
class SolverInfo:
    kind: SolverKind
    func: Callable[..., SolverResult]
    family: SolverFamily
    summary: str

    @property
    def name(self) -> str:
        return self.kind.value

    def __call__(self, a: Segment, b: Segment, want_point: bool = False) -> SolverResult:
        return self.func(a, b, want_point)


SOLVERS: Dict[SolverKind, SolverInfo] = {
    info.kind: info for info in (
        SolverInfo(SolverKind.CROSS_HYPOT, intersects_cross_hypot, SolverFamily.INTERSECTION_TYPE,
                   'hypot-normalized cross products'),
        SolverInfo(SolverKind.FLSI_ORIG, intersects_flsi_orig, SolverFamily.INTERSECTION_TYPE,
                   "Cramer's rule, exact zero test"),
        SolverInfo(SolverKind.FLSI_TWEAKED, intersects_flsi_tweaked, SolverFamily.INTERSECTION_TYPE,
                   "Cramer's rule, fuzzy parallel test"),
        SolverInfo(SolverKind.FLSI_V2, intersects_flsi_v2, SolverFamily.FLAGS,
                   'fuzzy parallel test, collinear analysis'),
        SolverInfo(SolverKind.GAUSS_ELIM, intersects_gauss_elim, SolverFamily.FLAGS,
                   'Gaussian elimination with pivoting'),
        SolverInfo(SolverKind.FLSI_STABILIZED, intersects_flsi_stabilized, SolverFamily.INTERSECTION_TYPE,
                   "length-scaled epsilon, dot-product collinear branch"),
    )
}

REFERENCE_SOLVER = SolverKind.GAUSS_ELIM


def get_solver(kind: Union[SolverKind, str]) -> SolverInfo:
    """Look a solver up by enum member or by name (``'gauss_elim'``)."""
    if isinstance(kind, str):
        try:
            kind = SolverKind(kind.lower())
        except ValueError:
            raise KeyError(f"unknown solver {kind!r}; expected one of "
                           f"{', '.join(k.value for k in SolverKind)}") from None
    return SOLVERS[kind]


def classify(
    a: Segment,
    b: Segment,
    solver: Union[SolverKind, str] = REFERENCE_SOLVER,
    want_point: bool = False,
) -> SolverResult:
    """Classify ``a`` against ``b`` with the chosen solver (reference by default)."""
    return get_solver(solver)(a, b, want_point)

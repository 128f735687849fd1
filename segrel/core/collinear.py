"""Overlap analysis for two segments already known to be collinear."""
from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple

from .constants import EPS_MACHINE
from .primitives import Point, Segment
from .relations import SegmentRelation
from .tolerance import robust_fuzzy_compare

__all__ = ['analyze_collinear_segments', 'inner_midpoint']


class _TaggedPoint(NamedTuple):
    point: Point
    parent: int


def _sorted_endpoints(s1: Segment, s2: Segment) -> Tuple[List[_TaggedPoint], bool]:
    """Tag the four endpoints with their parent and sort them along one axis.

    Projects on y when the endpoints spread further in y than in x, otherwise
    on x. Both segments take part in the choice, so a point-like ``s1`` does
    not force an axis along which everything coincides. The sort is stable,
    so ties keep ``s1``'s endpoints first.
    """
    xs = (s1.p1.x, s1.p2.x, s2.p1.x, s2.p2.x)
    ys = (s1.p1.y, s1.p2.y, s2.p1.y, s2.p2.y)
    vertical = max(ys) - min(ys) > max(xs) - min(xs)
    tagged = [
        _TaggedPoint(s1.p1, 1), _TaggedPoint(s1.p2, 1),
        _TaggedPoint(s2.p1, 2), _TaggedPoint(s2.p2, 2),
    ]
    if vertical:
        tagged.sort(key=lambda tp: tp.point.y)
    else:
        tagged.sort(key=lambda tp: tp.point.x)
    return tagged, vertical


def inner_midpoint(s1: Segment, s2: Segment) -> Point:
    """Midpoint of the 2nd and 3rd endpoints in projected order.

    For overlapping segments this is the midpoint of the overlap, otherwise
    the midpoint of the gap between them.
    """
    tagged, _ = _sorted_endpoints(s1, s2)
    return (tagged[1].point + tagged[2].point) / 2


def analyze_collinear_segments(
    s1: Segment,
    s2: Segment,
    want_point: bool = False,
    zero_tolerance: float = EPS_MACHINE,
) -> Tuple[SegmentRelation, Optional[Point]]:
    """Classify two collinear segments and optionally return a representative point.

    The caller guarantees both segments are finite and collinear. The result
    always carries ``PARALLEL | LINES_INTERSECT``; ``SEGMENTS_INTERSECT`` is
    added when the segments share at least one point.
    """
    relation = SegmentRelation.PARALLEL | SegmentRelation.LINES_INTERSECT
    tagged, vertical = _sorted_endpoints(s1, s2)

    point = (tagged[1].point + tagged[2].point) / 2 if want_point else None

    # interleaved ranges
    if tagged[0].parent != tagged[1].parent:
        return relation | SegmentRelation.SEGMENTS_INTERSECT, point

    # disjoint ranges that touch at exactly one point
    if vertical:
        i1, i2 = tagged[1].point.y, tagged[2].point.y
    else:
        i1, i2 = tagged[1].point.x, tagged[2].point.x
    if robust_fuzzy_compare(i1, i2, zero_tolerance):
        return relation | SegmentRelation.SEGMENTS_INTERSECT, point

    return relation, point

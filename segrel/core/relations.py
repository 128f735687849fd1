"""Classification types returned by the solvers.

Two families coexist:

``IntersectionType``
    The legacy three-state answer (none / bounded / unbounded). It cannot
    tell parallel from collinear.
``SegmentRelation``
    Independent flags. ``PARALLEL | LINES_INTERSECT`` marks collinear
    segments; adding ``SEGMENTS_INTERSECT`` means they also share at least
    one point. The empty set is reserved for invalid (non-finite) input.
"""
from __future__ import annotations

import enum
from typing import Union

__all__ = [
    'IntersectionType', 'SegmentRelation', 'Relation',
    'to_intersection_type', 'is_collinear', 'describe',
]


class IntersectionType(enum.IntEnum):
    NO_INTERSECTION = 0
    BOUNDED = 1     # intersection point lies within both segments
    UNBOUNDED = 2   # lines intersect outside at least one segment


class SegmentRelation(enum.IntFlag):
    NO_RELATION = 0
    LINES_INTERSECT = 0x1
    SEGMENTS_INTERSECT = 0x2
    PARALLEL = 0x4


Relation = Union[IntersectionType, SegmentRelation]


def to_intersection_type(relation: Relation) -> IntersectionType:
    """Reduce either family to the three-state model for comparisons."""
    if isinstance(relation, IntersectionType):
        return relation
    if relation & SegmentRelation.SEGMENTS_INTERSECT:
        return IntersectionType.BOUNDED
    if relation & SegmentRelation.LINES_INTERSECT:
        return IntersectionType.UNBOUNDED
    return IntersectionType.NO_INTERSECTION


def is_collinear(relation: SegmentRelation) -> bool:
    both = SegmentRelation.PARALLEL | SegmentRelation.LINES_INTERSECT
    return (relation & both) == both


def describe(relation: Relation) -> str:
    """Short human readable label, e.g. ``'collinear, overlapping'``."""
    if isinstance(relation, IntersectionType):
        return relation.name.lower().replace('_', ' ')
    if relation == SegmentRelation.NO_RELATION:
        return 'invalid input'
    shares = bool(relation & SegmentRelation.SEGMENTS_INTERSECT)
    if is_collinear(relation):
        return 'collinear, overlapping' if shares else 'collinear, disjoint'
    if relation & SegmentRelation.PARALLEL:
        return 'parallel'
    return 'bounded' if shares else 'unbounded'

import math

import numpy as np
import pytest

from segrel.core.primitives import Point, Segment, SegmentPair


def test_point_arithmetic():
    p = Point(1.0, 2.0)
    q = Point(3.0, -1.0)
    assert p + q == Point(4.0, 1.0)
    assert q - p == Point(2.0, -3.0)
    assert p * 2 == Point(2.0, 4.0)
    assert 2 * p == Point(2.0, 4.0)
    assert q / 2 == Point(1.5, -0.5)


def test_point_lengths():
    v = Point(3.0, -4.0)
    assert v.length() == 5.0
    assert v.squared_length() == 25.0
    assert v.manhattan_length() == 7.0
    # hypot does not overflow where the squared length does
    big = Point(1e200, 1e200)
    assert math.isfinite(big.length())
    assert big.squared_length() == math.inf


def test_point_is_finite_and_array():
    assert Point(0, 1).is_finite()
    assert not Point(math.inf, 0).is_finite()
    assert not Point(0, math.nan).is_finite()
    arr = Point(1, 2).as_array()
    assert arr.dtype == np.float64
    np.testing.assert_array_equal(arr, [1.0, 2.0])


def test_point_is_immutable():
    p = Point(0.0, 0.0)
    with pytest.raises(AttributeError):
        p.x = 1.0


def test_segment_helpers():
    s = Segment.from_coords(1, 1, 5, 4)
    assert s.p1 == Point(1.0, 1.0)
    assert (s.dx, s.dy) == (4.0, 3.0)
    assert s.direction() == Point(4.0, 3.0)
    assert s.length() == 5.0
    assert s.point_at(0.5) == Point(3.0, 2.5)
    assert s.midpoint() == Point(3.0, 2.5)
    assert s.coords() == (1.0, 1.0, 5.0, 4.0)
    assert not s.is_zero_length()
    assert Segment.from_coords(2, 2, 2, 2).is_zero_length()
    assert not Segment.from_coords(0, 0, math.inf, 0).is_finite()


def test_segment_pair():
    pair = SegmentPair.from_coords([0, 0, 1, 1, 2, 2, 3, 3])
    assert pair.first == Segment.from_coords(0, 0, 1, 1)
    assert pair.second == Segment.from_coords(2, 2, 3, 3)
    assert pair.swapped() == SegmentPair(pair.second, pair.first)
    assert pair.coords() == (0.0, 0.0, 1.0, 1.0, 2.0, 2.0, 3.0, 3.0)


def test_segment_pair_rejects_wrong_arity():
    with pytest.raises(ValueError):
        SegmentPair.from_coords([0, 0, 1, 1, 2, 2, 3])

import dataclasses

import pytest

from epsraster.geometry import Color, Point, Rect, Size, in_blending_bounds, make_rect


def test_make_rect_builds_origin_and_size():
    rect = make_rect(1, 2, 3, 4)
    assert rect == Rect(Point(1, 2), Size(3, 4))
    assert rect.origin.x == 1
    assert rect.size.height == 4


def test_bounds_start_is_inclusive():
    bounds = make_rect(0, 10, 5, 20)
    assert in_blending_bounds(10, bounds)
    assert not in_blending_bounds(9, bounds)


def test_bounds_end_is_inclusive():
    bounds = make_rect(0, 10, 5, 20)
    assert in_blending_bounds(10 + 20, bounds)
    assert not in_blending_bounds(10 + 20 + 1, bounds)


def test_zero_height_bounds_hold_only_start_line():
    bounds = make_rect(3, 7, 4, 0)
    inside = [i for i in range(20) if in_blending_bounds(i, bounds)]
    assert inside == [7]


def test_geometry_values_are_immutable():
    point = Point(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        point.x = 5  # type: ignore[misc]
    assert point.x == 1
    assert point == Point(1, 2)


def test_rect_is_immutable():
    rect = make_rect(1, 2, 3, 4)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rect.size = Size(9, 9)  # type: ignore[misc]
    assert rect.size == Size(3, 4)


def test_color_keeps_channels():
    color = Color(red=1.0, green=0.5, blue=0.25, alpha=0.75)
    assert (color.red, color.green, color.blue, color.alpha) == (1.0, 0.5, 0.25, 0.75)
    assert Color() == Color(0.0, 0.0, 0.0, 0.0)
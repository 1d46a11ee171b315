"""Points, sizes, rectangles and colours used when blending."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A pixel position."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Size:
    """A width and height in pixels."""

    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its origin and size."""

    origin: Point = Point()
    size: Size = Size()


@dataclass(frozen=True)
class Color:
    """A colour with channels and alpha in the range 0.0 to 1.0."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 0.0


def make_rect(x: int, y: int, width: int, height: int) -> Rect:
    """Build a rectangle from its four coordinates."""
    return Rect(Point(x, y), Size(width, height))


def in_blending_bounds(raster_index: int, bounds: Rect) -> bool:
    """Tell whether a raster line lies in the bounds; both ends are inclusive."""
    start = bounds.origin.y
    end = start + bounds.size.height
    return start <= raster_index <= end
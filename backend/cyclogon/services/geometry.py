"""
Planar geometry helpers shared by the shape models and the generator.

Points are represented by the small :class:`Point2D` named tuple so they
can be unpacked like plain ``(x, y)`` pairs while still exposing ``.x``
and ``.y``.  The helpers here are pure functions with no dependency on
any of the shape classes.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Tuple


class Point2D(NamedTuple):
    """A point (or vector) in the plane."""

    x: float
    y: float


class SegmentProjection(NamedTuple):
    """Result of projecting a point onto a segment.

    Attributes:
        distance: Euclidean distance from the point to the segment.
        closest_point: Closest point on the segment.
        t: Segment parameter of ``closest_point`` in ``[0, 1]``.
    """

    distance: float
    closest_point: Point2D
    t: float


def as_point(value) -> Point2D:
    """Coerce ``value`` into a :class:`Point2D`.

    Accepts anything with ``x``/``y`` attributes (including pydantic
    models), a mapping with ``"x"``/``"y"`` keys or a 2-sequence.
    """
    if isinstance(value, Point2D):
        return value
    if hasattr(value, "x") and hasattr(value, "y"):
        return Point2D(float(value.x), float(value.y))
    if isinstance(value, dict):
        return Point2D(float(value["x"]), float(value["y"]))
    x, y = value
    return Point2D(float(x), float(y))


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Return the Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def rotate_point(
    point: Tuple[float, float],
    pivot: Tuple[float, float],
    angle: float,
) -> Point2D:
    """Rotate ``point`` about ``pivot`` by ``angle`` radians (counter-clockwise)."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    dx = point[0] - pivot[0]
    dy = point[1] - pivot[1]
    return Point2D(
        pivot[0] + dx * cos_a - dy * sin_a,
        pivot[1] + dx * sin_a + dy * cos_a,
    )


def polar_angle(point: Tuple[float, float]) -> float:
    """Return ``atan2(y, x)`` for ``point``, using 0 at the origin.

    ``math.atan2(0.0, 0.0)`` already returns 0, but the signed-zero
    variants can yield ``±pi``; the explicit guard keeps the angle of a
    degenerate trace point stable.
    """
    x, y = point
    if x == 0.0 and y == 0.0:
        return 0.0
    return math.atan2(y, x)


def project_onto_segment(
    point: Tuple[float, float],
    start: Tuple[float, float],
    end: Tuple[float, float],
) -> SegmentProjection:
    """Project ``point`` onto the closed segment ``start``–``end``.

    Degenerate (zero-length) segments project every point onto ``start``
    with ``t = 0``.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return SegmentProjection(distance(point, start), Point2D(start[0], start[1]), 0.0)
    t = ((point[0] - start[0]) * dx + (point[1] - start[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    closest = Point2D(start[0] + t * dx, start[1] + t * dy)
    return SegmentProjection(distance(point, closest), closest, t)


__all__ = [
    "Point2D",
    "SegmentProjection",
    "as_point",
    "distance",
    "rotate_point",
    "polar_angle",
    "project_onto_segment",
]

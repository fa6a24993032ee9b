"""
Circle model.

The circle keeps only its radius and centre; every boundary point is
computed on demand from an angle measured counter-clockwise from +X
(``0`` = right, ``pi/2`` = top).
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Dict, List, NamedTuple, Tuple

from .errors import InvalidGeometry, InvalidParameter
from .geometry import Point2D, as_point, polar_angle
from .shapes import ShapeKind


class BorderProjection(NamedTuple):
    """A point projected radially onto the circle, with its angle."""

    x: float
    y: float
    angle: float


def _checked_radius(radius: Any) -> float:
    if isinstance(radius, bool) or not isinstance(radius, numbers.Real):
        raise InvalidGeometry(f"circle radius must be a number, got {radius!r}")
    if not (math.isfinite(radius) and radius > 0):
        raise InvalidGeometry(f"circle radius must be positive, got {radius!r}")
    return float(radius)


class Circle:
    """A circle of positive radius.

    Args:
        radius: Circle radius (> 0).
        center: Centre point, the origin by default.

    Raises:
        InvalidGeometry: If ``radius <= 0``.
    """

    kind = ShapeKind.CIRCLE

    def __init__(self, radius: float, center: Tuple[float, float] = (0.0, 0.0)) -> None:
        self._radius = _checked_radius(radius)
        self._center = as_point(center)

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        self._radius = _checked_radius(value)

    @property
    def center(self) -> Point2D:
        return self._center

    @center.setter
    def center(self, value: Tuple[float, float]) -> None:
        self._center = as_point(value)

    @property
    def diameter(self) -> float:
        return 2.0 * self._radius

    @property
    def circumference(self) -> float:
        return 2.0 * math.pi * self._radius

    @property
    def area(self) -> float:
        return math.pi * self._radius * self._radius

    # Points on the border

    def point_on_circle(self, angle: float) -> Point2D:
        return Point2D(
            self._center.x + math.cos(angle) * self._radius,
            self._center.y + math.sin(angle) * self._radius,
        )

    def top_point(self) -> Point2D:
        return self.point_on_circle(math.pi / 2)

    def bottom_point(self) -> Point2D:
        return self.point_on_circle(-math.pi / 2)

    def left_point(self) -> Point2D:
        return self.point_on_circle(math.pi)

    def right_point(self) -> Point2D:
        return self.point_on_circle(0.0)

    def points(self, count: int, start_angle: float = 0.0) -> List[Point2D]:
        """Return ``count`` equally spaced border points starting at ``start_angle``."""
        if count <= 0:
            return []
        step = 2.0 * math.pi / count
        return [self.point_on_circle(start_angle + i * step) for i in range(count)]

    # Geometric queries

    def angle_to_point(self, point: Tuple[float, float]) -> float:
        """Angle from the centre towards ``point`` (0 when ``point`` is the centre)."""
        return polar_angle((point[0] - self._center.x, point[1] - self._center.y))

    def distance_from_center(self, point: Tuple[float, float]) -> float:
        return math.hypot(point[0] - self._center.x, point[1] - self._center.y)

    def contains_point(self, point: Tuple[float, float]) -> bool:
        return self.distance_from_center(point) <= self._radius

    def is_on_border(self, point: Tuple[float, float], tolerance: float = 1e-3) -> bool:
        return abs(self.distance_from_center(point) - self._radius) <= tolerance

    def distance_to_border(self, point: Tuple[float, float]) -> float:
        """Signed distance to the border: negative inside, positive outside."""
        return self.distance_from_center(point) - self._radius

    def project_to_border(self, point: Tuple[float, float]) -> BorderProjection:
        """Project ``point`` radially onto the border.

        The centre itself has no defined direction and projects to the
        point at angle 0.
        """
        angle = self.angle_to_point(point)
        projected = self.point_on_circle(angle)
        return BorderProjection(projected.x, projected.y, angle)

    def arc_length(self, angle: float) -> float:
        return abs(angle) * self._radius

    def angle_for_arc_length(self, length: float) -> float:
        return length / self._radius

    # Transformations

    def scale(self, factor: float) -> None:
        if not factor > 0:
            raise InvalidParameter(f"scale factor must be positive, got {factor!r}")
        self._radius *= factor

    def move_to(self, x: float, y: float) -> None:
        self._center = Point2D(float(x), float(y))

    def move_by(self, dx: float, dy: float) -> None:
        self._center = Point2D(self._center.x + dx, self._center.y + dy)

    def clone(self) -> "Circle":
        return Circle(self._radius, self._center)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "radius": self._radius,
            "center": {"x": self._center.x, "y": self._center.y},
            "diameter": self.diameter,
            "circumference": self.circumference,
            "area": self.area,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Circle":
        center = data.get("center") or {"x": 0.0, "y": 0.0}
        return cls(data["radius"], as_point(center))

    def __repr__(self) -> str:
        return (
            f"Circle(radius={self._radius:.3f}, "
            f"center=({self._center.x:.3f}, {self._center.y:.3f}))"
        )

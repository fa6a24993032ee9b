"""
Trace point model.

The trace point is the point whose motion is recorded while the shape
rolls.  Its coordinates are relative to the centre of the active shape.

Snap bookkeeping is an explicit state machine:

* :class:`Free` – the point was placed by a direct position write.
* :class:`SnappedToEdge` – the point lies on polygon edge ``edge_index``
  at parameter ``t``.
* :class:`SnappedToAngle` – the point lies on the circle border at
  ``angle``.

Only the dedicated snap operations move the point into a snapped state;
every direct position write (``set_position``/``move_by``) moves it
back to :class:`Free` unconditionally.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Tuple, Union

from .geometry import Point2D, as_point, polar_angle
from .shapes import ShapeKind, shape_kind
from .errors import UnsupportedShape


@dataclass(frozen=True)
class Free:
    """The point is not attached to the shape boundary."""


@dataclass(frozen=True)
class SnappedToEdge:
    """The point lies on a polygon edge."""

    edge_index: int
    t: float


@dataclass(frozen=True)
class SnappedToAngle:
    """The point lies on the circle border."""

    angle: float


SnapState = Union[Free, SnappedToEdge, SnappedToAngle]

FREE = Free()


class SnapResult(NamedTuple):
    """Outcome of a snap: the new state and the snapped position."""

    state: SnapState
    point: Point2D


def _require_kind(shape: Any, expected: ShapeKind, operation: str) -> None:
    if shape_kind(shape) is not expected:
        raise UnsupportedShape(f"{operation} requires a {expected.value}, got a {shape.kind.value}")


class TracePoint:
    """A planar point with snap bookkeeping.

    Args:
        x: Initial x coordinate relative to the shape centre.
        y: Initial y coordinate relative to the shape centre.
    """

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self._position = Point2D(float(x), float(y))
        self._snap: SnapState = FREE

    @classmethod
    def for_shape(cls, shape: Any) -> "TracePoint":
        """Create a trace point positioned at the top of ``shape``."""
        point = cls()
        point.reset_to_shape_top(shape)
        return point

    @property
    def position(self) -> Point2D:
        return self._position

    @property
    def x(self) -> float:
        return self._position.x

    @property
    def y(self) -> float:
        return self._position.y

    @property
    def snap_state(self) -> SnapState:
        return self._snap

    @property
    def is_snapped(self) -> bool:
        return not isinstance(self._snap, Free)

    # Free movement

    def set_position(self, x: float, y: float) -> None:
        self._position = Point2D(float(x), float(y))
        self._snap = FREE

    def move_by(self, dx: float, dy: float) -> None:
        self._position = Point2D(self._position.x + dx, self._position.y + dy)
        self._snap = FREE

    # Snapping

    def snap_to_polygon_edge(self, polygon: Any, edge_index: int, t: float) -> SnapResult:
        """Place the point on edge ``edge_index`` of ``polygon`` at parameter ``t``."""
        _require_kind(polygon, ShapeKind.POLYGON, "snap_to_polygon_edge")
        t = max(0.0, min(1.0, float(t)))
        edge = polygon.edge(edge_index)
        self._position = edge.point_at(t)
        self._snap = SnappedToEdge(edge.index, t)
        return SnapResult(self._snap, self._position)

    def snap_to_circle_border(self, circle: Any, angle: float) -> SnapResult:
        """Place the point on the border of ``circle`` at ``angle``."""
        _require_kind(circle, ShapeKind.CIRCLE, "snap_to_circle_border")
        self._position = circle.point_on_circle(angle)
        self._snap = SnappedToAngle(float(angle))
        return SnapResult(self._snap, self._position)

    def snap_to_nearest_edge(self, shape: Any) -> SnapResult:
        """Project the point onto the nearest part of the shape boundary.

        Polygons use the closest edge; circles project radially.

        Raises:
            UnsupportedShape: If ``shape`` is neither a polygon nor a circle.
        """
        kind = shape_kind(shape)
        if kind is ShapeKind.POLYGON:
            closest = shape.find_closest_edge(self._position)
            return self.snap_to_polygon_edge(shape, closest.edge_index, closest.t)
        projected = shape.project_to_border(self._position)
        return self.snap_to_circle_border(shape, projected.angle)

    def reset_to_shape_top(self, shape: Any) -> SnapResult:
        """Move to the canonical initial position on ``shape``.

        For a polygon this is its topmost vertex (the start of the edge
        with the same index); for a circle the border point at ``pi/2``.
        """
        kind = shape_kind(shape)
        if kind is ShapeKind.POLYGON:
            top = shape.top_vertex()
            return self.snap_to_polygon_edge(shape, top.index, 0.0)
        return self.snap_to_circle_border(shape, math.pi / 2)

    # Measurements

    def distance_from_origin(self) -> float:
        return math.hypot(self._position.x, self._position.y)

    def angle_from_origin(self) -> float:
        return polar_angle(self._position)

    def distance_from(self, point: Tuple[float, float]) -> float:
        return math.hypot(self._position.x - point[0], self._position.y - point[1])

    def cycloid_parameter(self, shape_radius: float) -> float:
        """Ratio of the point's distance from the centre to the shape radius.

        Values below 1 give a curtate curve, above 1 a prolate one.
        """
        return self.distance_from_origin() / shape_radius

    # Copies and serialisation

    def clone(self) -> "TracePoint":
        copy = TracePoint(self._position.x, self._position.y)
        copy._snap = self._snap
        return copy

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "position": {"x": self._position.x, "y": self._position.y},
            "snap": snap_state_to_dict(self._snap),
            "distanceFromOrigin": self.distance_from_origin(),
            "angleFromOrigin": self.angle_from_origin(),
        }
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TracePoint":
        position = as_point(data["position"])
        point = cls(position.x, position.y)
        point._snap = snap_state_from_dict(data.get("snap") or {"state": "free"})
        return point

    def __repr__(self) -> str:
        snap = self._snap
        if isinstance(snap, SnappedToAngle):
            info = f"snapped to angle {math.degrees(snap.angle):.1f} deg"
        elif isinstance(snap, SnappedToEdge):
            info = f"snapped to edge {snap.edge_index} at t={snap.t:.3f}"
        else:
            info = "free"
        return f"TracePoint(x={self._position.x:.3f}, y={self._position.y:.3f}, {info})"


def snap_state_to_dict(state: SnapState) -> Dict[str, Any]:
    if isinstance(state, SnappedToEdge):
        return {"state": "edge", "edgeIndex": state.edge_index, "t": state.t}
    if isinstance(state, SnappedToAngle):
        return {"state": "angle", "angle": state.angle}
    return {"state": "free"}


def snap_state_from_dict(data: Dict[str, Any]) -> SnapState:
    state = data.get("state", "free")
    if state == "edge":
        return SnappedToEdge(int(data["edgeIndex"]), float(data["t"]))
    if state == "angle":
        return SnappedToAngle(float(data["angle"]))
    return FREE

"""
Regular polygon model.

A :class:`RegularPolygon` is centred on the origin and described by its
side count, circumscribed radius and the angle of vertex 0
(``rotation_offset``).  Vertices are laid out counter-clockwise, so the
outward normal of every edge is the edge direction rotated by -90°.
The derived vertices and edges are recomputed in full whenever one of
the defining fields changes; no partial update is ever visible.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Tuple

from .errors import InvalidGeometry
from .geometry import Point2D, SegmentProjection, project_onto_segment
from .shapes import ShapeKind

# Layout used when no rotation offset is given: vertex 0 points straight down.
DEFAULT_ROTATION_OFFSET: float = -math.pi / 2


class Vertex(NamedTuple):
    """A polygon vertex with its polar angle and index."""

    x: float
    y: float
    angle: float
    index: int

    @property
    def position(self) -> Point2D:
        return Point2D(self.x, self.y)


@dataclass(frozen=True)
class Edge:
    """Segment joining vertex ``index`` to vertex ``index + 1 (mod n)``."""

    start: Point2D
    end: Point2D
    index: int

    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    def midpoint(self) -> Point2D:
        return Point2D((self.start.x + self.end.x) / 2.0, (self.start.y + self.end.y) / 2.0)

    def point_at(self, t: float) -> Point2D:
        """Interpolate along the edge; ``t`` is clamped to ``[0, 1]``."""
        t = max(0.0, min(1.0, t))
        return Point2D(
            self.start.x + t * (self.end.x - self.start.x),
            self.start.y + t * (self.end.y - self.start.y),
        )

    def distance_to_point(self, point: Tuple[float, float]) -> SegmentProjection:
        return project_onto_segment(point, self.start, self.end)

    def normal(self) -> Point2D:
        """Unit normal pointing out of the (counter-clockwise) polygon."""
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        length = math.hypot(dx, dy)
        return Point2D(dy / length, -dx / length)


class ClosestEdge(NamedTuple):
    """Result of :meth:`RegularPolygon.find_closest_edge`."""

    edge: Edge
    edge_index: int
    distance: float
    closest_point: Point2D
    t: float


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _validate(sides: Any, radius: Any) -> None:
    if not _is_real(sides) or int(sides) != sides or sides < 3:
        raise InvalidGeometry(f"a polygon needs an integer number of sides >= 3, got {sides!r}")
    if not _is_real(radius) or not radius > 0:
        raise InvalidGeometry(f"polygon radius must be positive, got {radius!r}")


class RegularPolygon:
    """An n-sided regular polygon centred on the origin.

    Args:
        sides: Number of sides (>= 3).
        radius: Circumscribed radius (> 0).
        rotation_offset: Angle in radians of vertex 0.  The default
            places vertex 0 at the bottom.

    Raises:
        InvalidGeometry: If ``sides < 3`` or ``radius <= 0``.
    """

    kind = ShapeKind.POLYGON

    def __init__(
        self,
        sides: int,
        radius: float,
        rotation_offset: float = DEFAULT_ROTATION_OFFSET,
    ) -> None:
        _validate(sides, radius)
        self._sides = int(sides)
        self._radius = float(radius)
        self._rotation_offset = float(rotation_offset)
        self._vertices: List[Vertex] = []
        self._edges: List[Edge] = []
        self._calculate_geometry()

    @classmethod
    def resting_on_side(cls, sides: int, radius: float) -> "RegularPolygon":
        """Build a polygon whose bottom side lies flat (normal pointing down)."""
        _validate(sides, radius)
        return cls(sides, radius, -math.pi / 2 + math.pi / sides)

    # ------------------------------------------------------------------
    # Defining fields
    # ------------------------------------------------------------------

    @property
    def sides(self) -> int:
        return self._sides

    @sides.setter
    def sides(self, value: int) -> None:
        _validate(value, self._radius)
        self._sides = int(value)
        self._calculate_geometry()

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float) -> None:
        _validate(self._sides, value)
        self._radius = float(value)
        self._calculate_geometry()

    @property
    def rotation_offset(self) -> float:
        return self._rotation_offset

    @rotation_offset.setter
    def rotation_offset(self, value: float) -> None:
        self._rotation_offset = float(value)
        self._calculate_geometry()

    @property
    def center(self) -> Point2D:
        return Point2D(0.0, 0.0)

    @property
    def vertices(self) -> List[Vertex]:
        return list(self._vertices)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    def _calculate_geometry(self) -> None:
        step = 2.0 * math.pi / self._sides
        vertices: List[Vertex] = []
        for i in range(self._sides):
            angle = self._rotation_offset + i * step
            vertices.append(
                Vertex(math.cos(angle) * self._radius, math.sin(angle) * self._radius, angle, i)
            )
        edges = [
            Edge(vertices[i].position, vertices[(i + 1) % self._sides].position, i)
            for i in range(self._sides)
        ]
        # Swap both lists at once so readers never see mismatched geometry.
        self._vertices, self._edges = vertices, edges

    # ------------------------------------------------------------------
    # Derived metrics
    # ------------------------------------------------------------------

    def side_length(self) -> float:
        return 2.0 * self._radius * math.sin(math.pi / self._sides)

    def apothem(self) -> float:
        return self._radius * math.cos(math.pi / self._sides)

    def interior_angle(self) -> float:
        return (self._sides - 2) * math.pi / self._sides

    def exterior_angle(self) -> float:
        return 2.0 * math.pi / self._sides

    def perimeter(self) -> float:
        return self._sides * self.side_length()

    def area(self) -> float:
        return 0.5 * self.perimeter() * self.apothem()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def vertex(self, index: int) -> Vertex:
        """Return vertex ``index`` (taken modulo the side count)."""
        return self._vertices[index % self._sides]

    def edge(self, index: int) -> Edge:
        """Return edge ``index`` (taken modulo the side count)."""
        return self._edges[index % self._sides]

    def top_vertex(self) -> Vertex:
        """Return the vertex with the largest y; ties go to the lowest index."""
        top = self._vertices[0]
        for v in self._vertices[1:]:
            if v.y > top.y:
                top = v
        return top

    def find_closest_edge(self, point: Tuple[float, float]) -> ClosestEdge:
        best: ClosestEdge | None = None
        for edge in self._edges:
            proj = edge.distance_to_point(point)
            if best is None or proj.distance < best.distance:
                best = ClosestEdge(edge, edge.index, proj.distance, proj.closest_point, proj.t)
        if best is None:
            raise InvalidGeometry("polygon has no edges")
        return best

    def contains_point(self, point: Tuple[float, float]) -> bool:
        """Ray-casting point-in-polygon test."""
        px, py = point
        inside = False
        n = self._sides
        j = n - 1
        for i in range(n):
            vi = self._vertices[i]
            vj = self._vertices[j]
            if (vi.y > py) != (vj.y > py):
                x_cross = (vj.x - vi.x) * (py - vi.y) / (vj.y - vi.y) + vi.x
                if px < x_cross:
                    inside = not inside
            j = i
        return inside

    def distance_to_border(self, point: Tuple[float, float]) -> float:
        return self.find_closest_edge(point).distance

    # ------------------------------------------------------------------
    # Transformations and serialisation
    # ------------------------------------------------------------------

    def rotate(self, delta: float) -> None:
        """Rotate the polygon about its centre by ``delta`` radians."""
        self._rotation_offset += float(delta)
        self._calculate_geometry()

    def clone(self) -> "RegularPolygon":
        return RegularPolygon(self._sides, self._radius, self._rotation_offset)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "sides": self._sides,
            "radius": self._radius,
            "rotationOffset": self._rotation_offset,
            "vertices": [{"x": v.x, "y": v.y} for v in self._vertices],
            "sideLength": self.side_length(),
            "apothem": self.apothem(),
            "interiorAngle": self.interior_angle(),
            "exteriorAngle": self.exterior_angle(),
            "perimeter": self.perimeter(),
            "area": self.area(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegularPolygon":
        return cls(data["sides"], data["radius"], data.get("rotationOffset", DEFAULT_ROTATION_OFFSET))

    def __repr__(self) -> str:
        return (
            f"RegularPolygon(sides={self._sides}, radius={self._radius:.3f}, "
            f"rotation_offset={self._rotation_offset:.3f})"
        )

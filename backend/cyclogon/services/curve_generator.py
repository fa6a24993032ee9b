"""
Roulette curve generation.

:class:`CurveGenerator` rolls a shape along the ground line ``y = 0``
towards +X and records the path of a trace point rigidly attached to
the shape.

Circles use the closed-form cycloid parametrisation.  Regular polygons
roll as a chain of circular arcs: during each side the polygon pivots
about the vertex touching the ground, sweeping the exterior angle
``2*pi/n`` clockwise, then the next vertex becomes the pivot.

Trace points are given in the shape's own coordinates, so a shape at
the origin takes coordinates relative to its centre.  The
generator holds only its read-only :class:`GeneratorConfig`, so one
instance may serve concurrent callers.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Callable, Dict, Tuple

from ..config import DEFAULT_CONFIG, GeneratorConfig, debug_enabled
from .curve import Curve, CurveKind, CycloidSample, CyclogonSample
from .errors import InvalidParameter, UnsupportedShape
from .geometry import Point2D, as_point, polar_angle, rotate_point
from .shapes import ShapeKind, shape_kind

logger = logging.getLogger(__name__)


def _checked_cycles(cycles: Any) -> float:
    if isinstance(cycles, bool) or not isinstance(cycles, numbers.Real):
        raise InvalidParameter(f"cycles must be a number, got {cycles!r}")
    if not (math.isfinite(cycles) and cycles > 0):
        raise InvalidParameter(f"cycles must be a positive finite number, got {cycles!r}")
    return float(cycles)


def _require(shape: Any, expected: ShapeKind) -> None:
    if shape_kind(shape) is not expected:
        raise UnsupportedShape(f"expected a {expected.value}, got a {shape.kind.value}")


def bottom_edge_adjustment(polygon: Any) -> Tuple[int, float]:
    """Find the edge facing the ground and the rotation that makes it flush.

    The bottom edge is the one whose outward normal has the largest
    downward component (the lowest index wins ties).  The returned
    rotation turns that normal to exactly ``(0, -1)``.

    Returns:
        ``(edge_index, adjustment_rotation)``
    """
    best_index = 0
    best_dot = -math.inf
    for edge in polygon.edges:
        dot = -edge.normal().y
        if dot > best_dot:
            best_dot = dot
            best_index = edge.index
    normal = polygon.edge(best_index).normal()
    return best_index, -math.pi / 2 - math.atan2(normal.y, normal.x)


def side_schedule(cycles: float, sides: int, epsilon: float) -> Tuple[int, float]:
    """Return ``(total_sides, final_fraction)`` for rolling ``cycles`` turns.

    ``final_fraction`` is 0 when the last side is swept completely.
    Values of ``cycles * sides`` within ``epsilon`` of a positive
    integer count as that integer.
    """
    raw = cycles * sides
    if not math.isfinite(raw):
        raise InvalidParameter(f"cycles * sides must be finite, got {raw!r}")
    whole = round(raw)
    if whole >= 1 and abs(raw - whole) <= epsilon:
        return int(whole), 0.0
    return int(math.ceil(raw)), raw - math.floor(raw)


class CurveGenerator:
    """Generate cycloids and cyclogons.

    Args:
        config: Sampling resolution.  Defaults to :data:`DEFAULT_CONFIG`.
    """

    def __init__(self, config: GeneratorConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._algorithms: Dict[ShapeKind, Callable[[Any, Point2D, float], Curve]] = {
            ShapeKind.CIRCLE: self._cycloid,
            ShapeKind.POLYGON: self._cyclogon,
        }

    def generate(self, shape: Any, trace_point: Any, cycles: float) -> Curve:
        """Roll ``shape`` for ``cycles`` revolutions and trace ``trace_point``.

        Args:
            shape: A :class:`Circle` or :class:`RegularPolygon`.
            trace_point: A :class:`TracePoint` or any ``(x, y)`` point,
                relative to the shape centre.
            cycles: Number of full revolutions (> 0, not necessarily
                an integer).

        Returns:
            A fully populated :class:`Curve`.

        Raises:
            UnsupportedShape: If ``shape`` is neither a circle nor a polygon.
            InvalidParameter: If ``cycles`` is not a positive finite number.
        """
        kind = shape_kind(shape)
        cycles = _checked_cycles(cycles)
        return self._algorithms[kind](shape, as_point(trace_point), cycles)

    def generate_cycloid(self, circle: Any, trace_point: Any, cycles: float) -> Curve:
        _require(circle, ShapeKind.CIRCLE)
        return self._cycloid(circle, as_point(trace_point), _checked_cycles(cycles))

    def generate_cyclogon(self, polygon: Any, trace_point: Any, cycles: float) -> Curve:
        _require(polygon, ShapeKind.POLYGON)
        return self._cyclogon(polygon, as_point(trace_point), _checked_cycles(cycles))

    # ------------------------------------------------------------------
    # Circle
    # ------------------------------------------------------------------

    @staticmethod
    def cycloid_point(circle: Any, trace_point: Any, theta: float) -> Point2D:
        """Closed-form position of the trace point after rolling ``theta`` radians."""
        radius = circle.radius
        p = as_point(trace_point)
        rel = Point2D(p.x - circle.center.x, p.y - circle.center.y)
        d = math.hypot(rel.x, rel.y)
        alpha = polar_angle(rel)
        return Point2D(
            radius * theta + d * math.cos(alpha - theta),
            radius + d * math.sin(alpha - theta),
        )

    def _planned(self, samples: float) -> int:
        """Round a planned sample count up, rejecting counts over the limit."""
        limit = self.config.max_samples
        if not math.isfinite(samples) or samples > limit:
            raise InvalidParameter(f"curve would need {samples:g} samples, more than the limit of {limit}")
        return int(math.ceil(samples))

    def _cycloid(self, circle: Any, trace_point: Point2D, cycles: float) -> Curve:
        radius = circle.radius
        # Offset of the trace point from the circle centre.
        rel = Point2D(trace_point.x - circle.center.x, trace_point.y - circle.center.y)
        d = math.hypot(rel.x, rel.y)
        alpha = polar_angle(rel)
        total_angle = cycles * 2.0 * math.pi
        intervals = max(1, self._planned(total_angle * self.config.points_per_radian))

        curve = Curve(CurveKind.CYCLOID, circle)
        for i in range(intervals + 1):
            theta = total_angle * i / intervals
            cx = radius * theta
            cy = radius
            angle = alpha - theta
            curve.add_point(
                CycloidSample(
                    cx + d * math.cos(angle),
                    cy + d * math.sin(angle),
                    theta,
                    Point2D(cx, cy),
                )
            )
        curve.update_metadata(
            {
                "cycles": cycles,
                "radius": radius,
                "totalDistance": radius * total_angle,
                "traceDistance": d,
                "traceAngle": alpha,
            }
        )
        logger.debug(
            "Cycloid: radius=%.4f d=%.4f alpha=%.4f cycles=%.4f samples=%d",
            radius,
            d,
            alpha,
            cycles,
            curve.point_count,
        )
        return curve

    # ------------------------------------------------------------------
    # Polygon
    # ------------------------------------------------------------------

    def _cyclogon(self, polygon: Any, trace_point: Point2D, cycles: float) -> Curve:
        n = polygon.sides
        radius = polygon.radius
        side_length = polygon.side_length()
        beta = polygon.exterior_angle()

        bottom_index, adjustment = bottom_edge_adjustment(polygon)
        adjusted = rotate_point(trace_point, (0.0, 0.0), adjustment)
        d = math.hypot(adjusted.x, adjusted.y)
        alpha = polar_angle(adjusted)

        total_sides, fraction = side_schedule(cycles, n, self.config.side_fraction_epsilon)
        self._planned(float(total_sides) * self.config.points_per_side)
        # Angle of the centre as seen from the pivot when a side lies flush.
        base_angle = math.pi / 2 + (math.pi - polygon.interior_angle()) / 2
        per_side = self.config.points_per_side
        verbose = debug_enabled()

        curve = Curve(CurveKind.CYCLOGON, polygon)
        pivot_x = side_length
        cumulative = 0.0
        for side in range(total_sides):
            partial = side == total_sides - 1 and fraction > 0.0
            if partial:
                steps = max(1, int(math.ceil(per_side * fraction)))
                sweep = fraction
            else:
                steps = per_side
                sweep = 1.0
            # Consecutive sides share a boundary sample; emit it once.
            first = 0 if side == 0 else 1
            for p in range(first, steps + 1):
                local = sweep * p / steps * beta
                total = cumulative + local
                center_angle = base_angle - local
                cx = pivot_x + radius * math.cos(center_angle)
                cy = radius * math.sin(center_angle)
                point_angle = alpha - total
                curve.add_point(
                    CyclogonSample(
                        cx + d * math.cos(point_angle),
                        cy + d * math.sin(point_angle),
                        side,
                        total,
                        Point2D(pivot_x, 0.0),
                        Point2D(cx, cy),
                    )
                )
            if verbose:
                logger.debug(
                    "Cyclogon side %d: pivot_x=%.4f rotation=%.4f steps=%d partial=%s",
                    side,
                    pivot_x,
                    cumulative,
                    steps,
                    partial,
                )
            pivot_x += side_length
            cumulative += beta

        curve.update_metadata(
            {
                "cycles": cycles,
                "sides": n,
                "radius": radius,
                "totalSides": total_sides,
                "finalSideFraction": fraction,
                "totalDistance": total_sides * side_length,
                "sideLength": side_length,
                "exteriorAngle": beta,
                "adjustmentRotation": adjustment,
                "bottomEdge": bottom_index,
                "traceDistance": d,
                "traceAngle": alpha,
            }
        )
        logger.debug(
            "Cyclogon: sides=%d radius=%.4f cycles=%.4f total_sides=%d fraction=%.4f samples=%d",
            n,
            radius,
            cycles,
            total_sides,
            fraction,
            curve.point_count,
        )
        return curve


__all__ = ["CurveGenerator", "bottom_edge_adjustment", "side_schedule"]

"""
Tests for the trace point and its snap state machine.

A direct position write always leaves the point ``Free``; only the
snap operations move it onto an edge or border angle, and they refuse
the wrong shape kind.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from cyclogon.services.circle import Circle  # type: ignore
from cyclogon.services.errors import UnsupportedShape  # type: ignore
from cyclogon.services.polygon import RegularPolygon  # type: ignore
from cyclogon.services.trace_point import (  # type: ignore
    Free,
    SnappedToAngle,
    SnappedToEdge,
    TracePoint,
)


def test_new_point_is_free() -> None:
    point = TracePoint(1.0, 2.0)
    assert point.position == (1.0, 2.0)
    assert isinstance(point.snap_state, Free)
    assert not point.is_snapped


def test_for_polygon_starts_at_top_vertex() -> None:
    triangle = RegularPolygon.resting_on_side(3, 1.0)
    point = TracePoint.for_shape(triangle)
    assert point.x == pytest.approx(0.0, abs=1e-12)
    assert point.y == pytest.approx(1.0)
    assert point.snap_state == SnappedToEdge(1, 0.0)


def test_for_circle_starts_at_top() -> None:
    point = TracePoint.for_shape(Circle(2.0))
    assert point.x == pytest.approx(0.0, abs=1e-12)
    assert point.y == pytest.approx(2.0)
    assert point.snap_state == SnappedToAngle(math.pi / 2)


def test_position_writes_clear_snap() -> None:
    point = TracePoint.for_shape(Circle(1.0))
    point.set_position(0.2, 0.3)
    assert isinstance(point.snap_state, Free)
    point.snap_to_circle_border(Circle(1.0), 0.0)
    point.move_by(0.1, 0.0)
    assert isinstance(point.snap_state, Free)
    assert point.position == pytest.approx((1.1, 0.0))


def test_snap_to_polygon_edge() -> None:
    square = RegularPolygon.resting_on_side(4, 1.0)
    point = TracePoint()
    result = point.snap_to_polygon_edge(square, 7, 1.5)
    # Edge index wraps, t is clamped.
    assert result.state == SnappedToEdge(3, 1.0)
    assert result.point == pytest.approx(square.edge(3).end)
    assert point.position == result.point


def test_snap_methods_reject_wrong_shape() -> None:
    point = TracePoint()
    with pytest.raises(UnsupportedShape):
        point.snap_to_polygon_edge(Circle(1.0), 0, 0.5)
    with pytest.raises(UnsupportedShape):
        point.snap_to_circle_border(RegularPolygon(3, 1.0), 0.0)
    assert isinstance(point.snap_state, Free)


def test_snap_to_nearest_edge_polygon() -> None:
    square = RegularPolygon.resting_on_side(4, 1.0)
    point = TracePoint(0.0, -3.0)
    result = point.snap_to_nearest_edge(square)
    assert isinstance(result.state, SnappedToEdge)
    assert result.state.edge_index == 3
    assert result.state.t == pytest.approx(0.5)
    assert point.y == pytest.approx(-square.apothem())


def test_snap_to_nearest_edge_circle() -> None:
    point = TracePoint(3.0, 3.0)
    result = point.snap_to_nearest_edge(Circle(1.0))
    assert isinstance(result.state, SnappedToAngle)
    assert result.state.angle == pytest.approx(math.pi / 4)
    assert point.distance_from_origin() == pytest.approx(1.0)


def test_unsupported_shape() -> None:
    with pytest.raises(UnsupportedShape):
        TracePoint().snap_to_nearest_edge(object())
    with pytest.raises(UnsupportedShape):
        TracePoint.for_shape("square")


def test_measurements() -> None:
    origin = TracePoint()
    assert origin.distance_from_origin() == 0.0
    assert origin.angle_from_origin() == 0.0
    point = TracePoint(0.0, 0.5)
    assert point.angle_from_origin() == pytest.approx(math.pi / 2)
    assert point.distance_from((0.0, 1.5)) == pytest.approx(1.0)
    assert point.cycloid_parameter(2.0) == pytest.approx(0.25)


def test_clone_and_dict_round_trip() -> None:
    square = RegularPolygon.resting_on_side(4, 1.0)
    point = TracePoint()
    point.snap_to_polygon_edge(square, 2, 0.25)
    copy = point.clone()
    copy.move_by(1.0, 1.0)
    assert point.snap_state == SnappedToEdge(2, 0.25)
    restored = TracePoint.from_dict(point.to_dict())
    assert restored.position == pytest.approx(point.position)
    assert restored.snap_state == point.snap_state
    angle = TracePoint.from_dict(TracePoint.for_shape(Circle(1.0)).to_dict())
    assert angle.snap_state == SnappedToAngle(math.pi / 2)

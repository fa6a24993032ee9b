"""
Tests for the circle model.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from cyclogon.services.circle import Circle  # type: ignore
from cyclogon.services.errors import InvalidGeometry, InvalidParameter  # type: ignore


def test_measurements() -> None:
    circle = Circle(2.0)
    assert circle.diameter == 4.0
    assert circle.circumference == pytest.approx(4.0 * math.pi)
    assert circle.area == pytest.approx(4.0 * math.pi)


@pytest.mark.parametrize("radius", [0.0, -1.0, float("inf"), None, True])
def test_invalid_radius(radius) -> None:
    with pytest.raises(InvalidGeometry):
        Circle(radius)


def test_numpy_radius_is_accepted() -> None:
    assert Circle(np.float64(1.5)).radius == 1.5
    assert Circle(np.int64(2)).diameter == 4.0


def test_border_points() -> None:
    circle = Circle(1.0, (2.0, 3.0))
    top = circle.top_point()
    assert top.x == pytest.approx(2.0)
    assert top.y == pytest.approx(4.0)
    assert circle.right_point() == pytest.approx((3.0, 3.0))
    assert circle.left_point() == pytest.approx((1.0, 3.0))
    assert circle.bottom_point() == pytest.approx((2.0, 2.0))
    pts = circle.points(4)
    assert len(pts) == 4
    assert all(circle.is_on_border(p) for p in pts)
    assert circle.points(0) == []


def test_angle_and_distance_queries() -> None:
    circle = Circle(1.0)
    assert circle.angle_to_point((0.0, 2.0)) == pytest.approx(math.pi / 2)
    assert circle.angle_to_point((0.0, 0.0)) == 0.0
    assert circle.distance_to_border((0.0, 0.5)) == pytest.approx(-0.5)
    assert circle.distance_to_border((3.0, 0.0)) == pytest.approx(2.0)
    assert circle.contains_point((0.5, 0.5))
    assert not circle.contains_point((1.0, 1.0))


def test_project_to_border() -> None:
    circle = Circle(2.0)
    proj = circle.project_to_border((5.0, 0.0))
    assert (proj.x, proj.y) == pytest.approx((2.0, 0.0))
    assert proj.angle == pytest.approx(0.0)
    # The centre has no direction and projects to angle 0.
    centre = circle.project_to_border((0.0, 0.0))
    assert (centre.x, centre.y) == pytest.approx((2.0, 0.0))


def test_arc_length_conversions() -> None:
    circle = Circle(3.0)
    assert circle.arc_length(math.pi) == pytest.approx(3.0 * math.pi)
    assert circle.angle_for_arc_length(3.0 * math.pi) == pytest.approx(math.pi)


def test_transforms_and_copies() -> None:
    circle = Circle(1.0)
    circle.scale(2.5)
    assert circle.radius == 2.5
    with pytest.raises(InvalidParameter):
        circle.scale(0.0)
    circle.move_to(1.0, 1.0)
    circle.move_by(1.0, -1.0)
    assert circle.center == (2.0, 0.0)
    copy = circle.clone()
    copy.radius = 9.0
    assert circle.radius == 2.5
    restored = Circle.from_dict(circle.to_dict())
    assert restored.radius == 2.5
    assert restored.center == (2.0, 0.0)
    with pytest.raises(InvalidGeometry):
        circle.radius = -2.0

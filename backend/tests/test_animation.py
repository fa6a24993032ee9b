"""
Tests for rolling-frame playback.

A posed polygon must agree with the curve it came from: the pivot is
one of its vertices, the centre is one circumradius from the pivot and
the traced point lands where the polygon carries it.
"""

from __future__ import annotations

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from cyclogon.services.animation import frame_at, iter_frames  # type: ignore
from cyclogon.services.circle import Circle  # type: ignore
from cyclogon.services.curve import Curve, CurveKind  # type: ignore
from cyclogon.services.curve_generator import CurveGenerator  # type: ignore
from cyclogon.services.errors import InvalidParameter  # type: ignore
from cyclogon.services.geometry import rotate_point  # type: ignore
from cyclogon.services.polygon import RegularPolygon  # type: ignore


@pytest.mark.parametrize("polygon", [RegularPolygon(3, 1.0), RegularPolygon.resting_on_side(6, 2.0), RegularPolygon(4, 1.0, 0.7)])
def test_posed_polygon_matches_curve(polygon: RegularPolygon) -> None:
    trace = (0.25, 0.4)
    curve = CurveGenerator().generate(polygon, trace, 1.25)
    for frame in iter_frames(curve, 41):
        assert len(frame.vertices) == polygon.sides
        nearest = min(math.dist(v, frame.pivot) for v in frame.vertices)
        assert nearest == pytest.approx(0.0, abs=1e-9)
        assert math.dist(frame.center, frame.pivot) == pytest.approx(polygon.radius)
        # Lowest vertex never goes below the ground line.
        assert min(v.y for v in frame.vertices) >= -1e-9
        carried = rotate_point(trace, (0.0, 0.0), frame.rotation)
        assert frame.trace.x == pytest.approx(frame.center.x + carried.x)
        assert frame.trace.y == pytest.approx(frame.center.y + carried.y)


def test_cycloid_frame_rotation() -> None:
    curve = CurveGenerator().generate(Circle(1.0), (0.0, 1.0), 1)
    frame = frame_at(curve, 0.5)
    sample = curve.point(frame.index)
    assert frame.index == math.floor((curve.point_count - 1) * 0.5)
    assert frame.rotation == pytest.approx(-sample.theta)
    assert frame.pivot is None
    assert frame.vertices == []
    assert frame.center == sample.center


def test_progress_is_clamped() -> None:
    curve = CurveGenerator().generate(Circle(1.0), (0.0, 1.0), 1)
    assert frame_at(curve, -3.0).index == 0
    assert frame_at(curve, 7.0).index == curve.point_count - 1
    with pytest.raises(InvalidParameter):
        frame_at(curve, float("nan"))


def test_empty_curve_has_no_frames() -> None:
    with pytest.raises(InvalidParameter):
        frame_at(Curve(CurveKind.CYCLOID), 0.0)
    with pytest.raises(InvalidParameter):
        list(iter_frames(Curve(CurveKind.CYCLOID), 3))


def test_iter_frames_spacing() -> None:
    curve = CurveGenerator().generate(RegularPolygon(3, 1.0), (0.0, 0.5), 1)
    frames = list(iter_frames(curve, 5))
    assert [f.index for f in frames][0] == 0
    assert frames[-1].index == curve.point_count - 1
    assert len(list(iter_frames(curve, 1))) == 1
    with pytest.raises(InvalidParameter):
        list(iter_frames(curve, 0))


def test_frame_dict() -> None:
    curve = CurveGenerator().generate(RegularPolygon(4, 1.0), (0.0, 0.5), 1)
    data = frame_at(curve, 0.3).to_dict()
    assert set(data) == {"index", "progress", "trace", "center", "rotation", "pivot", "vertices"}
    assert len(data["vertices"]) == 4
    assert data["pivot"]["y"] == 0.0

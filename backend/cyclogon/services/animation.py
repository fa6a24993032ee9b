"""
Rolling-frame playback.

A frame re-poses the rolling shape at one sample of a generated curve so
a client can draw the shape synchronised with curve progress.  For a
cycloid the circle is turned by ``-theta``.  For a cyclogon the source
polygon is first turned by the curve's ``adjustmentRotation`` (so it
rests flush on a side) and then by ``-rotation``; the posed vertices are
that rotation about the origin followed by a translation to the sample
centre.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .curve import Curve, CycloidSample, CyclogonSample
from .errors import InvalidParameter
from .geometry import Point2D, rotate_point


@dataclass
class RollingFrame:
    """Pose of the rolling shape at one curve sample.

    Attributes:
        index: Sample index in the curve.
        progress: Clamped progress in ``[0, 1]`` the frame was taken at.
        trace: Trace point position.
        center: Shape centre.
        rotation: Rotation of the shape relative to its source layout.
        pivot: Ground-contact vertex (polygons only).
        vertices: Posed polygon vertices (empty for circles).
    """

    index: int
    progress: float
    trace: Point2D
    center: Point2D
    rotation: float
    pivot: Optional[Point2D] = None
    vertices: List[Point2D] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "progress": self.progress,
            "trace": {"x": self.trace.x, "y": self.trace.y},
            "center": {"x": self.center.x, "y": self.center.y},
            "rotation": self.rotation,
            "pivot": None if self.pivot is None else {"x": self.pivot.x, "y": self.pivot.y},
            "vertices": [{"x": v.x, "y": v.y} for v in self.vertices],
        }


def posed_vertices(polygon: Any, rotation: float, center: Point2D) -> List[Point2D]:
    """Vertices of ``polygon`` turned by ``rotation`` and moved to ``center``."""
    posed = []
    for v in polygon.vertices:
        r = rotate_point(v.position, (0.0, 0.0), rotation)
        posed.append(Point2D(r.x + center.x, r.y + center.y))
    return posed


def frame_at(curve: Curve, progress: float) -> RollingFrame:
    """Return the frame at ``progress`` (clamped to ``[0, 1]``).

    The sample index is ``floor((point_count - 1) * progress)``.

    Raises:
        InvalidParameter: If the curve is empty, ``progress`` is NaN or
            the sample carries no rolling metadata.
    """
    if curve.is_empty():
        raise InvalidParameter("cannot take a frame of an empty curve")
    if math.isnan(progress):
        raise InvalidParameter("progress must be a number")
    progress = max(0.0, min(1.0, float(progress)))
    index = int(math.floor((curve.point_count - 1) * progress))
    sample = curve.point(index)
    trace = Point2D(sample.x, sample.y)

    if isinstance(sample, CycloidSample):
        return RollingFrame(index, progress, trace, sample.center, -sample.theta)
    if isinstance(sample, CyclogonSample):
        rotation = curve.metadata_value("adjustmentRotation", 0.0) - sample.rotation
        vertices: List[Point2D] = []
        if curve.source_shape is not None:
            vertices = posed_vertices(curve.source_shape, rotation, sample.center)
        return RollingFrame(index, progress, trace, sample.center, rotation, sample.pivot, vertices)
    raise InvalidParameter(f"sample {index} carries no rolling metadata")


def iter_frames(curve: Curve, count: int) -> Iterator[RollingFrame]:
    """Yield ``count`` frames evenly spaced from the first to the last sample."""
    if count < 1:
        raise InvalidParameter(f"frame count must be at least 1, got {count!r}")
    if curve.is_empty():
        raise InvalidParameter("cannot take a frame of an empty curve")
    if count == 1:
        yield frame_at(curve, 0.0)
        return
    for i in range(count):
        yield frame_at(curve, i / (count - 1))


__all__ = ["RollingFrame", "frame_at", "iter_frames", "posed_vertices"]

"""
Curve container produced by the generator.

A :class:`Curve` is an ordered sequence of samples in generation order.
Cycloid samples carry the cumulative rotation ``theta`` and the circle
centre; cyclogon samples carry the side index, the cumulative rotation,
the ground-contact pivot and the polygon centre.  The animation and
export layers read that per-sample metadata to re-pose the rolling
shape.

Derived metrics (bounding box, arc length) are computed with ``numpy``
over the coordinate array.  Simplification uses Ramer–Douglas–Peucker
with the distance measured to the closed chord segment, so every
dropped sample lies within ``tolerance`` of the simplified polyline.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from .errors import InvalidParameter
from .geometry import Point2D, as_point, project_onto_segment


class CurveKind(str, Enum):
    CYCLOID = "cycloid"
    CYCLOGON = "cyclogon"


def _point_dict(point: Point2D) -> Dict[str, float]:
    return {"x": point.x, "y": point.y}


@dataclass(frozen=True)
class Sample:
    """A plain curve sample with no rolling metadata."""

    x: float
    y: float

    @property
    def position(self) -> Point2D:
        return Point2D(self.x, self.y)

    def translated(self, dx: float, dy: float) -> "Sample":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def scaled(self, factor: float) -> "Sample":
        return replace(self, x=self.x * factor, y=self.y * factor)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class CycloidSample(Sample):
    """Cycloid sample: rotation angle and circle centre at that angle."""

    theta: float
    center: Point2D

    def translated(self, dx: float, dy: float) -> "CycloidSample":
        c = self.center
        return replace(self, x=self.x + dx, y=self.y + dy, center=Point2D(c.x + dx, c.y + dy))

    def scaled(self, factor: float) -> "CycloidSample":
        c = self.center
        return replace(
            self, x=self.x * factor, y=self.y * factor, center=Point2D(c.x * factor, c.y * factor)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "theta": self.theta, "center": _point_dict(self.center)}


@dataclass(frozen=True)
class CyclogonSample(Sample):
    """Cyclogon sample: side being rolled over, cumulative rotation, pivot and centre."""

    side_index: int
    rotation: float
    pivot: Point2D
    center: Point2D

    def translated(self, dx: float, dy: float) -> "CyclogonSample":
        p, c = self.pivot, self.center
        return replace(
            self,
            x=self.x + dx,
            y=self.y + dy,
            pivot=Point2D(p.x + dx, p.y + dy),
            center=Point2D(c.x + dx, c.y + dy),
        )

    def scaled(self, factor: float) -> "CyclogonSample":
        p, c = self.pivot, self.center
        return replace(
            self,
            x=self.x * factor,
            y=self.y * factor,
            pivot=Point2D(p.x * factor, p.y * factor),
            center=Point2D(c.x * factor, c.y * factor),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "sideIndex": self.side_index,
            "rotation": self.rotation,
            "pivot": _point_dict(self.pivot),
            "center": _point_dict(self.center),
        }


AnySample = Union[Sample, CycloidSample, CyclogonSample]


class BoundingBox(NamedTuple):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point2D:
        return Point2D((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    def contains(self, point: Tuple[float, float], tolerance: float = 0.0) -> bool:
        x, y = point
        return (
            self.min_x - tolerance <= x <= self.max_x + tolerance
            and self.min_y - tolerance <= y <= self.max_y + tolerance
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
            "width": self.width,
            "height": self.height,
        }


class ClosestPoint(NamedTuple):
    index: int
    sample: AnySample
    distance: float


class NormalizationFactors(NamedTuple):
    """Offset subtracted and scale applied by :meth:`Curve.normalize`.

    ``normalized = (original - offset) * scale``.
    """

    offset_x: float
    offset_y: float
    scale: float


def _as_sample(value: Any) -> AnySample:
    if isinstance(value, Sample):
        return value
    p = as_point(value)
    return Sample(p.x, p.y)


def _mark_kept(points: List[Tuple[float, float]], tolerance: float, keep: List[bool]) -> None:
    """Ramer–Douglas–Peucker pass setting ``keep`` flags.

    Uses an explicit stack of ``(first, last)`` ranges so long curves do
    not hit the interpreter recursion limit.
    """
    stack = [(0, len(points) - 1)]
    while stack:
        first, last = stack.pop()
        max_dist = 0.0
        index = -1
        start = points[first]
        end = points[last]
        for i in range(first + 1, last):
            dist = project_onto_segment(points[i], start, end).distance
            if dist > max_dist:
                max_dist = dist
                index = i
        if index != -1 and max_dist > tolerance:
            keep[index] = True
            stack.append((index, last))
            stack.append((first, index))


class Curve:
    """Ordered samples of a roulette curve plus curve-level metadata.

    Args:
        kind: Which algorithm produced the curve.
        source_shape: The shape that was rolled.  Held by reference and
            never modified.
    """

    def __init__(self, kind: CurveKind, source_shape: Any = None) -> None:
        self.kind = CurveKind(kind)
        self.source_shape = source_shape
        self._points: List[AnySample] = []
        self._metadata: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Population and access
    # ------------------------------------------------------------------

    def add_point(self, sample: Any) -> None:
        """Append a sample; ``(x, y)`` pairs become plain samples."""
        self._points.append(_as_sample(sample))

    def points(self) -> List[AnySample]:
        return list(self._points)

    @property
    def point_count(self) -> int:
        return len(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def is_empty(self) -> bool:
        return not self._points

    def point(self, index: int) -> AnySample:
        return self._points[index]

    def first_point(self) -> Optional[AnySample]:
        return self._points[0] if self._points else None

    def last_point(self) -> Optional[AnySample]:
        return self._points[-1] if self._points else None

    def coordinates(self) -> List[Tuple[float, float]]:
        return [(p.x, p.y) for p in self._points]

    def as_array(self) -> np.ndarray:
        """Return the coordinates as an ``(N, 2)`` float array."""
        if not self._points:
            return np.zeros((0, 2), dtype=float)
        return np.asarray(self.coordinates(), dtype=float)

    @property
    def metadata(self) -> Dict[str, Any]:
        return dict(self._metadata)

    def set_metadata(self, key: str, value: Any) -> None:
        self._metadata[key] = value

    def update_metadata(self, values: Dict[str, Any]) -> None:
        self._metadata.update(values)

    def metadata_value(self, key: str, default: Any = None) -> Any:
        return self._metadata.get(key, default)

    # ------------------------------------------------------------------
    # Derived metrics
    # ------------------------------------------------------------------

    def bounding_box(self) -> Optional[BoundingBox]:
        """Axis-aligned bounds over every sample, ``None`` for an empty curve."""
        if not self._points:
            return None
        arr = self.as_array()
        mins = arr.min(axis=0)
        maxs = arr.max(axis=0)
        return BoundingBox(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))

    def arc_length(self) -> float:
        """Length of the polyline through the samples in order."""
        if len(self._points) < 2:
            return 0.0
        deltas = np.diff(self.as_array(), axis=0)
        return float(np.hypot(deltas[:, 0], deltas[:, 1]).sum())

    def find_closest_point(self, position: Any) -> Optional[ClosestPoint]:
        """Return the sample nearest to ``position`` (first one on ties)."""
        if not self._points:
            return None
        target = as_point(position)
        arr = self.as_array()
        dists = np.hypot(arr[:, 0] - target.x, arr[:, 1] - target.y)
        index = int(np.argmin(dists))
        return ClosestPoint(index, self._points[index], float(dists[index]))

    # ------------------------------------------------------------------
    # Derived curves
    # ------------------------------------------------------------------

    def _derived(self, samples: Iterable[AnySample]) -> "Curve":
        curve = Curve(self.kind, self.source_shape)
        curve._points = list(samples)
        curve._metadata = dict(self._metadata)
        return curve

    def clone(self) -> "Curve":
        return self._derived(self._points)

    def slice(self, start: int, end: Optional[int] = None) -> "Curve":
        """Return a new curve with samples ``start:end`` (Python slice semantics)."""
        return self._derived(self._points[start:end])

    def subsample(self, step: int) -> "Curve":
        """Keep every ``step``-th sample; the last sample is always kept.

        Raises:
            InvalidParameter: If ``step < 1``.
        """
        if isinstance(step, bool) or not isinstance(step, numbers.Integral) or step < 1:
            raise InvalidParameter(f"subsample step must be a positive integer, got {step!r}")
        kept = self._points[::step]
        if self._points and (len(self._points) - 1) % step != 0:
            kept.append(self._points[-1])
        return self._derived(kept)

    def simplify(self, tolerance: float) -> "Curve":
        """Ramer–Douglas–Peucker reduction keeping both endpoints.

        Args:
            tolerance: Maximum distance of a dropped sample from the
                simplified polyline.  ``<= 0`` returns an unmodified copy.

        Returns:
            A new :class:`Curve` holding the retained samples in their
            original order.
        """
        n = len(self._points)
        if n < 3 or tolerance <= 0.0:
            return self.clone()
        keep = [False] * n
        keep[0] = True
        keep[-1] = True
        _mark_kept(self.coordinates(), float(tolerance), keep)
        return self._derived(p for p, k in zip(self._points, keep) if k)

    # ------------------------------------------------------------------
    # In-place transforms
    # ------------------------------------------------------------------

    def translate(self, dx: float, dy: float) -> None:
        self._points = [p.translated(dx, dy) for p in self._points]

    def scale(self, factor: float) -> None:
        """Scale every sample (and its centre/pivot) about the origin."""
        if not math.isfinite(factor) or factor == 0.0:
            raise InvalidParameter(f"scale factor must be finite and non-zero, got {factor!r}")
        self._points = [p.scaled(factor) for p in self._points]

    def normalize(self) -> NormalizationFactors:
        """Fit the curve into the unit box anchored at the origin.

        The bounding box minimum moves to ``(0, 0)`` and the larger side
        is scaled to 1; a zero-extent curve keeps scale 1.
        """
        box = self.bounding_box()
        if box is None:
            return NormalizationFactors(0.0, 0.0, 1.0)
        extent = max(box.width, box.height)
        factor = 1.0 / extent if extent > 0.0 else 1.0
        self.translate(-box.min_x, -box.min_y)
        self.scale(factor)
        return NormalizationFactors(box.min_x, box.min_y, factor)

    def denormalize(self, factors: NormalizationFactors) -> None:
        """Undo :meth:`normalize` given the factors it returned."""
        self.scale(1.0 / factors.scale)
        self.translate(factors.offset_x, factors.offset_y)

    def __repr__(self) -> str:
        return f"Curve(kind={self.kind.value}, points={len(self._points)})"


__all__ = [
    "CurveKind",
    "Sample",
    "CycloidSample",
    "CyclogonSample",
    "BoundingBox",
    "ClosestPoint",
    "NormalizationFactors",
    "Curve",
]

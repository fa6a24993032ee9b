"""
Pydantic data models for the cyclogon API.

Requests describe a shape with a ``kind`` discriminator, an optional
trace point and the number of revolutions.  Revolutions and sampling
resolution are range-checked here (422 when out of range).  Shape
parameters are only type-checked here; their geometric validity
(positive radius, at least three sides) is enforced by the shape models
so the API reports it as a 400 with the domain error message.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..config import (
    DEFAULT_CYCLES,
    DEFAULT_RADIUS,
    DEFAULT_SIDES,
    MAX_CYCLES,
    MAX_POINTS_PER_RADIAN,
    MAX_POINTS_PER_SIDE,
)


class Point(BaseModel):
    """A 2D point."""

    x: float = Field(..., description="X coordinate")
    y: float = Field(..., description="Y coordinate")


class CircleShape(BaseModel):
    """Descriptor of a rolling circle."""

    kind: Literal["circle"] = Field(..., description="Shape discriminator")
    radius: float = Field(default=DEFAULT_RADIUS, description="Circle radius (> 0)")


class PolygonShape(BaseModel):
    """Descriptor of a rolling regular polygon."""

    kind: Literal["polygon"] = Field(..., description="Shape discriminator")
    sides: int = Field(default=DEFAULT_SIDES, description="Number of sides (3–20)")
    radius: float = Field(default=DEFAULT_RADIUS, description="Circumscribed radius (> 0)")
    rotationOffset: Optional[float] = Field(
        default=None,
        description="Angle of vertex 0 in radians; omitted means resting flat on a side",
    )


ShapeDescriptor = Annotated[Union[CircleShape, PolygonShape], Field(discriminator="kind")]


class Resolution(BaseModel):
    """Sampling resolution overrides."""

    pointsPerSide: Optional[int] = Field(
        default=None, gt=0, le=MAX_POINTS_PER_SIDE, description="Samples per polygon side sweep"
    )
    pointsPerRadian: Optional[float] = Field(
        default=None, gt=0, le=MAX_POINTS_PER_RADIAN, description="Samples per radian of circle rotation"
    )


class CurveCreateRequest(BaseModel):
    """Request body for generating a curve."""

    shape: ShapeDescriptor = Field(..., description="Shape to roll along the ground line")
    tracePoint: Optional[Point] = Field(
        default=None,
        description="Traced point relative to the shape centre; defaults to the top of the shape",
    )
    cycles: float = Field(
        default=DEFAULT_CYCLES, gt=0, le=MAX_CYCLES, description="Number of revolutions (0 < cycles <= 5)"
    )
    resolution: Optional[Resolution] = Field(default=None, description="Optional sampling overrides")


class CurvePoint(BaseModel):
    """A curve sample with the rolling metadata needed for playback."""

    x: float
    y: float
    theta: Optional[float] = Field(default=None, description="Cumulative circle rotation (cycloids)")
    sideIndex: Optional[int] = Field(default=None, description="Side being rolled over (cyclogons)")
    rotation: Optional[float] = Field(default=None, description="Cumulative polygon rotation (cyclogons)")
    pivot: Optional[Point] = Field(default=None, description="Ground-contact vertex (cyclogons)")
    center: Optional[Point] = Field(default=None, description="Shape centre at this sample")


class BoundingBoxModel(BaseModel):
    """Axis-aligned bounds of a curve."""

    minX: float
    minY: float
    maxX: float
    maxY: float
    width: float
    height: float


class CurveResponse(BaseModel):
    """A generated curve."""

    curveId: str = Field(..., description="Identifier of the stored curve")
    type: str = Field(..., description="'cycloid' or 'cyclogon'")
    pointCount: int = Field(..., description="Number of samples in the full curve")
    points: List[CurvePoint] = Field(..., description="Samples, possibly downsampled")
    downsampled: bool = Field(default=False, description="Whether points were subsampled for the response")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Curve-level generation values")
    boundingBox: Optional[BoundingBoxModel] = Field(default=None, description="Bounds of the full curve")
    arcLength: float = Field(..., description="Polyline length of the full curve")
    tracePoint: Point = Field(..., description="Trace point used for generation")
    shape: Dict[str, Any] = Field(..., description="Shape that was rolled, with derived metrics")


class FrameResponse(BaseModel):
    """Pose of the rolling shape at one sample."""

    index: int
    progress: float
    trace: Point
    center: Point
    rotation: float = Field(..., description="Shape rotation relative to its source layout")
    pivot: Optional[Point] = None
    vertices: List[Point] = Field(default_factory=list, description="Posed polygon vertices")


class SimplifyRequest(BaseModel):
    """Request body for simplifying a stored curve."""

    tolerance: float = Field(..., description="Maximum deviation of dropped samples")


class SimplifyResponse(BaseModel):
    curveId: str
    tolerance: float
    originalPointCount: int
    pointCount: int
    points: List[Point]


class ShapeInspectRequest(BaseModel):
    shape: ShapeDescriptor = Field(..., description="Shape to inspect")


class ShapeInspectResponse(BaseModel):
    """Derived metrics of a shape descriptor."""

    kind: str
    properties: Dict[str, Any] = Field(..., description="Shape fields and derived metrics")
    top: Point = Field(..., description="Default trace point position for this shape")


class SnapRequest(BaseModel):
    shape: ShapeDescriptor
    point: Point


class SnapResponse(BaseModel):
    """Snapped trace point and its snap state."""

    x: float
    y: float
    state: str = Field(..., description="'edge', 'angle' or 'free'")
    edgeIndex: Optional[int] = None
    t: Optional[float] = None
    angle: Optional[float] = None

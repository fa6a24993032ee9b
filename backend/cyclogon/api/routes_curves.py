"""
Routes for curve generation, retrieval, export, playback and simplification.

Generated curves are kept in the process-wide :data:`curve_store`.
Domain errors raised by the services (invalid geometry or parameters,
unsupported shapes) become ``400`` responses; unknown curve ids become
``404``.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Response

from ..config import MAX_RESPONSE_POINTS, MAX_SIDES, GeneratorConfig
from ..services.animation import frame_at
from ..services.curve import Curve
from ..services.curve_generator import CurveGenerator
from ..services.curve_store import StoredCurve, curve_store
from ..services.errors import CyclogonError
from ..services.export import export_curve, export_filename, parse_format
from ..services.shapes import build_shape
from ..services.trace_point import TracePoint
from .models import (
    CurveCreateRequest,
    CurvePoint,
    CurveResponse,
    FrameResponse,
    Point,
    SimplifyRequest,
    SimplifyResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def shape_from_descriptor(descriptor: Any):
    """Build a shape model from a request descriptor, enforcing the side limit."""
    data = descriptor.model_dump()
    if data.get("kind") == "polygon" and isinstance(data.get("sides"), int) and data["sides"] > MAX_SIDES:
        raise HTTPException(status_code=400, detail=f"polygons are limited to {MAX_SIDES} sides")
    try:
        return build_shape(data)
    except CyclogonError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _generator_config(body: CurveCreateRequest) -> GeneratorConfig:
    config = GeneratorConfig.from_env()
    if body.resolution is not None:
        config = config.with_resolution(
            points_per_side=body.resolution.pointsPerSide,
            points_per_radian=body.resolution.pointsPerRadian,
        )
    return config


def _get_entry(curve_id: str) -> StoredCurve:
    entry = curve_store.get(curve_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Curve not found")
    return entry


def _curve_points(curve: Curve) -> list[CurvePoint]:
    return [CurvePoint(**sample.to_dict()) for sample in curve.points()]


def _curve_response(entry: StoredCurve) -> CurveResponse:
    curve = entry.curve
    shown = curve
    downsampled = False
    # Apply the response cap; the stored curve keeps every sample.
    if curve.point_count > MAX_RESPONSE_POINTS:
        step = math.ceil(curve.point_count / MAX_RESPONSE_POINTS)
        shown = curve.subsample(step)
        downsampled = True
    box = curve.bounding_box()
    return CurveResponse(
        curveId=entry.curve_id,
        type=curve.kind.value,
        pointCount=curve.point_count,
        points=_curve_points(shown),
        downsampled=downsampled,
        metadata=curve.metadata,
        boundingBox=box.to_dict() if box is not None else None,
        arcLength=curve.arc_length(),
        tracePoint=Point(x=entry.trace_point.x, y=entry.trace_point.y),
        shape=curve.source_shape.to_dict(),
    )


@router.post("/curves", response_model=CurveResponse, status_code=201)
async def create_curve(body: CurveCreateRequest) -> CurveResponse:
    """Generate a cycloid or cyclogon and store it.

    When ``tracePoint`` is omitted the point starts at the top of the
    shape.  Curves above ``MAX_RESPONSE_POINTS`` samples are subsampled
    in the response and flagged ``downsampled``.
    """
    shape = shape_from_descriptor(body.shape)
    try:
        config = _generator_config(body)
        if body.tracePoint is None:
            trace = TracePoint.for_shape(shape)
        else:
            trace = TracePoint(body.tracePoint.x, body.tracePoint.y)
        curve = CurveGenerator(config).generate(shape, trace, body.cycles)
    except CyclogonError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    entry = curve_store.add(
        curve,
        trace.position,
        {"shape": body.shape.model_dump(), "cycles": body.cycles},
    )
    logger.info(
        "Created %s curve %s: cycles=%s points=%d",
        curve.kind.value,
        entry.curve_id,
        body.cycles,
        curve.point_count,
    )
    return _curve_response(entry)


@router.get("/curves/{curve_id}", response_model=CurveResponse)
async def get_curve(curve_id: str) -> CurveResponse:
    return _curve_response(_get_entry(curve_id))


@router.get("/curves/{curve_id}/export")
async def export_stored_curve(curve_id: str, format: str = "csv", precision: Optional[int] = None) -> Response:
    """Export a stored curve as CSV, JSON or SVG.

    Args:
        curve_id: Identifier of the stored curve.
        format: ``csv``, ``json`` or ``svg``.
        precision: Decimal places; defaults to the configured precision.

    Returns:
        The rendition with a matching media type and a download filename.
    """
    entry = _get_entry(curve_id)
    try:
        fmt = parse_format(format)
        if precision is None:
            precision = GeneratorConfig.from_env().precision
        content, media_type = export_curve(entry.curve, fmt, precision=precision)
    except CyclogonError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    filename = export_filename(entry.curve, fmt)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/curves/{curve_id}/frame", response_model=FrameResponse)
async def get_frame(curve_id: str, progress: float = 0.0) -> Dict[str, Any]:
    """Pose of the rolling shape at ``progress`` (0 to 1) along the curve."""
    entry = _get_entry(curve_id)
    try:
        frame = frame_at(entry.curve, progress)
    except CyclogonError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return frame.to_dict()


@router.post("/curves/{curve_id}/simplify", response_model=SimplifyResponse)
async def simplify_curve(curve_id: str, body: SimplifyRequest) -> SimplifyResponse:
    """Douglas–Peucker reduction of a stored curve.  The stored curve is unchanged."""
    entry = _get_entry(curve_id)
    simplified = entry.curve.simplify(body.tolerance)
    return SimplifyResponse(
        curveId=entry.curve_id,
        tolerance=body.tolerance,
        originalPointCount=entry.curve.point_count,
        pointCount=simplified.point_count,
        points=[Point(x=x, y=y) for x, y in simplified.coordinates()],
    )

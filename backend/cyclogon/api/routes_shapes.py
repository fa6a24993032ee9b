"""
Routes for inspecting shapes and snapping trace points onto them.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..services.errors import CyclogonError
from ..services.trace_point import TracePoint, snap_state_to_dict
from .models import Point, ShapeInspectRequest, ShapeInspectResponse, SnapRequest, SnapResponse
from .routes_curves import shape_from_descriptor

router = APIRouter()


@router.post("/shapes/inspect", response_model=ShapeInspectResponse)
async def inspect_shape(body: ShapeInspectRequest) -> ShapeInspectResponse:
    """Return derived metrics of a shape and its default trace point."""
    shape = shape_from_descriptor(body.shape)
    top = TracePoint.for_shape(shape).position
    return ShapeInspectResponse(
        kind=shape.kind.value,
        properties=shape.to_dict(),
        top=Point(x=top.x, y=top.y),
    )


@router.post("/shapes/snap", response_model=SnapResponse)
async def snap_point(body: SnapRequest) -> SnapResponse:
    """Snap ``point`` onto the nearest part of the shape boundary."""
    shape = shape_from_descriptor(body.shape)
    trace = TracePoint(body.point.x, body.point.y)
    try:
        result = trace.snap_to_nearest_edge(shape)
    except CyclogonError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return SnapResponse(x=result.point.x, y=result.point.y, **snap_state_to_dict(result.state))

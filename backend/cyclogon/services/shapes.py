"""
Shape kind tag and descriptor helpers.

Both shape models carry a class level ``kind`` attribute holding a
:class:`ShapeKind`.  Operations that work on "a polygon or a circle"
dispatch on that tag instead of inspecting concrete classes, and
:func:`shape_kind` raises :class:`UnsupportedShape` for anything else.

Descriptors are plain mappings of the form ``{"kind": "circle",
"radius": r}`` or ``{"kind": "polygon", "sides": n, "radius": r,
"rotationOffset": a}`` as accepted by the HTTP layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from .errors import UnsupportedShape


class ShapeKind(str, Enum):
    """Kinds of shapes that can roll along the ground line."""

    CIRCLE = "circle"
    POLYGON = "polygon"


def shape_kind(shape: Any) -> ShapeKind:
    """Return the :class:`ShapeKind` of ``shape``.

    Raises:
        UnsupportedShape: If ``shape`` is not a circle or a regular polygon.
    """
    kind = getattr(shape, "kind", None)
    if isinstance(kind, ShapeKind):
        return kind
    raise UnsupportedShape(
        f"unsupported shape {type(shape).__name__!r}; expected a Circle or a RegularPolygon"
    )


def build_shape(descriptor: Mapping[str, Any]):
    """Construct a shape model from a descriptor mapping.

    A polygon descriptor without ``rotationOffset`` (or with ``None``)
    produces a polygon resting flat on a side.

    Raises:
        UnsupportedShape: If ``kind`` is missing or unknown.
        InvalidGeometry: If the shape parameters are invalid.
    """
    # Local imports: both models import ShapeKind from this module.
    from .circle import Circle
    from .polygon import RegularPolygon

    kind = str(descriptor.get("kind", "")).strip().lower()
    if kind == ShapeKind.CIRCLE.value:
        return Circle(descriptor.get("radius"))
    if kind == ShapeKind.POLYGON.value:
        sides = descriptor.get("sides")
        radius = descriptor.get("radius")
        offset = descriptor.get("rotationOffset")
        if offset is None:
            return RegularPolygon.resting_on_side(sides, radius)
        return RegularPolygon(sides, radius, offset)
    raise UnsupportedShape(f"unknown shape kind {descriptor.get('kind')!r}")


__all__ = ["ShapeKind", "shape_kind", "build_shape"]

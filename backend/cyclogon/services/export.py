"""
Text renditions of a generated curve.

Three formats are supported:

* CSV – header ``X,Y`` and one row per sample, values formatted with a
  fixed number of decimals.  An optional ``#`` preamble summarises the
  curve.
* JSON record – ``{type, pointCount, points, metadata, boundingBox,
  arcLength}``.
* SVG – the curve as a single ``<path>`` fitted into the canvas, with
  the ground line drawn underneath.

The functions return strings; the HTTP layer decides how to ship them.
"""

from __future__ import annotations

import csv
import io
import json
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .curve import Curve
from .errors import InvalidParameter

_SVG_NS = "http://www.w3.org/2000/svg"
_SVG_DECIMALS = 2


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    SVG = "svg"


MEDIA_TYPES: Dict[ExportFormat, str] = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.JSON: "application/json",
    ExportFormat.SVG: "image/svg+xml",
}


def _require_points(curve: Curve) -> None:
    if curve.is_empty():
        raise InvalidParameter("cannot export an empty curve")


def _fmt(value: float, decimals: int = _SVG_DECIMALS) -> str:
    """Format a float deterministically, without a ``-0`` artefact."""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-") and float(text) == 0.0:
        return text[1:]
    return text


def _metadata_preamble(curve: Curve) -> List[str]:
    box = curve.bounding_box()
    cycles = curve.metadata_value("cycles")
    lines = [
        "# Cyclogon Export",
        f"# Type: {curve.kind.value}",
        f"# Points: {curve.point_count}",
        f"# Cycles: {cycles if cycles is not None else 'N/A'}",
        f"# Arc Length: {curve.arc_length():.4f}",
    ]
    if box is not None:
        lines.append(
            f"# Bounding Box: [{box.min_x:.4f}, {box.min_y:.4f}] - [{box.max_x:.4f}, {box.max_y:.4f}]"
        )
    lines.append("#")
    return lines


def curve_to_csv(
    curve: Curve,
    precision: int = 6,
    delimiter: str = ",",
    include_headers: bool = True,
    include_metadata: bool = False,
) -> str:
    """Render ``curve`` as a CSV table.

    Args:
        curve: Curve to export.
        precision: Decimal places for every value.
        delimiter: Field separator.
        include_headers: Emit the ``X,Y`` header row.
        include_metadata: Prefix the table with ``#`` comment lines.

    Returns:
        The CSV text, ``\\n`` line endings.

    Raises:
        InvalidParameter: If the curve is empty or ``precision`` is negative.
    """
    _require_points(curve)
    if precision < 0:
        raise InvalidParameter(f"precision must be >= 0, got {precision}")
    output = io.StringIO()
    if include_metadata:
        output.write("\n".join(_metadata_preamble(curve)) + "\n")
    writer = csv.writer(output, delimiter=delimiter, lineterminator="\n")
    if include_headers:
        writer.writerow(["X", "Y"])
    for x, y in curve.coordinates():
        writer.writerow([f"{x:.{precision}f}", f"{y:.{precision}f}"])
    return output.getvalue()


def curve_to_record(curve: Curve, precision: Optional[int] = None) -> Dict[str, Any]:
    """Structured record of ``curve``; values are rounded when ``precision`` is set."""
    _require_points(curve)

    def _r(value: float) -> float:
        return round(value, precision) if precision is not None else value

    box = curve.bounding_box()
    return {
        "type": curve.kind.value,
        "pointCount": curve.point_count,
        "points": [{"x": _r(x), "y": _r(y)} for x, y in curve.coordinates()],
        "metadata": curve.metadata,
        "boundingBox": box.to_dict() if box is not None else None,
        "arcLength": _r(curve.arc_length()),
    }


def curve_to_json(curve: Curve, precision: Optional[int] = None, pretty: bool = False) -> str:
    return json.dumps(curve_to_record(curve, precision), indent=2 if pretty else None)


def _fit_transform(curve: Curve, width: int, height: int, padding: int) -> Tuple[float, float, float]:
    """Scale and offsets mapping curve coordinates into the padded canvas."""
    box = curve.bounding_box()
    view_w = width - 2 * padding
    view_h = height - 2 * padding
    scales = []
    if box.width > 0:
        scales.append(view_w / box.width)
    if box.height > 0:
        scales.append(view_h / box.height)
    scale = min(scales) if scales else 1.0
    offset_x = padding + (view_w - box.width * scale) / 2.0
    offset_y = padding + (view_h - box.height * scale) / 2.0
    return scale, offset_x, offset_y


def curve_to_svg(
    curve: Curve,
    width: int = 800,
    height: int = 400,
    padding: int = 40,
    stroke: str = "#00ff88",
    stroke_width: float = 2.0,
    background: str = "#0f0f0f",
    show_floor: bool = True,
    floor_color: str = "#ffffff",
) -> str:
    """Render ``curve`` as a standalone SVG document.

    The curve keeps its aspect ratio and is centred in the canvas; the
    Y axis is flipped so the curve is drawn upright.

    Raises:
        InvalidParameter: If the curve is empty or the canvas has no room
            inside the padding.
    """
    _require_points(curve)
    if width - 2 * padding <= 0 or height - 2 * padding <= 0:
        raise InvalidParameter("canvas must be larger than twice the padding")
    box = curve.bounding_box()
    scale, offset_x, offset_y = _fit_transform(curve, width, height, padding)

    def _tx(x: float) -> float:
        return (x - box.min_x) * scale + offset_x

    def _ty(y: float) -> float:
        return height - ((y - box.min_y) * scale + offset_y)

    coords = curve.coordinates()
    parts = [f"M {_fmt(_tx(coords[0][0]))} {_fmt(_ty(coords[0][1]))}"]
    for x, y in coords[1:]:
        parts.append(f"L {_fmt(_tx(x))} {_fmt(_ty(y))}")
    d = " ".join(parts)

    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {int(width)} {int(height)}" '
        f'width="{int(width)}" height="{int(height)}" style="background-color: {background}">'
    )
    lines.append(f"  <title>{curve.kind.value}</title>")
    lines.append(f"  <desc>{curve.kind.value} with {curve.point_count} points</desc>")
    if show_floor:
        floor_y = _fmt(_ty(0.0))
        lines.append(
            f'  <line x1="{padding}" y1="{floor_y}" x2="{width - padding}" y2="{floor_y}" '
            f'stroke="{floor_color}" stroke-width="1" stroke-opacity="0.5" />'
        )
    lines.append(
        f'  <path d="{d}" fill="none" stroke="{stroke}" stroke-width="{_fmt(stroke_width)}" '
        f'stroke-linecap="round" stroke-linejoin="round" />'
    )
    lines.append(f"  <!-- Arc Length: {curve.arc_length():.4f} -->")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def export_filename(curve: Curve, fmt: str) -> str:
    """Suggested download name, e.g. ``cyclogon_cyclogon3sides_1cycles.csv``."""
    fmt = parse_format(fmt)
    sides = curve.metadata_value("sides")
    cycles = curve.metadata_value("cycles")
    name = f"cyclogon_{curve.kind.value}"
    if sides is not None:
        name += f"{sides}sides"
    if cycles is not None:
        name += f"_{cycles:g}cycles"
    return f"{name}.{fmt.value}"


def parse_format(fmt: Any) -> ExportFormat:
    try:
        return ExportFormat(str(fmt).strip().lower())
    except ValueError:
        raise InvalidParameter(f"unsupported export format {fmt!r}; expected csv, json or svg") from None


def export_curve(curve: Curve, fmt: Any, precision: int = 6) -> Tuple[str, str]:
    """Render ``curve`` in ``fmt``.

    Returns:
        ``(content, media_type)``
    """
    fmt = parse_format(fmt)
    if fmt is ExportFormat.CSV:
        content = curve_to_csv(curve, precision=precision)
    elif fmt is ExportFormat.JSON:
        content = curve_to_json(curve, precision=precision)
    else:
        content = curve_to_svg(curve)
    return content, MEDIA_TYPES[fmt]


__all__ = [
    "ExportFormat",
    "MEDIA_TYPES",
    "curve_to_csv",
    "curve_to_record",
    "curve_to_json",
    "curve_to_svg",
    "export_filename",
    "export_curve",
    "parse_format",
]

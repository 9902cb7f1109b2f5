"""Annotation overlay for chart specs.

Annotations are formatted for the Chart.js annotation plugin. The overlay is a
no-op for an empty marker list so the renderer does not load the plugin.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from analysis.chart_data import AnnotationMarker

from .axes import X_AXIS_ID, Y_AXIS_ID
from .colors import STROKE_ALPHA, hex_to_rgba, parse_hex
from .schema import RenderSpec

DEFAULT_ANNOTATION_COLOR = "#777777"
BOX_FILL_ALPHA = 0.2


def _color(marker: AnnotationMarker, alpha: float) -> str:
    base = marker.color if parse_hex(marker.color) is not None else DEFAULT_ANNOTATION_COLOR
    return hex_to_rgba(base, alpha)  # type: ignore[arg-type]


def format_annotation(marker: AnnotationMarker) -> dict[str, Any]:
    """Format a marker as a Chart.js annotation plugin entry.

    Raises:
        ValueError: If the marker kind is not supported.
    """

    scale_id = X_AXIS_ID if marker.axis == "x" else Y_AXIS_ID
    if marker.kind == "line":
        formatted: dict[str, Any] = {
            "type": "line",
            "mode": "vertical" if marker.axis == "x" else "horizontal",
            "scaleID": scale_id,
            "value": marker.value,
            "borderColor": _color(marker, STROKE_ALPHA),
            "borderWidth": 2,
        }
        if marker.dash:
            formatted["borderDash"] = list(marker.dash)
    elif marker.kind == "box":
        end = marker.end_value if marker.end_value is not None else marker.value
        formatted = {
            "type": "box",
            "xScaleID": X_AXIS_ID,
            "yScaleID": Y_AXIS_ID,
            "backgroundColor": _color(marker, BOX_FILL_ALPHA),
            "borderColor": _color(marker, STROKE_ALPHA),
            "borderWidth": 1,
        }
        if marker.axis == "x":
            formatted["xMin"] = marker.value
            formatted["xMax"] = end
            if marker.y_min is not None:
                formatted["yMin"] = marker.y_min
            if marker.y_max is not None:
                formatted["yMax"] = marker.y_max
        else:
            formatted["yMin"] = marker.value
            formatted["yMax"] = end
    else:
        raise ValueError(f"Unsupported annotation kind: {marker.kind!r}.")

    if marker.label:
        formatted["label"] = {"enabled": True, "content": marker.label}
    return formatted


def apply_annotations(spec: RenderSpec, annotations: Sequence[AnnotationMarker]) -> RenderSpec:
    """Fold annotation markers into a spec in declaration order.

    Later markers draw on top of earlier ones; overlapping markers are kept.

    Returns:
        `spec` unchanged for an empty sequence, otherwise a copy with
        annotations enabled.
    """

    if not annotations:
        return spec
    return spec.with_annotations(tuple(format_annotation(marker) for marker in annotations))

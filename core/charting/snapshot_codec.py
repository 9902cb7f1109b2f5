"""Decoding helpers for chart snapshot payloads posted by the client.

Payload keys follow the client's data model vocabulary (`visibleDataSets`,
`minMaxAll` with A1/A2 axis names, ...). Structural problems raise
`SnapshotDecodeError`; numeric problems inside points are left for the
builder's validator so they surface as build failures.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, cast

from analysis.chart_data import (
    DEFAULT_PALETTE,
    DEFAULT_RANGE,
    AnnotationMarker,
    AxisRange,
    ChartSnapshot,
    SeriesDescriptor,
)


class SnapshotDecodeError(ValueError):
    """Raised when a snapshot payload is structurally invalid."""


def decode_chart_snapshot(payload: Mapping[str, Any]) -> ChartSnapshot:
    """Decode a ChartSnapshot from a JSON payload.

    Args:
        payload: Parsed JSON object describing the chart data model.

    Returns:
        ChartSnapshot instance.

    Raises:
        SnapshotDecodeError: When required fields are missing or have the wrong shape.
    """

    if not isinstance(payload, Mapping):
        raise SnapshotDecodeError("Chart payload must be a JSON object.")

    series_raw = payload.get("visibleDataSets") or []
    if not isinstance(series_raw, list):
        raise SnapshotDecodeError("visibleDataSets must be a list.")

    annotations_raw = payload.get("annotations") or []
    if not isinstance(annotations_raw, list):
        raise SnapshotDecodeError("annotations must be a list.")

    palette_raw = payload.get("palette")
    palette = DEFAULT_PALETTE if palette_raw is None else tuple(str(c) for c in _list(palette_raw, "palette"))

    min_max_raw = payload.get("minMaxAll")
    default_raw = payload.get("defaultRange")
    return ChartSnapshot(
        name=str(payload.get("name") or ""),
        visible_data_sets=tuple(_decode_series(s, idx) for idx, s in enumerate(series_raw)),
        data_labels=tuple(str(label) for label in _list(payload.get("dataLabels") or [], "dataLabels")),
        axis_label_a1=_optional_str(payload.get("axisLabelA1")),
        axis_label_a2=_optional_str(payload.get("axisLabelA2")),
        data_label_rotation=payload.get("dataLabelRotation"),
        annotations=tuple(_decode_annotation(a, idx) for idx, a in enumerate(annotations_raw)),
        min_max_all=_decode_range(min_max_raw, "minMaxAll") if min_max_raw is not None else None,
        default_range=_decode_range(default_raw, "defaultRange") if default_raw is not None else DEFAULT_RANGE,
        palette=palette,
        revision=_parse_int(payload.get("revision")) or 0,
    )


def _decode_series(raw: Mapping[str, Any], idx: int) -> SeriesDescriptor:
    if not isinstance(raw, Mapping):
        raise SnapshotDecodeError(f"visibleDataSets[{idx}] must be an object.")
    if "points" not in raw:
        raise SnapshotDecodeError(f"visibleDataSets[{idx}] is missing 'points'.")
    points = tuple(_decode_point(p, idx, point_idx) for point_idx, p in enumerate(_list(raw["points"], "points")))

    point_colors = raw.get("pointColors")
    dash = raw.get("dashPattern", raw.get("dashStyle"))
    style = raw.get("style") or {}
    if not isinstance(style, Mapping):
        raise SnapshotDecodeError(f"visibleDataSets[{idx}].style must be an object.")
    return SeriesDescriptor(
        name=str(raw.get("name") or ""),
        points=points,
        color=_optional_str(raw.get("color")),
        point_colors=tuple(str(c) for c in _list(point_colors, "pointColors")) if point_colors is not None else None,
        dash_pattern=tuple(_list(dash, "dashPattern")) if dash is not None else None,
        fixed_label_rotation=raw.get("fixedLabelRotation"),
        style=MappingProxyType(dict(style)),
    )


def _decode_point(raw: Any, idx: int, point_idx: int) -> tuple[Any, Any]:
    if isinstance(raw, Mapping):
        if "x" not in raw or "y" not in raw:
            raise SnapshotDecodeError(f"visibleDataSets[{idx}].points[{point_idx}] needs 'x' and 'y'.")
        return raw["x"], raw["y"]
    if isinstance(raw, list) and len(raw) == 2:
        return raw[0], raw[1]
    raise SnapshotDecodeError(f"visibleDataSets[{idx}].points[{point_idx}] must be [x, y] or {{x, y}}.")


def _decode_annotation(raw: Mapping[str, Any], idx: int) -> AnnotationMarker:
    if not isinstance(raw, Mapping):
        raise SnapshotDecodeError(f"annotations[{idx}] must be an object.")
    kind = raw.get("kind", raw.get("type", "line"))
    if kind not in ("line", "box"):
        raise SnapshotDecodeError(f"annotations[{idx}].kind must be 'line' or 'box'.")
    axis = raw.get("axis", "x")
    if axis not in ("x", "y"):
        raise SnapshotDecodeError(f"annotations[{idx}].axis must be 'x' or 'y'.")
    value = _parse_float(raw.get("value"))
    if value is None:
        raise SnapshotDecodeError(f"annotations[{idx}].value must be a number.")
    dash = raw.get("dash")
    return AnnotationMarker(
        kind=kind,
        value=value,
        axis=axis,
        end_value=_parse_float(raw.get("endValue")),
        label=_optional_str(raw.get("label")),
        color=_optional_str(raw.get("color")),
        dash=tuple(_list(dash, "dash")) if dash is not None else None,
        y_min=_parse_float(raw.get("yMin")),
        y_max=_parse_float(raw.get("yMax")),
    )


def _decode_range(raw: Any, name: str) -> AxisRange:
    if not isinstance(raw, Mapping):
        raise SnapshotDecodeError(f"{name} must be an object.")
    values = {key: _parse_float(raw.get(key)) for key in ("minA1", "maxA1", "minA2", "maxA2")}
    missing = sorted(key for key, value in values.items() if value is None)
    if missing:
        raise SnapshotDecodeError(f"{name} is missing numeric {', '.join(missing)}.")
    return AxisRange(
        min_x=cast(float, values["minA1"]),
        max_x=cast(float, values["maxA1"]),
        min_y=cast(float, values["minA2"]),
        max_y=cast(float, values["maxA2"]),
    )


def _list(value: Any, name: str) -> list[Any]:
    if not isinstance(value, list):
        raise SnapshotDecodeError(f"{name} must be a list.")
    return value


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _parse_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        raise SnapshotDecodeError(f"Expected a finite number, got {value!r}.")
    return value


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value

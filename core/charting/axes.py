"""Axis domain computation and Chart.js axis options."""

from __future__ import annotations

from collections.abc import Iterable

from analysis.chart_data import AxisRange, ChartSnapshot, SeriesDescriptor

from .schema import AxisConfig, AxisOptions, AxisTicks, ScaleLabel

X_AXIS_ID = "x-axis-0"
Y_AXIS_ID = "y-axis-0"


def compute_range(visible_series: Iterable[SeriesDescriptor], *, fallback: AxisRange) -> AxisRange:
    """Compute the axis domain over the union of all visible points.

    Args:
        visible_series: Series already filtered for visibility.
        fallback: Range returned when there are no points to measure.

    Returns:
        AxisRange spanning every point, or `fallback` when the union is empty.
    """

    xs: list[float] = []
    ys: list[float] = []
    for series in visible_series:
        for x, y in series.points:
            xs.append(x)
            ys.append(y)
    if not xs:
        return fallback
    return AxisRange(min_x=min(xs), max_x=max(xs), min_y=min(ys), max_y=max(ys))


def resolve_range(snapshot: ChartSnapshot) -> AxisRange:
    """Return the externally supplied range when present, else compute it."""

    if snapshot.min_max_all is not None:
        return snapshot.min_max_all
    return compute_range(snapshot.visible_data_sets, fallback=snapshot.default_range)


def label_rotation(snapshot: ChartSnapshot) -> float | None:
    """Return the x-axis tick rotation.

    Series-level `fixed_label_rotation` pins the rotation; when several series
    declare one, the last visible series wins.
    """

    rotation = snapshot.data_label_rotation
    for series in snapshot.visible_data_sets:
        if series.fixed_label_rotation is not None:
            rotation = series.fixed_label_rotation
    return rotation


def _scale_label(text: str | None, font: str | None) -> ScaleLabel:
    label: ScaleLabel = {"display": bool(text)}
    if text:
        label["labelString"] = text
    if font:
        label["fontFamily"] = font
    return label


def axis_config(snapshot: ChartSnapshot, axis_range: AxisRange, *, font: str | None = None) -> AxisConfig:
    """Build the Chart.js `scales` block for a snapshot.

    Args:
        snapshot: Chart snapshot supplying captions and rotation.
        axis_range: Domain computed (or supplied) for this build.
        font: Optional font family applied to ticks and captions.

    Returns:
        AxisConfig with one x-axis and one y-axis.
    """

    x_ticks: AxisTicks = {
        "beginAtZero": axis_range.min_x == 0,
        "precision": 0,
        "min": axis_range.min_x,
        "max": axis_range.max_x,
    }
    rotation = label_rotation(snapshot)
    if rotation is not None:
        x_ticks["minRotation"] = rotation
        x_ticks["maxRotation"] = rotation
    y_ticks: AxisTicks = {"min": axis_range.min_y, "max": axis_range.max_y}
    if font:
        x_ticks["fontFamily"] = font
        y_ticks["fontFamily"] = font

    x_axis: AxisOptions = {
        "id": X_AXIS_ID,
        "display": True,
        "ticks": x_ticks,
        "scaleLabel": _scale_label(snapshot.axis_label_a1, font),
    }
    y_axis: AxisOptions = {
        "id": Y_AXIS_ID,
        "display": True,
        "ticks": y_ticks,
        "scaleLabel": _scale_label(snapshot.axis_label_a2, font),
    }
    return {"xAxes": [x_axis], "yAxes": [y_axis]}

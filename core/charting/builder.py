"""Chart specification builder.

`build_render_spec` turns an immutable `ChartSnapshot` into a `RenderSpec`:
per-series styles (colors, defaults, dash, performance limits), one axis
domain over all visible series, and the annotation overlay. The function is
pure; every call allocates a new spec.
"""

from __future__ import annotations

import logging
from typing import Any

from analysis.chart_data import ChartDataModel, ChartSnapshot, SeriesDescriptor

from .annotations import apply_annotations
from .axes import axis_config, resolve_range
from .colors import ColorResolver
from .schema import DatasetStyle, RenderSpec
from .styles import apply_performance_limits, merge_style
from .validator import ensure_valid

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 400


def _base_options(snapshot: ChartSnapshot, *, font: str | None) -> dict[str, Any]:
    title: dict[str, Any] = {"display": bool(snapshot.name), "text": snapshot.name, "fontSize": 15}
    legend: dict[str, Any] = {"display": True, "position": "bottom", "labels": {}}
    if font:
        title["fontFamily"] = font
        legend["labels"]["fontFamily"] = font
    return {
        "plugins": {"datalabels": {"display": False}},
        "annotation": {
            "drawTime": "afterDraw",
            "events": ["click", "mouseenter", "mouseleave"],
            "annotations": [],
        },
        "animation": {"duration": 0},
        "title": title,
        "legend": legend,
        "maintainAspectRatio": False,
        "elements": {"point": {"radius": 0}},
    }


# Keys owned by the builder; a series style cannot replace them.
RESERVED_STYLE_KEYS = frozenset(
    {
        "label",
        "data",
        "backgroundColor",
        "borderColor",
        "pointBackgroundColor",
        "pointBorderColor",
        "pointHoverBackgroundColor",
        "pointHoverBorderColor",
        "borderDash",
    }
)


def _series_style(series: SeriesDescriptor) -> dict[str, Any]:
    ignored = sorted(key for key in series.style if key in RESERVED_STYLE_KEYS)
    if ignored:
        logger.warning("Ignoring reserved style keys %s on series %r", ", ".join(ignored), series.name)
    return {key: value for key, value in series.style.items() if key not in RESERVED_STYLE_KEYS}


def build_dataset(series: SeriesDescriptor, *, ordinal: int, resolver: ColorResolver) -> DatasetStyle:
    """Build the Chart.js dataset for one series.

    Args:
        series: Series to style.
        ordinal: Position of the series within the visible series.
        resolver: Color resolver bound to the snapshot palette.

    Returns:
        DatasetStyle with resolved colors, merged style, and performance limits.
    """

    style = merge_style(_series_style(series))

    color = resolver.resolve(series, ordinal)
    # backgroundColor fills under the line; borderColor strokes it
    style["backgroundColor"] = color.fill
    style["borderColor"] = color.stroke
    style["pointBackgroundColor"] = color.fill
    style["pointBorderColor"] = color.stroke
    style["pointHoverBackgroundColor"] = color.stroke
    style["pointHoverBorderColor"] = color.stroke
    if series.point_colors is not None:
        point_colors = resolver.point_colors(series)
        style["pointBackgroundColor"] = [c.fill for c in point_colors]
        style["pointBorderColor"] = [c.stroke for c in point_colors]
        style["pointHoverBackgroundColor"] = [c.stroke for c in point_colors]
        style["pointHoverBorderColor"] = [c.stroke for c in point_colors]
    if series.dash_pattern is not None:
        style["borderDash"] = list(series.dash_pattern)

    apply_performance_limits(style, point_count=len(series.points))

    dataset: DatasetStyle = {}
    dataset.update(style)  # type: ignore[typeddict-item]
    dataset["label"] = series.name
    dataset["data"] = [{"x": x, "y": y} for x, y in series.points]
    return dataset


def build_render_spec(
    snapshot: ChartSnapshot,
    *,
    font: str | None = None,
    width: int | None = None,
    height: int | None = None,
) -> RenderSpec:
    """Build a render spec from a chart snapshot.

    Args:
        snapshot: Immutable chart data; `visible_data_sets` is already filtered.
        font: Optional font family applied to the title, legend, and axes.
        width: Display width; defaults to 400.
        height: Display height; defaults to 400.

    Returns:
        A freshly allocated RenderSpec.

    Raises:
        ChartBuildError: If any visible series is malformed.
    """

    validation = ensure_valid(snapshot)
    resolver = ColorResolver(snapshot.palette)

    datasets = tuple(
        build_dataset(series, ordinal=idx, resolver=resolver)
        for idx, series in enumerate(snapshot.visible_data_sets)
    )
    axis_range = resolve_range(snapshot)
    options = _base_options(snapshot, font=font)
    options["scales"] = axis_config(snapshot, axis_range, font=font)

    spec = RenderSpec(
        labels=tuple(snapshot.data_labels),
        datasets=datasets,
        options=options,
        width=width or DEFAULT_WIDTH,
        height=height or DEFAULT_HEIGHT,
        warnings=validation.warnings,
    )
    spec = apply_annotations(spec, snapshot.annotations)
    logger.debug(
        "Built chart spec revision=%d datasets=%d annotations=%d",
        snapshot.revision,
        len(spec.datasets),
        len(spec.annotations),
    )
    return spec


class ChartSpecRefresher:
    """Rebuild a chart spec only when the model revision changes.

    The refresher is the caller-side trigger for `build_render_spec`; it keeps
    the last spec so repeated refreshes of an unchanged model are free.
    """

    def __init__(self, *, font: str | None = None, width: int | None = None, height: int | None = None) -> None:
        self.font = font
        self.width = width
        self.height = height
        self._revision: int | None = None
        self._spec: RenderSpec | None = None
        self.build_count = 0

    def refresh(self, model: ChartDataModel) -> RenderSpec:
        """Return the render spec for the model's current revision."""

        if self._spec is None or model.revision != self._revision:
            snapshot = model.snapshot()
            self._spec = build_render_spec(snapshot, font=self.font, width=self.width, height=self.height)
            self._revision = snapshot.revision
            self.build_count += 1
        return self._spec

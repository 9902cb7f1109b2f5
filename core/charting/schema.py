"""Output types for the chart specification builder.

A `RenderSpec` is the entire contract handed to the rendering boundary: labels,
Chart.js datasets, Chart.js options, and the formatted annotation markers.
Every build allocates a fresh RenderSpec; nothing in it is shared with module
defaults or with earlier builds.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, replace
from typing import Any, TypedDict


class XYPoint(TypedDict):
    """A scatter/line data point in Chart.js `{x, y}` form."""

    x: float
    y: float


class DatasetStyle(TypedDict, total=False):
    """A Chart.js dataset payload for one series."""

    label: str
    data: list[XYPoint]
    fill: bool
    showLine: bool
    lineTension: float
    pointRadius: int
    pointHitRadius: int
    pointBorderWidth: int
    pointHoverRadius: int
    pointHoverBorderWidth: int
    backgroundColor: str
    borderColor: str
    pointBackgroundColor: str | list[str]
    pointBorderColor: str | list[str]
    pointHoverBackgroundColor: str | list[str]
    pointHoverBorderColor: str | list[str]
    borderDash: list[float]


class AxisTicks(TypedDict, total=False):
    """Tick configuration for a single Chart.js axis."""

    min: float
    max: float
    beginAtZero: bool
    precision: int
    minRotation: float
    maxRotation: float
    fontFamily: str


class ScaleLabel(TypedDict, total=False):
    """Axis caption configuration."""

    display: bool
    labelString: str
    fontFamily: str


class AxisOptions(TypedDict, total=False):
    """A single Chart.js axis entry."""

    id: str
    display: bool
    ticks: AxisTicks
    scaleLabel: ScaleLabel


class AxisConfig(TypedDict):
    """Chart.js `scales` block (one x-axis, one y-axis)."""

    xAxes: list[AxisOptions]
    yAxes: list[AxisOptions]


@dataclass(frozen=True, slots=True)
class RenderSpec:
    """A fully resolved, declarative chart description.

    Attributes:
        labels: Shared label sequence.
        datasets: One Chart.js dataset per visible series, in series order.
        options: Chart.js options (title, legend, scales, annotation block).
        annotations: Formatted annotation markers in declaration order.
        annotations_enabled: Whether the renderer must load annotation support.
        width: Display width in chart units.
        height: Display height in chart units.
        warnings: Non-fatal notes about the input (e.g. label misalignment).
    """

    labels: tuple[str, ...]
    datasets: tuple[DatasetStyle, ...]
    options: dict[str, Any]
    annotations: tuple[dict[str, Any], ...] = ()
    annotations_enabled: bool = False
    width: int = 400
    height: int = 400
    warnings: tuple[str, ...] = ()

    @property
    def axis_options(self) -> AxisConfig:
        return self.options["scales"]

    def with_annotations(self, annotations: tuple[dict[str, Any], ...]) -> RenderSpec:
        """Return a copy with annotations enabled and folded into the options."""

        options = deepcopy(self.options)
        block = options.setdefault("annotation", {})
        block["annotations"] = list(block.get("annotations", ())) + [deepcopy(a) for a in annotations]
        return replace(
            self,
            options=options,
            annotations=self.annotations + annotations,
            annotations_enabled=True,
        )

    def as_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable copy of the render spec."""

        return {
            "labels": list(self.labels),
            "datasets": deepcopy(list(self.datasets)),
            "options": deepcopy(self.options),
            "annotations": deepcopy(list(self.annotations)),
            "plugins": ["annotation"] if self.annotations_enabled else [],
            "width": self.width,
            "height": self.height,
            "warnings": list(self.warnings),
        }

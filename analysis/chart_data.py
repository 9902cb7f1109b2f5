"""Observable chart data model and the immutable snapshots the builder reads.

The mutable `ChartDataModel` is owned by the simulation side. Every mutation
bumps `revision`; callers compare revisions to decide when to rebuild a chart
spec. The builder itself only ever sees a `ChartSnapshot`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

Point = tuple[float, float]

AnnotationKind = Literal["line", "box"]
AnnotationAxis = Literal["x", "y"]

DEFAULT_PALETTE: tuple[str, ...] = (
    "#3366CC",
    "#DC3912",
    "#FF9900",
    "#109618",
    "#990099",
    "#0099C6",
    "#DD4477",
    "#66AA00",
    "#B82E2E",
    "#316395",
)


@dataclass(frozen=True, slots=True)
class AxisRange:
    """Numeric domain for both chart axes.

    Attributes:
        min_x: Lower bound of the x-axis (A1).
        max_x: Upper bound of the x-axis (A1).
        min_y: Lower bound of the y-axis (A2).
        max_y: Upper bound of the y-axis (A2).
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float


DEFAULT_RANGE = AxisRange(min_x=0, max_x=100, min_y=0, max_y=100)


@dataclass(frozen=True, slots=True)
class AnnotationMarker:
    """A user-defined overlay marker drawn on top of the chart.

    Attributes:
        kind: "line" for a single value, "box" for a span.
        value: Position of a line, or the start of a box span.
        axis: Axis the value refers to.
        end_value: End of a box span (ignored for lines).
        label: Optional text drawn next to the marker.
        color: Optional hex color; the marker default is used when absent.
        dash: Optional dash segments for line markers.
        y_min: Optional lower bound for boxes spanning the x-axis.
        y_max: Optional upper bound for boxes spanning the x-axis.
    """

    kind: AnnotationKind
    value: float
    axis: AnnotationAxis = "x"
    end_value: float | None = None
    label: str | None = None
    color: str | None = None
    dash: tuple[float, ...] | None = None
    y_min: float | None = None
    y_max: float | None = None


@dataclass(frozen=True, slots=True)
class SeriesDescriptor:
    """Read-only description of one visible series.

    Attributes:
        name: Display label used in the legend.
        points: Ordered (x, y) pairs; insertion order is display order.
        color: Optional explicit hex color for the whole series.
        point_colors: Optional per-point hex colors, consumed in order.
        dash_pattern: Optional stroke dash segments.
        fixed_label_rotation: Optional constant tick-label rotation.
        style: Optional style overrides merged over the dataset defaults.
    """

    name: str
    points: tuple[Point, ...]
    color: str | None = None
    point_colors: tuple[str, ...] | None = None
    dash_pattern: tuple[float, ...] | None = None
    fixed_label_rotation: float | None = None
    style: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class ChartSnapshot:
    """Immutable view of a chart data model at one revision.

    Attributes:
        name: Chart title; an empty name hides the title.
        visible_data_sets: Series already filtered for visibility.
        data_labels: Shared label sequence, positionally aligned with points.
        axis_label_a1: Optional x-axis caption.
        axis_label_a2: Optional y-axis caption.
        data_label_rotation: Optional x-axis tick rotation.
        annotations: Overlay markers in declaration order.
        min_max_all: Optional externally aggregated range; wins over computation.
        default_range: Fallback range used when there is nothing to measure.
        palette: Base colors assigned by position.
        revision: Model revision the snapshot was taken at.
    """

    name: str = ""
    visible_data_sets: tuple[SeriesDescriptor, ...] = ()
    data_labels: tuple[str, ...] = ()
    axis_label_a1: str | None = None
    axis_label_a2: str | None = None
    data_label_rotation: float | None = None
    annotations: tuple[AnnotationMarker, ...] = ()
    min_max_all: AxisRange | None = None
    default_range: AxisRange = DEFAULT_RANGE
    palette: tuple[str, ...] = DEFAULT_PALETTE
    revision: int = 0


class ChartDataSet:
    """A mutable, named series owned by the chart data model."""

    def __init__(
        self,
        name: str,
        *,
        points: Sequence[Point] = (),
        color: str | None = None,
        point_colors: Sequence[str] | None = None,
        dash_pattern: Sequence[float] | None = None,
        fixed_label_rotation: float | None = None,
        style: Mapping[str, object] | None = None,
        max_points: int | None = None,
        visible: bool = True,
    ) -> None:
        self.name = name
        self.points: list[Point] = list(points)
        self.color = color
        self.point_colors = tuple(point_colors) if point_colors is not None else None
        self.dash_pattern = tuple(dash_pattern) if dash_pattern is not None else None
        self.fixed_label_rotation = fixed_label_rotation
        self.style = dict(style or {})
        self.max_points = max_points
        self.visible = visible

    @property
    def visible_points(self) -> tuple[Point, ...]:
        """Return the trailing window of points that should be drawn."""

        if self.max_points is None or self.max_points <= 0:
            return tuple(self.points)
        return tuple(self.points[-self.max_points :])

    def describe(self) -> SeriesDescriptor:
        """Return a read-only descriptor of the currently visible points."""

        return SeriesDescriptor(
            name=self.name,
            points=self.visible_points,
            color=self.color,
            point_colors=self.point_colors,
            dash_pattern=self.dash_pattern,
            fixed_label_rotation=self.fixed_label_rotation,
            style=MappingProxyType(dict(self.style)),
        )


class ChartDataModel:
    """Mutable chart model with a monotonically increasing revision counter."""

    def __init__(
        self,
        name: str = "",
        *,
        data_labels: Sequence[str] = (),
        axis_label_a1: str | None = None,
        axis_label_a2: str | None = None,
        data_label_rotation: float | None = None,
        default_range: AxisRange = DEFAULT_RANGE,
        palette: Sequence[str] = DEFAULT_PALETTE,
    ) -> None:
        self.name = name
        self.data_sets: list[ChartDataSet] = []
        self.data_labels: list[str] = list(data_labels)
        self.axis_label_a1 = axis_label_a1
        self.axis_label_a2 = axis_label_a2
        self.data_label_rotation = data_label_rotation
        self.annotations: list[AnnotationMarker] = []
        self.default_range = default_range
        self.min_max_all: AxisRange | None = None
        self.palette = tuple(palette)
        self.revision = 0

    def _touch(self) -> None:
        self.revision += 1

    @property
    def visible_data_sets(self) -> tuple[ChartDataSet, ...]:
        """Return data sets flagged visible, in insertion order."""

        return tuple(d for d in self.data_sets if d.visible)

    def add_data_set(self, data_set: ChartDataSet) -> ChartDataSet:
        self.data_sets.append(data_set)
        self._touch()
        return data_set

    def data_set(self, name: str) -> ChartDataSet:
        """Return the data set with the given name.

        Raises:
            KeyError: If no data set has that name.
        """

        for data_set in self.data_sets:
            if data_set.name == name:
                return data_set
        raise KeyError(name)

    def add_point(self, name: str, point: Point, *, label: str | None = None) -> None:
        """Append a point to a named data set, optionally extending the labels."""

        self.data_set(name).points.append((point[0], point[1]))
        if label is not None:
            self.data_labels.append(label)
        self._touch()

    def set_visible(self, name: str, visible: bool) -> None:
        self.data_set(name).visible = visible
        self._touch()

    def add_annotation(self, marker: AnnotationMarker) -> None:
        self.annotations.append(marker)
        self._touch()

    def clear_annotations(self) -> None:
        self.annotations.clear()
        self._touch()

    def set_range(self, axis_range: AxisRange | None) -> None:
        """Set or clear the externally aggregated range."""

        self.min_max_all = axis_range
        self._touch()

    def snapshot(self) -> ChartSnapshot:
        """Return an immutable copy of the model at its current revision."""

        return ChartSnapshot(
            name=self.name,
            visible_data_sets=tuple(d.describe() for d in self.visible_data_sets),
            data_labels=tuple(self.data_labels),
            axis_label_a1=self.axis_label_a1,
            axis_label_a2=self.axis_label_a2,
            data_label_rotation=self.data_label_rotation,
            annotations=tuple(self.annotations),
            min_max_all=self.min_max_all,
            default_range=self.default_range,
            palette=self.palette,
            revision=self.revision,
        )

"""Tests for the observable chart data model and its snapshots."""

from __future__ import annotations

import dataclasses

import pytest

from analysis.chart_data import AnnotationMarker, AxisRange, ChartDataModel, ChartDataSet

pytestmark = pytest.mark.unit


def test_every_mutation_bumps_revision() -> None:
    model = ChartDataModel()
    revisions = [model.revision]

    model.add_data_set(ChartDataSet("a"))
    revisions.append(model.revision)
    model.add_point("a", (0, 1), label="0")
    revisions.append(model.revision)
    model.set_visible("a", False)
    revisions.append(model.revision)
    model.add_annotation(AnnotationMarker(kind="line", value=1))
    revisions.append(model.revision)
    model.clear_annotations()
    revisions.append(model.revision)
    model.set_range(AxisRange(min_x=0, max_x=1, min_y=0, max_y=1))
    revisions.append(model.revision)

    assert revisions == sorted(set(revisions))
    assert model.data_labels == ["0"]


def test_snapshot_filters_visibility_and_freezes_state() -> None:
    model = ChartDataModel()
    model.add_data_set(ChartDataSet("shown", points=[(0, 0)], color="#123456"))
    model.add_data_set(ChartDataSet("hidden", points=[(1, 1)], visible=False))

    snapshot = model.snapshot()
    model.add_point("shown", (5, 5))

    assert [s.name for s in snapshot.visible_data_sets] == ["shown"]
    assert snapshot.visible_data_sets[0].points == ((0, 0),)
    assert snapshot.visible_data_sets[0].color == "#123456"
    assert snapshot.revision == 2
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.name = "changed"  # type: ignore[misc]


def test_visible_points_window_keeps_trailing_points() -> None:
    data_set = ChartDataSet("window", points=[(i, i) for i in range(10)], max_points=3)

    assert data_set.visible_points == ((7, 7), (8, 8), (9, 9))
    assert data_set.describe().points == ((7, 7), (8, 8), (9, 9))


def test_descriptor_style_is_read_only() -> None:
    data_set = ChartDataSet("styled", style={"pointRadius": 2})
    descriptor = data_set.describe()

    with pytest.raises(TypeError):
        descriptor.style["pointRadius"] = 9  # type: ignore[index]
    assert data_set.style == {"pointRadius": 2}


def test_unknown_data_set_raises_key_error() -> None:
    with pytest.raises(KeyError):
        ChartDataModel().add_point("missing", (0, 0))

"""Tests for dataset style defaults and the dense-series performance rule."""

from __future__ import annotations

import pytest

from core.charting.styles import (
    PERFORMANCE_POINT_THRESHOLD,
    apply_performance_limits,
    merge_style,
    style_defaults,
)

pytestmark = pytest.mark.unit


def test_style_defaults_are_fresh_copies() -> None:
    first = style_defaults()
    first["lineTension"] = 0.9

    assert style_defaults()["lineTension"] == 0.2


def test_merge_style_keeps_unspecified_defaults() -> None:
    merged = merge_style({"pointRadius": 4})

    assert merged["pointRadius"] == 4
    assert merged["pointHitRadius"] == 10
    assert merged["pointHoverRadius"] == 5
    assert merged["pointBorderWidth"] == 1
    assert merged["pointHoverBorderWidth"] == 2
    assert merged["lineTension"] == 0.2


def test_merge_style_is_order_independent_for_disjoint_overrides() -> None:
    a = {"pointRadius": 3}
    b = {"lineTension": 0.5, "borderDash": [4, 2]}

    assert merge_style(a, b) == merge_style(b, a)


@pytest.mark.parametrize(
    ("point_count", "expected_tension"),
    [(PERFORMANCE_POINT_THRESHOLD - 1, 0.35), (PERFORMANCE_POINT_THRESHOLD, 0), (500, 0)],
)
def test_dense_series_are_straightened(point_count: int, expected_tension: float) -> None:
    """Force tension to 0 at 80+ points, regardless of configured tension."""

    style = merge_style({"lineTension": 0.35})
    apply_performance_limits(style, point_count=point_count)

    assert style["lineTension"] == expected_tension

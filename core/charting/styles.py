"""Base dataset style and the density-driven performance adjustment."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

PERFORMANCE_POINT_THRESHOLD: Final[int] = 80

_LINE_DATASET_DEFAULTS: Final[Mapping[str, Any]] = {
    "fill": False,
    "showLine": True,
    "lineTension": 0.2,
    "pointBorderWidth": 1,
    "pointHoverRadius": 5,
    "pointHoverBorderWidth": 2,
    "pointRadius": 1,
    "pointHitRadius": 10,
}


def style_defaults() -> dict[str, Any]:
    """Return a fresh copy of the base dataset style."""

    return dict(_LINE_DATASET_DEFAULTS)


def merge_style(*overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow-merge style overrides on top of the defaults.

    Each override only replaces the keys it names, so the result does not
    depend on the order of overrides that touch disjoint keys.
    """

    merged = style_defaults()
    for override in overrides:
        merged.update(override)
    return merged


def is_dense(point_count: int) -> bool:
    return point_count >= PERFORMANCE_POINT_THRESHOLD


def apply_performance_limits(style: dict[str, Any], *, point_count: int) -> dict[str, Any]:
    """Straighten curves for dense series.

    Args:
        style: Merged dataset style; updated in place.
        point_count: Number of visible points in the series.

    Returns:
        The same style dict, with `lineTension` forced to 0 for dense series.
    """

    if is_dense(point_count):
        style["lineTension"] = 0
    return style

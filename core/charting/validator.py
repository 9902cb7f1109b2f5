"""Validation for chart snapshots before they are built.

Malformed series data is a contract violation by the data model, so validation
is strict and fails fast. Label/point misalignment is reported as a warning.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from analysis.chart_data import ChartSnapshot, SeriesDescriptor

from .colors import parse_hex


class ChartBuildError(ValueError):
    """Raised when a snapshot cannot be turned into a render spec."""


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating a chart snapshot."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _series_errors(series: SeriesDescriptor, idx: int) -> list[str]:
    errors: list[str] = []
    prefix = f"visible_data_sets[{idx}]"
    if not isinstance(series.name, str):
        errors.append(f"{prefix}.name must be a string.")
    else:
        prefix = f"{prefix}({series.name!r})"

    points = series.points
    if points is None or isinstance(points, (str, bytes)) or not isinstance(points, Sequence):
        errors.append(f"{prefix}.points must be a sequence of (x, y) pairs.")
        return errors
    for point_idx, point in enumerate(points):
        if isinstance(point, (str, bytes)) or not isinstance(point, Sequence) or len(point) != 2:
            errors.append(f"{prefix}.points[{point_idx}] must be an (x, y) pair.")
            continue
        if not (_is_number(point[0]) and _is_number(point[1])):
            errors.append(f"{prefix}.points[{point_idx}] must contain finite numbers, got {tuple(point)!r}.")

    if series.dash_pattern is not None and not all(_is_number(v) for v in series.dash_pattern):
        errors.append(f"{prefix}.dash_pattern must contain finite numbers.")
    if series.fixed_label_rotation is not None and not _is_number(series.fixed_label_rotation):
        errors.append(f"{prefix}.fixed_label_rotation must be a finite number.")
    return errors


def validate_snapshot(snapshot: ChartSnapshot) -> ValidationResult:
    """Validate a chart snapshot.

    Args:
        snapshot: Snapshot about to be built.

    Returns:
        ValidationResult containing errors and warnings.
    """

    errors: list[str] = []
    warnings: list[str] = []

    if not snapshot.palette:
        errors.append("palette must contain at least one color.")
    for idx, color in enumerate(snapshot.palette):
        if parse_hex(color) is None:
            errors.append(f"palette[{idx}] is not a hex color: {color!r}.")

    if snapshot.data_label_rotation is not None and not _is_number(snapshot.data_label_rotation):
        errors.append(f"data_label_rotation must be a finite number, got {snapshot.data_label_rotation!r}.")

    for idx, series in enumerate(snapshot.visible_data_sets):
        series_errors = _series_errors(series, idx)
        errors.extend(series_errors)
        if series_errors or not snapshot.data_labels:
            continue
        if len(series.points) != len(snapshot.data_labels):
            warnings.append(
                f"Series {series.name!r} has {len(series.points)} points but "
                f"{len(snapshot.data_labels)} labels are shared across the chart."
            )

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))


def ensure_valid(snapshot: ChartSnapshot) -> ValidationResult:
    """Validate a snapshot, raising when it reports any error.

    Raises:
        ChartBuildError: If any error is reported.
    """

    result = validate_snapshot(snapshot)
    if not result.is_valid:
        raise ChartBuildError("Invalid chart snapshot:\n" + "\n".join(f"- {e}" for e in result.errors))
    return result

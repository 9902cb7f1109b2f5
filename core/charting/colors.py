"""Deterministic color assignment for chart series and points.

Colors are assigned by position, never by identity or by a mutable cursor: a
series' palette entry depends only on its ordinal within the visible series,
and a point's fallback entry depends only on its index.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from analysis.chart_data import SeriesDescriptor

logger = logging.getLogger(__name__)

FILL_ALPHA = 0.4
STROKE_ALPHA = 1.0

_HEX_RE = re.compile(r"^#?(?P<hex>[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


@dataclass(frozen=True, slots=True)
class ResolvedColor:
    """Translucent fill and opaque stroke variants of one base color."""

    fill: str
    stroke: str


def parse_hex(value: object) -> tuple[int, int, int] | None:
    """Parse `#RGB` / `#RRGGBB` into an RGB triple.

    Returns:
        The (r, g, b) triple, or None when the value is not a hex color.
    """

    if not isinstance(value, str):
        return None
    match = _HEX_RE.match(value.strip())
    if match is None:
        return None
    digits = match.group("hex")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def hex_to_rgba(value: str, alpha: float) -> str:
    """Format a hex color as a Chart.js `rgba(...)` string.

    Raises:
        ValueError: If `value` is not a hex color.
    """

    rgb = parse_hex(value)
    if rgb is None:
        raise ValueError(f"Not a hex color: {value!r}.")
    r, g, b = rgb
    return f"rgba({r},{g},{b},{float(alpha)})"


def _variants(value: str) -> ResolvedColor:
    return ResolvedColor(fill=hex_to_rgba(value, FILL_ALPHA), stroke=hex_to_rgba(value, STROKE_ALPHA))


class ColorResolver:
    """Resolve series and point colors against a fixed palette.

    Args:
        palette: Ordered base colors; must be non-empty valid hex colors.
    """

    def __init__(self, palette: Sequence[str]) -> None:
        if not palette:
            raise ValueError("Palette must contain at least one color.")
        self.palette = tuple(palette)

    def palette_color(self, index: int) -> str:
        return self.palette[index % len(self.palette)]

    def resolve(self, series: SeriesDescriptor, ordinal: int, point_index: int | None = None) -> ResolvedColor:
        """Resolve a series color, or a point color when `point_index` is given.

        Args:
            series: Series being styled.
            ordinal: Position of the series within the visible series.
            point_index: Optional point position; only meaningful when the
                series declares `point_colors`.

        Returns:
            ResolvedColor with `fill` at 0.4 alpha and `stroke` fully opaque.
        """

        if point_index is not None and series.point_colors is not None:
            return _variants(self._point_base(series, point_index))
        return _variants(self._series_base(series, ordinal))

    def _series_base(self, series: SeriesDescriptor, ordinal: int) -> str:
        if series.color is not None:
            if parse_hex(series.color) is not None:
                return series.color
            logger.warning("Ignoring malformed color %r on series %r", series.color, series.name)
        return self.palette_color(ordinal)

    def _point_base(self, series: SeriesDescriptor, point_index: int) -> str:
        # overrides first, then the palette; the combined sequence wraps as a whole
        combined = tuple(series.point_colors or ()) + self.palette
        candidate = combined[point_index % len(combined)]
        if parse_hex(candidate) is not None:
            return candidate
        logger.warning(
            "Ignoring malformed point color %r on series %r at index %d", candidate, series.name, point_index
        )
        return self.palette_color(point_index)

    def point_colors(self, series: SeriesDescriptor) -> list[ResolvedColor]:
        """Resolve one color per point for a series with `point_colors`."""

        return [self.resolve(series, 0, point_index=idx) for idx in range(len(series.points))]

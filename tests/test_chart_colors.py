"""Tests for deterministic series and point color resolution."""

from __future__ import annotations

import logging

import pytest

from analysis.chart_data import SeriesDescriptor
from core.charting.colors import ColorResolver, hex_to_rgba, parse_hex

pytestmark = pytest.mark.unit

PALETTE = ("#111111", "#222222", "#333333")


def test_hex_to_rgba_formats_float_alpha() -> None:
    """Format alpha as a float so opaque strokes read `1.0`."""

    assert hex_to_rgba("#111111", 1) == "rgba(17,17,17,1.0)"
    assert hex_to_rgba("#FF0000", 0.4) == "rgba(255,0,0,0.4)"
    assert hex_to_rgba("#abc", 1.0) == "rgba(170,187,204,1.0)"


def test_parse_hex_rejects_non_colors() -> None:
    assert parse_hex("red") is None
    assert parse_hex("#12345") is None
    assert parse_hex(None) is None
    with pytest.raises(ValueError):
        hex_to_rgba("nope", 1.0)


def test_series_without_color_uses_palette_by_ordinal() -> None:
    """Assign palette entries by position, wrapping modulo palette length."""

    resolver = ColorResolver(PALETTE)
    series = SeriesDescriptor(name="s", points=())

    assert resolver.resolve(series, 0).stroke == "rgba(17,17,17,1.0)"
    assert resolver.resolve(series, 2).stroke == "rgba(51,51,51,1.0)"
    assert resolver.resolve(series, 3).stroke == "rgba(17,17,17,1.0)"
    assert resolver.resolve(series, 4).fill == "rgba(34,34,34,0.4)"


def test_explicit_series_color_wins_with_fill_and_stroke_variants() -> None:
    resolver = ColorResolver(PALETTE)
    series = SeriesDescriptor(name="s", points=(), color="#FF0000")

    resolved = resolver.resolve(series, 1)
    assert resolved.stroke == "rgba(255,0,0,1.0)"
    assert resolved.fill == "rgba(255,0,0,0.4)"


def test_malformed_series_color_falls_back_to_palette(caplog) -> None:
    """Degrade a bad override to the palette color instead of failing."""

    resolver = ColorResolver(PALETTE)
    series = SeriesDescriptor(name="bad", points=(), color="not-a-color")

    with caplog.at_level(logging.WARNING, logger="core.charting.colors"):
        resolved = resolver.resolve(series, 1)

    assert resolved.stroke == "rgba(34,34,34,1.0)"
    assert "not-a-color" in caplog.text


def test_point_colors_wrap_over_overrides_followed_by_palette() -> None:
    """Points past the overrides continue into the palette, then wrap back to the overrides."""

    resolver = ColorResolver(PALETTE)
    series = SeriesDescriptor(
        name="s",
        points=tuple((i, i) for i in range(7)),
        point_colors=("#FF0000", "#00FF00"),
    )

    strokes = [c.stroke for c in resolver.point_colors(series)]
    assert strokes == [
        "rgba(255,0,0,1.0)",
        "rgba(0,255,0,1.0)",
        "rgba(17,17,17,1.0)",
        "rgba(34,34,34,1.0)",
        "rgba(51,51,51,1.0)",
        "rgba(255,0,0,1.0)",
        "rgba(0,255,0,1.0)",
    ]


def test_wrapped_malformed_point_color_falls_back_to_palette_at_its_index() -> None:
    resolver = ColorResolver(PALETTE)
    series = SeriesDescriptor(name="s", points=tuple((i, i) for i in range(5)), point_colors=("bogus",))

    colors = resolver.point_colors(series)
    # index 4 wraps onto the malformed override, index 4 % 3 of the palette is used instead
    assert colors[4].stroke == "rgba(34,34,34,1.0)"


def test_malformed_point_color_falls_back_to_palette_at_its_index() -> None:
    resolver = ColorResolver(PALETTE)
    series = SeriesDescriptor(name="s", points=((0, 0), (1, 1)), point_colors=("#FF0000", "bogus"))

    colors = resolver.point_colors(series)
    assert colors[0].stroke == "rgba(255,0,0,1.0)"
    assert colors[1].stroke == "rgba(34,34,34,1.0)"


def test_resolution_is_deterministic_across_resolvers() -> None:
    series = SeriesDescriptor(name="s", points=((0, 0),), point_colors=("#010203",))

    first = [ColorResolver(PALETTE).resolve(series, idx, point_index=idx) for idx in range(5)]
    second = [ColorResolver(PALETTE).resolve(series, idx, point_index=idx) for idx in range(5)]
    assert first == second


def test_empty_palette_is_rejected() -> None:
    with pytest.raises(ValueError):
        ColorResolver(())

"""Pytest fixtures shared across chart and interaction tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from analysis.chart_data import ChartSnapshot, SeriesDescriptor


@pytest.fixture
def two_series_snapshot() -> ChartSnapshot:
    """Return the two-series snapshot used by the end-to-end chart example."""

    return ChartSnapshot(
        visible_data_sets=(
            SeriesDescriptor(name="A", points=((0, 0), (1, 5))),
            SeriesDescriptor(name="B", points=((0, 2), (1, 3)), color="#FF0000"),
        ),
        palette=("#111111", "#222222"),
    )


@pytest.fixture
def post_json(client) -> Callable[[str, Any], Any]:
    """Return a helper that POSTs a JSON body with the Django test client."""

    def _post(url: str, payload: Any) -> Any:
        return client.post(url, data=json.dumps(payload), content_type="application/json")

    return _post


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request handling.
    - `integration`: tests touching Django views, sessions, or settings.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )

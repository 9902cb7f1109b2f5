"""Integration tests for the chart-spec and spark placement endpoints."""

from __future__ import annotations

import json

import pytest
from django.test import Client

pytestmark = pytest.mark.integration


def test_chart_spec_endpoint_builds_spec(post_json) -> None:
    response = post_json(
        "/api/chart-spec/",
        {
            "name": "Fire spread",
            "palette": ["#111111", "#222222"],
            "visibleDataSets": [
                {"name": "A", "points": [[0, 0], [1, 5]]},
                {"name": "B", "points": [[0, 2], [1, 3]], "color": "#FF0000"},
            ],
        },
    )

    assert response.status_code == 200
    spec = response.json()["spec"]
    assert [d["borderColor"] for d in spec["datasets"]] == ["rgba(17,17,17,1.0)", "rgba(255,0,0,1.0)"]
    assert spec["options"]["scales"]["xAxes"][0]["ticks"]["beginAtZero"] is True
    assert spec["plugins"] == []
    assert (spec["width"], spec["height"]) == (400, 400)


def test_chart_spec_endpoint_uses_configured_dimensions(post_json, settings) -> None:
    settings.CHART_DEFAULT_WIDTH = 800
    settings.CHART_FONT = "Lato"

    spec = post_json("/api/chart-spec/", {}).json()["spec"]

    assert spec["width"] == 800
    assert spec["options"]["title"]["fontFamily"] == "Lato"


@pytest.mark.parametrize(
    "payload",
    [
        {"visibleDataSets": [{"name": "bad", "points": [[0, "x"]]}]},
        {"visibleDataSets": [{"name": "missing"}]},
        ["not", "an", "object"],
    ],
)
def test_chart_spec_endpoint_rejects_malformed_series(post_json, payload) -> None:
    response = post_json("/api/chart-spec/", payload)

    assert response.status_code == 400
    assert response.json()["ok"] is False


def test_chart_spec_endpoint_rejects_invalid_json(client) -> None:
    response = client.post("/api/chart-spec/", data="{", content_type="application/json")

    assert response.status_code == 400


def test_chart_spec_endpoint_requires_post(client) -> None:
    assert client.get("/api/chart-spec/").status_code == 405


def test_spark_placement_requires_active_interaction(post_json) -> None:
    response = post_json("/api/sparks/", {"x": 0.5, "y": 0.1})

    assert response.status_code == 409


def test_spark_placement_flow(client, post_json, settings) -> None:
    settings.SIMULATION_MODEL_WIDTH = 1000
    settings.SIMULATION_MODEL_HEIGHT = 500

    response = post_json("/api/interaction/", {"interaction": "PlaceSpark"})
    assert response.json()["ui"]["interaction"] == "PlaceSpark"

    response = post_json("/api/sparks/", {"x": 0.25, "y": 0.1})
    assert response.status_code == 200
    body = response.json()
    assert body["event"]["eventName"] == "SparkPlaced"
    assert body["event"]["x"] == pytest.approx(0.25)
    assert body["event"]["y"] == pytest.approx(0.2)
    assert body["spark"]["x"] == pytest.approx(250)

    assert client.get("/api/interaction/").json()["ui"]["interaction"] is None
    assert len(client.get("/api/sparks/").json()["sparks"]) == 1
    assert post_json("/api/sparks/", {"x": 0.3, "y": 0.1}).status_code == 409


def test_spark_placement_rejects_bad_points(post_json) -> None:
    post_json("/api/interaction/", {"interaction": "PlaceSpark"})

    assert post_json("/api/sparks/", {"x": "left", "y": 0.1}).status_code == 400
    assert post_json("/api/sparks/", {"x": 500.0, "y": 0.1}).status_code == 400


def test_unknown_interaction_is_rejected(post_json) -> None:
    assert post_json("/api/interaction/", {"interaction": "Teleport"}).status_code == 400


def test_post_endpoints_accept_the_csrf_token_issued_on_get() -> None:
    """Browser clients read the token from a GET before posting JSON."""

    client = Client(enforce_csrf_checks=True)
    body = json.dumps({"visibleDataSets": [{"name": "A", "points": [[0, 0]]}]})

    assert client.post("/api/chart-spec/", data=body, content_type="application/json").status_code == 403

    client.get("/api/interaction/")
    token = client.cookies["csrftoken"].value
    response = client.post("/api/chart-spec/", data=body, content_type="application/json", HTTP_X_CSRFTOKEN=token)

    assert response.status_code == 200
    assert response.json()["ok"] is True

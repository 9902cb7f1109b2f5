"""JSON views for chart specs and spark placement."""

from __future__ import annotations

import json
import logging
from typing import Any, Final

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods, require_POST

from analysis.simulation import Simulation, SimulationConfig, Spark
from core.charting.builder import build_render_spec
from core.charting.snapshot_codec import decode_chart_snapshot
from core.interaction import place_spark, place_spark_active
from core.ui import load_ui, parse_interaction, store_ui

logger = logging.getLogger(__name__)

SPARKS_SESSION_KEY: Final[str] = "wfe_sparks"


def _json_body(request: HttpRequest) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Raises:
        ValueError: If the body is not a JSON object.
    """

    try:
        payload = json.loads(request.body or b"{}")
    except json.JSONDecodeError as exc:
        raise ValueError(f"Request body is not valid JSON: {exc.msg}.") from exc
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object.")
    return payload


def _error(message: str, *, status: int = 400) -> JsonResponse:
    return JsonResponse({"ok": False, "error": message}, status=status)


def _simulation_config() -> SimulationConfig:
    return SimulationConfig(
        model_width=settings.SIMULATION_MODEL_WIDTH,
        model_height=settings.SIMULATION_MODEL_HEIGHT,
        max_sparks=settings.SIMULATION_MAX_SPARKS,
    )


def _load_simulation(request: HttpRequest) -> Simulation:
    raw = request.session.get(SPARKS_SESSION_KEY) or []
    return Simulation(
        config=_simulation_config(),
        sparks=[Spark(x=float(item["x"]), y=float(item["y"])) for item in raw],
    )


def _store_simulation(request: HttpRequest, simulation: Simulation) -> None:
    request.session[SPARKS_SESSION_KEY] = [{"x": s.x, "y": s.y} for s in simulation.sparks]
    request.session.modified = True


def _sparks_json(simulation: Simulation) -> list[dict[str, float]]:
    return [{"x": s.x, "y": s.y} for s in simulation.sparks]


@require_POST
def chart_spec(request: HttpRequest) -> JsonResponse:
    """Build a render spec from a posted chart snapshot."""

    try:
        snapshot = decode_chart_snapshot(_json_body(request))
        spec = build_render_spec(
            snapshot,
            font=settings.CHART_FONT or None,
            width=settings.CHART_DEFAULT_WIDTH,
            height=settings.CHART_DEFAULT_HEIGHT,
        )
    except ValueError as exc:
        logger.info("Rejected chart snapshot: %s", exc)
        return _error(str(exc))
    return JsonResponse({"ok": True, "spec": spec.as_payload()})


@ensure_csrf_cookie
@require_http_methods(["GET", "POST"])
def interaction(request: HttpRequest) -> JsonResponse:
    """Return or update the current pointer interaction mode."""

    ui = load_ui(request, max_sparks=settings.SIMULATION_MAX_SPARKS)
    if request.method == "POST":
        try:
            ui.interaction = parse_interaction(_json_body(request).get("interaction"))
        except ValueError as exc:
            return _error(str(exc))
        store_ui(request, ui)
    return JsonResponse({"ok": True, "ui": ui.as_json()})


@ensure_csrf_cookie
@require_http_methods(["GET", "POST"])
def sparks(request: HttpRequest) -> JsonResponse:
    """List sparks, or place one from a scene point while placement is active."""

    simulation = _load_simulation(request)
    if request.method == "GET":
        return JsonResponse({"ok": True, "sparks": _sparks_json(simulation)})

    ui = load_ui(request, max_sparks=settings.SIMULATION_MAX_SPARKS)
    if not place_spark_active(ui):
        return _error("Spark placement is not active.", status=409)

    try:
        body = _json_body(request)
        point_x = body.get("x")
        point_y = body.get("y")
        if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in (point_x, point_y)):
            raise ValueError("Scene point must have numeric 'x' and 'y'.")
        placement = place_spark(simulation, ui, point_x=point_x, point_y=point_y)
    except ValueError as exc:
        return _error(str(exc))

    _store_simulation(request, simulation)
    store_ui(request, ui)
    return JsonResponse(
        {
            "ok": True,
            "spark": {"x": placement.spark.x, "y": placement.spark.y},
            "sparks": _sparks_json(simulation),
            "event": placement.event.as_json(),
        }
    )

"""Fire-and-forget interaction telemetry.

Events are written to the `telemetry` logger; the logging configuration
decides where they end up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger("telemetry")


@dataclass(frozen=True, slots=True)
class TelemetryEvent:
    """A telemetry record with model-space fractional coordinates."""

    event_name: str
    x: float
    y: float

    def as_json(self) -> dict[str, Any]:
        return {"eventName": self.event_name, "x": self.x, "y": self.y}


def log_event(event: TelemetryEvent) -> TelemetryEvent:
    logger.info("%s x=%.4f y=%.4f", event.event_name, event.x, event.y, extra={"telemetry": event.as_json()})
    return event

"""Spark placement from a pointer event on the 3D terrain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from analysis.simulation import Simulation, SimulationConfig, Spark

from core.telemetry import TelemetryEvent, log_event
from core.ui import Interaction, UIModel

SPARK_PLACED: Final[str] = "SparkPlaced"

# Width of the terrain plane in 3D view units.
VIEW_PLANE_WIDTH: Final[float] = 1.0


@dataclass(frozen=True, slots=True)
class SparkPlacement:
    """Outcome of a spark placement."""

    spark: Spark
    event: TelemetryEvent


def ft_to_view_unit(config: SimulationConfig) -> float:
    """Return how many view units one model foot spans."""

    return VIEW_PLANE_WIDTH / config.model_width


def place_spark_active(ui: UIModel) -> bool:
    return ui.interaction is Interaction.place_spark


def place_spark(simulation: Simulation, ui: UIModel, *, point_x: float, point_y: float) -> SparkPlacement:
    """Place a spark at a scene point and emit the telemetry event.

    Args:
        simulation: Simulation receiving the spark.
        ui: UI state; its interaction mode is cleared on success.
        point_x: Scene x coordinate in view units.
        point_y: Scene y coordinate in view units.

    Returns:
        SparkPlacement with the spark (model feet) and the emitted event
        (fractions of the model width/height).

    Raises:
        SimulationError: If the simulation rejects the spark.
    """

    ratio = ft_to_view_unit(simulation.config)
    x = point_x / ratio
    y = point_y / ratio
    spark = simulation.add_spark(x, y)
    ui.interaction = None
    event = log_event(
        TelemetryEvent(
            event_name=SPARK_PLACED,
            x=x / simulation.config.model_width,
            y=y / simulation.config.model_height,
        )
    )
    return SparkPlacement(spark=spark, event=event)

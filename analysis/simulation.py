"""Minimal wildfire simulation state that sparks are placed into.

Coordinates are in model space (feet), with the origin at the lower-left
corner of the terrain.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class SimulationError(ValueError):
    """Raised when a simulation mutation is rejected."""


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Static simulation dimensions.

    Attributes:
        model_width: Terrain width in feet.
        model_height: Terrain height in feet.
        max_sparks: Maximum number of sparks that may be placed.
    """

    model_width: float = 120000
    model_height: float = 80000
    max_sparks: int = 2


@dataclass(frozen=True, slots=True)
class Spark:
    """An ignition point in model space."""

    x: float
    y: float


@dataclass(slots=True)
class Simulation:
    """Mutable simulation state holding the placed sparks."""

    config: SimulationConfig = field(default_factory=SimulationConfig)
    sparks: list[Spark] = field(default_factory=list)

    @property
    def can_add_spark(self) -> bool:
        return len(self.sparks) < self.config.max_sparks

    def add_spark(self, x: float, y: float) -> Spark:
        """Place a new spark.

        Args:
            x: Model-space x coordinate in feet.
            y: Model-space y coordinate in feet.

        Returns:
            The placed Spark.

        Raises:
            SimulationError: If the point lies outside the terrain or the spark
                limit has been reached.
        """

        if not (0 <= x <= self.config.model_width and 0 <= y <= self.config.model_height):
            raise SimulationError(f"Spark ({x}, {y}) lies outside the terrain.")
        if not self.can_add_spark:
            raise SimulationError(f"At most {self.config.max_sparks} sparks may be placed.")
        spark = Spark(x=x, y=y)
        self.sparks.append(spark)
        return spark

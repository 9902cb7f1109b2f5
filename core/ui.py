"""Session-backed UI state (current interaction mode and display toggles)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Final

from django.http import HttpRequest

UI_SESSION_KEY: Final[str] = "wfe_ui"


class Interaction(str, Enum):
    """Pointer interaction modes for the 3D view."""

    place_spark = "PlaceSpark"
    dragging = "Dragging"


@dataclass(slots=True)
class UIModel:
    """Plain UI-state record.

    Attributes:
        view: Active view ("3d" or "2d").
        show_terrain_ui: Whether the terrain panel is open.
        max_sparks: Spark limit shown in the UI.
        interaction: Active pointer interaction, if any.
    """

    view: str = "3d"
    show_terrain_ui: bool = False
    max_sparks: int = 2
    interaction: Interaction | None = None

    def as_json(self) -> dict[str, Any]:
        raw = asdict(self)
        raw["interaction"] = self.interaction.value if self.interaction is not None else None
        return raw


def parse_interaction(value: object) -> Interaction | None:
    """Parse an interaction mode name.

    Raises:
        ValueError: If the value is not a known interaction or None.
    """

    if value is None:
        return None
    try:
        return Interaction(value)
    except ValueError as exc:
        raise ValueError(f"Unknown interaction: {value!r}.") from exc


def load_ui(request: HttpRequest, *, max_sparks: int) -> UIModel:
    """Return the UI state stored in the current session."""

    raw = getattr(request, "session", {}).get(UI_SESSION_KEY) or {}
    return UIModel(
        view=str(raw.get("view") or "3d"),
        show_terrain_ui=bool(raw.get("show_terrain_ui", False)),
        max_sparks=max_sparks,
        interaction=parse_interaction(raw.get("interaction")),
    )


def store_ui(request: HttpRequest, ui: UIModel) -> None:
    """Persist UI state into the current session."""

    request.session[UI_SESSION_KEY] = ui.as_json()
    request.session.modified = True

"""Stadium background (the drawn pitch).

The background is purely visual and always present: a missing ``bg``
object resolves to the default background.  Backgrounds take no trait and
must be opaque.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from stadiumkit.cascade import FieldCascade
from stadiumkit.primitives import Color

logger = logging.getLogger(__name__)

BACKGROUND_DEFAULTS = MappingProxyType({
    "type": "none",
    "width": 0.0,
    "height": 0.0,
    "kickOffRadius": 0.0,
    "cornerRadius": 0.0,
    "goalLine": 0.0,
    "color": "718C5A",
})


class BackgroundType(Enum):
    """What is painted on the pitch."""
    NONE = "none"
    GRASS = "grass"
    HOCKEY = "hockey"


@dataclass(frozen=True)
class Background:
    """Resolved background.

    Attributes:
        type: Which pitch decoration to draw.
        width: Half-width of the drawn pitch.
        height: Half-height of the drawn pitch.
        kick_off_radius: Radius of the kickoff circle.
        corner_radius: Radius of the pitch corners.
        goal_line: Horizontal distance of the goal lines from the pitch edge.
        color: Opaque fill color.
    """
    type: BackgroundType
    width: float
    height: float
    kick_off_radius: float
    corner_radius: float
    goal_line: float
    color: Color


def resolve_background(raw: object) -> Background:
    """Resolve the stadium's ``bg`` object; ``None`` gives the default background.

    An unrecognised ``type`` falls back to :attr:`BackgroundType.NONE`.

    Raises:
        FormatError: If ``bg`` is not an object, its color is transparent or
            malformed, or a numeric field is not a number.
    """
    if raw is None:
        raw = {}
    fc = FieldCascade.untraited("bg", raw, BACKGROUND_DEFAULTS)

    type_name = fc.string("type")
    try:
        bg_type = BackgroundType(type_name)
    except ValueError:
        logger.warning("Unknown background type %r; using 'none'", type_name)
        bg_type = BackgroundType.NONE

    return Background(
        type=bg_type,
        width=fc.number("width"),
        height=fc.number("height"),
        kick_off_radius=fc.number("kickOffRadius"),
        corner_radius=fc.number("cornerRadius"),
        goal_line=fc.number("goalLine"),
        color=fc.color("color", allow_transparent=False),
    )

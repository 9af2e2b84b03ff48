"""Player physics and ball resolution.

``playerPhysics`` is a single block describing every player disc.  The
ball comes from ``ballPhysics``, which is either absent (a built-in ball),
the string ``"disc0"`` (the first stadium disc becomes the ball), or a disc
object without a position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from stadiumkit.cascade import FieldCascade
from stadiumkit.entities import Disc, resolve_disc
from stadiumkit.errors import FormatError
from stadiumkit.primitives import WHITE, CollisionFlag, Vec2
from stadiumkit.traits import TraitTable

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# PlayerPhysics
# ---------------------------------------------------------------------------

PLAYER_PHYSICS_DEFAULTS = MappingProxyType({
    "gravity": (0.0, 0.0),
    "radius": 15.0,
    "invMass": 1.0,
    "bCoef": 0.5,
    "damping": 0.96,
    "cGroup": ("none",),
    "acceleration": 0.1,
    "kickingAcceleration": 0.07,
    "kickingDamping": 0.96,
    "kickStrength": 5.0,
    "kickback": 0.0,
})


@dataclass(frozen=True)
class PlayerPhysics:
    """Physical properties shared by all player discs.

    Attributes:
        gravity: Constant acceleration applied every step.
        radius: Player disc radius.
        inv_mass: Inverse mass of a player.
        b_coef: Bounce coefficient.
        damping: Velocity multiplier while not kicking.
        c_group: Extra collision groups added to every player.
        acceleration: Acceleration from movement input.
        kicking_acceleration: Acceleration while the kick button is held.
        kicking_damping: Velocity multiplier while the kick button is held.
        kick_strength: Impulse given to the ball on a kick.
        kickback: Impulse given back to the kicking player.
    """
    gravity: Vec2
    radius: float
    inv_mass: float
    b_coef: float
    damping: float
    c_group: CollisionFlag
    acceleration: float
    kicking_acceleration: float
    kicking_damping: float
    kick_strength: float
    kickback: float


def resolve_player_physics(raw: object) -> PlayerPhysics:
    """Resolve ``playerPhysics``; ``None`` gives the default block."""
    if raw is None:
        raw = {}
    fc = FieldCascade.untraited("playerPhysics", raw, PLAYER_PHYSICS_DEFAULTS)
    return PlayerPhysics(
        gravity=fc.vec2("gravity"),
        radius=fc.number("radius"),
        inv_mass=fc.number("invMass"),
        b_coef=fc.number("bCoef"),
        damping=fc.number("damping"),
        c_group=fc.flags("cGroup"),
        acceleration=fc.number("acceleration"),
        kicking_acceleration=fc.number("kickingAcceleration"),
        kicking_damping=fc.number("kickingDamping"),
        kick_strength=fc.number("kickStrength"),
        kickback=fc.number("kickback"),
    )


# ---------------------------------------------------------------------------
# Ball
# ---------------------------------------------------------------------------

class BallSource(Enum):
    """Which ``ballPhysics`` form produced the ball."""
    DEFAULT = "default"
    DISC0 = "disc0"
    EXPLICIT = "explicit"


DEFAULT_BALL_DISC = Disc(
    position=Vec2.zero(),
    speed=Vec2.zero(),
    gravity=Vec2.zero(),
    radius=10.0,
    inv_mass=1.0,
    damping=0.99,
    b_coef=0.5,
    color=WHITE,
    c_group=CollisionFlag.BALL,
    c_mask=CollisionFlag.ALL,
)


@dataclass(frozen=True)
class Ball:
    """The match ball: a disc plus the form it was declared in."""
    disc: Disc
    source: BallSource = BallSource.DEFAULT


def resolve_ball(raw: object, discs: list[Disc], traits: TraitTable) -> Ball:
    """Resolve ``ballPhysics``.

    Args:
        raw: The raw ``ballPhysics`` value.
        discs: The stadium's resolved discs.  For ``"disc0"`` the first disc
            is removed from this list and becomes the ball.
        traits: The stadium's trait table, used by an explicit ball object.

    Returns:
        The resolved :class:`Ball`.

    Raises:
        FormatError: If ``raw`` is a string other than ``"disc0"``, any
            other non-object value, ``"disc0"`` with no discs, or a
            malformed ball object.
    """
    if raw is None:
        logger.debug("Using the built-in default ball")
        return Ball(disc=DEFAULT_BALL_DISC, source=BallSource.DEFAULT)

    if isinstance(raw, str):
        if raw != "disc0":
            raise FormatError(
                f'ball must be "disc0" or a disc object, got {raw!r}',
                entity="ballPhysics",
            )
        if not discs:
            raise FormatError('"disc0" requested but the stadium has no discs',
                              entity="ballPhysics")
        logger.debug("Using disc 0 as the ball (%d disc(s) remain)", len(discs) - 1)
        return Ball(disc=discs.pop(0), source=BallSource.DISC0)

    if isinstance(raw, dict):
        # the ball never has a position of its own
        positioned = {**raw, "pos": [0.0, 0.0]}
        disc = resolve_disc(positioned, traits, entity="ballPhysics")
        logger.debug("Using an explicit ball object")
        return Ball(disc=disc, source=BallSource.EXPLICIT)

    raise FormatError(
        f'ball must be "disc0" or a disc object, got {type(raw).__name__}',
        entity="ballPhysics",
    )

"""Resolved stadium bodies: vertexes, discs, planes and goals.

Each resolver takes the raw JSON object for one entity, the stadium's
trait table, and the entity's location in the document (used in error
messages), and returns a fully populated frozen dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from stadiumkit.cascade import FieldCascade
from stadiumkit.primitives import (
    Color,
    CollisionFlag,
    Team,
    Vec2,
    parse_team,
)
from stadiumkit.traits import TraitTable


# ---------------------------------------------------------------------------
# Built-in defaults
# ---------------------------------------------------------------------------

VERTEX_DEFAULTS = MappingProxyType({
    "bCoef": 1.0,
    "cGroup": ("wall",),
    "cMask": ("all",),
})

DISC_DEFAULTS = MappingProxyType({
    "speed": (0.0, 0.0),
    "gravity": (0.0, 0.0),
    "radius": 8.0,
    "invMass": 0.0,
    "damping": 0.99,
    "bCoef": 0.5,
    "color": "FFFFFF",
    "cGroup": ("all",),
    "cMask": ("all",),
})

PLANE_DEFAULTS = MappingProxyType({
    "bCoef": 1.0,
    "cGroup": ("wall",),
    "cMask": ("all",),
})


# ---------------------------------------------------------------------------
# Vertex
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Vertex:
    """A segment endpoint.  Segments refer to vertexes by list index."""
    position: Vec2
    b_coef: float
    c_group: CollisionFlag
    c_mask: CollisionFlag


def resolve_vertex(raw: object, traits: TraitTable, entity: str = "vertex") -> Vertex:
    """Resolve one entry of ``vertexes``.  ``x`` and ``y`` are mandatory."""
    fc = FieldCascade.for_entity(entity, raw, traits, VERTEX_DEFAULTS)
    return Vertex(
        position=Vec2(fc.required_float("x"), fc.required_float("y")),
        b_coef=fc.number("bCoef"),
        c_group=fc.flags("cGroup"),
        c_mask=fc.flags("cMask"),
    )


# ---------------------------------------------------------------------------
# Disc
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Disc:
    """A circular physics body.

    Attributes:
        position: Initial center position.
        speed: Initial velocity.
        gravity: Constant acceleration applied every step.
        radius: Disc radius.
        inv_mass: Inverse mass; ``0`` makes the disc immovable.
        damping: Velocity multiplier applied every step.
        b_coef: Bounce coefficient.
        color: Fill color (may be transparent).
        c_group: Collision groups the disc belongs to.
        c_mask: Collision groups the disc collides with.
    """
    position: Vec2
    speed: Vec2
    gravity: Vec2
    radius: float
    inv_mass: float
    damping: float
    b_coef: float
    color: Color
    c_group: CollisionFlag
    c_mask: CollisionFlag


def resolve_disc(raw: object, traits: TraitTable, entity: str = "disc") -> Disc:
    """Resolve one entry of ``discs``.  ``pos`` is mandatory."""
    fc = FieldCascade.for_entity(entity, raw, traits, DISC_DEFAULTS)
    return Disc(
        position=fc.required_vec2("pos"),
        speed=fc.vec2("speed"),
        gravity=fc.vec2("gravity"),
        radius=fc.number("radius"),
        inv_mass=fc.number("invMass"),
        damping=fc.number("damping"),
        b_coef=fc.number("bCoef"),
        color=fc.color("color", allow_transparent=True),
        c_group=fc.flags("cGroup"),
        c_mask=fc.flags("cMask"),
    )


# ---------------------------------------------------------------------------
# Plane
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Plane:
    """An infinite half-plane wall bounded by the line ``p . normal == dist``."""
    normal: Vec2
    dist: float
    b_coef: float
    c_group: CollisionFlag
    c_mask: CollisionFlag


def resolve_plane(raw: object, traits: TraitTable, entity: str = "plane") -> Plane:
    """Resolve one entry of ``planes``.  ``normal`` and ``dist`` are mandatory."""
    fc = FieldCascade.for_entity(entity, raw, traits, PLANE_DEFAULTS)
    return Plane(
        normal=fc.required_vec2("normal"),
        dist=fc.required_float("dist"),
        b_coef=fc.number("bCoef"),
        c_group=fc.flags("cGroup"),
        c_mask=fc.flags("cMask"),
    )


# ---------------------------------------------------------------------------
# Goal
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Goal:
    """A goal line owned by ``team``."""
    p0: Vec2
    p1: Vec2
    team: Team


def resolve_goal(raw: object, entity: str = "goal") -> Goal:
    """Resolve one entry of ``goals``.  Goals take no trait and have no defaults."""
    fc = FieldCascade.untraited(entity, raw, {})
    return Goal(
        p0=fc.required_vec2("p0"),
        p1=fc.required_vec2("p1"),
        team=fc.required("team", parse_team),
    )

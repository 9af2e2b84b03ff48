"""Stadium documents and the resolution entry point.

:func:`resolve` turns a parsed stadium document (plain dicts, lists,
strings, numbers, booleans and ``None``) into a fully typed, fully
defaulted :class:`Stadium`.  Resolution is all-or-nothing: any format
problem raises a single :class:`~stadiumkit.errors.FormatError` naming the
entity and field at fault.

Usage::

    from stadiumkit import resolve

    stadium = resolve(json.loads(text))
    for i, segment in enumerate(stadium.segments):
        if segment.is_curved:
            print(i, stadium.arc(i).radius)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TypeVar

from stadiumkit.background import Background, resolve_background
from stadiumkit.cascade import FieldCascade
from stadiumkit.entities import (
    Disc,
    Goal,
    Plane,
    Vertex,
    resolve_disc,
    resolve_goal,
    resolve_plane,
    resolve_vertex,
)
from stadiumkit.errors import FormatError
from stadiumkit.geometry import Arc
from stadiumkit.physics import Ball, PlayerPhysics, resolve_ball, resolve_player_physics
from stadiumkit.primitives import Vec2, read_str, read_vec2
from stadiumkit.segments import CurvedSegment, Segment, resolve_segment
from stadiumkit.traits import TraitTable, handle_traits

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

STADIUM_DEFAULTS = MappingProxyType({
    "width": 0.0,
    "height": 0.0,
    "cameraWidth": 0.0,
    "cameraHeight": 0.0,
    "maxViewWidth": 0.0,
    "cameraFollow": "ball",
    "spawnDistance": 200.0,
    "canBeStored": True,
    "kickOffReset": "partial",
})


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CameraFollow(Enum):
    """What the camera tracks."""
    PLAYER = "player"
    BALL = "ball"


class KickoffReset(Enum):
    """How much state is reset at kickoff."""
    PARTIAL = "partial"
    FULL = "full"


# ---------------------------------------------------------------------------
# Stadium
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Stadium:
    """A fully resolved stadium.

    Entities are identified by their position in each tuple; segments
    refer to vertexes by index.  When the ball was declared as ``"disc0"``
    the first declared disc is the ball and no longer appears in ``discs``.
    """
    name: str
    bg: Background
    width: float
    height: float
    camera_width: float
    camera_height: float
    max_view_width: float
    camera_follow: CameraFollow
    spawn_distance: float
    can_be_stored: bool
    kick_off_reset: KickoffReset
    vertexes: tuple[Vertex, ...]
    segments: tuple[Segment, ...]
    goals: tuple[Goal, ...]
    discs: tuple[Disc, ...]
    planes: tuple[Plane, ...]
    red_spawn_points: tuple[Vec2, ...]
    blue_spawn_points: tuple[Vec2, ...]
    player_physics: PlayerPhysics
    ball: Ball

    def arc(self, segment_index: int) -> Arc:
        """Derived circle geometry of the curved segment at ``segment_index``.

        Raises:
            ValueError: If that segment is straight.
        """
        segment = self.segments[segment_index]
        if not isinstance(segment, CurvedSegment):
            msg = f"segment {segment_index} is straight"
            raise ValueError(msg)
        return segment.arc(self.vertexes)

    def summary(self) -> dict[str, object]:
        """Entity counts for reporting."""
        return {
            "name": self.name,
            "vertexes": len(self.vertexes),
            "segments": len(self.segments),
            "curved_segments": sum(1 for s in self.segments if s.is_curved),
            "goals": len(self.goals),
            "discs": len(self.discs),
            "planes": len(self.planes),
            "red_spawn_points": len(self.red_spawn_points),
            "blue_spawn_points": len(self.blue_spawn_points),
            "ball": self.ball.source.value,
        }


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve(document: object) -> Stadium:
    """Resolve a parsed stadium document.

    Args:
        document: The parsed JSON value of a stadium file.

    Returns:
        The resolved :class:`Stadium`.

    Raises:
        FormatError: If the document violates the stadium format anywhere.
    """
    if not isinstance(document, Mapping):
        raise FormatError(
            f"stadium must be an object, got {type(document).__name__}",
            entity="stadium",
        )

    traits = handle_traits(document.get("traits"))
    fc = FieldCascade("stadium", document, None, STADIUM_DEFAULTS)
    name = fc.required("name", read_str)

    vertexes = tuple(
        resolve_vertex(raw, traits, entity=f"vertexes[{i}]")
        for i, raw in enumerate(_section(document, "vertexes"))
    )
    segments = tuple(
        resolve_segment(raw, traits, vertex_count=len(vertexes), entity=f"segments[{i}]")
        for i, raw in enumerate(_section(document, "segments"))
    )
    goals = tuple(
        resolve_goal(raw, entity=f"goals[{i}]")
        for i, raw in enumerate(_section(document, "goals"))
    )
    planes = tuple(
        resolve_plane(raw, traits, entity=f"planes[{i}]")
        for i, raw in enumerate(_section(document, "planes"))
    )
    discs, ball = _resolve_discs_and_ball(document, traits)
    logger.debug(
        "Sections of %r: %d vertexes, %d segments (%d curved), %d goals, "
        "%d planes, %d discs",
        name, len(vertexes), len(segments),
        sum(1 for s in segments if s.is_curved), len(goals), len(planes), len(discs),
    )

    stadium = Stadium(
        name=name,
        bg=resolve_background(document.get("bg")),
        width=fc.number("width"),
        height=fc.number("height"),
        camera_width=fc.number("cameraWidth"),
        camera_height=fc.number("cameraHeight"),
        max_view_width=fc.number("maxViewWidth"),
        camera_follow=_lenient_enum(fc, "cameraFollow", CameraFollow, CameraFollow.BALL),
        spawn_distance=fc.number("spawnDistance"),
        can_be_stored=fc.boolean("canBeStored"),
        kick_off_reset=_lenient_enum(fc, "kickOffReset", KickoffReset, KickoffReset.PARTIAL),
        vertexes=vertexes,
        segments=segments,
        goals=goals,
        discs=discs,
        planes=planes,
        red_spawn_points=_spawn_points(document, "redSpawnPoints"),
        blue_spawn_points=_spawn_points(document, "blueSpawnPoints"),
        player_physics=resolve_player_physics(document.get("playerPhysics")),
        ball=ball,
    )
    logger.info(
        "Resolved stadium %r: %d vertexes, %d segments, %d goals, %d discs, "
        "%d planes, ball=%s",
        stadium.name, len(vertexes), len(segments), len(goals), len(discs),
        len(planes), ball.source.value,
    )
    return stadium


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _resolve_discs_and_ball(
    document: Mapping[str, object], traits: TraitTable,
) -> tuple[tuple[Disc, ...], Ball]:
    """Resolve discs, then the ball, which may take ownership of disc 0.

    The disc list only leaves this function after the ball resolver has
    had its chance to remove from it.
    """
    discs = [
        resolve_disc(raw, traits, entity=f"discs[{i}]")
        for i, raw in enumerate(_section(document, "discs"))
    ]
    ball = resolve_ball(document.get("ballPhysics"), discs, traits)
    return tuple(discs), ball


def _section(document: Mapping[str, object], key: str) -> list[object]:
    """Return a list-valued section, ``[]`` if absent."""
    raw = document.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise FormatError(f"expected a list, got {type(raw).__name__}", entity=key)
    return raw


def _spawn_points(document: Mapping[str, object], key: str) -> tuple[Vec2, ...]:
    points: list[Vec2] = []
    for i, raw in enumerate(_section(document, key)):
        try:
            points.append(read_vec2(raw))
        except FormatError as exc:
            raise exc.located(f"{key}[{i}]") from exc
    return tuple(points)


def _lenient_enum(
    fc: FieldCascade,
    key: str,
    enum_type: type[E],
    fallback: E,
) -> E:
    """Decode a string enum field, falling back (with a warning) on unknown values."""
    value = fc.string(key)
    try:
        return enum_type(value)
    except ValueError:
        logger.warning("Unknown %s %r; using %r", key, value, fallback.value)
        return fallback

"""Primitive value types and decoders shared by every entity resolver.

Stadium documents are loosely typed: a color may be a hex string, an RGB
triple, or ``"transparent"``; collision groups are lists of flag names.
The decoders here turn those shapes into typed values and raise
:class:`~stadiumkit.errors.FormatError` on anything else.  None of them
know which entity they are decoding for; the cascade attaches that.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum, Flag
from typing import Self

from stadiumkit.errors import FormatError


# ---------------------------------------------------------------------------
# Vec2
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Vec2:
    """Immutable 2D vector in stadium units."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def dot(self, other: Vec2) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        """2D cross product (scalar z-component)."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        """Magnitude of the vector."""
        return math.hypot(self.x, self.y)

    def perpendicular(self) -> Vec2:
        """The vector rotated 90 degrees counterclockwise."""
        return Vec2(-self.y, self.x)

    def angle_between(self, other: Vec2) -> float:
        """Signed angle in radians rotating this vector onto ``other``."""
        return math.atan2(self.cross(other), self.dot(other))

    @classmethod
    def zero(cls) -> Self:
        """The origin."""
        return cls(0.0, 0.0)


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA color."""
    r: int
    g: int
    b: int
    a: int = 255


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
TRANSPARENT = Color(0, 0, 0, 0)

_HEX_COLOR = re.compile(r"[0-9A-Fa-f]{6}")


def parse_color(value: object, allow_transparent: bool) -> Color:
    """Decode a color written as ``"RRGGBB"``, ``[r, g, b]`` or ``"transparent"``.

    Args:
        value: The raw JSON value.
        allow_transparent: Whether ``"transparent"`` is permitted here.
            Backgrounds, for instance, must be opaque.

    Raises:
        FormatError: If the value has any other shape, or is
            ``"transparent"`` where transparency is not allowed.
    """
    if isinstance(value, str):
        if value == "transparent":
            if not allow_transparent:
                raise FormatError("transparent color is not supported here")
            return TRANSPARENT
        if not _HEX_COLOR.fullmatch(value):
            raise FormatError(f"invalid hex color {value!r}")
        rgb = int(value, 16)
        return Color((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)

    if isinstance(value, (list, tuple)):
        if len(value) != 3:
            raise FormatError(f"RGB color needs 3 components, got {len(value)}")
        channels: list[int] = []
        for channel in value:
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise FormatError(f"RGB component {channel!r} is not an integer")
            if not 0 <= channel <= 255:
                raise FormatError(f"RGB component {channel} is outside 0-255")
            channels.append(channel)
        return Color(channels[0], channels[1], channels[2])

    raise FormatError(f"invalid color value {value!r}")


# ---------------------------------------------------------------------------
# CollisionFlag
# ---------------------------------------------------------------------------

class CollisionFlag(Flag):
    """Collision categories used for ``cGroup`` / ``cMask`` bitmasks."""
    BALL = 1
    RED = 2
    BLUE = 4
    REDKO = 8
    BLUEKO = 16
    WALL = 32
    ALL = 63
    KICK = 64
    SCORE = 128
    C0 = 256
    C1 = 512
    C2 = 1024
    C3 = 2048


NO_COLLISION = CollisionFlag(0)


def parse_collision(names: object) -> CollisionFlag:
    """Decode a list of flag names into their union.

    Names are case-insensitive.  ``"none"`` contributes nothing, so
    ``["none"]`` decodes to the empty set.

    Raises:
        FormatError: If ``names`` is not a list of strings or contains an
            unknown flag name.
    """
    if not isinstance(names, (list, tuple)):
        raise FormatError(f"collision flags must be a list of names, got {names!r}")
    result = NO_COLLISION
    for name in names:
        if not isinstance(name, str):
            raise FormatError(f"collision flag {name!r} is not a string")
        upper = name.upper()
        if upper == "NONE":
            continue
        member = CollisionFlag.__members__.get(upper)
        if member is None:
            raise FormatError(f"unknown collision flag {name!r}")
        result |= member
    return result


# ---------------------------------------------------------------------------
# Team
# ---------------------------------------------------------------------------

class Team(Enum):
    """Team identifiers.  Goals only ever belong to red or blue."""
    SPECTATOR = 1
    RED = 2
    BLUE = 3


def parse_team(name: object) -> Team:
    """Decode ``"red"`` / ``"blue"``.

    Raises:
        FormatError: For any other value.
    """
    if name == "red":
        return Team.RED
    if name == "blue":
        return Team.BLUE
    raise FormatError(f"invalid team {name!r}")


# ---------------------------------------------------------------------------
# Scalar readers
# ---------------------------------------------------------------------------

def read_float(value: object) -> float:
    """Read a JSON number as a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatError(f"expected a number, got {value!r}")
    try:
        return float(value)
    except OverflowError as exc:
        raise FormatError("number is out of range for a float") from exc


def read_bool(value: object) -> bool:
    """Read a JSON boolean."""
    if not isinstance(value, bool):
        raise FormatError(f"expected a boolean, got {value!r}")
    return value


def read_str(value: object) -> str:
    """Read a JSON string."""
    if not isinstance(value, str):
        raise FormatError(f"expected a string, got {value!r}")
    return value


def read_index(value: object) -> int:
    """Read a JSON integer used as a list index."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(f"expected an integer index, got {value!r}")
    return value


def read_vec2(value: object) -> Vec2:
    """Read a ``[x, y]`` pair."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise FormatError(f"expected an [x, y] pair, got {value!r}")
    return Vec2(read_float(value[0]), read_float(value[1]))

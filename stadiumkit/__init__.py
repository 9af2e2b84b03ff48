"""stadiumkit -- resolve declarative stadium documents into typed models.

A stadium document describes an arena for a 2D disc-physics game:
vertexes, straight and curved segments, planes, goals, discs, the ball,
player physics and named property presets ("traits").  :func:`resolve`
applies trait inheritance and built-in defaults and derives curved-segment
geometry, returning an immutable :class:`Stadium`.
"""

__version__ = "0.1.0"

# Re-export key types for convenience.
from stadiumkit.errors import FormatError
from stadiumkit.primitives import Color, CollisionFlag, Team, Vec2
from stadiumkit.segments import CurvedSegment, Segment, StraightSegment
from stadiumkit.stadium import CameraFollow, KickoffReset, Stadium, resolve

__all__ = [
    "CameraFollow",
    "Color",
    "CollisionFlag",
    "CurvedSegment",
    "FormatError",
    "KickoffReset",
    "Segment",
    "Stadium",
    "StraightSegment",
    "Team",
    "Vec2",
    "resolve",
]

"""Curved-segment geometry.

A curved segment is stored as two vertex indices plus an internal
curvature value ``c``.  For arcs between 10 and 340 degrees ``c`` is the
cotangent of half the arc angle; outside that range the cotangent blows
up, so the raw radian value is kept instead.  Everything else about the
arc (circle center, radius, tangents, angular span) is derived from the
two endpoints and ``c`` on demand.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from stadiumkit.primitives import Vec2

logger = logging.getLogger(__name__)

_COT_MIN = math.radians(10.0)
_COT_MAX = math.radians(340.0)
_FULL_TURN = 2.0 * math.pi


# ---------------------------------------------------------------------------
# Curvature normalization
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CurveSpec:
    """The outcome of normalizing a segment's curvature inputs.

    Attributes:
        curve: Internal curvature value.
        bias: Segment bias, negated if the endpoints were swapped.
        v0: First endpoint index after any swap.
        v1: Second endpoint index after any swap.
        swapped: Whether a negative degree curvature swapped the endpoints.
    """
    curve: float
    bias: float
    v0: int
    v1: int
    swapped: bool = False


def degrees_to_curve(degrees: float) -> float:
    """Convert a non-negative arc angle in degrees to the internal unit."""
    value = math.radians(degrees)
    if _COT_MIN < value < _COT_MAX:
        return 1.0 / math.tan(value / 2.0)
    return value


def normalize_curve(
    curve_deg: float,
    curve_f: float,
    bias: float,
    v0: int,
    v1: int,
) -> CurveSpec | None:
    """Resolve a segment's curvature inputs.

    ``curve_f`` is already in the internal unit and, when non-zero, is used
    verbatim.  Otherwise a non-zero ``curve_deg`` is converted; a negative
    angle is made positive by swapping the endpoints and negating the bias.

    Returns:
        The normalized curve, or ``None`` if the segment is straight.
    """
    if curve_f != 0.0:
        return CurveSpec(curve=curve_f, bias=bias, v0=v0, v1=v1)
    if curve_deg == 0.0:
        return None

    swapped = curve_deg < 0.0
    if swapped:
        curve_deg = -curve_deg
        bias = -bias
        v0, v1 = v1, v0
    curve = degrees_to_curve(curve_deg)
    logger.debug(
        "Curve %.3f deg -> %.6f (swapped=%s)", curve_deg, curve, swapped,
    )
    return CurveSpec(curve=curve, bias=bias, v0=v0, v1=v1, swapped=swapped)


# ---------------------------------------------------------------------------
# Derived circle
# ---------------------------------------------------------------------------

def circle_center(p0: Vec2, p1: Vec2, curve: float) -> Vec2:
    """Center of the circle through ``p0`` and ``p1`` for curvature ``curve``."""
    half = (p1 - p0) / 2.0
    return p0 + half + half.perpendicular() * curve


def circle_radius(p0: Vec2, p1: Vec2, curve: float) -> float:
    return (p0 - circle_center(p0, p1, curve)).length()


def circle_tangents(p0: Vec2, p1: Vec2, curve: float) -> tuple[Vec2, Vec2]:
    """Vectors from the circle center to each endpoint."""
    center = circle_center(p0, p1, curve)
    return (p0 - center, p1 - center)


def circle_angles(p0: Vec2, p1: Vec2, curve: float) -> tuple[float, float]:
    """Angular interval of the arc, with ``angle1 >= angle0``.

    Each angle is the signed angle from an endpoint's tangent vector to the
    circle center.  ``angle1`` is advanced by full turns until the sweep
    from ``angle0`` is non-negative.
    """
    center = circle_center(p0, p1, curve)
    t0, t1 = p0 - center, p1 - center
    angle0 = t0.angle_between(center)
    angle1 = t1.angle_between(center)
    while angle1 < angle0:
        angle1 += _FULL_TURN
    return (angle0, angle1)


@dataclass(frozen=True)
class Arc:
    """All derived circle quantities of a curved segment at once."""
    center: Vec2
    radius: float
    tangents: tuple[Vec2, Vec2]
    angles: tuple[float, float]

    @property
    def sweep(self) -> float:
        """Angular span of the arc in radians (never negative)."""
        return self.angles[1] - self.angles[0]


def arc_between(p0: Vec2, p1: Vec2, curve: float) -> Arc:
    """Compute the full :class:`Arc` for two endpoints and a curvature."""
    return Arc(
        center=circle_center(p0, p1, curve),
        radius=circle_radius(p0, p1, curve),
        tangents=circle_tangents(p0, p1, curve),
        angles=circle_angles(p0, p1, curve),
    )

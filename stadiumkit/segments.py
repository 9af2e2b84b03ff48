"""Stadium segments: straight walls and circular arcs between two vertexes.

A segment is either a :class:`StraightSegment` or a :class:`CurvedSegment`
wrapping one.  Segments hold vertex *indices*; geometry that needs the
endpoint positions takes the stadium's vertex list as an argument and is
recomputed on every call rather than cached.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType

from stadiumkit import geometry
from stadiumkit.cascade import FieldCascade
from stadiumkit.entities import Vertex
from stadiumkit.errors import FormatError
from stadiumkit.primitives import Color, CollisionFlag, Vec2
from stadiumkit.traits import TraitTable

SEGMENT_DEFAULTS = MappingProxyType({
    "bCoef": 1.0,
    "bias": 0.0,
    "curve": 0.0,
    "curveF": 0.0,
    "cGroup": ("wall",),
    "cMask": ("all",),
    "vis": True,
    "color": "000000",
})


# ---------------------------------------------------------------------------
# StraightSegment
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StraightSegment:
    """A straight wall between vertexes ``v0`` and ``v1``.

    Attributes:
        v0: Index of the first endpoint in the stadium's vertex list.
        v1: Index of the second endpoint.
        b_coef: Bounce coefficient.
        bias: One-sided collision bias; its sign picks the solid side.
        c_group: Collision groups the segment belongs to.
        c_mask: Collision groups the segment collides with.
        vis: Whether the segment is drawn.
        color: Draw color.
    """
    v0: int
    v1: int
    b_coef: float
    bias: float
    c_group: CollisionFlag
    c_mask: CollisionFlag
    vis: bool
    color: Color

    @property
    def is_curved(self) -> bool:
        return False

    def endpoints(self, vertexes: Sequence[Vertex]) -> tuple[Vec2, Vec2]:
        """Positions of ``v0`` and ``v1`` in ``vertexes``."""
        return (vertexes[self.v0].position, vertexes[self.v1].position)


# ---------------------------------------------------------------------------
# CurvedSegment
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CurvedSegment:
    """A circular arc segment.

    ``segment`` carries the already swapped endpoints and sign-flipped bias;
    ``curve`` is the internal curvature value (see :mod:`stadiumkit.geometry`).
    """
    segment: StraightSegment
    curve: float

    @property
    def is_curved(self) -> bool:
        return True

    @property
    def v0(self) -> int:
        return self.segment.v0

    @property
    def v1(self) -> int:
        return self.segment.v1

    @property
    def bias(self) -> float:
        return self.segment.bias

    def endpoints(self, vertexes: Sequence[Vertex]) -> tuple[Vec2, Vec2]:
        return self.segment.endpoints(vertexes)

    def circle_center(self, vertexes: Sequence[Vertex]) -> Vec2:
        p0, p1 = self.endpoints(vertexes)
        return geometry.circle_center(p0, p1, self.curve)

    def circle_radius(self, vertexes: Sequence[Vertex]) -> float:
        p0, p1 = self.endpoints(vertexes)
        return geometry.circle_radius(p0, p1, self.curve)

    def circle_tangents(self, vertexes: Sequence[Vertex]) -> tuple[Vec2, Vec2]:
        p0, p1 = self.endpoints(vertexes)
        return geometry.circle_tangents(p0, p1, self.curve)

    def circle_angles(self, vertexes: Sequence[Vertex]) -> tuple[float, float]:
        p0, p1 = self.endpoints(vertexes)
        return geometry.circle_angles(p0, p1, self.curve)

    def arc(self, vertexes: Sequence[Vertex]) -> geometry.Arc:
        p0, p1 = self.endpoints(vertexes)
        return geometry.arc_between(p0, p1, self.curve)


Segment = StraightSegment | CurvedSegment


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_segment(
    raw: object,
    traits: TraitTable,
    vertex_count: int | None = None,
    entity: str = "segment",
) -> Segment:
    """Resolve one entry of ``segments``.

    Args:
        raw: The raw segment object.  ``v0`` and ``v1`` are mandatory.
        traits: The stadium's trait table.
        vertex_count: Number of resolved vertexes.  When given, both
            endpoint indices must address one of them.
        entity: Location of the segment, used in error messages.

    Returns:
        A :class:`CurvedSegment` if either ``curveF`` or ``curve`` is
        non-zero after the cascade, else a :class:`StraightSegment`.

    Raises:
        FormatError: On a missing or out-of-range endpoint, an unknown
            trait, or any malformed field.
    """
    # curveSecondary is the long-form spelling of curveF
    if isinstance(raw, dict) and raw.get("curveF") is None and "curveSecondary" in raw:
        raw = {**raw, "curveF": raw["curveSecondary"]}
    fc = FieldCascade.for_entity(entity, raw, traits, SEGMENT_DEFAULTS)
    v0 = fc.required_index("v0")
    v1 = fc.required_index("v1")
    if vertex_count is not None:
        for key, index in (("v0", v0), ("v1", v1)):
            if not 0 <= index < vertex_count:
                raise FormatError(
                    f"vertex index {index} out of range ({vertex_count} vertexes)",
                    entity=entity,
                    field=key,
                )

    bias = fc.number("bias")
    curve = geometry.normalize_curve(
        curve_deg=fc.number("curve"),
        curve_f=fc.number("curveF"),
        bias=bias,
        v0=v0,
        v1=v1,
    )

    straight = StraightSegment(
        v0=curve.v0 if curve is not None else v0,
        v1=curve.v1 if curve is not None else v1,
        b_coef=fc.number("bCoef"),
        bias=curve.bias if curve is not None else bias,
        c_group=fc.flags("cGroup"),
        c_mask=fc.flags("cMask"),
        vis=fc.boolean("vis"),
        color=fc.color("color", allow_transparent=True),
    )
    if curve is None:
        return straight
    return CurvedSegment(segment=straight, curve=curve.curve)

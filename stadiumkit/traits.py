"""Named property presets ("traits") shared between stadium entities.

A stadium's ``traits`` section maps a name to a flat bag of optional
physical/visual properties.  Entities reference a bag by name through
their ``trait`` key and inherit every property they do not set themselves.

Values are kept in their wire shape (colors and collision flags are not
decoded here) because they are decoded only after the cascade has picked
the winning tier for each field.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Self

from stadiumkit.errors import FormatError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Trait
# ---------------------------------------------------------------------------

# wire key -> attribute name
_TRAIT_KEYS: dict[str, str] = {
    "vis": "vis",
    "bCoef": "b_coef",
    "cGroup": "c_group",
    "cMask": "c_mask",
    "radius": "radius",
    "invMass": "inv_mass",
    "gravity": "gravity",
    "damping": "damping",
    "acceleration": "acceleration",
    "color": "color",
    "bias": "bias",
    "curve": "curve",
    "curveF": "curve_f",
}


@dataclass(frozen=True)
class Trait:
    """A partial property bag.  ``None`` means the trait leaves a field alone.

    Attributes:
        vis: Segment visibility.
        b_coef: Bounce coefficient.
        c_group: Collision group flag names.
        c_mask: Collision mask flag names.
        radius: Disc radius.
        inv_mass: Disc inverse mass.
        gravity: Disc gravity as an ``(x, y)`` pair.
        damping: Disc damping.
        acceleration: Player acceleration.
        color: Color in any accepted wire shape.
        bias: Segment bias.
        curve: Segment curvature in degrees.
        curve_f: Segment curvature in the internal unit.
    """
    vis: object = None
    b_coef: object = None
    c_group: object = None
    c_mask: object = None
    radius: object = None
    inv_mass: object = None
    gravity: object = None
    damping: object = None
    acceleration: object = None
    color: object = None
    bias: object = None
    curve: object = None
    curve_f: object = None

    def get(self, key: str) -> object:
        """Return the value for wire key ``key``, or ``None`` if unset or unknown."""
        attr = _TRAIT_KEYS.get(key)
        if attr is None:
            return None
        return getattr(self, attr)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Self:
        """Build a trait from its wire bag.  Unknown keys are ignored.

        ``curveSecondary`` is read as ``curveF`` when ``curveF`` is absent.
        """
        if data.get("curveF") is None and data.get("curveSecondary") is not None:
            data = {**data, "curveF": data["curveSecondary"]}
        values = {
            attr: _freeze(data[key])
            for key, attr in _TRAIT_KEYS.items()
            if data.get(key) is not None
        }
        return cls(**values)


def _freeze(value: object) -> object:
    """Turn JSON lists into tuples so a trait cannot be mutated through them."""
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


# ---------------------------------------------------------------------------
# TraitTable
# ---------------------------------------------------------------------------

class TraitTable(Mapping[str, Trait]):
    """Immutable name -> :class:`Trait` mapping for one stadium."""

    def __init__(self, traits: Mapping[str, Trait] | None = None) -> None:
        self._traits: dict[str, Trait] = dict(traits or {})

    def __getitem__(self, name: str) -> Trait:
        return self._traits[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._traits)

    def __len__(self) -> int:
        return len(self._traits)

    def __repr__(self) -> str:
        return f"TraitTable({sorted(self._traits)!r})"

    def lookup(self, name: str | None) -> Trait | None:
        """Return the trait called ``name``; ``None`` if no name was given.

        Raises:
            FormatError: If ``name`` is given but no such trait exists.
        """
        if name is None:
            return None
        trait = self._traits.get(name)
        if trait is None:
            raise FormatError(f"unknown trait {name!r}", field="trait")
        return trait


def handle_traits(raw: object) -> TraitTable:
    """Build the trait table from a document's ``traits`` section.

    The section is an object of name -> bag, or an empty array meaning
    "no traits".  Any other shape is tolerated: it is logged and treated
    as an empty table so historically malformed stadiums still load.

    Raises:
        FormatError: If an individual bag inside a well-formed section is
            not an object.
    """
    if raw is None:
        return TraitTable()
    if isinstance(raw, list) and not raw:
        return TraitTable()
    if not isinstance(raw, dict):
        logger.warning(
            "Ignoring malformed traits section (%s); using no traits",
            type(raw).__name__,
        )
        return TraitTable()

    traits: dict[str, Trait] = {}
    for name, bag in raw.items():
        if not isinstance(bag, dict):
            raise FormatError(
                f"trait bag must be an object, got {type(bag).__name__}",
                entity=f"traits[{name!r}]",
            )
        traits[name] = Trait.from_dict(bag)
    logger.debug("Loaded %d trait(s): %s", len(traits), ", ".join(traits))
    return TraitTable(traits)

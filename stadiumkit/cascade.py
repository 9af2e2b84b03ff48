"""The explicit -> trait -> built-in default cascade.

Every entity kind resolves its optional fields the same way: a value set
on the entity wins, otherwise the entity's trait supplies it, otherwise
the entity kind's built-in default does.  Fields with no default (vertex
position, segment endpoints, ...) are mandatory and must be set on the
entity itself.

:class:`FieldCascade` implements that once, keyed by wire field name, and
attaches the entity/field location to any :class:`FormatError` raised
while decoding the winning value.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

from stadiumkit.errors import FormatError
from stadiumkit.primitives import (
    Color,
    CollisionFlag,
    Vec2,
    parse_collision,
    parse_color,
    read_bool,
    read_float,
    read_index,
    read_str,
    read_vec2,
)
from stadiumkit.traits import Trait, TraitTable

T = TypeVar("T")


def _is_set(key: str, value: object) -> bool:
    """Whether a tier supplies ``value`` for ``key``.

    An empty collision flag list counts as unset so it falls through to the
    next tier; only an explicit ``["none"]`` resolves to no flags.
    """
    if value is None:
        return False
    if key in ("cGroup", "cMask") and isinstance(value, (list, tuple)) and not value:
        return False
    return True


def cascade(
    key: str,
    raw: Mapping[str, object],
    trait: Trait | None,
    defaults: Mapping[str, object],
) -> object:
    """Pick the value of ``key`` from the first tier that sets it.

    Raises:
        KeyError: If no tier supplies the field.  The default tables cover
            every optional field, so this signals a missing default entry.
    """
    explicit = raw.get(key)
    if _is_set(key, explicit):
        return explicit
    if trait is not None:
        inherited = trait.get(key)
        if _is_set(key, inherited):
            return inherited
    if key in defaults:
        return defaults[key]
    raise KeyError(f"no default for field {key!r}")


class FieldCascade:
    """Per-entity accessor applying :func:`cascade` and typed decoding.

    Usage::

        fc = FieldCascade.for_entity("vertexes[0]", raw, traits, VERTEX_DEFAULTS)
        b_coef = fc.number("bCoef")
        x = fc.required_float("x")
    """

    def __init__(
        self,
        entity: str,
        raw: Mapping[str, object],
        trait: Trait | None,
        defaults: Mapping[str, object],
    ) -> None:
        self.entity = entity
        self.raw = raw
        self.trait = trait
        self.defaults = defaults

    @classmethod
    def for_entity(
        cls,
        entity: str,
        raw: object,
        traits: TraitTable,
        defaults: Mapping[str, object],
    ) -> FieldCascade:
        """Validate ``raw`` is an object and resolve its ``trait`` reference.

        Raises:
            FormatError: If ``raw`` is not an object, or names a trait that
                does not exist.
        """
        if not isinstance(raw, Mapping):
            raise FormatError(
                f"expected an object, got {type(raw).__name__}", entity=entity,
            )
        try:
            trait_name = raw.get("trait")
            if trait_name is not None:
                trait_name = read_str(trait_name)
            trait = traits.lookup(trait_name)
        except FormatError as exc:
            raise exc.located(entity, "trait") from exc
        return cls(entity, raw, trait, defaults)

    @classmethod
    def untraited(
        cls,
        entity: str,
        raw: object,
        defaults: Mapping[str, object],
    ) -> FieldCascade:
        """Like :meth:`for_entity` for entity kinds that cannot reference a trait."""
        if not isinstance(raw, Mapping):
            raise FormatError(
                f"expected an object, got {type(raw).__name__}", entity=entity,
            )
        return cls(entity, raw, None, defaults)

    # -- Cascaded fields -----------------------------------------------------

    def value(self, key: str) -> object:
        """The raw winning value for ``key`` across all three tiers."""
        return cascade(key, self.raw, self.trait, self.defaults)

    def decode(self, key: str, decoder: Callable[[object], T]) -> T:
        """Decode the winning value for ``key``, locating any format error."""
        value = self.value(key)
        try:
            return decoder(value)
        except FormatError as exc:
            raise exc.located(self.entity, key) from exc

    def number(self, key: str) -> float:
        return self.decode(key, read_float)

    def boolean(self, key: str) -> bool:
        return self.decode(key, read_bool)

    def string(self, key: str) -> str:
        return self.decode(key, read_str)

    def vec2(self, key: str) -> Vec2:
        return self.decode(key, read_vec2)

    def flags(self, key: str) -> CollisionFlag:
        return self.decode(key, parse_collision)

    def color(self, key: str, allow_transparent: bool = True) -> Color:
        return self.decode(key, lambda v: parse_color(v, allow_transparent))

    # -- Mandatory fields ----------------------------------------------------

    def required(self, key: str, decoder: Callable[[object], T]) -> T:
        """Decode ``key`` from the entity itself; it has no default.

        Raises:
            FormatError: If the field is absent or malformed.
        """
        value = self.raw.get(key)
        if value is None:
            raise FormatError("missing mandatory field", entity=self.entity, field=key)
        try:
            return decoder(value)
        except FormatError as exc:
            raise exc.located(self.entity, key) from exc

    def required_float(self, key: str) -> float:
        return self.required(key, read_float)

    def required_vec2(self, key: str) -> Vec2:
        return self.required(key, read_vec2)

    def required_index(self, key: str) -> int:
        return self.required(key, read_index)

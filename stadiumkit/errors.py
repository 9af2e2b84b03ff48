"""Error types raised while resolving a stadium document.

Resolution either produces a complete :class:`~stadiumkit.stadium.Stadium`
or fails with exactly one :class:`FormatError`.  Decoders that know nothing
about where their input came from raise an unlocated error; the caller that
knows the entity and field re-raises it with :meth:`FormatError.located`.
"""

from __future__ import annotations


class FormatError(ValueError):
    """A stadium document violates the format.

    Attributes:
        reason: What is wrong with the value.
        entity: Where in the document the problem is, e.g. ``"segments[3]"``,
            or ``None`` when the raiser does not know.
        field: The wire key of the offending field, e.g. ``"v1"``, or
            ``None`` when the problem concerns the entity as a whole.
    """

    def __init__(
        self,
        reason: str,
        *,
        entity: str | None = None,
        field: str | None = None,
    ) -> None:
        self.reason = reason
        self.entity = entity
        self.field = field
        super().__init__(self._render())

    def _render(self) -> str:
        if self.entity is None and self.field is None:
            return self.reason
        location = self.entity or ""
        if self.field is not None:
            location = f"{location}.{self.field}" if location else self.field
        return f"{location}: {self.reason}"

    def located(self, entity: str, field: str | None = None) -> FormatError:
        """Return a copy of this error pinned to ``entity`` / ``field``.

        A location that is already set wins, so the innermost raiser's
        context survives re-raising through outer resolvers.
        """
        return FormatError(
            self.reason,
            entity=self.entity if self.entity is not None else entity,
            field=self.field if self.field is not None else field,
        )

"""Optional-value wrapper understood by the object model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class OptionalValue:
    """A container that may or may not hold a value.

    The object model treats it as transparent: every coercion and resolution
    unwraps it and works on the contained value (or on absence).
    """

    value: object = None

    EMPTY: ClassVar[OptionalValue]

    @classmethod
    def of(cls, value: object) -> OptionalValue:
        """Wrap a value (None produces an empty optional)."""
        return cls(value)

    @classmethod
    def empty(cls) -> OptionalValue:
        """Return the empty optional."""
        return cls.EMPTY

    @property
    def is_present(self) -> bool:
        """Return True if a value is held."""
        return self.value is not None

    def or_else(self, other: object) -> object:
        """Return the held value, or ``other`` if empty."""
        return self.value if self.value is not None else other


OptionalValue.EMPTY = OptionalValue()

"""Record-aware object model used by render units."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._classify import is_collection, is_date, is_number, is_primitive
from ._coerce import (
    to_boolean,
    to_collection,
    to_date,
    to_instant,
    to_map,
    to_number,
    to_string,
)
from ._record import Record
from ._resolve import as_index, get_index, resolve_property

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime
    from numbers import Number

    import pendulum


class RuntimeObjectModel:
    """Object model handed to render units through the render context.

    Wraps the stateless classification, coercion and resolution functions
    and gives records precedence over generic introspection, so a record's
    own properties are never shadowed by an accidental attribute or method
    of the same name. The class holds no state; subclasses may override any
    operation.
    """

    def is_primitive(self, value: object) -> bool:
        return is_primitive(value)

    def is_date(self, value: object) -> bool:
        return is_date(value)

    def is_number(self, value: object) -> bool:
        return is_number(value)

    def is_collection(self, value: object) -> bool:
        return is_collection(value)

    def resolve_property(self, target: object, prop: object) -> object:
        """Resolve a property, trying index lookup first for numbers.

        Args:
            target: The value to resolve the property on.
            prop: An index or a property name.

        Returns:
            The resolved value, or None.
        """
        if target is None or prop is None:
            return None
        resolved: object = None
        index = as_index(prop)
        if index is not None:
            resolved = get_index(target, index)
        if resolved is None:
            resolved = self.get_property(target, prop)
        return resolved

    def get_property(self, target: object, prop: object) -> object:
        """Resolve a named property, asking records first."""
        if target is None or prop is None:
            return None
        name = to_string(prop)
        result: object = None
        if isinstance(target, Record):
            result = target.get_property(name)
        if result is None:
            result = resolve_property(target, prop)
        return result

    def to_boolean(self, value: object) -> bool:
        return to_boolean(value)

    def to_number(self, value: object) -> Number | None:
        return to_number(value)

    def to_date(self, value: object) -> datetime | None:
        return to_date(value)

    def to_instant(self, value: object) -> pendulum.DateTime | None:
        return to_instant(value)

    def to_string(self, value: object) -> str:
        return to_string(value)

    def to_collection(self, value: object) -> Sequence[object]:
        """Normalise a value to a sequence; records yield their property names."""
        if isinstance(value, Record):
            return tuple(value.get_property_names())
        return to_collection(value)

    def to_map(self, value: object) -> Mapping[object, object]:
        return to_map(value)

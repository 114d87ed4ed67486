"""Type classification over opaque template values.

All predicates are total: they never raise, whatever the value.
"""

import array
from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from numbers import Number
from time import struct_time

from ._numbers import is_creatable

_PRIMITIVE_TYPES: frozenset[type] = frozenset({bool, int, float, complex, type(None)})
_TEXT_TYPES = (str, bytes, bytearray)


def is_primitive(value: object) -> bool:
    """Return True if the exact type of value is a primitive type.

    Only the exact types ``bool``, ``int``, ``float``, ``complex`` and
    ``NoneType`` qualify. Subclasses (``IntEnum`` members, user-defined int
    subclasses) are not primitive.
    """
    return type(value) in _PRIMITIVE_TYPES


def is_numeric(value: object) -> bool:
    """Return True if value already is a number (booleans excluded)."""
    return isinstance(value, Number) and not isinstance(value, bool)


def is_text(value: object) -> bool:
    """Return True for string-like scalars (str, bytes, bytearray)."""
    return isinstance(value, _TEXT_TYPES)


def is_array(value: object) -> bool:
    """Return True for array shapes: tuples and ``array.array``.

    ``time.struct_time`` is a tuple subclass but is treated as a date.
    """
    return isinstance(value, (tuple, array.array)) and not isinstance(
        value, struct_time
    )


def is_date(value: object) -> bool:
    """Return True for calendar dates, datetimes and ``time.struct_time``."""
    return isinstance(value, (date, struct_time))


def is_number(value: object) -> bool:
    """Return True if value is a number or its string form parses as one."""
    from ._coerce import to_string  # noqa: PLC0415

    if value is None:
        return False
    if is_numeric(value):
        return True
    return is_creatable(to_string(value))


def is_collection(value: object) -> bool:
    """Return True for arrays, iterables and iterators.

    Strings and mappings are not collections here, even though Python can
    iterate over them.
    """
    if is_text(value) or isinstance(value, Mapping) or isinstance(value, struct_time):
        return False
    return is_array(value) or isinstance(value, (Iterable, Iterator))

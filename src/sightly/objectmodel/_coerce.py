"""Coercion of opaque template values into canonical forms.

Every function here is total. Absence of an answer is expressed as False,
None, an empty string or an empty collection, never as an exception.
"""

from __future__ import annotations

import array
import calendar
import operator
from collections.abc import Collection, Iterable, Iterator, Mapping, Sequence
from datetime import UTC, date, datetime
from enum import Enum
from time import struct_time
from typing import TYPE_CHECKING, overload

import pendulum

from ._classify import is_array, is_collection, is_numeric, is_primitive, is_text
from ._numbers import create_number
from ._optional import OptionalValue
from ._record import Record

if TYPE_CHECKING:
    from numbers import Number

EMPTY_STRING = ""

_MISSING = object()


class SequenceView(Sequence[object]):
    """Read-only live view over a mutable sequence.

    Changes to the wrapped sequence show through the view; the view itself
    offers no way to mutate it.
    """

    __slots__ = ("_wrapped",)

    def __init__(self, wrapped: Sequence[object]) -> None:
        self._wrapped: Sequence[object] = wrapped

    @overload
    def __getitem__(self, index: int) -> object: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[object, ...]: ...

    def __getitem__(self, index: int | slice) -> object:
        if isinstance(index, slice):
            return tuple(self._wrapped[index])
        return self._wrapped[index]

    def __len__(self) -> int:
        return len(self._wrapped)

    def __iter__(self) -> Iterator[object]:
        return iter(self._wrapped)

    def __contains__(self, value: object) -> bool:
        return value in self._wrapped

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SequenceView):
            other = other._wrapped
        if isinstance(other, Sequence) and not is_text(other):
            return len(self) == len(other) and all(
                a == b for a, b in zip(self, other, strict=False)
            )
        return NotImplemented

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    def __repr__(self) -> str:
        return f"SequenceView({self._wrapped!r})"


def to_boolean(value: object) -> bool:  # noqa: PLR0911
    """Coerce a value to a boolean.

    False for None, zero, False, blank strings, and empty collections,
    mappings, arrays and iterators. The strings "false" and "FALSE" are
    True: only blankness counts, not meaning. Optional values are unwrapped.

    Iterators that cannot report their remaining length (plain generators)
    are considered True, since checking would consume an element. This
    includes exhausted generators: an empty iterator is only False when
    its length hint says so.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_numeric(value):
        return value != 0
    if is_text(value):
        return bool(value.strip())  # pyright: ignore[reportAttributeAccessIssue]
    if isinstance(value, OptionalValue):
        return value.is_present and to_boolean(value.value)
    if isinstance(value, (Collection, Mapping)):
        return len(value) > 0
    if isinstance(value, Iterator):
        return operator.length_hint(value, 1) > 0
    if isinstance(value, Iterable):
        return next(iter(value), _MISSING) is not _MISSING
    return True


def to_number(value: object) -> Number | None:
    """Coerce a value to a number.

    Numbers are returned unchanged. Everything else is converted to its
    string form and parsed with the lenient numeric grammar.

    Returns:
        The number, or None if the value is not numeric.
    """
    if value is None:
        return None
    if is_numeric(value):
        return value
    if isinstance(value, OptionalValue):
        return to_number(value.value)
    return create_number(to_string(value))


def to_string(value: object) -> str:
    """Coerce a value to its template string form.

    - None -> ""
    - booleans -> "true" / "false"
    - bytes and bytearrays -> decoded as UTF-8, undecodable bytes replaced
    - enum members -> their name
    - arrays, iterables and iterators -> comma-joined elements
    - optional values -> the string form of the contained value
    - anything else -> ``str(value)``
    """
    if value is None:
        return EMPTY_STRING
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode(errors="replace")
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_primitive(value):
        return str(value)
    if isinstance(value, OptionalValue):
        return to_string(value.or_else(EMPTY_STRING))
    if is_collection(value):
        return collection_to_string(to_collection(value))
    return str(value)


def collection_to_string(collection: Iterable[object] | None) -> str:
    """Join the string forms of the elements with commas.

    No escaping is done: elements containing commas stay ambiguous.
    """
    if collection is None:
        return EMPTY_STRING
    return ",".join(to_string(item) for item in collection)


def from_iterator(iterator: Iterator[object] | None) -> tuple[object, ...]:
    """Drain an iterator into an immutable tuple.

    The iterator is consumed: a second call on it returns an empty tuple.
    """
    if iterator is None:
        return ()
    return tuple(iterator)


def to_collection(value: object) -> Sequence[object]:  # noqa: PLR0911
    """Normalise a value to an immutable ordered sequence.

    - None -> ()
    - tuples and views -> themselves
    - ``array.array`` -> tuple of its elements
    - optional values -> the collection of the contained value
    - strings -> a single-element tuple
    - other sequences -> a read-only :class:`SequenceView`
    - mappings -> tuple of keys in iteration order
    - iterators and iterables -> materialised once into a tuple
    - anything else -> a single-element tuple holding the value
    """
    if value is None:
        return ()
    if isinstance(value, SequenceView) or (isinstance(value, tuple) and is_array(value)):
        return value
    if isinstance(value, array.array):
        return tuple(value)
    if isinstance(value, OptionalValue):
        return to_collection(value.or_else(()))
    if is_text(value) or isinstance(value, struct_time):
        return (value,)
    if isinstance(value, Sequence):
        return SequenceView(value)
    if isinstance(value, Mapping):
        return tuple(value.keys())
    if isinstance(value, Iterator):
        return from_iterator(value)
    if isinstance(value, Iterable):
        return from_iterator(iter(value))
    return (value,)


def to_map(value: object) -> Mapping[object, object]:
    """Coerce a value to a mapping.

    Mappings are returned unchanged, records are expanded into a fresh dict
    of all their properties, and everything else yields an empty dict.
    """
    if isinstance(value, Mapping):
        return value
    if isinstance(value, Record):
        return {name: value.get_property(name) for name in value.get_property_names()}
    return {}


def to_instant(value: object) -> pendulum.DateTime | None:
    """Convert a temporal value to a UTC instant.

    Naive datetimes and ``struct_time`` values are read as UTC; plain dates
    become midnight UTC.

    Returns:
        A pendulum DateTime in UTC, or None for unsupported values.
    """
    if isinstance(value, OptionalValue):
        return to_instant(value.value)
    if isinstance(value, datetime):
        return pendulum.instance(value).in_timezone("UTC")
    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day, tz="UTC")
    if isinstance(value, struct_time):
        return pendulum.from_timestamp(calendar.timegm(value), tz="UTC")
    return None


def to_date(value: object) -> datetime | None:
    """Convert a temporal value to a ``datetime``.

    Datetimes are returned unchanged; plain dates become midnight UTC and
    ``struct_time`` values are read as UTC.

    Returns:
        The datetime, or None for unsupported values.
    """
    if isinstance(value, OptionalValue):
        return to_date(value.value)
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, struct_time):
        return datetime.fromtimestamp(calendar.timegm(value), tz=UTC)
    return None

"""Structured record protocol.

Records are first-class, already-typed domain objects. When a value
implements this protocol the runtime object model asks the record for a
property before falling back to generic introspection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Set as AbstractSet


@runtime_checkable
class Record(Protocol):
    """Protocol for values exposing named properties explicitly.

    Property names are case-sensitive at this layer.
    """

    def get_property(self, name: str) -> object:
        """Return the value of the named property, or None if absent.

        Args:
            name: The property name.
        """
        ...

    def get_property_names(self) -> AbstractSet[str]:
        """Return the names of all properties this record exposes."""
        ...

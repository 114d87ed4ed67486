r"""Dynamic object model for template values.

Answers questions about values of unknown shape (is it truthy, numeric, a
date, a collection?), coerces them to canonical forms, and resolves named
or indexed properties off of them.

Basic usage:
    from sightly.objectmodel import resolve_property, to_boolean, to_string

    to_boolean("false")                       # True: only blank strings are false
    to_string([1, 2, 3])                      # "1,2,3"
    resolve_property({"one": 1}, "one")       # 1
    resolve_property(("a", "b"), 1)           # "b"

With records:
    from sightly.objectmodel import Record, RuntimeObjectModel

    model = RuntimeObjectModel()
    model.resolve_property(record, "title")   # record.get_property("title") first
"""

from ._classify import is_collection, is_date, is_number, is_primitive
from ._coerce import (
    SequenceView,
    collection_to_string,
    from_iterator,
    to_boolean,
    to_collection,
    to_date,
    to_instant,
    to_map,
    to_number,
    to_string,
)
from ._numbers import create_number, is_creatable
from ._optional import OptionalValue
from ._record import Record
from ._resolve import (
    BeanAccessor,
    find_bean_method,
    get_enum_value,
    get_field,
    get_index,
    invoke_bean_method,
    is_method_allowed,
    is_public_type,
    resolve_property,
)
from ._runtime import RuntimeObjectModel

__all__ = [
    "BeanAccessor",
    "OptionalValue",
    "Record",
    "RuntimeObjectModel",
    "SequenceView",
    "collection_to_string",
    "create_number",
    "find_bean_method",
    "from_iterator",
    "get_enum_value",
    "get_field",
    "get_index",
    "invoke_bean_method",
    "is_collection",
    "is_creatable",
    "is_date",
    "is_method_allowed",
    "is_number",
    "is_primitive",
    "is_public_type",
    "resolve_property",
    "to_boolean",
    "to_collection",
    "to_date",
    "to_instant",
    "to_map",
    "to_number",
    "to_string",
]

"""Property and index resolution over arbitrary Python objects.

A property is resolved by probing the target in a fixed order: index
lookup for numeric properties, then optional unwrapping, mapping lookup,
enum member lookup, public field lookup and finally bean-style accessor
invocation. Every failure degrades to None; nothing here raises.

Python has no access modifiers, so visibility follows naming convention:
a member is public when its name does not start with an underscore, and a
class is public when no component of its qualified name does. Members of a
non-public class are only reachable when a public base class declares them.
"""

from __future__ import annotations

import inspect
import logging
import math
from collections.abc import Mapping
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from numbers import Real

from ._classify import is_array, is_numeric
from ._coerce import to_collection, to_string
from ._optional import OptionalValue

_STR_METHOD = "__str__"
_LENGTH_FIELD = "length"
_ZERO_ARGUMENT_KINDS = (
    inspect.Parameter.VAR_POSITIONAL,
    inspect.Parameter.VAR_KEYWORD,
)
_BOUND_PARAMETER_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True, slots=True)
class BeanAccessor:
    """A zero-argument accessor found on a class.

    Attributes:
        name: The attribute name of the accessor.
        owner: The class in the MRO that declares it.
    """

    name: str
    owner: type


def is_public_type(cls: type) -> bool:
    """Return True if no component of the class's qualified name is private."""
    return not any(part.startswith("_") for part in cls.__qualname__.split("."))


def is_enum_type(value: object) -> bool:
    """Return True if value is an Enum class (not a member)."""
    return isinstance(value, type) and issubclass(value, Enum)


def as_index(prop: object) -> int | None:
    """Return the integer index a numeric property designates, if any.

    Real numbers and decimals are truncated toward zero; booleans, complex
    numbers and non-finite values designate no index.
    """
    if not is_numeric(prop):
        return None
    if isinstance(prop, Decimal):
        return int(prop) if prop.is_finite() else None
    if not isinstance(prop, Real) or not math.isfinite(prop):
        return None
    return int(prop)


def resolve_property(target: object, prop: object) -> object:
    """Resolve a named or indexed property on a target.

    Args:
        target: The value to resolve the property on.
        prop: The property, either an index (number) or a name.

    Returns:
        The resolved value, or None if nothing matched.
    """
    if target is None or prop is None:
        return None
    resolved: object = None
    index = as_index(prop)
    if index is not None:
        resolved = get_index(target, index)
    if resolved is None:
        name = to_string(prop)
        if name:
            if isinstance(target, OptionalValue):
                return resolve_property(target.value, prop)
            if isinstance(target, Mapping):
                resolved = _get_mapping_value(target, prop)
            if resolved is None:
                resolved = get_enum_value(target, name)
            if resolved is None:
                resolved = get_field(target, name)
            if resolved is None:
                resolved = invoke_bean_method(target, name)
    return resolved


def get_index(target: object, index: int) -> object:
    """Return the element at index of an ordered target.

    Enum classes are indexed by member definition order. Mappings and sets
    are never indexable, even when their keys are integers.

    Returns:
        The element, or None if the index is out of range or the target has
        no order.
    """
    if target is None:
        return None
    if is_enum_type(target):
        members = list(target)  # pyright: ignore[reportArgumentType]
        return members[index] if 0 <= index < len(members) else None
    if is_array(target):
        return target[index] if 0 <= index < len(target) else None  # pyright: ignore[reportIndexIssue,reportArgumentType]
    if isinstance(target, (Mapping, AbstractSet)):
        return None
    collection = to_collection(target)
    if 0 <= index < len(collection):
        return collection[index]
    return None


def get_enum_value(target: object, value_name: str | None) -> object:
    """Return the member of an Enum class with the given name, or None."""
    if target is None or not value_name or not is_enum_type(target):
        return None
    try:
        return target[value_name]  # pyright: ignore[reportIndexIssue]
    except KeyError:
        return None


def get_field(target: object, field_name: str | None) -> object:
    """Read a public field of the target.

    Fields are instance attributes, slot members, properties and plain
    class attributes; methods are not fields. The ``length`` pseudo-field
    of an array is its length.

    Returns:
        The field value, or None if there is no accessible field.
    """
    if target is None or not field_name:
        return None
    if is_array(target) and field_name == _LENGTH_FIELD:
        return len(target)  # pyright: ignore[reportArgumentType]
    if field_name.startswith("_"):
        return None

    cls = _owner_type(target)
    instance_vars = getattr(target, "__dict__", None) if target is not cls else None
    if not (isinstance(instance_vars, dict) and field_name in instance_vars):
        found = _lookup_member(cls, field_name)
        if found is None or _is_routine(found[1]):
            return None
    if _find_public_owner(cls, field_name) is None:
        return None
    return _read_attribute(target, field_name)


def invoke_bean_method(target: object, method_name: str | None) -> object:
    """Invoke the bean accessor for a property name on the target.

    Returns:
        The accessor's return value, or None if no accessible accessor
        exists or the call fails.
    """
    if target is None or not method_name:
        return None
    cls = _owner_type(target)
    accessor = find_bean_method(cls, method_name)
    if accessor is None:
        return None
    if _find_public_owner(cls, accessor.name) is None:
        logging.getLogger(__name__).debug(
            "Method '%s' is not exposed by a public type of %s",
            accessor.name,
            cls.__qualname__,
        )
        return None
    method = _read_attribute(target, accessor.name)
    if method is None:
        return None
    try:
        return method()  # pyright: ignore[reportCallIssue]
    except Exception:  # noqa: BLE001
        logging.getLogger(__name__).warning(
            "Cannot access method '%s' on object %r",
            accessor.name,
            target,
            exc_info=True,
        )
        return None


def find_bean_method(cls: type | None, base_name: str | None) -> BeanAccessor | None:
    """Find the zero-argument accessor for a property name on a class.

    Candidates are tried in order: ``name``, ``getName``, ``isName``,
    ``get_name``, ``is_name``. The first candidate that is a zero-argument
    routine decides; if it is only declared on ``object`` the search stops
    without a result.

    Args:
        cls: The class to search.
        base_name: The property name.

    Returns:
        The accessor, or None.
    """
    if cls is None or not base_name:
        return None
    for candidate in _accessor_candidates(base_name):
        if candidate.startswith("_") and candidate != _STR_METHOD:
            continue
        found = _lookup_member(cls, candidate)
        if found is None:
            continue
        owner, member = found
        if not _is_routine(member) or not _accepts_no_arguments(member):
            continue
        accessor = BeanAccessor(name=candidate, owner=owner)
        return accessor if is_method_allowed(accessor) else None
    return None


def is_method_allowed(accessor: BeanAccessor | None) -> bool:
    """Return True unless the accessor is only declared on ``object``.

    ``object.__str__`` is the one base method that may be used.
    """
    if accessor is None:
        return False
    return accessor.owner is not object or accessor.name == _STR_METHOD


def _get_mapping_value(target: Mapping[object, object], key: object) -> object:
    try:
        return target.get(key)
    except TypeError:
        # Unhashable key, or a mapping that rejects the key type
        return None


def _owner_type(target: object) -> type:
    return target if is_enum_type(target) else type(target)  # pyright: ignore[reportReturnType]


def _accessor_candidates(base_name: str) -> tuple[str, ...]:
    capitalized = base_name[:1].upper() + base_name[1:]
    return (
        base_name,
        f"get{capitalized}",
        f"is{capitalized}",
        f"get_{base_name}",
        f"is_{base_name}",
    )


def _lookup_member(cls: type, name: str) -> tuple[type, object] | None:
    for klass in cls.__mro__:
        if name in vars(klass):
            return klass, vars(klass)[name]
    return None


def _declares(cls: type, name: str) -> bool:
    if name in vars(cls):
        return True
    try:
        return name in inspect.get_annotations(cls)
    except NameError:
        return False


def _find_public_owner(cls: type, name: str) -> type | None:
    """Find a public class through which ``name`` may be reached on ``cls``.

    A public class exposes everything it has. For a non-public class, the
    bases are searched in order and each base chain is followed up to the
    first public class declaring the name.
    """
    if is_public_type(cls):
        return cls
    for base in cls.__bases__:
        declaring = next((klass for klass in base.__mro__ if _declares(klass, name)), None)
        if declaring is None:
            continue
        owner = _find_public_owner(declaring, name)
        if owner is not None:
            return owner
    return None


def _is_routine(member: object) -> bool:
    return isinstance(member, (staticmethod, classmethod)) or inspect.isroutine(member)


def _accepts_no_arguments(member: object) -> bool:
    function = member.__func__ if isinstance(member, (staticmethod, classmethod)) else member
    try:
        signature = inspect.signature(function)  # pyright: ignore[reportArgumentType]
    except (TypeError, ValueError):
        return False
    parameters = list(signature.parameters.values())
    if (
        not isinstance(member, staticmethod)
        and parameters
        and parameters[0].kind in _BOUND_PARAMETER_KINDS
    ):
        # self or cls
        parameters = parameters[1:]
    return all(
        parameter.default is not inspect.Parameter.empty
        or parameter.kind in _ZERO_ARGUMENT_KINDS
        for parameter in parameters
    )


def _read_attribute(target: object, name: str) -> object:
    try:
        return getattr(target, name)
    except AttributeError:
        return None
    except Exception:  # noqa: BLE001
        logging.getLogger(__name__).warning(
            "Cannot read attribute '%s' on object %r", name, target, exc_info=True
        )
        return None

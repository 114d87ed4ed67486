"""Enumeration types for Sightly."""

from enum import StrEnum


class CallFailureKind(StrEnum):
    """Reasons a ``data-sly-call`` target can be rejected."""

    NULL = "null"
    PRIMITIVE = "primitive"
    STRING = "string"
    WRONG_TYPE = "wrong_type"


class ExtensionName(StrEnum):
    """Names under which runtime extensions are looked up.

    Each extension receives the render context followed by positional
    arguments. The argument contracts are:

    - FORMAT: the format string (``'Hello {0}'``), a sequence of values for
      the placeholders.
    - I18N: the text to translate, optional locale, optional hint, optional
      resource bundle basename.
    - JOIN: the sequence to join, the separator.
    - URI_MANIPULATION: optional URI string, optional mapping of
      manipulation options.
    - XSS: the text to escape or filter, the display context name.
    - INCLUDE: optional script path, optional mapping of include options.
    - RESOURCE: optional resource path, optional mapping of resource options.
    - USE: identifier of the Use-object to load, optional mapping of
      initialisation arguments.
    """

    FORMAT = "format"
    I18N = "i18n"
    JOIN = "join"
    URI_MANIPULATION = "uriManipulation"
    XSS = "xss"
    INCLUDE = "include"
    RESOURCE = "includeResource"
    USE = "use"

"""Sightly runtime exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sightly.enums import CallFailureKind

if TYPE_CHECKING:
    from pathlib import Path


class SightlyError(Exception):
    """Base exception for Sightly runtime errors."""


# =============================================================================
# Render Exceptions
# =============================================================================


class RenderError(SightlyError):
    """Base exception for failures raised during a render call."""


class TemplateCallError(RenderError, TypeError):
    """Raised when ``data-sly-call`` targets something that is not a render unit.

    These are template-authoring bugs. They abort the current render call but
    never touch the state of the shared render units.

    Attributes:
        template: The value that was used as a call target.
        kind: Classification of the failure.
    """

    kind: CallFailureKind = CallFailureKind.WRONG_TYPE

    def __init__(self, message: str, *, template: object = None) -> None:
        """Initialize with error message and the offending call target.

        Args:
            message: Human-readable error message.
            template: The value that was used as a call target.
        """
        super().__init__(message)
        self.template: object = template


class NullTemplateError(TemplateCallError):
    """The call target evaluated to None."""

    kind: CallFailureKind = CallFailureKind.NULL


class PrimitiveTemplateError(TemplateCallError):
    """The call target is a primitive value."""

    kind: CallFailureKind = CallFailureKind.PRIMITIVE


class StringTemplateError(TemplateCallError):
    """The call target is a string, not a render unit."""

    kind: CallFailureKind = CallFailureKind.STRING


class NotATemplateError(TemplateCallError):
    """The call target has a type that cannot be rendered."""

    kind: CallFailureKind = CallFailureKind.WRONG_TYPE


class UnitAlreadyAttachedError(RenderError):
    """Raised when a render unit is attached to a second owner.

    Attributes:
        name: The name the unit was being registered under.
    """

    def __init__(self, message: str, *, name: str) -> None:
        """Initialize with error message and registration name."""
        super().__init__(message)
        self.name: str = name


class ExtensionNotFoundError(RenderError, LookupError):
    """Raised when a runtime extension is not available in the render context.

    Attributes:
        name: The extension name that was requested.
    """

    def __init__(self, message: str, *, name: str) -> None:
        """Initialize with error message and extension name."""
        super().__init__(message)
        self.name: str = name


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(SightlyError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column

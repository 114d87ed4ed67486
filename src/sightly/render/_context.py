"""Render context threaded through every render call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Self

from sightly.exceptions import ExtensionNotFoundError
from sightly.objectmodel import RuntimeObjectModel
from sightly.utils import create_logger, create_render_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from structlog.typing import FilteringBoundLogger

    from sightly.config import Config

    from ._protocol import RuntimeExtension


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-request state shared by all units taking part in a render call.

    A unit call renders the callee with the caller's context, so the global
    bindings are the only variables a called unit inherits.

    Attributes:
        bindings: Global variables visible to every unit.
        object_model: Object model used to classify and coerce values.
        extensions: Runtime extensions by name.
        logger: Logger for render events.
        strict_extensions: Whether calling an unknown extension raises
            instead of yielding None.
    """

    bindings: Mapping[str, object] = field(default_factory=dict)
    object_model: RuntimeObjectModel = field(default_factory=RuntimeObjectModel)
    extensions: Mapping[str, RuntimeExtension] = field(default_factory=dict)
    logger: FilteringBoundLogger = field(default_factory=create_logger)
    strict_extensions: bool = True

    def call(self, name: str, *arguments: object) -> object:
        """Invoke the runtime extension registered under ``name``.

        Args:
            name: Extension name, e.g. ``ExtensionName.JOIN``.
            *arguments: Positional arguments passed to the extension.

        Returns:
            The extension result, or None for an unknown extension when
            ``strict_extensions`` is off.

        Raises:
            ExtensionNotFoundError: If no extension is registered under
                ``name`` and ``strict_extensions`` is on.
        """
        extension = self.extensions.get(name)
        if extension is None:
            if self.strict_extensions:
                msg = f"Runtime extension {name} is not available"
                raise ExtensionNotFoundError(msg, name=str(name))
            self.logger.warning("extension_not_found", extension=str(name))
            return None
        self.logger.debug("call_extension", extension=str(name), arguments=len(arguments))
        return extension.call(self, *arguments)

    @classmethod
    def from_config(
        cls,
        config: Config,
        bindings: Mapping[str, object] | None = None,
        *,
        extensions: Mapping[str, RuntimeExtension] | None = None,
        object_model: RuntimeObjectModel | None = None,
    ) -> Self:
        """Build a context whose logging and extension handling follow ``config``.

        Args:
            config: Loaded runtime configuration.
            bindings: Global variables for the render call.
            extensions: Runtime extensions by name.
            object_model: Object model to use; a RuntimeObjectModel by default.

        Returns:
            A new RenderContext.
        """
        return cls(
            bindings=bindings if bindings is not None else {},
            object_model=object_model if object_model is not None else RuntimeObjectModel(),
            extensions=extensions if extensions is not None else {},
            logger=create_render_logger(config.logging),
            strict_extensions=config.render.strict_extensions,
        )

"""Protocol definitions for the render runtime.

- OutputSink: where render units write their markup
- RuntimeExtension: a named function callable from a render call
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ._context import RenderContext


@runtime_checkable
class OutputSink(Protocol):
    """Text sink a render unit writes to.

    ``io.StringIO``, open text files and ``sys.stdout`` all qualify.
    """

    def write(self, text: str, /) -> object:
        """Write a chunk of rendered text."""
        ...


@runtime_checkable
class RuntimeExtension(Protocol):
    """A function the runtime can call by name while rendering.

    Extensions are registered by the embedding application under one of the
    :class:`~sightly.enums.ExtensionName` names (or any custom name) and
    invoked through :meth:`RenderContext.call`.
    """

    def call(self, render_context: RenderContext, *arguments: object) -> object:
        """Run the extension.

        Args:
            render_context: The context of the current render call.
            *arguments: Positional arguments, as documented for the
                extension's name.

        Returns:
            The extension result.
        """
        ...

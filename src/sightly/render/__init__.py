"""Render unit composition runtime.

Basic usage:
    from io import StringIO

    from sightly.render import RenderContext, RenderUnit

    class Page(RenderUnit):
        def __init__(self) -> None:
            super().__init__()
            self.add_sub_template("header", Header())

        def render_body(self, out, bindings, arguments, render_context):
            out.write(f"<h1>{bindings['TITLE']}</h1>")
            self.call_unit(out, render_context, bindings["header"], self.obj().with_("level", 2))

    out = StringIO()
    Page().render(out, RenderContext(bindings={"title": "Home"}))
"""

from ._bindings import CaseInsensitiveBindings, fold_key
from ._context import RenderContext
from ._protocol import OutputSink, RuntimeExtension
from ._unit import FluentMap, RenderUnit

__all__ = [
    "CaseInsensitiveBindings",
    "FluentMap",
    "OutputSink",
    "RenderContext",
    "RenderUnit",
    "RuntimeExtension",
    "fold_key",
]

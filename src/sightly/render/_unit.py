"""Composable render units.

A compiled template is a tree of :class:`RenderUnit` objects. Each unit may
own named sub-units and renders its body against a merged, case-insensitive
scope.

Thread safety: units take no locks. Register every sub-unit before the tree
is shared; after that a unit is read-only and may be rendered by any number
of concurrent calls, each of which builds its own scope and argument maps.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from sightly.exceptions import (
    NotATemplateError,
    NullTemplateError,
    PrimitiveTemplateError,
    StringTemplateError,
    TemplateCallError,
    UnitAlreadyAttachedError,
)

from ._bindings import CaseInsensitiveBindings, fold_key

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ._context import RenderContext
    from ._protocol import OutputSink


class FluentMap(dict[str, object]):
    """Dictionary with a chainable setter for building call arguments.

    Example:
        >>> FluentMap().with_("title", "Home").with_("level", 2)
        {'title': 'Home', 'level': 2}
    """

    def with_(self, name: str, value: object) -> Self:
        """Store ``value`` under ``name`` and return this map."""
        self[name] = value
        return self


class RenderUnit(ABC):
    """A reusable, composable template execution node.

    Subclasses implement :meth:`render_body` and register their sub-units
    with :meth:`add_sub_template` while being constructed. A unit is also a
    record: its properties are its sub-units, so template expressions can
    reach a sub-unit by name and call it.
    """

    def __init__(self) -> None:
        self._sub_templates: dict[str, RenderUnit] = {}
        self._sub_templates_view: Mapping[str, RenderUnit] = MappingProxyType(
            self._sub_templates
        )
        self._siblings: Mapping[str, RenderUnit] | None = None

    @property
    def sub_templates(self) -> Mapping[str, RenderUnit]:
        """Read-only view of the sub-units, keyed by case-folded name."""
        return self._sub_templates_view

    @property
    def siblings(self) -> Mapping[str, RenderUnit] | None:
        """Read-only view of the owner's sub-units, or None if unattached."""
        return self._siblings

    def render(
        self,
        out: OutputSink,
        render_context: RenderContext,
        arguments: Mapping[str, object] | None = None,
    ) -> None:
        """Render this unit.

        The body sees a fresh scope built from the context's global
        bindings, overlaid by this unit's siblings and then by its own
        sub-units. Arguments are passed separately and shadow the scope.

        Args:
            out: Sink receiving the rendered text.
            render_context: Context of the current render call.
            arguments: Arguments for this unit.
        """
        bindings = self._build_global_scope(render_context.bindings)
        render_context.logger.debug(
            "render_unit",
            unit=type(self).__qualname__,
            scope=len(bindings),
            arguments=len(arguments) if arguments is not None else 0,
        )
        self.render_body(
            out, bindings, CaseInsensitiveBindings(arguments), render_context
        )

    @abstractmethod
    def render_body(
        self,
        out: OutputSink,
        bindings: CaseInsensitiveBindings,
        arguments: CaseInsensitiveBindings,
        render_context: RenderContext,
    ) -> None:
        """Write this unit's markup.

        Args:
            out: Sink receiving the rendered text.
            bindings: The merged global scope.
            arguments: The arguments of this call.
            render_context: Context of the current render call.
        """

    def get_property(self, name: str) -> RenderUnit | None:
        """Return the sub-unit registered under ``name``, ignoring case."""
        return self._sub_templates.get(fold_key(name))

    def get_property_names(self) -> frozenset[str]:
        """Return the case-folded names of all sub-units."""
        return frozenset(self._sub_templates)

    def call_unit(
        self,
        out: OutputSink,
        render_context: RenderContext,
        template: object,
        arguments: object = None,
    ) -> None:
        """Render another unit, as ``data-sly-call`` does.

        The callee is rendered with the caller's context, so it sees the
        global bindings but none of the caller's local variables.

        Args:
            out: Sink receiving the rendered text.
            render_context: Context of the current render call.
            template: The unit to call.
            arguments: Call arguments; coerced to a read-only mapping.

        Raises:
            NullTemplateError: If ``template`` is None.
            PrimitiveTemplateError: If ``template`` is a primitive value.
            StringTemplateError: If ``template`` is a string.
            NotATemplateError: If ``template`` is any other non-unit value.
        """
        if not isinstance(template, RenderUnit):
            error = self._call_failure(render_context, template)
            render_context.logger.warning(
                "call_unit_failed", kind=str(error.kind), error=str(error)
            )
            raise error

        object_model = render_context.object_model
        arguments_map = MappingProxyType(
            {
                object_model.to_string(key): value
                for key, value in object_model.to_map(arguments).items()
            }
        )
        render_context.logger.debug(
            "call_unit", unit=type(template).__qualname__, arguments=len(arguments_map)
        )
        template.render(out, render_context, arguments_map)

    def obj(self) -> FluentMap:
        """Return an empty :class:`FluentMap` for building call arguments."""
        return FluentMap()

    def add_sub_template(self, name: str, render_unit: RenderUnit) -> None:
        """Register ``render_unit`` under the case-folded ``name``.

        The unit's siblings become this unit's sub-units. Registering a unit
        again under the same owner is allowed.

        Raises:
            UnitAlreadyAttachedError: If the unit already belongs to
                another owner.
        """
        if (
            render_unit._siblings is not None
            and render_unit._siblings is not self._sub_templates_view
        ):
            msg = f"Render unit '{name}' is already attached to another unit"
            raise UnitAlreadyAttachedError(msg, name=name)
        render_unit._siblings = self._sub_templates_view
        self._sub_templates[fold_key(name)] = render_unit

    def _build_global_scope(
        self, bindings: Mapping[str, object]
    ) -> CaseInsensitiveBindings:
        scope = CaseInsensitiveBindings(bindings)
        if self._siblings is not None:
            scope.update(self._siblings)
        scope.update(self._sub_templates)
        return scope

    @staticmethod
    def _call_failure(
        render_context: RenderContext, template: object
    ) -> TemplateCallError:
        if template is None:
            return NullTemplateError(
                "data-sly-call: expression evaluates to null.", template=template
            )
        object_model = render_context.object_model
        if object_model.is_primitive(template):
            msg = (
                f'data-sly-call: primitive "{object_model.to_string(template)}" '
                "does not represent a HTL template."
            )
            return PrimitiveTemplateError(msg, template=template)
        if isinstance(template, str):
            msg = f"data-sly-call: String '{template}' does not represent a HTL template."
            return StringTemplateError(msg, template=template)
        template_type = type(template)
        msg = (
            f"data-sly-call: {template_type.__module__}.{template_type.__qualname__} "
            "does not represent a HTL template."
        )
        return NotATemplateError(msg, template=template)

"""Unit tests for render units."""

from __future__ import annotations

from collections.abc import Callable
from io import StringIO
from types import MappingProxyType
from typing import TYPE_CHECKING

import pytest

from sightly.enums import CallFailureKind
from sightly.exceptions import (
    NotATemplateError,
    NullTemplateError,
    PrimitiveTemplateError,
    RenderError,
    StringTemplateError,
    TemplateCallError,
    UnitAlreadyAttachedError,
)
from sightly.objectmodel import Record, RuntimeObjectModel
from sightly.render import CaseInsensitiveBindings, FluentMap, RenderContext, RenderUnit

if TYPE_CHECKING:
    from structlog.testing import CapturingLogger

    from sightly.render import OutputSink

RenderContextFactory = Callable[..., RenderContext]


class RecordingUnit(RenderUnit):
    """Unit that records the scope and arguments of each render call."""

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self.text = text
        self.calls: list[tuple[CaseInsensitiveBindings, CaseInsensitiveBindings]] = []

    def render_body(
        self,
        out: OutputSink,
        bindings: CaseInsensitiveBindings,
        arguments: CaseInsensitiveBindings,
        render_context: RenderContext,
    ) -> None:
        self.calls.append((bindings, arguments))
        out.write(self.text)


class CallingUnit(RenderUnit):
    """Unit that calls the unit found in its scope under ``target``."""

    def __init__(self, target: str, arguments: object = None) -> None:
        super().__init__()
        self.target = target
        self.arguments = arguments

    def render_body(
        self,
        out: OutputSink,
        bindings: CaseInsensitiveBindings,
        arguments: CaseInsensitiveBindings,
        render_context: RenderContext,
    ) -> None:
        out.write("[")
        template = render_context.object_model.resolve_property(bindings, self.target)
        self.call_unit(out, render_context, template, self.arguments)
        out.write("]")


class Page(RenderUnit):
    """Unit that renders ``title`` from its arguments and a header sub-unit."""

    def __init__(self) -> None:
        super().__init__()
        self.add_sub_template("Header", RecordingUnit("<header/>"))

    def render_body(
        self,
        out: OutputSink,
        bindings: CaseInsensitiveBindings,
        arguments: CaseInsensitiveBindings,
        render_context: RenderContext,
    ) -> None:
        self.call_unit(
            out, render_context, bindings["header"], self.obj().with_("level", 2)
        )
        out.write(f"<h1>{arguments['TITLE']}</h1>")


class TestFluentMap:
    def test_with_chains(self) -> None:
        result = FluentMap().with_("title", "Home").with_("level", 2)

        assert result == {"title": "Home", "level": 2}

    def test_with_returns_same_instance(self) -> None:
        fluent = FluentMap()

        assert fluent.with_("a", 1) is fluent

    def test_obj_creates_fresh_map(self) -> None:
        unit = RecordingUnit()

        assert unit.obj() == {}
        assert unit.obj() is not unit.obj()


class TestSubTemplates:
    def test_names_are_case_folded(self) -> None:
        parent = RecordingUnit()
        child = RecordingUnit()

        parent.add_sub_template("MyChild", child)

        assert parent.get_property("mychild") is child
        assert parent.get_property("MYCHILD") is child
        assert parent.get_property_names() == frozenset({"mychild"})

    def test_missing_property(self) -> None:
        assert RecordingUnit().get_property("missing") is None

    def test_unit_is_a_record(self) -> None:
        assert isinstance(RecordingUnit(), Record)

    def test_siblings_point_at_owner_registry(self) -> None:
        parent = RecordingUnit()
        first = RecordingUnit()
        second = RecordingUnit()

        parent.add_sub_template("first", first)
        parent.add_sub_template("second", second)

        assert first.siblings is not None
        assert dict(first.siblings) == {"first": first, "second": second}
        assert first.siblings is second.siblings

    def test_siblings_are_read_only(self) -> None:
        parent = RecordingUnit()
        child = RecordingUnit()
        parent.add_sub_template("child", child)

        assert isinstance(child.siblings, MappingProxyType)
        with pytest.raises(TypeError):
            child.siblings["other"] = RecordingUnit()  # pyright: ignore[reportIndexIssue]

    def test_sub_templates_view_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            RecordingUnit().sub_templates["x"] = RecordingUnit()  # pyright: ignore[reportIndexIssue]

    def test_unattached_unit_has_no_siblings(self) -> None:
        assert RecordingUnit().siblings is None

    def test_reregistering_under_same_owner(self) -> None:
        parent = RecordingUnit()
        child = RecordingUnit()

        parent.add_sub_template("child", child)
        parent.add_sub_template("alias", child)

        assert parent.get_property_names() == frozenset({"child", "alias"})

    def test_attaching_to_another_owner_fails(self) -> None:
        child = RecordingUnit()
        RecordingUnit().add_sub_template("child", child)

        with pytest.raises(UnitAlreadyAttachedError) as exc_info:
            RecordingUnit().add_sub_template("Child", child)

        assert exc_info.value.name == "Child"
        assert isinstance(exc_info.value, RenderError)


class TestRender:
    def test_scope_contains_globals_and_sub_units(
        self, make_render_context: RenderContextFactory
    ) -> None:
        unit_a = RecordingUnit()
        unit_b = RecordingUnit()
        unit_a.add_sub_template("B", unit_b)

        unit_a.render(StringIO(), make_render_context(bindings={"X": 1}))

        bindings, _ = unit_a.calls[0]
        assert bindings["x"] == 1
        assert bindings["b"] is unit_b
        assert "B" in bindings

    def test_sub_unit_sees_siblings_but_not_owner(
        self, make_render_context: RenderContextFactory
    ) -> None:
        unit_a = RecordingUnit()
        unit_b = RecordingUnit()
        unit_c = RecordingUnit()
        unit_a.add_sub_template("b", unit_b)
        unit_a.add_sub_template("c", unit_c)

        unit_b.render(StringIO(), make_render_context())

        bindings, _ = unit_b.calls[0]
        assert bindings["c"] is unit_c
        assert bindings["b"] is unit_b
        assert unit_a not in bindings.values()

    def test_sub_units_shadow_siblings_shadow_globals(
        self, make_render_context: RenderContextFactory
    ) -> None:
        owner = RecordingUnit()
        unit = RecordingUnit()
        sibling = RecordingUnit()
        nested = RecordingUnit()
        owner.add_sub_template("unit", unit)
        owner.add_sub_template("Shared", sibling)
        owner.add_sub_template("other", RecordingUnit())
        unit.add_sub_template("OTHER", nested)

        context = make_render_context(bindings={"shared": "global", "other": "global"})
        unit.render(StringIO(), context)

        bindings, _ = unit.calls[0]
        assert bindings["shared"] is sibling
        assert bindings["other"] is nested
        assert bindings.original_key("other") == "other"

    def test_arguments_are_case_insensitive(
        self, make_render_context: RenderContextFactory
    ) -> None:
        unit = RecordingUnit()

        unit.render(StringIO(), make_render_context(), {"Title": "Home"})

        _, arguments = unit.calls[0]
        assert arguments["title"] == "Home"

    def test_no_arguments(self, make_render_context: RenderContextFactory) -> None:
        unit = RecordingUnit()

        unit.render(StringIO(), make_render_context())

        _, arguments = unit.calls[0]
        assert len(arguments) == 0

    def test_globals_are_not_mutated(
        self, make_render_context: RenderContextFactory
    ) -> None:
        unit = RecordingUnit()
        unit.add_sub_template("child", RecordingUnit())
        globals_ = {"Title": "Home"}

        unit.render(StringIO(), make_render_context(bindings=globals_))

        assert globals_ == {"Title": "Home"}

    def test_each_call_gets_a_fresh_scope(
        self, make_render_context: RenderContextFactory
    ) -> None:
        unit = RecordingUnit()
        context = make_render_context(bindings={"a": 1})

        unit.render(StringIO(), context)
        unit.render(StringIO(), context)

        first, second = unit.calls[0][0], unit.calls[1][0]
        assert first is not second
        first["b"] = 2
        assert "b" not in second

    def test_writes_to_sink(self, make_render_context: RenderContextFactory) -> None:
        out = StringIO()

        Page().render(out, make_render_context(), {"title": "Home"})

        assert out.getvalue() == "<header/><h1>Home</h1>"

    def test_logs_render_event(
        self,
        make_render_context: RenderContextFactory,
        capturing_logger: CapturingLogger,
    ) -> None:
        RecordingUnit().render(StringIO(), make_render_context(bindings={"a": 1}))

        call = capturing_logger.calls[0]
        assert call.method_name == "debug"
        assert call.kwargs["event"] == "render_unit"
        assert call.kwargs["unit"] == "RecordingUnit"
        assert call.kwargs["scope"] == 1


class TestCallUnit:
    def test_calls_unit_with_arguments(
        self, make_render_context: RenderContextFactory
    ) -> None:
        callee = RecordingUnit("callee")
        caller = CallingUnit("callee", {"Level": 2})
        owner = RecordingUnit()
        owner.add_sub_template("callee", callee)
        owner.add_sub_template("caller", caller)
        out = StringIO()

        caller.render(out, make_render_context())

        assert out.getvalue() == "[callee]"
        _, arguments = callee.calls[0]
        assert arguments["level"] == 2

    def test_callee_sees_caller_globals_not_caller_arguments(
        self, make_render_context: RenderContextFactory
    ) -> None:
        callee = RecordingUnit()
        caller = CallingUnit("callee")
        caller.add_sub_template("callee", callee)

        caller.render(StringIO(), make_render_context(bindings={"g": 1}), {"local": 2})

        bindings, arguments = callee.calls[0]
        assert bindings["g"] == 1
        assert "local" not in bindings
        assert len(arguments) == 0

    def test_record_arguments_are_expanded(
        self, make_render_context: RenderContextFactory
    ) -> None:
        class Args:
            def get_property(self, name: str) -> object:
                return {"a": 1}.get(name)

            def get_property_names(self) -> set[str]:
                return {"a"}

        callee = RecordingUnit()
        caller = CallingUnit("callee", Args())
        caller.add_sub_template("callee", callee)

        caller.render(StringIO(), make_render_context())

        _, arguments = callee.calls[0]
        assert dict(arguments) == {"a": 1}

    def test_non_mapping_arguments_become_empty(
        self, make_render_context: RenderContextFactory
    ) -> None:
        callee = RecordingUnit()
        caller = CallingUnit("callee", [1, 2])
        caller.add_sub_template("callee", callee)

        caller.render(StringIO(), make_render_context())

        _, arguments = callee.calls[0]
        assert len(arguments) == 0

    def test_argument_keys_are_stringified(
        self, make_render_context: RenderContextFactory
    ) -> None:
        callee = RecordingUnit()
        caller = CallingUnit("callee", {1: "one", False: "no"})
        caller.add_sub_template("callee", callee)

        caller.render(StringIO(), make_render_context())

        _, arguments = callee.calls[0]
        assert arguments["1"] == "one"
        assert arguments["false"] == "no"

    def test_argument_map_is_not_mutated(
        self, make_render_context: RenderContextFactory
    ) -> None:
        class MutatingUnit(RecordingUnit):
            def render_body(
                self,
                out: OutputSink,
                bindings: CaseInsensitiveBindings,
                arguments: CaseInsensitiveBindings,
                render_context: RenderContext,
            ) -> None:
                arguments["added"] = True

        source = {"a": 1}
        caller = CallingUnit("callee", source)
        caller.add_sub_template("callee", MutatingUnit())

        caller.render(StringIO(), make_render_context())

        assert source == {"a": 1}

    def test_logs_call_event(
        self,
        make_render_context: RenderContextFactory,
        capturing_logger: CapturingLogger,
    ) -> None:
        caller = CallingUnit("callee", {"a": 1})
        caller.add_sub_template("callee", RecordingUnit())

        caller.render(StringIO(), make_render_context())

        events = [call.kwargs["event"] for call in capturing_logger.calls]
        assert events == ["render_unit", "call_unit", "render_unit"]


class TestCallUnitFailures:
    def call(self, context: RenderContext, template: object) -> None:
        RecordingUnit().call_unit(StringIO(), context, template, None)

    def test_null_target(self, make_render_context: RenderContextFactory) -> None:
        with pytest.raises(NullTemplateError) as exc_info:
            self.call(make_render_context(), None)

        assert exc_info.value.kind is CallFailureKind.NULL
        assert str(exc_info.value) == "data-sly-call: expression evaluates to null."

    @pytest.mark.parametrize(
        ("template", "rendered"), [(42, "42"), (1.5, "1.5"), (True, "true")]
    )
    def test_primitive_target(
        self,
        make_render_context: RenderContextFactory,
        template: object,
        rendered: str,
    ) -> None:
        with pytest.raises(PrimitiveTemplateError) as exc_info:
            self.call(make_render_context(), template)

        assert exc_info.value.kind is CallFailureKind.PRIMITIVE
        assert exc_info.value.template == template
        assert str(exc_info.value) == (
            f'data-sly-call: primitive "{rendered}" does not represent a HTL template.'
        )

    def test_string_target(self, make_render_context: RenderContextFactory) -> None:
        with pytest.raises(StringTemplateError) as exc_info:
            self.call(make_render_context(), "hello")

        assert exc_info.value.kind is CallFailureKind.STRING
        assert str(exc_info.value) == (
            "data-sly-call: String 'hello' does not represent a HTL template."
        )

    def test_wrong_type_target(self, make_render_context: RenderContextFactory) -> None:
        with pytest.raises(NotATemplateError) as exc_info:
            self.call(make_render_context(), [1, 2])

        assert exc_info.value.kind is CallFailureKind.WRONG_TYPE
        assert str(exc_info.value) == (
            "data-sly-call: builtins.list does not represent a HTL template."
        )

    def test_failures_are_type_errors(
        self, make_render_context: RenderContextFactory
    ) -> None:
        with pytest.raises(TypeError):
            self.call(make_render_context(), object())

    def test_failures_share_a_base(self, make_render_context: RenderContextFactory) -> None:
        kinds: set[CallFailureKind] = set()
        for template in (None, 1, "s", object()):
            with pytest.raises(TemplateCallError) as exc_info:
                self.call(make_render_context(), template)
            kinds.add(exc_info.value.kind)

        assert kinds == set(CallFailureKind)

    def test_failure_is_logged(
        self,
        make_render_context: RenderContextFactory,
        capturing_logger: CapturingLogger,
    ) -> None:
        with pytest.raises(StringTemplateError):
            self.call(make_render_context(), "hello")

        call = capturing_logger.calls[-1]
        assert call.method_name == "warning"
        assert call.kwargs["event"] == "call_unit_failed"
        assert call.kwargs["kind"] == "string"

    def test_primitive_check_uses_object_model(
        self, make_render_context: RenderContextFactory
    ) -> None:
        class StrictModel(RuntimeObjectModel):
            def is_primitive(self, value: object) -> bool:
                return isinstance(value, str) or super().is_primitive(value)

        with pytest.raises(PrimitiveTemplateError):
            self.call(make_render_context(object_model=StrictModel()), "hello")

    def test_failed_call_leaves_units_intact(
        self, make_render_context: RenderContextFactory
    ) -> None:
        owner = RecordingUnit()
        owner.add_sub_template("broken", CallingUnit("missing"))
        broken = owner.get_property("broken")
        assert broken is not None

        with pytest.raises(NullTemplateError):
            broken.render(StringIO(), make_render_context())

        assert owner.get_property_names() == frozenset({"broken"})

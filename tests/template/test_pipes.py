"""
Tests for vatic/template/pipes
"""

import asyncio
import pytest

from vatic.template import render
from vatic.template.errors import (
    PipeError,
    TemplateRenderError,
    UnknownPipeError,
    UnknownTagError,
)
from vatic.template.pipes import (
    BasePipe,
    PipeRegistry,
    SummaryPipe,
    create_default_registry,
    default_registry,
)


class UpperPipe(BasePipe):
    name = "upper"

    async def apply(self, value, context):
        return value.upper()


class BrokenPipe(BasePipe):
    name = "broken"

    async def apply(self, value, context):
        raise ValueError("boom")


class StrictPipe(BasePipe):
    name = "strict"

    async def apply(self, value, context):
        raise UnknownTagError(value)


class RecordingPipe(BasePipe):
    """Suspends mid-apply and records when each call starts and ends."""
    name = "record"

    def __init__(self):
        self.events = []

    async def apply(self, value, context):
        self.events.append(('start', value))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        self.events.append(('end', value))
        return f"<{value}>"


class TestSummaryPipe:
    """Default summary pipe"""

    @pytest.mark.asyncio
    async def test_prefix(self, empty_ctx):
        assert await SummaryPipe().apply("x", empty_ctx) == "Summary of: x"

    @pytest.mark.asyncio
    async def test_empty_value(self, empty_ctx):
        assert await SummaryPipe().apply("", empty_ctx) == "Summary of: "

    @pytest.mark.asyncio
    async def test_custom_prefix(self, empty_ctx):
        assert await SummaryPipe(prefix="TL;DR ").apply("x", empty_ctx) == "TL;DR x"

    @pytest.mark.asyncio
    async def test_empty_prefix_is_kept(self, empty_ctx):
        assert await SummaryPipe(prefix="").apply("x", empty_ctx) == "x"


class TestPipeRegistry:
    """Registry lookup and application"""

    def test_default_registry_has_summary(self):
        assert default_registry.has("summary")
        assert default_registry.list_pipes() == ["summary"]

    def test_create_default_registry_is_fresh(self):
        registry = create_default_registry()
        registry.register(UpperPipe())
        assert not default_registry.has("upper")

    def test_names_are_case_sensitive(self):
        assert not default_registry.has("Summary")
        assert default_registry.get("SUMMARY") is None

    def test_register_replaces(self):
        registry = create_default_registry()
        replacement = SummaryPipe(prefix="Recap: ")
        registry.register(replacement)
        assert registry.get("summary") is replacement
        assert registry.list_pipes() == ["summary"]

    def test_repr(self):
        assert repr(SummaryPipe()) == "<Pipe: summary>"

    def test_base_pipe_is_abstract(self):
        with pytest.raises(TypeError):
            BasePipe()

    @pytest.mark.asyncio
    async def test_apply(self, empty_ctx):
        assert await default_registry.apply("summary", "v", empty_ctx) == "Summary of: v"

    @pytest.mark.asyncio
    async def test_apply_unknown(self, empty_ctx):
        with pytest.raises(UnknownPipeError) as exc:
            await PipeRegistry().apply("summary", "v", empty_ctx)
        assert exc.value.pipe == "summary"
        assert "unknown pipe: 'summary'" in str(exc.value)

    @pytest.mark.asyncio
    async def test_apply_wraps_failures(self, empty_ctx):
        registry = PipeRegistry()
        registry.register(BrokenPipe())
        with pytest.raises(PipeError) as exc:
            await registry.apply("broken", "v", empty_ctx)
        assert "pipe 'broken' failed: boom" in str(exc.value)
        assert isinstance(exc.value.__cause__, ValueError)
        assert isinstance(exc.value, TemplateRenderError)

    @pytest.mark.asyncio
    async def test_apply_passes_template_errors_through(self, empty_ctx):
        registry = PipeRegistry()
        registry.register(StrictPipe())
        with pytest.raises(UnknownTagError):
            await registry.apply("strict", "v", empty_ctx)


class TestCustomPipesInTemplates:
    """Registering new pipes without touching the evaluator"""

    @pytest.mark.asyncio
    async def test_custom_pipe(self, ctx_with_dict, fixed_clock):
        registry = create_default_registry()
        registry.register(UpperPipe())
        result = await render(
            "{% custom:name | upper %} / {% custom:name | summary %}",
            ctx_with_dict,
            pipe_registry=registry,
            clock=fixed_clock
        )
        assert result == "FRANZ / Summary of: Franz"

    @pytest.mark.asyncio
    async def test_pipe_missing_from_given_registry(self, ctx_with_dict, fixed_clock):
        with pytest.raises(UnknownPipeError):
            await render(
                "{% custom:name | summary %}",
                ctx_with_dict,
                pipe_registry=PipeRegistry(),
                clock=fixed_clock
            )

    @pytest.mark.asyncio
    async def test_pipes_run_one_at_a_time(self, ctx_with_memories, fixed_clock):
        pipe = RecordingPipe()
        registry = PipeRegistry()
        registry.register(pipe)

        result = await render(
            "{% memory minus=1 | record %} and {% memory minus=2 | record %}",
            ctx_with_memories,
            pipe_registry=registry,
            clock=fixed_clock
        )

        assert result == "<newest> and <older>"
        assert pipe.events == [
            ('start', 'newest'),
            ('end', 'newest'),
            ('start', 'older'),
            ('end', 'older'),
        ]

    @pytest.mark.asyncio
    async def test_pipes_in_loop_run_in_iteration_order(self, ctx_with_memories, fixed_clock):
        pipe = RecordingPipe()
        registry = PipeRegistry()
        registry.register(pipe)

        result = await render(
            "{% for m in memories %}{% m.result | record %};{% endfor %}",
            ctx_with_memories,
            pipe_registry=registry,
            clock=fixed_clock
        )

        assert result == "<newest>;<older>;<oldest>;"
        assert [kind for kind, _ in pipe.events] == ['start', 'end'] * 3

    @pytest.mark.asyncio
    async def test_failing_pipe_aborts_render(self, ctx_with_dict, fixed_clock):
        registry = PipeRegistry()
        registry.register(BrokenPipe())
        with pytest.raises(PipeError):
            await render(
                "Hi {% custom:name | broken %}",
                ctx_with_dict,
                pipe_registry=registry,
                clock=fixed_clock
            )

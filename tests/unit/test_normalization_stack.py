"""Tests for synthetic flow/node stack traces."""

from unittest.mock import MagicMock

from flowsentry.flows.registry import FlowRegistry
from flowsentry.normalization.models import NodeContext
from flowsentry.normalization.stack import StackTraceBuilder


def _builder_for(context: NodeContext | None) -> StackTraceBuilder:
    return StackTraceBuilder(MagicMock(return_value=context))


class TestStackShape:
    def test_renders_frames_innermost_first(self, registry: FlowRegistry) -> None:
        stack = StackTraceBuilder(registry.resolve).build(
            "TypeError: oops (line 2, col 15)", "fn1"
        )
        assert stack.text.splitlines() == [
            "Error: TypeError: oops (line 2, col 15)",
            '    at "const b = a.c.d;" (node/fn1:2:15)',
            "    at @node(function:Parse order) (flows/tab1/nodes/fn1:2:15)",
            "    at @flow (flows/tab1:0:0)",
        ]

    def test_flow_frame_uses_zero_sentinel(self, registry: FlowRegistry) -> None:
        stack = StackTraceBuilder(registry.resolve).build("boom line 2, col 1", "fn1")
        flow_frame = stack.frames[-1]
        assert (flow_frame.lineno, flow_frame.colno) == (0, 0)

    def test_selects_line_from_node_source(self) -> None:
        context = NodeContext(id="n1", type="function", name="f", func="a\nb\nc\nd\ne", flow_id="f1")
        stack = _builder_for(context).build("SyntaxError: x\nline 5, col 3", "n1")
        assert stack.frames[0].function == '"e"'
        assert stack.frames[0].render() == 'at "e" (node/n1:5:3)'
        assert stack.frames[1].render() == "at @node(function:f) (flows/f1/nodes/n1:5:3)"

    def test_defaults_position_to_zero(self, registry: FlowRegistry) -> None:
        stack = StackTraceBuilder(registry.resolve).build("plain failure", "fn1")
        assert stack.frames[0].render() == 'at "" (node/fn1:0:0)'

    def test_node_without_source_has_empty_line(self, registry: FlowRegistry) -> None:
        stack = StackTraceBuilder(registry.resolve).build("x line 1, col 1", "sw1")
        assert stack.frames[0].function == '""'
        assert stack.frames[1].function == "@node(switch:)"


class TestLookupMiss:
    def test_unknown_node_uses_placeholders(self, registry: FlowRegistry) -> None:
        stack = StackTraceBuilder(registry.resolve).build("boom line 4, col 2", "missing")
        assert stack.text
        assert stack.frames[1].render() == (
            "at @node(unknown:) (flows/unknown/nodes/missing:4:2)"
        )
        assert stack.frames[2].render() == "at @flow (flows/unknown:0:0)"

    def test_failing_lookup_does_not_raise(self) -> None:
        builder = StackTraceBuilder(MagicMock(side_effect=RuntimeError("runtime gone")))
        stack = builder.build("boom", "n1")
        assert stack.header == "Error: boom"
        assert len(stack.frames) == 3

    def test_resolve_swallows_lookup_errors(self) -> None:
        builder = StackTraceBuilder(MagicMock(side_effect=KeyError("n1")))
        assert builder.resolve("n1") is None

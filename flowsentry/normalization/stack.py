"""Synthetic stack traces pointing at flow/node coordinates."""

from collections.abc import Callable

from flowsentry.logging.logger import Log
from flowsentry.normalization.models import NodeContext, StackFrame, SyntheticStack
from flowsentry.normalization.parser import extract_position, select_source_line

NodeLookup = Callable[[str], NodeContext | None]

UNKNOWN = "unknown"


class StackTraceBuilder:
    """Builds a call-stack shaped trace from a message and the node that raised it.

    The trace reads, innermost first:

        Error: <message>
            at "<source line>" (node/<node id>:<line>:<col>)
            at @node(<type>:<name>) (flows/<flow id>/nodes/<node id>:<line>:<col>)
            at @flow (flows/<flow id>:0:0)
    """

    def __init__(self, lookup: NodeLookup) -> None:
        self._lookup = lookup

    def build(self, message: str, node_id: str) -> SyntheticStack:
        return self.build_for_context(message, node_id, self.resolve(node_id))

    def build_for_context(
        self, message: str, node_id: str, context: NodeContext | None
    ) -> SyntheticStack:
        line, col = extract_position(message)

        if context is None:
            node_type, node_name, flow_id, func = UNKNOWN, "", UNKNOWN, None
        else:
            node_type = context.type or UNKNOWN
            node_name = context.name or ""
            flow_id = context.flow_id or UNKNOWN
            func = context.func

        error_line = select_source_line(func, line)
        frames = (
            StackFrame(f'"{error_line}"', f"node/{node_id}", line, col),
            StackFrame(
                f"@node({node_type}:{node_name})",
                f"flows/{flow_id}/nodes/{node_id}",
                line,
                col,
            ),
            StackFrame("@flow", f"flows/{flow_id}", 0, 0),
        )
        return SyntheticStack(header=f"Error: {message}", frames=frames)

    def resolve(self, node_id: str) -> NodeContext | None:
        """Look the node up; a failing lookup counts as not found."""
        try:
            return self._lookup(node_id)
        except Exception as exc:
            Log.warning(f"Node lookup failed for {node_id!r}: {exc}")
            return None

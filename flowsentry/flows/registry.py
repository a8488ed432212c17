import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from flowsentry.flows.exceptions import FlowLoadError
from flowsentry.logging.logger import Log
from flowsentry.normalization.models import NodeContext


class FlowRegistry:
    """In-memory index of deployed nodes, keyed by node id."""

    def __init__(self, nodes: Iterable[NodeContext] = ()) -> None:
        self._nodes = {node.id: node for node in nodes}

    @classmethod
    def empty(cls) -> "FlowRegistry":
        return cls()

    @classmethod
    def from_export(cls, data: Any) -> "FlowRegistry":
        """Build a registry from a flows export.

        Accepts the plain list of node objects, or the versioned
        {"rev": ..., "flows": [...]} form returned by the runtime's admin API.

        Raises:
            FlowLoadError: if the export has neither shape.
        """
        if isinstance(data, Mapping):
            data = data.get("flows")
        if not isinstance(data, list):
            raise FlowLoadError("Flows export must be a list of nodes or contain a 'flows' list")

        nodes = []
        for raw in data:
            node = _build_node(raw)
            if node is not None:
                nodes.append(node)
        skipped = len(data) - len(nodes)
        if skipped:
            Log.debug(f"Skipped {skipped} malformed entries in flows export")
        return cls(nodes)

    @classmethod
    def from_file(cls, path: Path | str) -> "FlowRegistry":
        """Load a flows export (flows.json) from disk.

        Raises:
            FlowLoadError: if the file cannot be read or is not a flows export.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise FlowLoadError(f"Failed to read flows file {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise FlowLoadError(f"Invalid JSON in flows file {path}: {exc}") from exc
        registry = cls.from_export(data)
        Log.info(f"Loaded {len(registry)} nodes from {path}")
        return registry

    def resolve(self, node_id: str) -> NodeContext | None:
        """Return the node with this id, or None when it is not deployed."""
        if not isinstance(node_id, str):
            return None
        return self._nodes.get(node_id)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes


def _build_node(raw: Any) -> NodeContext | None:
    if not isinstance(raw, Mapping):
        return None
    node_id = raw.get("id")
    if not isinstance(node_id, str) or not node_id:
        return None
    node_type = raw.get("type")
    node_type = node_type if isinstance(node_type, str) else ""
    name = raw.get("name")
    if not isinstance(name, str):
        # tabs carry their title in 'label'
        label = raw.get("label")
        name = label if isinstance(label, str) else None
    func = raw.get("func")
    flow_id = node_id if node_type == "tab" else raw.get("z")
    return NodeContext(
        id=node_id,
        type=node_type,
        name=name,
        func=func if isinstance(func, str) else None,
        flow_id=flow_id if isinstance(flow_id, str) else None,
    )

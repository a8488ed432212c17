import pytest

from flowsentry.flows.registry import FlowRegistry

FUNCTION_SOURCE = "const a = 1;\nconst b = a.c.d;\nreturn msg;"


@pytest.fixture()
def flows_export() -> list[dict[str, object]]:
    """A small flows export: one tab with a function node and a switch node."""
    return [
        {"id": "tab1", "type": "tab", "label": "Orders"},
        {
            "id": "fn1",
            "type": "function",
            "z": "tab1",
            "name": "Parse order",
            "func": FUNCTION_SOURCE,
            "wires": [["sw1"]],
        },
        {"id": "sw1", "type": "switch", "z": "tab1", "name": "", "wires": []},
    ]


@pytest.fixture()
def registry(flows_export: list[dict[str, object]]) -> FlowRegistry:
    return FlowRegistry.from_export(flows_export)


@pytest.fixture()
def error_record() -> dict[str, object]:
    """msg.error as raised by the function node."""
    return {
        "message": "TypeError: Cannot read properties of undefined (line 2, col 15)",
        "source": {"id": "fn1", "type": "function", "name": "Parse order", "count": 1},
    }

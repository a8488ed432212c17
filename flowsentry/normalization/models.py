from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Validity:
    """Outcome of a shape check: ok, or the first rule that failed."""

    ok: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class ErrorSource:
    """The node an error record points at."""

    id: str
    name: str | None = None
    type: str | None = None
    count: int | None = None


@dataclass(frozen=True)
class RawErrorRecord:
    """A flow error as delivered by the runtime (msg.error)."""

    message: str
    source: ErrorSource
    raw_source: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NodeContext:
    """A node resolved from the deployed flows."""

    id: str
    type: str
    name: str | None = None
    func: str | None = None
    flow_id: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "func": self.func,
            "flow": {"id": self.flow_id},
        }


@dataclass(frozen=True)
class UserIdentity:
    """End user an error is attributed to. Every field is optional."""

    id: str | None = None
    username: str | None = None
    email: str | None = None
    ip_address: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UserIdentity":
        """Keep only the identity fields that are present as non-empty strings."""
        values = {}
        for name in ("id", "username", "email", "ip_address"):
            value = payload.get(name)
            if isinstance(value, str) and value:
                values[name] = value
        return cls(**values)

    @property
    def is_empty(self) -> bool:
        return not self.as_dict()

    def as_dict(self) -> dict[str, str]:
        fields = {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "ip_address": self.ip_address,
        }
        return {k: v for k, v in fields.items() if v is not None}


@dataclass(frozen=True)
class StackFrame:
    """One line of a synthetic stack trace."""

    function: str
    filename: str
    lineno: int
    colno: int

    def render(self) -> str:
        return f"at {self.function} ({self.filename}:{self.lineno}:{self.colno})"


@dataclass(frozen=True)
class SyntheticStack:
    """Stack trace that maps flow/node coordinates instead of call frames.

    Frames are ordered innermost first: source line, node, flow.
    """

    header: str
    frames: tuple[StackFrame, ...] = ()

    @property
    def text(self) -> str:
        lines = [self.header]
        lines.extend(f"    {frame.render()}" for frame in self.frames)
        return "\n".join(lines)


@dataclass(frozen=True)
class NormalizedException:
    """Output of normalization, ready to hand to a reporting sink."""

    message: str
    error_type: str | None
    stack: SyntheticStack
    tags: dict[str, str] = field(default_factory=dict)
    extras: dict[str, object] = field(default_factory=dict)

    @property
    def stack_text(self) -> str:
        return self.stack.text

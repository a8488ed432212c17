import json
from typing import TextIO

from flowsentry.config.settings import Settings
from flowsentry.logging.logger import Log
from flowsentry.node.sentry_node import SentryNode


class Worker:
    """Message loop: read -> handle -> send, one message at a time."""

    def __init__(self, node: SentryNode, settings: Settings) -> None:
        self._node = node
        self._settings = settings

    def run(self, source: TextIO, sink: TextIO, max_messages: int | None = None) -> int:
        """Read newline-delimited JSON messages until EOF or interrupted.

        If max_messages is set, stop after handling that many messages.
        Returns the number of messages handled.
        """
        Log.info(f"Worker started ({self._settings.app_env}), waiting for messages")
        handled = 0
        try:
            for line in source:
                if max_messages is not None and handled >= max_messages:
                    break
                msg = self._parse(line)
                if msg is None:
                    continue
                self._send(sink, self._node.handle(msg))
                handled += 1
                if max_messages is not None and handled >= max_messages:
                    break
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        Log.info(f"Worker stopped after {handled} messages")
        return handled

    @staticmethod
    def _parse(line: str) -> dict[str, object] | None:
        line = line.strip()
        if not line:
            return None
        try:
            msg = json.loads(line)
        except json.JSONDecodeError as exc:
            Log.warning(f"Skipping invalid JSON message: {exc}")
            return None
        if not isinstance(msg, dict):
            Log.warning("Skipping message that is not a JSON object")
            return None
        return msg

    @staticmethod
    def _send(sink: TextIO, msg: dict[str, object]) -> None:
        sink.write(json.dumps(msg, default=str) + "\n")
        sink.flush()

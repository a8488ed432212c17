from collections.abc import Mapping
from typing import Any

from flowsentry.logging.logger import Log
from flowsentry.normalization.models import UserIdentity
from flowsentry.normalization.normalizer import ErrorNormalizer
from flowsentry.normalization.validator import (
    build_error_record,
    is_valid_error_record,
    is_valid_record,
)
from flowsentry.reporting.base import BaseReportingSink
from flowsentry.reporting.models import Breadcrumb


class SentryNode:
    """Report the error carried by one message and flag whether it was sent."""

    def __init__(self, normalizer: ErrorNormalizer, sink: BaseReportingSink) -> None:
        self._normalizer = normalizer
        self._sink = sink

    def handle(self, msg: Any) -> dict[str, Any]:
        """Process one inbound message.

        Returns a copy of the message whose payload is {"sent": bool}. Never
        raises: failures are logged and reported as sent=False.
        """
        if not isinstance(msg, Mapping):
            Log.warning(f"Ignoring non-object message of type {type(msg).__name__}")
            return {"payload": {"sent": False}}

        sent = False
        try:
            self._apply_config(msg.get("sentry"))
            sent = self._report(msg.get("error"), msg.get("_error"))
        except Exception as exc:
            Log.exception(f"Failed to report flow error: {exc}")
            sent = False

        out = dict(msg)
        out["payload"] = {"sent": sent}
        return out

    def _apply_config(self, config: Any) -> None:
        if not is_valid_record(config) or not is_valid_record(config.get("user")):
            return
        identity = UserIdentity.from_payload(config["user"])
        if identity.is_empty:
            Log.debug("sentry.user has no identity fields, scope user left unchanged")
            return
        self._sink.set_user(identity)

    def _report(self, error: Any, previous_error: Any) -> bool:
        if not is_valid_error_record(error):
            return False
        record = build_error_record(error)
        normalized = self._normalizer.normalize(record)
        if is_valid_error_record(previous_error):
            # TODO: confirm whether the breadcrumb should describe msg._error rather than msg.error
            self._sink.add_breadcrumb(Breadcrumb.previous_error(normalized))
        event_id = self._sink.capture(normalized)
        Log.info(f"Reported error from node {record.source.id!r} (event {event_id})")
        return True

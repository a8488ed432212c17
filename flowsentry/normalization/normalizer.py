"""Turns runtime flow errors into groupable, reportable exceptions."""

import json
from collections.abc import Mapping
from typing import Any

from flowsentry.logging.logger import Log
from flowsentry.normalization.models import (
    NodeContext,
    NormalizedException,
    RawErrorRecord,
    SyntheticStack,
)
from flowsentry.normalization.parser import extract_error_type, source_label
from flowsentry.normalization.stack import NodeLookup, StackTraceBuilder
from flowsentry.normalization.validator import build_error_record

# Always reported as unhandled, whatever the flow did with the error.
HANDLED_TAG_VALUE = "false"


class ErrorNormalizer:
    """Normalizes flow error records. Stateless apart from the node lookup."""

    def __init__(self, lookup: NodeLookup) -> None:
        self._stack_builder = StackTraceBuilder(lookup)

    def build_stack(self, message: str, node_id: str) -> SyntheticStack:
        """Build the synthetic stack trace for an error raised by node_id."""
        return self._stack_builder.build(message, node_id)

    def normalize(self, record: RawErrorRecord | Mapping[str, Any]) -> NormalizedException:
        """Normalize a flow error record.

        Args:
            record: a RawErrorRecord, or the raw msg.error mapping.

        Raises:
            InvalidErrorRecordError: if a raw mapping is not a valid error record.
        """
        if not isinstance(record, RawErrorRecord):
            record = build_error_record(record)

        error_type, message = extract_error_type(record.message)
        context = self._stack_builder.resolve(record.source.id)
        stack = self._stack_builder.build_for_context(
            record.message, record.source.id, context
        )
        Log.debug(f"Normalized error from node {record.source.id!r}: {error_type or 'Error'}")

        return NormalizedException(
            message=message,
            error_type=error_type,
            stack=stack,
            tags=self._build_tags(record, error_type),
            extras=self._build_extras(record, context, stack),
        )

    @staticmethod
    def _build_tags(record: RawErrorRecord, error_type: str | None) -> dict[str, str]:
        tags: dict[str, str] = {}
        if error_type:
            tags["error_type"] = error_type
        tags["source_node"] = source_label(record.source)
        tags["handled"] = HANDLED_TAG_VALUE
        return tags

    @staticmethod
    def _build_extras(
        record: RawErrorRecord,
        context: NodeContext | None,
        stack: SyntheticStack,
    ) -> dict[str, object]:
        extras: dict[str, object] = {
            "source.id": record.source.id,
            "source.name": record.source.name,
            "source.type": record.source.type,
            "source.count": record.source.count,
            "source": json.dumps(dict(record.raw_source), sort_keys=True, default=str),
        }
        if context is not None:
            extras["node"] = json.dumps(context.to_dict(), sort_keys=True)
        extras["stack"] = stack.text
        return extras

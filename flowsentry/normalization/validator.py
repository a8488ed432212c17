"""Shape checks for inbound flow messages and error records."""

from collections.abc import Mapping
from typing import Any

from flowsentry.normalization.exceptions import InvalidErrorRecordError
from flowsentry.normalization.models import ErrorSource, RawErrorRecord, Validity


def check_record(value: Any) -> Validity:
    """Check that value is a mapping with at least one key."""
    if not isinstance(value, Mapping):
        return Validity(False, "not an object")
    if not value:
        return Validity(False, "empty object")
    return Validity(True)


def is_valid_record(value: Any) -> bool:
    return check_record(value).ok


def check_error_record(value: Any) -> Validity:
    """Check that value looks like a runtime error record.

    The record must be a mapping whose 'message' is a string and whose
    'source' is a mapping. An empty source is accepted.
    """
    if not isinstance(value, Mapping):
        return Validity(False, "not an object")
    if not isinstance(value.get("message"), str):
        return Validity(False, "'message' must be a string")
    if not isinstance(value.get("source"), Mapping):
        return Validity(False, "'source' must be an object")
    return Validity(True)


def is_valid_error_record(value: Any) -> bool:
    return check_error_record(value).ok


def build_error_record(value: Any) -> RawErrorRecord:
    """Validate value and build a RawErrorRecord.

    Raises:
        InvalidErrorRecordError: if value is not a valid error record.
    """
    validity = check_error_record(value)
    if not validity.ok:
        raise InvalidErrorRecordError(f"Invalid error record: {validity.reason}")
    raw_source = value["source"]
    return RawErrorRecord(
        message=value["message"],
        source=_build_source(raw_source),
        raw_source=dict(raw_source),
    )


def _build_source(raw: Mapping[str, Any]) -> ErrorSource:
    node_id = raw.get("id")
    name = raw.get("name")
    node_type = raw.get("type")
    count = raw.get("count")
    return ErrorSource(
        id="" if node_id is None else str(node_id),
        name=name if isinstance(name, str) else None,
        type=node_type if isinstance(node_type, str) else None,
        count=count if isinstance(count, int) and not isinstance(count, bool) else None,
    )

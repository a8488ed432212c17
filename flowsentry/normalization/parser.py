"""Plain pattern matching over runtime error messages."""

import re

from flowsentry.normalization.models import ErrorSource

_ERROR_TYPE_PATTERN = re.compile(r"^(\w+Error): ")
_POSITION_PATTERN = re.compile(r"line (\d+), col (\d+)", re.IGNORECASE)


def extract_error_type(message: str) -> tuple[str | None, str]:
    """Split a leading 'SomeError: ' prefix off the message.

    Returns:
        (error_type, cleaned_message). error_type is None and the message is
        returned unchanged when there is no prefix.
    """
    match = _ERROR_TYPE_PATTERN.match(message)
    if match is None:
        return None, message
    return match.group(1), message[match.end():]


def source_label(source: ErrorSource) -> str:
    """Display label of the node that raised the error."""
    if source.name:
        return f"({source.name})"
    # trailing space kept: existing issue groupings depend on it
    return f"{source.id} "


def extract_position(message: str) -> tuple[int, int]:
    """Find 'line N, col M' in the message; (0, 0) when absent."""
    match = _POSITION_PATTERN.search(message)
    if match is None:
        return 0, 0
    return int(match.group(1)), int(match.group(2))


def select_source_line(func: str | None, line: int) -> str:
    """Return the 1-based line of the node source, or "" on any miss."""
    if not func or line < 1:
        return ""
    try:
        return func.split("\n")[line - 1]
    except (IndexError, AttributeError, TypeError):
        return ""

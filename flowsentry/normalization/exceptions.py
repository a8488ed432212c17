class NormalizationError(Exception):
    """Raised when a flow error cannot be normalized."""


class InvalidErrorRecordError(NormalizationError):
    """Raised when a value does not have the shape of a flow error record."""

from flowsentry.normalization.models import NormalizedException, RawErrorRecord, UserIdentity
from flowsentry.normalization.normalizer import ErrorNormalizer
from flowsentry.normalization.validator import is_valid_error_record, is_valid_record

__all__ = [
    "ErrorNormalizer",
    "NormalizedException",
    "RawErrorRecord",
    "UserIdentity",
    "is_valid_error_record",
    "is_valid_record",
]

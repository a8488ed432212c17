from dataclasses import dataclass

from flowsentry.normalization.models import NormalizedException


@dataclass(frozen=True)
class Breadcrumb:
    """A contextual event recorded on the reporting scope."""

    category: str
    message: str
    type: str = "default"
    level: str = "info"

    @classmethod
    def previous_error(cls, normalized: NormalizedException) -> "Breadcrumb":
        return cls(
            category="previous_error",
            message=normalized.message,
            type="error",
            level="error",
        )

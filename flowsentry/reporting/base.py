from abc import ABC, abstractmethod

from flowsentry.normalization.models import NormalizedException, UserIdentity
from flowsentry.reporting.models import Breadcrumb


class BaseReportingSink(ABC):
    """Contract for all error reporting adapters.

    The sink owns the process-wide reporting scope; callers only hand it
    what to apply.
    """

    @abstractmethod
    def set_user(self, identity: UserIdentity) -> None:
        """Attribute subsequent reports to this user."""

    @abstractmethod
    def add_breadcrumb(self, breadcrumb: Breadcrumb) -> None:
        """Record a contextual event shown alongside later reports."""

    @abstractmethod
    def capture(self, normalized: NormalizedException) -> str | None:
        """Report a normalized exception.

        Tags and extras of the exception apply to this report only.

        Returns:
            The event id assigned by the backend, if any.
        """

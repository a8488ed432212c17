"""Reporting adapter that only logs.

No network calls. Useful for local development and for running flows
without a Sentry project.
"""

from flowsentry.logging.logger import Log
from flowsentry.normalization.models import NormalizedException, UserIdentity
from flowsentry.reporting.base import BaseReportingSink
from flowsentry.reporting.models import Breadcrumb


class LogSink(BaseReportingSink):
    """Writes every report to the log and remembers what it saw."""

    def __init__(self) -> None:
        self.user: UserIdentity | None = None
        self.breadcrumbs: list[Breadcrumb] = []
        self.captured: list[NormalizedException] = []

    def set_user(self, identity: UserIdentity) -> None:
        self.user = identity
        Log.info(f"Reporting user set: {identity.as_dict()}")

    def add_breadcrumb(self, breadcrumb: Breadcrumb) -> None:
        self.breadcrumbs.append(breadcrumb)
        Log.info(f"Breadcrumb [{breadcrumb.category}] {breadcrumb.message}")

    def capture(self, normalized: NormalizedException) -> str | None:
        self.captured.append(normalized)
        Log.error(f"Captured flow error {normalized.tags}:\n{normalized.stack_text}")
        return None

import sentry_sdk

from flowsentry.config.settings import Settings
from flowsentry.logging.logger import Log
from flowsentry.normalization.models import NormalizedException, UserIdentity
from flowsentry.reporting.base import BaseReportingSink
from flowsentry.reporting.models import Breadcrumb

MECHANISM_TYPE = "flowsentry"


def init_sentry(settings: Settings) -> bool:
    """Initialize the Sentry SDK once per process. Returns False when no DSN is set."""
    if not settings.sentry_dsn:
        Log.warning("SENTRY_DSN is not set, Sentry reporting disabled")
        return False
    environment = settings.sentry_environment or "debug"
    sentry_sdk.init(dsn=settings.sentry_dsn, environment=environment)
    Log.info(f"Sentry initialized in environment: {environment}")
    return True


class SentrySink(BaseReportingSink):
    """Reporting adapter built on the Sentry SDK."""

    def set_user(self, identity: UserIdentity) -> None:
        sentry_sdk.set_user(identity.as_dict())

    def add_breadcrumb(self, breadcrumb: Breadcrumb) -> None:
        sentry_sdk.add_breadcrumb(
            category=breadcrumb.category,
            message=breadcrumb.message,
            type=breadcrumb.type,
            level=breadcrumb.level,
        )

    def capture(self, normalized: NormalizedException) -> str | None:
        with sentry_sdk.new_scope() as scope:
            for key, value in normalized.tags.items():
                scope.set_tag(key, value)
            for key, value in normalized.extras.items():
                scope.set_extra(key, value)
            return sentry_sdk.capture_event(self.build_event(normalized))

    @staticmethod
    def build_event(normalized: NormalizedException) -> dict[str, object]:
        """Build a Sentry event carrying the synthetic stack as its stacktrace."""
        # Sentry lists frames outermost first.
        frames = [
            {
                "function": frame.function,
                "filename": frame.filename,
                "abs_path": frame.filename,
                "lineno": frame.lineno,
                "colno": frame.colno,
                "in_app": True,
            }
            for frame in reversed(normalized.stack.frames)
        ]
        return {
            "level": "error",
            "exception": {
                "values": [
                    {
                        "type": normalized.error_type or "Error",
                        "value": normalized.message,
                        "mechanism": {"type": MECHANISM_TYPE, "handled": False},
                        "stacktrace": {"frames": frames},
                    }
                ]
            },
        }

from flowsentry.config.settings import Settings
from flowsentry.reporting.base import BaseReportingSink
from flowsentry.reporting.log_adapter import LogSink
from flowsentry.reporting.sentry_adapter import SentrySink


class ReportingSinkFactory:
    """Creates the reporting sink named in settings."""

    ADAPTERS: dict[str, type[BaseReportingSink]] = {
        "sentry": SentrySink,
        "log": LogSink,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseReportingSink:
        name = settings.reporting_sink.lower()
        adapter_cls = cls.ADAPTERS.get(name)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown reporting sink '{name}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

import sys

from flowsentry.config.settings import Settings
from flowsentry.flows.registry import FlowRegistry
from flowsentry.logging.logger import Log
from flowsentry.node.sentry_node import SentryNode
from flowsentry.normalization.normalizer import ErrorNormalizer
from flowsentry.reporting.factory import ReportingSinkFactory
from flowsentry.reporting.sentry_adapter import init_sentry
from flowsentry.worker.worker import Worker


def build_node(settings: Settings) -> SentryNode:
    """Wire the node lookup, normalizer and reporting sink."""
    if settings.flows_file:
        registry = FlowRegistry.from_file(settings.flows_file)
    else:
        Log.warning("FLOWS_FILE is not set, stack traces will use placeholders")
        registry = FlowRegistry.empty()
    normalizer = ErrorNormalizer(registry.resolve)
    sink = ReportingSinkFactory.create(settings)
    return SentryNode(normalizer, sink)


def main() -> None:
    """Entry point: configure -> init Sentry -> build node -> process stdin."""
    settings = Settings()
    Log.configure(settings.log_level)
    if settings.reporting_sink.lower() == "sentry":
        init_sentry(settings)

    worker = Worker(build_node(settings), settings)
    worker.run(sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()

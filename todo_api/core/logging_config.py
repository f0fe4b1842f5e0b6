"""Logging setup: one stream handler, every record tagged with the correlation id."""

import logging

from todo_api.core.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(correlation_id)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


class CorrelationIdFilter(logging.Filter):
    """Attach the current request's correlation id ('-' outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Install the app handler on the root logger. Safe to call more than once."""
    root = logging.getLogger()
    for handler in root.handlers:
        if getattr(handler, "_todo_api", False):
            break
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        handler.addFilter(CorrelationIdFilter())
        handler._todo_api = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level)

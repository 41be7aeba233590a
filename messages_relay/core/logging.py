import logging
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar

NOISY_HTTP_LOGGERS = (
    "httpx",
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
)

# Request-scoped correlation id (async-safe, one value per task)
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def mask_secret(value: str | None) -> str:
    """Render a credential for logs without revealing it."""
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "***"
    return f"{value[:6]}..."


def set_noisy_http_logger_levels(current_log_level: str) -> None:
    """Ensure HTTP client noise only surfaces at DEBUG level."""

    noisy_level = logging.DEBUG if current_log_level.upper() == "DEBUG" else logging.WARNING
    for logger_name in NOISY_HTTP_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


@contextmanager
def request_id_context(request_id: str) -> Generator[None, None, None]:
    """Tag every log record emitted inside the block with ``request_id``."""
    token = _request_id.set(request_id)
    try:
        yield
    finally:
        _request_id.reset(token)


def current_request_id() -> str | None:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Copy the active request id onto log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = _request_id.get()
        if request_id is not None:
            record.correlation_id = request_id
        return True


class CorrelationFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        # Add correlation ID if available
        if hasattr(record, "correlation_id"):
            record.msg = f"[{record.correlation_id[:8]}] {record.msg}"
        return super().format(record)


class HttpRequestLogDowngradeFilter(logging.Filter):
    """Downgrade noisy third-party HTTP logs to DEBUG."""

    def __init__(self, *prefixes: str) -> None:
        super().__init__()
        self.prefixes = prefixes

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno == logging.INFO:
            for prefix in self.prefixes:
                if record.name.startswith(prefix):
                    record.levelno = logging.DEBUG
                    record.levelname = logging.getLevelName(logging.DEBUG)
                    break
        return True


def configure_root_logging(log_level: str) -> None:
    """Install the relay's single stream handler on the root logger."""
    level_name = log_level.upper()
    if level_name not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_name = "INFO"

    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.addFilter(HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS))
    handler.setFormatter(
        CorrelationFormatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level_name))

    # Configure uvicorn to be quieter
    for uvicorn_logger in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logging.getLogger(uvicorn_logger).setLevel(logging.WARNING)

    set_noisy_http_logger_levels(level_name)
    logging.getLogger(__name__).debug(f"Logging configured at {level_name}")

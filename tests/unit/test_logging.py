import logging
from io import StringIO

import pytest

from messages_relay.core.logging import (
    NOISY_HTTP_LOGGERS,
    CorrelationFormatter,
    HttpRequestLogDowngradeFilter,
    RequestIdFilter,
    configure_root_logging,
    current_request_id,
    mask_secret,
    request_id_context,
    set_noisy_http_logger_levels,
)


class TestHttpRequestLogDowngradeFilter:
    def setup_method(self) -> None:
        self.stream = StringIO()
        self.handler = logging.StreamHandler(self.stream)
        self.handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))
        self.handler.addFilter(HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS))

    def _emit(self, logger_name: str, level: int, message: str) -> str:
        logger = logging.getLogger(logger_name)
        logger.handlers = [self.handler]
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.log(level, message)
        self.handler.flush()
        output = self.stream.getvalue()
        self.stream.truncate(0)
        self.stream.seek(0)
        return output

    def test_downgrades_noisy_http_info_logs(self):
        output = self._emit("httpx._client", logging.INFO, "HTTP Request: POST")
        assert output.startswith("DEBUG:HTTP Request: POST")

    def test_preserves_non_noisy_info_logs(self):
        output = self._emit("messages_relay.test", logging.INFO, "Important info message")
        assert output.startswith("INFO:Important info message")


class TestNoisyHttpLoggerLevelSetter:
    def test_sets_warning_by_default(self):
        set_noisy_http_logger_levels("INFO")
        for name in NOISY_HTTP_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_stays_debug_when_global_debug(self):
        set_noisy_http_logger_levels("debug")
        for name in NOISY_HTTP_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG


class TestCorrelation:
    def _record(self) -> logging.LogRecord:
        return logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="hello",
            args=(),
            exc_info=None,
        )

    def test_formatter_adds_correlation_id(self):
        record = self._record()
        record.correlation_id = "1234567890"

        assert CorrelationFormatter("%(message)s").format(record).startswith("[12345678] hello")

    def test_filter_copies_request_id_inside_context(self):
        record = self._record()
        with request_id_context("abcdef0123456789"):
            assert current_request_id() == "abcdef0123456789"
            RequestIdFilter().filter(record)

        assert record.correlation_id == "abcdef0123456789"
        assert current_request_id() is None

    def test_filter_leaves_record_alone_outside_context(self):
        record = self._record()
        RequestIdFilter().filter(record)
        assert not hasattr(record, "correlation_id")


class TestMaskSecret:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "(not set)"),
            ("", "(not set)"),
            ("short", "***"),
            ("sk-ant-api03-secret", "sk-ant..."),
        ],
    )
    def test_mask(self, value, expected):
        assert mask_secret(value) == expected


class TestConfigureRootLogging:
    def teardown_method(self) -> None:
        root = logging.getLogger()
        root.handlers = [h for h in root.handlers if not isinstance(h.formatter, CorrelationFormatter)]
        root.setLevel(logging.WARNING)

    def test_installs_single_handler(self):
        configure_root_logging("info")
        configure_root_logging("info")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, CorrelationFormatter)
        assert logging.getLogger("uvicorn").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        configure_root_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_debug_level(self):
        configure_root_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.DEBUG

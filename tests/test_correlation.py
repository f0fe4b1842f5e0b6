"""Correlation id: X-Request-ID header, error bodies, and the logging filter."""

import logging
import unittest

from api_case import ApiTestCase

from todo_api.core.correlation import REQUEST_ID_HEADER, get_correlation_id
from todo_api.core.logging_config import CorrelationIdFilter, configure_logging


class _CaptureHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


class TestCorrelationHeader(ApiTestCase):
    def test_generated_when_absent(self) -> None:
        first = self.client.get("/api/health/")
        second = self.client.get("/api/health/")
        self.assertEqual(first.status_code, 200)
        first_id = first.headers.get(REQUEST_ID_HEADER)
        self.assertTrue(first_id)
        self.assertNotEqual(first_id, second.headers.get(REQUEST_ID_HEADER))

    def test_incoming_id_is_echoed(self) -> None:
        response = self.client.get("/api/health/", headers={REQUEST_ID_HEADER: "trace-abc-123"})
        self.assertEqual(response.headers.get(REQUEST_ID_HEADER), "trace-abc-123")

    def test_oversized_incoming_id_replaced(self) -> None:
        response = self.client.get("/api/health/", headers={REQUEST_ID_HEADER: "x" * 500})
        self.assertNotEqual(response.headers.get(REQUEST_ID_HEADER), "x" * 500)

    def test_error_body_carries_id(self) -> None:
        response = self.client.get("/api/auth/profile", headers={REQUEST_ID_HEADER: "trace-401"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["correlationId"], "trace-401")
        self.assertEqual(response.headers.get(REQUEST_ID_HEADER), "trace-401")

    def test_middleware_logs_request_and_response(self) -> None:
        with self.assertLogs("todo_api.core.correlation", level="INFO") as logs:
            self.client.get("/api/health/", headers={REQUEST_ID_HEADER: "trace-log"})
        self.assertEqual(len(logs.records), 2)
        self.assertIn("Request received", logs.records[0].getMessage())
        self.assertIn("Response sent with status 200", logs.records[1].getMessage())

    def test_guard_rejection_log_carries_request_id(self) -> None:
        capture = _CaptureHandler()
        capture.addFilter(CorrelationIdFilter())
        guard_logger = logging.getLogger("todo_api.services.guard")
        guard_logger.addHandler(capture)
        self.addCleanup(guard_logger.removeHandler, capture)

        response = self.client.get("/api/auth/profile", headers={REQUEST_ID_HEADER: "trace-log"})

        self.assertEqual(response.status_code, 401)
        rejections = [r for r in capture.records if "Authorization header" in r.getMessage()]
        self.assertEqual(len(rejections), 1)
        self.assertEqual(rejections[0].correlation_id, "trace-log")

    def test_context_cleared_after_request(self) -> None:
        self.client.get("/api/health/", headers={REQUEST_ID_HEADER: "trace-leak"})
        self.assertIsNone(get_correlation_id())


class TestCorrelationIdFilter(unittest.TestCase):
    def make_record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_outside_request_uses_dash(self) -> None:
        record = self.make_record()
        self.assertTrue(CorrelationIdFilter().filter(record))
        self.assertEqual(record.correlation_id, "-")

    def test_preset_id_kept(self) -> None:
        record = self.make_record(correlation_id="abc")
        CorrelationIdFilter().filter(record)
        self.assertEqual(record.correlation_id, "abc")


class TestConfigureLogging(unittest.TestCase):
    def setUp(self) -> None:
        self.root = logging.getLogger()
        self.saved_level = self.root.level
        self.saved_handlers = list(self.root.handlers)

    def tearDown(self) -> None:
        for handler in list(self.root.handlers):
            if handler not in self.saved_handlers:
                self.root.removeHandler(handler)
        self.root.setLevel(self.saved_level)

    def test_installs_one_filtered_handler(self) -> None:
        configure_logging("DEBUG")
        configure_logging("DEBUG")
        installed = [h for h in self.root.handlers if getattr(h, "_todo_api", False)]
        self.assertEqual(len(installed), 1)
        self.assertTrue(any(isinstance(f, CorrelationIdFilter) for f in installed[0].filters))
        self.assertIn("[%(correlation_id)s]", installed[0].formatter._fmt)
        self.assertEqual(self.root.level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()

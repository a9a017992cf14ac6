"""Tests for error tracking and error decorators."""

import unittest
from datetime import datetime, timedelta
from unittest.mock import patch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint.services.error_handler import (
    ErrorHandler, ErrorSeverity, ComponentStatus, with_error_handling
)
from catpoint.services.error_decorators import retry_on_error, log_execution_time


class TestErrorHandler(unittest.TestCase):
    """Test error handler functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler(max_error_history=5)

    def test_initialization(self):
        self.assertEqual(len(self.error_handler.error_history), 0)
        self.assertEqual(self.error_handler.get_component_health(), {})
        self.assertFalse(self.error_handler.is_system_degraded())

    def test_component_registration(self):
        self.error_handler.register_component("repository")

        self.assertEqual(self.error_handler.get_component_health(),
                         {"repository": ComponentStatus.HEALTHY})
        self.assertEqual(self.error_handler.get_error_stats()["component_error_counts"],
                         {"repository": 0})

    def test_handle_error_updates_status(self):
        """Severity decides the component status."""
        self.error_handler.register_component("repository")
        self.error_handler.register_component("image_service")

        self.error_handler.handle_error("repository", ValueError("low"), ErrorSeverity.LOW)
        self.assertEqual(self.error_handler.get_component_health()["repository"],
                         ComponentStatus.HEALTHY)

        self.error_handler.handle_error("repository", ValueError("high"), ErrorSeverity.HIGH)
        self.assertEqual(self.error_handler.get_component_health()["repository"],
                         ComponentStatus.DEGRADED)

        record = self.error_handler.handle_error("image_service", RuntimeError("down"),
                                                 ErrorSeverity.CRITICAL)
        self.assertEqual(record.error_type, "RuntimeError")
        self.assertEqual(self.error_handler.get_component_health()["image_service"],
                         ComponentStatus.FAILED)
        self.assertTrue(self.error_handler.is_system_degraded())

        stats = self.error_handler.get_error_stats()
        self.assertEqual(stats["total_errors"], 3)
        self.assertEqual(stats["component_error_counts"]["repository"], 2)

    def test_error_history_is_bounded(self):
        for i in range(8):
            self.error_handler.handle_error("repository", ValueError(str(i)))

        self.assertEqual(len(self.error_handler.error_history), 5)
        self.assertEqual(str(self.error_handler.error_history[0].error), "3")
        self.assertEqual(self.error_handler.get_error_stats()["component_error_counts"]["repository"], 8)

    def test_reset_error_counts(self):
        self.error_handler.handle_error("repository", ValueError("x"), ErrorSeverity.CRITICAL)

        self.error_handler.reset_error_counts("repository")

        self.assertEqual(self.error_handler.get_component_health()["repository"],
                         ComponentStatus.HEALTHY)
        self.assertFalse(self.error_handler.is_system_degraded())

    def test_error_summary(self):
        self.error_handler.handle_error("repository", ValueError("old"), ErrorSeverity.HIGH)
        self.error_handler.error_history[0].timestamp = datetime.now() - timedelta(hours=30)
        self.error_handler.handle_error("web_app", ValueError("new"), ErrorSeverity.MEDIUM)

        summary = self.error_handler.get_error_summary(hours=24)

        self.assertEqual(summary["total_errors"], 1)
        self.assertEqual(summary["component_counts"], {"web_app": 1})
        self.assertEqual(summary["severity_counts"]["medium"], 1)
        self.assertEqual(summary["severity_counts"]["high"], 0)

    def test_clear_error_history(self):
        self.error_handler.handle_error("repository", ValueError("x"))
        self.error_handler.clear_error_history()
        self.assertEqual(self.error_handler.error_history, [])


class TestWithErrorHandling(unittest.TestCase):
    """Test the error handling decorator."""

    def setUp(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()

    def test_non_critical_error_returns_none(self):
        @with_error_handling("component", error_handler=self.error_handler)
        def failing():
            raise ValueError("boom")

        self.assertIsNone(failing())
        self.assertEqual(len(self.error_handler.error_history), 1)

    def test_reraise(self):
        error = ValueError("boom")

        @with_error_handling("component", reraise=True, error_handler=self.error_handler)
        def failing():
            raise error

        with self.assertRaises(ValueError) as ctx:
            failing()
        self.assertIs(ctx.exception, error)

    def test_critical_errors_reraised(self):
        @with_error_handling("component", ErrorSeverity.CRITICAL, error_handler=self.error_handler)
        def failing():
            raise RuntimeError("fatal")

        with self.assertRaises(RuntimeError):
            failing()

    def test_nested_calls_record_once(self):
        @with_error_handling("inner", reraise=True, error_handler=self.error_handler)
        def inner():
            raise ValueError("boom")

        @with_error_handling("outer", reraise=True, error_handler=self.error_handler)
        def outer():
            inner()

        with self.assertRaises(ValueError):
            outer()

        self.assertEqual(len(self.error_handler.error_history), 1)
        self.assertEqual(self.error_handler.error_history[0].component_name, "inner")

    def test_success_passes_result_through(self):
        @with_error_handling("component", error_handler=self.error_handler)
        def working(value):
            return value * 2

        self.assertEqual(working(21), 42)
        self.assertEqual(self.error_handler.error_history, [])


class TestRetryOnError(unittest.TestCase):
    """Test the retry decorator."""

    @patch('catpoint.services.error_decorators.time.sleep')
    def test_retries_until_success(self, mock_sleep):
        outcomes = [OSError("busy"), OSError("busy"), "ok"]

        @retry_on_error(max_attempts=3, delay=1.0, backoff_factor=2.0)
        def flaky():
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        self.assertEqual(flaky(), "ok")
        self.assertEqual(outcomes, [])
        self.assertEqual([c.args[0] for c in mock_sleep.call_args_list], [1.0, 2.0])

    @patch('catpoint.services.error_decorators.time.sleep')
    def test_raises_last_error(self, mock_sleep):
        @retry_on_error(max_attempts=2, delay=0.0)
        def always_fails():
            raise OSError("busy")

        with self.assertRaises(OSError):
            always_fails()
        self.assertEqual(mock_sleep.call_count, 1)

    @patch('catpoint.services.error_decorators.time.sleep')
    def test_other_exceptions_not_retried(self, mock_sleep):
        calls = []

        @retry_on_error(max_attempts=3, exceptions=(OSError,))
        def wrong_type():
            calls.append(1)
            raise KeyError("nope")

        with self.assertRaises(KeyError):
            wrong_type()
        self.assertEqual(len(calls), 1)
        mock_sleep.assert_not_called()


class TestLogExecutionTime(unittest.TestCase):
    """Test the timing decorator."""

    def test_logs_and_returns_result(self):
        @log_execution_time("timing_test")
        def work():
            return "done"

        with self.assertLogs("catpoint.timing_test", level="DEBUG") as logs:
            self.assertEqual(work(), "done")

        self.assertIn("Function work executed in", logs.output[0])


if __name__ == '__main__':
    unittest.main()

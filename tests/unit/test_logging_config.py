"""Unit tests for numlib logging configuration."""

from __future__ import annotations

import json
import logging
import math
import os
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from unittest import mock

import pytest

import numlib
from numlib.logging_config import (
    LOGGER_NAME,
    JsonFormatter,
    _clear_handlers,
    _get_level,
    _get_logger,
)
from numlib.numerics.root_finding import ConvergenceError


def flush_handlers():
    for handler in _get_logger().handlers:
        handler.flush()


class TestSilentByDefault:
    """The library produces no output unless asked to."""

    def test_integration_produces_no_output(self, capfd):
        numlib.integrate_romberg(0, 1, 4, math.exp)
        numlib.integrate_gauss_legendre(0, 1, 4, math.exp)

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_logger_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


class TestEnableConsoleLogging:
    """Tests for enable_console_logging."""

    def test_sets_level_and_adds_handler(self):
        handler = numlib.enable_console_logging(level="DEBUG")

        assert isinstance(handler, logging.StreamHandler)
        assert handler in _get_logger().handlers
        assert _get_logger().level == logging.DEBUG

    def test_integrators_log_at_debug(self, capfd):
        numlib.enable_console_logging(level="DEBUG")

        numlib.integrate_simpson(0.0, 1.0, 3, math.exp)
        numlib.integrate_romberg(0.0, 1.0, 2, math.exp)

        err = capfd.readouterr().err
        assert "Simpson rule on [0.0, 1.0] with n=3" in err
        assert "Romberg integration on [0.0, 1.0] with n=2" in err

    def test_info_level_hides_debug(self, capfd):
        numlib.enable_console_logging(level="INFO")
        numlib.integrate_trapezoidal(0.0, 1.0, 3, math.exp)

        assert "Trapezoidal" not in capfd.readouterr().err

    def test_custom_format(self, capfd):
        numlib.enable_console_logging(level="INFO", format="[QUAD] %(message)s")
        logging.getLogger(f"{LOGGER_NAME}.test").info("hello")

        assert "[QUAD] hello" in capfd.readouterr().err

    def test_non_convergence_logged_as_error(self, capfd):
        numlib.enable_console_logging(level="ERROR")

        with pytest.raises(ConvergenceError):
            numlib.legendre_rule(4, tol=0.0, max_iterations=2)

        err = capfd.readouterr().err
        assert "ERROR" in err
        assert "degree 4 did not converge" in err


class TestFileLogging:
    """Tests for the file based handlers."""

    def test_rotating_file(self, tmp_path):
        log_file = tmp_path / "nested" / "quad.log"
        handler = numlib.enable_file_logging(log_file, max_bytes=1024, backup_count=3)

        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 3
        assert log_file.parent.exists()

    def test_writes_to_file(self, tmp_path):
        log_file = tmp_path / "quad.log"
        numlib.enable_file_logging(log_file, level="DEBUG")

        numlib.integrate_gauss_legendre(0.0, 2.0, 3, math.exp)
        flush_handlers()

        assert "Gauss-Legendre rule on [0.0, 2.0] with n=3" in log_file.read_text()

    def test_timed_rotating_file(self, tmp_path):
        handler = numlib.enable_timed_file_logging(tmp_path / "quad.log", when="H", interval=6)

        assert isinstance(handler, TimedRotatingFileHandler)
        assert handler.when == "H"
        assert handler.interval == 6 * 60 * 60

    def test_json_file(self, tmp_path):
        log_file = tmp_path / "quad.json"
        numlib.enable_json_file_logging(log_file, level="INFO")

        logging.getLogger(f"{LOGGER_NAME}.test").info("json file test")
        flush_handlers()

        data = json.loads(log_file.read_text().strip())
        assert data["message"] == "json file test"


class TestJsonLogging:
    """Tests for enable_json_logging and JsonFormatter."""

    def test_outputs_valid_json(self, capfd):
        numlib.enable_json_logging(level="INFO")
        logging.getLogger(f"{LOGGER_NAME}.test").info("json test")

        data = json.loads(capfd.readouterr().err.strip())
        assert data["message"] == "json test"
        assert data["level"] == "INFO"
        assert data["logger"] == f"{LOGGER_NAME}.test"
        assert "timestamp" in data

    def test_formatter_includes_exception(self):
        formatter = JsonFormatter()
        try:
            raise ConvergenceError("no root")
        except ConvergenceError:
            import sys

            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="numlib.numerics.root_finding",
            level=logging.ERROR,
            pathname="root_finding.py",
            lineno=1,
            msg="solver failed",
            args=(),
            exc_info=exc_info,
        )

        data = json.loads(formatter.format(record))
        assert data["message"] == "solver failed"
        assert "ConvergenceError" in data["exception"]


class TestConfigureFromEnv:
    """Tests for configure_from_env."""

    def test_level_from_env(self):
        with mock.patch.dict(os.environ, {"NUMLIB_LOGGING": "DEBUG"}, clear=False):
            numlib.configure_from_env()

        assert _get_logger().level == logging.DEBUG

    def test_file_from_env(self, tmp_path):
        env = {"NUMLIB_LOGGING": "INFO", "NUMLIB_LOG_FILE": str(tmp_path / "env.log")}
        with mock.patch.dict(os.environ, env, clear=False):
            numlib.configure_from_env()

        assert any(isinstance(h, RotatingFileHandler) for h in _get_logger().handlers)

    def test_json_from_env(self, capfd):
        with mock.patch.dict(os.environ, {"NUMLIB_LOGGING": "INFO", "NUMLIB_LOG_JSON": "1"}):
            numlib.configure_from_env()

        logging.getLogger(f"{LOGGER_NAME}.test").info("json env test")
        data = json.loads(capfd.readouterr().err.strip())
        assert data["message"] == "json env test"

    def test_does_nothing_without_env(self):
        initial_count = len(_get_logger().handlers)

        with mock.patch.dict(os.environ, {}, clear=True):
            numlib.configure_from_env()

        assert len(_get_logger().handlers) == initial_count


class TestLevels:
    """Tests for set_level, set_module_level and disable_logging."""

    def test_set_level(self):
        numlib.set_level("WARNING")
        assert _get_logger().level == logging.WARNING

        numlib.set_level(logging.ERROR)
        assert _get_logger().level == logging.ERROR

    def test_set_module_level(self, capfd):
        numlib.enable_console_logging(level="DEBUG")
        numlib.set_module_level("numerics.integration", "WARNING")

        numlib.integrate_simpson(0.0, 1.0, 2, math.exp)
        numlib.integrate_gauss_legendre(0.0, 1.0, 2, math.exp)

        err = capfd.readouterr().err
        assert "Simpson rule" not in err
        assert "Gauss-Legendre rule" in err

        logging.getLogger(f"{LOGGER_NAME}.numerics.integration").setLevel(logging.NOTSET)

    def test_disable_logging(self, capfd):
        numlib.enable_console_logging(level="DEBUG")
        numlib.disable_logging()

        logging.getLogger(f"{LOGGER_NAME}.test").critical("this should not appear")

        assert "this should not appear" not in capfd.readouterr().err
        non_null = [h for h in _get_logger().handlers if not isinstance(h, logging.NullHandler)]
        assert non_null == []


class TestHelperFunctions:
    """Tests for internal helpers."""

    def test_get_level(self):
        assert _get_level("DEBUG") == logging.DEBUG
        assert _get_level("info") == logging.INFO
        assert _get_level(logging.ERROR) == logging.ERROR
        assert _get_level("INVALID") == logging.INFO

    def test_clear_handlers_keeps_null_handler(self):
        numlib.enable_console_logging()
        _clear_handlers()

        handlers = _get_logger().handlers
        assert all(isinstance(h, logging.NullHandler) for h in handlers)

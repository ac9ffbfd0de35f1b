"""Tests for the logging configuration helpers."""

import logging

import pytest
import structlog
from ordering.utils.logging import LogSettings, get_log_level, setup_stdlib_logging, setup_structlog


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ("LOG_LEVEL", "ENVIRONMENT", "PROTEAN_ENV", "LOG_DIR", "LOG_MAX_BYTES", "LOG_BACKUP_COUNT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture()
def restore_structlog():
    saved = structlog.get_config()
    yield
    structlog.configure(**saved)


class TestGetLogLevel:
    def test_development_default(self, clean_env):
        assert get_log_level() == "DEBUG"

    @pytest.mark.parametrize(
        "environment, level",
        [("production", "INFO"), ("staging", "INFO"), ("test", "WARNING"), ("other", "INFO")],
    )
    def test_level_from_environment(self, clean_env, environment, level):
        clean_env.setenv("ENVIRONMENT", environment)
        assert get_log_level() == level

    def test_protean_env_used_as_fallback(self, clean_env):
        clean_env.setenv("PROTEAN_ENV", "test")
        assert get_log_level() == "WARNING"

    def test_explicit_level_wins(self, clean_env):
        clean_env.setenv("ENVIRONMENT", "production")
        clean_env.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"


class TestStdlibLogging:
    def test_handlers_and_files(self, clean_env, restore_root_logger, tmp_path):
        clean_env.setenv("LOG_LEVEL", "INFO")
        setup_stdlib_logging(tmp_path / "logs")

        root = logging.getLogger()
        assert len(root.handlers) == 3
        assert root.level == logging.INFO
        assert (tmp_path / "logs" / "ordering.log").exists()
        assert (tmp_path / "logs" / "ordering_error.log").exists()
        assert logging.getLogger("protean").level == logging.WARNING
        assert [h.level for h in root.handlers] == [logging.INFO, logging.INFO, logging.ERROR]

    def test_rotation_from_environment(self, clean_env, restore_root_logger, tmp_path):
        clean_env.setenv("LOG_MAX_BYTES", "2048")
        clean_env.setenv("LOG_BACKUP_COUNT", "2")
        setup_stdlib_logging(tmp_path)

        error_handler = logging.getLogger().handlers[-1]
        assert error_handler.maxBytes == 2048
        assert error_handler.backupCount == 2


class TestLogSettings:
    def test_log_dir_from_environment(self, clean_env, tmp_path):
        clean_env.setenv("LOG_DIR", str(tmp_path / "custom"))
        assert LogSettings.from_env().log_dir == tmp_path / "custom"

    def test_explicit_log_dir_wins(self, clean_env, tmp_path):
        clean_env.setenv("LOG_DIR", "elsewhere")
        assert LogSettings.from_env(tmp_path).log_dir == tmp_path

    @pytest.mark.parametrize(
        "environment, json_output",
        [("production", True), ("staging", True), ("development", False), ("test", False)],
    )
    def test_json_output_by_environment(self, clean_env, environment, json_output):
        clean_env.setenv("ENVIRONMENT", environment)
        assert LogSettings.from_env().json_output is json_output


class TestStructlog:
    def test_json_renderer(self, restore_structlog):
        setup_structlog(json_output=True)
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self, restore_structlog):
        setup_structlog(json_output=False)
        assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)

    def test_renderer_follows_environment(self, clean_env, restore_structlog):
        clean_env.setenv("PROTEAN_ENV", "production")
        setup_structlog()
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)

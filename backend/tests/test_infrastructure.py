import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from config.database_config import DatabaseSettings, load_database_settings
from constants import LoggingDefaults
from database import session_scope
from main import create_app
from exceptions import ConfigurationError, ValidationError
from utils import logging_utils
from utils.logging_utils import (
    clear_logging_context,
    configure_logging,
    log_operation,
    set_logging_context,
)


class TestDatabaseSettings:
    def test_defaults(self):
        settings = load_database_settings({})
        assert settings.database_url.startswith("sqlite:///")
        assert settings.database_url.endswith("vehicle_ownership.db")
        assert settings.echo is False
        assert settings.busy_timeout_ms == 5000
        assert settings.pool_pre_ping is True
        assert settings.log_dir == Path("logs")
        assert settings.log_level == "INFO"

    def test_values_from_environment(self):
        settings = load_database_settings({
            "OWNERSHIP_DATABASE_URL": "postgresql://db/ownership",
            "OWNERSHIP_DB_ECHO": "yes",
            "OWNERSHIP_DB_BUSY_TIMEOUT_MS": "250",
            "OWNERSHIP_DB_POOL_PRE_PING": "false",
            "OWNERSHIP_LOG_DIR": "/var/log/ownership",
            "OWNERSHIP_LOG_LEVEL": "debug",
        })
        assert settings.database_url == "postgresql://db/ownership"
        assert settings.echo is True
        assert settings.busy_timeout_ms == 250
        assert settings.pool_pre_ping is False
        assert settings.log_dir == Path("/var/log/ownership")
        assert settings.log_level == "DEBUG"
        assert not settings.is_sqlite

    @pytest.mark.parametrize("raw", ["soon", "-1"])
    def test_invalid_busy_timeout(self, raw):
        with pytest.raises(ConfigurationError) as exc_info:
            load_database_settings({"OWNERSHIP_DB_BUSY_TIMEOUT_MS": raw})
        assert exc_info.value.details["invalid_keys"] == ["OWNERSHIP_DB_BUSY_TIMEOUT_MS"]

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError):
            load_database_settings({"OWNERSHIP_LOG_LEVEL": "LOUD"})

    @pytest.mark.parametrize("url,in_memory", [
        ("sqlite://", True),
        ("sqlite:///:memory:", True),
        ("sqlite:///ownership.db", False),
        ("postgresql://db/ownership", False),
    ])
    def test_in_memory_detection(self, url, in_memory):
        assert DatabaseSettings(database_url=url).is_in_memory is in_memory


class TestSessionScope:
    def test_commits_and_closes(self):
        session = MagicMock()
        with session_scope(lambda: session) as db:
            assert db is session
        session.commit.assert_called_once()
        session.rollback.assert_not_called()
        session.close.assert_called_once()

    def test_rolls_back_and_closes_on_error(self):
        session = MagicMock()
        with pytest.raises(RuntimeError):
            with session_scope(lambda: session):
                raise RuntimeError("boom")
        session.commit.assert_not_called()
        session.rollback.assert_called_once()
        session.close.assert_called_once()


class TestForeignKeys:
    def test_sqlite_enforces_foreign_keys(self, engine):
        with engine.connect() as connection:
            assert connection.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1


@pytest.fixture
def restore_root_logger():
    """Remove handlers installed by configure_logging after the test"""
    root = logging.getLogger()
    level = root.level
    yield root
    while logging_utils._installed_handlers:
        handler = logging_utils._installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


class TestLogging:
    def test_configure_logging_creates_log_file(self, tmp_path, restore_root_logger):
        root = configure_logging(tmp_path / "logs", "WARNING")
        logging.getLogger("ownership.test").warning("written to file")
        for handler in root.handlers:
            handler.flush()
        log_file = tmp_path / "logs" / LoggingDefaults.FILE_NAME
        assert log_file.exists()
        assert "written to file" in log_file.read_text(encoding="utf-8")
        assert root.level == logging.WARNING

    def test_reconfiguring_replaces_handlers(self, tmp_path, restore_root_logger):
        root = configure_logging(tmp_path, "INFO")
        count = len(root.handlers)
        configure_logging(tmp_path, "INFO")
        assert len(root.handlers) == count

    def test_log_operation_records_key(self, caplog):
        @log_operation("delete")
        def delete(owner_id, vehicle_id):
            return True

        with caplog.at_level(logging.DEBUG):
            assert delete(3, 7) is True

        completed = [r for r in caplog.records if r.getMessage() == "Completed delete"]
        assert completed
        assert completed[0].owner_id == 3
        assert completed[0].vehicle_id == 7

    def test_log_operation_warns_on_rejected_input(self, caplog):
        @log_operation("add")
        def add(record):
            raise ValidationError("Ownership identifiers must be positive")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(ValidationError):
                add(None)

        rejected = [r for r in caplog.records if r.getMessage().startswith("Rejected add")]
        assert rejected[0].levelno == logging.WARNING

    def test_log_operation_reraises_failures_as_errors(self, caplog):
        @log_operation("update")
        def update(record):
            raise RuntimeError("store down")

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(RuntimeError):
                update(None)

        failed = [r for r in caplog.records if r.getMessage() == "Failed update"]
        assert failed[0].levelno == logging.ERROR
        assert failed[0].error_type == "RuntimeError"

    def test_logging_context_is_attached(self, caplog):
        @log_operation("get")
        def get(owner_id, vehicle_id):
            return None

        set_logging_context(request_id="abc-123")
        try:
            with caplog.at_level(logging.DEBUG):
                get(1, 2)
        finally:
            clear_logging_context()

        records = [r for r in caplog.records if r.getMessage().endswith(" get")]
        assert records
        assert all(r.request_id == "abc-123" for r in records)


class TestApplicationFactory:
    def test_create_app_mounts_routes_and_configures_logging(self, tmp_path, restore_root_logger):
        settings = DatabaseSettings(database_url="sqlite://", log_dir=tmp_path / "logs")
        app = create_app(settings)

        paths = {route.path for route in app.routes}
        assert "/api/ownerships" in paths
        assert "/api/ownerships/{owner_id}/{vehicle_id}" in paths
        assert "/api/ownerships/{owner_id}/{vehicle_id}/reassign" in paths
        assert (tmp_path / "logs" / LoggingDefaults.FILE_NAME).exists()

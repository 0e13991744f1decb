"""
Database and logging configuration.

Settings are read from environment variables once, at import time of the
database module, and handed around as an immutable DatabaseSettings value.

Variables:
- OWNERSHIP_DATABASE_URL: SQLAlchemy URL of the ownership store
- OWNERSHIP_DB_ECHO: echo SQL statements ('true', '1', 'yes')
- OWNERSHIP_DB_BUSY_TIMEOUT_MS: SQLite lock wait in milliseconds
- OWNERSHIP_DB_POOL_PRE_PING: verify pooled connections before use
- OWNERSHIP_LOG_DIR / OWNERSHIP_LOG_LEVEL: rotating log file location and level
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from constants import EnvKeys
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('true', '1', 'yes')
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class DatabaseSettings:
    """Immutable connection and logging settings."""

    database_url: str
    echo: bool = False
    busy_timeout_ms: int = 5000
    pool_pre_ping: bool = True
    log_dir: Path = Path('logs')
    log_level: str = 'INFO'

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith('sqlite')

    @property
    def is_in_memory(self) -> bool:
        return self.is_sqlite and self.database_url.rstrip('/') in ('sqlite:', 'sqlite:///:memory:')


def _default_database_url() -> str:
    return f"sqlite:///{Path.cwd() / 'vehicle_ownership.db'}"


def _read_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _read_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}", [key])
    if value < 0:
        raise ConfigurationError(f"{key} must not be negative, got {value}", [key])
    return value


def load_database_settings(env: Optional[Mapping[str, str]] = None) -> DatabaseSettings:
    """
    Build settings from the environment.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        DatabaseSettings instance

    Raises:
        ConfigurationError: If a numeric value or the log level is invalid
    """
    env = os.environ if env is None else env

    log_level = env.get(EnvKeys.LOG_LEVEL, 'INFO').strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"{EnvKeys.LOG_LEVEL} must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}",
            [EnvKeys.LOG_LEVEL],
        )

    settings = DatabaseSettings(
        database_url=env.get(EnvKeys.DATABASE_URL) or _default_database_url(),
        echo=_read_flag(env, EnvKeys.DB_ECHO, False),
        busy_timeout_ms=_read_int(env, EnvKeys.DB_BUSY_TIMEOUT_MS, 5000),
        pool_pre_ping=_read_flag(env, EnvKeys.DB_POOL_PRE_PING, True),
        log_dir=Path(env.get(EnvKeys.LOG_DIR) or 'logs'),
        log_level=log_level,
    )

    logger.debug(f"Database settings loaded (sqlite={settings.is_sqlite}, echo={settings.echo})")
    return settings

"""
Application-wide constants.

This module centralizes the magic strings and numbers shared by the data
layer, the service layer and the HTTP adapter.
"""
from enum import Enum


class NameLookup(str, Enum):
    """
    Sentinels returned by reverse name lookups.

    UNKNOWN covers both an invalid id and a missing row. ERROR means the
    store could not be queried.
    """

    UNKNOWN = 'Inconnu'
    ERROR = 'Erreur'


class TableNames:
    """Relation names of the persisted schema"""

    OWNERSHIP = 'POSSEDER'
    OWNER = 'PROPRIETAIRE'
    VEHICLE = 'VEHICULE'
    VEHICLE_MODEL = 'MODELE'


class DateFormats:
    """Date formats used at the boundary (the core only handles date objects)"""

    ISO_DATE = '%Y-%m-%d'
    OPEN_END_LABEL = 'N/A'


class EnvKeys:
    """Environment variables read by the configuration layer"""

    DATABASE_URL = 'OWNERSHIP_DATABASE_URL'
    DB_ECHO = 'OWNERSHIP_DB_ECHO'
    DB_BUSY_TIMEOUT_MS = 'OWNERSHIP_DB_BUSY_TIMEOUT_MS'
    DB_POOL_PRE_PING = 'OWNERSHIP_DB_POOL_PRE_PING'
    LOG_DIR = 'OWNERSHIP_LOG_DIR'
    LOG_LEVEL = 'OWNERSHIP_LOG_LEVEL'


class LoggingDefaults:
    """Rotating log file settings"""

    FILE_NAME = 'ownership.log'
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409

    # Server Errors
    INTERNAL_SERVER_ERROR = 500


class ServerConfig:
    """Server configuration constants"""

    HOST = '127.0.0.1'
    PORT = 8000

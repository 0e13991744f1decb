"""
Configuration loaded from the environment.
"""

from .database_config import DatabaseSettings, load_database_settings

__all__ = ["DatabaseSettings", "load_database_settings"]

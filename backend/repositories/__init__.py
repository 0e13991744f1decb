"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from .base_repository import BaseRepository
from .identifier_resolver import IdentifierResolver
from .ownership_repository import OwnershipRepository

__all__ = [
    "BaseRepository",
    "IdentifierResolver",
    "OwnershipRepository",
]

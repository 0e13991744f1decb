"""
Internal DTOs

DTOs for communication within the backend. These are not exposed to
external APIs directly.
"""

from .ownership_row import OwnershipRow

__all__ = ["OwnershipRow"]

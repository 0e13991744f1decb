"""
Domain Value Objects

Value objects are immutable types compared by their values, not by identity.

- OwnershipPeriod: start/end window with range validation
"""

from .ownership_period import OwnershipPeriod

__all__ = ["OwnershipPeriod"]

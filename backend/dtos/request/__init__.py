"""
Request DTOs

DTOs for incoming API requests. Validation and date parsing happen at this
boundary.
"""

from .ownership_request import OwnershipCreateRequest, OwnershipPeriodRequest

__all__ = ["OwnershipCreateRequest", "OwnershipPeriodRequest"]

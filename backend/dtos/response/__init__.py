"""
Response DTOs

DTOs for outgoing API responses. These control exactly what data the API
returns.
"""

from .ownership_response import OwnershipListResponse, OwnershipResponse, OwnershipRowResponse

__all__ = ["OwnershipListResponse", "OwnershipResponse", "OwnershipRowResponse"]

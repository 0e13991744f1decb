"""
Domain Entities

Entities are business objects with identity and lifecycle.

- OwnershipRecord: identified by (owner_id, vehicle_id)
"""

from .ownership_record import OwnershipRecord

__all__ = ["OwnershipRecord"]

"""
Ownership Response DTOs

DTOs for ownership-related API responses.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class OwnershipResponse(BaseModel):
    """
    Response DTO for a single ownership record.
    """

    owner_id: int = Field(description="Owner ID")
    vehicle_id: int = Field(description="Vehicle ID")
    start_date: date = Field(description="First day of ownership")
    end_date: Optional[date] = Field(None, description="Day ownership ended, null if ongoing")

    class Config:
        """Pydantic configuration."""
        from_attributes = True  # Allow creation from OwnershipRecord


class OwnershipRowResponse(OwnershipResponse):
    """
    Response DTO for an ownership listed with display names.
    """

    owner_name: str = Field(description="Owner name, 'Inconnu' or 'Erreur' if it could not be resolved")
    model_name: str = Field(description="Vehicle model name, 'Inconnu' or 'Erreur' if it could not be resolved")
    end_date_label: str = Field(description="End date as YYYY-MM-DD, 'N/A' if ongoing")


class OwnershipListResponse(BaseModel):
    """
    Response DTO for a list of ownerships.
    """

    ownerships: List[OwnershipRowResponse] = Field(description="Matching ownerships")
    total_count: int = Field(description="Number of ownerships returned")

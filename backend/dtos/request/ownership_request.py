"""
Ownership Request DTOs

DTOs for ownership-related API requests. Dates arrive as ISO strings
(YYYY-MM-DD) and are parsed into date objects here, so the service layer
never sees date strings.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class OwnershipPeriodRequest(BaseModel):
    """
    Request DTO for changing the date window of an ownership.
    """

    start_date: date = Field(description="First day of ownership (YYYY-MM-DD)")
    end_date: Optional[date] = Field(None, description="Day ownership ended (YYYY-MM-DD), empty if ongoing")

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date_is_ongoing(cls, v):
        """Treat an empty end date field as an ongoing ownership."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "start_date": "2024-01-01",
                "end_date": None
            }
        }


class OwnershipCreateRequest(OwnershipPeriodRequest):
    """
    Request DTO for registering an ownership by names.

    Names are resolved to identifiers by the service.
    """

    owner_name: str = Field(description="Owner name (exact match)")
    model_name: str = Field(description="Vehicle model name (exact match)")

    @field_validator("owner_name", "model_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        """Trim names and reject blank ones."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "owner_name": "Dupont",
                "model_name": "Clio",
                "start_date": "2024-01-01",
                "end_date": "2025-06-30"
            }
        }

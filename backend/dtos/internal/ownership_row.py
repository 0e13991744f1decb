"""
Internal Ownership DTOs

DTOs passed from the ownership service to listing endpoints.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from constants import DateFormats
from domain.entities.ownership_record import OwnershipRecord


@dataclass
class OwnershipRow:
    """
    An ownership record joined with the display names of its owner and
    vehicle model. Names may be NameLookup sentinels when a lookup failed.
    """

    owner_id: int
    vehicle_id: int
    owner_name: str
    model_name: str
    start_date: date
    end_date: Optional[date] = None

    @classmethod
    def from_record(cls, record: OwnershipRecord, owner_name: str, model_name: str) -> "OwnershipRow":
        return cls(
            owner_id=record.owner_id,
            vehicle_id=record.vehicle_id,
            owner_name=owner_name,
            model_name=model_name,
            start_date=record.start_date,
            end_date=record.end_date,
        )

    @property
    def end_date_label(self) -> str:
        """End date as text, OPEN_END_LABEL when ownership is ongoing."""
        if self.end_date is None:
            return DateFormats.OPEN_END_LABEL
        return self.end_date.strftime(DateFormats.ISO_DATE)

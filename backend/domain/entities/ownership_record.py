"""
OwnershipRecord Entity

Links a person to a vehicle over a date window. The (owner_id, vehicle_id)
pair is the record's identity.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Tuple

from exceptions import ValidationError
from domain.value_objects.ownership_period import OwnershipPeriod


@dataclass(frozen=True)
class OwnershipRecord:
    """
    Ownership of a vehicle by a person.

    Identifiers are never changed on an existing record: moving a vehicle to
    another owner is a delete followed by an insert. Only the dates can be
    replaced, through with_dates().

    The constructor only rejects a missing start date. Identifier and date
    range rules are checked by OwnershipValidator before a record is written,
    so an invalid candidate can still be built and reported on.
    """

    owner_id: int
    vehicle_id: int
    start_date: date
    end_date: Optional[date] = None

    def __post_init__(self):
        if self.start_date is None:
            raise ValidationError(
                "Ownership start date is required",
                {"start_date": None},
            )

    @property
    def key(self) -> Tuple[int, int]:
        """Natural key (owner_id, vehicle_id)."""
        return (self.owner_id, self.vehicle_id)

    @property
    def period(self) -> OwnershipPeriod:
        """
        Ownership window of this record.

        Raises:
            ValidationError: If the end date is not after the start date
        """
        return OwnershipPeriod(self.start_date, self.end_date)

    @property
    def is_ongoing(self) -> bool:
        return self.end_date is None

    def with_dates(self, start_date: date, end_date: Optional[date] = None) -> "OwnershipRecord":
        """Return a copy of this record with a new date window."""
        return replace(self, start_date=start_date, end_date=end_date)

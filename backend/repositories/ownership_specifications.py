"""
Ownership Specifications

Concrete specifications for querying ownership records. Candidates are
OwnershipRecord entities; SQL filters target the Ownership model.
"""

from datetime import date

from sqlalchemy import or_

from domain.entities.ownership_record import OwnershipRecord
from models import Ownership
from .specifications import Specification


class OwnershipByOwnerSpec(Specification[OwnershipRecord]):
    """Records held by one owner."""

    def __init__(self, owner_id: int):
        self.owner_id = owner_id

    def is_satisfied_by(self, record: OwnershipRecord) -> bool:
        return record.owner_id == self.owner_id

    def to_sql_filter(self):
        return Ownership.owner_id == self.owner_id


class OwnershipByVehicleSpec(Specification[OwnershipRecord]):
    """Records of one vehicle."""

    def __init__(self, vehicle_id: int):
        self.vehicle_id = vehicle_id

    def is_satisfied_by(self, record: OwnershipRecord) -> bool:
        return record.vehicle_id == self.vehicle_id

    def to_sql_filter(self):
        return Ownership.vehicle_id == self.vehicle_id


class OwnershipActiveOnSpec(Specification[OwnershipRecord]):
    """
    Records whose window covers a given day.

    The start day is included and the end day is excluded, so a vehicle sold
    on day D belongs to its next owner from D onwards.
    """

    def __init__(self, day: date):
        self.day = day

    def is_satisfied_by(self, record: OwnershipRecord) -> bool:
        if record.start_date > self.day:
            return False
        return record.end_date is None or self.day < record.end_date

    def to_sql_filter(self):
        return (Ownership.start_date <= self.day) & or_(
            Ownership.end_date.is_(None),
            Ownership.end_date > self.day,
        )

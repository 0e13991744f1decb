"""
Ownership Validator Service

Checks ownership keys and records before any write reaches the store.
The checks need no database connection.
"""
from typing import Dict, Optional

from domain.entities.ownership_record import OwnershipRecord
from exceptions import ValidationError
import logging

logger = logging.getLogger(__name__)


def _not_positive_int(value) -> bool:
    # bool is an int subclass, True would pass as 1
    return isinstance(value, bool) or not isinstance(value, int) or value <= 0


class OwnershipValidator:
    """Validator for ownership keys and records"""

    @staticmethod
    def check_key(owner_id: int, vehicle_id: int) -> Dict[str, str]:
        """
        Collect key violations without raising.

        Args:
            owner_id: Owner identifier
            vehicle_id: Vehicle identifier

        Returns:
            Mapping of field name to violation message (empty when valid)
        """
        violations = {}
        if _not_positive_int(owner_id):
            violations['owner_id'] = f"must be a positive integer, got {owner_id!r}"
        if _not_positive_int(vehicle_id):
            violations['vehicle_id'] = f"must be a positive integer, got {vehicle_id!r}"
        return violations

    @staticmethod
    def check_record(record: Optional[OwnershipRecord]) -> Dict[str, str]:
        """
        Collect record violations without raising.

        Args:
            record: Candidate record

        Returns:
            Mapping of field name to violation message (empty when valid)
        """
        if record is None:
            return {'record': "is required"}

        violations = OwnershipValidator.check_key(record.owner_id, record.vehicle_id)

        if record.start_date is None:
            violations['start_date'] = "is required"
        elif record.end_date is not None and not record.start_date < record.end_date:
            violations['end_date'] = (
                f"must be after start date {record.start_date.isoformat()}, "
                f"got {record.end_date.isoformat()}"
            )

        return violations

    @staticmethod
    def validate_key(owner_id: int, vehicle_id: int) -> None:
        """
        Validate an ownership key.

        Raises:
            ValidationError: If either identifier is not a positive integer
        """
        violations = OwnershipValidator.check_key(owner_id, vehicle_id)
        if violations:
            logger.warning(f"Rejected ownership key {owner_id}-{vehicle_id}: {violations}")
            raise ValidationError("Ownership identifiers must be positive", invalid_fields=violations)

    @staticmethod
    def validate_record(record: Optional[OwnershipRecord]) -> None:
        """
        Validate a candidate record before insert or update.

        Rules:
        - the record and its start date are present
        - owner_id and vehicle_id are positive
        - when an end date is present it is strictly after the start date

        Raises:
            ValidationError: If any rule is violated
        """
        violations = OwnershipValidator.check_record(record)
        if not violations:
            return

        if 'record' in violations:
            message = "Ownership record is required"
        elif 'start_date' in violations:
            message = "Ownership start date is required"
        elif 'end_date' in violations:
            message = "Ownership end date must be after its start date"
        else:
            message = "Ownership identifiers must be positive"

        logger.warning(f"Rejected ownership record {record!r}: {violations}")
        raise ValidationError(message, invalid_fields=violations)

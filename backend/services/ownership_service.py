"""
Ownership Service

Name-driven ownership workflows built on the resolver and the repository:
registering an ownership from an owner name and a model name, changing its
dates, moving it to another owner or vehicle, and listing records with
display names.

Unlike the repository, this service turns "nothing happened" outcomes into
specific ValidationError subclasses, because its callers work from names
and need a message to show.
"""

from datetime import date
from typing import Dict, List, Optional, Tuple
import logging

from sqlalchemy.orm import sessionmaker

from domain.entities.ownership_record import OwnershipRecord
from domain.value_objects.ownership_period import OwnershipPeriod
from dtos.internal.ownership_row import OwnershipRow
from exceptions import (
    DuplicateOwnershipError,
    OwnerNotFoundError,
    OwnershipNotFoundError,
    ValidationError,
    VehicleNotFoundError,
)
from repositories.identifier_resolver import IdentifierResolver
from repositories.ownership_repository import OwnershipRepository
from services.ownership_validator import OwnershipValidator

logger = logging.getLogger(__name__)


class OwnershipService:
    """Service for name-driven ownership operations."""

    def __init__(
        self,
        ownership_repo: Optional[OwnershipRepository] = None,
        resolver: Optional[IdentifierResolver] = None,
        session_factory: Optional[sessionmaker] = None,
    ):
        """
        Initialize OwnershipService.

        Args:
            ownership_repo: Repository to use (built from session_factory if omitted)
            resolver: Resolver to use (built from session_factory if omitted)
            session_factory: Session factory for the default collaborators
        """
        self.ownership_repo = ownership_repo or OwnershipRepository(session_factory)
        self.resolver = resolver or IdentifierResolver(session_factory)

    def _resolve(self, owner_name: str, model_name: str) -> Tuple[int, int]:
        """
        Resolve an owner name and a model name to identifiers.

        Raises:
            ValidationError: If either name is blank
            OwnerNotFoundError: If the owner name is unknown
            VehicleNotFoundError: If the model name is unknown
        """
        missing = {}
        if not owner_name or not owner_name.strip():
            missing['owner_name'] = "is required"
        if not model_name or not model_name.strip():
            missing['model_name'] = "is required"
        if missing:
            raise ValidationError("Owner name and vehicle model are required", invalid_fields=missing)

        owner_id = self.resolver.resolve_owner_id(owner_name)
        if owner_id is None:
            raise OwnerNotFoundError(owner_name.strip())

        vehicle_id = self.resolver.resolve_vehicle_id_by_model(model_name)
        if vehicle_id is None:
            raise VehicleNotFoundError(model_name.strip())

        return owner_id, vehicle_id

    def get(self, owner_id: int, vehicle_id: int) -> Optional[OwnershipRecord]:
        return self.ownership_repo.get(owner_id, vehicle_id)

    def register(
        self,
        owner_name: str,
        model_name: str,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> OwnershipRecord:
        """
        Record that the named owner owns a vehicle of the named model.

        The date window is checked before any name is resolved.

        Returns:
            The stored record

        Raises:
            ValidationError: If a name is blank or the window is invalid
            OwnerNotFoundError / VehicleNotFoundError: If a name does not resolve
            DuplicateOwnershipError: If the pair already has an ownership
        """
        OwnershipPeriod(start_date, end_date)
        owner_id, vehicle_id = self._resolve(owner_name, model_name)

        record = OwnershipRecord(owner_id, vehicle_id, start_date, end_date)
        if not self.ownership_repo.add(record):
            raise DuplicateOwnershipError(owner_id, vehicle_id)

        logger.info(f"Registered ownership of vehicle {vehicle_id} ({model_name.strip()}) by {owner_name.strip()}")
        return record

    def change_period(
        self,
        owner_id: int,
        vehicle_id: int,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> bool:
        """
        Replace the date window of an existing ownership.

        Returns:
            True if updated, False if no ownership has that key
        """
        return self.ownership_repo.update(OwnershipRecord(owner_id, vehicle_id, start_date, end_date))

    def reassign(
        self,
        owner_id: int,
        vehicle_id: int,
        owner_name: str,
        model_name: str,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> OwnershipRecord:
        """
        Replace an ownership with one for another owner and/or vehicle.

        The old record is deleted and the new one inserted in a single
        transaction, so a failure leaves the old record in place.

        Returns:
            The stored replacement record

        Raises:
            ValidationError: If the key, a name or the window is invalid
            OwnerNotFoundError / VehicleNotFoundError: If a name does not resolve
            OwnershipNotFoundError: If the original ownership does not exist
            DuplicateOwnershipError: If the target pair already has an ownership
        """
        OwnershipValidator.validate_key(owner_id, vehicle_id)
        OwnershipPeriod(start_date, end_date)
        new_owner_id, new_vehicle_id = self._resolve(owner_name, model_name)

        record = OwnershipRecord(new_owner_id, new_vehicle_id, start_date, end_date)
        if self.ownership_repo.replace(owner_id, vehicle_id, record):
            return record

        if not self.ownership_repo.exists(owner_id, vehicle_id):
            raise OwnershipNotFoundError(owner_id, vehicle_id)
        raise DuplicateOwnershipError(new_owner_id, new_vehicle_id)

    def remove(self, owner_id: int, vehicle_id: int) -> bool:
        """
        Delete an ownership.

        Returns:
            True if deleted, False if it was already gone
        """
        return self.ownership_repo.delete(owner_id, vehicle_id)

    def list_rows(
        self,
        owner_id: Optional[int] = None,
        vehicle_id: Optional[int] = None,
        active_on: Optional[date] = None,
    ) -> List[OwnershipRow]:
        """
        List ownerships with owner and model display names.

        Each distinct identifier is looked up once per call.

        Returns:
            List of OwnershipRow, in repository order
        """
        records = self.ownership_repo.search(owner_id, vehicle_id, active_on)

        owner_names: Dict[int, str] = {}
        model_names: Dict[int, str] = {}
        rows = []
        for record in records:
            if record.owner_id not in owner_names:
                owner_names[record.owner_id] = self.resolver.owner_name(record.owner_id)
            if record.vehicle_id not in model_names:
                model_names[record.vehicle_id] = self.resolver.vehicle_model_name(record.vehicle_id)
            rows.append(OwnershipRow.from_record(
                record,
                owner_names[record.owner_id],
                model_names[record.vehicle_id],
            ))
        return rows

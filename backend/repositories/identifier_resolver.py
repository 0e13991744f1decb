"""
Identifier resolver: display names to integer identifiers and back.

Forward lookups return None when nothing matches and raise DatabaseError
when the store fails. Reverse lookups never raise: they return the
NameLookup sentinels so a listing can still be displayed.
"""

from typing import Optional
import logging

from sqlalchemy.orm import sessionmaker

from constants import NameLookup
from exceptions import DatabaseError
from models import Owner, Vehicle, VehicleModel
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    cleaned = name.strip()
    return cleaned or None


class IdentifierResolver(BaseRepository[Owner]):
    """Resolves owner names and vehicle model names."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        super().__init__(Owner, session_factory)

    def resolve_owner_id(self, name: Optional[str]) -> Optional[int]:
        """
        Find an owner's identifier from their exact name.

        Args:
            name: Owner name, surrounding whitespace is ignored

        Returns:
            Owner id, or None if the name is blank or unknown

        Raises:
            DatabaseError: If the store cannot be queried
        """
        cleaned = _clean_name(name)
        if cleaned is None:
            logger.warning("Owner id lookup attempted with an empty name")
            return None

        with self._session("resolve_owner_id", (cleaned,)) as db:
            owner_id = db.query(Owner.id).filter(Owner.name == cleaned).limit(1).scalar()

        if owner_id is None:
            logger.info(f"No owner found with name: {cleaned}")
        return owner_id

    def resolve_vehicle_id_by_model(self, model_name: Optional[str]) -> Optional[int]:
        """
        Find a vehicle identifier from its model name.

        Several vehicles can share a model name; whichever row the store
        returns first is used.

        Args:
            model_name: Model name, surrounding whitespace is ignored

        Returns:
            Vehicle id, or None if the name is blank or unknown

        Raises:
            DatabaseError: If the store cannot be queried
        """
        cleaned = _clean_name(model_name)
        if cleaned is None:
            logger.warning("Vehicle id lookup attempted with an empty model name")
            return None

        with self._session("resolve_vehicle_id_by_model", (cleaned,)) as db:
            vehicle_id = (
                db.query(Vehicle.id)
                .join(VehicleModel, Vehicle.model_id == VehicleModel.id)
                .filter(VehicleModel.name == cleaned)
                .limit(1)
                .scalar()
            )

        if vehicle_id is None:
            logger.info(f"No vehicle found with model: {cleaned}")
        return vehicle_id

    def owner_name(self, owner_id: int) -> str:
        """
        Get an owner's name.

        Returns:
            The name, NameLookup.UNKNOWN for a non-positive or unknown id,
            NameLookup.ERROR if the store failed
        """
        if owner_id is None or owner_id <= 0:
            logger.warning(f"Owner name lookup attempted with invalid id: {owner_id}")
            return NameLookup.UNKNOWN.value

        try:
            with self._session("owner_name", (owner_id,)) as db:
                name = db.query(Owner.name).filter(Owner.id == owner_id).scalar()
        except DatabaseError:
            return NameLookup.ERROR.value

        if name is None:
            logger.info(f"No owner found with id: {owner_id}")
            return NameLookup.UNKNOWN.value
        return name

    def vehicle_model_name(self, vehicle_id: int) -> str:
        """
        Get the model name of a vehicle.

        Returns:
            The model name, NameLookup.UNKNOWN for a non-positive or unknown
            id, NameLookup.ERROR if the store failed
        """
        if vehicle_id is None or vehicle_id <= 0:
            logger.warning(f"Model name lookup attempted with invalid vehicle id: {vehicle_id}")
            return NameLookup.UNKNOWN.value

        try:
            with self._session("vehicle_model_name", (vehicle_id,)) as db:
                name = (
                    db.query(VehicleModel.name)
                    .join(Vehicle, Vehicle.model_id == VehicleModel.id)
                    .filter(Vehicle.id == vehicle_id)
                    .scalar()
                )
        except DatabaseError:
            return NameLookup.ERROR.value

        if name is None:
            logger.info(f"No model found for vehicle id: {vehicle_id}")
            return NameLookup.UNKNOWN.value
        return name

"""
Ownership repository for ownership-record data access operations.

The repository works on identifiers and dates only; names are resolved by
IdentifierResolver beforehand. Three outcomes are kept apart:

- malformed input raises ValidationError before any session is opened
- a write that matches no row (or a key that is already taken) returns False
- a store failure raises DatabaseError
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import Date, Integer, delete, insert, literal, select, update
from sqlalchemy.orm import Session, sessionmaker

from domain.entities.ownership_record import OwnershipRecord
from models import Ownership
from services.ownership_validator import OwnershipValidator
from utils.logging_utils import StructuredLogger, log_operation
from .base_repository import BaseRepository
from .ownership_specifications import (
    OwnershipActiveOnSpec,
    OwnershipByOwnerSpec,
    OwnershipByVehicleSpec,
)
from .specifications import MatchAllSpecification, Specification

logger = StructuredLogger(__name__)

_table = Ownership.__table__


class OwnershipRepository(BaseRepository[Ownership]):
    """Repository for Ownership model operations."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        super().__init__(Ownership, session_factory)

    @staticmethod
    def _to_entity(model: Ownership) -> OwnershipRecord:
        """Map ORM model -> domain entity."""
        return OwnershipRecord(
            owner_id=model.owner_id,
            vehicle_id=model.vehicle_id,
            start_date=model.start_date,
            end_date=model.end_date,
        )

    @staticmethod
    def _key_clause(owner_id: int, vehicle_id: int):
        return (_table.c.id_proprietaire == owner_id) & (_table.c.id_vehicule == vehicle_id)

    def _key_query(self, owner_id: int, vehicle_id: int):
        return (
            select(_table.c.id_proprietaire)
            .where(self._key_clause(owner_id, vehicle_id))
            .correlate(None)
        )

    def _insert_if_absent(self, db: Session, record: OwnershipRecord) -> int:
        """
        Insert the record unless its key is already present.

        Runs as one INSERT ... SELECT ... WHERE NOT EXISTS statement, so a
        taken key affects zero rows instead of raising. A writer racing on
        the same key can still hit the primary key constraint.

        The SELECT has no FROM clause, which SQLite and PostgreSQL accept;
        MySQL and Oracle would need FROM DUAL.

        Returns:
            Number of inserted rows (0 or 1)
        """
        key_taken = self._key_query(record.owner_id, record.vehicle_id).exists()

        row = select(
            literal(record.owner_id, Integer),
            literal(record.vehicle_id, Integer),
            literal(record.start_date, Date),
            literal(record.end_date, Date),
        ).where(~key_taken)

        stmt = insert(_table).from_select(
            [
                _table.c.id_proprietaire,
                _table.c.id_vehicule,
                _table.c.date_debut_propriete,
                _table.c.date_fin_propriete,
            ],
            row,
        )
        return db.execute(stmt).rowcount

    def _delete_key(self, db: Session, owner_id: int, vehicle_id: int) -> int:
        stmt = delete(_table).where(self._key_clause(owner_id, vehicle_id))
        return db.execute(stmt).rowcount

    def list_all(self) -> List[OwnershipRecord]:
        """
        Get every ownership record.

        Returns:
            List of records in store order
        """
        with self._session("list_all") as db:
            return [self._to_entity(m) for m in db.query(self.model).all()]

    def find(self, spec: Specification[OwnershipRecord]) -> List[OwnershipRecord]:
        """
        Find records matching a specification.

        Example:
            spec = OwnershipByOwnerSpec(3) & OwnershipActiveOnSpec(date.today())
            current = ownership_repo.find(spec)
        """
        with self._session("find") as db:
            models = db.query(self.model).filter(spec.to_sql_filter()).all()
            return [self._to_entity(m) for m in models]

    def search(
        self,
        owner_id: Optional[int] = None,
        vehicle_id: Optional[int] = None,
        active_on: Optional[date] = None,
    ) -> List[OwnershipRecord]:
        """
        Search records with optional filters combined with AND.

        Args:
            owner_id: Filter by owner (None or <= 0 ignores the filter)
            vehicle_id: Filter by vehicle (None or <= 0 ignores the filter)
            active_on: Only records whose window covers this day

        Returns:
            List of matching records, every record when no filter is set
        """
        spec: Specification[OwnershipRecord] = MatchAllSpecification()
        if owner_id is not None and owner_id > 0:
            spec = spec & OwnershipByOwnerSpec(owner_id)
        if vehicle_id is not None and vehicle_id > 0:
            spec = spec & OwnershipByVehicleSpec(vehicle_id)
        if active_on is not None:
            spec = spec & OwnershipActiveOnSpec(active_on)

        return self.find(spec)

    def exists(self, owner_id: int, vehicle_id: int) -> bool:
        """
        Check if a record exists for the key.

        Returns:
            True if exists, False otherwise
        """
        key = (owner_id, vehicle_id)
        with self._session("exists", key) as db:
            stmt = select(self._key_query(owner_id, vehicle_id).exists())
            return bool(db.execute(stmt).scalar())

    def get(self, owner_id: int, vehicle_id: int) -> Optional[OwnershipRecord]:
        """
        Retrieve a record by its key.

        Returns:
            OwnershipRecord or None if not found
        """
        key = (owner_id, vehicle_id)
        with self._session("get", key) as db:
            model = db.get(self.model, key)
            return self._to_entity(model) if model else None

    @log_operation("add_ownership")
    def add(self, record: OwnershipRecord) -> bool:
        """
        Insert a new ownership record.

        Args:
            record: Record to insert

        Returns:
            True if inserted, False if the key already exists

        Raises:
            ValidationError: If the record is missing or invalid (store untouched)
            DatabaseError: If the store rejects the insert
        """
        OwnershipValidator.validate_record(record)

        with self._session("add", record.key) as db:
            inserted = self._insert_if_absent(db, record)

        context = {"owner_id": record.owner_id, "vehicle_id": record.vehicle_id}
        if inserted == 0:
            logger.warning("Ownership not added, no row affected", extra=context)
            return False

        logger.info(f"Ownership added: {record.owner_id}-{record.vehicle_id}", extra=context)
        return True

    @log_operation("update_ownership")
    def update(self, record: OwnershipRecord) -> bool:
        """
        Replace the dates of an existing record.

        The key is taken from the record and never changed.

        Returns:
            True if updated, False if no record has that key

        Raises:
            ValidationError: If the record is missing or invalid (store untouched)
            DatabaseError: If the store rejects the update
        """
        OwnershipValidator.validate_record(record)

        stmt = update(_table).where(
            self._key_clause(record.owner_id, record.vehicle_id)
        ).values({
            _table.c.date_debut_propriete: record.start_date,
            _table.c.date_fin_propriete: record.end_date,
        })

        with self._session("update", record.key) as db:
            updated = db.execute(stmt).rowcount

        context = {"owner_id": record.owner_id, "vehicle_id": record.vehicle_id}
        if updated == 0:
            logger.warning("Ownership not updated, no row affected", extra=context)
            return False

        logger.info(f"Ownership updated: {record.owner_id}-{record.vehicle_id}", extra=context)
        return True

    @log_operation("delete_ownership")
    def delete(self, owner_id: int, vehicle_id: int) -> bool:
        """
        Delete a record by its key.

        Returns:
            True if deleted, False if not found

        Raises:
            ValidationError: If either identifier is not positive
            DatabaseError: If the store rejects the delete
        """
        OwnershipValidator.validate_key(owner_id, vehicle_id)

        with self._session("delete", (owner_id, vehicle_id)) as db:
            deleted = self._delete_key(db, owner_id, vehicle_id)

        context = {"owner_id": owner_id, "vehicle_id": vehicle_id}
        if deleted == 0:
            logger.warning(f"Ownership not found for deletion: {owner_id}-{vehicle_id}", extra=context)
            return False

        logger.info(f"Ownership deleted: {owner_id}-{vehicle_id}", extra=context)
        return True

    @log_operation("replace_ownership")
    def replace(self, owner_id: int, vehicle_id: int, record: OwnershipRecord) -> bool:
        """
        Move an ownership to another key (delete then insert) in one transaction.

        When the key does not change this is a plain date update.

        Args:
            owner_id: Owner of the record being replaced
            vehicle_id: Vehicle of the record being replaced
            record: Replacement record

        Returns:
            True if replaced, False if the original key is missing or the new
            key is already taken (nothing is changed in either case)

        Raises:
            ValidationError: If the original key or the new record is invalid
            DatabaseError: If the store rejects either statement
        """
        OwnershipValidator.validate_key(owner_id, vehicle_id)
        OwnershipValidator.validate_record(record)

        if record.key == (owner_id, vehicle_id):
            return self.update(record)

        context = {
            "owner_id": owner_id,
            "vehicle_id": vehicle_id,
            "new_owner_id": record.owner_id,
            "new_vehicle_id": record.vehicle_id,
        }

        with self._session("replace", (owner_id, vehicle_id)) as db:
            if self._delete_key(db, owner_id, vehicle_id) == 0:
                logger.warning("Ownership not replaced, original record not found", extra=context)
                return False

            if self._insert_if_absent(db, record) == 0:
                db.rollback()
                logger.warning("Ownership not replaced, target key already exists", extra=context)
                return False

        logger.info(
            f"Ownership replaced: {owner_id}-{vehicle_id} -> {record.owner_id}-{record.vehicle_id}",
            extra=context,
        )
        return True

from datetime import date
from unittest.mock import MagicMock

import pytest

from domain.entities.ownership_record import OwnershipRecord
from exceptions import (
    DuplicateOwnershipError,
    OwnerNotFoundError,
    OwnershipNotFoundError,
    ValidationError,
    VehicleNotFoundError,
)
from repositories.identifier_resolver import IdentifierResolver
from services.ownership_service import OwnershipService


class TestRegister:
    def test_register_resolves_names(self, ownership_service, ownership_repo):
        record = ownership_service.register("Durand", "Golf", date(2024, 1, 1), date(2025, 6, 30))
        assert record == OwnershipRecord(4, 10, date(2024, 1, 1), date(2025, 6, 30))
        assert ownership_repo.get(4, 10) == record

    def test_register_ongoing(self, ownership_service):
        record = ownership_service.register(" Martin ", "Megane", date(2024, 1, 1))
        assert record.key == (2, 8)
        assert record.is_ongoing

    def test_unknown_owner(self, ownership_service):
        with pytest.raises(OwnerNotFoundError) as exc_info:
            ownership_service.register("Alice", "Golf", date(2024, 1, 1))
        assert "Alice" in exc_info.value.message

    def test_unknown_model(self, ownership_service):
        with pytest.raises(VehicleNotFoundError):
            ownership_service.register("Dupont", "Twingo", date(2024, 1, 1))

    def test_blank_names(self, ownership_service):
        with pytest.raises(ValidationError) as exc_info:
            ownership_service.register(" ", "", date(2024, 1, 1))
        assert set(exc_info.value.details["invalid_fields"]) == {"owner_name", "model_name"}

    def test_invalid_window_is_checked_before_names(self):
        resolver = MagicMock()
        repo = MagicMock()
        service = OwnershipService(ownership_repo=repo, resolver=resolver)
        with pytest.raises(ValidationError):
            service.register("Dupont", "Clio", date(2024, 1, 1), date(2023, 12, 31))
        resolver.resolve_owner_id.assert_not_called()
        repo.add.assert_not_called()

    def test_duplicate(self, ownership_service, seeded_records):
        with pytest.raises(DuplicateOwnershipError):
            ownership_service.register("Bernard", "Golf", date(2024, 1, 1))


class TestChangePeriodAndRemove:
    def test_change_period(self, ownership_service, seeded_records):
        assert ownership_service.change_period(1, 8, date(2021, 7, 1), date(2023, 1, 1))
        assert ownership_service.get(1, 8).end_date == date(2023, 1, 1)

    def test_change_period_of_missing_record(self, ownership_service):
        assert ownership_service.change_period(3, 7, date(2024, 1, 1)) is False

    def test_change_period_rejects_inverted_window(self, ownership_service, seeded_records):
        with pytest.raises(ValidationError):
            ownership_service.change_period(1, 8, date(2024, 1, 1), date(2020, 1, 1))

    def test_remove(self, ownership_service, seeded_records):
        assert ownership_service.remove(3, 10) is True
        assert ownership_service.remove(3, 10) is False


class TestReassign:
    def test_reassign_to_new_owner_and_vehicle(self, ownership_service, seeded_records):
        record = ownership_service.reassign(1, 8, "Durand", "Golf", date(2024, 1, 1))
        assert record.key == (4, 10)
        assert ownership_service.get(1, 8) is None
        assert ownership_service.get(4, 10) == record

    def test_reassign_same_key_changes_dates(self, ownership_service, seeded_records):
        record = ownership_service.reassign(1, 8, "Dupont", "Megane", date(2022, 1, 1))
        assert record.key == (1, 8)
        assert ownership_service.get(1, 8).start_date == date(2022, 1, 1)

    def test_reassign_missing_original(self, ownership_service, seeded_records):
        with pytest.raises(OwnershipNotFoundError):
            ownership_service.reassign(4, 9, "Durand", "Golf", date(2024, 1, 1))

    def test_reassign_onto_taken_key(self, ownership_service, seeded_records):
        with pytest.raises(DuplicateOwnershipError):
            ownership_service.reassign(1, 8, "Bernard", "Golf", date(2024, 1, 1))
        assert ownership_service.get(1, 8) == seeded_records[2]

    def test_reassign_rejects_invalid_key(self, ownership_service):
        with pytest.raises(ValidationError):
            ownership_service.reassign(0, 8, "Durand", "Golf", date(2024, 1, 1))


class TestListRows:
    def test_rows_carry_names(self, ownership_service, seeded_records):
        rows = {(row.owner_id, row.vehicle_id): row for row in ownership_service.list_rows()}
        assert len(rows) == 4
        assert rows[(3, 10)].owner_name == "Bernard"
        assert rows[(3, 10)].model_name == "Golf"
        assert rows[(3, 10)].end_date_label == "2022-02-01"
        assert rows[(1, 8)].end_date_label == "N/A"

    def test_rows_use_filters(self, ownership_service, seeded_records):
        rows = ownership_service.list_rows(vehicle_id=7, active_on=date(2022, 1, 1))
        assert [(row.owner_id, row.owner_name) for row in rows] == [(2, "Martin")]

    def test_names_are_looked_up_once_per_id(self, seeded_records, ownership_repo):
        resolver = MagicMock()
        resolver.owner_name.return_value = "Dupont"
        resolver.vehicle_model_name.return_value = "Clio"
        service = OwnershipService(ownership_repo=ownership_repo, resolver=resolver)

        service.list_rows(owner_id=1)

        resolver.owner_name.assert_called_once_with(1)
        assert resolver.vehicle_model_name.call_count == 2

    def test_failed_lookups_keep_the_row(self, ownership_repo, seeded_records, broken_session_factory):
        service = OwnershipService(
            ownership_repo=ownership_repo,
            resolver=IdentifierResolver(broken_session_factory),
        )
        rows = service.list_rows(owner_id=3)
        assert len(rows) == 1
        assert rows[0].owner_name == "Erreur"
        assert rows[0].model_name == "Erreur"

import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from config.database_config import DatabaseSettings
from database import Base, create_engine_from_settings
from models import Owner, Vehicle, VehicleModel
from domain.entities.ownership_record import OwnershipRecord
from repositories.identifier_resolver import IdentifierResolver
from repositories.ownership_repository import OwnershipRepository
from services.ownership_service import OwnershipService


OWNERS = {1: "Dupont", 2: "Martin", 3: "Bernard", 4: "Durand"}
MODELS = {1: "Clio", 2: "Megane", 3: "Golf"}
# Vehicles 7 and 9 share the Clio model
VEHICLES = {7: 1, 8: 2, 9: 1, 10: 3}


@pytest.fixture
def engine():
    """In-memory database with the ownership schema and reference data"""
    engine = create_engine_from_settings(DatabaseSettings(database_url='sqlite://'))
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    with SessionLocal() as session:
        session.add_all([Owner(id=i, name=name) for i, name in OWNERS.items()])
        session.add_all([VehicleModel(id=i, name=name) for i, name in MODELS.items()])
        session.flush()
        session.add_all([Vehicle(id=i, model_id=model_id) for i, model_id in VEHICLES.items()])
        session.commit()

    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def broken_session_factory():
    """Sessions on a database without any table, so every query fails"""
    engine = create_engine_from_settings(DatabaseSettings(database_url='sqlite://'))
    yield sessionmaker(bind=engine)
    engine.dispose()


@pytest.fixture
def ownership_repo(session_factory):
    return OwnershipRepository(session_factory)


@pytest.fixture
def resolver(session_factory):
    return IdentifierResolver(session_factory)


@pytest.fixture
def ownership_service(ownership_repo, resolver):
    return OwnershipService(ownership_repo=ownership_repo, resolver=resolver)


@pytest.fixture
def seeded_records(ownership_repo):
    """A small ownership history"""
    records = [
        OwnershipRecord(1, 7, date(2020, 1, 1), date(2021, 6, 30)),
        OwnershipRecord(2, 7, date(2021, 6, 30)),
        OwnershipRecord(1, 8, date(2021, 7, 1)),
        OwnershipRecord(3, 10, date(2019, 3, 15), date(2022, 2, 1)),
    ]
    for record in records:
        assert ownership_repo.add(record)
    return records

from sqlalchemy import Column, Integer, String, Date, ForeignKey, Index
from sqlalchemy.orm import relationship

from constants import TableNames
from database import Base


class Owner(Base):
    """A person who can own vehicles. Lifecycle is managed outside this service."""
    __tablename__ = TableNames.OWNER

    id = Column('id_proprietaire', Integer, primary_key=True)
    name = Column('nom', String, nullable=False)

    ownerships = relationship("Ownership", back_populates="owner")

    __table_args__ = (
        Index('idx_proprietaire_nom', 'nom'),
    )


class VehicleModel(Base):
    __tablename__ = TableNames.VEHICLE_MODEL

    id = Column('id_modele', Integer, primary_key=True)
    name = Column('nom_modele', String, nullable=False)

    vehicles = relationship("Vehicle", back_populates="model")


class Vehicle(Base):
    __tablename__ = TableNames.VEHICLE

    id = Column('id_vehicule', Integer, primary_key=True)
    model_id = Column('id_modele', Integer, ForeignKey(f'{TableNames.VEHICLE_MODEL}.id_modele'), nullable=False)

    model = relationship("VehicleModel", back_populates="vehicles")
    ownerships = relationship("Ownership", back_populates="vehicle")


class Ownership(Base):
    """
    Ownership of a vehicle by a person over a date window.

    The (owner, vehicle) pair is the composite primary key, so at most one
    row exists per pair. An empty end date means the ownership is ongoing.
    The start-before-end rule is checked by the validation layer, not here.
    """
    __tablename__ = TableNames.OWNERSHIP

    owner_id = Column(
        'id_proprietaire', Integer,
        ForeignKey(f'{TableNames.OWNER}.id_proprietaire'), primary_key=True
    )
    vehicle_id = Column(
        'id_vehicule', Integer,
        ForeignKey(f'{TableNames.VEHICLE}.id_vehicule'), primary_key=True
    )
    start_date = Column('date_debut_propriete', Date, nullable=False)
    end_date = Column('date_fin_propriete', Date, nullable=True)

    owner = relationship("Owner", back_populates="ownerships")
    vehicle = relationship("Vehicle", back_populates="ownerships")

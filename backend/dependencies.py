"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating repository and service
instances. Every provider ultimately depends on get_session_factory, so
tests can point the whole graph at another database with a single
dependency override.
"""

from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from database import SessionLocal
from repositories.identifier_resolver import IdentifierResolver
from repositories.ownership_repository import OwnershipRepository
from services.ownership_service import OwnershipService


def get_session_factory() -> sessionmaker:
    """
    Provide the factory repositories open their scoped sessions from.

    Returns:
        The application sessionmaker
    """
    return SessionLocal


def get_ownership_repository(
    session_factory: sessionmaker = Depends(get_session_factory)
) -> OwnershipRepository:
    """
    Factory function for creating OwnershipRepository instances.

    Args:
        session_factory: Session factory (injected)

    Returns:
        OwnershipRepository instance
    """
    return OwnershipRepository(session_factory)


def get_identifier_resolver(
    session_factory: sessionmaker = Depends(get_session_factory)
) -> IdentifierResolver:
    """
    Factory function for creating IdentifierResolver instances.

    Args:
        session_factory: Session factory (injected)

    Returns:
        IdentifierResolver instance
    """
    return IdentifierResolver(session_factory)


def get_ownership_service(
    ownership_repo: OwnershipRepository = Depends(get_ownership_repository),
    resolver: IdentifierResolver = Depends(get_identifier_resolver),
) -> OwnershipService:
    """
    Factory function for creating OwnershipService instances.

    Returns:
        OwnershipService wired to the injected repository and resolver
    """
    return OwnershipService(ownership_repo=ownership_repo, resolver=resolver)

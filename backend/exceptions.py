"""
Custom exception classes for the application.

This module defines domain-specific exceptions that keep the three outcomes
of an ownership operation distinguishable:

- rejected input (ValidationError and its subclasses), raised before the
  store is contacted
- store failures (DatabaseError), wrapping the underlying SQLAlchemy error
- not-found, which is never raised by the data layer and is expressed in
  return values instead
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, invalid_keys: list[str] | None = None):
        details = {"invalid_keys": invalid_keys} if invalid_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError, ValueError):
    """Raised when caller-supplied data violates a precondition"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class OwnerNotFoundError(ValidationError):
    """Raised by name-driven workflows when an owner name does not resolve"""

    def __init__(self, owner_name: str):
        super().__init__(
            f"Propriétaire introuvable: {owner_name}",
            {"owner_name": owner_name},
        )


class VehicleNotFoundError(ValidationError):
    """Raised by name-driven workflows when a model name does not resolve"""

    def __init__(self, model_name: str):
        super().__init__(
            f"Modèle de véhicule introuvable: {model_name}",
            {"model_name": model_name},
        )


class OwnershipNotFoundError(ValidationError):
    """Raised by name-driven workflows when the targeted record is missing"""

    def __init__(self, owner_id: int, vehicle_id: int):
        super().__init__(
            f"Ownership {owner_id}-{vehicle_id} does not exist",
            {"owner_id": owner_id, "vehicle_id": vehicle_id},
        )


class DuplicateOwnershipError(ValidationError):
    """Raised by name-driven workflows when the target key is already taken"""

    def __init__(self, owner_id: int, vehicle_id: int):
        super().__init__(
            f"Ownership {owner_id}-{vehicle_id} already exists",
            {"owner_id": owner_id, "vehicle_id": vehicle_id},
        )


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str, key: tuple | None = None):
        details = {"operation": operation}
        if key is not None:
            details["key"] = key
        super().__init__(message, details)

    @property
    def operation(self) -> str:
        return self.details["operation"]

"""
Error handling decorators and utilities for API endpoints.

Centralizes the translation of application exceptions into HTTP responses
so endpoints only contain the happy path.
"""

from functools import wraps
from typing import Callable
from fastapi import HTTPException
import logging

from constants import HTTPStatus
from exceptions import (
    ApplicationError,
    ConfigurationError,
    DatabaseError,
    DuplicateOwnershipError,
    OwnerNotFoundError,
    OwnershipNotFoundError,
    ValidationError,
    VehicleNotFoundError,
)

logger = logging.getLogger(__name__)


def handle_api_errors(operation_name: str):
    """
    Decorator to handle common API errors consistently across endpoints.

    Mapping:
    - OwnerNotFoundError, VehicleNotFoundError, OwnershipNotFoundError: 404
    - DuplicateOwnershipError: 409
    - ValidationError, ConfigurationError: 400
    - DatabaseError and any other ApplicationError: 500

    Args:
        operation_name: Human-readable name of the operation (e.g., "Register ownership")

    Example:
        @router.post("/ownerships")
        @handle_api_errors("Register ownership")
        def register_ownership(...):
            return service.register(...)
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (OwnerNotFoundError, VehicleNotFoundError, OwnershipNotFoundError) as e:
                logger.info(f"{operation_name} - Not found: {e.message}")
                raise HTTPException(
                    status_code=HTTPStatus.NOT_FOUND,
                    detail=e.message
                )
            except DuplicateOwnershipError as e:
                logger.info(f"{operation_name} - Conflict: {e.message}")
                raise HTTPException(
                    status_code=HTTPStatus.CONFLICT,
                    detail=e.message
                )
            except ValidationError as e:
                logger.warning(f"{operation_name} - Validation error: {e.message}")
                raise HTTPException(
                    status_code=HTTPStatus.BAD_REQUEST,
                    detail=e.message
                )
            except ConfigurationError as e:
                logger.warning(f"{operation_name} - Configuration error: {e.message}")
                raise HTTPException(
                    status_code=HTTPStatus.BAD_REQUEST,
                    detail=e.message
                )
            except DatabaseError as e:
                logger.error(f"{operation_name} - Database error: {e.message}", exc_info=True)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"Database operation failed: {e.operation}"
                )
            except ApplicationError as e:
                logger.error(f"{operation_name} - Application error: {e.message}", exc_info=True)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail=f"{operation_name} failed: {e.message}"
                )
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise

        return wrapper

    return decorator

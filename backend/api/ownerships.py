from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from constants import HTTPStatus
from dependencies import get_ownership_service
from dtos.request.ownership_request import OwnershipCreateRequest, OwnershipPeriodRequest
from dtos.response.ownership_response import (
    OwnershipListResponse,
    OwnershipResponse,
    OwnershipRowResponse,
)
from services.ownership_service import OwnershipService
from utils.error_handlers import handle_api_errors

router = APIRouter()


def _not_found(owner_id: int, vehicle_id: int) -> HTTPException:
    return HTTPException(
        status_code=HTTPStatus.NOT_FOUND,
        detail=f"Ownership {owner_id}-{vehicle_id} not found"
    )


@router.get("/ownerships", response_model=OwnershipListResponse)
@handle_api_errors("List ownerships")
def list_ownerships(
    owner_id: Optional[int] = Query(None, description="Filter by owner ID (0 ignores the filter)"),
    vehicle_id: Optional[int] = Query(None, description="Filter by vehicle ID (0 ignores the filter)"),
    active_on: Optional[date] = Query(None, description="Only ownerships covering this day (YYYY-MM-DD)"),
    service: OwnershipService = Depends(get_ownership_service)
):
    """
    List ownerships with owner and model names.

    Filters combine with AND; without filters every ownership is returned.
    """
    rows = service.list_rows(owner_id=owner_id, vehicle_id=vehicle_id, active_on=active_on)
    return OwnershipListResponse(
        ownerships=[OwnershipRowResponse.model_validate(row) for row in rows],
        total_count=len(rows),
    )


@router.get("/ownerships/{owner_id}/{vehicle_id}", response_model=OwnershipResponse)
@handle_api_errors("Get ownership")
def get_ownership(
    owner_id: int,
    vehicle_id: int,
    service: OwnershipService = Depends(get_ownership_service)
):
    """
    Get a single ownership by its owner and vehicle IDs.

    Raises:
        HTTPException: 404 if no such ownership exists
    """
    record = service.get(owner_id, vehicle_id)
    if record is None:
        raise _not_found(owner_id, vehicle_id)
    return OwnershipResponse.model_validate(record)


@router.post("/ownerships", response_model=OwnershipResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Register ownership")
def register_ownership(
    request: OwnershipCreateRequest,
    service: OwnershipService = Depends(get_ownership_service)
):
    """
    Register an ownership from an owner name and a vehicle model name.

    Raises:
        HTTPException: 400 for an invalid window, 404 for an unknown name,
            409 if the pair already has an ownership
    """
    record = service.register(
        request.owner_name,
        request.model_name,
        request.start_date,
        request.end_date,
    )
    return OwnershipResponse.model_validate(record)


@router.put("/ownerships/{owner_id}/{vehicle_id}", response_model=OwnershipResponse)
@handle_api_errors("Update ownership")
def update_ownership(
    owner_id: int,
    vehicle_id: int,
    request: OwnershipPeriodRequest,
    service: OwnershipService = Depends(get_ownership_service)
):
    """
    Replace the date window of an ownership.

    Raises:
        HTTPException: 400 for an invalid key or window, 404 if no such ownership exists
    """
    if not service.change_period(owner_id, vehicle_id, request.start_date, request.end_date):
        raise _not_found(owner_id, vehicle_id)
    return OwnershipResponse(
        owner_id=owner_id,
        vehicle_id=vehicle_id,
        start_date=request.start_date,
        end_date=request.end_date,
    )


@router.post("/ownerships/{owner_id}/{vehicle_id}/reassign", response_model=OwnershipResponse)
@handle_api_errors("Reassign ownership")
def reassign_ownership(
    owner_id: int,
    vehicle_id: int,
    request: OwnershipCreateRequest,
    service: OwnershipService = Depends(get_ownership_service)
):
    """
    Move an ownership to another owner and/or vehicle, given by names.

    The old ownership is removed and the new one created atomically.

    Raises:
        HTTPException: 404 if the ownership or a name is unknown,
            409 if the target pair already has an ownership
    """
    record = service.reassign(
        owner_id,
        vehicle_id,
        request.owner_name,
        request.model_name,
        request.start_date,
        request.end_date,
    )
    return OwnershipResponse.model_validate(record)


@router.delete("/ownerships/{owner_id}/{vehicle_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Delete ownership")
def delete_ownership(
    owner_id: int,
    vehicle_id: int,
    service: OwnershipService = Depends(get_ownership_service)
):
    """
    Delete an ownership.

    Raises:
        HTTPException: 400 for a non-positive ID, 404 if it was already gone
    """
    if not service.remove(owner_id, vehicle_id):
        raise _not_found(owner_id, vehicle_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)

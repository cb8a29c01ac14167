# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Donor CRUD and donation history."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import SQLAlchemyError

from donor_service.controllers.ids import parse_id
from donor_service.core.dependencies import get_donor_service
from donor_service.core.logging import get_logger, request_context
from donor_service.schemas import (
    DeleteResponse, DonationCreate, DonationHistory, DonationOut,
    DonorCreate, DonorDetail, DonorOut, DonorUpdate,
)
from donor_service.services.donor_service import DonorService

router = APIRouter(prefix="/donors", tags=["Donors"])
logger = get_logger(__name__)


@router.get("", response_model=List[DonorOut])
def list_donors(request: Request,
                search: Optional[str] = Query(default=None, max_length=255),
                service: DonorService = Depends(get_donor_service)):
    try:
        return [DonorOut(**d) for d in service.list_donors(search)]
    except SQLAlchemyError:
        logger.exception("Error fetching donors", extra=request_context(request))
        raise HTTPException(status_code=500, detail="Failed to fetch donors")


@router.post("", status_code=201, response_model=DonorOut)
def create_donor(request: Request, body: DonorCreate,
                 service: DonorService = Depends(get_donor_service)):
    try:
        return DonorOut(**service.create_donor(body.model_dump()))
    except SQLAlchemyError:
        logger.exception("Error creating donor", extra=request_context(request))
        raise HTTPException(status_code=500, detail="Failed to create donor")


@router.get("/{donor_id}", response_model=DonorDetail)
def get_donor(request: Request, donor_id: str,
              service: DonorService = Depends(get_donor_service)):
    did = parse_id(donor_id, "donor")
    try:
        result = service.get_donor_detail(did)
    except SQLAlchemyError:
        logger.exception("Error fetching donor id=%s", did, extra=request_context(request))
        raise HTTPException(status_code=500, detail="Failed to fetch donor")
    if not result:
        raise HTTPException(status_code=404, detail="Donor not found")
    return DonorDetail(**result)


@router.patch("/{donor_id}", response_model=DonorOut)
def update_donor(request: Request, donor_id: str, body: DonorUpdate,
                 service: DonorService = Depends(get_donor_service)):
    did = parse_id(donor_id, "donor")
    try:
        return DonorOut(**service.update_donor(did, body.model_dump(exclude_unset=True)))
    except KeyError:
        raise HTTPException(status_code=404, detail="Donor not found")
    except SQLAlchemyError:
        logger.exception("Error updating donor id=%s", did, extra=request_context(request))
        raise HTTPException(status_code=500, detail="Failed to update donor")


@router.delete("/{donor_id}", response_model=DeleteResponse)
def delete_donor(request: Request, donor_id: str,
                 service: DonorService = Depends(get_donor_service)):
    did = parse_id(donor_id, "donor")
    try:
        removed = service.delete_donor(did)
    except KeyError:
        raise HTTPException(status_code=404, detail="Donor not found")
    except SQLAlchemyError:
        logger.exception("Error deleting donor id=%s", did, extra=request_context(request))
        raise HTTPException(status_code=500, detail="Failed to delete donor")
    return DeleteResponse(message="Donor deleted successfully", donations_removed=removed)


@router.get("/{donor_id}/donations", response_model=DonationHistory)
def get_donation_history(request: Request, donor_id: str,
                         service: DonorService = Depends(get_donor_service)):
    did = parse_id(donor_id, "donor")
    try:
        return DonationHistory(**service.get_donation_history(did))
    except KeyError:
        raise HTTPException(status_code=404, detail="Donor not found")
    except SQLAlchemyError:
        logger.exception("Error fetching donations for donor id=%s", did,
                         extra=request_context(request))
        raise HTTPException(status_code=500, detail="Failed to fetch donations")


@router.post("/{donor_id}/donations", status_code=201, response_model=DonationOut)
def record_donation(request: Request, donor_id: str, body: DonationCreate,
                    service: DonorService = Depends(get_donor_service)):
    did = parse_id(donor_id, "donor")
    try:
        result = service.record_donation(
            did, donation_date=body.donation_date, quantity=body.quantity,
            inventory=[entry.model_dump() for entry in body.inventory],
        )
    except KeyError:
        raise HTTPException(status_code=404, detail="Donor not found")
    except SQLAlchemyError:
        logger.exception("Error recording donation for donor id=%s", did,
                         extra=request_context(request))
        raise HTTPException(status_code=500, detail="Failed to record donation")
    return DonationOut(**result)

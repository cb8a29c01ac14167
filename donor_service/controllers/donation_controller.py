# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Donation lookup."""
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError

from donor_service.controllers.ids import parse_id
from donor_service.core.dependencies import get_donor_service
from donor_service.core.logging import get_logger, request_context
from donor_service.schemas import DonationOut
from donor_service.services.donor_service import DonorService

router = APIRouter(prefix="/donations", tags=["Donations"])
logger = get_logger(__name__)


@router.get("/{donation_id}", response_model=DonationOut)
def get_donation(request: Request, donation_id: str,
                 service: DonorService = Depends(get_donor_service)):
    did = parse_id(donation_id, "donation")
    try:
        result = service.get_donation(did)
    except SQLAlchemyError:
        logger.exception("Error fetching donation id=%s", did, extra=request_context(request))
        raise HTTPException(status_code=500, detail="Failed to fetch donation")
    if not result:
        raise HTTPException(status_code=404, detail="Donation not found")
    return DonationOut(**result)

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints — health, readiness, metrics."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from donor_service.core.config import settings
from donor_service.core.dependencies import get_donor_repo
from donor_service.core.logging import get_logger, request_context
from donor_service.repositories.donor_repository import DonorRepository

router = APIRouter(tags=["System"])
logger = get_logger(__name__)


@router.get("/health")
def health_check():
    """Liveness probe."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
def readiness_check(request: Request, repo: DonorRepository = Depends(get_donor_repo)):
    try:
        repo.verify_connection()
    except Exception:
        logger.exception("Readiness check failed", extra=request_context(request))
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"status": "ok", "database": "connected"}


@router.get("/metrics")
def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

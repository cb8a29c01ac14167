# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""FastAPI dependency injection wiring."""
from donor_service.core.database import engine
from donor_service.repositories.donor_repository import DonorRepository
from donor_service.services.donor_service import DonorService

_repo = DonorRepository(engine)
_service = DonorService(_repo)


def get_donor_repo() -> DonorRepository:
    return _repo


def get_donor_service() -> DonorService:
    return _service

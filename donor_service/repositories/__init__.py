# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports DonorRepository."""
from donor_service.repositories.donor_repository import DonorRepository

__all__ = ["DonorRepository"]

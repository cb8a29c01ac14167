# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

BLOOD_TYPES = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")


class EligibilityState(str, Enum):
    READY_TO_DONATE = "ready_to_donate"
    RECENTLY_DONATED = "recently_donated"
    NOT_YET_ELIGIBLE = "not_yet_eligible"
    ELIGIBLE = "eligible"


class InventoryEntry(BaseModel):
    """Blood units from a donation logged into inventory."""
    id: Optional[int] = None
    blood_type: str
    units: int = Field(1, gt=0)
    expiry_date: datetime


class Donation(BaseModel):
    """One recorded instance of a donor giving blood."""
    id: Optional[int] = None
    donor_id: int
    donation_date: datetime
    quantity: int = Field(..., gt=0, description="Units of blood")
    inventory: List[InventoryEntry] = []


class EligibilityStatus(BaseModel):
    state: EligibilityState
    days_since: Optional[int] = None
    progress_fraction: Optional[float] = None


class DonationSummary(BaseModel):
    total_donations: int = 0
    total_units: int = 0
    most_recent_donation_date: Optional[datetime] = None
    tracked_donations: int = 0

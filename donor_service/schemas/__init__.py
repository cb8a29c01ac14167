# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
from datetime import date, datetime, time, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from donor_service.models.domain import BLOOD_TYPES, DonationSummary, EligibilityStatus

REQUIRED_DONOR_FIELDS = ("name", "age", "blood_type", "contact")


def parse_timestamp(v: Any) -> Optional[datetime]:
    """Accept ISO datetimes or bare ``YYYY-MM-DD`` dates; naive values are UTC."""
    if v is None:
        return None
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
        if len(v) == 10:
            v = date.fromisoformat(v)
        else:
            v = datetime.fromisoformat(v.replace("Z", "+00:00"))
    if isinstance(v, datetime):
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v.astimezone(timezone.utc)
    if isinstance(v, date):
        return datetime.combine(v, time.min, tzinfo=timezone.utc)
    raise ValueError("must be an ISO date or datetime")


def normalise_blood_type(v: str) -> str:
    v = v.strip().upper()
    if v not in BLOOD_TYPES:
        raise ValueError(f"blood_type must be one of {BLOOD_TYPES}")
    return v


class DonorCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    age: int = Field(..., ge=18, le=65)
    blood_type: str
    contact: str = Field(..., min_length=10, max_length=50)
    email: Optional[EmailStr] = None
    last_donated: Optional[datetime] = None

    @field_validator("name", "contact", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("blood_type")
    @classmethod
    def check_blood_type(cls, v: str) -> str:
        return normalise_blood_type(v)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("last_donated", mode="before")
    @classmethod
    def parse_last_donated(cls, v: Any) -> Optional[datetime]:
        return parse_timestamp(v)


class DonorUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    age: Optional[int] = Field(None, ge=18, le=65)
    blood_type: Optional[str] = None
    contact: Optional[str] = Field(None, min_length=10, max_length=50)
    email: Optional[EmailStr] = None
    last_donated: Optional[datetime] = None

    @field_validator(*REQUIRED_DONOR_FIELDS, mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("cannot be null")
        return v.strip() if isinstance(v, str) else v

    @field_validator("blood_type")
    @classmethod
    def check_blood_type(cls, v: Optional[str]) -> Optional[str]:
        return normalise_blood_type(v) if v is not None else v

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("last_donated", mode="before")
    @classmethod
    def parse_last_donated(cls, v: Any) -> Optional[datetime]:
        return parse_timestamp(v)


class DonorOut(BaseModel):
    id: int
    name: str
    age: int
    blood_type: str
    contact: str
    email: Optional[str]
    last_donated: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class InventoryEntryCreate(BaseModel):
    blood_type: str
    units: int = Field(1, gt=0)
    expiry_date: datetime

    @field_validator("blood_type")
    @classmethod
    def check_blood_type(cls, v: str) -> str:
        return normalise_blood_type(v)

    @field_validator("expiry_date", mode="before")
    @classmethod
    def parse_expiry(cls, v: Any) -> datetime:
        parsed = parse_timestamp(v)
        if parsed is None:
            raise ValueError("expiry_date is required")
        return parsed


class DonationCreate(BaseModel):
    donation_date: datetime
    quantity: int = Field(..., gt=0)
    inventory: List[InventoryEntryCreate] = []

    @field_validator("donation_date", mode="before")
    @classmethod
    def parse_donation_date(cls, v: Any) -> datetime:
        parsed = parse_timestamp(v)
        if parsed is None:
            raise ValueError("donation_date is required")
        return parsed


class InventoryEntryOut(BaseModel):
    id: int
    blood_type: str
    units: int
    expiry_date: datetime


class DonationOut(BaseModel):
    id: int
    donor_id: int
    donation_date: datetime
    quantity: int
    inventory: List[InventoryEntryOut] = []
    inventory_tracked_count: int = 0
    tracked: bool = False
    created_at: Optional[datetime] = None


class DonationHistory(BaseModel):
    donor_id: int
    summary: DonationSummary
    donations: List[DonationOut]


class DonorDetail(DonorOut):
    donations: List[DonationOut] = []
    summary: DonationSummary
    eligibility: EligibilityStatus


class DeleteResponse(BaseModel):
    message: str
    donations_removed: int


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None

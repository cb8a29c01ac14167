# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Donor management — CRUD orchestration plus donation history,
summary statistics, and eligibility for the donor detail view.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from donor_service.core.logging import get_logger
from donor_service.metrics import (
    DONATION_UNITS, DONATIONS_RECORDED, DONORS_CREATED, DONORS_DELETED,
    DONORS_TOTAL, ELIGIBILITY_EVALUATIONS,
)
from donor_service.models.domain import Donation
from donor_service.repositories.donor_repository import DonorRepository
from donor_service.services.aggregation import aggregate, inventory_tracked_count
from donor_service.services.eligibility import compute_eligibility

logger = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _donation_view(record: Dict[str, Any]) -> Dict[str, Any]:
    count = inventory_tracked_count(Donation(**record))
    return {**record, "inventory_tracked_count": count, "tracked": count > 0}


class DonorService:
    """Business logic for donor profiles and donation history."""

    def __init__(self, repo: DonorRepository,
                 clock: Callable[[], datetime] = utc_now) -> None:
        self._repo = repo
        self._clock = clock

    def seed_gauges(self):
        DONORS_TOTAL.set(self._repo.count_donors())
        logger.info("Prometheus gauges loaded from DB")

    # ── Commands ──

    def create_donor(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        donor = self._repo.create_donor(fields)
        DONORS_CREATED.labels(blood_type=donor["blood_type"]).inc()
        DONORS_TOTAL.inc()
        logger.info("Donor created id=%s blood_type=%s", donor["id"], donor["blood_type"])
        return donor

    def update_donor(self, donor_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a partial update. Raises KeyError if the donor does not exist."""
        if not fields:
            current = self._repo.get_donor(donor_id)
            if current is None:
                raise KeyError(f"Donor {donor_id} not found")
            return current
        donor = self._repo.update_donor(donor_id, fields)
        if donor is None:
            raise KeyError(f"Donor {donor_id} not found")
        logger.info("Donor updated id=%s fields=%s", donor_id, sorted(fields))
        return donor

    def delete_donor(self, donor_id: int) -> int:
        """Delete a donor and its donations. Raises KeyError if the donor does not exist."""
        removed = self._repo.delete_donor(donor_id)
        if removed is None:
            raise KeyError(f"Donor {donor_id} not found")
        DONORS_DELETED.inc()
        DONORS_TOTAL.dec()
        logger.info("Donor deleted id=%s donations_removed=%d", donor_id, removed)
        return removed

    def record_donation(self, donor_id: int, donation_date: datetime, quantity: int,
                        inventory: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Record a donation for an existing donor. Raises KeyError if the donor does not exist."""
        donation = self._repo.create_donation(donor_id, donation_date, quantity, inventory)
        if donation is None:
            raise KeyError(f"Donor {donor_id} not found")
        blood_type = inventory[0]["blood_type"] if inventory else "unknown"
        DONATIONS_RECORDED.labels(blood_type=blood_type).inc()
        DONATION_UNITS.inc(quantity)
        logger.info("Donation recorded id=%s donor=%s quantity=%d tracked_entries=%d",
                    donation["id"], donor_id, quantity, len(inventory))
        return _donation_view(donation)

    # ── Queries ──

    def list_donors(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._repo.list_donors(search)

    def get_donation(self, donation_id: int) -> Optional[Dict[str, Any]]:
        donation = self._repo.get_donation(donation_id)
        return _donation_view(donation) if donation else None

    def get_donation_history(self, donor_id: int) -> Dict[str, Any]:
        """Donations newest first plus their summary. Raises KeyError if the donor does not exist."""
        if self._repo.get_donor(donor_id) is None:
            raise KeyError(f"Donor {donor_id} not found")
        records = self._repo.list_donations_for_donor(donor_id)
        summary = aggregate([Donation(**r) for r in records])
        return {
            "donor_id": donor_id,
            "summary": summary,
            "donations": [_donation_view(r) for r in records],
        }

    def get_donor_detail(self, donor_id: int) -> Optional[Dict[str, Any]]:
        donor = self._repo.get_donor(donor_id)
        if donor is None:
            return None
        records = self._repo.list_donations_for_donor(donor_id)
        summary = aggregate([Donation(**r) for r in records])

        candidates = [d for d in (donor["last_donated"], summary.most_recent_donation_date) if d]
        eligibility = compute_eligibility(max(candidates) if candidates else None, self._clock())
        ELIGIBILITY_EVALUATIONS.labels(state=eligibility.state.value).inc()

        return {
            **donor,
            "donations": [_donation_view(r) for r in records],
            "summary": summary,
            "eligibility": eligibility,
        }

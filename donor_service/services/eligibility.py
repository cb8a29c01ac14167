# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Donor eligibility — pure computation, no side effects.
"""

from datetime import datetime, timedelta
from typing import Optional

from donor_service.models.domain import EligibilityState, EligibilityStatus

RECENT_DONATION_DAYS = 14
ELIGIBILITY_WINDOW_DAYS = 56

_ONE_DAY = timedelta(days=1)


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days from ``earlier`` to ``later``, truncated toward zero."""
    return int((later - earlier) / _ONE_DAY)


def compute_eligibility(
    last_donated: Optional[datetime],
    now: datetime,
) -> EligibilityStatus:
    """
    Classify a donor against the donation interval.

    Bands: fewer than 14 days is ``recently_donated``; 14 through 56 days
    inclusive is ``not_yet_eligible`` with progress toward the 56-day
    window; anything beyond 56 days is ``eligible``. A donor who never
    donated is ``ready_to_donate``.
    Pure function: the caller supplies ``now``.
    """
    if last_donated is None:
        return EligibilityStatus(state=EligibilityState.READY_TO_DONATE)

    days_since = days_between(last_donated, now)

    if days_since < RECENT_DONATION_DAYS:
        return EligibilityStatus(
            state=EligibilityState.RECENTLY_DONATED, days_since=days_since,
        )
    if days_since <= ELIGIBILITY_WINDOW_DAYS:
        progress = min(max(days_since / ELIGIBILITY_WINDOW_DAYS, 0.0), 1.0)
        return EligibilityStatus(
            state=EligibilityState.NOT_YET_ELIGIBLE,
            days_since=days_since,
            progress_fraction=progress,
        )
    return EligibilityStatus(state=EligibilityState.ELIGIBLE, days_since=days_since)

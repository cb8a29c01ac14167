# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Donation history aggregation — pure computation, no side effects.
"""

from typing import Sequence

from donor_service.models.domain import Donation, DonationSummary


def inventory_tracked_count(donation: Donation) -> int:
    """Number of inventory entries; zero means the donation is not in inventory."""
    return len(donation.inventory)


def aggregate(donations: Sequence[Donation]) -> DonationSummary:
    """Summarise a donor's donations. Input order is irrelevant."""
    if not donations:
        return DonationSummary()
    return DonationSummary(
        total_donations=len(donations),
        total_units=sum(d.quantity for d in donations),
        most_recent_donation_date=max(d.donation_date for d in donations),
        tracked_donations=sum(1 for d in donations if inventory_tracked_count(d) > 0),
    )

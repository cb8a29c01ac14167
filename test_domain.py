"""
Donor Service — Domain Unit Tests
==================================
Pure eligibility and aggregation logic, no HTTP and no database.
Run:  pytest test_domain.py -v
"""
import itertools
from datetime import date, datetime, timedelta, timezone

import pytest

from donor_service.middleware import normalise_path
from donor_service.models.domain import Donation, EligibilityState, InventoryEntry
from donor_service.schemas import parse_timestamp
from donor_service.services.aggregation import aggregate, inventory_tracked_count
from donor_service.services.eligibility import (
    ELIGIBILITY_WINDOW_DAYS,
    RECENT_DONATION_DAYS,
    compute_eligibility,
    days_between,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _donation(days_ago, quantity=1, entries=0, donation_id=None):
    when = NOW - timedelta(days=days_ago)
    return Donation(
        id=donation_id,
        donor_id=1,
        donation_date=when,
        quantity=quantity,
        inventory=[
            InventoryEntry(blood_type="O+", units=1, expiry_date=when + timedelta(days=42))
            for _ in range(entries)
        ],
    )


# ═══════════════════════════════════════════════════════════════════════════
# ELIGIBILITY
# ═══════════════════════════════════════════════════════════════════════════
class TestComputeEligibility:
    def test_never_donated_is_ready(self):
        status = compute_eligibility(None, NOW)
        assert status.state == EligibilityState.READY_TO_DONATE
        assert status.days_since is None
        assert status.progress_fraction is None

    def test_never_donated_ignores_now(self):
        far_future = NOW + timedelta(days=10_000)
        assert compute_eligibility(None, far_future).state == EligibilityState.READY_TO_DONATE

    def test_five_days_ago_recently_donated(self):
        status = compute_eligibility(NOW - timedelta(days=5), NOW)
        assert status.state == EligibilityState.RECENTLY_DONATED
        assert status.days_since == 5
        assert status.progress_fraction is None

    def test_thirty_days_ago_not_yet_eligible(self):
        status = compute_eligibility(NOW - timedelta(days=30), NOW)
        assert status.state == EligibilityState.NOT_YET_ELIGIBLE
        assert status.days_since == 30
        assert status.progress_fraction == pytest.approx(30 / 56)

    def test_sixty_days_ago_eligible(self):
        status = compute_eligibility(NOW - timedelta(days=60), NOW)
        assert status.state == EligibilityState.ELIGIBLE
        assert status.days_since == 60
        assert status.progress_fraction is None

    def test_donated_today_recently_donated(self):
        status = compute_eligibility(NOW - timedelta(hours=3), NOW)
        assert status.state == EligibilityState.RECENTLY_DONATED
        assert status.days_since == 0

    @pytest.mark.parametrize("days, expected", [
        (13, EligibilityState.RECENTLY_DONATED),
        (14, EligibilityState.NOT_YET_ELIGIBLE),
        (55, EligibilityState.NOT_YET_ELIGIBLE),
        (56, EligibilityState.NOT_YET_ELIGIBLE),
        (57, EligibilityState.ELIGIBLE),
    ])
    def test_band_boundaries(self, days, expected):
        assert compute_eligibility(NOW - timedelta(days=days), NOW).state == expected

    def test_partial_days_are_truncated(self):
        status = compute_eligibility(NOW - timedelta(days=13, hours=23, minutes=59), NOW)
        assert status.days_since == 13
        assert status.state == EligibilityState.RECENTLY_DONATED

    def test_progress_at_window_edges(self):
        at_start = compute_eligibility(NOW - timedelta(days=RECENT_DONATION_DAYS), NOW)
        at_end = compute_eligibility(NOW - timedelta(days=ELIGIBILITY_WINDOW_DAYS), NOW)
        assert at_start.progress_fraction == pytest.approx(0.25)
        assert at_end.progress_fraction == 1.0

    def test_future_timestamp_counts_as_recent(self):
        status = compute_eligibility(NOW + timedelta(days=2), NOW)
        assert status.state == EligibilityState.RECENTLY_DONATED
        assert status.days_since == -2

    def test_days_between_truncates_toward_zero(self):
        assert days_between(NOW, NOW + timedelta(hours=36)) == 1
        assert days_between(NOW, NOW - timedelta(hours=12)) == 0


# ═══════════════════════════════════════════════════════════════════════════
# AGGREGATION
# ═══════════════════════════════════════════════════════════════════════════
class TestAggregate:
    def test_empty(self):
        summary = aggregate([])
        assert summary.total_donations == 0
        assert summary.total_units == 0
        assert summary.most_recent_donation_date is None
        assert summary.tracked_donations == 0

    def test_totals(self):
        summary = aggregate([_donation(100, quantity=1), _donation(40, quantity=2), _donation(5, quantity=3)])
        assert summary.total_donations == 3
        assert summary.total_units == 6

    def test_invariant_under_reordering(self):
        items = [_donation(100, quantity=1), _donation(5, quantity=4), _donation(40, quantity=2)]
        summaries = {
            (s.total_donations, s.total_units, s.most_recent_donation_date)
            for s in (aggregate(list(p)) for p in itertools.permutations(items))
        }
        assert summaries == {(3, 7, NOW - timedelta(days=5))}

    def test_most_recent_is_maximum_not_first(self):
        ascending = [_donation(90), _donation(60), _donation(2)]
        assert aggregate(ascending).most_recent_donation_date == NOW - timedelta(days=2)

    def test_tracked_donations(self):
        summary = aggregate([_donation(10, entries=2), _donation(20), _donation(30, entries=1)])
        assert summary.tracked_donations == 2

    def test_inventory_tracked_count(self):
        assert inventory_tracked_count(_donation(1)) == 0
        assert inventory_tracked_count(_donation(1, entries=3)) == 3


# ═══════════════════════════════════════════════════════════════════════════
# TIMESTAMP PARSING & PATH NORMALISATION
# ═══════════════════════════════════════════════════════════════════════════
class TestParseTimestamp:
    def test_date_string_is_midnight_utc(self):
        assert parse_timestamp("2026-01-15") == datetime(2026, 1, 15, tzinfo=timezone.utc)

    def test_zulu_datetime(self):
        assert parse_timestamp("2026-01-15T08:30:00Z") == datetime(2026, 1, 15, 8, 30, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        parsed = parse_timestamp("2026-01-15T10:00:00+02:00")
        assert parsed == datetime(2026, 1, 15, 8, 0, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(0)

    def test_naive_datetime_assumed_utc(self):
        assert parse_timestamp(datetime(2026, 1, 15, 8)) == datetime(2026, 1, 15, 8, tzinfo=timezone.utc)

    def test_date_object(self):
        assert parse_timestamp(date(2026, 1, 15)) == datetime(2026, 1, 15, tzinfo=timezone.utc)

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_blank_is_none(self, blank):
        assert parse_timestamp(blank) is None

    @pytest.mark.parametrize("bad", ["yesterday", "2026-13-45", 12345])
    def test_invalid_raises(self, bad):
        with pytest.raises(ValueError):
            parse_timestamp(bad)


class TestNormalisePath:
    def test_ids_collapsed(self):
        assert normalise_path("/donors/42/donations") == "/donors/{param}/donations"
        assert normalise_path("/donations/7") == "/donations/{param}"

    def test_root(self):
        assert normalise_path("/") == "/"

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""
from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "donor_requests_total",
    "Total HTTP requests to the donor service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "donor_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "donor_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
DONORS_CREATED = Counter(
    "donors_created_total", "Total donors registered", ["blood_type"]
)
DONORS_DELETED = Counter(
    "donors_deleted_total", "Total donors deleted"
)
DONORS_TOTAL = Gauge(
    "donors_total", "Current number of registered donors"
)
DONATIONS_RECORDED = Counter(
    "donations_recorded_total", "Total donations recorded", ["blood_type"]
)
DONATION_UNITS = Counter(
    "donation_units_total", "Total units of blood recorded"
)
ELIGIBILITY_EVALUATIONS = Counter(
    "donor_eligibility_evaluations_total",
    "Eligibility evaluations by resulting state",
    ["state"],
)

"""Prometheus metric definitions."""

from prometheus_client import Counter

# ============================================================
# REGISTRY METRICS
# ============================================================

BACKEND_REGISTRATIONS = Counter(
    "backend_registrations_total",
    "Backend descriptors appended to a registry",
    ["kind"],
)

# ============================================================
# REVERSE INDEX METRICS
# ============================================================

REVERSE_INDEX_RECORDS = Counter(
    "reverse_index_records_total",
    "Instance to backend mappings recorded",
    ["backend"],
)

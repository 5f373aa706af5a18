from prometheus_client import Counter

# --- Interaction Metrics ---
PAIR_ASSESSMENTS = Counter(
    "pair_assessments_total",
    "Total number of drug pair assessments",
    ["outcome"]  # e.g., "assessed", "degraded"
)

DRUG_LOOKUP_FAILURES = Counter(
    "drug_lookup_failures_total",
    "Total number of drug lookups that did not return a drug",
    ["reason"]  # e.g., "not_found", "unreachable", "timeout", "error"
)

"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "douanier_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "douanier_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "douanier_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Session Metrics
# ============================================================

sessions_created_total = Counter(
    "douanier_sessions_created_total",
    "Total authentication sessions created",
)

sessions_verified_total = Counter(
    "douanier_sessions_verified_total",
    "Total authentication sessions verified",
    ["source"],
)

sessions_expired_total = Counter(
    "douanier_sessions_expired_total",
    "Total pending sessions dropped after expiry",
    ["path"],
)

verification_failures_total = Counter(
    "douanier_verification_failures_total",
    "Total failed payment verifications",
)

pending_sessions = Gauge(
    "douanier_pending_sessions",
    "Sessions currently waiting for payment",
)

verified_sessions = Gauge(
    "douanier_verified_sessions",
    "Sessions currently verified",
)

# ============================================================
# Ledger Metrics
# ============================================================

ledger_requests_total = Counter(
    "douanier_ledger_requests_total",
    "Total ledger RPC requests",
    ["method"],
)

ledger_errors_total = Counter(
    "douanier_ledger_errors_total",
    "Total ledger errors",
    ["operation", "error_type"],
)

ledger_request_duration_seconds = Histogram(
    "douanier_ledger_request_duration_seconds",
    "Ledger RPC request duration in seconds",
    ["method"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

circuit_breaker_state = Gauge(
    "douanier_circuit_breaker_state",
    "Circuit breaker state (0=closed, 1=open, 2=half_open)",
    ["service"],
)

"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Auth metrics
auth_attempts = Counter(
    'auth_attempts_total',
    'Authentication attempts',
    ['action', 'result']  # signup/login/token, success/failure
)

# Store metrics
store_operations = Counter(
    'store_operations_total',
    'Store write operations',
    ['operation', 'result']  # success, conflict, error
)

password_hash_latency = Histogram(
    'password_hash_latency_seconds',
    'Time spent hashing or verifying a password',
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)


def metrics_endpoint() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_auth_attempt(action: str, success: bool):
    """Record signup, login or token check outcome."""
    result = "success" if success else "failure"
    auth_attempts.labels(action=action, result=result).inc()


def record_store_operation(operation: str, result: str):
    """Record store write. Result: success, conflict, error"""
    store_operations.labels(operation=operation, result=result).inc()

"""Prometheus metrics for ledger mutations, storage health and identity distribution"""

from prometheus_client import Counter, Histogram

# Ledger metrics
mutation_counter = Counter(
    "orbit_transaction_mutations_total",
    "Transaction list mutations applied",
    ["operation"],  # add | edit | delete
)

storage_failure_counter = Counter(
    "orbit_storage_failures_total",
    "Key-value storage operations that failed and were recovered",
    ["operation"],  # load | save
)

identity_counter = Counter(
    "orbit_identity_total",
    "Financial identities computed",
    ["identity"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_mutation(operation: str) -> None:
    mutation_counter.labels(operation=operation).inc()


def record_storage_failure(operation: str) -> None:
    storage_failure_counter.labels(operation=operation).inc()


def record_identity(identity: str) -> None:
    identity_counter.labels(identity=identity).inc()

"""
Prometheus metrics for store round-trips.

Tracks statement durations, slow statements and store failures surfaced
as StoreFailure.
"""

from roster.utils.metrics._helpers import (
    _get_or_create_counter,
    _get_or_create_histogram,
)

db_query_duration_seconds = _get_or_create_histogram(
    "db_query_duration_seconds",
    "Database query duration in seconds",
    ["operation"],  # select, insert, update, delete
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

db_slow_queries_total = _get_or_create_counter(
    "db_slow_queries_total",
    "Total number of slow database queries (exceeding threshold)",
    ["operation"],
)

store_failures_total = _get_or_create_counter(
    "store_failures_total",
    "Total store operations that failed and were surfaced as StoreFailure",
    ["operation"],  # content, count, save, find
)

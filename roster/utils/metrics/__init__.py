"""
Prometheus metrics definitions.

All metrics are re-exported here:

    from roster.utils.metrics import pagination_count_skipped_total
    from roster.utils.metrics import db_query_duration_seconds
"""

from roster.utils.metrics.database import (
    db_query_duration_seconds,
    db_slow_queries_total,
    store_failures_total,
)
from roster.utils.metrics.pagination import (
    pagination_count_queries_total,
    pagination_count_skipped_total,
    pagination_requests_total,
)

__all__ = [
    "db_query_duration_seconds",
    "db_slow_queries_total",
    "store_failures_total",
    "pagination_requests_total",
    "pagination_count_queries_total",
    "pagination_count_skipped_total",
]

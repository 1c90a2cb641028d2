"""
Prometheus metrics for paginated searches.

The ratio between count_queries and count_skipped shows how often the
count-skip strategy avoids the second round-trip.
"""

from roster.utils.metrics._helpers import _get_or_create_counter

pagination_requests_total = _get_or_create_counter(
    "pagination_requests_total",
    "Total paginated queries executed",
    ["strategy"],
)

pagination_count_queries_total = _get_or_create_counter(
    "pagination_count_queries_total",
    "Total COUNT queries issued to determine a page total",
    ["strategy"],
)

pagination_count_skipped_total = _get_or_create_counter(
    "pagination_count_skipped_total",
    "Total pages whose total was inferred from a short page",
    ["strategy"],
)

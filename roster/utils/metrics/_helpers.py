"""
Helper functions for Prometheus metric registration.

These functions prevent duplicate registration errors when a module
defining metrics is imported more than once (test reloads, multiple
engines) by retrieving existing metrics from the registry.
"""

from prometheus_client import REGISTRY, Counter, Histogram


def _get_or_create_counter(
    name: str, doc: str, labels: list[str] | None = None
) -> Counter:
    """
    Get existing counter or create new one.

    Args:
        name: Metric name.
        doc: Metric documentation.
        labels: Optional list of label names.

    Returns:
        Counter instance.
    """
    try:
        return Counter(name, doc, labels or [])
    except ValueError:
        # Metric already exists, retrieve it from registry
        return REGISTRY._names_to_collectors[name]


def _get_or_create_histogram(
    name: str,
    doc: str,
    labels: list[str] | None = None,
    buckets: tuple[float, ...] | None = None,
) -> Histogram:
    """
    Get existing histogram or create new one.

    Args:
        name: Metric name.
        doc: Metric documentation.
        labels: Optional list of label names.
        buckets: Optional histogram buckets.

    Returns:
        Histogram instance.
    """
    try:
        if buckets:
            return Histogram(name, doc, labels or [], buckets=buckets)
        return Histogram(name, doc, labels or [])
    except ValueError:
        # Metric already exists, retrieve it from registry
        return REGISTRY._names_to_collectors[name]

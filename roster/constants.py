"""
Application-level constants for hardcoded query behavior.

These values are part of how queries are built and parsed and should NEVER
be changed via environment variables. For configurable values (connection
pools, page size defaults, log levels), see roster/settings.py.
"""

# ============================================================================
# Pagination
# ============================================================================

# Label of the windowed COUNT(*) OVER () column added by the single-call
# strategy. Must not collide with any projection column label.
TOTAL_COUNT_LABEL = "__total_count"

# Label used by derived count queries
COUNT_LABEL = "total"


# ============================================================================
# Logging
# ============================================================================

# Maximum size of a single JSON log line before the message gets truncated
MAX_LOG_SIZE_BYTES = 65536

# Statement preview length for slow query logs
SLOW_QUERY_PREVIEW_CHARS = 500

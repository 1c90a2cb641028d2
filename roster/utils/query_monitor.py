"""
Database query performance monitoring.

Provides SQLAlchemy event listeners for tracking query execution times
and identifying slow queries. Listeners are attached to the Engine class,
so they also cover the sync engine behind every AsyncEngine.
"""

import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

from roster.constants import SLOW_QUERY_PREVIEW_CHARS
from roster.logging import logger
from roster.settings import app_settings
from roster.utils.metrics import (
    db_query_duration_seconds,
    db_slow_queries_total,
)


def _get_query_operation(statement: str) -> str:
    """
    Extract the operation type from a SQL statement.

    Args:
        statement: SQL statement string.

    Returns:
        Operation type (select, insert, update, delete, other).
    """
    statement_lower = statement.strip().lower()

    if statement_lower.startswith("select"):
        return "select"
    elif statement_lower.startswith("insert"):
        return "insert"
    elif statement_lower.startswith("update"):
        return "update"
    elif statement_lower.startswith("delete"):
        return "delete"
    else:
        return "other"


def before_cursor_execute(  # type: ignore[no-untyped-def]
    conn, cursor, statement, parameters, context, executemany
):
    """Record the start time of a statement on its execution context."""
    context._query_start_time = time.perf_counter()


def after_cursor_execute(  # type: ignore[no-untyped-def]
    conn, cursor, statement, parameters, context, executemany
):
    """
    Observe the statement duration and log it when slow.

    Args:
        conn: Database connection.
        cursor: Database cursor.
        statement: SQL statement executed.
        parameters: Query parameters.
        context: Execution context.
        executemany: Whether executing multiple statements.
    """
    start_time = getattr(context, "_query_start_time", None)
    if start_time is None:
        return

    duration = time.perf_counter() - start_time
    operation = _get_query_operation(statement)

    db_query_duration_seconds.labels(operation=operation).observe(duration)

    if duration > app_settings.SLOW_QUERY_THRESHOLD:
        db_slow_queries_total.labels(operation=operation).inc()

        statement_preview = (
            statement[:SLOW_QUERY_PREVIEW_CHARS] + "..."
            if len(statement) > SLOW_QUERY_PREVIEW_CHARS
            else statement
        )
        logger.warning(
            f"Slow query detected: {duration:.3f}s [{operation.upper()}] "
            f"Statement: {statement_preview}"
        )


def enable_query_monitoring() -> None:
    """
    Register the timing listeners on the Engine class.

    Safe to call more than once; listeners are only attached the first time.
    """
    if event.contains(Engine, "before_cursor_execute", before_cursor_execute):
        return

    event.listen(Engine, "before_cursor_execute", before_cursor_execute)
    event.listen(Engine, "after_cursor_execute", after_cursor_execute)
    logger.info(
        f"Database query monitoring enabled (slow query threshold: "
        f"{app_settings.SLOW_QUERY_THRESHOLD * 1000:.0f}ms)"
    )

"""
Shared pagination primitives used by all pagination strategies.

Strategies differ only in when they issue the count query. Everything else
(offset/limit math, sorting, executing content and count statements,
assembling the PageResult) lives here. Callers pass zero-argument closures
that build the content and count statements, so repositories vary the
projection, joins and filters without touching this module.
"""

from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy import Row, Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from roster.constants import COUNT_LABEL
from roster.exceptions import InvalidPageRequest, StoreFailure
from roster.logging import logger
from roster.schemas.page import PageRequest, PageResult, SortDirection, SortOrder
from roster.storage.projections import Projection
from roster.utils.metrics import store_failures_total

T = TypeVar("T")

QueryFactory = Callable[[], Select]
TotalSupplier = Callable[[], Awaitable[int]]


def to_offset_limit(pageable: PageRequest) -> tuple[int, int]:
    """
    Translate a page request into an (offset, limit) pair.

    Args:
        pageable: 0-based page request.

    Returns:
        (page * size, size)

    Raises:
        InvalidPageRequest: If page is negative or size is not positive.
    """
    if pageable.page < 0:
        raise InvalidPageRequest(
            f"Page number must not be negative, got {pageable.page}"
        )
    if pageable.size < 1:
        raise InvalidPageRequest(
            f"Page size must be positive, got {pageable.size}"
        )
    return pageable.page * pageable.size, pageable.size


def apply_sorting(
    query: Select, projection: Projection[Any], sort: tuple[SortOrder, ...]
) -> Select:
    """
    Order a query by the requested properties, then by the id column.

    Args:
        query: Statement to order.
        projection: Projection exposing the sortable properties.
        sort: Requested sort orders, possibly empty.

    Returns:
        The ordered statement.

    Raises:
        InvalidPageRequest: If a property is not sortable on the projection.
    """
    clauses = []
    sorted_by_id = False
    for order in sort:
        column = projection.sortable.get(order.property)
        if column is None:
            raise InvalidPageRequest(
                f"Cannot sort {projection.name} by '{order.property}'"
            )
        if column is projection.id_column:
            sorted_by_id = True
        clauses.append(
            column.desc() if order.direction == SortDirection.DESC else column.asc()
        )
    if not sorted_by_id:
        clauses.append(projection.id_column.asc())
    return query.order_by(*clauses)


def build_content_query(
    query: Select, projection: Projection[Any], pageable: PageRequest
) -> Select:
    """Apply sorting and the offset/limit slice of pageable to query."""
    offset, limit = to_offset_limit(pageable)
    return apply_sorting(query, projection, pageable.sort).offset(offset).limit(limit)


def derive_count_query(query: Select) -> Select:
    """
    Count the rows a content query would return, ignoring any slice.

    Wraps the statement in a subquery, so joins that duplicate rows are
    counted as duplicates. Repositories that know a cheaper or more exact
    count should pass their own count closure instead.
    """
    inner = query.order_by(None).limit(None).offset(None).subquery()
    return select(func.count().label(COUNT_LABEL)).select_from(inner)


async def fetch_rows(
    session: AsyncSession, query: Select, projection: Projection[Any]
) -> list[Row[Any]]:
    """
    Execute a content statement and return its raw rows.

    Raises:
        StoreFailure: If the statement fails.
    """
    try:
        result = await session.exec(query)
        return list(result.all())
    except SQLAlchemyError as ex:
        store_failures_total.labels(operation="content").inc()
        logger.error(f"Error fetching {projection.name} content: {ex}")
        raise StoreFailure(
            f"Content query for {projection.name} failed", operation="content"
        ) from ex


async def run_content(
    session: AsyncSession, query: Select, projection: Projection[T]
) -> list[T]:
    """Execute a content statement and map its rows to items."""
    return projection.map_rows(await fetch_rows(session, query, projection))


async def run_count(session: AsyncSession, count_query: Select) -> int:
    """
    Execute a count statement.

    Raises:
        StoreFailure: If the statement fails.
    """
    try:
        result = await session.exec(count_query)
        total = result.scalar_one()
    except SQLAlchemyError as ex:
        store_failures_total.labels(operation="count").inc()
        logger.error(f"Error counting rows: {ex}")
        raise StoreFailure("Count query failed", operation="count") from ex
    return int(total)


async def assemble(
    content: list[T],
    pageable: PageRequest,
    total_supplier: TotalSupplier,
    *,
    infer_total: bool = True,
) -> PageResult[T]:
    """
    Build the PageResult, calling total_supplier at most once.

    With infer_total, a page shorter than the page size is taken as the
    last page and its total is offset + len(content) without calling the
    supplier. That inference only holds when the short page was reached
    from the start; an empty page requested past the end reports its own
    offset, which is logged as a warning.

    Args:
        content: Items of the page.
        pageable: The originating page request.
        total_supplier: Coroutine factory returning the true total.
        infer_total: Whether a short page may skip the supplier.

    Returns:
        The assembled page.
    """
    offset, limit = to_offset_limit(pageable)

    if infer_total and len(content) < limit:
        if not content and offset > 0:
            logger.warning(
                f"Empty page at offset {offset}: total inferred as {offset}, "
                f"which is only accurate if the previous page was full"
            )
        total = offset + len(content)
    else:
        total = await total_supplier()

    return PageResult(content=content, total_elements=total, pageable=pageable)

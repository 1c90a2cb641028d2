"""
Single-call pagination strategy (content and total in one statement).

Adds a COUNT(*) OVER () column to the content statement so every returned
row also carries the number of rows matching the filter. Only suitable for
simple member/team lookups: the windowed total counts joined rows, so a
one-to-many join or a GROUP BY makes it diverge from the number of
distinct records. Never use it as the default for such queries.
"""

from typing import TypeVar

from sqlalchemy import func
from sqlmodel.ext.asyncio.session import AsyncSession

from roster.constants import TOTAL_COUNT_LABEL
from roster.logging import logger
from roster.schemas.page import PageRequest, PageResult, PaginationStrategyType
from roster.storage.pagination.support import (
    QueryFactory,
    assemble,
    build_content_query,
    derive_count_query,
    fetch_rows,
    run_count,
    to_offset_limit,
)
from roster.storage.projections import Projection
from roster.utils.metrics import (
    pagination_count_queries_total,
    pagination_requests_total,
)

T = TypeVar("T")


class FetchResultsPaginationStrategy:
    """
    Content plus auto-derived total in one round-trip.

    Pros:
    - One statement for any page that has rows

    Cons:
    - Total is a window over the joined rows; fan-out joins over-count
    - An empty page carries no total, so a page past the end needs a
      separate count statement

    Example:
        ```python
        strategy = FetchResultsPaginationStrategy(session)
        page = await strategy.paginate(
            PageRequest.of(0, 20), MEMBER_TEAM, lambda: MEMBER_TEAM.select()
        )
        ```
    """

    strategy_type = PaginationStrategyType.SINGLE_CALL

    def __init__(self, session: AsyncSession):
        """
        Args:
            session: SQLModel async session for database queries.
        """
        self.session = session

    async def paginate(
        self,
        pageable: PageRequest,
        projection: Projection[T],
        content_query: QueryFactory,
        count_query: QueryFactory | None = None,
    ) -> PageResult[T]:
        offset, _ = to_offset_limit(pageable)
        pagination_requests_total.labels(strategy=self.strategy_type.value).inc()

        base = content_query()
        windowed = base.add_columns(func.count().over().label(TOTAL_COUNT_LABEL))
        query = build_content_query(windowed, projection, pageable)

        # Raw rows are kept to read the windowed total
        rows = await fetch_rows(self.session, query, projection)
        content = projection.map_rows(rows)

        async def total_supplier() -> int:
            if rows:
                return int(rows[0]._mapping[TOTAL_COUNT_LABEL])
            if offset == 0:
                return 0
            # Slice past the end: no row to read the window total from
            logger.debug(
                f"Empty {projection.name} page at offset {offset}, counting separately"
            )
            pagination_count_queries_total.labels(
                strategy=self.strategy_type.value
            ).inc()
            count = count_query() if count_query else derive_count_query(base)
            return await run_count(self.session, count)

        return await assemble(content, pageable, total_supplier, infer_total=False)

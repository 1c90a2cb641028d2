"""
Count-skip pagination strategy.

Runs the content statement first. A page shorter than the page size is the
last page, so its total is offset + number of rows and no count statement
is sent. Only a full page triggers the count statement.

Known limitation: the inference assumes the short page was reached by
walking pages from the start. Jumping straight to a page past the end
returns no rows and reports the page offset as the total, not the true
total. Callers that allow arbitrary page jumps and need the true total in
that case should use DualQueryPaginationStrategy.
"""

from typing import TypeVar

from sqlmodel.ext.asyncio.session import AsyncSession

from roster.schemas.page import PageRequest, PageResult, PaginationStrategyType
from roster.storage.pagination.support import (
    QueryFactory,
    assemble,
    build_content_query,
    derive_count_query,
    run_content,
    run_count,
    to_offset_limit,
)
from roster.storage.projections import Projection
from roster.utils.metrics import (
    pagination_count_queries_total,
    pagination_count_skipped_total,
    pagination_requests_total,
)

T = TypeVar("T")


class CountSkipPaginationStrategy:
    """
    Content first, count only after a full page.

    Pros:
    - One round-trip on the last (short) page and on empty results
    - Same totals as the dual-query strategy when pages are walked in order

    Cons:
    - Two round-trips on every full page
    - Reports the offset as total for an empty page past the end

    Example:
        ```python
        strategy = CountSkipPaginationStrategy(session)
        page = await strategy.paginate(
            PageRequest.of(1, 2), MEMBER_TEAM, lambda: MEMBER_TEAM.select()
        )
        ```
    """

    strategy_type = PaginationStrategyType.COUNT_SKIP

    def __init__(self, session: AsyncSession):
        self.session = session

    async def paginate(
        self,
        pageable: PageRequest,
        projection: Projection[T],
        content_query: QueryFactory,
        count_query: QueryFactory | None = None,
    ) -> PageResult[T]:
        _, limit = to_offset_limit(pageable)
        pagination_requests_total.labels(strategy=self.strategy_type.value).inc()

        base = content_query()
        content = await run_content(
            self.session, build_content_query(base, projection, pageable), projection
        )

        async def total_supplier() -> int:
            pagination_count_queries_total.labels(
                strategy=self.strategy_type.value
            ).inc()
            count = count_query() if count_query else derive_count_query(base)
            return await run_count(self.session, count)

        if len(content) < limit:
            pagination_count_skipped_total.labels(
                strategy=self.strategy_type.value
            ).inc()

        return await assemble(content, pageable, total_supplier)

"""
Dual-query pagination strategy (content statement plus count statement).

Always issues exactly two round-trips. The count statement comes from the
caller when it can be cheaper than the content statement, e.g. by leaving
out joins that only feed projection columns.
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
)
from roster.storage.projections import Projection
from roster.utils.metrics import (
    pagination_count_queries_total,
    pagination_requests_total,
)

T = TypeVar("T")


class DualQueryPaginationStrategy:
    """
    Content and total from two independent statements.

    Pros:
    - Total is always the true count of the filter
    - Count statement can skip projection-only joins

    Cons:
    - Two round-trips on every page, including the last one

    Example:
        ```python
        strategy = DualQueryPaginationStrategy(session)
        page = await strategy.paginate(
            PageRequest.of(2, 20),
            MEMBER_TEAM,
            lambda: apply_filter(MEMBER_TEAM.select(), clauses),
            lambda: apply_filter(select(func.count(Member.id)), clauses),
        )
        ```
    """

    strategy_type = PaginationStrategyType.DUAL_QUERY

    def __init__(self, session: AsyncSession):
        self.session = session

    async def paginate(
        self,
        pageable: PageRequest,
        projection: Projection[T],
        content_query: QueryFactory,
        count_query: QueryFactory | None = None,
    ) -> PageResult[T]:
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

        return await assemble(content, pageable, total_supplier, infer_total=False)

"""
Strategy factory and closure-based pagination entry point.

Repositories either pick a strategy explicitly through select_strategy()
or call apply_pagination() with closures that build their content and
count statements.
"""

from typing import TypeVar

from sqlmodel.ext.asyncio.session import AsyncSession

from roster.schemas.page import PageRequest, PageResult, PaginationStrategyType
from roster.settings import app_settings
from roster.storage.pagination.count_skip import CountSkipPaginationStrategy
from roster.storage.pagination.dual_query import DualQueryPaginationStrategy
from roster.storage.pagination.fetch_results import (
    FetchResultsPaginationStrategy,
)
from roster.storage.pagination.protocol import PaginationStrategy
from roster.storage.pagination.support import QueryFactory
from roster.storage.projections import Projection

T = TypeVar("T")

_STRATEGIES: dict[PaginationStrategyType, type] = {
    PaginationStrategyType.SINGLE_CALL: FetchResultsPaginationStrategy,
    PaginationStrategyType.DUAL_QUERY: DualQueryPaginationStrategy,
    PaginationStrategyType.COUNT_SKIP: CountSkipPaginationStrategy,
}


def default_strategy_type() -> PaginationStrategyType:
    """Strategy configured by DEFAULT_PAGINATION_STRATEGY."""
    return PaginationStrategyType(app_settings.DEFAULT_PAGINATION_STRATEGY)


def select_strategy(
    session: AsyncSession,
    strategy_type: PaginationStrategyType | str | None = None,
) -> PaginationStrategy:
    """
    Select the pagination strategy implementation.

    Args:
        session: SQLModel async session the strategy runs on.
        strategy_type: "A"/"B"/"C", a member name, or a
            PaginationStrategyType. None selects the configured default.

    Returns:
        Strategy instance bound to session.

    Raises:
        ValueError: If strategy_type names no strategy.

    Example:
        ```python
        strategy = select_strategy(session, "B")
        # Returns DualQueryPaginationStrategy
        ```
    """
    if strategy_type is None:
        strategy_type = default_strategy_type()
    return _STRATEGIES[PaginationStrategyType(strategy_type)](session)


async def apply_pagination(
    session: AsyncSession,
    pageable: PageRequest,
    projection: Projection[T],
    content_query: QueryFactory,
    count_query: QueryFactory | None = None,
    strategy_type: PaginationStrategyType | str | None = None,
) -> PageResult[T]:
    """
    Paginate the statements built by the given closures.

    Args:
        session: SQLModel async session for database queries.
        pageable: Page request.
        projection: Result shape.
        content_query: Builds the filtered content statement.
        count_query: Builds the count statement; derived when None.
        strategy_type: Strategy to use; the configured default when None.

    Returns:
        The requested page.

    Example:
        ```python
        page = await apply_pagination(
            session,
            PageRequest.of(0, 10),
            MEMBER,
            lambda: apply_filter(MEMBER.select(), compose(condition)),
            lambda: apply_filter(select(func.count(Member.id)), compose(condition)),
        )
        ```
    """
    strategy = select_strategy(session, strategy_type)
    return await strategy.paginate(pageable, projection, content_query, count_query)

"""
Protocol definition for pagination strategies.

Uses structural subtyping (Protocol) to define the interface for pagination
strategies without requiring explicit inheritance, the same way
roster.protocols.Repository describes repositories.
"""

from typing import Protocol, TypeVar

from roster.schemas.page import PageRequest, PageResult, PaginationStrategyType
from roster.storage.pagination.support import QueryFactory
from roster.storage.projections import Projection

T = TypeVar("T")


class PaginationStrategy(Protocol):
    """
    Protocol for pagination strategies.

    All strategies return the same PageResult for the same inputs on a
    dataset without join fan-out; they differ only in how many round-trips
    they need to find the total.

    Example:
        ```python
        class CustomPaginationStrategy:
            async def paginate(
                self,
                pageable: PageRequest,
                projection: Projection[T],
                content_query: QueryFactory,
                count_query: QueryFactory | None = None,
            ) -> PageResult[T]:
                ...


        strategy: PaginationStrategy = CustomPaginationStrategy()
        ```
    """

    strategy_type: PaginationStrategyType

    async def paginate(
        self,
        pageable: PageRequest,
        projection: Projection[T],
        content_query: QueryFactory,
        count_query: QueryFactory | None = None,
    ) -> PageResult[T]:
        """
        Fetch one page and determine the total.

        Args:
            pageable: 0-based page request with optional sort.
            projection: Result shape; maps rows and exposes sortable columns.
            content_query: Builds the filtered, joined, unsorted and
                unpaginated content statement.
            count_query: Builds a statement returning the total row count.
                If None, the count is derived from the content statement.

        Returns:
            The page with its total.

        Raises:
            InvalidPageRequest: If pageable cannot be applied.
            StoreFailure: If a store call fails.
        """
        ...

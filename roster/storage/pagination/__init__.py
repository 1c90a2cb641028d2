"""
Pagination strategies for member/team queries.

Three interchangeable strategies compute a page and its total:

- FetchResultsPaginationStrategy (A): one statement, windowed total
- DualQueryPaginationStrategy (B): content statement + count statement
- CountSkipPaginationStrategy (C): count statement only after a full page

Example:
    ```python
    from roster.storage.pagination import apply_pagination
    from roster.storage.projections import MEMBER_TEAM

    page = await apply_pagination(
        session, PageRequest.of(0, 20), MEMBER_TEAM, MEMBER_TEAM.select
    )
    ```
"""

from roster.storage.pagination.count_skip import CountSkipPaginationStrategy
from roster.storage.pagination.dual_query import DualQueryPaginationStrategy
from roster.storage.pagination.factory import apply_pagination, select_strategy
from roster.storage.pagination.fetch_results import (
    FetchResultsPaginationStrategy,
)
from roster.storage.pagination.protocol import PaginationStrategy

__all__ = [
    "PaginationStrategy",
    "FetchResultsPaginationStrategy",
    "DualQueryPaginationStrategy",
    "CountSkipPaginationStrategy",
    "apply_pagination",
    "select_strategy",
]

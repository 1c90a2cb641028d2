"""
Repository for Member entity with search and pagination.

Searches accept a MemberSearchCondition whose present criteria are combined
with AND; absent criteria are left out of the statement entirely. Results
come back either as a list or as a PageResult computed by one of the three
pagination strategies.

Example:
    ```python
    from roster.repositories.member_repository import MemberRepository
    from roster.storage.db import session_scope

    async with session_scope() as session:
        repo = MemberRepository(session)
        condition = MemberSearchCondition(age_goe=20)
        rows = await repo.search(condition)
        page = await repo.search_page(condition, PageRequest.of(0, 2))
    ```
"""

from sqlalchemy import Select, func, select as sa_select
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from roster.exceptions import StoreFailure
from roster.logging import logger
from roster.models.member import Member
from roster.repositories.base import BaseRepository
from roster.schemas.condition import MemberSearchCondition
from roster.schemas.member_team import MemberTeamDto
from roster.schemas.page import PageRequest, PageResult, PaginationStrategyType
from roster.storage.pagination import apply_pagination, select_strategy
from roster.storage.pagination.support import run_content
from roster.storage.predicates import (
    age_between,
    apply_filter,
    compose,
    requires_team_join,
    team_name_eq,
    username_eq,
)
from roster.storage.projections import MEMBER, MEMBER_TEAM, Projection, join_team
from roster.utils.metrics import store_failures_total


class MemberRepository(BaseRepository[Member]):
    """
    Repository for Member entity operations.

    Provides save/find operations inherited from BaseRepository plus
    condition-based searches over member LEFT JOIN team.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize Member repository.

        Args:
            session: Database session for executing queries.
        """
        super().__init__(session, Member)

    async def find_by_username(self, username: str) -> list[Member]:
        """
        Get members with exactly this username, ordered by id.

        Args:
            username: Username to match.

        Returns:
            Matching members; usernames are not unique.
        """
        try:
            stmt = (
                select(Member)
                .where(Member.username == username)
                .order_by(Member.id)
            )
            result = await self.session.exec(stmt)
            return list(result.all())
        except SQLAlchemyError as e:
            store_failures_total.labels(operation="find").inc()
            logger.error(f"Error retrieving members named {username!r}: {e}")
            raise StoreFailure(
                f"Could not load members named {username!r}", operation="find"
            ) from e

    def _content_query(
        self, projection: Projection, condition: MemberSearchCondition
    ) -> Select:
        return apply_filter(projection.select(), compose(condition))

    def _count_query(self, condition: MemberSearchCondition) -> Select:
        # The team join only matters when a team criterion filters rows
        query = sa_select(func.count(Member.id)).select_from(Member)
        if requires_team_join(condition):
            query = join_team(query)
        return apply_filter(query, compose(condition))

    async def search(self, condition: MemberSearchCondition) -> list[MemberTeamDto]:
        """
        Find all member/team rows matching the condition, ordered by member id.

        Args:
            condition: Search criteria; an empty condition returns every member.

        Returns:
            Flat member/team rows. Members without a team have None team fields.
        """
        logger.debug(f"Searching members: {condition.to_dict()}")
        query = self._content_query(MEMBER_TEAM, condition).order_by(Member.id)
        return await run_content(self.session, query, MEMBER_TEAM)

    async def search_member(self, condition: MemberSearchCondition) -> list[Member]:
        """
        Find member entities matching the condition, ordered by id.

        Same criteria as search(); the age bounds are applied together as
        a closed interval.

        Args:
            condition: Search criteria.

        Returns:
            Matching Member entities.
        """
        clauses = [
            clause
            for clause in (
                username_eq(condition.username),
                team_name_eq(condition.team_name),
                age_between(condition.age_goe, condition.age_loe),
            )
            if clause is not None
        ]
        query = apply_filter(MEMBER.select(), clauses).order_by(Member.id)
        return await run_content(self.session, query, MEMBER)

    async def search_page(
        self,
        condition: MemberSearchCondition,
        pageable: PageRequest,
        strategy: PaginationStrategyType | str | None = None,
    ) -> PageResult[MemberTeamDto]:
        """
        Find one page of member/team rows matching the condition.

        Args:
            condition: Search criteria.
            pageable: 0-based page request; ordered by member id unless a
                sort is given.
            strategy: "A", "B" or "C" (see PaginationStrategyType). Defaults
                to the configured strategy, count-skip out of the box.

        Returns:
            The page and the total number of matching rows.

        Raises:
            InvalidPageRequest: If pageable has a negative page, a
                non-positive size or an unknown sort property.
            StoreFailure: If a store call fails.
        """
        pagination = select_strategy(self.session, strategy)
        strategy_name = pagination.strategy_type.value
        logger.debug(
            f"Searching member page {pageable.page} (size {pageable.size}): "
            f"{condition.to_dict()}",
            extra={"strategy": strategy_name},
        )

        page = await pagination.paginate(
            pageable,
            MEMBER_TEAM,
            lambda: self._content_query(MEMBER_TEAM, condition),
            lambda: self._count_query(condition),
        )
        logger.debug(
            f"Member page ready: {page.to_metadata()}",
            extra={"strategy": strategy_name},
        )
        return page

    async def search_page_simple(
        self, condition: MemberSearchCondition, pageable: PageRequest
    ) -> PageResult[MemberTeamDto]:
        """Single statement with windowed total. Best-effort, see FetchResultsPaginationStrategy."""
        return await self.search_page(
            condition, pageable, PaginationStrategyType.SINGLE_CALL
        )

    async def search_page_complex(
        self, condition: MemberSearchCondition, pageable: PageRequest
    ) -> PageResult[MemberTeamDto]:
        """Separate content and count statements."""
        return await self.search_page(
            condition, pageable, PaginationStrategyType.DUAL_QUERY
        )

    async def search_page_optimized(
        self, condition: MemberSearchCondition, pageable: PageRequest
    ) -> PageResult[MemberTeamDto]:
        """Count statement only when the page is full."""
        return await self.search_page(
            condition, pageable, PaginationStrategyType.COUNT_SKIP
        )

    async def search_member_page(
        self,
        condition: MemberSearchCondition,
        pageable: PageRequest,
    ) -> PageResult[Member]:
        """
        Find one page of Member entities matching the condition.

        Built with apply_pagination closures: the content statement selects
        entities over the team join, the count statement counts member ids
        and joins team only for a team criterion.

        Args:
            condition: Search criteria.
            pageable: 0-based page request; sortable by id, username, age.

        Returns:
            The page of entities and the total number of matches.
        """
        return await apply_pagination(
            self.session,
            pageable,
            MEMBER,
            lambda: self._content_query(MEMBER, condition),
            lambda: self._count_query(condition),
        )

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from roster.exceptions import StoreFailure
from roster.logging import logger
from roster.models.team import Team
from roster.repositories.base import BaseRepository
from roster.utils.metrics import store_failures_total


class TeamRepository(BaseRepository[Team]):
    """Persistence for teams; member searches live in MemberRepository."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Team)

    async def find_by_name(self, name: str) -> Team | None:
        """
        Get the first team with this exact name.

        Args:
            name: Team name.

        Returns:
            Team if found, None otherwise.
        """
        try:
            stmt = select(Team).where(Team.name == name).order_by(Team.id)
            result = await self.session.exec(stmt)
            return result.first()
        except SQLAlchemyError as e:
            store_failures_total.labels(operation="find").inc()
            logger.error(f"Error retrieving team {name!r}: {e}")
            raise StoreFailure(
                f"Could not load team {name!r}", operation="find"
            ) from e

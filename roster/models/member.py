from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship

from roster.models.base import BaseModel

if TYPE_CHECKING:
    from roster.models.team import Team


class Member(BaseModel, table=True):
    """
    SQLModel representing a member record.

    A member belongs to at most one team; ``team_id`` is nullable and
    "no team" is a valid state.

    Attributes:
        id: Primary key assigned by the store
        username: Login name, not unique
        age: Age in years
        team_id: Foreign key to team.id, or None
        team: The referenced team, if any
    """

    __tablename__ = "member"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(index=True)
    age: int = 0
    team_id: int | None = Field(default=None, foreign_key="team.id")

    team: Optional["Team"] = Relationship(back_populates="members")

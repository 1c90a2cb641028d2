from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from roster.models.base import BaseModel

if TYPE_CHECKING:
    from roster.models.member import Member


class Team(BaseModel, table=True):
    """
    A group that members may belong to.

    Owns the one-to-many side of the member/team association.

    Attributes:
        id: Primary key assigned by the store
        name: Team name
        members: Members referencing this team
    """

    __tablename__ = "team"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)

    members: list["Member"] = Relationship(back_populates="team")

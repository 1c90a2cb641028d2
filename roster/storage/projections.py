"""
Result shapes for member queries.

A Projection bundles what a query selects, how it joins the team table,
how a result row becomes an item, and which properties may be sorted on.
Both projections left-join team, so members without a team are kept and
team criteria can always be applied.
"""

from typing import Any, Callable, Generic, Mapping, TypeVar

from sqlalchemy import ColumnElement, Row, Select, select

from roster.models.member import Member
from roster.models.team import Team
from roster.schemas.member_team import MemberTeamDto

T = TypeVar("T")


def join_team(query: Select) -> Select:
    """member LEFT OUTER JOIN team ON member.team_id = team.id"""
    return query.outerjoin(Team, Member.team_id == Team.id)


class Projection(Generic[T]):
    """
    Describes the rows produced by a query.

    Attributes:
        name: Short name used in logs.
        columns: Entities or labelled columns to select.
        row_mapper: Turns a result row into an item of type T.
        sortable: Sort property name to column.
        id_column: Column used as ordering tie-breaker.
    """

    def __init__(
        self,
        name: str,
        columns: tuple[Any, ...],
        row_mapper: Callable[[Row[Any]], T],
        sortable: Mapping[str, ColumnElement[Any]],
        id_column: ColumnElement[Any],
    ):
        self.name = name
        self.columns = columns
        self.row_mapper = row_mapper
        self.sortable = dict(sortable)
        self.id_column = id_column

    def select(self) -> Select:
        """Unfiltered, unpaginated member/team statement for this shape."""
        return join_team(select(*self.columns).select_from(Member))

    def map_rows(self, rows: list[Row[Any]]) -> list[T]:
        return [self.row_mapper(row) for row in rows]

    def __repr__(self) -> str:
        return f"Projection({self.name!r})"


def _to_member_team_dto(row: Row[Any]) -> MemberTeamDto:
    mapping = row._mapping
    return MemberTeamDto(
        member_id=mapping["member_id"],
        username=mapping["username"],
        age=mapping["age"],
        team_id=mapping["team_id"],
        team_name=mapping["team_name"],
    )


def _to_member(row: Row[Any]) -> Member:
    return row[0]


MEMBER_TEAM: Projection[MemberTeamDto] = Projection(
    name="member_team",
    columns=(
        Member.id.label("member_id"),
        Member.username.label("username"),
        Member.age.label("age"),
        Team.id.label("team_id"),
        Team.name.label("team_name"),
    ),
    row_mapper=_to_member_team_dto,
    sortable={
        "member_id": Member.id,
        "username": Member.username,
        "age": Member.age,
        "team_id": Team.id,
        "team_name": Team.name,
    },
    id_column=Member.id,
)

MEMBER: Projection[Member] = Projection(
    name="member",
    columns=(Member,),
    row_mapper=_to_member,
    sortable={
        "id": Member.id,
        "username": Member.username,
        "age": Member.age,
    },
    id_column=Member.id,
)

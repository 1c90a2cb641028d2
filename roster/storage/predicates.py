"""
Predicate composition for member searches.

Each criterion of a MemberSearchCondition maps to at most one SQL clause.
Absent criteria produce no clause at all, so a condition with nothing set
yields a statement without a WHERE clause.

Example:
    ```python
    from sqlalchemy import select
    from roster.storage.projections import join_team

    condition = MemberSearchCondition(team_name="teamA", age_goe=20)
    query = apply_filter(join_team(select(Member)), compose(condition))
    # SELECT ... FROM member LEFT OUTER JOIN team ON ...
    # WHERE team.name = :name_1 AND member.age >= :age_1
    ```
"""

from typing import Sequence

from sqlalchemy import ColumnElement, Select, and_

from roster.models.member import Member
from roster.models.team import Team
from roster.schemas.condition import MemberSearchCondition


def has_text(value: str | None) -> bool:
    """Return True if value contains at least one non-whitespace character."""
    return value is not None and bool(value.strip())


def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return Member.username == username if has_text(username) else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return Team.name == team_name if has_text(team_name) else None


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age <= age if age is not None else None


def conjunction(
    clauses: Sequence[ColumnElement[bool] | None],
) -> ColumnElement[bool] | None:
    """
    Fold the present clauses with AND, left to right.

    Args:
        clauses: Clauses in composition order; None entries are skipped.

    Returns:
        The combined clause, or None when no clause is present.
    """
    present = [clause for clause in clauses if clause is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return and_(*present)


def age_between(
    goe: int | None, loe: int | None
) -> ColumnElement[bool] | None:
    """Closed age interval built from whichever bounds are present."""
    return conjunction([age_goe(goe), age_loe(loe)])


def compose(condition: MemberSearchCondition) -> list[ColumnElement[bool]]:
    """
    Translate a search condition into its present clauses.

    Order is stable: username, team name, minimum age, maximum age.

    Args:
        condition: Search criteria, any subset of which may be absent.

    Returns:
        One clause per present criterion; empty when nothing is set.
    """
    candidates = [
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    ]
    return [clause for clause in candidates if clause is not None]


def requires_team_join(condition: MemberSearchCondition) -> bool:
    """Whether the composed filter references the team table."""
    return has_text(condition.team_name)


def apply_filter(query: Select, clauses: Sequence[ColumnElement[bool]]) -> Select:
    """
    Attach the conjunction of clauses to a query.

    The query is returned untouched when there are no clauses.
    """
    where = conjunction(clauses)
    if where is None:
        return query
    return query.where(where)

"""
Search condition schemas.

Every criterion is optional. A criterion that is None, or a string made of
whitespace only, is absent and imposes no constraint on the search.
"""

from typing import Any

from pydantic import BaseModel, Field


class BaseFilter(BaseModel):  # type: ignore[misc]
    """
    Base class for all search condition schemas.

    Conditions are immutable value objects and reject unknown fields.
    """

    model_config = {
        "extra": "forbid",  # Reject unexpected fields
        "frozen": True,
    }

    def to_dict(self) -> dict[str, Any]:
        """
        Convert condition to dictionary, excluding None values.

        Used for logging; the predicate composer reads fields directly.

        Example:
            >>> MemberSearchCondition(username="john").to_dict()
            {'username': 'john'}
        """
        return {k: v for k, v in self.model_dump().items() if v is not None}


class MemberSearchCondition(BaseFilter):
    """
    Optional criteria for member searches.

    Present criteria are combined with AND. ``age_goe`` and ``age_loe`` are
    inclusive bounds; an inverted range (age_goe > age_loe) is accepted and
    matches nothing.

    Example:
        >>> condition = MemberSearchCondition(team_name="teamA", age_goe=20)
        >>> members = await repo.search(condition)
    """

    username: str | None = Field(
        default=None,
        description="Exact username match",
    )
    team_name: str | None = Field(
        default=None,
        description="Exact team name match",
    )
    age_goe: int | None = Field(
        default=None,
        description="Minimum age (inclusive)",
    )
    age_loe: int | None = Field(
        default=None,
        description="Maximum age (inclusive)",
    )

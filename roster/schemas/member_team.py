from pydantic import BaseModel


class MemberTeamDto(BaseModel):  # type: ignore[misc]
    """
    Flat read-only view of a member and its team.

    Produced by the member LEFT JOIN team projection; ``team_id`` and
    ``team_name`` are None for members without a team.
    """

    model_config = {"frozen": True}

    member_id: int
    username: str
    age: int
    team_id: int | None = None
    team_name: str | None = None

from roster.repositories.member_repository import MemberRepository
from roster.repositories.team_repository import TeamRepository

__all__ = ["MemberRepository", "TeamRepository"]

"""
Base model for all database tables with async relationship support.

This module provides the BaseModel class that all SQLModel table models
inherit from. It includes SQLAlchemy's AsyncAttrs mixin to enable proper
handling of lazy-loaded relationships in async contexts.
"""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlmodel import SQLModel


class BaseModel(SQLModel, AsyncAttrs):  # type: ignore[misc]
    """
    Base model for all database tables with async relationship support.

    Access lazy relationships through ``awaitable_attrs``:

        member = await session.get(Member, 1)
        team = await member.awaitable_attrs.team

    Eager loading (selectinload, joinedload) is preferred when the
    relationship is known to be needed.
    """

    pass

"""
Protocol classes for structural subtyping (duck typing with type safety).

Protocols define interfaces without requiring explicit inheritance. Any class
that implements the required methods is considered compatible.

Example:
    ```python
    from roster.protocols import Repository
    from roster.models.member import Member


    async def load(repo: Repository[Member]) -> Member | None:
        return await repo.find_by_id(1)
    ```
"""

from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Repository(Protocol[T]):
    """
    Protocol for repository pattern.

    Type Parameters:
        T: The entity type this repository manages.
    """

    async def save(self, entity: T) -> None:
        """Persist entity; the store assigns its id."""
        ...

    async def find_by_id(self, id: int) -> T | None:
        """Get entity by primary key ID, or None."""
        ...

    async def find_all(self) -> list[T]:
        """Get all entities."""
        ...

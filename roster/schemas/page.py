"""
Page request and page result schemas.

Pages are 0-based. A PageRequest is translated into an offset/limit pair by
roster.storage.pagination.support.to_offset_limit, which is also where
invalid requests are rejected; the schema itself accepts any integers so
that the rejection surfaces as InvalidPageRequest rather than a pydantic
validation error.
"""

import math
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field
from typing_extensions import Annotated

from roster.settings import app_settings

T = TypeVar("T")


class PaginationStrategyType(str, Enum):
    """
    How a page's content and total are computed.

    - SINGLE_CALL (A): one statement returning rows plus a windowed total.
      Best-effort only, miscounts under fan-out joins.
    - DUAL_QUERY (B): content query plus a separate count query.
    - COUNT_SKIP (C): content query, count query only after a full page.
    """

    SINGLE_CALL = "A"
    DUAL_QUERY = "B"
    COUNT_SKIP = "C"

    @classmethod
    def _missing_(cls, value: object) -> "PaginationStrategyType | None":
        # Accept member names as well ("count_skip", "DUAL_QUERY")
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(BaseModel):  # type: ignore[misc]
    """Sort on one projection property."""

    model_config = {"frozen": True}

    property: str
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def asc(cls, prop: str) -> "SortOrder":
        return cls(property=prop, direction=SortDirection.ASC)

    @classmethod
    def desc(cls, prop: str) -> "SortOrder":
        return cls(property=prop, direction=SortDirection.DESC)


class PageRequest(BaseModel):  # type: ignore[misc]
    """
    Requested slice of a result set.

    Attributes:
        page: 0-based page number.
        size: Number of items per page.
        sort: Sort orders applied before the id tie-breaker.

    Example:
        >>> pageable = PageRequest.of(0, 2, SortOrder.desc("age"))
        >>> pageable.next()
        PageRequest(page=1, size=2, sort=(...))
    """

    model_config = {"frozen": True}

    page: int = 0
    size: int = app_settings.DEFAULT_PAGE_SIZE
    sort: tuple[SortOrder, ...] = ()

    @classmethod
    def of(cls, page: int, size: int, *sort: SortOrder) -> "PageRequest":
        return cls(page=page, size=size, sort=tuple(sort))

    def next(self) -> "PageRequest":
        return self.model_copy(update={"page": self.page + 1})

    def previous_or_first(self) -> "PageRequest":
        return self.model_copy(update={"page": max(self.page - 1, 0)})

    def first(self) -> "PageRequest":
        return self.model_copy(update={"page": 0})


class PageResult(BaseModel, Generic[T]):  # type: ignore[misc]
    """
    A page of results together with the total number of matching rows.

    Attributes:
        content: Items of this page, in query order.
        total_elements: Number of rows matching the filter across all pages.
        pageable: The request that produced this page.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    content: list[T]
    total_elements: Annotated[int, Field(ge=0)]
    pageable: PageRequest

    @property
    def number(self) -> int:
        return self.pageable.page

    @property
    def size(self) -> int:
        return self.pageable.size

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def next_pageable(self) -> PageRequest | None:
        """Request for the following page, or None on the last page."""
        return self.pageable.next() if self.has_next else None

    def to_metadata(self) -> dict[str, Any]:
        """Summary of the page without its content (for logging)."""
        return {
            "page": self.number,
            "size": self.size,
            "total": self.total_elements,
            "pages": self.total_pages,
        }

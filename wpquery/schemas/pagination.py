# File: /wpquery/schemas/pagination.py | Version: 1.1 | Title: Page request + paged result envelopes
from __future__ import annotations

from math import ceil
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

# limit/offset are bound as 64-bit integers
MAX_BOUND = 2**63 - 1


class PageRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=20, gt=0, le=MAX_BOUND)
    offset: int = Field(default=0, ge=0, le=MAX_BOUND)

    @classmethod
    def from_page(cls, page: int, per_page: int) -> "PageRequest":
        """1-based page number -> limit/offset."""
        return cls(limit=per_page, offset=(max(page, 1) - 1) * per_page)


class PagedResult(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    total: int = 0
    limit: int
    offset: int

    def pages(self) -> int:
        return ceil(self.total / self.limit) if self.total else 0

    def page(self) -> int:
        return self.offset // self.limit + 1

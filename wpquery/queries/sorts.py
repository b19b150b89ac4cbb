# File: /wpquery/queries/sorts.py | Version: 1.1 | Title: Sort criteria and sort orders
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"

    @classmethod
    def parse(cls, value: str) -> Optional["SortDirection"]:
        v = (value or "").strip().lower()
        if v in ("asc", "ascending"):
            return cls.asc
        if v in ("desc", "descending"):
            return cls.desc
        return None

    def reverse(self) -> "SortDirection":
        return SortDirection.desc if self is SortDirection.asc else SortDirection.asc


class SortCriterion(BaseModel):
    model_config = ConfigDict(frozen=True)

    attribute: str
    direction: SortDirection = SortDirection.asc

    @classmethod
    def asc(cls, attribute: str) -> "SortCriterion":
        return cls(attribute=attribute, direction=SortDirection.asc)

    @classmethod
    def desc(cls, attribute: str) -> "SortCriterion":
        return cls(attribute=attribute, direction=SortDirection.desc)

    def reversed(self) -> "SortCriterion":
        return self.model_copy(update={"direction": self.direction.reverse()})


class SortOrder(BaseModel):
    """Tie-broken ordering; an empty order means "use the default"."""

    # copied on assignment into another model (e.g. a Query)
    model_config = ConfigDict(revalidate_instances="always")

    criteria: List[SortCriterion] = Field(default_factory=list)

    @classmethod
    def by(cls, attribute: str, direction: SortDirection) -> "SortOrder":
        return cls(criteria=[SortCriterion(attribute=attribute, direction=direction)])

    @classmethod
    def by_asc(cls, attribute: str) -> "SortOrder":
        return cls.by(attribute, SortDirection.asc)

    @classmethod
    def by_desc(cls, attribute: str) -> "SortOrder":
        return cls.by(attribute, SortDirection.desc)

    def add(self, criterion: SortCriterion) -> "SortOrder":
        self.criteria.append(criterion)
        return self

    def then(self, criterion: SortCriterion) -> "SortOrder":
        return SortOrder(criteria=[*self.criteria, criterion])

    def then_asc(self, attribute: str) -> "SortOrder":
        return self.then(SortCriterion.asc(attribute))

    def then_desc(self, attribute: str) -> "SortOrder":
        return self.then(SortCriterion.desc(attribute))

    def is_empty(self) -> bool:
        return not self.criteria

    def primary(self) -> Optional[SortCriterion]:
        return self.criteria[0] if self.criteria else None

    def sorts_by(self, attribute: str) -> bool:
        return any(c.attribute == attribute for c in self.criteria)

    def remove_sort_for(self, attribute: str) -> None:
        self.criteria = [c for c in self.criteria if c.attribute != attribute]

    def clear(self) -> None:
        self.criteria = []

    def __len__(self) -> int:
        return len(self.criteria)


def default_work_package_sort() -> SortOrder:
    return SortOrder.by_desc("id")

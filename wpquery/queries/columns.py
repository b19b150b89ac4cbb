# File: /wpquery/queries/columns.py | Version: 1.2 | Title: Display columns (feeds representers, not SQL)
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ColumnKind(str, Enum):
    property = "property"
    relation = "relation"
    custom_field = "custom_field"
    computed = "computed"


def custom_field_name(custom_field_id: int) -> str:
    return f"cf_{custom_field_id}"


class Column(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: ColumnKind = ColumnKind.property
    caption: Optional[str] = None
    sortable: bool = True
    groupable: bool = False
    custom_field_id: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_custom_field_name(cls, data):
        if isinstance(data, dict) and data.get("kind") in (ColumnKind.custom_field, "custom_field"):
            cf_id = data.get("custom_field_id")
            if cf_id is None:
                raise ValueError("custom field columns need a custom_field_id")
            data = {**data, "name": custom_field_name(int(cf_id))}
        return data

    @classmethod
    def for_property(cls, name: str) -> "Column":
        return cls(name=name, kind=ColumnKind.property, sortable=True, groupable=False)

    @classmethod
    def for_relation(cls, name: str) -> "Column":
        return cls(name=name, kind=ColumnKind.relation, sortable=False, groupable=False)

    @classmethod
    def for_custom_field(cls, custom_field_id: int) -> "Column":
        return cls(
            name=custom_field_name(custom_field_id),
            kind=ColumnKind.custom_field,
            sortable=True,
            groupable=True,
            custom_field_id=custom_field_id,
        )

    @classmethod
    def for_computed(cls, name: str) -> "Column":
        return cls(name=name, kind=ColumnKind.computed, sortable=False, groupable=False)

    def with_caption(self, caption: str) -> "Column":
        return self.model_copy(update={"caption": caption})

    def with_sortable(self, sortable: bool) -> "Column":
        return self.model_copy(update={"sortable": sortable})

    def with_groupable(self, groupable: bool) -> "Column":
        return self.model_copy(update={"groupable": groupable})

    def is_custom_field(self) -> bool:
        return self.kind == ColumnKind.custom_field

    def display_caption(self) -> str:
        return self.caption or self.name


# name -> (kind, caption, sortable, groupable)
_STANDARD: Dict[str, Tuple[ColumnKind, str, bool, bool]] = {
    "id": (ColumnKind.property, "ID", True, False),
    "subject": (ColumnKind.property, "Subject", True, False),
    "type": (ColumnKind.property, "Type", True, True),
    "status": (ColumnKind.property, "Status", True, True),
    "priority": (ColumnKind.property, "Priority", True, True),
    "assigned_to": (ColumnKind.property, "Assignee", True, True),
    "author": (ColumnKind.property, "Author", True, True),
    "project": (ColumnKind.property, "Project", True, True),
    "start_date": (ColumnKind.property, "Start date", True, False),
    "due_date": (ColumnKind.property, "Finish date", True, False),
    "estimated_hours": (ColumnKind.property, "Estimated time", True, False),
    "spent_hours": (ColumnKind.computed, "Spent time", True, False),
    "remaining_hours": (ColumnKind.computed, "Remaining time", True, False),
    "done_ratio": (ColumnKind.property, "% Done", True, False),
    "created_at": (ColumnKind.property, "Created on", True, False),
    "updated_at": (ColumnKind.property, "Updated on", True, False),
    "version": (ColumnKind.property, "Version", True, True),
    "category": (ColumnKind.property, "Category", True, True),
    "parent": (ColumnKind.relation, "Parent", True, False),
    "responsible": (ColumnKind.property, "Accountable", True, True),
}

STANDARD_COLUMN_NAMES: Tuple[str, ...] = tuple(_STANDARD)

DEFAULT_WORK_PACKAGE_COLUMNS: Tuple[str, ...] = (
    "id",
    "subject",
    "type",
    "status",
    "assigned_to",
    "priority",
)


def standard_column(name: str) -> Optional[Column]:
    entry = _STANDARD.get(name)
    if entry is None:
        return None
    kind, caption, sortable, groupable = entry
    return Column(name=name, kind=kind, caption=caption, sortable=sortable, groupable=groupable)


def column_from_name(name: str) -> Column:
    """Resolve a stored column name: standard catalogue, cf_<id>, else a plain property."""
    col = standard_column(name)
    if col is not None:
        return col
    if name.startswith("cf_") and name[3:].isdigit():
        return Column.for_custom_field(int(name[3:]))
    return Column.for_property(name)


class ColumnSet(BaseModel):
    model_config = ConfigDict(revalidate_instances="always")

    columns: List[Column] = Field(default_factory=list)

    @classmethod
    def default_work_package(cls) -> "ColumnSet":
        return cls(columns=[standard_column(n) for n in DEFAULT_WORK_PACKAGE_COLUMNS])

    @classmethod
    def from_names(cls, names: Sequence[str]) -> "ColumnSet":
        return cls(columns=[column_from_name(n) for n in names])

    def add(self, column: Column) -> "ColumnSet":
        self.columns.append(column)
        return self

    def with_column(self, column: Column) -> "ColumnSet":
        return ColumnSet(columns=[*self.columns, column])

    def with_name(self, name: str) -> "ColumnSet":
        return self.with_column(Column.for_property(name))

    def has_column(self, name: str) -> bool:
        return any(c.name == name for c in self.columns)

    def remove(self, name: str) -> None:
        self.columns = [c for c in self.columns if c.name != name]

    def names(self) -> List[str]:
        return [c.name for c in self.columns]

    def name_set(self) -> Set[str]:
        return {c.name for c in self.columns}

    def sortable_columns(self) -> List[Column]:
        return [c for c in self.columns if c.sortable]

    def groupable_columns(self) -> List[Column]:
        return [c for c in self.columns if c.groupable]

    def reorder(self, names: Sequence[str]) -> None:
        # Named columns first in the given order; unnamed ones keep their relative order at the end.
        remaining = list(self.columns)
        reordered: List[Column] = []
        for name in names:
            for i, col in enumerate(remaining):
                if col.name == name:
                    reordered.append(remaining.pop(i))
                    break
        self.columns = reordered + remaining

    def is_empty(self) -> bool:
        return not self.columns

    def __len__(self) -> int:
        return len(self.columns)

# File: /wpquery/queries/query.py | Version: 1.4 | Title: Query aggregate (filters + sorts + columns + display options)
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from wpquery.queries.columns import ColumnSet
from wpquery.queries.filters import Filter, FilterSet
from wpquery.queries.sorts import SortOrder, default_work_package_sort


class QueryVisibility(str, Enum):
    private = "private"
    public = "public"
    global_ = "global"


class DisplayRepresentation(str, Enum):
    list = "list"
    board = "board"
    gantt = "gantt"
    calendar = "calendar"
    team_planner = "team_planner"

    @classmethod
    def parse(cls, value: str) -> Optional["DisplayRepresentation"]:
        aliases = {
            "list": cls.list,
            "table": cls.list,
            "board": cls.board,
            "cards": cls.board,
            "gantt": cls.gantt,
            "calendar": cls.calendar,
            "team_planner": cls.team_planner,
            "teamplanner": cls.team_planner,
        }
        return aliases.get((value or "").strip().lower())


class TimelineZoomLevel(str, Enum):
    days = "days"
    weeks = "weeks"
    months = "months"
    quarters = "quarters"
    years = "years"
    auto = "auto"


class HighlightingMode(str, Enum):
    none = "none"
    inline = "inline"
    status = "status"
    priority = "priority"
    type = "type"


class GroupBy(BaseModel):
    model_config = ConfigDict(frozen=True)

    attribute: Optional[str] = None
    collapsed: bool = False

    @classmethod
    def by(cls, attribute: str) -> "GroupBy":
        return cls(attribute=attribute)

    @classmethod
    def by_collapsed(cls, attribute: str) -> "GroupBy":
        return cls(attribute=attribute, collapsed=True)

    @classmethod
    def none(cls) -> "GroupBy":
        return cls()

    def is_grouped(self) -> bool:
        return self.attribute is not None


class Highlighting(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: HighlightingMode = HighlightingMode.none
    highlighted_attributes: List[str] = Field(default_factory=list)


class Query(BaseModel):
    """
    A (possibly saved) work package query.

    Instances are immutable; the `with_*` helpers and QueryBuilder return new
    queries. The query never holds a concrete user for "me" filters, so the
    same instance can be shared between requesters.

    `filters`, `sorts` and `columns` are copied when the query is built, so
    later changes to the caller's sets do not leak in. Treat them as
    read-only on a built query; their mutators are for builders and
    standalone sets.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: str = "Unnamed query"
    user_id: Optional[int] = None
    project_id: Optional[int] = None
    visibility: QueryVisibility = QueryVisibility.private
    starred: bool = False
    display: DisplayRepresentation = DisplayRepresentation.list
    filters: FilterSet = Field(default_factory=FilterSet)
    sorts: SortOrder = Field(default_factory=default_work_package_sort)
    columns: ColumnSet = Field(default_factory=ColumnSet.default_work_package)
    group_by: GroupBy = Field(default_factory=GroupBy)
    highlighting: Highlighting = Field(default_factory=Highlighting)
    timeline_zoom_level: TimelineZoomLevel = TimelineZoomLevel.weeks
    show_timeline: bool = False
    include_subprojects: bool = True
    show_hierarchies: bool = True
    show_sums: bool = False

    @classmethod
    def for_project(cls, name: str, project_id: int) -> "Query":
        return cls(name=name, project_id=project_id)

    # ---- predicates ----
    def is_saved(self) -> bool:
        return self.id is not None

    def is_global(self) -> bool:
        return self.project_id is None

    def is_public(self) -> bool:
        return self.visibility == QueryVisibility.public

    def has_filters(self) -> bool:
        return not self.filters.is_empty()

    def has_custom_sort(self) -> bool:
        return not self.sorts.is_empty()

    def is_grouped(self) -> bool:
        return self.group_by.is_grouped()

    def is_hierarchical(self) -> bool:
        return self.show_hierarchies and not self.is_grouped()

    # ---- copy-on-write helpers ----
    def _with(self, **changes) -> "Query":
        # the new query owns its parts; never alias the caller's models
        owned = {
            k: v.model_copy(deep=True) if isinstance(v, BaseModel) else v
            for k, v in changes.items()
        }
        return self.model_copy(update=owned, deep=True)

    def with_id(self, query_id: int) -> "Query":
        return self._with(id=query_id)

    def with_user(self, user_id: int) -> "Query":
        return self._with(user_id=user_id)

    def with_visibility(self, visibility: QueryVisibility) -> "Query":
        return self._with(visibility=visibility)

    def with_display(self, display: DisplayRepresentation) -> "Query":
        return self._with(
            display=display,
            show_timeline=self.show_timeline or display == DisplayRepresentation.gantt,
        )

    def with_filter(self, flt: Filter) -> "Query":
        return self._with(filters=self.filters.with_filter(flt))

    def with_filters(self, filters: FilterSet) -> "Query":
        return self._with(filters=filters)

    def with_sorts(self, sorts: SortOrder) -> "Query":
        return self._with(sorts=sorts)

    def with_columns(self, columns: ColumnSet) -> "Query":
        return self._with(columns=columns)

    def with_group_by(self, group_by: GroupBy) -> "Query":
        return self._with(group_by=group_by)

    def grouped_by(self, attribute: str) -> "Query":
        return self._with(group_by=GroupBy.by(attribute))

    def starred_as(self, starred: bool) -> "Query":
        return self._with(starred=starred)

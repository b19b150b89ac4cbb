# File: /wpquery/queries/builder.py | Version: 1.3 | Title: Fluent QueryBuilder + preset queries
from __future__ import annotations

from typing import Iterable, Optional

from wpquery.queries.columns import Column, ColumnSet
from wpquery.queries.filters import (
    CURRENT_USER_EQUALS,
    THIS_WEEK,
    TODAY,
    BoolValue,
    CurrentUserValue,
    Filter,
    FilterOperator,
    FilterSet,
    IdValue,
    NumberValue,
    from_ids,
)
from wpquery.queries.query import (
    DisplayRepresentation,
    GroupBy,
    Highlighting,
    HighlightingMode,
    Query,
    QueryVisibility,
    TimelineZoomLevel,
)
from wpquery.queries.sorts import SortCriterion, SortOrder, default_work_package_sort


class QueryBuilder:
    """
    Accumulates query state across chained calls; `build()` returns an
    independent, immutable Query.

        QueryBuilder().name("Mine").assigned_to_me().open().sort_by_updated().build()
    """

    def __init__(self) -> None:
        self._name = "New Query"
        self._id: Optional[int] = None
        self._project_id: Optional[int] = None
        self._user_id: Optional[int] = None
        self._visibility = QueryVisibility.private
        self._starred = False
        self._display = DisplayRepresentation.list
        self._filters = FilterSet()
        self._sorts = default_work_package_sort()
        self._columns = ColumnSet.default_work_package()
        self._group_by = GroupBy.none()
        self._highlighting = Highlighting()
        self._zoom = TimelineZoomLevel.weeks
        self._include_subprojects = True
        self._show_hierarchies = True
        self._show_sums = False

    @classmethod
    def from_query(cls, query: Query) -> "QueryBuilder":
        q = query.model_copy(deep=True)
        b = cls()
        b._id = q.id
        b._name = q.name
        b._project_id = q.project_id
        b._user_id = q.user_id
        b._visibility = q.visibility
        b._starred = q.starred
        b._display = q.display
        b._filters = q.filters
        b._sorts = q.sorts
        b._columns = q.columns
        b._group_by = q.group_by
        b._highlighting = q.highlighting
        b._zoom = q.timeline_zoom_level
        b._include_subprojects = q.include_subprojects
        b._show_hierarchies = q.show_hierarchies
        b._show_sums = q.show_sums
        return b

    # ---- identity / scope ----
    def name(self, name: str) -> "QueryBuilder":
        self._name = name
        return self

    def project(self, project_id: int) -> "QueryBuilder":
        self._project_id = project_id
        return self

    def user(self, user_id: int) -> "QueryBuilder":
        self._user_id = user_id
        return self

    def public(self) -> "QueryBuilder":
        self._visibility = QueryVisibility.public
        return self

    def private(self) -> "QueryBuilder":
        self._visibility = QueryVisibility.private
        return self

    def global_(self) -> "QueryBuilder":
        self._visibility = QueryVisibility.global_
        return self

    def starred(self) -> "QueryBuilder":
        self._starred = True
        return self

    # ---- display ----
    def list_view(self) -> "QueryBuilder":
        self._display = DisplayRepresentation.list
        return self

    def board_view(self) -> "QueryBuilder":
        self._display = DisplayRepresentation.board
        return self

    def gantt_view(self) -> "QueryBuilder":
        self._display = DisplayRepresentation.gantt
        return self

    def calendar_view(self) -> "QueryBuilder":
        self._display = DisplayRepresentation.calendar
        return self

    def team_planner_view(self) -> "QueryBuilder":
        self._display = DisplayRepresentation.team_planner
        return self

    def highlight(self, mode: HighlightingMode, attributes: Iterable[str] = ()) -> "QueryBuilder":
        self._highlighting = Highlighting(mode=mode, highlighted_attributes=list(attributes))
        return self

    def zoom(self, level: TimelineZoomLevel) -> "QueryBuilder":
        self._zoom = level
        return self

    # ---- filters ----
    def filter(self, flt: Filter) -> "QueryBuilder":
        self._filters.add(flt)
        return self

    def _ids_filter(self, attribute: str, ids: Iterable[int]) -> "QueryBuilder":
        return self.filter(Filter.equals(attribute, from_ids(ids)))

    def status(self, status_ids: Iterable[int]) -> "QueryBuilder":
        return self._ids_filter("status_id", status_ids)

    def open(self) -> "QueryBuilder":
        return self.filter(Filter.equals("status_is_closed", BoolValue(value=False)))

    def closed(self) -> "QueryBuilder":
        return self.filter(Filter.equals("status_is_closed", BoolValue(value=True)))

    def in_project(self, project_id: int) -> "QueryBuilder":
        self._project_id = project_id
        return self.filter(Filter.equals("project_id", IdValue(value=project_id)))

    def type_ids(self, type_ids: Iterable[int]) -> "QueryBuilder":
        return self._ids_filter("type_id", type_ids)

    def assigned_to(self, user_ids: Iterable[int]) -> "QueryBuilder":
        return self._ids_filter("assigned_to_id", user_ids)

    def assigned_to_me(self) -> "QueryBuilder":
        return self.filter(Filter.current_user("assigned_to_id"))

    def unassigned(self) -> "QueryBuilder":
        return self.filter(Filter.is_null("assigned_to_id"))

    def authored_by(self, user_ids: Iterable[int]) -> "QueryBuilder":
        return self._ids_filter("author_id", user_ids)

    def created_by_me(self) -> "QueryBuilder":
        return self.filter(Filter.current_user("author_id"))

    def priority(self, priority_ids: Iterable[int]) -> "QueryBuilder":
        return self._ids_filter("priority_id", priority_ids)

    def version(self, version_ids: Iterable[int]) -> "QueryBuilder":
        return self._ids_filter("version_id", version_ids)

    def subject_contains(self, text: str) -> "QueryBuilder":
        return self.filter(Filter.contains("subject", text))

    def due_today(self) -> "QueryBuilder":
        return self.filter(Filter(attribute="due_date", operator=TODAY))

    def due_this_week(self) -> "QueryBuilder":
        return self.filter(Filter(attribute="due_date", operator=THIS_WEEK))

    def overdue(self) -> "QueryBuilder":
        # due before today
        return self.filter(
            Filter(
                attribute="due_date",
                operator=FilterOperator.more_than_days_ago(0),
                value=NumberValue(value=0),
            )
        )

    def parent(self, parent_id: int) -> "QueryBuilder":
        return self.filter(Filter.equals("parent_id", IdValue(value=parent_id)))

    def roots_only(self) -> "QueryBuilder":
        return self.filter(Filter.is_null("parent_id"))

    # ---- sorting ----
    def sort(self, sorts: SortOrder) -> "QueryBuilder":
        self._sorts = sorts.model_copy(deep=True)
        return self

    def sort_by_asc(self, attribute: str) -> "QueryBuilder":
        self._sorts = SortOrder.by_asc(attribute)
        return self

    def sort_by_desc(self, attribute: str) -> "QueryBuilder":
        self._sorts = SortOrder.by_desc(attribute)
        return self

    def then_by_asc(self, attribute: str) -> "QueryBuilder":
        self._sorts.add(SortCriterion.asc(attribute))
        return self

    def then_by_desc(self, attribute: str) -> "QueryBuilder":
        self._sorts.add(SortCriterion.desc(attribute))
        return self

    def sort_by_id(self) -> "QueryBuilder":
        return self.sort_by_desc("id")

    def sort_by_updated(self) -> "QueryBuilder":
        return self.sort_by_desc("updated_at")

    def sort_by_created(self) -> "QueryBuilder":
        return self.sort_by_desc("created_at")

    def sort_by_priority(self) -> "QueryBuilder":
        return self.sort_by_asc("priority")

    def sort_by_due_date(self) -> "QueryBuilder":
        return self.sort_by_asc("due_date")

    # ---- columns ----
    def columns(self, columns: ColumnSet) -> "QueryBuilder":
        self._columns = columns.model_copy(deep=True)
        return self

    def add_column(self, column: Column) -> "QueryBuilder":
        self._columns.add(column)
        return self

    def with_column(self, name: str) -> "QueryBuilder":
        self._columns.add(Column.for_property(name))
        return self

    def default_columns(self) -> "QueryBuilder":
        self._columns = ColumnSet.default_work_package()
        return self

    def no_columns(self) -> "QueryBuilder":
        self._columns = ColumnSet()
        return self

    # ---- grouping ----
    def group_by(self, attribute: str, collapsed: bool = False) -> "QueryBuilder":
        self._group_by = GroupBy(attribute=attribute, collapsed=collapsed)
        return self

    def group_by_status(self) -> "QueryBuilder":
        return self.group_by("status")

    def group_by_type(self) -> "QueryBuilder":
        return self.group_by("type")

    def group_by_assignee(self) -> "QueryBuilder":
        return self.group_by("assigned_to")

    def group_by_priority(self) -> "QueryBuilder":
        return self.group_by("priority")

    def ungrouped(self) -> "QueryBuilder":
        self._group_by = GroupBy.none()
        return self

    # ---- display options ----
    def include_subprojects(self) -> "QueryBuilder":
        self._include_subprojects = True
        return self

    def exclude_subprojects(self) -> "QueryBuilder":
        self._include_subprojects = False
        return self

    def with_hierarchies(self) -> "QueryBuilder":
        self._show_hierarchies = True
        return self

    def flat(self) -> "QueryBuilder":
        self._show_hierarchies = False
        return self

    def with_sums(self) -> "QueryBuilder":
        self._show_sums = True
        return self

    def build(self) -> Query:
        return Query(
            id=self._id,
            name=self._name,
            user_id=self._user_id,
            project_id=self._project_id,
            visibility=self._visibility,
            starred=self._starred,
            display=self._display,
            filters=self._filters.model_copy(deep=True),
            sorts=self._sorts.model_copy(deep=True),
            columns=self._columns.model_copy(deep=True),
            group_by=self._group_by,
            highlighting=self._highlighting,
            timeline_zoom_level=self._zoom,
            show_timeline=self._display == DisplayRepresentation.gantt,
            include_subprojects=self._include_subprojects,
            show_hierarchies=self._show_hierarchies,
            show_sums=self._show_sums,
        )


# ----------------------------
# Presets
# ----------------------------
def my_work_packages() -> Query:
    return QueryBuilder().name("My work packages").assigned_to_me().open().sort_by_updated().build()


def created_by_me() -> Query:
    return QueryBuilder().name("Created by me").created_by_me().sort_by_updated().build()


def watched_by_me() -> Query:
    # watcher_id has no column mapping yet, so this filter is dropped at translation
    return (
        QueryBuilder()
        .name("Watched")
        .filter(
            Filter(attribute="watcher_id", operator=CURRENT_USER_EQUALS, value=CurrentUserValue())
        )
        .sort_by_updated()
        .build()
    )


def all_open() -> Query:
    return QueryBuilder().name("All open").open().sort_by_updated().build()


def recently_updated() -> Query:
    return QueryBuilder().name("Recently updated").sort_by_updated().build()


def basic_board() -> Query:
    return QueryBuilder().name("Basic board").board_view().group_by_status().open().build()


def gantt_chart() -> Query:
    return (
        QueryBuilder()
        .name("Gantt chart")
        .gantt_view()
        .sort_by_asc("start_date")
        .then_by_asc("due_date")
        .build()
    )


def overdue() -> Query:
    return QueryBuilder().name("Overdue").overdue().open().sort_by_asc("due_date").build()


PRESETS = {
    "my_work_packages": my_work_packages,
    "created_by_me": created_by_me,
    "watched_by_me": watched_by_me,
    "all_open": all_open,
    "recently_updated": recently_updated,
    "basic_board": basic_board,
    "gantt_chart": gantt_chart,
    "overdue": overdue,
}

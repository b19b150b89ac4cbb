# File: /wpquery/crud/saved_query.py | Version: 1.0 | Title: CRUD helpers for saved work package queries
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from wpquery.models.saved_query import SavedQuery
from wpquery.queries.columns import ColumnSet
from wpquery.queries.query import (
    DisplayRepresentation,
    GroupBy,
    Highlighting,
    HighlightingMode,
    Query,
    QueryVisibility,
    TimelineZoomLevel,
)
from wpquery.queries.serialization import (
    filters_to_api,
    parse_api_filters,
    parse_sort_criteria,
    sort_criteria_to_api,
)

_SHARED = (QueryVisibility.public.value, QueryVisibility.global_.value)


# ----------------------------
# Row <-> domain mapping
# ----------------------------
def row_to_query(row: SavedQuery) -> Query:
    return Query(
        id=row.id,
        name=row.name,
        user_id=row.user_id,
        project_id=row.project_id,
        visibility=QueryVisibility(row.visibility),
        starred=bool(row.starred),
        display=DisplayRepresentation.parse(row.display) or DisplayRepresentation.list,
        filters=parse_api_filters(row.filters or []),
        sorts=parse_sort_criteria(row.sort_criteria or []),
        columns=(
            ColumnSet.from_names(row.column_names)
            if row.column_names is not None
            else ColumnSet.default_work_package()
        ),
        group_by=GroupBy(attribute=row.group_by, collapsed=bool(row.group_collapsed)),
        highlighting=Highlighting(
            mode=HighlightingMode(row.highlighting_mode),
            highlighted_attributes=list(row.highlighted_attributes or []),
        ),
        timeline_zoom_level=TimelineZoomLevel(row.timeline_zoom_level),
        show_timeline=bool(row.show_timeline),
        include_subprojects=bool(row.include_subprojects),
        show_hierarchies=bool(row.show_hierarchies),
        show_sums=bool(row.show_sums),
    )


def _apply_query(row: SavedQuery, query: Query) -> None:
    row.name = query.name
    row.project_id = query.project_id
    row.visibility = query.visibility.value
    row.starred = query.starred
    row.display = query.display.value
    row.filters = filters_to_api(query.filters)
    row.sort_criteria = sort_criteria_to_api(query.sorts)
    row.column_names = query.columns.names()
    row.group_by = query.group_by.attribute
    row.group_collapsed = query.group_by.collapsed
    row.highlighting_mode = query.highlighting.mode.value
    row.highlighted_attributes = list(query.highlighting.highlighted_attributes)
    row.timeline_zoom_level = query.timeline_zoom_level.value
    row.show_timeline = query.show_timeline
    row.include_subprojects = query.include_subprojects
    row.show_hierarchies = query.show_hierarchies
    row.show_sums = query.show_sums


# ----------------------------
# CRUD
# ----------------------------
def create_saved_query(db: Session, user_id: int, query: Query) -> SavedQuery:
    row = SavedQuery(user_id=user_id)
    _apply_query(row, query)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_saved_query(db: Session, query_id: int) -> Optional[SavedQuery]:
    return db.query(SavedQuery).filter(SavedQuery.id == query_id).first()


def is_visible_to(row: SavedQuery, user_id: Optional[int]) -> bool:
    if row.visibility in _SHARED:
        return True
    return user_id is not None and row.user_id == user_id


def list_visible_queries(
    db: Session, user_id: Optional[int], project_id: Optional[int] = None
) -> List[SavedQuery]:
    """Own queries plus public/global ones; a project scope also includes global (project-less) queries."""
    q = db.query(SavedQuery)
    if user_id is None:
        q = q.filter(SavedQuery.visibility.in_(_SHARED))
    else:
        q = q.filter(or_(SavedQuery.user_id == user_id, SavedQuery.visibility.in_(_SHARED)))
    if project_id is not None:
        q = q.filter(or_(SavedQuery.project_id == project_id, SavedQuery.project_id.is_(None)))
    return q.order_by(SavedQuery.starred.desc(), SavedQuery.name.asc(), SavedQuery.id.asc()).all()


def update_saved_query(db: Session, row: SavedQuery, query: Query) -> SavedQuery:
    _apply_query(row, query)
    db.commit()
    db.refresh(row)
    return row


def set_starred(db: Session, row: SavedQuery, starred: bool) -> SavedQuery:
    row.starred = starred
    db.commit()
    db.refresh(row)
    return row


def delete_saved_query(db: Session, row: SavedQuery) -> bool:
    db.delete(row)
    db.commit()
    return True

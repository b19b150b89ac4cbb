# File: /wpquery/routers/queries.py | Version: 1.0 | Title: Saved queries CRUD + star + apply to work packages
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query as Param, status
from sqlalchemy.orm import Session

from wpquery.crud.saved_query import (
    create_saved_query,
    delete_saved_query as crud_delete_saved_query,
    get_saved_query,
    is_visible_to,
    list_visible_queries,
    row_to_query,
    set_starred,
    update_saved_query as crud_update_saved_query,
)
from wpquery.db.session import get_db
from wpquery.models.saved_query import SavedQuery
from wpquery.queries.columns import ColumnSet
from wpquery.queries.query import GroupBy, Highlighting, Query
from wpquery.queries.serialization import (
    filters_to_api,
    parse_api_filters,
    parse_sort_criteria,
    sort_criteria_to_api,
)
from wpquery.queries.sorts import default_work_package_sort
from wpquery.routers.work_packages import page_params, run_query
from wpquery.schemas.pagination import PageRequest
from wpquery.schemas.saved_query import SavedQueryCreate, SavedQueryOut, SavedQueryUpdate
from wpquery.security import get_current_user_id, require_user_id

router = APIRouter(prefix="/queries", tags=["Queries"])


# ----------------------------
# Helpers
# ----------------------------
def _to_out(row: SavedQuery) -> SavedQueryOut:
    q = row_to_query(row)
    return SavedQueryOut(
        id=row.id,
        user_id=row.user_id,
        name=q.name,
        project_id=q.project_id,
        visibility=q.visibility,
        starred=q.starred,
        display=q.display,
        filters=filters_to_api(q.filters),
        sort_by=sort_criteria_to_api(q.sorts),
        columns=q.columns.names(),
        group_by=q.group_by.attribute,
        highlighting_mode=q.highlighting.mode,
        timeline_zoom_level=q.timeline_zoom_level,
        show_timeline=q.show_timeline,
        include_subprojects=q.include_subprojects,
        show_hierarchies=q.show_hierarchies,
        show_sums=q.show_sums,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_query(data: SavedQueryCreate) -> Query:
    sorts = parse_sort_criteria(data.sort_by)
    return Query(
        name=data.name,
        project_id=data.project_id,
        visibility=data.visibility,
        filters=parse_api_filters(data.filters),
        sorts=sorts if not sorts.is_empty() else default_work_package_sort(),
        columns=(
            ColumnSet.from_names(data.columns)
            if data.columns is not None
            else ColumnSet.default_work_package()
        ),
        group_by=GroupBy(attribute=data.group_by),
        highlighting=Highlighting(mode=data.highlighting_mode),
        timeline_zoom_level=data.timeline_zoom_level,
        include_subprojects=data.include_subprojects,
        show_hierarchies=data.show_hierarchies,
        show_sums=data.show_sums,
    ).with_display(data.display)


def _visible_or_404(db: Session, query_id: int, user_id: Optional[int]) -> SavedQuery:
    row = get_saved_query(db, query_id)
    if not row or not is_visible_to(row, user_id):
        raise HTTPException(status_code=404, detail="Query not found")
    return row


def _owned_or_404(db: Session, query_id: int, user_id: int) -> SavedQuery:
    row = get_saved_query(db, query_id)
    if not row or row.user_id != user_id:
        raise HTTPException(status_code=404, detail="Query not found")
    return row


# ----------------------------
# Endpoints
# ----------------------------
@router.get("", response_model=List[SavedQueryOut], summary="List queries visible to me")
def list_queries(
    project_id: Optional[int] = Param(default=None),
    db: Session = Depends(get_db),
    current_user_id: Optional[int] = Depends(get_current_user_id),
):
    return [_to_out(r) for r in list_visible_queries(db, current_user_id, project_id)]


@router.get("/default", summary="Unsaved default work package query")
def get_default_query():
    q = Query(name="Default")
    return {
        "name": q.name,
        "filters": filters_to_api(q.filters),
        "sortBy": sort_criteria_to_api(q.sorts),
        "columns": q.columns.names(),
        "display": q.display.value,
        "starred": False,
    }


@router.post(
    "",
    response_model=SavedQueryOut,
    status_code=status.HTTP_201_CREATED,
    summary="Save a query (owner = requester)",
)
def create_query_endpoint(
    data: SavedQueryCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(require_user_id),
):
    row = create_saved_query(db, user_id=user_id, query=_to_query(data).with_user(user_id))
    return _to_out(row)


@router.get("/{query_id}", response_model=SavedQueryOut, summary="Get a visible query")
def get_query_endpoint(
    query_id: int,
    db: Session = Depends(get_db),
    current_user_id: Optional[int] = Depends(get_current_user_id),
):
    return _to_out(_visible_or_404(db, query_id, current_user_id))


@router.patch("/{query_id}", response_model=SavedQueryOut, summary="Update a query (owner-only)")
def update_query_endpoint(
    query_id: int,
    data: SavedQueryUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(require_user_id),
):
    row = _owned_or_404(db, query_id, user_id)
    q = row_to_query(row)

    changes = {}
    if data.name is not None:
        changes["name"] = data.name
    if data.visibility is not None:
        q = q.with_visibility(data.visibility)
    if data.display is not None:
        q = q.with_display(data.display)
    if data.filters is not None:
        q = q.with_filters(parse_api_filters(data.filters))
    if data.sort_by is not None:
        sorts = parse_sort_criteria(data.sort_by)
        q = q.with_sorts(sorts if not sorts.is_empty() else default_work_package_sort())
    if data.columns is not None:
        q = q.with_columns(ColumnSet.from_names(data.columns))
    if data.group_by is not None:
        q = q.with_group_by(GroupBy(attribute=data.group_by or None))
    if data.show_sums is not None:
        changes["show_sums"] = data.show_sums
    if changes:
        q = q.model_copy(update=changes)

    return _to_out(crud_update_saved_query(db, row, q))


@router.delete("/{query_id}", summary="Delete a query (owner-only)")
def delete_query_endpoint(
    query_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(require_user_id),
):
    row = _owned_or_404(db, query_id, user_id)
    crud_delete_saved_query(db, row)
    return {"detail": "Query deleted"}


@router.post("/{query_id}/star", response_model=SavedQueryOut, summary="Star a query")
def star_query(
    query_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(require_user_id),
):
    return _to_out(set_starred(db, _owned_or_404(db, query_id, user_id), True))


@router.delete("/{query_id}/star", response_model=SavedQueryOut, summary="Unstar a query")
def unstar_query(
    query_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(require_user_id),
):
    return _to_out(set_starred(db, _owned_or_404(db, query_id, user_id), False))


@router.get("/{query_id}/work_packages", summary="Run a saved query")
def apply_query(
    query_id: int,
    page: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
    current_user_id: Optional[int] = Depends(get_current_user_id),
):
    row = _visible_or_404(db, query_id, current_user_id)
    return run_query(db, row_to_query(row), page, current_user_id)

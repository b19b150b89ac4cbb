# File: /wpquery/routers/work_packages.py | Version: 1.0 | Title: Work package collection (API filters/sortBy or full query document)
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query as Param
from pydantic import ValidationError
from sqlalchemy.orm import Session

from wpquery.core.config import settings
from wpquery.crud.query_executor import WorkPackageQueryExecutor
from wpquery.db.session import get_db
from wpquery.queries.errors import QueryParseError
from wpquery.queries.query import GroupBy, Query
from wpquery.queries.serialization import (
    filters_to_api,
    parse_api_filters,
    parse_sort_criteria,
    query_from_json,
    sort_criteria_to_api,
)
from wpquery.queries.sorts import default_work_package_sort
from wpquery.schemas.pagination import PageRequest
from wpquery.security import get_current_user_id

router = APIRouter(prefix="/work_packages", tags=["Work Packages"])


def page_params(
    page: int = Param(default=1, ge=1),
    per_page: int = Param(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> PageRequest:
    try:
        return PageRequest.from_page(page, per_page)
    except ValidationError as e:
        raise QueryParseError(f"page {page} is out of range") from e


def run_query(
    db: Session, query: Query, page: PageRequest, current_user_id: Optional[int]
) -> Dict[str, Any]:
    result = WorkPackageQueryExecutor(db).execute(query, page, current_user_id)
    return {
        "total": result.total,
        "page": result.page(),
        "pages": result.pages(),
        "limit": result.limit,
        "offset": result.offset,
        "filters": filters_to_api(query.filters),
        "sortBy": sort_criteria_to_api(query.sorts),
        "groupBy": query.group_by.attribute,
        "items": [row.model_dump(mode="json") for row in result.items],
    }


@router.get("", summary="List work packages (API v3 filters / sortBy)")
def list_work_packages(
    filters: Optional[str] = Param(
        default=None, description='e.g. [{"status_id":{"operator":"=","values":["1"]}}]'
    ),
    sort_by: Optional[str] = Param(default=None, alias="sortBy", description='e.g. [["id","desc"]]'),
    group_by: Optional[str] = Param(default=None, alias="groupBy"),
    page: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
    current_user_id: Optional[int] = Depends(get_current_user_id),
):
    sorts = parse_sort_criteria(sort_by)
    query = Query(
        name="Work packages",
        filters=parse_api_filters(filters),
        sorts=sorts if not sorts.is_empty() else default_work_package_sort(),
        group_by=GroupBy(attribute=group_by or None),
    )
    return run_query(db, query, page, current_user_id)


@router.post("/query", summary="Run an ad-hoc query document")
def run_query_document(
    document: Dict[str, Any] = Body(...),
    page: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
    current_user_id: Optional[int] = Depends(get_current_user_id),
):
    return run_query(db, query_from_json(document), page, current_user_id)

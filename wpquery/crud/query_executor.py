# File: /wpquery/crud/query_executor.py | Version: 1.0 | Title: Run translated work package queries (count + paged select)
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wpquery.crud.filtering import TranslatedQuery, translate
from wpquery.models.work_package import WorkPackage
from wpquery.queries.errors import QueryExecutionError
from wpquery.queries.query import Query
from wpquery.schemas.pagination import PagedResult, PageRequest
from wpquery.schemas.work_package import ROW_COLUMNS, WorkPackageRow

log = logging.getLogger(__name__)

FROM_CLAUSE = (
    "FROM work_packages wp\n"
    "LEFT JOIN statuses s ON wp.status_id = s.id\n"
    "LEFT JOIN types t ON wp.type_id = t.id\n"
    "LEFT JOIN enumerations p ON wp.priority_id = p.id AND p.type = 'IssuePriority'"
)

SELECT_LIST = ",\n".join(f"    wp.{name}" for name in ROW_COLUMNS)


def _escape_colons(fragment: str) -> str:
    # text() treats ":name" as a bind parameter, even inside quoted literals
    return fragment.replace(":", "\\:")


def count_sql(translated: TranslatedQuery) -> str:
    parts = ["SELECT COUNT(*) AS count", FROM_CLAUSE]
    if translated.where:
        parts.append(translated.where_sql())
    return "\n".join(parts)


def select_sql(translated: TranslatedQuery) -> str:
    parts = ["SELECT", SELECT_LIST, FROM_CLAUSE]
    if translated.where:
        parts.append(translated.where_sql())
    parts.append(translated.order_by)
    parts.append("LIMIT :limit OFFSET :offset")
    return "\n".join(parts)


class WorkPackageQueryExecutor:
    """Holds only a Session; translation is done per call."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def execute(
        self,
        query: Query,
        page: Optional[PageRequest] = None,
        current_user_id: Optional[int] = None,
    ) -> PagedResult[WorkPackageRow]:
        page = page or PageRequest()
        translated = translate(query, current_user_id)

        bindable = TranslatedQuery(
            where=_escape_colons(translated.where),
            order_by=_escape_colons(translated.order_by),
        )
        count_stmt = text(count_sql(bindable))
        table = WorkPackage.__table__
        select_stmt = text(select_sql(bindable)).columns(**{name: table.c[name].type for name in ROW_COLUMNS})

        try:
            total = int(self.db.execute(count_stmt).scalar_one())
            rows = self.db.execute(select_stmt, {"limit": page.limit, "offset": page.offset}).mappings().all()
        except SQLAlchemyError as e:
            log.exception("Work package query failed (query=%r)", query.name)
            raise QueryExecutionError() from e

        log.debug("Work package query %r: %d total, %d on page", query.name, total, len(rows))
        return PagedResult[WorkPackageRow](
            items=[WorkPackageRow.model_validate(dict(r)) for r in rows],
            total=total,
            limit=page.limit,
            offset=page.offset,
        )

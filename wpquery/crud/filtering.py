# File: /wpquery/crud/filtering.py | Version: 2.0 | Title: Filter/sort -> SQL fragment translation for work packages
"""
Compiles a Query's filters and sort order into a WHERE fragment and an
ORDER BY fragment over the fixed work package joins:

    work_packages wp
    LEFT JOIN statuses s / types t / enumerations p (priorities)

Filter literals are embedded as escaped SQL literals; every string or LIKE
pattern goes through `escape_string` / `escape_like`. Attributes that do not
resolve, invalid filters and filters whose value does not fit the operator
are dropped (logged at DEBUG) instead of failing the whole query.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from wpquery.queries.filters import (
    BoolValue,
    CurrentUserValue,
    DateRangeValue,
    DateValue,
    Filter,
    FilterSet,
    IdsValue,
    IdValue,
    NoValue,
    NumberValue,
    OperatorKind,
    StrsValue,
    StrValue,
)
from wpquery.queries.query import Query
from wpquery.queries.sorts import SortCriterion, SortDirection, SortOrder

log = logging.getLogger(__name__)

DEFAULT_ORDER_BY = "ORDER BY wp.id DESC"

# logical attribute -> physical column (filters)
FILTER_COLUMNS: Dict[str, str] = {
    "id": "wp.id",
    "subject": "wp.subject",
    "description": "wp.description",
    "project_id": "wp.project_id",
    "type_id": "wp.type_id",
    "status_id": "wp.status_id",
    "priority_id": "wp.priority_id",
    "author_id": "wp.author_id",
    "assigned_to_id": "wp.assigned_to_id",
    "responsible_id": "wp.responsible_id",
    "category_id": "wp.category_id",
    "version_id": "wp.version_id",
    "parent_id": "wp.parent_id",
    "start_date": "wp.start_date",
    "due_date": "wp.due_date",
    "estimated_hours": "wp.estimated_hours",
    "done_ratio": "wp.done_ratio",
    "created_at": "wp.created_at",
    "updated_at": "wp.updated_at",
    # joined lookups
    "status": "s.name",
    "status_is_closed": "s.is_closed",
    "type": "t.name",
    "priority": "p.name",
    "priority_position": "p.position",
}

# logical attribute -> physical column (sorts); lookups sort by their position
SORT_COLUMNS: Dict[str, str] = {
    "id": "wp.id",
    "subject": "wp.subject",
    "project": "wp.project_id",
    "type": "t.position",
    "status": "s.position",
    "priority": "p.position",
    "author": "wp.author_id",
    "assigned_to": "wp.assigned_to_id",
    "responsible": "wp.responsible_id",
    "start_date": "wp.start_date",
    "due_date": "wp.due_date",
    "estimated_hours": "wp.estimated_hours",
    "done_ratio": "wp.done_ratio",
    "created_at": "wp.created_at",
    "updated_at": "wp.updated_at",
    "version": "wp.version_id",
    "category": "wp.category_id",
    "parent": "wp.parent_id",
}

CUSTOM_FIELD_PREFIX = "cf_"


class TranslatedQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    where: str = ""
    order_by: str = DEFAULT_ORDER_BY

    def where_sql(self) -> str:
        return f"WHERE {self.where}" if self.where else ""


# ----------------------------
# Attribute resolution
# ----------------------------
def attribute_to_column(attribute: str) -> Optional[str]:
    if attribute.startswith(CUSTOM_FIELD_PREFIX):
        # custom fields need a per-field join that does not exist yet
        return None
    return FILTER_COLUMNS.get(attribute)


def sort_attribute_to_column(attribute: str) -> Optional[str]:
    return SORT_COLUMNS.get(attribute)


# ----------------------------
# Escaping / literals
# ----------------------------
def escape_string(s: str) -> str:
    return s.replace("'", "''")


def escape_like(s: str) -> str:
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_").replace("'", "''")


def _quote(s: str) -> str:
    return f"'{escape_string(s)}'"


def _number_literal(n: float) -> Optional[str]:
    if not math.isfinite(n):
        return None
    if float(n).is_integer():
        return str(int(n))
    return repr(float(n))


def values_to_sql(value, current_user_id: Optional[int] = None) -> List[str]:
    """Render a filter value as SQL literals, one per element."""
    if isinstance(value, IdValue):
        return [str(int(value.value))]
    if isinstance(value, IdsValue):
        return [str(int(v)) for v in value.values]
    if isinstance(value, StrValue):
        return [_quote(value.value)]
    if isinstance(value, StrsValue):
        return [_quote(v) for v in value.values]
    if isinstance(value, BoolValue):
        return ["true" if value.value else "false"]
    if isinstance(value, DateValue):
        return [_quote(value.value.isoformat())]
    if isinstance(value, DateRangeValue):
        return [_quote(value.from_.isoformat()), _quote(value.to.isoformat())]
    if isinstance(value, NumberValue):
        literal = _number_literal(value.value)
        return [literal] if literal is not None else []
    if isinstance(value, CurrentUserValue):
        return [str(int(current_user_id))] if current_user_id is not None else []
    if isinstance(value, NoValue):
        return []
    raise TypeError(f"Unsupported filter value: {type(value).__name__}")


# ----------------------------
# Per-operator translation
# ----------------------------
Translator = Callable[[str, Filter, Optional[int]], Optional[str]]


def _membership(op: str, in_op: str) -> Translator:
    def translate(column: str, flt: Filter, current_user_id: Optional[int]) -> Optional[str]:
        if isinstance(flt.value, CurrentUserValue) and current_user_id is None:
            return "1 = 0" if op == "=" else None
        values = values_to_sql(flt.value, current_user_id)
        if not values:
            return None
        if len(values) == 1:
            return f"{column} {op} {values[0]}"
        return f"{column} {in_op} ({', '.join(values)})"

    return translate


def _pattern(keyword: str, template: str) -> Translator:
    def translate(column: str, flt: Filter, _uid: Optional[int]) -> Optional[str]:
        if not isinstance(flt.value, StrValue):
            return None
        pattern = template.format(escape_like(flt.value.value))
        return f"{column} {keyword} '{pattern}'"

    return translate


def _comparison(op: str) -> Translator:
    def translate(column: str, flt: Filter, current_user_id: Optional[int]) -> Optional[str]:
        values = values_to_sql(flt.value, current_user_id)
        if not values:
            return None
        return f"{column} {op} {values[0]}"

    return translate


def _between(column: str, flt: Filter, _uid: Optional[int]) -> Optional[str]:
    if not isinstance(flt.value, DateRangeValue):
        return None
    lo, hi = values_to_sql(flt.value)
    return f"{column} BETWEEN {lo} AND {hi}"


def _fixed(template: str) -> Translator:
    def translate(column: str, _flt: Filter, _uid: Optional[int]) -> Optional[str]:
        return template.format(col=column)

    return translate


def _relative_day(op: str, sign: str) -> Translator:
    def translate(column: str, flt: Filter, _uid: Optional[int]) -> Optional[str]:
        days = int(flt.operator.days)
        return f"{column} {op} CURRENT_DATE {sign} interval '{days} days'"

    return translate


def _current_user(column: str, _flt: Filter, current_user_id: Optional[int]) -> Optional[str]:
    if current_user_id is None:
        # anonymous callers never match "me"
        return "1 = 0"
    return f"{column} = {int(current_user_id)}"


_TRANSLATORS: Dict[OperatorKind, Translator] = {
    OperatorKind.equals: _membership("=", "IN"),
    OperatorKind.not_equals: _membership("!=", "NOT IN"),
    OperatorKind.contains: _pattern("ILIKE", "%{}%"),
    OperatorKind.not_contains: _pattern("NOT ILIKE", "%{}%"),
    OperatorKind.starts_with: _pattern("ILIKE", "{}%"),
    OperatorKind.ends_with: _pattern("ILIKE", "%{}"),
    OperatorKind.greater_than: _comparison(">"),
    OperatorKind.greater_or_equal: _comparison(">="),
    OperatorKind.less_than: _comparison("<"),
    OperatorKind.less_or_equal: _comparison("<="),
    OperatorKind.between: _between,
    OperatorKind.is_null: _fixed("{col} IS NULL"),
    OperatorKind.is_not_null: _fixed("{col} IS NOT NULL"),
    OperatorKind.today: _fixed("{col} = CURRENT_DATE"),
    OperatorKind.this_week: _fixed(
        "{col} >= date_trunc('week', CURRENT_DATE)"
        " AND {col} < date_trunc('week', CURRENT_DATE) + interval '1 week'"
    ),
    OperatorKind.days_ago: _relative_day("=", "-"),
    OperatorKind.days_from_now: _relative_day("=", "+"),
    OperatorKind.less_than_days_ago: _relative_day(">", "-"),
    OperatorKind.more_than_days_ago: _relative_day("<", "-"),
    OperatorKind.less_than_days_from_now: _relative_day("<", "+"),
    OperatorKind.more_than_days_from_now: _relative_day(">", "+"),
    OperatorKind.current_user_equals: _current_user,
}

_untranslated = set(OperatorKind) - set(_TRANSLATORS)
if _untranslated:  # pragma: no cover
    raise RuntimeError(f"Operators without a SQL translation: {sorted(k.value for k in _untranslated)}")


def filter_to_sql(flt: Filter, current_user_id: Optional[int] = None) -> Optional[str]:
    if not flt.is_valid():
        log.debug("Dropping invalid filter on %r (%s)", flt.attribute, flt.operator.code())
        return None
    column = attribute_to_column(flt.attribute)
    if column is None:
        log.debug("Dropping filter on unmapped attribute %r", flt.attribute)
        return None
    condition = _TRANSLATORS[flt.operator.kind](column, flt, current_user_id)
    if condition is None:
        log.debug(
            "Dropping filter %r %s: value kind %r does not apply",
            flt.attribute,
            flt.operator.code(),
            flt.value.kind,
        )
    return condition


def build_where_clause(filters: FilterSet, current_user_id: Optional[int] = None) -> str:
    conditions = []
    for flt in filters.filters:
        condition = filter_to_sql(flt, current_user_id)
        if condition is not None:
            conditions.append(condition)
    return " AND ".join(conditions)


def sort_to_sql(criterion: SortCriterion) -> Optional[str]:
    column = sort_attribute_to_column(criterion.attribute)
    if column is None:
        log.debug("Dropping sort on unmapped attribute %r", criterion.attribute)
        return None
    if criterion.direction == SortDirection.asc:
        return f"{column} ASC NULLS LAST"
    return f"{column} DESC NULLS FIRST"


def build_order_clause(sorts: SortOrder) -> str:
    parts = [p for p in (sort_to_sql(c) for c in sorts.criteria) if p is not None]
    if not parts:
        return DEFAULT_ORDER_BY
    return "ORDER BY " + ", ".join(parts)


def translate(query: Query, current_user_id: Optional[int] = None) -> TranslatedQuery:
    return TranslatedQuery(
        where=build_where_clause(query.filters, current_user_id),
        order_by=build_order_clause(query.sorts),
    )

# File: /wpquery/queries/serialization.py | Version: 1.2 | Title: Query wire formats (JSON document + API v3 compact params)
"""
Two wire shapes are supported:

* the full Query document, i.e. ``Query.model_dump(mode="json", by_alias=True)``
  (operators as their short code, values as ``{"kind": ..., ...}``);
* the compact API form used by the ``filters`` / ``sortBy`` query params::

    [{"status_id": {"operator": "=", "values": ["1", "2"]}}]
    [["priority", "asc"], ["id", "desc"]]

The compact form carries no value types, so values are typed by attribute.
"""
from __future__ import annotations

import json
from datetime import date
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from wpquery.queries.errors import QueryParseError
from wpquery.queries.filters import (
    CURRENT_USER_EQUALS,
    BoolValue,
    CurrentUserValue,
    DateRangeValue,
    DateValue,
    Filter,
    FilterOperator,
    FilterSet,
    IdsValue,
    IdValue,
    NoValue,
    NumberValue,
    OperatorKind,
    StrsValue,
    StrValue,
    from_ids,
    from_strings,
)
from wpquery.queries.query import Query
from wpquery.queries.sorts import SortCriterion, SortDirection, SortOrder

ME = "me"

ID_ATTRIBUTES = frozenset(
    {
        "id",
        "project_id",
        "type_id",
        "status_id",
        "priority_id",
        "author_id",
        "assigned_to_id",
        "responsible_id",
        "category_id",
        "version_id",
        "parent_id",
    }
)
DATE_ATTRIBUTES = frozenset({"start_date", "due_date", "created_at", "updated_at"})
NUMBER_ATTRIBUTES = frozenset({"estimated_hours", "done_ratio", "priority_position"})
BOOL_ATTRIBUTES = frozenset({"status_is_closed"})

_TRUE = {"t", "true", "1", "yes"}
_FALSE = {"f", "false", "0", "no"}


# ----------------------------
# Full query document
# ----------------------------
def query_to_json(query: Query) -> Dict[str, Any]:
    return query.model_dump(mode="json", by_alias=True)


def query_from_json(data: Union[str, bytes, Dict[str, Any]]) -> Query:
    try:
        if isinstance(data, (str, bytes)):
            return Query.model_validate_json(data)
        return Query.model_validate(data)
    except ValidationError as e:
        raise QueryParseError(f"Invalid query document: {e.error_count()} error(s)") from e


# ----------------------------
# Compact API filters
# ----------------------------
def _load_json(raw: Union[str, list, None], what: str) -> list:
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return raw
    try:
        loaded = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise QueryParseError(f"{what} is not valid JSON") from e
    if not isinstance(loaded, list):
        raise QueryParseError(f"{what} must be a JSON array")
    return loaded


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except (TypeError, ValueError) as e:
        raise QueryParseError(f"Invalid date: {raw!r}") from e


def _typed_values(attribute: str, operator: FilterOperator, raw: List[Any]):
    values = [str(v) for v in raw if v is not None]

    if operator.kind == OperatorKind.between:
        if len(values) != 2:
            raise QueryParseError(f"{attribute}: '<>d' needs exactly two dates")
        return DateRangeValue(from_=_parse_date(values[0]), to=_parse_date(values[1]))

    if not values:
        if operator.is_relative_day():
            return NumberValue(value=operator.days)
        return NoValue()

    if ME in values and (attribute in ID_ATTRIBUTES or operator.kind == OperatorKind.current_user_equals):
        if len(values) > 1:
            raise QueryParseError(f"{attribute}: 'me' cannot be combined with other values")
        return CurrentUserValue()

    scalar = attribute in NUMBER_ATTRIBUTES | BOOL_ATTRIBUTES | DATE_ATTRIBUTES or operator.is_relative_day()
    if scalar and len(values) > 1:
        raise QueryParseError(f"{attribute}: expected a single value, got {len(values)}")

    try:
        if attribute in ID_ATTRIBUTES:
            return from_ids(int(v) for v in values)
        if attribute in BOOL_ATTRIBUTES:
            flag = values[0].lower()
            if flag not in _TRUE | _FALSE:
                raise QueryParseError(f"{attribute}: expected a boolean, got {values[0]!r}")
            return BoolValue(value=flag in _TRUE)
        if attribute in NUMBER_ATTRIBUTES or operator.is_relative_day():
            return NumberValue(value=float(values[0]))
    except ValueError as e:
        if isinstance(e, QueryParseError):
            raise
        raise QueryParseError(f"{attribute}: invalid value {values!r}") from e

    if attribute in DATE_ATTRIBUTES:
        return DateValue(value=_parse_date(values[0]))
    return from_strings(values)


def _parse_operator(attribute: str, code: Any, values: List[Any]) -> FilterOperator:
    if not isinstance(code, str):
        raise QueryParseError(f"{attribute}: operator must be a string")
    op = FilterOperator.parse(code)
    if op is None and code in {"t-", "t+", "<t-", ">t-", "<t+", ">t+"} and values:
        # day count given as the value instead of inside the code
        op = FilterOperator.parse(f"{code}{values[0]}")
    if op is None:
        raise QueryParseError(f"{attribute}: unknown operator {code!r}")
    if op.kind == OperatorKind.equals and ME in [str(v) for v in values] and attribute in ID_ATTRIBUTES:
        return CURRENT_USER_EQUALS
    return op


def parse_api_filters(raw: Union[str, list, None]) -> FilterSet:
    out = FilterSet()
    for entry in _load_json(raw, "filters"):
        if not isinstance(entry, dict):
            raise QueryParseError("each filter must be an object")
        for attribute, body in entry.items():
            if not isinstance(body, dict):
                raise QueryParseError(f"{attribute}: filter body must be an object")
            raw_values = body.get("values") or []
            if not isinstance(raw_values, list):
                raw_values = [raw_values]
            op = _parse_operator(attribute, body.get("operator"), raw_values)
            value = _typed_values(attribute, op, raw_values)
            out.add(Filter(attribute=attribute, operator=op, value=value))
    return out


def _value_to_api(value) -> List[str]:
    if isinstance(value, CurrentUserValue):
        return [ME]
    if isinstance(value, (IdValue, IdsValue, StrValue, StrsValue)):
        return value.as_strings()
    if isinstance(value, BoolValue):
        return ["t" if value.value else "f"]
    if isinstance(value, DateValue):
        return [value.value.isoformat()]
    if isinstance(value, DateRangeValue):
        return [value.from_.isoformat(), value.to.isoformat()]
    if isinstance(value, NumberValue):
        n = value.value
        return [str(int(n)) if float(n).is_integer() else str(n)]
    return []


def filters_to_api(filters: FilterSet) -> List[Dict[str, Any]]:
    return [
        {f.attribute: {"operator": f.operator.code(), "values": _value_to_api(f.value)}}
        for f in filters.filters
    ]


# ----------------------------
# Compact API sort criteria
# ----------------------------
def parse_sort_criteria(raw: Union[str, list, None]) -> SortOrder:
    order = SortOrder()
    for entry in _load_json(raw, "sortBy"):
        if isinstance(entry, str):
            # "attribute" or "attribute:desc"
            attribute, _, direction = entry.partition(":")
            pair = [attribute, direction or "asc"]
        else:
            pair = entry
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise QueryParseError("each sort criterion must be [attribute, direction]")
        attribute, raw_direction = pair
        direction: Optional[SortDirection] = SortDirection.parse(str(raw_direction))
        if not attribute or direction is None:
            raise QueryParseError(f"invalid sort criterion {list(pair)!r}")
        order.add(SortCriterion(attribute=str(attribute), direction=direction))
    return order


def sort_criteria_to_api(sorts: SortOrder) -> List[List[str]]:
    return [[c.attribute, c.direction.value] for c in sorts.criteria]

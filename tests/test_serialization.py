# File: /tests/test_serialization.py | Version: 1.0 | Title: Query JSON document + API compact filters/sortBy
from __future__ import annotations

import json
from datetime import date

import pytest

from wpquery.crud.filtering import translate
from wpquery.queries.builder import QueryBuilder
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
    StrValue,
)
from wpquery.queries.query import Query
from wpquery.queries.serialization import (
    filters_to_api,
    parse_api_filters,
    parse_sort_criteria,
    query_from_json,
    query_to_json,
    sort_criteria_to_api,
)
from wpquery.queries.sorts import SortDirection, SortOrder


# ---- full document ----
def test_query_document_keeps_current_user_and_codes():
    q = (
        QueryBuilder()
        .name("Mine")
        .assigned_to_me()
        .filter(Filter(attribute="due_date", operator=FilterOperator.less_than_days_ago(7), value=NumberValue(value=7)))
        .sort_by_asc("priority")
        .build()
    )
    doc = query_to_json(q)
    ops = [f["operator"] for f in doc["filters"]["filters"]]
    assert ops == ["=", "<t-7"]
    restored = query_from_json(json.dumps(doc))
    assert restored == q
    assert restored.filters.filters[0].operator == CURRENT_USER_EQUALS


def test_query_document_date_range_uses_from_key():
    q = QueryBuilder().filter(
        Filter(
            attribute="due_date",
            operator=FilterOperator.parse("<>d"),
            value=DateRangeValue(from_=date(2024, 1, 1), to=date(2024, 2, 1)),
        )
    ).build()
    doc = query_to_json(q)
    assert doc["filters"]["filters"][0]["value"] == {"kind": "date_range", "from": "2024-01-01", "to": "2024-02-01"}
    assert query_from_json(doc) == q


def test_invalid_document_raises_parse_error():
    with pytest.raises(QueryParseError):
        query_from_json({"filters": {"filters": [{"attribute": "x", "operator": "nope"}]}})


# ---- API filters ----
def test_parse_id_filters():
    fs = parse_api_filters('[{"status_id": {"operator": "=", "values": ["1", "2"]}}]')
    f = fs.filters[0]
    assert f.attribute == "status_id"
    assert f.operator.kind == OperatorKind.equals
    assert f.value == IdsValue(values=[1, 2])


def test_parse_me_becomes_current_user():
    fs = parse_api_filters([{"assigned_to_id": {"operator": "=", "values": ["me"]}}])
    f = fs.filters[0]
    assert f.operator == CURRENT_USER_EQUALS
    assert isinstance(f.value, CurrentUserValue)


def test_parse_typed_values():
    fs = parse_api_filters(
        [
            {"due_date": {"operator": "<>d", "values": ["2024-01-01", "2024-01-31"]}},
            {"start_date": {"operator": ">=", "values": ["2024-03-01"]}},
            {"status_is_closed": {"operator": "=", "values": ["f"]}},
            {"estimated_hours": {"operator": ">", "values": ["2.5"]}},
            {"subject": {"operator": "~", "values": ["bug"]}},
            {"parent_id": {"operator": "*", "values": []}},
            {"created_at": {"operator": ">t-7", "values": []}},
        ]
    )
    values = [f.value for f in fs.filters]
    assert values == [
        DateRangeValue(from_=date(2024, 1, 1), to=date(2024, 1, 31)),
        DateValue(value=date(2024, 3, 1)),
        BoolValue(value=False),
        NumberValue(value=2.5),
        StrValue(value="bug"),
        NoValue(),
        NumberValue(value=7),
    ]
    assert fs.filters[6].operator == FilterOperator.more_than_days_ago(7)


def test_relative_day_count_may_come_as_value():
    fs = parse_api_filters([{"updated_at": {"operator": "<t-", "values": ["3"]}}])
    assert fs.filters[0].operator == FilterOperator.less_than_days_ago(3)


def test_multiple_filters_in_one_object_keep_order():
    fs = parse_api_filters([{"type_id": {"operator": "=", "values": ["1"]}, "project_id": {"operator": "!", "values": ["2"]}}])
    assert [f.attribute for f in fs.filters] == ["type_id", "project_id"]


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"status_id": {}}',
        '["status_id"]',
        '[{"status_id": {"operator": "??", "values": ["1"]}}]',
        '[{"status_id": {"operator": "=", "values": ["abc"]}}]',
        '[{"due_date": {"operator": "<>d", "values": ["2024-01-01"]}}]',
        '[{"due_date": {"operator": "=", "values": ["yesterday"]}}]',
        '[{"status_is_closed": {"operator": "=", "values": ["maybe"]}}]',
    ],
)
def test_malformed_api_filters_raise(raw):
    with pytest.raises(QueryParseError):
        parse_api_filters(raw)


def test_empty_api_filters():
    assert parse_api_filters(None).is_empty()
    assert parse_api_filters("").is_empty()
    assert parse_api_filters("[]").is_empty()


def test_filters_to_api_shapes():
    fs = FilterSet.of(
        Filter.equals("status_id", IdsValue(values=[1, 2])),
        Filter.current_user("assigned_to_id"),
        Filter.equals("status_is_closed", BoolValue(value=True)),
        Filter(attribute="due_date", operator=FilterOperator.days_ago(2), value=NumberValue(value=2)),
    )
    assert filters_to_api(fs) == [
        {"status_id": {"operator": "=", "values": ["1", "2"]}},
        {"assigned_to_id": {"operator": "=", "values": ["me"]}},
        {"status_is_closed": {"operator": "=", "values": ["t"]}},
        {"due_date": {"operator": "t-2", "values": ["2"]}},
    ]
    assert parse_api_filters(filters_to_api(fs)) == fs


def test_valueless_current_user_filter_keeps_matching_nobody_after_round_trips():
    flt = Filter(attribute="assigned_to_id", operator=CURRENT_USER_EQUALS)
    assert flt.value == CurrentUserValue()
    q = Query(filters=FilterSet.of(flt))
    assert translate(q, None).where == "1 = 0"

    from_document = query_from_json(json.dumps(query_to_json(q)))
    assert from_document.filters.filters[0].operator == CURRENT_USER_EQUALS
    assert translate(from_document, None).where == "1 = 0"

    from_api = Query(filters=parse_api_filters(filters_to_api(q.filters)))
    assert from_api.filters.filters[0].operator == CURRENT_USER_EQUALS
    assert translate(from_api, None).where == "1 = 0"
    assert translate(from_api, 5).where == "wp.assigned_to_id = 5"


@pytest.mark.parametrize(
    "raw",
    [
        [{"done_ratio": {"operator": "=", "values": ["10", "100"]}}],
        [{"estimated_hours": {"operator": ">=", "values": ["1", "2"]}}],
        [{"due_date": {"operator": "=", "values": ["2024-01-01", "2024-01-02"]}}],
        [{"status_is_closed": {"operator": "=", "values": ["t", "f"]}}],
        [{"assigned_to_id": {"operator": "=", "values": ["me", "3"]}}],
    ],
)
def test_extra_values_are_rejected_not_dropped(raw):
    with pytest.raises(QueryParseError):
        parse_api_filters(raw)


# ---- API sortBy ----
def test_parse_sort_criteria():
    order = parse_sort_criteria('[["priority", "asc"], ["id", "desc"]]')
    assert sort_criteria_to_api(order) == [["priority", "asc"], ["id", "desc"]]


def test_parse_sort_criteria_string_form():
    order = parse_sort_criteria(["updated_at:desc", "subject"])
    assert [(c.attribute, c.direction) for c in order.criteria] == [
        ("updated_at", SortDirection.desc),
        ("subject", SortDirection.asc),
    ]


@pytest.mark.parametrize("raw", ['[["id"]]', '[["id", "sideways"]]', '[["", "asc"]]', '{"id": "asc"}'])
def test_malformed_sort_criteria_raise(raw):
    with pytest.raises(QueryParseError):
        parse_sort_criteria(raw)


def test_empty_sort_criteria():
    assert parse_sort_criteria(None) == SortOrder()

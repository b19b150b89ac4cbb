# File: /tests/test_filters.py | Version: 1.0 | Title: Filter values, operator codes, filters and filter sets
from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from wpquery.queries.filters import (
    CURRENT_USER_EQUALS,
    EQUALS,
    FIXED_CODES,
    IS_NULL,
    RELATIVE_DAY_PREFIXES,
    TODAY,
    CurrentUserValue,
    DateRangeValue,
    Filter,
    FilterOperator,
    FilterSet,
    IdsValue,
    IdValue,
    NoValue,
    OperatorKind,
    StrsValue,
    StrValue,
    from_ids,
    from_strings,
)


# ---- values ----
def test_single_id_normalizes_to_scalar():
    assert from_ids([7]) == IdValue(value=7)
    assert from_ids([1, 2]) == IdsValue(values=[1, 2])


def test_single_string_normalizes_to_scalar():
    assert from_strings(["a"]) == StrValue(value="a")
    assert from_strings(["a", "b"]) == StrsValue(values=["a", "b"])


def test_date_range_accepts_from_alias_and_dumps_it():
    v = DateRangeValue.model_validate({"from": "2024-01-01", "to": "2024-01-31"})
    assert v.from_ == date(2024, 1, 1)
    assert v.model_dump(mode="json", by_alias=True)["from"] == "2024-01-01"


# ---- operator codes ----
@pytest.mark.parametrize(
    "kind",
    [k for k in FIXED_CODES if k is not OperatorKind.current_user_equals],
)
def test_fixed_codes_round_trip(kind):
    op = FilterOperator(kind=kind)
    assert FilterOperator.parse(op.code()) == op


@pytest.mark.parametrize(
    "factory",
    [
        FilterOperator.days_ago,
        FilterOperator.days_from_now,
        FilterOperator.less_than_days_ago,
        FilterOperator.more_than_days_ago,
        FilterOperator.less_than_days_from_now,
        FilterOperator.more_than_days_from_now,
    ],
)
@pytest.mark.parametrize("days", [0, 1, 5, -3, 365, 2_147_483_647])
def test_relative_day_codes_round_trip(factory, days):
    op = factory(days)
    parsed = FilterOperator.parse(op.code())
    assert parsed == op
    assert parsed.days == days


def test_relative_day_code_shapes():
    assert FilterOperator.days_ago(5).code() == "t-5"
    assert FilterOperator.more_than_days_from_now(10).code() == ">t+10"
    assert FilterOperator.parse("<t-7") == FilterOperator.less_than_days_ago(7)


def test_null_aliases():
    assert FilterOperator.parse("o") == IS_NULL
    assert FilterOperator.parse("c").kind == OperatorKind.is_not_null


@pytest.mark.parametrize("code", ["", "==", "t-", "t-x", "like", "<>"])
def test_unknown_codes_do_not_parse(code):
    assert FilterOperator.parse(code) is None


def test_current_user_equals_shares_the_equals_code():
    assert CURRENT_USER_EQUALS.code() == "="
    assert FilterOperator.parse("=") == EQUALS


def test_relative_day_operator_needs_days():
    with pytest.raises(ValidationError):
        FilterOperator(kind=OperatorKind.days_ago)
    with pytest.raises(ValidationError):
        FilterOperator(kind=OperatorKind.today, days=2)


def test_requires_values():
    valueless = {
        OperatorKind.is_null,
        OperatorKind.is_not_null,
        OperatorKind.today,
        OperatorKind.this_week,
        OperatorKind.current_user_equals,
    }
    for kind in OperatorKind:
        op = FilterOperator(kind=kind, days=1 if kind in RELATIVE_DAY_PREFIXES else None)
        assert op.requires_values() is (kind not in valueless)


# ---- filters ----
def test_filter_validity():
    assert Filter.equals("status_id", IdValue(value=1)).is_valid()
    assert not Filter(attribute="status_id", operator=EQUALS).is_valid()
    assert not Filter.equals("", IdValue(value=1)).is_valid()
    assert Filter.is_null("assigned_to_id").is_valid()
    assert Filter(attribute="due_date", operator=TODAY).is_valid()
    assert Filter.current_user("assigned_to_id").is_valid()


def test_filter_accepts_operator_codes():
    f = Filter.model_validate({"attribute": "subject", "operator": "~", "value": {"kind": "string", "value": "x"}})
    assert f.operator.kind == OperatorKind.contains


def test_filter_rejects_unknown_operator_code():
    with pytest.raises(ValidationError):
        Filter.model_validate({"attribute": "subject", "operator": "??"})


def test_equals_code_with_current_user_value_is_current_user_equals():
    f = Filter.model_validate(
        {"attribute": "assigned_to_id", "operator": "=", "value": {"kind": "current_user"}}
    )
    assert f.operator == CURRENT_USER_EQUALS
    assert isinstance(f.value, CurrentUserValue)


def test_filter_dumps_operator_code():
    f = Filter(attribute="due_date", operator=FilterOperator.days_ago(3), value=NoValue())
    data = f.model_dump(mode="json")
    assert data["operator"] == "t-3"
    assert data["value"] == {"kind": "none"}
    assert Filter.model_validate(data) == f


# ---- filter sets ----
def test_filter_set_keeps_duplicates_and_order():
    a = Filter.equals("status_id", IdValue(value=1))
    b = Filter.equals("status_id", IdValue(value=2))
    fs = FilterSet().add(a).add(b)
    assert fs.filters == [a, b]
    assert fs.filters_for("status_id") == [a, b]
    assert len(fs) == 2


def test_filter_set_with_filter_does_not_mutate():
    fs = FilterSet.of(Filter.is_null("parent_id"))
    bigger = fs.with_filter(Filter.is_null("assigned_to_id"))
    assert len(fs) == 1
    assert len(bigger) == 2


def test_filter_set_remove_and_lookup():
    fs = FilterSet.of(
        Filter.is_null("parent_id"),
        Filter.contains("subject", "bug"),
        Filter.is_not_null("parent_id"),
    )
    assert fs.has_filter_for("parent_id")
    assert fs.filtered_attributes() == {"parent_id", "subject"}
    fs.remove_filters_for("parent_id")
    assert not fs.has_filter_for("parent_id")
    assert [f.attribute for f in fs.filters] == ["subject"]


def test_filter_set_validity_is_and_of_members():
    ok = Filter.is_null("parent_id")
    bad = Filter(attribute="status_id", operator=EQUALS)
    assert FilterSet.of(ok).is_valid()
    assert not FilterSet.of(ok, bad).is_valid()
    assert FilterSet().is_empty()

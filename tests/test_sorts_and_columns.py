# File: /tests/test_sorts_and_columns.py | Version: 1.0 | Title: Sort orders and display column sets
from __future__ import annotations

import pytest
from pydantic import ValidationError

from wpquery.queries.columns import (
    DEFAULT_WORK_PACKAGE_COLUMNS,
    Column,
    ColumnKind,
    ColumnSet,
    column_from_name,
)
from wpquery.queries.sorts import SortCriterion, SortDirection, SortOrder, default_work_package_sort


# ---- sorts ----
def test_sort_order_chaining_keeps_order():
    order = SortOrder.by_asc("priority").then_desc("id")
    assert [(c.attribute, c.direction) for c in order.criteria] == [
        ("priority", SortDirection.asc),
        ("id", SortDirection.desc),
    ]


def test_then_returns_new_order():
    base = SortOrder.by_asc("subject")
    longer = base.then_asc("id")
    assert len(base) == 1
    assert len(longer) == 2


def test_sort_order_allows_repeated_attributes():
    order = SortOrder.by_asc("id").then_desc("id")
    assert len(order) == 2
    order.remove_sort_for("id")
    assert order.is_empty()


def test_default_sort_is_id_desc():
    assert default_work_package_sort().criteria == [SortCriterion.desc("id")]
    assert SortOrder().primary() is None


@pytest.mark.parametrize(
    "raw, expected",
    [("asc", SortDirection.asc), ("DESC", SortDirection.desc), ("descending", SortDirection.desc), ("up", None)],
)
def test_direction_parse(raw, expected):
    assert SortDirection.parse(raw) is expected


def test_criterion_reversed():
    assert SortCriterion.asc("due_date").reversed() == SortCriterion.desc("due_date")


# ---- columns ----
def test_custom_field_column_name_is_derived():
    col = Column.for_custom_field(42)
    assert col.name == "cf_42"
    assert col.is_custom_field()
    assert Column(name="whatever", kind=ColumnKind.custom_field, custom_field_id=7).name == "cf_7"


def test_custom_field_column_needs_id():
    with pytest.raises(ValidationError):
        Column(name="cf_x", kind=ColumnKind.custom_field)


def test_default_columns():
    assert ColumnSet.default_work_package().names() == list(DEFAULT_WORK_PACKAGE_COLUMNS)


def test_column_from_name():
    assert column_from_name("status").groupable
    assert column_from_name("cf_9").custom_field_id == 9
    assert column_from_name("story_points").kind == ColumnKind.property


def test_capability_filters():
    cols = ColumnSet.from_names(["id", "status", "spent_hours"]).with_column(Column.for_relation("children"))
    assert [c.name for c in cols.sortable_columns()] == ["id", "status", "spent_hours"]
    assert [c.name for c in cols.groupable_columns()] == ["status"]


def test_reorder_and_remove():
    cols = ColumnSet.from_names(["id", "subject", "status", "priority"])
    cols.reorder(["priority", "id"])
    assert cols.names() == ["priority", "id", "subject", "status"]
    cols.remove("subject")
    assert not cols.has_column("subject")
    assert len(cols) == 3


def test_caption_defaults_to_name():
    assert Column.for_property("foo").display_caption() == "foo"
    assert Column.for_property("foo").with_caption("Foo").display_caption() == "Foo"

# File: /wpquery/queries/__init__.py | Version: 1.0 | Title: Query model package exports
from .builder import PRESETS, QueryBuilder
from .columns import Column, ColumnKind, ColumnSet
from .errors import QueryExecutionError, QueryParseError
from .filters import (
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
from .query import (
    DisplayRepresentation,
    GroupBy,
    Highlighting,
    HighlightingMode,
    Query,
    QueryVisibility,
    TimelineZoomLevel,
)
from .sorts import SortCriterion, SortDirection, SortOrder

__all__ = [
    "BoolValue",
    "Column",
    "ColumnKind",
    "ColumnSet",
    "CurrentUserValue",
    "DateRangeValue",
    "DateValue",
    "DisplayRepresentation",
    "Filter",
    "FilterOperator",
    "FilterSet",
    "GroupBy",
    "Highlighting",
    "HighlightingMode",
    "IdValue",
    "IdsValue",
    "NoValue",
    "NumberValue",
    "OperatorKind",
    "PRESETS",
    "Query",
    "QueryBuilder",
    "QueryExecutionError",
    "QueryParseError",
    "QueryVisibility",
    "SortCriterion",
    "SortDirection",
    "SortOrder",
    "StrValue",
    "StrsValue",
    "TimelineZoomLevel",
    "from_ids",
    "from_strings",
]

# File: /wpquery/queries/filters.py | Version: 1.3 | Title: Filter values, operators, filters and filter sets
from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Set, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


# ----------------------
# Filter values
# ----------------------
class _Value(BaseModel):
    model_config = ConfigDict(frozen=True)

    def as_ids(self) -> List[int]:
        return []

    def as_strings(self) -> List[str]:
        return []


class IdValue(_Value):
    kind: Literal["id"] = "id"
    value: int

    def as_ids(self) -> List[int]:
        return [self.value]

    def as_strings(self) -> List[str]:
        return [str(self.value)]


class IdsValue(_Value):
    kind: Literal["ids"] = "ids"
    values: List[int]

    def as_ids(self) -> List[int]:
        return list(self.values)

    def as_strings(self) -> List[str]:
        return [str(v) for v in self.values]


class StrValue(_Value):
    kind: Literal["string"] = "string"
    value: str

    def as_strings(self) -> List[str]:
        return [self.value]


class StrsValue(_Value):
    kind: Literal["strings"] = "strings"
    values: List[str]

    def as_strings(self) -> List[str]:
        return list(self.values)


class BoolValue(_Value):
    kind: Literal["bool"] = "bool"
    value: bool


class DateValue(_Value):
    kind: Literal["date"] = "date"
    value: date


class DateRangeValue(_Value):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: Literal["date_range"] = "date_range"
    from_: date = Field(alias="from")
    to: date


class NumberValue(_Value):
    kind: Literal["number"] = "number"
    value: float


class CurrentUserValue(_Value):
    """Placeholder for the requesting user; resolved only at translation time."""

    kind: Literal["current_user"] = "current_user"


class NoValue(_Value):
    kind: Literal["none"] = "none"


FilterValue = Annotated[
    Union[
        IdValue,
        IdsValue,
        StrValue,
        StrsValue,
        BoolValue,
        DateValue,
        DateRangeValue,
        NumberValue,
        CurrentUserValue,
        NoValue,
    ],
    Field(discriminator="kind"),
]


def from_ids(ids: Iterable[int]) -> Union[IdValue, IdsValue]:
    ids = list(ids)
    if len(ids) == 1:
        return IdValue(value=ids[0])
    return IdsValue(values=ids)


def from_strings(values: Iterable[str]) -> Union[StrValue, StrsValue]:
    values = list(values)
    if len(values) == 1:
        return StrValue(value=values[0])
    return StrsValue(values=values)


# ----------------------
# Operators
# ----------------------
class OperatorKind(str, Enum):
    equals = "equals"
    not_equals = "not_equals"
    contains = "contains"
    not_contains = "not_contains"
    starts_with = "starts_with"
    ends_with = "ends_with"
    greater_than = "greater_than"
    greater_or_equal = "greater_or_equal"
    less_than = "less_than"
    less_or_equal = "less_or_equal"
    between = "between"
    is_null = "is_null"
    is_not_null = "is_not_null"
    today = "today"
    this_week = "this_week"
    days_ago = "days_ago"
    days_from_now = "days_from_now"
    less_than_days_ago = "less_than_days_ago"
    more_than_days_ago = "more_than_days_ago"
    less_than_days_from_now = "less_than_days_from_now"
    more_than_days_from_now = "more_than_days_from_now"
    current_user_equals = "current_user_equals"


# Stable serialized codes; changing any of these needs a data migration.
FIXED_CODES: Dict[OperatorKind, str] = {
    OperatorKind.equals: "=",
    OperatorKind.not_equals: "!",
    OperatorKind.contains: "~",
    OperatorKind.not_contains: "!~",
    OperatorKind.starts_with: "**",
    OperatorKind.ends_with: "*~",
    OperatorKind.greater_than: ">",
    OperatorKind.greater_or_equal: ">=",
    OperatorKind.less_than: "<",
    OperatorKind.less_or_equal: "<=",
    OperatorKind.between: "<>d",
    OperatorKind.is_null: "*",
    OperatorKind.is_not_null: "!*",
    OperatorKind.today: "t",
    OperatorKind.this_week: "w",
    # shares "=" with equals; the CurrentUserValue tells them apart
    OperatorKind.current_user_equals: "=",
}

RELATIVE_DAY_PREFIXES: Dict[OperatorKind, str] = {
    OperatorKind.days_ago: "t-",
    OperatorKind.days_from_now: "t+",
    OperatorKind.less_than_days_ago: "<t-",
    OperatorKind.more_than_days_ago: ">t-",
    OperatorKind.less_than_days_from_now: "<t+",
    OperatorKind.more_than_days_from_now: ">t+",
}

_uncoded = set(OperatorKind) - set(FIXED_CODES) - set(RELATIVE_DAY_PREFIXES)
if _uncoded:  # pragma: no cover
    raise RuntimeError(f"Operators without a serialized code: {sorted(k.value for k in _uncoded)}")

_KINDS_BY_CODE: Dict[str, OperatorKind] = {
    code: kind
    for kind, code in FIXED_CODES.items()
    if kind is not OperatorKind.current_user_equals
}
_KINDS_BY_CODE.update({"o": OperatorKind.is_null, "c": OperatorKind.is_not_null})

_KINDS_BY_PREFIX = {prefix: kind for kind, prefix in RELATIVE_DAY_PREFIXES.items()}
_RELATIVE_CODE = re.compile(r"^(<t-|>t-|<t\+|>t\+|t-|t\+)([+-]?\d+)$")

_VALUELESS = frozenset(
    {
        OperatorKind.is_null,
        OperatorKind.is_not_null,
        OperatorKind.today,
        OperatorKind.this_week,
        OperatorKind.current_user_equals,
    }
)


class FilterOperator(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: OperatorKind
    days: Optional[int] = None

    @model_validator(mode="after")
    def _days_match_kind(self) -> "FilterOperator":
        if self.kind in RELATIVE_DAY_PREFIXES:
            if self.days is None:
                raise ValueError(f"{self.kind.value} needs a day offset")
        elif self.days is not None:
            raise ValueError(f"{self.kind.value} does not take a day offset")
        return self

    @classmethod
    def parse(cls, code: str) -> Optional["FilterOperator"]:
        kind = _KINDS_BY_CODE.get(code)
        if kind is not None:
            return cls(kind=kind)
        m = _RELATIVE_CODE.match(code or "")
        if m is None:
            return None
        return cls(kind=_KINDS_BY_PREFIX[m.group(1)], days=int(m.group(2)))

    @classmethod
    def days_ago(cls, days: int) -> "FilterOperator":
        return cls(kind=OperatorKind.days_ago, days=days)

    @classmethod
    def days_from_now(cls, days: int) -> "FilterOperator":
        return cls(kind=OperatorKind.days_from_now, days=days)

    @classmethod
    def less_than_days_ago(cls, days: int) -> "FilterOperator":
        return cls(kind=OperatorKind.less_than_days_ago, days=days)

    @classmethod
    def more_than_days_ago(cls, days: int) -> "FilterOperator":
        return cls(kind=OperatorKind.more_than_days_ago, days=days)

    @classmethod
    def less_than_days_from_now(cls, days: int) -> "FilterOperator":
        return cls(kind=OperatorKind.less_than_days_from_now, days=days)

    @classmethod
    def more_than_days_from_now(cls, days: int) -> "FilterOperator":
        return cls(kind=OperatorKind.more_than_days_from_now, days=days)

    def code(self) -> str:
        prefix = RELATIVE_DAY_PREFIXES.get(self.kind)
        if prefix is not None:
            return f"{prefix}{self.days}"
        return FIXED_CODES[self.kind]

    def requires_values(self) -> bool:
        return self.kind not in _VALUELESS

    def is_relative_day(self) -> bool:
        return self.kind in RELATIVE_DAY_PREFIXES

    def __str__(self) -> str:
        return self.code()


EQUALS = FilterOperator(kind=OperatorKind.equals)
NOT_EQUALS = FilterOperator(kind=OperatorKind.not_equals)
CONTAINS = FilterOperator(kind=OperatorKind.contains)
NOT_CONTAINS = FilterOperator(kind=OperatorKind.not_contains)
STARTS_WITH = FilterOperator(kind=OperatorKind.starts_with)
ENDS_WITH = FilterOperator(kind=OperatorKind.ends_with)
GREATER_THAN = FilterOperator(kind=OperatorKind.greater_than)
GREATER_OR_EQUAL = FilterOperator(kind=OperatorKind.greater_or_equal)
LESS_THAN = FilterOperator(kind=OperatorKind.less_than)
LESS_OR_EQUAL = FilterOperator(kind=OperatorKind.less_or_equal)
BETWEEN = FilterOperator(kind=OperatorKind.between)
IS_NULL = FilterOperator(kind=OperatorKind.is_null)
IS_NOT_NULL = FilterOperator(kind=OperatorKind.is_not_null)
TODAY = FilterOperator(kind=OperatorKind.today)
THIS_WEEK = FilterOperator(kind=OperatorKind.this_week)
CURRENT_USER_EQUALS = FilterOperator(kind=OperatorKind.current_user_equals)


def _is_current_user_operator(operator: Any) -> bool:
    if isinstance(operator, FilterOperator):
        return operator.kind == OperatorKind.current_user_equals
    if isinstance(operator, dict):
        return operator.get("kind") in (OperatorKind.current_user_equals, "current_user_equals")
    return False


# ----------------------
# Filters
# ----------------------
class Filter(BaseModel):
    model_config = ConfigDict(frozen=True)

    attribute: str
    operator: FilterOperator
    value: FilterValue = Field(default_factory=NoValue)

    @model_validator(mode="before")
    @classmethod
    def _current_user_code(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        value = data.get("value")
        kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
        # "=" with a current_user value is CurrentUserEquals, not Equals
        if data.get("operator") == "=" and kind == "current_user":
            return {**data, "operator": CURRENT_USER_EQUALS}
        # CurrentUserEquals always carries the current_user value; it is the
        # only thing that survives serialization as "="
        if _is_current_user_operator(data.get("operator")) and kind in (None, "none"):
            return {**data, "value": CurrentUserValue()}
        return data

    @field_validator("operator", mode="before")
    @classmethod
    def _parse_operator_code(cls, v: Any) -> Any:
        if isinstance(v, str):
            op = FilterOperator.parse(v)
            if op is None:
                raise ValueError(f"Unknown filter operator code: {v!r}")
            return op
        return v

    @field_serializer("operator")
    def _operator_code(self, operator: FilterOperator) -> str:
        return operator.code()

    @classmethod
    def equals(cls, attribute: str, value: FilterValue) -> "Filter":
        return cls(attribute=attribute, operator=EQUALS, value=value)

    @classmethod
    def not_equals(cls, attribute: str, value: FilterValue) -> "Filter":
        return cls(attribute=attribute, operator=NOT_EQUALS, value=value)

    @classmethod
    def contains(cls, attribute: str, text: str) -> "Filter":
        return cls(attribute=attribute, operator=CONTAINS, value=StrValue(value=text))

    @classmethod
    def is_null(cls, attribute: str) -> "Filter":
        return cls(attribute=attribute, operator=IS_NULL)

    @classmethod
    def is_not_null(cls, attribute: str) -> "Filter":
        return cls(attribute=attribute, operator=IS_NOT_NULL)

    @classmethod
    def current_user(cls, attribute: str) -> "Filter":
        return cls(
            attribute=attribute,
            operator=CURRENT_USER_EQUALS,
            value=CurrentUserValue(),
        )

    def is_valid(self) -> bool:
        if not self.attribute:
            return False
        if self.operator.requires_values():
            return not isinstance(self.value, NoValue)
        return True


class FilterSet(BaseModel):
    """
    Ordered filters combined with AND.

    The same attribute may appear more than once; every filter applies.
    """

    # copied on assignment into another model (e.g. a Query)
    model_config = ConfigDict(revalidate_instances="always")

    filters: List[Filter] = Field(default_factory=list)

    @classmethod
    def of(cls, *filters: Filter) -> "FilterSet":
        return cls(filters=list(filters))

    def add(self, flt: Filter) -> "FilterSet":
        self.filters.append(flt)
        return self

    def with_filter(self, flt: Filter) -> "FilterSet":
        return FilterSet(filters=[*self.filters, flt])

    def filters_for(self, attribute: str) -> List[Filter]:
        return [f for f in self.filters if f.attribute == attribute]

    def has_filter_for(self, attribute: str) -> bool:
        return any(f.attribute == attribute for f in self.filters)

    def remove_filters_for(self, attribute: str) -> None:
        self.filters = [f for f in self.filters if f.attribute != attribute]

    def filtered_attributes(self) -> Set[str]:
        return {f.attribute for f in self.filters}

    def is_empty(self) -> bool:
        return not self.filters

    def is_valid(self) -> bool:
        return all(f.is_valid() for f in self.filters)

    def __len__(self) -> int:
        return len(self.filters)

# File: /wpquery/queries/errors.py | Version: 1.0 | Title: Query engine error types
from __future__ import annotations


class QueryParseError(ValueError):
    """Malformed serialized filters / sort criteria."""


class QueryExecutionError(Exception):
    """Any failure from the store while running a query (one opaque "database error" category)."""

    code = "DATABASE_ERROR"

    def __init__(self, message: str = "database error") -> None:
        self.message = message
        super().__init__(message)

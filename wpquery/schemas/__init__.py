# File: /wpquery/schemas/__init__.py | Version: 2.0 | Path: /wpquery/schemas/__init__.py
from . import pagination, saved_query, work_package

__all__ = ["pagination", "saved_query", "work_package"]

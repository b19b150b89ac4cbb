# File: /wpquery/models/__init__.py | Version: 2.0 | Title: Models Package Exports
from .saved_query import SavedQuery
from .work_package import Enumeration, Status, Type, WorkPackage

__all__ = [
    "WorkPackage",
    "Status",
    "Type",
    "Enumeration",
    "SavedQuery",
]

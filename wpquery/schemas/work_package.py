# File: /wpquery/schemas/work_package.py | Version: 1.0 | Title: Work package row schema (query executor output)
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from wpquery.schemas._base import BaseSchema

# Physical column order of the executor's SELECT list
ROW_COLUMNS = (
    "id",
    "subject",
    "description",
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
    "start_date",
    "due_date",
    "estimated_hours",
    "done_ratio",
    "lock_version",
    "created_at",
    "updated_at",
    "position",
    "story_points",
    "remaining_hours",
    "schedule_manually",
    "duration",
)


class WorkPackageRow(BaseSchema):
    id: int
    subject: str
    description: Optional[str] = None
    project_id: int
    type_id: int
    status_id: int
    priority_id: Optional[int] = None
    author_id: Optional[int] = None
    assigned_to_id: Optional[int] = None
    responsible_id: Optional[int] = None
    category_id: Optional[int] = None
    version_id: Optional[int] = None
    parent_id: Optional[int] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    done_ratio: int = 0
    lock_version: int = 0
    created_at: datetime
    updated_at: datetime
    position: Optional[int] = None
    story_points: Optional[int] = None
    remaining_hours: Optional[float] = None
    schedule_manually: bool = False
    duration: Optional[int] = None

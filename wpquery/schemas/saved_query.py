# File: /wpquery/schemas/saved_query.py | Version: 1.0 | Title: Pydantic v2 schemas for saved queries (API compact filters/sortBy)
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from wpquery.queries.query import (
    DisplayRepresentation,
    HighlightingMode,
    QueryVisibility,
    TimelineZoomLevel,
)


class SavedQueryBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=255)
    project_id: Optional[int] = None
    visibility: QueryVisibility = QueryVisibility.private
    display: DisplayRepresentation = DisplayRepresentation.list
    # e.g. [{"status_id": {"operator": "=", "values": ["1"]}}]
    filters: List[Dict[str, Any]] = Field(default_factory=list)
    # e.g. [["priority", "asc"], ["id", "desc"]]
    sort_by: List[List[str]] = Field(default_factory=list, alias="sortBy")
    columns: Optional[List[str]] = None
    group_by: Optional[str] = Field(default=None, alias="groupBy")
    highlighting_mode: HighlightingMode = HighlightingMode.none
    timeline_zoom_level: TimelineZoomLevel = TimelineZoomLevel.weeks
    include_subprojects: bool = True
    show_hierarchies: bool = True
    show_sums: bool = False


class SavedQueryCreate(SavedQueryBase):
    pass


class SavedQueryUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    visibility: Optional[QueryVisibility] = None
    display: Optional[DisplayRepresentation] = None
    filters: Optional[List[Dict[str, Any]]] = None
    sort_by: Optional[List[List[str]]] = Field(default=None, alias="sortBy")
    columns: Optional[List[str]] = None
    group_by: Optional[str] = Field(default=None, alias="groupBy")
    show_sums: Optional[bool] = None


class SavedQueryOut(SavedQueryBase):
    id: int
    user_id: int
    starred: bool = False
    show_timeline: bool = False
    columns: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# File: /wpquery/models/saved_query.py | Version: 1.0 | Title: SQLAlchemy model for saved work package queries
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from wpquery.db.base_class import Base


class SavedQuery(Base):
    __tablename__ = "queries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    # NULL project = global query
    project_id: Mapped[Optional[int]] = mapped_column(Integer)
    visibility: Mapped[str] = mapped_column(String(20), nullable=False, default="private")
    starred: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display: Mapped[str] = mapped_column(String(30), nullable=False, default="list")

    # API-compact filter/sort shapes; see wpquery.queries.serialization
    filters: Mapped[Optional[Any]] = mapped_column(JSON)
    sort_criteria: Mapped[Optional[Any]] = mapped_column(JSON)
    column_names: Mapped[Optional[Any]] = mapped_column(JSON)

    group_by: Mapped[Optional[str]] = mapped_column(String(100))
    group_collapsed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    highlighting_mode: Mapped[str] = mapped_column(String(20), nullable=False, default="none")
    highlighted_attributes: Mapped[Optional[Any]] = mapped_column(JSON)
    timeline_zoom_level: Mapped[str] = mapped_column(String(20), nullable=False, default="weeks")
    show_timeline: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    include_subprojects: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_hierarchies: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_sums: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    __table_args__ = (
        Index("ix_queries_user", "user_id"),
        Index("ix_queries_project", "project_id"),
    )

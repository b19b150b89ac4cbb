# File: /wpquery/models/work_package.py | Version: 1.0 | Title: Work packages + lookup tables (statuses, types, priorities)
from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wpquery.db.base_class import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Status(Base):
    __tablename__ = "statuses"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_closed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    position: Mapped[Optional[int]] = mapped_column(Integer)


class Type(Base):
    __tablename__ = "types"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[Optional[int]] = mapped_column(Integer)
    is_milestone: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class Enumeration(Base):
    # Shared lookup table; priorities are rows with type = 'IssuePriority'
    __tablename__ = "enumerations"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="IssuePriority")
    position: Mapped[Optional[int]] = mapped_column(Integer)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class WorkPackage(Base):
    __tablename__ = "work_packages"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    type_id: Mapped[int] = mapped_column(ForeignKey("types.id"), nullable=False)
    status_id: Mapped[int] = mapped_column(ForeignKey("statuses.id"), nullable=False)
    priority_id: Mapped[Optional[int]] = mapped_column(ForeignKey("enumerations.id"))
    author_id: Mapped[Optional[int]] = mapped_column(Integer)
    assigned_to_id: Mapped[Optional[int]] = mapped_column(Integer)
    responsible_id: Mapped[Optional[int]] = mapped_column(Integer)
    category_id: Mapped[Optional[int]] = mapped_column(Integer)
    version_id: Mapped[Optional[int]] = mapped_column(Integer)
    parent_id: Mapped[Optional[int]] = mapped_column(ForeignKey("work_packages.id"))
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    due_date: Mapped[Optional[date]] = mapped_column(Date)
    estimated_hours: Mapped[Optional[float]] = mapped_column(Float)
    done_ratio: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    lock_version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
    position: Mapped[Optional[int]] = mapped_column(Integer)
    story_points: Mapped[Optional[int]] = mapped_column(Integer)
    remaining_hours: Mapped[Optional[float]] = mapped_column(Float)
    schedule_manually: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    duration: Mapped[Optional[int]] = mapped_column(Integer)

    status: Mapped["Status"] = relationship()
    type: Mapped["Type"] = relationship()
    priority: Mapped[Optional["Enumeration"]] = relationship()

    __table_args__ = (
        Index("ix_work_packages_status", "status_id"),
        Index("ix_work_packages_assigned_to", "assigned_to_id"),
        Index("ix_work_packages_updated_at", "updated_at"),
    )

"""SQLAlchemy ORM models for schools and their admission deadlines."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import (
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions_api.db.base import Base
from admissions_api.db.enums import DeadlineSource
from admissions_api.db.types import JSONType, utcnow


class School(Base):
    __tablename__ = "schools"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_zh: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )

    deadlines: Mapped[list["SchoolDeadline"]] = relationship(
        back_populates="school", cascade="all, delete-orphan"
    )


class SchoolDeadline(Base):
    """
    Application deadlines for one school, admission year and round.

    At most one row per (school, year, round).
    """

    __tablename__ = "school_deadlines"
    __table_args__ = (
        UniqueConstraint("school_id", "year", "round", name="uq_school_deadline_round"),
        Index("idx_school_deadlines_year_deadline", "year", "application_deadline"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    round: Mapped[str] = mapped_column(String(20), nullable=False)  # AdmissionRound

    application_deadline: Mapped[date] = mapped_column(Date, nullable=False)
    financial_aid_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    decision_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    essay_prompts: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    essay_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    interview_required: Mapped[bool] = mapped_column(
        default=False, server_default=text("false"), nullable=False
    )
    interview_deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    application_fee: Mapped[int | None] = mapped_column(Integer, nullable=True)  # USD
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    source: Mapped[str] = mapped_column(
        String(20),
        default=DeadlineSource.MANUAL.value,
        server_default=text("'MANUAL'"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False
    )

    school: Mapped["School"] = relationship(back_populates="deadlines")

"""
Assessment Result Models

Completed sessions and their answer transcripts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class AssessmentResult(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One completed assessment session."""

    __tablename__ = "assessment_results"
    __table_args__ = (
        CheckConstraint(
            "end_reason IN ('max_questions', 'pool_exhausted', 'ended_early')",
            name="check_result_end_reason",
        ),
        Index("idx_results_completed_at", "completed_at"),
    )

    session_id: Mapped[UUID] = mapped_column(unique=True, nullable=False)
    end_reason: Mapped[str] = mapped_column(String(20), nullable=False)

    total_questions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    correct_answers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    final_tier: Mapped[str] = mapped_column(String(20), nullable=False)

    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    details: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict, comment="Hand-off metadata and transcript stats"
    )

    # Relationships
    answers: Mapped[list[AssessmentAnswer]] = relationship(
        back_populates="result",
        cascade="all, delete-orphan",
        order_by="AssessmentAnswer.position",
    )


class AssessmentAnswer(Base, UUIDPrimaryKeyMixin):
    """One transcript entry of a completed session."""

    __tablename__ = "assessment_answers"
    __table_args__ = (
        Index("idx_answers_result", "result_id"),
        Index("idx_answers_question", "question_id"),
    )

    result_id: Mapped[UUID] = mapped_column(
        ForeignKey("assessment_results.id", ondelete="CASCADE"), nullable=False
    )

    position: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, comment="1-based order within session"
    )
    question_id: Mapped[str] = mapped_column(String(100), nullable=False)
    tier: Mapped[str] = mapped_column(String(20), nullable=False, comment="Tier when presented")
    selected_option: Mapped[str] = mapped_column(String, nullable=False)
    is_correct: Mapped[bool] = mapped_column(nullable=False)
    time_taken_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    concepts: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    answered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    result: Mapped[AssessmentResult] = relationship(back_populates="answers")

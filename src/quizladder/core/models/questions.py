"""
Question Bank Models

Multiple-choice questions grouped by difficulty tier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, CheckConstraint, Index, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from quizladder.assessment.models import Question

TIER_VALUES = "('very_easy', 'easy', 'moderate', 'difficult')"


class QuestionItem(Base, TimestampMixin):
    """Stored question. Retired questions stay in the table with is_active = false."""

    __tablename__ = "question_items"
    __table_args__ = (
        CheckConstraint(f"tier IN {TIER_VALUES}", name="check_question_tier"),
        Index("idx_questions_tier_active", "tier", "is_active"),
    )

    id: Mapped[str] = mapped_column(String(100), primary_key=True, comment="Bank question ID")
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, comment="Ordered answer options (2+)"
    )
    correct_option: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[str] = mapped_column(Text, nullable=False, default="")
    concepts: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    tier: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="very_easy, easy, moderate, difficult"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    @classmethod
    def from_question(cls, question: Question) -> QuestionItem:
        """Build a row from a domain question."""
        return cls(
            id=question.id,
            prompt=question.prompt,
            options=list(question.options),
            correct_option=question.correct_option,
            explanation=question.explanation,
            concepts=list(question.concepts),
            tier=question.tier.value,
        )

    def to_question(self) -> Question:
        """Convert to an immutable domain question."""
        from quizladder.assessment.models import Question

        return Question(
            id=self.id,
            prompt=self.prompt,
            options=tuple(self.options),
            correct_option=self.correct_option,
            explanation=self.explanation or "",
            concepts=tuple(self.concepts or ()),
            tier=self.tier,
        )

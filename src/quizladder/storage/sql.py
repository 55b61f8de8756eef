"""
SQL Question Repository and Result Store

SQLAlchemy-backed collaborators. Each call opens its own session from the
injected factory, so one repository can serve many assessment sessions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from quizladder.assessment.errors import ResultStoreError
from quizladder.core.models import AssessmentAnswer, AssessmentResult, QuestionItem

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from quizladder.assessment.ladder import DifficultyTier
    from quizladder.assessment.models import Question, SessionState

logger = logging.getLogger(__name__)


class SqlQuestionRepository:
    """Reads active questions from the ``question_items`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize repository.

        Args:
            session_factory: Async session factory (e.g. core.database.async_session_maker)
        """
        self.session_factory = session_factory

    async def get_by_tier(self, tier: DifficultyTier) -> Sequence[Question]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(QuestionItem)
                .where(QuestionItem.tier == tier.value, QuestionItem.is_active.is_(True))
                .order_by(QuestionItem.id)
            )
            return tuple(item.to_question() for item in result.scalars().all())

    async def add_questions(self, questions: Iterable[Question]) -> int:
        """Insert or replace questions.

        Returns:
            Number of questions written
        """
        count = 0
        async with self.session_factory() as db:
            for question in questions:
                await db.merge(QuestionItem.from_question(question))
                count += 1
            await db.commit()

        return count


class SqlResultStore:
    """Persists completed sessions to ``assessment_results`` and ``assessment_answers``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def save(self, state: SessionState, metadata: dict[str, Any]) -> str:
        """Store a completed session and its transcript.

        Returns:
            ID of the stored result row

        Raises:
            ResultStoreError: Session still active, or the database write failed
        """
        if state.is_active or state.end_reason is None or state.completed_at is None:
            raise ResultStoreError(f"Session {state.session_id} is not completed")

        result = AssessmentResult(
            id=uuid4(),
            session_id=state.session_id,
            end_reason=state.end_reason.value,
            total_questions=state.answered,
            correct_answers=state.correct_answers,
            final_tier=state.current_tier.value,
            started_at=state.started_at,
            completed_at=state.completed_at,
            details=metadata,
        )
        result.answers = [
            AssessmentAnswer(
                position=event.position,
                question_id=event.question_id,
                tier=event.tier.value,
                selected_option=event.selected_option,
                is_correct=event.is_correct,
                time_taken_seconds=event.time_taken_seconds,
                concepts=list(event.concepts),
                answered_at=event.answered_at,
            )
            for event in state.transcript
        ]

        result_id = str(result.id)

        async with self.session_factory() as db:
            try:
                db.add(result)
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise ResultStoreError(
                    f"Failed to store session {state.session_id}: {e}"
                ) from e

        logger.info(f"Stored session {state.session_id} as result {result_id}")
        return result_id

    async def get_result(self, result_id: str) -> AssessmentResult | None:
        """Load a stored result with its answers."""
        from uuid import UUID

        from sqlalchemy.orm import selectinload

        async with self.session_factory() as db:
            result = await db.execute(
                select(AssessmentResult)
                .where(AssessmentResult.id == UUID(result_id))
                .options(selectinload(AssessmentResult.answers))
            )
            return result.scalar_one_or_none()

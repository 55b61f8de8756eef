"""
Assessment Session Controller

Public entry point of the adaptive engine:
1. START: New session at the easiest tier with its first question
2. SUBMIT: Record an answer, adjust difficulty, pick the next question
3. COMPLETE: At the question cap, when the pool runs dry, or on request
4. HAND OFF: Persist the transcript, then optionally summarize it
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING, Any

from .analysis import compute_stats
from .errors import (
    ExhaustedPool,
    InvalidAnswer,
    InvalidStateTransition,
    PoolExhaustedMidSession,
    ResultStoreError,
    StaleSubmission,
    SummarizerError,
)
from .models import AnswerEvent, EndReason, HandOffReport, SubmissionOutcome
from .selector import QuestionSelector
from .state import apply_answer, complete, new_session_state, present

if TYPE_CHECKING:
    from uuid import UUID

    from .interfaces import NarrativeSummarizer, QuestionRepository, ResultStore
    from .models import Question, SessionState

logger = logging.getLogger(__name__)


class AssessmentSession:
    """Runtime handle for one assessment run.

    Holds the latest ``SessionState`` snapshot and the question currently
    shown. Submissions and early ends on the same session are serialized
    through ``lock``; separate sessions share nothing.
    """

    def __init__(self, state: SessionState, question: Question | None = None):
        self._state = state
        self._question = question
        self._hand_off: HandOffReport | None = None
        self.lock = asyncio.Lock()

    @property
    def session_id(self) -> UUID:
        return self._state.session_id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_question(self) -> Question | None:
        """Question awaiting an answer, None once completed."""
        return self._question

    @property
    def transcript(self) -> tuple[AnswerEvent, ...]:
        return self._state.transcript

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def hand_off(self) -> HandOffReport | None:
        """Persistence/summary report, set once the session completes."""
        return self._hand_off

    def _replace(self, state: SessionState, question: Question | None) -> None:
        self._state = state
        self._question = question


class AssessmentController:
    """Runs adaptive assessment sessions against a question repository."""

    def __init__(
        self,
        repository: QuestionRepository,
        *,
        result_store: ResultStore | None = None,
        summarizer: NarrativeSummarizer | None = None,
        rng: random.Random | None = None,
        max_questions: int | None = None,
        streak_threshold: int | None = None,
    ):
        """Initialize controller.

        Args:
            repository: Question source, read by tier
            result_store: Receives completed sessions (optional)
            summarizer: Writes a narrative after persistence (optional)
            rng: Random source for selection; seeded from settings if omitted
            max_questions: Session length cap; settings.MAX_QUESTIONS if omitted
            streak_threshold: Streak that changes tier; settings.STREAK_THRESHOLD if omitted
        """
        from quizladder.config import settings

        self.selector = QuestionSelector(repository, rng or random.Random(settings.RANDOM_SEED))
        self.result_store = result_store
        self.summarizer = summarizer
        self.max_questions = max_questions or settings.MAX_QUESTIONS
        self.streak_threshold = streak_threshold or settings.STREAK_THRESHOLD

    async def start(self) -> AssessmentSession:
        """Start a session and select its first question.

        Returns:
            Active session with ``current_question`` set

        Raises:
            ExhaustedPool: No question exists at the starting tier
        """
        state = new_session_state()
        question = await self.selector.select(state.current_tier, state.asked_ids)

        if question is None:
            logger.error(f"Cannot start session: no questions at tier {state.current_tier.value}")
            raise ExhaustedPool(state.current_tier)

        logger.info(f"Started assessment session {state.session_id}")
        return AssessmentSession(present(state, question.id), question)

    async def submit_answer(
        self,
        session: AssessmentSession,
        question_id: str,
        selected_option: str,
        time_taken_seconds: float,
    ) -> SubmissionOutcome:
        """Record an answer to the pending question and advance the session.

        Args:
            session: Active session
            question_id: ID of the question being answered
            selected_option: Option the learner chose
            time_taken_seconds: Time spent on the question

        Returns:
            SubmissionOutcome with the next question, or the hand-off report
            if the session completed

        Raises:
            InvalidStateTransition: Session already completed
            StaleSubmission: ``question_id`` is not the pending question
            InvalidAnswer: Unknown option or negative duration
        """
        async with session.lock:
            state = session.state
            self._require_active(state, "submit an answer to")

            question = session.current_question
            if question is None or question_id != state.pending_question_id:
                raise StaleSubmission(state.pending_question_id, question_id)

            if selected_option not in question.options:
                raise InvalidAnswer(
                    f"Option '{selected_option}' is not offered by question '{question.id}'"
                )
            if time_taken_seconds < 0:
                raise InvalidAnswer(f"Time taken cannot be negative: {time_taken_seconds}")

            event = AnswerEvent(
                question_id=question.id,
                tier=state.current_tier,
                selected_option=selected_option,
                is_correct=question.is_correct(selected_option),
                time_taken_seconds=time_taken_seconds,
                position=state.answered + 1,
                concepts=question.concepts,
            )

            state = apply_answer(
                state,
                event,
                max_questions=self.max_questions,
                streak_threshold=self.streak_threshold,
            )

            next_question = None
            if state.is_active:
                try:
                    next_question = await self._next_question(state)
                except PoolExhaustedMidSession as e:
                    logger.warning(f"Session {state.session_id}: {e}; ending session")
                    state = complete(state, EndReason.POOL_EXHAUSTED)
                else:
                    state = present(state, next_question.id)

            session._replace(state, next_question)

            if not state.is_active:
                await self._hand_off(session)

            return SubmissionOutcome(
                event=event,
                next_question=next_question,
                completed=not state.is_active,
                state=state,
                hand_off=session.hand_off,
            )

    async def end_early(self, session: AssessmentSession) -> AssessmentSession:
        """Complete a session at the caller's request.

        Raises:
            InvalidStateTransition: Session already completed
        """
        async with session.lock:
            self._require_active(session.state, "end")
            session._replace(complete(session.state, EndReason.ENDED_EARLY), None)
            await self._hand_off(session)

        return session

    async def _next_question(self, state: SessionState) -> Question:
        question = await self.selector.select(state.current_tier, state.asked_ids)
        if question is None:
            raise PoolExhaustedMidSession(state.current_tier, state.answered)
        return question

    def _require_active(self, state: SessionState, operation: str) -> None:
        if not state.is_active:
            raise InvalidStateTransition(state.session_id, state.status.value, operation)

    async def _hand_off(self, session: AssessmentSession) -> HandOffReport:
        """Persist a completed session, then summarize it.

        Store and summarizer failures are logged and reported, never raised;
        the session stays completed either way.
        """
        state = session.state
        stats = compute_stats(state)
        report = HandOffReport(stats=stats)

        logger.info(
            f"Session {state.session_id} completed ({state.end_reason.value}): "
            f"{stats.correct_answers}/{stats.total_questions} correct, "
            f"final tier {stats.final_tier.value}"
        )

        if self.result_store is not None:
            try:
                report.result_id = await self.result_store.save(state, self._metadata(state))
                report.persisted = True
            except ResultStoreError as e:
                logger.warning(f"Failed to persist session {state.session_id}: {e}")
                report.error = str(e)
            except Exception as e:
                logger.exception(f"Result store crashed for session {state.session_id}")
                report.error = f"{type(e).__name__}: {e}"

        if self.summarizer is not None and (report.persisted or self.result_store is None):
            try:
                report.summary = await self.summarizer.summarize(state)
            except SummarizerError as e:
                logger.warning(f"Failed to summarize session {state.session_id}: {e}")
            except Exception:
                logger.exception(f"Summarizer crashed for session {state.session_id}")

        session._hand_off = report
        return report

    def _metadata(self, state: SessionState) -> dict[str, Any]:
        return {
            "session_id": str(state.session_id),
            "end_reason": state.end_reason.value if state.end_reason else None,
            "max_questions": self.max_questions,
            "streak_threshold": self.streak_threshold,
            "started_at": state.started_at.isoformat(),
            "completed_at": state.completed_at.isoformat() if state.completed_at else None,
            "stats": compute_stats(state).model_dump(mode="json"),
        }

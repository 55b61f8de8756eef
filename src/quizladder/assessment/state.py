"""
Session State Machine

Pure transition functions over ``SessionState`` snapshots.

Difficulty policy (window of two):
- Two correct answers in a row move one tier up
- Two wrong answers in a row move one tier down
- Every tier change resets both streak counters, even when clamped
- The session completes when the transcript reaches the question cap
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from .ladder import LOWEST_TIER, next_tier, previous_tier
from .models import AnswerEvent, EndReason, SessionState, SessionStatus

logger = logging.getLogger(__name__)

MAX_QUESTIONS = 30
STREAK_THRESHOLD = 2


def new_session_state() -> SessionState:
    """Fresh active session at the lowest tier."""
    return SessionState(current_tier=LOWEST_TIER)


def present(state: SessionState, question_id: str) -> SessionState:
    """Record the question currently shown to the learner."""
    return state.model_copy(update={"pending_question_id": question_id})


def complete(state: SessionState, reason: EndReason) -> SessionState:
    """Mark a session completed. Completing twice keeps the first reason."""
    if state.status is SessionStatus.COMPLETED:
        return state

    return state.model_copy(
        update={
            "status": SessionStatus.COMPLETED,
            "pending_question_id": None,
            "completed_at": datetime.now(UTC),
            "end_reason": reason,
        }
    )


def apply_answer(
    state: SessionState,
    event: AnswerEvent,
    *,
    max_questions: int = MAX_QUESTIONS,
    streak_threshold: int = STREAK_THRESHOLD,
) -> SessionState:
    """Apply one answer to a session snapshot.

    Appends the event, records the question as asked, updates streak
    counters, moves along the ladder when a streak reaches the threshold,
    and completes the session at the question cap.

    Args:
        state: Active session snapshot
        event: Answer to record
        max_questions: Transcript length that completes the session
        streak_threshold: Streak length that triggers a tier change

    Returns:
        New session snapshot
    """
    tier = state.current_tier
    correct = state.consecutive_correct
    wrong = state.consecutive_wrong

    if event.is_correct:
        wrong = 0
        correct += 1
        if correct == streak_threshold:
            tier = next_tier(tier)
            correct = 0
    else:
        correct = 0
        wrong += 1
        if wrong == streak_threshold:
            tier = previous_tier(tier)
            wrong = 0

    if tier is not state.current_tier:
        logger.debug(
            f"Session {state.session_id}: tier {state.current_tier.value} -> {tier.value}"
        )

    updated = state.model_copy(
        update={
            "current_tier": tier,
            "consecutive_correct": correct,
            "consecutive_wrong": wrong,
            "asked_ids": state.asked_ids | {event.question_id},
            "transcript": (*state.transcript, event),
            "pending_question_id": None,
        }
    )

    if len(updated.transcript) >= max_questions:
        return complete(updated, EndReason.MAX_QUESTIONS)

    return updated

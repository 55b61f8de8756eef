"""
Assessment Records

Pydantic models for questions, answer events, session snapshots and
hand-off results. Records are frozen; the engine replaces a session
snapshot instead of mutating it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .ladder import LOWEST_TIER, DifficultyTier


class SessionStatus(str, Enum):
    """Lifecycle status of an assessment session."""

    ACTIVE = "active"
    COMPLETED = "completed"


class EndReason(str, Enum):
    """Why a session reached ``completed``."""

    MAX_QUESTIONS = "max_questions"
    POOL_EXHAUSTED = "pool_exhausted"
    ENDED_EARLY = "ended_early"


class Question(BaseModel):
    """Multiple-choice question owned by the question repository."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    prompt: str = Field(min_length=1)
    options: tuple[str, ...] = Field(min_length=2)
    correct_option: str
    explanation: str = ""
    concepts: tuple[str, ...] = ()
    tier: DifficultyTier

    @model_validator(mode="after")
    def check_options(self) -> Question:
        """Options must be distinct and include the correct option."""
        if len(set(self.options)) != len(self.options):
            raise ValueError(f"Question '{self.id}' has duplicate options")
        if self.correct_option not in self.options:
            raise ValueError(
                f"Question '{self.id}' correct option '{self.correct_option}' "
                "is not one of its options"
            )
        return self

    def is_correct(self, selected_option: str) -> bool:
        """Check a selection against the correct option."""
        return selected_option == self.correct_option


class AnswerEvent(BaseModel):
    """One answered question within a session transcript."""

    model_config = ConfigDict(frozen=True)

    question_id: str
    tier: DifficultyTier
    selected_option: str
    is_correct: bool
    time_taken_seconds: float = Field(ge=0)
    position: int = Field(ge=1)
    concepts: tuple[str, ...] = ()
    answered_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class SessionState(BaseModel):
    """Immutable snapshot of one assessment run."""

    model_config = ConfigDict(frozen=True)

    session_id: UUID = Field(default_factory=uuid4)
    current_tier: DifficultyTier = LOWEST_TIER
    consecutive_correct: int = Field(default=0, ge=0)
    consecutive_wrong: int = Field(default=0, ge=0)
    asked_ids: frozenset[str] = frozenset()
    transcript: tuple[AnswerEvent, ...] = ()
    status: SessionStatus = SessionStatus.ACTIVE
    pending_question_id: str | None = None
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    end_reason: EndReason | None = None

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    @property
    def answered(self) -> int:
        """Number of answers recorded so far."""
        return len(self.transcript)

    @property
    def correct_answers(self) -> int:
        return sum(1 for event in self.transcript if event.is_correct)


class TierStats(BaseModel):
    """Questions asked and answered correctly at one tier."""

    asked: int = 0
    correct: int = 0


class TranscriptStats(BaseModel):
    """Aggregate scoring of a finished transcript."""

    total_questions: int
    correct_answers: int
    accuracy: float
    final_tier: DifficultyTier
    highest_tier_reached: DifficultyTier
    average_time_seconds: float
    per_tier: dict[DifficultyTier, TierStats]
    concepts_missed: list[str]
    concepts_mastered: list[str]


class HandOffReport(BaseModel):
    """Outcome of persisting (and optionally summarizing) a finished session."""

    persisted: bool = False
    result_id: str | None = None
    error: str | None = None
    summary: str | None = None
    stats: TranscriptStats


class SubmissionOutcome(BaseModel):
    """What the caller gets back after submitting an answer."""

    event: AnswerEvent
    next_question: Question | None = None
    completed: bool = False
    state: SessionState
    hand_off: HandOffReport | None = None

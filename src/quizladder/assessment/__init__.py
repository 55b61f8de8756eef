"""
Assessment Module

Adaptive assessment engine: difficulty ladder, question selection,
session state machine and session controller.
"""

from .analysis import compute_stats
from .controller import AssessmentController, AssessmentSession
from .errors import (
    AssessmentError,
    ExhaustedPool,
    InvalidAnswer,
    InvalidStateTransition,
    PoolExhaustedMidSession,
    QuestionBankError,
    ResultStoreError,
    StaleSubmission,
    SummarizerError,
)
from .ladder import LADDER, DifficultyTier, next_tier, previous_tier
from .models import (
    AnswerEvent,
    EndReason,
    HandOffReport,
    Question,
    SessionState,
    SessionStatus,
    SubmissionOutcome,
    TierStats,
    TranscriptStats,
)
from .selector import QuestionSelector, select_question
from .state import apply_answer, complete, new_session_state, present

__all__ = [
    # Ladder
    "LADDER",
    "DifficultyTier",
    "next_tier",
    "previous_tier",
    # Records
    "AnswerEvent",
    "EndReason",
    "HandOffReport",
    "Question",
    "SessionState",
    "SessionStatus",
    "SubmissionOutcome",
    "TierStats",
    "TranscriptStats",
    # Engine
    "AssessmentController",
    "AssessmentSession",
    "QuestionSelector",
    "apply_answer",
    "complete",
    "compute_stats",
    "new_session_state",
    "present",
    "select_question",
    # Errors
    "AssessmentError",
    "ExhaustedPool",
    "InvalidAnswer",
    "InvalidStateTransition",
    "PoolExhaustedMidSession",
    "QuestionBankError",
    "ResultStoreError",
    "StaleSubmission",
    "SummarizerError",
]

"""
Assessment Errors

All failures raised by the assessment engine and its collaborators.
None of them leave a session partially updated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from .ladder import DifficultyTier


class AssessmentError(Exception):
    """Base class for assessment engine errors."""

    pass


class ExhaustedPool(AssessmentError):
    """No question available at the tier a new session must start on."""

    def __init__(self, tier: DifficultyTier):
        self.tier = tier
        super().__init__(f"No questions available at tier '{tier.value}'")


class PoolExhaustedMidSession(AssessmentError):
    """Every question at the current tier has already been asked.

    Handled inside the controller by completing the session early.
    """

    def __init__(self, tier: DifficultyTier, answered: int):
        self.tier = tier
        self.answered = answered
        super().__init__(
            f"No unseen questions left at tier '{tier.value}' after {answered} answers"
        )


class StaleSubmission(AssessmentError):
    """Submission targets a question other than the one currently pending."""

    def __init__(self, expected_id: str | None, received_id: str):
        self.expected_id = expected_id
        self.received_id = received_id
        super().__init__(
            f"Submission for question '{received_id}' does not match "
            f"pending question '{expected_id}'"
        )


class InvalidStateTransition(AssessmentError):
    """Operation attempted on a session that no longer accepts it."""

    def __init__(self, session_id: UUID, status: str, operation: str):
        self.session_id = session_id
        self.status = status
        self.operation = operation
        super().__init__(f"Cannot {operation} session {session_id}: session is {status}")


class InvalidAnswer(AssessmentError):
    """Answer payload is malformed (unknown option, negative duration)."""

    pass


class ResultStoreError(AssessmentError):
    """Result store could not persist a finished session."""

    pass


class SummarizerError(AssessmentError):
    """Narrative summarizer could not produce a summary."""

    pass


class QuestionBankError(AssessmentError):
    """Question bank data is missing or malformed."""

    pass

"""
QuizLadder SQLAlchemy Models
"""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .questions import QuestionItem
from .results import AssessmentAnswer, AssessmentResult

__all__ = [
    # Base
    "Base",
    "UUIDPrimaryKeyMixin",
    "TimestampMixin",
    # Question bank
    "QuestionItem",
    # Results
    "AssessmentResult",
    "AssessmentAnswer",
]

"""
Storage Adapters

Question repositories and result stores used by the assessment controller.
"""

from .memory import InMemoryResultStore
from .question_bank import (
    InMemoryQuestionRepository,
    get_question_repository,
    load_question_bank,
    parse_questions,
)
from .sql import SqlQuestionRepository, SqlResultStore

__all__ = [
    "InMemoryQuestionRepository",
    "InMemoryResultStore",
    "SqlQuestionRepository",
    "SqlResultStore",
    "get_question_repository",
    "load_question_bank",
    "parse_questions",
]

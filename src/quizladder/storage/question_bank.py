"""
Question Bank Loader

Loads a JSON question bank into memory and serves it by tier.

Bank file format:
    {
        "version": "1.0",
        "questions": [
            {
                "id": "ve-001",
                "prompt": "...",
                "options": ["A", "B", "C", "D"],
                "correct_option": "B",
                "explanation": "...",
                "concepts": ["fractions"],
                "tier": "very_easy"
            }
        ]
    }
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from quizladder.assessment.errors import QuestionBankError
from quizladder.assessment.ladder import LADDER, DifficultyTier
from quizladder.assessment.models import Question

logger = logging.getLogger(__name__)


class InMemoryQuestionRepository:
    """Read-only question repository backed by an in-memory index.

    Pools are stored as tuples, so every ``get_by_tier`` call returns an
    immutable snapshot that is safe to share across sessions.
    """

    def __init__(self, questions: Iterable[Question], metadata: dict[str, Any] | None = None):
        """Index questions by tier.

        Args:
            questions: Questions to serve
            metadata: Bank metadata (version, source)

        Raises:
            QuestionBankError: If two questions share an ID
        """
        self.metadata = metadata or {}
        by_tier: dict[DifficultyTier, list[Question]] = {tier: [] for tier in LADDER}
        seen: set[str] = set()

        for question in questions:
            if question.id in seen:
                raise QuestionBankError(f"Duplicate question ID in bank: '{question.id}'")
            seen.add(question.id)
            by_tier[question.tier].append(question)

        self._pools = {tier: tuple(pool) for tier, pool in by_tier.items()}

    @classmethod
    def from_file(cls, path: Path) -> InMemoryQuestionRepository:
        """Load a repository from a JSON bank file."""
        return cls(*load_question_bank(path))

    def __len__(self) -> int:
        """Return number of questions in the bank."""
        return sum(len(pool) for pool in self._pools.values())

    def __contains__(self, question_id: str) -> bool:
        """Check if a question ID exists in the bank."""
        return any(
            question.id == question_id for pool in self._pools.values() for question in pool
        )

    def __repr__(self) -> str:
        """String representation."""
        version = self.metadata.get("version", "unknown")
        return f"InMemoryQuestionRepository(version={version}, questions={len(self)})"

    def counts(self) -> dict[DifficultyTier, int]:
        """Number of questions per tier."""
        return {tier: len(pool) for tier, pool in self._pools.items()}

    async def get_by_tier(self, tier: DifficultyTier) -> Sequence[Question]:
        return self._pools[tier]


def parse_questions(entries: Iterable[dict[str, Any]]) -> list[Question]:
    """Validate raw bank entries into questions.

    Raises:
        QuestionBankError: If any entry is malformed
    """
    questions = []
    for index, entry in enumerate(entries):
        try:
            questions.append(Question.model_validate(entry))
        except ValidationError as e:
            entry_id = entry.get("id", f"#{index}") if isinstance(entry, dict) else f"#{index}"
            raise QuestionBankError(f"Invalid question {entry_id}: {e}") from e
    return questions


def load_question_bank(path: Path) -> tuple[list[Question], dict[str, Any]]:
    """Read and validate a JSON question bank.

    Args:
        path: Bank file

    Returns:
        (questions, metadata)

    Raises:
        QuestionBankError: If the file is missing, unreadable or malformed
    """
    if not path.exists():
        raise QuestionBankError(
            f"Question bank not found: {path}\n"
            "Make sure QUESTION_BANK_PATH points to a JSON question bank."
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise QuestionBankError(f"Question bank is not valid JSON: {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise QuestionBankError(f"Question bank must contain a 'questions' list: {path}")

    questions = parse_questions(data["questions"])
    metadata = {
        "version": data.get("version", "unknown"),
        "source": str(path),
        "total_questions": len(questions),
    }

    logger.info(f"Loaded {len(questions)} questions from {path} (v{metadata['version']})")
    return questions, metadata


# Global singleton instance
_repository: InMemoryQuestionRepository | None = None


def get_question_repository(force_reload: bool = False) -> InMemoryQuestionRepository:
    """Get the shared repository loaded from settings.QUESTION_BANK_PATH.

    Args:
        force_reload: Reload the bank from disk (default: False)

    Returns:
        InMemoryQuestionRepository instance

    Raises:
        QuestionBankError: If QUESTION_BANK_PATH is not configured
    """
    global _repository

    if _repository is None or force_reload:
        from quizladder.config import settings

        if settings.QUESTION_BANK_PATH is None:
            raise QuestionBankError("QUESTION_BANK_PATH is not configured")
        _repository = InMemoryQuestionRepository.from_file(settings.QUESTION_BANK_PATH)

    return _repository

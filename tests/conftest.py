"""
Pytest Configuration and Fixtures

Shared test fixtures for unit and integration tests.
"""

import random
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from quizladder.assessment import LADDER, AssessmentController, DifficultyTier, Question
from quizladder.core.models import Base
from quizladder.storage import InMemoryQuestionRepository, InMemoryResultStore

SAMPLE_BANK_PATH = Path(__file__).parent.parent / "data" / "sample_question_bank.json"

CORRECT = "A"
WRONG = "B"


def make_question(
    question_id: str,
    tier: DifficultyTier,
    concepts: tuple[str, ...] = (),
) -> Question:
    """Build a four-option question whose correct answer is always 'A'."""
    return Question(
        id=question_id,
        prompt=f"Question {question_id}?",
        options=("A", "B", "C", "D"),
        correct_option=CORRECT,
        explanation=f"Explanation for {question_id}",
        concepts=concepts,
        tier=tier,
    )


def make_bank(per_tier: int) -> list[Question]:
    """``per_tier`` questions at every tier, IDs like 'moderate-07'."""
    return [
        make_question(f"{tier.value}-{n:02d}", tier, concepts=(f"{tier.value}_concept",))
        for tier in LADDER
        for n in range(per_tier)
    ]


@pytest.fixture
def question_bank() -> list[Question]:
    """Bank large enough that no tier runs dry within 30 questions."""
    return make_bank(per_tier=40)


@pytest.fixture
def repository(question_bank) -> InMemoryQuestionRepository:
    return InMemoryQuestionRepository(question_bank, metadata={"version": "test"})


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def result_store() -> InMemoryResultStore:
    return InMemoryResultStore()


@pytest.fixture
def controller(repository, result_store, rng) -> AssessmentController:
    return AssessmentController(
        repository,
        result_store=result_store,
        rng=rng,
        max_questions=30,
        streak_threshold=2,
    )


@pytest.fixture
def answer():
    """Submit a correct or wrong answer to the session's pending question."""

    async def _answer(controller, session, correct: bool, seconds: float = 5.0):
        return await controller.submit_answer(
            session,
            session.current_question.id,
            CORRECT if correct else WRONG,
            seconds,
        )

    return _answer


@pytest.fixture
async def session_factory(tmp_path):
    """File-backed SQLite database with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'quizladder.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def question_factory():
    """Factory for single questions (correct option 'A')."""
    return make_question


@pytest.fixture
def bank_factory():
    """Factory for banks with a fixed number of questions per tier."""
    return make_bank


@pytest.fixture
def sample_bank_path() -> Path:
    """Bundled sample bank: 5 questions per tier."""
    return SAMPLE_BANK_PATH

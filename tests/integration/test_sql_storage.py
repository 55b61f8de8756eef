"""
Integration Tests for SQL Storage

Runs the SQL question repository and result store against a real
SQLite database (aiosqlite driver).
"""

import pytest
from sqlalchemy import func, select, update

from quizladder.assessment import (
    AnswerEvent,
    DifficultyTier,
    EndReason,
    ResultStoreError,
    SessionState,
    complete,
)
from quizladder.core.models import AssessmentAnswer, QuestionItem
from quizladder.storage import InMemoryQuestionRepository, SqlQuestionRepository, SqlResultStore


@pytest.fixture
async def sql_repository(session_factory, sample_bank_path):
    repository = SqlQuestionRepository(session_factory)
    bank = InMemoryQuestionRepository.from_file(sample_bank_path)
    questions = [q for tier in DifficultyTier for q in await bank.get_by_tier(tier)]
    await repository.add_questions(questions)
    return repository


def completed_state(answers=3):
    transcript = tuple(
        AnswerEvent(
            question_id=f"ve-00{n}",
            tier=DifficultyTier.VERY_EASY,
            selected_option="12",
            is_correct=n % 2 == 1,
            time_taken_seconds=float(n),
            position=n,
            concepts=("addition",),
        )
        for n in range(1, answers + 1)
    )
    return complete(SessionState(transcript=transcript), EndReason.ENDED_EARLY)


class TestSqlQuestionRepository:
    @pytest.mark.asyncio
    async def test_questions_served_by_tier(self, sql_repository):
        pool = await sql_repository.get_by_tier(DifficultyTier.MODERATE)

        assert [q.id for q in pool] == ["m-001", "m-002", "m-003", "m-004", "m-005"]
        assert all(q.tier is DifficultyTier.MODERATE for q in pool)
        assert isinstance(pool[0].options, tuple)
        assert pool[0].correct_option in pool[0].options

    @pytest.mark.asyncio
    async def test_inactive_questions_hidden(self, sql_repository, session_factory):
        async with session_factory() as db:
            await db.execute(
                update(QuestionItem).where(QuestionItem.id == "e-001").values(is_active=False)
            )
            await db.commit()

        pool = await sql_repository.get_by_tier(DifficultyTier.EASY)

        assert "e-001" not in [q.id for q in pool]
        assert len(pool) == 4

    @pytest.mark.asyncio
    async def test_add_questions_replaces_existing(
        self, sql_repository, session_factory, question_factory
    ):
        updated = question_factory("ve-001", DifficultyTier.EASY, concepts=("retagged",))

        written = await sql_repository.add_questions([updated])

        assert written == 1
        async with session_factory() as db:
            total = await db.scalar(select(func.count()).select_from(QuestionItem))
        assert total == 20

        easy = {q.id: q for q in await sql_repository.get_by_tier(DifficultyTier.EASY)}
        assert easy["ve-001"].concepts == ("retagged",)


class TestSqlResultStore:
    @pytest.mark.asyncio
    async def test_save_and_load(self, session_factory):
        store = SqlResultStore(session_factory)
        state = completed_state(answers=3)

        result_id = await store.save(state, {"source": "test"})
        result = await store.get_result(result_id)

        assert result is not None
        assert result.session_id == state.session_id
        assert result.end_reason == "ended_early"
        assert result.total_questions == 3
        assert result.correct_answers == 2
        assert result.final_tier == "very_easy"
        assert result.details == {"source": "test"}
        assert [a.position for a in result.answers] == [1, 2, 3]
        assert [a.is_correct for a in result.answers] == [True, False, True]
        assert result.answers[1].concepts == ["addition"]

    @pytest.mark.asyncio
    async def test_empty_transcript_saved(self, session_factory):
        store = SqlResultStore(session_factory)

        result = await store.get_result(await store.save(completed_state(answers=0), {}))

        assert result.total_questions == 0
        assert result.answers == []

    @pytest.mark.asyncio
    async def test_active_session_rejected(self, session_factory):
        store = SqlResultStore(session_factory)

        with pytest.raises(ResultStoreError, match="not completed"):
            await store.save(SessionState(), {})

    @pytest.mark.asyncio
    async def test_duplicate_session_rejected(self, session_factory):
        store = SqlResultStore(session_factory)
        state = completed_state()
        await store.save(state, {})

        with pytest.raises(ResultStoreError, match="Failed to store"):
            await store.save(state, {})

        async with session_factory() as db:
            answers = await db.scalar(select(func.count()).select_from(AssessmentAnswer))
        assert answers == 3

    @pytest.mark.asyncio
    async def test_unknown_result(self, session_factory):
        store = SqlResultStore(session_factory)

        assert await store.get_result("00000000-0000-0000-0000-000000000000") is None

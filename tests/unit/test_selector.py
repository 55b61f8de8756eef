"""
Unit Tests for Question Selection
"""

import random

import pytest

from quizladder.assessment import DifficultyTier, QuestionSelector, select_question
from quizladder.storage import InMemoryQuestionRepository


class TestSelectQuestion:
    def test_excluded_questions_never_selected(self, question_factory):
        pool = [question_factory(f"q-{n}", DifficultyTier.EASY) for n in range(5)]
        rng = random.Random(7)

        for _ in range(50):
            question = select_question(pool, {"q-0", "q-1", "q-2", "q-3"}, rng)
            assert question.id == "q-4"

    def test_fully_excluded_pool_returns_none(self, question_factory):
        pool = [question_factory(f"q-{n}", DifficultyTier.EASY) for n in range(3)]

        assert select_question(pool, ["q-0", "q-1", "q-2"], random.Random(0)) is None

    def test_empty_pool_returns_none(self):
        assert select_question([], set(), random.Random(0)) is None

    def test_same_seed_same_choice(self, question_factory):
        pool = [question_factory(f"q-{n}", DifficultyTier.EASY) for n in range(20)]

        first = [select_question(pool, set(), random.Random(42)).id for _ in range(5)]
        second = [select_question(pool, set(), random.Random(42)).id for _ in range(5)]

        assert first == second

    def test_draws_cover_whole_pool(self, question_factory):
        """Selection is random over the unseen questions, not first-in-list."""
        pool = [question_factory(f"q-{n}", DifficultyTier.EASY) for n in range(4)]
        rng = random.Random(3)

        chosen = {select_question(pool, set(), rng).id for _ in range(200)}

        assert chosen == {"q-0", "q-1", "q-2", "q-3"}


class TestQuestionSelector:
    @pytest.mark.asyncio
    async def test_selects_from_requested_tier(self, bank_factory):
        repository = InMemoryQuestionRepository(bank_factory(per_tier=5))
        selector = QuestionSelector(repository, random.Random(1))

        for tier in DifficultyTier:
            question = await selector.select(tier, set())
            assert question.tier is tier

    @pytest.mark.asyncio
    async def test_returns_none_when_tier_exhausted(self, bank_factory):
        repository = InMemoryQuestionRepository(bank_factory(per_tier=2))
        selector = QuestionSelector(repository, random.Random(1))
        asked = {"moderate-00", "moderate-01"}

        assert await selector.select(DifficultyTier.MODERATE, asked) is None
        assert await selector.select(DifficultyTier.EASY, asked) is not None

    @pytest.mark.asyncio
    async def test_ignores_questions_filed_under_wrong_tier(self, question_factory):
        class MislabelledRepository:
            async def get_by_tier(self, tier):
                return [question_factory("hard-one", DifficultyTier.DIFFICULT)]

        selector = QuestionSelector(MislabelledRepository(), random.Random(1))

        assert await selector.select(DifficultyTier.VERY_EASY, set()) is None

    @pytest.mark.asyncio
    async def test_repository_is_not_modified(self, bank_factory):
        repository = InMemoryQuestionRepository(bank_factory(per_tier=3))
        selector = QuestionSelector(repository, random.Random(1))

        await selector.select(DifficultyTier.EASY, {"easy-00"})

        assert repository.counts()[DifficultyTier.EASY] == 3

    @pytest.mark.asyncio
    async def test_accepts_tier_string_value(self, bank_factory):
        repository = InMemoryQuestionRepository(bank_factory(per_tier=3))
        selector = QuestionSelector(repository, random.Random(1))

        question = await selector.select("easy", set())

        assert question is not None
        assert question.tier is DifficultyTier.EASY

"""
Question Selector

Draws one unseen question at a tier from the question repository.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from .ladder import DifficultyTier

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .interfaces import QuestionRepository
    from .models import Question

logger = logging.getLogger(__name__)


def select_question(
    pool: Sequence[Question], excluded_ids: Iterable[str], rng: random.Random
) -> Question | None:
    """Pick a question uniformly at random from the unseen part of a pool.

    Args:
        pool: Snapshot of the candidate questions
        excluded_ids: Question IDs already asked in this session
        rng: Random source (seed it for reproducible draws)

    Returns:
        Chosen question, or None if every candidate is excluded
    """
    excluded = set(excluded_ids)
    candidates = [question for question in pool if question.id not in excluded]

    if not candidates:
        return None

    return rng.choice(candidates)


class QuestionSelector:
    """Selects unseen questions from a repository.

    The repository is only read. Pools are copied into a tuple before
    filtering so later repository changes cannot affect a draw.
    """

    def __init__(self, repository: QuestionRepository, rng: random.Random | None = None):
        """Initialize selector.

        Args:
            repository: Question source, queried by tier
            rng: Random source; a fresh unseeded one if omitted
        """
        self.repository = repository
        self.rng = rng or random.Random()

    async def select(
        self, tier: DifficultyTier | str, excluded_ids: Iterable[str]
    ) -> Question | None:
        """Select one question at ``tier`` that is not in ``excluded_ids``.

        ``tier`` may be given as its string value ("easy").

        Returns:
            Question, or None when the tier has no unseen questions left
        """
        tier = DifficultyTier(tier)
        pool = tuple(
            question
            for question in await self.repository.get_by_tier(tier)
            if question.tier is tier
        )
        question = select_question(pool, excluded_ids, self.rng)

        if question is None:
            logger.debug(f"No unseen question at tier {tier.value} (pool size {len(pool)})")
        else:
            logger.debug(f"Selected question {question.id} at tier {tier.value}")

        return question

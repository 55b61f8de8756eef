"""
Difficulty Ladder

Fixed, ordered difficulty tiers used by the adaptive engine.
Moving up or down the ladder clamps at both ends.
"""

from __future__ import annotations

from enum import Enum


class DifficultyTier(str, Enum):
    """One rung of the difficulty ladder, ordered easiest to hardest."""

    VERY_EASY = "very_easy"
    EASY = "easy"
    MODERATE = "moderate"
    DIFFICULT = "difficult"

    @property
    def rank(self) -> int:
        """Zero-based position on the ladder (0 = easiest)."""
        return LADDER.index(self)

    def next(self) -> DifficultyTier:
        """Tier one step harder, or self at the top."""
        return next_tier(self)

    def previous(self) -> DifficultyTier:
        """Tier one step easier, or self at the bottom."""
        return previous_tier(self)


LADDER: tuple[DifficultyTier, ...] = (
    DifficultyTier.VERY_EASY,
    DifficultyTier.EASY,
    DifficultyTier.MODERATE,
    DifficultyTier.DIFFICULT,
)

LOWEST_TIER = LADDER[0]


def next_tier(tier: DifficultyTier) -> DifficultyTier:
    """Return the tier one step harder than ``tier``.

    Args:
        tier: Current tier

    Returns:
        Harder tier, or ``tier`` unchanged if already at the top
    """
    index = LADDER.index(tier)
    return LADDER[min(index + 1, len(LADDER) - 1)]


def previous_tier(tier: DifficultyTier) -> DifficultyTier:
    """Return the tier one step easier than ``tier``.

    Args:
        tier: Current tier

    Returns:
        Easier tier, or ``tier`` unchanged if already at the bottom
    """
    index = LADDER.index(tier)
    return LADDER[max(index - 1, 0)]

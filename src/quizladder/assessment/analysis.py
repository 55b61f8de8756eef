"""
Transcript Analysis

Scores a session transcript: accuracy, per-tier breakdown, highest tier
reached, and which concept tags were missed or consistently answered.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from .ladder import LADDER
from .models import TierStats, TranscriptStats

if TYPE_CHECKING:
    from .models import SessionState


def compute_stats(state: SessionState) -> TranscriptStats:
    """Build aggregate statistics for a session.

    Args:
        state: Session snapshot (usually completed)

    Returns:
        TranscriptStats for the session's transcript
    """
    transcript = state.transcript
    total = len(transcript)
    correct = sum(1 for event in transcript if event.is_correct)

    per_tier = {tier: TierStats() for tier in LADDER}
    for event in transcript:
        stats = per_tier[event.tier]
        stats.asked += 1
        if event.is_correct:
            stats.correct += 1

    # The tier after the last transition counts as reached too
    reached = [event.tier for event in transcript] + [state.current_tier]
    highest = max(reached, key=lambda tier: tier.rank)

    missed: Counter[str] = Counter()
    seen: list[str] = []
    for event in transcript:
        for concept in event.concepts:
            if concept not in seen:
                seen.append(concept)
            if not event.is_correct:
                missed[concept] += 1

    concepts_missed = sorted(missed, key=lambda concept: (-missed[concept], seen.index(concept)))
    concepts_mastered = [concept for concept in seen if concept not in missed]

    return TranscriptStats(
        total_questions=total,
        correct_answers=correct,
        accuracy=correct / total if total else 0.0,
        final_tier=state.current_tier,
        highest_tier_reached=highest,
        average_time_seconds=(
            sum(event.time_taken_seconds for event in transcript) / total if total else 0.0
        ),
        per_tier=per_tier,
        concepts_missed=concepts_missed,
        concepts_mastered=concepts_mastered,
    )

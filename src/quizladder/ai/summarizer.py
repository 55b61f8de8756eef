"""
Narrative Summaries

Turns a completed session into a short written analysis for the learner.
Runs after the result has been persisted and never changes the session.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

from quizladder.assessment.analysis import compute_stats
from quizladder.assessment.errors import SummarizerError

from .client import AIClient, get_ai_client

if TYPE_CHECKING:
    from quizladder.assessment.interfaces import NarrativeSummarizer
    from quizladder.assessment.models import SessionState, TranscriptStats

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a supportive tutor reviewing a learner's adaptive multiple-choice test. "
    "Difficulty tiers from easiest to hardest are very_easy, easy, moderate, difficult. "
    "Write 2-3 short paragraphs in plain English: overall performance, strengths, "
    "and the concepts to practise next. Do not invent questions or scores."
)

USER_TEMPLATE = """Test summary:
- Questions answered: {{total_questions}}
- Correct answers: {{correct_answers}} ({{accuracy}})
- Final tier: {{final_tier}} (highest reached: {{highest_tier}})
- Average time per question: {{average_time}}s
- How the test ended: {{end_reason}}

Per-tier results:
{{per_tier_json}}

Concepts missed (most often first): {{concepts_missed}}
Concepts answered correctly every time: {{concepts_mastered}}

Answer log (position, tier, correct, seconds):
{{answer_log}}"""


def build_prompt(state: SessionState, stats: TranscriptStats) -> str:
    """Fill the user template from a session and its stats."""
    per_tier = {
        tier.value: {"asked": tier_stats.asked, "correct": tier_stats.correct}
        for tier, tier_stats in stats.per_tier.items()
    }
    answer_log = "\n".join(
        f"{event.position}. {event.tier.value} "
        f"{'correct' if event.is_correct else 'wrong'} {event.time_taken_seconds:.0f}"
        for event in state.transcript
    )

    context = {
        "total_questions": stats.total_questions,
        "correct_answers": stats.correct_answers,
        "accuracy": f"{stats.accuracy:.0%}",
        "final_tier": stats.final_tier.value,
        "highest_tier": stats.highest_tier_reached.value,
        "average_time": f"{stats.average_time_seconds:.1f}",
        "end_reason": state.end_reason.value if state.end_reason else "in progress",
        "per_tier_json": json.dumps(per_tier, indent=2),
        "concepts_missed": ", ".join(stats.concepts_missed) or "none",
        "concepts_mastered": ", ".join(stats.concepts_mastered) or "none",
        "answer_log": answer_log or "(no answers)",
    }

    message = USER_TEMPLATE
    for key, value in context.items():
        message = message.replace(f"{{{{{key}}}}}", str(value))
    return message


class RuleBasedSummarizer:
    """Deterministic plain-text summary built from transcript stats."""

    async def summarize(self, state: SessionState) -> str:
        stats = compute_stats(state)

        if stats.total_questions == 0:
            return "The test ended before any questions were answered."

        lines = [
            f"You answered {stats.correct_answers} of {stats.total_questions} questions "
            f"correctly ({stats.accuracy:.0%}).",
            f"You finished at the {stats.final_tier.value.replace('_', ' ')} tier "
            f"and reached {stats.highest_tier_reached.value.replace('_', ' ')} at best.",
        ]
        if stats.concepts_mastered:
            lines.append(f"Strong areas: {', '.join(stats.concepts_mastered[:5])}.")
        if stats.concepts_missed:
            lines.append(f"Practise next: {', '.join(stats.concepts_missed[:5])}.")

        return " ".join(lines)


class AISummarizer:
    """Summarizer backed by an LLM, with an optional non-AI fallback."""

    def __init__(
        self,
        client: AIClient | None = None,
        *,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        fallback: NarrativeSummarizer | None = None,
    ):
        """Initialize summarizer.

        Args:
            client: Completion client; built from settings if omitted
            model: Model identifier (default: settings.SUMMARY_MODEL)
            max_tokens: Response limit (default: settings.SUMMARY_MAX_TOKENS)
            temperature: Sampling temperature (default: settings.SUMMARY_TEMPERATURE)
            fallback: Used when no AI provider answers
        """
        from quizladder.config import settings

        self.client = client or get_ai_client()
        self.model = model or settings.SUMMARY_MODEL
        self.max_tokens = max_tokens or settings.SUMMARY_MAX_TOKENS
        self.temperature = settings.SUMMARY_TEMPERATURE if temperature is None else temperature
        self.fallback = fallback

    async def summarize(self, state: SessionState) -> str:
        """Summarize a session.

        Raises:
            SummarizerError: No provider answered and no fallback is set
        """
        prompt = build_prompt(state, compute_stats(state))

        # Provider SDK calls are blocking
        text = await asyncio.to_thread(
            self.client.complete,
            model=self.model,
            system=SYSTEM_PROMPT,
            prompt=prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        if text:
            return text

        if self.fallback is not None:
            logger.info(f"Using fallback summary for session {state.session_id}")
            return await self.fallback.summarize(state)

        raise SummarizerError(f"No summary produced for session {state.session_id}")

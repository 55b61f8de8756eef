"""
Collaborator Interfaces

The engine depends on these protocols rather than concrete services,
so repositories and stores can be swapped or faked in tests.

- QuestionRepository.get_by_tier(tier) -> questions at that tier
- ResultStore.save(state, metadata) -> acknowledgement ID
- NarrativeSummarizer.summarize(state) -> free-text analysis
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ladder import DifficultyTier
    from .models import Question, SessionState


class QuestionRepository(Protocol):
    async def get_by_tier(self, tier: DifficultyTier) -> Sequence[Question]: ...


class ResultStore(Protocol):
    async def save(self, state: SessionState, metadata: dict[str, Any]) -> str:
        """Persist a completed session; raise ResultStoreError on failure."""
        ...


class NarrativeSummarizer(Protocol):
    async def summarize(self, state: SessionState) -> str:
        """Describe a completed session; raise SummarizerError on failure."""
        ...

"""
In-Memory Result Store

Keeps completed sessions in a dict. Used for local runs and tests.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from quizladder.assessment.errors import ResultStoreError

if TYPE_CHECKING:
    from quizladder.assessment.models import SessionState

logger = logging.getLogger(__name__)


class InMemoryResultStore:
    """Result store that keeps completed sessions keyed by session ID."""

    def __init__(self) -> None:
        self.results: dict[str, tuple[SessionState, dict[str, Any]]] = {}

    async def save(self, state: SessionState, metadata: dict[str, Any]) -> str:
        """Store a completed session.

        Raises:
            ResultStoreError: If the session is still active or already stored
        """
        result_id = str(state.session_id)

        if state.is_active:
            raise ResultStoreError(f"Session {result_id} is still active")
        if result_id in self.results:
            raise ResultStoreError(f"Session {result_id} has already been saved")

        self.results[result_id] = (state, dict(metadata))
        logger.debug(f"Stored session {result_id} ({state.answered} answers)")
        return result_id

    def get(self, result_id: str) -> SessionState | None:
        """Stored session snapshot, or None."""
        entry = self.results.get(result_id)
        return entry[0] if entry else None

    def __len__(self) -> int:
        return len(self.results)

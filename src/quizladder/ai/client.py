"""
Text Completion Client with Provider Fallback

Tries providers in order: Anthropic → Grok → None (caller falls back to rules)
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

GROK_BASE_URL = "https://api.x.ai/v1"
GROK_MODEL = "grok-3"


class AIClient:
    """Completion client that walks a list of providers until one answers."""

    def __init__(self, *, anthropic_api_key: str | None = None, grok_api_key: str | None = None):
        """Initialize client with whichever API keys are available.

        Args:
            anthropic_api_key: Anthropic Claude API key (tried first)
            grok_api_key: xAI Grok API key (tried second)
        """
        self.anthropic_api_key = anthropic_api_key
        self.grok_api_key = grok_api_key

    @property
    def available(self) -> bool:
        """True if at least one provider is configured."""
        return bool(self.anthropic_api_key or self.grok_api_key)

    def complete(
        self,
        *,
        model: str,
        system: str,
        prompt: str,
        max_tokens: int = 1024,
        temperature: float = 0.3,
    ) -> str | None:
        """Generate a completion for a single user prompt.

        Args:
            model: Anthropic model identifier (Grok always uses GROK_MODEL)
            system: System prompt
            prompt: User message
            max_tokens: Maximum response tokens
            temperature: Sampling temperature

        Returns:
            Response text, or None if no provider produced one
        """
        if self.anthropic_api_key:
            text = self._try_anthropic(
                model=model,
                system=system,
                prompt=prompt,
                max_tokens=max_tokens,
                temperature=temperature,
            )
            if text:
                logger.info("Completion generated via Anthropic")
                return text

        if self.grok_api_key:
            text = self._try_grok(
                system=system, prompt=prompt, max_tokens=max_tokens, temperature=temperature
            )
            if text:
                logger.info("Completion generated via Grok (fallback)")
                return text

        logger.warning("No AI provider produced a completion")
        return None

    def _try_anthropic(
        self, *, model: str, system: str, prompt: str, max_tokens: int, temperature: float
    ) -> str | None:
        try:
            from anthropic import Anthropic

            client = Anthropic(api_key=self.anthropic_api_key)
            response = client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )

            parts = [block.text for block in response.content if hasattr(block, "text")]
            if parts:
                return "".join(parts).strip()

            logger.warning("Anthropic response had no text content")
            return None

        except Exception as e:
            logger.warning(f"Anthropic API error: {e}")
            return None

    def _try_grok(
        self, *, system: str, prompt: str, max_tokens: int, temperature: float
    ) -> str | None:
        try:
            from openai import OpenAI

            # Grok exposes an OpenAI-compatible API
            client = OpenAI(api_key=self.grok_api_key, base_url=GROK_BASE_URL)

            messages: list[dict[str, Any]] = [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ]
            response = client.chat.completions.create(
                model=GROK_MODEL,
                messages=messages,  # type: ignore[arg-type]
                max_tokens=max_tokens,
                temperature=temperature,
            )

            if response.choices:
                content = response.choices[0].message.content
                return content.strip() if content else None

            logger.warning("Grok response had no choices")
            return None

        except Exception as e:
            logger.warning(f"Grok API error: {e}")
            return None


def get_ai_client() -> AIClient:
    """Get client configured from settings."""
    from quizladder.config import settings

    return AIClient(
        anthropic_api_key=settings.ANTHROPIC_API_KEY or None,
        grok_api_key=settings.GROK_API_KEY or None,
    )

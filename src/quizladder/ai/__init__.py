"""
AI Services

Narrative summaries of completed assessment sessions.
"""

from .client import AIClient, get_ai_client
from .summarizer import AISummarizer, RuleBasedSummarizer, build_prompt

__all__ = [
    "AIClient",
    "get_ai_client",
    "AISummarizer",
    "RuleBasedSummarizer",
    "build_prompt",
]

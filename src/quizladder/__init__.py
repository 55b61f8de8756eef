"""
QuizLadder

Adaptive multiple-choice assessment engine with a fixed difficulty ladder.
"""

__version__ = "0.1.0"

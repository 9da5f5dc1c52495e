"""
Store - Owns the collection for one editing session.

The store:
1. Holds the current collection and the slide/element cursor
2. Applies path-based mutations copy-on-write
3. Memoises score aggregates per collection value
4. Hands out field bindings for external input widgets
"""

from .store import TreeStore, MutationResult, FieldBinding
from .scoring import ScoreSummary, total_score, current_score, answers_match, summarize

__all__ = [
    "TreeStore",
    "MutationResult",
    "FieldBinding",
    "ScoreSummary",
    "total_score",
    "current_score",
    "answers_match",
    "summarize",
]

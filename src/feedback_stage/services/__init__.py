# src/feedback_stage/services/__init__.py
"""Business logic services for vote weighting, aggregation and merging."""

from .aggregator import VoteStats, calculate_current_weight, has_voted, vote_stats
from .decay import decayed_weight
from .duplicates import DuplicateMatch, find_duplicates, find_duplicates_for_feedback
from .merge import MergeResult, merge_feedback
from .voting import cast_vote, get_user_vote, remove_vote
from .weights import compute_base_weight

__all__ = [
    "DuplicateMatch",
    "MergeResult",
    "VoteStats",
    "calculate_current_weight",
    "cast_vote",
    "compute_base_weight",
    "decayed_weight",
    "find_duplicates",
    "find_duplicates_for_feedback",
    "get_user_vote",
    "has_voted",
    "merge_feedback",
    "remove_vote",
    "vote_stats",
]

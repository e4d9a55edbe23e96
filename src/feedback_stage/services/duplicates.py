"""Fuzzy duplicate detection over feedback titles.

Titles are compared with the Dice coefficient over character bigrams of the
normalized text. The search is a linear scan of active feedback and never
writes anything.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from feedback_stage.core.settings import settings
from feedback_stage.repositories import FeedbackRepository
from feedback_stage.services.errors import FeedbackNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.86

_WHITESPACE = re.compile(r"\s+")

# Lower bound of each band, highest first.
_SIMILARITY_LEVELS = (
    (0.95, "Almost Identical"),
    (0.9, "Very Similar"),
    (0.85, "Similar"),
    (0.75, "Somewhat Similar"),
)


@dataclass(frozen=True)
class DuplicateMatch:
    """A feedback item whose title resembles the candidate title."""

    id: str
    title: str
    snippet: str
    state: str
    created_at: datetime
    similarity: float


def normalize_title(title: str) -> str:
    """Lowercase and collapse runs of whitespace to a single space."""
    return _WHITESPACE.sub(" ", title.lower()).strip()


def bigrams(text: str) -> Counter[str]:
    """Return the multiset of adjacent character pairs in ``text``."""
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def dice_coefficient(first: str, second: str) -> float:
    """Return the bigram Dice similarity of two titles in ``[0, 1]``.

    Titles with no bigrams (empty or a single character once normalized)
    score 0 against everything, including themselves.
    """
    first_pairs = bigrams(normalize_title(first))
    second_pairs = bigrams(normalize_title(second))
    total = sum(first_pairs.values()) + sum(second_pairs.values())
    if not first_pairs or not second_pairs:
        return 0.0
    shared = sum((first_pairs & second_pairs).values())
    return 2.0 * shared / total


def make_snippet(body: str, length: int | None = None) -> str:
    """Return the start of ``body`` cut to ``length`` characters."""
    limit = length if length is not None else settings.duplicate_snippet_length
    text = _WHITESPACE.sub(" ", body).strip()
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def similarity_level(similarity: float) -> str:
    """Describe a similarity score for display."""
    for lower_bound, label in _SIMILARITY_LEVELS:
        if similarity >= lower_bound:
            return label
    return "Different"


def find_duplicates(
    db: Session,
    candidate_title: str,
    exclude_feedback_id: str | None = None,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[DuplicateMatch]:
    """Return active feedback whose title scores at least ``threshold``.

    Results are ordered by similarity, highest first, then by id so equal
    scores come back in a stable order.

    Args:
        db: Database session.
        candidate_title: Title being checked, typically a new submission.
        exclude_feedback_id: Item never to report, usually the candidate itself.
        threshold: Minimum Dice coefficient to count as a duplicate.

    Returns:
        Matching items; an empty list when nothing is close enough.
    """
    if not bigrams(normalize_title(candidate_title)):
        return []

    corpus = FeedbackRepository(db).list_active()
    matches: list[DuplicateMatch] = []
    for feedback in corpus:
        if feedback.id == exclude_feedback_id:
            continue
        score = dice_coefficient(candidate_title, feedback.title)
        if score < threshold:
            continue
        matches.append(
            DuplicateMatch(
                id=feedback.id,
                title=feedback.title,
                snippet=make_snippet(feedback.body),
                state=feedback.state,
                created_at=feedback.created_at,
                similarity=score,
            )
        )

    matches.sort(key=lambda match: (-match.similarity, match.id))
    logger.debug(
        "duplicate scan of %d items found %d matches at threshold %.2f",
        len(corpus),
        len(matches),
        threshold,
    )
    return matches


def find_duplicates_for_feedback(
    db: Session,
    feedback_id: str,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[DuplicateMatch]:
    """Return likely duplicates of an existing feedback item.

    Raises:
        FeedbackNotFoundError: If ``feedback_id`` does not exist.
    """
    feedback = FeedbackRepository(db).get_by_id(feedback_id)
    if feedback is None:
        raise FeedbackNotFoundError(feedback_id)
    return find_duplicates(db, feedback.title, exclude_feedback_id=feedback_id, threshold=threshold)

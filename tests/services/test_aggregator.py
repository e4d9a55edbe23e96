"""Tests for vote statistics and current weights."""

import pytest

from feedback_stage.services.aggregator import (
    VoteStats,
    calculate_current_weight,
    has_voted,
    vote_stats,
)
from feedback_stage.services.errors import VoteNotFoundError


def test_vote_stats_sums_base_and_decayed_weights(
    db_session, make_user, make_feedback, make_vote, now
) -> None:
    feedback = make_feedback()
    make_vote(feedback, make_user(), weight=1.0)
    make_vote(feedback, make_user(), weight=2.0)
    make_vote(feedback, make_user(), weight=1.0, age_days=180)

    stats = vote_stats(db_session, feedback.id, now=now)

    assert stats.count == 3
    assert stats.total_weight == pytest.approx(4.0)
    assert stats.total_decayed_weight == pytest.approx(3.5)


def test_vote_stats_without_votes(db_session, make_feedback) -> None:
    feedback = make_feedback()

    assert vote_stats(db_session, feedback.id) == VoteStats(0, 0.0, 0.0)


def test_vote_stats_only_counts_that_feedback(
    db_session, make_user, make_feedback, make_vote, now
) -> None:
    first = make_feedback()
    second = make_feedback(title="Something else")
    voter = make_user()
    make_vote(first, voter, weight=2.0)
    make_vote(second, voter, weight=3.0)

    assert vote_stats(db_session, first.id, now=now).total_weight == pytest.approx(2.0)


def test_vote_stats_never_rewrites_stored_weight(
    db_session, make_user, make_feedback, make_vote, now
) -> None:
    feedback = make_feedback()
    vote = make_vote(feedback, make_user(), weight=2.0, age_days=360)

    vote_stats(db_session, feedback.id, now=now)
    db_session.expire_all()

    assert vote.weight == 2.0


def test_has_voted(db_session, make_user, make_feedback, make_vote) -> None:
    feedback = make_feedback()
    voter = make_user()
    bystander = make_user()
    make_vote(feedback, voter)

    assert has_voted(db_session, voter.id, feedback.id) is True
    assert has_voted(db_session, bystander.id, feedback.id) is False
    assert has_voted(db_session, voter.id, "fb_missing") is False


def test_calculate_current_weight(db_session, make_user, make_feedback, make_vote, now) -> None:
    vote = make_vote(make_feedback(), make_user(), weight=2.0, age_days=180)

    assert calculate_current_weight(db_session, vote.id, now=now) == pytest.approx(1.0)


def test_calculate_current_weight_for_missing_vote(db_session) -> None:
    with pytest.raises(VoteNotFoundError):
        calculate_current_weight(db_session, "vote_missing")

from datetime import date, datetime, timedelta

import pytest

from bracketeer.exceptions import InvalidConfigurationException, SelectionException
from bracketeer.models.registration import PlayerConstraints, RegistrationCandidate
from bracketeer.selection import SelectionAlgorithm, SelectionConfig, select

START = date(2025, 6, 1)
END = date(2025, 6, 10)


def _candidate(cid, blocked_days=0, daily_cap=None, minute=0, offset=0):
    """A candidate unavailable on ``blocked_days`` consecutive days from START + offset."""
    days = {START + timedelta(days=offset + i) for i in range(blocked_days)}
    return RegistrationCandidate(
        id=cid,
        name=f"Candidate {cid}",
        registration_timestamp=datetime(2025, 5, 1, 9, minute),
        constraints=PlayerConstraints(unavailable_dates=days, max_matches_per_day=daily_cap),
    )


def test_best_scores_fill_the_field():
    candidates = [_candidate("low", 6), _candidate("mid", 2), _candidate("top", 1)]
    result = select(candidates, 2, START, END)

    assert result.scores == {"top": 90.0, "mid": 80.0, "low": 40.0}
    assert result.selected_ids == ["top", "mid"]
    assert result.waitlist == []
    assert result.rejected_ids == ["low"]
    assert "below 50" in result.rejected[0].reason


def test_every_candidate_lands_in_exactly_one_list():
    candidates = [_candidate(f"c{i}", blocked_days=i % 7, minute=i) for i in range(12)]
    result = select(candidates, 4, START, END)

    ids = result.selected_ids + result.waitlist_ids + result.rejected_ids
    assert sorted(ids) == sorted(c.id for c in candidates)
    assert len(result.selected) == 4


def test_dates_outside_the_window_are_free():
    algorithm = SelectionAlgorithm()
    before = _candidate("early", 3, offset=-5)
    after = _candidate("late", 2, offset=20)

    assert algorithm.calculate_score(before, START, END) == 100.0
    assert algorithm.calculate_score(after, START, END) == 100.0
    # without an end date every later day counts
    assert algorithm.calculate_score(after, START) == 80.0
    assert algorithm.calculate_score(before, "2025-06-01") == 100.0


def test_low_daily_limit_penalty():
    algorithm = SelectionAlgorithm()
    assert algorithm.calculate_score(_candidate("a", daily_cap=1), START, END) == 85.0
    assert algorithm.calculate_score(_candidate("b", daily_cap=2), START, END) == 100.0
    assert algorithm.calculate_score(_candidate("c", daily_cap=0), START, END) == 85.0


def test_score_never_negative():
    candidate = _candidate("busy", blocked_days=10, daily_cap=1)
    assert SelectionAlgorithm().calculate_score(candidate, START, END) == 0.0


def test_earlier_registration_wins_ties():
    late = _candidate("late", minute=30)
    early = _candidate("early", minute=5)
    result = select([late, early], 1, START, END)

    assert result.selected_ids == ["early"]
    assert result.waitlist_ids == ["late"]


@pytest.mark.parametrize("capacity", range(0, 7))
def test_larger_capacity_never_drops_anyone(capacity):
    candidates = [_candidate(f"c{i}", blocked_days=i, minute=i) for i in range(8)]
    smaller = select(candidates, capacity, START, END)
    larger = select(candidates, capacity + 1, START, END)

    assert set(smaller.selected_ids) <= set(larger.selected_ids)
    assert smaller.rejected_ids == larger.rejected_ids


def test_negative_capacity():
    with pytest.raises(InvalidConfigurationException):
        select([_candidate("a")], -1, START)
    with pytest.raises(ValueError):
        select([], -3, START)


def test_custom_threshold():
    config = SelectionConfig(rejection_threshold=85)
    result = select([_candidate("a", 1), _candidate("b", 2)], 5, START, END, config)
    assert result.selected_ids == ["a"]
    assert result.rejected_ids == ["b"]


def test_promote_from_waitlist():
    candidates = [_candidate(f"c{i}", minute=i) for i in range(4)]
    algorithm = SelectionAlgorithm()
    result = algorithm.select(candidates, 2, START, END)
    assert result.waitlist_ids == ["c2", "c3"]

    promoted = algorithm.promote_from_waitlist(result, "c0")
    assert promoted.selected_ids == ["c1", "c2"]
    assert promoted.waitlist_ids == ["c3"]
    assert result.selected_ids == ["c0", "c1"]

    left = algorithm.promote_from_waitlist(promoted, "c3")
    assert left.selected_ids == ["c1", "c2"]
    assert left.waitlist == []

    with pytest.raises(SelectionException):
        algorithm.promote_from_waitlist(left, "c0")


def test_selected_candidates_become_seeded_players():
    result = select([_candidate("b", 1), _candidate("a")], 2, START, END)
    players = result.to_players()

    assert [(p.id, p.seed) for p in players] == [("a", 1), ("b", 2)]
    assert players[0].name == "Candidate a"

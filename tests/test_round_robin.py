from collections import Counter
from itertools import combinations

import pytest

from bracketeer.bracket import create_tournament, generate_bracket
from bracketeer.bracket.round_robin import resting_player, round_robin_schedule
from bracketeer.constants import FORMAT_ROUND_ROBIN, TOURNAMENT_COMPLETED
from bracketeer.models.player import PlayerFactory
from bracketeer.testing import SimulatorConfig, TournamentSimulator


def _roster(count):
    return PlayerFactory().create_roster([f"Player {i}" for i in range(1, count + 1)])


def test_five_player_schedule():
    rounds = generate_bracket(_roster(5), FORMAT_ROUND_ROBIN)
    matches = [m for r in rounds for m in r.matches]

    assert len(rounds) == 5
    assert len(matches) == 10

    games = Counter(pid for m in matches for pid in m.player_ids)
    assert set(games.values()) == {4}

    pairs = {frozenset(m.player_ids) for m in matches}
    assert pairs == {frozenset(p) for p in combinations([f"p{i}" for i in range(1, 6)], 2)}


@pytest.mark.parametrize("count", range(2, 12))
def test_each_player_at_most_once_per_round(count):
    ids = [f"p{i}" for i in range(1, count + 1)]
    schedule = round_robin_schedule(ids)

    assert sum(len(pairings) for pairings in schedule) == count * (count - 1) // 2
    for pairings in schedule:
        seated = [pid for pair in pairings for pid in pair]
        assert len(seated) == len(set(seated))


def test_odd_field_rests_each_player_once():
    ids = [f"p{i}" for i in range(1, 8)]
    resting = [resting_player(ids, pairings) for pairings in round_robin_schedule(ids)]
    assert sorted(resting) == sorted(ids)


def test_even_field_has_no_rest():
    ids = ["a", "b", "c", "d"]
    schedule = round_robin_schedule(ids)
    assert len(schedule) == 3
    assert all(resting_player(ids, pairings) is None for pairings in schedule)


def test_total_rounds_recorded_on_config():
    tournament = create_tournament(_roster(6), FORMAT_ROUND_ROBIN)
    assert tournament.config.total_rounds == 5


def test_completes_when_every_match_is_played():
    report = TournamentSimulator(
        SimulatorConfig(num_players=5, format=FORMAT_ROUND_ROBIN, seed=3, draw_rate=0.2)
    ).run()
    tournament = report.tournament

    assert tournament.status == TOURNAMENT_COMPLETED
    assert tournament.champion_id is None
    assert report.results_reported == 10

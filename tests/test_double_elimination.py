import pytest

from bracketeer.bracket import create_tournament, generate_bracket
from bracketeer.constants import (
    BRACKET_LOSER,
    BRACKET_WINNER,
    FORMAT_DOUBLE_ELIMINATION,
    STATUS_CONDITIONAL,
    STATUS_PENDING,
    TOURNAMENT_ACTIVE,
    TOURNAMENT_COMPLETED,
)
from bracketeer.events import BracketReset, EventRecorder
from bracketeer.exceptions import MatchNotReadyException
from bracketeer.models.player import PlayerFactory
from bracketeer.testing import SimulatorConfig, TournamentSimulator
from bracketeer.tournament import ProgressionEngine


def _roster(count):
    return PlayerFactory().create_roster([f"Player {i}" for i in range(1, count + 1)])


def _report(engine, tournament, *results):
    for match_id, winner in results:
        tournament = engine.apply_result(tournament, match_id, winner)
    return tournament


def test_eight_player_structure():
    rounds = generate_bracket(_roster(8), FORMAT_DOUBLE_ELIMINATION)
    winner_rounds = [r for r in rounds if r.bracket_type == BRACKET_WINNER]
    loser_rounds = [r for r in rounds if r.bracket_type == BRACKET_LOSER]

    assert [len(r.matches) for r in winner_rounds] == [4, 2, 1]
    assert [len(r.matches) for r in loser_rounds] == [2, 2, 1, 1]
    assert [r.id for r in rounds[-2:]] == ["gf1", "gf2"]
    assert rounds[-1].matches[0].status == STATUS_CONDITIONAL
    assert loser_rounds[-1].name == "Losers Final"


def test_loser_routing():
    matches = {m.id: m for r in generate_bracket(_roster(8), FORMAT_DOUBLE_ELIMINATION) for m in r.matches}

    assert matches["wb1_m1"].next_loser_match_id == "lb1_m1"
    assert matches["wb1_m2"].next_loser_match_id == "lb1_m1"
    assert matches["wb1_m3"].next_loser_match_id == "lb1_m2"
    assert matches["wb2_m1"].next_loser_match_id == "lb2_m2"
    assert matches["wb2_m2"].next_loser_match_id == "lb2_m1"
    assert matches["wb3_m1"].next_loser_match_id == "lb4_m1"
    assert matches["wb3_m1"].next_match_id == "gf1_m1"
    assert matches["lb1_m2"].next_match_id == "lb2_m2"
    assert matches["lb2_m2"].next_match_id == "lb3_m1"
    assert matches["lb4_m1"].next_match_id == "gf1_m1"


def test_four_player_bracket_reset():
    engine = ProgressionEngine(EventRecorder())
    tournament = create_tournament(_roster(4), FORMAT_DOUBLE_ELIMINATION)

    tournament = _report(
        engine,
        tournament,
        ("wb1_m1", "p1"),
        ("wb1_m2", "p2"),
        ("lb1_m1", "p3"),
        ("wb2_m1", "p1"),
        ("lb2_m1", "p2"),
    )
    grand_final = tournament.get_match("gf1_m1")
    assert set(grand_final.player_ids) == {"p1", "p2"}

    with pytest.raises(MatchNotReadyException):
        engine.apply_result(tournament, "gf2_m1", "p1")

    tournament = engine.apply_result(tournament, "gf1_m1", "p2")
    reset = tournament.get_match("gf2_m1")
    assert reset.status == STATUS_PENDING
    assert set(reset.player_ids) == {"p1", "p2"}
    assert tournament.status == TOURNAMENT_ACTIVE
    assert len(engine.dispatcher.of_type(BracketReset)) == 1

    tournament = engine.apply_result(tournament, "gf2_m1", "p2")
    assert tournament.status == TOURNAMENT_COMPLETED
    assert tournament.champion_id == "p2"


def test_fourth_seed_wins_out_the_loser_bracket():
    engine = ProgressionEngine()
    tournament = create_tournament(_roster(4), FORMAT_DOUBLE_ELIMINATION)
    tournament = _report(
        engine,
        tournament,
        ("wb1_m1", "p1"),
        ("wb1_m2", "p2"),
        ("lb1_m1", "p4"),
        ("wb2_m1", "p1"),
        ("lb2_m1", "p4"),
    )
    assert tournament.get_match("lb1_m1").player_ids == ["p4", "p3"]

    tournament = engine.apply_result(tournament, "gf1_m1", "p4")
    reset = tournament.get_match("gf2_m1")
    assert reset.status == STATUS_PENDING
    assert set(reset.player_ids) == {"p1", "p4"}
    assert tournament.champion_id is None


def test_winner_bracket_champion_wins_without_reset():
    engine = ProgressionEngine()
    tournament = create_tournament(_roster(4), FORMAT_DOUBLE_ELIMINATION)
    tournament = _report(
        engine,
        tournament,
        ("wb1_m1", "p1"),
        ("wb1_m2", "p2"),
        ("lb1_m1", "p3"),
        ("wb2_m1", "p1"),
        ("lb2_m1", "p2"),
        ("gf1_m1", "p1"),
    )
    assert tournament.status == TOURNAMENT_COMPLETED
    assert tournament.champion_id == "p1"
    assert tournament.get_match("gf2_m1").status == STATUS_CONDITIONAL


def test_two_players_go_straight_to_grand_final():
    engine = ProgressionEngine()
    tournament = create_tournament(_roster(2), FORMAT_DOUBLE_ELIMINATION)
    tournament = engine.apply_result(tournament, "wb1_m1", "p1")

    assert set(tournament.get_match("gf1_m1").player_ids) == {"p1", "p2"}

    tournament = engine.apply_result(tournament, "gf1_m1", "p2")
    tournament = engine.apply_result(tournament, "gf2_m1", "p1")
    assert tournament.champion_id == "p1"


@pytest.mark.parametrize("count", [3, 4, 5, 6, 7, 8, 11, 16])
@pytest.mark.parametrize("seed", [1, 7])
def test_players_are_eliminated_after_two_losses(count, seed):
    report = TournamentSimulator(
        SimulatorConfig(num_players=count, format=FORMAT_DOUBLE_ELIMINATION, seed=seed, upset_rate=0.4)
    ).run()
    tournament = report.tournament

    assert tournament.status == TOURNAMENT_COMPLETED
    champion = tournament.champion_id
    assert report.losses[champion] <= 1
    for player_id, losses in report.losses.items():
        if player_id != champion:
            assert losses == 2, player_id

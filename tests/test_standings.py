import pytest

from bracketeer.bracket import create_tournament
from bracketeer.constants import (
    FORMAT_ROUND_ROBIN,
    FORMAT_SWISS,
    STATUS_COMPLETED,
    TB_BUCHHOLZ,
    TB_BUCHHOLZ_CUT_1,
    TB_HEAD_TO_HEAD,
    TB_POINT_DIFF,
    TB_SONNEBORN_BERGER,
)
from bracketeer.exceptions import InvalidConfigurationException
from bracketeer.models.player import PlayerFactory
from bracketeer.models.tournament import Match, MatchResult, TournamentConfig
from bracketeer.tournament import ProgressionEngine, compute_standings


def _players(*names):
    return PlayerFactory().create_roster(names)


def _played(match_id, player1_id, player2_id, winner_id, score=(0.0, 0.0)):
    return Match(
        id=match_id,
        round_id=match_id.split("_")[0],
        round_number=1,
        match_number=1,
        player1_id=player1_id,
        player2_id=player2_id,
        status=STATUS_COMPLETED,
        result=MatchResult(
            winner_id=winner_id, player1_score=score[0], player2_score=score[1]
        ),
    )


def _bye(match_id, player_id):
    return Match(
        id=match_id,
        round_id=match_id.split("_")[0],
        round_number=1,
        match_number=1,
        player1_id=player_id,
        status=STATUS_COMPLETED,
        result=MatchResult(winner_id=player_id, is_bye=True),
    )


def _swiss_two_rounds():
    return [
        _played("sw1_m1", "p1", "p2", "p1"),
        _played("sw1_m2", "p3", "p4", "p3"),
        _played("sw2_m1", "p1", "p3", "p1"),
        _played("sw2_m2", "p4", "p2", "p4"),
    ]


def test_swiss_buchholz_breaks_ties():
    players = _players("Ana", "Ben", "Cleo", "Dev")
    standings = compute_standings(players, _swiss_two_rounds(), fmt=FORMAT_SWISS)

    assert [s.player_id for s in standings] == ["p1", "p3", "p4", "p2"]
    assert [s.rank for s in standings] == [1, 2, 3, 4]

    by_id = {s.player_id: s for s in standings}
    assert by_id["p1"].points == 2.0
    assert by_id["p3"].buchholz == 3.0
    assert by_id["p4"].buchholz == 1.0
    assert by_id["p3"].tiebreakers[TB_SONNEBORN_BERGER] == 1.0
    assert by_id["p3"].tiebreakers[TB_BUCHHOLZ_CUT_1] == 2.0


def test_buchholz_reported_only_for_swiss():
    players = _players("Ana", "Ben", "Cleo", "Dev")
    standings = compute_standings(players, _swiss_two_rounds(), fmt=FORMAT_ROUND_ROBIN)

    assert all(s.buchholz is None for s in standings)
    assert all(TB_BUCHHOLZ in s.tiebreakers for s in standings)


def test_seed_order_is_the_last_tiebreak():
    players = _players("Ana", "Ben", "Cleo")
    standings = compute_standings(players, [])
    assert [s.player_id for s in standings] == ["p1", "p2", "p3"]
    assert all(s.points == 0 and s.played == 0 for s in standings)


def test_bye_counts_as_played_and_won():
    players = _players("Ana", "Ben", "Cleo")
    matches = [_played("sw1_m1", "p1", "p2", "p1"), _bye("sw1_m2", "p3")]

    standings = compute_standings(players, matches, fmt=FORMAT_SWISS)
    by_id = {s.player_id: s for s in standings}

    assert (by_id["p3"].played, by_id["p3"].won, by_id["p3"].points) == (1, 1, 1.0)
    assert by_id["p3"].buchholz == 0.0
    assert [s.player_id for s in standings] == ["p1", "p3", "p2"]


def test_custom_bye_points():
    config = TournamentConfig(format=FORMAT_SWISS, points_for_bye=0.5)
    standings = compute_standings(_players("Ana", "Ben"), [_bye("sw1_m1", "p2")], config)
    assert {s.player_id: s.points for s in standings} == {"p1": 0.0, "p2": 0.5}


def test_draws_and_custom_points():
    config = TournamentConfig(
        format=FORMAT_ROUND_ROBIN,
        points_for_win=3,
        points_for_draw=1,
        allow_draws=True,
    )
    matches = [
        _played("rr1_m1", "p1", "p2", None, (1, 1)),
        _played("rr2_m1", "p1", "p3", "p3", (0, 2)),
        _played("rr3_m1", "p2", "p3", "p2", (3, 1)),
    ]
    standings = compute_standings(_players("Ana", "Ben", "Cleo"), matches, config)
    by_id = {s.player_id: s for s in standings}

    assert by_id["p1"].points == 1
    assert by_id["p2"].points == 4
    assert by_id["p3"].points == 3
    assert by_id["p1"].drawn == 1
    assert by_id["p2"].tiebreakers[TB_POINT_DIFF] == 2.0
    assert [s.player_id for s in standings] == ["p2", "p3", "p1"]


def test_head_to_head_cycle_falls_back_to_seeds():
    config = TournamentConfig(format=FORMAT_ROUND_ROBIN, tiebreak_order=[TB_HEAD_TO_HEAD])
    matches = [
        _played("rr1_m1", "p1", "p2", "p2"),
        _played("rr1_m2", "p3", "p4", "p3"),
        _played("rr2_m1", "p1", "p3", "p1"),
        _played("rr2_m2", "p2", "p4", "p4"),
    ]
    standings = compute_standings(_players("Ana", "Ben", "Cleo", "Dev"), matches, config)

    # a four-way cycle: everyone beat one player level with them
    assert [s.tiebreakers[TB_HEAD_TO_HEAD] for s in standings] == [1.0, 1.0, 1.0, 1.0]
    assert [s.player_id for s in standings] == ["p1", "p2", "p3", "p4"]


def test_unknown_tiebreak_rejected():
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(tiebreak_order=["coin_toss"])


def test_unplayed_matches_are_ignored():
    pending = Match(id="rr1_m1", round_id="rr1", round_number=1, match_number=1,
                    player1_id="p1", player2_id="p2")
    standings = compute_standings(_players("Ana", "Ben"), [pending])
    assert all(s.played == 0 for s in standings)


def _swiss_event(walkover):
    engine = ProgressionEngine()
    tournament = create_tournament(_players("Ana", "Ben", "Cleo", "Dev"), FORMAT_SWISS)
    tournament = engine.apply_result(tournament, "sw1_m1", "p1")
    tournament = engine.apply_result(tournament, "sw1_m2", "p3", walkover=walkover)
    tournament = engine.generate_next_round(tournament)
    for match in tournament.rounds[-1].matches:
        tournament = engine.apply_result(tournament, match.id, match.player1_id)
    return tournament, engine.standings(tournament)


def test_walkover_counts_like_a_played_win():
    walked, with_walkover = _swiss_event(walkover=True)
    _, played = _swiss_event(walkover=False)

    assert walked.get_match("sw1_m2").result.is_walkover
    by_id = {s.player_id: s for s in with_walkover}
    assert by_id["p3"].won >= 1
    assert by_id["p4"].lost >= 1

    def summary(standings):
        return [(s.player_id, s.points, s.won, s.lost, s.buchholz) for s in standings]

    assert summary(with_walkover) == summary(played)
    assert all(s.buchholz is not None for s in with_walkover)

import pytest

from bracketeer.bracket import (
    apply_seeding,
    create_tournament,
    generate_bracket,
    next_power_of_two,
    seed_order,
)
from bracketeer.constants import (
    FORMAT_SINGLE_ELIMINATION,
    STATUS_COMPLETED,
    STATUS_PENDING,
    TOURNAMENT_COMPLETED,
)
from bracketeer.exceptions import (
    DuplicatePlayerException,
    InsufficientParticipantsException,
    UnknownFormatException,
)
from bracketeer.models.player import Player, PlayerFactory
from bracketeer.tournament import ProgressionEngine


def _roster(count):
    return PlayerFactory().create_roster([f"Player {i}" for i in range(1, count + 1)])


def _play_round(engine, tournament, round_id):
    """Report every open match of a round, better seed winning."""
    seeds = {p.id: p.seed for p in tournament.players}
    for match in tournament.get_round(round_id).matches:
        if match.is_completed:
            continue
        winner = min(match.player_ids, key=lambda pid: seeds[pid])
        tournament = engine.apply_result(tournament, match.id, winner)
    return tournament


def test_seed_order_for_eight():
    assert seed_order(8) == [1, 8, 4, 5, 2, 7, 3, 6]
    assert seed_order(2) == [1, 2]


@pytest.mark.parametrize("count", range(2, 34))
def test_bracket_size_and_match_count(count):
    rounds = generate_bracket(_roster(count), FORMAT_SINGLE_ELIMINATION)
    size = next_power_of_two(count)

    assert len(rounds[0].matches) == size // 2
    assert sum(len(r.matches) for r in rounds) == size - 1

    seated = [pid for m in rounds[0].matches for pid in (m.player1_id, m.player2_id) if pid]
    assert sorted(seated) == sorted(f"p{i}" for i in range(1, count + 1))


def test_byes_go_to_top_seeds_and_advance():
    rounds = generate_bracket(_roster(6), FORMAT_SINGLE_ELIMINATION)
    first = {m.id: m for m in rounds[0].matches}

    assert first["r1_m1"].player_ids == ["p1"]
    assert first["r1_m1"].status == STATUS_COMPLETED
    assert first["r1_m1"].result.is_bye
    assert first["r1_m3"].player_ids == ["p2"]
    assert first["r1_m2"].status == STATUS_PENDING

    second = {m.id: m for m in rounds[1].matches}
    assert second["r2_m1"].player1_id == "p1"
    assert second["r2_m2"].player1_id == "p2"


def test_eight_player_scenario():
    engine = ProgressionEngine()
    tournament = create_tournament(_roster(8), FORMAT_SINGLE_ELIMINATION)

    first_round = [(m.player1_id, m.player2_id) for m in tournament.rounds[0].matches]
    assert first_round == [("p1", "p8"), ("p4", "p5"), ("p2", "p7"), ("p3", "p6")]

    tournament = _play_round(engine, tournament, "r1")
    semis = [set(m.player_ids) for m in tournament.rounds[1].matches]
    assert semis == [{"p1", "p4"}, {"p2", "p3"}]

    tournament = _play_round(engine, tournament, "r2")
    tournament = _play_round(engine, tournament, "r3")

    assert tournament.status == TOURNAMENT_COMPLETED
    assert tournament.champion_id == "p1"


def test_round_names():
    names = [r.name for r in generate_bracket(_roster(8), FORMAT_SINGLE_ELIMINATION)]
    assert names == ["Quarter-Finals", "Semi-Finals", "Final"]

    names = [r.name for r in generate_bracket(_roster(16), FORMAT_SINGLE_ELIMINATION)]
    assert names[0] == "Round 1"


def test_two_players_single_match():
    tournament = create_tournament(_roster(2), FORMAT_SINGLE_ELIMINATION)
    assert [m.id for m in tournament.iter_matches()] == ["r1_m1"]

    tournament = ProgressionEngine().apply_result(tournament, "r1_m1", "p2")
    assert tournament.status == TOURNAMENT_COMPLETED
    assert tournament.champion_id == "p2"


def test_generation_errors():
    with pytest.raises(InsufficientParticipantsException):
        generate_bracket(_roster(1), FORMAT_SINGLE_ELIMINATION)
    with pytest.raises(UnknownFormatException):
        generate_bracket(_roster(4), "ladder")

    twins = [Player(id="x", name="Ana"), Player(id="x", name="Ben")]
    with pytest.raises(DuplicatePlayerException):
        generate_bracket(twins, FORMAT_SINGLE_ELIMINATION)


def test_apply_seeding_orders_by_seed_then_roster():
    players = [
        Player(id="a", name="Ana"),
        Player(id="b", name="Ben", seed=2),
        Player(id="c", name="Cy", seed=1),
        Player(id="d", name="Dee"),
    ]
    assert [p.id for p in apply_seeding(players)] == ["c", "b", "a", "d"]

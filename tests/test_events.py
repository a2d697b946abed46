import pytest

from bracketeer.bracket import create_tournament
from bracketeer.constants import FORMAT_SINGLE_ELIMINATION, FORMAT_SWISS
from bracketeer.events import (
    EventRecorder,
    MatchCompleted,
    MatchReopened,
    RoundCompleted,
    RoundStarted,
    TournamentCancelled,
    TournamentCompleted,
)
from bracketeer.models.player import PlayerFactory
from bracketeer.tournament import ProgressionEngine


def _roster(count):
    return PlayerFactory().create_roster([f"Player {i}" for i in range(1, count + 1)])


class _FailingDispatcher:
    def dispatch(self, event):
        raise RuntimeError("listener is down")


def test_final_emits_completion_events_in_order():
    recorder = EventRecorder()
    engine = ProgressionEngine(recorder)
    tournament = create_tournament(_roster(2), FORMAT_SINGLE_ELIMINATION)

    engine.apply_result(tournament, "r1_m1", "p2")

    assert recorder.events == [
        MatchCompleted(tournament.id, "r1_m1", "p2", "p1"),
        RoundCompleted(tournament.id, "r1"),
        TournamentCompleted(tournament.id, "p2"),
    ]


def test_idempotent_report_emits_nothing():
    recorder = EventRecorder()
    engine = ProgressionEngine(recorder)
    tournament = engine.apply_result(
        create_tournament(_roster(4), FORMAT_SINGLE_ELIMINATION), "r1_m1", "p1"
    )
    recorder.clear()

    engine.apply_result(tournament, "r1_m1", "p1")
    assert recorder.events == []


def test_swiss_round_start_and_bye():
    recorder = EventRecorder()
    engine = ProgressionEngine(recorder)
    tournament = create_tournament(_roster(5), FORMAT_SWISS)
    for match in tournament.rounds[0].matches:
        if not match.is_completed:
            tournament = engine.apply_result(tournament, match.id, match.player1_id)
    recorder.clear()

    tournament = engine.generate_next_round(tournament)

    started = recorder.of_type(RoundStarted)
    assert len(started) == 1
    assert started[0].round_number == 2
    assert len(started[0].pairings) == 3
    byes = [e for e in recorder.of_type(MatchCompleted) if e.is_bye]
    assert [e.match_id for e in byes] == [started[0].pairings[-1][0]]
    assert started[0].pairings[-1][2] is None


def test_undo_and_cancel_events():
    recorder = EventRecorder()
    engine = ProgressionEngine(recorder)
    tournament = create_tournament(_roster(4), FORMAT_SINGLE_ELIMINATION)
    tournament = engine.apply_result(tournament, "r1_m1", "p1")
    recorder.clear()

    tournament = engine.undo_result(tournament, "r1_m1")
    engine.cancel_tournament(tournament, "venue closed")

    assert recorder.events == [
        MatchReopened(tournament.id, "r1_m1"),
        TournamentCancelled(tournament.id, "venue closed"),
    ]


def test_dispatcher_failure_propagates_and_input_is_untouched():
    engine = ProgressionEngine(_FailingDispatcher())
    tournament = create_tournament(_roster(4), FORMAT_SINGLE_ELIMINATION)
    before = tournament.to_dict()

    with pytest.raises(RuntimeError):
        engine.apply_result(tournament, "r1_m1", "p1")
    assert tournament.to_dict() == before


def test_recorder_filters_by_type():
    recorder = EventRecorder()
    recorder.dispatch(MatchReopened("t", "r1_m1"))
    recorder.dispatch(TournamentCancelled("t", None))

    assert recorder.of_type(MatchReopened) == [MatchReopened("t", "r1_m1")]
    recorder.clear()
    assert recorder.events == []

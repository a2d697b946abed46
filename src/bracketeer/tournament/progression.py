"""Progression engine: applies results and moves players through a bracket.

Every public operation takes a Tournament and returns a new one. The input
is deep-copied first, so a failed operation leaves nothing half applied.
"""

# Bracketeer
# Copyright (C) 2025  Bracketeer developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import copy
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from bracketeer.bracket.advancement import (
    advance_winner,
    complete,
    drop_loser,
    index_matches,
    relock_reset_match,
    reopen,
    resolve_byes,
    retract_player,
)
from bracketeer.bracket.double_elimination import BRACKET_RESET_ID, GRAND_FINAL_ID
from bracketeer.constants import (
    BRACKET_GRAND_FINAL,
    BRACKET_WINNER,
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    STATUS_PENDING,
    TOURNAMENT_ACTIVE,
    TOURNAMENT_CANCELLED,
    TOURNAMENT_COMPLETED,
)
from bracketeer.events import (
    BracketReset,
    MatchCompleted,
    MatchReopened,
    NotificationDispatcher,
    RoundCompleted,
    RoundStarted,
    TournamentCancelled,
    TournamentCompleted,
    TournamentEvent,
)
from bracketeer.exceptions import (
    CannotUndoException,
    MatchAlreadyCompletedException,
    MatchNotReadyException,
    TournamentStateException,
)
from bracketeer.models.tournament import Match, Tournament
from bracketeer.tournament.result_recorder import ResultRecorder, ScoreInput
from bracketeer.tournament.round_manager import RoundManager
from bracketeer.tournament.tiebreak_calculator import Standing, compute_standings
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


class ProgressionEngine:
    """Applies results, undoes them and generates Swiss rounds.

    The engine holds no tournament state. Callers serialize writes to a
    tournament (apply and undo on the same tournament must not overlap).

    Args:
        dispatcher: Optional receiver for the events each operation
            produces. Events are dispatched after the new state is built;
            an exception raised by the dispatcher propagates to the caller.
    """

    def __init__(self, dispatcher: Optional[NotificationDispatcher] = None):
        self.dispatcher = dispatcher

    # ========== Results ==========

    def apply_result(
        self,
        tournament: Tournament,
        match_id: str,
        winner_id: Optional[str],
        score: ScoreInput = None,
        walkover: bool = False,
    ) -> Tournament:
        """Record a result and propagate it.

        Reporting the same winner and score again returns an equal
        tournament; a different result for a completed match is refused.

        Args:
            tournament: Current state (not modified)
            match_id: Match being reported
            winner_id: Winner, or None for a draw where draws are allowed
            score: Score string, ScoreData, (player1, player2) pair, or None
            walkover: The loser did not play

        Returns:
            The updated tournament

        Raises:
            MatchNotFoundException: Unknown match id
            MatchAlreadyCompletedException: A different result exists
            MatchNotReadyException: Missing player, or locked bracket reset
            TournamentStateException: Tournament completed or cancelled
            InvalidResultException: Winner or score inconsistent
            BracketCorruptionException: Advancement hit an occupied slot
        """
        match = tournament.get_match(match_id)
        recorder = ResultRecorder(tournament.config)

        if match.is_completed:
            candidate = recorder.build_result(match, winner_id, score, walkover)
            if match.result is not None and match.result.same_outcome(candidate):
                logger.debug(f"Result for {match_id} already recorded; nothing to do")
                return copy.deepcopy(tournament)
            raise MatchAlreadyCompletedException(
                f"Match {match_id} already has a different result; undo it first"
            )

        self._ensure_accepting(tournament)
        if match.is_conditional:
            raise MatchNotReadyException(f"Match {match_id} has not been unlocked")
        if len(match.player_ids) < 2:
            raise MatchNotReadyException(f"Match {match_id} is still waiting for players")

        result = recorder.build_result(match, winner_id, score, walkover)

        new = copy.deepcopy(tournament)
        manager = RoundManager(new)
        completed_before = manager.completed_round_ids()
        matches = index_matches(new.rounds)
        target = matches[match_id]

        complete(target, result)
        events: List[TournamentEvent] = [self._completed_event(new, target)]
        logger.info(
            f"{match_id}: {target.player1_id} vs {target.player2_id}, "
            f"winner {winner_id or 'draw'}"
        )

        if target.bracket_type == BRACKET_GRAND_FINAL:
            self._settle_grand_final(new, matches, target, events)
        else:
            advance_winner(matches, target)
            drop_loser(matches, target)

        for bye in resolve_byes(new.rounds):
            events.append(self._completed_event(new, bye))

        events.extend(self._newly_completed_rounds(new, completed_before))
        self._check_completion(new, events)
        self._dispatch(events)
        return new

    def apply_results(
        self,
        tournament: Tournament,
        results: Iterable[Tuple[str, Optional[str], ScoreInput]],
    ) -> Tournament:
        """Apply several ``(match_id, winner_id, score)`` results in order.

        All or nothing: if one result fails, the exception propagates and
        none of the batch is kept.
        """
        current = tournament
        for match_id, winner_id, score in results:
            current = self.apply_result(current, match_id, winner_id, score)
        return current

    def _settle_grand_final(
        self,
        tournament: Tournament,
        matches: Dict[str, Match],
        match: Match,
        events: List[TournamentEvent],
    ) -> None:
        if match.id != GRAND_FINAL_ID:
            return

        if match.winner_id == self._winner_bracket_champion(tournament):
            logger.info("Winner-bracket champion took the grand final; no reset needed")
            return

        reset = matches[BRACKET_RESET_ID]
        reset.player1_id = match.player1_id
        reset.player2_id = match.player2_id
        reset.status = STATUS_PENDING
        logger.info(f"Bracket reset: {reset.player1_id} vs {reset.player2_id}")
        events.append(
            BracketReset(
                tournament_id=tournament.id,
                match_id=reset.id,
                player_ids=(reset.player1_id, reset.player2_id),
            )
        )

    # ========== Undo ==========

    def undo_result(self, tournament: Tournament, match_id: str) -> Tournament:
        """Retract a reported result and everything the engine derived from it.

        Players advanced by the result are removed from later matches, and
        byes those players received are undone too. A later match in which
        an advanced player already has a reported result blocks the undo.

        Raises:
            MatchNotFoundException: Unknown match id
            CannotUndoException: No result, engine bye, later result
                depends on it, or an earlier Swiss round
            TournamentStateException: Tournament cancelled
        """
        match = tournament.get_match(match_id)
        if tournament.status == TOURNAMENT_CANCELLED:
            raise TournamentStateException("Tournament is cancelled")
        if not match.is_completed or match.result is None:
            raise CannotUndoException(f"Match {match_id} has no result to undo")
        if match.result.is_bye:
            raise CannotUndoException(f"Match {match_id} is a bye and cannot be undone")
        if tournament.format == FORMAT_SWISS and match.round_number != tournament.current_round:
            raise CannotUndoException(
                f"Only results of the latest Swiss round ({tournament.current_round}) can be undone"
            )

        new = copy.deepcopy(tournament)
        matches = index_matches(new.rounds)
        target = matches[match_id]

        retracted: List[Match] = []
        if target.id == GRAND_FINAL_ID and target.bracket_type == BRACKET_GRAND_FINAL:
            relock_reset_match(matches[BRACKET_RESET_ID])
        else:
            retracted.extend(retract_player(matches, target.next_match_id, target.winner_id))
            retracted.extend(
                retract_player(matches, target.next_loser_match_id, target.loser_id)
            )
        reopen(target)

        if new.status == TOURNAMENT_COMPLETED:
            new.status = TOURNAMENT_ACTIVE
            new.champion_id = None
            logger.info(f"Tournament {new.id} reopened by undo of {match_id}")

        events: List[TournamentEvent] = [
            MatchReopened(tournament_id=new.id, match_id=m.id) for m in [target] + retracted
        ]
        logger.info(f"Undid {match_id} ({len(retracted)} dependent byes retracted)")
        self._dispatch(events)
        return new

    # ========== Swiss ==========

    def generate_next_round(self, tournament: Tournament) -> Tournament:
        """Pair the next Swiss round from the current standings.

        Raises:
            RoundIncompleteException: The current round is not finished
            TournamentStateException: Not Swiss, finished, or no rounds left
        """
        self._ensure_accepting(tournament)
        new = copy.deepcopy(tournament)
        manager = RoundManager(new)
        if new.config.total_rounds is None:
            new.config.total_rounds = manager.total_rounds
        new_round, _ = manager.create_next_swiss_round()

        events: List[TournamentEvent] = [
            RoundStarted(
                tournament_id=new.id,
                round_id=new_round.id,
                round_number=new_round.number,
                pairings=tuple((m.id, m.player1_id, m.player2_id) for m in new_round.matches),
            )
        ]
        for bye in resolve_byes(new.rounds):
            events.append(self._completed_event(new, bye))

        self._dispatch(events)
        return new

    # ========== Lifecycle ==========

    def cancel_tournament(self, tournament: Tournament, reason: Optional[str] = None) -> Tournament:
        """Mark the tournament cancelled; later mutations are refused."""
        self._ensure_accepting(tournament)
        new = copy.deepcopy(tournament)
        new.status = TOURNAMENT_CANCELLED
        new.cancel_reason = reason
        logger.info(f"Tournament {new.id} cancelled: {reason}")
        self._dispatch([TournamentCancelled(tournament_id=new.id, reason=reason)])
        return new

    def standings(self, tournament: Tournament) -> List[Standing]:
        return compute_standings(tournament.players, tournament.iter_matches(), tournament.config)

    # ========== Helpers ==========

    def _ensure_accepting(self, tournament: Tournament) -> None:
        if tournament.status == TOURNAMENT_CANCELLED:
            raise TournamentStateException(f"Tournament {tournament.id} is cancelled")
        if tournament.status == TOURNAMENT_COMPLETED:
            raise TournamentStateException(f"Tournament {tournament.id} is already completed")
        if tournament.status != TOURNAMENT_ACTIVE:
            raise TournamentStateException(
                f"Tournament {tournament.id} is not active (status: {tournament.status})"
            )

    def _winner_bracket_champion(self, tournament: Tournament) -> Optional[str]:
        winner_rounds = tournament.rounds_in(BRACKET_WINNER)
        if not winner_rounds:
            return None
        return winner_rounds[-1].matches[0].winner_id

    def _completed_event(self, tournament: Tournament, match: Match) -> MatchCompleted:
        return MatchCompleted(
            tournament_id=tournament.id,
            match_id=match.id,
            winner_id=match.winner_id,
            loser_id=match.loser_id,
            is_bye=bool(match.result and match.result.is_bye),
        )

    def _newly_completed_rounds(
        self, tournament: Tournament, completed_before: Set[str]
    ) -> List[RoundCompleted]:
        return [
            RoundCompleted(tournament_id=tournament.id, round_id=r.id)
            for r in tournament.rounds
            if r.is_completed and r.id not in completed_before
        ]

    def _check_completion(self, tournament: Tournament, events: List[TournamentEvent]) -> None:
        champion, finished = self._decide(tournament)
        if not finished or tournament.status == TOURNAMENT_COMPLETED:
            return
        tournament.status = TOURNAMENT_COMPLETED
        tournament.champion_id = champion
        logger.info(f"Tournament {tournament.id} completed; champion: {champion}")
        events.append(TournamentCompleted(tournament_id=tournament.id, champion_id=champion))

    def _decide(self, tournament: Tournament) -> Tuple[Optional[str], bool]:
        fmt = tournament.format
        if fmt == FORMAT_SINGLE_ELIMINATION:
            final = tournament.rounds[-1].matches[0]
            return final.winner_id, final.is_completed

        if fmt == FORMAT_DOUBLE_ELIMINATION:
            grand_final = tournament.find_match(GRAND_FINAL_ID)
            reset = tournament.find_match(BRACKET_RESET_ID)
            if reset is not None and reset.is_completed:
                return reset.winner_id, True
            if grand_final is not None and grand_final.is_completed:
                champion = self._winner_bracket_champion(tournament)
                if grand_final.winner_id == champion:
                    return champion, True
            return None, False

        all_done = all(m.is_completed for m in tournament.iter_matches())
        if fmt == FORMAT_ROUND_ROBIN:
            return None, all_done
        total = RoundManager(tournament).total_rounds
        return None, all_done and tournament.current_round >= total

    def _dispatch(self, events: Sequence[TournamentEvent]) -> None:
        if self.dispatcher is None:
            return
        for event in events:
            try:
                self.dispatcher.dispatch(event)
            except Exception:
                logger.exception(f"Dispatcher failed on {type(event).__name__}")
                raise


# ========== Functional API ==========


def apply_result(
    tournament: Tournament,
    match_id: str,
    winner_id: Optional[str],
    score: ScoreInput = None,
    walkover: bool = False,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> Tournament:
    return ProgressionEngine(dispatcher).apply_result(
        tournament, match_id, winner_id, score, walkover
    )


def undo_result(
    tournament: Tournament,
    match_id: str,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> Tournament:
    return ProgressionEngine(dispatcher).undo_result(tournament, match_id)


def generate_next_round(
    tournament: Tournament, dispatcher: Optional[NotificationDispatcher] = None
) -> Tournament:
    return ProgressionEngine(dispatcher).generate_next_round(tournament)


def cancel_tournament(
    tournament: Tournament,
    reason: Optional[str] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> Tournament:
    return ProgressionEngine(dispatcher).cancel_tournament(tournament, reason)

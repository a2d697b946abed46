"""Slot filling, bye resolution and retraction over a set of rounds.

These helpers mutate the matches they are given. Callers that need
atomicity (the progression engine) work on a deep copy.
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

from typing import Dict, List, Optional

from bracketeer.constants import (
    STATUS_COMPLETED,
    STATUS_CONDITIONAL,
    STATUS_PENDING,
    STATUS_SCHEDULED,
)
from bracketeer.exceptions import BracketCorruptionException, CannotUndoException
from bracketeer.models.tournament import Match, MatchResult, Round
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)


def index_matches(rounds: List[Round]) -> Dict[str, Match]:
    """Map match id to match, in round order."""
    return {m.id: m for r in rounds for m in r.matches}


def feeder_map(matches: Dict[str, Match]) -> Dict[str, List[Match]]:
    """Map match id to the matches routing a winner or loser into it."""
    feeders: Dict[str, List[Match]] = {match_id: [] for match_id in matches}
    for match in matches.values():
        for target in (match.next_match_id, match.next_loser_match_id):
            if target is not None and target in feeders:
                feeders[target].append(match)
    return feeders


# ========== Slot Filling ==========


def place_player(target: Match, player_id: str) -> bool:
    """Seat ``player_id`` in the first empty slot of ``target``.

    Returns:
        True if the player was placed, False if already seated there

    Raises:
        BracketCorruptionException: If both slots hold other players, or
            the player sits in the second slot while the first is empty
    """
    if target.player1_id is None and target.player2_id == player_id:
        logger.error(
            f"Cannot seat {player_id} in {target.id}: already in the second "
            f"slot with the first slot empty"
        )
        raise BracketCorruptionException(
            f"Match {target.id} already holds {player_id} in its other slot"
        )
    if target.has_player(player_id):
        logger.debug(f"{player_id} already seated in {target.id}")
        return False
    if target.player1_id is None:
        target.player1_id = player_id
    elif target.player2_id is None:
        target.player2_id = player_id
    else:
        logger.error(
            f"Cannot seat {player_id} in {target.id}: slots hold "
            f"{target.player1_id} and {target.player2_id}"
        )
        raise BracketCorruptionException(
            f"Match {target.id} already has two players; cannot seat {player_id}"
        )
    logger.debug(f"Seated {player_id} in {target.id}")
    return True


def unseat_player(target: Match, player_id: str) -> None:
    if target.player1_id == player_id:
        target.player1_id = None
    elif target.player2_id == player_id:
        target.player2_id = None


def advance_winner(matches: Dict[str, Match], match: Match) -> None:
    """Send the winner of ``match`` on to its next match, if any."""
    winner = match.winner_id
    if winner is None or match.next_match_id is None:
        return
    place_player(matches[match.next_match_id], winner)


def drop_loser(matches: Dict[str, Match], match: Match) -> None:
    """Send the loser of ``match`` into its loser-bracket destination."""
    loser = match.loser_id
    if loser is None or match.next_loser_match_id is None:
        return
    place_player(matches[match.next_loser_match_id], loser)


def complete(match: Match, result: MatchResult) -> None:
    match.result = result
    match.status = STATUS_COMPLETED


# ========== Bye Resolution ==========


def _needs_bye(match: Match, feeders: List[Match]) -> bool:
    if match.is_completed or match.is_conditional:
        return False
    if len(match.player_ids) == 2:
        return False
    return all(f.is_completed for f in feeders)


def resolve_byes(rounds: List[Round]) -> List[Match]:
    """Complete every match that can no longer receive an opponent.

    A match whose feeders are all decided but which holds a single player
    is awarded to that player as a bye; one holding nobody is closed as a
    void bye. Runs to a fixpoint, since each resolution can unlock the
    next match downstream.

    Returns:
        The matches completed, in resolution order
    """
    matches = index_matches(rounds)
    feeders = feeder_map(matches)
    resolved: List[Match] = []

    changed = True
    while changed:
        changed = False
        for match in matches.values():
            if not _needs_bye(match, feeders[match.id]):
                continue
            seated = match.player_ids
            if seated:
                complete(match, MatchResult(winner_id=seated[0], is_bye=True))
                advance_winner(matches, match)
                logger.debug(f"Bye: {seated[0]} advances from {match.id}")
            else:
                complete(match, MatchResult(winner_id=None, is_bye=True))
                logger.debug(f"Void bye: {match.id} closed with no players")
            resolved.append(match)
            changed = True

    return resolved


# ========== Retraction ==========


def reopen(match: Match) -> None:
    """Clear the result and return the match to an unplayed status."""
    match.result = None
    if getattr(match, "scheduled_at", None) is not None:
        match.status = STATUS_SCHEDULED
    else:
        match.status = STATUS_PENDING


def retract_player(
    matches: Dict[str, Match], target_id: Optional[str], player_id: Optional[str]
) -> List[Match]:
    """Remove ``player_id`` from ``target_id`` and undo what followed.

    An engine-generated bye the player received there is undone as well,
    recursively. A reported result involving the player is never touched.

    Returns:
        Byes that were retracted along the way

    Raises:
        CannotUndoException: If the player already played there
    """
    if target_id is None or player_id is None:
        return []
    target = matches[target_id]
    if not target.has_player(player_id):
        return []

    retracted: List[Match] = []
    if target.is_completed:
        if target.result is None or not target.result.is_bye:
            raise CannotUndoException(
                f"{player_id} already has a result in {target.id}; undo that first"
            )
        retracted.extend(retract_player(matches, target.next_match_id, player_id))
        reopen(target)
        retracted.append(target)
        logger.debug(f"Retracted bye in {target.id}")

    unseat_player(target, player_id)
    return retracted


def relock_reset_match(match: Match) -> None:
    """Return a bracket-reset match to its locked, empty state."""
    if match.is_completed:
        raise CannotUndoException(
            f"{match.id} has been played; undo it before the first grand final"
        )
    match.player1_id = None
    match.player2_id = None
    match.result = None
    match.status = STATUS_CONDITIONAL

"""Tournament events and the dispatcher protocol.

Events are immutable records of what a progression step changed. The
engine hands them to a caller-supplied dispatcher once the new state has
been built; delivery (push, e-mail, websockets) is the host's business.
``dataclasses.asdict()`` turns any event into a JSON-compatible dict.
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

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple, Union


@dataclass(frozen=True)
class MatchCompleted:
    """A match received a result (reported, walkover or engine bye)."""

    tournament_id: str
    match_id: str
    winner_id: Optional[str]
    loser_id: Optional[str]
    is_bye: bool = False


@dataclass(frozen=True)
class MatchReopened:
    """A result was undone."""

    tournament_id: str
    match_id: str


@dataclass(frozen=True)
class RoundStarted:
    """A Swiss round was generated."""

    tournament_id: str
    round_id: str
    round_number: int
    # (match id, player1 id, player2 id or None for a bye)
    pairings: Tuple[Tuple[str, str, Optional[str]], ...]


@dataclass(frozen=True)
class RoundCompleted:
    """Every match of a round is decided."""

    tournament_id: str
    round_id: str


@dataclass(frozen=True)
class BracketReset:
    """The loser-bracket champion won the first grand final."""

    tournament_id: str
    match_id: str
    player_ids: Tuple[str, str]


@dataclass(frozen=True)
class TournamentCompleted:
    """The tournament is over."""

    tournament_id: str
    champion_id: Optional[str]


@dataclass(frozen=True)
class TournamentCancelled:
    tournament_id: str
    reason: Optional[str]


TournamentEvent = Union[
    MatchCompleted,
    MatchReopened,
    RoundStarted,
    RoundCompleted,
    BracketReset,
    TournamentCompleted,
    TournamentCancelled,
]


class NotificationDispatcher(Protocol):
    """Anything that can receive engine events."""

    def dispatch(self, event: TournamentEvent) -> None: ...


class EventRecorder:
    """Dispatcher that keeps events in memory, in order.

    Handy for tests and for hosts that forward events in batches.
    """

    def __init__(self) -> None:
        self.events: List[TournamentEvent] = []

    def dispatch(self, event: TournamentEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> List[TournamentEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()

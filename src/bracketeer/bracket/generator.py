"""Bracket generation for every supported format.

This module turns a seeded roster into the initial round structure and
wraps it in an active Tournament.
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

import dataclasses
from typing import Callable, Dict, List, Optional

from bracketeer.bracket.advancement import resolve_byes
from bracketeer.bracket.double_elimination import generate_double_elimination
from bracketeer.bracket.round_robin import generate_round_robin
from bracketeer.bracket.single_elimination import generate_single_elimination
from bracketeer.bracket.swiss import default_swiss_rounds, generate_swiss_first_round
from bracketeer.constants import (
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    SUPPORTED_FORMATS,
    TOURNAMENT_ACTIVE,
)
from bracketeer.exceptions import (
    InsufficientParticipantsException,
    UnknownFormatException,
)
from bracketeer.models.player import Player, ensure_unique_ids
from bracketeer.models.tournament import Round, Tournament, TournamentConfig
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

_BUILDERS: Dict[str, Callable[[List[Player]], List[Round]]] = {
    FORMAT_SINGLE_ELIMINATION: generate_single_elimination,
    FORMAT_DOUBLE_ELIMINATION: generate_double_elimination,
    FORMAT_ROUND_ROBIN: generate_round_robin,
    FORMAT_SWISS: generate_swiss_first_round,
}


class BracketGenerator:
    """Builds the initial round/match skeleton for a tournament.

    Players are taken in the order given: ``players[0]`` is seed 1. Use
    :func:`bracketeer.bracket.seeding.apply_seeding` beforehand to order a
    roster by explicit seeds.

    Example:
        >>> generator = BracketGenerator()
        >>> rounds = generator.generate(players, "single_elimination")
        >>> tournament = generator.create_tournament(players, "swiss")
    """

    def generate(
        self,
        players: List[Player],
        fmt: str,
        config: Optional[TournamentConfig] = None,
    ) -> List[Round]:
        """Generate the initial rounds for ``fmt``.

        Byes are resolved before returning: a first-round match with a
        single player is already completed and its player advanced.

        Args:
            players: Participants in seed order
            fmt: single_elimination, double_elimination, round_robin or swiss
            config: Unused by the structure itself, accepted for symmetry
                with :meth:`create_tournament`

        Returns:
            Rounds in play order (double elimination: winner bracket,
            loser bracket, grand final)

        Raises:
            UnknownFormatException: If ``fmt`` is not supported
            InsufficientParticipantsException: If fewer than 2 players
            DuplicatePlayerException: If two players share an id
        """
        if fmt not in SUPPORTED_FORMATS:
            raise UnknownFormatException(
                f"Unknown format '{fmt}'. Supported: {', '.join(SUPPORTED_FORMATS)}"
            )
        if len(players) < 2:
            raise InsufficientParticipantsException(
                f"At least 2 players are required, got {len(players)}"
            )
        ensure_unique_ids(players)

        rounds = _BUILDERS[fmt](list(players))
        byes = resolve_byes(rounds)

        match_count = sum(len(r.matches) for r in rounds)
        logger.info(
            f"Generated {fmt} bracket for {len(players)} players: "
            f"{len(rounds)} rounds, {match_count} matches, {len(byes)} byes"
        )
        return rounds

    def create_tournament(
        self,
        players: List[Player],
        fmt: str,
        config: Optional[TournamentConfig] = None,
        name: Optional[str] = None,
    ) -> Tournament:
        """Generate the bracket and wrap it in an active Tournament.

        The returned config has ``format`` set to ``fmt`` and, for Swiss
        and round robin, ``total_rounds`` filled in.
        """
        rounds = self.generate(players, fmt, config)

        config = dataclasses.replace(config or TournamentConfig(), format=fmt)
        if name is not None:
            config.name = name
        if fmt == FORMAT_SWISS and config.total_rounds is None:
            config.total_rounds = default_swiss_rounds(len(players))
        elif fmt == FORMAT_ROUND_ROBIN:
            config.total_rounds = len(rounds)

        tournament = Tournament(
            config=config,
            players=list(players),
            rounds=rounds,
            status=TOURNAMENT_ACTIVE,
            current_round=1,
        )
        logger.info(f"Tournament '{config.name}' ({tournament.id}) is active")
        return tournament


def generate_bracket(
    players: List[Player], fmt: str, config: Optional[TournamentConfig] = None
) -> List[Round]:
    """Shortcut for ``BracketGenerator().generate``."""
    return BracketGenerator().generate(players, fmt, config)


def create_tournament(
    players: List[Player],
    fmt: str,
    config: Optional[TournamentConfig] = None,
    name: Optional[str] = None,
) -> Tournament:
    """Shortcut for ``BracketGenerator().create_tournament``."""
    return BracketGenerator().create_tournament(players, fmt, config, name)

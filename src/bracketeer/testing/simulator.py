"""Tournament simulator - plays generated tournaments to completion.

Used to exercise the progression engine end to end: a roster is created,
the bracket generated, and every playable match reported with a seeded
random outcome until the tournament completes. Swiss rounds are generated
as soon as the previous one is finished.
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

import argparse
import json
import random
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from bracketeer.bracket import create_tournament
from bracketeer.constants import (
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    SUPPORTED_FORMATS,
)
from bracketeer.events import NotificationDispatcher
from bracketeer.exceptions import (
    BracketCorruptionException,
    InvalidConfigurationException,
)
from bracketeer.models.player import Player, PlayerFactory
from bracketeer.models.tournament import Match, Tournament, TournamentConfig
from bracketeer.tournament import ProgressionEngine
from bracketeer.utils import configure_console_logging, setup_logger

logger = setup_logger(__name__)


class ResultPattern(Enum):
    """How match outcomes are drawn."""

    REALISTIC = "realistic"  # better seed usually wins
    PREDICTABLE = "predictable"  # better seed always wins
    RANDOM = "random"  # coin flip


@dataclass
class SimulatorConfig:
    """Configuration for a simulated tournament."""

    num_players: int
    format: str = FORMAT_SINGLE_ELIMINATION
    seed: Optional[int] = None
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    upset_rate: float = 0.25
    draw_rate: float = 0.0
    walkover_rate: float = 0.0
    total_rounds: Optional[int] = None

    def __post_init__(self) -> None:
        if self.format not in SUPPORTED_FORMATS:
            raise InvalidConfigurationException(f"Unsupported format: {self.format}")
        for name in ("upset_rate", "draw_rate", "walkover_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigurationException(f"{name} must be between 0 and 1: {value}")


@dataclass
class SimulationReport:
    tournament: Tournament
    results_reported: int = 0
    rounds_generated: int = 0
    losses: Dict[str, int] = field(default_factory=dict)


class TournamentSimulator:
    """Creates a roster and plays a tournament through the progression engine."""

    def __init__(
        self,
        config: SimulatorConfig,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )
        self.engine = ProgressionEngine(dispatcher)

    def create_players(self) -> List[Player]:
        names = [f"Player-{number:03d}" for number in range(1, self.config.num_players + 1)]
        return PlayerFactory().create_roster(names)

    def create_tournament(self, players: Optional[List[Player]] = None) -> Tournament:
        players = players or self.create_players()
        tournament_config = TournamentConfig(
            name=f"Simulated {self.config.format}",
            format=self.config.format,
            total_rounds=self.config.total_rounds,
            allow_draws=self.config.draw_rate > 0,
        )
        return create_tournament(players, self.config.format, tournament_config)

    def run(self, tournament: Optional[Tournament] = None) -> SimulationReport:
        """Play ``tournament`` (or a fresh one) until it is no longer active."""
        tournament = tournament or self.create_tournament()
        report = SimulationReport(tournament=tournament)
        seeds = {p.id: p.seed or index for index, p in enumerate(tournament.players, start=1)}

        # Every report either completes a match or a Swiss round is added,
        # so the loop is bounded by the number of matches plus rounds.
        while tournament.is_active:
            playable = self._playable(tournament)
            if playable:
                for match in playable:
                    winner_id, walkover = self._decide(tournament, match, seeds)
                    tournament = self.engine.apply_result(
                        tournament, match.id, winner_id, walkover=walkover
                    )
                    report.results_reported += 1
                continue

            if tournament.format == FORMAT_SWISS:
                tournament = self.engine.generate_next_round(tournament)
                report.rounds_generated += 1
                continue

            raise BracketCorruptionException(
                f"Tournament {tournament.id} is active but no match can be played"
            )

        report.tournament = tournament
        report.losses = dict(self._count_losses(tournament))
        logger.info(
            f"Simulation finished: {report.results_reported} results, "
            f"champion {tournament.champion_id}"
        )
        return report

    def _playable(self, tournament: Tournament) -> List[Match]:
        return [m for m in tournament.iter_matches() if m.is_ready]

    def _decide(
        self, tournament: Tournament, match: Match, seeds: Dict[str, int]
    ) -> Tuple[Optional[str], bool]:
        """Return (winner id or None for a draw, walkover flag)."""
        first, second = match.player1_id, match.player2_id
        if tournament.config.draws_permitted and self.random.random() < self.config.draw_rate:
            return None, False

        favourite, underdog = (first, second) if seeds[first] <= seeds[second] else (second, first)
        if self.config.result_pattern == ResultPattern.PREDICTABLE:
            winner = favourite
        elif self.config.result_pattern == ResultPattern.RANDOM:
            winner = self.random.choice([first, second])
        else:
            winner = underdog if self.random.random() < self.config.upset_rate else favourite

        walkover = self.random.random() < self.config.walkover_rate
        return winner, walkover

    @staticmethod
    def _count_losses(tournament: Tournament) -> Counter:
        losses: Counter = Counter({p.id: 0 for p in tournament.players})
        for match in tournament.iter_matches():
            if match.is_completed and match.loser_id is not None:
                losses[match.loser_id] += 1
        return losses


def simulate(
    num_players: int,
    fmt: str = FORMAT_SINGLE_ELIMINATION,
    seed: Optional[int] = None,
    **options,
) -> SimulationReport:
    """Shortcut: build a SimulatorConfig and run it."""
    config = SimulatorConfig(num_players=num_players, format=fmt, seed=seed, **options)
    return TournamentSimulator(config).run()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Tournament simulator")
    parser.add_argument("--players", type=int, default=8, help="Number of players")
    parser.add_argument(
        "--format", choices=SUPPORTED_FORMATS, default=FORMAT_SINGLE_ELIMINATION
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.REALISTIC.value,
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    configure_console_logging(args.verbose)
    result = TournamentSimulator(
        SimulatorConfig(
            num_players=args.players,
            format=args.format,
            seed=args.seed,
            result_pattern=ResultPattern(args.pattern),
        )
    ).run()
    print(json.dumps(result.tournament.to_dict(), indent=2))

"""Command-line interface for Bracketeer.

Every command reads and writes JSON, so a tournament can be driven from a
shell one result at a time::

    bracketeer generate players.json --format double_elimination -o t.json
    bracketeer report t.json wb1_m1 p1 --score "6-4 6-3" -o t.json
    bracketeer standings t.json
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
import sys
from pathlib import Path
from typing import Any, List, Optional

from bracketeer.bracket import create_tournament
from bracketeer.constants import (
    FORMAT_SINGLE_ELIMINATION,
    RESOURCE_COURT,
    RESOURCE_TYPES,
    SUPPORTED_FORMATS,
)
from bracketeer.exceptions import BracketeerException
from bracketeer.importing import parse_player_csv
from bracketeer.models.player import Player, PlayerFactory
from bracketeer.models.registration import RegistrationCandidate
from bracketeer.models.scheduling import Resource
from bracketeer.models.tournament import Tournament, TournamentConfig
from bracketeer.scheduling import SchedulingEngine, detect_conflicts
from bracketeer.selection import select
from bracketeer.testing.simulator import (
    ResultPattern,
    SimulatorConfig,
    TournamentSimulator,
)
from bracketeer.tournament import ProgressionEngine, compute_standings
from bracketeer.utils import configure_console_logging, setup_logger

logger = setup_logger(__name__)


# ========== I/O helpers ==========


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_json(data: Any, output: Optional[str]) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote {output}")
    else:
        print(text)


def _load_tournament(path: str) -> Tournament:
    return Tournament.from_dict(_read_json(path))


def _load_players(path: str) -> List[Player]:
    """Players from a JSON list (names or player objects) or a CSV roster."""
    if path.lower().endswith((".csv", ".txt")):
        result = parse_player_csv(Path(path).read_text(encoding="utf-8"))
        for issue in result.errors:
            logger.warning(str(issue))
        return result.to_players()

    rows = _read_json(path)
    factory = PlayerFactory()
    if all(isinstance(row, str) for row in rows):
        return factory.create_roster(rows)
    return [factory.create_from_dict(row) for row in rows]


def _load_resources(args: argparse.Namespace) -> List[Resource]:
    if args.resources:
        return [Resource.from_dict(r) for r in _read_json(args.resources)]
    kind = args.resource_type
    return [
        Resource(id=f"{kind}{n}", name=f"{kind.title()} {n}", type=kind)
        for n in range(1, args.courts + 1)
    ]


# ========== Commands ==========


def cmd_generate(args: argparse.Namespace) -> int:
    players = _load_players(args.players)
    config = TournamentConfig(
        name=args.name or "Untitled Tournament",
        format=args.format,
        total_rounds=args.rounds,
        allow_draws=args.allow_draws,
    )
    tournament = create_tournament(players, args.format, config)
    _write_json(tournament.to_dict(), args.output)
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    tournament = _load_tournament(args.tournament)
    winner = None if args.winner.lower() == "draw" else args.winner
    updated = ProgressionEngine().apply_result(
        tournament, args.match_id, winner, args.score, walkover=args.walkover
    )
    _write_json(updated.to_dict(), args.output)
    return 0


def cmd_undo(args: argparse.Namespace) -> int:
    tournament = _load_tournament(args.tournament)
    updated = ProgressionEngine().undo_result(tournament, args.match_id)
    _write_json(updated.to_dict(), args.output)
    return 0


def cmd_next_round(args: argparse.Namespace) -> int:
    tournament = _load_tournament(args.tournament)
    updated = ProgressionEngine().generate_next_round(tournament)
    _write_json(updated.to_dict(), args.output)
    return 0


def cmd_standings(args: argparse.Namespace) -> int:
    tournament = _load_tournament(args.tournament)
    standings = compute_standings(
        tournament.players, tournament.iter_matches(), tournament.config
    )
    if args.json:
        _write_json([s.to_dict() for s in standings], args.output)
        return 0

    players = tournament.player_map
    print(f"{'#':>3}  {'Player':<30} {'Pld':>4} {'W':>3} {'D':>3} {'L':>3} {'Pts':>6}")
    for s in standings:
        print(
            f"{s.rank:>3}  {players[s.player_id].name:<30} "
            f"{s.played:>4} {s.won:>3} {s.drawn:>3} {s.lost:>3} {s.points:>6g}"
        )
    return 0


def cmd_select(args: argparse.Namespace) -> int:
    candidates = [RegistrationCandidate.from_dict(c) for c in _read_json(args.candidates)]
    result = select(candidates, args.capacity, args.start, args.end)
    _write_json(result.to_dict(), args.output)
    return 0


def cmd_schedule(args: argparse.Namespace) -> int:
    tournament = _load_tournament(args.tournament)
    engine = SchedulingEngine(_load_resources(args), args.duration)
    matches = tournament.matches

    if args.candidates:
        candidates = {
            c.id: c
            for c in (RegistrationCandidate.from_dict(row) for row in _read_json(args.candidates))
        }
        scheduled, conflicts = engine.schedule_with_constraints(matches, candidates, args.start)
    else:
        candidates = {}
        scheduled = engine.schedule(matches, args.start)
        conflicts = detect_conflicts(scheduled, candidates, args.duration)

    _write_json(
        {
            "matches": [m.to_dict() for m in scheduled],
            "conflicts": [c.to_dict() for c in conflicts],
        },
        args.output,
    )
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    result = parse_player_csv(Path(args.csv).read_text(encoding="utf-8"))
    for issue in result.errors:
        print(str(issue), file=sys.stderr)
    _write_json([p.to_dict() for p in result.to_players()], args.output)
    return 0 if result.rows else 1


def cmd_simulate(args: argparse.Namespace) -> int:
    report = TournamentSimulator(
        SimulatorConfig(
            num_players=args.players,
            format=args.format,
            seed=args.seed,
            result_pattern=ResultPattern(args.pattern),
        )
    ).run()
    _write_json(report.tournament.to_dict(), args.output)
    return 0


# ========== Parser ==========


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="bracketeer",
        description="Generate and run tournament brackets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Eight-player knockout from a CSV roster
  bracketeer generate roster.csv --format single_elimination -o cup.json

  # Report a result and write the tournament back
  bracketeer report cup.json r1_m1 p1 --score "6-3 6-4" -o cup.json

  # Pair the next Swiss round
  bracketeer next-round open.json -o open.json
        """,
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def with_output(p: argparse.ArgumentParser) -> argparse.ArgumentParser:
        p.add_argument("-o", "--output", help="Write JSON here instead of stdout")
        return p

    p = with_output(sub.add_parser("generate", help="Create a tournament from a roster"))
    p.add_argument("players", help="JSON list of players or names, or a CSV roster")
    p.add_argument("--format", choices=SUPPORTED_FORMATS, default=FORMAT_SINGLE_ELIMINATION)
    p.add_argument("--name", help="Tournament name")
    p.add_argument("--rounds", type=int, help="Swiss round count")
    p.add_argument("--allow-draws", action="store_true", help="Round robin and Swiss only")
    p.set_defaults(func=cmd_generate)

    p = with_output(sub.add_parser("report", help="Report a match result"))
    p.add_argument("tournament")
    p.add_argument("match_id")
    p.add_argument("winner", help="Winner id, or 'draw'")
    p.add_argument("--score", help='Set score such as "6-4 3-6 [10-7]"')
    p.add_argument("--walkover", action="store_true")
    p.set_defaults(func=cmd_report)

    p = with_output(sub.add_parser("undo", help="Undo a reported result"))
    p.add_argument("tournament")
    p.add_argument("match_id")
    p.set_defaults(func=cmd_undo)

    p = with_output(sub.add_parser("next-round", help="Pair the next Swiss round"))
    p.add_argument("tournament")
    p.set_defaults(func=cmd_next_round)

    p = with_output(sub.add_parser("standings", help="Show current standings"))
    p.add_argument("tournament")
    p.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    p.set_defaults(func=cmd_standings)

    p = with_output(sub.add_parser("select", help="Select participants from registrations"))
    p.add_argument("candidates", help="JSON list of registration candidates")
    p.add_argument("--capacity", type=int, required=True)
    p.add_argument("--start", required=True, help="Tournament start date (ISO)")
    p.add_argument("--end", help="Tournament end date (ISO)")
    p.set_defaults(func=cmd_select)

    p = with_output(sub.add_parser("schedule", help="Assign times and courts"))
    p.add_argument("tournament")
    p.add_argument("--start", required=True, help="First slot (ISO datetime)")
    p.add_argument("--duration", type=int, default=60, help="Minutes per match")
    p.add_argument("--resources", help="JSON list of resources")
    p.add_argument("--courts", type=int, default=1, help="Number of generated resources")
    p.add_argument("--resource-type", choices=RESOURCE_TYPES, default=RESOURCE_COURT)
    p.add_argument("--candidates", help="Registration candidates with availability")
    p.set_defaults(func=cmd_schedule)

    p = with_output(sub.add_parser("import", help="Convert a CSV roster to JSON players"))
    p.add_argument("csv")
    p.set_defaults(func=cmd_import)

    p = with_output(sub.add_parser("simulate", help="Play a random tournament to the end"))
    p.add_argument("--players", type=int, default=8)
    p.add_argument("--format", choices=SUPPORTED_FORMATS, default=FORMAT_SINGLE_ELIMINATION)
    p.add_argument("--seed", type=int, help="Random seed for reproducibility")
    p.add_argument(
        "--pattern",
        choices=[pattern.value for pattern in ResultPattern],
        default=ResultPattern.REALISTIC.value,
    )
    p.set_defaults(func=cmd_simulate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_console_logging(args.verbose)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (BracketeerException, OSError, json.JSONDecodeError, KeyError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

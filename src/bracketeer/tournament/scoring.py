"""Set-score parsing and validation.

Scores are written the way organizers type them on a score sheet::

    "6-4 7-6(5)"          two sets, the second decided 7-5 in the tiebreak
    "6-4 3-6 [10-8]"      deciding match tiebreak
    "6-2 3-1 ret."        retirement
    "W.O."                walkover
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

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from bracketeer.constants import MATCH_TIEBREAK_TARGET, MAX_GAMES_PER_SET
from bracketeer.exceptions import InvalidResultException
from bracketeer.type_hints import SetScore
from bracketeer.utils.validation import ValidationResult

_MATCH_TIEBREAK = re.compile(r"^\[(\d+)-(\d+)\]$")
_TIEBREAK_SET = re.compile(r"^(\d+)-(\d+)\((\d+)\)$")
_SET = re.compile(r"^(\d+)-(\d+)$")


@dataclass
class ScoreData:
    """Structured form of a set score.

    Attributes
    ----------
    sets : list of tuple of int
        Games per set as (player1, player2).
    tiebreaks : list of int or None
        Loser's tiebreak points per set, None where no tiebreak was played.
    match_tiebreak : tuple of int or None
        Super tiebreak replacing a deciding set.
    retired : bool
        The match ended by retirement.
    walkover : bool
        The match was not played.
    """

    sets: List[SetScore] = field(default_factory=list)
    tiebreaks: List[Optional[int]] = field(default_factory=list)
    match_tiebreak: Optional[Tuple[int, int]] = None
    retired: bool = False
    walkover: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.sets and self.match_tiebreak is None and not self.walkover

    def sets_won(self) -> Tuple[int, int]:
        """Sets won by each side; a match tiebreak counts as a set."""
        player1 = sum(1 for a, b in self.sets if a > b)
        player2 = sum(1 for a, b in self.sets if b > a)
        if self.match_tiebreak is not None:
            a, b = self.match_tiebreak
            if a > b:
                player1 += 1
            elif b > a:
                player2 += 1
        return player1, player2

    def winning_slot(self) -> Optional[int]:
        """1 or 2 for the side ahead on sets, None when level or empty."""
        player1, player2 = self.sets_won()
        if player1 > player2:
            return 1
        if player2 > player1:
            return 2
        return None


def parse_score_string(score: Optional[str]) -> ScoreData:
    """Parse a typed score; unknown tokens raise.

    Raises:
        InvalidResultException: If a token is not a set, tiebreak or marker
    """
    data = ScoreData()
    if not score or not score.strip():
        return data

    for token in score.split():
        if token.lower() == "ret.":
            data.retired = True
            continue
        if token.upper() in ("W.O.", "WO"):
            data.walkover = True
            continue

        found = _MATCH_TIEBREAK.match(token)
        if found:
            data.match_tiebreak = (int(found.group(1)), int(found.group(2)))
            continue

        found = _TIEBREAK_SET.match(token)
        if found:
            data.sets.append((int(found.group(1)), int(found.group(2))))
            data.tiebreaks.append(int(found.group(3)))
            continue

        found = _SET.match(token)
        if found:
            data.sets.append((int(found.group(1)), int(found.group(2))))
            data.tiebreaks.append(None)
            continue

        raise InvalidResultException(f"Cannot parse score token '{token}' in '{score}'")

    return data


def format_score_string(data: ScoreData) -> str:
    """Inverse of :func:`parse_score_string`."""
    if data.walkover:
        return "W.O."

    parts = []
    for index, (player1, player2) in enumerate(data.sets):
        tiebreak = data.tiebreaks[index] if index < len(data.tiebreaks) else None
        if tiebreak is not None:
            parts.append(f"{player1}-{player2}({tiebreak})")
        else:
            parts.append(f"{player1}-{player2}")
    if data.match_tiebreak is not None:
        parts.append(f"[{data.match_tiebreak[0]}-{data.match_tiebreak[1]}]")
    if data.retired:
        parts.append("ret.")
    return " ".join(parts)


def validate_score(data: ScoreData) -> ValidationResult:
    """Check set scores against the usual tennis-style rules.

    A completed set is 6-x with a two game margin, 7-5, or 7-6. Incomplete
    sets are only accepted after a retirement. A match tiebreak must reach
    10 with a two point margin.

    Returns:
        ValidationResult carrying ``data`` when valid
    """
    if data.walkover:
        return ValidationResult(is_valid=True, sanitized_value=data)

    for player1, player2 in data.sets:
        if player1 < 0 or player2 < 0:
            return ValidationResult(False, f"Negative games in set {player1}-{player2}")
        if player1 > MAX_GAMES_PER_SET or player2 > MAX_GAMES_PER_SET:
            return ValidationResult(False, f"Too many games in set {player1}-{player2}")

        high = max(player1, player2)
        diff = abs(player1 - player2)
        if high == 7 and diff in (1, 2):
            continue
        if high == 6 and diff >= 2:
            continue
        if data.retired:
            continue
        return ValidationResult(False, f"Invalid set score {player1}-{player2}")

    if data.match_tiebreak is not None:
        player1, player2 = data.match_tiebreak
        if abs(player1 - player2) < 2 or max(player1, player2) < MATCH_TIEBREAK_TARGET:
            return ValidationResult(
                False, f"Invalid match tiebreak [{player1}-{player2}]"
            )

    return ValidationResult(is_valid=True, sanitized_value=data)

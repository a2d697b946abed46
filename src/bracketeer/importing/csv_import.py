"""Player roster import from CSV or plain text.

Accepted layouts, one player per line::

    Ana Duval
    Ana Duval,34,A2,ana@example.com
    name;age;ranking;email
    "Ana Duval";34;A2;ana@example.com

A header row is recognised by a name-like token, the delimiter is ``;`` when
the first line contains one and ``,`` otherwise. Rows that fail validation
are reported with their line number and skipped; the rest still import.
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

import csv
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from bracketeer.constants import CSV_HEADER_TOKENS
from bracketeer.models.player import Player, PlayerFactory
from bracketeer.utils import setup_logger
from bracketeer.utils.validation import validate_age, validate_email, validate_name

logger = setup_logger(__name__)


@dataclass
class ImportedRow:
    """A validated roster line."""

    line: int
    name: str
    age: Optional[int] = None
    ranking: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class ImportIssue:
    """A rejected line. Line 0 refers to the file as a whole."""

    line: int
    message: str

    def __str__(self) -> str:
        if self.line > 0:
            return f"Line {self.line}: {self.message}"
        return self.message


@dataclass
class ImportResult:
    rows: List[ImportedRow] = field(default_factory=list)
    errors: List[ImportIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_players(self, first_seed: int = 1) -> List[Player]:
        """Build players in file order, seeded from ``first_seed``."""
        factory = PlayerFactory(validate=False)
        return [
            factory.create_player(
                name=row.name,
                seed=first_seed + index,
                ranking=row.ranking,
                email=row.email,
                age=row.age,
            )
            for index, row in enumerate(self.rows)
        ]


def _looks_like_header(line: str) -> bool:
    lowered = line.lower()
    return any(token in lowered for token in CSV_HEADER_TOKENS)


def _cell(parts: List[str], index: int) -> str:
    return parts[index].strip() if index < len(parts) else ""


def parse_player_csv(
    content: str, existing_players: Iterable[Player] = ()
) -> ImportResult:
    """Parse roster text into validated rows.

    Args:
        content: File content
        existing_players: Players already registered; their names count as taken

    Returns:
        ImportResult with the accepted rows and per-line errors
    """
    result = ImportResult()
    numbered = [
        (number, line)
        for number, line in enumerate(content.splitlines(), start=1)
        if line.strip()
    ]
    if not numbered:
        result.errors.append(ImportIssue(line=0, message="Empty file"))
        return result

    first_line = numbered[0][1]
    delimiter = ";" if ";" in first_line else ","
    if _looks_like_header(first_line):
        numbered = numbered[1:]

    taken: Set[str] = {p.name.lower() for p in existing_players}

    for number, line in numbered:
        parts = next(csv.reader([line.strip()], delimiter=delimiter, skipinitialspace=True))

        name_check = validate_name(_cell(parts, 0))
        if not name_check:
            result.errors.append(ImportIssue(line=number, message=name_check.error_message))
            continue
        name = name_check.sanitized_value

        if name.lower() in taken:
            result.errors.append(ImportIssue(line=number, message=f'"{name}" already exists'))
            continue

        age_check = validate_age(_cell(parts, 1))
        email_check = validate_email(_cell(parts, 3))
        if not age_check:
            logger.debug(f"Line {number}: ignoring age ({age_check.error_message})")
        if not email_check:
            logger.debug(f"Line {number}: ignoring email ({email_check.error_message})")

        result.rows.append(
            ImportedRow(
                line=number,
                name=name,
                age=age_check.sanitized_value if age_check else None,
                ranking=_cell(parts, 2) or None,
                email=email_check.sanitized_value if email_check else None,
            )
        )
        taken.add(name.lower())

    logger.info(f"Imported {len(result.rows)} players, {len(result.errors)} lines rejected")
    return result

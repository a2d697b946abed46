"""Roster import."""

from bracketeer.importing.csv_import import (
    ImportedRow,
    ImportIssue,
    ImportResult,
    parse_player_csv,
)

__all__ = ["ImportIssue", "ImportResult", "ImportedRow", "parse_player_csv"]

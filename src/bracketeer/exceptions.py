"""Exceptions for use in Bracketeer"""

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


# ========== Base Application Exception ==========


class BracketeerException(Exception):
    """Base exception for all Bracketeer errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all engine errors with a single except clause.
    """

    pass


# ========== Format Exceptions ==========


class FormatException(BracketeerException):
    """Base exception for bracket generation errors."""

    pass


class InsufficientParticipantsException(FormatException):
    """Raised when fewer than two players are given to the generator."""

    pass


class UnknownFormatException(FormatException):
    """Raised when the requested tournament format is not supported."""

    pass


class DuplicatePlayerException(FormatException):
    """Raised when the same player id appears twice in a roster."""

    pass


# ========== Progression Exceptions ==========


class ProgressionException(BracketeerException):
    """Base exception for errors while advancing a tournament."""

    pass


class MatchNotFoundException(ProgressionException):
    """Raised when a match id does not exist in the tournament."""

    pass


class MatchAlreadyCompletedException(ProgressionException):
    """Raised when a different result is reported for a completed match."""

    pass


class MatchNotReadyException(ProgressionException):
    """Raised when a result is reported before both players are known."""

    pass


class BracketCorruptionException(ProgressionException):
    """Raised when advancement would overwrite an occupied bracket slot."""

    pass


class CannotUndoException(ProgressionException):
    """Raised when a result cannot be retracted without breaking later results."""

    pass


class RoundIncompleteException(ProgressionException):
    """Raised when the next Swiss round is requested too early."""

    pass


class TournamentStateException(ProgressionException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


# ========== Result Exceptions ==========


class ResultException(BracketeerException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., winner not in the match)."""

    pass


# ========== Selection & Scheduling Exceptions ==========


class SelectionException(BracketeerException):
    """Base exception for participant selection errors."""

    pass


class SchedulingException(BracketeerException):
    """Raised when matches cannot be placed on the calendar."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(BracketeerException):
    """Base exception for validation errors."""

    pass


class EmailValidationException(ValidationException):
    """Raised when an email address is invalid."""

    pass


class NameValidationException(ValidationException):
    """Raised when a player name is invalid."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(BracketeerException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException, ValueError):
    """Raised when configuration data is invalid."""

    pass

"""Shared helpers for Bracketeer: logging setup and id generation."""

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

import logging
import uuid
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """Return the module logger for ``name``.

    Handlers are not attached here; the package root carries a
    ``NullHandler`` and applications (or the CLI) decide where records go.
    """
    return logging.getLogger(name)


def configure_console_logging(verbose: bool = False) -> None:
    """Attach a console handler to the package logger.

    Args:
        verbose: Log at DEBUG level instead of INFO
    """
    root = logging.getLogger("bracketeer")
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def generate_id(prefix: Optional[str] = None) -> str:
    """Generate a unique identifier, optionally prefixed (``"player_3f2a..."``)."""
    ident = uuid.uuid4().hex
    if prefix:
        return f"{prefix}_{ident}"
    return ident

"""TournamentConfig data class."""

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
from typing import Any, Dict, List, Optional

from bracketeer.constants import (
    DEFAULT_SWISS_TIEBREAK_ORDER,
    DEFAULT_TIEBREAK_ORDER,
    DRAW_FORMATS,
    DRAW_SCORE,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    LOSS_SCORE,
    SUPPORTED_FORMATS,
    SWISS_MAX_BACKTRACKS,
    TIEBREAK_NAMES,
    WIN_SCORE,
)
from bracketeer.exceptions import InvalidConfigurationException


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    format : str
        One of single_elimination, double_elimination, round_robin, swiss.
    total_rounds : int or None
        Swiss round count. None means ``min(ceil(log2 N), 7)``; the
        generator fills in the value it used.
    points_for_win, points_for_draw, points_for_loss : float
        Standings points per outcome.
    points_for_bye : float or None
        Points for a bye or walkover win. None means ``points_for_win``.
    allow_draws : bool
        Whether a result may carry no winner (round robin and Swiss only).
    tiebreak_order : list of str or None
        Tiebreak keys in priority order after points. None selects the
        format default (Buchholz then wins for Swiss, wins otherwise).
    swiss_max_backtracks : int
        Step budget of the rematch-avoiding Swiss pairing search.
    """

    name: str = "Untitled Tournament"
    format: str = FORMAT_SINGLE_ELIMINATION
    total_rounds: Optional[int] = None
    points_for_win: float = WIN_SCORE
    points_for_draw: float = DRAW_SCORE
    points_for_loss: float = LOSS_SCORE
    points_for_bye: Optional[float] = None
    allow_draws: bool = False
    tiebreak_order: Optional[List[str]] = None
    swiss_max_backtracks: int = SWISS_MAX_BACKTRACKS

    def __post_init__(self) -> None:
        if self.format not in SUPPORTED_FORMATS:
            raise InvalidConfigurationException(f"Unsupported format: {self.format}")
        if self.total_rounds is not None and self.total_rounds < 1:
            raise InvalidConfigurationException("total_rounds must be at least 1")
        if self.swiss_max_backtracks < 0:
            raise InvalidConfigurationException("swiss_max_backtracks must be >= 0")
        for key in self.tiebreak_order or []:
            if key not in TIEBREAK_NAMES:
                raise InvalidConfigurationException(f"Unknown tiebreak: {key}")

    # ========== Derived settings ==========

    @property
    def bye_points(self) -> float:
        if self.points_for_bye is None:
            return self.points_for_win
        return self.points_for_bye

    @property
    def effective_tiebreak_order(self) -> List[str]:
        if self.tiebreak_order is not None:
            return list(self.tiebreak_order)
        if self.format == FORMAT_SWISS:
            return list(DEFAULT_SWISS_TIEBREAK_ORDER)
        return list(DEFAULT_TIEBREAK_ORDER)

    @property
    def draws_permitted(self) -> bool:
        return self.allow_draws and self.format in DRAW_FORMATS

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "format": self.format,
            "total_rounds": self.total_rounds,
            "points_for_win": self.points_for_win,
            "points_for_draw": self.points_for_draw,
            "points_for_loss": self.points_for_loss,
            "points_for_bye": self.points_for_bye,
            "allow_draws": self.allow_draws,
            "tiebreak_order": self.tiebreak_order,
            "swiss_max_backtracks": self.swiss_max_backtracks,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            format=data.get("format", FORMAT_SINGLE_ELIMINATION),
            total_rounds=data.get("total_rounds"),
            points_for_win=data.get("points_for_win", WIN_SCORE),
            points_for_draw=data.get("points_for_draw", DRAW_SCORE),
            points_for_loss=data.get("points_for_loss", LOSS_SCORE),
            points_for_bye=data.get("points_for_bye"),
            allow_draws=data.get("allow_draws", False),
            tiebreak_order=data.get("tiebreak_order"),
            swiss_max_backtracks=data.get("swiss_max_backtracks", SWISS_MAX_BACKTRACKS),
        )

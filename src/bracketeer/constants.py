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

# --- Constants ---

# Tournament formats
FORMAT_SINGLE_ELIMINATION = "single_elimination"
FORMAT_DOUBLE_ELIMINATION = "double_elimination"
FORMAT_ROUND_ROBIN = "round_robin"
FORMAT_SWISS = "swiss"
SUPPORTED_FORMATS = (
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_ROUND_ROBIN,
    FORMAT_SWISS,
)
# Formats in which a match may end without a winner
DRAW_FORMATS = (FORMAT_ROUND_ROBIN, FORMAT_SWISS)

# Match statuses
STATUS_PENDING = "pending"
STATUS_SCHEDULED = "scheduled"
STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"
STATUS_CONDITIONAL = "conditional"

# Tournament statuses
TOURNAMENT_SETUP = "setup"
TOURNAMENT_ACTIVE = "active"
TOURNAMENT_COMPLETED = "completed"
TOURNAMENT_CANCELLED = "cancelled"

# Bracket sections (double elimination)
BRACKET_WINNER = "winner"
BRACKET_LOSER = "loser"
BRACKET_GRAND_FINAL = "grand_final"

# Match id prefixes, one per bracket section or format
PREFIX_SINGLE = "r"
PREFIX_WINNER = "wb"
PREFIX_LOSER = "lb"
PREFIX_GRAND_FINAL = "gf"
PREFIX_ROUND_ROBIN = "rr"
PREFIX_SWISS = "sw"

# Round names counted back from the last elimination round
FINAL_ROUND_NAME = "Final"
SEMI_FINAL_ROUND_NAME = "Semi-Finals"
QUARTER_FINAL_ROUND_NAME = "Quarter-Finals"
GRAND_FINAL_ROUND_NAME = "Grand Final"
BRACKET_RESET_ROUND_NAME = "Grand Final (Reset)"

# Match outcome points
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# Swiss defaults
SWISS_MAX_ROUNDS = 7
SWISS_MAX_BACKTRACKS = 10_000

# Tiebreaker keys
TB_BUCHHOLZ = "buchholz"
TB_BUCHHOLZ_CUT_1 = "buchholz_cut1"
TB_SONNEBORN_BERGER = "sonneborn_berger"
TB_WINS = "wins"
TB_POINT_DIFF = "point_diff"
TB_HEAD_TO_HEAD = "head_to_head"

TIEBREAK_NAMES = {
    TB_BUCHHOLZ: "Buchholz",
    TB_BUCHHOLZ_CUT_1: "Buchholz Cut-1",
    TB_SONNEBORN_BERGER: "Sonneborn-Berger",
    TB_WINS: "Number of Wins",
    TB_POINT_DIFF: "Point Difference",
    TB_HEAD_TO_HEAD: "Head-to-Head",
}

DEFAULT_SWISS_TIEBREAK_ORDER = [TB_BUCHHOLZ, TB_WINS]
DEFAULT_TIEBREAK_ORDER = [TB_WINS]

# Selection defaults
SELECTION_BASELINE_SCORE = 100.0
SELECTION_UNAVAILABLE_DATE_PENALTY = 10.0
SELECTION_LOW_DAILY_LIMIT_PENALTY = 15.0
SELECTION_LOW_DAILY_LIMIT_THRESHOLD = 2
SELECTION_REJECTION_THRESHOLD = 50.0

# Scheduling defaults
DEFAULT_MATCH_DURATION_MINUTES = 60
SCHEDULE_STEP_MINUTES = 15
SCHEDULE_SEARCH_DAYS = 30

# Resource types
RESOURCE_COURT = "court"
RESOURCE_FIELD = "field"
RESOURCE_TABLE = "table"
RESOURCE_TYPES = (RESOURCE_COURT, RESOURCE_FIELD, RESOURCE_TABLE)

# Schedule conflict kinds
CONFLICT_RESOURCE = "resource_double_booked"
CONFLICT_PLAYER = "player_double_booked"
CONFLICT_UNAVAILABLE = "player_unavailable"
CONFLICT_DAILY_LIMIT = "max_matches_per_day"

# Player import
MIN_PLAYER_AGE = 1
MAX_PLAYER_AGE = 119
CSV_HEADER_TOKENS = ("name", "nom", "player", "joueur")

# Tennis-style set score sanity bound
MAX_GAMES_PER_SET = 20
MATCH_TIEBREAK_TARGET = 10

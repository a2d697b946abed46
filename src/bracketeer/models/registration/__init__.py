"""Registration and selection models."""

from bracketeer.models.registration.candidate import (
    PlayerConstraints,
    RegistrationCandidate,
    to_date,
    to_datetime,
)
from bracketeer.models.registration.selection_result import (
    RejectedCandidate,
    SelectionResult,
)

__all__ = [
    "PlayerConstraints",
    "RegistrationCandidate",
    "RejectedCandidate",
    "SelectionResult",
    "to_date",
    "to_datetime",
]

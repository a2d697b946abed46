"""Pairing algorithms."""

from bracketeer.pairing.swiss import (
    SwissPairingResult,
    create_swiss_pairings,
    pair_round_one,
)

__all__ = ["SwissPairingResult", "create_swiss_pairings", "pair_round_one"]

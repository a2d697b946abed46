"""Type hints used in Bracketeer."""

from typing import List, Optional, Tuple

# Player id or an empty slot
MaybePlayerId = Optional[str]
# Pair of player ids making one match
Pairing = Tuple[str, str]
# All pairings for one Swiss round and the bye, if any
RoundPairings = Tuple[List[Pairing], MaybePlayerId]
# One set as (player1 games, player2 games)
SetScore = Tuple[int, int]

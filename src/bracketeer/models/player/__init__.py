"""Player models for Bracketeer."""

from bracketeer.models.player.factory import PlayerFactory, ensure_unique_ids
from bracketeer.models.player.player import Player

__all__ = ["Player", "PlayerFactory", "ensure_unique_ids"]

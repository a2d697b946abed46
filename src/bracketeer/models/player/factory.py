"""Factory for creating Player objects with validation.

This module implements the Factory pattern for Player creation,
providing a single point of entry for creating players with
proper validation and error handling.
"""

from typing import Any, Dict, Iterable, List, Optional

from bracketeer.exceptions import DuplicatePlayerException, InvalidConfigurationException
from bracketeer.models.player.player import Player
from bracketeer.utils import generate_id, setup_logger
from bracketeer.utils.validation import (
    validate_age,
    validate_email,
    validate_email_strict,
    validate_name_strict,
)

logger = setup_logger(__name__)


class PlayerFactory:
    """Factory for creating Player instances.

    Example:
        >>> factory = PlayerFactory()
        >>> player = factory.create_player(name="Ana Duval", seed=1)
        >>> roster = factory.create_roster(["Ana", "Ben", "Chloe"])
    """

    def __init__(self, validate: bool = True, strict: bool = False):
        """Initialize the PlayerFactory.

        Args:
            validate: Whether to validate input data
            strict: Whether to raise exceptions on validation errors
        """
        self.validate = validate
        self.strict = strict

    def create_player(
        self,
        name: str,
        player_id: Optional[str] = None,
        seed: Optional[int] = None,
        ranking: Optional[str] = None,
        email: Optional[str] = None,
        age: Optional[int] = None,
    ) -> Player:
        """Create a Player, validating optional fields.

        An invalid name always raises. Invalid optional fields (email, age)
        are dropped with a warning unless the factory is strict, in which
        case they raise.

        Args:
            name: Player's name
            player_id: Explicit id, generated when omitted
            seed: Initial seed
            ranking: External ranking label
            email: Email address
            age: Age in years

        Returns:
            The new Player

        Raises:
            NameValidationException: If the name is invalid
            EmailValidationException: If strict and the email is invalid
            InvalidConfigurationException: If strict and the age is invalid
        """
        if self.validate:
            name = validate_name_strict(name)
            if self.strict and email and email.strip():
                email = validate_email_strict(email)
            else:
                email = self._checked("email", validate_email(email), email)
            age = self._checked("age", validate_age(age), age)

        return Player(
            id=player_id or generate_id("player"),
            name=name,
            seed=seed,
            ranking=ranking,
            email=email,
            age=age,
        )

    def create_roster(
        self, names: Iterable[str], seeded: bool = True
    ) -> List[Player]:
        """Create players from names, assigning seeds in the given order.

        Ids are ``p1``, ``p2``, ... matching the seed order.
        """
        players = []
        for index, name in enumerate(names, start=1):
            players.append(
                self.create_player(
                    name=name,
                    player_id=f"p{index}",
                    seed=index if seeded else None,
                )
            )
        ensure_unique_ids(players)
        return players

    def create_from_dict(self, data: Dict[str, Any]) -> Player:
        """Create a player from a plain mapping (e.g. a JSON roster row)."""
        return self.create_player(
            name=data["name"],
            player_id=data.get("id"),
            seed=data.get("seed"),
            ranking=data.get("ranking"),
            email=data.get("email"),
            age=data.get("age"),
        )

    def _checked(self, field_name: str, result, original):
        if result:
            return result.sanitized_value
        if self.strict:
            raise InvalidConfigurationException(
                f"Invalid player {field_name}: {result.error_message}"
            )
        logger.warning(f"Dropping invalid {field_name} {original!r}: {result.error_message}")
        return None


def ensure_unique_ids(players: Iterable[Player]) -> None:
    """Raise if two players share an id.

    Raises:
        DuplicatePlayerException: On the first repeated id
    """
    seen = set()
    for player in players:
        if player.id in seen:
            raise DuplicatePlayerException(f"Duplicate player id: {player.id}")
        seen.add(player.id)

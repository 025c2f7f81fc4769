"""Errors raised by the balancer."""
from typing import Optional


class EvenTeamsError(Exception):
    """Base class for even_teams errors."""


class RosterSizeError(EvenTeamsError, ValueError):
    """The roster doesn't split into two full teams."""

    def __init__(self, required: int, received: int, message: Optional[str] = None):
        self.required = required
        self.received = received
        super().__init__(message or f"Need exactly {required} players to create teams, got {received}")


class InsufficientPlayersError(RosterSizeError):
    """Fewer players than two full teams need."""

    def __init__(self, required: int, received: int):
        super().__init__(
            required,
            received,
            f"Need at least {required} players to create teams, got {received}",
        )


class PlayerNotFoundError(EvenTeamsError, LookupError):
    """A player id isn't on either side of a result."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found in either team")

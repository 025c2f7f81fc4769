"""Balanced 5v5 team generation for rated, role-tagged players."""

from even_teams.errors import (
    EvenTeamsError,
    InsufficientPlayersError,
    PlayerNotFoundError,
    RosterSizeError,
)
from even_teams.models import (
    BalanceQuality,
    BalancingConfig,
    Player,
    Role,
    RoleAssignment,
    TeamResult,
    TeamSide,
)
from even_teams.services import (
    TeamBalancer,
    generate_balanced_teams,
    get_team_balance,
    swap_players,
)

__version__ = "0.1.0"

__all__ = [
    "EvenTeamsError",
    "InsufficientPlayersError",
    "PlayerNotFoundError",
    "RosterSizeError",
    "BalanceQuality",
    "BalancingConfig",
    "Player",
    "Role",
    "RoleAssignment",
    "TeamResult",
    "TeamSide",
    "TeamBalancer",
    "generate_balanced_teams",
    "get_team_balance",
    "swap_players",
]

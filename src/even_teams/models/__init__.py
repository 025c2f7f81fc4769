"""Data models for team balancing."""

from even_teams.models.player import (
    DEFAULT_ROLE_WEIGHTS,
    ROLE_INFO,
    Player,
    Role,
    RoleAssignment,
)
from even_teams.models.team import (
    BalanceQuality,
    BalancingConfig,
    TeamResult,
    TeamSide,
)

__all__ = [
    "DEFAULT_ROLE_WEIGHTS",
    "ROLE_INFO",
    "Player",
    "Role",
    "RoleAssignment",
    "BalanceQuality",
    "BalancingConfig",
    "TeamResult",
    "TeamSide",
]

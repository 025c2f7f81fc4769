"""Balancing services."""

from even_teams.services.balance_quality import get_team_balance
from even_teams.services.team_balancer import TeamBalancer, generate_balanced_teams
from even_teams.services.team_editor import swap_players

__all__ = [
    "get_team_balance",
    "TeamBalancer",
    "generate_balanced_teams",
    "swap_players",
]

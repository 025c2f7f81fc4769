"""Balancing configuration and team result models."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from even_teams.models.player import DEFAULT_ROLE_WEIGHTS, Player, Role

if TYPE_CHECKING:
    from even_teams.config import Settings

DEFAULT_TEAM1_NAME = "Team Counter-Terrorists"
DEFAULT_TEAM2_NAME = "Team Terrorists"


@dataclass
class BalancingConfig:
    """Options for a balancing run."""

    team_size: int = 5
    prioritize_roles: bool = True
    role_weights: dict[Role, float] = field(default_factory=lambda: dict(DEFAULT_ROLE_WEIGHTS))
    name_teams_after_member: bool = True

    def __post_init__(self):
        if self.team_size < 1:
            raise ValueError(f"team_size must be positive, got {self.team_size}")
        # Accept plain string keys ("awp": 1.2) as well as Role members
        self.role_weights = {Role(role): float(weight) for role, weight in self.role_weights.items()}

    @property
    def roster_size(self) -> int:
        return self.team_size * 2

    def weight_for(self, role: Optional[Role]) -> float:
        """Weight multiplier for a favorite role; 1.0 when there is none."""
        if role is None:
            return 1.0
        return self.role_weights.get(role, 1.0)

    @classmethod
    def from_settings(cls, settings: Optional["Settings"] = None) -> "BalancingConfig":
        """Build a config from environment settings."""
        if settings is None:
            from even_teams.config import get_settings
            settings = get_settings()

        weights = dict(DEFAULT_ROLE_WEIGHTS)
        weights.update({Role(k): v for k, v in settings.role_weights.items()})
        return cls(
            team_size=settings.team_size,
            prioritize_roles=settings.prioritize_roles,
            role_weights=weights,
            name_teams_after_member=settings.name_teams_after_member,
        )


@dataclass
class BalanceQuality:
    """How close two team totals are."""

    difference: int
    is_balanced: bool
    percentage: int


@dataclass
class TeamSide:
    """One side of a balancing run, as handed to persistence."""

    name: str
    total_level: int
    group_id: str
    players: list[Player] = field(default_factory=list)


@dataclass
class TeamResult:
    """Two balanced teams produced by one run."""

    team1: list[Player]
    team2: list[Player]
    sides: tuple[TeamSide, TeamSide]
    group_id: str

    @property
    def totals(self) -> tuple[int, int]:
        return self.sides[0].total_level, self.sides[1].total_level

    def quality(self) -> BalanceQuality:
        """Balance quality of the two side totals."""
        from even_teams.services.balance_quality import get_team_balance
        return get_team_balance(*self.totals)

    def side_of(self, player_id: str) -> Optional[int]:
        """Index (0 or 1) of the side holding ``player_id``, or None."""
        if any(p.id == player_id for p in self.team1):
            return 0
        if any(p.id == player_id for p in self.team2):
            return 1
        return None

"""Player and role models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

MIN_LEVEL = 1
MAX_LEVEL = 20


class Role(str, Enum):
    """In-game roles a player can declare."""

    AWP = "awp"  # Primary sniper
    IGL = "igl"  # In-game leader
    ENTRY_FRAGGER = "entry_fragger"
    SUPPORT = "support"
    LURKER = "lurker"  # Flank / scout

    @property
    def label(self) -> str:
        return ROLE_INFO[self]["label"]

    @property
    def description(self) -> str:
        return ROLE_INFO[self]["description"]

    @property
    def default_weight(self) -> float:
        return DEFAULT_ROLE_WEIGHTS[self]


ROLE_INFO: dict[Role, dict[str, str]] = {
    Role.AWP: {"label": "AWPer", "description": "Primary sniper, high-impact fragger"},
    Role.IGL: {"label": "IGL", "description": "In-Game Leader, caller and strategist"},
    Role.ENTRY_FRAGGER: {"label": "Entry Fragger", "description": "First in, opens up rounds"},
    Role.SUPPORT: {"label": "Support", "description": "Utility player, helps teammates"},
    Role.LURKER: {"label": "Lurker", "description": "Flanker, information gatherer"},
}

DEFAULT_ROLE_WEIGHTS: dict[Role, float] = {
    Role.AWP: 1.2,
    Role.IGL: 1.3,
    Role.ENTRY_FRAGGER: 1.1,
    Role.SUPPORT: 1.0,
    Role.LURKER: 1.0,
}


def _check_level(value: int, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if not MIN_LEVEL <= value <= MAX_LEVEL:
        raise ValueError(f"{what} must be between {MIN_LEVEL} and {MAX_LEVEL}, got {value}")


@dataclass
class RoleAssignment:
    """A role a player can play, with proficiency and favorite flag."""

    role: Role
    level: int = 10
    is_favorite: bool = False

    def __post_init__(self):
        self.role = Role(self.role)
        _check_level(self.level, f"Level for role {self.role.value}")


@dataclass
class Player:
    """A rated player.

    Contract: at most one of ``roles`` is marked favorite. Whoever edits
    roles is responsible for clearing the old favorite when a new one is
    set; construction rejects rosters that break this.
    """

    id: str
    name: str
    overall_level: int
    roles: list[RoleAssignment] = field(default_factory=list)

    def __post_init__(self):
        _check_level(self.overall_level, f"Overall level for {self.name}")
        favorites = [r.role.value for r in self.roles if r.is_favorite]
        if len(favorites) > 1:
            raise ValueError(
                f"Player {self.name} has more than one favorite role: {', '.join(favorites)}"
            )

    @property
    def favorite_role(self) -> Optional[Role]:
        """The player's favorite role, if any."""
        for assignment in self.roles:
            if assignment.is_favorite:
                return assignment.role
        return None

    def role_level(self, role: Role) -> Optional[int]:
        """Proficiency for ``role``, or None if the player doesn't play it."""
        for assignment in self.roles:
            if assignment.role == role:
                return assignment.level
        return None

"""Centralized role normalization utility.

Roster data arrives with whatever role names people typed. Everything that
reads roles should go through this module so the balancer only ever sees
``Role`` members: awp, igl, entry_fragger, support, lurker.
"""

from typing import Optional, Union

from even_teams.models.player import Role, RoleAssignment

# Canonical roles - the standard values used throughout the application
CANONICAL_ROLES = frozenset(role.value for role in Role)

# Mapping from known role spellings (lowercased) to canonical roles
ROLE_ALIASES: dict[str, Role] = {
    # Sniper variations
    "awp": Role.AWP,
    "awper": Role.AWP,
    "sniper": Role.AWP,
    "primary awp": Role.AWP,

    # Leader variations
    "igl": Role.IGL,
    "in-game leader": Role.IGL,
    "in game leader": Role.IGL,
    "leader": Role.IGL,
    "caller": Role.IGL,
    "shotcaller": Role.IGL,

    # Entry variations
    "entry_fragger": Role.ENTRY_FRAGGER,
    "entry fragger": Role.ENTRY_FRAGGER,
    "entry-fragger": Role.ENTRY_FRAGGER,
    "entry": Role.ENTRY_FRAGGER,
    "entryfragger": Role.ENTRY_FRAGGER,
    "opener": Role.ENTRY_FRAGGER,

    # Support variations
    "support": Role.SUPPORT,
    "sup": Role.SUPPORT,
    "supp": Role.SUPPORT,
    "utility": Role.SUPPORT,

    # Lurker / flank-scout variations
    "lurker": Role.LURKER,
    "lurk": Role.LURKER,
    "flank": Role.LURKER,
    "flanker": Role.LURKER,
    "flank-scout": Role.LURKER,
    "flank scout": Role.LURKER,
    "scout": Role.LURKER,
}

# Role ordering for consistent display/sorting
ROLE_ORDER = [Role.IGL, Role.AWP, Role.ENTRY_FRAGGER, Role.SUPPORT, Role.LURKER]


def normalize_role(role: Union[str, Role, None]) -> Optional[Role]:
    """Normalize a role string to a ``Role``.

    Args:
        role: Role in any known spelling (e.g., "AWPer", "sniper", "IGL", "entry")

    Returns:
        The matching Role, or None if invalid/None

    Examples:
        >>> normalize_role("AWPer")
        <Role.AWP: 'awp'>
        >>> normalize_role("leader")
        <Role.IGL: 'igl'>
        >>> normalize_role(None)
        None
    """
    if role is None:
        return None
    if isinstance(role, Role):
        return role

    role_lower = role.strip().lower()
    if role_lower in ROLE_ALIASES:
        return ROLE_ALIASES[role_lower]

    # Tolerate underscores in place of spaces ("in_game_leader")
    spaced = role_lower.replace("_", " ")
    return ROLE_ALIASES.get(spaced)


def normalize_role_strict(role: Union[str, Role]) -> Role:
    """Normalize a role string, raising ValueError if unknown.

    Raises:
        ValueError: If role is not recognized
    """
    normalized = normalize_role(role)
    if normalized is None:
        raise ValueError(f"Unknown role: {role}")
    return normalized


def is_valid_role(role: Union[str, Role, None]) -> bool:
    """Check if a role string can be normalized."""
    return normalize_role(role) is not None


def get_canonical_roles() -> frozenset[str]:
    """Get the set of canonical role values."""
    return CANONICAL_ROLES


def sort_by_role(assignments: list[RoleAssignment]) -> list[RoleAssignment]:
    """Sort role assignments in standard display order, favorite first."""
    return sorted(assignments, key=lambda a: (not a.is_favorite, ROLE_ORDER.index(a.role)))

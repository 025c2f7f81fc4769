"""Utility modules for even_teams."""

from even_teams.utils.role_normalizer import (
    CANONICAL_ROLES,
    ROLE_ALIASES,
    ROLE_ORDER,
    normalize_role,
    normalize_role_strict,
    is_valid_role,
    get_canonical_roles,
    sort_by_role,
)

__all__ = [
    "CANONICAL_ROLES",
    "ROLE_ALIASES",
    "ROLE_ORDER",
    "normalize_role",
    "normalize_role_strict",
    "is_valid_role",
    "get_canonical_roles",
    "sort_by_role",
]

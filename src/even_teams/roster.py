"""Roster loading from plain dicts and JSON files."""
import json
import uuid
from pathlib import Path
from typing import Any, Union

from even_teams.models.player import Player, RoleAssignment
from even_teams.utils.role_normalizer import normalize_role_strict


def player_from_dict(data: dict[str, Any]) -> Player:
    """Build a Player from a datastore-style row.

    Accepts ``player_roles`` (as stored alongside players) or ``roles`` for
    the role list. Role names may use any known alias.
    """
    raw_roles = data.get("player_roles")
    if raw_roles is None:
        raw_roles = data.get("roles", [])

    roles = [
        RoleAssignment(
            role=normalize_role_strict(r["role"]),
            level=int(r.get("level", 10)),
            is_favorite=bool(r.get("is_favorite", False)),
        )
        for r in raw_roles
    ]

    return Player(
        id=str(data.get("id") or uuid.uuid4()),
        name=str(data["name"]),
        overall_level=int(data["overall_level"]),
        roles=roles,
    )


def load_roster(path: Union[str, Path]) -> list[Player]:
    """Load players from a JSON file.

    The file holds either a list of player objects or ``{"players": [...]}``.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("players", [])
    if not isinstance(data, list):
        raise ValueError(f"Roster file {path} must contain a list of players")

    return [player_from_dict(row) for row in data]

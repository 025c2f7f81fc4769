"""Splits a rated roster into two evenly matched teams."""
import logging
import random
import uuid
from dataclasses import dataclass
from typing import Optional, Sequence

from even_teams.errors import InsufficientPlayersError, RosterSizeError
from even_teams.models.player import Player, Role
from even_teams.models.team import (
    DEFAULT_TEAM1_NAME,
    DEFAULT_TEAM2_NAME,
    BalancingConfig,
    TeamResult,
    TeamSide,
)

logger = logging.getLogger(__name__)

# Adjacent players closer than this have their order randomized
TIE_BREAK_THRESHOLD = 0.5
# Players within this many weighted levels of a group's first member share the group
SIMILAR_SKILL_RANGE = 2
# Consecutive picks per side before switching; weighted towards 2
PICK_WINDOWS = (1, 2, 2, 3)
# Max weighted-level gap (exclusive) for a role-repair swap partner
SWAP_TOLERANCE = 3
ESSENTIAL_ROLES = (Role.AWP, Role.IGL)


@dataclass
class _RankedPlayer:
    """Player plus balancing scratch data. Never leaves this module."""

    player: Player
    weighted_level: float
    favorite_role: Optional[Role]


class TeamBalancer:
    """Balances players into two teams by weighted skill and favorite role.

    The algorithm is a fast heuristic, not an optimal partition:

    1. Weight each player's overall level by their favorite role's weight
    2. Rank by weighted level, randomizing order between near-ties
    3. Shuffle within groups of similarly rated players
    4. Draft into two sides with randomly sized pick windows
    5. Optionally swap essential roles (AWP, IGL) across sides
    6. Total raw levels and assemble the result

    All randomness comes from ``rng``. Pass a seeded ``random.Random`` for
    reproducible teams; by default every call draws fresh teams.
    """

    def __init__(
        self,
        config: Optional[BalancingConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or BalancingConfig()
        self.rng = rng

    def balance(self, players: Sequence[Player]) -> TeamResult:
        """Split ``players`` into two teams of ``config.team_size``.

        Args:
            players: Exactly ``2 * team_size`` players, each with at most one
                favorite role

        Returns:
            TeamResult with both rosters, per-side totals and a shared group id

        Raises:
            InsufficientPlayersError: Fewer than ``2 * team_size`` players
            RosterSizeError: More than ``2 * team_size`` players
        """
        required = self.config.roster_size
        if len(players) < required:
            raise InsufficientPlayersError(required, len(players))
        if len(players) > required:
            raise RosterSizeError(required, len(players))

        rng = self.rng if self.rng is not None else random.Random()

        ranked = self._rank([self._weigh(p) for p in players], rng)
        ranked = self._shuffle_similar_groups(ranked, rng)
        team1, team2 = self._draft(ranked, rng)

        if self.config.prioritize_roles:
            self._optimize_role_distribution(team1, team2, rng)

        return self._assemble(team1, team2, rng)

    def _weigh(self, player: Player) -> _RankedPlayer:
        favorite = player.favorite_role
        return _RankedPlayer(
            player=player,
            weighted_level=player.overall_level * self.config.weight_for(favorite),
            favorite_role=favorite,
        )

    def _rank(self, entries: list[_RankedPlayer], rng: random.Random) -> list[_RankedPlayer]:
        """Sort by weighted level descending, coin-flipping near-tied neighbours."""
        ranked = sorted(entries, key=lambda e: e.weighted_level, reverse=True)
        for i in range(len(ranked) - 1):
            gap = abs(ranked[i].weighted_level - ranked[i + 1].weighted_level)
            if gap < TIE_BREAK_THRESHOLD and rng.random() < 0.5:
                ranked[i], ranked[i + 1] = ranked[i + 1], ranked[i]
        return ranked

    def _shuffle_similar_groups(
        self, ranked: list[_RankedPlayer], rng: random.Random
    ) -> list[_RankedPlayer]:
        """Shuffle within runs of similar weighted level, keeping the coarse order."""
        groups: list[list[_RankedPlayer]] = []
        for entry in ranked:
            if groups and abs(groups[-1][0].weighted_level - entry.weighted_level) <= SIMILAR_SKILL_RANGE:
                groups[-1].append(entry)
            else:
                groups.append([entry])

        for group in groups:
            rng.shuffle(group)
        return [entry for group in groups for entry in group]

    def _draft(
        self, ranked: list[_RankedPlayer], rng: random.Random
    ) -> tuple[list[_RankedPlayer], list[_RankedPlayer]]:
        """Assign players to two fixed-size sides using random pick windows."""
        size = self.config.team_size
        sides: list[list[Optional[_RankedPlayer]]] = [[None] * size, [None] * size]
        filled = [0, 0]

        picking = 0 if rng.random() < 0.5 else 1
        window = rng.choice(PICK_WINDOWS)
        picks = 0

        for entry in ranked:
            if filled[0] < size and filled[1] < size:
                side = picking
                picks += 1
                if picks >= window:
                    picking = 1 - picking
                    picks = 0
                    window = rng.choice(PICK_WINDOWS)
            else:
                # One side is full; the rest go to the other
                side = 0 if filled[0] < size else 1

            sides[side][filled[side]] = entry
            filled[side] += 1
            if filled[0] == size and filled[1] == size:
                break

        return sides[0], sides[1]

    def _optimize_role_distribution(
        self,
        team1: list[_RankedPlayer],
        team2: list[_RankedPlayer],
        rng: random.Random,
    ) -> None:
        """Swap essential-role players across sides, in place.

        For each essential role held on only one side, a random holder is
        swapped with a random player of similar weighted level from the
        other side. A swap never leaves the giving side without any
        essential-role player, so a lone AWP or IGL only moves by trading
        places with another essential-role player.
        """
        sides = (team1, team2)
        roles = list(ESSENTIAL_ROLES)
        rng.shuffle(roles)

        for role in roles:
            holders = [
                [i for i, e in enumerate(side) if e.favorite_role == role]
                for side in sides
            ]
            if bool(holders[0]) == bool(holders[1]):
                continue

            has = 0 if holders[0] else 1
            lacks = 1 - has
            holder_idx = rng.choice(holders[has])
            holder = sides[has][holder_idx]

            essentials_left = sum(
                1 for e in sides[has] if e.favorite_role in ESSENTIAL_ROLES
            ) - 1
            candidates = [
                i
                for i, e in enumerate(sides[lacks])
                if abs(e.weighted_level - holder.weighted_level) < SWAP_TOLERANCE
                and (essentials_left > 0 or e.favorite_role in ESSENTIAL_ROLES)
            ]
            if not candidates:
                logger.debug(f"No swap partner for {role.value} holder {holder.player.name}")
                continue

            partner_idx = rng.choice(candidates)
            partner = sides[lacks][partner_idx]
            sides[has][holder_idx] = partner
            sides[lacks][partner_idx] = holder
            logger.debug(
                f"Swapped {holder.player.name} ({role.value}) with {partner.player.name} "
                f"to spread {role.value} across teams"
            )

    def _assemble(
        self,
        team1: list[_RankedPlayer],
        team2: list[_RankedPlayer],
        rng: random.Random,
    ) -> TeamResult:
        players1 = [e.player for e in team1]
        players2 = [e.player for e in team2]
        group_id = str(uuid.UUID(int=rng.getrandbits(128), version=4))

        if self.config.name_teams_after_member:
            name1 = f"{players1[0].name} Team"
            name2 = f"{players2[0].name} Team"
        else:
            name1, name2 = DEFAULT_TEAM1_NAME, DEFAULT_TEAM2_NAME

        side1 = TeamSide(name1, sum(p.overall_level for p in players1), group_id, list(players1))
        side2 = TeamSide(name2, sum(p.overall_level for p in players2), group_id, list(players2))
        logger.info(
            f"Balanced {len(players1) + len(players2)} players: "
            f"{side1.name} ({side1.total_level}) vs {side2.name} ({side2.total_level})"
        )

        return TeamResult(team1=players1, team2=players2, sides=(side1, side2), group_id=group_id)


def generate_balanced_teams(
    players: Sequence[Player],
    config: Optional[BalancingConfig] = None,
    rng: Optional[random.Random] = None,
) -> TeamResult:
    """Balance ``players`` into two teams with a one-off TeamBalancer."""
    return TeamBalancer(config, rng).balance(players)

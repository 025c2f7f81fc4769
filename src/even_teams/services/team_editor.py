"""Manual adjustments to a balanced result."""
from even_teams.errors import PlayerNotFoundError
from even_teams.models.team import TeamResult, TeamSide


def swap_players(result: TeamResult, player_a_id: str, player_b_id: str) -> TeamResult:
    """Swap two players between teams.

    The players keep each other's slot, totals are recomputed and the
    group id is preserved. ``result`` is left untouched.

    Args:
        result: Result of a balancing run
        player_a_id: Id of a player on one team
        player_b_id: Id of a player on the other team

    Returns:
        New TeamResult with the two players exchanged

    Raises:
        PlayerNotFoundError: If either id isn't on a team
        ValueError: If both players are on the same team
    """
    side_a = result.side_of(player_a_id)
    if side_a is None:
        raise PlayerNotFoundError(player_a_id)
    side_b = result.side_of(player_b_id)
    if side_b is None:
        raise PlayerNotFoundError(player_b_id)
    if side_a == side_b:
        raise ValueError("Both players are on the same team")

    teams = [result.team1.copy(), result.team2.copy()]
    idx_a = next(i for i, p in enumerate(teams[side_a]) if p.id == player_a_id)
    idx_b = next(i for i, p in enumerate(teams[side_b]) if p.id == player_b_id)
    teams[side_a][idx_a], teams[side_b][idx_b] = teams[side_b][idx_b], teams[side_a][idx_a]

    sides = tuple(
        TeamSide(
            name=old.name,
            total_level=sum(p.overall_level for p in players),
            group_id=result.group_id,
            players=list(players),
        )
        for old, players in zip(result.sides, teams)
    )
    return TeamResult(team1=teams[0], team2=teams[1], sides=sides, group_id=result.group_id)

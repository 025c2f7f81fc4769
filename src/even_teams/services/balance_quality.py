"""Balance quality scoring for a pair of team totals."""
import math

from even_teams.models.team import BalanceQuality

# Teams are balanced if within this many levels of each other
BALANCED_MAX_DIFFERENCE = 5


def get_team_balance(team1_total: int, team2_total: int) -> BalanceQuality:
    """Score how evenly matched two team totals are.

    Args:
        team1_total: Summed overall level of the first team
        team2_total: Summed overall level of the second team

    Returns:
        BalanceQuality with the absolute difference, a 0-100 percentage
        (100 minus the difference relative to the average total, rounded
        half up) and whether the difference is within the balanced threshold.

    Raises:
        ValueError: If either total is negative
    """
    if team1_total < 0 or team2_total < 0:
        raise ValueError(f"Team totals must be non-negative, got {team1_total} and {team2_total}")

    difference = abs(team1_total - team2_total)
    average = (team1_total + team2_total) / 2

    if team1_total == 0 and team2_total == 0:
        percentage = 100
    else:
        raw = max(0.0, 100 - (difference / average) * 100)
        percentage = math.floor(raw + 0.5)

    return BalanceQuality(
        difference=difference,
        is_balanced=difference <= BALANCED_MAX_DIFFERENCE,
        percentage=percentage,
    )

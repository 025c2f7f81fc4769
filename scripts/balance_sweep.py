#!/usr/bin/env python3
"""Balance sweep: run the team balancer many times on one roster.

Reports how close the generated teams are and how often the essential
roles (AWP, IGL) end up split across both teams.

Usage:
  python scripts/balance_sweep.py --roster data/sample_roster.json --runs 500
  python scripts/balance_sweep.py --roster data/sample_roster.json --no-roles --seed 7
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

import pandas as pd

# Add src to path when run from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from even_teams.config import get_settings
from even_teams.models.player import Player, Role
from even_teams.models.team import BalancingConfig
from even_teams.roster import load_roster
from even_teams.services.team_balancer import ESSENTIAL_ROLES, TeamBalancer


def roles_split(team1: list[Player], team2: list[Player], role: Role) -> bool:
    """Whether both teams have a player whose favorite is ``role``."""
    return any(p.favorite_role == role for p in team1) and any(
        p.favorite_role == role for p in team2
    )


def run_sweep(players: list[Player], config: BalancingConfig, runs: int, seed: int | None) -> pd.DataFrame:
    """Balance ``players`` ``runs`` times and collect one row per run."""
    rng = random.Random(seed)
    balancer = TeamBalancer(config, rng)

    rows = []
    for run in range(runs):
        result = balancer.balance(players)
        quality = result.quality()
        row = {
            "run": run,
            "team1_total": result.sides[0].total_level,
            "team2_total": result.sides[1].total_level,
            "difference": quality.difference,
            "percentage": quality.percentage,
            "is_balanced": quality.is_balanced,
        }
        for role in ESSENTIAL_ROLES:
            row[f"{role.value}_split"] = roles_split(result.team1, result.team2, role)
        rows.append(row)

    return pd.DataFrame(rows)


def summarize(df: pd.DataFrame) -> dict:
    summary = {
        "runs": len(df),
        "mean_difference": round(float(df["difference"].mean()), 2),
        "max_difference": int(df["difference"].max()),
        "mean_percentage": round(float(df["percentage"].mean()), 2),
        "balanced_rate": round(float(df["is_balanced"].mean()) * 100, 1),
        "distinct_splits": int(df[["team1_total", "team2_total"]].drop_duplicates().shape[0]),
    }
    for role in ESSENTIAL_ROLES:
        summary[f"{role.value}_split_rate"] = round(float(df[f"{role.value}_split"].mean()) * 100, 1)
    return summary


def main():
    parser = argparse.ArgumentParser(description="Repeated-run statistics for the team balancer")
    parser.add_argument("--roster", type=str, required=True, help="Roster JSON path")
    parser.add_argument("--runs", type=int, default=200, help="Number of balancing runs")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible sweeps")
    parser.add_argument("--no-roles", action="store_true", help="Disable role distribution repair")
    parser.add_argument("--output", type=str, default="", help="Optional CSV path for per-run rows")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Per-run INFO lines would drown the summary
    logging.getLogger("even_teams.services.team_balancer").setLevel(logging.WARNING)

    config = BalancingConfig.from_settings(settings)
    if args.no_roles:
        config.prioritize_roles = False

    players = load_roster(args.roster)
    print(f"Loaded {len(players)} players from {args.roster}")

    df = run_sweep(players, config, args.runs, args.seed)
    print("\n=== DIFFERENCE / PERCENTAGE ===")
    print(df[["difference", "percentage"]].describe().round(2).to_string())
    print("\n=== SUMMARY ===")
    print(json.dumps(summarize(df), indent=2))

    if args.output:
        df.to_csv(args.output, index=False)
        print(f"\nPer-run rows written to {args.output}")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Bowling league decorator CLI

Loads a league JSON document, runs the full scoring and statistics pass,
and prints standings and the honor roll. Optionally writes an Excel
workbook with standings, player statistics and the honor roll.

Usage:
    python decorate_league.py --league data/league.json
    python decorate_league.py --league data/league.json --output out/league.xlsx --lenient
"""

import argparse
import sys
from pathlib import Path

from bowlstats import (
    BowlstatsError,
    LeagueDecorationError,
    decorate_league,
    export_league_workbook,
    load_league,
    setup_logging,
    standings,
    validate_league,
)
from bowlstats.constants import UNKNOWN
from bowlstats.logging_config import get_logger, level_for

logger = get_logger('cli')


def print_report(league) -> None:
    """Print standings and the honor roll."""
    print("\n" + "="*60)
    print(f"{league.name or league.id} {league.season}".strip())
    print("="*60)

    for rank, team in enumerate(standings(league), 1):
        won, lost = team.points_won_lost
        stats = team.team_stats
        print(f"  {rank}. {team.name or team.id}: {won:g}-{lost:g}  "
              f"pins {stats.scratch_pins:g}  avg {stats.average}  hdcp {stats.handicap}")

    print("\nHONOR ROLL")
    for accolade in league.accolades:
        if accolade.how_much <= 0:
            continue
        who = league.player_name(accolade.who)
        if who == UNKNOWN:
            who = league.team_name(accolade.who)
        when = f" on {accolade.when.isoformat()}" if accolade.when else ""
        detail = f" ({accolade.description})" if accolade.description else ""
        print(f"  {accolade.type}: {who} {accolade.how_much:g}{when}{detail}")


def main():
    parser = argparse.ArgumentParser(description="Bowling league scoring and statistics")
    parser.add_argument(
        "--league", "-l",
        required=True,
        help="Path to the league JSON document",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write an Excel workbook to this path",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Report malformed frame notation instead of failing",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug detail",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write a log file to this directory",
    )

    args = parser.parse_args()

    league_path = Path(args.league)
    setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=level_for(args.verbose, args.quiet),
        log_to_file=args.log_dir is not None,
        run_name=league_path.stem,
    )

    try:
        league = load_league(league_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load league {league_path}: {e}")
        print(f"❌ Could not load league: {e}")
        sys.exit(1)

    try:
        decorate_league(league, strict=not args.lenient)
    except LeagueDecorationError as e:
        print(f"❌ {e}")
        print("   Fix the frames or rerun with --lenient.")
        sys.exit(1)
    except BowlstatsError as e:
        logger.error(f"Decoration failed: {e}")
        print(f"❌ {e}")
        sys.exit(1)

    print_report(league)

    for error in league.frame_errors:
        print(f"⚠️  {error}")
    for warning in validate_league(league):
        print(f"⚠️  {warning}")

    if args.output:
        path = export_league_workbook(league, args.output)
        print(f"\n✓ Workbook saved to {path}")


if __name__ == "__main__":
    main()

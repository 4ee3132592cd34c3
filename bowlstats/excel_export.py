"""Excel export of a decorated league."""

import logging
from pathlib import Path
from typing import List

import openpyxl

from .constants import UNKNOWN
from .models import League, Team

logger = logging.getLogger('bowlstats.excel_export')

STANDINGS_HEADERS = ['Team', 'Name', 'Won', 'Lost', 'Scratch Pins', 'Average', 'Handicap',
                     'High Game', 'High Series', 'Low Game', 'Low Series']
PLAYER_HEADERS = ['Team', 'Player', 'Status', 'Games', 'Average', 'High Game', 'High Series', 'SD',
                  'Pinfall', 'Handicap', 'Strike %', 'Spare %', 'Open %', '200s', '600s', 'Booster Series']
HONOR_ROLL_HEADERS = ['Category', 'Who', 'When', 'How Much', 'Description']


def standings(league: League) -> List[Team]:
    """Tracked teams ordered by points won, then scratch pins."""
    return sorted(
        league.teams,
        key=lambda t: (t.points_won_lost[0], t.team_stats.scratch_pins),
        reverse=True,
    )


def _write_rows(ws, headers: list, rows: list) -> None:
    for col, header in enumerate(headers, start=1):
        ws.cell(row=1, column=col, value=header)
    for row_idx, row in enumerate(rows, start=2):
        for col, value in enumerate(row, start=1):
            ws.cell(row=row_idx, column=col, value=value)


def export_league_workbook(league: League, path: Path | str) -> Path:
    """
    Write standings, player statistics and the honor roll to a new workbook.

    Sheets:
    - Standings: one row per tracked team, best first
    - Players: one row per roster player
    - Honor Roll: one row per accolade, names resolved where possible

    Returns:
        Path of the saved workbook
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Standings'
    _write_rows(ws, STANDINGS_HEADERS, [
        [
            team.id, team.name, team.points_won_lost[0], team.points_won_lost[1],
            team.team_stats.scratch_pins, team.team_stats.average, team.team_stats.handicap,
            team.team_stats.high_game, team.team_stats.high_series,
            team.team_stats.low_game, team.team_stats.low_series,
        ]
        for team in standings(league)
    ])

    player_rows = []
    for team in league.teams:
        for player in team.roster:
            stats = player.player_stats
            player_rows.append([
                team.id, player.name, player.status, stats.game_stats.count,
                round(stats.game_stats.average, 2), stats.game_stats.max, stats.series_stats.max,
                round(stats.game_stats.sd, 2), stats.pinfall, stats.handicap,
                round(stats.strikes.pct * 100, 1), round(stats.spares.pct * 100, 1),
                round(stats.opens.pct * 100, 1), stats.games_200, stats.series_600,
                stats.average_booster_series,
            ])
    _write_rows(wb.create_sheet('Players'), PLAYER_HEADERS, player_rows)

    honor_rows = []
    for accolade in league.accolades:
        name = league.player_name(accolade.who)
        if name == UNKNOWN:
            name = league.team_name(accolade.who)
        honor_rows.append([
            accolade.type, name if name != UNKNOWN else accolade.who,
            accolade.when.isoformat() if accolade.when else '',
            accolade.how_much, accolade.description,
        ])
    _write_rows(wb.create_sheet('Honor Roll'), HONOR_ROLL_HEADERS, honor_rows)

    wb.save(str(path))
    wb.close()
    logger.info(f'Wrote league workbook to {path}')
    return path

from .models import (
    Accolade,
    Frame,
    League,
    Matchup,
    Player,
    PlayerGameScore,
    PlayerSeriesScore,
    PlayerStatistics,
    Team,
)
from .exceptions import (
    BowlstatsError,
    FrameNotationError,
    LeagueDecorationError,
    OpponentScoringNotImplementedError,
)
from .frames import calculate_frame_scores, set_cross_player_frame_attributes
from .calculators import (
    PercentOfAverageToTargetHandicapCalculator,
    PpgPpsPointsCalculator,
    ZeroHandicapCalculator,
    select_handicap_calculator,
    select_points_calculator,
)
from .scoring import assign_scores_and_points
from .rollup import rollup_team_scores_and_points, update_team_stats_from_players
from .player_stats import calculate_league_player_stats, calculate_player_stats
from .leaders import gather_league_leaders
from .league import decorate_league
from .utils import load_json, load_league
from .validators import validate_league
from .excel_export import export_league_workbook, standings
from .logging_config import get_logger, setup_logging

__all__ = [
    # Models
    'Accolade',
    'Frame',
    'League',
    'Matchup',
    'Player',
    'PlayerGameScore',
    'PlayerSeriesScore',
    'PlayerStatistics',
    'Team',
    # Errors
    'BowlstatsError',
    'FrameNotationError',
    'LeagueDecorationError',
    'OpponentScoringNotImplementedError',
    # Frames
    'calculate_frame_scores',
    'set_cross_player_frame_attributes',
    # Calculators
    'PercentOfAverageToTargetHandicapCalculator',
    'PpgPpsPointsCalculator',
    'ZeroHandicapCalculator',
    'select_handicap_calculator',
    'select_points_calculator',
    # Decoration steps
    'assign_scores_and_points',
    'rollup_team_scores_and_points',
    'update_team_stats_from_players',
    'calculate_player_stats',
    'calculate_league_player_stats',
    'gather_league_leaders',
    'decorate_league',
    # I/O
    'load_json',
    'load_league',
    'validate_league',
    'export_league_workbook',
    'standings',
    'setup_logging',
    'get_logger',
]

"""Data models for the bowlstats engine.

The league snapshot is a tree of mutable dataclasses. Every field has a
default so a freshly built object is always complete; the decoration pass
fills in the derived fields in place.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Set, Tuple

from .constants import (
    DEFAULT_PARKING_LOT_THRESHOLD,
    HANDICAP_NONE,
    POINTS_PPG_PPS,
    REGULAR,
    UNKNOWN,
)

# (pins knocked down, optional label)
Ball = Tuple[int, Optional[str]]


# ---------------------------------------------------------------------------
# Frames and scores
# ---------------------------------------------------------------------------

@dataclass
class Frame:
    """One frame of a game with resolved ball scores."""
    number: int = 0
    ball_scores: List[Ball] = field(default_factory=list)
    cumulative_score: int = 0
    attributes: List[str] = field(default_factory=list)

    def pins(self, ball: int) -> int:
        """Pins for a 0-based ball index, 0 when the ball was not thrown."""
        return self.ball_scores[ball][0] if ball < len(self.ball_scores) else 0

    def label(self, ball: int) -> Optional[str]:
        return self.ball_scores[ball][1] if ball < len(self.ball_scores) else None

    @property
    def last_label(self) -> Optional[str]:
        return self.ball_scores[-1][1] if self.ball_scores else None

    def copy_balls(self) -> 'Frame':
        """Copy number and ball scores only (no cumulative score or attributes)."""
        return Frame(number=self.number, ball_scores=list(self.ball_scores))


@dataclass
class GameScore:
    scratch_score: int = 0
    # Scratch score after blind and vacant adjustments
    effective_scratch_score: float = 0
    hdcp: int = 0
    hdcp_score: float = 0


@dataclass
class MatchupGameScore(GameScore):
    points_won: float = 0.0


@dataclass
class SeriesScore(MatchupGameScore):
    average: float = 0.0
    games: int = 0


@dataclass
class PlayerGameScore(GameScore):
    """A single game bowled (or blinded) by a player in a matchup."""
    blind: bool = False
    vacant: bool = False
    arsenal: List[str] = field(default_factory=list)
    in_frames: List[List[str]] = field(default_factory=list)  # raw notation
    frames: List[Frame] = field(default_factory=list)
    # Notation could not be reconstructed, so scratch_score is not a real score
    frames_error: bool = False

    @property
    def bowled(self) -> bool:
        """True for a game with a real scratch score (not blind, vacant or failed)."""
        return not (self.blind or self.vacant or self.frames_error)


@dataclass
class PlayerSeriesScore:
    """A player's games for one matchup."""
    player: str = UNKNOWN
    entering_average: float = 0
    entering_hdcp: int = 0
    hdcp_setting_day: bool = False
    games: List[PlayerGameScore] = field(default_factory=list)
    series: SeriesScore = field(default_factory=SeriesScore)


@dataclass
class TeamScore:
    games: List[MatchupGameScore] = field(default_factory=list)
    series: SeriesScore = field(default_factory=SeriesScore)

    def game(self, index: int) -> MatchupGameScore:
        """Return the game at a 0-based index, growing the list when needed."""
        while len(self.games) <= index:
            self.games.append(MatchupGameScore())
        return self.games[index]


@dataclass
class LeagueTeamScore(TeamScore):
    player_scores: List[PlayerSeriesScore] = field(default_factory=list)

    def unreadable_games(self) -> Set[int]:
        """0-based team game indexes where some player's notation failed."""
        return {
            index
            for ps in self.player_scores
            for index, game in enumerate(ps.games)
            if game.frames_error
        }


@dataclass
class OpponentTeam:
    team_id: str = UNKNOWN
    entering_rank: str = ''
    players_bowled: List[str] = field(default_factory=list)
    team_hdcp: int = 0
    vacant: bool = False
    absent: bool = False
    pre_post_bowl: bool = False
    scores: TeamScore = field(default_factory=TeamScore)


@dataclass
class Matchup:
    week: int = 0
    scheduled_date: Optional[date] = None
    bowl_date: Optional[date] = None
    matchup_type: str = 'OTHERS'
    entering_rank: str = ''
    lanes: List[int] = field(default_factory=list)
    oil_pattern: Optional[str] = None
    notes: List[str] = field(default_factory=list)
    scores: LeagueTeamScore = field(default_factory=LeagueTeamScore)
    opponent: OpponentTeam = field(default_factory=OpponentTeam)
    points_won_lost: Tuple[float, float] = (0, 0)


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@dataclass
class StatGroup:
    count: int = 0
    average: float = 0.0
    min: float = 0
    max: float = 0
    sd: float = 0.0


@dataclass
class RatioGroup:
    numerator: float = 0
    denominator: float = 0
    pct: float = field(init=False, default=0.0)

    def __post_init__(self):
        self.pct = 0.0 if self.denominator == 0 else self.numerator / self.denominator


@dataclass
class Accolade:
    """An honor roll record (league-wide or personal)."""
    type: str
    who: str = ''
    when: Optional[date] = None
    how_much: float = 0
    description: str = ''


@dataclass
class PlayerStatistics:
    incomplete_frame_data: bool = False
    pinfall: int = 0
    game_stats: StatGroup = field(default_factory=StatGroup)
    series_stats: StatGroup = field(default_factory=StatGroup)
    game_averages: List[float] = field(default_factory=list)  # by game number in series
    first_ball_average: float = 0.0
    strikes: RatioGroup = field(default_factory=RatioGroup)
    spares: RatioGroup = field(default_factory=RatioGroup)
    single_pin_spares: RatioGroup = field(default_factory=RatioGroup)
    splits: RatioGroup = field(default_factory=RatioGroup)
    opens: RatioGroup = field(default_factory=RatioGroup)
    strikes_to_spares: RatioGroup = field(default_factory=RatioGroup)
    clean_games: int = 0
    games_200: int = 0
    games_300: int = 0
    series_600: int = 0
    series_800: int = 0
    strikes_in_a_row: List[Tuple[int, int]] = field(default_factory=list)  # (length, occurrences)
    all_single_pins_picked_up_average: float = 0.0
    # League specific
    handicap: int = 0
    average_booster_series: int = 0
    best_game_over_average: Optional[Accolade] = None
    best_series_over_average: Optional[Accolade] = None


@dataclass
class TeamStats:
    scratch_pins: float = 0
    average: int = 0
    handicap: int = 0
    high_game: float = 0
    high_series: float = 0
    low_game: float = 0
    low_series: float = 0


# ---------------------------------------------------------------------------
# Teams and players
# ---------------------------------------------------------------------------

@dataclass
class CarryOverStats:
    """Stats carried over from a previous season."""
    entering_hdcp: int = 0
    pins: int = 0
    games: int = 0


@dataclass
class Player:
    id: str = UNKNOWN
    name: str = UNKNOWN
    status: str = REGULAR
    parking_lot_threshold: int = DEFAULT_PARKING_LOT_THRESHOLD
    carry_over_stats: CarryOverStats = field(default_factory=CarryOverStats)
    player_stats: PlayerStatistics = field(default_factory=PlayerStatistics)


def find_player(roster: Sequence[Player], player_id: str) -> Optional[Player]:
    """Find a roster player by id, None when the id is not on the roster."""
    return next((p for p in roster if p.id == player_id), None)


@dataclass
class Team:
    """A tracked team with roster and matchups."""
    id: str = UNKNOWN
    number: int = 0
    division: str = ''
    name: str = ''
    current_rank: str = ''
    roster: List[Player] = field(default_factory=list)
    matchups: List[Matchup] = field(default_factory=list)
    points_won_lost: Tuple[float, float] = (0, 0)
    team_stats: TeamStats = field(default_factory=TeamStats)


@dataclass
class OtherTeam:
    """An opponent that is not tracked in depth."""
    id: str = UNKNOWN
    number: int = 0
    division: str = ''
    name: str = ''
    players: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# League configuration
# ---------------------------------------------------------------------------

@dataclass
class PercentOfAverageToTargetConfig:
    target: int = 0
    pct_to_target: float = 0


@dataclass
class HandicapConfig:
    type: str = HANDICAP_NONE
    pct_avg_to_target: Optional[PercentOfAverageToTargetConfig] = None


@dataclass
class BlindPenaltyConfig:
    allowed: bool = False
    default_penalty: int = 0
    missed_matchups_penalty: int = 0
    missed_matchups_threshold: int = 0


@dataclass
class VacantAbsentScoringConfig:
    allowed: bool = False
    scoring_type: str = 'FORFEIT'
    points_within_team_average: int = 0


@dataclass
class PpgPpsConfig:
    points_per_game: float = 1
    points_per_series: float = 1
    points_per_game_on_tie: float = 0.5
    points_per_series_on_tie: float = 0.5
    vacant_opponent_allowed: bool = False
    absent_opponent_allowed: bool = False


@dataclass
class PointScoringConfig:
    rule: str = POINTS_PPG_PPS
    ppg_pps: Optional[PpgPpsConfig] = None
    vacant_opponent_scoring: Optional[VacantAbsentScoringConfig] = None
    absent_opponent_scoring: Optional[VacantAbsentScoringConfig] = None


@dataclass
class ScoringRules:
    legal_min_lineup: int = 0
    lineup: int = 0
    roster: int = 0
    subs_allowed: bool = False
    handicap: Optional[HandicapConfig] = None
    blind_penalty: BlindPenaltyConfig = field(default_factory=BlindPenaltyConfig)
    point_scoring: Optional[PointScoringConfig] = None


@dataclass
class BowlingDays:
    games_per_week: int = 0
    bowls_on: Optional[str] = None
    start_time: Optional[str] = None
    start_date: Optional[date] = None
    duration: int = 0
    duration_unit: str = 'WK'
    position_rounds: List[str] = field(default_factory=list)


@dataclass
class League:
    """A league snapshot: configuration, teams and computed accolades."""
    id: str = UNKNOWN
    name: str = ''
    season: str = ''
    center: str = ''
    usbc_sanctioned: bool = False
    completed: bool = False
    bowling_days: BowlingDays = field(default_factory=BowlingDays)
    scoring_rules: ScoringRules = field(default_factory=ScoringRules)
    teams: List[Team] = field(default_factory=list)
    other_teams: List[OtherTeam] = field(default_factory=list)
    accolades: List[Accolade] = field(default_factory=list)
    frame_errors: list = field(default_factory=list)  # FrameNotationError per failed game

    def games_per_series(self, default: int) -> int:
        return self.bowling_days.games_per_week or default

    def player_name(self, player_id: str) -> str:
        """Resolve a player id to a display name from the tracked team rosters."""
        for team in self.teams:
            player = find_player(team.roster, player_id)
            if player is not None:
                return player.name
        return UNKNOWN

    def team_name(self, team_id: str) -> str:
        for team in self.teams:
            if team.id == team_id:
                return team.name
        for other in self.other_teams:
            if other.id == team_id:
                return other.name
        return UNKNOWN

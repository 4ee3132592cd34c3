"""Constants and tags for the bowlstats engine."""

# Sentinel for ids that cannot be resolved
UNKNOWN = 'UNKNOWN'

FRAMES_PER_GAME = 10
PINS_PER_RACK = 10

# Ball labels as written in frame notation
STRIKE = 'X'
SPARE = '/'
SPLIT = 'S'
FOUL = 'F'
GUTTER = '-'

# Frame attributes
HUNG = 'Hung'
STAR = 'Star'
TURKEY = 'Turkey'
PERFECT_GAME = 'Perfect-Game'
CLEAN_GAME = 'Clean-Game'
GUTTER_SPARE = 'Gutter-Spare'
SPLIT_PICKED_UP = 'Split-Picked-Up'
PARKING_LOT = 'Parking-Lot'

TURKEY_STRIKES = 3
PERFECT_GAME_STRIKES = 12

# Player status
REGULAR = 'REGULAR'
SUBSTITUTE = 'SUBSTITUTE'

# Handicap policy tags
HANDICAP_NONE = 'NONE'
HANDICAP_PCT_AVG_TO_TGT = 'PCT_AVG_TO_TGT'

# Point scoring rule tags
POINTS_PPG_PPS = 'PPG_PPS'

# Honor roll categories, in the order they are appended to the league
IND_SCRATCH_GAME = 'IND-SCRATCH-GAME'
IND_SCRATCH_SERIES = 'IND-SCRATCH-SERIES'
TEAM_SCRATCH_GAME = 'TEAM-SCRATCH-GAME'
TEAM_SCRATCH_SERIES = 'TEAM-SCRATCH-SERIES'
IND_GAME_OVER_AVERAGE = 'IND-GAME-OVER-AVERAGE'
IND_SERIES_OVER_AVERAGE = 'IND-SERIES-OVER-AVERAGE'
IND_HIGH_AVERAGE = 'IND-HIGH-AVERAGE'

ACCOLADE_TYPES = [
    IND_SCRATCH_GAME,
    IND_SCRATCH_SERIES,
    TEAM_SCRATCH_GAME,
    TEAM_SCRATCH_SERIES,
    IND_GAME_OVER_AVERAGE,
    IND_SERIES_OVER_AVERAGE,
    IND_HIGH_AVERAGE,
]

# Milestones counted in player statistics
GAME_MILESTONE = 200
PERFECT_SCORE = 300
SERIES_MILESTONE = 600
SERIES_HIGH_MILESTONE = 800

# Shortest strike streak tracked in player statistics
MIN_STRIKE_STREAK = 3

# Engine defaults (overridable through EngineSettings)
DEFAULT_GAMES_PER_SERIES = 3
DEFAULT_PARKING_LOT_THRESHOLD = 100
TEAM_AVERAGE_REGULARS = 4

"""Named failures raised by the decoration pass."""

from typing import List, Optional


class BowlstatsError(Exception):
    """Base class for bowlstats errors."""


class FrameNotationError(BowlstatsError, ValueError):
    """A frame token that does not match the notation grammar."""

    def __init__(self, frame_number: int, token: str, reason: str = 'unrecognized token'):
        self.frame_number = frame_number
        self.token = token
        self.reason = reason
        self.player_id: Optional[str] = None
        self.week: Optional[int] = None
        self.game_number: Optional[int] = None
        super().__init__(self._message())

    def locate(self, player_id: str, week: int, game_number: int) -> 'FrameNotationError':
        """Attach the game this error belongs to."""
        self.player_id = player_id
        self.week = week
        self.game_number = game_number
        self.args = (self._message(),)
        return self

    def _message(self) -> str:
        msg = f'Frame {self.frame_number}: {self.reason} {self.token!r}'
        if self.player_id is not None:
            msg = f'Player {self.player_id}, week {self.week}, game {self.game_number}: {msg}'
        return msg


class OpponentScoringNotImplementedError(BowlstatsError, NotImplementedError):
    """Points for a vacant or absent opponent have no scoring policy yet."""

    def __init__(self, week: int, opponent_id: str, condition: str):
        self.week = week
        self.opponent_id = opponent_id
        self.condition = condition
        super().__init__(
            f'Week {week}: scoring against a {condition} opponent ({opponent_id}) is not implemented'
        )


class LeagueDecorationError(BowlstatsError):
    """Raised after a decoration pass that left some games unscored."""

    def __init__(self, errors: List[FrameNotationError]):
        self.errors = errors
        lines = '\n'.join(f'  - {e}' for e in errors)
        super().__init__(f'{len(errors)} game(s) had malformed frame notation:\n{lines}')

"""Frame reconstruction from ball notation.

Notation, one list of tokens per frame:
    X       strike (first ball of frames 1-9, any fresh rack in frame 10)
    /       spare (10 minus the previous ball of the frame)
    F, -    foul, gutter (0 pins)
    7       pins knocked down
    8S      pins knocked down, leaving a split

Scoring is done in two passes: every ball is resolved to a pin count first,
then the balls are accumulated with forward lookahead for strike and spare
bonuses. Missing lookahead balls (an unfinished game) add nothing.
"""

import logging
from typing import List, Optional, Sequence

from .constants import (
    CLEAN_GAME,
    DEFAULT_PARKING_LOT_THRESHOLD,
    FOUL,
    FRAMES_PER_GAME,
    GUTTER,
    GUTTER_SPARE,
    HUNG,
    PARKING_LOT,
    PERFECT_GAME,
    PERFECT_GAME_STRIKES,
    PINS_PER_RACK,
    SPARE,
    SPLIT,
    SPLIT_PICKED_UP,
    STAR,
    STRIKE,
    TURKEY,
    TURKEY_STRIKES,
)
from .exceptions import FrameNotationError
from .models import Ball, Frame, LeagueTeamScore, PlayerGameScore

logger = logging.getLogger('bowlstats.frames')


def parse_ball(token: str, frame_number: int, ball: int, previous: Optional[Ball] = None) -> Ball:
    """
    Resolve one notation token to (pins, label).

    Args:
        token: Notation token
        frame_number: 1-based frame number
        ball: 0-based ball index within the frame
        previous: Previous ball of the same frame, if any

    Raises:
        FrameNotationError: If the token is not valid at this position
    """
    tenth = frame_number == FRAMES_PER_GAME
    fresh_rack = previous is None or (tenth and previous[1] in (STRIKE, SPARE))
    token = token.strip().upper()

    if token == STRIKE or token == str(PINS_PER_RACK):
        if fresh_rack:
            return (PINS_PER_RACK, STRIKE)
        if token == STRIKE:
            raise FrameNotationError(frame_number, token, f'strike on ball {ball + 1} in')
    if token in (FOUL, GUTTER):
        return (0, token)
    if token == SPARE:
        if fresh_rack:
            raise FrameNotationError(frame_number, token, f'spare on a fresh rack, ball {ball + 1} in')
        return (PINS_PER_RACK - previous[0], SPARE)
    if token.endswith(SPLIT) and token[:-1].isdigit():
        if not fresh_rack:
            raise FrameNotationError(frame_number, token, f'split on ball {ball + 1} in')
        return (_pin_count(token[:-1], frame_number, token), SPLIT)
    if token.isdigit():
        pins = _pin_count(token, frame_number, token)
        if not fresh_rack and previous[0] + pins > PINS_PER_RACK:
            raise FrameNotationError(frame_number, token, f'more than 10 pins on the rack, ball {ball + 1} in')
        # A numeral that clears the rack left by the previous ball is a spare
        if not fresh_rack and previous[0] + pins == PINS_PER_RACK:
            return (pins, SPARE)
        return (pins, None)
    raise FrameNotationError(frame_number, token)


def _pin_count(numeral: str, frame_number: int, token: str) -> int:
    pins = int(numeral)
    if pins > PINS_PER_RACK:
        raise FrameNotationError(frame_number, token, 'pin count out of range')
    return pins


def parse_frames(in_frames: Sequence[Sequence[str]]) -> List[Frame]:
    """
    Build Frame objects from raw notation, resolving pins for every ball.

    Cumulative scores and attributes are not set here.
    """
    if len(in_frames) > FRAMES_PER_GAME:
        raise FrameNotationError(len(in_frames), '', 'more than 10 frames, last frame is')

    frames = []
    for index, tokens in enumerate(in_frames):
        number = index + 1
        max_balls = 3 if number == FRAMES_PER_GAME else 2
        if not tokens:
            raise FrameNotationError(number, '', 'no balls in')
        if len(tokens) > max_balls:
            raise FrameNotationError(number, ','.join(tokens), 'too many balls in')

        frame = Frame(number=number)
        for ball, token in enumerate(tokens):
            previous = frame.ball_scores[-1] if frame.ball_scores else None
            frame.ball_scores.append(parse_ball(str(token), number, ball, previous))

        if number < FRAMES_PER_GAME and sum(pins for pins, _ in frame.ball_scores) > PINS_PER_RACK:
            raise FrameNotationError(number, ','.join(tokens), 'more than 10 pins in')
        # The tenth only earns a third ball with a strike or spare
        if len(frame.ball_scores) == 3 and frame.label(0) != STRIKE and frame.label(1) != SPARE:
            raise FrameNotationError(number, ','.join(tokens), 'third ball after an open frame in')
        frames.append(frame)
    return frames


def _bonus_pins(frames: Sequence[Frame], index: int, count: int) -> int:
    """Sum the pins of the next `count` balls after frame `index`."""
    bonus = 0
    remaining = count
    for frame in frames[index + 1:]:
        for pins, _label in frame.ball_scores:
            if remaining == 0:
                return bonus
            bonus += pins
            remaining -= 1
    return bonus


def accumulate_frame_scores(frames: Sequence[Frame]) -> int:
    """
    Accumulate pins and strike/spare bonuses, setting each frame's cumulative score.

    Returns:
        Total score through the last frame
    """
    total = 0
    for index, frame in enumerate(frames):
        for pins, label in frame.ball_scores:
            total += pins
            if frame.number < FRAMES_PER_GAME:
                if label == STRIKE:
                    total += _bonus_pins(frames, index, 2)
                elif label == SPARE:
                    total += _bonus_pins(frames, index, 1)
        frame.cumulative_score = total
    return total


def _tag_spare_after(frame: Frame, leave_label: Optional[str]) -> None:
    if leave_label == GUTTER:
        frame.attributes.append(GUTTER_SPARE)
    elif leave_label == SPLIT:
        frame.attributes.append(SPLIT_PICKED_UP)


def tag_frames(frames: Sequence[Frame], parking_lot_threshold: int = DEFAULT_PARKING_LOT_THRESHOLD) -> None:
    """Add the single-player narrative attributes to already accumulated frames."""
    strikes_in_a_row = 0
    clean_game = True
    for frame in frames:
        # Counted per ball so streaks across the 9th/10th frames are seen
        for _pins, label in frame.ball_scores:
            strikes_in_a_row = strikes_in_a_row + 1 if label == STRIKE else 0
            if strikes_in_a_row == TURKEY_STRIKES:
                frame.attributes.append(TURKEY)
            elif strikes_in_a_row == PERFECT_GAME_STRIKES:
                frame.attributes.append(PERFECT_GAME)

        if frame.last_label not in (STRIKE, SPARE):
            clean_game = False

        if frame.label(1) == SPARE:
            _tag_spare_after(frame, frame.label(0))
        if frame.number == FRAMES_PER_GAME and frame.label(2) == SPARE:
            _tag_spare_after(frame, frame.label(1))

        if frame.number == FRAMES_PER_GAME:
            if clean_game:
                frame.attributes.append(CLEAN_GAME)
            if frame.cumulative_score < parking_lot_threshold:
                frame.attributes.append(PARKING_LOT)


def calculate_frame_scores(
    game: PlayerGameScore,
    parking_lot_threshold: int = DEFAULT_PARKING_LOT_THRESHOLD,
) -> int:
    """
    Reconstruct a game's frames from its raw notation.

    The game is left untouched if the notation is malformed. A scratch score
    already present on the game is kept; otherwise it is set from the frames.

    Returns:
        The accumulated score from the frames

    Raises:
        FrameNotationError: If any token is malformed
    """
    frames = parse_frames(game.in_frames)
    total = accumulate_frame_scores(frames)
    tag_frames(frames, parking_lot_threshold)

    game.frames = frames
    if not game.scratch_score:
        game.scratch_score = total
    elif game.scratch_score != total and len(frames) == FRAMES_PER_GAME:
        logger.debug(f'Supplied scratch score {game.scratch_score} differs from frames total {total}')
    return total


def set_cross_player_frame_attributes(team_score: LeagueTeamScore) -> None:
    """
    Tag Star frames (everyone struck) and Hung frames (all but one struck).

    A game is skipped when any non-blind player is missing frame data, or
    when fewer than two players bowled it.
    """
    game_count = max((len(ps.games) for ps in team_score.player_scores), default=0)
    for index in range(game_count):
        player_frames: List[List[Frame]] = []
        missing_frames = False
        for player_score in team_score.player_scores:
            if len(player_score.games) <= index:
                continue
            game = player_score.games[index]
            if game.blind or game.vacant:
                continue
            if len(game.frames) < FRAMES_PER_GAME:
                missing_frames = True
                break
            player_frames.append(game.frames)

        if missing_frames or len(player_frames) < 2:
            continue

        player_count = len(player_frames)
        for f in range(FRAMES_PER_GAME):
            frames = [pf[f] for pf in player_frames]
            strikes = sum(1 for frame in frames if frame.label(0) == STRIKE)
            if strikes == player_count:
                for frame in frames:
                    frame.attributes.append(STAR)
            elif strikes == player_count - 1:
                for frame in frames:
                    if frame.label(0) != STRIKE:
                        frame.attributes.append(HUNG)

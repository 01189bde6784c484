"""
Draft utility functions for the Rookie Draft Board

Provides pure helper functions for draft order calculation and board layout.
Nothing here reads configuration or global state: team count, round count and
mode are always passed in explicitly.
"""
import math
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from exceptions import ValidationException
from models.draft_pick import BoardSlot, DraftRound, PickRecord
from utils.logging import get_contextual_logger

logger = get_contextual_logger(__name__)


class DraftMode(str, Enum):
    """Direction rules for the draft order."""
    LINEAR = "linear"  # Same order every round
    SNAKE = "snake"    # Order reverses on even rounds


def coerce_mode(mode: Union[DraftMode, str]) -> DraftMode:
    """Turn a mode name into a DraftMode, rejecting unknown names."""
    try:
        return DraftMode(mode)
    except ValueError:
        raise ValidationException(f"Unknown draft mode: {mode!r}")


def _check_counts(pick_number: int, team_count: int) -> None:
    if team_count < 1:
        raise ValidationException(f"team_count must be at least 1 (got {team_count})")
    if pick_number < 1:
        raise ValidationException(f"pick_number must be at least 1 (got {pick_number})")


def calculate_pick_details(
    pick_number: int,
    team_count: int,
    mode: Union[DraftMode, str] = DraftMode.LINEAR
) -> Tuple[int, int]:
    """
    Calculate round number and the slot on the clock from an overall pick number.

    Args:
        pick_number: Overall pick number (1-based)
        team_count: Number of teams in the draft
        mode: DraftMode.LINEAR or DraftMode.SNAKE

    Returns:
        (round_num, team_slot): Round number and the 1-based team slot that owns
        the pick by default

    Raises:
        ValidationException: If pick_number or team_count is below 1

    Examples:
        >>> calculate_pick_details(13, 12, DraftMode.LINEAR)
        (2, 1)

        >>> calculate_pick_details(13, 12, DraftMode.SNAKE)
        (2, 12)
    """
    _check_counts(pick_number, team_count)
    mode = coerce_mode(mode)

    round_num = math.ceil(pick_number / team_count)
    pick_in_round = pick_number - (round_num - 1) * team_count

    if mode == DraftMode.SNAKE and round_num % 2 == 0:
        # Even rounds run backwards
        return round_num, team_count - pick_in_round + 1

    return round_num, pick_in_round


def team_on_clock(
    pick_number: int,
    team_count: int,
    mode: Union[DraftMode, str] = DraftMode.LINEAR
) -> int:
    """
    Get the team (1-based) that owns a pick under the default draft order.

    Trades are not considered here; see build_draft_board().

    Examples:
        >>> team_on_clock(11, 10, DraftMode.LINEAR)
        1

        >>> team_on_clock(24, 12, DraftMode.SNAKE)
        1
    """
    _, team_slot = calculate_pick_details(pick_number, team_count, mode)
    return team_slot


def calculate_overall_from_round_position(
    round_num: int,
    team_slot: int,
    team_count: int,
    mode: Union[DraftMode, str] = DraftMode.LINEAR
) -> int:
    """
    Calculate overall pick number from round and team slot.

    Inverse operation of calculate_pick_details().

    Examples:
        >>> calculate_overall_from_round_position(2, 12, 12, DraftMode.SNAKE)
        13
    """
    if round_num < 1:
        raise ValidationException(f"round_num must be at least 1 (got {round_num})")
    if not 1 <= team_slot <= team_count:
        raise ValidationException(f"team_slot must be between 1 and {team_count} (got {team_slot})")
    mode = coerce_mode(mode)

    picks_before_round = (round_num - 1) * team_count
    if mode == DraftMode.SNAKE and round_num % 2 == 0:
        return picks_before_round + (team_count + 1 - team_slot)
    return picks_before_round + team_slot


def total_picks(team_count: int, round_count: int) -> int:
    """Total number of picks in a draft."""
    return team_count * round_count


def is_draft_complete(pick_counter: int, team_count: int, round_count: int) -> bool:
    """
    Check if draft is complete.

    Args:
        pick_counter: The pick currently on the clock
        team_count: Number of teams
        round_count: Number of rounds

    Returns:
        True once every pick has been made
    """
    return pick_counter > total_picks(team_count, round_count)


def format_pick_display(pick_number: int, team_count: int) -> str:
    """
    Format pick number for display.

    Examples:
        >>> format_pick_display(13, 12)
        'Round 2, Pick 1 (Overall #13)'
    """
    _check_counts(pick_number, team_count)
    round_num = math.ceil(pick_number / team_count)
    pick_in_round = pick_number - (round_num - 1) * team_count
    return f"Round {round_num}, Pick {pick_in_round} (Overall #{pick_number})"


def build_draft_board(
    team_count: int,
    round_count: int,
    mode: Union[DraftMode, str] = DraftMode.LINEAR,
    traded_picks: Optional[Mapping[int, int]] = None,
    picks: Optional[Iterable[PickRecord]] = None,
    current_pick: Optional[int] = None
) -> List[DraftRound]:
    """
    Lay out the full draft board.

    Each slot's owner is the traded owner when the pick appears in
    traded_picks, otherwise the default team_on_clock() owner. The board is
    rebuilt on every call so it always reflects the latest trades and picks.

    Args:
        team_count: Number of teams
        round_count: Number of rounds
        mode: Draft mode
        traded_picks: Mapping of pick number to the team now owning it
        picks: Ledger records used to fill in selected players
        current_pick: Pick number to flag as active

    Returns:
        One DraftRound per round, picks in draft order
    """
    if team_count < 1:
        raise ValidationException(f"team_count must be at least 1 (got {team_count})")
    if round_count < 1:
        raise ValidationException(f"round_count must be at least 1 (got {round_count})")

    mode = coerce_mode(mode)
    traded_picks = traded_picks or {}
    selections: Dict[int, PickRecord] = {record.pick_number: record for record in (picks or [])}

    rounds: List[DraftRound] = []
    for round_num in range(1, round_count + 1):
        slots = []
        for pick_in_round in range(1, team_count + 1):
            pick_number = (round_num - 1) * team_count + pick_in_round
            original_team_id = team_on_clock(pick_number, team_count, mode)
            record = selections.get(pick_number)
            slots.append(BoardSlot(
                round=round_num,
                pick_number=pick_number,
                position=pick_in_round,
                original_team_id=original_team_id,
                owning_team_id=traded_picks.get(pick_number, original_team_id),
                player=record.player if record else None,
                is_active=pick_number == current_pick
            ))
        rounds.append(DraftRound(round=round_num, picks=slots))

    logger.debug(
        f"Built draft board: teams={team_count}, rounds={round_count}, "
        f"mode={mode.value}, traded={len(traded_picks)}, selected={len(selections)}"
    )
    return rounds

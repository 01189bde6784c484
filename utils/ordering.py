"""
Rank ordering helpers for the Rookie Draft Board

Pure functions over lists of players. They never mutate their inputs; each
returns new Player instances with updated order values so the store can
validate the whole result before committing it.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from exceptions import InvariantViolation, ValidationException
from models.player import Player, ReorderItem

logger = logging.getLogger(f'{__name__}.Ordering')

SORT_FIELDS = {'rank', 'name', 'position', 'school', 'grade', 'tier'}


def check_dense_order(players: Iterable[Player]) -> None:
    """
    Verify that player orders are exactly {1..N}.

    Raises:
        InvariantViolation: On duplicates or gaps
    """
    orders = [p.order for p in players]
    expected = set(range(1, len(orders) + 1))
    if len(set(orders)) != len(orders):
        duplicates = sorted({o for o in orders if orders.count(o) > 1})
        raise InvariantViolation(f"Duplicate board orders: {duplicates}")
    if set(orders) != expected:
        missing = sorted(expected - set(orders))
        extra = sorted(set(orders) - expected)
        raise InvariantViolation(f"Board orders are not dense (missing={missing}, out_of_range={extra})")


def apply_reorder(players: Sequence[Player], requests: Sequence[ReorderItem]) -> List[Player]:
    """
    Apply {id, order} requests to a set of players.

    Requested ids get the requested order; everyone else keeps theirs. No gap
    closing happens here, so a full reorder must submit a full permutation.
    Requests for unknown ids are skipped with a warning.

    Args:
        players: Current players
        requests: Desired orders

    Returns:
        New list of players (sorted by order)

    Raises:
        ValidationException: If a requested order is below 1
        InvariantViolation: If the request repeats a target order or the
            result would not be a dense 1..N ordering
    """
    by_id: Dict[int, Player] = {p.id: p for p in players}

    seen_orders = set()
    for request in requests:
        if request.order < 1:
            raise ValidationException(f"Order must be at least 1 (got {request.order} for player {request.id})")
        if request.order in seen_orders:
            raise InvariantViolation(f"Order {request.order} requested for more than one player")
        seen_orders.add(request.order)

    updated = dict(by_id)
    for request in requests:
        player = by_id.get(request.id)
        if player is None:
            logger.warning(f"Player {request.id} not on board, skipping reorder request")
            continue
        updated[player.id] = player.model_copy(update={'order': request.order})

    result = sorted(updated.values(), key=lambda p: p.order)
    check_dense_order(result)
    return result


def renumber_after_delete(players: Sequence[Player], deleted_order: int) -> List[Player]:
    """
    Close the gap left by a deleted player.

    Every player ranked below the deleted one moves up by one; players ranked
    above it are unchanged.

    Args:
        players: Remaining players (the deleted one already removed)
        deleted_order: Order the deleted player held

    Returns:
        New list of players (sorted by order)
    """
    result = []
    for player in players:
        if player.order > deleted_order:
            result.append(player.model_copy(update={'order': player.order - 1}))
        else:
            result.append(player)
    return sorted(result, key=lambda p: p.order)


def insert_at_order(players: Sequence[Player], order: int) -> List[Player]:
    """
    Make room for a player inserted at ``order``.

    Players at or after the insertion point shift down by one.

    Raises:
        ValidationException: If order is outside 1..N+1
    """
    if not 1 <= order <= len(players) + 1:
        raise ValidationException(f"Order must be between 1 and {len(players) + 1} (got {order})")

    result = []
    for player in players:
        if player.order >= order:
            result.append(player.model_copy(update={'order': player.order + 1}))
        else:
            result.append(player)
    return sorted(result, key=lambda p: p.order)


def move_player(players: Sequence[Player], player_id: int, new_order: int) -> List[ReorderItem]:
    """
    Build the full permutation for moving one player to a new rank.

    This is what a drag-and-drop gesture boils down to: the caller computes
    the complete order locally and submits it through apply_reorder().

    Raises:
        ValidationException: If the player is missing or new_order is out of range
    """
    ranked = sorted(players, key=lambda p: p.order)
    index = next((i for i, p in enumerate(ranked) if p.id == player_id), None)
    if index is None:
        raise ValidationException(f"Player {player_id} is not on the board")
    if not 1 <= new_order <= len(ranked):
        raise ValidationException(f"Order must be between 1 and {len(ranked)} (got {new_order})")

    moving = ranked.pop(index)
    ranked.insert(new_order - 1, moving)
    return [ReorderItem(id=p.id, order=rank) for rank, p in enumerate(ranked, start=1)]


@dataclass
class FilterOptions:
    """Board filters. 'all' disables a filter."""
    position: str = 'all'
    tier: str = 'all'
    search: str = ''


@dataclass
class SortOption:
    """Board sort. Grade sorts best-first for 'asc'."""
    field: str = 'rank'
    direction: str = 'asc'


def filter_and_sort_players(
    players: Iterable[Player],
    filters: Optional[FilterOptions] = None,
    sort: Optional[SortOption] = None
) -> List[Player]:
    """
    Apply board filters and sorting for display.

    Raises:
        ValidationException: For an unknown sort field/direction or a
            non-numeric tier filter
    """
    filters = filters or FilterOptions()
    sort = sort or SortOption()

    if sort.field not in SORT_FIELDS:
        raise ValidationException(f"Unknown sort field: {sort.field}")
    if sort.direction not in ('asc', 'desc'):
        raise ValidationException(f"Unknown sort direction: {sort.direction}")

    result = list(players)

    if filters.position and filters.position != 'all':
        position = filters.position.upper()
        result = [p for p in result if p.position == position]

    if filters.tier and filters.tier != 'all':
        try:
            tier = int(filters.tier)
        except ValueError:
            raise ValidationException(f"Invalid tier filter: {filters.tier}")
        result = [p for p in result if p.tier == tier]

    if filters.search:
        needle = filters.search.lower()
        result = [p for p in result if needle in p.name.lower() or needle in p.school.lower()]

    if sort.field == 'rank':
        result.sort(key=lambda p: p.order)
    elif sort.field == 'grade':
        # Highest grade first
        result.sort(key=lambda p: p.grade, reverse=True)
    elif sort.field == 'tier':
        result.sort(key=lambda p: p.tier)
    else:
        result.sort(key=lambda p: str(getattr(p, sort.field)).lower())

    if sort.direction == 'desc' and sort.field != 'grade':
        result.reverse()

    return result

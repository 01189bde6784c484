"""
Player service for the Rookie Draft Board API client side

Talks to the board's /players endpoints and tracks which operations are in
flight so a front end can show saving/loading state.
"""
import logging
from collections import Counter
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from api.client import APIClient
from exceptions import APIException, PlayerNotFoundError
from models.player import Player, PlayerUpdate, ReorderItem
from services.base_service import BaseService
from utils.ordering import FilterOptions, SortOption, filter_and_sort_players, move_player

logger = logging.getLogger(f'{__name__}.PlayerService')


class PlayerService(BaseService[Player]):
    """
    Service for board player operations over HTTP.

    Features:
    - List with server-side filter/sort parameters
    - Add, partial update, delete
    - Full-permutation reorder and single-player moves
    - CSV export download
    - Per-operation in-flight status
    """

    def __init__(self, client: Optional[APIClient] = None):
        """Initialize player service."""
        super().__init__(Player, 'players', client=client)
        self._in_flight: Counter = Counter()
        logger.debug("PlayerService initialized")

    # In-flight tracking

    @asynccontextmanager
    async def _track(self, operation: str):
        self._in_flight[operation] += 1
        try:
            yield
        finally:
            self._in_flight[operation] -= 1
            if self._in_flight[operation] <= 0:
                del self._in_flight[operation]

    def is_pending(self, operation: Optional[str] = None) -> bool:
        """
        Check whether an operation (or any operation) is in flight.

        Args:
            operation: Operation name such as 'list', 'update', 'reorder'; None checks all
        """
        if operation is None:
            return bool(self._in_flight)
        return self._in_flight.get(operation, 0) > 0

    @property
    def pending_operations(self) -> List[str]:
        return sorted(self._in_flight)

    # Queries

    async def list_players(
        self,
        filters: Optional[FilterOptions] = None,
        sort: Optional[SortOption] = None
    ) -> List[Player]:
        """
        Get board players, optionally filtered and sorted by the server.

        Returns:
            Players in the order returned by the server
        """
        params = []
        if filters:
            if filters.position and filters.position != 'all':
                params.append(('position', filters.position))
            if filters.tier and str(filters.tier) != 'all':
                params.append(('tier', str(filters.tier)))
            if filters.search:
                params.append(('search', filters.search))
        if sort:
            params.extend([('sort', sort.field), ('direction', sort.direction)])

        async with self._track('list'):
            return await self.get_all_items(params=params or None)

    async def get_player(self, player_id: int) -> Optional[Player]:
        """
        Get player by ID.

        Returns:
            Player instance or None if not found
        """
        async with self._track('get'):
            return await self.get_by_id(player_id)

    # Mutations

    async def add_player(self, data: Mapping[str, Any]) -> Optional[Player]:
        """Create a player; an 'order' field inserts it at that rank."""
        async with self._track('add'):
            player = await self.create(dict(data))
        if player:
            logger.info(f"Added player {player.id} ({player.name}) at rank {player.order}")
        return player

    async def update_player(self, player_id: int, changes: Union[PlayerUpdate, Mapping[str, Any]]) -> Player:
        """
        Send a partial update.

        Raises:
            PlayerNotFoundError: If the server has no such player
        """
        payload = changes.changes() if isinstance(changes, PlayerUpdate) else dict(changes)
        async with self._track('update'):
            player = await self.patch(player_id, payload)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} not found")
        return player

    async def delete_player(self, player_id: int) -> bool:
        """Delete a player; False if the server did not have it."""
        async with self._track('delete'):
            return await self.delete(player_id)

    async def reorder_players(self, items: Sequence[Union[ReorderItem, Mapping[str, Any]]]) -> List[Player]:
        """
        Submit an {id, order} reorder request.

        Returns:
            Players in their new rank order
        """
        payload = [
            item.model_dump() if isinstance(item, ReorderItem) else ReorderItem.model_validate(item).model_dump()
            for item in items
        ]

        async with self._track('reorder'):
            try:
                client = await self.get_client()
                data = await client.post(f'{self.endpoint}/reorder', payload)
            except APIException:
                logger.error(f"API error reordering {len(payload)} players")
                raise

        players, _ = self._extract_items_and_count_from_response(data or [])
        return [Player.from_api_data(p) for p in players]

    async def move_player(self, player_id: int, new_order: int) -> List[Player]:
        """
        Move one player to a new rank (drag and drop).

        The full permutation is computed from the current board and submitted
        as a single reorder request.

        Raises:
            ValidationException: If the player is missing or new_order is out of range
        """
        current = await self.list_players()
        items = move_player(current, player_id, new_order)
        logger.debug(f"Moving player {player_id} to rank {new_order}")
        return await self.reorder_players(items)

    async def export_csv(self) -> str:
        """Download the board as CSV text."""
        async with self._track('export'):
            client = await self.get_client()
            data = await client.get(f'{self.endpoint}/export')
        return data if isinstance(data, str) else ""

    # Local helpers

    @staticmethod
    def filter_players(
        players: List[Player],
        filters: Optional[FilterOptions] = None,
        sort: Optional[SortOption] = None
    ) -> List[Player]:
        """Apply filter/sort to an already fetched list."""
        return filter_and_sort_players(players, filters, sort)

    @staticmethod
    def group_by_tier(players: List[Player]) -> Dict[int, List[Player]]:
        """Players grouped by tier, each group in rank order."""
        grouped: Dict[int, List[Player]] = {}
        for player in sorted(players, key=lambda p: p.order):
            grouped.setdefault(player.tier, []).append(player)
        return grouped


# Global service instance
player_service = PlayerService()

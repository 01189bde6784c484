"""
Player store for the Rookie Draft Board

In-memory collection of prospects keyed by id with a dense 1..N rank order.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from config import get_config
from constants import SAMPLE_PROSPECTS
from exceptions import PlayerNotFoundError, ValidationException
from models.player import Player, PlayerCreate, PlayerUpdate, ReorderItem
from utils.ordering import apply_reorder, check_dense_order, insert_at_order, renumber_after_delete

logger = logging.getLogger(f'{__name__}.PlayerStore')


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item.get('loc', ())) or "value"
        parts.append(f"{field}: {item.get('msg')}")
    return "; ".join(parts)


class PlayerStore:
    """
    In-memory player store.

    Every mutation builds the complete new player set first and only swaps it
    in once it validates, so a failed call leaves the store untouched.

    Features:
    - List players by rank
    - Add (append or insert at a rank)
    - Partial update
    - Delete with renumbering
    - Reorder by {id, order} permutation
    """

    def __init__(self):
        """Initialize an empty store."""
        self._players: Dict[int, Player] = {}
        self._next_id = 1
        logger.debug("PlayerStore initialized")

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: int) -> bool:
        return player_id in self._players

    def _commit(self, players: Iterable[Player]) -> None:
        self._players = {p.id: p for p in players}

    def list_players(self) -> List[Player]:
        """All players sorted by rank ascending."""
        return sorted(self._players.values(), key=lambda p: p.order)

    def get_player(self, player_id: int) -> Player:
        """
        Get player by id.

        Raises:
            PlayerNotFoundError: If no player has this id
        """
        player = self._players.get(player_id)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} not found")
        return player

    def find_player(self, player_id: int) -> Optional[Player]:
        """Get player by id, or None."""
        return self._players.get(player_id)

    def create_player(self, data: Union[PlayerCreate, Mapping[str, Any]]) -> Player:
        """
        Add a player.

        Without an order the player goes to the bottom of the board (max + 1).
        With an order the player is inserted there and everyone at or below
        that rank moves down one.

        Args:
            data: PlayerCreate or a dict of its fields

        Returns:
            The stored player

        Raises:
            ValidationException: For missing or out-of-range fields
        """
        if not isinstance(data, PlayerCreate):
            config = get_config()
            data = {'grade': config.default_grade, 'tier': config.default_tier, **dict(data)}

        try:
            payload = data if isinstance(data, PlayerCreate) else PlayerCreate.model_validate(data)
        except ValidationError as e:
            raise ValidationException(_validation_message(e))

        current = self.list_players()
        if payload.order is None:
            order = max((p.order for p in current), default=0) + 1
            others = current
        else:
            order = payload.order
            others = insert_at_order(current, order)

        try:
            player = Player(id=self._next_id, **payload.model_dump(exclude={'order'}), order=order)
        except ValidationError as e:
            raise ValidationException(_validation_message(e))

        new_players = others + [player]
        check_dense_order(new_players)
        self._commit(new_players)
        self._next_id += 1

        logger.info(f"Created player {player.id} ({player.name}) at rank {player.order}")
        return player

    def update_player(self, player_id: int, data: Union[PlayerUpdate, Mapping[str, Any]]) -> Player:
        """
        Merge supplied fields into an existing player.

        Raises:
            PlayerNotFoundError: If no player has this id
            ValidationException: If the merged record is invalid (nothing is changed)
        """
        player = self.get_player(player_id)

        try:
            update = data if isinstance(data, PlayerUpdate) else PlayerUpdate.model_validate(dict(data))
            changes = update.changes()
            updated = Player.model_validate({**player.model_dump(), **changes})
        except ValidationError as e:
            raise ValidationException(_validation_message(e))

        self._players[player_id] = updated
        logger.info(f"Updated player {player_id}: {sorted(changes)}")
        return updated

    def delete_player(self, player_id: int) -> Player:
        """
        Remove a player and close the rank gap.

        Returns:
            The removed player

        Raises:
            PlayerNotFoundError: If no player has this id
        """
        player = self.get_player(player_id)
        remaining = [p for p in self._players.values() if p.id != player_id]
        self._commit(renumber_after_delete(remaining, player.order))

        logger.info(f"Deleted player {player_id} ({player.name}) from rank {player.order}")
        return player

    def reorder_players(self, requests: Iterable[Union[ReorderItem, Mapping[str, Any]]]) -> List[Player]:
        """
        Apply an {id, order} reorder request.

        Returns:
            Players sorted by their new rank

        Raises:
            ValidationException: For malformed entries or orders below 1
            InvariantViolation: If the result would not be a dense 1..N ordering
        """
        try:
            items = [r if isinstance(r, ReorderItem) else ReorderItem.model_validate(r) for r in requests]
        except ValidationError as e:
            raise ValidationException(_validation_message(e))

        result = apply_reorder(self.list_players(), items)
        self._commit(result)
        logger.info(f"Reordered {len(items)} players")
        return result

    def replace_all(self, players: Iterable[Union[PlayerCreate, Mapping[str, Any]]]) -> List[Player]:
        """
        Replace the whole board (used by league import).

        Players are appended in the given order; ids restart at 1. The current
        board is kept if any row fails validation.
        """
        staging = PlayerStore()
        for data in players:
            if isinstance(data, Mapping):
                data = {k: v for k, v in data.items() if k not in ('id', 'order')}
            else:
                data = data.model_copy(update={'order': None})
            staging.create_player(data)

        self._players = staging._players
        self._next_id = staging._next_id
        logger.info(f"Replaced board with {len(self._players)} players")
        return self.list_players()

    def seed_sample_data(self) -> List[Player]:
        """Load the bundled sample prospects into an empty store."""
        if self._players:
            logger.debug("Store already has players, skipping sample data")
            return self.list_players()

        for prospect in SAMPLE_PROSPECTS:
            self.create_player(prospect)
        logger.info(f"Seeded {len(SAMPLE_PROSPECTS)} sample players")
        return self.list_players()

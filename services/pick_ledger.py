"""
Pick ledger for the live draft

Append-only history of selections with LIFO undo. The ledger also owns the
pick counter: the overall pick number currently on the clock.
"""
import itertools
import logging
import math
from typing import Iterable, List, Optional, Set

from exceptions import DraftException, ValidationException
from models.draft_pick import PickRecord
from models.player import Player

logger = logging.getLogger(f'{__name__}.PickLedger')


class PickLedger:
    """
    Ordered list of drafted (player, team, pick number) records.

    A player may appear in at most one record at a time; undoing the record
    makes the player available again.
    """

    def __init__(self, team_count: int, start_pick: int = 1):
        """
        Initialize pick ledger.

        Args:
            team_count: Number of teams (used to derive each pick's round)
            start_pick: First pick number
        """
        if team_count < 1:
            raise ValidationException(f"team_count must be at least 1 (got {team_count})")
        self.team_count = team_count
        self._history: List[PickRecord] = []
        self._ids = itertools.count(1)
        self._pick_counter = start_pick

    @property
    def pick_counter(self) -> int:
        """Overall pick number currently on the clock."""
        return self._pick_counter

    @property
    def history(self) -> List[PickRecord]:
        """Copy of all records in the order they were made."""
        return list(self._history)

    @property
    def last_pick(self) -> Optional[PickRecord]:
        return self._history[-1] if self._history else None

    @property
    def drafted_player_ids(self) -> Set[int]:
        return {record.player_id for record in self._history}

    @property
    def pick_numbers(self) -> Set[int]:
        return {record.pick_number for record in self._history}

    def __len__(self) -> int:
        return len(self._history)

    def is_drafted(self, player_id: int) -> bool:
        """Check if a player has already been taken."""
        return player_id in self.drafted_player_ids

    def get_pick(self, pick_number: int) -> Optional[PickRecord]:
        """Record made at this overall pick, or None."""
        return next((r for r in self._history if r.pick_number == pick_number), None)

    def picks_for_team(self, team_id: int) -> List[PickRecord]:
        """Team's selections sorted by pick number."""
        return sorted(
            (r for r in self._history if r.team_id == team_id),
            key=lambda r: r.pick_number
        )

    def draft(self, player: Player, team_id: int, pick_number: Optional[int] = None) -> PickRecord:
        """
        Record a selection at the current pick and advance the counter.

        Args:
            player: Player being drafted
            team_id: Team making the pick
            pick_number: Expected current pick (optional guard against stale callers)

        Returns:
            The new PickRecord

        Raises:
            DraftException: If the player is already drafted or pick_number is not the current pick
        """
        if pick_number is not None and pick_number != self._pick_counter:
            raise DraftException(f"Pick #{pick_number} is not on the clock (current pick is #{self._pick_counter})")
        if self.is_drafted(player.id):
            raise DraftException(f"{player.name} has already been drafted")

        current = self._pick_counter
        record = PickRecord(
            id=next(self._ids),
            player=player,
            team_id=team_id,
            pick_number=current,
            round=math.ceil(current / self.team_count)
        )
        self._history.append(record)
        self._pick_counter = current + 1

        logger.info(f"Pick #{current}: team {team_id} drafted {player.name}")
        return record

    def undo_last(self) -> PickRecord:
        """
        Remove the most recent record and put its pick back on the clock.

        Returns:
            The removed record

        Raises:
            DraftException: If there are no picks to undo
        """
        if not self._history:
            raise DraftException("No picks to undo")

        record = self._history.pop()
        # Imported histories can skip pick numbers
        self._pick_counter = record.pick_number

        logger.info(f"Undid pick #{record.pick_number} ({record.player.name})")
        return record

    def load(self, records: Iterable[PickRecord]) -> None:
        """
        Replace history with existing records (e.g. an imported draft).

        The counter moves to the pick after the highest recorded pick.

        Raises:
            DraftException: If a player or pick number repeats
        """
        records = sorted(records, key=lambda r: r.pick_number)
        player_ids = [r.player_id for r in records]
        pick_numbers = [r.pick_number for r in records]
        if len(set(player_ids)) != len(player_ids):
            raise DraftException("Imported picks draft the same player more than once")
        if len(set(pick_numbers)) != len(pick_numbers):
            raise DraftException("Imported picks repeat a pick number")

        self._history = list(records)
        self._ids = itertools.count(max((r.id for r in records), default=0) + 1)
        self._pick_counter = (pick_numbers[-1] + 1) if pick_numbers else 1
        logger.info(f"Loaded {len(records)} picks, now on pick #{self._pick_counter}")

    def reset(self, team_count: Optional[int] = None) -> None:
        """Clear all picks and restart at pick 1."""
        if team_count is not None:
            if team_count < 1:
                raise ValidationException(f"team_count must be at least 1 (got {team_count})")
            self.team_count = team_count
        self._history = []
        self._ids = itertools.count(1)
        self._pick_counter = 1
        logger.info("Pick ledger reset")

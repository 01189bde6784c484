"""
Trade ledger for the live draft

Maps pick numbers to the team that now holds them, overriding the default
draft-order owner. Entries are independent and the last write wins.
"""
import logging
from typing import Dict, Iterable, List, Optional

from exceptions import TradeException, ValidationException
from models.trade import PickTrade

logger = logging.getLogger(f'{__name__}.TradeLedger')


class TradeValidationResult:
    """Result of checking a proposed trade against the ledger rules."""

    def __init__(self):
        self.errors: List[str] = []

    @property
    def is_legal(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)


class TradeLedger:
    """
    Pick ownership overrides plus the trade history that produced them.

    A trade is validated as a whole before any ownership is written, so a
    rejected trade changes nothing.
    """

    def __init__(self, team_count: int, total_picks: Optional[int] = None):
        """
        Initialize trade ledger.

        Args:
            team_count: Number of teams (valid team ids are 1..team_count)
            total_picks: Highest valid pick number (None skips the range check)
        """
        if team_count < 1:
            raise ValidationException(f"team_count must be at least 1 (got {team_count})")
        self.team_count = team_count
        self.total_picks = total_picks
        self._owners: Dict[int, int] = {}
        self._history: List[PickTrade] = []

    @property
    def traded_picks(self) -> Dict[int, int]:
        """Copy of the pick number -> team id overrides."""
        return dict(self._owners)

    @property
    def history(self) -> List[PickTrade]:
        return list(self._history)

    def owner_of(self, pick_number: int) -> Optional[int]:
        """Traded owner of a pick, or None if it was never traded."""
        return self._owners.get(pick_number)

    def validate_trade(
        self,
        from_team: int,
        to_team: int,
        from_picks: List[int],
        to_picks: List[int],
        drafted_picks: Iterable[int] = ()
    ) -> TradeValidationResult:
        """Check trade preconditions without changing anything."""
        result = TradeValidationResult()
        drafted = set(drafted_picks)

        if not from_picks or not to_picks:
            result.add_error("You need to select picks from both teams to execute a trade")
        for team_id in (from_team, to_team):
            if not 1 <= team_id <= self.team_count:
                result.add_error(f"Team {team_id} is not in this draft")
        if from_team == to_team:
            result.add_error("A team cannot trade with itself")

        all_picks = list(from_picks) + list(to_picks)
        if len(set(all_picks)) != len(all_picks):
            result.add_error("A pick cannot appear more than once in a trade")
        for pick_number in all_picks:
            if pick_number < 1 or (self.total_picks is not None and pick_number > self.total_picks):
                result.add_error(f"Pick #{pick_number} is not in this draft")
            elif pick_number in drafted:
                result.add_error(f"Pick #{pick_number} has already been used")

        return result

    def trade(
        self,
        from_team: int,
        to_team: int,
        from_picks: List[int],
        to_picks: List[int],
        drafted_picks: Iterable[int] = ()
    ) -> PickTrade:
        """
        Swap picks between two teams.

        Every pick in from_picks now belongs to to_team and every pick in
        to_picks now belongs to from_team.

        Raises:
            TradeException: If any precondition fails (nothing is written)
        """
        validation = self.validate_trade(from_team, to_team, from_picks, to_picks, drafted_picks)
        if not validation.is_legal:
            raise TradeException("; ".join(validation.errors))

        for pick_number in from_picks:
            self._owners[pick_number] = to_team
        for pick_number in to_picks:
            self._owners[pick_number] = from_team

        trade = PickTrade(
            from_team_id=from_team,
            to_team_id=to_team,
            from_picks=list(from_picks),
            to_picks=list(to_picks)
        )
        self._history.append(trade)
        logger.info(f"Trade executed: {trade.description}")
        return trade

    def reset(self, team_count: Optional[int] = None, total_picks: Optional[int] = None) -> None:
        """Drop all trades, optionally resizing the draft."""
        if team_count is not None:
            if team_count < 1:
                raise ValidationException(f"team_count must be at least 1 (got {team_count})")
            self.team_count = team_count
        if total_picks is not None:
            self.total_picks = total_picks
        self._owners = {}
        self._history = []
        logger.info("Trade ledger reset")

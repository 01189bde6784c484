"""
Live draft service for the Rookie Draft Board

Runs one in-memory draft session: teams, settings, who is on the clock, the
pick ledger and the trade ledger. Players come from the PlayerStore; the
board view is rebuilt from scratch on every request.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from config import get_config
from exceptions import DraftException, TeamNotFoundError, ValidationException
from models.draft_pick import DraftRound, OwnedPick, PickRecord
from models.player import Player
from models.sleeper import LeagueImport
from models.team import Team
from models.trade import PickTrade
from services.pick_ledger import PickLedger
from services.player_store import PlayerStore
from services.trade_ledger import TradeLedger
from utils.draft_helpers import (
    DraftMode,
    build_draft_board,
    calculate_pick_details,
    coerce_mode,
    is_draft_complete,
    team_on_clock,
    total_picks,
)
from utils.ordering import FilterOptions, SortOption, filter_and_sort_players

logger = logging.getLogger(f'{__name__}.LiveDraftService')


class LiveDraftService:
    """
    Service for the live draft session.

    Features:
    - Draft settings (team count, rounds, linear/snake order)
    - On-the-clock team including traded picks
    - Draft a player / undo last pick
    - Pick trades between two teams
    - Draft board grid, team rosters and owned picks
    - Sleeper league import
    """

    def __init__(
        self,
        player_store: PlayerStore,
        team_count: Optional[int] = None,
        round_count: Optional[int] = None,
        mode: Optional[Union[DraftMode, str]] = None
    ):
        """
        Initialize live draft service.

        Args:
            player_store: Store that supplies draftable players
            team_count: Number of teams (defaults to config)
            round_count: Number of rounds (defaults to config)
            mode: Draft mode (defaults to config)
        """
        config = get_config()
        self.player_store = player_store
        self.team_count = config.draft_team_count if team_count is None else team_count
        self.round_count = config.draft_rounds if round_count is None else round_count
        self.mode = coerce_mode(config.draft_mode if mode is None else mode)

        if self.team_count < 1:
            raise ValidationException(f"team_count must be at least 1 (got {self.team_count})")
        if self.round_count < 1:
            raise ValidationException(f"round_count must be at least 1 (got {self.round_count})")

        self._teams: Dict[int, Team] = {i: Team.default(i) for i in range(1, self.team_count + 1)}
        self.pick_ledger = PickLedger(self.team_count)
        self.trade_ledger = TradeLedger(self.team_count, self.total_picks)
        self.league_id: Optional[str] = None

        logger.debug(
            f"LiveDraftService initialized: teams={self.team_count}, "
            f"rounds={self.round_count}, mode={self.mode.value}"
        )

    # Settings

    @property
    def total_picks(self) -> int:
        return total_picks(self.team_count, self.round_count)

    def configure(
        self,
        team_count: Optional[int] = None,
        round_count: Optional[int] = None,
        mode: Optional[Union[DraftMode, str]] = None
    ) -> Dict[str, Any]:
        """
        Change draft settings and restart the draft.

        Picks and trades are cleared. Team names are kept for ids that still
        exist; new slots get placeholder names.

        Raises:
            ValidationException: For non-positive counts or an unknown mode
        """
        new_team_count = self.team_count if team_count is None else team_count
        new_round_count = self.round_count if round_count is None else round_count
        new_mode = self.mode if mode is None else coerce_mode(mode)

        if new_team_count < 1:
            raise ValidationException(f"team_count must be at least 1 (got {new_team_count})")
        if new_round_count < 1:
            raise ValidationException(f"round_count must be at least 1 (got {new_round_count})")

        self.team_count = new_team_count
        self.round_count = new_round_count
        self.mode = new_mode
        self._teams = {
            i: self._teams.get(i) or Team.default(i)
            for i in range(1, new_team_count + 1)
        }
        self.pick_ledger.reset(team_count=new_team_count)
        self.trade_ledger.reset(team_count=new_team_count, total_picks=self.total_picks)

        logger.info(
            f"Draft configured: teams={self.team_count}, rounds={self.round_count}, mode={self.mode.value}"
        )
        return self.state()

    # Teams

    @property
    def teams(self) -> List[Team]:
        return [self._teams[i] for i in sorted(self._teams)]

    def get_team(self, team_id: int) -> Team:
        """
        Raises:
            TeamNotFoundError: If the team id is not in this draft
        """
        team = self._teams.get(team_id)
        if team is None:
            raise TeamNotFoundError(f"Team {team_id} not found")
        return team

    def rename_team(self, team_id: int, name: str) -> Team:
        """Change a team's display name."""
        team = self.get_team(team_id)
        try:
            updated = Team.model_validate({**team.model_dump(), 'name': name})
        except ValueError as e:
            raise ValidationException(str(e))
        self._teams[team_id] = updated
        logger.info(f"Renamed team {team_id} to {updated.name}")
        return updated

    # Clock

    @property
    def current_pick(self) -> int:
        return self.pick_ledger.pick_counter

    @property
    def current_round(self) -> int:
        round_num, _ = calculate_pick_details(self.current_pick, self.team_count, self.mode)
        return round_num

    @property
    def is_complete(self) -> bool:
        return is_draft_complete(self.current_pick, self.team_count, self.round_count)

    def owner_of_pick(self, pick_number: int) -> int:
        """Team holding a pick after trades."""
        traded_owner = self.trade_ledger.owner_of(pick_number)
        if traded_owner is not None:
            return traded_owner
        return team_on_clock(pick_number, self.team_count, self.mode)

    def team_on_clock(self) -> Optional[Team]:
        """Team entitled to the current pick, or None once the draft is over."""
        if self.is_complete:
            return None
        return self.get_team(self.owner_of_pick(self.current_pick))

    # Picks

    def draft_player(self, player_id: int) -> PickRecord:
        """
        Draft a player with the current pick.

        Raises:
            DraftException: If the draft is complete or the player is already taken
            PlayerNotFoundError: If the player is not on the board
        """
        if self.is_complete:
            raise DraftException("Draft is complete - all picks have been made")

        player = self.player_store.get_player(player_id)
        team_id = self.owner_of_pick(self.current_pick)
        return self.pick_ledger.draft(player, team_id, self.current_pick)

    def undo_last_pick(self) -> PickRecord:
        """
        Undo the most recent pick; the player becomes available again.

        Raises:
            DraftException: If no picks have been made
        """
        return self.pick_ledger.undo_last()

    def available_players(
        self,
        filters: Optional[FilterOptions] = None,
        sort: Optional[SortOption] = None
    ) -> List[Player]:
        """Board players not yet drafted."""
        drafted = self.pick_ledger.drafted_player_ids
        remaining = [p for p in self.player_store.list_players() if p.id not in drafted]
        return filter_and_sort_players(remaining, filters, sort)

    def team_picks(self, team_id: int) -> List[PickRecord]:
        """Players a team has drafted, in pick order."""
        self.get_team(team_id)
        return self.pick_ledger.picks_for_team(team_id)

    # Trades

    def trade_picks(
        self,
        from_team_id: int,
        to_team_id: int,
        from_picks: List[int],
        to_picks: List[int]
    ) -> PickTrade:
        """
        Trade picks between two teams.

        Raises:
            TradeException: If the trade breaks a precondition
        """
        return self.trade_ledger.trade(
            from_team_id,
            to_team_id,
            from_picks,
            to_picks,
            drafted_picks=self.pick_ledger.pick_numbers
        )

    # Board views

    def draft_board(self) -> List[DraftRound]:
        """Full board with owners after trades and selected players."""
        return build_draft_board(
            self.team_count,
            self.round_count,
            self.mode,
            traded_picks=self.trade_ledger.traded_picks,
            picks=self.pick_ledger.history,
            current_pick=self.current_pick
        )

    def team_owned_picks(self, team_id: int) -> List[OwnedPick]:
        """
        Picks a team holds: its own default picks it kept plus picks acquired in trades.
        """
        self.get_team(team_id)
        owned = []
        for draft_round in self.draft_board():
            for slot in draft_round.picks:
                if slot.owning_team_id != team_id:
                    continue
                owned.append(OwnedPick(
                    round=slot.round,
                    pick_number=slot.pick_number,
                    status='traded-for' if slot.is_traded else 'owned',
                    player=slot.player
                ))
        return owned

    def state(self) -> Dict[str, Any]:
        """Snapshot of the draft clock and settings."""
        on_clock = self.team_on_clock()
        last_pick = self.pick_ledger.last_pick
        return {
            'team_count': self.team_count,
            'round_count': self.round_count,
            'mode': self.mode.value,
            'total_picks': self.total_picks,
            'current_pick': self.current_pick,
            'current_round': None if self.is_complete else self.current_round,
            'team_on_clock': on_clock.model_dump() if on_clock else None,
            'picks_made': len(self.pick_ledger),
            'is_complete': self.is_complete,
            'last_pick': last_pick.model_dump() if last_pick else None,
            'league_id': self.league_id,
        }

    # Import

    def load_league(self, league: LeagueImport) -> Dict[str, Any]:
        """
        Replace board players, teams, rounds and pick history with a league import.

        The import is checked and staged in full before anything is replaced,
        so a rejected import leaves the current draft untouched.

        Raises:
            ValidationException: If the import has no teams, no rounds, or a pick
                that does not fit the league
            DraftException: If the pick history repeats a player or pick number
        """
        if not league.teams:
            raise ValidationException("League import has no teams")

        team_count = len(league.teams)
        team_ids = sorted(team.id for team in league.teams)
        if team_ids != list(range(1, team_count + 1)):
            raise ValidationException(f"League teams must be numbered 1..{team_count}")
        if league.rounds < 1:
            raise ValidationException(f"League import needs at least one round (got {league.rounds})")

        prospect_ids = {p.sleeper_player_id for p in league.prospects}
        last_pick = total_picks(team_count, league.rounds)
        for pick in league.draft_history:
            if pick.sleeper_player_id not in prospect_ids:
                raise ValidationException(f"Pick #{pick.pick_number} references an unknown player")
            if not 1 <= pick.team_id <= team_count:
                raise ValidationException(f"Pick #{pick.pick_number} belongs to unknown team {pick.team_id}")
            if not 1 <= pick.pick_number <= last_pick:
                raise ValidationException(f"Pick #{pick.pick_number} is outside the draft (1..{last_pick})")

        player_fields = [p.to_player_fields() for p in league.prospects]
        staged_players = PlayerStore().replace_all(player_fields)
        player_by_sleeper_id = {
            prospect.sleeper_player_id: player
            for prospect, player in zip(league.prospects, staged_players)
        }
        records = [
            PickRecord(
                id=index,
                player=player_by_sleeper_id[pick.sleeper_player_id],
                team_id=pick.team_id,
                pick_number=pick.pick_number,
                round=pick.round
            )
            for index, pick in enumerate(sorted(league.draft_history, key=lambda p: p.pick_number), start=1)
        ]
        PickLedger(team_count).load(records)

        stored = self.player_store.replace_all(player_fields)
        self.configure(team_count=team_count, round_count=league.rounds)
        self._teams = {team.id: team for team in league.teams}
        self.pick_ledger.load(records)
        self.league_id = league.league_id

        logger.info(
            f"Loaded league {league.league_id}: {team_count} teams, "
            f"{len(stored)} players, {len(records)} picks"
        )
        return self.state()

"""
Sleeper service for the Rookie Draft Board

Reads a league, its users/rosters and its rookie draft from the public Sleeper
API and maps them onto board teams, prospects and draft history.
"""
import logging
from typing import Any, Dict, List, Optional

from api.client import APIClient
from config import get_config
from constants import (
    SLEEPER_DEFAULT_GRADES,
    SLEEPER_DEFAULT_ROUNDS,
    SLEEPER_DEFAULT_TIER,
    SLEEPER_FALLBACK_GRADE,
    SLEEPER_POSITION_PRIORITY,
    SLEEPER_ROOKIE_POSITIONS,
)
from exceptions import APIException, NotFoundError
from models.sleeper import (
    ImportedPick,
    ImportedProspect,
    LeagueImport,
    SleeperDraft,
    SleeperDraftPick,
    SleeperLeague,
    SleeperPlayer,
    SleeperRoster,
    SleeperUser,
)
from models.team import Team
from utils.cache import ReferenceCache

logger = logging.getLogger(f'{__name__}.SleeperService')

PLAYERS_TIMEOUT = 60


def default_grade(position: str) -> int:
    """Starting grade for an imported rookie at this position."""
    return SLEEPER_DEFAULT_GRADES.get(position, SLEEPER_FALLBACK_GRADE)


class SleeperService:
    """
    Service for Sleeper league import.

    Features:
    - League, users, rosters, draft and draft pick lookups
    - NFL player dataset held in a ReferenceCache (fetched once)
    - Rookie filtering and ordering
    - Mapping to a LeagueImport for the live draft
    """

    def __init__(self, league_id: Optional[str] = None, client: Optional[APIClient] = None):
        """
        Initialize Sleeper service.

        Args:
            league_id: League to import (defaults to config)
            client: Optional API client override
        """
        config = get_config()
        self.league_id = league_id or config.sleeper_league_id
        self.client = client or APIClient(
            base_url=config.sleeper_api_url,
            api_token="",
            api_version=config.sleeper_api_version
        )
        self.players_cache: ReferenceCache[Dict[str, SleeperPlayer]] = ReferenceCache(
            self._load_players,
            name="sleeper_players",
            ttl=config.sleeper_players_cache_ttl
        )
        logger.debug(f"SleeperService initialized for league {self.league_id}")

    async def _get_required(self, endpoint: str, what: str) -> Any:
        data = await self.client.get(endpoint)
        if data is None:
            raise NotFoundError(f"Sleeper {what} not found")
        return data

    async def fetch_league(self, league_id: Optional[str] = None) -> SleeperLeague:
        """
        Raises:
            NotFoundError: If Sleeper does not know the league
            APIException: For HTTP errors
        """
        league_id = league_id or self.league_id
        data = await self._get_required(f"league/{league_id}", f"league {league_id}")
        return SleeperLeague.from_api_data(data)

    async def fetch_users(self, league_id: Optional[str] = None) -> List[SleeperUser]:
        data = await self.client.get(f"league/{league_id or self.league_id}/users")
        return [SleeperUser.from_api_data(u) for u in data or []]

    async def fetch_rosters(self, league_id: Optional[str] = None) -> List[SleeperRoster]:
        data = await self.client.get(f"league/{league_id or self.league_id}/rosters")
        return [SleeperRoster.from_api_data(r) for r in data or []]

    async def fetch_draft(self, draft_id: str) -> SleeperDraft:
        data = await self._get_required(f"draft/{draft_id}", f"draft {draft_id}")
        return SleeperDraft.from_api_data(data)

    async def fetch_draft_picks(self, draft_id: str) -> List[SleeperDraftPick]:
        data = await self.client.get(f"draft/{draft_id}/picks")
        return [SleeperDraftPick.from_api_data(p) for p in data or []]

    async def _load_players(self) -> Dict[str, SleeperPlayer]:
        data = await self.client.get("players/nfl", timeout=PLAYERS_TIMEOUT)
        if not isinstance(data, dict):
            raise APIException("Sleeper player dataset was empty or malformed")

        players = {}
        for player_id, raw in data.items():
            if not isinstance(raw, dict):
                continue
            players[player_id] = SleeperPlayer.from_api_data({'player_id': player_id, **raw})
        logger.info(f"Fetched {len(players)} Sleeper players")
        return players

    async def fetch_players(self) -> Dict[str, SleeperPlayer]:
        """NFL player dataset keyed by Sleeper player id (cached)."""
        return await self.players_cache.get()

    async def get_player(self, player_id: str) -> Optional[SleeperPlayer]:
        players = await self.fetch_players()
        return players.get(player_id)

    async def fetch_rookies(self) -> List[SleeperPlayer]:
        """
        First-year players at QB/RB/WR/TE.

        Returns:
            Rookies sorted by position priority, then by full name
        """
        players = await self.fetch_players()
        rookies = [
            p for p in players.values()
            if p.is_rookie and p.position in SLEEPER_ROOKIE_POSITIONS
        ]
        return sorted(
            rookies,
            key=lambda p: (SLEEPER_POSITION_PRIORITY.get(p.position, 999), p.full_name.lower())
        )

    @staticmethod
    def map_teams(
        rosters: List[SleeperRoster],
        users: List[SleeperUser],
        draft_order: Optional[Dict[str, int]] = None
    ) -> List[Team]:
        """
        Build board teams ordered by draft slot.

        A roster's slot comes from the draft order of its owner, falling back
        to its roster id. Teams are then numbered 1..N in slot order.
        """
        users_by_id = {u.user_id: u for u in users}
        draft_order = draft_order or {}

        def slot(roster: SleeperRoster) -> int:
            if roster.owner_id and roster.owner_id in draft_order:
                return draft_order[roster.owner_id]
            return roster.roster_id

        teams = []
        for team_id, roster in enumerate(sorted(rosters, key=lambda r: (slot(r), r.roster_id)), start=1):
            user = users_by_id.get(roster.owner_id) if roster.owner_id else None
            teams.append(Team(
                id=team_id,
                name=(user.display_name if user and user.display_name else f"Team {roster.roster_id}"),
                roster_id=roster.roster_id,
                user_id=roster.owner_id,
                avatar=user.avatar if user else None
            ))
        return teams

    @staticmethod
    def map_prospects(rookies: List[SleeperPlayer]) -> List[ImportedProspect]:
        return [
            ImportedProspect(
                sleeper_player_id=rookie.player_id,
                name=rookie.full_name,
                position=rookie.position,
                school=rookie.college or "Unknown",
                grade=default_grade(rookie.position),
                tier=SLEEPER_DEFAULT_TIER
            )
            for rookie in rookies
            if rookie.full_name
        ]

    @staticmethod
    def map_draft_history(
        picks: List[SleeperDraftPick],
        teams: List[Team],
        prospect_ids: set
    ) -> List[ImportedPick]:
        """Completed picks of imported prospects, with roster ids mapped to board team ids."""
        team_by_roster = {t.roster_id: t.id for t in teams if t.roster_id is not None}
        history = []
        for pick in sorted(picks, key=lambda p: p.pick_no):
            if pick.player_id not in prospect_ids:
                logger.debug(f"Skipping pick #{pick.pick_no}: player {pick.player_id} is not an imported rookie")
                continue
            team_id = team_by_roster.get(pick.roster_id)
            if team_id is None:
                logger.warning(f"Skipping pick #{pick.pick_no}: unknown roster {pick.roster_id}")
                continue
            history.append(ImportedPick(
                pick_number=pick.pick_no,
                round=pick.round,
                team_id=team_id,
                sleeper_player_id=pick.player_id
            ))
        return history

    async def build_league_import(self, league_id: Optional[str] = None) -> LeagueImport:
        """
        Fetch everything needed to set up the live draft from a league (the configured one by default).

        Draft picks are only fetched once the Sleeper draft has started.

        Raises:
            NotFoundError: If the league or its draft is missing
            APIException: For HTTP errors
        """
        league_id = league_id or self.league_id
        league = await self.fetch_league(league_id)
        users = await self.fetch_users(league_id)
        rosters = await self.fetch_rosters(league_id)
        rookies = await self.fetch_rookies()

        draft = None
        picks: List[SleeperDraftPick] = []
        if league.draft_id:
            draft = await self.fetch_draft(league.draft_id)
            if draft.has_started:
                picks = await self.fetch_draft_picks(league.draft_id)

        teams = self.map_teams(rosters, users, draft.draft_order if draft else None)
        prospects = self.map_prospects(rookies)
        history = self.map_draft_history(picks, teams, {p.sleeper_player_id for p in prospects})
        rounds = (draft.rounds if draft else None) or SLEEPER_DEFAULT_ROUNDS

        logger.info(
            f"Built import for league {league.league_id}: {len(teams)} teams, "
            f"{len(prospects)} rookies, {len(history)} picks, {rounds} rounds"
        )
        return LeagueImport(
            league_id=league.league_id,
            league_name=league.name or "",
            teams=teams,
            prospects=prospects,
            draft_history=history,
            rounds=rounds
        )

    async def close(self) -> None:
        await self.client.close()

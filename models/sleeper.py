"""
Sleeper API models

Only the fields the league import reads are declared; everything else in the
Sleeper payloads is ignored.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.team import Team


class SleeperModel(BaseModel):
    """Base for Sleeper payloads (extra fields ignored)."""

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_api_data(cls, data: Dict[str, Any]):
        if not data:
            raise ValueError(f"Cannot create {cls.__name__} from empty data")
        return cls(**data)


class SleeperPlayer(SleeperModel):
    """NFL player from the /players/nfl dataset."""

    player_id: str
    first_name: Optional[str] = ""
    last_name: Optional[str] = ""
    position: Optional[str] = None
    team: Optional[str] = None
    college: Optional[str] = None
    years_exp: Optional[int] = None
    fantasy_positions: Optional[List[str]] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    @property
    def is_rookie(self) -> bool:
        return self.years_exp == 0


class SleeperLeague(SleeperModel):
    league_id: str
    name: Optional[str] = ""
    total_rosters: int = 0
    status: Optional[str] = ""
    season: Optional[str] = ""
    draft_id: Optional[str] = None


class SleeperUser(SleeperModel):
    user_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    avatar: Optional[str] = None


class SleeperRoster(SleeperModel):
    roster_id: int
    owner_id: Optional[str] = None
    league_id: Optional[str] = None
    players: Optional[List[str]] = None


class SleeperDraft(SleeperModel):
    draft_id: str
    league_id: Optional[str] = None
    status: Optional[str] = ""
    season: Optional[str] = ""
    draft_type: Optional[str] = ""
    settings: Dict[str, Any] = Field(default_factory=dict)
    draft_order: Optional[Dict[str, int]] = None

    @property
    def rounds(self) -> Optional[int]:
        rounds = self.settings.get('rounds')
        return int(rounds) if rounds else None

    @property
    def has_started(self) -> bool:
        return self.status != 'pre_draft'


class SleeperDraftPick(SleeperModel):
    player_id: str
    picked_by: Optional[str] = None
    pick_no: int
    roster_id: Optional[int] = None
    draft_slot: Optional[int] = None
    round: int
    draft_id: Optional[str] = None


class ImportedProspect(SleeperModel):
    """Rookie mapped to board fields, keyed by its Sleeper id."""

    sleeper_player_id: str
    name: str
    position: str
    school: str = "Unknown"
    grade: int
    tier: int
    notes: str = ""

    def to_player_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude={'sleeper_player_id'})


class ImportedPick(SleeperModel):
    """Completed Sleeper pick mapped to a board team."""

    pick_number: int
    round: int
    team_id: int
    sleeper_player_id: str


class LeagueImport(SleeperModel):
    """Everything needed to set up a live draft from a Sleeper league."""

    league_id: str
    league_name: str = ""
    teams: List[Team]
    prospects: List[ImportedProspect]
    draft_history: List[ImportedPick] = Field(default_factory=list)
    rounds: int

"""
Draft pick models

PickRecord is one entry of the pick ledger. BoardSlot is one cell of the
draft board grid, derived on demand from settings, trades and the ledger.
"""
from typing import List, Optional
from pydantic import Field

from models.base import DraftBoardBaseModel
from models.player import Player


class PickRecord(DraftBoardBaseModel):
    """A player selection made at a specific pick."""

    # Override base model to make id required; sequential, never reused
    id: int = Field(..., description="Sequential pick record ID")
    player: Player = Field(..., description="Drafted player")
    team_id: int = Field(..., ge=1, description="Team that made the pick")
    pick_number: int = Field(..., ge=1, description="Overall pick number")
    round: int = Field(..., ge=1, description="Draft round")

    @property
    def player_id(self) -> int:
        """Extract player ID from nested player object."""
        return self.player.id

    def __str__(self):
        return f"Pick {self.pick_number}: {self.player.name} (Team {self.team_id})"


class BoardSlot(DraftBoardBaseModel):
    """One pick on the draft board."""

    round: int = Field(..., description="Draft round")
    pick_number: int = Field(..., description="Overall pick number")
    position: int = Field(..., description="Position within the round")
    original_team_id: int = Field(..., description="Default owner from the draft order")
    owning_team_id: int = Field(..., description="Current owner after trades")
    player: Optional[Player] = Field(None, description="Player taken with this pick")
    is_active: bool = Field(False, description="True if this pick is on the clock")

    @property
    def is_traded(self) -> bool:
        """Check if this pick has been traded."""
        return self.original_team_id != self.owning_team_id

    @property
    def is_selected(self) -> bool:
        """Check if a player has been selected with this pick."""
        return self.player is not None

    def to_dict(self, exclude_none: bool = False):
        data = super().to_dict(exclude_none=exclude_none)
        data['is_traded'] = self.is_traded
        data['is_selected'] = self.is_selected
        return data

    def __str__(self):
        if self.player:
            return f"Pick {self.pick_number}: {self.player.name} (Team {self.owning_team_id})"
        return f"Pick {self.pick_number}: Available (Team {self.owning_team_id})"


class DraftRound(DraftBoardBaseModel):
    """A round of the draft board."""

    round: int
    picks: List[BoardSlot]

    def to_dict(self, exclude_none: bool = False):
        return {'round': self.round, 'picks': [slot.to_dict() for slot in self.picks]}


class OwnedPick(DraftBoardBaseModel):
    """A pick as seen from one team: kept from the default order or acquired."""

    round: int
    pick_number: int
    status: str = Field(..., description="'owned' or 'traded-for'")
    player: Optional[Player] = None

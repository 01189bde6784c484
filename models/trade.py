"""
Pick trade model

Records one executed exchange of draft picks between two teams.
"""
from typing import List
from pydantic import Field

from models.base import DraftBoardBaseModel


class PickTrade(DraftBoardBaseModel):
    """Two-team pick swap."""

    from_team_id: int = Field(..., description="Team giving up from_picks")
    to_team_id: int = Field(..., description="Team giving up to_picks")
    from_picks: List[int] = Field(..., description="Picks moving to to_team_id")
    to_picks: List[int] = Field(..., description="Picks moving to from_team_id")

    @property
    def pick_count(self) -> int:
        """Total picks exchanged."""
        return len(self.from_picks) + len(self.to_picks)

    @property
    def description(self) -> str:
        """Human-readable trade summary."""
        give = ", ".join(f"#{p}" for p in self.from_picks)
        get = ", ".join(f"#{p}" for p in self.to_picks)
        return f"Team {self.from_team_id} sends {give} to Team {self.to_team_id} for {get}"

    def __str__(self):
        return self.description

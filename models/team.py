"""
Team model for draft participants

Teams are identified by their draft slot (1..team_count).
"""
from typing import Optional
from pydantic import Field, field_validator

from models.base import DraftBoardBaseModel


class Team(DraftBoardBaseModel):
    """Team model representing one drafting team."""

    # Override base model to make id required; the id is the draft slot
    id: int = Field(..., ge=1, description="Team ID (draft slot, 1-based)")
    name: str = Field(..., description="Display name")

    # Sleeper metadata (populated by league import)
    roster_id: Optional[int] = Field(None, description="Sleeper roster ID")
    user_id: Optional[str] = Field(None, description="Sleeper owner user ID")
    avatar: Optional[str] = Field(None, description="Sleeper avatar hash")

    @field_validator('name')
    @classmethod
    def require_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Team name is required")
        return v

    @classmethod
    def default(cls, team_id: int) -> 'Team':
        """Placeholder team used before names are edited or imported."""
        return cls(id=team_id, name=f"Team {team_id}")

    def __str__(self):
        return f"{self.id} - {self.name}"

"""
Player model for rookie prospects

Represents a prospect on the draft board plus the payloads used to create,
update and reorder prospects.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from constants import MIN_GRADE, MAX_GRADE, MIN_TIER, MAX_TIER
from models.base import DraftBoardBaseModel


class Position(str, Enum):
    """Prospect positions."""
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    OL = "OL"
    DL = "DL"
    LB = "LB"
    CB = "CB"
    S = "S"
    K = "K"
    P = "P"
    DEF = "DEF"


def _normalize_position(v):
    if isinstance(v, str):
        return v.strip().upper()
    return v


def _require_name(v):
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
    return v


class Player(DraftBoardBaseModel):
    """Player model representing a ranked prospect."""

    # Override base model to make id required for stored entities
    id: int = Field(..., description="Player ID assigned by the store")

    name: str = Field(..., description="Player full name")
    position: Position = Field(..., description="Primary position")
    school: str = Field("", description="College")
    grade: int = Field(75, ge=MIN_GRADE, le=MAX_GRADE, description="Scouting grade (0-100)")
    tier: int = Field(3, ge=MIN_TIER, le=MAX_TIER, description="Coarse tier (1-5)")
    notes: str = Field("", description="Free-form scouting notes")
    order: int = Field(..., ge=1, description="1-based board rank")

    normalize_position = field_validator('position', mode='before')(_normalize_position)
    require_name = field_validator('name')(_require_name)

    @field_validator('notes', 'school', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @property
    def rank(self) -> int:
        """Board rank (alias of order)."""
        return self.order

    def __str__(self):
        return f"#{self.order} {self.name} ({self.position})"


class PlayerCreate(BaseModel):
    """Fields accepted when adding a prospect. Order is optional."""

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    name: str
    position: Position
    school: str = ""
    grade: int = Field(75, ge=MIN_GRADE, le=MAX_GRADE)
    tier: int = Field(3, ge=MIN_TIER, le=MAX_TIER)
    notes: str = ""
    order: Optional[int] = Field(None, ge=1)

    normalize_position = field_validator('position', mode='before')(_normalize_position)
    require_name = field_validator('name')(_require_name)

    @field_validator('notes', 'school', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class PlayerUpdate(BaseModel):
    """Partial update payload. Id and order are not updatable here."""

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    name: Optional[str] = None
    position: Optional[Position] = None
    school: Optional[str] = None
    grade: Optional[int] = Field(None, ge=MIN_GRADE, le=MAX_GRADE)
    tier: Optional[int] = Field(None, ge=MIN_TIER, le=MAX_TIER)
    notes: Optional[str] = None

    normalize_position = field_validator('position', mode='before')(_normalize_position)
    require_name = field_validator('name')(_require_name)

    def changes(self) -> dict:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class ReorderItem(BaseModel):
    """One entry of a reorder request."""

    id: int
    order: int

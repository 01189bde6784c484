"""
Data models for the Rookie Draft Board

Clean Pydantic models with proper validation and type safety.
"""

from models.base import DraftBoardBaseModel
from models.player import Player, PlayerCreate, PlayerUpdate, Position, ReorderItem
from models.team import Team
from models.draft_pick import PickRecord, BoardSlot, DraftRound, OwnedPick
from models.trade import PickTrade

__all__ = [
    'DraftBoardBaseModel',
    'Player',
    'PlayerCreate',
    'PlayerUpdate',
    'Position',
    'ReorderItem',
    'Team',
    'PickRecord',
    'BoardSlot',
    'DraftRound',
    'OwnedPick',
    'PickTrade',
]

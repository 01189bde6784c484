"""
Business logic services for the Rookie Draft Board

In-memory draft board core plus the HTTP-backed caller side and Sleeper import.
"""

from .player_store import PlayerStore
from .pick_ledger import PickLedger
from .trade_ledger import TradeLedger, TradeValidationResult
from .live_draft_service import LiveDraftService
from .sleeper_service import SleeperService
from .player_service import PlayerService, player_service

__all__ = [
    'PlayerStore',
    'PickLedger',
    'TradeLedger', 'TradeValidationResult',
    'LiveDraftService',
    'SleeperService',
    'PlayerService', 'player_service'
]

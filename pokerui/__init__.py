"""
pokerui - terminal user interface controller for peer-to-peer poker tables.

Binds an external game engine and table network service to view widgets
and keeps the two in sync as events arrive.
"""

from .controller import PokerUI
from .registry import GameInstanceBinding, GameInstanceRegistry
from .turn_sync import TurnSyncController, PendingAction, FOLD
from .lobby import LobbyController, TableAnnouncement
from .dialog import DialogNotifier
from .scheduler import Scheduler, ManualScheduler, ScheduledTask
from .events import EventEmitter
from .errors import PokerUIError, BetRejected, DealRejected, TableError

__all__ = [
    'PokerUI',
    'GameInstanceBinding',
    'GameInstanceRegistry',
    'TurnSyncController',
    'PendingAction',
    'FOLD',
    'LobbyController',
    'TableAnnouncement',
    'DialogNotifier',
    'Scheduler',
    'ManualScheduler',
    'ScheduledTask',
    'EventEmitter',
    'PokerUIError',
    'BetRejected',
    'DealRejected',
    'TableError',
]

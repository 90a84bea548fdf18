"""
Structural types for the collaborators the UI talks to.

The game engine and the network service live outside this package; any
object with these attributes works. Both are expected to be
``EventEmitter`` subclasses (or to provide the same listener API).
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Mapping, Optional, Protocol


# Engine events
EVENT_DEAL = "deal"
EVENT_BET_PLACED = "bet-placed"
EVENT_HAND_ENDED = "hand-ended"
EVENT_HAND_SCORED = "hand-scored"

# Network events
EVENT_NEW_GAME = "new-game"
EVENT_TABLE_ANNOUNCED = "table-announced"
EVENT_TABLE_READY = "table-ready"
EVENT_CONNECTION_STARTED = "connection-started"

# Emitted by PokerUI after it changed any view
EVENT_VIEW_UPDATED = "view-updated"


class Emitter(Protocol):
    def add_listener(self, event: str, listener: Callable[..., Any]) -> Callable[..., Any]: ...

    def remove_listener(self, event: str, listener: Callable[..., Any]) -> bool: ...


class PlayerInfo(Protocol):
    private_id: str
    total_bet: int


class GameEngine(Emitter, Protocol):
    """One hand-playing session as seen by the UI."""

    pot: int
    minimum_bet: int
    can_bet: bool
    betting_done: bool
    game_done: bool
    own_pid: str

    def start(self) -> Any: ...

    def place_bet(self, amount: int) -> Any:
        """Raise ``ValueError`` (usually ``BetRejected``) for an invalid amount."""

    async def deal_cards(self) -> Any:
        """Raise ``DealRejected`` when it is not this player's turn to deal."""

    def restart_game(self) -> Any: ...

    def get_player(self, private_id: str) -> PlayerInfo: ...

    def get_dealer(self) -> PlayerInfo: ...

    def get_next_player(self, private_id: str) -> PlayerInfo: ...


class NetworkService(Emitter, Protocol):
    """Table discovery and seating."""

    connected: bool
    capture_new_tables: bool
    announced_tables: List[Mapping[str, Any]]

    def create_table(self, table_name: str, seat_count: int, info: Mapping[str, Any]) -> Any: ...

    def join_table(self, table: Mapping[str, Any]) -> Any: ...

    def create_game(self, table: Mapping[str, Any], player_info: Mapping[str, Any]) -> GameEngine: ...

    def wait_for(self, event: str, predicate: Optional[Callable[..., bool]] = None) -> asyncio.Future: ...
from typing import Callable, Dict, Iterable, List, Optional

import pytest

from pokerui.config import Settings
from pokerui.controller import PokerUI
from pokerui.errors import BetRejected, DealRejected
from pokerui.events import EventEmitter
from pokerui.scheduler import ManualScheduler
from pokerui.turn_sync import FOLD
from pokerui.ui.widgets import GameView


class FakePlayer:
    def __init__(self, private_id: str, total_bet: int = 0):
        self.private_id = private_id
        self.total_bet = total_bet


class FakeEngine(EventEmitter):
    """Scriptable stand-in for a game engine.

    Flags such as ``can_bet`` and ``betting_done`` are set directly by the
    tests; ``place_bet`` only validates the amount against ``minimum_bet``.
    """

    def __init__(self, own_pid: str = "me", seats: Iterable[str] = ("me", "p2", "p3"), dealer: str = "p3"):
        super().__init__()
        self.own_pid = own_pid
        self.seats = list(seats)
        self.players: Dict[str, FakePlayer] = {pid: FakePlayer(pid) for pid in self.seats}
        self.dealer = dealer
        self.pot = 0
        self.minimum_bet = 10
        self.can_bet = False
        self.betting_done = False
        self.game_done = False
        self.our_deal = True
        self.reject_folds = False
        self.bets: List[int] = []
        self.deal_calls = 0
        self.restarts = 0
        self.started = False
        self.table = None
        self.player_info = None

    def start(self):
        self.started = True

    def place_bet(self, amount):
        if amount == FOLD:
            if self.reject_folds:
                raise BetRejected("cannot fold now")
        elif amount < self.minimum_bet:
            raise BetRejected(f"bet {amount} below minimum {self.minimum_bet}")
        self.bets.append(amount)
        if amount > 0:
            self.pot += amount
            self.players[self.own_pid].total_bet += amount
        self.can_bet = False

    async def deal_cards(self):
        self.deal_calls += 1
        if not self.our_deal:
            raise DealRejected("not our turn to deal")

    def restart_game(self):
        self.restarts += 1
        self.pot = 0
        for player in self.players.values():
            player.total_bet = 0

    def get_player(self, private_id):
        return self.players[private_id]

    def get_dealer(self):
        return self.players[self.dealer]

    def get_next_player(self, private_id):
        index = self.seats.index(private_id)
        return self.players[self.seats[(index + 1) % len(self.seats)]]


class FakeNetwork(EventEmitter):
    """Records table requests; tests resolve them with ``ready``."""

    def __init__(self, connected: bool = False):
        super().__init__()
        self.connected = connected
        self.capture_new_tables = False
        self.announced_tables: List[dict] = []
        self.created: List[tuple] = []
        self.joined: List[dict] = []
        self.games: List[FakeEngine] = []

    def create_table(self, table_name, seat_count, info):
        self.created.append((table_name, seat_count, dict(info)))

    def join_table(self, table):
        self.joined.append(table)

    def create_game(self, table, player_info):
        engine = FakeEngine()
        engine.table = table
        engine.player_info = dict(player_info)
        self.games.append(engine)
        self.emit("new-game", engine)
        return engine

    def announce(self, record: dict):
        self.announced_tables.insert(0, record)
        self.emit("table-announced", record)

    def ready(self, table: dict):
        self.emit("table-ready", table)


def table_record(name: str = "t1", remote: int = 1, big: int = 20, small: int = 10) -> dict:
    return {
        'table_name': name,
        'required_pids': [f"peer{i}" for i in range(remote)],
        'table_info': {'big_blind': big, 'small_blind': small},
    }


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    return FakeEngine


@pytest.fixture
def make_table() -> Callable[..., dict]:
    return table_record


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def ui(settings, scheduler) -> PokerUI:
    return PokerUI(GameView(element_id="game"), scheduler=scheduler, settings=settings)


@pytest.fixture
def bind(ui) -> Callable:
    """Register an engine with the UI and return its binding."""

    def _bind(engine: Optional[FakeEngine] = None):
        engine = engine or FakeEngine()
        return ui.on_new_game(engine)

    return _bind

"""
PokerUI ties the lobby, the game views and the dialog to a network service.

Hosts build one ``PokerUI`` per user, hand it the template view and then
assign the network service once. Games announced through ``new-game`` get a
view of their own and are driven by ``TurnSyncController`` from then on.
"""

import logging
from typing import Optional

from pokerui.config import Settings, get_settings
from pokerui.debug import DebugSink
from pokerui.dialog import DialogNotifier
from pokerui.events import EventEmitter
from pokerui.interfaces import (
    EVENT_CONNECTION_STARTED,
    EVENT_NEW_GAME,
    EVENT_TABLE_ANNOUNCED,
    EVENT_VIEW_UPDATED,
    GameEngine,
    NetworkService,
)
from pokerui.lobby import LobbyController
from pokerui.registry import GameInstanceBinding, GameInstanceRegistry
from pokerui.scheduler import Scheduler
from pokerui.turn_sync import TurnSyncController
from pokerui.ui.widgets import Dialog, GameView, LobbyView


class PokerUI(EventEmitter):
    """User interface controller for one player.

    Emits ``view-updated`` with the affected binding (or ``None`` for the
    lobby and dialog) whenever something visible changed.
    """

    CONNECTED_MESSAGE = "Connected to peer-to-peer network."

    def __init__(self, template: GameView, lobby: Optional[LobbyView] = None,
                 dialog: Optional[Dialog] = None, scheduler: Optional[Scheduler] = None,
                 settings: Optional[Settings] = None):
        super().__init__()
        self.settings = settings or get_settings()
        self.template = template
        self.lobby = lobby if lobby is not None else LobbyView()
        self.dialog_widget = dialog if dialog is not None else Dialog()
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.debug = DebugSink()

        self.dialog = DialogNotifier(self.dialog_widget, self.scheduler)
        self.registry = GameInstanceRegistry(template, self.lobby, auto_deal=self.settings.auto_deal)
        self.turns = TurnSyncController(self.dialog, self.scheduler, self.settings,
                                        notify=self._view_updated, debug=self.debug)
        self.lobby_controller = LobbyController(self.lobby, self.dialog, self.settings,
                                                notify=self._view_updated)
        self._network = None

    @property
    def auto_deal(self) -> bool:
        """Deal automatically once betting is done and it is our turn to deal."""
        return self.registry.auto_deal

    @auto_deal.setter
    def auto_deal(self, enabled: bool):
        self.registry.set_auto_deal(bool(enabled))

    @property
    def network(self) -> Optional[NetworkService]:
        return self._network

    @network.setter
    def network(self, network: NetworkService):
        if self._network is not None:
            raise RuntimeError("The network service can only be set once.")
        self._network = network
        self.lobby_controller.attach(network)
        network.add_listener(EVENT_NEW_GAME, self.on_new_game)
        network.add_listener(EVENT_TABLE_ANNOUNCED, self.lobby_controller.on_table_announced)
        network.capture_new_tables = True
        if getattr(network, 'connected', False):
            self.on_connected()
        else:
            network.add_listener(EVENT_CONNECTION_STARTED, self.on_connected)

    @property
    def bindings(self):
        return self.registry.bindings

    @property
    def active(self) -> Optional[GameInstanceBinding]:
        return self.registry.active

    def on_connected(self, *_):
        logging.info("Network connection started")
        self.dialog.flash(self.CONNECTED_MESSAGE, self.settings.connected_notice_ms)
        self._view_updated(None)

    def on_new_game(self, engine: GameEngine) -> GameInstanceBinding:
        self.debug(f"on_new_game({engine!r})")
        existing = self.registry.lookup(engine)
        if existing is not None:
            return existing
        binding = self.registry.register(engine)
        self.turns.attach(binding)
        self._view_updated(binding)
        return binding

    def binding_for(self, engine) -> Optional[GameInstanceBinding]:
        return self.registry.lookup(engine)

    def _view_updated(self, binding: Optional[GameInstanceBinding]):
        self.emit(EVENT_VIEW_UPDATED, binding)

    def __repr__(self):
        return f"<PokerUI games={len(self.registry)} auto_deal={self.auto_deal}>"

"""
Tracks the view bound to every running game engine.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from pokerui.interfaces import GameEngine
from pokerui.ui.widgets import GameView, LobbyView


@dataclass(eq=False)
class GameInstanceBinding:
    """One game engine paired with the view that displays it."""

    engine: GameEngine
    view: GameView
    name: str
    auto_deal: bool = True
    # set on hand-ended, cleared by the first deal after a restart
    hand_over: bool = False
    # restart_game() was called and no cards have arrived since
    restart_pending: bool = False
    # an auto-deal has been fired for the current betting round
    deal_attempted: bool = False
    listeners: List[tuple] = field(default_factory=list, repr=False)

    def start_new_hand(self):
        """Mark the engine as restarted. The old hand stays over until new cards arrive."""
        self.restart_pending = True
        self.deal_attempted = False

    def cards_arrived(self):
        if self.restart_pending:
            self.hand_over = False
            self.restart_pending = False
        self.deal_attempted = False


class GameInstanceRegistry:
    """Creates and indexes one binding per engine.

    Names are built from the template's ``name`` (or ``element_id``, or
    ``"game"``) plus a counter that only ever goes up.
    """

    def __init__(self, template: GameView, lobby: Optional[LobbyView] = None, auto_deal: bool = True):
        self.template = template
        self.lobby = lobby
        self.auto_deal = auto_deal
        self._bindings: List[GameInstanceBinding] = []
        self._counter = itertools.count(1)
        self.active: Optional[GameInstanceBinding] = None

    @property
    def name_prefix(self) -> str:
        return self.template.name or self.template.element_id or "game"

    def register(self, engine: GameEngine) -> GameInstanceBinding:
        existing = self.lookup(engine)
        if existing is not None:
            logging.warning(f"Engine already bound to {existing.name}; reusing binding")
            return existing

        view = self.template.clone()
        name = f"{self.name_prefix}{next(self._counter)}"
        view.name = name
        binding = GameInstanceBinding(engine=engine, view=view, name=name, auto_deal=self.auto_deal)
        self._bindings.append(binding)
        logging.info(f"Registered game view {name}")

        if self.lobby is not None:
            self.lobby.hide()
        if self.active is not None:
            self.active.view.hide()
        view.show()
        self.active = binding
        return binding

    def lookup(self, engine) -> Optional[GameInstanceBinding]:
        for binding in self._bindings:
            if binding.engine is engine:
                return binding
        return None

    def set_auto_deal(self, enabled: bool):
        self.auto_deal = enabled
        for binding in self._bindings:
            binding.auto_deal = enabled

    @property
    def bindings(self) -> List[GameInstanceBinding]:
        return list(self._bindings)

    def __iter__(self) -> Iterator[GameInstanceBinding]:
        return iter(list(self._bindings))

    def __len__(self):
        return len(self._bindings)

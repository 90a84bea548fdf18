"""
View widgets for the poker UI.

These are plain state holders. Controllers flip their enabled/hidden flags
and contents; renderers such as ``TerminalUI`` read them back.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional


class Widget:
    """Base widget with enabled and hidden flags."""

    def __init__(self, role: str, enabled: bool = True, hidden: bool = False):
        self.role = role
        self.enabled = enabled
        self.hidden = hidden

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False

    def show(self):
        self.hidden = False

    def hide(self):
        self.hidden = True

    def __repr__(self):
        flags = []
        if not self.enabled:
            flags.append("disabled")
        if self.hidden:
            flags.append("hidden")
        return f"<{type(self).__name__} {self.role}{' ' + ','.join(flags) if flags else ''}>"


class Button(Widget):
    """Clickable widget. Clicks on a disabled or hidden button do nothing."""

    def __init__(self, role: str, label: str = "", enabled: bool = True, hidden: bool = False):
        super().__init__(role, enabled=enabled, hidden=hidden)
        self.label = label
        self._on_click: Optional[Callable[[], Any]] = None

    def bind(self, handler: Optional[Callable[[], Any]]):
        self._on_click = handler

    def click(self) -> bool:
        """Invoke the bound handler. Returns False when the click was ignored."""
        if not self.enabled or self.hidden:
            logging.debug(f"Ignoring click on inactive button {self.role}")
            return False
        if self._on_click is None:
            return False
        self._on_click()
        return True

    def __deepcopy__(self, memo):
        clone = Button(self.role, self.label, enabled=self.enabled, hidden=self.hidden)
        memo[id(self)] = clone
        return clone


class TextField(Widget):
    """Single value display or input."""

    def __init__(self, role: str, value: str = "", enabled: bool = True, hidden: bool = False):
        super().__init__(role, enabled=enabled, hidden=hidden)
        self.value = value

    def set(self, value: Any):
        self.value = str(value)


class CardContainer(Widget):
    """Ordered collection of rendered cards."""

    def __init__(self, role: str):
        super().__init__(role)
        self.cards: List[Any] = []

    def add(self, cards):
        self.cards.extend(cards)

    def clear(self):
        self.cards = []

    def __len__(self):
        return len(self.cards)


@dataclass
class WinningHand:
    """One winning hand as shown in the hand history."""

    name: str
    owner: str
    cards: List[Any] = field(default_factory=list)


@dataclass
class HistoryEntry:
    """A scored hand: a header plus every winning hand under it."""

    header: str
    hands: List[WinningHand] = field(default_factory=list)


class HistoryLog(Widget):
    def __init__(self, role: str):
        super().__init__(role)
        self.entries: List[HistoryEntry] = []

    def append(self, entry: HistoryEntry):
        self.entries.append(entry)


class Dialog(Widget):
    """The shared transient message box."""

    def __init__(self, role: str = "dialog"):
        super().__init__(role, hidden=True)
        self.contents = ""

    @property
    def is_open(self) -> bool:
        return not self.hidden

    def open(self, contents: str):
        self.contents = str(contents)
        self.hidden = False

    def close(self):
        self.hidden = True


GAME_ROLES = (
    'bet_button',
    'fold_button',
    'new_hand_button',
    'total_bet',
    'pot_amount',
    'bet_amount',
    'public_cards',
    'private_cards',
    'hand_history',
)


class GameView:
    """Widgets for one game instance, addressed by role.

    A single template is built by the host and cloned for every game; the
    template itself is never touched after construction.
    """

    def __init__(self, name: Optional[str] = None, element_id: Optional[str] = None, hidden: bool = True):
        self.name = name
        self.element_id = element_id
        self.hidden = hidden
        self.bet_button = Button('bet_button', "Bet")
        self.fold_button = Button('fold_button', "Fold")
        self.new_hand_button = Button('new_hand_button', "New hand", enabled=False)
        self.total_bet = TextField('total_bet', "0")
        self.pot_amount = TextField('pot_amount', "0")
        self.bet_amount = TextField('bet_amount', "0")
        self.public_cards = CardContainer('public_cards')
        self.private_cards = CardContainer('private_cards')
        self.hand_history = HistoryLog('hand_history')

    def widget(self, role: str) -> Widget:
        if role not in GAME_ROLES:
            raise KeyError(f"Unknown game view role: {role}")
        return getattr(self, role)

    def clone(self) -> "GameView":
        return copy.deepcopy(self)

    def show(self):
        self.hidden = False

    def hide(self):
        self.hidden = True

    def __repr__(self):
        return f"<GameView {self.name or self.element_id or '?'}{' hidden' if self.hidden else ''}>"


class TableEntry(Button):
    """Selectable lobby entry for an announced table."""

    def __init__(self, announcement):
        super().__init__('table_entry', announcement.table_name)
        self.announcement = announcement

    @property
    def lines(self) -> List[str]:
        a = self.announcement
        return [
            a.table_name,
            f"Number of players: {a.player_count}",
            f"Big blind: {a.big_blind}",
            f"Small blind: {a.small_blind}",
        ]


class LobbyView:
    """Create-table form plus the list of announced tables."""

    def __init__(self):
        self.hidden = False
        self.create_button = Button('create_button', "Create table")
        self.alias = TextField('alias')
        self.table_name = TextField('table_name')
        self.num_players = TextField('num_players', "2")
        self.big_blind = TextField('big_blind')
        self.small_blind = TextField('small_blind')
        self.table_list: List[TableEntry] = []

    def add_table_entry(self, entry: TableEntry) -> TableEntry:
        self.table_list.append(entry)
        return entry

    def remove_table_entry(self, entry: TableEntry) -> bool:
        try:
            self.table_list.remove(entry)
        except ValueError:
            return False
        return True

    def show(self):
        self.hidden = False

    def hide(self):
        self.hidden = True

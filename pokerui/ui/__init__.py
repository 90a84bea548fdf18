"""
View layer for pokerui: widgets plus terminal rendering helpers.
"""

from .colors import Colors
from .cards import card_str, card_label, cards_horizontal, cards_inline, normalize_card
from .widgets import (
    Widget, Button, TextField, CardContainer, HistoryLog, HistoryEntry,
    WinningHand, Dialog, GameView, LobbyView, TableEntry, GAME_ROLES,
)

__all__ = [
    'Colors', 'card_str', 'card_label', 'cards_horizontal', 'cards_inline', 'normalize_card',
    'Widget', 'Button', 'TextField', 'CardContainer', 'HistoryLog', 'HistoryEntry',
    'WinningHand', 'Dialog', 'GameView', 'LobbyView', 'TableEntry', 'GAME_ROLES',
]

"""
Card rendering for the pokerui terminal renderer.

Engines hand over cards in whatever shape they use; ``normalize_card``
accepts ``(rank, suit)`` tuples, objects with ``rank``/``suit`` attributes
and short strings such as ``"Ah"`` or ``"10d"``.
"""

from typing import Any, List, Optional, Tuple

from .colors import Colors


SUIT_SYMBOLS = {
    'h': '♥',
    'd': '♦',
    'c': '♣',
    's': '♠'
}

SUIT_COLORS = {
    'h': Colors.RED,
    'd': Colors.RED,
    'c': Colors.BLACK,
    's': Colors.BLACK
}

RANK_NAMES = {11: 'J', 12: 'Q', 13: 'K', 14: 'A'}
RANK_VALUES = {'J': 11, 'Q': 12, 'K': 13, 'A': 14, 'T': 10}


def normalize_card(card: Any) -> Optional[Tuple[int, str]]:
    """Return ``(rank, suit)`` for a recognisable card, else None."""
    if isinstance(card, tuple) and len(card) == 2:
        rank, suit = card
    elif hasattr(card, 'rank') and hasattr(card, 'suit'):
        rank, suit = card.rank, card.suit
    elif isinstance(card, str) and 2 <= len(card) <= 3:
        rank, suit = card[:-1], card[-1]
    else:
        return None

    if isinstance(rank, str):
        rank = rank.upper()
        if rank in RANK_VALUES:
            rank = RANK_VALUES[rank]
        elif rank.isdigit():
            rank = int(rank)
        else:
            return None
    suit = str(suit).lower()[:1]
    if suit not in SUIT_SYMBOLS or not 2 <= rank <= 14:
        return None
    return rank, suit


def card_label(card: Any) -> str:
    """Short one-line label, e.g. ``A♠``."""
    normal = normalize_card(card)
    if normal is None:
        return str(card)
    rank, suit = normal
    return f"{RANK_NAMES.get(rank, str(rank))}{SUIT_SYMBOLS[suit]}"


def card_str(card: Any) -> List[str]:
    """Format a single card as five lines of ASCII art."""
    normal = normalize_card(card)
    if normal is None:
        text = f"{str(card)[:3]:^3}"
        return ["╭───╮", f"│{text}│", "│   │", "│   │", "╰───╯"]

    r, s = normal
    rank = RANK_NAMES.get(r, str(r))
    symbol = SUIT_SYMBOLS[s]
    color = SUIT_COLORS[s]
    rank_left = f"{rank:<2}"
    rank_right = f"{rank:>2}"

    style = f"{Colors.BOLD}{Colors.BG_WHITE}{color}"
    return [
        f"{style}╭───╮{Colors.RESET}",
        f"{style}│{rank_left}{symbol}│{Colors.RESET}",
        f"{style}│   │{Colors.RESET}",
        f"{style}│{symbol}{rank_right}│{Colors.RESET}",
        f"{style}╰───╯{Colors.RESET}",
    ]


def cards_horizontal(cards) -> str:
    """Render multiple cards side-by-side horizontally."""
    if not cards:
        return ""
    card_lines = [card_str(card) for card in cards]
    return "\n".join(" ".join(lines[row] for lines in card_lines) for row in range(5))


def cards_inline(cards) -> str:
    return " ".join(card_label(card) for card in cards)

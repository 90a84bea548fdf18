"""
Exception types shared between the UI controller and its collaborators.
"""


class PokerUIError(Exception):
    """Base class for pokerui errors."""


class BetRejected(PokerUIError, ValueError):
    """Raised by an engine when a bet amount is not acceptable."""


class DealRejected(PokerUIError):
    """Raised by an engine when it is not the caller's turn to deal."""


class TableError(PokerUIError):
    """A table could not be created or joined."""

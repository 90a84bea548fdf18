"""
Keeps each game view in step with its engine.

Every engine event and every bet/fold/new-hand click lands here. The
controller decides which controls are usable, renders dealt cards, fires
auto-deal once betting resolves, and resets the view between hands. It
never holds game state of its own beyond two per-binding flags; everything
else is read back from the engine when needed.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Mapping, Optional, Set

from pokerui.config import Settings, get_settings
from pokerui.debug import DebugSink
from pokerui.dialog import DialogNotifier
from pokerui.errors import DealRejected
from pokerui.interfaces import EVENT_BET_PLACED, EVENT_DEAL, EVENT_HAND_ENDED, EVENT_HAND_SCORED
from pokerui.registry import GameInstanceBinding
from pokerui.scheduler import ScheduledTask, Scheduler
from pokerui.ui.widgets import HistoryEntry, WinningHand

# Bet amount the engine treats as a fold
FOLD = -1


@dataclass(frozen=True)
class PendingAction:
    """A bet or fold the user just asked for."""

    binding: GameInstanceBinding
    amount: int

    @classmethod
    def bet(cls, binding: GameInstanceBinding) -> "PendingAction":
        """Snapshot the bet-amount field. Raises ``ValueError`` if it is not a number."""
        raw = str(binding.view.bet_amount.value).strip()
        return cls(binding, int(raw))

    @classmethod
    def fold(cls, binding: GameInstanceBinding) -> "PendingAction":
        return cls(binding, FOLD)

    @property
    def is_fold(self) -> bool:
        return self.amount == FOLD

    def submit(self):
        return self.binding.engine.place_bet(self.amount)


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj[key]
    return getattr(obj, key)


class TurnSyncController:
    """Reacts to engine events and user actions for every bound game."""

    def __init__(self, dialog: DialogNotifier, scheduler: Scheduler,
                 settings: Optional[Settings] = None,
                 notify: Optional[Callable[[GameInstanceBinding], Any]] = None,
                 debug: Optional[DebugSink] = None):
        self.dialog = dialog
        self.scheduler = scheduler
        self.settings = settings or get_settings()
        self.notify = notify
        self.debug = debug or DebugSink()
        self._deal_tasks: Set[asyncio.Future] = set()

    def attach(self, binding: GameInstanceBinding):
        """Subscribe to the binding's engine and hook up its buttons."""
        engine = binding.engine
        view = binding.view

        def on_deal(cards, private=True):
            self.on_cards_dealt(binding, cards, private)

        def on_bet_placed(*_):
            self.on_bet_placed(binding)

        def on_hand_ended(table=None):
            self.on_hand_ended(binding, table)

        def on_hand_scored(analysis):
            self.on_hand_scored(binding, analysis)

        for event, listener in ((EVENT_DEAL, on_deal),
                                (EVENT_BET_PLACED, on_bet_placed),
                                (EVENT_HAND_ENDED, on_hand_ended),
                                (EVENT_HAND_SCORED, on_hand_scored)):
            engine.add_listener(event, listener)
            binding.listeners.append((event, listener))

        view.bet_button.bind(partial(self.on_bet_requested, binding))
        view.fold_button.bind(partial(self.on_fold_requested, binding))
        view.new_hand_button.bind(partial(self.on_new_hand_requested, binding))
        # nothing to act on until cards arrive
        view.bet_button.disable()
        view.fold_button.disable()
        view.new_hand_button.disable()

    def detach(self, binding: GameInstanceBinding):
        for event, listener in binding.listeners:
            binding.engine.remove_listener(event, listener)
        binding.listeners.clear()
        for role in ('bet_button', 'fold_button', 'new_hand_button'):
            binding.view.widget(role).bind(None)

    def on_bet_requested(self, binding: GameInstanceBinding):
        self.debug(f"on_bet_requested({binding.name})")
        view = binding.view
        view.bet_button.disable()
        view.fold_button.disable()
        try:
            PendingAction.bet(binding).submit()
        except ValueError as e:
            logging.info(f"{binding.name}: bet rejected: {e}")
            if not binding.hand_over:
                view.bet_button.enable()
        except Exception as e:
            logging.warning(f"{binding.name}: bet failed: {e!r}")
            if not binding.hand_over:
                view.bet_button.enable()
        self.update_pot(binding)
        self.update_total_bet(binding)
        self._maybe_auto_deal(binding)
        self._changed(binding)

    def on_fold_requested(self, binding: GameInstanceBinding):
        self.debug(f"on_fold_requested({binding.name})")
        view = binding.view
        view.fold_button.disable()
        view.bet_button.disable()
        try:
            PendingAction.fold(binding).submit()
        except Exception as e:
            logging.debug(f"{binding.name}: fold not accepted: {e!r}")
        self._maybe_auto_deal(binding)
        self._changed(binding)

    def on_new_hand_requested(self, binding: GameInstanceBinding):
        self.debug(f"on_new_hand_requested({binding.name})")
        binding.view.new_hand_button.disable()
        self.reset_game_ui(binding)
        binding.start_new_hand()
        binding.engine.restart_game()
        self._changed(binding)

    def on_cards_dealt(self, binding: GameInstanceBinding, cards, private: bool = True):
        view = binding.view
        target = view.private_cards if private else view.public_cards
        target.add(list(cards))
        binding.cards_arrived()
        # blinds may have been posted automatically
        self.update_pot(binding)
        self._enable_betting_if_allowed(binding)
        self.update_total_bet(binding)
        self._changed(binding)

    def on_bet_placed(self, binding: GameInstanceBinding):
        self.debug(f"on_bet_placed({binding.name})")
        self.update_pot(binding)
        self.update_total_bet(binding)
        self._enable_betting_if_allowed(binding)
        self._maybe_auto_deal(binding)
        self._changed(binding)

    def on_hand_ended(self, binding: GameInstanceBinding, table=None):
        self.dialog.show("Game is done!")
        binding.hand_over = True
        view = binding.view
        view.bet_button.disable()
        view.fold_button.disable()
        if self.is_dealer_successor(binding):
            # next hand starts when the user confirms
            view.new_hand_button.enable()
            self._changed(binding)
            return
        self.reset_game_ui(binding)
        binding.start_new_hand()
        binding.engine.restart_game()
        self._changed(binding)

    def on_hand_scored(self, binding: GameInstanceBinding, analysis):
        self.debug(f"on_hand_scored({binding.name})")
        try:
            winning_hands = list(_field(analysis, 'winning_hands'))
            winning_players = list(_field(analysis, 'winning_players'))
            header = "Best Hands" if len(winning_hands) > 1 else "Best Hand"
            entry = HistoryEntry(header)
            own_pid = binding.engine.own_pid
            for index, hand in enumerate(winning_hands):
                player_id = _field(winning_players[index], 'private_id')
                owner = "Ours" if player_id == own_pid else f"Player: {player_id}"
                entry.hands.append(WinningHand(str(_field(hand, 'name')), owner, list(_field(hand, 'hand'))))
        except Exception:
            logging.exception(f"{binding.name}: could not render scored hand")
            return
        binding.view.hand_history.append(entry)
        self._changed(binding)

    def reset_game_ui(self, binding: GameInstanceBinding, delay_ms: float = 0) -> Optional[ScheduledTask]:
        """Clear cards and total bet, now or once after ``delay_ms``.

        The deferred call looks at the binding's view as it is when it runs.
        """
        self.debug(f"reset_game_ui({binding.name}, {delay_ms})")
        if delay_ms > 0:
            return self.scheduler.call_later(delay_ms, self.reset_game_ui, binding, 0)
        self.dialog.hide(self.settings.reset_dialog_hide_ms)
        view = binding.view
        view.public_cards.clear()
        view.private_cards.clear()
        view.total_bet.set("0")
        self._changed(binding)
        return None

    def update_pot(self, binding: GameInstanceBinding):
        binding.view.pot_amount.set(binding.engine.pot)

    def update_total_bet(self, binding: GameInstanceBinding):
        engine = binding.engine
        binding.view.total_bet.set(engine.get_player(engine.own_pid).total_bet)

    def update_minimum_bet(self, binding: GameInstanceBinding):
        binding.view.bet_amount.set(binding.engine.minimum_bet)

    def is_dealer_successor(self, binding: GameInstanceBinding) -> bool:
        """True if the local player starts the next hand."""
        engine = binding.engine
        dealer = engine.get_dealer()
        return engine.get_next_player(dealer.private_id).private_id == engine.own_pid

    def _enable_betting_if_allowed(self, binding: GameInstanceBinding):
        if binding.hand_over or not binding.engine.can_bet:
            return
        self.update_minimum_bet(binding)
        binding.view.bet_button.enable()
        binding.view.fold_button.enable()

    def _maybe_auto_deal(self, binding: GameInstanceBinding) -> Optional[asyncio.Future]:
        engine = binding.engine
        if not (engine.betting_done and binding.auto_deal) or engine.game_done or binding.hand_over:
            return None
        if binding.deal_attempted:
            logging.debug(f"{binding.name}: deal already attempted this round")
            return None
        binding.deal_attempted = True
        try:
            result = engine.deal_cards()
        except DealRejected as e:
            logging.debug(f"{binding.name}: not our turn to deal ({e})")
            return None
        except Exception as e:
            binding.deal_attempted = False
            logging.error(f"{binding.name}: dealing failed: {e!r}")
            return None
        if not inspect.isawaitable(result):
            return None
        task = asyncio.ensure_future(result)
        self._deal_tasks.add(task)
        task.add_done_callback(partial(self._deal_finished, binding))
        return task

    def _deal_finished(self, binding: GameInstanceBinding, task: asyncio.Future):
        self._deal_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if isinstance(exc, DealRejected):
            logging.debug(f"{binding.name}: not our turn to deal ({exc})")
            return
        binding.deal_attempted = False
        logging.error(f"{binding.name}: dealing failed: {exc!r}")

    def _changed(self, binding: GameInstanceBinding):
        if self.notify is not None:
            self.notify(binding)

"""
Minimal event emitter used by the game engine and network collaborators.

Listeners are plain callables invoked synchronously, in subscription order,
with the positional arguments passed to ``emit``. ``wait_for`` gives a
one-shot awaitable for the next matching emission.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Tuple

Listener = Callable[..., Any]
Predicate = Callable[..., bool]


class EventEmitter:
    """Listener registry with one-shot awaitable waiters."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self._waiters: Dict[str, List[Tuple[asyncio.Future, Optional[Predicate]]]] = defaultdict(list)
        self._stats = {
            'events_emitted': 0,
            'events_handled': 0,
            'failed_listeners': 0,
        }

    def add_listener(self, event: str, listener: Listener) -> Listener:
        """Subscribe ``listener`` to ``event`` and return it (usable as a decorator)."""
        self._listeners[event].append(listener)
        return listener

    def remove_listener(self, event: str, listener: Listener) -> bool:
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            return False
        return True

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def emit(self, event: str, *args) -> int:
        """Deliver ``event`` to every listener, then resolve matching waiters.

        A failing listener is logged and does not stop delivery to the others.
        Returns the number of listeners that completed.
        """
        self._stats['events_emitted'] += 1
        handled = 0
        for listener in list(self._listeners.get(event, ())):
            try:
                listener(*args)
                handled += 1
            except Exception:
                self._stats['failed_listeners'] += 1
                logging.exception(f"Listener {getattr(listener, '__name__', listener)!r} failed on '{event}'")
        self._stats['events_handled'] += handled
        self._resolve_waiters(event, args)
        return handled

    def wait_for(self, event: str, predicate: Optional[Predicate] = None) -> asyncio.Future:
        """Return a future resolved by the next ``event`` whose args satisfy ``predicate``.

        The future's result is the single argument of the emission, or the
        tuple of arguments when there are several (``None`` when there are none).
        Must be called from within a running event loop.
        """
        future = asyncio.get_running_loop().create_future()
        self._waiters[event].append((future, predicate))
        return future

    def reject_waiters(self, event: str, exc: BaseException) -> int:
        """Fail every pending waiter for ``event`` with ``exc``."""
        waiters = self._waiters.pop(event, [])
        rejected = 0
        for future, _ in waiters:
            if not future.done():
                future.set_exception(exc)
                rejected += 1
        return rejected

    def get_stats(self) -> Dict[str, int]:
        return dict(self._stats)

    def _resolve_waiters(self, event: str, args: tuple):
        waiters = self._waiters.get(event)
        if not waiters:
            return
        remaining = []
        for future, predicate in waiters:
            if future.done():
                continue
            if predicate is not None:
                try:
                    matched = predicate(*args)
                except Exception:
                    logging.exception(f"Waiter predicate failed on '{event}'")
                    matched = False
                if not matched:
                    remaining.append((future, predicate))
                    continue
            if not args:
                future.set_result(None)
            elif len(args) == 1:
                future.set_result(args[0])
            else:
                future.set_result(args)
        if remaining:
            self._waiters[event] = remaining
        else:
            self._waiters.pop(event, None)

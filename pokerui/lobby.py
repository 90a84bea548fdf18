"""
Lobby handling: creating tables, joining announced ones and listing them.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Mapping, Optional, Set

from pokerui.config import Settings, get_settings
from pokerui.dialog import DialogNotifier
from pokerui.errors import TableError
from pokerui.interfaces import EVENT_TABLE_READY, NetworkService
from pokerui.ui.widgets import LobbyView, TableEntry


def _table_name(table: Any) -> Optional[str]:
    if isinstance(table, Mapping):
        return table.get('table_name')
    return getattr(table, 'table_name', None)


def _is_table(table_name: str, table: Any = None) -> bool:
    return _table_name(table) == table_name


@dataclass
class TableAnnouncement:
    """A table advertised by another peer, as listed in the lobby."""

    table_name: str
    player_count: int
    big_blind: Any = None
    small_blind: Any = None
    record: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "TableAnnouncement":
        info = record.get('table_info') or {}
        return cls(
            table_name=str(record['table_name']),
            # the announcing peer is not in its own list of required players
            player_count=len(record.get('required_pids') or ()) + 1,
            big_blind=info.get('big_blind'),
            small_blind=info.get('small_blind'),
            record=record,
        )


class LobbyController:
    """Turns lobby clicks into network calls and starts the resulting games."""

    def __init__(self, lobby: LobbyView, dialog: DialogNotifier,
                 settings: Optional[Settings] = None, notify=None):
        self.lobby = lobby
        self.dialog = dialog
        self.settings = settings or get_settings()
        self.notify = notify
        self.network: Optional[NetworkService] = None
        self._tasks: Set[asyncio.Future] = set()
        lobby.create_button.bind(self._create_clicked)

    def attach(self, network: NetworkService):
        self.network = network

    async def create_table(self, alias: str, table_name: str, total_seats: int,
                           big_blind: Any, small_blind: Any):
        """Create a table, wait until it is seated and start a game on it.

        ``total_seats`` includes the local player. Raises ``TableError`` if the
        table never becomes ready.
        """
        self.lobby.create_button.disable()
        self._changed()
        seat_count = int(total_seats) - 1
        info = {'big_blind': big_blind, 'small_blind': small_blind}
        logging.info(f"Creating table '{table_name}' for {seat_count} remote player(s)")

        ready = self.network.wait_for(EVENT_TABLE_READY, partial(_is_table, table_name))
        try:
            self.network.create_table(table_name, seat_count, info)
            table = await self._table_ready(ready)
        except Exception as e:
            ready.cancel()
            logging.error(f"Table '{table_name}' was not created: {e!r}")
            raise TableError(f"Table '{table_name}' was not created: {e}") from e

        game = self.network.create_game(table, {'alias': alias})
        game.start()
        return game

    async def create_from_form(self):
        lobby = self.lobby
        return await self.create_table(
            lobby.alias.value,
            lobby.table_name.value,
            int(lobby.num_players.value),
            lobby.big_blind.value,
            lobby.small_blind.value,
        )

    async def join_table(self, announcement: TableAnnouncement):
        """Join an announced table. Failures are reported in the dialog, not retried."""
        self._discard_entries(announcement.table_name)
        self._changed()
        logging.info(f"Joining table '{announcement.table_name}'")

        ready = self.network.wait_for(EVENT_TABLE_READY, partial(_is_table, announcement.table_name))
        try:
            self.network.join_table(announcement.record)
            # seating may have changed the table, so use the one that came back
            table = await self._table_ready(ready)
            game = self.network.create_game(table, {'alias': self.settings.join_alias})
            game.start()
        except Exception as e:
            ready.cancel()
            logging.warning(f"Could not join table '{announcement.table_name}': {e!r}")
            self.dialog.flash(str(e) or type(e).__name__, self.settings.join_error_notice_ms)
            self._changed()
            return None
        return game

    def on_table_announced(self, record: Optional[Mapping[str, Any]] = None) -> TableEntry:
        if record is None:
            # the event carried nothing; take the newest table the network knows of
            logging.warning("Table announcement without a record, using newest announced table")
            record = self.network.announced_tables[0]
        announcement = TableAnnouncement.from_record(record)
        self._discard_entries(announcement.table_name)
        entry = TableEntry(announcement)
        entry.bind(partial(self._join_clicked, announcement))
        self.lobby.add_table_entry(entry)
        logging.debug(f"Listed table '{announcement.table_name}' ({announcement.player_count} players)")
        self._changed()
        return entry

    async def _table_ready(self, ready: asyncio.Future):
        timeout = self.settings.table_ready_timeout
        if timeout and timeout > 0:
            return await asyncio.wait_for(ready, timeout)
        return await ready

    def _discard_entries(self, table_name: str):
        for entry in list(self.lobby.table_list):
            if entry.announcement.table_name == table_name:
                self.lobby.remove_table_entry(entry)

    def _create_clicked(self):
        return self._spawn(self.create_from_form())

    def _join_clicked(self, announcement: TableAnnouncement):
        return self._spawn(self.join_table(announcement))

    def _spawn(self, coro) -> asyncio.Future:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Future):
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logging.error(f"Lobby action failed: {exc}")

    def _changed(self):
        if self.notify is not None:
            self.notify(None)

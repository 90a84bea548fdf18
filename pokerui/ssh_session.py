"""
SSH session handling for pokerui.

Each connected user gets their own ``PokerUI``. Typed commands act as clicks
on the view's buttons, and the screen is repainted whenever the UI reports
a change.
"""

import asyncio
import logging
from typing import Callable, Optional

from pokerui.config import Settings, get_settings
from pokerui.controller import PokerUI
from pokerui.interfaces import EVENT_VIEW_UPDATED
from pokerui.terminal_ui import TerminalUI
from pokerui.ui.colors import Colors
from pokerui.ui.widgets import GameView
from pokerui.version import get_version_info

HELP_LINES = [
    "🎰 Commands:",
    "  help                                     Show this help",
    "  show                                     Redraw the screen",
    "  lobby                                    Go back to the lobby",
    "  game                                     Return to the current game",
    "  create <alias> <table> <seats> <big> <small>",
    "                                           Create a table and wait for players",
    "  join <n>                                 Join announced table number n",
    "  bet [amount]                             Bet (defaults to the minimum bet)",
    "  fold                                     Fold this hand",
    "  newhand                                  Start the next hand when it is your deal",
    "  autodeal on|off                          Toggle automatic dealing",
    "  quit                                     Disconnect",
]


class UISession:
    """One user's terminal attached to a ``PokerUI``."""

    def __init__(self, stdin, stdout, stderr, network_factory: Optional[Callable] = None,
                 username: Optional[str] = None, settings: Optional[Settings] = None,
                 start_reader: bool = True):
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self._input_buffer = ""
        self._running = True
        self._should_exit = False
        self._repaint_pending = False
        self._reader_task: Optional[asyncio.Task] = None
        self._closed = asyncio.Event()
        self._username = username or "guest"
        self.settings = settings or get_settings()

        self.ui = PokerUI(GameView(element_id="game"), settings=self.settings)
        self.tui = TerminalUI(self._username)
        self.ui.add_listener(EVENT_VIEW_UPDATED, self._on_view_updated)

        version = get_version_info()['version']
        self._write(f"{Colors.BOLD}{Colors.YELLOW}🎰 Welcome to pokerui {version}! 🎰{Colors.RESET}\r\n")
        self._write(f"🎭 Logged in as: {Colors.CYAN}{self._username}{Colors.RESET}\r\n")
        self._write(f"💡 Type '{Colors.GREEN}help{Colors.RESET}' for commands.\r\n\r\n❯ ")

        if network_factory is not None:
            self.ui.network = network_factory(self.settings)
        else:
            logging.warning("No network service configured; lobby will stay empty")

        if start_reader:
            self._reader_task = asyncio.create_task(self._read_input())

    async def wait_closed(self):
        await self._closed.wait()

    async def _stop(self):
        if not self._closed.is_set():
            logging.debug(f"UI event stats for {self._username}: {self.ui.get_stats()}")
        self._should_exit = True
        self._running = False
        self._closed.set()

    async def _read_input(self):
        """Continuously read input from stdin."""
        try:
            while self._running and not self._should_exit:
                data = await self._stdin.read(1)
                if not data:
                    break
                char = data.decode('utf-8', errors='ignore') if isinstance(data, bytes) else data
                for c in char:
                    await self._handle_char(c)
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logging.exception(f"Input reader error for {self._username}: {e}")
        finally:
            logging.info(f"Session for {self._username} ending")
            await self._stop()

    async def _handle_char(self, char: str):
        if char in ('\r', '\n'):
            cmd = self._input_buffer.strip()
            self._input_buffer = ""
            self._write("\r\n")
            await self.process_command(cmd)
        elif char in ('\x7f', '\x08'):
            if self._input_buffer:
                self._input_buffer = self._input_buffer[:-1]
                self._write('\b \b')
        elif char == '\x03':
            self._input_buffer = ""
            self._write("^C\r\n❯ ")
        elif char == '\x04':
            self._write("Goodbye!\r\n")
            await self._stop()
        elif 32 <= ord(char) < 127:
            self._input_buffer += char
            self._write(char)

    async def process_command(self, cmd: str):
        """Run one typed command."""
        parts = cmd.split()
        if not parts:
            self._prompt()
            return
        name, args = parts[0].lower(), parts[1:]

        if name in ("quit", "exit"):
            self._write("Goodbye!\r\n")
            await self._stop()
            return

        handler = {
            'help': self._show_help,
            'show': self._show,
            'tables': self._show,
            'lobby': self._go_lobby,
            'game': self._go_game,
            'create': self._create,
            'join': self._join,
            'bet': self._bet,
            'fold': self._fold,
            'newhand': self._new_hand,
            'autodeal': self._auto_deal,
        }.get(name)

        if handler is None:
            self._message(f"❓ Unknown command: {cmd}\r\n💡 Type '{Colors.GREEN}help{Colors.RESET}' for available commands.")
            return
        try:
            handler(args)
        except Exception as e:
            logging.exception(f"Command '{cmd}' failed for {self._username}")
            self._message(f"❌ {Colors.RED}{e}{Colors.RESET}")

    def _show_help(self, args):
        self._message("\r\n".join(HELP_LINES))

    def _show(self, args):
        self.repaint()

    def _go_lobby(self, args):
        active = self.ui.active
        if active is not None:
            active.view.hide()
        self.ui.lobby.show()
        self.repaint()

    def _go_game(self, args):
        active = self.ui.active
        if active is None:
            self._message("❌ No game in progress")
            return
        self.ui.lobby.hide()
        active.view.show()
        self.repaint()

    def _create(self, args):
        if len(args) != 5:
            self._message("❌ Usage: create <alias> <table> <seats> <big> <small>")
            return
        if self.ui.network is None:
            self._message("❌ No network service available")
            return
        lobby = self.ui.lobby
        alias, table, seats, big, small = args
        if not seats.isdigit() or int(seats) < 2:
            self._message("❌ Seats must be a number of at least 2")
            return
        lobby.alias.set(alias)
        lobby.table_name.set(table)
        lobby.num_players.set(seats)
        lobby.big_blind.set(big)
        lobby.small_blind.set(small)
        if not lobby.create_button.click():
            self._message("⏳ A table is already being created")
            return
        self._message(f"✅ Table '{table}' requested, waiting for {int(seats) - 1} player(s)...")

    def _join(self, args):
        entries = self.ui.lobby.table_list
        if len(args) != 1 or not args[0].isdigit() or not 1 <= int(args[0]) <= len(entries):
            self._message(f"❌ Usage: join <n> (1-{len(entries)})" if entries else "❌ No tables announced yet")
            return
        entry = entries[int(args[0]) - 1]
        entry.click()
        self._message(f"⏳ Joining '{entry.announcement.table_name}'...")

    def _require_game(self):
        active = self.ui.active
        if active is None:
            self._message("❌ No game in progress")
        return active

    def _bet(self, args):
        active = self._require_game()
        if active is None:
            return
        if args:
            active.view.bet_amount.set(args[0])
        if not active.view.bet_button.click():
            self._message("⏳ You can't bet right now")

    def _fold(self, args):
        active = self._require_game()
        if active is not None and not active.view.fold_button.click():
            self._message("⏳ You can't fold right now")

    def _new_hand(self, args):
        active = self._require_game()
        if active is not None and not active.view.new_hand_button.click():
            self._message("⏳ The next hand isn't yours to start")

    def _auto_deal(self, args):
        if not args or args[0].lower() not in ("on", "off"):
            self._message(f"Auto-deal is {'on' if self.ui.auto_deal else 'off'}. Usage: autodeal on|off")
            return
        self.ui.auto_deal = args[0].lower() == "on"
        self.repaint()

    def _on_view_updated(self, binding=None):
        if self._repaint_pending or not self._running:
            return
        self._repaint_pending = True
        asyncio.get_running_loop().call_soon(self.repaint)

    def repaint(self):
        self._repaint_pending = False
        screen = self.tui.render(self.ui)
        self._write(screen.replace("\n", "\r\n") + "\r\n\r\n❯ " + self._input_buffer)

    def _message(self, text: str):
        self._write(f"{text}\r\n\r\n")
        self._prompt()

    def _prompt(self):
        self._write("❯ ")

    def _write(self, text: str):
        try:
            self._stdout.write(text)
        except Exception as e:
            logging.debug(f"Write to {self._username} failed: {e}")

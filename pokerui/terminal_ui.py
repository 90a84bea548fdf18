"""
Terminal renderer for pokerui views.

Keeps presentation out of the controllers: SSH sessions call
``TerminalUI.render(ui)`` to get a colourised screen to send to the client.
"""

from typing import List, Optional

from .registry import GameInstanceBinding
from .ui.cards import cards_horizontal, cards_inline
from .ui.colors import Colors
from .ui.widgets import Button, Dialog, GameView, LobbyView


def _control(button: Button, command: str) -> str:
    if button.enabled and not button.hidden:
        return f"{Colors.ENABLED}{command}{Colors.RESET}"
    return f"{Colors.DISABLED}{command}{Colors.RESET}"


class TerminalUI:
    def __init__(self, player_name: str):
        self.player_name = player_name
        self.history_size = 5

    def render(self, ui) -> str:
        """Render whatever is currently visible for ``ui``."""
        out = [Colors.CLEAR_SCREEN, f"{Colors.BOLD}{Colors.YELLOW}🎰 POKER TABLE 🎰{Colors.RESET}",
               f"🎭 Playing as: {Colors.CYAN}{self.player_name}{Colors.RESET}", ""]
        if not ui.lobby.hidden:
            out.extend(self.render_lobby(ui.lobby))
        active: Optional[GameInstanceBinding] = ui.active
        if active is not None and not active.view.hidden:
            out.extend(self.render_game(active.view, auto_deal=active.auto_deal))
        dialog = self.render_dialog(ui.dialog_widget)
        if dialog:
            out.append("")
            out.append(dialog)
        return "\n".join(out)

    def render_lobby(self, lobby: LobbyView) -> List[str]:
        out = [f"{Colors.BOLD}{Colors.CYAN}🏠 Lobby{Colors.RESET}"]
        if lobby.table_list:
            out.append(f"{Colors.BOLD}Announced tables:{Colors.RESET}")
            for index, entry in enumerate(lobby.table_list, start=1):
                name, *details = entry.lines
                out.append(f"  {Colors.BOLD}[{index}]{Colors.RESET} {Colors.GREEN}{name}{Colors.RESET}")
                for line in details:
                    out.append(f"      {Colors.DIM}{line}{Colors.RESET}")
        else:
            out.append(f"{Colors.DIM}No tables announced yet...{Colors.RESET}")
        out.append("")
        out.append(f"💡 {_control(lobby.create_button, 'create <alias> <table> <seats> <big> <small>')}"
                   f"  or  {Colors.GREEN}join <n>{Colors.RESET}")
        return out

    def render_game(self, view: GameView, auto_deal: bool = True) -> List[str]:
        out = [f"{Colors.BOLD}{Colors.CYAN}🃏 {view.name}{Colors.RESET}", ""]
        out.append(f"{Colors.BOLD}{Colors.GREEN}💰 POT: ${view.pot_amount.value}{Colors.RESET}")
        out.append(f"{Colors.DIM}Your total bet: ${view.total_bet.value}{Colors.RESET}")
        out.append("")

        if view.public_cards.cards:
            out.append(f"{Colors.BOLD}{Colors.CYAN}🃏 Community Cards:{Colors.RESET}")
            out.append(cards_horizontal(view.public_cards.cards))
            out.append("")

        if view.private_cards.cards:
            out.append(f"{Colors.BOLD}{Colors.YELLOW}🎴 Your Cards:{Colors.RESET}")
            out.append(cards_horizontal(view.private_cards.cards))
            out.append("")

        if view.hand_history.entries:
            out.append(f"{Colors.BOLD}{Colors.MAGENTA}📜 Hand History:{Colors.RESET}")
            for entry in view.hand_history.entries[-self.history_size:]:
                out.append(f"  {Colors.BOLD}{entry.header}{Colors.RESET}")
                for hand in entry.hands:
                    out.append(f"    {hand.name} - {hand.owner}: {cards_inline(hand.cards)}")
            out.append("")

        out.append(f"{Colors.DIM}Auto-deal: {'on' if auto_deal else 'off'}{Colors.RESET}")
        out.append(
            f"{Colors.BOLD}Actions:{Colors.RESET} "
            f"{_control(view.bet_button, f'bet [{view.bet_amount.value}]')}, "
            f"{_control(view.fold_button, 'fold')}, "
            f"{_control(view.new_hand_button, 'newhand')}"
        )
        return out

    def render_dialog(self, dialog: Dialog) -> str:
        if not dialog.is_open:
            return ""
        return f"{Colors.BOLD}{Colors.YELLOW}💬 {dialog.contents}{Colors.RESET}"

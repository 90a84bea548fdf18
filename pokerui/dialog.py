"""
Transient message display.
"""

import logging
from typing import Optional

from pokerui.scheduler import ScheduledTask, Scheduler
from pokerui.ui.widgets import Dialog


class DialogNotifier:
    """Shows short messages in the shared dialog and hides them later.

    There is no queue: a second ``show`` overwrites the first, and a pending
    delayed hide closes whatever is on screen when it fires.
    """

    def __init__(self, dialog: Dialog, scheduler: Scheduler):
        self.dialog = dialog
        self.scheduler = scheduler

    def show(self, text: str):
        logging.debug(f"Dialog: {text}")
        self.dialog.open(text)

    def hide(self, delay_ms: float = 0) -> Optional[ScheduledTask]:
        if delay_ms > 0:
            return self.scheduler.call_later(delay_ms, self.hide, 0)
        self.dialog.close()
        return None

    def flash(self, text: str, delay_ms: float) -> Optional[ScheduledTask]:
        """Show ``text`` and hide it after ``delay_ms``."""
        self.show(text)
        return self.hide(delay_ms)

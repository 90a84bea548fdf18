"""
Levelled diagnostic output for the UI controller.
"""

import logging
import pprint
from typing import Any


class DebugSink:
    """Routes diagnostic messages to a logger.

    ``kind`` is "log" for tracing, "err" or "error" for failures, and "dir"
    to dump an object's structure.
    """

    def __init__(self, name: str = "pokerui"):
        self.logger = logging.getLogger(name)

    def __call__(self, msg: Any, kind: str = "log"):
        if kind in ("err", "error"):
            self.logger.error(msg)
        elif kind == "dir":
            self.logger.debug(pprint.pformat(msg))
        else:
            self.logger.debug(msg)

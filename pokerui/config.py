"""
Configuration for pokerui.
Values come from the process environment, falling back to a ``.env`` file
and then to built-in defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return float(value)


@dataclass
class Settings:
    """Runtime settings for the UI controller and the SSH host."""

    auto_deal: bool = True
    connected_notice_ms: int = 3000
    join_error_notice_ms: int = 4000
    reset_dialog_hide_ms: int = 3000
    join_alias: str = "A player"
    # seconds; 0 waits for table-ready indefinitely
    table_ready_timeout: float = 0.0
    server_host: str = "0.0.0.0"
    server_port: int = 22223
    host_key_path: str = str(Path(__file__).resolve().parent.parent / "pokerui_host_key")
    network_factory: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str] = ".env") -> "Settings":
        """Build settings from the environment, loading ``env_file`` first if present.

        Variables already set in the real environment win over the file.
        """
        if env_file:
            load_dotenv(env_file, override=False)

        defaults = cls()
        return cls(
            auto_deal=_env_bool('POKERUI_AUTO_DEAL', defaults.auto_deal),
            connected_notice_ms=_env_int('POKERUI_CONNECTED_NOTICE_MS', defaults.connected_notice_ms),
            join_error_notice_ms=_env_int('POKERUI_JOIN_ERROR_NOTICE_MS', defaults.join_error_notice_ms),
            reset_dialog_hide_ms=_env_int('POKERUI_RESET_DIALOG_HIDE_MS', defaults.reset_dialog_hide_ms),
            join_alias=os.getenv('POKERUI_JOIN_ALIAS') or defaults.join_alias,
            table_ready_timeout=_env_float('POKERUI_TABLE_READY_TIMEOUT', defaults.table_ready_timeout),
            server_host=os.getenv('SERVER_HOST') or defaults.server_host,
            server_port=_env_int('SERVER_PORT', defaults.server_port),
            host_key_path=os.getenv('POKERUI_HOST_KEY') or defaults.host_key_path,
            network_factory=os.getenv('POKERUI_NETWORK_FACTORY') or defaults.network_factory,
            log_level=(os.getenv('LOG_LEVEL') or defaults.log_level).upper(),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings():
    global _settings
    _settings = None

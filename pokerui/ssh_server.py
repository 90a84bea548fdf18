"""
SSH server hosting one pokerui session per connection.
"""

import asyncio
import importlib
import logging
from pathlib import Path
from typing import Callable, Optional

import asyncssh

from pokerui.config import Settings, get_settings
from pokerui.ssh_session import UISession


def load_network_factory(target: str) -> Callable:
    """Resolve ``"package.module:callable"`` to the network service factory.

    The factory is called with the ``Settings`` for every new session and must
    return a fresh network service.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Network factory must look like 'module:callable', got {target!r}")
    module = importlib.import_module(module_name)
    factory = getattr(module, attr)
    if not callable(factory):
        raise TypeError(f"{target} is not callable")
    return factory


class _UISSHServer(asyncssh.SSHServer):
    def connection_made(self, conn):
        logging.debug("SSH connection established")

    def connection_lost(self, exc):
        if exc:
            logging.info(f"SSH connection lost: {exc}")

    def begin_auth(self, username):
        # tables are anonymous; the username is only used as a display name
        return False


class SSHServer:
    """SSH front end for pokerui."""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 network_factory: Optional[Callable] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.host = host or self.settings.server_host
        self.port = port or self.settings.server_port
        self.network_factory = network_factory
        self._server = None
        self.sessions = set()

    def _host_key(self) -> str:
        host_key_path = Path(self.settings.host_key_path)
        if not host_key_path.exists():
            try:
                key = asyncssh.generate_private_key("ssh-ed25519")
                host_key_path.write_bytes(key.export_private_key())
                host_key_path.chmod(0o600)
                logging.info(f"Generated SSH host key at {host_key_path}")
            except Exception as e:
                raise RuntimeError(f"Failed to generate host key: {e}")
        return str(host_key_path)

    async def handle_process(self, process):
        username = process.get_extra_info('username')
        session = UISession(process.stdin, process.stdout, process.stderr,
                            network_factory=self.network_factory, username=username,
                            settings=self.settings)
        self.sessions.add(session)
        try:
            await session.wait_closed()
        finally:
            self.sessions.discard(session)
            process.exit(0)

    async def start(self) -> None:
        self._server = await asyncssh.create_server(
            _UISSHServer,
            self.host,
            self.port,
            server_host_keys=[self._host_key()],
            process_factory=self.handle_process,
            encoding='utf-8',
            reuse_address=True,
        )
        logging.info(f"pokerui SSH server listening on {self.host}:{self.port}")

    async def serve_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            pass
        finally:
            self._server.close()

"""
Entry point for pokerui.
Starts the SSH server that hosts one poker UI per connection.
"""

import argparse
import asyncio
import logging

from pokerui.config import get_settings
from pokerui.ssh_server import SSHServer, load_network_factory


async def main(host: str, port: int, network: str):
    factory = load_network_factory(network) if network else None
    server = SSHServer(host=host, port=port, network_factory=factory)
    await server.serve_forever()


if __name__ == "__main__":
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the pokerui SSH front end")
    parser.add_argument("--host", default=settings.server_host, help="Host to bind to")
    parser.add_argument("--port", default=settings.server_port, type=int, help="Port to bind to")
    parser.add_argument("--network", default=settings.network_factory,
                        help="Network service factory as 'module:callable'")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else getattr(logging, settings.log_level, logging.INFO))
    # Suppress AsyncSSH's verbose channel messages
    logging.getLogger('asyncssh').setLevel(logging.WARNING)

    if not args.network:
        print("⚠️  No --network factory given; sessions will only show an empty lobby")

    try:
        asyncio.run(main(args.host, args.port, args.network))
    except KeyboardInterrupt:
        print("\n👋 Server shutting down...")

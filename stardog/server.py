"""UDP game server: collects client inputs and broadcasts the game state."""

from __future__ import annotations

import argparse
import logging
import socket
import time
from collections.abc import Callable

from stardog.game import GameWorld, Player
from stardog.protocol import ProtocolError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5150
BUFFER_SIZE = 512
UPDATES_PER_SEC = 60.0
SENDS_PER_SEC = 5.0
UPDATE_INTERVAL = 1.0 / UPDATES_PER_SEC
SEND_INTERVAL = 1.0 / SENDS_PER_SEC


class GameServer:
    """A non-blocking UDP server driving one :class:`GameWorld`."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        world: GameWorld | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.world = world if world is not None else GameWorld()
        self._clock = clock
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            self._socket.bind((host, port))
            self._socket.setblocking(False)
        except OSError:
            self._socket.close()
            raise
        self._closed = False
        start = clock()
        self._last_update = start
        self._last_send = start

    @property
    def address(self) -> tuple:
        return self._socket.getsockname()

    @property
    def closed(self) -> bool:
        return self._closed

    def read_data(self) -> Player | None:
        """Read at most one datagram and apply it; return the sending player."""
        try:
            data, address = self._socket.recvfrom(BUFFER_SIZE)
        except BlockingIOError:
            return None
        except OSError as error:
            logger.warning("receive failed: %s", error)
            return None
        try:
            return self.world.receive_input(address, data)
        except ProtocolError as error:
            logger.warning("bad datagram from %s: %s", address, error)
        except RuntimeError as error:
            logger.warning("rejected %s: %s", address, error)
        return None

    def broadcast(self) -> None:
        """Send every player the scene with its own ship index as the id."""
        logger.debug("broadcast update")
        for address, payload in self.world.snapshots():
            try:
                self._socket.sendto(payload, address)
            except OSError as error:
                logger.warning("send to %s failed: %s", address, error)

    def update(self, now: float | None = None) -> None:
        """Read input, then step and broadcast when their intervals have passed."""
        if self._closed:
            return
        self.read_data()
        if now is None:
            now = self._clock()

        since_update = now - self._last_update
        if since_update >= UPDATE_INTERVAL:
            self.world.step(since_update)
            self._last_update = now

        if now - self._last_send >= SEND_INTERVAL:
            self.broadcast()
            self._last_send = now

    def close(self) -> None:
        if not self._closed:
            self._socket.close()
            self._closed = True

    def __enter__(self) -> GameServer:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the game server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    with GameServer(args.host, args.port) as server:
        host, port = server.address[:2]
        print(f"[SERVER] Receiving IP: {host}")
        print(f"[SERVER] Receiving Port: {port}")
        print("[SERVER] Ready to receive a datagram...")
        try:
            while True:
                server.update()
                time.sleep(0.001)
        except KeyboardInterrupt:
            pass
    return 0
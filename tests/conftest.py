"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import socket
import sys
import threading
from pathlib import Path
from typing import Callable, Iterator

import pytest


# Ensure src is in path
project_root = Path(__file__).resolve().parents[0].parent
src_dir = project_root / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


class EchoServer:
    """
    Loopback UDP server running in a background thread.

    By default every datagram is sent back unchanged. Set ``reply`` to a
    callable to answer with something else.
    """

    def __init__(self) -> None:
        self.reply: Callable[[bytes], bytes] = lambda data: data
        self.received: list[bytes] = []
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.settimeout(0.05)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    @property
    def port(self) -> int:
        return self._sock.getsockname()[1]

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        self._thread.join(timeout=2.0)
        self._sock.close()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                data, addr = self._sock.recvfrom(65535)
            except socket.timeout:
                continue
            except OSError:
                return
            self.received.append(data)
            self._sock.sendto(self.reply(data), addr)


@pytest.fixture
def echo_server() -> Iterator[EchoServer]:
    server = EchoServer()
    server.start()
    try:
        yield server
    finally:
        server.stop()


@pytest.fixture
def silent_port() -> Iterator[int]:
    """A bound UDP port that never answers."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture(scope="session")
def load_plugins():
    """Load all builtin plugins once per test session."""
    from udpecho.core.plugins import load_builtin_plugins
    load_builtin_plugins()

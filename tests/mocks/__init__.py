"""
Mock implementations for testing.

These mocks implement the plugin interfaces and can be used for
unit testing the echo client without touching the network.
"""

from __future__ import annotations

from typing import Any

from udpecho.core.plugins import Adapter, Message


class MockAdapter(Adapter):
    """
    Mock adapter for testing.

    Records all sent messages and allows pre-configuring received messages.
    Set ``open_error``, ``send_error`` or ``recv_error`` to an exception
    instance to make the matching call raise it.

    Usage:
        adapter = MockAdapter()
        adapter.recv_queue.append(Message(data=b"response"))
        adapter.open()
        adapter.send(Message(data=b"request"))
        response = adapter.recv(1.0)
        assert adapter.sent[0].data == b"request"
    """

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}
        self._is_open = False
        self.sent: list[Message] = []
        self.recv_queue: list[Message] = []
        self.recv_timeouts: list[float | None] = []
        self.open_count = 0
        self.close_count = 0
        self.open_error: Exception | None = None
        self.send_error: Exception | None = None
        self.recv_error: Exception | None = None

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        self.open_count += 1
        if self.open_error is not None:
            raise self.open_error
        self._is_open = True

    def close(self) -> None:
        self._is_open = False
        self.close_count += 1

    def send(self, msg: Message) -> None:
        if not self._is_open:
            raise RuntimeError("MockAdapter not open")
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(msg)

    def recv(self, timeout_s: float | None) -> Message | None:
        if not self._is_open:
            raise RuntimeError("MockAdapter not open")
        self.recv_timeouts.append(timeout_s)
        if self.recv_error is not None:
            raise self.recv_error
        if self.recv_queue:
            return self.recv_queue.pop(0)
        return None


class MockAdapterFactory:
    """Adapter factory for ``run_echo`` that hands out one shared MockAdapter."""

    def __init__(self, adapter: MockAdapter | None = None) -> None:
        self.adapter = adapter or MockAdapter()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def __call__(self, adapter_type: str, config: dict[str, Any]) -> Adapter:
        self.calls.append((adapter_type, config))
        self.adapter.config = config
        return self.adapter

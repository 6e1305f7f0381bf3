from __future__ import annotations

import socket
from typing import Any

from udpecho.core.plugins import Adapter, Message, register_adapter


DEFAULT_RECV_BUF = 65535
MAX_RECV_BUF = 1048576


def clamp_recv_buf(value: Any) -> int:
    # Validate buffer size: 1 byte to 1 MB
    return max(1, min(int(value), MAX_RECV_BUF))


class _UdpAdapter(Adapter):
    def __init__(self, config: dict[str, Any]) -> None:
        self._cfg = config
        self._sock: socket.socket | None = None
        self._dest: tuple[Any, ...] | None = None

    def open(self) -> None:
        host = str(self._cfg.get("host", "127.0.0.1"))
        port = int(self._cfg.get("port", 0))
        if not 0 <= port <= 65535:
            raise ValueError(f"udp adapter port out of range: {port}")
        family = int(self._cfg.get("family", socket.AF_INET))

        bind_host = self._cfg.get("bind_host")
        bind_port = self._cfg.get("bind_port")

        sock = socket.socket(family, socket.SOCK_DGRAM)
        try:
            if bind_host is not None or bind_port is not None:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                default_host = "::" if family == socket.AF_INET6 else "0.0.0.0"
                sock.bind((str(bind_host or default_host), int(bind_port or 0)))
        except OSError:
            sock.close()
            raise
        self._sock = sock
        sockaddr = self._cfg.get("sockaddr")
        self._dest = tuple(sockaddr) if sockaddr else (host, port)

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def send(self, msg: Message) -> None:
        if self._sock is None or self._dest is None:
            raise RuntimeError("udp adapter not open")
        self._sock.sendto(msg.data, self._dest)

    def recv(self, timeout_s: float | None) -> Message | None:
        if self._sock is None:
            raise RuntimeError("udp adapter not open")
        self._sock.settimeout(timeout_s)
        recv_buf = clamp_recv_buf(self._cfg.get("recv_buf", DEFAULT_RECV_BUF))
        try:
            # One spare byte tells a reply that overflowed from one that filled the buffer.
            data, addr = self._sock.recvfrom(recv_buf + 1)
        except TimeoutError:
            return None
        except socket.timeout:
            return None
        return Message(
            data=data[:recv_buf],
            meta={
                "src": {"host": addr[0], "port": addr[1]},
                "recv_buf": recv_buf,
                "truncated": len(data) > recv_buf,
            },
        )


@register_adapter("udp")
def udp_adapter(config: dict[str, Any]) -> Adapter:
    return _UdpAdapter(config)

from __future__ import annotations

import re
import socket
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from udpecho.core.artifacts import EventLogger, NullEventLogger
from udpecho.core.config import ClientConfig
from udpecho.core.console import Console
from udpecho.core.errors import (
    EchoError,
    InvalidPortFormat,
    PortOutOfRange,
    ReceiveError,
    ReceiveTimeout,
    SendError,
    SocketOpenError,
    UnresolvableHost,
    UsageError,
)
from udpecho.core.plugins import Adapter, Message, create_adapter, load_builtin_plugins


MIN_PORT = 0
MAX_PORT = 65535

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

AdapterFactory = Callable[[str, dict[str, Any]], Adapter]


@dataclass(frozen=True)
class Invocation:
    host: str
    port: str
    payload: str


@dataclass(frozen=True)
class Endpoint:
    family: int
    address: str
    port: int
    sockaddr: tuple[Any, ...]


@dataclass(frozen=True)
class EchoResult:
    host: str
    port: int
    payload: str
    sent: int
    received: bytes
    reply: str
    source: dict[str, Any]
    truncated: bool


def parse_invocation(args: Sequence[str]) -> Invocation:
    if len(args) < 3:
        raise UsageError()
    # Anything past <data> is ignored.
    return Invocation(host=args[0], port=args[1], payload=args[2])


def parse_port(text: str) -> int:
    if _DECIMAL_RE.fullmatch(text) is None:
        raise InvalidPortFormat(text)
    port = int(text)
    if port < MIN_PORT or port > MAX_PORT:
        raise PortOutOfRange(port)
    return port


def resolve_endpoint(host: str, port: int) -> Endpoint:
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
    except (OSError, UnicodeError) as e:
        raise UnresolvableHost(host) from e
    if not infos:
        raise UnresolvableHost(host)
    family, _type, _proto, _canon, sockaddr = infos[0]
    return Endpoint(family=int(family), address=str(sockaddr[0]), port=port, sockaddr=tuple(sockaddr))


def _reason(e: OSError) -> str:
    return e.strerror or str(e) or type(e).__name__


def _default_adapter_factory(adapter_type: str, config: dict[str, Any]) -> Adapter:
    load_builtin_plugins()
    return create_adapter(adapter_type, config)


def run_echo(
    invocation: Invocation,
    config: ClientConfig | None = None,
    *,
    console: Console | None = None,
    events: EventLogger | NullEventLogger | None = None,
    adapter_factory: AdapterFactory | None = None,
) -> EchoResult:
    """Send ``invocation.payload`` once and wait for one reply datagram.

    Raises one of the ``EchoError`` subclasses on the first failing step.
    The socket is closed on every path out of this function.
    """
    config = config or ClientConfig()
    console = console or Console(color=config.color)
    events = events or NullEventLogger()
    try:
        return _run(invocation, config, console, events, adapter_factory or _default_adapter_factory)
    except EchoError as e:
        events.log({"event": "error", "error": type(e).__name__, "message": str(e)})
        raise


def _run(
    invocation: Invocation,
    config: ClientConfig,
    console: Console,
    events: EventLogger | NullEventLogger,
    adapter_factory: AdapterFactory,
) -> EchoResult:
    port = parse_port(invocation.port)
    endpoint = resolve_endpoint(invocation.host, port)

    console.info(
        f"===== Starting to send UDP Echo Packet to '{invocation.host}:{port}' "
        f"with data '{invocation.payload}' ====="
    )

    data = invocation.payload.encode("utf-8", errors="replace")
    adapter = adapter_factory(
        "udp",
        {
            "host": endpoint.address,
            "port": endpoint.port,
            "family": endpoint.family,
            "sockaddr": endpoint.sockaddr,
            "recv_buf": config.recv_buf,
        },
    )
    try:
        adapter.open()
    except OSError as e:
        raise SocketOpenError(_reason(e)) from e

    try:
        try:
            adapter.send(Message(data=data))
        except OSError as e:
            raise SendError(_reason(e)) from e
        events.log(
            {
                "event": "tx",
                "dest": {"host": endpoint.address, "port": endpoint.port},
                "len": len(data),
                "data_hex": data.hex(),
            }
        )
        console.info("Data was sent.")

        try:
            reply = adapter.recv(config.timeout_s)
        except OSError as e:
            raise ReceiveError(_reason(e)) from e
        if reply is None:
            if config.timeout_s is None:
                raise ReceiveError("no reply datagram")
            raise ReceiveTimeout(config.timeout_s)
    finally:
        adapter.close()

    recv_buf = int(reply.meta.get("recv_buf", config.recv_buf))
    truncated = bool(reply.meta.get("truncated", False))
    source = dict(reply.meta.get("src", {}))
    events.log(
        {
            "event": "rx",
            "src": source,
            "len": len(reply.data),
            "data_hex": reply.data.hex(),
            "truncated": truncated,
        }
    )

    text = reply.data.decode("utf-8", errors="replace")
    console.info("Data was received.")
    console.info(f"===== Received Data: '{text}' =====")
    if truncated:
        console.info(f"Reply was truncated to {recv_buf} bytes.")

    return EchoResult(
        host=invocation.host,
        port=port,
        payload=invocation.payload,
        sent=len(data),
        received=reply.data,
        reply=text,
        source=source,
        truncated=truncated,
    )

"""
Error taxonomy for the echo client.

Every failure of a run is terminal and maps to exactly one of these
exceptions. The CLI prints ``str(error)`` to standard error and exits
with ``error.exit_code``.
"""

from __future__ import annotations


USAGE_TEXT = (
    "No arguments given! Should be <host> <port> <data>. "
    "The host can be a hostname or an ip address."
)


class EchoError(Exception):
    exit_code = 1


class UsageError(EchoError):
    exit_code = 2

    def __init__(self, message: str = USAGE_TEXT) -> None:
        super().__init__(message)


class InvalidPortFormat(EchoError):
    def __init__(self, port: str) -> None:
        super().__init__(f"The given port is not a valid number! '{port}'")
        self.port = port


class PortOutOfRange(EchoError):
    def __init__(self, port: int) -> None:
        super().__init__(f"The given port is out of range! '{port}'")
        self.port = port


class UnresolvableHost(EchoError):
    def __init__(self, host: str) -> None:
        super().__init__(f"The given hostname/ip is not valid! '{host}'")
        self.host = host


class SocketOpenError(EchoError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Could not open socket! ({reason})")


class SendError(EchoError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Packet error occurred! ({reason})")


class ReceiveError(EchoError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Packet error occurred! ({reason})")


class ReceiveTimeout(ReceiveError):
    def __init__(self, timeout_s: float) -> None:
        EchoError.__init__(self, f"No reply received within {timeout_s:g} seconds!")
        self.timeout_s = timeout_s

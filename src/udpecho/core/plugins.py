from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(frozen=True)
class Message:
    data: bytes
    meta: dict[str, Any] = field(default_factory=dict)


class Adapter(ABC):
    @abstractmethod
    def open(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def send(self, msg: Message) -> None: ...

    @abstractmethod
    def recv(self, timeout_s: float | None) -> Message | None: ...


_ADAPTERS: dict[str, Callable[[dict[str, Any]], Adapter]] = {}


def register_adapter(name: str) -> Callable[[Callable[[dict[str, Any]], Adapter]], Callable[[dict[str, Any]], Adapter]]:
    def _decorator(factory: Callable[[dict[str, Any]], Adapter]) -> Callable[[dict[str, Any]], Adapter]:
        _ADAPTERS[name] = factory
        return factory

    return _decorator


def create_adapter(adapter_type: str, config: dict[str, Any]) -> Adapter:
    if adapter_type not in _ADAPTERS:
        raise KeyError(f"Unknown adapter type: {adapter_type}")
    return _ADAPTERS[adapter_type](config)


def load_builtin_plugins() -> None:
    # Import for side-effects (registration).
    from udpecho.plugins import adapters as _adapters  # noqa: F401

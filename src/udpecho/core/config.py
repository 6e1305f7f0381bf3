from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from udpecho.plugins.adapters.ethernet.udp import DEFAULT_RECV_BUF, MAX_RECV_BUF


COLOR_MODES = ("auto", "always", "never")


@dataclass(frozen=True)
class ClientConfig:
    timeout_s: float | None = None
    recv_buf: int = DEFAULT_RECV_BUF
    color: str = "auto"
    events_path: Path | None = None

    def with_overrides(self, **overrides: Any) -> ClientConfig:
        # None means "not given on the command line".
        given = {key: value for key, value in overrides.items() if value is not None}
        if not given:
            return self
        return validate_client_config(replace(self, **given))


def validate_client_config(cfg: ClientConfig) -> ClientConfig:
    if cfg.timeout_s is not None and cfg.timeout_s <= 0:
        raise ValueError(f"Invalid config: timeout_s must be > 0, got {cfg.timeout_s}")
    if not 1 <= cfg.recv_buf <= MAX_RECV_BUF:
        raise ValueError(f"Invalid config: recv_buf must be within 1..{MAX_RECV_BUF}, got {cfg.recv_buf}")
    if cfg.color not in COLOR_MODES:
        raise ValueError(f"Invalid config: color must be one of {', '.join(COLOR_MODES)}, got {cfg.color!r}")
    return cfg


def load_config_file(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    if suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    raise ValueError(f"Unsupported config file type: {path.name}")


def parse_client_config(*, config_dir: Path, merged: Any) -> ClientConfig:
    if merged is None:
        return ClientConfig()
    if not isinstance(merged, dict):
        raise ValueError("Invalid config: top level must be a mapping")

    client = merged.get("client")
    if client is None:
        client = {}
    if not isinstance(client, dict):
        raise ValueError("Invalid config: client must be a mapping")

    unknown = sorted(set(client) - {"timeout_s", "recv_buf", "color", "events"})
    if unknown:
        raise ValueError(f"Unknown client config keys: {', '.join(unknown)}")

    timeout_s = client.get("timeout_s")
    try:
        cfg = ClientConfig(
            timeout_s=None if timeout_s is None else float(timeout_s),
            recv_buf=int(client.get("recv_buf", DEFAULT_RECV_BUF)),
            color=str(client.get("color", "auto")).lower(),
            events_path=resolve_path(config_dir, client.get("events")),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid config: {e}") from e
    return validate_client_config(cfg)


def load_client_config(path: Path | None) -> ClientConfig:
    if path is None:
        return ClientConfig()
    path = path.resolve()
    return parse_client_config(config_dir=path.parent, merged=load_config_file(path))


def resolve_path(config_dir: Path, maybe_path: str | None) -> Path | None:
    if maybe_path is None:
        return None
    path = Path(maybe_path)
    if path.is_absolute():
        return path
    return (config_dir / path).resolve()

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


class EventLogger:
    def __init__(self, path: Path) -> None:
        self._path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        self._fp = path.open("a", encoding="utf-8", newline="\n")

    def log(self, event: dict[str, Any]) -> None:
        record = {"ts": datetime.now(timezone.utc).isoformat()}
        record.update(event)
        self._fp.write(json.dumps(record, ensure_ascii=False) + "\n")
        self._fp.flush()

    def close(self) -> None:
        self._fp.close()


class NullEventLogger:
    def log(self, event: dict[str, Any]) -> None:
        pass

    def close(self) -> None:
        pass


def open_event_logger(path: Path | None) -> EventLogger | NullEventLogger:
    if path is None:
        return NullEventLogger()
    return EventLogger(path)

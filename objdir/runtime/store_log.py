from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from objdir.runtime.events import StoreEvent


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


class StoreLogger:
    """
    JSON Lines log of a store run: one event per directory created and per
    entry stored, recursed into, skipped or failed.
    """

    def __init__(self, log_path: Path):
        log_path.parent.mkdir(parents=True, exist_ok=True)
        self.path = log_path

    def write(self, event: StoreEvent) -> None:
        line = json.dumps(asdict(event), ensure_ascii=False)
        with self.path.open("a", encoding="utf-8") as log_file:
            print(line, file=log_file)

    def record(
        self,
        *,
        handler: str,
        path_in_source: str,
        destination: str,
        action: str,
        message: Optional[str] = None,
    ) -> StoreEvent:
        event = StoreEvent(_utc_timestamp(), handler, path_in_source, destination, action, message)
        self.write(event)
        return event

    def read_events(self) -> List[StoreEvent]:
        if not self.path.exists():
            return []
        with self.path.open(encoding="utf-8") as log_file:
            return [StoreEvent(**json.loads(line)) for line in log_file if line.strip()]

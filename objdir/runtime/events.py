from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class StoreEvent:
    timestamp: str
    handler: str
    path_in_source: str
    destination: str

    action: str # "directory" | "stored" | "recursed" | "skipped" | "error"
    message: Optional[str] = None

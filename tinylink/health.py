"""Process-level health information."""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True)
class ProcessInfo:
    """Captured once at process start and only read afterwards."""

    version: str
    started_at: float = field(default_factory=time.monotonic)

    @classmethod
    def capture(cls, version: str) -> "ProcessInfo":
        return cls(version=version)

    def uptime_seconds(self) -> int:
        return int(time.monotonic() - self.started_at)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "ok": True,
            "version": self.version,
            "uptime": self.uptime_seconds(),
            "timestamp": datetime.now(timezone.utc),
        }

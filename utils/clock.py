# utils/clock.py
from __future__ import annotations
import time
from datetime import datetime, timezone

class SystemClock:
    """Reloj real: hora UTC y sleep bloqueante. En tests se sustituye por uno falso."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

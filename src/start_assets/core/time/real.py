"""Real clock using time.sleep() and datetime.now()."""

import time
from datetime import UTC, datetime

from start_assets.core.time.abc import Time


class RealTime(Time):
    """Production implementation using the system clock."""

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def now(self) -> datetime:
        return datetime.now(UTC)

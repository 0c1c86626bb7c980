"""Fake clock for testing.

FakeTime records sleep() calls without sleeping and reports a fixed
current time.
"""

from datetime import UTC, datetime

from start_assets.core.time.abc import Time


class FakeTime(Time):
    """In-memory fake implementation that tracks calls without sleeping.

    This class has NO public setup methods. All state is provided via constructor
    or captured during execution.
    """

    def __init__(self, *, now: datetime | None = None) -> None:
        """Create FakeTime.

        Args:
            now: Fixed value returned by now() (defaults to 2025-01-01 UTC)
        """
        self._now = now if now is not None else datetime(2025, 1, 1, tzinfo=UTC)
        self._sleep_calls: list[float] = []

    @property
    def sleep_calls(self) -> list[float]:
        """Get the list of sleep() calls that were made.

        This property is for test assertions only.
        """
        return self._sleep_calls

    def sleep(self, seconds: float) -> None:
        self._sleep_calls.append(seconds)

    def now(self) -> datetime:
        return self._now

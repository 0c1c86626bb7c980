from start_assets.core.time.abc import Time
from start_assets.core.time.fake import FakeTime
from start_assets.core.time.real import RealTime

__all__ = ["FakeTime", "RealTime", "Time"]

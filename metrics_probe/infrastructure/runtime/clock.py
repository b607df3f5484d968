"""Clock implementation."""

from datetime import datetime, timezone

from metrics_probe.domain.ports import ClockPort
from metrics_probe.domain.types import Timestamp


class SystemClock(ClockPort):
    """System clock implementation."""

    def now(self) -> Timestamp:
        """Get current UTC timestamp."""
        return datetime.now(timezone.utc)

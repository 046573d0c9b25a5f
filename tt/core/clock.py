"""Clock and scheduler seams the timer core is driven through.

The core never reads the wall clock or touches an event loop directly. A
``Clock`` hands out the current time, a ``Scheduler`` owns the once-a-second
tick registration. Tests swap both for manual versions.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any


class Clock(ABC):
    """Clock interface for dependency injection."""

    @abstractmethod
    def now(self) -> int:
        """Current time as whole seconds since the epoch."""

    def local(self, timestamp: int) -> datetime:
        """Local wall-clock breakdown of ``timestamp``."""
        return datetime.fromtimestamp(timestamp).astimezone()


class SystemClock(Clock):
    """Real clock implementation using the system time."""

    def now(self) -> int:
        """Current time as whole seconds since the epoch."""
        return int(time.time())


class Scheduler(ABC):
    """Periodic callback facility.

    ``callback`` returns True to keep ticking; a False return lets the
    scheduler drop the registration on its own.
    """

    @abstractmethod
    def register(self, period_seconds: float, callback: Callable[[], bool]) -> Any:
        """Call ``callback`` every ``period_seconds`` and return a handle for ``cancel``."""

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Stop the registration behind ``handle``."""

"""Scheduling policies for rate-limited remote calls."""

import time
from abc import ABC, abstractmethod
from typing import Callable, Optional


class CallScheduler(ABC):
    """Decides when the next remote call may start."""

    @abstractmethod
    def before_call(self) -> None:
        """Block until a call may start."""
        pass

    @abstractmethod
    def after_call(self) -> None:
        """Record that a call has completed."""
        pass


class MinIntervalScheduler(CallScheduler):
    """Keep at least ``min_interval`` seconds between one call ending and the next starting."""

    def __init__(
        self,
        min_interval: float = 1.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError(f"min_interval must not be negative, got {min_interval}")
        self.min_interval = min_interval
        self.clock = clock
        self.sleep = sleep
        self.last_completed: Optional[float] = None

    def before_call(self) -> None:
        if self.last_completed is None:
            return
        remaining = self.min_interval - (self.clock() - self.last_completed)
        if remaining > 0:
            self.sleep(remaining)

    def after_call(self) -> None:
        self.last_completed = self.clock()

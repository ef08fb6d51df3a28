"""Global reply cooldown shared by every dispatch."""

from __future__ import annotations

import enum
import threading
import time
from collections.abc import Callable


class CooldownState(enum.Enum):
    READY = "ready"
    COOLING = "cooling"


class GlobalCooldown:
    """Single rate-limit window for all replies, regardless of user or command.

    ``can_use`` and ``use`` each hold the lock only for their own read or
    write. Callers own the check-then-act sequence.
    """

    def __init__(self, duration: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._duration = max(0.0, float(duration))
        self._clock = clock
        self._last_used: float | None = None
        self._lock = threading.Lock()

    @property
    def duration(self) -> float:
        return self._duration

    def can_use(self) -> bool:
        """True if the window has elapsed (or the gate was never used)."""
        with self._lock:
            if self._last_used is None:
                return True
            return self._clock() - self._last_used >= self._duration

    def use(self) -> None:
        """Arm the gate from now. Does not check ``can_use``."""
        with self._lock:
            now = self._clock()
            if self._last_used is None or now > self._last_used:
                self._last_used = now

    def remaining(self) -> float:
        """Seconds left in the current window, 0 when ready."""
        with self._lock:
            if self._last_used is None:
                return 0.0
            return max(0.0, self._duration - (self._clock() - self._last_used))

    @property
    def state(self) -> CooldownState:
        return CooldownState.READY if self.can_use() else CooldownState.COOLING

    def __repr__(self) -> str:
        return f"GlobalCooldown(duration={self._duration}, state={self.state.value})"

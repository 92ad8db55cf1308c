"""
Countdown scheduling for the auto-reset after a finished round.

The engine never sleeps. It asks a scheduler to call it back after
an interval and keeps the returned handle so a pending tick can be
cancelled when a new round starts early.
"""
import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional


# ============================================================================
# Scheduler Interface
# ============================================================================

class ScheduledCall(ABC):
    """Handle for a pending callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call twice."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""


class CountdownScheduler(ABC):
    """Schedules one-shot callbacks for countdown ticks."""

    @abstractmethod
    def schedule(
        self, delay: float, callback: Callable[[], None]
    ) -> ScheduledCall:
        """
        Run callback once after delay seconds.

        Args:
            delay: Seconds to wait.
            callback: Zero-argument function to invoke.

        Returns:
            Handle that can cancel the call.
        """


# ============================================================================
# Manual Scheduler
# ============================================================================

@dataclass(eq=False)
class ManualCall(ScheduledCall):
    """Pending call held by a ManualScheduler."""

    delay: float
    callback: Callable[[], None]
    _cancelled: bool = False
    _scheduler: Optional["ManualScheduler"] = field(default=None, repr=False)

    def cancel(self) -> None:
        self._cancelled = True
        if self._scheduler is not None:
            self._scheduler._discard(self)
            self._scheduler = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass
class ManualScheduler(CountdownScheduler):
    """
    Scheduler driven by the caller.

    Nothing runs until advance() is called, which makes countdowns
    deterministic in tests and in headless play.
    """

    pending: List[ManualCall] = field(default_factory=list)

    def schedule(
        self, delay: float, callback: Callable[[], None]
    ) -> ManualCall:
        call = ManualCall(delay, callback, _scheduler=self)
        self.pending.append(call)
        return call

    def _discard(self, call: ManualCall) -> None:
        """Drop a cancelled call so it is not held until the next advance."""
        self.pending = [other for other in self.pending if other is not call]

    @property
    def active(self) -> List[ManualCall]:
        """Pending calls that have not been cancelled."""
        return [call for call in self.pending if not call.cancelled]

    def advance(self) -> int:
        """
        Run every call pending right now.

        Calls scheduled while running wait for the next advance().

        Returns:
            Number of callbacks that ran.
        """
        due, self.pending = self.pending, []
        ran = 0
        for call in due:
            if call.cancelled:
                continue
            call.callback()
            ran += 1
        return ran

    def run_until_idle(self, limit: int = 100) -> int:
        """Advance until nothing is pending; returns callbacks run."""
        total = 0
        for _ in range(limit):
            if not self.active:
                break
            total += self.advance()
        return total


# ============================================================================
# Asyncio Scheduler
# ============================================================================

class AsyncioCall(ScheduledCall):
    """Wraps an asyncio.TimerHandle."""

    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(CountdownScheduler):
    """
    Scheduler backed by an asyncio event loop.

    Callbacks run on the loop thread, so they never interleave with
    other handlers running on the same loop.
    """

    def __init__(
        self, loop: Optional[asyncio.AbstractEventLoop] = None
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            loop: Event loop to use; the running loop if omitted.
        """
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(
        self, delay: float, callback: Callable[[], None]
    ) -> AsyncioCall:
        return AsyncioCall(self.loop.call_later(delay, callback))

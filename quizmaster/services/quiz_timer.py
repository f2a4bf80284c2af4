"""
Per-quiz countdown driven by one-second ticks
"""
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def format_time(seconds: int) -> str:
    """Render seconds as M:SS"""
    minutes, remaining = divmod(max(seconds, 0), 60)
    return f"{minutes}:{remaining:02d}"


class QuizCountdown:
    """
    Countdown for a timed quiz

    The owner calls tick() once per second, or advance() to replay a span
    of elapsed time. Time is ignored until the quiz starts, while paused,
    and after expiry. Reaching zero calls on_expire exactly once, which is
    where the quiz gets auto-submitted.
    """

    def __init__(self, time_limit_minutes: Optional[int], on_expire: Optional[Callable[[], None]] = None):
        self.limit_seconds: Optional[int] = time_limit_minutes * 60 if time_limit_minutes else None
        self.remaining: Optional[int] = self.limit_seconds
        self.on_expire = on_expire
        self.started = False
        self.paused = False
        self._expired = False

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def elapsed(self) -> Optional[int]:
        """Seconds counted down so far, None for an untimed quiz"""
        if self.limit_seconds is None:
            return None
        return self.limit_seconds - self.remaining

    def start(self) -> None:
        self.started = True

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def tick(self) -> Optional[int]:
        """Advance one second and return the seconds left"""
        return self.advance(1)

    def advance(self, seconds: int) -> Optional[int]:
        """Advance several seconds at once, stopping at zero"""
        if self.remaining is None or not self.started or self.paused or self._expired:
            return self.remaining

        self.remaining = max(self.remaining - max(seconds, 0), 0)
        if self.remaining == 0:
            self._expired = True
            logger.info("Quiz time is up, auto-submitting")
            if self.on_expire:
                self.on_expire()
        return self.remaining

    def display(self) -> str:
        return format_time(self.remaining) if self.remaining is not None else ""

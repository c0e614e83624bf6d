"""A bounded queue of one-shot timers driven by a millisecond tick clock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

_MAX_ID = 0x7FFFFFFF

TimerCallback = Callable[[int, Any], None]


@dataclass
class _Timer:
    target_time: int
    timer_id: int
    callback: Optional[TimerCallback]
    caller: Any


class TimerQueue:
    """One-shot timers ordered by due time.

    ``clock`` returns the current time in milliseconds. At most ``capacity``
    timers may be pending at once.
    """

    def __init__(self, capacity: int, clock: Callable[[], int]) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._clock = clock
        self._active: List[_Timer] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._active)

    def set(self, time: float, callback: Optional[TimerCallback], caller: Any = None) -> int:
        """Schedule ``callback(timer_id, caller)`` in ``time`` seconds.

        Returns the new timer id, or 0 if the queue is full.
        """
        if len(self._active) >= self.capacity:
            return 0
        target = self._clock() + int(time * 1000.0)
        position = 0
        for pending in self._active:
            if target < pending.target_time:
                break
            position += 1
        timer = _Timer(target, self._next_id, callback, caller)
        self._active.insert(position, timer)

        self._next_id += 1
        if self._next_id > _MAX_ID:
            self._next_id = 1
        return timer.timer_id

    def kill(self, timer_id: int) -> int:
        """Cancel a pending timer; returns its id, or 0 if it was not pending."""
        for position, timer in enumerate(self._active):
            if timer.timer_id == timer_id:
                del self._active[position]
                return timer_id
        return 0

    def _fire_head(self) -> None:
        timer = self._active.pop(0)
        if timer.callback is not None:
            timer.callback(timer.timer_id, timer.caller)

    def check(self) -> int:
        """Run due timers and return how many fired.

        At most two due timers fire per call, plus any that are overdue by
        100 ms or more.
        """
        fired = 0
        while self._active and self._clock() >= self._active[0].target_time:
            self._fire_head()
            fired += 1
            if fired > 1:
                break
        while self._active and self._clock() >= self._active[0].target_time + 100:
            self._fire_head()
            fired += 1
        return fired
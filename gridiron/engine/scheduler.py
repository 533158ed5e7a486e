# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Virtual-time timer queue driving the match.

Nothing here reads the wall clock. Callers feed elapsed seconds into
:meth:`Scheduler.advance`; the pygame loop passes measured frame deltas and
tests pass whatever they like.
"""

from __future__ import annotations

import heapq
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """Cancellable reference to a scheduled callback.

    Parameters
    ----------
    callback : Callable[[], None]
        Function invoked when the timer fires.
    due : float
        Virtual time of the next firing.
    interval : float | None, optional
        Repeat period for recurring timers, ``None`` for one-shots.
    """

    def __init__(self, callback: Callable[[], None], due: float, interval: Optional[float] = None) -> None:
        """Record the callback and its first due time.

        Parameters
        ----------
        callback : Callable[[], None]
            Function invoked when the timer fires.
        due : float
            Virtual time of the next firing.
        interval : float | None, optional
            Repeat period for recurring timers, ``None`` for one-shots.
        """
        self.callback = callback
        self.due = due
        self.interval = interval
        self.cancelled = False

    @property
    def active(self) -> bool:
        """Return ``True`` until the timer is cancelled or a one-shot has fired."""
        return not self.cancelled

    def cancel(self) -> None:
        """Stop the timer from firing again. Safe to call repeatedly."""
        self.cancelled = True


class Scheduler:
    """Single-threaded queue of one-shot and repeating timers.

    Due timers fire in due-time order and timers due at the same instant fire
    in the order they were scheduled. A callback may schedule or cancel other
    timers, including ones that fall due within the same :meth:`advance`.
    """

    def __init__(self) -> None:
        """Start the virtual clock at zero with an empty queue."""
        self.now = 0.0
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._sequence = 0

    def _push(self, handle: TimerHandle) -> None:
        """Queue a handle at its current due time.

        Parameters
        ----------
        handle : TimerHandle
            Timer to enqueue.
        """
        heapq.heappush(self._queue, (handle.due, self._sequence, handle))
        self._sequence += 1

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` virtual seconds.

        Parameters
        ----------
        delay : float
            Seconds from now; negative values fire on the next advance.
        callback : Callable[[], None]
            Function to invoke.

        Returns
        -------
        TimerHandle
            Handle that can cancel the call.
        """
        handle = TimerHandle(callback, self.now + max(0.0, delay))
        self._push(handle)
        return handle

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` every ``interval`` virtual seconds until cancelled.

        Parameters
        ----------
        interval : float
            Period between calls; must be positive.
        callback : Callable[[], None]
            Function to invoke.

        Returns
        -------
        TimerHandle
            Handle that stops the repetition.

        Raises
        ------
        ValueError
            If ``interval`` is not positive.
        """
        if interval <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval}")
        handle = TimerHandle(callback, self.now + interval, interval)
        self._push(handle)
        return handle

    def advance(self, dt: float) -> int:
        """Move virtual time forward and fire everything that falls due.

        Parameters
        ----------
        dt : float
            Elapsed seconds; negative values are treated as zero.

        Returns
        -------
        int
            Number of callbacks invoked.
        """
        target = self.now + max(0.0, dt)
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue

            self.now = due
            if handle.interval is None:
                handle.cancelled = True
            else:
                handle.due = due + handle.interval
                self._push(handle)

            handle.callback()
            fired += 1

        self.now = target
        return fired

    def cancel_all(self) -> None:
        """Cancel and forget every pending timer."""
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()

    def pending(self) -> int:
        """Count timers that are still due to fire.

        Returns
        -------
        int
            Number of active queued timers.
        """
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

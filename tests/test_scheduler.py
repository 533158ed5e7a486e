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
"""Tests for the virtual-time scheduler."""

from typing import List

import pytest

from gridiron.engine.scheduler import Scheduler


class TestScheduler:
    """Timer ordering, repetition and cancellation."""

    def test_call_later_fires_once(self) -> None:
        """A one-shot fires when its delay has elapsed and never again."""
        scheduler = Scheduler()
        calls: List[float] = []
        handle = scheduler.call_later(1.0, lambda: calls.append(scheduler.now))

        assert scheduler.advance(0.5) == 0
        assert scheduler.advance(0.5) == 1
        assert calls == [1.0]
        assert not handle.active
        assert scheduler.advance(5.0) == 0

    def test_call_every_repeats(self) -> None:
        """A repeating timer fires once per interval inside a long advance."""
        scheduler = Scheduler()
        calls: List[float] = []
        scheduler.call_every(1.0, lambda: calls.append(scheduler.now))
        scheduler.advance(3.5)
        assert calls == [1.0, 2.0, 3.0]
        assert scheduler.now == 3.5

    def test_due_order_and_ties(self) -> None:
        """Earlier timers fire first; equal due times fire in scheduling order."""
        scheduler = Scheduler()
        order: List[str] = []
        scheduler.call_later(2.0, lambda: order.append("late"))
        scheduler.call_later(1.0, lambda: order.append("first"))
        scheduler.call_later(1.0, lambda: order.append("second"))
        scheduler.advance(2.0)
        assert order == ["first", "second", "late"]

    def test_cancel(self) -> None:
        """Cancelled timers never fire and are not counted as pending."""
        scheduler = Scheduler()
        calls: List[int] = []
        handle = scheduler.call_every(0.5, lambda: calls.append(1))
        assert scheduler.pending() == 1
        handle.cancel()
        handle.cancel()
        assert scheduler.pending() == 0
        scheduler.advance(2.0)
        assert calls == []

    def test_callback_can_cancel_itself(self) -> None:
        """A repeating callback that cancels its own handle stops repeating."""
        scheduler = Scheduler()
        calls: List[float] = []

        def once() -> None:
            calls.append(scheduler.now)
            handle.cancel()

        handle = scheduler.call_every(1.0, once)
        scheduler.advance(5.0)
        assert calls == [1.0]

    def test_callback_can_schedule_within_same_advance(self) -> None:
        """Timers scheduled by a callback fire in the same advance when they fall due."""
        scheduler = Scheduler()
        order: List[str] = []

        def chain() -> None:
            order.append("outer")
            scheduler.call_later(0.5, lambda: order.append("inner"))

        scheduler.call_later(1.0, chain)
        scheduler.advance(2.0)
        assert order == ["outer", "inner"]

    def test_cancel_all(self) -> None:
        """``cancel_all`` empties the queue."""
        scheduler = Scheduler()
        first = scheduler.call_later(1.0, lambda: None)
        scheduler.call_every(1.0, lambda: None)
        scheduler.cancel_all()
        assert scheduler.pending() == 0
        assert not first.active

    def test_invalid_interval(self) -> None:
        """Repeating timers need a positive interval."""
        with pytest.raises(ValueError):
            Scheduler().call_every(0.0, lambda: None)

    def test_negative_advance_is_ignored(self) -> None:
        """Time never runs backwards."""
        scheduler = Scheduler()
        scheduler.advance(1.0)
        scheduler.advance(-3.0)
        assert scheduler.now == 1.0

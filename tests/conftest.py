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
"""Shared fixtures for the engine tests."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional, Sequence, TypeVar

import pytest

from gridiron.engine.entity_store import EntityStore
from gridiron.engine.formation import get_formation
from gridiron.engine.match_engine import MatchSession
from gridiron.engine.scheduler import Scheduler
from gridiron.models.team import default_teams
from gridiron.utils.debug import MatchDebugger

T = TypeVar("T")


class ScriptedRandom:
    """Random source with scripted draws.

    ``choice`` returns the queued values in order (falling back to the first
    element once the queue is empty) and ``uniform`` always returns ``value``.
    """

    def __init__(self, choices: Iterable[str] = (), value: float = 0.0) -> None:
        self.choices: List[str] = list(choices)
        self.value = value
        self.uniform_calls = 0

    def choice(self, seq: Sequence[T]) -> T:
        if self.choices:
            wanted = self.choices.pop(0)
            assert wanted in seq, f"{wanted} not in {list(seq)}"
            return wanted  # type: ignore[return-value]
        return seq[0]

    def uniform(self, a: float, b: float) -> float:
        self.uniform_calls += 1
        return max(a, min(b, self.value))


@pytest.fixture
def debugger() -> Iterator[MatchDebugger]:
    """In-memory debugger so tests never write log files."""
    dbg = MatchDebugger(output_dir=None)
    yield dbg
    dbg.close()


@pytest.fixture
def store() -> EntityStore:
    """Entity store lined up in the landscape formation with zero velocities."""
    humans, robots = default_teams()
    entity_store = EntityStore(humans, robots)
    entity_store.place_formation(get_formation("landscape"), ScriptedRandom())
    return entity_store


@pytest.fixture
def make_session(debugger: MatchDebugger) -> Callable[..., MatchSession]:
    """Factory building sessions on a private scheduler with a scripted random source."""

    def build(
        choices: Iterable[str] = ("H1",),
        value: float = 0.0,
        orientation: str = "landscape",
        rng: Optional[object] = None,
    ) -> MatchSession:
        return MatchSession(
            rng=rng if rng is not None else ScriptedRandom(choices, value),
            scheduler=Scheduler(),
            debugger=debugger,
            orientation=orientation,
        )

    return build

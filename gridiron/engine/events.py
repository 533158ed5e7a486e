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
"""Event domain models for the match engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from gridiron.models.team import Side

EventType = Literal["match_start", "score", "period_break", "period_start", "game_end", "possession"]


@dataclass
class MatchEvent:
    """Snapshot of a noteworthy moment during a match.

    Parameters
    ----------
    timestamp : float
        Virtual seconds elapsed since the session was created.
    event_type : EventType
        Category of event (for example ``"score"`` or ``"possession"``).
    team : Side | None
        Side associated with the event, ``None`` for match-wide events.
    description : str
        Human-readable summary of what happened.
    """

    timestamp: float
    event_type: EventType
    team: Optional[Side]
    description: str

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
"""Period and countdown state machine gating the simulation.

Phases move ``idle -> playing -> ... -> ended``. The only mandatory pause is
the ``period_break`` after the first period; later periods roll over on their
own. ``scored`` is the short pause after a touchdown; the countdown and the
entities both stand still until the next kickoff.
"""

from __future__ import annotations

from typing import Literal, Optional

from gridiron.engine.config import ENGINE_CONFIG, SimulationConfig

MatchPhase = Literal["idle", "playing", "scored", "period_break", "ended"]
ClockTransition = Literal["none", "tick", "period_break", "next_period", "ended"]


class MatchClock:
    """Countdown clock with period bookkeeping.

    Parameters
    ----------
    config : SimulationConfig | None, optional
        Period length and count override; defaults to the engine configuration.
    """

    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        """Create an idle clock showing a full first period.

        Parameters
        ----------
        config : SimulationConfig | None, optional
            Period length and count override; defaults to the engine configuration.
        """
        self.config = config or ENGINE_CONFIG.simulation
        self.period = 1
        self.seconds_remaining = self.config.period_seconds
        self.phase: MatchPhase = "idle"

    @property
    def is_playing(self) -> bool:
        """Return ``True`` while entities should be simulated."""
        return self.phase == "playing"

    def start(self) -> None:
        """Reset to a full first period and begin play."""
        self.period = 1
        self.seconds_remaining = self.config.period_seconds
        self.phase = "playing"

    def tick_second(self) -> ClockTransition:
        """Count down one second and handle period expiry.

        Returns
        -------
        ClockTransition
            ``"none"`` when the clock is not running, ``"tick"`` for an
            ordinary decrement, otherwise the transition that expiry caused.
        """
        if not self.is_playing:
            return "none"

        self.seconds_remaining = max(0, self.seconds_remaining - 1)
        if self.seconds_remaining > 0:
            return "tick"
        return self._expire_period()

    def _expire_period(self) -> ClockTransition:
        """Apply the end-of-period rules.

        Returns
        -------
        ClockTransition
            ``"period_break"`` after the first period, ``"next_period"`` after
            the middle ones and ``"ended"`` after the last.
        """
        if self.period >= self.config.total_periods:
            self.phase = "ended"
            return "ended"

        if self.period == 1:
            # Period counter advances only once play resumes.
            self.phase = "period_break"
            return "period_break"

        self.period += 1
        self.seconds_remaining = self.config.period_seconds
        self.phase = "playing"
        return "next_period"

    def resume_after_break(self) -> bool:
        """Start the second period after the mandatory break.

        Returns
        -------
        bool
            ``False`` (and no change) unless the clock is in ``period_break``.
        """
        if self.phase != "period_break":
            return False
        self.period += 1
        self.seconds_remaining = self.config.period_seconds
        self.phase = "playing"
        return True

    def enter_scored_pause(self) -> bool:
        """Switch from ``playing`` to the post-touchdown pause.

        Returns
        -------
        bool
            ``False`` when play was not live.
        """
        if self.phase != "playing":
            return False
        self.phase = "scored"
        return True

    def leave_scored_pause(self) -> bool:
        """Return from the post-touchdown pause to ``playing``.

        Returns
        -------
        bool
            ``False`` when the clock was not paused for a score.
        """
        if self.phase != "scored":
            return False
        self.phase = "playing"
        return True

    def display(self) -> str:
        """Format the remaining time as ``M:SS``.

        Returns
        -------
        str
            Scoreboard text such as ``"0:07"``.
        """
        minutes, seconds = divmod(self.seconds_remaining, 60)
        return f"{minutes}:{seconds:02d}"

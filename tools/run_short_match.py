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
"""Run a whole match in virtual time and leave a debug log behind."""
from pathlib import Path

from gridiron.engine.match_engine import MatchSession
from gridiron.models.team import default_teams
from gridiron.utils.debug import MatchDebugger
from gridiron.utils.roster import load_profiles_from_json


def run_short_match(timestep: float = 0.04, max_seconds: float = 120.0) -> None:
    """Simulate a match without a window, resuming the break automatically.

    Parameters
    ----------
    timestep : float
        Virtual seconds fed to the scheduler per step (default one tick).
    max_seconds : float
        Safety limit on virtual time.
    """
    roster_path = Path(__file__).parent.parent / "data" / "roster.json"
    profiles = load_profiles_from_json(str(roster_path)) if roster_path.exists() else None
    humans, robots = default_teams(profiles)

    session = MatchSession(humans, robots, debugger=MatchDebugger())
    session.start_match()

    steps = 0
    while session.state.clock.phase != "ended" and session.scheduler.now < max_seconds:
        session.scheduler.advance(timestep)
        if session.state.clock.phase == "period_break":
            session.resume_after_period_break()
        steps += 1

    snapshot = session.snapshot()
    session.stop_match()
    print(f"Done after {session.scheduler.now:.1f}s of match time ({steps} steps)")
    print(f"Final score {snapshot.offense_score}-{snapshot.defense_score}, log: {session.debugger.log_path}")


if __name__ == "__main__":
    run_short_match()

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
"""Entry point for the interactive match and headless demo runs."""
import argparse
from pathlib import Path
from typing import List, Optional

from gridiron.engine.events import MatchEvent
from gridiron.engine.formation import ORIENTATIONS
from gridiron.engine.match_engine import MatchSession
from gridiron.models.player import PlayerProfile
from gridiron.models.team import default_teams
from gridiron.utils.debug import MatchDebugger
from gridiron.utils.roster import load_profiles_from_json  # For loading saved rosters


def load_profiles(roster_path: Optional[str]) -> Optional[List[PlayerProfile]]:
    """Read the human roster, falling back to the built-in one on failure.

    Parameters
    ----------
    roster_path : str | None
        Explicit roster file; ``data/roster.json`` is tried when omitted.

    Returns
    -------
    Optional[List[PlayerProfile]]
        Loaded profiles, or ``None`` to use the defaults.
    """
    roster_file = Path(roster_path) if roster_path else Path("data/roster.json")
    if not roster_file.exists():
        if roster_path:
            print(f"No roster file found at {roster_file}")
            print("Using the default roster...")
        return None

    try:
        return load_profiles_from_json(str(roster_file))
    except (KeyError, ValueError) as e:
        print(f"Error loading roster from {roster_file}: {e}")
        print("Falling back to the default roster...")
        return None


def print_event(event: MatchEvent) -> None:
    """Echo headline events to the console.

    Parameters
    ----------
    event : MatchEvent
        Event pushed by the session.
    """
    if event.event_type != "possession":
        print(f"[{event.timestamp:6.1f}s] {event.description}")


def build_parser() -> argparse.ArgumentParser:
    """Describe the command-line interface.

    Returns
    -------
    argparse.ArgumentParser
        Parser for :func:`main`.
    """
    parser = argparse.ArgumentParser(description="Humans vs robots mock football match.")
    parser.add_argument("--headless", action="store_true", help="Run without a window and print events.")
    parser.add_argument("--orientation", choices=ORIENTATIONS, default="landscape", help="Field orientation.")
    parser.add_argument("--roster", help="JSON file with the four human profiles.")
    parser.add_argument("--speed", type=float, default=None, help="Playback speed multiplier.")
    parser.add_argument("--log-dir", default="debug_logs", help="Directory for match debug logs.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Build a session and run it in a window or headless.

    Parameters
    ----------
    argv : List[str] | None, optional
        Command-line arguments; ``sys.argv`` is used when omitted.
    """
    args = build_parser().parse_args(argv)

    humans, robots = default_teams(load_profiles(args.roster))
    session = MatchSession(
        humans,
        robots,
        debugger=MatchDebugger(args.log_dir),
        orientation=args.orientation,
    )
    if args.speed is not None:
        session.simulation_speed = args.speed

    if args.headless:
        session.subscribe(print_event)
        try:
            session.run_realtime()
        except KeyboardInterrupt:
            print("\nMatch simulation interrupted.")
        finally:
            session.stop_match()
    else:
        from gridiron.visualizer.visualizer import start_visualizer

        print("Visualizer started. Press Start Match in the window to begin.")
        start_visualizer(session)

    snapshot = session.snapshot()
    print(f"\nFinal Score: {humans.name} {snapshot.offense_score} - {snapshot.defense_score} {robots.name}")

    touchdowns = [e for e in session.state.events if e.event_type == "score"]
    print("\nMatch Statistics:")
    print(f"{humans.name}: {sum(1 for e in touchdowns if e.team == 'offense')} touchdowns")
    print(f"{robots.name}: {sum(1 for e in touchdowns if e.team == 'defense')} touchdowns")


if __name__ == "__main__":
    main()

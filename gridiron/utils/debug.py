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
"""Structured logging utilities used to trace match sessions."""
import time
from collections import deque
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple


class MatchDebugger:
    """Helper object that streams structured match telemetry to disk.

    Every line is also kept in a bounded in-memory buffer so the visualizer
    can show a live feed without touching the file.

    Parameters
    ----------
    output_dir : str | None, default="debug_logs"
        Directory where new session logs are created; created automatically
        when missing. ``None`` keeps the log in memory only.
    history : int, default=200
        Number of recent lines retained in memory.
    """

    def __init__(self, output_dir: Optional[str] = "debug_logs", history: int = 200) -> None:
        """Initialise the debugger and start the first logging session.

        Parameters
        ----------
        output_dir : str | None
            Filesystem directory where log files are created, or ``None`` to
            skip writing a file.
        history : int
            Number of recent lines retained in memory.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[Tuple[int, str]] = deque(maxlen=history)
        self.start_new_session()

    def start_new_session(self) -> None:
        """Start a new debug logging session."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None

        if self.output_dir is None:
            return

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_path = self.output_dir / f"match_debug_{self.session_start}.txt"
        self.log_file = open(self.log_path, "w", encoding="utf-8")
        self.log_file.write(f"=== Match Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_entity_state(
        self,
        match_time: float,
        entity_id: str,
        team: str,
        position: Tuple[float, float],
        velocity: Tuple[float, float],
        has_ball: bool,
        behaviour: Optional[str] = None,
    ) -> None:
        """Log the current state of one player.

        Parameters
        ----------
        match_time : float
            Session time in seconds.
        entity_id : str
            Identifier of the tracked player, for example ``"H2"``.
        team : str
            ``"offense"`` or ``"defense"``.
        position : Tuple[float, float]
            Field coordinates (x, y) in percent.
        velocity : Tuple[float, float]
            Velocity in percent per tick.
        has_ball : bool
            Whether the player currently carries the ball.
        behaviour : str | None
            Steering behaviour applied on the last tick, if known.
        """
        behaviour_str = f" | Behaviour: {behaviour}" if behaviour else ""
        self._write_log(
            "ENTITY_STATE",
            f"Time: {match_time:.2f}s | "
            f"Entity {entity_id} ({team}) | "
            f"Pos: ({position[0]:.1f}, {position[1]:.1f}) | "
            f"Vel: ({velocity[0]:.2f}, {velocity[1]:.2f}) | "
            f"Has Ball: {has_ball}"
            f"{behaviour_str}",
        )

    def log_clock(self, match_time: float, period: int, seconds_remaining: int, phase: str) -> None:
        """Log a clock transition.

        Parameters
        ----------
        match_time : float
            Session time in seconds.
        period : int
            Current period number.
        seconds_remaining : int
            Countdown value after the transition.
        phase : str
            Match phase after the transition.
        """
        self._write_log(
            "CLOCK",
            f"Time: {match_time:.2f}s | Period: {period} | Remaining: {seconds_remaining}s | Phase: {phase}",
        )

    def log_match_event(self, match_time: float, event_type: str, description: str) -> None:
        """Log a match event (score, possession change, etc.).

        Parameters
        ----------
        match_time : float
            Session time in seconds.
        event_type : str
            Short label identifying the event category.
        description : str
            Human-readable summary of the event.
        """
        self._write_log("MATCH_EVENT", f"Time: {match_time:.2f}s | Event: {event_type} | Details: {description}")

    def log_error(self, error_type: str, description: str) -> None:
        """Log an error or warning.

        Parameters
        ----------
        error_type : str
            Label describing the error classification.
        description : str
            Human-readable explanation of the issue.
        """
        self._write_log("ERROR", f"Type: {error_type} | Details: {description}")

    def _write_log(self, event_type: str, details: str) -> None:
        """Write a log entry to the buffer and, when open, the file.

        Parameters
        ----------
        event_type : str
            Category label for the log entry.
        details : str
            Formatted message body to persist.
        """
        timestamp = time.strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {event_type}: {details}"

        with self._lock:
            line_no = self._line_number
            self._line_number += 1
            self._recent_events.append((line_no, log_entry))

            if self.log_file:
                self.log_file.write(f"{log_entry}\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the latest debug entries with line numbers for live displays.

        Parameters
        ----------
        limit : int
            Maximum number of entries to return.

        Returns
        -------
        List[str]
            Up to ``limit`` most recent log lines with prefixed line numbers.
        """
        with self._lock:
            selected = list(self._recent_events)[-limit:] if limit > 0 else []
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the log file."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None

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
"""Structured logging utilities used to trace formation board sessions."""
import time
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple

from squadboard.engine.config import BOARD_CONFIG


@dataclass
class DebugEvent:
    """Record representing a single logged entry.

    Parameters
    ----------
    line_number : int
        Position of the entry within the session log.
    event_type : str
        Category label, for example ``"TRANSITION"``.
    details : str
        Human-readable description providing additional context.
    """

    line_number: int
    event_type: str
    details: str


class BoardDebugger:
    """Helper object that streams board telemetry to disk.

    Parameters
    ----------
    output_dir : Optional[str]
        Directory where session logs are created; created automatically when
        missing. Defaults to the configured debug directory.
    """

    def __init__(self, output_dir: Optional[str] = None) -> None:
        cfg = BOARD_CONFIG.debug
        self.output_dir = Path(output_dir or cfg.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[DebugEvent] = deque(maxlen=cfg.recent_events)
        self.start_new_session()

    def start_new_session(self) -> None:
        """Start a new debug logging session."""
        if self.log_file:
            self.log_file.close()

        self.log_path = self.output_dir / f"board_debug_{self.session_start}.txt"
        self.log_file = open(self.log_path, "w", encoding="utf-8")
        self.log_file.write(f"=== Board Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_transition(self, status: str, formation_name: str) -> None:
        """Log the state the board moved into.

        Parameters
        ----------
        status : str
            Short name of the new state (``"loading"``, ``"ready"``, ``"error"``).
        formation_name : str
            Formation active after the transition.
        """
        self._write_log("TRANSITION", f"State: {status} | Formation: {formation_name}")

    def log_board_event(self, event_type: str, formation_name: str, description: str) -> None:
        """Log an event recorded by the state machine.

        Parameters
        ----------
        event_type : str
            Event category such as ``"roster_updated"``.
        formation_name : str
            Formation active when the event happened.
        description : str
            Human-readable summary of the event.
        """
        self._write_log("BOARD_EVENT", f"Event: {event_type} | Formation: {formation_name} | Details: {description}")

    def log_stale_response(self, kind: str, sequence: int, formation_name: str = "") -> None:
        """Log an upstream reply that arrived too late to be applied.

        Parameters
        ----------
        kind : str
            ``"roster"`` or ``"goalkeepers"``.
        sequence : int
            Ticket sequence number of the reply.
        formation_name : str
            Formation the request was made for, if any.
        """
        target = f" | Requested for: {formation_name}" if formation_name else ""
        self._write_log("STALE_RESPONSE", f"Kind: {kind} | Ticket: {sequence}{target}")

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
        """Write a log entry to the file.

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
            self._recent_events.append(DebugEvent(line_no, event_type, log_entry))

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
            selected: List[Tuple[int, str]] = [(e.line_number, e.details) for e in self._recent_events][-limit:]
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the log file."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None

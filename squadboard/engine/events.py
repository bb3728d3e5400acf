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
"""Event records produced by the formation board state machine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BoardEvent:
    """Record of a single transition or notable occurrence on the board.

    Parameters
    ----------
    sequence : int
        Monotonic position of the event within the board's history.
    event_type : str
        Category of event (for example ``"formation_selected"`` or
        ``"stale_response"``).
    formation_name : str
        Formation active when the event was recorded.
    description : str
        Human-readable summary of what happened.
    """

    sequence: int
    event_type: str  # formation_selected, roster_updated, stale_response, etc.
    formation_name: str
    description: str


@dataclass(frozen=True)
class FetchTicket:
    """Handle identifying one upstream request so late replies can be discarded.

    Parameters
    ----------
    kind : str
        ``"roster"`` or ``"goalkeepers"``.
    sequence : int
        Issue order of the ticket among tickets of the same kind.
    formation_name : str
        Formation active when the request was made; empty for goalkeeper
        requests, which do not depend on the formation.
    """

    kind: str
    sequence: int
    formation_name: str = ""

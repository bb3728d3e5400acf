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
"""Exception hierarchy shared by the catalog, rating, and state modules."""

from __future__ import annotations

from typing import Iterable, Tuple


class SquadboardError(Exception):
    """Base class for every error raised by the formation board."""


class UnknownFormation(SquadboardError, ValueError):
    """Raised when a formation name is not registered in the catalog.

    Parameters
    ----------
    name : str
        The formation name that was requested.
    known : Iterable[str]
        Names that the catalog does recognise, used for the error message.
    """

    def __init__(self, name: str, known: Iterable[str] = ()) -> None:
        self.name = name
        self.known: Tuple[str, ...] = tuple(known)
        known_text = ", ".join(self.known) or "none"
        super().__init__(f"Unknown formation '{name}'. Known formations: {known_text}")


class InvalidFormation(SquadboardError, ValueError):
    """Raised when a formation template breaks its structural invariants."""


class FetchFailure(SquadboardError, RuntimeError):
    """Raised by roster providers when upstream data cannot be obtained.

    Parameters
    ----------
    source : str
        Which upstream feed failed, ``"roster"`` or ``"goalkeepers"``.
    message : str
        Human-readable description of the failure.
    """

    def __init__(self, source: str, message: str = "") -> None:
        self.source = source
        super().__init__(message or f"Failed to fetch {source} data")


class InvalidAttributes(SquadboardError, ValueError):
    """Raised when a rating formula is missing one or more required attributes.

    Parameters
    ----------
    missing : Iterable[str]
        Attribute names that were absent on the player.
    player_name : str
        Name of the player being rated, included in the message when given.
    """

    def __init__(self, missing: Iterable[str], player_name: str = "") -> None:
        self.missing: Tuple[str, ...] = tuple(missing)
        subject = f" for {player_name}" if player_name else ""
        super().__init__(f"Missing attributes{subject}: {', '.join(self.missing)}")

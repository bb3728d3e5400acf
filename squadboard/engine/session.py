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
"""Cooperative driver that feeds upstream roster data into the board state.

The two upstream requests (ranked roster for a formation, goalkeeper
candidates) are independent coroutines and may finish in either order. Each
request is tagged with a ticket from :class:`FormationState`; replies whose
ticket has been superseded are dropped by the state rather than cancelled.
Retries and timeouts belong to the provider.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Sequence

from squadboard.engine.assignment import CandidateLists
from squadboard.engine.state import BoardState, FormationState
from squadboard.errors import FetchFailure
from squadboard.models.player import Player


class RosterProvider(Protocol):
    """Upstream source of ranked players for a coach."""

    async def fetch_ranked_players(self, coach_id: str, formation_name: str) -> CandidateLists:
        """Fetch outfield candidates ranked per role for a formation.

        Parameters
        ----------
        coach_id : str
            Coach whose squad is requested.
        formation_name : str
            Formation the roster is requested for.

        Returns
        -------
        CandidateLists
            Ranked candidates, best first.
        """
        ...

    async def fetch_goalkeeper_candidates(self, coach_id: str) -> Sequence[Player]:
        """Fetch goalkeeper candidates ranked best first.

        Parameters
        ----------
        coach_id : str
            Coach whose squad is requested.

        Returns
        -------
        Sequence[Player]
            Ranked goalkeepers.
        """
        ...


class FormationSession:
    """Connects a :class:`RosterProvider` to a :class:`FormationState`.

    Parameters
    ----------
    provider : RosterProvider
        Source of ranked players.
    coach_id : str
        Coach whose squad is displayed.
    state : Optional[FormationState]
        State to drive; a new default state when omitted.
    """

    def __init__(self, provider: RosterProvider, coach_id: str, state: Optional[FormationState] = None) -> None:
        self.provider = provider
        self.coach_id = coach_id
        self.state = state if state is not None else FormationState()

    async def start(self) -> BoardState:
        """Issue both upstream requests concurrently.

        Returns
        -------
        BoardState
            State once both replies have been handled.
        """
        await asyncio.gather(self.refresh_roster(), self.refresh_goalkeepers())
        return self.state.current

    async def change_formation(self, name: str) -> BoardState:
        """Select a formation and refetch the roster ranked for it.

        The board is reassigned immediately with the candidates already held;
        the refetched roster replaces them when it arrives, unless another
        selection has happened in the meantime.

        Parameters
        ----------
        name : str
            Formation name to activate.

        Returns
        -------
        BoardState
            State after the refetch has been handled.
        """
        state = self.state.select_formation(name)
        if state.status == "error" and self.state.template.name != name:
            return state
        await self.refresh_roster()
        return self.state.current

    async def refresh_roster(self) -> bool:
        """Fetch the ranked roster for the active formation.

        Returns
        -------
        bool
            Whether the reply (or failure) was applied to the board.
        """
        ticket = self.state.issue_roster_ticket()
        try:
            lists = await self.provider.fetch_ranked_players(self.coach_id, ticket.formation_name)
        except FetchFailure as exc:
            return self.state.roster_failed(exc, ticket)
        return self.state.roster_updated(lists, ticket)

    async def refresh_goalkeepers(self) -> bool:
        """Fetch goalkeeper candidates.

        Returns
        -------
        bool
            Whether the reply (or failure) was applied to the board.
        """
        ticket = self.state.issue_goalkeeper_ticket()
        try:
            candidates = await self.provider.fetch_goalkeeper_candidates(self.coach_id)
        except FetchFailure as exc:
            return self.state.goalkeepers_failed(exc, ticket)
        return self.state.goalkeepers_updated(candidates, ticket)

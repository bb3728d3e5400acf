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
"""Mutable holder of the active formation, goalkeeper, and assignment.

:class:`FormationState` is the only mutable object on the board. Every input
(formation selection, goalkeeper selection, roster or goalkeeper data
arriving) triggers a full recomputation of the assignment; nothing is patched
in place. Upstream replies carry a :class:`~squadboard.engine.events.FetchTicket`
so that a reply for a superseded request never overwrites newer data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple, Union

from squadboard.engine.assignment import Assignment, CandidateLists, SlotAssignmentEngine
from squadboard.engine.config import BOARD_CONFIG
from squadboard.engine.events import BoardEvent, FetchTicket
from squadboard.engine.ratings import goalkeeper_rating
from squadboard.errors import FetchFailure, InvalidAttributes, SquadboardError, UnknownFormation
from squadboard.formations.catalog import DEFAULT_CATALOG, FormationCatalog
from squadboard.models.formation import FormationTemplate
from squadboard.models.player import Player

if TYPE_CHECKING:
    from squadboard.utils.debug import BoardDebugger

ROSTER = "roster"
GOALKEEPERS = "goalkeepers"


@dataclass(frozen=True)
class Loading:
    """Waiting for the first roster and goalkeeper data.

    Parameters
    ----------
    template : FormationTemplate
        Formation that will be filled once data arrives.
    """

    template: FormationTemplate

    @property
    def status(self) -> str:
        """Short name of the state."""
        return "loading"


@dataclass(frozen=True)
class Ready:
    """Both data feeds have arrived and the assignment is current.

    Parameters
    ----------
    template : FormationTemplate
        Active formation.
    assignment : Assignment
        Slot bindings for the active formation.
    selected_goalkeeper : Optional[Player]
        Goalkeeper placed in the goalkeeper slot, if any candidate exists.
    goalkeeper_rating : Optional[float]
        Composite rating of the selected goalkeeper; ``None`` when it cannot
        be computed.
    """

    template: FormationTemplate
    assignment: Assignment
    selected_goalkeeper: Optional[Player]
    goalkeeper_rating: Optional[float]

    @property
    def status(self) -> str:
        """Short name of the state."""
        return "ready"


@dataclass(frozen=True)
class Error:
    """A recoverable failure is being shown instead of a full board.

    Parameters
    ----------
    reason : SquadboardError
        The failure, either :class:`UnknownFormation` or :class:`FetchFailure`.
    template : FormationTemplate
        Formation that remains active.
    assignment : Optional[Assignment]
        Degraded assignment to render; every slot, the goalkeeper included,
        is vacant after a fetch failure. ``None`` after an unknown formation
        was requested.
    """

    reason: SquadboardError
    template: FormationTemplate
    assignment: Optional[Assignment] = None

    @property
    def status(self) -> str:
        """Short name of the state."""
        return "error"


BoardState = Union[Loading, Ready, Error]


class FormationState:
    """State machine mediating formation, roster, and goalkeeper changes.

    Parameters
    ----------
    catalog : Optional[FormationCatalog]
        Template registry; the default catalog when omitted.
    engine : Optional[SlotAssignmentEngine]
        Assignment engine; a fresh engine when omitted.
    formation_name : Optional[str]
        Initial formation; the configured default when omitted.
    debugger : Optional[BoardDebugger]
        Optional sink receiving every recorded event.
    """

    def __init__(
        self,
        catalog: Optional[FormationCatalog] = None,
        engine: Optional[SlotAssignmentEngine] = None,
        formation_name: Optional[str] = None,
        debugger: Optional["BoardDebugger"] = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG
        self.engine = engine if engine is not None else SlotAssignmentEngine()
        self.debugger = debugger
        self.template = self.catalog.get_template(formation_name or BOARD_CONFIG.catalog.default_formation)

        self.candidates: Optional[CandidateLists] = None
        self.goalkeeper_candidates: Optional[Tuple[Player, ...]] = None
        self.selected_goalkeeper: Optional[Player] = None
        self.goalkeeper_rating: Optional[float] = None
        self.goalkeeper_rating_error: Optional[InvalidAttributes] = None
        self.events: List[BoardEvent] = []

        self._selection_error: Optional[UnknownFormation] = None
        self._failures: Dict[str, Optional[FetchFailure]] = {ROSTER: None, GOALKEEPERS: None}
        self._issued: Dict[str, int] = {ROSTER: 0, GOALKEEPERS: 0}
        self._applied: Dict[str, int] = {ROSTER: 0, GOALKEEPERS: 0}
        self._state: BoardState = Loading(self.template)

    @property
    def current(self) -> BoardState:
        """The most recently computed board state."""
        return self._state

    # ------------------------------------------------------------------
    # Tickets
    # ------------------------------------------------------------------
    def issue_roster_ticket(self) -> FetchTicket:
        """Register a new ranked-roster request for the active formation.

        Returns
        -------
        FetchTicket
            Ticket to hand back with the reply.
        """
        self._issued[ROSTER] += 1
        return FetchTicket(kind=ROSTER, sequence=self._issued[ROSTER], formation_name=self.template.name)

    def issue_goalkeeper_ticket(self) -> FetchTicket:
        """Register a new goalkeeper-candidates request.

        Returns
        -------
        FetchTicket
            Ticket to hand back with the reply.
        """
        self._issued[GOALKEEPERS] += 1
        return FetchTicket(kind=GOALKEEPERS, sequence=self._issued[GOALKEEPERS])

    def is_applicable(self, ticket: FetchTicket) -> bool:
        """Decide whether a reply may still change the board.

        A reply applies when it is newer than the last applied reply of the
        same kind and, for rosters, was requested for the active formation.

        Parameters
        ----------
        ticket : FetchTicket
            Ticket issued when the request was made.

        Returns
        -------
        bool
            ``True`` when the reply should be applied.
        """
        if ticket.kind not in self._applied:
            return False
        if ticket.sequence <= self._applied[ticket.kind]:
            return False
        if ticket.kind == ROSTER and ticket.formation_name != self.template.name:
            return False
        return True

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def select_formation(self, name: str) -> BoardState:
        """Switch to another formation and reassign the existing candidates.

        Parameters
        ----------
        name : str
            Formation name to activate.

        Returns
        -------
        BoardState
            The recomputed state; :class:`Error` when ``name`` is unknown, in
            which case the previous formation stays active.
        """
        try:
            template = self.catalog.get_template(name)
        except UnknownFormation as exc:
            self._selection_error = exc
            self._record("unknown_formation", str(exc))
            return self._recompute()

        self._selection_error = None
        self.template = template
        self._record("formation_selected", f"Formation {template.name} ({template.shape}) selected")
        return self._recompute()

    def select_goalkeeper(self, player: Optional[Player]) -> BoardState:
        """Replace the selected goalkeeper and recompute its rating.

        Parameters
        ----------
        player : Optional[Player]
            New goalkeeper, or ``None`` to leave the slot vacant.

        Returns
        -------
        BoardState
            The recomputed state with the same outfield bindings.
        """
        self._set_goalkeeper(player)
        name = player.name if player is not None else "nobody"
        self._record("goalkeeper_selected", f"Goalkeeper set to {name}")
        return self._recompute()

    def roster_updated(self, lists: CandidateLists, ticket: Optional[FetchTicket] = None) -> bool:
        """Apply freshly ranked outfield candidates.

        Parameters
        ----------
        lists : CandidateLists
            Ranked candidates per role.
        ticket : Optional[FetchTicket]
            Ticket of the request being answered; replies without a ticket
            are always applied.

        Returns
        -------
        bool
            ``False`` when the reply was stale and ignored.
        """
        if not self._accept(ticket):
            return False
        self.candidates = lists
        self._failures[ROSTER] = None
        self._selection_error = None
        counts = ", ".join(f"{role}: {n}" for role, n in lists.counts().items())
        self._record("roster_updated", f"Roster received ({counts})")
        self._recompute()
        return True

    def roster_failed(self, reason: Union[FetchFailure, str], ticket: Optional[FetchTicket] = None) -> bool:
        """Record that the ranked roster could not be fetched.

        Parameters
        ----------
        reason : Union[FetchFailure, str]
            The failure raised by the provider, or a message describing it.
        ticket : Optional[FetchTicket]
            Ticket of the failed request.

        Returns
        -------
        bool
            ``False`` when the failure belonged to a stale request.
        """
        if not self._accept(ticket):
            return False
        failure = reason if isinstance(reason, FetchFailure) else FetchFailure(ROSTER, reason)
        self._failures[ROSTER] = failure
        self._record("roster_failed", str(failure))
        self._recompute()
        return True

    def goalkeepers_updated(self, candidates: Sequence[Player], ticket: Optional[FetchTicket] = None) -> bool:
        """Apply ranked goalkeeper candidates and select the best one.

        Parameters
        ----------
        candidates : Sequence[Player]
            Goalkeepers in descending performance order.
        ticket : Optional[FetchTicket]
            Ticket of the request being answered.

        Returns
        -------
        bool
            ``False`` when the reply was stale and ignored.
        """
        if not self._accept(ticket):
            return False
        self.goalkeeper_candidates = tuple(candidates)
        self._failures[GOALKEEPERS] = None
        self._record("goalkeepers_updated", f"{len(self.goalkeeper_candidates)} goalkeeper candidates received")
        self._set_goalkeeper(self.goalkeeper_candidates[0] if self.goalkeeper_candidates else None)
        self._recompute()
        return True

    def goalkeepers_failed(self, reason: Union[FetchFailure, str], ticket: Optional[FetchTicket] = None) -> bool:
        """Record that goalkeeper candidates could not be fetched.

        Parameters
        ----------
        reason : Union[FetchFailure, str]
            The failure raised by the provider, or a message describing it.
        ticket : Optional[FetchTicket]
            Ticket of the failed request.

        Returns
        -------
        bool
            ``False`` when the failure belonged to a stale request.
        """
        if not self._accept(ticket):
            return False
        failure = reason if isinstance(reason, FetchFailure) else FetchFailure(GOALKEEPERS, reason)
        self._failures[GOALKEEPERS] = failure
        self._record("goalkeepers_failed", str(failure))
        self._recompute()
        return True

    def available_goalkeepers(self) -> Tuple[Player, ...]:
        """List goalkeeper candidates other than the selected one.

        Returns
        -------
        Tuple[Player, ...]
            Remaining candidates in rank order.
        """
        selected_id = self.selected_goalkeeper.player_id if self.selected_goalkeeper else None
        return tuple(p for p in self.goalkeeper_candidates or () if p.player_id != selected_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _accept(self, ticket: Optional[FetchTicket]) -> bool:
        """Check a reply's ticket and mark it applied when it is current.

        Parameters
        ----------
        ticket : Optional[FetchTicket]
            Ticket of the reply, or ``None`` for untracked updates.

        Returns
        -------
        bool
            Whether the reply should be applied.
        """
        if ticket is None:
            return True
        if not self.is_applicable(ticket):
            self._record(
                "stale_response",
                f"Ignored {ticket.kind} reply #{ticket.sequence}"
                + (f" for {ticket.formation_name}" if ticket.formation_name else ""),
            )
            if self.debugger is not None:
                self.debugger.log_stale_response(ticket.kind, ticket.sequence, ticket.formation_name)
            return False
        self._applied[ticket.kind] = ticket.sequence
        return True

    def _set_goalkeeper(self, player: Optional[Player]) -> None:
        """Store the goalkeeper and its composite rating.

        Parameters
        ----------
        player : Optional[Player]
            Goalkeeper to select.
        """
        self.selected_goalkeeper = player
        self.goalkeeper_rating = None
        self.goalkeeper_rating_error = None
        if player is None:
            return
        try:
            self.goalkeeper_rating = goalkeeper_rating(player)
        except InvalidAttributes as exc:
            self.goalkeeper_rating_error = exc
            self._record("invalid_attributes", str(exc))
            if self.debugger is not None:
                self.debugger.log_error("InvalidAttributes", str(exc))

    def _recompute(self) -> BoardState:
        """Rebuild the board state from the stored inputs.

        Returns
        -------
        BoardState
            The new current state.
        """
        roster_failure = self._failures[ROSTER]
        goalkeeper_failure = self._failures[GOALKEEPERS]

        if self._selection_error is not None:
            state: BoardState = Error(self._selection_error, self.template)
        elif roster_failure is not None or goalkeeper_failure is not None:
            state = Error(roster_failure or goalkeeper_failure, self.template, self.engine.assign(self.template))
        elif self.candidates is None or self.goalkeeper_candidates is None:
            state = Loading(self.template)
        else:
            state = Ready(
                template=self.template,
                assignment=self.engine.assign(self.template, self.candidates, self.selected_goalkeeper),
                selected_goalkeeper=self.selected_goalkeeper,
                goalkeeper_rating=self.goalkeeper_rating,
            )

        self._state = state
        if self.debugger is not None:
            self.debugger.log_transition(state.status, self.template.name)
        return state

    def _record(self, event_type: str, description: str) -> None:
        """Append an event to the board history and the debugger.

        Parameters
        ----------
        event_type : str
            Event category.
        description : str
            Human-readable summary.
        """
        event = BoardEvent(
            sequence=len(self.events) + 1,
            event_type=event_type,
            formation_name=self.template.name,
            description=description,
        )
        self.events.append(event)
        if self.debugger is not None:
            self.debugger.log_board_event(event_type, self.template.name, description)

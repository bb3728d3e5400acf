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
"""Tests for the board state machine."""

import pytest

from squadboard.engine.assignment import CandidateLists
from squadboard.engine.events import FetchTicket
from squadboard.engine.state import Error, FormationState, Loading, Ready
from squadboard.errors import FetchFailure, UnknownFormation
from squadboard.models.player import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER
from squadboard.utils.debug import BoardDebugger


@pytest.fixture
def lists(make_ranked) -> CandidateLists:
    """Enough candidates to fill any template."""
    return CandidateLists(make_ranked(DEFENDER, 5, 1), make_ranked(MIDFIELDER, 5, 10), make_ranked(FORWARD, 3, 20))


@pytest.fixture
def keepers(make_player) -> list:
    """Two ranked goalkeepers with complete attributes."""
    return [
        make_player(40, role=GOALKEEPER, overall=85, base=80, name="First Keeper"),
        make_player(41, role=GOALKEEPER, overall=75, base=60, name="Second Keeper"),
    ]


@pytest.fixture
def ready_state(lists, keepers) -> FormationState:
    """A state that has received both feeds."""
    state = FormationState()
    state.roster_updated(lists)
    state.goalkeepers_updated(keepers)
    return state


def _event_types(state: FormationState) -> list:
    return [e.event_type for e in state.events]


class TestLoading:
    """The board waits for both feeds."""

    def test_initial_state(self) -> None:
        state = FormationState()
        assert isinstance(state.current, Loading)
        assert state.current.status == "loading"
        assert state.template.name == "4-3-3"

    def test_initial_formation_can_be_chosen(self) -> None:
        assert FormationState(formation_name="3-5-2").template.shape == "3-5-2"
        with pytest.raises(UnknownFormation):
            FormationState(formation_name="1-1-8")

    def test_roster_alone_keeps_loading(self, lists) -> None:
        state = FormationState()
        assert state.roster_updated(lists) is True
        assert isinstance(state.current, Loading)

    def test_goalkeepers_alone_keep_loading(self, keepers) -> None:
        state = FormationState()
        state.goalkeepers_updated(keepers)
        assert isinstance(state.current, Loading)
        assert state.selected_goalkeeper is keepers[0]

    def test_both_feeds_make_ready(self, ready_state, keepers) -> None:
        current = ready_state.current
        assert isinstance(current, Ready)
        assert current.selected_goalkeeper is keepers[0]
        assert current.goalkeeper_rating == 80.0
        assert current.assignment.goalkeeper.player is keepers[0]
        assert not current.assignment.vacant_slots()


class TestFormationSelection:
    """Switching templates reassigns existing candidates."""

    def test_select_known_formation(self, ready_state) -> None:
        current = ready_state.select_formation("4-4-2")
        assert isinstance(current, Ready)
        assert current.template.name == "4-4-2"
        assert len(current.assignment.for_role(MIDFIELDER)) == 4
        assert _event_types(ready_state)[-1] == "formation_selected"

    def test_unknown_formation_keeps_previous_template(self, ready_state) -> None:
        current = ready_state.select_formation("2-3-5")
        assert isinstance(current, Error)
        assert isinstance(current.reason, UnknownFormation)
        assert current.template.name == "4-3-3"
        assert current.assignment is None
        assert ready_state.template.name == "4-3-3"
        assert _event_types(ready_state)[-1] == "unknown_formation"

    def test_recover_after_unknown_formation(self, ready_state) -> None:
        ready_state.select_formation("2-3-5")
        assert isinstance(ready_state.select_formation("3-4-3"), Ready)

    def test_a_b_a_reproduces_assignment(self, ready_state) -> None:
        original = ready_state.current.assignment
        ready_state.select_formation("3-5-2")
        assert ready_state.current.assignment != original
        assert ready_state.select_formation("4-3-3").assignment == original


class TestGoalkeeperSelection:
    """Reselecting the goalkeeper leaves the outfield alone."""

    def test_select_other_goalkeeper(self, ready_state, keepers) -> None:
        before = ready_state.current.assignment.outfield_signature()
        current = ready_state.select_goalkeeper(keepers[1])
        assert current.selected_goalkeeper is keepers[1]
        assert current.goalkeeper_rating == 60.0
        assert current.assignment.outfield_signature() == before
        assert _event_types(ready_state)[-1] == "goalkeeper_selected"

    def test_available_goalkeepers(self, ready_state, keepers) -> None:
        assert ready_state.available_goalkeepers() == (keepers[1],)
        ready_state.select_goalkeeper(keepers[1])
        assert ready_state.available_goalkeepers() == (keepers[0],)

    def test_goalkeeper_missing_attributes(self, ready_state, make_player) -> None:
        """An unrateable keeper still plays; only the rating is unavailable."""
        keeper = make_player(42, role=GOALKEEPER, base=70, reactions=None)
        current = ready_state.select_goalkeeper(keeper)
        assert isinstance(current, Ready)
        assert current.goalkeeper_rating is None
        assert ready_state.goalkeeper_rating_error.missing == ("reactions",)
        assert "invalid_attributes" in _event_types(ready_state)

    def test_clear_goalkeeper(self, ready_state) -> None:
        current = ready_state.select_goalkeeper(None)
        assert current.assignment.goalkeeper.is_vacant
        assert current.goalkeeper_rating is None

    def test_no_goalkeeper_candidates(self, lists) -> None:
        state = FormationState()
        state.roster_updated(lists)
        state.goalkeepers_updated([])
        assert isinstance(state.current, Ready)
        assert state.current.selected_goalkeeper is None
        assert state.current.assignment.goalkeeper.is_vacant


class TestFetchFailures:
    """Upstream failures degrade the board instead of crashing."""

    def test_roster_failure_vacates_board(self, ready_state, keepers) -> None:
        assert ready_state.roster_failed(FetchFailure("roster", "timeout")) is True
        current = ready_state.current
        assert isinstance(current, Error)
        assert isinstance(current.reason, FetchFailure)
        assert len(current.assignment.vacant_slots()) == 11
        assert current.assignment.goalkeeper.is_vacant
        assert ready_state.selected_goalkeeper is keepers[0]

    def test_roster_failure_message(self, ready_state) -> None:
        ready_state.roster_failed("service unavailable")
        assert ready_state.current.reason.source == "roster"
        assert str(ready_state.current.reason) == "service unavailable"

    def test_roster_recovers(self, ready_state, lists, keepers) -> None:
        ready_state.roster_failed("down")
        ready_state.roster_updated(lists)
        assert isinstance(ready_state.current, Ready)
        assert ready_state.current.assignment.goalkeeper.player is keepers[0]

    def test_goalkeeper_failure_vacates_board(self, ready_state) -> None:
        ready_state.goalkeepers_failed("down")
        current = ready_state.current
        assert isinstance(current, Error)
        assert current.reason.source == "goalkeepers"
        assert current.assignment.goalkeeper.is_vacant
        assert len(current.assignment.vacant_slots()) == 11

    def test_failure_during_loading(self, keepers) -> None:
        state = FormationState()
        state.goalkeepers_updated(keepers)
        state.roster_failed("down")
        assert isinstance(state.current, Error)
        assert len(state.current.assignment.vacant_slots()) == 11


class TestTickets:
    """Late replies never overwrite newer data."""

    def test_tickets_are_sequential(self) -> None:
        state = FormationState()
        first = state.issue_roster_ticket()
        second = state.issue_roster_ticket()
        keeper_ticket = state.issue_goalkeeper_ticket()
        assert (first.sequence, second.sequence) == (1, 2)
        assert first.formation_name == "4-3-3"
        assert keeper_ticket == FetchTicket("goalkeepers", 1)

    def test_older_reply_is_ignored(self, make_ranked, keepers) -> None:
        state = FormationState()
        old_ticket = state.issue_roster_ticket()
        new_ticket = state.issue_roster_ticket()
        fresh = CandidateLists(defenders=make_ranked(DEFENDER, 4, 100))
        stale = CandidateLists(defenders=make_ranked(DEFENDER, 4, 200))

        assert state.roster_updated(fresh, new_ticket) is True
        assert state.roster_updated(stale, old_ticket) is False
        assert state.candidates is fresh
        assert _event_types(state)[-1] == "stale_response"

    def test_reply_for_previous_formation_is_ignored(self, lists) -> None:
        state = FormationState()
        ticket = state.issue_roster_ticket()
        state.select_formation("4-4-2")
        assert state.roster_updated(lists, ticket) is False
        assert state.candidates is None

    def test_stale_failure_is_ignored(self, ready_state) -> None:
        old_ticket = ready_state.issue_goalkeeper_ticket()
        new_ticket = ready_state.issue_goalkeeper_ticket()
        assert ready_state.goalkeepers_updated([], new_ticket) is True
        assert ready_state.goalkeepers_failed("late", old_ticket) is False
        assert isinstance(ready_state.current, Ready)

    def test_same_ticket_applies_once(self, lists) -> None:
        state = FormationState()
        ticket = state.issue_roster_ticket()
        assert state.roster_updated(lists, ticket) is True
        assert state.roster_updated(lists, ticket) is False

    def test_unknown_kind_is_not_applicable(self) -> None:
        assert not FormationState().is_applicable(FetchTicket("fixtures", 1))


class TestDebuggerIntegration:
    """Transitions and stale replies are written to the debug log."""

    def test_events_logged(self, tmp_path, lists, keepers) -> None:
        debugger = BoardDebugger(str(tmp_path))
        state = FormationState(debugger=debugger)
        ticket = state.issue_roster_ticket()
        state.select_formation("3-5-2")
        state.roster_updated(lists, ticket)
        state.roster_updated(lists)
        state.goalkeepers_updated(keepers)
        debugger.close()

        text = debugger.log_path.read_text(encoding="utf-8")
        assert "STALE_RESPONSE: Kind: roster | Ticket: 1 | Requested for: 4-3-3" in text
        assert "TRANSITION: State: ready | Formation: 3-5-2" in text
        assert "BOARD_EVENT: Event: formation_selected" in text

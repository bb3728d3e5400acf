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
"""Tests for the renderer-neutral board views."""

import pytest

from squadboard.engine.assignment import CandidateLists
from squadboard.engine.presentation import (
    board_view,
    display_text,
    formation_summary,
    player_card,
    preferred_foot_label,
    selected_players,
    work_rate_label,
)
from squadboard.engine.state import FormationState
from squadboard.formations.catalog import DEFAULT_CATALOG, FORMATION_442
from squadboard.models.player import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER, Player, PlayerAttributes


@pytest.fixture
def state(make_ranked, make_player) -> FormationState:
    """A ready 4-4-2 board with one defender missing."""
    board = FormationState(formation_name="4-4-2")
    board.roster_updated(
        CandidateLists(make_ranked(DEFENDER, 3, 1), make_ranked(MIDFIELDER, 4, 10), make_ranked(FORWARD, 2, 20))
    )
    board.goalkeepers_updated(
        [
            make_player(40, role=GOALKEEPER, overall=82.25, name="Alex Keeper", reactions=90),
            make_player(41, role=GOALKEEPER, overall=70),
        ]
    )
    return board


class TestBoardView:
    """Pitch views for each state."""

    def test_ready_view(self, state) -> None:
        view = board_view(state.current)
        assert view.status == "ready"
        assert view.shape == "4-4-2"
        assert view.message == ""
        assert len(view.slots) == 11

        keeper = view.slots[0]
        assert keeper.label == "GK"
        assert keeper.text == "Alex Keeper (82.3)"
        assert keeper.initials == "AK"
        assert keeper.coordinate == (3, 60)
        assert view.goalkeeper_rating == "74.0"

    def test_vacant_slot_shows_label(self, state) -> None:
        rb = board_view(state.current).slots[4]
        assert rb.role == DEFENDER
        assert rb.vacant
        assert rb.text == "RB"
        assert rb.initials == "RB"
        assert rb.player_id is None

    def test_loading_view_has_every_slot(self) -> None:
        view = board_view(FormationState().current)
        assert view.status == "loading"
        assert len(view.slots) == 11
        assert all(s.vacant for s in view.slots)
        assert view.message
        assert view.goalkeeper_rating == ""

    def test_roster_failure_shows_no_data(self, state) -> None:
        state.roster_failed("down")
        view = board_view(state.current)
        assert view.status == "error"
        assert view.message == "No data available"
        assert all(s.vacant for s in view.slots)
        assert view.goalkeeper_rating == ""

    def test_goalkeeper_failure_hides_rating(self, state) -> None:
        state.goalkeepers_failed("keeper feed down")
        view = board_view(state.current)
        assert view.status == "error"
        assert view.message == "keeper feed down"
        assert all(s.vacant for s in view.slots)
        assert view.goalkeeper_rating == ""

    def test_unknown_formation_message(self, state) -> None:
        view = board_view(state.select_formation("0-0-10"))
        assert "0-0-10" in view.message
        assert view.formation_name == "4-4-2"
        assert all(s.vacant for s in view.slots)

    def test_unrateable_goalkeeper(self, state, make_player) -> None:
        state.select_goalkeeper(make_player(42, role=GOALKEEPER, base=None, overall=60))
        assert board_view(state.current).goalkeeper_rating == "N/A"


class TestSelectedPlayers:
    """Panel of players currently on the board."""

    def test_order(self, state) -> None:
        ids = [p.player_id for p in selected_players(state.current)]
        assert ids == [40, 1, 2, 3, 10, 11, 12, 13, 20, 21]

    def test_empty_while_loading(self) -> None:
        assert selected_players(FormationState().current) == []


class TestPlayerCard:
    """Profile card formatting."""

    def test_outfield_card(self, make_player) -> None:
        player = make_player(5, role=MIDFIELDER, base=None, vision=70, composure=81)
        card = player_card(player)
        assert card.categories == {"physical": "N/A", "technical": "N/A", "mental": "76", "defensive": "N/A"}
        assert card.goalkeeper_rating is None
        assert card.key_attributes["Shooting"] == 0
        assert card.preferred_foot == "Unknown"
        assert card.weak_foot == "N/A"
        assert card.work_rate == "Unknown"
        assert card.height == "N/A"

    def test_goalkeeper_card(self, make_player) -> None:
        card = player_card(make_player(6, role=GOALKEEPER, base=68))
        assert card.goalkeeper_rating == "68.0"
        assert card.categories["defensive"] == "68"

    def test_goalkeeper_card_missing_inputs(self, make_player) -> None:
        card = player_card(make_player(7, role=GOALKEEPER, base=68, agility=None))
        assert card.goalkeeper_rating == "N/A"
        assert card.categories["physical"] == "68"

    def test_profile_labels(self) -> None:
        player = Player(
            player_id=8,
            name="Profiled",
            role=FORWARD,
            attributes=PlayerAttributes(),
            height_cm=181,
            weight_kgs=76.5,
            preferred_foot_encoded=1,
            weak_foot=4,
            work_rate_encoded=3.5,
        )
        card = player_card(player)
        assert card.preferred_foot == "Right"
        assert card.weak_foot == "4/5"
        assert card.work_rate == "High / Medium"
        assert card.height == "181 cm"
        assert card.weight == "76.5 kg"

    @pytest.mark.parametrize("encoded, label", [(1, "Right"), (2, "Left"), (0, "Left"), (None, "Unknown")])
    def test_preferred_foot(self, encoded, label) -> None:
        assert preferred_foot_label(encoded) == label

    @pytest.mark.parametrize("encoded, label", [(4, "High / High"), (2.0, "Medium / Low"), (1, "Low / Low"), (5, "Unknown")])
    def test_work_rate(self, encoded, label) -> None:
        assert work_rate_label(encoded) == label

    def test_display_text_without_overall(self) -> None:
        assert display_text(Player(player_id=1, name="No Score", role=DEFENDER)) == "No Score"
        assert display_text(Player(player_id=2, name="Score", role=DEFENDER, overall_performance=70)) == "Score (70.0)"


class TestFormationSummary:
    """Selector metadata."""

    def test_summary(self) -> None:
        summary = formation_summary(DEFAULT_CATALOG, FORMATION_442)
        assert summary["formations"] == ["4-3-3", "4-4-2", "3-5-2", "3-4-3"]
        assert summary["active"] == "4-4-2"
        assert summary["shape"] == "4-4-2"
        assert summary["best_for"] == ["Counter Attacks", "Defensive Solidity"]
        assert summary["slots"][DEFENDER] == ["LB", "LCB", "RCB", "RB"]

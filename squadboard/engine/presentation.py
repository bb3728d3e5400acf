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
"""Renderer-neutral views of the board state.

Renderers (the pygame board, the CLI printout, or a web front end) consume
the plain records built here and never compute ratings or bindings
themselves. Missing data is already turned into display text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from squadboard.engine.assignment import Assignment, SlotAssignmentEngine, SlotBinding
from squadboard.engine.config import BOARD_CONFIG
from squadboard.engine.ratings import (
    category_averages,
    format_category_average,
    format_goalkeeper_rating,
    key_attributes,
    round_half_up,
    safe_goalkeeper_rating,
)
from squadboard.engine.state import BoardState, Error, Ready
from squadboard.errors import FetchFailure
from squadboard.formations.catalog import FormationCatalog
from squadboard.models.formation import FormationTemplate
from squadboard.models.player import Player


@dataclass(frozen=True)
class SlotView:
    """Display record for one slot marker.

    Parameters
    ----------
    role : str
        Role category of the slot.
    label : str
        Slot label, with the ``GK``/``D1`` style fallback applied.
    coordinate : Tuple[float, float]
        Board position ``(x, y)`` in template units.
    text : str
        ``"<name> (<overall>)"`` for a bound slot, the label when vacant.
    initials : str
        Player initials, or the label when vacant.
    vacant : bool
        Whether no player is bound.
    player_id : Optional[int]
        Identifier of the bound player.
    """

    role: str
    label: str
    coordinate: Tuple[float, float]
    text: str
    initials: str
    vacant: bool
    player_id: Optional[int] = None


@dataclass(frozen=True)
class BoardView:
    """Everything a renderer needs to draw the pitch.

    Parameters
    ----------
    status : str
        ``"loading"``, ``"ready"`` or ``"error"``.
    formation_name : str
        Active formation.
    shape : str
        Formation shape such as ``"4-3-3"``.
    slots : Tuple[SlotView, ...]
        Goalkeeper first, then defenders, midfielders, and forwards.
    message : str
        Status text; empty when the board is ready.
    goalkeeper_rating : str
        Formatted composite rating of the selected goalkeeper.
    """

    status: str
    formation_name: str
    shape: str
    slots: Tuple[SlotView, ...]
    message: str = ""
    goalkeeper_rating: str = ""


@dataclass(frozen=True)
class PlayerCard:
    """Profile card of a single player.

    Parameters
    ----------
    player_id : int
        Identifier of the player.
    name : str
        Player name.
    position : str
        Position text.
    categories : Dict[str, str]
        Formatted physical, technical, mental, and defensive averages.
    key_attributes : Dict[str, int]
        Speed, Dribbling, Shooting, and Defense summary.
    goalkeeper_rating : Optional[str]
        Formatted composite for goalkeepers, ``None`` for outfield players.
    preferred_foot : str
        ``"Right"``, ``"Left"`` or ``"Unknown"``.
    weak_foot : str
        ``"n/5"`` or the missing-value text.
    work_rate : str
        Work-rate description.
    height : str
        Height in centimetres or the missing-value text.
    weight : str
        Weight in kilograms or the missing-value text.
    """

    player_id: int
    name: str
    position: str
    categories: Dict[str, str]
    key_attributes: Dict[str, int]
    goalkeeper_rating: Optional[str]
    preferred_foot: str
    weak_foot: str
    work_rate: str
    height: str
    weight: str


def display_text(player: Player) -> str:
    """Format a bound player for a slot marker.

    Parameters
    ----------
    player : Player
        Bound player.

    Returns
    -------
    str
        ``"<name> (<overall>)"``, or just the name when no overall is known.
    """
    if player.overall_performance is None:
        return player.name
    decimals = BOARD_CONFIG.display.rating_decimals
    return f"{player.name} ({round_half_up(player.overall_performance, decimals):.{decimals}f})"


def slot_view(binding: SlotBinding) -> SlotView:
    """Convert a binding into its display record.

    Parameters
    ----------
    binding : SlotBinding
        Binding to convert.

    Returns
    -------
    SlotView
        The slot's display record.
    """
    player = binding.player
    return SlotView(
        role=binding.role,
        label=binding.label,
        coordinate=binding.slot.coordinate,
        text=binding.label if player is None else display_text(player),
        initials=binding.label if player is None else player.initials(),
        vacant=player is None,
        player_id=None if player is None else player.player_id,
    )


def _displayed_assignment(state: BoardState) -> Assignment:
    """Pick the assignment to draw for a state.

    Parameters
    ----------
    state : BoardState
        Current board state.

    Returns
    -------
    Assignment
        The state's assignment, or an all-vacant one when it has none.
    """
    assignment = getattr(state, "assignment", None)
    if assignment is None:
        return SlotAssignmentEngine().assign(state.template)
    return assignment


def _status_message(state: BoardState) -> str:
    """Describe a non-ready state for the coach.

    Parameters
    ----------
    state : BoardState
        Current board state.

    Returns
    -------
    str
        Status text, empty for a ready board.
    """
    if isinstance(state, Ready):
        return ""
    if isinstance(state, Error):
        if isinstance(state.reason, FetchFailure) and state.reason.source == "roster":
            return BOARD_CONFIG.display.no_data_text
        return str(state.reason)
    return BOARD_CONFIG.display.loading_text


def board_view(state: BoardState) -> BoardView:
    """Build the pitch view for a board state.

    Parameters
    ----------
    state : BoardState
        State returned by :class:`~squadboard.engine.state.FormationState`.

    Returns
    -------
    BoardView
        Slot markers and status text; every slot is present even when the
        state carries no data.
    """
    assignment = _displayed_assignment(state)
    rating = ""
    if isinstance(state, Ready) and state.selected_goalkeeper is not None:
        rating = format_goalkeeper_rating(state.goalkeeper_rating)
    return BoardView(
        status=state.status,
        formation_name=state.template.name,
        shape=state.template.shape,
        slots=tuple(slot_view(b) for b in assignment.all_bindings()),
        message=_status_message(state),
        goalkeeper_rating=rating,
    )


def preferred_foot_label(encoded: Optional[int]) -> str:
    """Translate the encoded preferred foot.

    Parameters
    ----------
    encoded : Optional[int]
        ``1`` for right-footed, anything else for left-footed.

    Returns
    -------
    str
        ``"Right"``, ``"Left"`` or ``"Unknown"`` when absent.
    """
    if encoded is None:
        return "Unknown"
    return "Right" if encoded == 1 else "Left"


def work_rate_label(encoded: Optional[float]) -> str:
    """Translate the encoded work rate.

    Parameters
    ----------
    encoded : Optional[float]
        Encoded attacking/defensive work rate.

    Returns
    -------
    str
        Description such as ``"High / Medium"``, or ``"Unknown"``.
    """
    if encoded is None:
        return "Unknown"
    key = f"{float(encoded):g}"
    return BOARD_CONFIG.display.work_rate_labels.get(key, "Unknown")


def _measure(value: Optional[float], unit: str) -> str:
    """Format a body measurement.

    Parameters
    ----------
    value : Optional[float]
        Measurement, or ``None``.
    unit : str
        Unit suffix.

    Returns
    -------
    str
        For example ``"181 cm"``, or the missing-value text.
    """
    if value is None:
        return BOARD_CONFIG.display.missing_text
    return f"{value:g} {unit}"


def player_card(player: Player) -> PlayerCard:
    """Build the profile card of a player.

    Parameters
    ----------
    player : Player
        Player to describe.

    Returns
    -------
    PlayerCard
        Formatted breakdown; unavailable values use the missing-value text.
    """
    missing = BOARD_CONFIG.display.missing_text
    gk_rating = None
    if player.is_goalkeeper:
        gk_rating = format_goalkeeper_rating(safe_goalkeeper_rating(player))
    return PlayerCard(
        player_id=player.player_id,
        name=player.name,
        position=player.position,
        categories={name: format_category_average(v) for name, v in category_averages(player).items()},
        key_attributes=key_attributes(player),
        goalkeeper_rating=gk_rating,
        preferred_foot=preferred_foot_label(player.preferred_foot_encoded),
        weak_foot=missing if player.weak_foot is None else f"{player.weak_foot}/5",
        work_rate=work_rate_label(player.work_rate_encoded),
        height=_measure(player.height_cm, "cm"),
        weight=_measure(player.weight_kgs, "kg"),
    )


def selected_players(state: BoardState) -> List[Player]:
    """List the players currently on the board.

    Parameters
    ----------
    state : BoardState
        Current board state.

    Returns
    -------
    List[Player]
        Goalkeeper first, then defenders, midfielders, and forwards in slot
        order; vacant slots are skipped.
    """
    assignment = getattr(state, "assignment", None)
    if assignment is None:
        return []
    return list(assignment.bound_players())


def formation_summary(catalog: FormationCatalog, template: FormationTemplate) -> Dict[str, object]:
    """Describe the catalog and the active template for a selector widget.

    Parameters
    ----------
    catalog : FormationCatalog
        Catalog offering the formations.
    template : FormationTemplate
        Active template.

    Returns
    -------
    Dict[str, object]
        Available names plus the active template's shape and tactical notes.
    """
    return {
        "formations": list(catalog.list_formations()),
        "active": template.name,
        "shape": template.shape,
        "description": template.description,
        "strengths": list(template.strengths),
        "weaknesses": list(template.weaknesses),
        "best_for": list(template.best_for),
        "slots": {role: [s.label for s in slots] for role, slots in template.role_slots().items()},
    }

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
"""Formation template domain models."""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from squadboard.engine.config import BOARD_CONFIG
from squadboard.errors import InvalidFormation
from squadboard.models.player import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER

TACTICAL_TAGS: FrozenSet[str] = frozenset(
    {
        "Possession Play",
        "Counter Attacks",
        "Wing Play",
        "High Press",
        "Defensive Solidity",
    }
)


@dataclass(frozen=True)
class Slot:
    """A single position on the board.

    Parameters
    ----------
    label : str
        Short position label such as ``"LCB"``; may be empty, in which case
        renderers fall back to a role-based label.
    x : float
        Horizontal board coordinate as a percentage of the pitch length.
    y : float
        Vertical board coordinate as a percentage of the pitch width.
    """

    label: str
    x: float
    y: float

    @property
    def coordinate(self) -> Tuple[float, float]:
        """The ``(x, y)`` layout coordinate of the slot."""
        return (self.x, self.y)


@dataclass(frozen=True)
class FormationTemplate:
    """Named tactical shape with fixed slots for each role category.

    Parameters
    ----------
    name : str
        Formation name, for example ``"4-4-2"``.
    defenders : Tuple[Slot, ...]
        Defender slots in assignment priority order.
    midfielders : Tuple[Slot, ...]
        Midfielder slots in assignment priority order.
    forwards : Tuple[Slot, ...]
        Forward slots in assignment priority order.
    goalkeeper : Slot
        The single goalkeeper slot.
    description : str
        One-sentence summary of the shape.
    strengths : Tuple[str, ...]
        Tactical strengths shown to the coach.
    weaknesses : Tuple[str, ...]
        Tactical weaknesses shown to the coach.
    best_for : Tuple[str, ...]
        Tactical tags drawn from :data:`TACTICAL_TAGS`.
    """

    name: str
    defenders: Tuple[Slot, ...]
    midfielders: Tuple[Slot, ...]
    forwards: Tuple[Slot, ...]
    goalkeeper: Slot
    description: str = ""
    strengths: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()
    best_for: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Reject templates that break the slot invariants."""
        validate_template(self)

    @property
    def shape(self) -> str:
        """Slot counts joined with dashes, for example ``"4-3-3"``."""
        return f"{len(self.defenders)}-{len(self.midfielders)}-{len(self.forwards)}"

    def slots_for(self, role: str) -> Tuple[Slot, ...]:
        """Return the declared slots for a role category.

        Parameters
        ----------
        role : str
            Role category such as ``"Defender"``.

        Returns
        -------
        Tuple[Slot, ...]
            The slots in declaration order; a one-element tuple for goalkeepers.

        Raises
        ------
        ValueError
            If ``role`` is not a role category.
        """
        if role == GOALKEEPER:
            return (self.goalkeeper,)
        try:
            return self.role_slots()[role]
        except KeyError as exc:
            raise ValueError(f"Unknown role category '{role}'") from exc

    def role_slots(self) -> Dict[str, Tuple[Slot, ...]]:
        """Return outfield slots keyed by role category in board order.

        Returns
        -------
        Dict[str, Tuple[Slot, ...]]
            Defender, midfielder, and forward slots.
        """
        return {
            DEFENDER: self.defenders,
            MIDFIELDER: self.midfielders,
            FORWARD: self.forwards,
        }

    def slot_count(self) -> int:
        """Count every slot including the goalkeeper.

        Returns
        -------
        int
            Total number of slots, eleven for any valid template.
        """
        return sum(len(slots) for slots in self.role_slots().values()) + 1


def validate_template(template: FormationTemplate) -> None:
    """Check the structural invariants of a formation template.

    Parameters
    ----------
    template : FormationTemplate
        Template to check.

    Raises
    ------
    InvalidFormation
        If the slot containers are not tuples of :class:`Slot`, the outfield
        total is wrong, labels repeat, or a tactical tag is unknown.
    """
    if not isinstance(template, FormationTemplate):
        raise InvalidFormation(f"Expected a FormationTemplate, got {type(template).__name__}")
    if not template.name:
        raise InvalidFormation("Formation must have a name")
    if not isinstance(template.goalkeeper, Slot):
        raise InvalidFormation(f"Formation {template.name} must declare exactly one goalkeeper slot")

    labels = [template.goalkeeper.label]
    outfield = 0
    for role, slots in template.role_slots().items():
        if not isinstance(slots, tuple) or not all(isinstance(s, Slot) for s in slots):
            raise InvalidFormation(f"{role} slots of {template.name} must be a tuple of Slot")
        outfield += len(slots)
        labels.extend(s.label for s in slots)

    expected = BOARD_CONFIG.catalog.outfield_players
    if outfield != expected:
        raise InvalidFormation(f"Formation {template.name} must have exactly {expected} outfield players, got {outfield}")

    named = [label for label in labels if label]
    if len(named) != len(set(named)):
        raise InvalidFormation(f"Formation {template.name} repeats a slot label")

    unknown_tags = [tag for tag in template.best_for if tag not in TACTICAL_TAGS]
    if unknown_tags:
        raise InvalidFormation(f"Formation {template.name} uses unknown tactical tags: {', '.join(unknown_tags)}")

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
"""Bind ranked candidate lists onto the slots of a formation template.

Binding is strictly positional: within each role, the candidate at rank
``i`` fills the slot declared at index ``i``. Nothing is permuted or
optimised. Short lists leave trailing slots vacant and long lists spill into
an overflow pool that is kept for display but never bound.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from squadboard.engine.config import BOARD_CONFIG
from squadboard.models.formation import FormationTemplate, Slot, validate_template
from squadboard.models.player import DEFENDER, FORWARD, GOALKEEPER, MIDFIELDER, OUTFIELD_ROLES, Player


@dataclass(frozen=True)
class CandidateLists:
    """Ranked outfield candidates, best first, for each role category.

    Parameters
    ----------
    defenders : Tuple[Player, ...]
        Defender candidates in descending performance order.
    midfielders : Tuple[Player, ...]
        Midfielder candidates in descending performance order.
    forwards : Tuple[Player, ...]
        Forward candidates in descending performance order.
    """

    defenders: Tuple[Player, ...] = ()
    midfielders: Tuple[Player, ...] = ()
    forwards: Tuple[Player, ...] = ()

    def __post_init__(self) -> None:
        """Freeze the incoming sequences into tuples."""
        for name in ("defenders", "midfielders", "forwards"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

    @classmethod
    def empty(cls) -> "CandidateLists":
        """Build lists with no candidates in any role.

        Returns
        -------
        CandidateLists
            Empty candidate lists.
        """
        return cls()

    def for_role(self, role: str) -> Tuple[Player, ...]:
        """Return the ranked candidates for a role category.

        Parameters
        ----------
        role : str
            ``"Defender"``, ``"Midfielder"`` or ``"Forward"``.

        Returns
        -------
        Tuple[Player, ...]
            The ranked candidates.

        Raises
        ------
        ValueError
            If ``role`` is not an outfield role category.
        """
        if role == DEFENDER:
            return self.defenders
        if role == MIDFIELDER:
            return self.midfielders
        if role == FORWARD:
            return self.forwards
        raise ValueError(f"No candidate list for role '{role}'")

    def counts(self) -> Dict[str, int]:
        """Count the candidates available per role.

        Returns
        -------
        Dict[str, int]
            Number of candidates keyed by role category.
        """
        return {role: len(self.for_role(role)) for role in OUTFIELD_ROLES}

    def is_empty(self) -> bool:
        """Report whether every list is empty.

        Returns
        -------
        bool
            ``True`` when there are no candidates at all.
        """
        return not any(self.counts().values())


@dataclass(frozen=True)
class SlotBinding:
    """The occupant of one slot, or its vacancy.

    Parameters
    ----------
    role : str
        Role category of the slot.
    index : int
        Zero-based declaration index of the slot within its role.
    slot : Slot
        Slot geometry and label.
    player : Optional[Player]
        Bound player, ``None`` when the slot is vacant.
    """

    role: str
    index: int
    slot: Slot
    player: Optional[Player] = None

    @property
    def is_vacant(self) -> bool:
        """Whether no player is bound to the slot."""
        return self.player is None

    @property
    def label(self) -> str:
        """Slot label, falling back to ``GK`` or ``D1``/``M2``/``F3`` style."""
        if self.slot.label:
            return self.slot.label
        display = BOARD_CONFIG.display
        if self.role == GOALKEEPER:
            return display.goalkeeper_label
        prefix = display.vacant_prefixes.get(self.role, self.role[:1])
        return f"{prefix}{self.index + 1}"


@dataclass(frozen=True)
class Assignment:
    """Resolved mapping from a template's slots to players.

    Parameters
    ----------
    template : FormationTemplate
        Template the assignment was computed for.
    bindings : Tuple[SlotBinding, ...]
        Outfield bindings ordered defenders, midfielders, forwards, each in
        slot declaration order.
    goalkeeper : SlotBinding
        Binding of the goalkeeper slot.
    available : Dict[str, Tuple[Player, ...]]
        Ranked candidates left over once every slot of a role is filled.
    available_counts : Dict[str, int]
        Number of candidates supplied per role, bound or not.
    """

    template: FormationTemplate
    bindings: Tuple[SlotBinding, ...]
    goalkeeper: SlotBinding
    available: Dict[str, Tuple[Player, ...]] = field(default_factory=dict)
    available_counts: Dict[str, int] = field(default_factory=dict)

    def for_role(self, role: str) -> Tuple[SlotBinding, ...]:
        """Return the bindings of one role category.

        Parameters
        ----------
        role : str
            Role category, goalkeeper included.

        Returns
        -------
        Tuple[SlotBinding, ...]
            Bindings in slot declaration order.
        """
        if role == GOALKEEPER:
            return (self.goalkeeper,)
        return tuple(b for b in self.bindings if b.role == role)

    def all_bindings(self) -> Tuple[SlotBinding, ...]:
        """Return every binding with the goalkeeper first.

        Returns
        -------
        Tuple[SlotBinding, ...]
            Goalkeeper, defenders, midfielders, then forwards.
        """
        return (self.goalkeeper,) + self.bindings

    def vacant_slots(self) -> Tuple[SlotBinding, ...]:
        """Return every binding without a player.

        Returns
        -------
        Tuple[SlotBinding, ...]
            Vacant bindings, goalkeeper first.
        """
        return tuple(b for b in self.all_bindings() if b.is_vacant)

    def bound_players(self) -> Tuple[Player, ...]:
        """Return the players placed on the board.

        Returns
        -------
        Tuple[Player, ...]
            Players in :meth:`all_bindings` order.
        """
        return tuple(b.player for b in self.all_bindings() if b.player is not None)

    def outfield_signature(self) -> Tuple[Tuple[str, int, Optional[int]], ...]:
        """Summarise the outfield bindings as comparable tuples.

        Returns
        -------
        Tuple[Tuple[str, int, Optional[int]], ...]
            ``(role, index, player_id)`` for every outfield slot.
        """
        return tuple((b.role, b.index, b.player.player_id if b.player else None) for b in self.bindings)


class SlotAssignmentEngine:
    """Stateless binder of ranked candidates onto template slots."""

    def assign(
        self,
        template: FormationTemplate,
        candidates: Optional[CandidateLists] = None,
        goalkeeper: Optional[Player] = None,
    ) -> Assignment:
        """Compute a fresh assignment for a template.

        Parameters
        ----------
        template : FormationTemplate
            Template whose slots are filled.
        candidates : Optional[CandidateLists]
            Ranked outfield candidates; ``None`` is treated as empty lists.
        goalkeeper : Optional[Player]
            Player for the goalkeeper slot, ``None`` to leave it vacant.

        Returns
        -------
        Assignment
            The bindings, overflow pool, and candidate counts.

        Raises
        ------
        InvalidFormation
            If ``template`` is malformed.
        """
        validate_template(template)
        lists = candidates if candidates is not None else CandidateLists.empty()

        bindings: List[SlotBinding] = []
        available: Dict[str, Tuple[Player, ...]] = {}
        for role, slots in template.role_slots().items():
            bound, overflow = self._bind_role(role, slots, lists.for_role(role))
            bindings.extend(bound)
            available[role] = overflow

        return Assignment(
            template=template,
            bindings=tuple(bindings),
            goalkeeper=SlotBinding(role=GOALKEEPER, index=0, slot=template.goalkeeper, player=goalkeeper),
            available=available,
            available_counts=lists.counts(),
        )

    @staticmethod
    def _bind_role(
        role: str, slots: Sequence[Slot], ranked: Iterable[Player]
    ) -> Tuple[List[SlotBinding], Tuple[Player, ...]]:
        """Bind one role's ranked candidates onto its slots by index.

        Parameters
        ----------
        role : str
            Role category being bound.
        slots : Sequence[Slot]
            Slots in declaration order.
        ranked : Iterable[Player]
            Candidates in rank order; repeated player ids are kept once.

        Returns
        -------
        Tuple[List[SlotBinding], Tuple[Player, ...]]
            Bindings for every slot and the unbound overflow candidates.
        """
        unique: List[Player] = []
        seen_ids = set()
        for player in ranked:
            if player.player_id in seen_ids:
                continue
            seen_ids.add(player.player_id)
            unique.append(player)

        bindings = [
            SlotBinding(role=role, index=i, slot=slot, player=unique[i] if i < len(unique) else None)
            for i, slot in enumerate(slots)
        ]
        return bindings, tuple(unique[len(slots):])


_DEFAULT_ENGINE = SlotAssignmentEngine()


def assign(
    template: FormationTemplate,
    candidates: Optional[CandidateLists] = None,
    goalkeeper: Optional[Player] = None,
) -> Assignment:
    """Compute an assignment with a shared engine instance.

    Parameters
    ----------
    template : FormationTemplate
        Template whose slots are filled.
    candidates : Optional[CandidateLists]
        Ranked outfield candidates.
    goalkeeper : Optional[Player]
        Player for the goalkeeper slot.

    Returns
    -------
    Assignment
        The computed assignment.
    """
    return _DEFAULT_ENGINE.assign(template, candidates, goalkeeper)

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
"""Shared player factories for the board tests."""

from typing import Callable, List, Optional

import pytest

from squadboard.models.player import ATTRIBUTE_NAMES, DEFENDER, Player, PlayerAttributes


def build_player(
    player_id: int,
    role: str = DEFENDER,
    overall: Optional[float] = None,
    base: Optional[float] = 70,
    name: Optional[str] = None,
    **ratings: Optional[float],
) -> Player:
    """Create a player whose attributes default to ``base``.

    Parameters
    ----------
    player_id : int
        Identifier of the player.
    role : str
        Role category.
    overall : Optional[float]
        Overall performance score.
    base : Optional[float]
        Value for every attribute not listed in ``ratings``; ``None`` leaves
        them unrated.
    name : Optional[str]
        Player name; derived from the identifier when omitted.
    **ratings : Optional[float]
        Attribute overrides.

    Returns
    -------
    Player
        The constructed player.
    """
    values = {attr: base for attr in ATTRIBUTE_NAMES}
    values.update(ratings)
    return Player(
        player_id=player_id,
        name=name or f"Player {player_id}",
        role=role,
        attributes=PlayerAttributes(**values),
        overall_performance=overall,
    )


@pytest.fixture
def make_player() -> Callable[..., Player]:
    """Factory fixture wrapping :func:`build_player`.

    Returns
    -------
    Callable[..., Player]
        The player factory.
    """
    return build_player


@pytest.fixture
def make_ranked() -> Callable[..., List[Player]]:
    """Factory for ranked candidate lists with descending overall scores.

    Returns
    -------
    Callable[..., List[Player]]
        ``make(role, count, first_id)`` returning ranked players.
    """

    def make(role: str, count: int, first_id: int = 1) -> List[Player]:
        return [build_player(first_id + i, role=role, overall=90 - i) for i in range(count)]

    return make

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
"""Derived player ratings: category averages and the goalkeeper composite.

The two computations deliberately treat missing data differently. Category
averages skip absent attributes and report ``None`` for an empty category,
while the goalkeeper composite refuses to score a player with any missing
input and raises :class:`~squadboard.errors.InvalidAttributes` instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Tuple

from squadboard.engine.config import BOARD_CONFIG
from squadboard.errors import InvalidAttributes
from squadboard.models.player import ATTRIBUTE_NAMES, Player

CATEGORY_ATTRIBUTES: Dict[str, Tuple[str, ...]] = {
    "physical": (
        "acceleration",
        "sprint_speed",
        "agility",
        "reactions",
        "strength",
        "stamina",
        "jumping",
        "aggression",
    ),
    "technical": (
        "ball_control",
        "dribbling",
        "finishing",
        "long_shots",
        "crossing",
        "short_passing",
        "long_passing",
        "shot_power",
    ),
    "mental": ("positioning", "vision", "composure", "penalties"),
    "defensive": ("interceptions", "marking", "standing_tackle", "sliding_tackle"),
}

KEY_ATTRIBUTES: Dict[str, Tuple[str, ...]] = {
    "Speed": ("acceleration", "sprint_speed"),
    "Dribbling": ("dribbling",),
    "Shooting": ("finishing", "long_shots", "shot_power"),
    "Defense": ("marking", "standing_tackle", "interceptions"),
}


def round_half_up(value: float, places: int = 0) -> float:
    """Round ``value`` with ties going away from zero.

    Python's built-in :func:`round` uses banker's rounding; ratings shown to
    coaches use conventional rounding instead.

    Parameters
    ----------
    value : float
        Number to round.
    places : int
        Number of decimal places to keep.

    Returns
    -------
    float
        The rounded value.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class FormulaComponent:
    """One weighted term of a composite rating.

    Parameters
    ----------
    name : str
        Label for the term, for example ``"distribution"``.
    weight : float
        Multiplier applied to the term.
    attributes : Tuple[str, ...]
        Attributes averaged to produce the term's input.
    """

    name: str
    weight: float
    attributes: Tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate the attribute names and the weight sign."""
        if not self.attributes:
            raise ValueError(f"Component {self.name} needs at least one attribute")
        unknown = [a for a in self.attributes if a not in ATTRIBUTE_NAMES]
        if unknown:
            raise ValueError(f"Component {self.name} references unknown attributes: {', '.join(unknown)}")
        if self.weight < 0:
            raise ValueError(f"Component {self.name} must have a non-negative weight")

    def value(self, values: Dict[str, float]) -> float:
        """Evaluate the weighted term.

        Parameters
        ----------
        values : Dict[str, float]
            Attribute values keyed by name; must contain every attribute of
            the component.

        Returns
        -------
        float
            Mean of the component's attributes multiplied by its weight.
        """
        mean = sum(values[a] for a in self.attributes) / len(self.attributes)
        return mean * self.weight


@dataclass(frozen=True)
class CompositeFormula:
    """Weighted linear combination of attribute terms.

    Parameters
    ----------
    name : str
        Name of the rating produced by the formula.
    components : Tuple[FormulaComponent, ...]
        Weighted terms; the weights must sum to one.
    """

    name: str
    components: Tuple[FormulaComponent, ...]

    def __post_init__(self) -> None:
        """Enforce that the weights form a convex combination."""
        total = math.fsum(self.weights)
        if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=1e-12):
            raise ValueError(f"Weights of {self.name} must sum to 1.0, got {total!r}")

    @property
    def weights(self) -> Tuple[float, ...]:
        """Weights of every component in declaration order."""
        return tuple(c.weight for c in self.components)

    def required_attributes(self) -> Tuple[str, ...]:
        """List every attribute the formula reads, without repeats.

        Returns
        -------
        Tuple[str, ...]
            Attribute names in first-use order.
        """
        seen: List[str] = []
        for component in self.components:
            for attr in component.attributes:
                if attr not in seen:
                    seen.append(attr)
        return tuple(seen)

    def evaluate(self, player: Player) -> float:
        """Compute the unrounded composite for a player.

        Parameters
        ----------
        player : Player
            Player whose attributes feed the formula.

        Returns
        -------
        float
            The weighted sum.

        Raises
        ------
        InvalidAttributes
            If any required attribute is absent on the player.
        """
        values: Dict[str, float] = {}
        missing: List[str] = []
        for attr in self.required_attributes():
            value = player.attribute(attr)
            if value is None:
                missing.append(attr)
            else:
                values[attr] = value
        if missing:
            raise InvalidAttributes(missing, player.name)
        return math.fsum(c.value(values) for c in self.components)


GOALKEEPER_FORMULA = CompositeFormula(
    name="goalkeeper",
    components=(
        FormulaComponent("reactions", 0.20, ("reactions",)),
        FormulaComponent("positioning", 0.15, ("positioning",)),
        FormulaComponent("jumping", 0.10, ("jumping",)),
        FormulaComponent("strength", 0.10, ("strength",)),
        FormulaComponent("composure", 0.10, ("composure",)),
        FormulaComponent("agility", 0.10, ("agility",)),
        FormulaComponent("speed", 0.05, ("acceleration", "sprint_speed")),
        FormulaComponent("handling", 0.10, ("ball_control", "strength")),
        FormulaComponent("distribution", 0.10, ("short_passing", "long_passing")),
    ),
)


def category_averages(player: Player) -> Dict[str, Optional[int]]:
    """Average a player's present attributes within each skill category.

    Parameters
    ----------
    player : Player
        Player to summarise.

    Returns
    -------
    Dict[str, Optional[int]]
        Rounded mean per category; ``None`` when the category has no present
        attribute at all.
    """
    averages: Dict[str, Optional[int]] = {}
    for category, attrs in CATEGORY_ATTRIBUTES.items():
        present = [v for v in (player.attribute(a) for a in attrs) if v is not None]
        if not present:
            averages[category] = None
            continue
        averages[category] = int(round_half_up(sum(present) / len(present)))
    return averages


def goalkeeper_rating(player: Player) -> float:
    """Compute the goalkeeper composite rating.

    Parameters
    ----------
    player : Player
        Player to score; usually a goalkeeper, although any player with the
        required attributes can be rated.

    Returns
    -------
    float
        The composite rounded to the configured number of decimals.

    Raises
    ------
    InvalidAttributes
        If any attribute used by :data:`GOALKEEPER_FORMULA` is missing.
    """
    return round_half_up(GOALKEEPER_FORMULA.evaluate(player), BOARD_CONFIG.display.rating_decimals)


def key_attributes(player: Player) -> Dict[str, int]:
    """Summarise the headline attributes shown on a player card.

    Absent inputs count as zero here, matching the profile card the coach is
    used to; use :func:`category_averages` for a gap-aware breakdown.

    Parameters
    ----------
    player : Player
        Player to summarise.

    Returns
    -------
    Dict[str, int]
        Rounded Speed, Dribbling, Shooting, and Defense scores.
    """
    summary: Dict[str, int] = {}
    for label, attrs in KEY_ATTRIBUTES.items():
        total = sum(player.attribute(a) or 0 for a in attrs)
        summary[label] = int(round_half_up(total / len(attrs)))
    return summary


def format_category_average(value: Optional[int]) -> str:
    """Render a category average for display.

    Parameters
    ----------
    value : Optional[int]
        Result from :func:`category_averages`.

    Returns
    -------
    str
        The number, or the configured placeholder when undefined.
    """
    if value is None:
        return BOARD_CONFIG.display.missing_text
    return str(value)


def format_goalkeeper_rating(value: Optional[float]) -> str:
    """Render a composite rating with a fixed number of decimals.

    Parameters
    ----------
    value : Optional[float]
        Rating from :func:`goalkeeper_rating`, or ``None`` if it could not be
        computed.

    Returns
    -------
    str
        For example ``"71.4"``, or the configured placeholder.
    """
    if value is None:
        return BOARD_CONFIG.display.missing_text
    return f"{value:.{BOARD_CONFIG.display.rating_decimals}f}"


def safe_goalkeeper_rating(player: Optional[Player]) -> Optional[float]:
    """Compute the composite rating, returning ``None`` when it is unavailable.

    Parameters
    ----------
    player : Optional[Player]
        Player to score; ``None`` yields ``None``.

    Returns
    -------
    Optional[float]
        The rating, or ``None`` when the player is absent or lacks inputs.
    """
    if player is None:
        return None
    try:
        return goalkeeper_rating(player)
    except InvalidAttributes:
        return None

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
"""Domain models representing squad players and their attribute ratings."""
from dataclasses import dataclass, field, fields
from typing import Dict, Optional, Tuple

from squadboard.engine.config import BOARD_CONFIG

GOALKEEPER = "Goalkeeper"
DEFENDER = "Defender"
MIDFIELDER = "Midfielder"
FORWARD = "Forward"

ROLE_CATEGORIES: Tuple[str, ...] = (GOALKEEPER, DEFENDER, MIDFIELDER, FORWARD)
OUTFIELD_ROLES: Tuple[str, ...] = (DEFENDER, MIDFIELDER, FORWARD)

_ROLE_ALIASES: Dict[str, str] = {
    "gk": GOALKEEPER,
    "goalkeeper": GOALKEEPER,
    "goalkeepers": GOALKEEPER,
    "df": DEFENDER,
    "def": DEFENDER,
    "defender": DEFENDER,
    "defenders": DEFENDER,
    "cb": DEFENDER,
    "lb": DEFENDER,
    "rb": DEFENDER,
    "mf": MIDFIELDER,
    "mid": MIDFIELDER,
    "midfielder": MIDFIELDER,
    "midfielders": MIDFIELDER,
    "cm": MIDFIELDER,
    "cdm": MIDFIELDER,
    "cam": MIDFIELDER,
    "lm": MIDFIELDER,
    "rm": MIDFIELDER,
    "fw": FORWARD,
    "fwd": FORWARD,
    "forward": FORWARD,
    "forwards": FORWARD,
    "st": FORWARD,
    "cf": FORWARD,
    "lw": FORWARD,
    "rw": FORWARD,
}


def normalise_role(value: Optional[str]) -> Optional[str]:
    """Map a loosely formatted position string onto a role category.

    Parameters
    ----------
    value : Optional[str]
        Raw position text such as ``"Defender"``, ``"defenders"`` or ``"CB"``.

    Returns
    -------
    Optional[str]
        One of :data:`ROLE_CATEGORIES`, or ``None`` when the text is empty or
        not recognised.
    """
    if not value:
        return None
    return _ROLE_ALIASES.get(str(value).strip().lower())


@dataclass(frozen=True)
class PlayerAttributes:
    """Physical, technical, mental, and defensive attribute ratings.

    Every rating is optional because upstream profiles are frequently
    incomplete. Present values must fall within the configured rating bounds.

    Parameters
    ----------
    crossing : Optional[float]
        Delivery quality from wide areas.
    finishing : Optional[float]
        Shot conversion inside the box.
    heading_accuracy : Optional[float]
        Accuracy of headed passes and shots.
    short_passing : Optional[float]
        Accuracy of short ground passes.
    volleys : Optional[float]
        Technique when striking a dropping ball.
    dribbling : Optional[float]
        Ability to beat opponents with the ball.
    curve : Optional[float]
        Spin applied to passes and shots.
    freekick_accuracy : Optional[float]
        Accuracy from direct free kicks.
    long_passing : Optional[float]
        Accuracy of long and lofted passes.
    ball_control : Optional[float]
        First touch and close control.
    acceleration : Optional[float]
        How quickly top speed is reached.
    sprint_speed : Optional[float]
        Top running speed.
    agility : Optional[float]
        Ease of turning and changing direction.
    reactions : Optional[float]
        Speed of response to events around the player.
    balance : Optional[float]
        Ability to stay upright under contact.
    shot_power : Optional[float]
        Power generated when shooting.
    jumping : Optional[float]
        Vertical leap.
    stamina : Optional[float]
        Resistance to fatigue.
    strength : Optional[float]
        Physical power in duels.
    long_shots : Optional[float]
        Accuracy from distance.
    aggression : Optional[float]
        Commitment in challenges.
    interceptions : Optional[float]
        Reading and cutting out passes.
    positioning : Optional[float]
        Positional sense, on and off the ball.
    vision : Optional[float]
        Awareness of passing options.
    penalties : Optional[float]
        Penalty-taking accuracy.
    composure : Optional[float]
        Calmness under pressure.
    marking : Optional[float]
        Tracking and shadowing opponents.
    standing_tackle : Optional[float]
        Timing of standing tackles.
    sliding_tackle : Optional[float]
        Timing of sliding tackles.
    """

    crossing: Optional[float] = None
    finishing: Optional[float] = None
    heading_accuracy: Optional[float] = None
    short_passing: Optional[float] = None
    volleys: Optional[float] = None
    dribbling: Optional[float] = None
    curve: Optional[float] = None
    freekick_accuracy: Optional[float] = None
    long_passing: Optional[float] = None
    ball_control: Optional[float] = None
    acceleration: Optional[float] = None
    sprint_speed: Optional[float] = None
    agility: Optional[float] = None
    reactions: Optional[float] = None
    balance: Optional[float] = None
    shot_power: Optional[float] = None
    jumping: Optional[float] = None
    stamina: Optional[float] = None
    strength: Optional[float] = None
    long_shots: Optional[float] = None
    aggression: Optional[float] = None
    interceptions: Optional[float] = None
    positioning: Optional[float] = None
    vision: Optional[float] = None
    penalties: Optional[float] = None
    composure: Optional[float] = None
    marking: Optional[float] = None
    standing_tackle: Optional[float] = None
    sliding_tackle: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate that every present attribute lies within the rating scale."""
        low = BOARD_CONFIG.attributes.min_rating
        high = BOARD_CONFIG.attributes.max_rating
        for attr in ATTRIBUTE_NAMES:
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{attr} must be numeric, got {value!r}")
            if not low <= value <= high:
                raise ValueError(f"{attr} must be between {low:g} and {high:g}")

    def as_dict(self) -> Dict[str, Optional[float]]:
        """Return the ratings keyed by attribute name.

        Returns
        -------
        Dict[str, Optional[float]]
            Every attribute, including absent ones mapped to ``None``.
        """
        return {attr: getattr(self, attr) for attr in ATTRIBUTE_NAMES}


ATTRIBUTE_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(PlayerAttributes))


@dataclass(frozen=True)
class Player:
    """Roster entry combining identity, profile data, and attribute ratings.

    Parameters
    ----------
    player_id : int
        Unique identifier for the player.
    name : str
        Human-readable player name.
    role : str
        Role category, one of :data:`ROLE_CATEGORIES`.
    attributes : PlayerAttributes
        Attribute ratings; absent ratings are ``None``.
    email : Optional[str]
        Contact address, when the roster provides one.
    position : str
        Position text shown to the coach; defaults to the role category.
    age : Optional[int]
        Age in years.
    height_cm : Optional[float]
        Height in centimetres.
    weight_kgs : Optional[float]
        Weight in kilograms.
    preferred_foot_encoded : Optional[int]
        ``1`` for right-footed players, any other value for left-footed.
    weak_foot : Optional[int]
        Weak-foot rating on a one to five scale.
    skill_moves : Optional[int]
        Skill-move rating on a one to five scale.
    work_rate_encoded : Optional[float]
        Encoded attacking/defensive work rate.
    overall_performance : Optional[float]
        Overall performance score in ``[0, 100]`` used for ranking.
    """

    player_id: int
    name: str
    role: str
    attributes: PlayerAttributes = field(default_factory=PlayerAttributes)
    email: Optional[str] = None
    position: str = ""
    age: Optional[int] = None
    height_cm: Optional[float] = None
    weight_kgs: Optional[float] = None
    preferred_foot_encoded: Optional[int] = None
    weak_foot: Optional[int] = None
    skill_moves: Optional[int] = None
    work_rate_encoded: Optional[float] = None
    overall_performance: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate the role category and the overall performance range."""
        if self.role not in ROLE_CATEGORIES:
            raise ValueError(f"role must be one of {', '.join(ROLE_CATEGORIES)}, got {self.role!r}")
        if not self.position:
            object.__setattr__(self, "position", self.role)
        if self.overall_performance is not None:
            low = BOARD_CONFIG.attributes.min_rating
            high = BOARD_CONFIG.attributes.max_rating
            if not low <= self.overall_performance <= high:
                raise ValueError(f"overall_performance must be between {low:g} and {high:g}")

    @property
    def is_goalkeeper(self) -> bool:
        """Whether the player's role category is goalkeeper."""
        return self.role == GOALKEEPER

    def attribute(self, name: str) -> Optional[float]:
        """Look up a single attribute rating by name.

        Parameters
        ----------
        name : str
            Attribute name, for example ``"reactions"``.

        Returns
        -------
        Optional[float]
            The rating, or ``None`` when the player has no value for it.

        Raises
        ------
        ValueError
            If ``name`` is not part of the attribute schema.
        """
        if name not in ATTRIBUTE_NAMES:
            raise ValueError(f"Unknown attribute '{name}'")
        return getattr(self.attributes, name)

    def initials(self) -> str:
        """Return the first letter of every word in the player's name.

        Returns
        -------
        str
            Initials such as ``"JS"`` for ``"John Smith"``.
        """
        return "".join(part[0] for part in self.name.split() if part)

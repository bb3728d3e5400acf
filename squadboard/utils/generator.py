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
"""Utilities that synthesise demo players and squads for the formation board."""
import random
from typing import Dict, List, Optional

from squadboard.engine.ratings import round_half_up
from squadboard.models.player import (
    ATTRIBUTE_NAMES,
    DEFENDER,
    FORWARD,
    GOALKEEPER,
    MIDFIELDER,
    ROLE_CATEGORIES,
    Player,
    PlayerAttributes,
)

ROLE_IMPORTANT_ATTRIBUTES = {
    GOALKEEPER: ["reactions", "positioning", "jumping", "agility", "composure", "strength"],
    DEFENDER: ["marking", "standing_tackle", "sliding_tackle", "interceptions", "strength", "heading_accuracy"],
    MIDFIELDER: ["short_passing", "long_passing", "vision", "ball_control", "stamina", "dribbling"],
    FORWARD: ["finishing", "shot_power", "positioning", "dribbling", "sprint_speed", "composure"],
}

DEFAULT_SQUAD_SIZE = {GOALKEEPER: 3, DEFENDER: 7, MIDFIELDER: 7, FORWARD: 5}


def generate_random_player(
    id: int,
    name: Optional[str] = None,
    role: Optional[str] = None,
    missing_rate: float = 0.0,
) -> Player:
    """Generate a player with random attributes.

    Parameters
    ----------
    id : int
        Unique identifier assigned to the created player.
    name : Optional[str]
        Human-readable name to apply; a pseudo-random name is chosen when omitted.
    role : Optional[str]
        Role category influencing attribute weighting; random when ``None``.
    missing_rate : float
        Probability that any single attribute is left unrated, to mimic
        incomplete upstream data.

    Returns
    -------
    Player
        A newly constructed player instance with stochastic attribute scores.
    """
    if name is None:
        first_names = ["John", "James", "David", "Michael", "Robert", "Carlos", "Juan", "Luis"]
        last_names = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Rodriguez"]
        name = f"{random.choice(first_names)} {random.choice(last_names)}"

    if role is None:
        role = random.choice(ROLE_CATEGORIES)

    base_range = (40, 80)
    boost_range = (60, 90)

    def get_attribute(is_important: bool) -> Optional[int]:
        if missing_rate and random.random() < missing_rate:
            return None
        if is_important:
            return random.randint(*boost_range)
        return random.randint(*base_range)

    important_attrs = ROLE_IMPORTANT_ATTRIBUTES.get(role, [])
    ratings: Dict[str, Optional[int]] = {attr: get_attribute(attr in important_attrs) for attr in ATTRIBUTE_NAMES}

    # Overall tracks the role's key attributes so rankings look plausible.
    key_values = [ratings[a] for a in important_attrs if ratings[a] is not None]
    overall = round_half_up(sum(key_values) / len(key_values), 1) if key_values else None

    return Player(
        player_id=id,
        name=name,
        role=role,
        attributes=PlayerAttributes(**ratings),
        age=random.randint(18, 35),
        height_cm=float(random.randint(165, 198)),
        weight_kgs=float(random.randint(60, 95)),
        preferred_foot_encoded=random.choice([1, 2]),
        weak_foot=random.randint(1, 5),
        skill_moves=random.randint(1, 5),
        work_rate_encoded=random.choice([1, 1.5, 2, 2.5, 3, 3.5, 4]),
        overall_performance=overall,
    )


def generate_squad(
    starting_player_id: int = 1,
    role_counts: Optional[Dict[str, int]] = None,
    missing_rate: float = 0.0,
) -> List[Player]:
    """Generate a squad with random players for each role category.

    Parameters
    ----------
    starting_player_id : int
        Identifier to use for the first generated player; increments for each additional player.
    role_counts : Optional[Dict[str, int]]
        Number of players per role category; :data:`DEFAULT_SQUAD_SIZE` when omitted.
    missing_rate : float
        Probability of leaving any single attribute unrated.

    Returns
    -------
    List[Player]
        Players grouped by role in goalkeeper, defender, midfielder, forward order.
    """
    counts = role_counts if role_counts is not None else DEFAULT_SQUAD_SIZE
    unknown = [role for role in counts if role not in ROLE_CATEGORIES]
    if unknown:
        raise ValueError(f"Unsupported role categories: {', '.join(unknown)}")

    players: List[Player] = []
    player_id = starting_player_id
    for role in ROLE_CATEGORIES:
        for _ in range(counts.get(role, 0)):
            players.append(generate_random_player(player_id, role=role, missing_rate=missing_rate))
            player_id += 1
    return players

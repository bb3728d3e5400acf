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
"""Utilities for turning serialized roster data into player objects.

Upstream services hand out players as flat, loosely-typed dictionaries where
any rating may be missing. The helpers here resolve those payloads into the
fixed :class:`~squadboard.models.player.Player` schema exactly once, so the
rest of the board never deals with raw mappings. They also provide a small
in-memory roster provider used by the CLI and the tests.
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from squadboard.engine.assignment import CandidateLists
from squadboard.errors import FetchFailure
from squadboard.formations.catalog import DEFAULT_CATALOG, FormationCatalog
from squadboard.models.player import (
    ATTRIBUTE_NAMES,
    DEFENDER,
    FORWARD,
    GOALKEEPER,
    MIDFIELDER,
    OUTFIELD_ROLES,
    Player,
    PlayerAttributes,
    normalise_role,
)

_PAYLOAD_KEYS = {
    DEFENDER: "Defenders",
    MIDFIELDER: "Midfielders",
    FORWARD: "Forwards",
}


def _number(value: Any, key: str) -> Optional[float]:
    """Coerce a payload value into a number or ``None``.

    Parameters
    ----------
    value : Any
        Raw value from the payload.
    key : str
        Field name, used in error messages.

    Returns
    -------
    Optional[float]
        The numeric value, or ``None`` for null and empty strings.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"{key} must be numeric, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be numeric, got {value!r}") from exc


def _integer(value: Any, key: str) -> Optional[int]:
    """Coerce a payload value into an integer or ``None``.

    Parameters
    ----------
    value : Any
        Raw value from the payload.
    key : str
        Field name, used in error messages.

    Returns
    -------
    Optional[int]
        The integer value, or ``None`` when absent.
    """
    number = _number(value, key)
    return None if number is None else int(number)


def player_from_dict(d: Mapping[str, Any], default_role: Optional[str] = None) -> Player:
    """Build a ``Player`` from a plain dictionary payload.

    Parameters
    ----------
    d : Mapping[str, Any]
        Serialized player. Identity keys may be ``player_id``/``id``,
        ``name``/``player_name`` and ``email``/``player_email``. Ratings may
        be flat keys or nested under ``attributes``.
    default_role : Optional[str]
        Role category used when the payload's ``role``/``position`` does not
        name one, for example because the player came from a per-role list.

    Returns
    -------
    Player
        A fully initialised player; ratings absent from the payload are
        ``None``.

    Raises
    ------
    ValueError
        If the payload has no ``player_id``/``id``, no role category can be
        determined, or a rating is out of range.
    """
    nested = d.get("attributes") or {}
    ratings: Dict[str, Optional[float]] = {}
    for attr in ATTRIBUTE_NAMES:
        raw = nested.get(attr, d.get(attr))
        ratings[attr] = _number(raw, attr)

    position = d.get("position") or ""
    role = normalise_role(d.get("role")) or normalise_role(position) or normalise_role(default_role)
    if role is None:
        raise ValueError(f"Cannot determine role category for player payload {d.get('player_id', d.get('id'))!r}")

    player_id = _integer(d.get("player_id", d.get("id")), "player_id")
    if player_id is None:
        raise ValueError(f"Player payload {d.get('name') or d.get('player_name')!r} has no player_id")
    return Player(
        player_id=player_id,
        name=d.get("name") or d.get("player_name") or f"player_{player_id}",
        role=role,
        attributes=PlayerAttributes(**ratings),
        email=d.get("email") or d.get("player_email"),
        position=str(position),
        age=_integer(d.get("age"), "age"),
        height_cm=_number(d.get("height_cm"), "height_cm"),
        weight_kgs=_number(d.get("weight_kgs"), "weight_kgs"),
        preferred_foot_encoded=_integer(d.get("preferred_foot_encoded"), "preferred_foot_encoded"),
        weak_foot=_integer(d.get("weak_foot"), "weak_foot"),
        skill_moves=_integer(d.get("skill_moves"), "skill_moves"),
        work_rate_encoded=_number(d.get("work_rate_encoded"), "work_rate_encoded"),
        overall_performance=_number(d.get("overall_performance"), "overall_performance"),
    )


def player_to_dict(player: Player) -> Dict[str, Any]:
    """Serialise a player into the flat payload shape.

    Parameters
    ----------
    player : Player
        Player to serialise.

    Returns
    -------
    Dict[str, Any]
        Flat mapping accepted by :func:`player_from_dict`.
    """
    payload: Dict[str, Any] = {
        "player_id": player.player_id,
        "name": player.name,
        "email": player.email,
        "role": player.role,
        "position": player.position,
        "age": player.age,
        "height_cm": player.height_cm,
        "weight_kgs": player.weight_kgs,
        "preferred_foot_encoded": player.preferred_foot_encoded,
        "weak_foot": player.weak_foot,
        "skill_moves": player.skill_moves,
        "work_rate_encoded": player.work_rate_encoded,
        "overall_performance": player.overall_performance,
    }
    payload.update(player.attributes.as_dict())
    return payload


def _players_from_rows(rows: Any, role: str, source: str) -> Tuple[Player, ...]:
    """Parse one upstream player list, failing the whole feed on a bad row.

    Parameters
    ----------
    rows : Any
        Player payloads as delivered upstream; ``None`` is an empty list.
    role : str
        Role category the rows are listed under.
    source : str
        Feed name reported in a failure, ``"roster"`` or ``"goalkeepers"``.

    Returns
    -------
    Tuple[Player, ...]
        Players in payload order.

    Raises
    ------
    FetchFailure
        If a row is not a mapping or does not describe a valid player.
    """
    try:
        return tuple(player_from_dict({**row, "role": role}) for row in rows or ())
    except (TypeError, ValueError, AttributeError) as exc:
        raise FetchFailure(source, f"Unusable {source} payload: {exc}") from exc


def candidate_lists_from_payload(payload: Mapping[str, Any]) -> CandidateLists:
    """Parse a ranked-roster response into candidate lists.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Response with a ``selected_players`` section keyed by ``Defenders``,
        ``Midfielders`` and ``Forwards``. Missing sections become empty lists
        and the section a player is listed under decides its role category.
        Every row must carry a ``player_id``/``id``.

    Returns
    -------
    CandidateLists
        Candidates in the order the payload lists them.

    Raises
    ------
    FetchFailure
        If the payload reports ``success: false`` or holds a row that is not
        a valid player.
    """
    if payload.get("success") is False:
        raise FetchFailure("roster", "Upstream reported an unsuccessful roster response")
    selected = payload.get("selected_players") or {}
    if not isinstance(selected, Mapping):
        raise FetchFailure("roster", f"Unusable roster payload: selected_players is {type(selected).__name__}")
    lists = {role: _players_from_rows(selected.get(key), role, "roster") for role, key in _PAYLOAD_KEYS.items()}
    return CandidateLists(
        defenders=lists[DEFENDER],
        midfielders=lists[MIDFIELDER],
        forwards=lists[FORWARD],
    )


def goalkeepers_from_payload(payload: Mapping[str, Any]) -> List[Player]:
    """Parse a goalkeeper-candidates response.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Response with a ``top_goalkeepers`` list.

    Returns
    -------
    List[Player]
        Goalkeepers in the order the payload lists them.

    Raises
    ------
    FetchFailure
        If the payload reports ``success: false`` or holds a row that is not
        a valid player.
    """
    if payload.get("success") is False:
        raise FetchFailure("goalkeepers", "Upstream reported an unsuccessful goalkeeper response")
    return list(_players_from_rows(payload.get("top_goalkeepers"), GOALKEEPER, "goalkeepers"))


def rank_players(players: Iterable[Player]) -> List[Player]:
    """Order players by descending overall performance.

    Players without a performance score sort last; ties keep the lower
    ``player_id`` first so the ranking is deterministic.

    Parameters
    ----------
    players : Iterable[Player]
        Players to rank.

    Returns
    -------
    List[Player]
        Ranked players.
    """
    return sorted(
        players,
        key=lambda p: (p.overall_performance is None, -(p.overall_performance or 0.0), p.player_id),
    )


def load_squad_from_json(path: str) -> List[Player]:
    """Load a squad from a JSON document.

    Parameters
    ----------
    path : str
        Filesystem path to a JSON document that is either a list of player
        payloads or an object with a ``players`` list.

    Returns
    -------
    List[Player]
        Players in document order.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Squad JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    entries = data.get("players", []) if isinstance(data, dict) else data
    return [player_from_dict(entry) for entry in entries]


def save_squad_to_json(players: Sequence[Player], path: str) -> None:
    """Write a squad to a JSON document readable by :func:`load_squad_from_json`.

    Parameters
    ----------
    players : Sequence[Player]
        Players to write.
    path : str
        Destination file path.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as fh:
        json.dump({"players": [player_to_dict(pl) for pl in players]}, fh, indent=2)


class InMemoryRosterProvider:
    """Roster provider backed by squads held in memory.

    Parameters
    ----------
    squads : Mapping[str, Sequence[Player]]
        Players per coach identifier.
    catalog : Optional[FormationCatalog]
        Catalog used to reject unknown formation names.
    """

    def __init__(self, squads: Mapping[str, Sequence[Player]], catalog: Optional[FormationCatalog] = None) -> None:
        self.squads = {str(coach): tuple(players) for coach, players in squads.items()}
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG

    def _squad(self, coach_id: str, source: str) -> Sequence[Player]:
        """Return the squad of a coach.

        Parameters
        ----------
        coach_id : str
            Coach identifier.
        source : str
            Feed name reported in a failure.

        Returns
        -------
        Sequence[Player]
            The coach's players.

        Raises
        ------
        FetchFailure
            If the coach has no squad.
        """
        try:
            return self.squads[str(coach_id)]
        except KeyError as exc:
            raise FetchFailure(source, f"No squad registered for coach {coach_id}") from exc

    async def fetch_ranked_players(self, coach_id: str, formation_name: str) -> CandidateLists:
        """Rank the coach's outfield players per role.

        Parameters
        ----------
        coach_id : str
            Coach identifier.
        formation_name : str
            Formation the roster is requested for.

        Returns
        -------
        CandidateLists
            Every outfield player of the squad, ranked within their role.

        Raises
        ------
        FetchFailure
            If the coach is unknown or the formation is not registered.
        """
        if formation_name not in self.catalog:
            raise FetchFailure("roster", f"Formation {formation_name} is not supported upstream")
        squad = self._squad(coach_id, "roster")
        ranked = {role: tuple(rank_players(p for p in squad if p.role == role)) for role in OUTFIELD_ROLES}
        return CandidateLists(
            defenders=ranked[DEFENDER],
            midfielders=ranked[MIDFIELDER],
            forwards=ranked[FORWARD],
        )

    async def fetch_goalkeeper_candidates(self, coach_id: str) -> List[Player]:
        """Rank the coach's goalkeepers.

        Parameters
        ----------
        coach_id : str
            Coach identifier.

        Returns
        -------
        List[Player]
            Goalkeepers, best first.

        Raises
        ------
        FetchFailure
            If the coach is unknown.
        """
        squad = self._squad(coach_id, "goalkeepers")
        return rank_players(p for p in squad if p.role == GOALKEEPER)

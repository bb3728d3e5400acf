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
"""Tests for player and formation template models."""

import pytest

from squadboard.errors import InvalidFormation
from squadboard.models.formation import FormationTemplate, Slot, validate_template
from squadboard.models.player import (
    ATTRIBUTE_NAMES,
    DEFENDER,
    FORWARD,
    GOALKEEPER,
    MIDFIELDER,
    Player,
    PlayerAttributes,
    normalise_role,
)


def _slots(prefix: str, count: int, x: float = 15) -> tuple:
    return tuple(Slot(f"{prefix}{i}", x, 10 * i) for i in range(1, count + 1))


class TestPlayerAttributes:
    """Tests for PlayerAttributes class."""

    def test_defaults_are_unrated(self) -> None:
        """Every attribute is optional and defaults to ``None``."""
        attrs = PlayerAttributes()
        assert all(value is None for value in attrs.as_dict().values())
        assert set(attrs.as_dict()) == set(ATTRIBUTE_NAMES)
        assert len(ATTRIBUTE_NAMES) == 29

    def test_create_player_attributes(self) -> None:
        """Test creating player attributes."""
        attrs = PlayerAttributes(reactions=80, sprint_speed=75.5, marking=60)
        assert attrs.reactions == 80
        assert attrs.sprint_speed == 75.5
        assert attrs.marking == 60
        assert attrs.vision is None

    def test_player_attributes_validation_range(self) -> None:
        """Test attributes must be within 0..100."""
        with pytest.raises(ValueError):
            PlayerAttributes(reactions=101)
        with pytest.raises(ValueError):
            PlayerAttributes(stamina=-1)

    def test_player_attributes_reject_non_numbers(self) -> None:
        """Strings and booleans are not ratings."""
        with pytest.raises(ValueError):
            PlayerAttributes(vision="high")
        with pytest.raises(ValueError):
            PlayerAttributes(vision=True)


class TestPlayer:
    """Tests for Player class."""

    def test_create_player(self) -> None:
        player = Player(player_id=1, name="Test Player", role=FORWARD, age=25, overall_performance=81.5)
        assert player.player_id == 1
        assert player.name == "Test Player"
        assert player.age == 25
        assert player.role == FORWARD
        assert player.position == FORWARD
        assert player.attribute("finishing") is None

    def test_role_must_be_category(self) -> None:
        """Unknown role categories are rejected."""
        with pytest.raises(ValueError):
            Player(player_id=1, name="X", role="RCF")

    def test_overall_range(self) -> None:
        with pytest.raises(ValueError):
            Player(player_id=1, name="X", role=DEFENDER, overall_performance=120)

    def test_attribute_lookup(self) -> None:
        """Named lookups read the attribute record and reject unknown names."""
        player = Player(player_id=1, name="X", role=GOALKEEPER, attributes=PlayerAttributes(reactions=77))
        assert player.attribute("reactions") == 77
        assert player.is_goalkeeper
        with pytest.raises(ValueError):
            player.attribute("handling")

    def test_initials(self) -> None:
        assert Player(player_id=1, name="John  Smith", role=MIDFIELDER).initials() == "JS"
        assert Player(player_id=2, name="Pele", role=FORWARD).initials() == "P"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Defender", DEFENDER),
            ("defenders", DEFENDER),
            (" CB ", DEFENDER),
            ("cm", MIDFIELDER),
            ("ST", FORWARD),
            ("GK", GOALKEEPER),
            ("coach", None),
            ("", None),
            (None, None),
        ],
    )
    def test_normalise_role(self, raw, expected) -> None:
        """Loose position strings map onto role categories."""
        assert normalise_role(raw) == expected


class TestFormationTemplate:
    """Tests for FormationTemplate validation and helpers."""

    def test_shape_and_slot_count(self) -> None:
        template = FormationTemplate(
            name="5-3-2",
            defenders=_slots("D", 5),
            midfielders=_slots("M", 3, 35),
            forwards=_slots("F", 2, 60),
            goalkeeper=Slot("GK", 3, 60),
        )
        assert template.shape == "5-3-2"
        assert template.slot_count() == 11
        assert template.slots_for(GOALKEEPER) == (Slot("GK", 3, 60),)
        assert [s.label for s in template.slots_for(MIDFIELDER)] == ["M1", "M2", "M3"]
        assert template.goalkeeper.coordinate == (3, 60)

    def test_slots_for_unknown_role(self) -> None:
        template = FormationTemplate("5-3-2", _slots("D", 5), _slots("M", 3), _slots("F", 2), Slot("GK", 3, 60))
        with pytest.raises(ValueError):
            template.slots_for("Coach")

    def test_wrong_outfield_count(self) -> None:
        """Templates must declare ten outfield slots."""
        with pytest.raises(InvalidFormation):
            FormationTemplate("4-4-3", _slots("D", 4), _slots("M", 4), _slots("F", 3), Slot("GK", 3, 60))

    def test_duplicate_labels(self) -> None:
        defenders = (Slot("CB", 15, 30), Slot("CB", 15, 60)) + _slots("D", 2)
        with pytest.raises(InvalidFormation):
            FormationTemplate("4-4-2", defenders, _slots("M", 4), _slots("F", 2), Slot("GK", 3, 60))

    def test_empty_labels_may_repeat(self) -> None:
        """Unlabelled slots fall back to generated labels and may coexist."""
        defenders = (Slot("", 15, 30), Slot("", 15, 60)) + _slots("D", 2)
        template = FormationTemplate("4-4-2", defenders, _slots("M", 4), _slots("F", 2), Slot("", 3, 60))
        assert template.slot_count() == 11

    def test_slots_must_be_tuples_of_slot(self) -> None:
        with pytest.raises(InvalidFormation):
            FormationTemplate("4-4-2", list(_slots("D", 4)), _slots("M", 4), _slots("F", 2), Slot("GK", 3, 60))

    def test_unknown_tactical_tag(self) -> None:
        with pytest.raises(InvalidFormation):
            FormationTemplate(
                "4-4-2",
                _slots("D", 4),
                _slots("M", 4),
                _slots("F", 2),
                Slot("GK", 3, 60),
                best_for=("Tiki Taka",),
            )

    def test_validate_rejects_other_objects(self) -> None:
        with pytest.raises(InvalidFormation):
            validate_template("4-4-2")

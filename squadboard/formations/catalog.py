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
"""Registry of the formation templates a coach can choose from.

Templates are declared once at import time and never mutated afterwards. Slot
order inside each role is the assignment priority order: the first ranked
defender fills the first declared defender slot, and so on. Coordinates are
percentages of the board with the goalkeeper on the left touchline.
"""
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from squadboard.errors import InvalidFormation, UnknownFormation
from squadboard.models.formation import FormationTemplate, Slot

CATALOG_VERSION = 1

FORMATION_433 = FormationTemplate(
    name="4-3-3",
    defenders=(Slot("LB", 15, 25), Slot("LCB", 15, 50), Slot("RCB", 15, 75), Slot("RB", 15, 95)),
    midfielders=(Slot("LCM", 35, 35), Slot("CM", 35, 60), Slot("RCM", 35, 85)),
    forwards=(Slot("LW", 60, 25), Slot("ST", 60, 60), Slot("RW", 60, 95)),
    goalkeeper=Slot("GK", 3, 60),
    description="A balanced formation that provides strong wing play and midfield control",
    strengths=("Width in attack", "Midfield stability", "Flexibility in transition"),
    weaknesses=("Can be vulnerable to counterattacks", "Requires disciplined full-backs"),
    best_for=("Possession Play", "Wing Play", "High Press"),
)

FORMATION_442 = FormationTemplate(
    name="4-4-2",
    defenders=(Slot("LB", 15, 25), Slot("LCB", 15, 50), Slot("RCB", 15, 75), Slot("RB", 15, 95)),
    midfielders=(Slot("LM", 35, 15), Slot("LCM", 35, 40), Slot("RCM", 35, 80), Slot("RM", 35, 105)),
    forwards=(Slot("LS", 60, 40), Slot("RS", 60, 80)),
    goalkeeper=Slot("GK", 3, 60),
    description="The classic formation featuring two strikers and wide midfielders",
    strengths=("Solid defensive structure", "Direct attacking options", "Simple organization"),
    weaknesses=("Can be outnumbered in midfield", "Requires hard-working wingers"),
    best_for=("Counter Attacks", "Defensive Solidity"),
)

FORMATION_352 = FormationTemplate(
    name="3-5-2",
    defenders=(Slot("LCB", 15, 35), Slot("CB", 15, 60), Slot("RCB", 15, 85)),
    midfielders=(
        Slot("LWB", 30, 15),
        Slot("LCM", 30, 40),
        Slot("CM", 30, 60),
        Slot("RCM", 30, 80),
        Slot("RWB", 30, 105),
    ),
    forwards=(Slot("LS", 55, 40), Slot("RS", 55, 80)),
    goalkeeper=Slot("GK", 3, 60),
    description="An offensive setup with wing-backs providing width and attacking options",
    strengths=("Numerical superiority in midfield", "Flexible attacking options", "Strong central presence"),
    weaknesses=("Vulnerable on the flanks", "Requires extremely fit wing-backs"),
    best_for=("Wing Play", "High Press"),
)

FORMATION_343 = FormationTemplate(
    name="3-4-3",
    defenders=(Slot("LCB", 15, 35), Slot("CB", 15, 60), Slot("RCB", 15, 85)),
    midfielders=(Slot("LWB", 35, 25), Slot("CM1", 35, 60), Slot("RWB", 35, 95), Slot("CM2", 45, 60)),
    forwards=(Slot("LW", 65, 25), Slot("ST", 65, 60), Slot("RW", 65, 95)),
    goalkeeper=Slot("GK", 3, 60),
    description="An aggressive formation with wing-backs and three forwards for maximum attacking pressure",
    strengths=("Strong attacking presence", "Width in attack", "Numerous attacking options"),
    weaknesses=("Defensive vulnerability", "Requires exceptional fitness from wing-backs"),
    best_for=("Wing Play", "High Press"),
)


class FormationCatalog:
    """Read-only registry of formation templates keyed by name.

    Parameters
    ----------
    templates : Iterable[FormationTemplate]
        Templates to register, in the order they should be listed.
    version : int, default=CATALOG_VERSION
        Revision number of the template set.
    """

    def __init__(self, templates: Iterable[FormationTemplate], version: int = CATALOG_VERSION) -> None:
        registry = {}
        for template in templates:
            if not isinstance(template, FormationTemplate):
                raise InvalidFormation(f"Catalog entries must be FormationTemplate, got {type(template).__name__}")
            if template.name in registry:
                raise InvalidFormation(f"Formation {template.name} is registered twice")
            registry[template.name] = template
        self._templates: Mapping[str, FormationTemplate] = MappingProxyType(registry)
        self.version = version

    def get_template(self, name: str) -> FormationTemplate:
        """Look up a template by formation name.

        Parameters
        ----------
        name : str
            Formation name such as ``"3-5-2"``.

        Returns
        -------
        FormationTemplate
            The registered template.

        Raises
        ------
        UnknownFormation
            If no template is registered under ``name``.
        """
        try:
            return self._templates[name]
        except KeyError as exc:
            raise UnknownFormation(name, self._templates) from exc

    def list_formations(self) -> Tuple[str, ...]:
        """List the registered formation names.

        Returns
        -------
        Tuple[str, ...]
            Names in registration order.
        """
        return tuple(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)


DEFAULT_CATALOG = FormationCatalog((FORMATION_433, FORMATION_442, FORMATION_352, FORMATION_343))
"""The catalog used when callers do not supply their own."""


def get_template(name: str) -> FormationTemplate:
    """Look up a template in the default catalog.

    Parameters
    ----------
    name : str
        Formation name.

    Returns
    -------
    FormationTemplate
        The registered template.
    """
    return DEFAULT_CATALOG.get_template(name)


def list_formations() -> Tuple[str, ...]:
    """List the formation names of the default catalog.

    Returns
    -------
    Tuple[str, ...]
        Names in registration order.
    """
    return DEFAULT_CATALOG.list_formations()

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
"""Central configuration for the formation board."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(slots=True)
class AttributeConfig:
    """Bounds applied to attribute and performance ratings.

    Parameters
    ----------
    min_rating : float, default=0.0
        Lowest accepted rating.
    max_rating : float, default=100.0
        Highest accepted rating.
    """

    min_rating: float = 0.0
    max_rating: float = 100.0


@dataclass(slots=True)
class DisplayConfig:
    """Text conventions used when results are handed to a renderer.

    Parameters
    ----------
    missing_text : str, default="N/A"
        Placeholder shown for undefined averages and unavailable ratings.
    no_data_text : str, default="No data available"
        Indicator shown when upstream roster data failed to arrive.
    loading_text : str, default="Loading..."
        Status shown until both upstream feeds have answered.
    rating_decimals : int, default=1
        Decimal places kept for composite and performance ratings.
    goalkeeper_label : str, default="GK"
        Fallback label for an unlabelled goalkeeper slot.
    vacant_prefixes : Dict[str, str]
        Prefix used to build ``D1``/``M1``/``F1`` style labels for unlabelled
        outfield slots, keyed by role category.
    work_rate_labels : Dict[str, str]
        Human-readable work-rate descriptions keyed by the encoded value.
    """

    missing_text: str = "N/A"
    no_data_text: str = "No data available"
    loading_text: str = "Loading..."
    rating_decimals: int = 1
    goalkeeper_label: str = "GK"
    vacant_prefixes: Dict[str, str] = field(
        default_factory=lambda: {
            "Defender": "D",
            "Midfielder": "M",
            "Forward": "F",
        }
    )
    work_rate_labels: Dict[str, str] = field(
        default_factory=lambda: {
            "4": "High / High",
            "3.5": "High / Medium",
            "3": "High / Low",
            "2.5": "Medium / Medium",
            "2": "Medium / Low",
            "1.5": "Low / Medium",
            "1": "Low / Low",
        }
    )


@dataclass(slots=True)
class CatalogConfig:
    """Formation catalog defaults.

    Parameters
    ----------
    default_formation : str, default="4-3-3"
        Formation selected when a new board state is created.
    outfield_players : int, default=10
        Number of outfield slots every template must declare.
    """

    default_formation: str = "4-3-3"
    outfield_players: int = 10


@dataclass(slots=True)
class DebugConfig:
    """Settings for the file-backed board debugger.

    Parameters
    ----------
    output_dir : str, default="debug_logs"
        Directory that receives debug session files.
    recent_events : int, default=200
        Number of entries kept in memory for live displays.
    """

    output_dir: str = "debug_logs"
    recent_events: int = 200


@dataclass(slots=True)
class VisualizerConfig:
    """Window and colour settings for the pygame formation board.

    Parameters
    ----------
    screen_size : Tuple[int, int], default=(1050, 680)
        Initial window size in pixels.
    fps : int, default=30
        Redraw rate of the board loop.
    margin : int, default=24
        Padding in pixels between the window edge and the pitch.
    marker_radius : int, default=20
        Radius of a slot marker in pixels.
    board_extent : Tuple[float, float], default=(100.0, 110.0)
        Extent of the template coordinate space along x and y.
    role_colours : Dict[str, Tuple[int, int, int]]
        Marker colour per role category.
    """

    screen_size: Tuple[int, int] = (1050, 680)
    fps: int = 30
    margin: int = 24
    marker_radius: int = 20
    board_extent: Tuple[float, float] = (100.0, 110.0)
    role_colours: Dict[str, Tuple[int, int, int]] = field(
        default_factory=lambda: {
            "Goalkeeper": (40, 90, 50),
            "Defender": (37, 99, 235),
            "Midfielder": (22, 163, 74),
            "Forward": (220, 38, 38),
        }
    )


@dataclass(slots=True)
class BoardConfig:
    """Top-level container for all formation board settings.

    Parameters
    ----------
    attributes : AttributeConfig, default=AttributeConfig()
        Rating bounds.
    display : DisplayConfig, default=DisplayConfig()
        Presentation text conventions.
    catalog : CatalogConfig, default=CatalogConfig()
        Formation catalog defaults.
    debug : DebugConfig, default=DebugConfig()
        Debug log settings.
    visualizer : VisualizerConfig, default=VisualizerConfig()
        pygame board settings.
    """

    attributes: AttributeConfig = field(default_factory=AttributeConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)
    visualizer: VisualizerConfig = field(default_factory=VisualizerConfig)


BOARD_CONFIG = BoardConfig()
"""Singleton-style access to the board configuration."""
